"""Service exports: post-processing stages and session storage."""

from .bullet_capper import limit_bullets
from .bullet_repetition import reduce_bullet_repetition
from .education_formatter import clean_education_format
from .gazetteer import DEFAULT_GAZETTEER, Gazetteer
from .location_normalizer import normalize_locations
from .metric_echo import dedupe_metric_echo
from .session_store import SessionStore
from .unit_normalizer import normalize_units

__all__ = [
    "normalize_units",
    "normalize_locations",
    "reduce_bullet_repetition",
    "dedupe_metric_echo",
    "clean_education_format",
    "limit_bullets",
    "Gazetteer",
    "DEFAULT_GAZETTEER",
    "SessionStore",
]
