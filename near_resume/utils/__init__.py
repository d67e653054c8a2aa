"""Utility exports."""

from .helpers import (
    collapse_whitespace,
    dedupe_preserving_order,
    fold,
    parse_llm_json,
)
from .logger import get_logger

__all__ = [
    "get_logger",
    "collapse_whitespace",
    "fold",
    "dedupe_preserving_order",
    "parse_llm_json",
]
