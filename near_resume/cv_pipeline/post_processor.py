"""
Post-processing pipeline run on every rewriter response before rendering.

Stages, in order: units -> locations -> bullet repetition -> metric echo ->
education -> bullet cap. Each stage takes a Resume and returns a new one; the
caller's object is never shared. A stage that raises is logged and skipped,
so the pipeline always returns a usable document.
"""

from functools import partial
from typing import Any, Callable, List, Optional, Sequence, Tuple

from near_resume.config import MAX_BULLETS_PER_ROLE
from near_resume.cv_pipeline.resume_validator import DEFAULT_FIRST_NAME, coerce_resume
from near_resume.schemas.resume import Header, Resume
from near_resume.services.bullet_capper import limit_bullets
from near_resume.services.bullet_repetition import ACTION_VERBS, Splitter, reduce_bullet_repetition, split_sentences
from near_resume.services.education_formatter import clean_education_format
from near_resume.services.gazetteer import DEFAULT_GAZETTEER, Gazetteer
from near_resume.services.location_normalizer import normalize_locations
from near_resume.services.metric_echo import dedupe_metric_echo
from near_resume.services.unit_normalizer import normalize_units
from near_resume.utils.logger import get_logger

logger = get_logger(__name__)

Stage = Callable[[Resume], Resume]


class ResumePostProcessor:
    """
    Deterministic normalization of one résumé document.

    Holds no per-document state, so one instance can serve concurrent callers.
    `max_bullets=None` turns bullet capping off; it is the only stage switch.
    """

    def __init__(
        self,
        max_bullets: Optional[int] = MAX_BULLETS_PER_ROLE,
        gazetteer: Gazetteer = DEFAULT_GAZETTEER,
        splitter: Splitter = split_sentences,
        verb_pool: Sequence[str] = ACTION_VERBS,
    ) -> None:
        stages: List[Tuple[str, Stage]] = [
            ("units", normalize_units),
            ("locations", partial(normalize_locations, gazetteer=gazetteer)),
            ("bullet_repetition", partial(reduce_bullet_repetition, splitter=splitter, verb_pool=verb_pool)),
            ("metric_echo", dedupe_metric_echo),
            ("education", clean_education_format),
        ]
        if max_bullets is not None:
            stages.append(("bullet_cap", partial(limit_bullets, max_bullets=max_bullets)))
        self.stages: Tuple[Tuple[str, Stage], ...] = tuple(stages)

    @property
    def stage_names(self) -> List[str]:
        return [name for name, _ in self.stages]

    def process(self, raw: Any) -> Resume:
        """Validate raw rewriter output and run every stage over it."""
        try:
            doc = coerce_resume(raw)
        except Exception as e:
            logger.exception("Résumé validation failed unexpectedly; using default document: %s", e)
            doc = Resume(header=Header(first_name=DEFAULT_FIRST_NAME))
        for name, stage in self.stages:
            doc = self._run_stage(name, stage, doc)
        return doc

    @staticmethod
    def _run_stage(name: str, stage: Stage, doc: Resume) -> Resume:
        try:
            result = stage(doc)
        except Exception as e:
            logger.exception("Post-processing stage '%s' failed; keeping previous document: %s", name, e)
            return doc
        if not isinstance(result, Resume):
            logger.error("Post-processing stage '%s' returned %s; keeping previous document", name, type(result).__name__)
            return doc
        return result


_default_processor = ResumePostProcessor()


def process_resume(raw: Any, max_bullets: Optional[int] = MAX_BULLETS_PER_ROLE) -> Resume:
    """Normalize one raw résumé (dict, JSON string or Resume). Never raises."""
    if max_bullets == MAX_BULLETS_PER_ROLE:
        return _default_processor.process(raw)
    return ResumePostProcessor(max_bullets=max_bullets).process(raw)
