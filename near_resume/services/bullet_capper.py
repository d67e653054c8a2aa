"""Cap the number of bullets per role, keeping quantified bullets first."""

from typing import List

from near_resume.config import MAX_BULLETS_PER_ROLE
from near_resume.schemas.resume import Bullet, Resume
from near_resume.utils.logger import get_logger

logger = get_logger(__name__)


def select_bullets(bullets: List[Bullet], max_bullets: int) -> List[Bullet]:
    """
    Pick at most max_bullets: bullets with metrics first, then the earliest
    ones without; survivors keep their original relative order.
    """
    if max_bullets < 0 or len(bullets) <= max_bullets:
        return list(bullets)
    with_metrics = [i for i, b in enumerate(bullets) if b.has_metrics]
    without_metrics = [i for i, b in enumerate(bullets) if not b.has_metrics]
    if len(with_metrics) >= max_bullets:
        chosen = with_metrics[:max_bullets]
    else:
        chosen = with_metrics + without_metrics[: max_bullets - len(with_metrics)]
    return [bullets[i] for i in sorted(chosen)]


def limit_bullets(resume: Resume, max_bullets: int = MAX_BULLETS_PER_ROLE) -> Resume:
    """Return a copy where no role has more than max_bullets bullets."""
    doc = resume.model_copy(deep=True)
    for exp in doc.experience:
        before = len(exp.bullets)
        exp.bullets = select_bullets(exp.bullets, max_bullets)
        if len(exp.bullets) < before:
            logger.debug("Capped %s at %s bullets (was %s)", exp.company or "role", max_bullets, before)
    return doc
