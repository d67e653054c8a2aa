"""Drop bullet metrics that only restate a number the bullet text already shows."""

import re
from typing import List, Tuple

from near_resume.config import METRIC_PROXIMITY_CHARS
from near_resume.schemas.resume import Resume
from near_resume.utils.helpers import dedupe_preserving_order
from near_resume.utils.logger import get_logger

logger = get_logger(__name__)

NUMBER_TOKEN = re.compile(r"\d+(?:\.\d+)?%?")
THOUSANDS_COMMA = re.compile(r"(?<=\d),(?=\d{3}(?!\d))")
LETTER_WORD = re.compile(r"[^\W\d_]+")

STOP_WORDS = frozenset({
    "a", "an", "the", "and", "or", "but", "of", "to", "for", "in", "on", "at", "by",
    "with", "about", "as", "into", "like", "through", "after", "over", "between",
    "out", "from", "up", "down", "is", "are", "was", "were", "be", "been", "being",
    "have", "has", "had", "do", "does", "did", "will", "would", "shall", "should",
    "can", "could", "may", "might", "must", "that", "which", "who", "whom", "this",
    "these", "those", "am", "im", "your", "my", "his", "her", "their", "its", "our",
    "we", "they", "i", "you", "he", "she", "it", "me", "him", "us", "them", "per",
    "than", "more", "less", "under", "across", "within", "via", "all", "new",
})


def _normalize(text: str) -> str:
    """Lowercase and drop thousands separators so '1,200' and '1200' line up."""
    return THOUSANDS_COMMA.sub("", (text or "").lower())


def numeric_tokens(text: str) -> List[Tuple[str, int]]:
    """(number, position) pairs; percent signs stripped, positions in the normalized text."""
    return [(m.group().rstrip("%"), m.start()) for m in NUMBER_TOKEN.finditer(_normalize(text))]


def significant_words(text: str) -> List[str]:
    """Letter-only words longer than 2 characters that are not stop words."""
    words = LETTER_WORD.findall((text or "").lower())
    return dedupe_preserving_order(w for w in words if len(w) > 2 and w not in STOP_WORDS)


def is_metric_echo(metric: str, text: str, proximity: int = METRIC_PROXIMITY_CHARS) -> bool:
    """
    True when a number in the metric also appears in the bullet text and one of
    the metric's significant words sits within `proximity` characters of it.
    Metrics without numbers are never echoes.
    """
    metric_numbers = {n for n, _ in numeric_tokens(metric)}
    if not metric_numbers:
        return False
    positions = [pos for n, pos in numeric_tokens(text) if n in metric_numbers]
    if not positions:
        return False
    normalized = _normalize(text)
    for word in significant_words(metric):
        # Whole words only: "deal" must not match inside "ideal"
        pattern = re.compile(r"(?<!\w)" + re.escape(word) + r"(?!\w)")
        for match in pattern.finditer(normalized):
            if any(abs(match.start() - pos) <= proximity for pos in positions):
                return True
    return False


def dedupe_metric_echo(resume: Resume) -> Resume:
    """Return a copy where no metric repeats a fact already stated in its bullet."""
    doc = resume.model_copy(deep=True)
    for exp in doc.experience:
        for bullet in exp.bullets:
            metrics = list(bullet.metrics or [])
            kept = [m for m in metrics if not is_metric_echo(m, bullet.text)]
            if len(kept) != len(metrics):
                logger.debug("Removed %s echoed metric(s) from bullet: %s", len(metrics) - len(kept), bullet.text)
            bullet.metrics = kept
    return doc
