"""Remove repeated clauses inside a bullet and repeated opening verbs across a role's bullets."""

import re
from collections import Counter
from typing import Callable, List, Optional, Sequence, Set

from near_resume.schemas.resume import Bullet, Resume
from near_resume.utils.helpers import ends_with_terminal_punctuation
from near_resume.utils.logger import get_logger

logger = get_logger(__name__)

# Substitutes for a repeated opening verb; order matters (selection is by bullet index)
ACTION_VERBS = (
    "Achieved", "Accelerated", "Analyzed", "Advanced", "Architected",
    "Boosted", "Built", "Championed", "Collaborated", "Conducted",
    "Coordinated", "Created", "Delivered", "Demonstrated", "Designed",
    "Developed", "Directed", "Drove", "Established", "Executed",
    "Expanded", "Facilitated", "Generated", "Implemented", "Improved",
    "Increased", "Launched", "Led", "Managed", "Optimized",
    "Produced", "Reduced", "Streamlined", "Transformed",
)

SENTENCE_BOUNDARY = re.compile(r"(?<=\.)\s+")
LEADING_WORD = re.compile(r"^\s*([A-Za-z][A-Za-z'-]*)")

# Opening words this short ("Led", "Ran") are never treated as repeats
MIN_COUNTED_WORD_LEN = 4

Splitter = Callable[[str], List[str]]


def split_sentences(text: str) -> List[str]:
    """Split on a period followed by whitespace; decimals and 'U.S.A' stay intact."""
    return [s for s in SENTENCE_BOUNDARY.split(text.strip()) if s]


def _clause(segment: str) -> str:
    return segment.strip().rstrip(".").strip()


def is_near_duplicate(previous: str, current: str) -> bool:
    """
    One clause contains the other (shorter one over 5 chars), or both are
    the same ignoring case and longer than 10 chars.
    """
    a, b = _clause(previous), _clause(current)
    shorter, longer = (a, b) if len(a) <= len(b) else (b, a)
    if len(shorter) > 5 and shorter in longer:
        return True
    return len(a) > 10 and a.lower() == b.lower()


def dedupe_clauses(text: str, splitter: Splitter = split_sentences) -> str:
    """Drop sentences that repeat the one before them; rejoin with '. '."""
    if not text:
        return text
    segments = splitter(text)
    if len(segments) <= 1:
        return text
    kept = [segments[0]]
    for segment in segments[1:]:
        if is_near_duplicate(kept[-1], segment):
            logger.debug("Dropped repeated clause: %s", segment)
            continue
        kept.append(segment)
    joined = ". ".join(c for c in (_clause(s) for s in kept) if c)
    if not ends_with_terminal_punctuation(joined):
        joined += "."
    return joined


def pick_replacement_verb(index: int, pool: Sequence[str], excluded: Set[str]) -> Optional[str]:
    """Deterministic pick: bullet index modulo the verbs still available."""
    available = [v for v in pool if v.lower() not in excluded]
    if not available:
        return None
    return available[index % len(available)]


def diversify_leading_verbs(bullets: List[Bullet], verb_pool: Sequence[str] = ACTION_VERBS) -> None:
    """
    Replace the opening word of every repeat after the first within one role.
    Mutates the given bullets; callers pass a copy.
    """
    matches = [LEADING_WORD.match(b.text or "") for b in bullets]
    words = [m.group(1).lower() if m else None for m in matches]
    counted = [w if w and len(w) >= MIN_COUNTED_WORD_LEN else None for w in words]
    counts = Counter(w for w in counted if w)

    # Every opening word of the role is off limits, and so is each substitute once used
    excluded: Set[str] = {w for w in words if w}
    seen: Set[str] = set()
    for index, bullet in enumerate(bullets):
        word = counted[index]
        if not word or counts[word] < 2:
            continue
        if word not in seen:
            seen.add(word)
            continue
        verb = pick_replacement_verb(index, verb_pool, excluded)
        if verb is None:
            logger.debug("Verb pool exhausted; keeping repeated opener '%s'", word)
            continue
        excluded.add(verb.lower())
        m = matches[index]
        bullet.text = bullet.text[: m.start(1)] + verb + bullet.text[m.end(1):]


def reduce_bullet_repetition(
    resume: Resume,
    splitter: Splitter = split_sentences,
    verb_pool: Sequence[str] = ACTION_VERBS,
) -> Resume:
    """Return a copy with clause repeats removed and opening verbs diversified per role."""
    doc = resume.model_copy(deep=True)
    for exp in doc.experience:
        for bullet in exp.bullets:
            bullet.text = dedupe_clauses(bullet.text, splitter)
        diversify_leading_verbs(exp.bullets, verb_pool)
    return doc
