"""Helper utilities shared by the post-processing stages and the rewriter."""

import json
import re
import unicodedata
from typing import Any, Callable, Iterable, List, Optional

_WHITESPACE = re.compile(r"\s+")


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and strip the ends."""
    if not text:
        return ""
    return _WHITESPACE.sub(" ", text).strip()


def strip_accents(text: str) -> str:
    """Remove combining marks so 'Bogotá' compares equal to 'Bogota'."""
    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(ch for ch in decomposed if not unicodedata.combining(ch))


def fold(text: str) -> str:
    """Case- and accent-insensitive comparison key."""
    return collapse_whitespace(strip_accents(text)).lower()


def dedupe_preserving_order(
    items: Iterable[str],
    key: Optional[Callable[[str], str]] = None,
) -> List[str]:
    """Remove duplicate strings, keeping the first occurrence of each."""
    key = key or (lambda s: s)
    seen: set[str] = set()
    result: List[str] = []
    for item in items:
        k = key(item)
        if k not in seen:
            seen.add(k)
            result.append(item)
    return result


def ends_with_terminal_punctuation(text: str) -> bool:
    """True if text ends with '.', '!' or '?' (ignoring trailing spaces)."""
    return text.rstrip().endswith((".", "!", "?"))


def parse_llm_json(text: str) -> Optional[Any]:
    """Parse JSON from LLM response, stripping markdown code blocks if present."""
    raw = (text or "").strip()
    if raw.startswith("```"):
        raw = re.sub(r"^```(?:json)?\s*", "", raw)
        raw = re.sub(r"\s*```$", "", raw)
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return None
