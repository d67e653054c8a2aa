"""
Validate raw rewriter output into a Resume.

The model is asked for a fixed JSON shape but is not guaranteed to return it.
Everything here recovers locally: missing sections get defaults, wrong-typed
values are coerced or dropped, and the caller always gets a usable Resume.
"""

import copy
import re
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from near_resume.schemas.resume import Header, Resume
from near_resume.utils.helpers import dedupe_preserving_order, fold, parse_llm_json
from near_resume.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_FIRST_NAME = "Candidate"
SKILLS_CATEGORY = "Skills"
LANGUAGES_CATEGORY = "Languages"

# Spoken-language groups only; "Programming Languages" stays under Skills
_LANGUAGE_CATEGORY = re.compile(
    r"^\s*(?:spoken\s+|foreign\s+)?(?:languages?|idiomas?)(?:\s+(?:skills|proficiency))?\s*$",
    re.IGNORECASE,
)

# Keys some responses wrap the résumé in
_WRAPPER_KEYS = ("resume", "updatedResume", "updated_resume")


def _text(value: Any) -> str:
    """Scalar to string; None and containers become empty."""
    if value is None or isinstance(value, (dict, list, tuple, set)):
        return ""
    if isinstance(value, bool):
        return ""
    return str(value)


def _opt_text(value: Any) -> Optional[str]:
    text = _text(value)
    return text if text else None


def _as_list(value: Any) -> list:
    if value is None:
        return []
    if isinstance(value, (list, tuple)):
        return list(value)
    return [value]


def _get(data: Dict[str, Any], *keys: str) -> Any:
    """First present key among camelCase / snake_case spellings."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return None


def _coerce_metrics(value: Any) -> List[str]:
    metrics = []
    for item in _as_list(value):
        text = _text(item).strip()
        if text:
            metrics.append(text)
    return metrics


def _coerce_bullet(value: Any) -> Optional[Dict[str, Any]]:
    if isinstance(value, str):
        return {"text": value.strip(), "metrics": []} if value.strip() else None
    if not isinstance(value, dict):
        return None
    text = _text(_get(value, "text", "description")).strip()
    metrics = _coerce_metrics(value.get("metrics"))
    if not text and not metrics:
        return None
    return {"text": text, "metrics": metrics}


def _coerce_experience(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        logger.warning("Experience entry is not an object (%s); using an empty role", type(value).__name__)
        return {}
    bullets = [b for b in (_coerce_bullet(v) for v in _as_list(value.get("bullets"))) if b]
    return {
        "company": _text(value.get("company")),
        "location": _text(value.get("location")),
        "title": _text(value.get("title")),
        "startDate": _text(_get(value, "startDate", "start_date")),
        "endDate": _text(_get(value, "endDate", "end_date")),
        "bullets": bullets,
    }


def _coerce_education(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        logger.warning("Education entry is not an object (%s); using an empty entry", type(value).__name__)
        return {}
    return {
        "institution": _text(value.get("institution")),
        "degree": _text(value.get("degree")),
        "location": _text(value.get("location")),
        "year": _text(value.get("year")),
        "additionalInfo": _opt_text(_get(value, "additionalInfo", "additional_info")),
    }


def _coerce_header(value: Any) -> Dict[str, Any]:
    if not isinstance(value, dict):
        logger.warning("Header missing or malformed; using placeholder header")
        return {"firstName": DEFAULT_FIRST_NAME}
    first_name = _text(_get(value, "firstName", "first_name")).strip()
    if not first_name:
        # Fall back to the first token of a full name
        name = _text(value.get("name")).strip()
        first_name = name.split()[0] if name else DEFAULT_FIRST_NAME
    city = _opt_text(value.get("city"))
    country = _opt_text(value.get("country"))
    location = _text(value.get("location")).strip()
    if not location:
        location = ", ".join(p for p in (city, country) if p)
    return {
        "firstName": first_name,
        "tagline": _text(value.get("tagline")),
        "location": location,
        "city": city,
        "country": country,
    }


def canonicalize_skills(groups: Any, language_skills: Any = None) -> List[Dict[str, Any]]:
    """
    Fold arbitrary skill groups into the two canonical ones, 'Skills' and 'Languages'.
    Items keep their first-seen order; duplicates (case/accent-insensitive) are dropped.
    """
    skills: List[str] = []
    languages: List[str] = []
    entries = _as_list(groups) + _as_list(language_skills)
    for group in entries:
        if isinstance(group, str):
            category, items = "", [group]
        elif isinstance(group, dict):
            category, items = _text(group.get("category")), _as_list(group.get("items"))
        else:
            continue
        target = languages if _LANGUAGE_CATEGORY.match(category) else skills
        target.extend(t for t in (_text(i).strip() for i in items) if t)

    result = []
    if skills:
        result.append({"category": SKILLS_CATEGORY, "items": dedupe_preserving_order(skills, key=fold)})
    if languages:
        result.append({"category": LANGUAGES_CATEGORY, "items": dedupe_preserving_order(languages, key=fold)})
    return result


def _unwrap(raw: Any) -> Any:
    """Accept a JSON string, a Resume, or a dict wrapped in {'resume': ...}."""
    if isinstance(raw, Resume):
        return raw.model_dump(by_alias=True)
    if isinstance(raw, (str, bytes)):
        raw = parse_llm_json(raw.decode("utf-8", "replace") if isinstance(raw, bytes) else raw)
    if isinstance(raw, dict) and "header" not in raw:
        for key in _WRAPPER_KEYS:
            if isinstance(raw.get(key), dict):
                return raw[key]
    return raw


def coerce_resume(raw: Any) -> Resume:
    """
    Build a Resume from raw rewriter output. Never raises.
    The input object is deep-copied first and never modified.
    """
    data = _unwrap(copy.deepcopy(raw))
    if not isinstance(data, dict):
        logger.warning("Résumé payload is not an object (%s); using default document", type(data).__name__)
        data = {}

    for section in ("header", "summary", "skills", "experience", "education"):
        if section not in data:
            logger.info("Résumé section '%s' missing; using default", section)

    payload: Dict[str, Any] = {
        "header": _coerce_header(data.get("header")),
        "summary": _text(data.get("summary")),
        "skills": canonicalize_skills(data.get("skills"), _get(data, "languageSkills", "language_skills")),
        "experience": [_coerce_experience(e) for e in _as_list(data.get("experience"))],
        "education": [_coerce_education(e) for e in _as_list(data.get("education"))],
        "additionalExperience": _opt_text(_get(data, "additionalExperience", "additional_experience")),
    }
    for wire_key, snake_key in (("detailedFormat", "detailed_format"), ("includeAdditionalExp", "include_additional_exp")):
        flag = _get(data, wire_key, snake_key)
        if isinstance(flag, bool):
            payload[wire_key] = flag

    try:
        return Resume.model_validate(payload)
    except ValidationError as e:
        logger.warning("Résumé validation failed, using default document: %s", e)
        return Resume(header=Header(first_name=DEFAULT_FIRST_NAME))
