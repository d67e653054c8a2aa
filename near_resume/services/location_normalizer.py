"""Reduce free-text locations to state/country granularity; the header keeps the country only."""

import re
from typing import List

from near_resume.schemas.resume import Resume
from near_resume.services.gazetteer import DEFAULT_GAZETTEER, Gazetteer
from near_resume.utils.helpers import collapse_whitespace

US_ZIP = re.compile(r"\b\d{5}(?:-\d{4})?\b")
CA_POSTAL = re.compile(
    r"\b[ABCEGHJ-NPRSTVXY]\d[ABCEGHJ-NPRSTV-Z][ -]?\d[ABCEGHJ-NPRSTV-Z]\d\b",
    re.IGNORECASE,
)
# "City, State, Country" -> "State, Country" -> "Country" settles well within this
_MAX_PASSES = 6


def _split_parts(location: str) -> List[str]:
    """Comma-separated components, empty ones dropped."""
    return [p for p in (collapse_whitespace(part) for part in location.split(",")) if p]


def strip_postal_codes(location: str) -> str:
    """Remove US ZIP and Canadian postal codes, then any dangling commas."""
    if not location:
        return location
    text = US_ZIP.sub("", location)
    text = CA_POSTAL.sub("", text)
    return ", ".join(_split_parts(text))


def _looks_like_city(first: str, second: str, gazetteer: Gazetteer) -> bool:
    """
    First of two components: a city when the gazetteer knows it as one (even
    when a state shares the name, as with "New York"), or when the second
    component is itself a state/province ("Springfield, IL").
    """
    if not first or "province" in first.lower() or gazetteer.is_country(first):
        return False
    if gazetteer.city_country(first) is not None:
        return True
    return gazetteer.is_region(second)


def _simplify_once(location: str, gazetteer: Gazetteer) -> str:
    parts = _split_parts(strip_postal_codes(location))
    if not parts:
        return ""
    parts[-1] = gazetteer.canonical_country(parts[-1])
    if len(parts) >= 3:
        parts = parts[-2:]
    elif len(parts) == 2:
        if _looks_like_city(parts[0], parts[1], gazetteer):
            parts = parts[1:]
    else:
        country = gazetteer.city_country(parts[0])
        if country:
            parts = [country]
    return ", ".join(parts)


def simplify_location(location: str, gazetteer: Gazetteer = DEFAULT_GAZETTEER) -> str:
    """
    Experience/education location: at most "State, Country".
    "Campinas, SP, Brazil" -> "SP, Brazil"; "Bogotá" -> "Colombia".
    Unknown places pass through (postal codes still stripped).
    """
    if not location or not location.strip():
        return location
    current = location
    for _ in range(_MAX_PASSES):
        simplified = _simplify_once(current, gazetteer)
        if simplified == current:
            break
        current = simplified
    return current


def simplify_header_location(location: str, gazetteer: Gazetteer = DEFAULT_GAZETTEER) -> str:
    """
    Header location: country only.
    An explicit, recognized country wins; then a known state/province in the
    last component; then any known city or region mentioned; then the last
    component as-is.
    """
    if not location or not location.strip():
        return location
    parts = _split_parts(strip_postal_codes(location))
    if not parts:
        return ""
    last = parts[-1]
    if gazetteer.is_country(last):
        return gazetteer.canonical_country(last)
    region_country = gazetteer.region_country(last)
    if region_country:
        return region_country
    country = gazetteer.find_country(", ".join(parts))
    if country:
        return country
    return last


def normalize_locations(resume: Resume, gazetteer: Gazetteer = DEFAULT_GAZETTEER) -> Resume:
    """Return a copy of the résumé with every location reduced to its allowed granularity."""
    doc = resume.model_copy(deep=True)
    header = doc.header
    header.location = simplify_header_location(header.location, gazetteer)
    if header.country:
        header.country = gazetteer.canonical_country(header.country)
    elif header.location and gazetteer.is_country(header.location):
        header.country = header.location
    for exp in doc.experience:
        exp.location = simplify_location(exp.location, gazetteer)
    for edu in doc.education:
        edu.location = simplify_location(edu.location, gazetteer)
    return doc
