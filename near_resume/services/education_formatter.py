"""Clean degree strings: canonical degree names and abbreviations, no repeated years or school names."""

import re
from typing import Set

from near_resume.schemas.resume import Education, Resume
from near_resume.utils.helpers import collapse_whitespace, fold

YEAR = re.compile(r"\b(?:19|20)\d{2}\b")

DEGREE_PHRASES = (
    (re.compile(r"\bbachelor['’]?s\s+degree\b", re.IGNORECASE), "Bachelor's Degree"),
    (re.compile(r"\bmaster['’]?s\s+degree\b", re.IGNORECASE), "Master's Degree"),
)

# Word-bounded only: never touches the letters inside "MBA", "M.B.A.", "Jobs" or "B.S.E."
_ABBR_END = r"(?:\.(?![A-Za-z])|(?![A-Za-z.]))"
ABBREVIATIONS = (
    (re.compile(r"(?<![A-Za-z.])ph\.?\s?d" + _ABBR_END, re.IGNORECASE), "Ph.D."),
    (re.compile(r"(?<![A-Za-z.])b\.?s" + _ABBR_END, re.IGNORECASE), "B.S."),
    (re.compile(r"(?<![A-Za-z.])b\.?a" + _ABBR_END, re.IGNORECASE), "B.A."),
)

BARE_ARCHITECTURE = ("architecture", "architecture and urbanism")
ARCHITECTURE_PREFIX = "Bachelor's Degree in "

CONSECUTIVE_YEARS = re.compile(r"\b((?:19|20)\d{2})(?:\s*[,;/]?\s*\1\b)+")
TRAILING_YEAR = re.compile(r"[\s,;:–—-]*\(?\b((?:19|20)\d{2})\b\)?\s*$")
PARENTHETICAL = re.compile(r"\s*\(([^()]*)\)")
DOUBLE_COMMA = re.compile(r",\s*(?:,\s*)+")
LEADING_ARTIFACT = re.compile(r"^\s*(?:from|at|in|,|-|–|—)\s+", re.IGNORECASE)
TRAILING_ARTIFACT = re.compile(r"\s*(?:\bfrom|\bat|,|-|–|—)\s*$", re.IGNORECASE)


def _remove_institution(degree: str, institution: str) -> str:
    """Drop an embedded copy of the school name and the 'from'/'at' left around it."""
    name = collapse_whitespace(institution)
    if len(name) < 4:
        return degree
    pattern = re.compile(re.escape(name), re.IGNORECASE)
    if not pattern.search(degree):
        return degree
    cleaned = collapse_whitespace(pattern.sub(" ", degree))
    cleaned = LEADING_ARTIFACT.sub("", cleaned)
    cleaned = TRAILING_ARTIFACT.sub("", cleaned)
    # A degree that is nothing but the school name stays as written
    return cleaned or degree


def _remove_redundant_parentheticals(degree: str, years: Set[str]) -> str:
    """'(2015)' when 2015 is the entry year, or '(X)' when X is already in the degree."""

    def _replace(match: re.Match) -> str:
        inner = match.group(1).strip()
        if not inner:
            return ""
        if inner in years:
            return ""
        outside = fold(degree[: match.start()] + " " + degree[match.end():])
        if re.search(r"(?<!\w)" + re.escape(fold(inner)) + r"(?!\w)", outside):
            return ""
        return match.group(0)

    return PARENTHETICAL.sub(_replace, degree)


def _remove_trailing_year(degree: str, years: Set[str]) -> str:
    """Strip trailing years that repeat the entry year ("..., 2011 - 2015" with year "2011 - 2015")."""
    while True:
        m = TRAILING_YEAR.search(degree)
        if not (m and m.start() > 0 and m.group(1) in years):
            return degree
        degree = degree[: m.start()].rstrip(" ,;:-–—")


def clean_degree(degree: str, year: str = "", institution: str = "") -> str:
    """
    Normalize one degree string against its entry's year and institution.
    "Bachelor's Degree in Architecture, 2015" (year "2015") -> "Bachelor's Degree in Architecture".
    """
    if not degree:
        return degree
    years = set(YEAR.findall(year or ""))
    text = collapse_whitespace(degree)
    if institution:
        text = _remove_institution(text, institution)
    text = _remove_redundant_parentheticals(text, years)
    text = CONSECUTIVE_YEARS.sub(r"\1", text)
    text = _remove_trailing_year(text, years)
    text = DOUBLE_COMMA.sub(", ", text)
    text = collapse_whitespace(text).strip(" ,;-–—")
    for pattern, replacement in DEGREE_PHRASES:
        text = pattern.sub(replacement, text)
    for pattern, replacement in ABBREVIATIONS:
        text = pattern.sub(replacement, text)
    if fold(text) in BARE_ARCHITECTURE:
        text = ARCHITECTURE_PREFIX + text
    return text


def _clean_entry(edu: Education) -> None:
    edu.degree = clean_degree(edu.degree, edu.year, edu.institution)


def clean_education_format(resume: Resume) -> Resume:
    """Return a copy with every education degree string cleaned."""
    doc = resume.model_copy(deep=True)
    for edu in doc.education:
        _clean_entry(edu)
    return doc
