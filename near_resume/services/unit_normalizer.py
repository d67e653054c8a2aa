"""Rewrite square-meter areas as square feet and euro/pound amounts as dollars across every free-text résumé field."""

import math
import re
from typing import Callable, Optional

from near_resume.config import EUR_TO_USD, GBP_TO_USD, SQ_FT_PER_SQ_M
from near_resume.schemas.resume import Resume

# Any square-meter notation; the lookahead keeps "sq mi" / "square miles" out
_UNIT = (
    r"(?:square\s+met(?:er|re)s?|square\s+m|sq\.?\s*met(?:er|re)s?|sq\.?\s*m|sqm|m²|m2)"
    r"(?![a-z0-9])"
)
# "20.000 m2" is read as grouped thousands, the usual Latin American spelling
_NUMBER = (
    r"(?P<num>(?P<dotted>\d{1,3}(?:\.\d{3})+)"
    r"|\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)"
)

AREA_WITH_NUMBER = re.compile(
    r"(?<![\d.,])" + _NUMBER + r"(?P<plus>\+)?\s*" + _UNIT,
    re.IGNORECASE,
)
# No number attached: "area in m²". Bare "M2" is left alone (Apple M2, M2 Ltd, ...)
# unless it directly follows "per" or "in"
STANDALONE_SQUARE_METERS = re.compile(
    r"(?<![a-z0-9])square\s+met(?:er|re)s?(?![a-z0-9])",
    re.IGNORECASE,
)
STANDALONE_UNIT = re.compile(
    r"(?<![A-Za-z0-9])"
    r"(?:(?i:square\s+m|sq\.?\s*met(?:er|re)s?|sq\.?\s*m|sqm|m²)|m2|(?<=\b[Pp]er )M2|(?<=\b[Ii]n )M2)"
    r"(?![A-Za-z0-9])"
)

CURRENCY_RATES = {"€": EUR_TO_USD, "£": GBP_TO_USD}
CURRENCY_AMOUNT = re.compile(
    r"(?P<symbol>[€£])\s*(?P<num>\d{1,3}(?:,\d{3})+(?:\.\d+)?|\d+(?:\.\d+)?)(?P<scale>[KkMB](?![A-Za-z]))?"
)


def _round_half_up(value: float) -> int:
    # round() would bank 0.5 to even
    return int(math.floor(value + 0.5))


def _format_sq_ft(match: re.Match) -> str:
    raw_num = match.group("num")
    plus = match.group("plus") or ""
    digits = raw_num.replace(".", "") if match.group("dotted") else raw_num.replace(",", "")
    try:
        sq_ft = _round_half_up(float(digits) * SQ_FT_PER_SQ_M)
    except (ValueError, OverflowError):
        return f"{raw_num}{plus} sq ft"
    return f"{sq_ft:,}{plus} sq ft"


def _format_usd(match: re.Match) -> str:
    scale = match.group("scale") or ""
    dollars = float(match.group("num").replace(",", "")) * CURRENCY_RATES[match.group("symbol")]
    if scale:
        # One decimal survives on scaled amounts: "£2M" -> "$2.6M"
        amount = f"{dollars:,.1f}"
        if amount.endswith(".0"):
            amount = amount[:-2]
        return f"${amount}{scale}"
    return f"${_round_half_up(dollars):,}"


def convert_area_units(text: Optional[str]) -> Optional[str]:
    """
    Convert square meters to square feet in one string.
    "20,000+ m²" -> "215,280+ sq ft"; "area in m²" -> "area in sq ft".
    Already-converted text is returned unchanged.
    """
    if not text:
        return text
    text = AREA_WITH_NUMBER.sub(_format_sq_ft, text)
    text = STANDALONE_SQUARE_METERS.sub("square feet", text)
    text = STANDALONE_UNIT.sub("sq ft", text)
    return text


def convert_currency(text: Optional[str]) -> Optional[str]:
    """
    Rewrite euro and pound amounts as approximate US dollars at the configured rates.
    "€10,000" -> "$11,000"; "£2M" -> "$2.6M". Dollar amounts are left alone.
    """
    if not text:
        return text
    return CURRENCY_AMOUNT.sub(_format_usd, text)


def convert_units(text: Optional[str]) -> Optional[str]:
    """Areas to square feet, then currencies to dollars."""
    return convert_currency(convert_area_units(text))


def _map_text_fields(resume: Resume, fn: Callable[[Optional[str]], Optional[str]]) -> Resume:
    """Apply fn to every free-text field of a copy of the résumé."""
    doc = resume.model_copy(deep=True)
    doc.summary = fn(doc.summary)
    doc.header.tagline = fn(doc.header.tagline)
    doc.additional_experience = fn(doc.additional_experience)
    for group in doc.skills:
        group.items = [fn(item) for item in group.items]
    for exp in doc.experience:
        exp.company = fn(exp.company)
        exp.title = fn(exp.title)
        for bullet in exp.bullets:
            bullet.text = fn(bullet.text)
            bullet.metrics = [fn(m) for m in bullet.metrics]
    for edu in doc.education:
        edu.institution = fn(edu.institution)
        edu.degree = fn(edu.degree)
        edu.additional_info = fn(edu.additional_info)
    return doc


def normalize_units(resume: Resume) -> Resume:
    """Return a copy of the résumé with areas in square feet and money in dollars."""
    return _map_text_fields(resume, convert_units)
