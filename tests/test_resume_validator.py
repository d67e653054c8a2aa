import json

from near_resume.cv_pipeline.resume_validator import DEFAULT_FIRST_NAME, canonicalize_skills, coerce_resume
from near_resume.schemas.resume import Resume


def test_non_object_input_gives_default_document():
    """
    Test None, lists and unparseable strings become a placeholder résumé.
    """
    for raw in (None, [1, 2], "not json"):
        resume = coerce_resume(raw)
        assert isinstance(resume, Resume)
        assert resume.header.first_name == DEFAULT_FIRST_NAME
        assert resume.experience == []


def test_json_string_and_wrapper_are_accepted():
    """
    Test JSON text and {'resume': ...} wrappers are unwrapped.
    """
    payload = {"header": {"firstName": "Ana"}, "summary": "Sales leader."}
    assert coerce_resume(json.dumps(payload)).summary == "Sales leader."
    assert coerce_resume({"resume": payload}).header.first_name == "Ana"
    assert coerce_resume("```json\n" + json.dumps(payload) + "\n```").header.first_name == "Ana"


def test_bullets_and_metrics_are_coerced():
    """
    Test string bullets, string metrics and blank metrics are normalized.
    """
    raw = {
        "experience": [
            {
                "company": "Acme",
                "bullets": [
                    "Closed 40 deals.",
                    {"text": "Grew ARR.", "metrics": "30% ARR growth"},
                    {"text": "Hired team.", "metrics": ["", "  ", "5 hires"]},
                    42,
                ],
            }
        ]
    }
    bullets = coerce_resume(raw).experience[0].bullets

    assert [b.text for b in bullets] == ["Closed 40 deals.", "Grew ARR.", "Hired team."]
    assert [b.metrics for b in bullets] == [[], ["30% ARR growth"], ["5 hires"]]


def test_section_shape_is_preserved():
    """
    Test malformed experience entries are kept as empty roles so counts match.
    """
    resume = coerce_resume({"experience": [{"company": "A"}, "oops"], "education": [None]})
    assert len(resume.experience) == 2
    assert resume.experience[1].company == ""
    assert len(resume.education) == 1


def test_header_fallbacks():
    """
    Test first name from full name and location from city and country.
    """
    header = coerce_resume({"header": {"name": "Maria Silva", "city": "Recife", "country": "Brazil"}}).header
    assert header.first_name == "Maria"
    assert header.location == "Recife, Brazil"


def test_skills_are_canonicalized():
    """
    Test skill groups fold into Skills and Languages with duplicates removed.
    """
    groups = [
        {"category": "Technical", "items": ["Python", "SQL"]},
        {"category": "Programming Languages", "items": ["python", "Go"]},
        {"category": "Languages", "items": ["English C2"]},
    ]
    result = canonicalize_skills(groups, [{"category": "Idiomas", "items": ["Spanish Native", "english c2"]}])
    assert result == [
        {"category": "Skills", "items": ["Python", "SQL", "Go"]},
        {"category": "Languages", "items": ["English C2", "Spanish Native"]},
    ]


def test_render_flags_pass_through():
    """
    Test boolean render hints survive and non-booleans are ignored.
    """
    resume = coerce_resume({"detailedFormat": True, "includeAdditionalExp": "yes"})
    assert resume.detailed_format is True
    assert resume.include_additional_exp is None
    assert resume.to_payload()["detailedFormat"] is True
    assert "includeAdditionalExp" not in resume.to_payload()


def test_input_is_not_modified():
    """
    Test the caller's dict is left exactly as given.
    """
    raw = {"experience": [{"company": "Acme", "bullets": ["Sold things."]}]}
    snapshot = json.dumps(raw)
    coerce_resume(raw)
    assert json.dumps(raw) == snapshot
