from near_resume.schemas.resume import Resume
from near_resume.services.education_formatter import clean_degree, clean_education_format


def test_trailing_year_matching_entry_year_is_removed():
    """
    Test the degree loses a trailing year that repeats the year field.
    """
    assert clean_degree("Bachelor's Degree in Architecture, 2015", "2015") == "Bachelor's Degree in Architecture"


def test_trailing_year_not_in_entry_is_kept():
    """
    Test an unrelated trailing year stays.
    """
    assert clean_degree("Exchange program, 2012", "2015") == "Exchange program, 2012"


def test_consecutive_years_collapse():
    """
    Test '2009, 2009' becomes a single year and degree phrases get canonical casing.
    """
    assert clean_degree("master's degree, 2009, 2009") == "Master's Degree, 2009"


def test_abbreviations_are_canonicalized():
    """
    Test standalone abbreviations become B.S., B.A. and Ph.D.
    """
    assert clean_degree("bs in Computer Science") == "B.S. in Computer Science"
    assert clean_degree("BA Economics") == "B.A. Economics"
    assert clean_degree("phd in Physics") == "Ph.D. in Physics"


def test_abbreviation_letters_inside_words_are_untouched():
    """
    Test letters inside MBA, Business or Bachelor are never rewritten.
    """
    assert clean_degree("MBA") == "MBA"
    assert clean_degree("Bachelor of Business Administration") == "Bachelor of Business Administration"


def test_bare_architecture_gets_degree_prefix():
    """
    Test a bare 'Architecture' degree is expanded.
    """
    assert clean_degree("Architecture") == "Bachelor's Degree in Architecture"
    assert clean_degree("architecture and urbanism") == "Bachelor's Degree in architecture and urbanism"


def test_embedded_institution_is_removed():
    """
    Test the school name and its 'from' are dropped from the degree.
    """
    assert clean_degree("MBA from Harvard Business School", institution="Harvard Business School") == "MBA"


def test_degree_equal_to_institution_is_kept():
    """
    Test a degree holding only the school name is not emptied.
    """
    assert clean_degree("Harvard University", "2015", "Harvard University") == "Harvard University"
    assert clean_degree("harvard university", institution="Harvard University") == "harvard university"


def test_redundant_parentheticals_are_removed():
    """
    Test '(year)' matching the entry and a repeated abbreviation are dropped.
    """
    assert clean_degree("B.S. in Computer Science (2015)", "2015") == "B.S. in Computer Science"
    assert clean_degree("MBA (MBA)") == "MBA"
    assert clean_degree("B.S. (Honors)") == "B.S. (Honors)"


def test_clean_education_format_is_idempotent_and_pure():
    """
    Test the stage works on a copy and a second pass changes nothing.
    """
    resume = Resume.model_validate({
        "education": [
            {"institution": "UFRJ", "degree": "Architecture", "year": "2015"},
            {"institution": "MIT", "degree": "phd in Physics, 2020", "year": "2020"},
        ]
    })
    once = clean_education_format(resume)

    assert [e.degree for e in once.education] == ["Bachelor's Degree in Architecture", "Ph.D. in Physics"]
    assert clean_education_format(once) == once
    assert resume.education[0].degree == "Architecture"
