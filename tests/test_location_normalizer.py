from near_resume.schemas.resume import Resume
from near_resume.services.gazetteer import DEFAULT_GAZETTEER, Gazetteer
from near_resume.services.location_normalizer import (
    normalize_locations,
    simplify_header_location,
    simplify_location,
    strip_postal_codes,
)


def test_header_keeps_country_only():
    """
    Test header locations collapse to the country.
    """
    assert simplify_header_location("São Paulo, Brazil") == "Brazil"
    assert simplify_header_location("Austin, TX") == "United States"
    assert simplify_header_location("Toronto") == "Canada"
    assert simplify_header_location("Seattle, WA, USA") == "United States"


def test_header_explicit_country_beats_city_match():
    """
    Test a recognized country in the last part wins over a city name inside it.
    """
    assert simplify_header_location("San Salvador, El Salvador") == "El Salvador"


def test_experience_location_keeps_state_and_country():
    """
    Test three-part locations drop the city.
    """
    assert simplify_location("Campinas, SP, Brazil") == "SP, Brazil"
    assert simplify_location("Austin, Texas, USA") == "Texas, United States"


def test_two_part_location_drops_known_city_only():
    """
    Test a known city is dropped while a state/province is kept.
    """
    assert simplify_location("Lisbon, Portugal") == "Portugal"
    assert simplify_location("Texas, USA") == "Texas, United States"
    assert simplify_location("Buenos Aires Province, Argentina") == "Buenos Aires Province, Argentina"


def test_city_before_state_is_dropped():
    """
    Test "City, State" keeps the state, including cities that share a name with a state.
    """
    assert simplify_location("New York, NY") == "NY"
    assert simplify_location("Springfield, IL") == "IL"
    assert simplify_location("Washington, DC") == "DC"
    assert simplify_location("Miami, FL") == "FL"
    assert simplify_location("New York, USA") == "United States"
    assert simplify_location("São Paulo, Brazil") == "Brazil"


def test_single_city_becomes_country():
    """
    Test a lone known city is replaced by its country; unknown places pass through.
    """
    assert simplify_location("Bogotá") == "Colombia"
    assert simplify_location("Springfield Heights") == "Springfield Heights"
    assert simplify_location("") == ""


def test_postal_codes_are_stripped():
    """
    Test US ZIP and Canadian postal codes are removed.
    """
    assert strip_postal_codes("Austin, TX 78701") == "Austin, TX"
    assert strip_postal_codes("Toronto, ON M5V 2T6, Canada") == "Toronto, ON, Canada"


def test_simplify_location_is_idempotent():
    """
    Test running the simplification twice changes nothing further.
    """
    for raw in (
        "Campinas, SP, Brazil",
        "Lisbon, Portugal",
        "Bogotá",
        "Austin, TX 78701, USA",
        "New York, NY",
        "Springfield, IL",
        "New York, USA",
        "Texas, USA",
    ):
        once = simplify_location(raw)
        assert simplify_location(once) == once


def test_custom_gazetteer():
    """
    Test a caller-supplied gazetteer replaces the built-in table.
    """
    gazetteer = Gazetteer(cities={"Gotham": "Freedonia"}, regions={}, countries=["Freedonia"], aliases={})
    assert simplify_location("Gotham", gazetteer) == "Freedonia"
    assert DEFAULT_GAZETTEER.city_country("Gotham") is None


def test_normalize_locations_updates_document():
    """
    Test header, experience and education locations are all normalized on a copy.
    """
    resume = Resume.model_validate({
        "header": {"firstName": "Ana", "location": "São Paulo, SP, Brazil"},
        "experience": [{"company": "Acme", "location": "Campinas, SP, Brazil"}],
        "education": [{"institution": "UFPE", "location": "Recife, Brazil"}],
    })
    result = normalize_locations(resume)

    assert result.header.location == "Brazil"
    assert result.header.country == "Brazil"
    assert result.experience[0].location == "SP, Brazil"
    assert result.education[0].location == "Brazil"
    assert resume.header.location == "São Paulo, SP, Brazil"
