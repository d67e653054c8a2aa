"""
Static place-name lookup used by location normalization.

Approximate and best-effort: major cities and first-level regions of Latin
America, North America, Europe and APAC. Ambiguous names resolve toward the
Latin American reading (Córdoba -> Argentina) except where the other reading
is far more common. Matching is case- and accent-insensitive.
"""

import re
from typing import Dict, Iterable, List, Optional, Tuple

from near_resume.utils.helpers import collapse_whitespace, fold

UNITED_STATES = "United States"
UNITED_KINGDOM = "United Kingdom"

COUNTRY_ALIASES: Dict[str, str] = {
    "usa": UNITED_STATES,
    "us": UNITED_STATES,
    "u.s.": UNITED_STATES,
    "u.s": UNITED_STATES,
    "u.s.a.": UNITED_STATES,
    "u.s.a": UNITED_STATES,
    "united states of america": UNITED_STATES,
    "estados unidos": UNITED_STATES,
    "eeuu": UNITED_STATES,
    "ee.uu.": UNITED_STATES,
    "uk": UNITED_KINGDOM,
    "u.k.": UNITED_KINGDOM,
    "great britain": UNITED_KINGDOM,
    "england": UNITED_KINGDOM,
    "scotland": UNITED_KINGDOM,
    "wales": UNITED_KINGDOM,
    "brasil": "Brazil",
    "españa": "Spain",
    "deutschland": "Germany",
    "uae": "United Arab Emirates",
}

COUNTRIES: Tuple[str, ...] = (
    "Argentina", "Bolivia", "Brazil", "Chile", "Colombia", "Costa Rica", "Cuba",
    "Dominican Republic", "Ecuador", "El Salvador", "Guatemala", "Honduras",
    "Mexico", "Nicaragua", "Panama", "Paraguay", "Peru", "Puerto Rico",
    "Uruguay", "Venezuela", "Jamaica", "Trinidad and Tobago",
    "United States", "Canada",
    "United Kingdom", "Ireland", "Spain", "Portugal", "France", "Germany",
    "Italy", "Netherlands", "Belgium", "Switzerland", "Austria", "Poland",
    "Czech Republic", "Sweden", "Norway", "Denmark", "Finland", "Greece",
    "Romania", "Hungary", "Ukraine", "Turkey", "Luxembourg", "Estonia",
    "Israel", "United Arab Emirates", "Saudi Arabia", "Egypt", "South Africa",
    "Nigeria", "Kenya", "Morocco",
    "India", "Pakistan", "Bangladesh", "China", "Hong Kong", "Taiwan", "Japan",
    "South Korea", "Singapore", "Malaysia", "Indonesia", "Philippines",
    "Thailand", "Vietnam", "Australia", "New Zealand",
)

CITIES: Dict[str, str] = {
    # Latin America
    "Buenos Aires": "Argentina", "Córdoba": "Argentina", "Rosario": "Argentina",
    "Mendoza": "Argentina", "La Plata": "Argentina", "Mar del Plata": "Argentina",
    "La Paz": "Bolivia", "Santa Cruz de la Sierra": "Bolivia", "Cochabamba": "Bolivia",
    "São Paulo": "Brazil", "Rio de Janeiro": "Brazil", "Belo Horizonte": "Brazil",
    "Brasília": "Brazil", "Curitiba": "Brazil", "Porto Alegre": "Brazil",
    "Recife": "Brazil", "Salvador": "Brazil", "Fortaleza": "Brazil",
    "Florianópolis": "Brazil", "Campinas": "Brazil", "Manaus": "Brazil",
    "Goiânia": "Brazil", "Belém": "Brazil",
    "Santiago": "Chile", "Valparaíso": "Chile", "Viña del Mar": "Chile",
    "Concepción": "Chile", "Antofagasta": "Chile",
    "Bogotá": "Colombia", "Medellín": "Colombia", "Cali": "Colombia",
    "Barranquilla": "Colombia", "Cartagena": "Colombia", "Bucaramanga": "Colombia",
    "Pereira": "Colombia", "Manizales": "Colombia",
    "San José": "Costa Rica", "Heredia": "Costa Rica", "Alajuela": "Costa Rica",
    "Havana": "Cuba", "La Habana": "Cuba",
    "Santo Domingo": "Dominican Republic", "Santiago de los Caballeros": "Dominican Republic",
    "Quito": "Ecuador", "Guayaquil": "Ecuador", "Cuenca": "Ecuador",
    "San Salvador": "El Salvador",
    "Guatemala City": "Guatemala", "Ciudad de Guatemala": "Guatemala",
    "Tegucigalpa": "Honduras", "San Pedro Sula": "Honduras",
    "Mexico City": "Mexico", "Ciudad de México": "Mexico", "CDMX": "Mexico",
    "Guadalajara": "Mexico", "Monterrey": "Mexico", "Puebla": "Mexico",
    "Tijuana": "Mexico", "León": "Mexico", "Querétaro": "Mexico", "Mérida": "Mexico",
    "Cancún": "Mexico", "Zapopan": "Mexico", "Aguascalientes": "Mexico",
    "Hermosillo": "Mexico", "Chihuahua": "Mexico", "Toluca": "Mexico",
    "Managua": "Nicaragua",
    "Panama City": "Panama", "Ciudad de Panamá": "Panama",
    "Asunción": "Paraguay", "Ciudad del Este": "Paraguay",
    "Lima": "Peru", "Arequipa": "Peru", "Trujillo": "Peru", "Cusco": "Peru",
    "San Juan": "Puerto Rico",
    "Montevideo": "Uruguay", "Punta del Este": "Uruguay",
    "Caracas": "Venezuela", "Maracaibo": "Venezuela",
    "Kingston": "Jamaica", "Port of Spain": "Trinidad and Tobago",
    # North America
    "New York": UNITED_STATES, "New York City": UNITED_STATES, "NYC": UNITED_STATES,
    "Los Angeles": UNITED_STATES, "Chicago": UNITED_STATES, "Houston": UNITED_STATES,
    "Phoenix": UNITED_STATES, "Philadelphia": UNITED_STATES, "San Antonio": UNITED_STATES,
    "San Diego": UNITED_STATES, "Dallas": UNITED_STATES, "Austin": UNITED_STATES,
    "San Francisco": UNITED_STATES, "Seattle": UNITED_STATES, "Denver": UNITED_STATES,
    "Boston": UNITED_STATES, "Miami": UNITED_STATES, "Atlanta": UNITED_STATES,
    "Orlando": UNITED_STATES, "Tampa": UNITED_STATES, "Nashville": UNITED_STATES,
    "Portland": UNITED_STATES, "Las Vegas": UNITED_STATES, "Detroit": UNITED_STATES,
    "Minneapolis": UNITED_STATES, "Charlotte": UNITED_STATES, "Raleigh": UNITED_STATES,
    "Salt Lake City": UNITED_STATES, "Pittsburgh": UNITED_STATES, "Baltimore": UNITED_STATES,
    "Palo Alto": UNITED_STATES, "Mountain View": UNITED_STATES, "Sunnyvale": UNITED_STATES,
    "Oakland": UNITED_STATES, "Brooklyn": UNITED_STATES, "Silicon Valley": UNITED_STATES,
    "Washington, D.C.": UNITED_STATES, "Washington D.C.": UNITED_STATES,
    "Toronto": "Canada", "Montreal": "Canada", "Montréal": "Canada", "Vancouver": "Canada",
    "Calgary": "Canada", "Ottawa": "Canada", "Edmonton": "Canada", "Winnipeg": "Canada",
    "Quebec City": "Canada", "Halifax": "Canada", "Waterloo": "Canada",
    # Europe
    "London": UNITED_KINGDOM, "Manchester": UNITED_KINGDOM, "Birmingham": UNITED_KINGDOM,
    "Edinburgh": UNITED_KINGDOM, "Glasgow": UNITED_KINGDOM, "Bristol": UNITED_KINGDOM,
    "Leeds": UNITED_KINGDOM, "Liverpool": UNITED_KINGDOM, "Cambridge": UNITED_KINGDOM,
    "Oxford": UNITED_KINGDOM,
    "Dublin": "Ireland", "Cork": "Ireland",
    "Madrid": "Spain", "Barcelona": "Spain", "Seville": "Spain", "Sevilla": "Spain",
    "Bilbao": "Spain", "Málaga": "Spain", "Zaragoza": "Spain", "Valencia": "Spain",
    "Lisbon": "Portugal", "Lisboa": "Portugal", "Porto": "Portugal",
    "Paris": "France", "Lyon": "France", "Marseille": "France", "Toulouse": "France",
    "Berlin": "Germany", "Munich": "Germany", "München": "Germany", "Hamburg": "Germany",
    "Frankfurt": "Germany", "Cologne": "Germany", "Stuttgart": "Germany", "Düsseldorf": "Germany",
    "Rome": "Italy", "Milan": "Italy", "Milano": "Italy", "Turin": "Italy", "Naples": "Italy",
    "Florence": "Italy", "Bologna": "Italy",
    "Amsterdam": "Netherlands", "Rotterdam": "Netherlands", "The Hague": "Netherlands",
    "Utrecht": "Netherlands", "Eindhoven": "Netherlands",
    "Brussels": "Belgium", "Antwerp": "Belgium",
    "Zurich": "Switzerland", "Zürich": "Switzerland", "Geneva": "Switzerland", "Basel": "Switzerland",
    "Vienna": "Austria", "Warsaw": "Poland", "Krakow": "Poland", "Kraków": "Poland",
    "Wroclaw": "Poland", "Prague": "Czech Republic", "Stockholm": "Sweden",
    "Gothenburg": "Sweden", "Oslo": "Norway", "Copenhagen": "Denmark", "Helsinki": "Finland",
    "Athens": "Greece", "Bucharest": "Romania", "Budapest": "Hungary", "Kyiv": "Ukraine",
    "Kiev": "Ukraine", "Istanbul": "Turkey", "Ankara": "Turkey", "Tallinn": "Estonia",
    # Middle East / Africa
    "Tel Aviv": "Israel", "Jerusalem": "Israel", "Dubai": "United Arab Emirates",
    "Abu Dhabi": "United Arab Emirates", "Riyadh": "Saudi Arabia", "Cairo": "Egypt",
    "Johannesburg": "South Africa", "Cape Town": "South Africa", "Lagos": "Nigeria",
    "Nairobi": "Kenya", "Casablanca": "Morocco",
    # APAC
    "Mumbai": "India", "Bangalore": "India", "Bengaluru": "India", "New Delhi": "India",
    "Delhi": "India", "Hyderabad": "India", "Chennai": "India", "Pune": "India",
    "Kolkata": "India", "Gurgaon": "India", "Gurugram": "India", "Noida": "India",
    "Karachi": "Pakistan", "Lahore": "Pakistan", "Islamabad": "Pakistan", "Dhaka": "Bangladesh",
    "Beijing": "China", "Shanghai": "China", "Shenzhen": "China", "Guangzhou": "China",
    "Hangzhou": "China", "Taipei": "Taiwan", "Tokyo": "Japan", "Osaka": "Japan",
    "Kyoto": "Japan", "Seoul": "South Korea", "Busan": "South Korea",
    "Kuala Lumpur": "Malaysia", "Jakarta": "Indonesia", "Manila": "Philippines",
    "Cebu": "Philippines", "Bangkok": "Thailand", "Ho Chi Minh City": "Vietnam",
    "Hanoi": "Vietnam", "Sydney": "Australia", "Melbourne": "Australia",
    "Brisbane": "Australia", "Perth": "Australia", "Adelaide": "Australia",
    "Auckland": "New Zealand", "Wellington": "New Zealand",
}

# First-level divisions (states, provinces, departments)
REGIONS: Dict[str, str] = {
    # Brazil
    "SP": "Brazil", "RJ": "Brazil", "MG": "Brazil", "Minas Gerais": "Brazil",
    "Santa Catarina": "Brazil", "Paraná": "Brazil", "Rio Grande do Sul": "Brazil",
    "Bahia": "Brazil", "Pernambuco": "Brazil", "Ceará": "Brazil", "Goiás": "Brazil",
    "Distrito Federal": "Brazil", "São Paulo": "Brazil", "Rio de Janeiro": "Brazil",
    # Argentina
    "Buenos Aires Province": "Argentina", "Santa Fe": "Argentina", "CABA": "Argentina",
    # Colombia
    "Antioquia": "Colombia", "Cundinamarca": "Colombia", "Valle del Cauca": "Colombia",
    "Atlántico": "Colombia", "Santander": "Colombia", "Bolívar": "Colombia",
    # Mexico
    "Jalisco": "Mexico", "Nuevo León": "Mexico", "Estado de México": "Mexico",
    "Baja California": "Mexico", "Yucatán": "Mexico", "Quintana Roo": "Mexico",
    "Sonora": "Mexico", "Veracruz": "Mexico", "Guanajuato": "Mexico",
    # Peru / Chile / Ecuador
    "Región Metropolitana": "Chile", "Pichincha": "Ecuador", "Guayas": "Ecuador",
    # United States
    "Alabama": UNITED_STATES, "Alaska": UNITED_STATES, "Arizona": UNITED_STATES,
    "Arkansas": UNITED_STATES, "California": UNITED_STATES, "Colorado": UNITED_STATES,
    "Connecticut": UNITED_STATES, "Delaware": UNITED_STATES, "Florida": UNITED_STATES,
    "Hawaii": UNITED_STATES, "Idaho": UNITED_STATES, "Illinois": UNITED_STATES,
    "Indiana": UNITED_STATES, "Iowa": UNITED_STATES, "Kansas": UNITED_STATES,
    "Kentucky": UNITED_STATES, "Louisiana": UNITED_STATES, "Maine": UNITED_STATES,
    "Maryland": UNITED_STATES, "Massachusetts": UNITED_STATES, "Michigan": UNITED_STATES,
    "Minnesota": UNITED_STATES, "Mississippi": UNITED_STATES, "Missouri": UNITED_STATES,
    "Montana": UNITED_STATES, "Nebraska": UNITED_STATES, "Nevada": UNITED_STATES,
    "New Hampshire": UNITED_STATES, "New Jersey": UNITED_STATES, "New Mexico": UNITED_STATES,
    "New York": UNITED_STATES, "North Carolina": UNITED_STATES, "North Dakota": UNITED_STATES,
    "Ohio": UNITED_STATES, "Oklahoma": UNITED_STATES, "Oregon": UNITED_STATES,
    "Pennsylvania": UNITED_STATES, "Rhode Island": UNITED_STATES, "South Carolina": UNITED_STATES,
    "South Dakota": UNITED_STATES, "Tennessee": UNITED_STATES, "Texas": UNITED_STATES,
    "Utah": UNITED_STATES, "Vermont": UNITED_STATES, "Virginia": UNITED_STATES,
    "Washington": UNITED_STATES, "West Virginia": UNITED_STATES, "Wisconsin": UNITED_STATES,
    "Wyoming": UNITED_STATES,
    "CA": UNITED_STATES, "NY": UNITED_STATES, "TX": UNITED_STATES, "FL": UNITED_STATES,
    "WA": UNITED_STATES, "MA": UNITED_STATES, "IL": UNITED_STATES, "NJ": UNITED_STATES,
    "CO": UNITED_STATES, "GA": UNITED_STATES, "NC": UNITED_STATES, "PA": UNITED_STATES,
    "OR": UNITED_STATES, "VA": UNITED_STATES, "AZ": UNITED_STATES, "DC": UNITED_STATES,
    # Canada
    "Ontario": "Canada", "Quebec": "Canada", "Québec": "Canada", "British Columbia": "Canada",
    "Alberta": "Canada", "Manitoba": "Canada", "Saskatchewan": "Canada", "Nova Scotia": "Canada",
    "ON": "Canada", "QC": "Canada", "BC": "Canada", "AB": "Canada",
    # Europe / APAC
    "Catalonia": "Spain", "Cataluña": "Spain", "Andalusia": "Spain", "Bavaria": "Germany",
    "Île-de-France": "France", "Lombardy": "Italy", "North Holland": "Netherlands",
    "Maharashtra": "India", "Karnataka": "India", "Telangana": "India", "Tamil Nadu": "India",
    "Punjab": "Pakistan", "Sindh": "Pakistan", "New South Wales": "Australia",
    "Victoria": "Australia", "Queensland": "Australia",
}


def _compile_names(names: Iterable[str]) -> List[Tuple[str, "re.Pattern[str]"]]:
    """Whole-word patterns over folded names, longest first so 'New York City' beats 'York'."""
    folded = sorted({fold(n) for n in names}, key=len, reverse=True)
    return [(n, re.compile(r"(?<!\w)" + re.escape(n) + r"(?!\w)")) for n in folded]


class Gazetteer:
    """
    Lookup of place names to countries.

    Pluggable: location normalization takes any object with this interface,
    so the static table can be swapped for a better resolver later.
    """

    def __init__(
        self,
        cities: Dict[str, str],
        regions: Dict[str, str],
        countries: Iterable[str],
        aliases: Dict[str, str],
    ) -> None:
        self._cities = {fold(k): v for k, v in cities.items()}
        self._regions = {fold(k): v for k, v in regions.items()}
        self._countries = {fold(c): c for c in countries}
        self._aliases = {fold(k): v for k, v in aliases.items()}
        self._city_patterns = _compile_names(cities)
        self._region_patterns = _compile_names(regions)

    def canonical_country(self, name: str) -> str:
        """'USA' -> 'United States'; known countries get canonical spelling; others unchanged."""
        key = fold(name)
        if key in self._aliases:
            return self._aliases[key]
        return self._countries.get(key, collapse_whitespace(name))

    def is_country(self, name: str) -> bool:
        key = fold(name)
        return key in self._countries or key in self._aliases

    def is_region(self, name: str) -> bool:
        return fold(name) in self._regions

    def city_country(self, name: str) -> Optional[str]:
        """Country for an exact city name, or None."""
        return self._cities.get(fold(name))

    def region_country(self, name: str) -> Optional[str]:
        """Country for an exact state/province name or code, or None."""
        return self._regions.get(fold(name))

    def find_country(self, text: str) -> Optional[str]:
        """Country of the longest known city, else region, mentioned anywhere in text."""
        folded = fold(text)
        for name, pattern in self._city_patterns:
            if pattern.search(folded):
                return self._cities[name]
        for name, pattern in self._region_patterns:
            # Short codes like "CA" / "SP" only count as a whole comma part
            if len(name) <= 3:
                continue
            if pattern.search(folded):
                return self._regions[name]
        return None


DEFAULT_GAZETTEER = Gazetteer(CITIES, REGIONS, COUNTRIES, COUNTRY_ALIASES)
