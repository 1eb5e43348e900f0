"""
Geographic normalization for location matching.

Resolves free-text locations ("Milano", "Milano, Lombardia", "provincia di
Bari") to a coarse Italian region so that a seller in one city can match a
target posted from another city of the same region.

This is a heuristic, not a gazetteer: only the best-known cities are mapped.
Anything unrecognised falls back to its own normalized string, which keeps the
lookup offline and deterministic.
"""

from types import MappingProxyType


# Checked in insertion order; the first city contained in the input wins.
CITY_REGION_MAP = MappingProxyType({
    'milano': 'Lombardia',
    'roma': 'Lazio',
    'napoli': 'Campania',
    'torino': 'Piemonte',
    'palermo': 'Sicilia',
    'genova': 'Liguria',
    'bologna': 'Emilia-Romagna',
    'firenze': 'Toscana',
    'bari': 'Puglia',
    'venezia': 'Veneto',
    'verona': 'Veneto',
    'padova': 'Veneto',
})

REGIONS = (
    'Lombardia',
    'Lazio',
    'Campania',
    'Piemonte',
    'Sicilia',
    'Liguria',
    'Emilia-Romagna',
    'Toscana',
    'Puglia',
    'Veneto',
    'Calabria',
    'Sardegna',
    'Abruzzo',
)


def normalize_location(location: str | None) -> str:
    """Lower-case and trim a location string (None becomes '')."""
    return (location or '').lower().strip()


def region_of(location: str | None) -> str:
    """
    Resolve a location to a canonical region name.

    Returns the region for a known city, else the region named inside the
    string, else the normalized input itself.  Never raises.
    """
    loc = normalize_location(location)

    for city, region in CITY_REGION_MAP.items():
        if city in loc:
            return region

    for region in REGIONS:
        if region.lower() in loc:
            return region

    return loc


def regions_match(loc_a: str | None, loc_b: str | None) -> bool:
    """True when both locations are non-empty and resolve to the same region."""
    if not normalize_location(loc_a) or not normalize_location(loc_b):
        return False
    return region_of(loc_a) == region_of(loc_b)


def locations_overlap(loc_a: str | None, loc_b: str | None) -> bool:
    """
    Loose locality test: one normalized location contains the other.

    Short or generic names produce false positives ("Ala" is inside
    "Alassio"); callers accept that in exchange for matching strings like
    "Milano" against "Milano centro".
    """
    norm_a = normalize_location(loc_a)
    norm_b = normalize_location(loc_b)
    if not norm_a or not norm_b:
        return False
    return norm_a in norm_b or norm_b in norm_a
