"""
Category ↔ business sector normalization.

Buyer targets carry a free-text ``category`` and sellers declare a free-text
``primary_sector``.  The two vocabularies overlap but are not identical, so a
static many-to-one mapping bridges the known category labels to the sector
labels sellers pick from.

Categories missing from the mapping (user-suggested ones that are not yet
approved, for example) only ever match a sector that is spelled exactly the
same way.
"""

from types import MappingProxyType


# Sectors a seller can declare on their profile.
BUSINESS_SECTORS = (
    'Elettronica e Tecnologia',
    'Moda e Abbigliamento',
    'Casa e Arredamento',
    'Sport e Fitness',
    'Auto e Moto',
    'Servizi Professionali',
    'Immobiliare',
    'Ristorazione e Food',
    'Bellezza e Benessere',
    'Altro',
)

# Target category -> canonical sector labels it is compatible with.
CATEGORY_SECTOR_MAP = MappingProxyType({
    'Elettronica': ('Elettronica e Tecnologia',),
    'Moda e Abbigliamento': ('Moda e Abbigliamento',),
    'Casa e Giardino': ('Casa e Arredamento',),
    'Casa e Arredamento': ('Casa e Arredamento',),
    'Sport e Tempo Libero': ('Sport e Fitness',),
    'Auto e Moto': ('Auto e Moto',),
    'Servizi Professionali': ('Servizi Professionali',),
    'Immobiliare': ('Immobiliare',),
    'Lavoro': ('Servizi Professionali',),
    'Ristorazione e Food': ('Ristorazione e Food',),
    'Bellezza e Benessere': ('Bellezza e Benessere',),
    'Altro': ('Altro',),
})


def sectors_for_category(category: str | None) -> tuple[str, ...]:
    """Return the sector labels mapped to ``category`` (empty if unknown)."""
    if not category:
        return ()
    return CATEGORY_SECTOR_MAP.get(category, ())


def sector_matches(category: str | None, sector: str | None) -> bool:
    """
    Decide whether a target category is compatible with a seller's sector.

    A seller without a declared sector never gets category credit.  Exact
    equality always matches; otherwise the category is looked up in
    CATEGORY_SECTOR_MAP and the seller's sector matches when it contains, or
    is contained by, one of the mapped sectors (case-insensitive).
    """
    if not sector:
        return False

    if category == sector:
        return True

    sector_lower = sector.lower()
    return any(
        mapped.lower() in sector_lower or sector_lower in mapped.lower()
        for mapped in sectors_for_category(category)
    )
