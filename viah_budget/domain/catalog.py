"""Static ceremony template catalog and the event-name keyword table"""

from types import MappingProxyType
from typing import Iterable, List, Mapping, Tuple

from viah_budget.domain.models import Catalog, CeremonyTemplate, CostUnit, LineItem

FIXED = CostUnit.FIXED
PER_PERSON = CostUnit.PER_PERSON
PER_HOUR = CostUnit.PER_HOUR

# (ceremony_id, keywords). Order is significant: resolution is first-match-wins,
# so reordering silently changes which template an ambiguous name resolves to.
CEREMONY_KEYWORDS: Tuple[Tuple[str, Tuple[str, ...]], ...] = (
    ("sikh_roka", ("roka",)),
    ("sikh_chunni_chadana", ("chunni chadana", "chunni")),
    ("sikh_paath", ("akhand paath", "sehaj paath", "paath")),
    ("sikh_bakra_party", ("bakra party", "bakra")),
    ("sikh_mayian", ("mayian", "maiyan", "choora", "vatna")),
    ("sikh_anand_karaj", ("anand karaj", "anand_karaj")),
    ("sikh_day_after", ("day after visit", "day after")),
    ("hindu_mehndi", ("mehndi", "henna")),
    ("hindu_sangeet", ("lady sangeet", "sangeet")),
    ("hindu_haldi", ("haldi",)),
    ("hindu_baraat", ("baraat",)),
    ("hindu_wedding", ("hindu wedding", "wedding ceremony")),
    ("muslim_nikah", ("nikah",)),
    ("muslim_walima", ("walima",)),
    ("muslim_dholki", ("dholki",)),
    ("gujarati_pithi", ("pithi",)),
    ("gujarati_garba", ("garba",)),
    ("gujarati_grahshanti", ("grahshanti",)),
    ("gujarati_wedding", ("gujarati wedding",)),
    ("south_indian_vidhi_mandap", ("vidhi mandap",)),
    ("south_indian_muhurtham", ("muhurtham",)),
    ("general_wedding", ("general wedding", "western wedding")),
    ("rehearsal_dinner", ("rehearsal dinner", "rehearsal")),
    ("cocktail_hour", ("cocktail hour",)),
)

# Reserved id used when a name mentions a reception but no keyword matched
RECEPTION_ID = "reception"

DEFAULT_CEREMONIES_BY_TRADITION: Mapping[str, Tuple[str, ...]] = MappingProxyType({
    "hindu": ("hindu_wedding", "reception"),
    "sikh": ("sikh_anand_karaj", "reception"),
    "muslim": ("muslim_nikah", "muslim_walima"),
    "gujarati": ("gujarati_wedding", "reception"),
    "south_indian": ("south_indian_muhurtham", "reception"),
    "mixed": ("general_wedding", "reception"),
    "general": ("general_wedding", "reception"),
})


def _template(id, name, tradition, guests, items, description=""):
    return CeremonyTemplate(
        id=id,
        name=name,
        tradition=tradition,
        default_guest_count=guests,
        line_items=tuple(items),
        description=description,
    )


CEREMONY_TEMPLATES: Tuple[CeremonyTemplate, ...] = (
    # Sikh
    _template("sikh_roka", "Roka", "sikh", 50, [
        LineItem("Catering", PER_PERSON, 25, 45),
        LineItem("Decor", FIXED, 500, 1500),
        LineItem("Gifts & Shagun", FIXED, 500, 2000, notes="Exchanged between families"),
        LineItem("Photography", PER_HOUR, 150, 300, hours_low=2, hours_high=3),
    ], "Formal acceptance of the match between families"),
    _template("sikh_chunni_chadana", "Chunni Chadana", "sikh", 60, [
        LineItem("Catering", PER_PERSON, 25, 50),
        LineItem("Chunni & Jewelry", FIXED, 800, 3000),
        LineItem("Decor", FIXED, 500, 1500),
        LineItem("Photography", PER_HOUR, 150, 300),
    ]),
    _template("sikh_paath", "Paath", "sikh", 80, [
        LineItem("Langar", PER_PERSON, 10, 20, notes="Community meal at the Gurdwara"),
        LineItem("Gurdwara Donation", FIXED, 500, 1500),
        LineItem("Ragi Jatha", FIXED, 300, 800),
    ]),
    _template("sikh_bakra_party", "Bakra Party", "sikh", 75, [
        LineItem("Catering", PER_PERSON, 30, 55),
        LineItem("Bar", PER_PERSON, 15, 35),
        LineItem("DJ", PER_HOUR, 150, 300, hours_low=4, hours_high=5),
        LineItem("Tent & Rentals", FIXED, 800, 2500),
    ]),
    _template("sikh_mayian", "Mayian", "sikh", 60, [
        LineItem("Catering", PER_PERSON, 20, 40),
        LineItem("Decor", FIXED, 400, 1200),
        LineItem("Dhol Player", PER_HOUR, 150, 250, hours_low=2, hours_high=3),
        LineItem("Photography", PER_HOUR, 150, 300),
    ]),
    _template("sikh_anand_karaj", "Anand Karaj", "sikh", 200, [
        LineItem("Langar", PER_PERSON, 12, 25),
        LineItem("Gurdwara Donation", FIXED, 1000, 3000),
        LineItem("Ragi Jatha", FIXED, 500, 1200),
        LineItem("Floral Decor", FIXED, 1000, 4000),
        LineItem("Photography & Video", PER_HOUR, 250, 500),
    ], "Sikh wedding ceremony at the Gurdwara"),
    _template("sikh_day_after", "Day After Visit", "sikh", 30, [
        LineItem("Catering", PER_PERSON, 20, 40),
        LineItem("Gifts", FIXED, 300, 1000),
    ]),
    # Hindu
    _template("hindu_mehndi", "Mehndi", "hindu", 100, [
        LineItem("Catering", PER_PERSON, 30, 60),
        LineItem("Mehndi Artists", PER_HOUR, 100, 200, hours_low=4, hours_high=6),
        LineItem("Decor", FIXED, 1000, 4000),
        LineItem("DJ / Music", PER_HOUR, 150, 300),
        LineItem("Photography", PER_HOUR, 150, 300),
    ], "Henna application ceremony for the bride"),
    _template("hindu_sangeet", "Sangeet", "hindu", 150, [
        LineItem("Catering", PER_PERSON, 45, 85),
        LineItem("Bar", PER_PERSON, 15, 35),
        LineItem("Venue Rental", FIXED, 2000, 8000),
        LineItem("DJ & Lighting", PER_HOUR, 200, 450, hours_low=4, hours_high=5),
        LineItem("Choreographer", FIXED, 800, 3000),
        LineItem("Photography & Video", PER_HOUR, 250, 500),
    ], "Musical night with performances and dancing"),
    _template("hindu_haldi", "Haldi", "hindu", 75, [
        LineItem("Catering", PER_PERSON, 20, 40),
        LineItem("Marigold Decor", FIXED, 500, 2000),
        LineItem("Haldi Supplies", FIXED, 100, 300),
        LineItem("Photography", PER_HOUR, 150, 300, hours_low=2, hours_high=3),
    ], "Turmeric application ceremony for bride and groom"),
    _template("hindu_baraat", "Baraat", "hindu", 100, [
        LineItem("Horse / Vintage Car", FIXED, 800, 2500),
        LineItem("Dhol Players", PER_HOUR, 200, 400, hours_low=1, hours_high=2),
        LineItem("Mobile DJ", FIXED, 500, 1500),
        LineItem("Safas & Turbans", PER_PERSON, 5, 12),
    ], "Groom's procession with music and dancing"),
    _template("hindu_wedding", "Wedding Ceremony", "hindu", 200, [
        LineItem("Catering", PER_PERSON, 50, 95),
        LineItem("Venue Rental", FIXED, 3000, 12000),
        LineItem("Mandap & Decor", FIXED, 3000, 12000),
        LineItem("Pandit", FIXED, 500, 1500),
        LineItem("Photography & Video", PER_HOUR, 300, 600, hours_low=5, hours_high=8),
        LineItem("Bridal Hair & Makeup", FIXED, 500, 2000),
    ], "Main Hindu wedding ceremony with pheras around the sacred fire"),
    _template("reception", "Reception", "general", 300, [
        LineItem("Catering", PER_PERSON, 60, 120),
        LineItem("Bar", PER_PERSON, 20, 45),
        LineItem("Venue Rental", FIXED, 4000, 15000),
        LineItem("Decor & Florals", FIXED, 3000, 12000),
        LineItem("DJ & Lighting", PER_HOUR, 250, 500, hours_low=4, hours_high=6),
        LineItem("Photography & Video", PER_HOUR, 300, 600),
        LineItem("Wedding Cake", FIXED, 400, 1500),
    ], "Post-wedding celebration with dinner and dancing"),
    # Muslim
    _template("muslim_nikah", "Nikah", "muslim", 150, [
        LineItem("Catering", PER_PERSON, 40, 80),
        LineItem("Venue Rental", FIXED, 1500, 6000),
        LineItem("Imam / Officiant", FIXED, 300, 800),
        LineItem("Stage Decor", FIXED, 1500, 5000),
        LineItem("Photography", PER_HOUR, 200, 400),
    ], "Islamic wedding ceremony"),
    _template("muslim_walima", "Walima", "muslim", 250, [
        LineItem("Catering", PER_PERSON, 50, 95),
        LineItem("Venue Rental", FIXED, 3000, 10000),
        LineItem("Decor", FIXED, 2000, 8000),
        LineItem("Photography & Video", PER_HOUR, 250, 500),
    ], "Wedding banquet hosted by the groom's family"),
    _template("muslim_dholki", "Dholki", "muslim", 80, [
        LineItem("Catering", PER_PERSON, 25, 50),
        LineItem("Decor", FIXED, 400, 1500),
        LineItem("Dholki Players", PER_HOUR, 100, 250),
    ], "Pre-wedding music and dance celebration"),
    # Gujarati
    _template("gujarati_pithi", "Pithi", "gujarati", 75, [
        LineItem("Catering", PER_PERSON, 20, 40),
        LineItem("Decor", FIXED, 500, 1800),
        LineItem("Photography", PER_HOUR, 150, 300, hours_low=2, hours_high=3),
    ], "Turmeric ceremony for Gujarati weddings"),
    _template("gujarati_garba", "Garba", "gujarati", 200, [
        LineItem("Catering", PER_PERSON, 30, 60),
        LineItem("Venue Rental", FIXED, 1500, 6000),
        LineItem("Live Garba Band", PER_HOUR, 300, 600, hours_low=3, hours_high=4),
        LineItem("Dandiya Sticks & Favors", PER_PERSON, 2, 5),
    ], "Traditional Gujarati dance celebration"),
    _template("gujarati_grahshanti", "Grahshanti", "gujarati", 50, [
        LineItem("Priest & Puja Samagri", FIXED, 400, 1200),
        LineItem("Catering", PER_PERSON, 20, 35),
    ]),
    _template("gujarati_wedding", "Wedding Ceremony", "gujarati", 200, [
        LineItem("Catering", PER_PERSON, 45, 90),
        LineItem("Venue Rental", FIXED, 3000, 12000),
        LineItem("Mandap & Decor", FIXED, 3000, 10000),
        LineItem("Priest", FIXED, 500, 1500),
        LineItem("Photography & Video", PER_HOUR, 300, 600, hours_low=5, hours_high=8),
    ], "Main Gujarati wedding ceremony"),
    # South Indian
    _template("south_indian_vidhi_mandap", "Vidhi Mandap", "south_indian", 40, [
        LineItem("Priest & Puja Samagri", FIXED, 500, 1500),
        LineItem("Catering", PER_PERSON, 20, 35),
    ]),
    _template("south_indian_muhurtham", "Muhurtham", "south_indian", 150, [
        LineItem("Banana Leaf Catering", PER_PERSON, 35, 70),
        LineItem("Venue Rental", FIXED, 2000, 8000),
        LineItem("Nadaswaram Ensemble", FIXED, 800, 2500),
        LineItem("Floral Decor", FIXED, 2000, 7000),
        LineItem("Photography & Video", PER_HOUR, 250, 500),
    ], "South Indian wedding ceremony"),
    # General / Western
    _template("general_wedding", "Wedding Ceremony", "general", 200, [
        LineItem("Catering", PER_PERSON, 50, 95),
        LineItem("Venue Rental", FIXED, 3000, 12000),
        LineItem("Officiant", FIXED, 300, 1000),
        LineItem("Florals", FIXED, 1500, 6000),
        LineItem("Photography & Video", PER_HOUR, 300, 600, hours_low=5, hours_high=8),
    ], "Main wedding ceremony"),
    _template("rehearsal_dinner", "Rehearsal Dinner", "general", 50, [
        LineItem("Dinner", PER_PERSON, 45, 90),
        LineItem("Bar", PER_PERSON, 15, 35),
        LineItem("Private Room", FIXED, 300, 1500),
    ], "Pre-wedding dinner for wedding party and close family"),
    _template("cocktail_hour", "Cocktail Hour", "general", 150, [
        LineItem("Appetizers", PER_PERSON, 15, 35),
        LineItem("Bar", PER_PERSON, 15, 35),
        LineItem("Live Music", PER_HOUR, 200, 400, hours_low=1, hours_high=2),
    ], "Pre-reception drinks and appetizers"),
)


def build_catalog(templates: Iterable[CeremonyTemplate]) -> Catalog:
    """Freeze templates into an immutable id -> template snapshot"""
    return Catalog(templates=MappingProxyType({t.id: t for t in templates}))


DEFAULT_CATALOG = build_catalog(CEREMONY_TEMPLATES)


def templates_for_tradition(catalog: Catalog, tradition: str) -> List[CeremonyTemplate]:
    """Templates for one tradition; reception is shared by every tradition"""
    return [
        t for t in catalog.templates.values()
        if t.tradition == tradition or t.id == RECEPTION_ID
    ]


def default_ceremonies_for_tradition(tradition: str) -> Tuple[str, ...]:
    return DEFAULT_CEREMONIES_BY_TRADITION.get(
        tradition, DEFAULT_CEREMONIES_BY_TRADITION["general"]
    )
