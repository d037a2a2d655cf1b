"""Multiplier tables and multiplier composition for ceremony pricing"""

import logging
import math
from types import MappingProxyType
from typing import Mapping, Optional, Union

from viah_budget.config import settings
from viah_budget.domain.models import GuestBracket, VendorTier, VenueClass

logger = logging.getLogger(__name__)

VENUE_CLASS_MULTIPLIERS: Mapping[VenueClass, float] = MappingProxyType({
    VenueClass.HOME: 0.6,
    VenueClass.COMMUNITY_HALL: 0.85,
    VenueClass.BANQUET_HALL: 0.95,
    VenueClass.HOTEL_BALLROOM: 1.0,
    VenueClass.LUXURY_HOTEL: 1.25,
})

VENDOR_TIER_MULTIPLIERS: Mapping[VendorTier, float] = MappingProxyType({
    VendorTier.BUDGET: 0.65,
    VendorTier.STANDARD: 0.85,
    VendorTier.PREMIUM: 1.0,
    VendorTier.LUXURY: 1.2,
})

GUEST_BRACKET_MULTIPLIERS: Mapping[GuestBracket, float] = MappingProxyType({
    GuestBracket.UNDER_100: 0.9,
    GuestBracket.FROM_100_TO_200: 0.95,
    GuestBracket.FROM_200_TO_300: 1.0,
    GuestBracket.OVER_300: 1.05,
})

CITY_MULTIPLIERS: Mapping[str, float] = MappingProxyType({
    "bay_area": 1.5,
    "nyc": 1.4,
    "la": 1.3,
    "chicago": 1.2,
    "seattle": 1.1,
    "other": 1.0,
})

VENUE_CLASS_LABELS: Mapping[VenueClass, str] = MappingProxyType({
    VenueClass.HOME: "Home / Backyard",
    VenueClass.COMMUNITY_HALL: "Community Hall / Temple",
    VenueClass.BANQUET_HALL: "Banquet Hall",
    VenueClass.HOTEL_BALLROOM: "Hotel Ballroom",
    VenueClass.LUXURY_HOTEL: "Luxury Hotel / Resort",
})

VENDOR_TIER_LABELS: Mapping[VendorTier, str] = MappingProxyType({
    VendorTier.BUDGET: "Budget-Friendly",
    VendorTier.STANDARD: "Standard",
    VendorTier.PREMIUM: "Premium",
    VendorTier.LUXURY: "Luxury",
})

GUEST_BRACKET_LABELS: Mapping[GuestBracket, str] = MappingProxyType({
    GuestBracket.UNDER_100: "Under 100 guests",
    GuestBracket.FROM_100_TO_200: "100-200 guests",
    GuestBracket.FROM_200_TO_300: "200-300 guests",
    GuestBracket.OVER_300: "300+ guests",
})

CITY_LABELS: Mapping[str, str] = MappingProxyType({
    "bay_area": "San Francisco Bay Area",
    "nyc": "New York City",
    "la": "Los Angeles",
    "chicago": "Chicago",
    "seattle": "Seattle",
    "other": "Other",
})

# Checked in order; first keyword found in the location wins
CITY_LOCATION_KEYWORDS = (
    ("bay_area", ("bay area", "san francisco", "san jose", "oakland")),
    ("nyc", ("new york", "nyc")),
    ("la", ("los angeles",)),
    ("chicago", ("chicago",)),
    ("seattle", ("seattle",)),
)


def round_currency(amount: float) -> int:
    """Round half-up to a whole currency unit.

    Every call site rounds through this helper so the estimator, dashboard and
    breakdown figures agree to the dollar. Python's round() is banker's rounding
    and would disagree on .5 values.
    """
    return int(math.floor(amount + 0.5))


def get_guest_bracket(guest_count: int) -> GuestBracket:
    """Map a guest count to its scale bracket"""
    if guest_count < 100:
        return GuestBracket.UNDER_100
    elif guest_count < 200:
        return GuestBracket.FROM_100_TO_200
    elif guest_count < 300:
        return GuestBracket.FROM_200_TO_300
    else:
        return GuestBracket.OVER_300


def normalize_city(city: Optional[str]) -> Optional[str]:
    """Turn 'Bay Area' / 'bay-area' into the 'bay_area' slug"""
    if not city:
        return None
    slug = city.strip().lower().replace("-", " ")
    return "_".join(slug.split()) or None


def detect_city(location: Optional[str]) -> str:
    """Best-effort city slug from a free-text wedding location"""
    text = (location or "").lower()
    for slug, keywords in CITY_LOCATION_KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return slug
    return "other"


def resolve_venue_class(value: Union[VenueClass, str, None]) -> VenueClass:
    """Coerce a venue selection, falling back to the configured default"""
    if isinstance(value, VenueClass):
        return value
    try:
        return VenueClass(value)
    except ValueError:
        if value is not None:
            logger.warning("Unknown venue class %r, using default", value)
        return VenueClass(settings.default_venue_class)


def resolve_vendor_tier(value: Union[VendorTier, str, None]) -> VendorTier:
    """Coerce a vendor selection, falling back to the configured default"""
    if isinstance(value, VendorTier):
        return value
    try:
        return VendorTier(value)
    except ValueError:
        if value is not None:
            logger.warning("Unknown vendor tier %r, using default", value)
        return VendorTier(settings.default_vendor_tier)


def city_multiplier(city: Optional[str]) -> float:
    """City cost-of-living multiplier; unknown cities are neutral"""
    slug = normalize_city(city)
    if slug is None:
        return 1.0
    return CITY_MULTIPLIERS.get(slug, 1.0)


def calculate_pricing_multiplier(
    venue_class: Union[VenueClass, str, None],
    vendor_tier: Union[VendorTier, str, None],
    guest_count: int,
    city: Optional[str] = None,
) -> float:
    """
    Compose the four independent multipliers into one factor.

    Composed multiplier = venue × vendor × city × guest bracket. Each table is
    total over its keys and every value is > 0, so the product is always > 0.
    """
    venue = VENUE_CLASS_MULTIPLIERS[resolve_venue_class(venue_class)]
    vendor = VENDOR_TIER_MULTIPLIERS[resolve_vendor_tier(vendor_tier)]
    bracket = GUEST_BRACKET_MULTIPLIERS[get_guest_bracket(guest_count)]
    return venue * vendor * city_multiplier(city) * bracket


def describe_multiplier(multiplier: float) -> str:
    """Human-readable savings/premium label for a selector option"""
    if multiplier == 1.0:
        return "Base price"
    percent = round_currency((1 - multiplier) * 100)
    return f"{percent}% savings" if percent > 0 else f"{abs(percent)}% premium"
