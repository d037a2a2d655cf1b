"""Unit tests for multiplier tables and composition"""

import pytest
from viah_budget.domain.models import GuestBracket, VendorTier, VenueClass
from viah_budget.domain.pricing import (
    CITY_MULTIPLIERS,
    GUEST_BRACKET_MULTIPLIERS,
    VENDOR_TIER_MULTIPLIERS,
    VENUE_CLASS_MULTIPLIERS,
    calculate_pricing_multiplier,
    city_multiplier,
    describe_multiplier,
    detect_city,
    get_guest_bracket,
    normalize_city,
    resolve_vendor_tier,
    resolve_venue_class,
    round_currency,
)


def test_round_currency_half_up():
    """Test .5 always rounds up, unlike Python's banker's rounding"""
    assert round_currency(0.5) == 1
    assert round_currency(2.5) == 3
    assert round_currency(1.4999) == 1
    assert round_currency(9000.0) == 9000


@pytest.mark.parametrize(
    "guests,bracket",
    [
        (0, GuestBracket.UNDER_100),
        (99, GuestBracket.UNDER_100),
        (100, GuestBracket.FROM_100_TO_200),
        (199, GuestBracket.FROM_100_TO_200),
        (200, GuestBracket.FROM_200_TO_300),
        (299, GuestBracket.FROM_200_TO_300),
        (300, GuestBracket.OVER_300),
        (1000, GuestBracket.OVER_300),
    ],
)
def test_guest_bracket_breakpoints(guests, bracket):
    assert get_guest_bracket(guests) == bracket


def test_tables_cover_every_enum_value():
    """Test every venue, vendor and bracket has a positive multiplier"""
    for venue in VenueClass:
        assert VENUE_CLASS_MULTIPLIERS[venue] > 0
    for tier in VendorTier:
        assert VENDOR_TIER_MULTIPLIERS[tier] > 0
    for bracket in GuestBracket:
        assert GUEST_BRACKET_MULTIPLIERS[bracket] > 0


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        CITY_MULTIPLIERS["austin"] = 1.1


def test_composed_multiplier_is_product_in_any_order():
    """Test venue × vendor × city × bracket is order-independent"""
    multiplier = calculate_pricing_multiplier("luxury_hotel", "luxury", 350, "bay_area")

    factors = [1.25, 1.2, 1.5, 1.05]
    assert multiplier == pytest.approx(factors[0] * factors[1] * factors[2] * factors[3])
    assert multiplier == pytest.approx(factors[3] * factors[2] * factors[1] * factors[0])
    assert multiplier == pytest.approx((factors[1] * factors[3]) * (factors[0] * factors[2]))


def test_neutral_multiplier():
    """Test hotel ballroom, premium, 200-300 guests, no city is exactly 1.0"""
    assert calculate_pricing_multiplier(VenueClass.HOTEL_BALLROOM, VendorTier.PREMIUM, 250) == 1.0


def test_unknown_city_is_neutral():
    assert city_multiplier("Austin") == 1.0
    assert city_multiplier(None) == 1.0
    assert city_multiplier("") == 1.0


def test_city_names_are_normalized():
    assert normalize_city("Bay Area") == "bay_area"
    assert normalize_city("  bay-area ") == "bay_area"
    assert city_multiplier("NYC") == 1.4


def test_detect_city_from_location():
    assert detect_city("The Ritz-Carlton, San Francisco, CA") == "bay_area"
    assert detect_city("Brooklyn, New York") == "nyc"
    assert detect_city("Austin, TX") == "other"
    assert detect_city(None) == "other"


def test_unknown_selections_fall_back_to_defaults():
    """Test unknown venue/vendor resolve to the configured defaults instead of raising"""
    assert resolve_venue_class("castle") == VenueClass.COMMUNITY_HALL
    assert resolve_venue_class(None) == VenueClass.COMMUNITY_HALL
    assert resolve_vendor_tier("diamond") == VendorTier.STANDARD
    assert resolve_vendor_tier("luxury") == VendorTier.LUXURY


def test_describe_multiplier():
    assert describe_multiplier(1.0) == "Base price"
    assert describe_multiplier(0.85) == "15% savings"
    assert describe_multiplier(1.25) == "25% premium"
