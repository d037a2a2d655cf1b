"""GET /v1/pricing/options - selector options with their multipliers"""

from typing import Mapping
from fastapi import APIRouter

from viah_budget.api.v1.schemas import PricingOptionSchema, PricingOptionsResponse
from viah_budget.domain.pricing import (
    CITY_LABELS,
    CITY_MULTIPLIERS,
    GUEST_BRACKET_LABELS,
    GUEST_BRACKET_MULTIPLIERS,
    VENDOR_TIER_LABELS,
    VENDOR_TIER_MULTIPLIERS,
    VENUE_CLASS_LABELS,
    VENUE_CLASS_MULTIPLIERS,
    describe_multiplier,
)

router = APIRouter()


def _options(multipliers: Mapping, labels: Mapping) -> list[PricingOptionSchema]:
    options = []
    for key, multiplier in multipliers.items():
        value = getattr(key, "value", key)
        options.append(
            PricingOptionSchema(
                value=value,
                label=labels[key],
                multiplier=multiplier,
                description=describe_multiplier(multiplier),
            )
        )
    return options


@router.get("/pricing/options", response_model=PricingOptionsResponse)
def list_pricing_options():
    """Venue, vendor, guest bracket and city options with savings/premium labels"""
    return PricingOptionsResponse(
        venue_classes=_options(VENUE_CLASS_MULTIPLIERS, VENUE_CLASS_LABELS),
        vendor_tiers=_options(VENDOR_TIER_MULTIPLIERS, VENDOR_TIER_LABELS),
        guest_brackets=_options(GUEST_BRACKET_MULTIPLIERS, GUEST_BRACKET_LABELS),
        cities=_options(CITY_MULTIPLIERS, CITY_LABELS),
    )
