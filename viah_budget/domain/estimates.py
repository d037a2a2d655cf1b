"""
Event cost aggregator - the line-item cost model.

Used by the interactive estimator (estimate_wedding) and the dashboard
ceremony breakdown (domain.dashboard). Both call calculate_event_cost, so their
figures agree to the dollar. The scenario planner does not use this model;
see domain.scenarios.
"""

import math
from typing import Iterable, List, Optional, Tuple, Union

from viah_budget.config import settings
from viah_budget.domain.line_items import calculate_line_item_cost
from viah_budget.domain.models import (
    Catalog,
    EstimateSelections,
    Event,
    EventCost,
    EventEstimate,
    EventOverride,
    VendorTier,
    VenueClass,
    WeddingEstimate,
)
from viah_budget.domain.pricing import (
    calculate_pricing_multiplier,
    resolve_vendor_tier,
    resolve_venue_class,
    round_currency,
)
from viah_budget.domain.resolver import resolve_ceremony


def guest_bounds(original_guests: int) -> Tuple[int, int]:
    """
    Slider bounds for an event's guest count.

    min = max(floor, 30% of original)
    max = max(min + 50, original, 150% of original)
    """
    min_guests = max(settings.min_guest_floor, math.floor(original_guests * 0.3))
    max_guests = max(min_guests + 50, original_guests, math.ceil(original_guests * 1.5))
    return min_guests, max_guests


def clamp_guests(guests: int, min_guests: int, max_guests: int) -> int:
    return max(min_guests, min(guests, max_guests))


def calculate_event_cost(
    catalog: Catalog,
    event_name: str,
    guest_count: int,
    venue_class: Union[VenueClass, str, None],
    vendor_tier: Union[VendorTier, str, None],
    city: Optional[str] = None,
    event_type: Optional[str] = None,
    ceremony_id: Optional[str] = None,
) -> EventCost:
    """
    Low/high cost for one event.

    Steps:
    1. Compose venue × vendor × city × guest bracket multiplier
    2. Resolve the event to a ceremony template and sum its line items
    3. No template, or a template without line items: generic estimate of
       $50-$100 per guest scaled by the multiplier

    Never raises on missing reference data. Guest counts <= 0 are clamped to the
    configured floor before use.
    """
    guests = guest_count if guest_count > 0 else settings.min_guest_floor
    multiplier = calculate_pricing_multiplier(venue_class, vendor_tier, guests, city)

    resolved_id = resolve_ceremony(catalog, event_name, event_type, ceremony_id)
    template = catalog.get(resolved_id)

    if template is not None and template.line_items:
        breakdown = [
            calculate_line_item_cost(item, guests, multiplier)
            for item in template.line_items
        ]
        return EventCost(
            low=sum(cost.low for cost in breakdown),
            high=sum(cost.high for cost in breakdown),
            has_breakdown=True,
            breakdown=breakdown,
            ceremony_id=resolved_id,
            multiplier=multiplier,
        )

    return EventCost(
        low=round_currency(settings.fallback_cost_per_guest_low * guests * multiplier),
        high=round_currency(settings.fallback_cost_per_guest_high * guests * multiplier),
        has_breakdown=False,
        breakdown=None,
        ceremony_id=resolved_id,
        multiplier=multiplier,
    )


def original_guest_count(event: Event, catalog: Catalog) -> int:
    """Event guest count, else the template default, else the configured default"""
    if event.guest_count and event.guest_count > 0:
        return event.guest_count
    template = catalog.get(resolve_ceremony(catalog, event.name, event.type, event.ceremony_id))
    if template is not None and template.default_guest_count > 0:
        return template.default_guest_count
    return settings.default_original_guests


def build_event_estimate(
    event: Event,
    catalog: Catalog,
    selections: EstimateSelections,
    override: Optional[EventOverride] = None,
) -> EventEstimate:
    """Recompute one event's estimate from scratch for the current inputs"""
    override = override or EventOverride()
    venue_class = resolve_venue_class(override.venue_class or selections.venue_class)
    vendor_tier = resolve_vendor_tier(override.vendor_tier or selections.vendor_tier)

    original = original_guest_count(event, catalog)
    min_guests, max_guests = guest_bounds(original)
    requested = override.guests if override.guests is not None else original
    current = clamp_guests(requested, min_guests, max_guests)

    def cost_for(guests: int) -> EventCost:
        return calculate_event_cost(
            catalog,
            event.name,
            guests,
            venue_class,
            vendor_tier,
            city=selections.city,
            event_type=event.type,
            ceremony_id=event.ceremony_id,
        )

    current_cost = cost_for(current)
    original_cost = current_cost if current == original else cost_for(original)

    return EventEstimate(
        event_id=event.id,
        name=event.name,
        original_guests=original,
        current_guests=current,
        min_guests=min_guests,
        max_guests=max_guests,
        venue_class=venue_class,
        vendor_tier=vendor_tier,
        ceremony_id=current_cost.ceremony_id,
        breakdown=current_cost.breakdown,
        cost_low=current_cost.low,
        cost_high=current_cost.high,
        original_cost_low=original_cost.low,
        original_cost_high=original_cost.high,
    )


def estimate_wedding(
    events: Iterable[Event],
    catalog: Catalog,
    selections: Optional[EstimateSelections] = None,
) -> WeddingEstimate:
    """
    Wedding-level estimate across all events.

    Every event is recomputed in full on each call; nothing is carried over
    from a previous estimate.

    Returns:
        Current and original totals, savings from guest-count changes
        (difference of range midpoints) and the suggested budget, which is the
        rounded midpoint of the current range.
    """
    selections = selections or EstimateSelections()
    estimates: List[EventEstimate] = [
        build_event_estimate(event, catalog, selections, selections.overrides.get(event.id))
        for event in events
    ]

    current_low = sum(e.cost_low for e in estimates)
    current_high = sum(e.cost_high for e in estimates)
    original_low = sum(e.original_cost_low for e in estimates)
    original_high = sum(e.original_cost_high for e in estimates)

    return WeddingEstimate(
        events=estimates,
        current_low=current_low,
        current_high=current_high,
        original_low=original_low,
        original_high=original_high,
        total_savings=(original_low + original_high) / 2 - (current_low + current_high) / 2,
        guests_reduced=sum(e.original_guests - e.current_guests for e in estimates),
        has_changes=any(e.current_guests != e.original_guests for e in estimates),
        suggested_budget=round_currency((current_low + current_high) / 2),
    )
