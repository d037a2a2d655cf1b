"""Dashboard summaries built on the line-item cost model"""

from dataclasses import dataclass
from typing import Iterable, List, Optional

from viah_budget.domain.estimates import calculate_event_cost, original_guest_count
from viah_budget.domain.models import BudgetSummary, Catalog, EstimateSelections, Event, EventCost
from viah_budget.domain.pricing import resolve_vendor_tier, resolve_venue_class

# Category and ceremony allocations further apart than this are flagged
MISMATCH_TOLERANCE = 100


@dataclass
class CeremonyCostRow:
    """One event on the dashboard ceremony breakdown"""

    event_id: str
    event_name: str
    guests: int
    cost: EventCost


@dataclass
class CeremonyCostSummary:
    rows: List[CeremonyCostRow]
    total_low: int
    total_high: int


def summarize_ceremony_costs(
    events: Iterable[Event],
    catalog: Catalog,
    selections: Optional[EstimateSelections] = None,
) -> CeremonyCostSummary:
    """
    Per-event cost breakdown for the dashboard.

    Goes through calculate_event_cost with the same selections as the
    estimator, so a dashboard row always matches the estimator's figure for
    the same event and guest count.
    """
    selections = selections or EstimateSelections()
    venue_class = resolve_venue_class(selections.venue_class)
    vendor_tier = resolve_vendor_tier(selections.vendor_tier)

    rows = []
    for event in events:
        guests = original_guest_count(event, catalog)
        cost = calculate_event_cost(
            catalog,
            event.name,
            guests,
            venue_class,
            vendor_tier,
            city=selections.city,
            event_type=event.type,
            ceremony_id=event.ceremony_id,
        )
        rows.append(CeremonyCostRow(event_id=event.id, event_name=event.name, guests=guests, cost=cost))

    return CeremonyCostSummary(
        rows=rows,
        total_low=sum(row.cost.low for row in rows),
        total_high=sum(row.cost.high for row in rows),
    )


def summarize_budget(
    total_budget: float,
    category_spent: Iterable[float],
    allocated_by_ceremonies: float = 0.0,
    allocated_by_categories: float = 0.0,
    track_by_ceremony: bool = True,
) -> BudgetSummary:
    """Headline budget figures; percentages are 0 when there is no budget"""
    total_spent = sum(category_spent)
    allocated = allocated_by_ceremonies if track_by_ceremony else allocated_by_categories
    has_mismatch = (
        not track_by_ceremony
        and allocated_by_categories > 0
        and allocated_by_ceremonies > 0
        and abs(allocated_by_categories - allocated_by_ceremonies) > MISMATCH_TOLERANCE
    )

    return BudgetSummary(
        total_budget=total_budget,
        total_spent=total_spent,
        remaining_budget=total_budget - total_spent,
        spent_percentage=(total_spent / total_budget) * 100 if total_budget > 0 else 0.0,
        allocated=allocated,
        allocated_percentage=(allocated / total_budget) * 100 if total_budget > 0 else 0.0,
        unallocated=total_budget - allocated,
        has_mismatch=has_mismatch,
    )
