"""
Scenario impact calculator - the proportional cost model.

Used by the scenario planner only. It works on the wedding-level total with
fixed proportional weights and is decoupled from the per-event line-item
model in domain.estimates; the two are not reconciled.
"""

import logging
import math
from typing import Any, Iterable, List, Tuple

from viah_budget.config import settings
from viah_budget.domain.models import BudgetScenario, ScenarioFormData, ScenarioImpact

logger = logging.getLogger(__name__)


def parse_amount(value: Any) -> float:
    """Lenient numeric parse for budget strings; non-numeric or non-finite values count as 0"""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        amount = float(str(value).replace(",", "").replace("$", "").strip())
    except ValueError:
        logger.warning("Ignoring non-numeric amount %r", value)
        return 0.0
    if not math.isfinite(amount):
        logger.warning("Ignoring non-finite amount %r", value)
        return 0.0
    return amount


def per_person_cost(total_budget: float, base_guest_count: int) -> float:
    """Share of the budget attributed to each guest, or the fixed fallback"""
    if total_budget > 0 and base_guest_count > 0:
        return (total_budget * settings.scenario_per_person_share) / base_guest_count
    return settings.scenario_fallback_per_person_cost


def calculate_scenario_impact(
    total_budget: float,
    base_guest_count: int,
    scenario: ScenarioFormData,
) -> ScenarioImpact:
    """
    Budget delta for independent scenario adjustments.

    All four terms are computed against the same baseline and added, never
    compounded:
    - guest:    guest_count_change × per_person_cost
    - venue:    total × 0.25 × (venue_multiplier − 1)
    - catering: total × 0.35 × (catering_multiplier − 1)
    - overall:  total × (overall_multiplier − 1)

    Example:
        $100,000, 200 guests, +20 guests, venue 1.1
        per person $300 → guest $6,000 + venue $2,500 = $8,500 (8.5%)
    """
    person_cost = per_person_cost(total_budget, base_guest_count)

    guest_impact = scenario.guest_count_change * person_cost
    venue_impact = total_budget * settings.scenario_venue_share * (scenario.venue_multiplier - 1)
    catering_impact = total_budget * settings.scenario_catering_share * (scenario.catering_multiplier - 1)
    overall_impact = total_budget * (scenario.overall_multiplier - 1)

    total_impact = guest_impact + venue_impact + catering_impact + overall_impact

    return ScenarioImpact(
        per_person_cost=person_cost,
        guest_impact=guest_impact,
        venue_impact=venue_impact,
        catering_impact=catering_impact,
        overall_impact=overall_impact,
        total_impact=total_impact,
        new_total=total_budget + total_impact,
        percent_change=(total_impact / total_budget) * 100 if total_budget > 0 else 0.0,
    )


def compare_scenarios(
    total_budget: float,
    base_guest_count: int,
    scenarios: Iterable[BudgetScenario],
) -> List[Tuple[BudgetScenario, ScenarioImpact]]:
    """Evaluate saved scenarios against one baseline, preserving input order"""
    return [
        (scenario, calculate_scenario_impact(total_budget, base_guest_count, scenario.to_form_data()))
        for scenario in scenarios
    ]
