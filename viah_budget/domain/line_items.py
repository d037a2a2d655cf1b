"""Line item cost calculator"""

from viah_budget.config import settings
from viah_budget.domain.models import CostUnit, LineItem, LineItemCost
from viah_budget.domain.pricing import round_currency


def format_currency(amount: float) -> str:
    return f"${amount:,.0f}"


def calculate_line_item_cost(item: LineItem, guest_count: int, multiplier: float) -> LineItemCost:
    """
    Cost of one line item for a guest count and composed multiplier.

    Rules:
    - fixed: round(cost × multiplier), independent of guests
    - per_person: round(cost × multiplier) per guest, × guest_count
    - per_hour: round(cost × multiplier) per hour, × hours_low / hours_high
      (3 / 4 hours when the item does not say)

    The per-unit price is rounded before it is multiplied by the quantity,
    so unit price × quantity always equals the reported total.

    Example:
        per_person 50-100, 150 guests, multiplier 1.2
        unit 60-120 → total 9,000-18,000
    """
    unit_low = round_currency(item.low_cost * multiplier)
    unit_high = round_currency(item.high_cost * multiplier)
    guests = max(guest_count, 0)

    if item.unit == CostUnit.PER_PERSON:
        quantity_low = quantity_high = guests
        unit_label = f"@ {format_currency(unit_low)}-{format_currency(unit_high)}/person"
    elif item.unit == CostUnit.PER_HOUR:
        quantity_low = item.hours_low if item.hours_low is not None else settings.default_hours_low
        quantity_high = item.hours_high if item.hours_high is not None else settings.default_hours_high
        unit_label = (
            f"@ {format_currency(unit_low)}-{format_currency(unit_high)}/hr "
            f"({quantity_low:g}-{quantity_high:g}hrs)"
        )
    else:
        quantity_low = quantity_high = 1
        unit_label = "fixed"

    return LineItemCost(
        category=item.category,
        unit=item.unit,
        unit_low=unit_low,
        unit_high=unit_high,
        quantity_low=quantity_low,
        quantity_high=quantity_high,
        low=round_currency(unit_low * quantity_low),
        high=round_currency(unit_high * quantity_high),
        unit_label=unit_label,
        notes=item.notes,
    )
