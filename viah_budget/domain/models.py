"""Domain models - pure Python dataclasses representing business entities"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple


class VenueClass(str, Enum):
    HOME = "home"
    COMMUNITY_HALL = "community_hall"
    BANQUET_HALL = "banquet_hall"
    HOTEL_BALLROOM = "hotel_ballroom"
    LUXURY_HOTEL = "luxury_hotel"


class VendorTier(str, Enum):
    BUDGET = "budget"
    STANDARD = "standard"
    PREMIUM = "premium"
    LUXURY = "luxury"


class GuestBracket(str, Enum):
    UNDER_100 = "under_100"
    FROM_100_TO_200 = "100_200"
    FROM_200_TO_300 = "200_300"
    OVER_300 = "over_300"


class CostUnit(str, Enum):
    FIXED = "fixed"
    PER_PERSON = "per_person"
    PER_HOUR = "per_hour"


@dataclass(frozen=True)
class LineItem:
    """One budget sub-category within a ceremony template"""

    category: str
    unit: CostUnit
    low_cost: float
    high_cost: float
    hours_low: Optional[float] = None
    hours_high: Optional[float] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class CeremonyTemplate:
    """Reusable cost profile for one type of wedding event"""

    id: str
    name: str
    tradition: str
    default_guest_count: int
    line_items: Tuple[LineItem, ...] = ()
    description: str = ""


@dataclass(frozen=True)
class Catalog:
    """Immutable snapshot of ceremony templates for one calculation pass"""

    templates: Mapping[str, CeremonyTemplate]

    def get(self, ceremony_id: Optional[str]) -> Optional[CeremonyTemplate]:
        if not ceremony_id:
            return None
        return self.templates.get(ceremony_id)

    def __contains__(self, ceremony_id: object) -> bool:
        return ceremony_id in self.templates

    def __len__(self) -> int:
        return len(self.templates)


@dataclass
class Event:
    """Wedding event as stored by the planning app"""

    id: str
    name: str
    type: str = ""
    guest_count: Optional[int] = None
    date: Optional[date] = None
    location: Optional[str] = None
    ceremony_id: Optional[str] = None


@dataclass
class LineItemCost:
    """Cost of one line item after multipliers and quantities"""

    category: str
    unit: CostUnit
    unit_low: int
    unit_high: int
    quantity_low: float
    quantity_high: float
    low: int
    high: int
    unit_label: str
    notes: Optional[str] = None


@dataclass
class EventCost:
    """Output of the event cost aggregator"""

    low: int
    high: int
    has_breakdown: bool
    breakdown: Optional[List[LineItemCost]]
    ceremony_id: Optional[str]
    multiplier: float


@dataclass
class EventOverride:
    """Per-event slider and selector state"""

    guests: Optional[int] = None
    venue_class: Optional[VenueClass] = None
    vendor_tier: Optional[VendorTier] = None


@dataclass
class EstimateSelections:
    """Global estimator selections shared by every event"""

    venue_class: Optional[VenueClass] = None
    vendor_tier: Optional[VendorTier] = None
    city: Optional[str] = None
    overrides: Dict[str, EventOverride] = field(default_factory=dict)


@dataclass
class EventEstimate:
    """Derived per-event estimate, recomputed on every input change"""

    event_id: str
    name: str
    original_guests: int
    current_guests: int
    min_guests: int
    max_guests: int
    venue_class: VenueClass
    vendor_tier: VendorTier
    ceremony_id: Optional[str]
    breakdown: Optional[List[LineItemCost]]
    cost_low: int
    cost_high: int
    original_cost_low: int
    original_cost_high: int

    @property
    def has_breakdown(self) -> bool:
        return self.breakdown is not None


@dataclass
class WeddingEstimate:
    """Wedding-level totals across all event estimates"""

    events: List[EventEstimate]
    current_low: int
    current_high: int
    original_low: int
    original_high: int
    total_savings: float
    guests_reduced: int
    has_changes: bool
    suggested_budget: int


@dataclass
class ScenarioFormData:
    """Independent adjustments for a what-if scenario"""

    guest_count_change: int = 0
    venue_multiplier: float = 1.0
    catering_multiplier: float = 1.0
    overall_multiplier: float = 1.0


@dataclass
class BudgetScenario:
    """Saved hypothetical adjustment against the baseline budget"""

    name: str
    description: str = ""
    guest_count_change: int = 0
    venue_multiplier: float = 1.0
    catering_multiplier: float = 1.0
    overall_multiplier: float = 1.0
    created_at: Optional[datetime] = None
    id: Optional[str] = None

    def to_form_data(self) -> ScenarioFormData:
        return ScenarioFormData(
            guest_count_change=self.guest_count_change,
            venue_multiplier=self.venue_multiplier,
            catering_multiplier=self.catering_multiplier,
            overall_multiplier=self.overall_multiplier,
        )


@dataclass
class ScenarioImpact:
    """Budget delta produced by a scenario against one baseline"""

    per_person_cost: float
    guest_impact: float
    venue_impact: float
    catering_impact: float
    overall_impact: float
    total_impact: float
    new_total: float
    percent_change: float


@dataclass
class Milestone:
    """Single payment milestone on a vendor contract"""

    name: str
    amount: float
    due_date: Optional[date]
    status: str = "pending"


@dataclass
class Contract:
    """Vendor contract; milestones arrive as a list or a JSON string"""

    id: str
    vendor_id: Optional[str] = None
    payment_milestones: Any = None


@dataclass
class Wedding:
    """Wedding record fields the engine reads"""

    id: str
    total_budget: Any = None
    guest_count_estimate: Optional[int] = None
    wedding_date: Optional[date] = None
    created_at: Optional[date] = None


@dataclass
class PaymentScheduleItem:
    """Upcoming, unpaid milestone with its contract"""

    contract_id: str
    vendor_id: Optional[str]
    name: str
    amount: float
    due_date: date
    days_until_due: int
    status: str


@dataclass
class MonthlyProjection:
    """Cumulative spend projection for one calendar month"""

    month: str  # YYYY-MM
    projected_spent: float
    budget_remaining: float
    upcoming_payments: float


@dataclass
class CashFlowSummary:
    """Committed vs paid vs remaining spend"""

    total_committed: float = 0.0
    total_paid: float = 0.0
    total_remaining: float = 0.0
    months_until_wedding: int = 0
    average_monthly_spend: float = 0.0
    projected_monthly_spend: float = 0.0


@dataclass
class BudgetForecast:
    """Output of the cash-flow forecaster"""

    monthly_projections: List[MonthlyProjection]
    cash_flow_summary: CashFlowSummary
    payment_schedule: List[PaymentScheduleItem]
    malformed_contracts: List[str] = field(default_factory=list)


@dataclass
class BudgetSummary:
    """Dashboard headline figures for the wedding budget"""

    total_budget: float
    total_spent: float
    remaining_budget: float
    spent_percentage: float
    allocated: float
    allocated_percentage: float
    unallocated: float
    has_mismatch: bool
