"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, Field, FiniteFloat, model_validator
import datetime as dt
from typing import Any, Dict, List, Optional

from viah_budget.domain.models import (
    BudgetScenario,
    Contract,
    CostUnit,
    EstimateSelections,
    Event,
    EventOverride,
    LineItem,
    ScenarioFormData,
    VendorTier,
    VenueClass,
    Wedding,
)
from viah_budget.domain.pricing import detect_city


class EventSchema(BaseModel):
    """Wedding event as sent by the planning app"""

    id: str
    name: str = ""
    type: str = ""
    guest_count: Optional[int] = None
    date: Optional[dt.date] = None
    location: Optional[str] = None
    ceremony_id: Optional[str] = None

    def to_domain(self) -> Event:
        return Event(**self.model_dump())


class EventOverrideSchema(BaseModel):
    guests: Optional[int] = None
    venue_class: Optional[VenueClass] = None
    vendor_tier: Optional[VendorTier] = None


class EstimateRequest(BaseModel):
    """Request body for POST /v1/estimate"""

    events: List[EventSchema]
    venue_class: Optional[VenueClass] = None
    vendor_tier: Optional[VendorTier] = None
    city: Optional[str] = None
    location: Optional[str] = Field(None, description="Free-text location used when city is omitted")
    overrides: Dict[str, EventOverrideSchema] = Field(default_factory=dict)

    def resolved_city(self) -> Optional[str]:
        if self.city:
            return self.city
        return detect_city(self.location) if self.location else None

    def to_selections(self) -> EstimateSelections:
        return EstimateSelections(
            venue_class=self.venue_class,
            vendor_tier=self.vendor_tier,
            city=self.resolved_city(),
            overrides={
                event_id: EventOverride(**override.model_dump())
                for event_id, override in self.overrides.items()
            },
        )


class LineItemSchema(BaseModel):
    category: str
    unit: CostUnit = CostUnit.FIXED
    low_cost: float = Field(..., ge=0, allow_inf_nan=False)
    high_cost: float = Field(..., ge=0, allow_inf_nan=False)
    hours_low: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    hours_high: Optional[float] = Field(None, ge=0, allow_inf_nan=False)
    notes: Optional[str] = None

    @model_validator(mode="after")
    def check_cost_range(self) -> "LineItemSchema":
        if self.low_cost > self.high_cost:
            raise ValueError("low_cost must not exceed high_cost")
        return self

    def to_domain(self) -> LineItem:
        return LineItem(**self.model_dump())


class LineItemCostSchema(BaseModel):
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


class LineItemCostRequest(BaseModel):
    """Request body for POST /v1/estimate/line-item"""

    item: LineItemSchema
    guest_count: int = Field(..., ge=0)
    multiplier: float = Field(1.0, gt=0, allow_inf_nan=False)


class EventEstimateSchema(BaseModel):
    event_id: str
    name: str
    original_guests: int
    current_guests: int
    min_guests: int
    max_guests: int
    venue_class: VenueClass
    vendor_tier: VendorTier
    ceremony_id: Optional[str] = None
    has_breakdown: bool
    breakdown: Optional[List[LineItemCostSchema]] = None
    cost_low: int
    cost_high: int
    original_cost_low: int
    original_cost_high: int


class EstimateResponse(BaseModel):
    """Response for POST /v1/estimate"""

    city: Optional[str] = None
    events: List[EventEstimateSchema]
    current_low: int
    current_high: int
    original_low: int
    original_high: int
    total_savings: float
    guests_reduced: int
    has_changes: bool
    suggested_budget: int


class ApplyBudgetResponse(BaseModel):
    """Response for POST /v1/weddings/{wedding_id}/budget/apply"""

    wedding_id: str
    total_budget: str
    estimate: EstimateResponse


class ScenarioFormSchema(BaseModel):
    guest_count_change: int = 0
    venue_multiplier: float = Field(1.0, gt=0, allow_inf_nan=False)
    catering_multiplier: float = Field(1.0, gt=0, allow_inf_nan=False)
    overall_multiplier: float = Field(1.0, gt=0, allow_inf_nan=False)

    def to_form_data(self) -> ScenarioFormData:
        return ScenarioFormData(
            guest_count_change=self.guest_count_change,
            venue_multiplier=self.venue_multiplier,
            catering_multiplier=self.catering_multiplier,
            overall_multiplier=self.overall_multiplier,
        )


class ScenarioPreviewRequest(BaseModel):
    """Request body for POST /v1/scenarios/preview"""

    total_budget: float = Field(0.0, allow_inf_nan=False)
    base_guest_count: int = 0
    scenario: ScenarioFormSchema = Field(default_factory=ScenarioFormSchema)


class ScenarioImpactSchema(BaseModel):
    per_person_cost: float
    guest_impact: float
    venue_impact: float
    catering_impact: float
    overall_impact: float
    total_impact: float
    new_total: float
    percent_change: float


class BudgetScenarioSchema(ScenarioFormSchema):
    id: Optional[str] = None
    name: str = Field(..., min_length=1)
    description: str = ""
    created_at: Optional[dt.datetime] = None

    def to_domain(self) -> BudgetScenario:
        return BudgetScenario(**self.model_dump())


class ScenarioCompareRequest(BaseModel):
    """Request body for POST /v1/scenarios/compare"""

    total_budget: float = Field(0.0, allow_inf_nan=False)
    base_guest_count: int = 0
    scenarios: List[BudgetScenarioSchema]


class ScenarioComparison(BaseModel):
    scenario: BudgetScenarioSchema
    impact: ScenarioImpactSchema


class CreateScenarioRequest(BaseModel):
    """Request body for POST /v1/scenarios"""

    wedding_id: str = Field(..., min_length=1)
    scenario: BudgetScenarioSchema


class ContractSchema(BaseModel):
    id: str
    vendor_id: Optional[str] = None
    payment_milestones: Any = None

    def to_domain(self) -> Contract:
        return Contract(**self.model_dump())


class WeddingSchema(BaseModel):
    id: str
    total_budget: Optional[Any] = None
    guest_count_estimate: Optional[int] = None
    wedding_date: Optional[dt.date] = None
    created_at: Optional[dt.date] = None

    def to_domain(self) -> Wedding:
        return Wedding(**self.model_dump())


class ForecastRequest(BaseModel):
    """Request body for POST /v1/forecast"""

    wedding: Optional[WeddingSchema] = None
    contracts: List[ContractSchema] = Field(default_factory=list)
    now: Optional[dt.datetime] = None


class PaymentScheduleSchema(BaseModel):
    contract_id: str
    vendor_id: Optional[str] = None
    name: str
    amount: float
    due_date: dt.date
    days_until_due: int
    status: str


class MonthlyProjectionSchema(BaseModel):
    month: str
    projected_spent: float
    budget_remaining: float
    upcoming_payments: float


class CashFlowSummarySchema(BaseModel):
    total_committed: float
    total_paid: float
    total_remaining: float
    months_until_wedding: int
    average_monthly_spend: float
    projected_monthly_spend: float


class ForecastResponse(BaseModel):
    """Response for POST /v1/forecast"""

    monthly_projections: List[MonthlyProjectionSchema]
    cash_flow_summary: CashFlowSummarySchema
    payment_schedule: List[PaymentScheduleSchema]
    malformed_contracts: List[str]


class CeremonySchema(BaseModel):
    id: str
    name: str
    tradition: str
    description: str
    default_guest_count: int
    line_items: List[LineItemSchema]


class CeremonyListResponse(BaseModel):
    """Response for GET /v1/ceremonies"""

    tradition: Optional[str] = None
    default_ceremonies: List[str] = Field(default_factory=list)
    ceremonies: List[CeremonySchema]


class CeremonyCostRowSchema(BaseModel):
    event_id: str
    event_name: str
    guests: int
    ceremony_id: Optional[str] = None
    low: int
    high: int
    has_breakdown: bool
    breakdown: Optional[List[LineItemCostSchema]] = None


class CeremonyCostSummaryResponse(BaseModel):
    """Response for POST /v1/dashboard/ceremonies"""

    rows: List[CeremonyCostRowSchema]
    total_low: int
    total_high: int


class BudgetSummaryRequest(BaseModel):
    """Request body for POST /v1/dashboard/budget"""

    total_budget: float = Field(0.0, allow_inf_nan=False)
    category_spent: List[FiniteFloat] = Field(default_factory=list)
    allocated_by_ceremonies: float = Field(0.0, allow_inf_nan=False)
    allocated_by_categories: float = Field(0.0, allow_inf_nan=False)
    track_by_ceremony: bool = True


class BudgetSummaryResponse(BaseModel):
    total_budget: float
    total_spent: float
    remaining_budget: float
    spent_percentage: float
    allocated: float
    allocated_percentage: float
    unallocated: float
    has_mismatch: bool


class PricingOptionSchema(BaseModel):
    value: str
    label: str
    multiplier: float
    description: str


class PricingOptionsResponse(BaseModel):
    """Response for GET /v1/pricing/options"""

    venue_classes: List[PricingOptionSchema]
    vendor_tiers: List[PricingOptionSchema]
    guest_brackets: List[PricingOptionSchema]
    cities: List[PricingOptionSchema]


class SeedCatalogResponse(BaseModel):
    """Response for POST /v1/ceremonies/seed"""

    added: int
    total: int
