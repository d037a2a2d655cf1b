"""/v1/dashboard - budget overview figures"""

from fastapi import APIRouter, Depends

from viah_budget.api.v1.schemas import (
    BudgetSummaryRequest,
    BudgetSummaryResponse,
    CeremonyCostRowSchema,
    CeremonyCostSummaryResponse,
    EstimateRequest,
    LineItemCostSchema,
)
from viah_budget.api.dependencies import get_catalog
from viah_budget.domain.dashboard import summarize_budget, summarize_ceremony_costs
from viah_budget.domain.models import Catalog

router = APIRouter()


@router.post("/dashboard/ceremonies", response_model=CeremonyCostSummaryResponse)
def ceremony_costs(request_body: EstimateRequest, catalog: Catalog = Depends(get_catalog)):
    """
    Per-event cost table at each event's planned guest count.

    Slider overrides in the request are ignored; the dashboard always shows
    the planned figures.
    """
    summary = summarize_ceremony_costs(
        [event.to_domain() for event in request_body.events],
        catalog,
        request_body.to_selections(),
    )

    rows = [
        CeremonyCostRowSchema(
            event_id=row.event_id,
            event_name=row.event_name,
            guests=row.guests,
            ceremony_id=row.cost.ceremony_id,
            low=row.cost.low,
            high=row.cost.high,
            has_breakdown=row.cost.has_breakdown,
            breakdown=(
                [LineItemCostSchema.model_validate(item, from_attributes=True) for item in row.cost.breakdown]
                if row.cost.breakdown is not None
                else None
            ),
        )
        for row in summary.rows
    ]

    return CeremonyCostSummaryResponse(rows=rows, total_low=summary.total_low, total_high=summary.total_high)


@router.post("/dashboard/budget", response_model=BudgetSummaryResponse)
def budget_summary(request_body: BudgetSummaryRequest):
    summary = summarize_budget(
        request_body.total_budget,
        request_body.category_spent,
        allocated_by_ceremonies=request_body.allocated_by_ceremonies,
        allocated_by_categories=request_body.allocated_by_categories,
        track_by_ceremony=request_body.track_by_ceremony,
    )
    return BudgetSummaryResponse.model_validate(summary, from_attributes=True)
