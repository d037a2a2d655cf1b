"""POST /v1/estimate - interactive wedding cost estimator endpoints"""

import time
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Request

from viah_budget.api.v1.schemas import (
    ApplyBudgetResponse,
    EstimateRequest,
    EstimateResponse,
    LineItemCostRequest,
    LineItemCostSchema,
)
from viah_budget.api.dependencies import get_catalog, get_request_id, get_wedding_client
from viah_budget.infrastructure.clients.weddings import WeddingAPIClient
from viah_budget.domain.estimates import estimate_wedding
from viah_budget.domain.exceptions import WeddingAPIError
from viah_budget.domain.line_items import calculate_line_item_cost
from viah_budget.domain.models import Catalog, WeddingEstimate
from viah_budget.infrastructure.observability.metrics import record_event_estimates
from viah_budget.infrastructure.observability.logging import log_budget_applied, log_estimate

router = APIRouter()


def _run_estimate(request_body: EstimateRequest, catalog: Catalog, request_id: str) -> WeddingEstimate:
    start_time = time.time()

    estimate = estimate_wedding(
        [event.to_domain() for event in request_body.events],
        catalog,
        request_body.to_selections(),
    )

    fallback_count = sum(1 for e in estimate.events if not e.has_breakdown)
    duration_ms = (time.time() - start_time) * 1000
    record_event_estimates(len(estimate.events) - fallback_count, fallback_count)
    log_estimate(
        request_id,
        len(estimate.events),
        fallback_count,
        estimate.current_low,
        estimate.current_high,
        duration_ms,
    )
    return estimate


def _to_response(estimate: WeddingEstimate, city: Optional[str]) -> EstimateResponse:
    response = EstimateResponse.model_validate(estimate, from_attributes=True)
    return response.model_copy(update={"city": city})


@router.post("/estimate", response_model=EstimateResponse)
def create_estimate(
    request_body: EstimateRequest,
    request: Request,
    catalog: Catalog = Depends(get_catalog),
):
    """
    Estimate every event of a wedding plus the wedding-level totals.

    Each event resolves to a ceremony template (explicit id, keyword match,
    reception, then event type) and is priced line by line with the composed
    venue × vendor × city × guest bracket multiplier. Events without a
    breakdown use the generic per-guest estimate.
    """
    request_id = get_request_id(request)
    estimate = _run_estimate(request_body, catalog, request_id)
    return _to_response(estimate, request_body.resolved_city())


@router.post("/estimate/line-item", response_model=LineItemCostSchema)
def price_line_item(request_body: LineItemCostRequest):
    """Price a single line item for a guest count and pre-composed multiplier"""
    cost = calculate_line_item_cost(
        request_body.item.to_domain(),
        request_body.guest_count,
        request_body.multiplier,
    )
    return LineItemCostSchema.model_validate(cost, from_attributes=True)


@router.post("/weddings/{wedding_id}/budget/apply", response_model=ApplyBudgetResponse)
async def apply_suggested_budget(
    wedding_id: str,
    request_body: EstimateRequest,
    request: Request,
    catalog: Catalog = Depends(get_catalog),
    wedding_client: WeddingAPIClient = Depends(get_wedding_client),
):
    """
    Estimate the wedding and write the suggested budget to the wedding record.

    The suggested budget is the rounded midpoint of the current range and is
    sent as a decimal string, the format the wedding record stores.
    """
    request_id = get_request_id(request)
    estimate = _run_estimate(request_body, catalog, request_id)
    total_budget = str(estimate.suggested_budget)

    try:
        await wedding_client.update_budget(wedding_id, total_budget)
    except WeddingAPIError as e:
        logging.error(f"Wedding API error: {e}", extra={"request_id": request_id, "wedding_id": wedding_id})
        raise HTTPException(status_code=503, detail="Wedding service unavailable")

    log_budget_applied(request_id, wedding_id, estimate.suggested_budget)

    return ApplyBudgetResponse(
        wedding_id=wedding_id,
        total_budget=total_budget,
        estimate=_to_response(estimate, request_body.resolved_city()),
    )
