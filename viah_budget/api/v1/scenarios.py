"""/v1/scenarios - what-if budget scenario endpoints"""

import logging
from typing import Any, Dict, List
from fastapi import APIRouter, Depends, HTTPException, Request, Response

from viah_budget.api.v1.schemas import (
    BudgetScenarioSchema,
    CreateScenarioRequest,
    ScenarioCompareRequest,
    ScenarioComparison,
    ScenarioImpactSchema,
    ScenarioPreviewRequest,
)
from viah_budget.api.dependencies import get_request_id, get_wedding_client
from viah_budget.infrastructure.clients.weddings import WeddingAPIClient
from viah_budget.domain.exceptions import WeddingAPIError
from viah_budget.domain.scenarios import calculate_scenario_impact, compare_scenarios
from viah_budget.infrastructure.observability.metrics import scenario_preview_counter

router = APIRouter()


@router.post("/scenarios/preview", response_model=ScenarioImpactSchema)
def preview_scenario(request_body: ScenarioPreviewRequest):
    """
    Live impact of unsaved scenario adjustments.

    Uses the proportional model on the wedding-level total, not the
    per-event line items, so figures are not expected to match /v1/estimate.
    """
    impact = calculate_scenario_impact(
        request_body.total_budget,
        request_body.base_guest_count,
        request_body.scenario.to_form_data(),
    )
    scenario_preview_counter.inc()
    return ScenarioImpactSchema.model_validate(impact, from_attributes=True)


@router.post("/scenarios/compare", response_model=List[ScenarioComparison])
def compare_saved_scenarios(request_body: ScenarioCompareRequest):
    """Evaluate saved scenarios side by side against the same baseline"""
    results = compare_scenarios(
        request_body.total_budget,
        request_body.base_guest_count,
        [scenario.to_domain() for scenario in request_body.scenarios],
    )
    return [
        ScenarioComparison(
            scenario=BudgetScenarioSchema.model_validate(scenario, from_attributes=True),
            impact=ScenarioImpactSchema.model_validate(impact, from_attributes=True),
        )
        for scenario, impact in results
    ]


@router.post("/scenarios", status_code=201)
async def create_scenario(
    request_body: CreateScenarioRequest,
    request: Request,
    wedding_client: WeddingAPIClient = Depends(get_wedding_client),
) -> Dict[str, Any]:
    """Validate a scenario and forward it to the wedding API for persistence"""
    request_id = get_request_id(request)
    try:
        return await wedding_client.create_scenario(request_body.wedding_id, request_body.scenario.to_domain())
    except WeddingAPIError as e:
        logging.error(f"Wedding API error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Wedding service unavailable")


@router.delete("/scenarios/{scenario_id}", status_code=204)
async def delete_scenario(
    scenario_id: str,
    request: Request,
    wedding_client: WeddingAPIClient = Depends(get_wedding_client),
):
    request_id = get_request_id(request)
    try:
        await wedding_client.delete_scenario(scenario_id)
    except WeddingAPIError as e:
        logging.error(f"Wedding API error: {e}", extra={"request_id": request_id, "scenario_id": scenario_id})
        raise HTTPException(status_code=503, detail="Wedding service unavailable")
    return Response(status_code=204)
