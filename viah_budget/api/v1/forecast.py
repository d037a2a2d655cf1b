"""POST /v1/forecast - cash-flow forecast from vendor contract milestones"""

from fastapi import APIRouter, Request

from viah_budget.api.v1.schemas import ForecastRequest, ForecastResponse
from viah_budget.api.dependencies import get_request_id
from viah_budget.domain.forecast import build_budget_forecast
from viah_budget.infrastructure.observability.metrics import malformed_milestone_counter
from viah_budget.infrastructure.observability.logging import log_forecast

router = APIRouter()


@router.post("/forecast", response_model=ForecastResponse)
def create_forecast(request_body: ForecastRequest, request: Request):
    """
    Project unpaid contract milestones month by month against the budget.

    Contracts whose milestone data cannot be parsed are skipped and listed in
    malformed_contracts; the rest of the forecast is still returned.
    """
    request_id = get_request_id(request)
    wedding = request_body.wedding.to_domain() if request_body.wedding else None

    forecast = build_budget_forecast(
        [contract.to_domain() for contract in request_body.contracts],
        wedding,
        request_body.now,
    )

    if forecast.malformed_contracts:
        malformed_milestone_counter.inc(len(forecast.malformed_contracts))
    log_forecast(
        request_id,
        len(request_body.contracts),
        len(forecast.payment_schedule),
        len(forecast.malformed_contracts),
        wedding_id=wedding.id if wedding else None,
    )

    return ForecastResponse.model_validate(forecast, from_attributes=True)
