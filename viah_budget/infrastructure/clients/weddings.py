"""Wedding API HTTP client for budget and scenario commands"""

import asyncio
import httpx
from typing import Any, Dict, Optional
from viah_budget.config import settings
from viah_budget.domain.exceptions import WeddingAPIError
from viah_budget.domain.models import BudgetScenario
from viah_budget.infrastructure.observability.metrics import (
    wedding_api_failure_counter,
    wedding_api_latency_histogram,
)


class WeddingAPIClient:
    """Client for the planning app's wedding and budget API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        max_retries: int | None = None,
        backoff_base: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.wedding_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.max_retries = max_retries or settings.api_max_retries
        self.backoff_base = settings.api_backoff_base if backoff_base is None else backoff_base
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout, transport=self.transport)

    async def update_budget(self, wedding_id: str, total_budget: str) -> Dict[str, Any]:
        """
        PATCH the wedding's totalBudget.

        Retry strategy:
        - Exponential backoff: base, 2×base, 4×base ...
        - Retries on 5xx errors and network failures, not on 4xx
        - Tracks latency histogram and failure counter

        Raises:
            WeddingAPIError: After the final failed attempt or on a 4xx
        """
        attempt = 0
        async with self._client() as client:
            while True:
                try:
                    with wedding_api_latency_histogram.time():
                        response = await client.patch(
                            f"/api/weddings/{wedding_id}",
                            json={"totalBudget": total_budget},
                        )
                        response.raise_for_status()
                        return response.json() if response.content else {}

                except httpx.HTTPStatusError as e:
                    wedding_api_failure_counter.inc()
                    if e.response.status_code < 500:
                        raise WeddingAPIError(f"Wedding API rejected budget update: {e.response.status_code}") from e
                    error: Exception = e
                except httpx.RequestError as e:
                    wedding_api_failure_counter.inc()
                    error = e

                attempt += 1
                if attempt >= self.max_retries:
                    raise WeddingAPIError(f"Budget update failed after {attempt} attempts: {error}") from error

                backoff = self.backoff_base * (2 ** (attempt - 1))
                await asyncio.sleep(backoff)

    async def create_scenario(self, wedding_id: str, scenario: BudgetScenario) -> Dict[str, Any]:
        """Forward a scenario to persistence; multipliers travel as strings"""
        payload = {
            "weddingId": wedding_id,
            "name": scenario.name,
            "description": scenario.description,
            "guestCountChange": scenario.guest_count_change,
            "venueMultiplier": str(scenario.venue_multiplier),
            "cateringMultiplier": str(scenario.catering_multiplier),
            "overallMultiplier": str(scenario.overall_multiplier),
        }
        return await self._send("POST", "/api/budget/scenarios", json=payload)

    async def delete_scenario(self, scenario_id: str) -> None:
        await self._send("DELETE", f"/api/budget/scenarios/{scenario_id}")

    async def _send(self, method: str, path: str, json: Dict[str, Any] | None = None) -> Dict[str, Any]:
        async with self._client() as client:
            try:
                with wedding_api_latency_histogram.time():
                    response = await client.request(method, path, json=json)
                response.raise_for_status()
                return response.json() if response.content else {}

            except httpx.TimeoutException as e:
                wedding_api_failure_counter.inc()
                raise WeddingAPIError(f"Wedding API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                wedding_api_failure_counter.inc()
                raise WeddingAPIError(f"Wedding API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                wedding_api_failure_counter.inc()
                raise WeddingAPIError(f"Wedding API unreachable: {e}") from e
            except ValueError as e:
                raise WeddingAPIError(f"Invalid response from wedding API: {e}") from e
