"""Integration tests for API endpoints"""

import json
import httpx
import pytest
from fastapi.testclient import TestClient
from viah_budget.api.dependencies import get_wedding_client
from viah_budget.infrastructure.clients.weddings import WeddingAPIClient


@pytest.fixture
def wedding_api_requests(client: TestClient) -> list[httpx.Request]:
    """Route wedding API calls to an in-memory handler that records them"""
    requests = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if request.method == "POST":
            return httpx.Response(201, json={"id": "scn_1", **json.loads(request.content)})
        if request.method == "DELETE":
            return httpx.Response(204)
        return httpx.Response(200, json={"id": "wed_1", **json.loads(request.content)})

    client.app.dependency_overrides[get_wedding_client] = lambda: WeddingAPIClient(
        base_url="http://weddings.test",
        backoff_base=0,
        transport=httpx.MockTransport(handler),
    )
    return requests


@pytest.fixture
def unavailable_wedding_api(client: TestClient) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(503)

    client.app.dependency_overrides[get_wedding_client] = lambda: WeddingAPIClient(
        base_url="http://weddings.test",
        backoff_base=0,
        transport=httpx.MockTransport(handler),
    )


ESTIMATE_BODY = {
    "events": [
        {"id": "evt_1", "name": "Mehndi", "type": "mehndi", "guest_count": 200},
        {"id": "evt_2", "name": "Cocktail Mixer", "type": "party", "guest_count": 250},
    ],
    "venue_class": "hotel_ballroom",
    "vendor_tier": "premium",
}


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "viah_event_estimate_total" in response.text


def test_request_id_is_propagated(client: TestClient):
    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"

    response = client.get("/health")
    assert response.headers["X-Request-ID"]


def test_list_ceremonies_for_tradition(client: TestClient):
    response = client.get("/v1/ceremonies", params={"tradition": "hindu"})

    assert response.status_code == 200
    data = response.json()
    ids = [c["id"] for c in data["ceremonies"]]
    assert "hindu_mehndi" in ids
    assert "reception" in ids
    assert "muslim_nikah" not in ids
    assert data["default_ceremonies"] == ["hindu_wedding", "reception"]

    mehndi = next(c for c in data["ceremonies"] if c["id"] == "hindu_mehndi")
    assert mehndi["line_items"][0] == {
        "category": "Catering",
        "unit": "per_person",
        "low_cost": 30,
        "high_cost": 60,
        "hours_low": None,
        "hours_high": None,
        "notes": None,
    }


def test_list_all_ceremonies(client: TestClient):
    response = client.get("/v1/ceremonies")

    assert response.status_code == 200
    assert len(response.json()["ceremonies"]) == 25


def test_seed_ceremonies(client: TestClient):
    """Test built-in templates are loaded once and then served from the database"""
    first = client.post("/v1/ceremonies/seed")
    assert first.status_code == 200
    assert first.json() == {"added": 25, "total": 25}

    second = client.post("/v1/ceremonies/seed")
    assert second.json() == {"added": 0, "total": 25}

    ceremonies = client.get("/v1/ceremonies").json()["ceremonies"]
    assert len(ceremonies) == 25


def test_pricing_options(client: TestClient):
    response = client.get("/v1/pricing/options")

    assert response.status_code == 200
    data = response.json()
    venues = {option["value"]: option for option in data["venue_classes"]}
    assert venues["community_hall"]["label"] == "Community Hall / Temple"
    assert venues["community_hall"]["description"] == "15% savings"
    assert venues["hotel_ballroom"]["description"] == "Base price"
    assert [option["value"] for option in data["guest_brackets"]] == ["under_100", "100_200", "200_300", "over_300"]
    cities = {option["value"]: option["description"] for option in data["cities"]}
    assert cities["bay_area"] == "50% premium"


def test_estimate_endpoint(client: TestClient):
    """Test POST /v1/estimate with one line-item event and one generic estimate"""
    response = client.post("/v1/estimate", json=ESTIMATE_BODY)

    assert response.status_code == 200
    data = response.json()
    assert data["current_low"] == 20800
    assert data["current_high"] == 44600
    assert data["suggested_budget"] == 32700
    assert data["has_changes"] is False

    mehndi, mixer = data["events"]
    assert mehndi["ceremony_id"] == "hindu_mehndi"
    assert mehndi["has_breakdown"] is True
    assert mehndi["breakdown"][0]["unit_label"] == "@ $30-$60/person"
    assert mixer["has_breakdown"] is False
    assert mixer["breakdown"] is None
    assert (mixer["cost_low"], mixer["cost_high"]) == (12500, 25000)


def test_estimate_with_overrides(client: TestClient):
    body = dict(ESTIMATE_BODY, overrides={"evt_1": {"guests": 250}})

    data = client.post("/v1/estimate", json=body).json()

    assert data["has_changes"] is True
    assert data["guests_reduced"] == -50
    assert data["events"][0]["current_guests"] == 250
    assert data["events"][0]["cost_low"] == 9800


def test_estimate_detects_city_from_location(client: TestClient):
    body = dict(ESTIMATE_BODY, location="San Jose, CA")

    data = client.post("/v1/estimate", json=body).json()

    assert data["city"] == "bay_area"
    assert data["current_low"] > 20800


def test_estimate_rejects_unknown_venue(client: TestClient):
    response = client.post("/v1/estimate", json=dict(ESTIMATE_BODY, venue_class="castle"))
    assert response.status_code == 422


def test_line_item_endpoint(client: TestClient):
    response = client.post(
        "/v1/estimate/line-item",
        json={
            "item": {"category": "Catering", "unit": "per_person", "low_cost": 50, "high_cost": 100},
            "guest_count": 150,
            "multiplier": 1.2,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert (data["unit_low"], data["unit_high"]) == (60, 120)
    assert (data["low"], data["high"]) == (9000, 18000)


def test_line_item_rejects_zero_multiplier(client: TestClient):
    response = client.post(
        "/v1/estimate/line-item",
        json={"item": {"category": "Decor", "low_cost": 100, "high_cost": 200}, "guest_count": 10, "multiplier": 0},
    )
    assert response.status_code == 422


def test_line_item_rejects_inverted_cost_range(client: TestClient):
    response = client.post(
        "/v1/estimate/line-item",
        json={"item": {"category": "Decor", "unit": "fixed", "low_cost": 500, "high_cost": 100}, "guest_count": 10},
    )
    assert response.status_code == 422


def test_apply_budget(client: TestClient, wedding_api_requests: list[httpx.Request]):
    """Test the suggested budget is written to the wedding as a string"""
    response = client.post("/v1/weddings/wed_1/budget/apply", json=ESTIMATE_BODY)

    assert response.status_code == 200
    data = response.json()
    assert data["total_budget"] == "32700"
    assert data["estimate"]["suggested_budget"] == 32700

    assert len(wedding_api_requests) == 1
    assert wedding_api_requests[0].method == "PATCH"
    assert wedding_api_requests[0].url.path == "/api/weddings/wed_1"
    assert json.loads(wedding_api_requests[0].content) == {"totalBudget": "32700"}


def test_apply_budget_wedding_api_down(client: TestClient, unavailable_wedding_api):
    response = client.post("/v1/weddings/wed_1/budget/apply", json=ESTIMATE_BODY)

    assert response.status_code == 503
    assert response.json()["detail"] == "Wedding service unavailable"


def test_scenario_preview(client: TestClient):
    response = client.post(
        "/v1/scenarios/preview",
        json={
            "total_budget": 100000,
            "base_guest_count": 200,
            "scenario": {"guest_count_change": 20, "venue_multiplier": 1.1},
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["per_person_cost"] == 300
    assert data["total_impact"] == pytest.approx(8500)
    assert data["new_total"] == pytest.approx(108500)
    assert data["percent_change"] == pytest.approx(8.5)


@pytest.mark.parametrize("total_budget", ["NaN", "inf", "-Infinity"])
def test_scenario_preview_rejects_non_finite_budget(client: TestClient, total_budget: str):
    response = client.post(
        "/v1/scenarios/preview",
        json={"total_budget": total_budget, "base_guest_count": 100},
    )
    assert response.status_code == 422


def test_scenario_compare_rejects_non_finite_multiplier(client: TestClient):
    response = client.post(
        "/v1/scenarios/compare",
        json={"total_budget": 100000, "base_guest_count": 200, "scenarios": [{"name": "Odd", "venue_multiplier": "inf"}]},
    )
    assert response.status_code == 422


def test_scenario_compare(client: TestClient):
    response = client.post(
        "/v1/scenarios/compare",
        json={
            "total_budget": 100000,
            "base_guest_count": 200,
            "scenarios": [
                {"name": "Fewer guests", "guest_count_change": -50},
                {"name": "Premium catering", "catering_multiplier": 1.2},
            ],
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert [row["scenario"]["name"] for row in data] == ["Fewer guests", "Premium catering"]
    assert data[0]["impact"]["total_impact"] == pytest.approx(-15000)
    assert data[1]["impact"]["catering_impact"] == pytest.approx(7000)


def test_create_scenario_forwards_to_wedding_api(client: TestClient, wedding_api_requests: list[httpx.Request]):
    response = client.post(
        "/v1/scenarios",
        json={"wedding_id": "wed_1", "scenario": {"name": "Smaller venue", "venue_multiplier": 0.9}},
    )

    assert response.status_code == 201
    assert response.json()["id"] == "scn_1"
    payload = json.loads(wedding_api_requests[0].content)
    assert payload["weddingId"] == "wed_1"
    assert payload["venueMultiplier"] == "0.9"


def test_create_scenario_requires_name(client: TestClient, wedding_api_requests: list[httpx.Request]):
    response = client.post("/v1/scenarios", json={"wedding_id": "wed_1", "scenario": {"name": ""}})

    assert response.status_code == 422
    assert wedding_api_requests == []


def test_delete_scenario(client: TestClient, wedding_api_requests: list[httpx.Request]):
    response = client.delete("/v1/scenarios/scn_1")

    assert response.status_code == 204
    assert wedding_api_requests[0].url.path == "/api/budget/scenarios/scn_1"


def test_delete_scenario_wedding_api_down(client: TestClient, unavailable_wedding_api):
    response = client.delete("/v1/scenarios/scn_1")
    assert response.status_code == 503


def test_forecast_endpoint(client: TestClient):
    response = client.post(
        "/v1/forecast",
        json={
            "wedding": {"id": "wed_1", "total_budget": "10000", "wedding_date": "2026-06-20", "created_at": "2025-11-01"},
            "contracts": [
                {
                    "id": "ctr_venue",
                    "vendor_id": "vendor_venue",
                    "payment_milestones": [
                        {"name": "Deposit", "amount": 1000, "dueDate": "2025-12-01", "status": "paid"},
                        {"name": "Final Payment", "amount": 3000, "dueDate": "2026-03-05", "status": "pending"},
                    ],
                },
                {
                    "id": "ctr_caterer",
                    "vendor_id": "vendor_caterer",
                    "payment_milestones": '[{"name": "Deposit", "amount": "1500", "dueDate": "2026-02-01"}]',
                },
                {"id": "ctr_broken", "payment_milestones": "{not json"},
            ],
            "now": "2026-01-15T12:00:00Z",
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert [p["contract_id"] for p in data["payment_schedule"]] == ["ctr_caterer", "ctr_venue"]
    assert [m["month"] for m in data["monthly_projections"]] == ["2026-02", "2026-03"]
    assert data["monthly_projections"][-1]["budget_remaining"] == 5500
    assert data["cash_flow_summary"]["total_committed"] == 4500
    assert data["cash_flow_summary"]["total_paid"] == 1000
    assert data["cash_flow_summary"]["months_until_wedding"] == 5
    assert data["malformed_contracts"] == ["ctr_broken"]


def test_forecast_empty(client: TestClient):
    response = client.post("/v1/forecast", json={"contracts": []})

    assert response.status_code == 200
    data = response.json()
    assert data["payment_schedule"] == []
    assert data["cash_flow_summary"]["total_committed"] == 0


def test_forecast_non_finite_budget_counts_as_zero(client: TestClient):
    response = client.post(
        "/v1/forecast",
        json={
            "wedding": {"id": "wed_1", "total_budget": "NaN"},
            "contracts": [{"id": "ctr_1", "payment_milestones": [{"name": "Deposit", "amount": 100, "dueDate": "2026-02-01"}]}],
            "now": "2026-01-15T12:00:00Z",
        },
    )

    assert response.status_code == 200
    assert response.json()["monthly_projections"][0]["budget_remaining"] == -100


def test_dashboard_ceremonies(client: TestClient):
    response = client.post("/v1/dashboard/ceremonies", json=ESTIMATE_BODY)

    assert response.status_code == 200
    data = response.json()
    assert (data["total_low"], data["total_high"]) == (20800, 44600)
    assert data["rows"][0]["ceremony_id"] == "hindu_mehndi"
    assert len(data["rows"][0]["breakdown"]) == 5
    assert data["rows"][1]["breakdown"] is None


def test_dashboard_budget(client: TestClient):
    response = client.post(
        "/v1/dashboard/budget",
        json={
            "total_budget": 50000,
            "category_spent": [10000, 5000],
            "allocated_by_ceremonies": 40200,
            "allocated_by_categories": 40000,
            "track_by_ceremony": False,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["remaining_budget"] == 35000
    assert data["allocated"] == 40000
    assert data["has_mismatch"] is True
