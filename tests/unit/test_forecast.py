"""Unit tests for the cash-flow forecaster"""

import json
import pytest
from datetime import date, datetime, timezone
from viah_budget.domain.exceptions import MalformedMilestoneError
from viah_budget.domain.forecast import build_budget_forecast, parse_milestones
from viah_budget.domain.models import Contract, Wedding
from viah_budget.utils.date_utils import days_until, months_between, parse_date

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def wedding() -> Wedding:
    return Wedding(
        id="wed_1",
        total_budget="10000",
        guest_count_estimate=250,
        wedding_date=date(2026, 6, 20),
        created_at=date(2025, 11, 1),
    )


@pytest.fixture
def contracts() -> list[Contract]:
    return [
        Contract(
            id="ctr_venue",
            vendor_id="vendor_venue",
            payment_milestones=[
                {"name": "Deposit", "amount": 1000, "dueDate": "2025-12-01", "status": "paid"},
                {"name": "Second Payment", "amount": 2000, "dueDate": "2026-02-10", "status": "pending"},
                {"name": "Final Payment", "amount": 3000, "dueDate": "2026-03-05", "status": "pending"},
            ],
        ),
        Contract(
            id="ctr_caterer",
            vendor_id="vendor_caterer",
            payment_milestones=json.dumps(
                [{"name": "Deposit", "amount": "1500", "dueDate": "2026-02-01T00:00:00Z", "status": "pending"}]
            ),
        ),
    ]


def test_empty_contract_list_is_all_zero():
    forecast = build_budget_forecast([], None, NOW)

    assert forecast.payment_schedule == []
    assert forecast.monthly_projections == []
    summary = forecast.cash_flow_summary
    assert summary.total_committed == 0
    assert summary.total_paid == 0
    assert summary.total_remaining == 0
    assert summary.months_until_wedding == 0
    assert summary.average_monthly_spend == 0
    assert summary.projected_monthly_spend == 0


def test_schedule_sorted_by_due_date(contracts, wedding):
    forecast = build_budget_forecast(contracts, wedding, NOW)

    assert [(item.contract_id, item.name) for item in forecast.payment_schedule] == [
        ("ctr_caterer", "Deposit"),
        ("ctr_venue", "Second Payment"),
        ("ctr_venue", "Final Payment"),
    ]
    assert forecast.payment_schedule[0].days_until_due == 17
    assert forecast.payment_schedule[0].vendor_id == "vendor_caterer"


def test_monthly_projections_are_cumulative(contracts, wedding):
    forecast = build_budget_forecast(contracts, wedding, NOW)

    assert [(p.month, p.upcoming_payments, p.projected_spent, p.budget_remaining) for p in forecast.monthly_projections] == [
        ("2026-02", 3500, 3500, 6500),
        ("2026-03", 3000, 6500, 3500),
    ]


def test_cash_flow_summary(contracts, wedding):
    """
    Committed 6,500 unpaid, 1,000 paid.
    5 months until the June wedding → 1,300/month projected.
    2 months since the wedding was created → 500/month average.
    """
    summary = build_budget_forecast(contracts, wedding, NOW).cash_flow_summary

    assert summary.total_committed == 6500
    assert summary.total_paid == 1000
    assert summary.total_remaining == 6500
    assert summary.months_until_wedding == 5
    assert summary.projected_monthly_spend == 1300
    assert summary.average_monthly_spend == 500


def test_malformed_contract_does_not_affect_others(contracts, wedding):
    baseline = build_budget_forecast(contracts, wedding, NOW)
    broken = Contract(id="ctr_broken", vendor_id="vendor_x", payment_milestones="{not json")

    forecast = build_budget_forecast(contracts + [broken], wedding, NOW)

    assert forecast.malformed_contracts == ["ctr_broken"]
    assert forecast.cash_flow_summary == baseline.cash_flow_summary
    assert forecast.payment_schedule == baseline.payment_schedule


def test_overdue_cutoff():
    """Test unpaid milestones more than 30 days overdue leave the schedule"""
    contract = Contract(
        id="ctr_1",
        payment_milestones=[
            {"name": "Long overdue", "amount": 400, "dueDate": "2025-12-01"},
            {"name": "Recently overdue", "amount": 600, "dueDate": "2025-12-20"},
        ],
    )

    forecast = build_budget_forecast([contract], None, NOW)

    assert [item.name for item in forecast.payment_schedule] == ["Recently overdue"]
    assert forecast.payment_schedule[0].days_until_due == -26
    assert forecast.cash_flow_summary.total_committed == 1000


def test_equal_due_dates_keep_input_order():
    contracts = [
        Contract(id="ctr_a", payment_milestones=[
            {"name": "A1", "amount": 100, "dueDate": "2026-04-01"},
            {"name": "A2", "amount": 100, "dueDate": "2026-04-01"},
        ]),
        Contract(id="ctr_b", payment_milestones=[
            {"name": "B1", "amount": 100, "dueDate": "2026-04-01"},
            {"name": "B0", "amount": 100, "dueDate": "2026-03-31"},
        ]),
    ]

    forecast = build_budget_forecast(contracts, None, NOW)

    assert [item.name for item in forecast.payment_schedule] == ["B0", "A1", "A2", "B1"]


def test_missing_due_date_excludes_only_that_milestone():
    contract = Contract(
        id="ctr_1",
        payment_milestones=[
            {"name": "Undated", "amount": 250},
            {"name": "Bad date", "amount": 250, "dueDate": "sometime in spring"},
            {"name": "Dated", "amount": 500, "dueDate": "2026-05-01"},
        ],
    )

    forecast = build_budget_forecast([contract], None, NOW)

    assert [item.name for item in forecast.payment_schedule] == ["Dated"]
    assert forecast.cash_flow_summary.total_committed == 1000


def test_overspend_gives_negative_remaining():
    wedding = Wedding(id="wed_1", total_budget="1000")
    contract = Contract(id="ctr_1", payment_milestones=[{"name": "Balloon", "amount": 1500, "dueDate": "2026-02-01"}])

    forecast = build_budget_forecast([contract], wedding, NOW)

    assert forecast.monthly_projections[0].budget_remaining == -500


def test_non_finite_budget_counts_as_zero():
    wedding = Wedding(id="wed_1", total_budget="NaN")
    contract = Contract(id="ctr_1", payment_milestones=[{"name": "Deposit", "amount": 100, "dueDate": "2026-02-01"}])

    forecast = build_budget_forecast([contract], wedding, NOW)

    assert forecast.monthly_projections[0].projected_spent == 100
    assert forecast.monthly_projections[0].budget_remaining == -100


def test_no_wedding_date_projects_nothing_per_month(contracts):
    summary = build_budget_forecast(contracts, Wedding(id="wed_1"), NOW).cash_flow_summary

    assert summary.months_until_wedding == 0
    assert summary.projected_monthly_spend == 0
    assert summary.average_monthly_spend == 0


def test_parse_milestones_skips_bad_entries():
    milestones = parse_milestones([
        {"name": "Deposit", "amount": "$1,200", "dueDate": "2026-02-01", "status": "PAID"},
        {"name": "Bogus", "amount": "lots"},
        {"name": "Infinite", "amount": "inf"},
        "not a milestone",
    ])

    assert len(milestones) == 1
    assert milestones[0].amount == 1200
    assert milestones[0].due_date == date(2026, 2, 1)
    assert milestones[0].status == "paid"


def test_parse_milestones_accepts_snake_case_due_date():
    milestones = parse_milestones([{"name": "Deposit", "amount": 100, "due_date": "2026-02-01"}])

    assert milestones[0].due_date == date(2026, 2, 1)
    assert milestones[0].status == "pending"


@pytest.mark.parametrize("raw", ["{not json", '{"name": "Deposit"}', 42])
def test_parse_milestones_rejects_malformed_field(raw):
    with pytest.raises(MalformedMilestoneError):
        parse_milestones(raw)


def test_parse_milestones_empty():
    assert parse_milestones(None) == []
    assert parse_milestones("") == []
    assert parse_milestones("[]") == []


def test_date_helpers():
    assert parse_date("2026-02-01T10:30:00Z") == date(2026, 2, 1)
    assert parse_date("02/01/2026") is None
    assert months_between(date(2026, 1, 31), date(2026, 2, 1)) == 1
    assert days_until(date(2026, 1, 16), datetime(2026, 1, 15, 12, 0)) == 1
