"""Cash-flow forecaster - project contract payment milestones by month"""

import json
import logging
import math
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from viah_budget.config import settings
from viah_budget.domain.exceptions import MalformedMilestoneError
from viah_budget.domain.models import (
    BudgetForecast,
    CashFlowSummary,
    Contract,
    Milestone,
    MonthlyProjection,
    PaymentScheduleItem,
    Wedding,
)
from viah_budget.domain.scenarios import parse_amount
from viah_budget.utils.date_utils import days_until, month_key, months_between, parse_date

logger = logging.getLogger(__name__)

PAID_STATUS = "paid"


def parse_milestones(raw: Any) -> List[Milestone]:
    """
    Normalize a contract's milestone field into Milestone objects.

    Accepts a list of dicts/Milestones or a JSON string holding such a list.
    Individual entries with a non-numeric amount are dropped; a missing or
    invalid due date is kept as None so paid totals still count it.

    Raises:
        MalformedMilestoneError: When the field as a whole cannot be decoded
    """
    if raw is None or raw == "":
        return []
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except ValueError as e:
            raise MalformedMilestoneError(f"Invalid milestone JSON: {e}") from e
    if not isinstance(raw, list):
        raise MalformedMilestoneError(f"Expected a list of milestones, got {type(raw).__name__}")

    milestones = []
    for entry in raw:
        if isinstance(entry, Milestone):
            milestones.append(entry)
            continue
        if not isinstance(entry, dict):
            logger.warning("Skipping milestone entry of type %s", type(entry).__name__)
            continue
        amount = _milestone_amount(entry.get("amount"))
        if amount is None:
            logger.warning("Skipping milestone with non-numeric amount %r", entry.get("amount"))
            continue
        milestones.append(
            Milestone(
                name=str(entry.get("name") or ""),
                amount=amount,
                due_date=parse_date(entry.get("dueDate", entry.get("due_date"))),
                status=str(entry.get("status") or "pending").lower(),
            )
        )
    return milestones


def _milestone_amount(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    try:
        amount = float(str(value).replace(",", "").replace("$", "").strip())
    except ValueError:
        return None
    return amount if math.isfinite(amount) else None


def build_budget_forecast(
    contracts: Iterable[Contract],
    wedding: Optional[Wedding] = None,
    now: Optional[datetime] = None,
) -> BudgetForecast:
    """
    Forecast cash flow from contract payment milestones.

    Steps:
    1. Flatten milestones across contracts; paid ones only feed total_paid
    2. Drop unpaid milestones without a due date or more than 30 days overdue
    3. Stable sort by due date (ties keep contract/milestone order)
    4. Bucket by YYYY-MM with cumulative projected spend vs total budget
    5. Summarize committed, paid and per-month spend rates

    A contract with malformed milestone JSON contributes nothing and is listed
    in malformed_contracts; the other contracts are unaffected.
    """
    now = now or datetime.now(timezone.utc)
    today = now.date()
    total_budget = parse_amount(wedding.total_budget) if wedding else 0.0

    schedule: List[PaymentScheduleItem] = []
    malformed: List[str] = []
    total_committed = 0.0
    total_paid = 0.0

    for contract in contracts:
        try:
            milestones = parse_milestones(contract.payment_milestones)
        except MalformedMilestoneError as e:
            logger.warning(
                "Ignoring milestones for contract",
                extra={"contract_id": contract.id, "error": str(e)},
            )
            malformed.append(contract.id)
            continue

        for milestone in milestones:
            if milestone.status == PAID_STATUS:
                total_paid += milestone.amount
                continue

            total_committed += milestone.amount
            if milestone.due_date is None:
                continue

            days_until_due = days_until(milestone.due_date, now)
            if days_until_due < -settings.overdue_cutoff_days:
                continue

            schedule.append(
                PaymentScheduleItem(
                    contract_id=contract.id,
                    vendor_id=contract.vendor_id,
                    name=milestone.name,
                    amount=milestone.amount,
                    due_date=milestone.due_date,
                    days_until_due=days_until_due,
                    status=milestone.status,
                )
            )

    # sorted() is stable, so equal due dates keep iteration order
    schedule = sorted(schedule, key=lambda item: item.due_date)

    return BudgetForecast(
        monthly_projections=project_monthly_spend(schedule, total_budget),
        cash_flow_summary=summarize_cash_flow(total_committed, total_paid, wedding, today),
        payment_schedule=schedule,
        malformed_contracts=malformed,
    )


def project_monthly_spend(schedule: List[PaymentScheduleItem], total_budget: float) -> List[MonthlyProjection]:
    """Cumulative spend per calendar month; remaining budget may go negative"""
    by_month: Dict[str, float] = {}
    for item in schedule:
        key = month_key(item.due_date)
        by_month[key] = by_month.get(key, 0.0) + item.amount

    projections = []
    projected_spent = 0.0
    for key in sorted(by_month):
        projected_spent += by_month[key]
        projections.append(
            MonthlyProjection(
                month=key,
                projected_spent=projected_spent,
                budget_remaining=total_budget - projected_spent,
                upcoming_payments=by_month[key],
            )
        )
    return projections


def summarize_cash_flow(total_committed: float, total_paid: float, wedding: Optional[Wedding], today: date) -> CashFlowSummary:
    months_until_wedding = 0
    elapsed_months = 0
    if wedding is not None:
        wedding_date = parse_date(wedding.wedding_date)
        if wedding_date is not None:
            months_until_wedding = max(0, months_between(today, wedding_date))
        created = parse_date(wedding.created_at)
        if created is not None:
            elapsed_months = max(0, months_between(created, today))

    total_remaining = total_committed
    return CashFlowSummary(
        total_committed=total_committed,
        total_paid=total_paid,
        total_remaining=total_remaining,
        months_until_wedding=months_until_wedding,
        average_monthly_spend=total_paid / elapsed_months if elapsed_months > 0 else 0.0,
        projected_monthly_spend=total_remaining / months_until_wedding if months_until_wedding > 0 else 0.0,
    )
