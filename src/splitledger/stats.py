"""Spending highlights for a group."""

import calendar
from collections.abc import Sequence
from datetime import datetime, timedelta
from typing import Literal

from .models import DailySpending, Member, SpenderTotal, Transaction

Period = Literal["week", "month"]


def total_spent(transactions: Sequence[Transaction]) -> int:
    """Sum of all transaction amounts in minor units."""
    return sum(tx.amount for tx in transactions)


def _one_month_before(moment: datetime) -> datetime:
    """Same day and time one calendar month earlier, clamped to month end."""
    if moment.month == 1:
        year, month = moment.year - 1, 12
    else:
        year, month = moment.year, moment.month - 1
    day = min(moment.day, calendar.monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


def period_start(period: Period, now: datetime) -> datetime:
    """Start of the trailing week or month ending at `now`."""
    if period == "week":
        return now - timedelta(days=7)
    return _one_month_before(now)


def spending_in_period(
    transactions: Sequence[Transaction],
    period: Period,
    now: datetime | None = None,
) -> int:
    """
    Total spent during the trailing week or month.

    Transactions without a date are not counted.

    Args:
        transactions: Transactions to sum
        period: "week" (last 7 days) or "month" (since the same day last month)
        now: End of the period, defaults to the current time

    Returns:
        Amount in minor units
    """
    now = now or datetime.now()
    start = period_start(period, now)

    return sum(
        tx.amount
        for tx in transactions
        if tx.occurred_at is not None and _comparable(tx.occurred_at, now) >= start
    )


def _comparable(moment: datetime, reference: datetime) -> datetime:
    """
    Convert `moment` so it can be compared with `reference`.

    Naive datetimes are local time: an aware moment is converted to local
    wall-clock time before its tzinfo is dropped, and a naive moment is read
    as local time when the reference is aware.
    """
    if (moment.tzinfo is None) == (reference.tzinfo is None):
        return moment
    if reference.tzinfo is None:
        return moment.astimezone().replace(tzinfo=None)
    return moment.astimezone(reference.tzinfo)


def top_spender(
    transactions: Sequence[Transaction], members: Sequence[Member]
) -> SpenderTotal | None:
    """
    Member who has paid the most.

    Returns None when there are no transactions. Ties go to the member listed
    first; if no member paid anything, the first member is returned with 0.
    """
    if not transactions or not members:
        return None

    paid = {member.id: 0 for member in members}
    for tx in transactions:
        if tx.payer_id in paid:
            paid[tx.payer_id] += tx.amount

    top_id = members[0].id
    top_amount = 0
    for member_id, amount in paid.items():
        if amount > top_amount:
            top_id = member_id
            top_amount = amount

    return SpenderTotal(member_id=top_id, amount=top_amount)


def spending_over_time(transactions: Sequence[Transaction]) -> list[DailySpending]:
    """Spending per calendar day, oldest first. Undated transactions are skipped."""
    per_day: dict[str, int] = {}
    for tx in transactions:
        if tx.occurred_at is None:
            continue
        day = tx.occurred_at.date().isoformat()
        per_day[day] = per_day.get(day, 0) + tx.amount

    return [
        DailySpending(day=day, amount=amount) for day, amount in sorted(per_day.items())
    ]
