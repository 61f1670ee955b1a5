"""Aggregates derived from an already-fetched transaction list.

Every function here is pure: no gateway calls, no side effects. Inputs are
any objects exposing ``kind``, ``amount``, ``occurred_on`` and an optional
``category`` with a ``name``; amounts are non-negative and share one currency.
"""

from __future__ import annotations

from calendar import monthrange
from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Iterable, Sequence

from ..constants import EXPENSE, INCOME, UNCATEGORIZED

ZERO = Decimal("0")
MONTH_LABEL_FORMAT = "%m/%Y"


@dataclass(frozen=True, slots=True)
class Totals:
    """Income and expense sums for a set of transactions."""

    income: Decimal = ZERO
    expense: Decimal = ZERO

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense


@dataclass(frozen=True, slots=True)
class MonthPoint:
    """Income/expense sums for one calendar month."""

    label: str
    income: Decimal
    expense: Decimal


def _amount(txn: Any) -> Decimal:
    value = getattr(txn, "amount", None)
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def category_label(txn: Any) -> str:
    """Name of the joined category, or ``Uncategorized`` when the join is absent."""

    category = getattr(txn, "category", None)
    name = getattr(category, "name", None) if category is not None else None
    return name or UNCATEGORIZED


def month_bounds(reference: date) -> tuple[date, date]:
    """First and last day of the calendar month containing ``reference``."""

    last_day = monthrange(reference.year, reference.month)[1]
    return reference.replace(day=1), reference.replace(day=last_day)


def shift_months(reference: date, months: int) -> date:
    """First day of the month ``months`` before the one containing ``reference``."""

    index = reference.year * 12 + (reference.month - 1) - months
    return date(index // 12, index % 12 + 1, 1)


def totals(transactions: Iterable[Any]) -> Totals:
    """Sum every transaction by kind, without a date window."""

    income = ZERO
    expense = ZERO
    for txn in transactions:
        if txn.kind == INCOME:
            income += _amount(txn)
        elif txn.kind == EXPENSE:
            expense += _amount(txn)
    return Totals(income=income, expense=expense)


def monthly_totals(transactions: Iterable[Any], reference_date: date) -> Totals:
    """Totals restricted to the calendar month containing ``reference_date``."""

    first, last = month_bounds(reference_date)
    return totals(txn for txn in transactions if first <= txn.occurred_on <= last)


def category_expense_breakdown(transactions: Iterable[Any]) -> dict[str, Decimal]:
    """Expense totals keyed by category name, in order of first appearance.

    Categories without expenses are absent rather than zero.
    """

    breakdown: dict[str, Decimal] = {}
    for txn in transactions:
        if txn.kind != EXPENSE:
            continue
        name = category_label(txn)
        breakdown[name] = breakdown.get(name, ZERO) + _amount(txn)
    return breakdown


def monthly_income_expense_series(
    transactions: Iterable[Any], order: str = "first_seen"
) -> list[MonthPoint]:
    """Income/expense per ``MM/YYYY`` month.

    ``order="first_seen"`` keeps months in the order they first appear in the
    input (a newest-first fetch therefore yields newest months first);
    ``order="chronological"`` sorts by calendar month.
    """

    if order not in ("first_seen", "chronological"):
        raise ValueError(f"Unknown series order: {order!r}")

    buckets: dict[tuple[int, int], list[Decimal]] = {}
    for txn in transactions:
        key = (txn.occurred_on.year, txn.occurred_on.month)
        bucket = buckets.setdefault(key, [ZERO, ZERO])
        if txn.kind == INCOME:
            bucket[0] += _amount(txn)
        else:
            bucket[1] += _amount(txn)

    keys: Sequence[tuple[int, int]] = list(buckets)
    if order == "chronological":
        keys = sorted(keys)

    return [
        MonthPoint(
            label=date(year, month, 1).strftime(MONTH_LABEL_FORMAT),
            income=buckets[(year, month)][0],
            expense=buckets[(year, month)][1],
        )
        for year, month in keys
    ]


def recent_series(transactions: Sequence[Any], n: int) -> list[Decimal]:
    """Signed amounts of the ``n`` newest transactions, oldest first.

    Input must already be newest-first. Income maps to ``+amount`` and
    expense to ``-amount``.
    """

    return [
        _amount(txn) if txn.kind == INCOME else -_amount(txn)
        for txn in recent_window(transactions, n)
    ]


def recent_window(transactions: Sequence[Any], n: int) -> list[Any]:
    """The transactions behind :func:`recent_series`, oldest first."""

    if n <= 0:
        return []
    window = list(transactions[:n])
    window.reverse()
    return window
