"""Matplotlib chart renderers for the dashboard and reports screens.

Each renderer builds a standalone ``Figure`` (no pyplot state, safe across
request threads) and returns PNG bytes.
"""

from __future__ import annotations

import io
from decimal import Decimal
from typing import Iterable, Sequence

from matplotlib.figure import Figure

from .aggregation import MonthPoint

INCOME_COLOR = "#10B981"
EXPENSE_COLOR = "#EF4444"
LINE_COLOR = "#3B82F6"
PALETTE = ("#10B981", "#3B82F6", "#F59E0B", "#EF4444", "#8B5CF6", "#EC4899")
EMPTY_COLOR = "#666"


def _png(fig: Figure) -> bytes:
    buffer = io.BytesIO()
    fig.savefig(buffer, format="png", bbox_inches="tight", dpi=100)
    return buffer.getvalue()


def _empty(ax, message: str) -> None:
    ax.text(0.5, 0.5, message, ha="center", va="center", fontsize=14, color=EMPTY_COLOR)
    ax.axis("off")


def cashflow_chart(labels: Sequence[str], values: Sequence[Decimal]) -> bytes:
    """Line chart of signed recent amounts, oldest first."""

    fig = Figure(figsize=(8, 3.5))
    ax = fig.add_subplot()
    if values:
        ax.plot(list(labels), [float(v) for v in values], marker="o", color=LINE_COLOR)
        ax.axhline(0, color="#D1D5DB", linewidth=1)
        ax.set_title("Cash flow", fontsize=12, fontweight="bold")
        ax.grid(axis="y", alpha=0.3)
    else:
        _empty(ax, "No transactions yet")
    return _png(fig)


def distribution_chart(income: Decimal, expense: Decimal) -> bytes:
    """Pie of this month's income against expenses."""

    fig = Figure(figsize=(4.5, 4.5))
    ax = fig.add_subplot()
    if income > 0 or expense > 0:
        ax.pie(
            [float(income), float(expense)],
            labels=["Income", "Expenses"],
            colors=[INCOME_COLOR, EXPENSE_COLOR],
            autopct=lambda pct: f"{pct:.1f}%" if pct > 0 else "",
            startangle=90,
            wedgeprops=dict(edgecolor="white", linewidth=1.5),
        )
        ax.axis("equal")
        ax.set_title("This month", fontsize=12, fontweight="bold")
    else:
        _empty(ax, "No data this month")
    return _png(fig)


def monthly_bar_chart(points: Iterable[MonthPoint]) -> bytes:
    """Grouped income/expense bars per month."""

    series = list(points)
    fig = Figure(figsize=(8, 4))
    ax = fig.add_subplot()
    if series:
        positions = range(len(series))
        width = 0.4
        ax.bar(
            [p - width / 2 for p in positions],
            [float(point.income) for point in series],
            width=width,
            color=INCOME_COLOR,
            label="Income",
        )
        ax.bar(
            [p + width / 2 for p in positions],
            [float(point.expense) for point in series],
            width=width,
            color=EXPENSE_COLOR,
            label="Expenses",
        )
        ax.set_xticks(list(positions))
        ax.set_xticklabels([point.label for point in series])
        ax.legend(fontsize=9)
        ax.grid(axis="y", alpha=0.3)
        ax.set_title("Income vs expenses", fontsize=12, fontweight="bold")
    else:
        _empty(ax, "No transactions in this period")
    return _png(fig)


def category_donut_chart(breakdown: dict[str, Decimal]) -> bytes:
    """Donut of expenses per category with a legend of amounts and shares."""

    labels = list(breakdown)
    sizes = [float(value) for value in breakdown.values()]
    grand_total = sum(sizes)

    fig = Figure(figsize=(8, 5))
    ax = fig.add_subplot()
    if grand_total > 0:
        colors = [PALETTE[i % len(PALETTE)] for i in range(len(sizes))]
        wedges, _texts, autotexts = ax.pie(
            sizes,
            labels=None,
            autopct=lambda pct: f"{pct:.1f}%" if pct > 4 else "",
            wedgeprops=dict(width=0.45, edgecolor="white", linewidth=1.5),
            startangle=90,
            colors=colors,
            pctdistance=0.78,
        )
        for autotext in autotexts:
            autotext.set_fontsize(9)
            autotext.set_fontweight("bold")
            autotext.set_color("white")

        ax.text(0, 0, f"{grand_total:,.2f}", ha="center", va="center", fontsize=14, fontweight="bold")
        ax.legend(
            wedges,
            [
                f"{name}: {size:,.2f} ({size / grand_total * 100:.1f}%)"
                for name, size in zip(labels, sizes)
            ],
            loc="center left",
            bbox_to_anchor=(1.02, 0.5),
            fontsize=9,
            framealpha=0.9,
        )
        ax.axis("equal")
        ax.set_title("Expenses by category", fontsize=12, fontweight="bold")
    else:
        _empty(ax, "No expense data")
    return _png(fig)
