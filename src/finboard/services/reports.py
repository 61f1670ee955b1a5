"""Financial report document and its text/PDF renderings."""

from __future__ import annotations

import io
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any, Iterable

from matplotlib.backends.backend_pdf import PdfPages
from matplotlib.figure import Figure

from ..i18n import format_currency, format_date, label
from .aggregation import category_expense_breakdown, month_bounds, shift_months, totals

PERIOD_MONTHS = {"month": 1, "3months": 3, "6months": 6, "year": 12}

# A4 portrait in millimetres; text positions below are in the same unit.
PAGE_WIDTH_MM = 210
PAGE_HEIGHT_MM = 297
LEFT_MARGIN_MM = 20
TOP_MM = 20
LINE_STEP_MM = 10
BOTTOM_LIMIT_MM = 280
MM_PER_INCH = 25.4


def report_period(period: str, today: date) -> tuple[date, date]:
    """Window for a named period: start of the month N-1 months ago to end of this month."""

    try:
        months = PERIOD_MONTHS[period]
    except KeyError as exc:
        raise ValueError(f"Unknown report period: {period!r}") from exc
    start = shift_months(today, months - 1)
    _, end = month_bounds(today)
    return start, end


def report_filename(today: date, extension: str) -> str:
    return f"financial_report_{today.isoformat()}.{extension}"


@dataclass(frozen=True)
class ReportDocument:
    """Everything needed to lay out the financial report."""

    start: date
    end: date
    income: Decimal
    expense: Decimal
    categories: list[tuple[str, Decimal]] = field(default_factory=list)
    currency: str = "BRL"
    locale: str = "en"

    @property
    def balance(self) -> Decimal:
        return self.income - self.expense

    def _money(self, value: Decimal) -> str:
        return format_currency(value, self.currency, self.locale)

    @property
    def title(self) -> str:
        return label(self.locale, "report_title")

    @property
    def period_line(self) -> str:
        return label(self.locale, "period").format(
            start=format_date(self.start), end=format_date(self.end)
        )

    def summary_lines(self) -> list[str]:
        return [
            f"{label(self.locale, 'total_income')}: {self._money(self.income)}",
            f"{label(self.locale, 'total_expense')}: {self._money(self.expense)}",
            f"{label(self.locale, 'balance')}: {self._money(self.balance)}",
        ]

    def category_lines(self) -> list[str]:
        return [f"{name}: {self._money(amount)}" for name, amount in self.categories]

    def lines(self) -> list[str]:
        """Plain-text layout: title, period, summary block, category block."""

        out = [
            self.title,
            self.period_line,
            "",
            label(self.locale, "summary"),
            *self.summary_lines(),
            "",
            label(self.locale, "expenses_by_category"),
        ]
        out.extend(self.category_lines() or [label(self.locale, "no_expenses")])
        return out

    def to_text(self) -> str:
        return "\n".join(self.lines()) + "\n"


def build_report(
    transactions: Iterable[Any],
    start: date,
    end: date,
    currency: str = "BRL",
    locale: str = "en",
) -> ReportDocument:
    """Summarize an already-windowed transaction list into a report."""

    items = list(transactions)
    sums = totals(items)
    return ReportDocument(
        start=start,
        end=end,
        income=sums.income,
        expense=sums.expense,
        categories=list(category_expense_breakdown(items).items()),
        currency=currency,
        locale=locale,
    )


class _PdfPage:
    """One A4 figure addressed in millimetres from the top-left corner."""

    def __init__(self) -> None:
        self.figure = Figure(figsize=(PAGE_WIDTH_MM / MM_PER_INCH, PAGE_HEIGHT_MM / MM_PER_INCH))

    def text(self, x_mm: float, y_mm: float, value: str, *, size: int, center: bool = False) -> None:
        self.figure.text(
            x_mm / PAGE_WIDTH_MM,
            1 - y_mm / PAGE_HEIGHT_MM,
            value,
            fontsize=size,
            ha="center" if center else "left",
            va="baseline",
        )


def layout_report_pages(document: ReportDocument) -> list[Figure]:
    """Place the report at fixed coordinates on A4 pages.

    Category lines continue on a new page once they pass the bottom limit.
    """

    pages: list[_PdfPage] = [_PdfPage()]
    page = pages[0]
    page.text(PAGE_WIDTH_MM / 2, TOP_MM, document.title, size=20, center=True)
    page.text(PAGE_WIDTH_MM / 2, TOP_MM + 10, document.period_line, size=12, center=True)

    page.text(LEFT_MARGIN_MM, 50, label(document.locale, "summary"), size=14)
    y = 60
    for line in document.summary_lines():
        page.text(LEFT_MARGIN_MM, y, line, size=12)
        y += LINE_STEP_MM

    page.text(LEFT_MARGIN_MM, 100, label(document.locale, "expenses_by_category"), size=14)
    y = 110
    for line in document.category_lines() or [label(document.locale, "no_expenses")]:
        if y > BOTTOM_LIMIT_MM:
            page = _PdfPage()
            pages.append(page)
            y = TOP_MM
        page.text(LEFT_MARGIN_MM, y, line, size=12)
        y += LINE_STEP_MM

    return [item.figure for item in pages]


def render_report_pdf(document: ReportDocument) -> bytes:
    """Render the report as a PDF document."""

    buffer = io.BytesIO()
    with PdfPages(buffer) as pdf:
        for figure in layout_report_pages(document):
            pdf.savefig(figure)
    return buffer.getvalue()
