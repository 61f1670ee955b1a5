"""Reports routes."""

from __future__ import annotations

from datetime import date

from flask import Response, render_template, request

from ...domain.repositories.transaction import TransactionQuery
from ...errors import GatewayError
from ...logging_config import get_logger
from ...services import aggregation, charts
from ...services.ledger_service import parse_date
from ...services.reports import (
    PERIOD_MONTHS,
    build_report,
    render_report_pdf,
    report_filename,
    report_period,
)
from ...web import abandon, app_config, current_gateway, current_user_id, load_currency
from . import bp

logger = get_logger(__name__)

DEFAULT_PERIOD = "month"


def _window() -> tuple[str, date, date]:
    """Resolve ``period`` or an explicit ``start``/``end`` pair from the query string."""

    period = request.args.get("period") or DEFAULT_PERIOD
    if period not in PERIOD_MONTHS:
        period = DEFAULT_PERIOD
    start, end = report_period(period, date.today())

    custom_start = parse_date(request.args.get("start"))
    custom_end = parse_date(request.args.get("end"))
    if custom_start is not None or custom_end is not None:
        period = "custom"
        start = custom_start or start
        end = custom_end or end
    return period, start, end


def _fetch(start: date, end: date) -> list:
    """Transactions inside ``[start, end]``, oldest first."""

    return current_gateway().transactions.list_all(
        TransactionQuery(start=start, end=end, ascending=True), user_id=current_user_id()
    )


def _window_args(start: date, end: date) -> dict[str, str]:
    return {"start": start.isoformat(), "end": end.isoformat()}


@bp.get("/")
def index():
    """Period totals, category breakdown and monthly series."""

    period, start, end = _window()
    try:
        transactions = _fetch(start, end)
    except GatewayError:
        logger.exception("Failed to load report transactions")
        transactions = []
    load_currency()

    return render_template(
        "reports/index.html",
        period=period,
        periods=list(PERIOD_MONTHS),
        start=start,
        end=end,
        window_args=_window_args(start, end),
        totals=aggregation.totals(transactions),
        breakdown=aggregation.category_expense_breakdown(transactions),
        series=aggregation.monthly_income_expense_series(
            transactions, order=app_config().MONTHLY_SERIES_ORDER
        ),
    )


def _document():
    _, start, end = _window()
    transactions = _fetch(start, end)
    return build_report(transactions, start, end, load_currency(), app_config().LOCALE)


@bp.get("/export.pdf")
def export_pdf():
    try:
        document = _document()
    except GatewayError:
        return abandon("export report", "reports.index", **request.args.to_dict())
    return Response(
        render_report_pdf(document),
        mimetype="application/pdf",
        headers={
            "Content-Disposition": f"attachment; filename={report_filename(date.today(), 'pdf')}"
        },
    )


@bp.get("/export.txt")
def export_txt():
    try:
        document = _document()
    except GatewayError:
        return abandon("export report", "reports.index", **request.args.to_dict())
    return Response(
        document.to_text(),
        mimetype="text/plain",
        headers={
            "Content-Disposition": f"attachment; filename={report_filename(date.today(), 'txt')}"
        },
    )


@bp.get("/monthly.png")
def monthly_png():
    _, start, end = _window()
    try:
        transactions = _fetch(start, end)
    except GatewayError:
        logger.exception("Failed to load report transactions")
        transactions = []
    series = aggregation.monthly_income_expense_series(
        transactions, order=app_config().MONTHLY_SERIES_ORDER
    )
    return Response(charts.monthly_bar_chart(series), mimetype="image/png")


@bp.get("/categories.png")
def categories_png():
    _, start, end = _window()
    try:
        transactions = _fetch(start, end)
    except GatewayError:
        logger.exception("Failed to load report transactions")
        transactions = []
    breakdown = aggregation.category_expense_breakdown(transactions)
    return Response(charts.category_donut_chart(breakdown), mimetype="image/png")
