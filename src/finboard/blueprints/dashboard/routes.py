"""Dashboard routes."""

from __future__ import annotations

from datetime import date

from flask import Response, render_template

from ...errors import GatewayError
from ...i18n import format_date
from ...logging_config import get_logger
from ...services import aggregation, charts
from ...web import app_config, current_gateway, current_user_id, load_currency
from . import bp

logger = get_logger(__name__)


def _fetch_transactions() -> list:
    """All transactions, newest first; an empty list when the gateway fails."""

    try:
        return current_gateway().transactions.list_all(user_id=current_user_id())
    except GatewayError:
        logger.exception("Failed to load dashboard transactions")
        return []


def _recent(transactions: list) -> tuple[list[str], list]:
    n = app_config().RECENT_SERIES_LENGTH
    window = aggregation.recent_window(transactions, n)
    labels = [format_date(txn.occurred_on, short=True) for txn in window]
    return labels, aggregation.recent_series(transactions, n)


@bp.get("/")
def index():
    """Month totals, recent cash flow and the latest entries."""

    transactions = _fetch_transactions()
    month = aggregation.monthly_totals(transactions, date.today())
    labels, values = _recent(transactions)
    load_currency()

    return render_template(
        "dashboard/index.html",
        month=month,
        transaction_count=len(transactions),
        recent=list(zip(labels, values)),
        latest=transactions[: app_config().LATEST_ROWS],
    )


@bp.get("/cashflow.png")
def cashflow_png():
    labels, values = _recent(_fetch_transactions())
    return Response(charts.cashflow_chart(labels, values), mimetype="image/png")


@bp.get("/distribution.png")
def distribution_png():
    month = aggregation.monthly_totals(_fetch_transactions(), date.today())
    return Response(charts.distribution_chart(month.income, month.expense), mimetype="image/png")
