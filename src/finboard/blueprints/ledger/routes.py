"""Ledger routes."""

from __future__ import annotations

from datetime import date

from flask import Response, flash, redirect, render_template, request, url_for
from werkzeug.exceptions import NotFound

from ...constants import KINDS, STATUSES
from ...errors import CategoryKindMismatch, GatewayError, NotFoundError
from ...logging_config import get_logger
from ...services.export_csv import export_filename, export_transactions_csv
from ...services.ledger_service import LedgerFilters, apply_filters, save_transaction
from ...web import abandon, app_config, current_gateway, current_user_id, load_currency
from . import bp
from .forms import TransactionForm

logger = get_logger(__name__)


def _categories() -> list:
    try:
        return current_gateway().categories.list_all(user_id=current_user_id())
    except GatewayError:
        logger.exception("Failed to load categories")
        return []


def _filtered(filters: LedgerFilters) -> list:
    """The list the ledger shows for ``filters``, newest first."""

    transactions = current_gateway().transactions.list_all(user_id=current_user_id())
    return apply_filters(transactions, filters)


def _render_form(form: TransactionForm, *, transaction_id: str | None, filters: LedgerFilters):
    if transaction_id:
        action = url_for("ledger.update_transaction", transaction_id=transaction_id, **filters.as_args())
    else:
        action = url_for("ledger.create_transaction", **filters.as_args())
    return render_template(
        "ledger/form.html",
        form=form,
        form_values=form.raw_data,
        categories=_categories(),
        kinds=KINDS,
        statuses=STATUSES,
        form_action=action,
        list_url=url_for("ledger.list_transactions", **filters.as_args()),
        is_edit=transaction_id is not None,
        transaction_id=transaction_id,
    )


def _save(form: TransactionForm, transaction_id: str | None):
    """Validate and persist; re-render with a 400 on invalid input."""

    filters = LedgerFilters.from_mapping(request.args)
    if not form.validate():
        return _render_form(form, transaction_id=transaction_id, filters=filters), 400

    try:
        save_transaction(
            current_gateway(),
            user_id=current_user_id(),
            description=form.description,
            amount=form.amount,
            occurred_on=form.occurred_on,
            kind=form.kind,
            status=form.status,
            category_id=form.category_id,
            transaction_id=transaction_id,
            enforce_category_kind=app_config().ENFORCE_CATEGORY_KIND,
        )
    except CategoryKindMismatch as exc:
        form.errors.setdefault("category_id", []).append(str(exc))
        return _render_form(form, transaction_id=transaction_id, filters=filters), 400
    except GatewayError:
        return abandon("save transaction", "ledger.list_transactions", **filters.as_args())

    flash("Transaction updated." if transaction_id else "Transaction added.", "success")
    return redirect(url_for("ledger.list_transactions", **filters.as_args()))


@bp.get("/")
def list_transactions():
    """Display ledger transactions with filters."""

    filters = LedgerFilters.from_mapping(request.args)
    try:
        transactions = _filtered(filters)
    except GatewayError:
        logger.exception("Failed to load ledger transactions")
        transactions = []
    load_currency()

    return render_template(
        "ledger/index.html",
        transactions=transactions,
        categories=_categories(),
        filters=filters,
        kinds=KINDS,
    )


@bp.get("/new")
def new_transaction():
    """Render form for creating a transaction."""

    form = TransactionForm(occurred_on=date.today())
    form.raw_data = form.values()
    return _render_form(form, transaction_id=None, filters=LedgerFilters.from_mapping(request.args))


@bp.post("/")
def create_transaction():
    """Persist a new transaction from submitted form data."""

    return _save(TransactionForm.from_mapping(request.form), None)


@bp.get("/<transaction_id>/edit")
def edit_transaction(transaction_id: str):
    """Render edit form for a specific transaction."""

    filters = LedgerFilters.from_mapping(request.args)
    try:
        transaction = current_gateway().transactions.get_by_id(
            transaction_id, user_id=current_user_id()
        )
    except NotFoundError:
        transaction = None
    except GatewayError:
        return abandon("load transaction", "ledger.list_transactions", **filters.as_args())
    if transaction is None:
        raise NotFound(f"Transaction {transaction_id} was not found")

    return _render_form(
        TransactionForm.from_transaction(transaction), transaction_id=transaction_id, filters=filters
    )


@bp.post("/<transaction_id>")
def update_transaction(transaction_id: str):
    """Handle update submissions for an existing transaction."""

    return _save(TransactionForm.from_mapping(request.form), transaction_id)


@bp.post("/<transaction_id>/delete")
def delete_transaction(transaction_id: str):
    filters = LedgerFilters.from_mapping(request.args)
    try:
        current_gateway().transactions.delete(transaction_id, user_id=current_user_id())
    except GatewayError:
        return abandon("delete transaction", "ledger.list_transactions", **filters.as_args())

    logger.info("Transaction deleted", extra={"transaction_id": transaction_id})
    flash("Transaction deleted.", "success")
    return redirect(url_for("ledger.list_transactions", **filters.as_args()))


@bp.get("/export.csv")
def export_csv():
    """Download the filtered list as CSV."""

    filters = LedgerFilters.from_mapping(request.args)
    try:
        transactions = _filtered(filters)
    except GatewayError:
        return abandon("export transactions", "ledger.list_transactions", **filters.as_args())

    payload = export_transactions_csv(transactions, app_config().LOCALE)
    return Response(
        payload,
        mimetype="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={export_filename(date.today())}"
        },
    )
