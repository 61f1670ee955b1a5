"""Tests for CSV export helpers and value formatting."""

from __future__ import annotations

import csv
import io
from datetime import date
from decimal import Decimal

from finboard.i18n import format_currency, label
from finboard.models import Category, Transaction
from finboard.services.export_csv import export_filename, export_transactions_csv


def _rows(payload: bytes) -> list[list[str]]:
    return list(csv.reader(io.StringIO(payload.decode("utf-8"))))


def _transaction(**overrides) -> Transaction:
    values = {
        "user_id": "u1",
        "description": "Groceries",
        "amount": Decimal("50.5"),
        "occurred_on": date(2024, 1, 5),
        "kind": "expense",
        "status": "completed",
    }
    values.update(overrides)
    return Transaction(**values)


def test_empty_list_is_header_only():
    rows = _rows(export_transactions_csv([], "en"))

    assert rows == [["Date", "Description", "Category", "Amount", "Type", "Status"]]


def test_rows_use_day_first_dates_and_two_place_amounts():
    txn = _transaction()
    txn.category = Category(user_id="u1", name="Food", kind="expense")

    salary = _transaction(
        description="Salary, March", kind="income", amount=Decimal("3000"), status="pending"
    )

    rows = _rows(export_transactions_csv([txn, salary]))

    assert rows[1] == ["05/01/2024", "Groceries", "Food", "50.50", "Expense", "Completed"]
    assert rows[2] == ["05/01/2024", "Salary, March", "Uncategorized", "3000.00", "Income", "Pending"]


def test_portuguese_labels():
    rows = _rows(export_transactions_csv([_transaction()], "pt_BR"))

    assert rows[0] == ["Data", "Descrição", "Categoria", "Valor", "Tipo", "Status"]
    assert rows[1][4:] == ["Despesa", "Concluída"]


def test_unknown_locale_falls_back_to_english():
    assert label("fr", "amount") == "Amount"
    assert label("pt_BR", "not-a-key") == "not-a-key"


def test_format_currency_per_locale():
    assert format_currency(Decimal("1234.5"), "BRL", "en") == "R$ 1,234.50"
    assert format_currency(Decimal("1234.5"), "BRL", "pt_BR") == "R$ 1.234,50"
    assert format_currency(Decimal("-20"), "USD", "en") == "-$ 20.00"
    assert format_currency(Decimal("0"), "EUR", "en") == "€ 0.00"


def test_export_filename():
    assert export_filename(date(2024, 6, 1)) == "transactions_2024-06-01.csv"
