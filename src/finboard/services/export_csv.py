"""CSV export helpers for FinBoard."""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Any, Iterable

from ..i18n import format_amount, format_date, label
from .aggregation import category_label

COLUMNS = ("date", "description", "category", "amount", "type", "status")


def export_filename(today: date) -> str:
    return f"transactions_{today.isoformat()}.csv"


def export_transactions_csv(transactions: Iterable[Any], locale: str = "en") -> bytes:
    """Serialize transactions to UTF-8 CSV bytes.

    Columns are deterministic: date, description, category, amount, type, status,
    with localized headers and type/status labels. An empty list yields the
    header row only.
    """

    buffer = io.StringIO(newline="")
    writer = csv.writer(buffer, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow([label(locale, column) for column in COLUMNS])
    for txn in transactions:
        writer.writerow(
            [
                format_date(txn.occurred_on),
                txn.description or "",
                category_label(txn),
                format_amount(txn.amount),
                label(locale, txn.kind),
                label(locale, txn.status),
            ]
        )
    return buffer.getvalue().encode("utf-8")
