"""Ledger form validation helpers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from ...constants import COMPLETED, EXPENSE, KINDS, STATUSES

MAX_AMOUNT = Decimal("9999999999.99")
TWO_PLACES = Decimal("0.01")


@dataclass(slots=True)
class TransactionForm:
    """Represents transaction input prior to validation."""

    description: str = ""
    amount: Decimal | None = None
    occurred_on: date | None = None
    kind: str = EXPENSE
    category_id: Optional[str] = None
    status: str = COMPLETED
    errors: dict[str, list[str]] = field(default_factory=dict, init=False)
    raw_data: dict[str, str] = field(default_factory=dict, init=False)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> TransactionForm:
        """Create a form populated from request data."""

        form = cls()
        form.load(data)
        return form

    @classmethod
    def from_transaction(cls, transaction: Any) -> TransactionForm:
        form = cls(
            description=transaction.description or "",
            amount=transaction.amount,
            occurred_on=transaction.occurred_on,
            kind=transaction.kind,
            category_id=transaction.category_id,
            status=transaction.status,
        )
        form.raw_data = form.values()
        return form

    def load(self, data: Mapping[str, Any]) -> None:
        """Bind incoming mapping data to the form state."""

        keys = ("description", "amount", "occurred_on", "kind", "category_id", "status")
        self.raw_data = {}
        for key in keys:
            value = data.get(key)
            self.raw_data[key] = "" if value is None else str(value)

        self.description = self.raw_data["description"].strip()

    def validate(self) -> bool:
        """Validate the bound data and populate typed attributes."""

        self.errors.clear()

        if not self.description:
            self._add_error("description", "Description is required.")
        elif len(self.description) > 255:
            self._add_error("description", "Description must be 255 characters or fewer.")

        amount_raw = self.raw_data.get("amount", "").strip().replace(",", ".")
        self.amount = None
        if not amount_raw:
            self._add_error("amount", "Amount is required.")
        else:
            try:
                parsed = Decimal(amount_raw)
            except InvalidOperation:
                self._add_error("amount", "Enter a valid number for the amount.")
            else:
                if not parsed.is_finite() or parsed <= 0:
                    self._add_error("amount", "Amount must be greater than zero.")
                elif parsed > MAX_AMOUNT:
                    self._add_error("amount", "Amount is too large.")
                else:
                    self.amount = parsed.quantize(TWO_PLACES)

        occurred_raw = self.raw_data.get("occurred_on", "").strip()
        self.occurred_on = None
        if not occurred_raw:
            self._add_error("occurred_on", "Date is required.")
        else:
            try:
                self.occurred_on = date.fromisoformat(occurred_raw)
            except ValueError:
                self._add_error("occurred_on", "Enter a valid date (YYYY-MM-DD).")

        self.kind = self.raw_data.get("kind", "").strip() or EXPENSE
        if self.kind not in KINDS:
            self._add_error("kind", "Type must be income or expense.")

        self.status = self.raw_data.get("status", "").strip() or COMPLETED
        if self.status not in STATUSES:
            self._add_error("status", "Choose a valid status.")

        self.category_id = self.raw_data.get("category_id", "").strip() or None

        return not self.errors

    def values(self) -> dict[str, str]:
        """HTML-friendly string values for re-rendering the form."""

        return {
            "description": self.description,
            "amount": f"{self.amount:.2f}" if self.amount is not None else "",
            "occurred_on": self.occurred_on.isoformat() if self.occurred_on else "",
            "kind": self.kind,
            "category_id": self.category_id or "",
            "status": self.status,
        }

    def _add_error(self, field: str, message: str) -> None:
        """Accumulate validation errors for a specific field."""

        self.errors.setdefault(field, []).append(message)
