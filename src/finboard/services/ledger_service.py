"""Ledger-specific helpers for filtering and persistence."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Iterable, Mapping, Optional

from ..constants import KINDS
from ..domain.repositories.transaction import TransactionQuery
from ..errors import CategoryKindMismatch, NotFoundError
from ..logging_config import get_logger
from ..models.category import Category
from ..models.transaction import Transaction

if TYPE_CHECKING:  # pragma: no cover
    from ..infra.gateway import Gateway

logger = get_logger(__name__)

ALL = "all"


def parse_date(raw: Any) -> Optional[date]:
    """Parse ``YYYY-MM-DD``; malformed or empty input means no constraint."""

    if isinstance(raw, date):
        return raw
    text = (raw or "").strip() if isinstance(raw, str) else ""
    if not text:
        return None
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def normalize_choice(raw_value: Optional[str]) -> str:
    """Return a filter choice, treating falsy/'any'/'none' as ``all``."""

    if not raw_value:
        return ALL
    value = raw_value.strip()
    if value.lower() in {ALL, "any", "none", ""}:
        return ALL
    return value


@dataclass(frozen=True)
class LedgerFilters:
    """Filters applied to ledger listings."""

    kind: str = ALL  # income | expense | all
    category_id: str = ALL
    start: Optional[date] = None
    end: Optional[date] = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> LedgerFilters:
        """Build filters from query-string values."""

        kind = normalize_choice(data.get("kind"))
        if kind != ALL and kind not in KINDS:
            kind = ALL
        return cls(
            kind=kind,
            category_id=normalize_choice(data.get("category_id")),
            start=parse_date(data.get("start")),
            end=parse_date(data.get("end")),
        )

    def matches(self, txn: Any) -> bool:
        """Logical AND of every active constraint."""

        if self.kind != ALL and txn.kind != self.kind:
            return False
        if self.category_id != ALL and txn.category_id != self.category_id:
            return False
        if self.start is not None and txn.occurred_on < self.start:
            return False
        if self.end is not None and txn.occurred_on > self.end:
            return False
        return True

    @property
    def is_active(self) -> bool:
        return self != LedgerFilters()

    def as_args(self) -> dict[str, str]:
        """Query-string form, omitting unset constraints."""

        args: dict[str, str] = {}
        if self.kind != ALL:
            args["kind"] = self.kind
        if self.category_id != ALL:
            args["category_id"] = self.category_id
        if self.start is not None:
            args["start"] = self.start.isoformat()
        if self.end is not None:
            args["end"] = self.end.isoformat()
        return args


def apply_filters(transactions: Iterable[Any], filters: LedgerFilters) -> list[Any]:
    """Keep the transactions matching ``filters``, preserving input order."""

    return [txn for txn in transactions if filters.matches(txn)]


def check_category_kind(gateway: Gateway, *, user_id: str, category_id: str, kind: str) -> None:
    """Raise when ``category_id`` is unknown or belongs to the other kind."""

    category = gateway.categories.get_by_id(category_id, user_id=user_id)
    if category is None:
        raise NotFoundError(f"Category {category_id} was not found", status=404)
    if category.kind != kind:
        raise CategoryKindMismatch(kind, category.name, category.kind)


def check_category_rekind(gateway: Gateway, *, user_id: str, category: Category, kind: str) -> None:
    """Raise when moving ``category`` to ``kind`` would strand transactions of its current kind."""

    if kind == category.kind:
        return
    referencing = gateway.transactions.list_all(
        TransactionQuery(category_id=category.id, kind=category.kind), user_id=user_id
    )
    if referencing:
        raise CategoryKindMismatch(category.kind, category.name, kind)


def save_transaction(
    gateway: Gateway,
    *,
    user_id: str,
    description: str,
    amount: Decimal,
    occurred_on: date,
    kind: str,
    status: str,
    category_id: Optional[str],
    transaction_id: Optional[str] = None,
    enforce_category_kind: bool = True,
) -> Transaction:
    """Centralize transaction creation/update.

    Raises:
        NotFoundError: the category (or, on update, the transaction) does not exist
        CategoryKindMismatch: the category's kind differs and enforcement is on
    """

    if category_id and enforce_category_kind:
        check_category_kind(gateway, user_id=user_id, category_id=category_id, kind=kind)

    fields = {
        "description": description,
        "amount": amount,
        "occurred_on": occurred_on,
        "kind": kind,
        "status": status,
        "category_id": category_id or None,
    }
    if transaction_id:
        saved = gateway.transactions.update(transaction_id, fields, user_id=user_id)
        logger.info("Transaction updated", extra={"transaction_id": transaction_id})
    else:
        saved = gateway.transactions.create(Transaction(user_id=user_id, **fields), user_id=user_id)
        logger.info("Transaction created", extra={"transaction_id": saved.id})
    return saved
