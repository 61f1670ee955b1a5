"""Transaction repository protocol."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Mapping, Optional, Protocol

from ...models.transaction import Transaction


@dataclass(frozen=True, slots=True)
class TransactionQuery:
    """Server-side filter and ordering for transaction listings.

    Every field is optional; ``None`` means the constraint is not applied.
    Results are ordered by date, newest first unless ``ascending`` is set.
    """

    start: Optional[date] = None
    end: Optional[date] = None
    kind: Optional[str] = None
    category_id: Optional[str] = None
    ascending: bool = False


class TransactionRepository(Protocol):
    """Repository for managing transaction rows."""

    def list_all(
        self, query: TransactionQuery | None = None, *, user_id: str
    ) -> list[Transaction]:
        """List transactions matching ``query`` with their category joined."""
        ...

    def get_by_id(self, transaction_id: str, *, user_id: str) -> Optional[Transaction]:
        """Retrieve a transaction by ID."""
        ...

    def create(self, transaction: Transaction, *, user_id: str) -> Transaction:
        """Insert a new transaction."""
        ...

    def update(
        self, transaction_id: str, changes: Mapping[str, Any], *, user_id: str
    ) -> Transaction:
        """Apply a partial update; raise ``NotFoundError`` for unknown ids."""
        ...

    def delete(self, transaction_id: str, *, user_id: str) -> None:
        """Delete a transaction by ID."""
        ...
