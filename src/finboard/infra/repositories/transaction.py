"""SQLModel implementation of the transaction repository."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlalchemy.orm import selectinload
from sqlmodel import Session, select

from ...domain.repositories.transaction import TransactionQuery
from ...errors import NotFoundError
from ...models.transaction import Transaction
from ..database import SessionFactory
from ._base import apply_changes, translate_errors

UPDATABLE_FIELDS = ("description", "amount", "occurred_on", "kind", "status", "category_id")


def _detach(session: Session, transaction: Transaction) -> Transaction:
    # Load the category join before the row leaves the session.
    _ = transaction.category
    session.expunge(transaction)
    return transaction


class SQLModelTransactionRepository:
    """SQLModel-based transaction repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def list_all(
        self, query: TransactionQuery | None = None, *, user_id: str
    ) -> list[Transaction]:
        """List transactions matching ``query``, category joined."""

        query = query or TransactionQuery()
        with translate_errors("list transactions"), self.session_factory() as session:
            statement = (
                select(Transaction)
                .where(Transaction.user_id == user_id)
                .options(selectinload(Transaction.category))  # type: ignore[arg-type]
            )
            if query.start is not None:
                statement = statement.where(Transaction.occurred_on >= query.start)
            if query.end is not None:
                statement = statement.where(Transaction.occurred_on <= query.end)
            if query.kind:
                statement = statement.where(Transaction.kind == query.kind)
            if query.category_id:
                statement = statement.where(Transaction.category_id == query.category_id)

            if query.ascending:
                statement = statement.order_by(Transaction.occurred_on.asc())  # type: ignore[attr-defined]
            else:
                statement = statement.order_by(Transaction.occurred_on.desc())  # type: ignore[attr-defined]
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_by_id(self, transaction_id: str, *, user_id: str) -> Optional[Transaction]:
        with translate_errors("get transaction"), self.session_factory() as session:
            obj = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.user_id == user_id)
            ).first()
            if obj is None:
                return None
            return _detach(session, obj)

    def create(self, transaction: Transaction, *, user_id: str) -> Transaction:
        with translate_errors("create transaction"), self.session_factory() as session:
            transaction.user_id = user_id
            session.add(transaction)
            session.commit()
            session.refresh(transaction)
            return _detach(session, transaction)

    def update(
        self, transaction_id: str, changes: Mapping[str, Any], *, user_id: str
    ) -> Transaction:
        with translate_errors("update transaction"), self.session_factory() as session:
            obj = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.user_id == user_id)
            ).first()
            if obj is None:
                raise NotFoundError(f"Transaction {transaction_id} was not found", status=404)
            apply_changes(obj, changes, UPDATABLE_FIELDS)
            session.add(obj)
            session.commit()
            session.refresh(obj)
            return _detach(session, obj)

    def delete(self, transaction_id: str, *, user_id: str) -> None:
        with translate_errors("delete transaction"), self.session_factory() as session:
            obj = session.exec(
                select(Transaction)
                .where(Transaction.id == transaction_id)
                .where(Transaction.user_id == user_id)
            ).first()
            if obj is not None:
                session.delete(obj)
                session.commit()
