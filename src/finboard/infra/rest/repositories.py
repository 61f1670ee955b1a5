"""REST implementations of the gateway repositories.

Rows use the remote schema's column names (``date``, ``type``); the mapping
helpers translate them to and from the local table models.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Any, Mapping, Optional

from ...domain.repositories.transaction import TransactionQuery
from ...errors import NotFoundError
from ...models.category import Category
from ...models.profile import Profile
from ...models.transaction import Transaction
from .client import RestClient

TRANSACTIONS_PATH = "rest/v1/transactions"
CATEGORIES_PATH = "rest/v1/categories"
PROFILES_PATH = "rest/v1/profiles"

CATEGORY_COLUMNS = "id,user_id,name,type,color,icon"
TRANSACTION_SELECT = f"*,category:categories({CATEGORY_COLUMNS})"
PROFILE_COLUMNS = "id,full_name,email,currency"

RETURN_ROW = {"Prefer": "return=representation"}

_TRANSACTION_FIELDS = {
    "description": "description",
    "amount": "amount",
    "occurred_on": "date",
    "kind": "type",
    "status": "status",
    "category_id": "category_id",
}
_CATEGORY_FIELDS = {"name": "name", "kind": "type", "color": "color", "icon": "icon"}
_PROFILE_FIELDS = {"full_name": "full_name", "currency": "currency"}


def _encode(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, date):
        return value.isoformat()
    return value


def _to_row(changes: Mapping[str, Any], columns: Mapping[str, str]) -> dict[str, Any]:
    unknown = set(changes) - set(columns)
    if unknown:
        raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
    return {columns[key]: _encode(value) for key, value in changes.items()}


def _category_from_row(row: Mapping[str, Any]) -> Category:
    return Category(
        id=str(row["id"]),
        user_id=str(row.get("user_id") or ""),
        name=row.get("name") or "",
        kind=row.get("type") or "expense",
        color=row.get("color") or "#000000",
        icon=row.get("icon"),
    )


def _transaction_from_row(row: Mapping[str, Any]) -> Transaction:
    transaction = Transaction(
        id=str(row["id"]),
        user_id=str(row.get("user_id") or ""),
        description=row.get("description") or "",
        amount=Decimal(str(row.get("amount") or 0)),
        occurred_on=date.fromisoformat(str(row["date"])[:10]),
        kind=row.get("type") or "expense",
        status=row.get("status") or "completed",
        category_id=str(row["category_id"]) if row.get("category_id") else None,
    )
    joined = row.get("category")
    if isinstance(joined, Mapping) and joined.get("id"):
        transaction.category = _category_from_row(joined)
    return transaction


def _profile_from_row(row: Mapping[str, Any]) -> Profile:
    return Profile(
        id=str(row["id"]),
        full_name=row.get("full_name") or "",
        email=row.get("email") or "",
        currency=row.get("currency") or "BRL",
    )


def _single(rows: Any) -> Optional[Mapping[str, Any]]:
    if isinstance(rows, list):
        return rows[0] if rows else None
    return rows or None


def _eq(value: str) -> str:
    return f"eq.{value}"


class RestTransactionRepository:
    """Transactions stored in the remote ``transactions`` collection."""

    def __init__(self, client: RestClient):
        self.client = client

    def list_all(
        self, query: TransactionQuery | None = None, *, user_id: str
    ) -> list[Transaction]:
        query = query or TransactionQuery()
        params: list[tuple[str, str]] = [
            ("select", TRANSACTION_SELECT),
            ("user_id", _eq(user_id)),
        ]
        if query.start is not None:
            params.append(("date", f"gte.{query.start.isoformat()}"))
        if query.end is not None:
            params.append(("date", f"lte.{query.end.isoformat()}"))
        if query.kind:
            params.append(("type", _eq(query.kind)))
        if query.category_id:
            params.append(("category_id", _eq(query.category_id)))
        params.append(("order", "date.asc" if query.ascending else "date.desc"))

        rows = self.client.request("GET", TRANSACTIONS_PATH, params=params) or []
        return [_transaction_from_row(row) for row in rows]

    def get_by_id(self, transaction_id: str, *, user_id: str) -> Optional[Transaction]:
        rows = self.client.request(
            "GET",
            TRANSACTIONS_PATH,
            params=[
                ("select", TRANSACTION_SELECT),
                ("id", _eq(transaction_id)),
                ("user_id", _eq(user_id)),
            ],
        )
        row = _single(rows)
        return _transaction_from_row(row) if row else None

    def create(self, transaction: Transaction, *, user_id: str) -> Transaction:
        body = _to_row(
            {key: getattr(transaction, key) for key in _TRANSACTION_FIELDS}, _TRANSACTION_FIELDS
        )
        body["user_id"] = user_id
        rows = self.client.request(
            "POST",
            TRANSACTIONS_PATH,
            params=[("select", TRANSACTION_SELECT)],
            json=body,
            headers=RETURN_ROW,
        )
        row = _single(rows)
        if row is None:
            # return=minimal deployments send no body
            transaction.user_id = user_id
            return transaction
        return _transaction_from_row(row)

    def update(
        self, transaction_id: str, changes: Mapping[str, Any], *, user_id: str
    ) -> Transaction:
        rows = self.client.request(
            "PATCH",
            TRANSACTIONS_PATH,
            params=[
                ("select", TRANSACTION_SELECT),
                ("id", _eq(transaction_id)),
                ("user_id", _eq(user_id)),
            ],
            json=_to_row(changes, _TRANSACTION_FIELDS),
            headers=RETURN_ROW,
        )
        row = _single(rows)
        if row is None:
            raise NotFoundError(f"Transaction {transaction_id} was not found", status=404)
        return _transaction_from_row(row)

    def delete(self, transaction_id: str, *, user_id: str) -> None:
        self.client.request(
            "DELETE",
            TRANSACTIONS_PATH,
            params=[("id", _eq(transaction_id)), ("user_id", _eq(user_id))],
        )


class RestCategoryRepository:
    """Categories stored in the remote ``categories`` collection."""

    def __init__(self, client: RestClient):
        self.client = client

    def list_all(self, *, user_id: str) -> list[Category]:
        rows = self.client.request(
            "GET",
            CATEGORIES_PATH,
            params=[
                ("select", CATEGORY_COLUMNS),
                ("user_id", _eq(user_id)),
                ("order", "name.asc"),
            ],
        ) or []
        return [_category_from_row(row) for row in rows]

    def get_by_id(self, category_id: str, *, user_id: str) -> Optional[Category]:
        rows = self.client.request(
            "GET",
            CATEGORIES_PATH,
            params=[
                ("select", CATEGORY_COLUMNS),
                ("id", _eq(category_id)),
                ("user_id", _eq(user_id)),
            ],
        )
        row = _single(rows)
        return _category_from_row(row) if row else None

    def create(self, category: Category, *, user_id: str) -> Category:
        body = _to_row({key: getattr(category, key) for key in _CATEGORY_FIELDS}, _CATEGORY_FIELDS)
        body["user_id"] = user_id
        rows = self.client.request(
            "POST",
            CATEGORIES_PATH,
            params=[("select", CATEGORY_COLUMNS)],
            json=body,
            headers=RETURN_ROW,
        )
        row = _single(rows)
        if row is None:
            category.user_id = user_id
            return category
        return _category_from_row(row)

    def update(self, category_id: str, changes: Mapping[str, Any], *, user_id: str) -> Category:
        rows = self.client.request(
            "PATCH",
            CATEGORIES_PATH,
            params=[
                ("select", CATEGORY_COLUMNS),
                ("id", _eq(category_id)),
                ("user_id", _eq(user_id)),
            ],
            json=_to_row(changes, _CATEGORY_FIELDS),
            headers=RETURN_ROW,
        )
        row = _single(rows)
        if row is None:
            raise NotFoundError(f"Category {category_id} was not found", status=404)
        return _category_from_row(row)

    def delete(self, category_id: str, *, user_id: str) -> None:
        self.client.request(
            "DELETE",
            CATEGORIES_PATH,
            params=[("id", _eq(category_id)), ("user_id", _eq(user_id))],
        )


class RestProfileRepository:
    """Profiles stored in the remote ``profiles`` collection, keyed by user id."""

    def __init__(self, client: RestClient):
        self.client = client

    def get(self, *, user_id: str) -> Optional[Profile]:
        rows = self.client.request(
            "GET",
            PROFILES_PATH,
            params=[("select", PROFILE_COLUMNS), ("id", _eq(user_id))],
        )
        row = _single(rows)
        return _profile_from_row(row) if row else None

    def update(self, changes: Mapping[str, Any], *, user_id: str) -> Profile:
        body = _to_row(changes, _PROFILE_FIELDS)
        rows = self.client.request(
            "PATCH",
            PROFILES_PATH,
            params=[("select", PROFILE_COLUMNS), ("id", _eq(user_id))],
            json=body,
            headers=RETURN_ROW,
        )
        row = _single(rows)
        if row is None:
            rows = self.client.request(
                "POST",
                PROFILES_PATH,
                params=[("select", PROFILE_COLUMNS)],
                json={"id": user_id, **body},
                headers=RETURN_ROW,
            )
            row = _single(rows)
        if row is None:
            raise NotFoundError(f"Profile {user_id} was not found", status=404)
        return _profile_from_row(row)
