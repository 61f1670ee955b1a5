"""Tests for the SQLModel repositories behind the embedded gateway."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from finboard.domain.repositories import TransactionQuery
from finboard.errors import NotFoundError


def test_list_is_newest_first_with_category_joined(gateway, user_id, category_factory, transaction_factory):
    food = category_factory("Food")
    transaction_factory("10", occurred_on=date(2024, 1, 1), category_id=food.id, description="old")
    transaction_factory("20", occurred_on=date(2024, 3, 1), description="new")

    rows = gateway.transactions.list_all(user_id=user_id)

    assert [row.description for row in rows] == ["new", "old"]
    assert rows[0].category is None
    assert rows[0].category_name == "Uncategorized"
    assert rows[1].category.name == "Food"
    assert rows[1].category_color == food.color


def test_query_filters_and_ascending_order(gateway, user_id, category_factory, transaction_factory):
    salary = category_factory("Salary", kind="income")
    transaction_factory("5", occurred_on=date(2023, 12, 31))
    transaction_factory("100", kind="income", occurred_on=date(2024, 1, 20), category_id=salary.id)
    transaction_factory("7", occurred_on=date(2024, 1, 10))
    transaction_factory("9", occurred_on=date(2024, 2, 1))

    window = gateway.transactions.list_all(
        TransactionQuery(start=date(2024, 1, 1), end=date(2024, 1, 31), ascending=True),
        user_id=user_id,
    )
    assert [row.occurred_on for row in window] == [date(2024, 1, 10), date(2024, 1, 20)]

    incomes = gateway.transactions.list_all(TransactionQuery(kind="income"), user_id=user_id)
    assert [row.amount for row in incomes] == [Decimal("100.00")]

    by_category = gateway.transactions.list_all(
        TransactionQuery(category_id=salary.id), user_id=user_id
    )
    assert len(by_category) == 1


def test_rows_are_scoped_to_their_owner(gateway, user_id, transaction_factory):
    other = gateway.auth.sign_up("other@example.com", "another-pass")
    transaction_factory("1", owner=other.user_id)
    mine = transaction_factory("2")

    assert [row.id for row in gateway.transactions.list_all(user_id=user_id)] == [mine.id]
    assert gateway.transactions.get_by_id(mine.id, user_id=other.user_id) is None


def test_update_applies_changes_and_reloads_category(gateway, user_id, category_factory, transaction_factory):
    rent = category_factory("Rent")
    txn = transaction_factory("10", description="Before")

    updated = gateway.transactions.update(
        txn.id, {"description": "After", "amount": Decimal("12.50"), "category_id": rent.id}, user_id=user_id
    )

    assert updated.description == "After"
    assert updated.amount == Decimal("12.50")
    assert updated.category.name == "Rent"
    assert gateway.transactions.get_by_id(txn.id, user_id=user_id).description == "After"


def test_update_rejects_unknown_ids_and_fields(gateway, user_id, transaction_factory):
    txn = transaction_factory("10")

    with pytest.raises(NotFoundError):
        gateway.transactions.update("missing", {"description": "x"}, user_id=user_id)
    with pytest.raises(ValueError):
        gateway.transactions.update(txn.id, {"user_id": "someone-else"}, user_id=user_id)


def test_delete_then_list_omits_the_row(gateway, user_id, transaction_factory):
    keep = transaction_factory("1")
    drop = transaction_factory("2")

    gateway.transactions.delete(drop.id, user_id=user_id)

    ids = [row.id for row in gateway.transactions.list_all(user_id=user_id)]
    assert drop.id not in ids
    assert keep.id in ids


def test_category_crud_orders_by_name(gateway, user_id, category_factory):
    category_factory("Zoo")
    bills = category_factory("Bills")

    assert [c.name for c in gateway.categories.list_all(user_id=user_id)] == ["Bills", "Zoo"]

    renamed = gateway.categories.update(bills.id, {"name": "Utilities", "color": "#0EA5E9"}, user_id=user_id)
    assert renamed.name == "Utilities"
    assert gateway.categories.get_by_id(bills.id, user_id=user_id).color == "#0EA5E9"

    gateway.categories.delete(bills.id, user_id=user_id)
    assert [c.name for c in gateway.categories.list_all(user_id=user_id)] == ["Zoo"]
    with pytest.raises(NotFoundError):
        gateway.categories.update(bills.id, {"name": "Gone"}, user_id=user_id)


def test_deleting_a_category_keeps_its_transactions(gateway, user_id, category_factory, transaction_factory):
    food = category_factory("Food")
    txn = transaction_factory("3", category_id=food.id)

    gateway.categories.delete(food.id, user_id=user_id)

    remaining = gateway.transactions.get_by_id(txn.id, user_id=user_id)
    assert remaining is not None
    assert remaining.category_name == "Uncategorized"


def test_profile_created_at_sign_up_and_updatable(gateway, user_id, identity):
    profile = gateway.profiles.get(user_id=user_id)
    assert profile.email == identity.email
    assert profile.currency == "BRL"

    updated = gateway.profiles.update({"full_name": "Ana Souza", "currency": "USD"}, user_id=user_id)
    assert updated.full_name == "Ana Souza"
    assert gateway.profiles.get(user_id=user_id).currency == "USD"

    with pytest.raises(ValueError):
        gateway.profiles.update({"email": "new@example.com"}, user_id=user_id)
