"""Default categories and demo data, written through the gateway."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from ..constants import COMPLETED, DEFAULT_CATEGORIES, EXPENSE, INCOME, PENDING
from ..logging_config import get_logger
from ..models.category import Category
from ..models.transaction import Transaction
from .aggregation import shift_months

if TYPE_CHECKING:  # pragma: no cover
    from ..infra.gateway import Gateway

logger = get_logger(__name__)


@dataclass(frozen=True)
class SeedSummary:
    """Counts returned after seeding."""

    categories: int
    transactions: int


# (months ago, day, description, amount, kind, category name, status)
_DEMO_TRANSACTIONS = [
    (2, 5, "Monthly salary", "4200.00", INCOME, "Salary", COMPLETED),
    (2, 8, "Rent", "1500.00", EXPENSE, "Housing", COMPLETED),
    (2, 12, "Supermarket", "412.35", EXPENSE, "Groceries", COMPLETED),
    (2, 20, "Electricity bill", "180.90", EXPENSE, "Utilities", COMPLETED),
    (1, 5, "Monthly salary", "4200.00", INCOME, "Salary", COMPLETED),
    (1, 8, "Rent", "1500.00", EXPENSE, "Housing", COMPLETED),
    (1, 14, "Design gig", "850.00", INCOME, "Freelance", COMPLETED),
    (1, 18, "Dinner with friends", "126.40", EXPENSE, "Dining Out", COMPLETED),
    (1, 22, "Bus pass", "95.00", EXPENSE, "Transportation", COMPLETED),
    (0, 1, "Rent", "1500.00", EXPENSE, "Housing", PENDING),
    (0, 3, "Supermarket", "388.10", EXPENSE, "Groceries", COMPLETED),
    (0, 5, "Monthly salary", "4200.00", INCOME, "Salary", COMPLETED),
    (0, 6, "Cinema", "64.00", EXPENSE, "Entertainment", COMPLETED),
]


def seed_default_categories(gateway: Gateway, *, user_id: str) -> dict[str, Category]:
    """Create the default income/expense categories the user does not have yet."""

    existing = {category.name: category for category in gateway.categories.list_all(user_id=user_id)}
    created = 0
    for name, kind, color, icon in DEFAULT_CATEGORIES:
        if name in existing:
            continue
        existing[name] = gateway.categories.create(
            Category(user_id=user_id, name=name, kind=kind, color=color, icon=icon),
            user_id=user_id,
        )
        created += 1
    logger.info("Default categories seeded", extra={"user_id": user_id, "created_count": created})
    return existing


def seed_demo_transactions(
    gateway: Gateway, *, user_id: str, today: Optional[date] = None
) -> SeedSummary:
    """Seed three months of sample transactions, skipping users who already have data."""

    today = today or date.today()
    categories = seed_default_categories(gateway, user_id=user_id)
    if gateway.transactions.list_all(user_id=user_id):
        logger.info("Demo seed skipped; transactions exist", extra={"user_id": user_id})
        return SeedSummary(categories=len(categories), transactions=0)

    created = 0
    for months_ago, day, description, amount, kind, category_name, status in _DEMO_TRANSACTIONS:
        occurred_on = shift_months(today, months_ago).replace(day=day)
        if occurred_on > today:
            continue
        category = categories.get(category_name)
        gateway.transactions.create(
            Transaction(
                user_id=user_id,
                description=description,
                amount=Decimal(amount),
                occurred_on=occurred_on,
                kind=kind,
                status=status,
                category_id=category.id if category else None,
            ),
            user_id=user_id,
        )
        created += 1
    logger.info("Demo transactions seeded", extra={"user_id": user_id, "created_count": created})
    return SeedSummary(categories=len(categories), transactions=created)
