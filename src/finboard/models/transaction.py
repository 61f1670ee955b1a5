"""SQLModel definitions for ledger transactions."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..constants import COMPLETED, EXPENSE, UNCATEGORIZED, UNCATEGORIZED_COLOR
from ._ids import new_id

if TYPE_CHECKING:  # pragma: no cover - import guard for circular dependency
    from .category import Category


class Transaction(SQLModel, table=True):
    """A single income or expense entry.

    ``amount`` is always non-negative; ``kind`` carries the direction.
    """

    __tablename__: ClassVar[str] = "transactions"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(nullable=False, index=True, max_length=36)
    description: str = Field(default="", max_length=255)
    amount: Decimal = Field(default=Decimal("0.00"), max_digits=12, decimal_places=2)
    occurred_on: date = Field(nullable=False, index=True)
    kind: str = Field(default=EXPENSE, nullable=False, max_length=16, index=True)
    status: str = Field(default=COMPLETED, nullable=False, max_length=16)
    category_id: Optional[str] = Field(default=None, foreign_key="categories.id", max_length=36)

    category: "Category | None" = Relationship(
        back_populates="transactions",
        sa_relationship=relationship("Category", back_populates="transactions"),
    )

    @property
    def category_name(self) -> str:
        category = self.category
        return category.name if category is not None and category.name else UNCATEGORIZED

    @property
    def category_color(self) -> str:
        category = self.category
        return category.color if category is not None and category.color else UNCATEGORIZED_COLOR
