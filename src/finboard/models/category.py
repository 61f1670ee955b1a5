"""Ledger category definitions."""

from __future__ import annotations

from typing import TYPE_CHECKING, ClassVar, Optional

from sqlalchemy.orm import relationship
from sqlmodel import Field, Relationship, SQLModel

from ..constants import EXPENSE
from ._ids import new_id

if TYPE_CHECKING:  # pragma: no cover
    from .transaction import Transaction


class Category(SQLModel, table=True):
    """Income or expense bucket that transactions reference."""

    __tablename__: ClassVar[str] = "categories"

    id: str = Field(default_factory=new_id, primary_key=True, max_length=36)
    user_id: str = Field(nullable=False, index=True, max_length=36)
    name: str = Field(index=True, nullable=False, max_length=64)
    kind: str = Field(default=EXPENSE, nullable=False, max_length=16)
    color: str = Field(default="#000000", max_length=7)
    icon: Optional[str] = Field(default=None, max_length=32)

    transactions: list["Transaction"] = Relationship(
        back_populates="category",
        sa_relationship=relationship("Transaction", back_populates="category"),
    )
