"""Per-user profile row."""

from __future__ import annotations

from typing import ClassVar

from sqlmodel import Field, SQLModel


class Profile(SQLModel, table=True):
    """Display name, contact email and preferred currency of a user."""

    __tablename__: ClassVar[str] = "profiles"

    id: str = Field(primary_key=True, max_length=36)
    full_name: str = Field(default="", max_length=128)
    email: str = Field(default="", max_length=255)
    currency: str = Field(default="BRL", max_length=3)
