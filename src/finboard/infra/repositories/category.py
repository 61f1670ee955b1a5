"""SQLModel implementation of the category repository."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from sqlmodel import select

from ...errors import NotFoundError
from ...models.category import Category
from ..database import SessionFactory
from ._base import apply_changes, translate_errors

UPDATABLE_FIELDS = ("name", "kind", "color", "icon")


class SQLModelCategoryRepository:
    """SQLModel-based category repository implementation."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def list_all(self, *, user_id: str) -> list[Category]:
        with translate_errors("list categories"), self.session_factory() as session:
            statement = (
                select(Category)
                .where(Category.user_id == user_id)
                .order_by(Category.name)  # type: ignore[arg-type]
            )
            rows = list(session.exec(statement).all())
            session.expunge_all()
            return rows

    def get_by_id(self, category_id: str, *, user_id: str) -> Optional[Category]:
        with translate_errors("get category"), self.session_factory() as session:
            obj = session.exec(
                select(Category).where(Category.id == category_id, Category.user_id == user_id)
            ).first()
            if obj:
                session.expunge(obj)
            return obj

    def create(self, category: Category, *, user_id: str) -> Category:
        with translate_errors("create category"), self.session_factory() as session:
            category.user_id = user_id
            session.add(category)
            session.commit()
            session.refresh(category)
            session.expunge(category)
            return category

    def update(self, category_id: str, changes: Mapping[str, Any], *, user_id: str) -> Category:
        with translate_errors("update category"), self.session_factory() as session:
            obj = session.exec(
                select(Category).where(Category.id == category_id, Category.user_id == user_id)
            ).first()
            if obj is None:
                raise NotFoundError(f"Category {category_id} was not found", status=404)
            apply_changes(obj, changes, UPDATABLE_FIELDS)
            session.add(obj)
            session.commit()
            session.refresh(obj)
            session.expunge(obj)
            return obj

    def delete(self, category_id: str, *, user_id: str) -> None:
        """Delete a category; its transactions keep existing without a category."""

        with translate_errors("delete category"), self.session_factory() as session:
            obj = session.exec(
                select(Category).where(Category.id == category_id, Category.user_id == user_id)
            ).first()
            if obj is not None:
                session.delete(obj)
                session.commit()
