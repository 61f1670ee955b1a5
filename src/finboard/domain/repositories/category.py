"""Category repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.category import Category


class CategoryRepository(Protocol):
    """Repository for managing category rows."""

    def list_all(self, *, user_id: str) -> list[Category]:
        """List categories ordered by name."""
        ...

    def get_by_id(self, category_id: str, *, user_id: str) -> Optional[Category]:
        """Retrieve a category by ID."""
        ...

    def create(self, category: Category, *, user_id: str) -> Category:
        """Insert a new category."""
        ...

    def update(self, category_id: str, changes: Mapping[str, Any], *, user_id: str) -> Category:
        """Apply a partial update; raise ``NotFoundError`` for unknown ids."""
        ...

    def delete(self, category_id: str, *, user_id: str) -> None:
        """Delete a category by ID."""
        ...
