"""Profile repository protocol."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol

from ...models.profile import Profile


class ProfileRepository(Protocol):
    """Repository for the signed-in user's profile row."""

    def get(self, *, user_id: str) -> Optional[Profile]:
        """Return the profile, or ``None`` when it has not been created yet."""
        ...

    def update(self, changes: Mapping[str, Any], *, user_id: str) -> Profile:
        """Apply a partial update and return the stored profile."""
        ...
