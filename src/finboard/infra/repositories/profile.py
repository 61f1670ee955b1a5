"""SQLModel implementation of the profile repository."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ...models.profile import Profile
from ..database import SessionFactory
from ._base import apply_changes, translate_errors

UPDATABLE_FIELDS = ("full_name", "currency")


class SQLModelProfileRepository:
    """Profiles keyed by the user id."""

    def __init__(self, session_factory: SessionFactory):
        self.session_factory = session_factory

    def get(self, *, user_id: str) -> Optional[Profile]:
        with translate_errors("get profile"), self.session_factory() as session:
            obj = session.get(Profile, user_id)
            if obj:
                session.expunge(obj)
            return obj

    def update(self, changes: Mapping[str, Any], *, user_id: str) -> Profile:
        with translate_errors("update profile"), self.session_factory() as session:
            obj = session.get(Profile, user_id)
            if obj is None:
                obj = Profile(id=user_id)
            apply_changes(obj, changes, UPDATABLE_FIELDS)
            session.add(obj)
            session.commit()
            session.refresh(obj)
            session.expunge(obj)
            return obj
