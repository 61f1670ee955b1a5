"""Identifier helpers shared by table models."""

from __future__ import annotations

from uuid import uuid4


def new_id() -> str:
    """Return a fresh opaque row identifier."""

    return str(uuid4())
