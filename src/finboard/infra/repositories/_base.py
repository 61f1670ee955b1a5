"""Shared helpers for SQLModel repositories."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Iterable, Iterator, Mapping

from sqlalchemy.exc import SQLAlchemyError

from ...errors import GatewayError


@contextmanager
def translate_errors(operation: str) -> Iterator[None]:
    """Re-raise database failures as ``GatewayError``."""

    try:
        yield
    except SQLAlchemyError as exc:
        raise GatewayError(f"{operation} failed: {exc}") from exc


def apply_changes(obj: Any, changes: Mapping[str, Any], allowed: Iterable[str]) -> None:
    """Copy whitelisted ``changes`` onto ``obj``."""

    allowed_fields = set(allowed)
    unknown = set(changes) - allowed_fields
    if unknown:
        raise ValueError(f"Cannot update field(s): {', '.join(sorted(unknown))}")
    for key, value in changes.items():
        setattr(obj, key, value)
