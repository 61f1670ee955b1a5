"""Exception types shared by the gateway, services and views."""

from __future__ import annotations


class FinBoardError(Exception):
    """Base class for application errors."""


class GatewayError(FinBoardError):
    """A request to the data gateway failed."""

    def __init__(self, message: str, *, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class AuthError(GatewayError):
    """Credentials were rejected or the session is no longer valid."""


class NotFoundError(GatewayError):
    """The referenced row does not exist for the signed-in user."""


class CategoryKindMismatch(ValueError):
    """Raised when a transaction's kind disagrees with its category's kind."""

    def __init__(self, transaction_kind: str, category_name: str, category_kind: str) -> None:
        super().__init__(
            f"A {transaction_kind} transaction cannot use the {category_kind} "
            f"category '{category_name}'."
        )
        self.transaction_kind = transaction_kind
        self.category_name = category_name
        self.category_kind = category_kind


__all__ = [
    "AuthError",
    "CategoryKindMismatch",
    "FinBoardError",
    "GatewayError",
    "NotFoundError",
]
