"""Authentication surface of the data gateway."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol


@dataclass(frozen=True, slots=True)
class Identity:
    """The signed-in user as seen by the application."""

    user_id: str
    email: str
    access_token: str


class AuthGateway(Protocol):
    """Sign-in, sign-up and session lookup."""

    def sign_in(self, email: str, password: str) -> Identity:
        """Exchange credentials for an identity; raise ``AuthError`` when rejected."""
        ...

    def sign_up(self, email: str, password: str) -> Optional[Identity]:
        """Register an account.

        Returns ``None`` when the backend requires email confirmation before
        a session is issued.
        """
        ...

    def sign_out(self, access_token: str) -> None:
        """Invalidate the session behind ``access_token``."""
        ...

    def current_user(self, access_token: str) -> Optional[Identity]:
        """Resolve a token to an identity, or ``None`` when the session is gone."""
        ...
