"""GoTrue-style authentication over the REST gateway."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from ...domain.repositories.auth import Identity
from ...errors import AuthError, GatewayError
from .client import RestClient


def _identity(payload: Mapping[str, Any]) -> Identity:
    user = payload.get("user") or {}
    return Identity(
        user_id=str(user.get("id") or ""),
        email=str(user.get("email") or ""),
        access_token=str(payload["access_token"]),
    )


class RestAuthGateway:
    """Password sign-in against ``/auth/v1``."""

    def __init__(self, client: RestClient):
        self.client = client

    def _post_credentials(self, path: str, **kwargs: Any) -> Any:
        """POST to an auth endpoint, reporting client errors as ``AuthError``."""

        try:
            return self.client.request("POST", path, **kwargs)
        except AuthError:
            raise
        except GatewayError as exc:
            if exc.status is not None and 400 <= exc.status < 500:
                raise AuthError(str(exc), status=exc.status) from exc
            raise

    def sign_in(self, email: str, password: str) -> Identity:
        payload = self._post_credentials(
            "auth/v1/token",
            params={"grant_type": "password"},
            json={"email": email.strip(), "password": password},
        )
        if not payload or "access_token" not in payload:
            raise AuthError("Sign-in response did not include a session")
        return _identity(payload)

    def sign_up(self, email: str, password: str) -> Optional[Identity]:
        """Register; ``None`` means the account awaits email confirmation."""

        payload = self._post_credentials(
            "auth/v1/signup",
            json={"email": email.strip(), "password": password},
        )
        if payload and payload.get("access_token"):
            return _identity(payload)
        return None

    def sign_out(self, access_token: str) -> None:
        self.client.bind(access_token).request("POST", "auth/v1/logout")

    def current_user(self, access_token: str) -> Optional[Identity]:
        if not access_token:
            return None
        try:
            user = self.client.bind(access_token).request("GET", "auth/v1/user")
        except AuthError:
            return None
        if not user or not user.get("id"):
            return None
        return Identity(
            user_id=str(user["id"]),
            email=str(user.get("email") or ""),
            access_token=access_token,
        )
