"""HTTP client for the remote data gateway."""

from __future__ import annotations

from typing import Any, Mapping, Optional, Sequence, Union

import requests

from ...errors import AuthError, GatewayError, NotFoundError
from ...logging_config import get_logger

logger = get_logger(__name__)

Params = Union[Mapping[str, str], Sequence[tuple[str, str]]]


def _error_message(response: requests.Response) -> str:
    """Pull the human-readable message out of an error payload."""

    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason or "Request failed"
    if isinstance(payload, dict):
        for key in ("message", "msg", "error_description", "error"):
            value = payload.get(key)
            if value:
                return str(value)
    return response.reason or "Request failed"


class RestClient:
    """Thin wrapper over ``requests.Session`` that speaks the gateway's REST dialect.

    Every request carries the project ``apikey`` header and a bearer token:
    the signed-in user's access token when bound, otherwise the project key.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        access_token: Optional[str] = None,
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def bind(self, access_token: Optional[str]) -> "RestClient":
        """Return a client sharing this connection pool but acting as ``access_token``."""

        return RestClient(
            self.base_url,
            self.api_key,
            access_token=access_token,
            timeout=self.timeout,
            session=self.session,
        )

    def _headers(self, extra: Optional[Mapping[str, str]] = None) -> dict[str, str]:
        headers = {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.access_token or self.api_key}",
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if extra:
            headers.update(extra)
        return headers

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Params] = None,
        json: Any = None,
        headers: Optional[Mapping[str, str]] = None,
    ) -> Any:
        """Perform a request and return the decoded JSON body (``None`` when empty).

        Raises:
            AuthError: for 401/403 responses
            NotFoundError: for 404 responses
            GatewayError: for transport failures and any other error status
        """

        url = f"{self.base_url}/{path.lstrip('/')}"
        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=self._headers(headers),
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Gateway request failed", extra={"method": method, "path": path})
            raise GatewayError(f"{method} {path} failed: {exc}") from exc

        status = response.status_code
        if status >= 400:
            message = _error_message(response)
            logger.info(
                "Gateway returned an error",
                extra={"method": method, "path": path, "status": status},
            )
            if status in (401, 403):
                raise AuthError(message, status=status)
            if status == 404:
                raise NotFoundError(message, status=status)
            raise GatewayError(message, status=status)

        if status == 204 or not response.content:
            return None
        try:
            return response.json()
        except ValueError as exc:
            raise GatewayError(f"{method} {path} returned invalid JSON", status=status) from exc
