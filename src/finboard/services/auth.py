"""Sign-in orchestration on top of the gateway's auth surface.

Every transition is published on the application's ``SessionSignal``.
"""

from __future__ import annotations

from typing import Optional

from ..domain.repositories.auth import Identity
from ..errors import AuthError, GatewayError
from ..infra.gateway import GatewayFactory
from ..logging_config import get_logger
from .seed import seed_default_categories
from .session import SessionSignal

logger = get_logger(__name__)


def sign_in(
    gateway_factory: GatewayFactory, signal: SessionSignal, *, email: str, password: str
) -> Identity:
    """Authenticate and announce the new session.

    Raises:
        AuthError: credentials were rejected
        GatewayError: the gateway could not be reached
    """

    identity = gateway_factory(None).auth.sign_in(email, password)
    logger.info("User signed in", extra={"user_id": identity.user_id})
    signal.publish(identity)
    return identity


def sign_up(
    gateway_factory: GatewayFactory,
    signal: SessionSignal,
    *,
    email: str,
    password: str,
    seed_categories: bool = True,
) -> Optional[Identity]:
    """Register an account; ``None`` when the gateway requires email confirmation first."""

    identity = gateway_factory(None).auth.sign_up(email, password)
    if identity is None:
        logger.info("Sign-up awaiting confirmation", extra={"email": email})
        return None

    logger.info("User registered", extra={"user_id": identity.user_id})
    if seed_categories:
        try:
            seed_default_categories(gateway_factory(identity.access_token), user_id=identity.user_id)
        except GatewayError:
            # account is already committed
            logger.exception("Default category seeding failed", extra={"user_id": identity.user_id})
    signal.publish(identity)
    return identity


def sign_out(gateway_factory: GatewayFactory, signal: SessionSignal, access_token: str) -> None:
    """End the session; the local session is dropped even if the gateway call fails."""

    try:
        gateway_factory(access_token).auth.sign_out(access_token)
    except GatewayError:
        logger.exception("Gateway sign-out failed")
    signal.publish(None)


def resolve_identity(
    gateway_factory: GatewayFactory, access_token: Optional[str]
) -> Optional[Identity]:
    """Look up the session behind ``access_token``.

    A rejected token counts as absent.

    Raises:
        GatewayError: the gateway could not answer; the session state is unknown
    """

    if not access_token:
        return None
    try:
        return gateway_factory(access_token).auth.current_user(access_token)
    except AuthError:
        logger.info("Session token rejected")
        return None
