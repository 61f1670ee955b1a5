"""Gateway bundle and backend selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from ..config import BaseConfig
from ..domain.repositories import (
    AuthGateway,
    CategoryRepository,
    ProfileRepository,
    TransactionRepository,
)
from ..logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class Gateway:
    """Repositories and auth surface acting on behalf of one bearer token."""

    auth: AuthGateway
    transactions: TransactionRepository
    categories: CategoryRepository
    profiles: ProfileRepository


GatewayFactory = Callable[[Optional[str]], Gateway]


def build_sqlmodel_gateway_factory(config: BaseConfig, session_factory=None) -> GatewayFactory:
    """Embedded store: one set of repositories shared by every token."""

    from .auth import SQLModelAuthGateway
    from .database import bootstrap_database
    from .repositories import (
        SQLModelCategoryRepository,
        SQLModelProfileRepository,
        SQLModelTransactionRepository,
    )

    if session_factory is None:
        _, session_factory = bootstrap_database(config)

    gateway = Gateway(
        auth=SQLModelAuthGateway(
            session_factory,
            token_ttl_hours=config.AUTH_TOKEN_TTL_HOURS,
            default_currency=config.DEFAULT_CURRENCY,
        ),
        transactions=SQLModelTransactionRepository(session_factory),
        categories=SQLModelCategoryRepository(session_factory),
        profiles=SQLModelProfileRepository(session_factory),
    )

    def factory(access_token: Optional[str] = None) -> Gateway:
        return gateway

    return factory


def build_rest_gateway_factory(config: BaseConfig, http_session=None) -> GatewayFactory:
    """Remote store: repositories bound to the caller's bearer token."""

    from .rest import (
        RestAuthGateway,
        RestCategoryRepository,
        RestClient,
        RestProfileRepository,
        RestTransactionRepository,
    )

    base_client = RestClient(
        config.GATEWAY_URL,
        config.GATEWAY_KEY,
        timeout=config.GATEWAY_TIMEOUT,
        session=http_session,
    )
    auth = RestAuthGateway(base_client)

    def factory(access_token: Optional[str] = None) -> Gateway:
        client = base_client.bind(access_token)
        return Gateway(
            auth=auth,
            transactions=RestTransactionRepository(client),
            categories=RestCategoryRepository(client),
            profiles=RestProfileRepository(client),
        )

    return factory


def build_gateway_factory(config: BaseConfig) -> GatewayFactory:
    """Select the backend named by ``config.GATEWAY``."""

    logger.info("Configuring data gateway", extra={"backend": config.GATEWAY})
    if config.GATEWAY == "rest":
        return build_rest_gateway_factory(config)
    return build_sqlmodel_gateway_factory(config)
