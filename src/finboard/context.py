"""Application context for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import BaseConfig
from .infra.gateway import Gateway, GatewayFactory, build_gateway_factory
from .services.session import SessionSignal


@dataclass
class AppContext:
    """Centralized application context with services and state."""

    # Configuration
    config: BaseConfig

    # Gateway bound per bearer token
    gateway_factory: GatewayFactory

    # Session transitions
    session_signal: SessionSignal

    def gateway(self, access_token: Optional[str] = None) -> Gateway:
        return self.gateway_factory(access_token)


def create_app_context(
    config: Optional[BaseConfig] = None,
    gateway_factory: Optional[GatewayFactory] = None,
) -> AppContext:
    """Create and initialize the application context."""

    if config is None:
        config = BaseConfig()

    return AppContext(
        config=config,
        gateway_factory=gateway_factory or build_gateway_factory(config),
        session_signal=SessionSignal(),
    )
