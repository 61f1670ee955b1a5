"""FinBoard personal-finance web application."""

from __future__ import annotations

from typing import Optional

from flask import Flask, current_app, g, redirect, request, session, url_for
from werkzeug.exceptions import ServiceUnavailable

from .config import BaseConfig, DevConfig, TestConfig
from .context import AppContext, create_app_context
from .errors import GatewayError
from .logging_config import get_logger, setup_logging

EXTENSION_KEY = "finboard"
TOKEN_SESSION_KEY = "access_token"
PUBLIC_ENDPOINTS = frozenset({"auth.login", "auth.login_submit", "auth.signup", "static"})

_CONFIGS = {
    "development": DevConfig,
    "production": BaseConfig,
    "testing": TestConfig,
}

logger = get_logger(__name__)


def create_app(
    config_name: str = "development", *, context: Optional[AppContext] = None
) -> Flask:
    """Application factory: configuration, logging, gateway and blueprints."""

    app = Flask(__name__)

    if context is None:
        config_cls = _CONFIGS.get(config_name, DevConfig)
        context = create_app_context(config_cls())
    config = context.config

    setup_logging(config)
    app.config.update(
        SECRET_KEY=config.SECRET_KEY,
        DEBUG=getattr(config, "DEBUG", False),
        TESTING=getattr(config, "TESTING", False),
        FINBOARD_CONFIG=config,
    )
    app.extensions[EXTENSION_KEY] = context
    context.session_signal.subscribe(_log_session_transition)

    from .blueprints.auth import bp as auth_bp
    from .blueprints.dashboard import bp as dashboard_bp
    from .blueprints.ledger import bp as ledger_bp
    from .blueprints.reports import bp as reports_bp
    from .blueprints.settings import bp as settings_bp

    for blueprint in (auth_bp, dashboard_bp, ledger_bp, reports_bp, settings_bp):
        app.register_blueprint(blueprint)

    app.before_request(_require_session)

    from .web import register_template_helpers

    register_template_helpers(app)

    from .cli import init_app as init_cli

    init_cli(app)

    logger.info("FinBoard app created", extra={"config": config_name, "gateway": config.GATEWAY})
    return app


def _log_session_transition(identity) -> None:
    if identity is None:
        logger.info("Session ended")
    else:
        logger.info("Session started", extra={"user_id": identity.user_id})


def _require_session():
    """Resolve the bearer token stored in the cookie session before every request."""

    from .services.auth import resolve_identity

    context: AppContext = current_app.extensions[EXTENSION_KEY]
    token = session.get(TOKEN_SESSION_KEY)
    try:
        identity = resolve_identity(context.gateway_factory, token)
    except GatewayError:
        # session state unknown: keep the token and publish nothing
        logger.exception("Session lookup failed")
        g.identity = None
        g.gateway = None
        if request.endpoint not in PUBLIC_ENDPOINTS:
            raise ServiceUnavailable("The data service is unavailable. Try again shortly.")
        return None

    g.identity = identity
    g.gateway = context.gateway(identity.access_token) if identity is not None else None

    if identity is None:
        if token:
            # a session that existed has vanished (expired or revoked)
            session.pop(TOKEN_SESSION_KEY, None)
            context.session_signal.publish(None)
        if request.endpoint not in PUBLIC_ENDPOINTS:
            return redirect(url_for("auth.login"))
    return None


__all__ = ["AppContext", "BaseConfig", "DevConfig", "TestConfig", "create_app", "create_app_context"]
