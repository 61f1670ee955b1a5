"""Request helpers shared by the blueprints."""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING

from flask import Flask, current_app, g, redirect, url_for

from .constants import CURRENCIES
from .errors import GatewayError
from .i18n import format_currency, format_date, label
from .logging_config import get_logger

if TYPE_CHECKING:  # pragma: no cover
    from .config import BaseConfig
    from .context import AppContext
    from .infra.gateway import Gateway

logger = get_logger(__name__)


def app_context() -> AppContext:
    return current_app.extensions["finboard"]


def app_config() -> BaseConfig:
    return app_context().config


def current_gateway() -> Gateway:
    return g.gateway


def current_user_id() -> str:
    return g.identity.user_id


def load_currency() -> str:
    """The signed-in user's preferred currency, falling back to the default."""

    cached = g.get("currency")
    if cached:
        return cached
    currency = app_config().DEFAULT_CURRENCY
    try:
        profile = current_gateway().profiles.get(user_id=current_user_id())
    except GatewayError:
        logger.exception("Failed to load profile currency")
    else:
        if profile is not None and profile.currency in CURRENCIES:
            currency = profile.currency
    g.currency = currency
    return currency


def abandon(operation: str, endpoint: str, **values):
    """Log the failed gateway call and return to ``endpoint`` without applying anything.

    Must be called from inside an ``except`` block.
    """

    logger.exception("Gateway operation failed", extra={"operation": operation})
    return redirect(url_for(endpoint, **values))


def register_template_helpers(app: Flask) -> None:
    """Jinja filters for money, dates and enum labels."""

    @app.template_filter("money")
    def _money(value: Decimal, currency: str | None = None) -> str:
        return format_currency(value, currency or g.get("currency") or "BRL", app_config().LOCALE)

    @app.template_filter("dmy")
    def _dmy(value: date) -> str:
        return format_date(value) if value else ""

    @app.template_filter("label")
    def _label(value: str) -> str:
        return label(app_config().LOCALE, value)

    @app.context_processor
    def _inject_identity() -> dict:
        return {"identity": g.get("identity"), "app_name": app_config().APP_NAME}
