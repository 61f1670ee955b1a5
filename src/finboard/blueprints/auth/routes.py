"""Login, sign-up and logout routes."""

from __future__ import annotations

from flask import flash, g, redirect, render_template, request, session, url_for

from ... import TOKEN_SESSION_KEY
from ...errors import GatewayError
from ...services import auth as auth_service
from ...web import app_config, app_context
from . import bp


def _credentials() -> tuple[str, str]:
    return (request.form.get("email") or "").strip(), request.form.get("password") or ""


def _start_session(access_token: str):
    session.clear()
    session[TOKEN_SESSION_KEY] = access_token
    return redirect(url_for("dashboard.index"))


@bp.get("/login")
def login():
    """Render the sign-in form; signed-in users go straight to the dashboard."""

    if g.get("identity") is not None:
        return redirect(url_for("dashboard.index"))
    return render_template("auth/login.html", email="", error=None, mode="signin")


@bp.post("/login")
def login_submit():
    email, password = _credentials()
    context = app_context()
    try:
        identity = auth_service.sign_in(
            context.gateway_factory, context.session_signal, email=email, password=password
        )
    except GatewayError as exc:
        return render_template("auth/login.html", email=email, error=str(exc), mode="signin"), 400
    return _start_session(identity.access_token)


@bp.post("/signup")
def signup():
    email, password = _credentials()
    context = app_context()
    try:
        identity = auth_service.sign_up(
            context.gateway_factory,
            context.session_signal,
            email=email,
            password=password,
            seed_categories=app_config().SEED_DEFAULT_CATEGORIES,
        )
    except GatewayError as exc:
        return render_template("auth/login.html", email=email, error=str(exc), mode="signup"), 400

    if identity is None:
        flash("Check your email to confirm your account, then sign in.", "info")
        return redirect(url_for("auth.login"))
    return _start_session(identity.access_token)


@bp.post("/logout")
def logout():
    context = app_context()
    token = session.pop(TOKEN_SESSION_KEY, None)
    if token:
        auth_service.sign_out(context.gateway_factory, context.session_signal, token)
    session.clear()
    return redirect(url_for("auth.login"))
