"""Flask CLI commands for FinBoard."""

from __future__ import annotations

import click

from .errors import AuthError, GatewayError


def _sign_in_or_up(context, email: str, password: str):
    """Return an identity for ``email``, registering the account when it does not exist."""

    auth = context.gateway(None).auth
    try:
        return auth.sign_in(email, password), False
    except AuthError:
        return auth.sign_up(email, password), True


def init_app(app) -> None:
    """Register CLI commands on the Flask app."""

    @app.cli.command("finboard-create-user")
    @click.option("--email", required=True, help="Account email")
    @click.option("--password", required=True, prompt=True, hide_input=True)
    def finboard_create_user(email: str, password: str) -> None:
        """Register an account (embedded gateway signs it in immediately)."""

        context = app.extensions["finboard"]
        try:
            identity = context.gateway(None).auth.sign_up(email, password)
        except GatewayError as exc:
            raise click.ClickException(str(exc)) from exc
        if identity is None:
            click.echo(f"Account {email} created; confirm the email before signing in.")
        else:
            click.echo(f"Account {email} created (user id {identity.user_id}).")

    @app.cli.command("finboard-seed")
    @click.option("--email", required=True, help="Account to seed (created if missing)")
    @click.option("--password", required=True, prompt=True, hide_input=True)
    @click.option("--demo", is_flag=True, default=False, help="Also add sample transactions")
    def finboard_seed(email: str, password: str, demo: bool) -> None:
        """Seed default categories and, optionally, demo transactions."""

        from .services.seed import seed_default_categories, seed_demo_transactions

        context = app.extensions["finboard"]
        try:
            identity, created = _sign_in_or_up(context, email, password)
        except GatewayError as exc:
            raise click.ClickException(str(exc)) from exc
        if identity is None:
            raise click.ClickException("Account requires email confirmation before seeding.")
        if created:
            click.echo(f"Created account {email}.")

        gateway = context.gateway(identity.access_token)
        try:
            if demo:
                summary = seed_demo_transactions(gateway, user_id=identity.user_id)
                click.echo(
                    f"Seeded {summary.categories} categories and {summary.transactions} transactions."
                )
            else:
                categories = seed_default_categories(gateway, user_id=identity.user_id)
                click.echo(f"Seeded {len(categories)} categories.")
        except GatewayError as exc:
            raise click.ClickException(str(exc)) from exc
