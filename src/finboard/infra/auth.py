"""Embedded authentication backed by the users/auth_sessions tables."""

from __future__ import annotations

import secrets
from datetime import timedelta
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHash, VerificationError, VerifyMismatchError
from sqlmodel import Session, select

from ..config import BaseConfig
from ..domain.repositories.auth import Identity
from ..errors import AuthError
from ..models.profile import Profile
from ..models.user import AuthSession, User, as_utc, utcnow
from .database import SessionFactory
from .repositories._base import translate_errors

MIN_PASSWORD_LENGTH = 6

_hasher = PasswordHasher()


def _normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class SQLModelAuthGateway:
    """Password sign-in with argon2 hashes and opaque bearer tokens."""

    def __init__(
        self,
        session_factory: SessionFactory,
        *,
        token_ttl_hours: float = 24 * 7,
        default_currency: str = BaseConfig.DEFAULT_CURRENCY,
    ):
        self.session_factory = session_factory
        self.token_ttl = timedelta(hours=token_ttl_hours)
        self.default_currency = default_currency

    def _issue(self, session: Session, user: User) -> Identity:
        token = secrets.token_urlsafe(32)
        now = utcnow()
        session.add(
            AuthSession(token=token, user_id=user.id, created_at=now, expires_at=now + self.token_ttl)
        )
        return Identity(user_id=user.id, email=user.email, access_token=token)

    def sign_up(self, email: str, password: str) -> Optional[Identity]:
        """Create the account and its profile, then sign in immediately."""

        email = _normalize_email(email)
        if not email or "@" not in email:
            raise AuthError("A valid email address is required.", status=400)
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise AuthError(
                f"Password should be at least {MIN_PASSWORD_LENGTH} characters.", status=400
            )

        with translate_errors("sign up"), self.session_factory() as session:
            existing = session.exec(select(User).where(User.email == email)).first()
            if existing is not None:
                raise AuthError("User already registered", status=422)
            user = User(email=email, password_hash=_hasher.hash(password))
            session.add(user)
            session.flush()
            session.add(Profile(id=user.id, email=email, currency=self.default_currency))
            identity = self._issue(session, user)
            session.commit()
            return identity

    def sign_in(self, email: str, password: str) -> Identity:
        email = _normalize_email(email)
        with translate_errors("sign in"), self.session_factory() as session:
            user = session.exec(select(User).where(User.email == email)).first()
            if user is None:
                raise AuthError("Invalid login credentials", status=400)
            try:
                _hasher.verify(user.password_hash, password)
            except (VerifyMismatchError, InvalidHash, VerificationError) as exc:
                raise AuthError("Invalid login credentials", status=400) from exc

            user.last_login = utcnow()
            session.add(user)
            identity = self._issue(session, user)
            session.commit()
            return identity

    def sign_out(self, access_token: str) -> None:
        with translate_errors("sign out"), self.session_factory() as session:
            row = session.get(AuthSession, access_token)
            if row is not None:
                session.delete(row)
                session.commit()

    def current_user(self, access_token: str) -> Optional[Identity]:
        if not access_token:
            return None
        with translate_errors("resolve session"), self.session_factory() as session:
            row = session.get(AuthSession, access_token)
            if row is None:
                return None
            if as_utc(row.expires_at) <= utcnow():
                session.delete(row)
                session.commit()
                return None
            user = session.get(User, row.user_id)
            if user is None:
                return None
            return Identity(user_id=user.id, email=user.email, access_token=access_token)
