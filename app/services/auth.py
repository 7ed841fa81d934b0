# app/services/auth.py
"""Login, refresh-token rotation and logout.

Refresh tokens are single use: ``refresh`` revokes the presented token and
stores its replacement in the same commit. Every credential or token
problem surfaces as ``Unauthenticated`` with a message that does not say
which check failed.
"""
from __future__ import annotations

import logging
import time
from datetime import datetime, timedelta

from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.errors import Unauthenticated
from app.core.security import verify_and_maybe_upgrade, verify_password
from app.core.tokens import TokenIssuer, new_refresh_token_value, utcnow
from app.crud.refresh_token import refresh_token_crud
from app.crud.user import normalize_email, user_crud
from app.models.refresh_token import RefreshToken
from app.models.user import User
from app.schemas.token import TokenPair

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid credentials"
INVALID_REFRESH_TOKEN = "Invalid or expired refresh token"


def _elapsed_ms(start: float) -> int:
    return int((time.perf_counter() - start) * 1000)


class AuthService:
    def __init__(self, db: Session, settings: Settings, issuer: TokenIssuer | None = None):
        self.db = db
        self.issuer = issuer or TokenIssuer(settings)
        self.refresh_lifetime = timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS)

    # ---------- helpers ----------
    def _new_refresh_token(self, user_id: str, now: datetime) -> RefreshToken:
        return RefreshToken(
            token=new_refresh_token_value(),
            expires_at=now + self.refresh_lifetime,
            user_id=user_id,
        )

    def _active_token(self, value: str, now: datetime) -> RefreshToken:
        token = refresh_token_crud.find(self.db, value) if value else None
        if token is None or not token.is_active(now):
            raise Unauthenticated(INVALID_REFRESH_TOKEN)
        return token

    # ---------- operations ----------
    def login(self, email: str, password: str) -> TokenPair:
        email = normalize_email(email)
        logger.info("Login attempt for user %s", email)
        start = time.perf_counter()

        user = user_crud.get_by_email(self.db, email)
        if user is None:
            verify_password(password, None)
            logger.warning("Login failed for user %s: invalid credentials", email)
            raise Unauthenticated(INVALID_CREDENTIALS)

        ok, new_hash = verify_and_maybe_upgrade(password, user.hashed_password)
        if not ok:
            logger.warning("Login failed for user %s: invalid credentials", email)
            raise Unauthenticated(INVALID_CREDENTIALS)
        if new_hash:
            user.hashed_password = new_hash

        now = utcnow()
        access_token = self.issuer.issue(user, user.role_names, now=now)
        refresh_token = refresh_token_crud.save(self.db, self._new_refresh_token(user.id, now))

        logger.info("Login successful for user %s. Elapsed: %sms", email, _elapsed_ms(start))
        return TokenPair(token=access_token, refresh_token=refresh_token.token)

    def refresh(self, value: str) -> TokenPair:
        logger.info("Refresh token attempt")
        start = time.perf_counter()
        now = utcnow()

        try:
            token = self._active_token(value, now)
        except Unauthenticated:
            logger.warning("Refresh token failed: invalid or expired token")
            raise

        user: User = token.user
        if not refresh_token_crud.invalidate(self.db, token, commit=False):
            # outra requisição rotacionou este token primeiro
            logger.warning("Refresh token failed: token %s already used", token.id)
            self.db.rollback()
            raise Unauthenticated(INVALID_REFRESH_TOKEN)

        replacement = refresh_token_crud.save(self.db, self._new_refresh_token(user.id, now), commit=False)
        self.db.commit()

        access_token = self.issuer.issue(user, user.role_names, now=now)

        logger.info("Refresh token succeeded for user %s. Elapsed: %sms", user.id, _elapsed_ms(start))
        return TokenPair(token=access_token, refresh_token=replacement.token)

    def logout(self, value: str) -> None:
        now = utcnow()
        try:
            token = self._active_token(value, now)
        except Unauthenticated:
            logger.warning("Logout failed: invalid or expired token")
            raise

        if not refresh_token_crud.invalidate(self.db, token):
            raise Unauthenticated(INVALID_REFRESH_TOKEN)

        logger.info("User %s logged out, refresh token revoked", token.user_id)
