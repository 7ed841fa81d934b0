# app/core/tokens.py
from __future__ import annotations

import base64
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable

from jose import JWTError, jwt

from app.core.config import Settings
from app.core.errors import Unauthenticated

REFRESH_TOKEN_BYTES = 32


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_refresh_token_value() -> str:
    """Opaque refresh token: 256 random bits, base64."""
    return base64.b64encode(secrets.token_bytes(REFRESH_TOKEN_BYTES)).decode("ascii")


class TokenIssuer:
    """Signs and verifies short-lived access tokens (HS256)."""

    def __init__(self, settings: Settings):
        self._key = settings.SECRET_KEY
        self._algorithm = settings.ALGORITHM
        self._issuer = settings.JWT_ISSUER
        self._audience = settings.JWT_AUDIENCE
        self._lifetime = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    def issue(self, user, roles: Iterable[str], *, now: datetime | None = None) -> str:
        issued_at = now or utcnow()
        payload: Dict[str, Any] = {
            "iss": self._issuer,
            "aud": self._audience,
            "sub": str(user.id),
            "name": user.name or "",
            "email": user.email or "",
            "role": sorted(set(roles)),
            "jti": uuid.uuid4().hex,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._lifetime).timestamp()),
        }
        return jwt.encode(payload, self._key, algorithm=self._algorithm)

    def decode(self, token: str) -> Dict[str, Any]:
        try:
            payload = jwt.decode(
                token,
                self._key,
                algorithms=[self._algorithm],
                audience=self._audience,
                issuer=self._issuer,
                options={"require_exp": True, "require_sub": True, "require_iat": True},
            )
        except JWTError as exc:
            raise Unauthenticated("Invalid or expired access token") from exc
        if not isinstance(payload, dict) or not payload.get("sub"):
            raise Unauthenticated("Invalid or expired access token")
        return payload
