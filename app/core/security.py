# app/core/security.py
from __future__ import annotations

from typing import Tuple

from passlib.context import CryptContext

pwd_context = CryptContext(
    schemes=["argon2"],
    deprecated="auto",
    argon2__time_cost=2,
    argon2__memory_cost=19456,
    argon2__parallelism=1,
)

# Hash fixo para gastar o mesmo tempo quando o usuário não existe
_DUMMY_HASH = pwd_context.hash("not-a-real-password")


def hash_password(plain: str) -> str:
    return pwd_context.hash(plain)


def verify_password(plain: str, stored_hash: str | None) -> bool:
    if not stored_hash:
        pwd_context.verify(plain, _DUMMY_HASH)
        return False
    return pwd_context.verify(plain, stored_hash)


def verify_and_maybe_upgrade(plain: str, stored_hash: str) -> Tuple[bool, str | None]:
    """Returns (ok, new_hash); new_hash is set when the stored hash uses outdated parameters."""
    ok, new_hash = pwd_context.verify_and_update(plain, stored_hash)
    return ok, new_hash


def check_password_policy(password: str) -> str:
    """Raises ValueError unless the password has a lowercase, an uppercase and a digit."""
    if not isinstance(password, str) or not password:
        raise ValueError("Password is required.")
    if not any(c.islower() for c in password):
        raise ValueError("Password must contain at least one lowercase letter.")
    if not any(c.isupper() for c in password):
        raise ValueError("Password must contain at least one uppercase letter.")
    if not any(c.isdigit() for c in password):
        raise ValueError("Password must contain at least one number.")
    return password
