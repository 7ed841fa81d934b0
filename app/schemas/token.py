# app/schemas/token.py
from typing import List

from pydantic import EmailStr, Field, field_validator

from app.core.security import check_password_policy
from app.schemas.pagination import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str

    @field_validator("password")
    @classmethod
    def _password_policy(cls, v: str) -> str:
        return check_password_policy(v)


class RefreshRequest(CamelModel):
    refresh_token: str = Field(min_length=1)


class TokenPair(CamelModel):
    token: str
    refresh_token: str


class CurrentUser(CamelModel):
    id: str
    name: str = ""
    email: str = ""
    roles: List[str] = []
