# app/models/__init__.py
# Carrega módulos para registrar tabelas no metadata (alembic / create_all)
from app.models.user_role import user_roles
from app.models.role import Role
from app.models.user import User
from app.models.refresh_token import RefreshToken
from app.models.event import Event

__all__ = ["user_roles", "Role", "User", "RefreshToken", "Event"]
