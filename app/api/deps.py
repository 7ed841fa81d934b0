from fastapi import Depends, Header
from sqlalchemy.orm import Session

from app.core.config import Settings, get_settings
from app.core.errors import Unauthenticated
from app.core.tokens import TokenIssuer
from app.crud.user import user_crud
from app.db.session import get_db
from app.schemas.token import CurrentUser
from app.services.auth import AuthService
from app.services.events import EventService

# ----------------------------------------------------------------------
# Lê o Bearer do header Authorization (sem usar OAuth2PasswordBearer)
# ----------------------------------------------------------------------
def get_bearer_token(authorization: str = Header(None, alias="Authorization")) -> str:
    if not authorization:
        raise Unauthenticated("Missing Authorization header")
    parts = authorization.split()
    if len(parts) != 2 or parts[0].lower() != "bearer":
        raise Unauthenticated("Invalid Authorization header")
    return parts[1]


def get_token_issuer(settings: Settings = Depends(get_settings)) -> TokenIssuer:
    return TokenIssuer(settings)


def get_current_user(
    token: str = Depends(get_bearer_token),
    issuer: TokenIssuer = Depends(get_token_issuer),
    db: Session = Depends(get_db),
) -> CurrentUser:
    payload = issuer.decode(token)
    user = user_crud.get(db, payload["sub"])
    if not user:
        raise Unauthenticated("Invalid or expired access token")
    roles = payload.get("role") or []
    if isinstance(roles, str):
        roles = [roles]
    return CurrentUser(id=user.id, name=user.name, email=user.email, roles=list(roles))


def get_auth_service(
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
    issuer: TokenIssuer = Depends(get_token_issuer),
) -> AuthService:
    return AuthService(db, settings, issuer=issuer)


def get_event_service(db: Session = Depends(get_db)) -> EventService:
    return EventService(db)
