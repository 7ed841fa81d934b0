# app/api/routes/auth.py
from fastapi import APIRouter, Depends, Response, status

from app.api.deps import get_auth_service, get_current_user
from app.schemas.token import LoginRequest, RefreshRequest, TokenPair
from app.services.auth import AuthService

router = APIRouter()

_UNAUTHORIZED = {status.HTTP_401_UNAUTHORIZED: {"description": "Invalid credentials or refresh token"}}


@router.post("/login", response_model=TokenPair, responses=_UNAUTHORIZED)
def login(body: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Authenticate a user and return an access token and a refresh token."""
    return service.login(body.email, body.password)


@router.post("/refresh", response_model=TokenPair, responses=_UNAUTHORIZED)
def refresh(body: RefreshRequest, service: AuthService = Depends(get_auth_service)):
    """Exchange a refresh token for a new token pair. The presented token is revoked."""
    return service.refresh(body.refresh_token)


@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    responses=_UNAUTHORIZED,
    dependencies=[Depends(get_current_user)],
)
def logout(body: RefreshRequest, service: AuthService = Depends(get_auth_service)):
    """Revoke a refresh token."""
    service.logout(body.refresh_token)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
