from datetime import timedelta

import pytest
from sqlalchemy import func, select, update

from app.core.errors import Unauthenticated
from app.core.tokens import TokenIssuer, new_refresh_token_value, utcnow
from app.crud.refresh_token import refresh_token_crud
from app.crud.user import user_crud
from app.models.refresh_token import RefreshToken
from app.services.auth import AuthService


@pytest.fixture
def service(db, settings):
    return AuthService(db, settings)


def _stored(db, value):
    return db.scalar(select(RefreshToken).where(RefreshToken.token == value))


def test_login_with_valid_credentials_returns_tokens(service, db, settings):
    pair = service.login("user@user.com", "User123")

    assert pair.token
    assert pair.refresh_token
    claims = TokenIssuer(settings).decode(pair.token)
    assert claims["email"] == "user@user.com"
    assert claims["role"] == ["User"]

    stored = _stored(db, pair.refresh_token)
    assert stored is not None
    assert stored.revoked is False
    assert stored.user.email == "user@user.com"
    assert not stored.is_expired(utcnow() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS - 1))
    assert stored.is_expired(utcnow() + timedelta(days=settings.REFRESH_TOKEN_EXPIRE_DAYS, minutes=1))


def test_login_email_is_case_insensitive(service):
    assert service.login("  USER@user.com ", "User123").token


@pytest.mark.parametrize("email, password", [("user@user.com", "Wrong123"), ("nobody@user.com", "User123")])
def test_login_failures_share_one_message(service, email, password):
    with pytest.raises(Unauthenticated) as exc_info:
        service.login(email, password)
    assert exc_info.value.message == "Invalid credentials"


def test_refresh_rotates_and_is_single_use(service, db):
    first = service.login("user@user.com", "User123")

    second = service.refresh(first.refresh_token)
    assert second.token
    assert second.refresh_token != first.refresh_token
    assert _stored(db, first.refresh_token).revoked is True
    assert _stored(db, second.refresh_token).revoked is False

    with pytest.raises(Unauthenticated):
        service.refresh(first.refresh_token)

    # the replacement keeps working
    assert service.refresh(second.refresh_token).refresh_token


def test_refresh_with_unknown_token_fails(service):
    with pytest.raises(Unauthenticated) as exc_info:
        service.refresh("bad-token")
    assert exc_info.value.message == "Invalid or expired refresh token"


def test_refresh_with_empty_token_fails(service):
    with pytest.raises(Unauthenticated):
        service.refresh("")


def test_refresh_with_expired_token_fails(service, db):
    user = user_crud.get_by_email(db, "user@user.com")
    value = new_refresh_token_value()
    db.add(RefreshToken(token=value, expires_at=utcnow() - timedelta(seconds=1), user_id=user.id))
    db.commit()

    with pytest.raises(Unauthenticated) as exc_info:
        service.refresh(value)
    assert exc_info.value.message == "Invalid or expired refresh token"
    assert _stored(db, value).revoked is False


def test_logout_revokes_token(service, db):
    pair = service.login("user@user.com", "User123")

    service.logout(pair.refresh_token)

    assert _stored(db, pair.refresh_token).revoked is True
    with pytest.raises(Unauthenticated):
        service.refresh(pair.refresh_token)
    with pytest.raises(Unauthenticated):
        service.logout(pair.refresh_token)


def test_logout_after_refresh_fails(service):
    pair = service.login("user@user.com", "User123")
    service.refresh(pair.refresh_token)

    with pytest.raises(Unauthenticated):
        service.logout(pair.refresh_token)


def test_logout_with_unknown_token_fails(service):
    with pytest.raises(Unauthenticated):
        service.logout("invalid-refresh")


def test_refresh_loses_race_to_concurrent_rotation(service, db, session_factory, monkeypatch):
    pair = service.login("user@user.com", "User123")
    user_id = _stored(db, pair.refresh_token).user_id
    original_find = refresh_token_crud.find

    def find_then_rotated_elsewhere(session, value):
        token = original_find(session, value)
        # outra requisição revoga o mesmo token entre a leitura e o UPDATE
        other = session_factory()
        try:
            other.execute(update(RefreshToken).where(RefreshToken.token == value).values(revoked=True))
            other.commit()
        finally:
            other.close()
        return token

    monkeypatch.setattr(refresh_token_crud, "find", find_then_rotated_elsewhere)

    with pytest.raises(Unauthenticated) as exc_info:
        service.refresh(pair.refresh_token)

    assert exc_info.value.message == "Invalid or expired refresh token"
    count = db.scalar(select(func.count()).select_from(RefreshToken).where(RefreshToken.user_id == user_id))
    assert count == 1
