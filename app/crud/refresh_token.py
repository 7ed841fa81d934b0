# app/crud/refresh_token.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.orm.attributes import set_committed_value

from app.models.refresh_token import RefreshToken


class CRUDRefreshToken:
    """Persistence of opaque refresh tokens. Expiry is checked by the caller."""

    def save(self, db: Session, token: RefreshToken, *, commit: bool = True) -> RefreshToken:
        db.add(token)
        if commit:
            db.commit()
            db.refresh(token)
        else:
            db.flush()
        return token

    def find(self, db: Session, value: str) -> RefreshToken | None:
        """Looks up a token that has not been revoked, with its user loaded."""
        return db.execute(
            select(RefreshToken)
            .options(joinedload(RefreshToken.user))
            .where(RefreshToken.token == value, RefreshToken.revoked.is_(False))
        ).scalar_one_or_none()

    def invalidate(self, db: Session, token: RefreshToken, *, commit: bool = True) -> bool:
        """Marks the token revoked.

        The UPDATE only matches a row that is still active, so of two
        concurrent callers only one gets True back. Revoking an already
        revoked token is not an error.
        """
        result = db.execute(
            update(RefreshToken)
            .where(RefreshToken.id == token.id, RefreshToken.revoked.is_(False))
            .values(revoked=True)
            .execution_options(synchronize_session=False)
        )
        set_committed_value(token, "revoked", True)
        if commit:
            db.commit()
        return result.rowcount == 1


refresh_token_crud = CRUDRefreshToken()
