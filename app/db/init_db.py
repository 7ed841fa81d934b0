# app/db/init_db.py
import logging

from sqlalchemy import select
from sqlalchemy.orm import Session

from app.core.security import hash_password
from app.models.role import Role
from app.models.user import User

logger = logging.getLogger(__name__)

ROLE_NAMES = ["Admin", "User"]

DEMO_USERS = [
    # (name, email, password, roles)
    ("admin", "admin@admin.com", "Admin123", ["Admin", "User"]),
    ("user", "user@user.com", "User123", ["User"]),
]


def init_db(db: Session) -> None:
    roles = {r.name: r for r in db.scalars(select(Role)).all()}
    for name in ROLE_NAMES:
        if name not in roles:
            r = Role(name=name)
            db.add(r); db.flush()
            roles[name] = r

    for name, email, password, role_names in DEMO_USERS:
        user = db.scalar(select(User).where(User.email == email))
        if user:
            continue
        user = User(name=name, email=email, hashed_password=hash_password(password))
        user.roles.extend(roles[r] for r in role_names)
        db.add(user); db.flush()
        logger.info("Seeded user %s", email)

    db.commit()
