"""Account creation and credential checks against the users table."""

import logging
from functools import lru_cache

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.security import hash_password, verify_password
from app.models import User

logger = logging.getLogger(__name__)


class EmailAlreadyRegisteredError(Exception):
    """Raised when the users table rejects an insert for a duplicate email."""

    def __init__(self, email: str) -> None:
        self.message = "A user with this email already exists."
        self.email = email
        super().__init__(self.message)


def normalize_email(email: str) -> str:
    """Emails are unique case-insensitively; store and look up the lowercase form."""
    return email.strip().lower()


@lru_cache
def _dummy_password_hash() -> str:
    # Verified against when the email is unknown, so both login failures cost one bcrypt check.
    return hash_password("toolhub-dummy-password")


def register_user(
    db: Session,
    *,
    email: str,
    password: str,
    first_name: str,
    last_name: str,
    company: str | None = None,
    role: str = "user",
    rounds: int | None = None,
) -> User:
    """
    Insert a new user and return the persisted row (created_at populated).

    Duplicate detection relies on the unique index, not a pre-check, so two
    concurrent signups for one address yield exactly one row.
    Raises EmailAlreadyRegisteredError on a uniqueness violation; other
    SQLAlchemyError propagate to the caller.
    """
    user = User(
        email=normalize_email(email),
        password_hash=hash_password(password, rounds=rounds),
        first_name=first_name,
        last_name=last_name,
        company=company or None,
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise EmailAlreadyRegisteredError(user.email) from e
    db.refresh(user)
    logger.info("User registered: email=%s role=%s", user.email, user.role)
    return user


def authenticate_user(db: Session, email: str, password: str) -> User | None:
    """
    Return the user when email and password match, else None.

    Unknown email and wrong password are deliberately indistinguishable to the caller.
    """
    user = db.query(User).filter(User.email == normalize_email(email)).first()
    if user is None:
        verify_password(password, _dummy_password_hash())
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user
