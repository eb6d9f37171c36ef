"""ORM model for application users (signup/login and role hints)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base

USER_ROLES = ("user", "admin")


class User(Base):
    """
    User account for password login and session tokens.

    email is stored lowercase; the unique index is the only arbiter of
    concurrent signups for the same address. role: 'admin' or 'user'.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=False)
    last_name = Column(String(255), nullable=False)
    company = Column(String(255), nullable=True)
    role = Column(String(32), nullable=False, default="user", server_default="user")
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
