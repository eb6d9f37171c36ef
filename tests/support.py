"""Shared helpers: in-memory SQLite database wired into the FastAPI app."""

import unittest
from collections.abc import Generator

from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.database import get_db
from app.main import app
from app.models import Base, Tool, ToolCategory


def make_engine() -> Engine:
    """One shared in-memory connection so the app and the test see the same data."""
    return create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )


def seed_catalog(db: Session) -> None:
    """
    Two categories (inserted out of name order), one uncategorized tool, one
    custom tool that must never be listed.
    """
    writing = ToolCategory(id=1, name="Writing")
    analytics = ToolCategory(id=2, name="Analytics")
    db.add_all([writing, analytics])
    db.flush()
    db.add_all(
        [
            Tool(name="Zeta Editor", url="https://zeta.example.com", type="free", category_id=1),
            Tool(
                name="Alpha Draft",
                description="Drafting assistant",
                url="https://alpha.example.com",
                type="pro",
                category_id=1,
            ),
            Tool(name="Charts", url="https://charts.example.com", type="free", category_id=2),
            Tool(name="Bespoke Report", url="https://bespoke.example.com", type="custom", category_id=2),
            Tool(name="Link Shortener", url="https://short.example.com", type="free", category_id=None),
            Tool(name="Private Thing", url="https://private.example.com", type="custom", category_id=None),
        ]
    )
    db.commit()


class DatabaseTestCase(unittest.TestCase):
    """Fresh schema per test on an in-memory SQLite engine."""

    def setUp(self) -> None:
        self.engine = make_engine()
        Base.metadata.create_all(self.engine)
        self.SessionTesting = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)
        self.db = self.SessionTesting()

    def tearDown(self) -> None:
        self.db.close()
        Base.metadata.drop_all(self.engine)
        self.engine.dispose()


class ApiTestCase(DatabaseTestCase):
    """DatabaseTestCase plus a TestClient whose get_db yields sessions on the test engine."""

    def setUp(self) -> None:
        super().setUp()

        def override_get_db() -> Generator[Session, None, None]:
            db = self.SessionTesting()
            try:
                yield db
            finally:
                db.close()

        app.dependency_overrides[get_db] = override_get_db
        self.client = TestClient(app)

    def tearDown(self) -> None:
        app.dependency_overrides.clear()
        super().tearDown()

    def signup(self, email: str = "A@x.com", password: str = "p", **extra: str):
        body = {"email": email, "password": password, "firstName": "Jo", "lastName": "Do"}
        body.update(extra)
        return self.client.post("/signup", json=body)

    def login(self, email: str = "a@x.com", password: str = "p"):
        return self.client.post("/login", json={"email": email, "password": password})

    def auth_headers(self, token: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {token}"}
