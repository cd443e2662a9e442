"""Shared helpers for API-level tests: fresh database, users, tokens and a test client."""

import tempfile
import unittest
from pathlib import Path

from fastapi.testclient import TestClient

from bookstore.api.deps import get_asset_store
from bookstore.core.database import SessionLocal, engine
from bookstore.main import app
from bookstore.models import Base
from bookstore.services.assets import AssetStore
from bookstore.services.credentials import (
    ADMINISTRATOR,
    CUSTOMER,
    create_identity,
    ensure_roles,
)

ADMIN = ("admin", "P@ssword1")
CUSTOMER_USER = ("customer1", "P@ssword1")


def reset_database() -> None:
    """Drop and recreate every table, then create the fixed roles."""
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        ensure_roles(db)
    finally:
        db.close()


def add_user(
    username: str,
    password: str,
    roles: tuple[str, ...] = (CUSTOMER,),
    email: str | None = None,
) -> None:
    db = SessionLocal()
    try:
        errors = create_identity(
            db, username, email or f"{username}@example.com", password, roles=roles
        )
    finally:
        db.close()
    if errors:
        raise AssertionError(f"could not create {username}: {errors}")


class ApiTestCase(unittest.TestCase):
    """Fresh database, temporary upload directory and a started TestClient per test."""

    def setUp(self) -> None:
        reset_database()
        add_user(*ADMIN, roles=(ADMINISTRATOR,), email="admin@bookstore.com")
        add_user(*CUSTOMER_USER, email="customer1@example.com")
        self.upload_dir = Path(self.enterContext(tempfile.TemporaryDirectory()))
        self.assets = AssetStore(self.upload_dir)
        app.dependency_overrides[get_asset_store] = lambda: self.assets
        self.addCleanup(app.dependency_overrides.clear)
        self.client = self.enterContext(TestClient(app))

    def login(self, username: str, password: str) -> str:
        resp = self.client.post(
            "/api/users/login", json={"username": username, "password": password}
        )
        self.assertEqual(resp.status_code, 200, resp.text)
        return resp.json()["token"]

    def auth(self, username: str, password: str) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.login(username, password)}"}

    def admin_headers(self) -> dict[str, str]:
        return self.auth(*ADMIN)

    def customer_headers(self) -> dict[str, str]:
        return self.auth(*CUSTOMER_USER)
