"""Startup wiring: fatal configuration checks and role bootstrap."""

import contextlib
import io
import unittest
from unittest.mock import patch

from fastapi.testclient import TestClient

from bookstore.core.database import SessionLocal
from bookstore.core.errors import ConfigurationError
from bookstore.main import app, settings
from bookstore.models import Role, User
from bookstore.scripts.create_user import main as create_user_main
from bookstore.services.credentials import get_roles
from tests.support import reset_database


class TestStartup(unittest.TestCase):
    def setUp(self) -> None:
        reset_database()

    def test_missing_signing_key_is_fatal(self) -> None:
        with patch.object(settings, "JWT_SECRET", None):
            with self.assertRaises(ConfigurationError):
                with TestClient(app):
                    pass

    def test_startup_creates_roles_once(self) -> None:
        with TestClient(app):
            pass
        with TestClient(app):
            pass
        db = SessionLocal()
        try:
            names = sorted(name for (name,) in db.query(Role.name).all())
        finally:
            db.close()
        self.assertEqual(names, ["Administrator", "Customer"])


class TestCreateUserScript(unittest.TestCase):
    def setUp(self) -> None:
        reset_database()

    def run_script(self, *argv: str) -> tuple[int, str, str]:
        out, err = io.StringIO(), io.StringIO()
        with contextlib.redirect_stdout(out), contextlib.redirect_stderr(err):
            code = create_user_main(list(argv))
        return code, out.getvalue(), err.getvalue()

    def test_creates_administrator(self) -> None:
        code, out, _ = self.run_script(
            "Admin", "P@ssword1", "Administrator", "--email", "admin@bookstore.com"
        )
        self.assertEqual(code, 0)
        self.assertIn("Created user 'Admin'", out)
        db = SessionLocal()
        try:
            user = db.query(User).filter(User.username == "Admin").one()
            self.assertEqual(user.email, "admin@bookstore.com")
            self.assertEqual(get_roles(user), ["Administrator"])
        finally:
            db.close()

    def test_duplicate_user_fails(self) -> None:
        self.assertEqual(self.run_script("Customer1", "P@ssword1")[0], 0)
        code, _, err = self.run_script("Customer1", "P@ssword1")
        self.assertEqual(code, 1)
        self.assertIn("DuplicateUserName", err)
