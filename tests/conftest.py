"""
Test environment. Settings are read once at import time, so the database URL,
signing key and upload directory are set here before any bookstore import.
"""

import os
import tempfile

os.environ["APP_ENV"] = "dev"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-signing-key-0123456789abcdef0123456789"
os.environ["JWT_ISSUER"] = "bookstore-test"
os.environ["JWT_EXPIRE_MINUTES"] = "300"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="bookstore-uploads-")
os.environ["LOG_LEVEL"] = "WARNING"

from bookstore.core import security  # noqa: E402

# Low bcrypt cost keeps user creation fast in tests.
security.BCRYPT_ROUNDS = 4
