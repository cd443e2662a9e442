"""
Create a user (e.g. the first administrator). Run from project root:
  python -m bookstore.scripts.create_user USERNAME PASSWORD [role] [--email EMAIL]
Example:
  python -m bookstore.scripts.create_user admin your-secure-password Administrator --email admin@bookstore.com
"""
import argparse
import sys

from bookstore.core.config import get_settings
from bookstore.core.database import SessionLocal, init_db
from bookstore.core.logging import configure_logging
from bookstore.services.credentials import CUSTOMER, ROLE_NAMES, create_identity, ensure_roles


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Bookstore user.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (1-128 chars)")
    parser.add_argument("role", nargs="?", default=CUSTOMER, choices=list(ROLE_NAMES))
    parser.add_argument("--email", default=None, help="Email address (defaults to username)")
    args = parser.parse_args(argv)

    configure_logging(get_settings().LOG_LEVEL)
    username = args.username.strip()
    email = (args.email or username).strip()

    init_db()
    db = SessionLocal()
    try:
        ensure_roles(db)
        errors = create_identity(db, username, email, args.password, roles=(args.role,))
        if errors:
            for error in errors:
                print(error, file=sys.stderr)
            return 1
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
