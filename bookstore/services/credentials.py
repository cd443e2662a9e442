"""Credential store: identities, password hashes and role memberships."""

import logging
from collections.abc import Iterable

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from bookstore.core.errors import PersistenceError
from bookstore.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    USERNAME_MIN_LEN,
    dummy_password_hash,
    hash_password,
    verify_password,
)
from bookstore.models import Role, User

logger = logging.getLogger(__name__)

ADMINISTRATOR = "Administrator"
CUSTOMER = "Customer"
ROLE_NAMES = (ADMINISTRATOR, CUSTOMER)


def ensure_roles(db: Session, names: Iterable[str] = ROLE_NAMES) -> list[str]:
    """Create any missing role. Idempotent; returns the names that were created."""
    existing = {name for (name,) in db.query(Role.name).all()}
    created = [name for name in names if name not in existing]
    for name in created:
        db.add(Role(name=name))
    if created:
        try:
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise PersistenceError("Failed to create roles.") from e
        logger.info("Created roles: %s", ", ".join(created))
    return created


def find_user(db: Session, username: str) -> User | None:
    return db.query(User).filter(User.username == username).first()


def create_identity(
    db: Session,
    username: str,
    email: str,
    password: str,
    roles: Iterable[str] = (CUSTOMER,),
) -> list[str]:
    """
    Create a user with the given roles.

    Returns a list of error descriptions; an empty list means the user was
    created. Roles that do not exist are reported as errors.
    """
    errors: list[str] = []
    if not (USERNAME_MIN_LEN <= len(username) <= USERNAME_MAX_LEN):
        errors.append("InvalidUserName: username length is out of range.")
    if not (PASSWORD_MIN_LEN <= len(password) <= PASSWORD_MAX_LEN):
        errors.append("InvalidPassword: password length is out of range.")
    if errors:
        return errors

    clash = (
        db.query(User)
        .filter(or_(User.username == username, User.email == email))
        .first()
    )
    if clash is not None:
        if clash.username == username:
            errors.append(f"DuplicateUserName: username '{username}' is already taken.")
        if clash.email == email:
            errors.append(f"DuplicateEmail: email '{email}' is already taken.")
        return errors

    role_names = list(dict.fromkeys(roles))
    role_rows = db.query(Role).filter(Role.name.in_(role_names)).all()
    missing = set(role_names) - {r.name for r in role_rows}
    if missing:
        return [f"RoleNotFound: role '{name}' does not exist." for name in sorted(missing)]

    user = User(
        username=username,
        email=email,
        password_hash=hash_password(password),
        roles=role_rows,
    )
    db.add(user)
    try:
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        raise PersistenceError(f"Failed to create user '{username}'.") from e
    return []


def verify_credentials(db: Session, username: str, password: str) -> User | None:
    """
    Return the user if username/password match, else None.

    Unknown usernames are checked against a dummy hash so response time does
    not reveal which usernames exist.
    """
    user = find_user(db, username)
    if user is None:
        verify_password(password, dummy_password_hash())
        return None
    if not verify_password(password, user.password_hash):
        return None
    return user


def get_roles(user: User) -> list[str]:
    return sorted(role.name for role in user.roles)
