"""Registration and login endpoints."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from bookstore.core.database import get_db
from bookstore.core.errors import AuthenticationError, PersistenceError
from bookstore.core.security import create_access_token
from bookstore.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    TokenResponse,
)
from bookstore.services.credentials import (
    CUSTOMER,
    create_identity,
    get_roles,
    verify_credentials,
)

logger = logging.getLogger(__name__)
router = APIRouter()


@router.post("/register", response_model=RegisterResponse, status_code=201)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> RegisterResponse:
    """
    Create a user with the Customer role.
    email defaults to the username when not given.
    """
    location = "Users - Register"
    email = body.email or body.username
    logger.info("%s: Registration attempt for %s", location, body.username)

    errors = create_identity(db, body.username, email, body.password, roles=(CUSTOMER,))
    if errors:
        for error in errors:
            logger.error("%s: %s", location, error)
        raise PersistenceError(f"{location}: {body.username} User Registration Attempt Failed")

    logger.info("%s: %s registered", location, body.username)
    return RegisterResponse(succeeded=True)


@router.post("/login", response_model=TokenResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> TokenResponse:
    """
    Authenticate with username and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    location = "Users - Login"
    logger.info("%s: Login attempt from user %s", location, body.username)

    user = verify_credentials(db, body.username, body.password)
    if user is None:
        logger.info("%s: %s Not authenticated", location, body.username)
        message = "Invalid username or password."
        raise AuthenticationError(message, detail={"message": message, "username": body.username})

    logger.info("%s: %s Successfully authenticated", location, body.username)
    token = create_access_token(user_id=user.id, email=user.email, roles=get_roles(user))
    return TokenResponse(token=token)
