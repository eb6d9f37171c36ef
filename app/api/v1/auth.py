"""Signup, login, and the bearer-token dependency (get_current_claims)."""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.security import (
    EMAIL_MAX_LEN,
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    InvalidTokenError,
    SessionClaims,
    TokenCodec,
    get_token_codec,
)
from app.schemas.auth import (
    CreatedUser,
    LoginRequest,
    MessageResponse,
    SignupRequest,
    SignupResponse,
    TokenResponse,
)
from app.services.accounts import (
    EmailAlreadyRegisteredError,
    authenticate_user,
    register_user,
)

logger = logging.getLogger(__name__)
router = APIRouter()
security = HTTPBearer(auto_error=False)

# One message for unknown email and wrong password, so responses never reveal which accounts exist.
INVALID_CREDENTIALS = "Invalid credentials."
# One message for every token failure (missing, malformed, tampered, expired).
INVALID_TOKEN = "Invalid or expired token."
INTERNAL_ERROR = "Internal Server Error"


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _validate_signup(body: SignupRequest) -> None:
    if (
        _is_blank(body.email)
        or not body.password
        or _is_blank(body.first_name)
        or _is_blank(body.last_name)
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing required fields: email, password, firstName, lastName.",
        )
    if len(body.email.strip()) > EMAIL_MAX_LEN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid email length.",
        )
    if len(body.password) > PASSWORD_MAX_LEN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid password length.",
        )
    if max(len(body.first_name.strip()), len(body.last_name.strip())) > NAME_MAX_LEN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid name length.",
        )
    if len((body.company or "").strip()) > NAME_MAX_LEN:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid company length.",
        )


@router.post(
    "/signup",
    status_code=status.HTTP_201_CREATED,
    response_model=SignupResponse,
    responses={400: {"model": MessageResponse}, 409: {"model": MessageResponse}},
)
def signup(
    body: SignupRequest,
    db: Annotated[Session, Depends(get_db)],
) -> SignupResponse:
    """
    Create an account with role 'user'. The email is stored lowercase.
    The password hash is never part of the response.
    """
    _validate_signup(body)
    try:
        user = register_user(
            db,
            email=body.email,
            password=body.password,
            first_name=body.first_name.strip(),
            last_name=body.last_name.strip(),
            company=(body.company or "").strip() or None,
        )
    except EmailAlreadyRegisteredError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=e.message) from e
    except (SQLAlchemyError, OSError) as e:
        logger.exception("Signup failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR,
        ) from e
    return SignupResponse(user=CreatedUser.model_validate(user))


@router.post(
    "/login",
    response_model=TokenResponse,
    responses={400: {"model": MessageResponse}, 401: {"model": MessageResponse}},
)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a signed session token.
    Include the token in the Authorization header as: Bearer <token>
    """
    if _is_blank(body.email) or not body.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Email and password are required.",
        )
    try:
        user = authenticate_user(db, body.email, body.password)
    except SQLAlchemyError as e:
        logger.exception("Login failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=INTERNAL_ERROR,
        ) from e
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_CREDENTIALS,
        )
    token = codec.issue(SessionClaims(email=user.email, role=user.role, name=user.first_name))
    logger.info("User logged in: email=%s", user.email)
    return TokenResponse(token=token)


def get_current_claims(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> SessionClaims:
    """
    Dependency: require a valid Bearer token and return its claims. Raises 401 otherwise.

    The token is the only source of the caller's identity; the users table is not consulted.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_TOKEN,
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return codec.verify(credentials.credentials)
    except InvalidTokenError as e:
        logger.debug("Rejected session token: reason=%s", e.reason)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=INVALID_TOKEN,
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
