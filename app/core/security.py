"""Password hashing and session token issuance/verification."""

from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any, Literal

import bcrypt
import jwt
from pydantic import BaseModel, SecretStr, ValidationError

from app.core.config import settings

# bcrypt only looks at the first 72 bytes of the password.
BCRYPT_MAX_BYTES = 72

# Max lengths for signup input validation (match the users table columns).
EMAIL_MAX_LEN = 255
NAME_MAX_LEN = 255
PASSWORD_MAX_LEN = 128


def hash_password(plain_password: str, rounds: int | None = None) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=rounds or settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash. Malformed hashes verify as False."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError):
        return False


class SessionClaims(BaseModel):
    """Identity carried inside a session token. Public (base64), so no secrets."""

    email: str
    role: str
    name: str


class InvalidTokenError(Exception):
    """Raised when a token cannot be trusted.

    reason is for server-side logs only; callers must answer every reason the same way.
    """

    def __init__(self, reason: Literal["malformed", "expired"]) -> None:
        self.reason = reason
        super().__init__(f"Invalid session token ({reason})")


class TokenCodec:
    """
    Signs SessionClaims into a JWT and verifies them back.

    Payload shape: {"user": {"email", "role", "name"}, "iat", "exp"}. Tokens are
    stateless: there is no server-side revocation before exp.
    """

    def __init__(self, secret: SecretStr, algorithm: str, ttl: timedelta) -> None:
        self._secret = secret
        self.algorithm = algorithm
        self.ttl = ttl

    def __repr__(self) -> str:
        return f"TokenCodec(algorithm={self.algorithm!r}, ttl={self.ttl!r})"

    def issue(
        self,
        claims: SessionClaims,
        ttl: timedelta | None = None,
        now: datetime | None = None,
    ) -> str:
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "user": claims.model_dump(),
            "iat": issued_at,
            "exp": issued_at + (ttl or self.ttl),
        }
        return jwt.encode(
            payload,
            self._secret.get_secret_value(),
            algorithm=self.algorithm,
        )

    def verify(self, token: str) -> SessionClaims:
        """
        Check signature and expiry; return the claims.
        Raises InvalidTokenError on any failure.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret.get_secret_value(),
                algorithms=[self.algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("expired") from e
        except jwt.PyJWTError as e:
            raise InvalidTokenError("malformed") from e
        try:
            return SessionClaims.model_validate(payload.get("user"))
        except ValidationError as e:
            raise InvalidTokenError("malformed") from e


def decode_unverified_claims(token: str) -> SessionClaims:
    """
    Read the claims without checking the signature.

    Only for client-side display hints (e.g. which links to show); never for
    authorization decisions. Raises InvalidTokenError if the payload is unreadable.
    """
    try:
        payload = jwt.decode(token, options={"verify_signature": False})
        return SessionClaims.model_validate(payload.get("user"))
    except (jwt.PyJWTError, ValidationError) as e:
        raise InvalidTokenError("malformed") from e


@lru_cache
def get_token_codec() -> TokenCodec:
    """Dependency: the process-wide codec, built once from settings."""
    return TokenCodec(
        secret=settings.JWT_SECRET,
        algorithm=settings.JWT_ALGORITHM,
        ttl=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )
