"""Password hashing and JWT signing/verification for authentication."""

import logging
from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
import jwt
from pydantic import BaseModel, ValidationError

from app.core.config import Settings

logger = logging.getLogger(__name__)

# Defaults come from the Settings field defaults so the two cannot drift apart.
BCRYPT_ROUNDS: int = Settings.model_fields["BCRYPT_ROUNDS"].default
JWT_ALGORITHM: str = Settings.model_fields["JWT_ALGORITHM"].default
JWT_EXPIRE_MINUTES: int = Settings.model_fields["JWT_EXPIRE_MINUTES"].default


class TokenClaims(BaseModel):
    """Identity claims carried inside an access token."""

    userId: str
    email: str
    role: str


def hash_password(plain_password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors.
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


class TokenCodec:
    """
    Signs and verifies access tokens with a single process-wide secret.

    verify() never raises: any structural, signature or expiry failure yields None.
    """

    def __init__(
        self,
        secret: str,
        algorithm: str = JWT_ALGORITHM,
        expire_minutes: int = JWT_EXPIRE_MINUTES,
    ) -> None:
        if not secret:
            raise ValueError("Token secret must be non-empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expires_in = timedelta(minutes=expire_minutes)

    @classmethod
    def from_settings(cls, settings: Settings) -> "TokenCodec":
        return cls(
            secret=settings.JWT_SECRET.get_secret_value(),
            algorithm=settings.JWT_ALGORITHM,
            expire_minutes=settings.JWT_EXPIRE_MINUTES,
        )

    def sign(self, claims: TokenClaims, expires_in: timedelta | None = None) -> str:
        """Create a JWT with userId, email, role, iat and exp."""
        now = datetime.now(UTC)
        expire = now + (self._expires_in if expires_in is None else expires_in)
        payload: dict[str, Any] = {
            **claims.model_dump(),
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str | None) -> TokenClaims | None:
        """Return the claims if signature and expiry are valid, else None."""
        if not token:
            return None
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            logger.info("Rejected expired token")
            return None
        except jwt.PyJWTError as e:
            logger.warning("Rejected invalid token: %s", type(e).__name__)
            return None
        try:
            return TokenClaims(
                userId=str(payload["userId"]),
                email=payload["email"],
                role=payload["role"],
            )
        except (KeyError, TypeError, ValidationError):
            logger.warning("Rejected token with incomplete claims")
            return None
