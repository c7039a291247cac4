"""
Security Service

Handles password hashing and JWT token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib), 10 rounds by default
2. Signed, time-limited JWT access tokens carrying {id, email, role}
3. Silent verification: any invalid token resolves to "no principal"

Usage:
    from app.services.security import hash_password, verify_password

    hashed = hash_password("SecurePass123")
    is_valid = verify_password("SecurePass123", hashed)
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TYPE_CHECKING

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

if TYPE_CHECKING:
    from app.schemas.records import UserRecord

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# Each hash gets a fresh random salt; the cost factor is embedded in the
# hash string so verification does not depend on the current setting.
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Args:
        password: Plain text password

    Returns:
        Bcrypt hash of the password

    Example:
        >>> hashed = hash_password("SecurePass123")
        >>> hashed.startswith("$2b$10$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a hashed password.

    Never raises for a mismatch or for a stored value that is not a
    recognisable hash; both return False.

    Args:
        plain_password: The password to verify
        hashed_password: The stored bcrypt hash

    Returns:
        True if password matches, False otherwise
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.warning(f"Password verification failed on malformed hash: {e}")
        return False


# -------------------------------------------------------------------------
# JWT Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"


@dataclass(frozen=True)
class Principal:
    """
    The authenticated identity behind a request.

    Built only from verified token claims; no database lookup is involved.
    """

    id: int
    email: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


def create_access_token(
    user: "UserRecord",
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a signed access token for a user.

    The payload embeds the user's id, email and role, plus issue and
    expiry times. The default lifetime is `settings.token_expire_days`.

    Args:
        user: The user the token identifies
        expires_delta: Optional custom lifetime

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(days=settings.token_expire_days)

    to_encode = {
        "id": str(user.id),
        "email": user.email,
        "role": user.role,
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(
        to_encode,
        settings.secret_key,
        algorithm=ALGORITHM,
    )


def verify_token(token: str) -> dict | None:
    """
    Decode and validate a JWT token.

    Malformed, expired and tampered tokens are all treated alike.

    Args:
        token: The JWT token string

    Returns:
        Decoded claims if valid, None otherwise
    """
    try:
        return jwt.decode(
            token,
            settings.secret_key,
            algorithms=[ALGORITHM],
        )
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        return None


def get_user_from_token(authorization: str | None) -> Principal | None:
    """
    Resolve the principal from a raw Authorization header value.

    An optional "Bearer " prefix is stripped before verification.

    Args:
        authorization: Header value, e.g. "Bearer eyJ..." (may be None)

    Returns:
        Principal if the token is valid, None otherwise
    """
    if not authorization:
        return None

    token = authorization.strip()
    if token.startswith("Bearer "):
        token = token[len("Bearer "):].strip()

    claims = verify_token(token)
    if claims is None:
        return None

    try:
        return Principal(
            id=int(claims["id"]),
            email=str(claims["email"]),
            role=str(claims["role"]),
        )
    except (KeyError, TypeError, ValueError):
        logger.warning("Token is missing required claims")
        return None
