"""
Tests for the Security Service

Covers the credential primitives:
- Password hashing and verification
- Access token issue and verification
- Resolving a principal from an Authorization header
"""

from datetime import UTC, datetime, timedelta

from jose import jwt

from app.config import get_settings
from app.schemas.records import UserRecord
from app.services.security import (
    ALGORITHM,
    Principal,
    create_access_token,
    get_user_from_token,
    hash_password,
    verify_password,
    verify_token,
)


def make_user(role: str = "user") -> UserRecord:
    return UserRecord(id=42, username="alice", email="a@x.com", role=role)


class TestPasswordHashing:
    """Tests for hash_password / verify_password."""

    def test_hash_is_bcrypt_with_ten_rounds(self):
        hashed = hash_password("pw")

        assert hashed.startswith("$2b$10$")
        assert hashed != "pw"

    def test_hash_uses_fresh_salt(self):
        assert hash_password("pw") != hash_password("pw")

    def test_verify_correct_password(self):
        hashed = hash_password("SecurePass123")

        assert verify_password("SecurePass123", hashed) is True

    def test_verify_wrong_password(self):
        hashed = hash_password("SecurePass123")

        assert verify_password("WrongPassword", hashed) is False

    def test_verify_malformed_hash_returns_false(self):
        """A stored value that is not a hash must not raise."""
        assert verify_password("pw", "not-a-bcrypt-hash") is False


class TestAccessTokens:
    """Tests for create_access_token / verify_token."""

    def test_token_round_trip(self):
        token = create_access_token(make_user())

        claims = verify_token(token)

        assert claims is not None
        assert claims["id"] == "42"
        assert claims["email"] == "a@x.com"
        assert claims["role"] == "user"

    def test_token_expires_after_seven_days(self):
        token = create_access_token(make_user())

        claims = verify_token(token)
        lifetime = claims["exp"] - claims["iat"]

        assert lifetime == int(timedelta(days=7).total_seconds())

    def test_expired_token_is_rejected(self):
        token = create_access_token(make_user(), expires_delta=timedelta(seconds=-10))

        assert verify_token(token) is None

    def test_tampered_token_is_rejected(self):
        token = create_access_token(make_user())
        header, payload, signature = token.split(".")
        tampered = ".".join([header, payload, signature[::-1]])

        assert verify_token(tampered) is None

    def test_token_signed_with_other_key_is_rejected(self):
        forged = jwt.encode(
            {
                "id": "42",
                "email": "a@x.com",
                "role": "admin",
                "exp": datetime.now(UTC) + timedelta(days=1),
            },
            "another-secret-key-that-is-long-enough-to-pass",
            algorithm=ALGORITHM,
        )

        assert verify_token(forged) is None

    def test_malformed_token_is_rejected(self):
        assert verify_token("not.a.token") is None
        assert verify_token("") is None


class TestGetUserFromToken:
    """Tests for resolving a principal from an Authorization header."""

    def test_bearer_header(self):
        token = create_access_token(make_user(role="admin"))

        principal = get_user_from_token(f"Bearer {token}")

        assert principal == Principal(id=42, email="a@x.com", role="admin")
        assert principal.is_admin

    def test_header_without_prefix(self):
        token = create_access_token(make_user())

        principal = get_user_from_token(token)

        assert principal is not None
        assert principal.id == 42
        assert not principal.is_admin

    def test_missing_header(self):
        assert get_user_from_token(None) is None
        assert get_user_from_token("") is None

    def test_invalid_token(self):
        assert get_user_from_token("Bearer garbage") is None

    def test_token_missing_claims(self):
        token = jwt.encode(
            {"sub": "42", "exp": datetime.now(UTC) + timedelta(days=1)},
            get_settings().secret_key,
            algorithm=ALGORITHM,
        )

        assert get_user_from_token(f"Bearer {token}") is None
