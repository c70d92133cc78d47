"""Password hashing and access-token issuance."""

import secrets

from passlib.context import CryptContext

# 128 bytes of entropy, hex-encoded to 256 characters
TOKEN_BYTES = 128

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    """Hash a password with a fresh per-call salt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Malformed hashes never match."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False


def issue_token() -> str:
    """Create an opaque bearer token. Tokens never expire."""
    return secrets.token_hex(TOKEN_BYTES)
