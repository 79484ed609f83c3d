"""
Password hashing and session token utilities
"""

import hashlib
import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

# Token generation and validation
from jose import JWTError
from jose import jwt as jose_jwt

# Password hashing
from passlib.context import CryptContext

from .config import ACCESS_TOKEN_EXPIRE_MINUTES, JWT_ALGORITHM, SECRET_KEY

logger = logging.getLogger(__name__)

# New hashes use pbkdf2_sha512; bcrypt hashes from older accounts still verify
pwd_context = CryptContext(schemes=["pbkdf2_sha512", "bcrypt"], deprecated="auto")

# Legacy "salt:hexdigest" hashes written by the first version of the site
LEGACY_PBKDF2_ITERATIONS = 10000
LEGACY_PBKDF2_KEY_LENGTH = 64


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    """Hash a plain password"""
    if not password:
        raise ValueError("Password is required")
    return pwd_context.hash(password)


def is_legacy_hash(hashed_password: str) -> bool:
    salt, sep, digest = hashed_password.partition(":")
    return bool(sep and salt and digest) and not hashed_password.startswith("$")


def verify_legacy_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a legacy salt:hash PBKDF2-SHA512 password"""
    salt, _, expected = hashed_password.partition(":")
    derived = hashlib.pbkdf2_hmac(
        "sha512",
        plain_password.encode("utf-8"),
        salt.encode("utf-8"),
        LEGACY_PBKDF2_ITERATIONS,
        dklen=LEGACY_PBKDF2_KEY_LENGTH,
    ).hex()
    return hmac.compare_digest(derived, expected)


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Verify password against any supported hash format"""
    if not plain_password or not hashed_password:
        return False

    try:
        if is_legacy_hash(hashed_password):
            return verify_legacy_password(plain_password, hashed_password)
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError) as e:
        logger.error(f"Password verification error: {e}")
        return False


def needs_rehash(hashed_password: str) -> bool:
    """True when a stored hash should be upgraded to the current scheme"""
    if is_legacy_hash(hashed_password):
        return True
    try:
        return pwd_context.needs_update(hashed_password)
    except ValueError:
        return True


# ============================================================================
# TOKEN GENERATION & VALIDATION
# ============================================================================


def create_access_token(
    data: dict[str, Any], expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed session JWT

    Args:
        data: Claims to encode in the token
        expires_delta: Token lifetime (default ACCESS_TOKEN_EXPIRE_MINUTES)
    """
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jose_jwt.encode(to_encode, SECRET_KEY, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> Optional[dict[str, Any]]:
    """
    Verify and decode a session JWT

    Returns:
        Decoded payload if valid, None if invalid or expired
    """
    try:
        return jose_jwt.decode(token, SECRET_KEY, algorithms=[JWT_ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT verification failed: {e}")
        return None


def mask_email(email: str) -> str:
    """Mask an email for log output"""
    local, _, domain = email.partition("@")
    if not domain:
        return "****"
    return f"{local[:2]}****@{domain}"
