"""
Security helpers for password hashing and JWT issuance.

Passwords are hashed with bcrypt using a fresh random salt per call and
a fixed work factor (``settings.bcrypt_rounds``, 10 by default).
Verification goes through ``bcrypt.checkpw`` which compares in constant
time.  Only the first 72 bytes of the UTF-8 encoded password take part
in the hash, the limit of the bcrypt algorithm itself.

Tokens are HS256 JSON Web Tokens produced by PyJWT; the claims carry the
account email plus ``iat``/``exp`` timestamps.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import bcrypt
import jwt

from .config import settings


BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    # bcrypt ignores everything past 72 bytes; recent releases raise
    # instead, so truncate explicitly for both hashing and checking.
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt.

    Parameters
    ----------
    password : str
        The plain text password to hash.
    rounds : Optional[int]
        bcrypt cost factor.  Defaults to ``settings.bcrypt_rounds``.

    Returns
    -------
    str
        The ``$2b$...`` encoded hash (salt included).
    """
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: Optional[str]) -> bool:
    """Check a plain password against a stored bcrypt hash.

    The empty string is a valid password.  Returns ``False`` for a
    missing password or a missing or malformed hash rather than
    raising, so callers can treat every failure as a credential
    mismatch.
    """
    if plain_password is None or not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        return False


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT with the given claims.

    The payload is extended with ``iat`` and ``exp``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"email": "user@example.com"}``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to the ``EXPIRES_IN``
        setting.

    Returns
    -------
    str
        A signed JWT.
    """
    to_encode = data.copy()
    lifetime = expires_delta if expires_delta is not None else settings.expires_in_seconds
    now = datetime.now(timezone.utc)
    to_encode["iat"] = int(now.timestamp())
    to_encode["exp"] = int((now + timedelta(seconds=lifetime)).timestamp())
    return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT.

    Returns the claims when the signature and expiry check out,
    otherwise ``None``.
    """
    try:
        return jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except jwt.InvalidTokenError:
        return None
