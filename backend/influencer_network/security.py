"""
Influencer Network Backend: Credentials & Tokens
=================================================

What:  Password hashing, JWT access tokens and one-time (reset/verify) tokens.
How:   bcrypt for passwords; python-jose (HS256) for access tokens;
       secrets + SHA-256 for one-time tokens, of which only the digest is stored.
Who:   AuthService and the get_current_user dependency.
"""

import hashlib
import logging
import secrets
import uuid
from datetime import timedelta
from typing import Any, Dict, Optional, Tuple

import bcrypt
from jose import JWTError, jwt
from jose.exceptions import ExpiredSignatureError

from influencer_network.config import settings
from influencer_network.database import utcnow
from influencer_network.exceptions import AuthenticationError

logger = logging.getLogger(__name__)


# ── Passwords ─────────────────────────────────────────────────────────────


def hash_password(password: str, rounds: Optional[int] = None) -> str:
    """Hash a password with bcrypt using the configured cost factor."""
    salt = bcrypt.gensalt(rounds=rounds or settings.bcrypt_rounds)
    return bcrypt.hashpw(password.encode("utf-8"), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Constant-time password check; malformed hashes never match."""
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        logger.warning("Stored password hash is not a valid bcrypt hash")
        return False


# ── Access tokens ─────────────────────────────────────────────────────────


def create_access_token(
    user_id: uuid.UUID,
    email: str,
    role: str,
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a JWT carrying {userId, email, role, iat, exp}.

    The default lifetime is JWT_EXPIRES_IN_SECONDS (7 days).
    """
    now = utcnow()
    expires = now + (expires_delta or timedelta(seconds=settings.jwt_expires_in_seconds))
    claims = {
        "userId": str(user_id),
        "email": email,
        "role": role,
        "iat": int(now.timestamp()),
        "exp": int(expires.timestamp()),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiry and return the claims.

    Raises:
        AuthenticationError: "Token has expired" or "Invalid token".
    """
    try:
        claims = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except ExpiredSignatureError:
        raise AuthenticationError("Token has expired")
    except JWTError:
        raise AuthenticationError("Invalid token")

    if "userId" not in claims:
        raise AuthenticationError("Invalid token")
    return claims


# ── One-time tokens ───────────────────────────────────────────────────────


def hash_token(raw_token: str) -> str:
    return hashlib.sha256(raw_token.encode("utf-8")).hexdigest()


def generate_one_time_token() -> Tuple[str, str]:
    """
    Create a random token for password reset or email verification.

    Returns:
        (raw_token, token_hash): the raw value goes to the user, the hash is stored.
    """
    raw_token = secrets.token_hex(32)
    return raw_token, hash_token(raw_token)
