from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

import bcrypt
import jwt

from .core.config import settings

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"

# Fallback for dev/test when FUSION_JWT_SECRET is not configured
DEFAULT_SECRET = "default-secret-for-dev"


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(password: str, pw_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), pw_hash.encode("utf-8"))
    except ValueError:
        # Stored value is not a bcrypt hash
        logger.error("Stored password hash is malformed")
        return False


def get_secret() -> str:
    if settings.JWT_SECRET:
        return settings.JWT_SECRET
    logger.warning("JWT_SECRET not set, using default secret.")
    return DEFAULT_SECRET


def encode_token(user_id: int, session_token: str, expires_at: datetime) -> str:
    """Sign a JWT bound to a stored session.

    ``expires_at`` is naive UTC, as stored in the sessions table.
    """
    now = datetime.now(timezone.utc)
    claims: dict[str, Any] = {
        "sub": str(user_id),
        "sid": session_token,
        "exp": expires_at.replace(tzinfo=timezone.utc),
        "iat": now,
        "nbf": now,
    }
    return jwt.encode(claims, get_secret(), algorithm=JWT_ALGORITHM)


def decode_token(token: str, *, verify_exp: bool = True) -> dict[str, Any]:
    """Verify signature and time claims; raises ``jwt.InvalidTokenError`` on failure."""
    return jwt.decode(
        token,
        get_secret(),
        algorithms=[JWT_ALGORITHM],
        options={"require": ["sub", "sid", "exp"], "verify_exp": verify_exp},
    )
