"""
JWT issuing and verification for the stub token endpoint.

Tokens are HS256-signed with the stub's ``STUB_SECRET_KEY``.  They carry
the username plus the canonical ``iat``/``exp`` claims; anything that
fails verification is treated as an invalid bearer token (401).
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any

import jwt

ALGORITHM = "HS256"
REQUIRED_TOKEN_CLAIMS = ["sub", "iat", "exp"]


def create_token(username: str, secret_key: str, expiry_seconds: int) -> str:
    """
    Create an HS256-signed access token for *username*.

    Raises:
        ValueError: If *username* is blank.
    """
    if not isinstance(username, str) or not username.strip():
        raise ValueError("username must be a non-empty string")

    now = datetime.now(timezone.utc)
    payload: dict[str, Any] = {
        "sub": username,
        "iat": int(now.timestamp()),
        "exp": int((now + timedelta(seconds=int(expiry_seconds))).timestamp()),
    }
    return jwt.encode(payload, secret_key, algorithm=ALGORITHM)


def verify_token(token: str, secret_key: str) -> dict[str, Any] | None:
    """Return the decoded claims of a valid token, or None."""
    try:
        return jwt.decode(
            token,
            secret_key,
            algorithms=[ALGORITHM],
            options={"require": REQUIRED_TOKEN_CLAIMS},
        )
    except jwt.InvalidTokenError:
        return None
