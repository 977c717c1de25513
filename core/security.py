"""
Bearer token handling for Promptly.

Tokens are HS256 JWTs issued by the identity provider that fronts the API.
The ``sub`` claim is the caller's auth id, which links the token to a
local ``users`` row; ``name``, ``email`` and ``picture`` are optional
profile claims used to create or refresh that row.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

from jose import JWTError, jwt

from .config import get_settings
from .exceptions import AuthenticationError

BEARER_SCHEME = "bearer"


def create_access_token(
    data: Dict[str, Any],
    expires_delta: Optional[timedelta] = None,
) -> str:
    """
    Sign a bearer token for a Promptly user.

    Used by the seed and test tooling; production tokens come from the
    identity provider with the same shared secret.

    Args:
        data: Claims to sign; ``sub`` should carry the user's auth id
        expires_delta: Lifetime of the token, defaults to the configured days
    """
    settings = get_settings()
    issued_at = datetime.now(timezone.utc)
    lifetime = expires_delta or timedelta(days=settings.jwt_expire_days)

    claims = {**data, "iat": issued_at, "exp": issued_at + lifetime}
    return jwt.encode(claims, settings.secret_key, algorithm=settings.jwt_algorithm)


def verify_token(token: str) -> Dict[str, Any]:
    """
    Decode a bearer token and return its claims.

    Raises:
        AuthenticationError: bad signature, expired, or no ``sub`` claim
    """
    settings = get_settings()

    try:
        claims = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError as e:
        raise AuthenticationError(
            message="Invalid or expired token",
            details={"error": str(e)},
        )

    # Without a subject the caller cannot be matched to a user row
    if not claims.get("sub"):
        raise AuthenticationError(message="Token has no subject")

    return claims


def extract_token_from_header(authorization: Optional[str]) -> Optional[str]:
    """The token from an ``Authorization: Bearer <token>`` header, else None."""
    if not authorization:
        return None

    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != BEARER_SCHEME or not token or " " in token:
        return None

    return token
