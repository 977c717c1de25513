"""
Central authentication module using bearer JWT validation.

Tokens are issued by the external identity provider; this module only
verifies them and exposes the caller as an AppUser.
"""

import logging
from dataclasses import dataclass, field

from fastapi import Header

from .exceptions import AuthenticationError
from .security import extract_token_from_header, verify_token

logger = logging.getLogger(__name__)


@dataclass
class AppUser:
    """Application user, constructed from JWT claims."""

    id: str  # identity-provider subject (sub claim)
    email: str | None
    name: str | None
    avatar_url: str | None
    raw_payload: dict = field(default_factory=dict)

    @property
    def display_name(self) -> str:
        """Get the best display name for the user."""
        return self.name or self.email or "Unknown"


def _to_app_user(payload: dict) -> AppUser:
    """Convert a decoded token payload to AppUser."""
    return AppUser(
        id=str(payload["sub"]),
        email=payload.get("email"),
        name=payload.get("name"),
        avatar_url=payload.get("picture") or payload.get("avatar_url"),
        raw_payload=payload,
    )


# ============ FastAPI Dependencies ============


async def get_current_user(authorization: str | None = Header(None)) -> AppUser | None:
    """
    Get current user from JWT token in Authorization header.

    Returns None if not authenticated (allows unauthenticated access).
    """
    token = extract_token_from_header(authorization)
    if not token:
        return None

    try:
        return _to_app_user(verify_token(token))
    except AuthenticationError as e:
        logger.warning("JWT verification failed: %s", e.message)
        return None


async def require_current_user(authorization: str | None = Header(None)) -> AppUser:
    """
    Require authenticated user.

    Raises 401 if not authenticated.
    """
    user = await get_current_user(authorization)
    if not user:
        raise AuthenticationError(message="Authentication required")
    return user
