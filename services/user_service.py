"""
User profiles and local user sync from bearer-token claims.
"""

import logging
from uuid import UUID

from api.schemas.users import UserProfile
from core.auth import AppUser
from core.exceptions import UserNotFoundError
from database.models import User
from database.repositories import FollowRepository, UserRepository
from utils.format import avatar_url

logger = logging.getLogger(__name__)


def _clean(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


class UserService:
    def __init__(self, user_repo: UserRepository, follow_repo: FollowRepository):
        self.users = user_repo
        self.follows = follow_repo

    async def get_profile(self, user_id: UUID, current_user_id: UUID | None = None) -> UserProfile:
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise UserNotFoundError(details={"user_id": str(user_id)})

        counts = await self.users.get_counts(user_id)

        is_following = False
        if current_user_id and current_user_id != user_id:
            is_following = await self.follows.get(current_user_id, user_id) is not None

        return UserProfile(
            id=user.id,
            name=user.name,
            email=user.email,
            image=avatar_url(user.name, user.image),
            bio=user.bio,
            is_following=is_following,
            created_at=user.created_at,
            **counts,
        )

    async def update_profile(
        self,
        user_id: UUID,
        name: str | None = None,
        bio: str | None = None,
        avatar: str | None = None,
    ) -> UserProfile:
        """
        Update name, bio and avatar. Blank values leave a field unchanged;
        inline ``data:`` avatars are not stored.
        """
        avatar = _clean(avatar)
        if avatar and avatar.startswith("data:"):
            logger.warning("Ignoring inline data avatar for user %s", user_id)
            avatar = None

        user = await self.users.update_profile(
            user_id,
            name=_clean(name),
            bio=_clean(bio),
            image=avatar,
        )
        if user is None:
            raise UserNotFoundError(details={"user_id": str(user_id)})

        return await self.get_profile(user_id, user_id)

    async def sync_from_token(self, auth_user: AppUser) -> User:
        """Create or refresh the local user behind a verified token."""
        return await self.users.create_or_update_from_auth(
            auth_id=auth_user.id,
            email=auth_user.email,
            name=auth_user.name,
            image=auth_user.avatar_url,
        )
