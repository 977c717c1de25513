"""
User repository for user CRUD operations and profile counts.
"""

from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Follow, Prompt, User


class UserRepository:
    """Repository for User model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> User | None:
        """Get user by ID."""
        result = await self.session.execute(select(User).where(User.id == user_id))
        return result.scalar_one_or_none()

    async def get_by_auth_id(self, auth_id: str) -> User | None:
        """Get user by identity-provider subject."""
        result = await self.session.execute(select(User).where(User.auth_id == auth_id))
        return result.scalar_one_or_none()

    async def exists(self, user_id: UUID) -> bool:
        """Check whether a user exists without loading it."""
        result = await self.session.execute(select(User.id).where(User.id == user_id))
        return result.scalar_one_or_none() is not None

    async def create_or_update_from_auth(
        self,
        auth_id: str,
        email: str | None = None,
        name: str | None = None,
        image: str | None = None,
    ) -> User:
        """
        Create or update user from token claims.

        Existing users only get their last-login time refreshed and empty
        fields filled in, so profile edits made in the app are kept.
        """
        user = await self.get_by_auth_id(auth_id)

        if user:
            user.email = user.email or email
            user.name = user.name or name
            user.image = user.image or image
            user.last_login_at = datetime.now(timezone.utc)
        else:
            user = User(
                auth_id=auth_id,
                email=email,
                name=name or email or auth_id,
                image=image,
                last_login_at=datetime.now(timezone.utc),
            )
            self.session.add(user)

        await self.session.flush()
        return user

    async def update_profile(
        self,
        user_id: UUID,
        name: str | None = None,
        bio: str | None = None,
        image: str | None = None,
    ) -> User | None:
        """Update profile fields; None leaves a field unchanged."""
        user = await self.get_by_id(user_id)
        if not user:
            return None

        if name is not None:
            user.name = name
        if bio is not None:
            user.bio = bio
        if image is not None:
            user.image = image

        await self.session.flush()
        return user

    async def get_counts(self, user_id: UUID) -> dict[str, int]:
        """Prompt, follower and following counts for a profile."""
        prompt_count = await self.session.scalar(
            select(func.count()).select_from(Prompt).where(Prompt.user_id == user_id)
        )
        follower_count = await self.session.scalar(
            select(func.count()).select_from(Follow).where(Follow.following_id == user_id)
        )
        following_count = await self.session.scalar(
            select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)
        )
        return {
            "prompt_count": prompt_count or 0,
            "follower_count": follower_count or 0,
            "following_count": following_count or 0,
        }
