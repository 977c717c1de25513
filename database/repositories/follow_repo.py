"""
Follow repository for directed follower -> following edges.
"""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from database.models import Follow


class FollowRepository:
    """Repository for Follow model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, follower_id: UUID, following_id: UUID) -> Follow | None:
        """Get the edge for a (follower, following) pair."""
        result = await self.session.execute(
            select(Follow).where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
        )
        return result.scalar_one_or_none()

    async def create(self, follower_id: UUID, following_id: UUID) -> Follow:
        """
        Create an edge.

        Runs in a savepoint so a unique-constraint violation leaves the
        outer transaction usable; the IntegrityError still propagates.
        """
        follow = Follow(follower_id=follower_id, following_id=following_id)
        async with self.session.begin_nested():
            self.session.add(follow)
        return follow

    async def delete(self, follower_id: UUID, following_id: UUID) -> bool:
        """Delete an edge. Returns True when a row was deleted."""
        result = await self.session.execute(
            delete(Follow).where(
                Follow.follower_id == follower_id,
                Follow.following_id == following_id,
            )
        )
        return result.rowcount > 0

    async def count_followers(self, user_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Follow).where(Follow.following_id == user_id)
        )
        return result.scalar_one()

    async def count_following(self, user_id: UUID) -> int:
        result = await self.session.execute(
            select(func.count()).select_from(Follow).where(Follow.follower_id == user_id)
        )
        return result.scalar_one()

    async def list_followers(
        self,
        user_id: UUID,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Follow]:
        """Edges pointing at a user, newest first, with the follower loaded."""
        result = await self.session.execute(
            select(Follow)
            .options(selectinload(Follow.follower))
            .where(Follow.following_id == user_id)
            .order_by(Follow.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def list_following(
        self,
        user_id: UUID,
        limit: int = 20,
        offset: int = 0,
    ) -> list[Follow]:
        """Edges from a user, newest first, with the followed user loaded."""
        result = await self.session.execute(
            select(Follow)
            .options(selectinload(Follow.following))
            .where(Follow.follower_id == user_id)
            .order_by(Follow.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        return list(result.scalars().all())

    async def following_ids(self, follower_id: UUID) -> list[UUID]:
        """IDs of every user the follower follows."""
        result = await self.session.execute(
            select(Follow.following_id).where(Follow.follower_id == follower_id)
        )
        return list(result.scalars().all())

    async def following_ids_among(
        self,
        follower_id: UUID,
        candidate_ids: list[UUID],
    ) -> set[UUID]:
        """Subset of candidate_ids the follower follows."""
        if not candidate_ids:
            return set()
        result = await self.session.execute(
            select(Follow.following_id).where(
                Follow.follower_id == follower_id,
                Follow.following_id.in_(candidate_ids),
            )
        )
        return set(result.scalars().all())
