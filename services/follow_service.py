"""
Follow service: directed follower -> following edges between users.
"""

import logging
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from api.schemas.common import LimitPagination
from api.schemas.users import (
    FollowerRow,
    FollowersPage,
    FollowingPage,
    FollowingRow,
    FollowResult,
)
from core.exceptions import ConflictError, UserNotFoundError, ValidationError
from database.repositories import FollowRepository, UserRepository

logger = logging.getLogger(__name__)


class FollowService:
    """Follow/unfollow and follower listings."""

    def __init__(self, follow_repo: FollowRepository, user_repo: UserRepository):
        self.follows = follow_repo
        self.users = user_repo

    async def is_following(self, follower_id: UUID | None, following_id: UUID | None) -> bool:
        if not follower_id or not following_id:
            return False
        return await self.follows.get(follower_id, following_id) is not None

    async def follow(self, follower_id: UUID, following_id: UUID) -> FollowResult:
        """
        Create the edge and return the followee's follower count.

        Raises ConflictError when the edge already exists, including when a
        concurrent request wins the unique constraint.
        """
        if follower_id == following_id:
            raise ValidationError(message="You cannot follow yourself")

        if not await self.users.exists(following_id):
            raise UserNotFoundError(details={"user_id": str(following_id)})

        if await self.follows.get(follower_id, following_id):
            raise ConflictError(message="Already following this user")

        try:
            await self.follows.create(follower_id, following_id)
        except IntegrityError as e:
            logger.warning("Follow %s -> %s hit a constraint: %s", follower_id, following_id, e)
            raise ConflictError(message="Already following this user") from e

        logger.info("User %s followed %s", follower_id, following_id)
        return FollowResult(follower_count=await self.follows.count_followers(following_id))

    async def unfollow(self, follower_id: UUID, following_id: UUID) -> FollowResult:
        """Delete the edge; ConflictError when there is none."""
        if not await self.follows.delete(follower_id, following_id):
            raise ConflictError(message="Not following this user")

        logger.info("User %s unfollowed %s", follower_id, following_id)
        return FollowResult(follower_count=await self.follows.count_followers(following_id))

    async def list_followers(
        self,
        user_id: UUID,
        current_user_id: UUID | None = None,
        page: int = 1,
        limit: int = 20,
    ) -> FollowersPage:
        """Users following ``user_id``, newest first, flagged with the viewer's follow state."""
        _check_window(page, limit)

        edges = await self.follows.list_followers(user_id, limit=limit, offset=(page - 1) * limit)
        total = await self.follows.count_followers(user_id)

        viewer_follows: set[UUID] = set()
        if current_user_id:
            viewer_follows = await self.follows.following_ids_among(
                current_user_id, [edge.follower_id for edge in edges]
            )

        return FollowersPage(
            followers=[
                FollowerRow(
                    id=edge.follower.id,
                    name=edge.follower.name,
                    image=edge.follower.image,
                    bio=edge.follower.bio,
                    is_following=edge.follower_id in viewer_follows,
                    followed_since=edge.created_at,
                )
                for edge in edges
            ],
            pagination=LimitPagination.build(total, page, limit),
        )

    async def list_following(self, user_id: UUID, page: int = 1, limit: int = 20) -> FollowingPage:
        """Users ``user_id`` follows, newest first."""
        _check_window(page, limit)

        edges = await self.follows.list_following(user_id, limit=limit, offset=(page - 1) * limit)
        total = await self.follows.count_following(user_id)

        return FollowingPage(
            following=[
                FollowingRow(
                    id=edge.following.id,
                    name=edge.following.name,
                    image=edge.following.image,
                    bio=edge.following.bio,
                    is_following=True,
                    following_since=edge.created_at,
                )
                for edge in edges
            ],
            pagination=LimitPagination.build(total, page, limit),
        )

    async def following_ids(self, user_id: UUID) -> list[UUID]:
        return await self.follows.following_ids(user_id)


def _check_window(page: int, limit: int) -> None:
    if page < 1 or limit < 1:
        raise ValidationError(
            message="page and limit must be positive",
            details={"page": page, "limit": limit},
        )
