"""
Rating repository.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Rating


class RatingRepository:
    """Repository for Rating model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, prompt_id: UUID, user_id: UUID) -> Rating | None:
        result = await self.session.execute(
            select(Rating).where(
                Rating.prompt_id == prompt_id,
                Rating.user_id == user_id,
            )
        )
        return result.scalar_one_or_none()

    async def upsert(self, prompt_id: UUID, user_id: UUID, rating: int) -> None:
        """Insert the (prompt, user) rating or overwrite its value in place."""
        stmt = insert(Rating).values(prompt_id=prompt_id, user_id=user_id, rating=rating)
        stmt = stmt.on_conflict_do_update(
            index_elements=[Rating.prompt_id, Rating.user_id],
            set_={"rating": stmt.excluded.rating, "updated_at": func.now()},
        )
        await self.session.execute(stmt)

    async def list_values(self, prompt_id: UUID) -> list[int]:
        """All rating values for a prompt."""
        result = await self.session.execute(
            select(Rating.rating).where(Rating.prompt_id == prompt_id)
        )
        return list(result.scalars().all())
