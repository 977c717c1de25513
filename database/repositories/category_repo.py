"""
Category repository.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import Category, Prompt


class CategoryRepository:
    """Repository for Category model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, category_id: UUID) -> Category | None:
        """Get category by ID."""
        result = await self.session.execute(select(Category).where(Category.id == category_id))
        return result.scalar_one_or_none()

    async def list_with_counts(
        self,
        sort_by: str = "popular",
        limit: int = 50,
    ) -> list[tuple[Category, int]]:
        """List categories with their prompt counts."""
        prompt_count = func.count(Prompt.id).label("prompt_count")
        query = (
            select(Category, prompt_count)
            .outerjoin(Prompt, Prompt.category_id == Category.id)
            .group_by(Category.id)
        )

        if sort_by == "name":
            query = query.order_by(Category.name.asc())
        else:
            query = query.order_by(prompt_count.desc(), Category.name.asc())

        result = await self.session.execute(query.limit(limit))
        return [(row[0], row[1]) for row in result.all()]
