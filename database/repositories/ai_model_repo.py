"""
AI model catalog repository.
"""

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import AIModel, Prompt


class AIModelRepository:
    """Repository for the AIModel catalog."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_slug(self, slug: str) -> AIModel | None:
        result = await self.session.execute(select(AIModel).where(AIModel.slug == slug))
        return result.scalar_one_or_none()

    async def list_with_prompt_counts(self) -> list[tuple[AIModel, int]]:
        """List catalog models by name with the number of prompts suggesting each."""
        prompt_count = func.count(Prompt.id).label("prompt_count")
        query = (
            select(AIModel, prompt_count)
            .outerjoin(
                Prompt,
                or_(
                    Prompt.suggested_model == AIModel.slug,
                    Prompt.suggested_model == AIModel.name,
                ),
            )
            .group_by(AIModel.id)
            .order_by(AIModel.name.asc())
        )
        result = await self.session.execute(query)
        return [(row[0], row[1]) for row in result.all()]

    async def upsert(
        self,
        name: str,
        slug: str,
        provider: str | None = None,
        description: str | None = None,
    ) -> AIModel:
        """Create a catalog entry or refresh its description."""
        model = await self.get_by_slug(slug)
        if model:
            model.description = description
            await self.session.flush()
            return model

        model = AIModel(name=name, slug=slug, provider=provider, description=description)
        self.session.add(model)
        await self.session.flush()
        return model
