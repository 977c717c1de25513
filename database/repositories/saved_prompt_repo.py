"""
Saved-prompt (bookmark) repository.
"""

from uuid import UUID

from sqlalchemy import delete, func, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from database.models import SavedPrompt


class SavedPromptRepository:
    """Repository for SavedPrompt model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get(self, user_id: UUID, prompt_id: UUID) -> SavedPrompt | None:
        """Get the bookmark row for a (user, prompt) pair."""
        result = await self.session.execute(
            select(SavedPrompt).where(
                SavedPrompt.user_id == user_id,
                SavedPrompt.prompt_id == prompt_id,
            )
        )
        return result.scalar_one_or_none()

    async def add(self, user_id: UUID, prompt_id: UUID) -> bool:
        """Insert the bookmark if absent. Returns True when a row was created."""
        stmt = (
            insert(SavedPrompt)
            .values(user_id=user_id, prompt_id=prompt_id)
            .on_conflict_do_nothing(index_elements=[SavedPrompt.user_id, SavedPrompt.prompt_id])
        )
        result = await self.session.execute(stmt)
        return result.rowcount > 0

    async def remove(self, user_id: UUID, prompt_id: UUID) -> bool:
        """Delete the bookmark. Returns True when a row was deleted."""
        result = await self.session.execute(
            delete(SavedPrompt).where(
                SavedPrompt.user_id == user_id,
                SavedPrompt.prompt_id == prompt_id,
            )
        )
        return result.rowcount > 0

    async def count_by_prompt(self, prompt_id: UUID) -> int:
        """Number of users who saved a prompt."""
        result = await self.session.execute(
            select(func.count()).select_from(SavedPrompt).where(SavedPrompt.prompt_id == prompt_id)
        )
        return result.scalar_one()

    async def count_by_user(self, user_id: UUID) -> int:
        """Number of prompts a user saved."""
        result = await self.session.execute(
            select(func.count()).select_from(SavedPrompt).where(SavedPrompt.user_id == user_id)
        )
        return result.scalar_one()

    async def list_prompt_ids(self, user_id: UUID) -> list[UUID]:
        """IDs of every prompt a user saved."""
        result = await self.session.execute(
            select(SavedPrompt.prompt_id).where(SavedPrompt.user_id == user_id)
        )
        return list(result.scalars().all())
