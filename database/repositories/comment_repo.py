"""
Comment repository.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from database.models import Comment


class CommentRepository:
    """Repository for Comment model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, prompt_id: UUID, user_id: UUID, text: str) -> Comment:
        """Append a comment and return it with its author loaded."""
        comment = Comment(prompt_id=prompt_id, user_id=user_id, text=text)
        self.session.add(comment)
        await self.session.flush()
        await self.session.refresh(comment, attribute_names=["user", "created_at"])
        return comment

    async def list_by_prompt(self, prompt_id: UUID) -> list[Comment]:
        """Comments for a prompt, newest first."""
        result = await self.session.execute(
            select(Comment)
            .options(selectinload(Comment.user))
            .where(Comment.prompt_id == prompt_id)
            .order_by(Comment.created_at.desc())
        )
        return list(result.scalars().all())
