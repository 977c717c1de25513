"""
Comment service: append-only comments on prompts.
"""

import logging
from uuid import UUID

from api.schemas.prompts import CommentView
from core.config import get_settings
from core.exceptions import PromptNotFoundError, ValidationError
from database.repositories import CommentRepository, PromptRepository

from .prompt_views import comment_view

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(
        self,
        comment_repo: CommentRepository,
        prompt_repo: PromptRepository,
        max_length: int | None = None,
    ):
        self.comments = comment_repo
        self.prompts = prompt_repo
        self.max_length = max_length or get_settings().comment_max_length

    async def add_comment(self, prompt_id: UUID, user_id: UUID, text: str) -> CommentView:
        text = (text or "").strip()
        if not text:
            raise ValidationError(message="Comment text is required")
        if len(text) > self.max_length:
            raise ValidationError(
                message=f"Comment must be at most {self.max_length} characters",
                details={"length": len(text)},
            )

        if not await self.prompts.exists(prompt_id):
            raise PromptNotFoundError(details={"prompt_id": str(prompt_id)})

        comment = await self.comments.create(prompt_id, user_id, text)
        logger.info("User %s commented on prompt %s", user_id, prompt_id)
        return comment_view(comment)

    async def list_comments(self, prompt_id: UUID) -> list[CommentView]:
        """Comments newest first."""
        return [comment_view(c) for c in await self.comments.list_by_prompt(prompt_id)]
