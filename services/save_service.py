"""
Bookmark service: save/unsave prompts and bookmark counts.
"""

import logging
from uuid import UUID

from api.schemas.common import PagePagination
from api.schemas.prompts import PromptPage, SaveAction, SaveToggleResult
from core.exceptions import PromptNotFoundError, ValidationError
from database.repositories import PromptRepository, SavedPromptRepository

from .image_storage import PromptImageStorage
from .prompt_views import prompt_view

logger = logging.getLogger(__name__)


class SaveService:
    """Tracks which users bookmarked which prompts."""

    def __init__(
        self,
        saved_repo: SavedPromptRepository,
        prompt_repo: PromptRepository,
        image_storage: PromptImageStorage,
    ):
        self.saves = saved_repo
        self.prompts = prompt_repo
        self.images = image_storage

    async def is_saved(self, user_id: UUID | None, prompt_id: UUID | None) -> bool:
        if not user_id or not prompt_id:
            return False
        return await self.saves.get(user_id, prompt_id) is not None

    async def toggle(
        self,
        user_id: UUID,
        prompt_id: UUID,
        action: SaveAction | str,
    ) -> SaveToggleResult:
        """
        Save or unsave a prompt for a user.

        Both directions are idempotent: saving twice keeps one bookmark and
        unsaving a prompt that was never saved is a no-op.
        """
        try:
            action = SaveAction(action)
        except ValueError:
            raise ValidationError(
                message="Action must be 'save' or 'unsave'",
                details={"action": str(action)},
            )

        if not await self.prompts.exists(prompt_id):
            raise PromptNotFoundError(details={"prompt_id": str(prompt_id)})

        if action == SaveAction.SAVE:
            created = await self.saves.add(user_id, prompt_id)
            if created:
                logger.info("User %s saved prompt %s", user_id, prompt_id)
        else:
            removed = await self.saves.remove(user_id, prompt_id)
            if removed:
                logger.info("User %s unsaved prompt %s", user_id, prompt_id)

        return SaveToggleResult(
            is_saved=action == SaveAction.SAVE,
            save_count=await self.saves.count_by_prompt(prompt_id),
        )

    async def count(self, prompt_id: UUID) -> int:
        return await self.saves.count_by_prompt(prompt_id)

    async def count_for_user(self, user_id: UUID | None) -> int:
        if not user_id:
            return 0
        return await self.saves.count_by_user(user_id)

    async def list_saved_prompt_ids(self, user_id: UUID | None) -> list[UUID]:
        if not user_id:
            return []
        return await self.saves.list_prompt_ids(user_id)

    async def list_saved_prompts(
        self,
        user_id: UUID,
        current_user_id: UUID | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> PromptPage:
        """A user's bookmarked prompts, most recently saved first."""
        if page < 1 or page_size < 1:
            raise ValidationError(message="page and page_size must be positive")

        prompts, total = await self.prompts.list_saved_by_user(
            user_id,
            limit=page_size,
            offset=(page - 1) * page_size,
        )

        if current_user_id == user_id:
            viewer_saved = {p.id for p in prompts}
        else:
            viewer_saved = set(await self.list_saved_prompt_ids(current_user_id))

        index = await self.images.scan()
        return PromptPage(
            prompts=[prompt_view(p, index.lookup(p.id), p.id in viewer_saved) for p in prompts],
            pagination=PagePagination.build(total, page, page_size),
        )
