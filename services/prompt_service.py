"""
Prompt service: detail, listing, feed, search and owner writes.

Every prompt leaving this service is enriched with its average rating,
parsed tags, resolved images and the viewer's saved flag.
"""

from __future__ import annotations

import json
import logging
from uuid import UUID

from api.schemas.common import PagePagination
from api.schemas.prompts import (
    FeedPage,
    PromptCreate,
    PromptDetail,
    PromptListOptions,
    PromptPage,
    PromptSort,
    PromptUpdate,
)
from core.config import get_settings
from core.exceptions import (
    AuthorizationError,
    CategoryNotFoundError,
    PromptNotFoundError,
    ValidationError,
)
from database.repositories import (
    CategoryRepository,
    FollowRepository,
    PromptRepository,
    SavedPromptRepository,
)

from .image_storage import PromptImageStorage, UploadedImage
from .prompt_views import prompt_detail, prompt_view

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("title", "description", "prompt_text", "suggested_model")

EMPTY_FEED_MESSAGE = "You are not following anyone yet. Here are the most recent prompts."


class PromptService:
    """Read and write prompts formatted for display."""

    def __init__(
        self,
        prompt_repo: PromptRepository,
        saved_repo: SavedPromptRepository,
        follow_repo: FollowRepository,
        category_repo: CategoryRepository,
        image_storage: PromptImageStorage,
    ):
        self.prompts = prompt_repo
        self.saves = saved_repo
        self.follows = follow_repo
        self.categories = category_repo
        self.images = image_storage

    # ============ Reads ============

    async def get_by_id(
        self,
        prompt_id: UUID,
        current_user_id: UUID | None = None,
    ) -> PromptDetail | None:
        """A single prompt with comments, or None when it does not exist."""
        prompt = await self.prompts.get_with_relations(prompt_id)
        if prompt is None:
            return None

        is_saved = False
        if current_user_id:
            is_saved = await self.saves.get(current_user_id, prompt_id) is not None

        return prompt_detail(prompt, await self.images.list_prompt_images(prompt.id), is_saved)

    async def list(self, options: PromptListOptions) -> PromptPage:
        """Filtered, sorted and paginated prompts."""
        search = options.q.strip() if options.q else None

        prompts, total = await self.prompts.list_prompts(
            user_id=options.user_id,
            author_ids=options.author_ids,
            category_id=options.category_id,
            category_name=options.category_name,
            search=search or None,
            sort_by=options.sort.value,
            limit=options.page_size,
            offset=(options.page - 1) * options.page_size,
        )

        saved_ids: set[UUID] = set()
        if options.current_user_id:
            saved_ids = set(await self.saves.list_prompt_ids(options.current_user_id))

        index = await self.images.scan()
        return PromptPage(
            prompts=[prompt_view(p, index.lookup(p.id), p.id in saved_ids) for p in prompts],
            pagination=PagePagination.build(total, options.page, options.page_size),
        )

    async def feed(
        self,
        current_user_id: UUID,
        category: str | None = None,
        page: int = 1,
        page_size: int = 20,
    ) -> FeedPage:
        """
        Prompts by authors the viewer follows, newest first.

        ``category`` is a category id or a name fragment. When the viewer
        follows nobody, the most recent prompts are returned instead.
        """
        category_id, category_name = _split_category(category)
        author_ids = await self.follows.following_ids(current_user_id)

        options = PromptListOptions(
            current_user_id=current_user_id,
            author_ids=author_ids or None,
            category_id=category_id,
            category_name=category_name,
            sort=PromptSort.RECENT,
            page=page,
            page_size=page_size,
        )
        result = await self.list(options)

        if not author_ids:
            return FeedPage(
                prompts=result.prompts,
                pagination=result.pagination,
                follows_users=False,
                message=EMPTY_FEED_MESSAGE,
            )
        return FeedPage(prompts=result.prompts, pagination=result.pagination, follows_users=True)

    async def search(
        self,
        q: str,
        limit: int = 20,
        current_user_id: UUID | None = None,
    ) -> PromptPage:
        """Title/description search, first ``limit`` matches newest first."""
        return await self.list(
            PromptListOptions(current_user_id=current_user_id, q=q, page=1, page_size=limit)
        )

    # ============ Writes ============

    async def create(
        self,
        user_id: UUID,
        data: PromptCreate,
        images: list[UploadedImage] | None = None,
    ) -> PromptDetail:
        """
        Create a prompt and store its images.

        The prompt row and its images are written together: if any image
        fails to store, no prompt is left behind and no file remains.
        """
        images = images or []
        await self._validate(data)

        max_images = get_settings().max_images_per_prompt
        if len(images) > max_images:
            raise ValidationError(
                message=f"At most {max_images} images per prompt",
                details={"images": len(images)},
            )

        saved_urls: list[str] = []
        try:
            async with self.prompts.transaction():
                prompt = await self.prompts.create(
                    user_id=user_id,
                    title=data.title.strip(),
                    description=data.description.strip(),
                    prompt_text=data.prompt_text.strip(),
                    suggested_model=data.suggested_model.strip(),
                    example_outputs=data.example_outputs or None,
                    tags=_encode_tags(data.tags),
                    category_id=data.category_id,
                )
                if images:
                    saved_urls = await self.images.save_prompt_images(prompt.id, images)
                    await self.prompts.update(prompt.id, image=saved_urls[0])
        except Exception:
            if saved_urls:
                await self.images.delete_urls(saved_urls)
            raise

        logger.info("User %s created prompt %s with %d image(s)", user_id, prompt.id, len(saved_urls))
        return await self.get_by_id(prompt.id, user_id)

    async def update(self, prompt_id: UUID, user_id: UUID, data: PromptUpdate) -> PromptDetail:
        """Owner edit of a prompt's fields and kept images."""
        prompt = await self.prompts.get_by_id(prompt_id)
        if prompt is None:
            raise PromptNotFoundError(details={"prompt_id": str(prompt_id)})
        if prompt.user_id != user_id:
            raise AuthorizationError(message="Only the author can edit this prompt")

        await self._validate(data)

        await self.prompts.update(
            prompt_id,
            title=data.title.strip(),
            description=data.description.strip(),
            prompt_text=data.prompt_text.strip(),
            suggested_model=data.suggested_model.strip(),
            example_outputs=data.example_outputs or None,
            category_id=data.category_id,
            tags=_encode_tags(data.tags),
            image=data.existing_images[0] if data.existing_images else None,
        )

        logger.info("User %s updated prompt %s", user_id, prompt_id)
        return await self.get_by_id(prompt_id, user_id)

    async def _validate(self, data: PromptCreate) -> None:
        missing = [name for name in REQUIRED_FIELDS if not (getattr(data, name) or "").strip()]
        if missing:
            raise ValidationError(
                message="Missing required fields",
                details={"missing": missing},
            )

        if data.category_id and await self.categories.get_by_id(data.category_id) is None:
            raise CategoryNotFoundError(details={"category_id": str(data.category_id)})


def _encode_tags(tags: list[str]) -> str | None:
    cleaned = [t.strip() for t in tags if t and t.strip()]
    return json.dumps(cleaned) if cleaned else None


def _split_category(category: str | None) -> tuple[UUID | None, str | None]:
    """Interpret a category filter as an id when it parses as one, else as a name."""
    if not category:
        return None, None
    try:
        return UUID(category), None
    except ValueError:
        return None, category
