"""
Prompt repository: lookups, filtered listing and writes for prompts.
"""

from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from database.models import Category, Comment, Prompt, Rating, SavedPrompt


def contains_pattern(value: str) -> str:
    """LIKE pattern matching ``value`` as a literal substring."""
    escaped = value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class PromptRepository:
    """Repository for Prompt model operations."""

    def __init__(self, session: AsyncSession):
        self.session = session

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    async def get_by_id(self, prompt_id: UUID) -> Prompt | None:
        """Get a prompt by ID without relations."""
        result = await self.session.execute(select(Prompt).where(Prompt.id == prompt_id))
        return result.scalar_one_or_none()

    async def exists(self, prompt_id: UUID) -> bool:
        """Check whether a prompt exists without loading it."""
        result = await self.session.execute(select(Prompt.id).where(Prompt.id == prompt_id))
        return result.scalar_one_or_none() is not None

    async def get_with_relations(self, prompt_id: UUID) -> Prompt | None:
        """Get a prompt with owner, category, ratings and comments (with commenters)."""
        result = await self.session.execute(
            select(Prompt)
            .options(
                selectinload(Prompt.user),
                selectinload(Prompt.category),
                selectinload(Prompt.ratings),
                selectinload(Prompt.comments).selectinload(Comment.user),
            )
            .where(Prompt.id == prompt_id)
            # Relations may be stale after an update in the same session
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    # ------------------------------------------------------------------
    # Listing / filtering / search
    # ------------------------------------------------------------------

    async def list_prompts(
        self,
        user_id: UUID | None = None,
        author_ids: list[UUID] | None = None,
        category_id: UUID | None = None,
        category_name: str | None = None,
        search: str | None = None,
        sort_by: str = "recent",
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Prompt], int]:
        """List prompts with filtering, sorting and offset pagination.

        Returns the page of prompts (owner, category and ratings loaded) and
        the total number of rows matching the filters.
        """
        query = select(Prompt)

        if user_id is not None:
            query = query.where(Prompt.user_id == user_id)

        if author_ids is not None:
            query = query.where(Prompt.user_id.in_(author_ids))

        if category_id is not None:
            query = query.where(Prompt.category_id == category_id)

        if category_name:
            query = query.where(
                Prompt.category.has(Category.name.ilike(contains_pattern(category_name), escape="\\"))
            )

        if search:
            pattern = contains_pattern(search)
            query = query.where(
                Prompt.title.ilike(pattern, escape="\\")
                | Prompt.description.ilike(pattern, escape="\\")
            )

        # Total count
        count_query = select(func.count()).select_from(query.subquery())
        total = await self.session.scalar(count_query) or 0

        # Sorting
        if sort_by == "trending":
            rating_count = (
                select(func.count(Rating.id))
                .where(Rating.prompt_id == Prompt.id)
                .correlate(Prompt)
                .scalar_subquery()
            )
            query = query.order_by(rating_count.desc(), Prompt.created_at.desc())
        else:
            query = query.order_by(Prompt.created_at.desc())

        # Pagination
        query = (
            query.options(
                selectinload(Prompt.user),
                selectinload(Prompt.category),
                selectinload(Prompt.ratings),
            )
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        prompts = list(result.scalars().all())

        return prompts, total

    async def list_saved_by_user(
        self,
        user_id: UUID,
        limit: int = 20,
        offset: int = 0,
    ) -> tuple[list[Prompt], int]:
        """Prompts bookmarked by a user, most recently saved first."""
        query = (
            select(Prompt)
            .join(SavedPrompt, SavedPrompt.prompt_id == Prompt.id)
            .where(SavedPrompt.user_id == user_id)
        )

        count_query = select(func.count()).select_from(query.subquery())
        total = await self.session.scalar(count_query) or 0

        query = (
            query.options(
                selectinload(Prompt.user),
                selectinload(Prompt.category),
                selectinload(Prompt.ratings),
            )
            .order_by(SavedPrompt.created_at.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all()), total

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def transaction(self):
        """Savepoint context; rolled back when the block raises."""
        return self.session.begin_nested()

    async def create(
        self,
        user_id: UUID,
        title: str,
        description: str,
        prompt_text: str,
        suggested_model: str,
        example_outputs: str | None = None,
        tags: str | None = None,
        category_id: UUID | None = None,
        image: str | None = None,
    ) -> Prompt:
        """Create a new prompt."""
        prompt = Prompt(
            user_id=user_id,
            title=title,
            description=description,
            prompt_text=prompt_text,
            suggested_model=suggested_model,
            example_outputs=example_outputs,
            tags=tags,
            category_id=category_id,
            image=image,
        )
        self.session.add(prompt)
        await self.session.flush()
        return prompt

    async def update(self, prompt_id: UUID, **kwargs) -> Prompt | None:
        """Update a prompt with arbitrary fields (partial update)."""
        prompt = await self.get_by_id(prompt_id)
        if not prompt:
            return None

        for key, value in kwargs.items():
            if hasattr(prompt, key):
                setattr(prompt, key, value)

        await self.session.flush()
        return prompt
