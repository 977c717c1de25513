"""
FastAPI dependency injection for database sessions, repositories and services.
"""

import logging
from collections.abc import AsyncGenerator
from functools import lru_cache
from uuid import UUID

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from core.auth import AppUser, get_current_user, require_current_user
from core.exceptions import DatabaseUnavailableError
from database import get_session, is_database_available
from database.repositories import (
    AIModelRepository,
    CategoryRepository,
    CommentRepository,
    FollowRepository,
    PromptRepository,
    RatingRepository,
    SavedPromptRepository,
    UserRepository,
)
from services import (
    CategoryService,
    CommentService,
    FollowService,
    ModelService,
    PromptImageStorage,
    PromptService,
    RatingService,
    SaveService,
    UserService,
)

logger = logging.getLogger(__name__)


async def get_db_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Get database session dependency.

    Raises DatabaseUnavailableError (503) if the database is not configured
    or failed to initialize.
    """
    if not is_database_available():
        raise DatabaseUnavailableError()

    async for session in get_session():
        yield session


@lru_cache
def get_image_storage() -> PromptImageStorage:
    """Process-wide image directory accessor."""
    return PromptImageStorage()


# ============ Repositories ============


async def get_user_repository(session: AsyncSession = Depends(get_db_session)) -> UserRepository:
    return UserRepository(session)


async def get_prompt_repository(session: AsyncSession = Depends(get_db_session)) -> PromptRepository:
    return PromptRepository(session)


async def get_category_repository(
    session: AsyncSession = Depends(get_db_session),
) -> CategoryRepository:
    return CategoryRepository(session)


async def get_rating_repository(session: AsyncSession = Depends(get_db_session)) -> RatingRepository:
    return RatingRepository(session)


async def get_comment_repository(
    session: AsyncSession = Depends(get_db_session),
) -> CommentRepository:
    return CommentRepository(session)


async def get_saved_prompt_repository(
    session: AsyncSession = Depends(get_db_session),
) -> SavedPromptRepository:
    return SavedPromptRepository(session)


async def get_follow_repository(session: AsyncSession = Depends(get_db_session)) -> FollowRepository:
    return FollowRepository(session)


async def get_ai_model_repository(
    session: AsyncSession = Depends(get_db_session),
) -> AIModelRepository:
    return AIModelRepository(session)


# ============ Services ============


async def get_prompt_service(
    prompt_repo: PromptRepository = Depends(get_prompt_repository),
    saved_repo: SavedPromptRepository = Depends(get_saved_prompt_repository),
    follow_repo: FollowRepository = Depends(get_follow_repository),
    category_repo: CategoryRepository = Depends(get_category_repository),
    image_storage: PromptImageStorage = Depends(get_image_storage),
) -> PromptService:
    return PromptService(prompt_repo, saved_repo, follow_repo, category_repo, image_storage)


async def get_rating_service(
    rating_repo: RatingRepository = Depends(get_rating_repository),
    prompt_repo: PromptRepository = Depends(get_prompt_repository),
) -> RatingService:
    return RatingService(rating_repo, prompt_repo)


async def get_save_service(
    saved_repo: SavedPromptRepository = Depends(get_saved_prompt_repository),
    prompt_repo: PromptRepository = Depends(get_prompt_repository),
    image_storage: PromptImageStorage = Depends(get_image_storage),
) -> SaveService:
    return SaveService(saved_repo, prompt_repo, image_storage)


async def get_follow_service(
    follow_repo: FollowRepository = Depends(get_follow_repository),
    user_repo: UserRepository = Depends(get_user_repository),
) -> FollowService:
    return FollowService(follow_repo, user_repo)


async def get_comment_service(
    comment_repo: CommentRepository = Depends(get_comment_repository),
    prompt_repo: PromptRepository = Depends(get_prompt_repository),
) -> CommentService:
    return CommentService(comment_repo, prompt_repo)


async def get_category_service(
    category_repo: CategoryRepository = Depends(get_category_repository),
) -> CategoryService:
    return CategoryService(category_repo)


async def get_model_service(
    model_repo: AIModelRepository = Depends(get_ai_model_repository),
) -> ModelService:
    return ModelService(model_repo)


async def get_user_service(
    user_repo: UserRepository = Depends(get_user_repository),
    follow_repo: FollowRepository = Depends(get_follow_repository),
) -> UserService:
    return UserService(user_repo, follow_repo)


# ============ Current user ============


async def ensure_db_user(
    user: AppUser = Depends(require_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UUID:
    """
    Ensure the authenticated user exists in the database (login required).

    Returns the database user UUID.
    """
    db_user = await user_service.sync_from_token(user)
    return db_user.id


async def ensure_db_user_optional(
    user: AppUser | None = Depends(get_current_user),
    user_service: UserService = Depends(get_user_service),
) -> UUID | None:
    """
    Ensure the authenticated user exists in the database (login optional).

    Returns the database user UUID, or None if not logged in.
    """
    if not user:
        return None
    db_user = await user_service.sync_from_token(user)
    return db_user.id
