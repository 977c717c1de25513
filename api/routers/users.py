"""
Users router: profiles, follows and per-user prompt listings.

Endpoints:
- GET /api/users/profile - Current user's profile
- PUT /api/users/profile - Update current user's profile
- GET /api/users/{id} - Public profile
- POST /api/users/{id}/follow - Follow or unfollow
- GET /api/users/{id}/followers - Followers
- GET /api/users/{id}/following - Followed users
- GET /api/users/{id}/prompts - Prompts by the user
- GET /api/users/{id}/saved - Prompts the user saved
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, Query

from api.dependencies import (
    ensure_db_user,
    ensure_db_user_optional,
    get_follow_service,
    get_prompt_service,
    get_save_service,
    get_user_service,
)
from api.schemas.prompts import PromptListOptions, PromptPage, PromptSort
from api.schemas.users import (
    FollowAction,
    FollowActionResponse,
    FollowersPage,
    FollowingPage,
    FollowRequest,
    ProfileResponse,
    UpdateProfileRequest,
    UserProfile,
)
from core.config import get_settings
from services import FollowService, PromptService, SaveService, UserService

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/users", tags=["users"])


# ============ Own profile ============


@router.get("/profile", response_model=UserProfile)
async def get_own_profile(
    user_id: UUID = Depends(ensure_db_user),
    user_service: UserService = Depends(get_user_service),
):
    """Get the current user's profile."""
    return await user_service.get_profile(user_id, user_id)


@router.put("/profile", response_model=ProfileResponse)
async def update_own_profile(
    request: UpdateProfileRequest,
    user_id: UUID = Depends(ensure_db_user),
    user_service: UserService = Depends(get_user_service),
):
    """Update name, bio and avatar of the current user."""
    profile = await user_service.update_profile(
        user_id,
        name=request.name,
        bio=request.bio,
        avatar=request.avatar,
    )
    return ProfileResponse(user=profile, message="Profile updated successfully")


# ============ Public profile ============


@router.get("/{user_id}", response_model=UserProfile)
async def get_profile(
    user_id: UUID,
    viewer_id: UUID | None = Depends(ensure_db_user_optional),
    user_service: UserService = Depends(get_user_service),
):
    """Public profile with counts and the viewer's follow state."""
    return await user_service.get_profile(user_id, viewer_id)


# ============ Follows ============


@router.post("/{user_id}/follow", response_model=FollowActionResponse)
async def follow_user(
    user_id: UUID,
    request: FollowRequest,
    follower_id: UUID = Depends(ensure_db_user),
    follow_service: FollowService = Depends(get_follow_service),
):
    """Follow or unfollow a user."""
    if request.action == FollowAction.FOLLOW:
        result = await follow_service.follow(follower_id, user_id)
    else:
        result = await follow_service.unfollow(follower_id, user_id)

    return FollowActionResponse(
        action=request.action,
        following_id=user_id,
        follower_count=result.follower_count,
    )


@router.get("/{user_id}/followers", response_model=FollowersPage)
async def list_followers(
    user_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    viewer_id: UUID | None = Depends(ensure_db_user_optional),
    follow_service: FollowService = Depends(get_follow_service),
):
    """Users following this user."""
    return await follow_service.list_followers(user_id, viewer_id, page=page, limit=limit)


@router.get("/{user_id}/following", response_model=FollowingPage)
async def list_following(
    user_id: UUID,
    page: int = Query(1, ge=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    follow_service: FollowService = Depends(get_follow_service),
):
    """Users this user follows."""
    return await follow_service.list_following(user_id, page=page, limit=limit)


# ============ Prompts ============


@router.get("/{user_id}/prompts", response_model=PromptPage)
async def list_user_prompts(
    user_id: UUID,
    sort: PromptSort = Query(PromptSort.RECENT),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    viewer_id: UUID | None = Depends(ensure_db_user_optional),
    prompt_service: PromptService = Depends(get_prompt_service),
):
    """Prompts created by this user."""
    return await prompt_service.list(
        PromptListOptions(
            current_user_id=viewer_id,
            user_id=user_id,
            sort=sort,
            page=page,
            page_size=page_size,
        )
    )


@router.get("/{user_id}/saved", response_model=PromptPage)
async def list_saved_prompts(
    user_id: UUID,
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    viewer_id: UUID | None = Depends(ensure_db_user_optional),
    save_service: SaveService = Depends(get_save_service),
):
    """Prompts this user saved, most recent first."""
    return await save_service.list_saved_prompts(
        user_id,
        current_user_id=viewer_id,
        page=page,
        page_size=page_size,
    )
