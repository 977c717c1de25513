"""
Pydantic schemas for API request/response models.
"""

from .common import (
    PagePagination,
    LimitPagination,
    HealthStatus,
    HealthCheckResponse,
    DetailedHealthCheckResponse,
    ComponentHealth,
)

from .prompts import (
    PromptSort,
    SaveAction,
    CommentView,
    PromptView,
    PromptDetail,
    PromptPage,
    FeedPage,
    PromptListOptions,
    PromptCreate,
    PromptUpdate,
    RatePromptRequest,
    RatingResult,
    SavePromptRequest,
    SaveToggleResult,
    AddCommentRequest,
)

from .users import (
    FollowAction,
    FollowerRow,
    FollowingRow,
    FollowersPage,
    FollowingPage,
    FollowRequest,
    FollowResult,
    UserProfile,
    UpdateProfileRequest,
)

from .catalog import (
    CategorySort,
    CategoryInfo,
    ListCategoriesResponse,
    ModelInfo,
    ListModelsResponse,
)

__all__ = [
    # Common
    "PagePagination",
    "LimitPagination",
    "HealthStatus",
    "HealthCheckResponse",
    "DetailedHealthCheckResponse",
    "ComponentHealth",
    # Prompts
    "PromptSort",
    "SaveAction",
    "CommentView",
    "PromptView",
    "PromptDetail",
    "PromptPage",
    "FeedPage",
    "PromptListOptions",
    "PromptCreate",
    "PromptUpdate",
    "RatePromptRequest",
    "RatingResult",
    "SavePromptRequest",
    "SaveToggleResult",
    "AddCommentRequest",
    # Users
    "FollowAction",
    "FollowerRow",
    "FollowingRow",
    "FollowersPage",
    "FollowingPage",
    "FollowRequest",
    "FollowResult",
    "UserProfile",
    "UpdateProfileRequest",
    # Catalog
    "CategorySort",
    "CategoryInfo",
    "ListCategoriesResponse",
    "ModelInfo",
    "ListModelsResponse",
]
