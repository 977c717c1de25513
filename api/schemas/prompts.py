"""
Pydantic schemas for prompts, ratings, bookmarks and comments.
"""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from .common import PagePagination


class PromptSort(StrEnum):
    """Prompt listing order."""

    RECENT = "recent"
    TRENDING = "trending"  # by number of ratings


class SaveAction(StrEnum):
    SAVE = "save"
    UNSAVE = "unsave"


# ============ Views ============


class CommentView(BaseModel):
    """A comment with its author resolved."""

    id: UUID
    user_id: UUID
    user_name: str
    user_image: str
    text: str
    created_at: datetime


class PromptView(BaseModel):
    """A prompt as shown in listings."""

    id: UUID
    title: str
    description: str
    prompt_text: str
    example_outputs: str | None = None
    suggested_model: str | None = None
    image: str = Field(..., description="Primary image or generated placeholder")
    image_urls: list[str] = Field(default_factory=list)
    user_id: UUID
    user_name: str
    user_image: str
    created_at: datetime
    tags: list[str] = Field(default_factory=list)
    category_id: UUID | None = None
    category_name: str | None = None
    category_image: str | None = None
    average_rating: float = 0
    num_ratings: int = 0
    is_saved: bool = False


class PromptDetail(PromptView):
    """A single prompt with its comments."""

    category_description: str | None = None
    comments: list[CommentView] = Field(default_factory=list)


class PromptPage(BaseModel):
    prompts: list[PromptView] = Field(default_factory=list)
    pagination: PagePagination


class FeedPage(PromptPage):
    """Feed of prompts by followed authors."""

    follows_users: bool = Field(..., description="Whether the viewer follows anyone")
    message: str | None = None


# ============ Options / Requests ============


class PromptListOptions(BaseModel):
    """Filters, sort and window for PromptService.list."""

    current_user_id: UUID | None = None
    user_id: UUID | None = None
    author_ids: list[UUID] | None = None
    category_id: UUID | None = None
    category_name: str | None = None
    q: str | None = None
    sort: PromptSort = PromptSort.RECENT
    page: int = Field(default=1, ge=1)
    page_size: int = Field(default=20, ge=1, le=100)


class PromptCreate(BaseModel):
    """Fields for a new prompt."""

    title: str = Field(..., max_length=255)
    description: str
    prompt_text: str
    suggested_model: str = Field(..., max_length=100)
    example_outputs: str | None = None
    category_id: UUID | None = None
    tags: list[str] = Field(default_factory=list)


class PromptUpdate(PromptCreate):
    """Fields for an owner edit. ``existing_images`` are the images kept."""

    existing_images: list[str] = Field(default_factory=list)


class RatePromptRequest(BaseModel):
    prompt_id: UUID
    rating: int = Field(..., description="Score from 1 to 5")


class RatingResult(BaseModel):
    average_rating: float
    total_ratings: int


class SavePromptRequest(BaseModel):
    prompt_id: UUID
    action: SaveAction


class SaveToggleResult(BaseModel):
    is_saved: bool
    save_count: int


class AddCommentRequest(BaseModel):
    text: str = Field(..., min_length=1)


class PromptResponse(BaseModel):
    prompt: PromptDetail


class CommentResponse(BaseModel):
    comment: CommentView
