"""
Pydantic schemas for user profiles and follow relationships.
"""

from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field

from .common import LimitPagination


class FollowAction(StrEnum):
    FOLLOW = "follow"
    UNFOLLOW = "unfollow"


class FollowerRow(BaseModel):
    """A user following the listed user."""

    id: UUID
    name: str | None = None
    image: str | None = None
    bio: str | None = None
    is_following: bool = Field(..., description="Whether the viewer follows this user")
    followed_since: datetime


class FollowingRow(BaseModel):
    """A user followed by the listed user."""

    id: UUID
    name: str | None = None
    image: str | None = None
    bio: str | None = None
    is_following: bool = True
    following_since: datetime


class FollowersPage(BaseModel):
    followers: list[FollowerRow] = Field(default_factory=list)
    pagination: LimitPagination


class FollowingPage(BaseModel):
    following: list[FollowingRow] = Field(default_factory=list)
    pagination: LimitPagination


class FollowRequest(BaseModel):
    action: FollowAction


class FollowResult(BaseModel):
    follower_count: int


class FollowActionResponse(BaseModel):
    success: bool = True
    action: FollowAction
    following_id: UUID
    follower_count: int


class UserProfile(BaseModel):
    """Public profile with counts and the viewer's follow state."""

    id: UUID
    name: str | None = None
    email: str | None = None
    image: str
    bio: str | None = None
    prompt_count: int = 0
    follower_count: int = 0
    following_count: int = 0
    is_following: bool = False
    created_at: datetime | None = None


class UpdateProfileRequest(BaseModel):
    name: str | None = Field(default=None, max_length=255)
    bio: str | None = Field(default=None, max_length=1000)
    avatar: str | None = None


class ProfileResponse(BaseModel):
    user: UserProfile
    message: str | None = None
