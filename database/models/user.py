"""
User model for authors, raters, commenters and followers.
"""

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .comment import Comment
    from .follow import Follow
    from .prompt import Prompt
    from .rating import Rating
    from .saved_prompt import SavedPrompt


class User(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    User model representing authenticated users.

    Users are created/updated from bearer-token claims on first request.
    """

    __tablename__ = "users"

    # Identity-provider subject
    auth_id: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        nullable=False,
    )
    name: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
    )
    email: Mapped[str | None] = mapped_column(
        String(255),
        unique=True,
        nullable=True,
    )
    image: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )
    bio: Mapped[str | None] = mapped_column(
        Text,
        nullable=True,
    )

    # Last login tracking
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    # Relationships
    prompts: Mapped[list["Prompt"]] = relationship(
        "Prompt",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    ratings: Mapped[list["Rating"]] = relationship(
        "Rating",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    saved_prompts: Mapped[list["SavedPrompt"]] = relationship(
        "SavedPrompt",
        back_populates="user",
        cascade="all, delete-orphan",
    )
    followers: Mapped[list["Follow"]] = relationship(
        "Follow",
        foreign_keys="Follow.following_id",
        back_populates="following",
        cascade="all, delete-orphan",
    )
    following: Mapped[list["Follow"]] = relationship(
        "Follow",
        foreign_keys="Follow.follower_id",
        back_populates="follower",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, name={self.name}, auth_id={self.auth_id})>"


# Indexes
Index("idx_users_auth_id", User.auth_id)
Index("idx_users_name", User.name)
