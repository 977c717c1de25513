"""
Prompt model: the user-authored AI instruction, the primary content unit.
"""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import ForeignKey, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .category import Category
    from .comment import Comment
    from .rating import Rating
    from .saved_prompt import SavedPrompt
    from .user import User


class Prompt(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    A shared prompt.

    ``tags`` holds a JSON-encoded array of strings (or NULL); readers go
    through utils.format.parse_tags so malformed content degrades to [].
    """

    __tablename__ = "prompts"

    # Owner
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Content
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    prompt_text: Mapped[str] = mapped_column(Text, nullable=False)
    example_outputs: Mapped[str | None] = mapped_column(Text, nullable=True)
    suggested_model: Mapped[str] = mapped_column(String(100), nullable=False)

    # Primary display image
    image: Mapped[str | None] = mapped_column(Text, nullable=True)

    # JSON array of strings
    tags: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Classification
    category_id: Mapped[UUID | None] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
    )

    # Relationships
    user: Mapped["User"] = relationship(
        "User",
        back_populates="prompts",
    )
    category: Mapped["Category | None"] = relationship(
        "Category",
        back_populates="prompts",
    )
    ratings: Mapped[list["Rating"]] = relationship(
        "Rating",
        back_populates="prompt",
        cascade="all, delete-orphan",
    )
    comments: Mapped[list["Comment"]] = relationship(
        "Comment",
        back_populates="prompt",
        cascade="all, delete-orphan",
        order_by="Comment.created_at.desc()",
    )
    saved_by: Mapped[list["SavedPrompt"]] = relationship(
        "SavedPrompt",
        back_populates="prompt",
        cascade="all, delete-orphan",
    )

    def __repr__(self) -> str:
        return f"<Prompt(id={self.id}, title={self.title!r})>"


# Indexes
Index("idx_prompts_user_id", Prompt.user_id)
Index("idx_prompts_category_id", Prompt.category_id)
Index("idx_prompts_created_at", Prompt.created_at.desc())
