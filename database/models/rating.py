"""
Rating model: one 1-5 score per (user, prompt).
"""

from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, UniqueConstraint
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin

if TYPE_CHECKING:
    from .prompt import Prompt
    from .user import User


class Rating(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """A user's rating of a prompt. Re-rating updates the row in place."""

    __tablename__ = "ratings"
    __table_args__ = (
        UniqueConstraint("prompt_id", "user_id", name="uq_ratings_prompt_user"),
        CheckConstraint("rating BETWEEN 1 AND 5", name="ck_ratings_range"),
    )

    prompt_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("prompts.id", ondelete="CASCADE"),
        nullable=False,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    rating: Mapped[int] = mapped_column(Integer, nullable=False)

    prompt: Mapped["Prompt"] = relationship("Prompt", back_populates="ratings")
    user: Mapped["User"] = relationship("User", back_populates="ratings")

    def __repr__(self) -> str:
        return f"<Rating(prompt_id={self.prompt_id}, user_id={self.user_id}, rating={self.rating})>"


Index("idx_ratings_prompt_id", Rating.prompt_id)
