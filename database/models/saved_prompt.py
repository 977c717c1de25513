"""
SavedPrompt model: a user's bookmark of a prompt.
"""

from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID, uuid4

from sqlalchemy import DateTime, ForeignKey, Index
from sqlalchemy.dialects.postgresql import UUID as PG_UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql import func

from .base import Base

if TYPE_CHECKING:
    from .prompt import Prompt
    from .user import User


class SavedPrompt(Base):
    """
    Bookmark join row. Presence of the row is the only "saved" state;
    unsaving deletes it.
    """

    __tablename__ = "saved_prompts"

    id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        primary_key=True,
        default=uuid4,
    )
    user_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    prompt_id: Mapped[UUID] = mapped_column(
        PG_UUID(as_uuid=True),
        ForeignKey("prompts.id", ondelete="CASCADE"),
        nullable=False,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    user: Mapped["User"] = relationship("User", back_populates="saved_prompts")
    prompt: Mapped["Prompt"] = relationship("Prompt", back_populates="saved_by")

    def __repr__(self) -> str:
        return f"<SavedPrompt(user_id={self.user_id}, prompt_id={self.prompt_id})>"


Index("idx_saved_prompts_prompt_id", SavedPrompt.prompt_id)
# Unique constraint: user can only save a prompt once
Index("idx_saved_prompts_user_prompt_unique", SavedPrompt.user_id, SavedPrompt.prompt_id, unique=True)
