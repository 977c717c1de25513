"""
SQLAlchemy models for the Promptly API.
"""

from .ai_model import AIModel
from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin
from .category import Category
from .comment import Comment
from .follow import Follow
from .prompt import Prompt
from .rating import Rating
from .saved_prompt import SavedPrompt
from .user import User

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    # Models
    "User",
    "Category",
    "Prompt",
    "Rating",
    "Comment",
    "SavedPrompt",
    "Follow",
    "AIModel",
]
