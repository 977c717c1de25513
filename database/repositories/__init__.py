"""
Repository layer for database access.

Provides async CRUD operations for all models.
"""

from .ai_model_repo import AIModelRepository
from .category_repo import CategoryRepository
from .comment_repo import CommentRepository
from .follow_repo import FollowRepository
from .prompt_repo import PromptRepository
from .rating_repo import RatingRepository
from .saved_prompt_repo import SavedPromptRepository
from .user_repo import UserRepository

__all__ = [
    "UserRepository",
    "PromptRepository",
    "CategoryRepository",
    "RatingRepository",
    "CommentRepository",
    "SavedPromptRepository",
    "FollowRepository",
    "AIModelRepository",
]
