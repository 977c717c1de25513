"""
Services module for the Promptly API.
"""
from .catalog_service import CategoryService, ModelService
from .comment_service import CommentService
from .follow_service import FollowService
from .image_storage import ImageIndex, ImageLookup, PromptImageStorage, UploadedImage
from .prompt_service import PromptService
from .rating_service import RatingService
from .save_service import SaveService
from .user_service import UserService

__all__ = [
    "PromptService",
    "RatingService",
    "FollowService",
    "SaveService",
    "CommentService",
    "CategoryService",
    "ModelService",
    "UserService",
    "PromptImageStorage",
    "UploadedImage",
    "ImageLookup",
    "ImageIndex",
]
