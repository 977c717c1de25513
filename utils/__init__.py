"""
Utility functions for the Promptly API.
"""
from .format import average_rating, avatar_url, iso, parse_tags
from .placeholder import category_image, generate_prompt_placeholder, get_prompt_image_url

__all__ = [
    "average_rating",
    "avatar_url",
    "iso",
    "parse_tags",
    "category_image",
    "generate_prompt_placeholder",
    "get_prompt_image_url",
]
