"""
Mapping of prompt and comment rows to API view models.

Shared by the services that return prompts (listing, feed, bookmarks,
detail) so every surface enriches a prompt the same way.
"""

from api.schemas.prompts import CommentView, PromptDetail, PromptView
from database.models import Comment, Prompt
from utils.format import average_rating, avatar_url, parse_tags
from utils.placeholder import category_image, get_prompt_image_url

from .image_storage import ImageLookup

ANONYMOUS_NAME = "Anonymous User"
UNKNOWN_AUTHOR = "Unknown"


def comment_view(comment: Comment) -> CommentView:
    user = comment.user
    name = user.name if user and user.name else None
    return CommentView(
        id=comment.id,
        user_id=comment.user_id,
        user_name=name or ANONYMOUS_NAME,
        user_image=avatar_url(name, user.image if user else None),
        text=comment.text,
        created_at=comment.created_at,
    )


def _base_fields(prompt: Prompt) -> dict:
    user = prompt.user
    user_name = user.name if user and user.name else None
    category = prompt.category
    ratings = prompt.ratings or []

    return {
        "id": prompt.id,
        "title": prompt.title,
        "description": prompt.description,
        "prompt_text": prompt.prompt_text,
        "example_outputs": prompt.example_outputs,
        "suggested_model": prompt.suggested_model,
        "user_id": prompt.user_id,
        "user_name": user_name or UNKNOWN_AUTHOR,
        "user_image": avatar_url(user_name, user.image if user else None),
        "created_at": prompt.created_at,
        "tags": parse_tags(prompt.tags),
        "category_id": category.id if category else None,
        "category_name": category.name if category else None,
        "category_image": (category.image or category_image(category.name)) if category else None,
        "average_rating": average_rating(ratings),
        "num_ratings": len(ratings),
    }


def prompt_view(prompt: Prompt, lookup: ImageLookup, is_saved: bool = False) -> PromptView:
    """
    Listing row for a prompt.

    ``image`` prefers the stored image, then the first directory image, then a
    generated placeholder. ``image_urls`` falls back to ``[image]``.
    """
    fields = _base_fields(prompt)
    stored = prompt.image or (lookup.urls[0] if lookup.urls else None)
    image = get_prompt_image_url(prompt.title, stored, fields["user_name"], fields["tags"])
    return PromptView(
        **fields,
        image=image,
        image_urls=lookup.urls or [image],
        is_saved=is_saved,
    )


def prompt_detail(prompt: Prompt, lookup: ImageLookup, is_saved: bool = False) -> PromptDetail:
    """
    Full prompt with comments.

    ``image_urls`` are the directory images, else the stored image, else
    empty; ``image`` is the stored image or a generated placeholder.
    """
    fields = _base_fields(prompt)
    if lookup.urls:
        image_urls = list(lookup.urls)
    elif prompt.image:
        image_urls = [prompt.image]
    else:
        image_urls = []

    category = prompt.category
    return PromptDetail(
        **fields,
        image=get_prompt_image_url(prompt.title, prompt.image, fields["user_name"], fields["tags"]),
        image_urls=image_urls,
        is_saved=is_saved,
        category_description=category.description if category else None,
        comments=[comment_view(c) for c in prompt.comments or []],
    )
