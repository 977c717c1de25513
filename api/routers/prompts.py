"""
Prompts router.

Endpoints:
- GET /api/prompts - List prompts (filter, search, sort, paginate)
- POST /api/prompts - Create a prompt with images (multipart)
- GET /api/prompts/search - Search prompts by title/description
- GET /api/prompts/feed - Prompts by followed authors
- POST /api/prompts/rate - Rate a prompt
- POST /api/prompts/save - Save or unsave a prompt
- GET /api/prompts/{id} - Prompt detail with comments
- PUT /api/prompts/{id} - Edit a prompt (author only)
- GET /api/prompts/{id}/comments - List comments
- POST /api/prompts/{id}/comments - Add a comment
"""

import logging
from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile

from api.dependencies import (
    ensure_db_user,
    ensure_db_user_optional,
    get_comment_service,
    get_prompt_service,
    get_rating_service,
    get_save_service,
)
from api.schemas.prompts import (
    AddCommentRequest,
    CommentResponse,
    CommentView,
    FeedPage,
    PromptCreate,
    PromptListOptions,
    PromptPage,
    PromptResponse,
    PromptSort,
    PromptUpdate,
    RatePromptRequest,
    RatingResult,
    SavePromptRequest,
    SaveToggleResult,
)
from core.config import get_settings
from core.exceptions import PromptNotFoundError
from services import (
    CommentService,
    PromptService,
    RatingService,
    SaveService,
    UploadedImage,
)
from utils.format import parse_tags

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix="/prompts", tags=["prompts"])


# ============ Helpers ============


def split_tags(raw: str | None) -> list[str]:
    """Form tags arrive as a JSON array or a comma-separated string."""
    if not raw:
        return []
    if raw.lstrip().startswith("["):
        return parse_tags(raw)
    return [t.strip() for t in raw.split(",") if t.strip()]


async def read_uploads(files: list[UploadFile]) -> list[UploadedImage]:
    uploads = []
    for f in files:
        if not f.filename:
            continue
        uploads.append(
            UploadedImage(
                filename=f.filename,
                content_type=f.content_type or "application/octet-stream",
                data=await f.read(),
            )
        )
    return uploads


# ============ Listing ============


@router.get("", response_model=PromptPage)
async def list_prompts(
    user_id: UUID | None = Query(None, description="Only prompts by this author"),
    category_id: UUID | None = Query(None),
    q: str | None = Query(None, description="Search title and description"),
    sort: PromptSort = Query(PromptSort.RECENT),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    viewer_id: UUID | None = Depends(ensure_db_user_optional),
    prompt_service: PromptService = Depends(get_prompt_service),
):
    """List prompts with filters, sorting and pagination."""
    return await prompt_service.list(
        PromptListOptions(
            current_user_id=viewer_id,
            user_id=user_id,
            category_id=category_id,
            q=q,
            sort=sort,
            page=page,
            page_size=page_size,
        )
    )


@router.get("/search", response_model=PromptPage)
async def search_prompts(
    q: str = Query(..., min_length=1),
    limit: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    viewer_id: UUID | None = Depends(ensure_db_user_optional),
    prompt_service: PromptService = Depends(get_prompt_service),
):
    """Search prompts by title or description."""
    return await prompt_service.search(q, limit=limit, current_user_id=viewer_id)


@router.get("/feed", response_model=FeedPage)
async def get_feed(
    category: str | None = Query(None, description="Category id or name"),
    page: int = Query(1, ge=1),
    page_size: int = Query(settings.default_page_size, ge=1, le=settings.max_page_size),
    user_id: UUID = Depends(ensure_db_user),
    prompt_service: PromptService = Depends(get_prompt_service),
):
    """Prompts from followed authors, newest first."""
    return await prompt_service.feed(user_id, category=category, page=page, page_size=page_size)


# ============ Ratings / Bookmarks ============


@router.post("/rate", response_model=RatingResult)
async def rate_prompt(
    request: RatePromptRequest,
    user_id: UUID = Depends(ensure_db_user),
    rating_service: RatingService = Depends(get_rating_service),
):
    """Rate a prompt from 1 to 5; re-rating replaces the previous score."""
    return await rating_service.rate_prompt(user_id, request.prompt_id, request.rating)


@router.post("/save", response_model=SaveToggleResult)
async def save_prompt(
    request: SavePromptRequest,
    user_id: UUID = Depends(ensure_db_user),
    save_service: SaveService = Depends(get_save_service),
):
    """Save or unsave a prompt."""
    return await save_service.toggle(user_id, request.prompt_id, request.action)


# ============ Create / Detail / Update ============


@router.post("", response_model=PromptResponse, status_code=201)
async def create_prompt(
    title: str = Form(...),
    description: str = Form(...),
    prompt_text: str = Form(...),
    suggested_model: str = Form(...),
    example_outputs: str | None = Form(None),
    category_id: UUID | None = Form(None),
    tags: str | None = Form(None),
    images: list[UploadFile] = File(default=[]),
    user_id: UUID = Depends(ensure_db_user),
    prompt_service: PromptService = Depends(get_prompt_service),
):
    """Create a prompt; uploaded images are stored under the prompt id."""
    data = PromptCreate(
        title=title,
        description=description,
        prompt_text=prompt_text,
        suggested_model=suggested_model,
        example_outputs=example_outputs,
        category_id=category_id,
        tags=split_tags(tags),
    )
    prompt = await prompt_service.create(user_id, data, await read_uploads(images))
    return PromptResponse(prompt=prompt)


@router.get("/{prompt_id}", response_model=PromptResponse)
async def get_prompt(
    prompt_id: UUID,
    viewer_id: UUID | None = Depends(ensure_db_user_optional),
    prompt_service: PromptService = Depends(get_prompt_service),
):
    """Get a prompt with its comments."""
    prompt = await prompt_service.get_by_id(prompt_id, viewer_id)
    if prompt is None:
        raise PromptNotFoundError(details={"prompt_id": str(prompt_id)})
    return PromptResponse(prompt=prompt)


@router.put("/{prompt_id}", response_model=PromptResponse)
async def update_prompt(
    prompt_id: UUID,
    request: PromptUpdate,
    user_id: UUID = Depends(ensure_db_user),
    prompt_service: PromptService = Depends(get_prompt_service),
):
    """Edit a prompt. Only its author may do this."""
    prompt = await prompt_service.update(prompt_id, user_id, request)
    return PromptResponse(prompt=prompt)


# ============ Comments ============


@router.get("/{prompt_id}/comments", response_model=list[CommentView])
async def list_comments(
    prompt_id: UUID,
    comment_service: CommentService = Depends(get_comment_service),
):
    """Comments on a prompt, newest first."""
    return await comment_service.list_comments(prompt_id)


@router.post("/{prompt_id}/comments", response_model=CommentResponse, status_code=201)
async def add_comment(
    prompt_id: UUID,
    request: AddCommentRequest,
    user_id: UUID = Depends(ensure_db_user),
    comment_service: CommentService = Depends(get_comment_service),
):
    """Add a comment to a prompt."""
    comment = await comment_service.add_comment(prompt_id, user_id, request.text)
    return CommentResponse(comment=comment)
