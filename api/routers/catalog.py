"""
Catalog routers: prompt categories and suggested AI models.

Endpoints:
- GET /api/categories - Categories with prompt counts
- GET /api/models - AI model catalog with prompt counts
"""

from fastapi import APIRouter, Depends, Query

from api.dependencies import get_category_service, get_model_service
from api.schemas.catalog import CategorySort, ListCategoriesResponse, ListModelsResponse
from services import CategoryService, ModelService

categories_router = APIRouter(prefix="/categories", tags=["categories"])
models_router = APIRouter(prefix="/models", tags=["models"])


@categories_router.get("", response_model=ListCategoriesResponse)
async def list_categories(
    sort: CategorySort = Query(CategorySort.POPULAR),
    limit: int = Query(50, ge=1, le=100),
    category_service: CategoryService = Depends(get_category_service),
):
    """List categories, most used first by default."""
    categories = await category_service.list_categories(sort=sort, limit=limit)
    return ListCategoriesResponse(categories=categories)


@models_router.get("", response_model=ListModelsResponse)
async def list_models(model_service: ModelService = Depends(get_model_service)):
    """List AI models that prompts can suggest."""
    return ListModelsResponse(models=await model_service.list_models())
