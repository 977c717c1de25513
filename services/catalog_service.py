"""
Category and AI model catalog listings.
"""

from api.schemas.catalog import CategoryInfo, CategorySort, ModelInfo
from core.exceptions import ValidationError
from database.repositories import AIModelRepository, CategoryRepository
from utils.placeholder import category_image


class CategoryService:
    def __init__(self, category_repo: CategoryRepository):
        self.categories = category_repo

    async def list_categories(
        self,
        sort: CategorySort | str = CategorySort.POPULAR,
        limit: int = 50,
    ) -> list[CategoryInfo]:
        """Categories with prompt counts; ``popular`` orders by count descending."""
        try:
            sort = CategorySort(sort)
        except ValueError:
            raise ValidationError(message="sort must be 'popular' or 'name'", details={"sort": str(sort)})

        rows = await self.categories.list_with_counts(sort_by=sort.value, limit=limit)
        return [
            CategoryInfo(
                id=category.id,
                name=category.name,
                prompt_count=count,
                image=category.image or category_image(category.name),
            )
            for category, count in rows
        ]


class ModelService:
    def __init__(self, model_repo: AIModelRepository):
        self.models = model_repo

    async def list_models(self) -> list[ModelInfo]:
        rows = await self.models.list_with_prompt_counts()
        return [
            ModelInfo(
                id=model.id,
                value=model.slug,
                label=model.name,
                provider=model.provider,
                prompt_count=count,
            )
            for model, count in rows
        ]
