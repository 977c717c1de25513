"""
Pydantic schemas for categories and the AI model catalog.
"""

from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, Field


class CategorySort(StrEnum):
    POPULAR = "popular"
    NAME = "name"


class CategoryInfo(BaseModel):
    id: UUID
    name: str
    prompt_count: int = 0
    image: str


class ListCategoriesResponse(BaseModel):
    categories: list[CategoryInfo] = Field(default_factory=list)


class ModelInfo(BaseModel):
    """A catalog model; ``value`` is the slug stored as a prompt's suggested model."""

    id: UUID
    value: str
    label: str
    provider: str | None = None
    prompt_count: int = 0


class ListModelsResponse(BaseModel):
    models: list[ModelInfo] = Field(default_factory=list)
