"""
Common Pydantic schemas used across the API.
"""

import math
from datetime import datetime
from enum import Enum
from typing import Optional, Dict, Any

from pydantic import BaseModel, Field


def total_pages(total: int, size: int) -> int:
    """Number of pages needed for ``total`` rows at ``size`` rows per page."""
    if size <= 0:
        return 0
    return math.ceil(total / size)


class PagePagination(BaseModel):
    """Pagination envelope for prompt listings."""

    page: int = Field(..., description="Current page (1-based)")
    page_size: int = Field(..., description="Items per page")
    total: int = Field(..., description="Total number of matching items")
    total_pages: int = Field(..., description="Number of pages")

    @classmethod
    def build(cls, total: int, page: int, page_size: int) -> "PagePagination":
        return cls(
            page=page,
            page_size=page_size,
            total=total,
            total_pages=total_pages(total, page_size),
        )


class LimitPagination(BaseModel):
    """Pagination envelope for follower/following listings."""

    total: int = Field(..., description="Total number of items")
    page: int = Field(..., description="Current page (1-based)")
    limit: int = Field(..., description="Items per page")
    total_pages: int = Field(..., description="Number of pages")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "LimitPagination":
        return cls(total=total, page=page, limit=limit, total_pages=total_pages(total, limit))


class HealthStatus(str, Enum):
    """Health check status enum."""

    HEALTHY = "healthy"
    DEGRADED = "degraded"
    UNHEALTHY = "unhealthy"


class ComponentHealth(BaseModel):
    """Health status of a single component."""

    status: HealthStatus
    latency_ms: Optional[float] = None
    error: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


class HealthCheckResponse(BaseModel):
    """Basic health check response."""

    status: HealthStatus
    timestamp: datetime = Field(default_factory=lambda: datetime.now())


class DetailedHealthCheckResponse(BaseModel):
    """Detailed health check response with component status."""

    status: HealthStatus
    timestamp: datetime = Field(default_factory=lambda: datetime.now())
    version: str
    environment: str
    uptime_seconds: float
    components: Dict[str, ComponentHealth] = Field(
        default_factory=dict,
        description="Health status of each component"
    )
