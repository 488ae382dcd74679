"""
Base response schemas for standardized API responses.

These schemas keep list endpoints and health checks in one shape.
"""

import math
from typing import Literal

from pydantic import Field

from .base import StandardizedModel


class PaginationMeta(StandardizedModel):
    """Pagination block returned next to every paginated list."""

    total: int = Field(description="Total number of items", ge=0)
    page: int = Field(description="Current page number", ge=1)
    page_size: int = Field(description="Items per page", ge=1)
    total_pages: int = Field(description="ceil(total / pageSize)", ge=0)

    @classmethod
    def build(cls, total: int, page: int, page_size: int) -> "PaginationMeta":
        return cls(
            total=total,
            page=page,
            page_size=page_size,
            total_pages=math.ceil(total / page_size) if page_size else 0,
        )


class HealthResponse(StandardizedModel):
    status: Literal["healthy", "degraded"]
    database: Literal["ok", "unavailable"]
    version: str
    environment: str
