"""API schemas for the Storefront catalog API.

Pydantic models for request/response validation and serialization.
Request bodies reuse the catalog payloads (ProductCreate, ProductUpdate).
"""

from typing import Any

from pydantic import BaseModel, Field

from storefront.catalog.models import Product
from storefront.catalog.query import PaginatedResult
from storefront.domain.value_objects import Gender


# ============================================================================
# Common Schemas
# ============================================================================


class ErrorDetail(BaseModel):
    """Detailed error information."""

    field: str | None = Field(default=None, description="Field that caused the error")
    message: str = Field(..., description="Error message")


class ErrorResponse(BaseModel):
    """Standard error response.

    All API errors follow this format for consistency.
    """

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error message")
    details: list[ErrorDetail] = Field(
        default_factory=list, description="Additional error details"
    )
    request_id: str | None = Field(
        default=None, description="Request ID for correlation"
    )


class MessageResponse(BaseModel):
    """Plain acknowledgement."""

    message: str


# ============================================================================
# Product Schemas
# ============================================================================


class ProductResponse(BaseModel):
    """Product with its images flattened to URLs."""

    id: str
    title: str
    slug: str
    description: str | None = None
    price: float
    stock: int
    sizes: list[str]
    gender: Gender
    tags: list[str]
    images: list[str] = Field(default_factory=list, description="Image URLs in order")

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        """Convert Product model to response schema."""
        return cls(**product.to_dict())


class ProductListResponse(BaseModel):
    """One page of products plus pagination metadata."""

    data: list[ProductResponse]
    total: int = Field(..., description="Products matching the filters")
    limit: int = Field(..., description="Items per page")
    offset: int = Field(..., description="Items skipped")
    total_pages: int = Field(..., description="Number of pages")
    current_page: int = Field(..., description="Current page number (1-based)")
    has_next_page: bool
    has_previous_page: bool

    @classmethod
    def from_result(cls, result: PaginatedResult[Product]) -> "ProductListResponse":
        """Convert a paginated result to response schema."""
        metadata: dict[str, Any] = result.metadata()
        return cls(
            data=[ProductResponse.from_product(product) for product in result.items],
            **metadata,
        )


# ============================================================================
# Seed Schemas
# ============================================================================


class SeedResponse(BaseModel):
    """Result of a catalog seed."""

    message: str = "SEED EXECUTED"
    products: int = Field(..., description="Products inserted")
