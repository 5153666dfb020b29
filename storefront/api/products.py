"""Product API endpoints.

Provides endpoints for the product catalog:
- POST /products - create a product with images
- GET /products - search products (paginated)
- GET /products/{term} - product by id, slug or title
- PATCH /products/{id} - partial update, replacing images when supplied
- DELETE /products/{id} - delete a product and its images
"""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.api.schemas import (
    ErrorResponse,
    MessageResponse,
    ProductListResponse,
    ProductResponse,
)
from storefront.catalog.query import PaginationParams, ProductFilter
from storefront.catalog.schemas import ProductCreate, ProductUpdate
from storefront.catalog.service import CatalogService
from storefront.domain.value_objects import Gender
from storefront.infrastructure.config import settings
from storefront.infrastructure.database import get_session_factory

router = APIRouter(prefix="/products", tags=["Products"])


# ============================================================================
# Dependencies
# ============================================================================


def get_catalog_service(
    session_factory: Annotated[async_sessionmaker[AsyncSession], Depends(get_session_factory)],
) -> CatalogService:
    """Get catalog service bound to the application session factory."""
    return CatalogService(session_factory)


# ============================================================================
# Endpoints
# ============================================================================


@router.post(
    "",
    response_model=ProductResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Create product",
)
async def create_product(
    body: ProductCreate,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Create a product together with its images."""
    product = await service.create_product(body)
    return ProductResponse.from_product(product)


@router.get(
    "",
    response_model=ProductListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="Search products",
    description="List products ordered by title, filtered by text, gender and size.",
)
async def list_products(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
    limit: Annotated[int, Query(gt=0, description="Items per page")] = settings.default_page_limit,
    offset: Annotated[int, Query(ge=0, description="Items to skip")] = 0,
    search: Annotated[
        str | None,
        Query(max_length=settings.max_search_length, description="Text in title or description"),
    ] = None,
    gender: Annotated[Gender | None, Query(description="Target audience")] = None,
    size: Annotated[str | None, Query(description="Size code")] = None,
) -> ProductListResponse:
    """Search products with filters and pagination.

    Args:
        service: Catalog service.
        limit: Items per page.
        offset: Items to skip.
        search: Case-insensitive text to look for.
        gender: Gender filter.
        size: Size filter.

    Returns:
        Page of products with pagination metadata.
    """
    result = await service.list_products(
        ProductFilter(search=search, gender=gender, size=size),
        PaginationParams(limit=limit, offset=offset),
    )
    return ProductListResponse.from_result(result)


@router.get(
    "/{term}",
    response_model=ProductResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get product",
    description="Get a product by UUID, or by slug or title ignoring case.",
)
async def get_product(
    term: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Get a product by id, slug or title."""
    product = await service.get_product(term)
    return ProductResponse.from_product(product)


@router.patch(
    "/{product_id}",
    response_model=ProductResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update product",
)
async def update_product(
    product_id: str,
    body: ProductUpdate,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> ProductResponse:
    """Apply a partial update to a product.

    Supplying ``images`` replaces the whole image set atomically.
    """
    product = await service.update_product(product_id, body)
    return ProductResponse.from_product(product)


@router.delete(
    "/{product_id}",
    response_model=MessageResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    },
    summary="Delete product",
)
async def delete_product(
    product_id: str,
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> MessageResponse:
    """Delete a product and its images."""
    await service.delete_product(product_id)
    return MessageResponse(message="Product deleted successfully")
