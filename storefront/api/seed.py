"""Seed API endpoint.

Resets the catalog to the bundled dataset. Seeding only ever happens
when this endpoint (or the seed script) is called.
"""

from typing import Annotated

from fastapi import APIRouter, Depends

from storefront.api.products import get_catalog_service
from storefront.api.schemas import ErrorResponse, SeedResponse
from storefront.catalog.service import CatalogService

router = APIRouter(prefix="/seed", tags=["Seed"])


@router.get(
    "",
    response_model=SeedResponse,
    responses={500: {"model": ErrorResponse}},
    summary="Seed catalog",
    description="Delete every product and insert the bundled dataset.",
)
async def run_seed(
    service: Annotated[CatalogService, Depends(get_catalog_service)],
) -> SeedResponse:
    """Reset and seed the catalog.

    Args:
        service: Catalog service.

    Returns:
        Number of products inserted.
    """
    created = await service.seed_catalog()
    return SeedResponse(products=created)
