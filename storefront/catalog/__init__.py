"""Product Catalog.

Provides the product and image schema, the filter/pagination engine,
the repository, the transaction coordinator and the catalog service.
"""

from storefront.catalog.models import Product, ProductImage
from storefront.catalog.query import (
    PaginatedResult,
    PaginationParams,
    ProductFilter,
    build_conditions,
)
from storefront.catalog.repository import ProductRepository
from storefront.catalog.schemas import ProductCreate, ProductUpdate
from storefront.catalog.service import CatalogService
from storefront.catalog.transaction import CatalogTransaction, transaction

__all__ = [
    # Models
    "Product",
    "ProductImage",
    # Query
    "PaginatedResult",
    "PaginationParams",
    "ProductFilter",
    "build_conditions",
    # Repository
    "ProductRepository",
    # Schemas
    "ProductCreate",
    "ProductUpdate",
    # Service
    "CatalogService",
    # Transactions
    "CatalogTransaction",
    "transaction",
]
