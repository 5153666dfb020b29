"""Catalog service for product operations.

High-level service exposing the catalog operations. Each operation runs
in its own CatalogTransaction, so callers get either the full effect or
no effect, and always a typed error on failure.
"""

import asyncio
from collections.abc import Sequence

import structlog
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from storefront.catalog.models import Product
from storefront.catalog.query import (
    PaginatedResult,
    PaginationParams,
    ProductFilter,
    build_conditions,
)
from storefront.catalog.repository import ProductRepository
from storefront.catalog.schemas import ProductCreate, ProductUpdate
from storefront.catalog.seed_data import SEED_PRODUCTS
from storefront.catalog.transaction import transaction
from storefront.domain.exceptions import NotFoundError
from storefront.domain.value_objects import (
    ById,
    Lookup,
    merge_patch,
    normalize_slug,
    parse_lookup,
    parse_product_id,
)

logger = structlog.get_logger()

# Scalar fields an update may overwrite
PATCHABLE_FIELDS = frozenset(
    {"title", "slug", "description", "price", "stock", "sizes", "gender", "tags"}
)


class CatalogService:
    """Service for catalog operations.

    Example usage:
        service = CatalogService(async_session_factory)

        product = await service.create_product(
            ProductCreate(title="Tee", gender=Gender.UNISEX, images=["a.jpg"])
        )
        page = await service.list_products(
            ProductFilter(size="M"),
            PaginationParams(limit=10, offset=0),
        )
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """Initialize service with a session factory.

        Args:
            session_factory: Factory producing one session per operation.
        """
        self.session_factory = session_factory

    async def create_product(self, data: ProductCreate) -> Product:
        """Insert a product and its images as one unit.

        Args:
            data: Product data; image URLs become owned images in order.

        Returns:
            Created product with images attached.

        Raises:
            ConstraintViolationError: If the title or slug already exists.
            StorageError: On any other persistence failure.
        """
        values = data.model_dump(mode="json", exclude={"slug", "images"})

        async with transaction(self.session_factory, "create_product") as session:
            repository = ProductRepository(session)
            product = Product(**values, slug=normalize_slug(data.slug or data.title))
            await repository.add(product)
            await repository.add_images(product.id, data.images)
            await repository.load_images(product)

        logger.info(
            "Product created",
            product_id=product.id,
            slug=product.slug,
            image_count=len(data.images),
        )
        return product

    async def list_products(
        self,
        filters: ProductFilter | None = None,
        pagination: PaginationParams | None = None,
    ) -> PaginatedResult[Product]:
        """Search products with filters and pagination.

        The total and the page are read in the same transaction. An offset
        past the total yields an empty page, never an error.

        Args:
            filters: Filter parameters.
            pagination: Pagination parameters.

        Returns:
            Paginated product results ordered by title.

        Raises:
            InvalidArgumentError: If pagination or gender values are invalid.
        """
        filters = filters or ProductFilter()
        pagination = pagination or PaginationParams()
        pagination.validate()
        conditions = build_conditions(filters)

        async with transaction(self.session_factory, "list_products") as session:
            repository = ProductRepository(session)
            total = await repository.count(conditions)
            products = await repository.find_page(
                conditions,
                limit=pagination.limit,
                offset=pagination.offset,
            )

        return PaginatedResult(
            items=list(products),
            total=total,
            limit=pagination.limit,
            offset=pagination.offset,
        )

    async def get_product(self, term: str | Lookup) -> Product:
        """Get product by ID, slug or title.

        Args:
            term: Raw term, or an already parsed ById/ByTerm lookup.

        Returns:
            Product with its images.

        Raises:
            NotFoundError: If nothing matches.
        """
        lookup = parse_lookup(term) if isinstance(term, str) else term

        async with transaction(self.session_factory, "get_product") as session:
            repository = ProductRepository(session)
            if isinstance(lookup, ById):
                product = await repository.get_by_id(lookup.value)
            else:
                product = await repository.get_by_term(lookup.value)

        if product is None:
            raise NotFoundError("id" if isinstance(lookup, ById) else "term", str(lookup))
        return product

    async def update_product(self, product_id: str, patch: ProductUpdate) -> Product:
        """Apply a partial update, replacing images when supplied.

        Load, image replacement, merge and flush all happen in one
        transaction; on any failure the stored product is left exactly
        as it was.

        Args:
            product_id: Product UUID.
            patch: Fields to change.

        Returns:
            Updated product with its current images.

        Raises:
            InvalidArgumentError: If product_id is not a UUID.
            NotFoundError: If the product does not exist.
            ConstraintViolationError: If the new title or slug is taken.
            StorageError: On any other persistence failure.
        """
        product_id = parse_product_id(product_id)
        changes = patch.changes()
        images = changes.pop("images", None)
        if "slug" in changes:
            changes["slug"] = normalize_slug(changes["slug"])

        async with transaction(self.session_factory, "update_product") as session:
            repository = ProductRepository(session)
            product = await repository.get_by_id(product_id)
            if product is None:
                raise NotFoundError("id", product_id)

            if images is not None:
                await repository.delete_images(product_id)
                await repository.add_images(product_id, images)

            changed = merge_patch(product, changes, PATCHABLE_FIELDS)
            await repository.flush()
            await repository.load_images(product)

        logger.info(
            "Product updated",
            product_id=product_id,
            fields=changed,
            images_replaced=images is not None,
        )
        return product

    async def delete_product(self, product_id: str) -> None:
        """Delete a product and, by cascade, its images.

        Args:
            product_id: Product UUID.

        Raises:
            InvalidArgumentError: If product_id is not a UUID.
            NotFoundError: If no product was deleted.
        """
        product_id = parse_product_id(product_id)

        async with transaction(self.session_factory, "delete_product") as session:
            deleted = await ProductRepository(session).delete(product_id)
            if deleted == 0:
                raise NotFoundError("id", product_id)

        logger.info("Product deleted", product_id=product_id)

    async def reset_catalog(self) -> int:
        """Delete every product and image. Seeding only.

        Returns:
            Number of deleted products.

        Raises:
            StorageError: On persistence failure.
        """
        async with transaction(self.session_factory, "reset_catalog") as session:
            deleted = await ProductRepository(session).delete_all()

        logger.info("Catalog reset", deleted=deleted)
        return deleted

    async def seed_catalog(self, products: Sequence[ProductCreate] | None = None) -> int:
        """Reset the catalog and insert a fixed dataset.

        Creates run concurrently, each in its own transaction. The first
        failure propagates; products already created stay.

        Args:
            products: Dataset to insert, defaults to the bundled one.

        Returns:
            Number of products created.
        """
        if products is None:
            products = SEED_PRODUCTS

        deleted = await self.reset_catalog()
        created = await asyncio.gather(*(self.create_product(data) for data in products))

        logger.info("Catalog seeded", deleted=deleted, created=len(created))
        return len(created)
