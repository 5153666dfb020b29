"""Product repository for database operations.

Provides reads and writes for products and their images. The repository
never commits; the transaction around it belongs to the caller.
"""

from collections.abc import Sequence
from typing import Any

from sqlalchemy import and_, delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from storefront.catalog.models import Product, ProductImage


class ProductRepository:
    """Repository for Product database operations.

    Handles all database interactions for products including
    filtering, sorting, pagination and image replacement.

    Example usage:
        async with transaction(session_factory, "list") as session:
            repo = ProductRepository(session)
            products = await repo.find_page(
                build_conditions(ProductFilter(gender=Gender.MEN)),
                limit=10,
                offset=0,
            )
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: Async SQLAlchemy session.
        """
        self.session = session

    async def add(self, product: Product) -> Product:
        """Stage a product and flush it so its id is assigned.

        Args:
            product: Product to insert.

        Returns:
            Flushed product.
        """
        self.session.add(product)
        await self.session.flush()
        return product

    async def add_images(self, product_id: str, urls: Sequence[str]) -> list[ProductImage]:
        """Insert image rows for a product in the given order.

        Args:
            product_id: Owning product ID.
            urls: Image URLs.

        Returns:
            Flushed image rows.
        """
        images = [ProductImage(product_id=product_id, url=url) for url in urls]
        self.session.add_all(images)
        await self.session.flush()
        return images

    async def delete_images(self, product_id: str) -> int:
        """Delete every image owned by a product.

        Args:
            product_id: Owning product ID.

        Returns:
            Number of deleted images.
        """
        result = await self.session.execute(
            delete(ProductImage).where(ProductImage.product_id == product_id)
        )
        return result.rowcount

    async def load_images(self, product: Product) -> Product:
        """Reload a product's image collection from the current transaction.

        Args:
            product: Persistent product.

        Returns:
            The same product with fresh images.
        """
        await self.session.refresh(product, attribute_names=["images"])
        return product

    async def flush(self) -> None:
        """Flush pending changes to the database."""
        await self.session.flush()

    async def get_by_id(
        self,
        product_id: str,
        include_images: bool = True,
    ) -> Product | None:
        """Get product by ID.

        Args:
            product_id: Canonical product UUID.
            include_images: Whether to eagerly load images.

        Returns:
            Product if found, None otherwise.
        """
        query = select(Product).where(Product.id == product_id)

        if include_images:
            query = query.options(selectinload(Product.images))

        result = await self.session.execute(query)
        return result.scalar_one_or_none()

    async def get_by_term(self, term: str) -> Product | None:
        """Get product by slug or title, ignoring case.

        Both columns are compared with the same rule: lowercase stored
        value equals lowercase term.

        Args:
            term: Slug or title.

        Returns:
            Product if found, None otherwise.
        """
        folded = term.lower()
        query = (
            select(Product)
            .where(
                or_(
                    func.lower(Product.slug) == folded,
                    func.lower(Product.title) == folded,
                )
            )
            .order_by(Product.title.asc())
            .limit(1)
            .options(selectinload(Product.images))
        )

        result = await self.session.execute(query)
        return result.scalars().first()

    async def find_page(
        self,
        conditions: Sequence[Any] = (),
        limit: int = 10,
        offset: int = 0,
    ) -> Sequence[Product]:
        """Find one page of products ordered by title.

        Args:
            conditions: Filter predicates, combined with AND.
            limit: Maximum results.
            offset: Result offset for pagination.

        Returns:
            Sequence of matching products with images loaded.
        """
        query = select(Product)

        if conditions:
            query = query.where(and_(*conditions))

        query = (
            query.order_by(Product.title.asc())
            .offset(offset)
            .limit(limit)
            .options(selectinload(Product.images))
        )

        result = await self.session.execute(query)
        return result.scalars().all()

    async def count(self, conditions: Sequence[Any] = ()) -> int:
        """Count products matching filters.

        Args:
            conditions: Filter predicates, combined with AND.

        Returns:
            Count of matching products.
        """
        query = select(func.count(Product.id))

        if conditions:
            query = query.where(and_(*conditions))

        result = await self.session.execute(query)
        return result.scalar_one()

    async def count_images(self, product_id: str | None = None) -> int:
        """Count image rows, optionally for one product.

        Args:
            product_id: Optional owning product filter.

        Returns:
            Number of image rows.
        """
        query = select(func.count(ProductImage.id))

        if product_id is not None:
            query = query.where(ProductImage.product_id == product_id)

        result = await self.session.execute(query)
        return result.scalar_one()

    async def delete(self, product_id: str) -> int:
        """Delete a product; its images go with it by cascade.

        Args:
            product_id: Product ID.

        Returns:
            Number of deleted products (0 or 1).
        """
        result = await self.session.execute(
            delete(Product).where(Product.id == product_id)
        )
        return result.rowcount

    async def delete_all(self) -> int:
        """Delete every product and, by cascade, every image.

        Returns:
            Number of deleted products.
        """
        result = await self.session.execute(delete(Product))
        return result.rowcount
