"""SQLAlchemy models for the product catalog.

Defines Product and ProductImage tables for persistent storage.
"""

from typing import Any
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    ForeignKey,
    Integer,
    Numeric,
    String,
    Text,
    Uuid,
)
from sqlalchemy.dialects.postgresql import ARRAY
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import Mapped, mapped_column, relationship
from sqlalchemy.sql.expression import FunctionElement

from storefront.infrastructure.database import Base

# Text arrays on PostgreSQL, JSON lists everywhere else
StringList = ARRAY(String(50)).with_variant(JSON(), "sqlite")


class array_contains(FunctionElement):
    """SQL predicate: ``value`` is an element of the list ``column``.

    Example:
        select(Product).where(array_contains(Product.sizes, "M"))
    """

    type = Boolean()
    name = "array_contains"
    inherit_cache = True


@compiles(array_contains)
def _array_contains_json(element: array_contains, compiler: Any, **kw: Any) -> str:
    column, value = list(element.clauses)
    return "EXISTS (SELECT 1 FROM json_each(%s) WHERE json_each.value = %s)" % (
        compiler.process(column, **kw),
        compiler.process(value, **kw),
    )


@compiles(array_contains, "postgresql")
def _array_contains_pg(element: array_contains, compiler: Any, **kw: Any) -> str:
    column, value = list(element.clauses)
    return "%s = ANY(%s)" % (
        compiler.process(value, **kw),
        compiler.process(column, **kw),
    )


class Product(Base):
    """Product entity in the catalog.

    Attributes:
        id: Unique product identifier (UUID).
        title: Product title, unique across the catalog.
        slug: URL-safe identifier derived from the title, unique.
        description: Product description.
        price: Price, never negative.
        stock: Units in stock, never negative.
        sizes: Size codes the product is offered in.
        gender: Target audience (men, women, kid, unisex).
        tags: Free-form tags.
        images: Owned images in insertion order.
    """

    __tablename__ = "products"

    id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        primary_key=True,
        default=lambda: str(uuid4()),
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    price: Mapped[float] = mapped_column(
        Numeric(10, 2, asdecimal=False), nullable=False, default=0
    )
    stock: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sizes: Mapped[list[str]] = mapped_column(StringList, nullable=False, default=list)
    gender: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    tags: Mapped[list[str]] = mapped_column(StringList, nullable=False, default=list)

    __table_args__ = (
        CheckConstraint("price >= 0", name="ck_products_price_non_negative"),
        CheckConstraint("stock >= 0", name="ck_products_stock_non_negative"),
    )

    # Read side of the ownership relation. Image rows are written
    # explicitly by the repository, removed by the ON DELETE CASCADE.
    images: Mapped[list["ProductImage"]] = relationship(
        "ProductImage",
        order_by="ProductImage.id",
        viewonly=True,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<Product(id={self.id}, slug={self.slug})>"

    @property
    def image_urls(self) -> list[str]:
        """Get image URLs in insertion order.

        Returns:
            Plain URL strings.
        """
        return [image.url for image in self.images]

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with images flattened to URLs.

        Returns:
            Dictionary representation.
        """
        return {
            "id": self.id,
            "title": self.title,
            "slug": self.slug,
            "description": self.description,
            "price": float(self.price),
            "stock": self.stock,
            "sizes": list(self.sizes),
            "gender": self.gender,
            "tags": list(self.tags),
            "images": self.image_urls,
        }


class ProductImage(Base):
    """Image owned by exactly one product.

    Attributes:
        id: Unique image identifier; ascending ids give insertion order.
        url: Image URL as supplied by the upload boundary.
        product_id: Owning product ID.
    """

    __tablename__ = "product_images"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    url: Mapped[str] = mapped_column(String(1000), nullable=False)
    product_id: Mapped[str] = mapped_column(
        Uuid(as_uuid=False),
        ForeignKey("products.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    def __repr__(self) -> str:
        """String representation."""
        return f"<ProductImage(id={self.id}, url={self.url})>"
