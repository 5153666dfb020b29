"""Payloads accepted by the catalog service.

Pydantic models shared by the service, the seed data and the API layer,
so every caller goes through the same validation boundary.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator

from storefront.domain.value_objects import Gender, Size

# Largest value a Numeric(10, 2) price column holds
MAX_PRICE = 99_999_999.99


class ProductCreate(BaseModel):
    """Data for a new product."""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=255, description="Unique product title")
    slug: str | None = Field(
        default=None,
        min_length=1,
        max_length=255,
        description="Unique slug, derived from the title when omitted",
    )
    description: str | None = Field(default=None, description="Product description")
    price: float = Field(
        default=0, ge=0, le=MAX_PRICE, allow_inf_nan=False, description="Price"
    )
    stock: int = Field(default=0, ge=0, description="Units in stock")
    sizes: list[Size] = Field(default_factory=list, description="Available size codes")
    gender: Gender = Field(..., description="Target audience")
    tags: list[str] = Field(default_factory=list, description="Free-form tags")
    images: list[str] = Field(default_factory=list, description="Image URLs in display order")


# Fields that may be explicitly cleared by an update
NULLABLE_FIELDS = frozenset({"description"})


class ProductUpdate(BaseModel):
    """Partial update of a product.

    Only fields present in the request are applied. Supplying ``images``
    replaces the whole image set; omitting it keeps the current one.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(default=None, min_length=1, max_length=255)
    slug: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    price: float | None = Field(default=None, ge=0, le=MAX_PRICE, allow_inf_nan=False)
    stock: int | None = Field(default=None, ge=0)
    sizes: list[Size] | None = None
    gender: Gender | None = None
    tags: list[str] | None = None
    images: list[str] | None = None

    @model_validator(mode="after")
    def reject_null_required_fields(self) -> "ProductUpdate":
        """Reject explicit nulls for fields that must always hold a value."""
        for name in self.model_fields_set - NULLABLE_FIELDS:
            if getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict[str, Any]:
        """Get only the fields the caller supplied, as plain values.

        Returns:
            Supplied fields with enums reduced to their values.
        """
        return self.model_dump(mode="json", exclude_unset=True)
