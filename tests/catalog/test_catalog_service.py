"""Tests for CatalogService operations."""

import pytest
from pydantic import ValidationError

from storefront.catalog.query import PaginationParams, ProductFilter
from storefront.catalog.repository import ProductRepository
from storefront.catalog.schemas import ProductCreate, ProductUpdate
from storefront.domain.exceptions import (
    ConstraintViolationError,
    InvalidArgumentError,
    NotFoundError,
)
from storefront.domain.value_objects import ByTerm, Gender, Size

MISSING_ID = "00000000-0000-0000-0000-000000000000"


async def count_images(session_factory, product_id=None) -> int:
    """Count stored image rows."""
    async with session_factory() as session:
        return await ProductRepository(session).count_images(product_id)


# ============================================================================
# Create / Get
# ============================================================================


class TestCreateProduct:
    """Tests for product creation."""

    async def test_create_then_get_round_trip(self, service, shirt_data) -> None:
        """A created product reads back with the same fields and image order."""
        created = await service.create_product(shirt_data)
        fetched = await service.get_product(created.id)

        assert fetched.id == created.id
        assert fetched.title == "Men's Turbine Long Sleeve Tee"
        assert fetched.price == 45
        assert fetched.stock == 50
        assert fetched.sizes == ["S", "M", "L"]
        assert fetched.gender == "men"
        assert fetched.image_urls == ["a.jpg", "b.jpg"]

    async def test_slug_derived_from_title(self, service, shirt_data) -> None:
        """An omitted slug is derived from the title."""
        created = await service.create_product(shirt_data)
        assert created.slug == "mens-turbine-long-sleeve-tee"

    async def test_supplied_slug_is_normalized(self, service, shirt_data) -> None:
        """A supplied slug goes through the same normalization."""
        data = shirt_data.model_copy(update={"slug": "Turbine Tee"})
        created = await service.create_product(data)
        assert created.slug == "turbine-tee"

    async def test_create_without_images(self, service) -> None:
        """Products may have no images."""
        created = await service.create_product(
            ProductCreate(title="Plain Cap", gender=Gender.UNISEX)
        )
        assert created.image_urls == []
        assert created.price == 0
        assert created.stock == 0

    async def test_duplicate_title_rejected(self, service, shirt_data, session_factory) -> None:
        """A second product with the same title violates uniqueness and leaves nothing behind."""
        await service.create_product(shirt_data)
        duplicate = shirt_data.model_copy(update={"slug": "other-slug", "images": ["z.jpg"]})

        with pytest.raises(ConstraintViolationError):
            await service.create_product(duplicate)

        page = await service.list_products()
        assert page.total == 1
        assert await count_images(session_factory) == 2

    async def test_duplicate_slug_rejected(self, service, shirt_data) -> None:
        """Slugs are unique too."""
        await service.create_product(shirt_data)
        other = ProductCreate(
            title="Another Tee",
            slug="mens-turbine-long-sleeve-tee",
            gender=Gender.MEN,
        )

        with pytest.raises(ConstraintViolationError):
            await service.create_product(other)

    async def test_slug_must_not_be_empty(self, service) -> None:
        """A title that normalizes to nothing is rejected."""
        with pytest.raises(InvalidArgumentError):
            await service.create_product(ProductCreate(title="'", gender=Gender.MEN))

        assert (await service.list_products()).total == 0

    def test_blank_title_rejected(self) -> None:
        """Whitespace-only titles fail validation."""
        with pytest.raises(ValidationError):
            ProductCreate(title="   ", gender=Gender.MEN)

    def test_title_is_stripped(self) -> None:
        """Surrounding whitespace is removed from titles."""
        assert ProductCreate(title="  Cap ", gender=Gender.MEN).title == "Cap"

    @pytest.mark.parametrize("price", [float("inf"), float("nan"), 100_000_000])
    def test_price_must_fit_the_column(self, price) -> None:
        """Non-finite prices and prices past Numeric(10, 2) are rejected."""
        with pytest.raises(ValidationError):
            ProductCreate(title="Cap", gender=Gender.MEN, price=price)
        with pytest.raises(ValidationError):
            ProductUpdate(price=price)


class TestGetProduct:
    """Tests for lookups by id, slug and title."""

    async def test_missing_id(self, service) -> None:
        """An unknown UUID is not found."""
        with pytest.raises(NotFoundError):
            await service.get_product(MISSING_ID)

    async def test_uppercase_id(self, service, shirt_data) -> None:
        """UUIDs are matched in any case."""
        created = await service.create_product(shirt_data)
        fetched = await service.get_product(created.id.upper())
        assert fetched.id == created.id

    @pytest.mark.parametrize(
        "term",
        [
            "mens-turbine-long-sleeve-tee",
            "MENS-TURBINE-LONG-SLEEVE-TEE",
            "Men's Turbine Long Sleeve Tee",
            "men's turbine long sleeve tee",
        ],
    )
    async def test_by_slug_or_title(self, service, shirt_data, term) -> None:
        """Slug and title are matched ignoring case."""
        created = await service.create_product(shirt_data)
        fetched = await service.get_product(term)

        assert fetched.id == created.id
        assert fetched.image_urls == ["a.jpg", "b.jpg"]

    async def test_hex_title_is_a_term(self, service) -> None:
        """A title of 32 bare hex digits is found by title, not as an id."""
        title = "0123456789abcdef0123456789abcdef"
        created = await service.create_product(ProductCreate(title=title, gender=Gender.MEN))

        fetched = await service.get_product(title)
        assert fetched.id == created.id

    async def test_parsed_lookup(self, service, shirt_data) -> None:
        """A pre-parsed lookup is accepted."""
        created = await service.create_product(shirt_data)
        fetched = await service.get_product(ByTerm("mens-turbine-long-sleeve-tee"))
        assert fetched.id == created.id

    async def test_unknown_term(self, service, shirt_data) -> None:
        """Terms that match nothing are not found."""
        await service.create_product(shirt_data)
        with pytest.raises(NotFoundError) as exc_info:
            await service.get_product("turbine")
        assert "turbine" in exc_info.value.message


# ============================================================================
# List
# ============================================================================


class TestListProducts:
    """Tests for filtered, paginated listing."""

    @pytest.fixture
    async def catalog(self, service, shirt_data, jacket_data) -> None:
        """Three products across genders and sizes."""
        await service.create_product(shirt_data)
        await service.create_product(jacket_data)
        await service.create_product(
            ProductCreate(
                title="Kids Scribble Hoodie",
                description="Hoodie with a scribble print.",
                price=35,
                sizes=[Size.S, Size.M],
                gender=Gender.KID,
                images=["hoodie.jpg"],
            )
        )

    async def test_default_listing(self, service, catalog) -> None:
        """Without filters everything is returned ordered by title."""
        page = await service.list_products()

        assert page.total == 3
        assert [p.title for p in page.items] == [
            "Kids Scribble Hoodie",
            "Men's Turbine Long Sleeve Tee",
            "Women's Cropped Puffer Jacket",
        ]
        assert page.limit == 10
        assert page.offset == 0
        assert page.total_pages == 1

    async def test_items_carry_images(self, service, catalog) -> None:
        """Listed products include their images."""
        page = await service.list_products(ProductFilter(gender=Gender.MEN))
        assert page.items[0].image_urls == ["a.jpg", "b.jpg"]

    async def test_pagination(self, service, catalog) -> None:
        """Total counts all matches while items hold one page."""
        page = await service.list_products(pagination=PaginationParams(limit=2, offset=2))

        assert page.total == 3
        assert [p.title for p in page.items] == ["Women's Cropped Puffer Jacket"]
        assert page.current_page == 2
        assert page.has_previous_page
        assert not page.has_next_page

    async def test_offset_past_total(self, service, catalog) -> None:
        """An offset beyond the data gives an empty page, not an error."""
        page = await service.list_products(pagination=PaginationParams(limit=10, offset=30))

        assert page.items == []
        assert page.total == 3

    async def test_search(self, service, catalog) -> None:
        """Search matches title or description case-insensitively."""
        by_title = await service.list_products(ProductFilter(search="PUFFER"))
        by_description = await service.list_products(ProductFilter(search="scribble print"))

        assert [p.title for p in by_title.items] == ["Women's Cropped Puffer Jacket"]
        assert [p.title for p in by_description.items] == ["Kids Scribble Hoodie"]

    async def test_size_filter(self, service, catalog) -> None:
        """Size matches products offering that size."""
        page = await service.list_products(ProductFilter(size="S"))
        assert page.total == 3

        page = await service.list_products(ProductFilter(size="XS"))
        assert [p.title for p in page.items] == ["Women's Cropped Puffer Jacket"]

    async def test_gender_and_size(self, service, catalog) -> None:
        """Filters are combined with AND."""
        page = await service.list_products(ProductFilter(gender=Gender.KID, size="M"))
        assert [p.title for p in page.items] == ["Kids Scribble Hoodie"]

        page = await service.list_products(ProductFilter(gender=Gender.WOMEN, size="M"))
        assert page.total == 0

    async def test_invalid_pagination(self, service) -> None:
        """A zero limit is rejected before touching storage."""
        with pytest.raises(InvalidArgumentError):
            await service.list_products(pagination=PaginationParams(limit=0))

    async def test_invalid_gender(self, service) -> None:
        """An unknown gender is rejected."""
        with pytest.raises(InvalidArgumentError):
            await service.list_products(ProductFilter(gender="aliens"))


# ============================================================================
# Update
# ============================================================================


class TestUpdateProduct:
    """Tests for partial updates and image replacement."""

    async def test_partial_update_keeps_other_fields(self, service, shirt_data) -> None:
        """Only supplied fields change; images stay when omitted."""
        created = await service.create_product(shirt_data)

        updated = await service.update_product(created.id, ProductUpdate(stock=7))

        assert updated.stock == 7
        assert updated.price == 45
        assert updated.title == shirt_data.title
        assert updated.image_urls == ["a.jpg", "b.jpg"]

    async def test_images_replaced_atomically(self, service, shirt_data, session_factory) -> None:
        """Supplying images replaces the whole set."""
        created = await service.create_product(shirt_data)

        updated = await service.update_product(
            created.id, ProductUpdate(images=["c.jpg", "d.jpg"])
        )
        fetched = await service.get_product(created.id)

        assert updated.image_urls == ["c.jpg", "d.jpg"]
        assert fetched.image_urls == ["c.jpg", "d.jpg"]
        assert await count_images(session_factory, created.id) == 2

    async def test_empty_images_clear_the_set(self, service, shirt_data) -> None:
        """An empty list removes every image."""
        created = await service.create_product(shirt_data)
        updated = await service.update_product(created.id, ProductUpdate(images=[]))
        assert updated.image_urls == []

    async def test_slug_is_normalized(self, service, shirt_data) -> None:
        """A supplied slug is normalized; a title change keeps the slug."""
        created = await service.create_product(shirt_data)

        renamed = await service.update_product(created.id, ProductUpdate(title="Turbine Tee"))
        assert renamed.slug == "mens-turbine-long-sleeve-tee"

        reslugged = await service.update_product(created.id, ProductUpdate(slug="Turbine Tee"))
        assert reslugged.slug == "turbine-tee"

    async def test_empty_slug_rejected(self, service, shirt_data) -> None:
        """A slug that normalizes to nothing is an invalid argument."""
        created = await service.create_product(shirt_data)

        with pytest.raises(InvalidArgumentError):
            await service.update_product(created.id, ProductUpdate(slug="''"))

        fetched = await service.get_product(created.id)
        assert fetched.slug == "mens-turbine-long-sleeve-tee"

    async def test_description_can_be_cleared(self, service, shirt_data) -> None:
        """An explicit null clears the description."""
        created = await service.create_product(shirt_data)
        updated = await service.update_product(created.id, ProductUpdate(description=None))
        assert updated.description is None

    async def test_missing_product(self, service) -> None:
        """Updating an unknown id is not found."""
        with pytest.raises(NotFoundError):
            await service.update_product(MISSING_ID, ProductUpdate(stock=1))

    async def test_malformed_id(self, service) -> None:
        """A non-UUID id is an invalid argument."""
        with pytest.raises(InvalidArgumentError):
            await service.update_product("not-a-uuid", ProductUpdate(stock=1))

    async def test_conflict_rolls_back_image_replacement(
        self, service, shirt_data, jacket_data
    ) -> None:
        """A unique violation undoes the image replacement done earlier in the same update."""
        shirt = await service.create_product(shirt_data)
        await service.create_product(jacket_data)

        with pytest.raises(ConstraintViolationError):
            await service.update_product(
                shirt.id,
                ProductUpdate(title=jacket_data.title, images=["c.jpg"]),
            )

        fetched = await service.get_product(shirt.id)
        assert fetched.title == shirt_data.title
        assert fetched.image_urls == ["a.jpg", "b.jpg"]


# ============================================================================
# Delete / Reset
# ============================================================================


class TestDeleteProduct:
    """Tests for product deletion."""

    async def test_delete_removes_product_and_images(
        self, service, shirt_data, jacket_data, session_factory
    ) -> None:
        """Images of the deleted product go with it; others stay."""
        shirt = await service.create_product(shirt_data)
        jacket = await service.create_product(jacket_data)

        await service.delete_product(shirt.id)

        with pytest.raises(NotFoundError):
            await service.get_product(shirt.id)
        assert await count_images(session_factory, shirt.id) == 0
        assert await count_images(session_factory, jacket.id) == 1

    async def test_delete_twice(self, service, shirt_data) -> None:
        """The second delete is not found."""
        shirt = await service.create_product(shirt_data)
        await service.delete_product(shirt.id)

        with pytest.raises(NotFoundError):
            await service.delete_product(shirt.id)

    async def test_delete_malformed_id(self, service) -> None:
        """A non-UUID id is an invalid argument."""
        with pytest.raises(InvalidArgumentError):
            await service.delete_product("mens-turbine-long-sleeve-tee")

    async def test_reset_catalog(self, service, shirt_data, jacket_data, session_factory) -> None:
        """Reset removes every product and image."""
        await service.create_product(shirt_data)
        await service.create_product(jacket_data)

        assert await service.reset_catalog() == 2
        assert (await service.list_products()).total == 0
        assert await count_images(session_factory) == 0
