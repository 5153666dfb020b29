"""Shared fixtures for catalog and API tests.

Every test gets its own SQLite database file. NullPool gives each
session a fresh connection, so the same engine works both from async
tests and from the TestClient's event loop.
"""

import asyncio
from collections.abc import AsyncGenerator, Generator
from pathlib import Path

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import NullPool

from storefront.catalog.schemas import ProductCreate
from storefront.catalog.service import CatalogService
from storefront.domain.value_objects import Gender, Size
from storefront.infrastructure.database import (
    create_engine_from_url,
    create_session_factory,
    create_tables,
    get_session_factory,
)
from storefront.main import app


def make_engine(path: Path) -> AsyncEngine:
    """Create a SQLite engine on a database file."""
    return create_engine_from_url(
        f"sqlite+aiosqlite:///{path}",
        poolclass=NullPool,
        echo=False,
    )


# ============================================================================
# Database Fixtures
# ============================================================================


@pytest_asyncio.fixture
async def engine(tmp_path: Path) -> AsyncGenerator[AsyncEngine, None]:
    """Create an engine with the catalog tables."""
    engine = make_engine(tmp_path / "catalog.db")
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create a session factory on the test engine."""
    return create_session_factory(engine)


@pytest.fixture
def service(session_factory: async_sessionmaker[AsyncSession]) -> CatalogService:
    """Create a catalog service on the test database."""
    return CatalogService(session_factory)


# ============================================================================
# Sample Data Fixtures
# ============================================================================


@pytest.fixture
def shirt_data() -> ProductCreate:
    """Product payload with two images."""
    return ProductCreate(
        title="Men's Turbine Long Sleeve Tee",
        description="Long sleeve tee in soft combed cotton.",
        price=45,
        stock=50,
        sizes=[Size.S, Size.M, Size.L],
        gender=Gender.MEN,
        tags=["shirt"],
        images=["a.jpg", "b.jpg"],
    )


@pytest.fixture
def jacket_data() -> ProductCreate:
    """Second product payload."""
    return ProductCreate(
        title="Women's Cropped Puffer Jacket",
        description="Cropped puffer with a high collar.",
        price=225,
        stock=85,
        sizes=[Size.XS, Size.S],
        gender=Gender.WOMEN,
        tags=["jacket"],
        images=["jacket-1.jpg"],
    )


# ============================================================================
# API Fixtures
# ============================================================================


@pytest.fixture
def client(tmp_path: Path) -> Generator[TestClient, None, None]:
    """Create a test client backed by its own SQLite database."""
    engine = make_engine(tmp_path / "api.db")
    asyncio.run(create_tables(engine))

    factory = create_session_factory(engine)
    app.dependency_overrides[get_session_factory] = lambda: factory

    yield TestClient(app)

    app.dependency_overrides.clear()
    asyncio.run(engine.dispose())


@pytest.fixture
def product_payload() -> dict:
    """JSON body for creating a product."""
    return {
        "title": "Test Product",
        "slug": "test-product",
        "price": 100,
        "stock": 10,
        "gender": "unisex",
        "sizes": ["M"],
        "images": ["img1.jpg", "img2.jpg"],
    }
