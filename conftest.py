"""Root conftest: PostgreSQL fixtures using Testcontainers.

Integration tests seed a real PostgreSQL container through the SQLAlchemy
insertion callbacks. They are skipped unless SEEDING_USE_TESTCONTAINERS=true.
"""
from __future__ import annotations

import os
from collections.abc import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from testcontainers.postgres import PostgresContainer


def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers to suppress PytestUnknownMarkWarning."""
    config.addinivalue_line("markers", "integration: Requires real infrastructure containers")


def pytest_collection_modifyitems(
    config: pytest.Config,
    items: list[pytest.Item],
) -> None:
    """Skip container-backed tests unless Testcontainers are enabled."""
    skip_no_containers = pytest.mark.skip(reason="Testcontainers disabled, set SEEDING_USE_TESTCONTAINERS=true")
    use_testcontainers = os.getenv("SEEDING_USE_TESTCONTAINERS", "false").lower() == "true"

    for item in items:
        if "integration" in item.keywords and not use_testcontainers:
            item.add_marker(skip_no_containers)


# ---------------------------------------------------------------------------
# Container fixtures (session-scoped, started once)
# ---------------------------------------------------------------------------


@pytest.fixture(scope="session")
def postgres_container() -> Generator[PostgresContainer, None, None]:
    """Start a real PostgreSQL container for the entire test session."""
    with PostgresContainer("postgres:16-alpine") as postgres:
        yield postgres


# ---------------------------------------------------------------------------
# Database engine fixture
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def pg_engine(postgres_container: PostgresContainer) -> AsyncGenerator[object, None]:
    """Async SQLAlchemy engine with empty items / customers / orders tables.

    Tables are recreated per test so generated ids start at 1.
    """
    from sqlalchemy import text
    from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

    url = postgres_container.get_connection_url().replace(
        "postgresql+psycopg2://", "postgresql+asyncpg://"
    )
    engine: AsyncEngine = create_async_engine(url, echo=False, pool_pre_ping=True)

    async with engine.begin() as conn:
        await conn.execute(text("DROP TABLE IF EXISTS orders, customers, items"))
        await conn.execute(
            text("""
                CREATE TABLE items (
                    id BIGSERIAL PRIMARY KEY,
                    name TEXT NOT NULL UNIQUE,
                    price DOUBLE PRECISION NOT NULL
                )
            """)
        )
        await conn.execute(
            text("""
                CREATE TABLE customers (
                    id BIGSERIAL PRIMARY KEY,
                    name TEXT NOT NULL,
                    email TEXT NOT NULL UNIQUE
                )
            """)
        )
        await conn.execute(
            text("""
                CREATE TABLE orders (
                    id BIGINT PRIMARY KEY,
                    customer_id BIGINT NOT NULL REFERENCES customers (id),
                    item_id BIGINT NOT NULL REFERENCES items (id),
                    quantity INTEGER NOT NULL,
                    purchased_at TIMESTAMP NOT NULL
                )
            """)
        )

    yield engine
    await engine.dispose()
