"""Shared fixtures for the seeding test suite."""
from __future__ import annotations

from pathlib import Path

import pytest

from sample_records import CUSTOMER_IDS, ITEM_IDS, ORDER_IDS, MockTable
from seeding import DatabaseSeeder


FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(scope="session")
def fixtures_dir() -> Path:
    """Directory holding the YAML fixture files."""
    return FIXTURES_DIR


@pytest.fixture(autouse=True)
def _isolate_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep host variables from leaking into ENV tag resolution."""
    monkeypatch.delenv("DEV_EMAIL", raising=False)
    monkeypatch.delenv("SEEDING_FIXTURES_DIR", raising=False)
    monkeypatch.delenv("SEEDING_TEST_MODE", raising=False)


@pytest.fixture
def seeder(fixtures_dir: Path) -> DatabaseSeeder:
    """A fresh seeding session rooted at the fixtures directory."""
    return DatabaseSeeder(base_dir=fixtures_dir)


@pytest.fixture
def items_table() -> MockTable:
    return MockTable(ITEM_IDS)


@pytest.fixture
def customers_table() -> MockTable:
    return MockTable(CUSTOMER_IDS)


@pytest.fixture
def orders_table() -> MockTable:
    return MockTable(ORDER_IDS, key=lambda order: str(order.id))
