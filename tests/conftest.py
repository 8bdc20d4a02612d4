"""
Pytest configuration and shared fixtures.

Provides:
- AnyIO backend selection
- Tree editor with a deterministic id counter
- Field catalog fixtures
- FastAPI TestClient
- Client variants with a deterministic editor
"""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]

# Add project root to path for imports
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402 (import after path setup)
from fastapi.testclient import TestClient  # noqa: E402 (import after path setup)

from pdl_composer.core.dependencies import get_catalog, get_editor  # noqa: E402
from pdl_composer.domain.catalog import FieldCatalog, default_catalog  # noqa: E402
from pdl_composer.editor import CounterIdGenerator, TreeEditor  # noqa: E402
from pdl_composer.main import create_app  # noqa: E402


# Per AnyIO testing docs: https://anyio.readthedocs.io/en/stable/testing.html
@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def catalog() -> FieldCatalog:
    return default_catalog


@pytest.fixture
def id_generator() -> CounterIdGenerator:
    return CounterIdGenerator(prefix="auto")


@pytest.fixture
def editor(id_generator: CounterIdGenerator, catalog: FieldCatalog) -> TreeEditor:
    """Editor whose new nodes are numbered auto-1, auto-2, ..."""
    return TreeEditor(id_generator=id_generator, catalog=catalog)


@pytest.fixture
def app():
    application = create_app()
    application.dependency_overrides[get_catalog] = lambda: default_catalog
    yield application
    application.dependency_overrides.clear()


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def deterministic_client(app) -> TestClient:
    """Client whose editor generates counter ids (auto-1, auto-2, ...)."""
    app.dependency_overrides[get_editor] = lambda: TreeEditor(
        id_generator=CounterIdGenerator(), catalog=default_catalog
    )
    return TestClient(app)
