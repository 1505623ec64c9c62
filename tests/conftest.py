import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Initialize every domain once. Each test package pushes the context of the
    domain it exercises.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env

    from storefront import init_domains

    init_domains()


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = Path(item.fspath)

        if "/domain/" in str(test_path):
            item.add_marker(pytest.mark.domain)
        elif "/application/" in str(test_path):
            item.add_marker(pytest.mark.application)
        elif "/bdd/" in str(test_path):
            item.add_marker(pytest.mark.bdd)
        elif "/integration/" in str(test_path):
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


# ---------------------------------------------------------------------------
# Storefront wiring shared by application and API tests
# ---------------------------------------------------------------------------
@pytest.fixture
def settings():
    from shared.config import Settings

    return Settings(
        _env_file=None,
        SELLER_EMAIL="seller@shop.test",
        SELLER_WHATSAPP="+15550001111",
        ALLOWED_ORIGINS="http://localhost:3000",
    )


@pytest.fixture
def product_record():
    """Factory for stored product records."""
    counter = iter(range(1, 10_000))

    def _make(**overrides):
        n = next(counter)
        record = {
            "id": f"prod-{n}",
            "name": f"Product {n}",
            "image": f"https://storage.local/product-images/products/{n}.png",
            "price": 10.0,
            "description": "A sturdy, well reviewed gadget.",
            "category": "Accessories",
            "seller_id": "seller-1",
            "created_at": f"2024-01-{n:02d}T10:00:00+00:00",
        }
        record.update(overrides)
        return record

    return _make


@pytest.fixture
def collaborators():
    from storefront import Collaborators

    return Collaborators()


@pytest.fixture
def storefront(collaborators, settings):
    from storefront import Storefront

    return Storefront(collaborators, settings)


@pytest.fixture
def client(storefront, settings):
    """TestClient over the full app; the lifespan starts and closes `storefront`."""
    from app import create_app
    from fastapi.testclient import TestClient

    with TestClient(create_app(storefront, settings)) as test_client:
        yield test_client
