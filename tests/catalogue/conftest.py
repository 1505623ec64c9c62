import pytest


@pytest.fixture(scope="session")
def _catalogue_domain():
    from catalogue.domain import catalogue

    return catalogue


@pytest.fixture(autouse=True)
def run_around_tests(_catalogue_domain):
    """Push the catalogue domain context for every test."""
    ctx = _catalogue_domain.domain_context()
    ctx.push()

    yield

    ctx.pop()


@pytest.fixture
def object_store():
    from shared.storage import InMemoryObjectStore

    return InMemoryObjectStore()


@pytest.fixture
def blob_store():
    from shared.storage import InMemoryBlobStore

    return InMemoryBlobStore()


@pytest.fixture
def writer():
    from catalogue.descriptions import TemplateDescriptionWriter

    return TemplateDescriptionWriter()


@pytest.fixture
def identity_provider():
    from identity.provider import FakeIdentityProvider

    return FakeIdentityProvider()


@pytest.fixture
def session(identity_provider):
    from identity.session.state import SessionState

    state = SessionState(identity_provider)
    state.start()
    yield state
    state.close()


@pytest.fixture
def signed_in(identity_provider, session):
    """Sign a seller in and return their principal."""
    import asyncio

    identity_provider.register("seller@shop.test", "secret12")
    return asyncio.run(session.login("seller@shop.test", "secret12"))


@pytest.fixture
def product_catalogue(object_store, blob_store, session, writer):
    from catalogue.product.listing import ProductCatalogue

    return ProductCatalogue(object_store, blob_store, session, writer)
