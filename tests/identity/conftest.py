import pytest


@pytest.fixture(scope="session")
def _identity_domain():
    from identity.domain import identity

    return identity


@pytest.fixture(autouse=True)
def run_around_tests(_identity_domain):
    """Push the identity domain context for every test."""
    ctx = _identity_domain.domain_context()
    ctx.push()

    yield

    ctx.pop()
