"""Fixtures for cross-domain storefront tests.

The app pushes the right domain context per request; tests that drive the
storefront directly get the ordering context, which covers the cart and
order book they read back.
"""

import pytest


@pytest.fixture(autouse=True)
def ordering_ctx():
    from ordering.domain import ordering

    with ordering.domain_context():
        yield ordering
