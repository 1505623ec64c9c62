"""Shared BDD fixtures and step definitions for the Identity domain."""

import pytest
from identity.provider import FakeIdentityProvider
from identity.session.state import SessionState
from pytest_bdd import given, parsers


@pytest.fixture
def provider():
    return FakeIdentityProvider(resolve_on_subscribe=False)


@pytest.fixture
def session(provider):
    state = SessionState(provider)
    state.start()
    yield state
    state.close()


@pytest.fixture
def outcome():
    """Mutable holder for results and errors captured by When steps."""
    return {}


@given("the identity provider has not answered yet")
def provider_pending(session):
    pass


@given("the identity provider reports no saved session")
def provider_reports_nobody(provider, session):
    provider.resolve(None)


@given(parsers.cfparse('a registered shopper "{email}" with password "{password}"'))
def registered_shopper(provider, email, password):
    provider.register(email, password)
