"""Shared BDD fixtures and step definitions for the Catalogue domain."""

import asyncio

import pytest
from pytest_bdd import given, parsers


@pytest.fixture
def outcome():
    return {}


@given(parsers.cfparse('the catalogue contains "{name}" in "{category}" listed on "{day}"'))
def catalogue_contains(object_store, product_catalogue, product_record, name, category, day):
    object_store.seed("products", [product_record(name=name, category=category, created_at=f"{day}T09:00:00+00:00")])
    asyncio.run(product_catalogue.load())


@given("the seller is signed in")
def seller_signed_in(signed_in):
    return signed_in


@given("image uploads fail")
def uploads_fail(blob_store):
    blob_store.configure(should_succeed=False, failure_reason="bucket unavailable")
