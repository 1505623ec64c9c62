"""BDD tests for listing and browsing products."""

import asyncio

from catalogue.product.listing import ImageUpload
from catalogue.product.product import ProductListing
from pytest_bdd import parsers, scenarios, then, when
from shared.errors import BlobStoreError, SessionRequired

scenarios("features/product_listing.feature")


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the seller lists "{name}" in "{category}" for {price:f} with image "{filename}"'))
def seller_lists(product_catalogue, outcome, name, category, price, filename):
    listing = ProductListing(
        name=name,
        price=price,
        description=f"{name} for everyday use.",
        category=category,
    )
    image = ImageUpload(filename=filename, content_type="image/webp", data=b"RIFF....WEBP")
    try:
        outcome["product"] = asyncio.run(product_catalogue.add_product(listing, image))
    except (SessionRequired, BlobStoreError) as exc:
        outcome["error"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('the catalogue order is "{names}"'))
def catalogue_order(product_catalogue, names):
    assert [p.name for p in product_catalogue.all()] == [n.strip() for n in names.split(",")]


@then(parsers.cfparse('the "{category}" category lists "{name}"'))
def category_lists(product_catalogue, category, name):
    assert [p.name for p in product_catalogue.by_category(category)] == [name]


@then(parsers.cfparse('the "{category}" category is empty'))
def category_empty(product_catalogue, category):
    assert product_catalogue.by_category(category) == []


@then(parsers.cfparse('the image "{filename}" was uploaded'))
def image_uploaded(blob_store, filename):
    (path,) = blob_store.blobs
    assert path.endswith(f"-{filename}")


@then("listing is refused until sign-in")
def listing_refused(outcome):
    assert isinstance(outcome.get("error"), SessionRequired)


@then("listing fails with an upload error")
def listing_failed(outcome):
    assert isinstance(outcome.get("error"), BlobStoreError)


@then("no image was uploaded")
def nothing_uploaded(blob_store):
    assert blob_store.blobs == {}
