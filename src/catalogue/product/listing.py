"""The product catalogue: the in-memory view of every listed product.

Loaded once at startup, newest first. Listing a product writes through to the
object store and prepends it locally; other clients' listings only show up
after `refresh()`.
"""

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import uuid4

import structlog
from protean.exceptions import ObjectNotFoundError, ValidationError

from catalogue.descriptions.writer_port import DescriptionWriterPort
from catalogue.product.product import MAX_DESCRIPTION_LENGTH, Product, ProductCategory, ProductListing
from identity.session.state import SessionState
from shared.errors import SessionRequired
from shared.storage import BlobStorePort, ObjectStorePort, OrderSpec

logger = structlog.get_logger(__name__)

PRODUCTS = "products"
IMAGE_PREFIX = "products"

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


@dataclass(frozen=True)
class ImageUpload:
    filename: str
    content_type: str
    data: bytes


def image_path(filename: str) -> str:
    """Blob path for an uploaded image; unique even when filenames repeat."""
    safe = _UNSAFE_FILENAME_CHARS.sub("-", filename).strip("-") or "image"
    return f"{IMAGE_PREFIX}/{uuid4().hex}-{safe}"


class ProductCatalogue:
    def __init__(
        self,
        store: ObjectStorePort,
        blobs: BlobStorePort,
        session: SessionState,
        writer: DescriptionWriterPort,
    ) -> None:
        self._store = store
        self._blobs = blobs
        self._session = session
        self._writer = writer
        self._products: list[Product] = []

    async def load(self) -> list[Product]:
        """Replace the cached catalogue with the store's contents, newest first.

        Records that no longer validate are skipped and logged.
        """
        records = await self._store.list_all(PRODUCTS, order_by=OrderSpec("created_at", descending=True))

        products = []
        for record in records:
            try:
                products.append(Product.from_record(record))
            except (ValidationError, KeyError, ValueError) as exc:
                logger.warning("Skipping unreadable product record", product_id=record.get("id"), error=str(exc))

        self._products = products
        logger.info("Catalogue loaded", product_count=len(products))
        return self.all()

    async def refresh(self) -> list[Product]:
        return await self.load()

    def all(self) -> list[Product]:
        return list(self._products)

    def get(self, product_id: str) -> Product:
        for product in self._products:
            if str(product.id) == str(product_id):
                return product
        raise ObjectNotFoundError({"_entity": f"Product {product_id} not found"})

    def by_category(self, category: str | ProductCategory) -> list[Product]:
        if isinstance(category, ProductCategory):
            category = category.value
        return [product for product in self._products if product.category == category]

    def append(self, product: Product) -> None:
        """Add a product to the front of the catalogue, replacing any with the same id."""
        self._products = [p for p in self._products if str(p.id) != str(product.id)]
        self._products.insert(0, product)

    async def add_product(self, listing: ProductListing, image: ImageUpload) -> Product:
        """Host the image, store the product record and show it in the catalogue.

        Nothing is cached locally unless every step succeeds. A failed insert
        can leave the uploaded image orphaned in the blob store.
        """
        if not self._session.is_authenticated:
            raise SessionRequired("list a product")
        seller_id = str(self._session.principal.user_id)

        reference = await self._blobs.upload(image_path(image.filename), image.data, image.content_type)
        image_url = await self._blobs.get_public_url(reference)

        listed_at = datetime.now(UTC)
        record = {
            "name": listing.name,
            "image": image_url,
            "price": listing.price,
            "description": listing.description,
            "category": listing.category,
            "seller_id": seller_id,
            "created_at": listed_at.isoformat(),
        }
        product_id = await self._store.insert(PRODUCTS, record)

        product = Product.from_listing(listing, product_id, image_url, seller_id=seller_id, created_at=listed_at)
        self.append(product)

        logger.info("Product listed", product_id=product_id, seller_id=seller_id, category=product.category)
        return product

    async def suggest_description(self, name: str, category: str, keywords: list[str] | None = None) -> str:
        """Draft a description for the seller form; never longer than a product allows."""
        ProductCategory.parse(category)
        text = await self._writer.write(name, category, keywords)
        return text[:MAX_DESCRIPTION_LENGTH].strip()
