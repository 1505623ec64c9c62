"""Product aggregate and the seller's listing submission."""

import re
from datetime import UTC, datetime
from enum import Enum

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, Identifier, String, Text

from catalogue.domain import catalogue

MAX_DESCRIPTION_LENGTH = 1000

_IMAGE_URL = re.compile(r"^https?://\S+$")


class ProductCategory(Enum):
    """The fixed set of categories a product can be listed under."""

    TVS_AND_HOME_THEATRES = "TVs and Home Theatres"
    HOME_APPLIANCES = "Home Appliances"
    MOBILES = "Mobiles"
    ACCESSORIES = "Accessories"
    LAPTOPS = "Laptops"
    CAMERAS = "Cameras"

    @classmethod
    def parse(cls, value: str) -> "ProductCategory":
        for category in cls:
            if category.value == value:
                return category
        raise ValidationError({"category": [f"Unknown category '{value}'"]})


def _parse_timestamp(value) -> datetime | None:
    if value is None or isinstance(value, datetime):
        moment = value
    else:
        moment = datetime.fromisoformat(str(value))
    if moment is not None and moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return moment


@catalogue.value_object(part_of="Product")
class ProductListing:
    """What a seller submits to list a product, before the image is hosted."""

    name: String(required=True, max_length=100)
    price: Float(required=True, min_value=0.0)
    description: Text(required=True)
    category: String(required=True, choices=ProductCategory)

    @invariant.post
    def description_within_limit(self):
        if self.description and len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                {"description": [f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"]}
            )


@catalogue.aggregate
class Product:
    """A sellable item. Listed once and then only ever read."""

    name: String(required=True, max_length=100)
    image: String(required=True, max_length=2048)
    price: Float(required=True, min_value=0.0)
    description: Text(required=True)
    category: String(required=True, choices=ProductCategory)
    seller_id: Identifier()
    created_at: DateTime()

    @invariant.post
    def description_within_limit(self):
        if self.description and len(self.description) > MAX_DESCRIPTION_LENGTH:
            raise ValidationError(
                {"description": [f"Description cannot exceed {MAX_DESCRIPTION_LENGTH} characters"]}
            )

    @invariant.post
    def image_must_be_a_url(self):
        if self.image and not _IMAGE_URL.match(self.image):
            raise ValidationError({"image": ["Image must be an http(s) URL"]})

    @classmethod
    def from_record(cls, record: dict) -> "Product":
        """Rebuild a product from a stored record (which carries its own id)."""
        return cls(
            id=str(record["id"]),
            name=record.get("name"),
            image=record.get("image"),
            price=record.get("price"),
            description=record.get("description"),
            category=record.get("category"),
            seller_id=record.get("seller_id"),
            created_at=_parse_timestamp(record.get("created_at")),
        )

    @classmethod
    def from_listing(
        cls,
        listing: ProductListing,
        product_id: str,
        image_url: str,
        seller_id: str | None = None,
        created_at: datetime | None = None,
    ) -> "Product":
        from catalogue.product.events import ProductListed

        product = cls(
            id=product_id,
            name=listing.name,
            image=image_url,
            price=listing.price,
            description=listing.description,
            category=listing.category,
            seller_id=seller_id,
            created_at=created_at or datetime.now(UTC),
        )
        product.raise_(
            ProductListed(
                product_id=product.id,
                seller_id=seller_id,
                name=product.name,
                category=product.category,
                price=product.price,
                listed_at=product.created_at,
            )
        )
        return product

    def to_record(self) -> dict:
        """Stored shape of the product, without its id."""
        return {
            "name": self.name,
            "image": self.image,
            "price": self.price,
            "description": self.description,
            "category": self.category,
            "seller_id": str(self.seller_id) if self.seller_id else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
