"""Domain events for the Product aggregate."""

from protean.fields import DateTime, Float, Identifier, String

from catalogue.domain import catalogue


@catalogue.event(part_of="Product")
class ProductListed:
    """A seller listed a new product in the catalogue."""

    __version__ = 1

    product_id: Identifier(required=True)
    seller_id: Identifier()
    name: String(required=True)
    category: String(required=True)
    price: Float(required=True)
    listed_at: DateTime(required=True)
