"""Shopping Cart aggregate: the lines a shopper intends to buy.

Each line snapshots the product as it was when first added, so later catalogue
changes never alter what is in the cart. The cart is persisted on the device
as a JSON list of those snapshots (see `ordering.cart.engine`).
"""

from decimal import Decimal

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import Float, HasMany, Identifier, Integer, String, Text

from ordering.cart.events import CartCleared, CartItemAdded, CartItemRemoved
from ordering.domain import ordering


def line_total(price: float, quantity: int) -> Decimal:
    return Decimal(str(price)) * quantity


@ordering.entity(part_of="Cart")
class CartItem:
    product_id = Identifier(required=True)
    name = String(required=True, max_length=100)
    image = String(max_length=2048)
    price = Float(required=True, min_value=0.0)
    description = Text()
    category = String(max_length=50)
    quantity = Integer(required=True, min_value=1)

    @property
    def line_total(self) -> Decimal:
        return line_total(self.price, self.quantity)

    def snapshot(self) -> dict:
        return {
            "id": str(self.product_id),
            "name": self.name,
            "image": self.image,
            "price": self.price,
            "description": self.description,
            "category": self.category,
            "quantity": self.quantity,
        }


@ordering.aggregate
class Cart:
    items = HasMany(CartItem)

    @invariant.post
    def one_line_per_product(self):
        product_ids = [str(item.product_id) for item in self.items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"items": ["Each product may appear only once in the cart"]})

    @classmethod
    def from_snapshot(cls, lines: list[dict]) -> "Cart":
        """Rebuild a cart from its persisted form.

        Raises `ValidationError` (or `KeyError`/`TypeError` for structurally
        broken lines) when the snapshot cannot be trusted.
        """
        cart = cls()
        for line in lines:
            cart.add_items(
                CartItem(
                    product_id=str(line["id"]),
                    name=line["name"],
                    image=line.get("image"),
                    price=line["price"],
                    description=line.get("description"),
                    category=line.get("category"),
                    quantity=line["quantity"],
                )
            )
        return cart

    def find(self, product_id) -> CartItem | None:
        return next((item for item in self.items if str(item.product_id) == str(product_id)), None)

    def add(self, product, quantity: int = 1) -> CartItem:
        """Add `quantity` of a product, merging into its existing line if present."""
        if quantity is None or quantity < 1:
            raise ValidationError({"quantity": ["Quantity must be at least 1"]})

        existing = self.find(product.id)
        if existing:
            existing.quantity += quantity
            item = existing
        else:
            item = CartItem(
                product_id=str(product.id),
                name=product.name,
                image=product.image,
                price=product.price,
                description=product.description,
                category=product.category,
                quantity=quantity,
            )
            self.add_items(item)

        self.raise_(
            CartItemAdded(
                cart_id=str(self.id),
                product_id=str(product.id),
                quantity=quantity,
                line_quantity=item.quantity,
            )
        )
        return item

    def remove(self, product_id) -> bool:
        """Drop the line for a product. Returns False when there was none."""
        item = self.find(product_id)
        if item is None:
            return False

        self.remove_items(item)
        self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(product_id)))
        return True

    def deduct(self, lines: list[dict]) -> None:
        """Take ordered lines out of the cart.

        Only the ordered quantities go. A line that grew after the order was
        drafted keeps the difference, and products added since stay untouched.
        """
        for line in lines:
            item = self.find(line["id"])
            if item is None:
                continue
            if item.quantity > int(line["quantity"]):
                item.quantity -= int(line["quantity"])
            else:
                self.remove_items(item)
                self.raise_(CartItemRemoved(cart_id=str(self.id), product_id=str(item.product_id)))

    def clear(self) -> None:
        for item in list(self.items):
            self.remove_items(item)
        self.raise_(CartCleared(cart_id=str(self.id)))

    @property
    def total(self) -> Decimal:
        return sum((item.line_total for item in self.items), Decimal("0"))

    @property
    def item_count(self) -> int:
        return sum(item.quantity for item in self.items)

    def snapshot(self) -> list[dict]:
        return [item.snapshot() for item in self.items]
