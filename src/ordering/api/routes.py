"""FastAPI endpoints for the cart, checkout and order history."""

from fastapi import APIRouter, Depends, HTTPException

from identity.api.guards import require_principal
from identity.session.principal import Principal
from ordering.api.schemas import (
    AddToCartRequest,
    CartLineResponse,
    CartResponse,
    CheckoutRequest,
    OrderLineResponse,
    OrderResponse,
)
from ordering.cart.engine import CartEngine
from ordering.checkout.checkout import CheckoutForm
from ordering.order.order import Order
from storefront import Storefront, get_storefront

cart_router = APIRouter(prefix="/cart", tags=["cart"])
checkout_router = APIRouter(prefix="/checkout", tags=["checkout"])
order_router = APIRouter(prefix="/orders", tags=["orders"])


def _cart_response(engine: CartEngine) -> CartResponse:
    cart = engine.cart
    return CartResponse(
        items=[
            CartLineResponse(
                product_id=str(item.product_id),
                name=item.name,
                image=item.image,
                price=item.price,
                category=item.category,
                quantity=item.quantity,
                line_total=float(item.line_total),
            )
            for item in cart.items
        ],
        item_count=cart.item_count,
        total=float(engine.get_cart_total()),
    )


def _order_response(order: Order) -> OrderResponse:
    return OrderResponse(
        id=str(order.id),
        customer_name=order.customer_name,
        customer_email=order.customer_email,
        customer_phone=order.customer_phone,
        delivery_address=order.delivery_address,
        items=[
            OrderLineResponse(
                product_id=str(item.product_id),
                name=item.name,
                price=item.price,
                quantity=item.quantity,
                line_total=float(item.line_total),
            )
            for item in order.items
        ],
        total=order.total,
        payment_method=order.payment_method,
        order_date=order.order_date,
        shipped=order.shipped,
        user_id=str(order.user_id) if order.user_id else None,
    )


# --- Cart endpoints ---


@cart_router.get("", response_model=CartResponse)
async def view_cart(storefront: Storefront = Depends(get_storefront)) -> CartResponse:
    return _cart_response(storefront.cart)


@cart_router.post("/items", response_model=CartResponse)
async def add_to_cart(body: AddToCartRequest, storefront: Storefront = Depends(get_storefront)) -> CartResponse:
    product = storefront.catalogue.get(body.product_id)
    storefront.cart.add_to_cart(product, body.quantity)
    return _cart_response(storefront.cart)


@cart_router.delete("/items/{product_id}", response_model=CartResponse)
async def remove_from_cart(product_id: str, storefront: Storefront = Depends(get_storefront)) -> CartResponse:
    storefront.cart.remove_from_cart(product_id)
    return _cart_response(storefront.cart)


@cart_router.delete("", response_model=CartResponse)
async def clear_cart(storefront: Storefront = Depends(get_storefront)) -> CartResponse:
    storefront.cart.clear_cart()
    return _cart_response(storefront.cart)


# --- Checkout endpoint ---


@checkout_router.post("", status_code=201, response_model=OrderResponse)
async def place_order(
    body: CheckoutRequest,
    principal: Principal = Depends(require_principal),
    storefront: Storefront = Depends(get_storefront),
) -> OrderResponse:
    if storefront.checkout_busy:
        raise HTTPException(status_code=409, detail="An order is already being placed")

    form = CheckoutForm(
        customer_name=body.name,
        customer_email=body.email,
        customer_phone=body.phone,
        delivery_address=body.address,
        payment_method=body.payment_method,
    )
    storefront.checkout_busy = True
    try:
        order = await storefront.checkout.place_order(form)
    finally:
        storefront.checkout_busy = False
    return _order_response(order)


# --- Order endpoints ---


@order_router.get("", response_model=list[OrderResponse])
async def list_orders(
    principal: Principal = Depends(require_principal),
    storefront: Storefront = Depends(get_storefront),
) -> list[OrderResponse]:
    return [_order_response(order) for order in storefront.orders.list_orders()]


@order_router.get("/mine", response_model=list[OrderResponse])
async def my_orders(
    principal: Principal = Depends(require_principal),
    storefront: Storefront = Depends(get_storefront),
) -> list[OrderResponse]:
    return [_order_response(order) for order in storefront.orders.my_orders()]


@order_router.put("/{order_id}/shipped", response_model=OrderResponse | None)
async def toggle_shipped(
    order_id: str,
    principal: Principal = Depends(require_principal),
    storefront: Storefront = Depends(get_storefront),
) -> OrderResponse | None:
    order = await storefront.orders.toggle_order_shipped(order_id)
    return _order_response(order) if order is not None else None
