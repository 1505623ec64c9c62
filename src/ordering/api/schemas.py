"""Pydantic request/response schemas for the cart, checkout and orders API."""

from __future__ import annotations

import re
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from identity.shared.email import check_email_address

# --- Cart ---


class AddToCartRequest(BaseModel):
    product_id: str
    quantity: int = Field(1, ge=1)


class CartLineResponse(BaseModel):
    product_id: str
    name: str
    image: str | None = None
    price: float
    category: str | None = None
    quantity: int
    line_total: float


class CartResponse(BaseModel):
    items: list[CartLineResponse]
    item_count: int
    total: float


# --- Checkout ---


class CheckoutRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Asha Verma",
                    "email": "asha@example.com",
                    "phone": "+91 98765 43210",
                    "address": "12 Park Street, Kolkata 700016",
                    "payment_method": "COD",
                }
            ]
        }
    }

    name: str = Field(..., min_length=2, max_length=100)
    email: str = Field(..., max_length=254)
    phone: str = Field(..., min_length=10, max_length=20)
    address: str = Field(..., min_length=10)
    payment_method: str = "COD"

    @field_validator("email")
    @classmethod
    def email_must_be_valid(cls, value: str) -> str:
        return check_email_address(value.strip())

    @field_validator("phone")
    @classmethod
    def phone_must_have_digits(cls, value: str) -> str:
        if len(re.sub(r"\D", "", value)) < 10:
            raise ValueError("Please enter a valid phone number.")
        return value.strip()

    @field_validator("payment_method")
    @classmethod
    def payment_must_be_cash_on_delivery(cls, value: str) -> str:
        if value != "COD":
            raise ValueError("Only Cash on Delivery is available")
        return value


# --- Orders ---


class OrderLineResponse(BaseModel):
    product_id: str
    name: str
    price: float
    quantity: int
    line_total: float


class OrderResponse(BaseModel):
    id: str
    customer_name: str
    customer_email: str
    customer_phone: str
    delivery_address: str
    items: list[OrderLineResponse]
    total: float
    payment_method: str
    order_date: datetime
    shipped: bool
    user_id: str | None = None
