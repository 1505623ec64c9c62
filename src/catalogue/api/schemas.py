"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

import base64
import binascii
from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from catalogue.product.product import MAX_DESCRIPTION_LENGTH, ProductCategory

MAX_IMAGE_BYTES = 5 * 1024 * 1024
ACCEPTED_IMAGE_TYPES = ("image/jpeg", "image/jpg", "image/png", "image/webp")

_CATEGORY_NAMES = [category.value for category in ProductCategory]


def _check_category(value: str) -> str:
    if value not in _CATEGORY_NAMES:
        raise ValueError(f"Category must be one of: {', '.join(_CATEGORY_NAMES)}")
    return value


# --- Request Schemas ---


class ImagePayload(BaseModel):
    filename: str = Field(..., min_length=1, max_length=255)
    content_type: str
    data: str = Field(..., description="Base64-encoded image bytes")

    @field_validator("content_type")
    @classmethod
    def content_type_must_be_an_image(cls, value: str) -> str:
        value = value.lower()
        if value not in ACCEPTED_IMAGE_TYPES:
            raise ValueError("Please upload a valid image file (JPEG, PNG, or WebP)")
        return value

    @field_validator("data")
    @classmethod
    def data_must_be_a_small_image(cls, value: str) -> str:
        try:
            decoded = base64.b64decode(value, validate=True)
        except binascii.Error:
            raise ValueError("Image data must be base64-encoded") from None
        if not decoded:
            raise ValueError("Image is empty")
        if len(decoded) > MAX_IMAGE_BYTES:
            raise ValueError("Image size should be less than 5MB")
        return value

    def content(self) -> bytes:
        return base64.b64decode(self.data)


class ListProductRequest(BaseModel):
    model_config = {
        "str_strip_whitespace": True,
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Noise-Cancelling Headphones",
                    "price": 129.99,
                    "description": "Over-ear wireless headphones with 30 hours of battery.",
                    "category": "Accessories",
                    "image": {"filename": "headphones.png", "content_type": "image/png", "data": "iVBORw0KGgo="},
                }
            ]
        }
    }

    name: str = Field(..., min_length=3, max_length=100)
    price: float = Field(..., gt=0)
    description: str = Field(..., min_length=10, max_length=MAX_DESCRIPTION_LENGTH)
    category: str
    image: ImagePayload

    @field_validator("category")
    @classmethod
    def category_must_be_known(cls, value: str) -> str:
        return _check_category(value)


class SuggestDescriptionRequest(BaseModel):
    model_config = {"str_strip_whitespace": True}

    name: str = Field(..., min_length=3, max_length=100)
    category: str
    keywords: list[str] = Field(default_factory=list, max_length=10)

    @field_validator("category")
    @classmethod
    def category_must_be_known(cls, value: str) -> str:
        return _check_category(value)


# --- Response Schemas ---


class ProductResponse(BaseModel):
    id: str
    name: str
    image: str
    price: float
    description: str
    category: str
    seller_id: str | None = None
    created_at: datetime | None = None


class DescriptionResponse(BaseModel):
    description: str
