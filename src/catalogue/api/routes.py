"""FastAPI endpoints for browsing the catalogue and listing products."""

from fastapi import APIRouter, Depends, HTTPException

from catalogue.api.schemas import (
    DescriptionResponse,
    ListProductRequest,
    ProductResponse,
    SuggestDescriptionRequest,
)
from catalogue.product.listing import ImageUpload
from catalogue.product.product import Product, ProductCategory, ProductListing
from identity.api.guards import require_principal
from identity.session.principal import Principal
from storefront import Storefront, get_storefront

product_router = APIRouter(prefix="/products", tags=["products"])
seller_router = APIRouter(prefix="/seller", tags=["seller"])


def _product_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=str(product.id),
        name=product.name,
        image=product.image,
        price=product.price,
        description=product.description,
        category=product.category,
        seller_id=str(product.seller_id) if product.seller_id else None,
        created_at=product.created_at,
    )


# --- Browsing ---


@product_router.get("", response_model=list[ProductResponse])
async def list_products(storefront: Storefront = Depends(get_storefront)) -> list[ProductResponse]:
    return [_product_response(product) for product in storefront.catalogue.all()]


@product_router.get("/categories", response_model=list[str])
async def list_categories() -> list[str]:
    return [category.value for category in ProductCategory]


@product_router.get("/category/{category}", response_model=list[ProductResponse])
async def list_products_in_category(
    category: str, storefront: Storefront = Depends(get_storefront)
) -> list[ProductResponse]:
    if category not in {c.value for c in ProductCategory}:
        raise HTTPException(status_code=404, detail=f"Unknown category '{category}'")
    return [_product_response(product) for product in storefront.catalogue.by_category(category)]


@product_router.get("/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, storefront: Storefront = Depends(get_storefront)) -> ProductResponse:
    return _product_response(storefront.catalogue.get(product_id))


# --- Seller panel ---


@seller_router.post("/products", status_code=201, response_model=ProductResponse)
async def list_product(
    body: ListProductRequest,
    principal: Principal = Depends(require_principal),
    storefront: Storefront = Depends(get_storefront),
) -> ProductResponse:
    listing = ProductListing(
        name=body.name,
        price=body.price,
        description=body.description,
        category=body.category,
    )
    image = ImageUpload(
        filename=body.image.filename,
        content_type=body.image.content_type,
        data=body.image.content(),
    )
    product = await storefront.catalogue.add_product(listing, image)
    return _product_response(product)


@seller_router.post("/descriptions", response_model=DescriptionResponse)
async def suggest_description(
    body: SuggestDescriptionRequest,
    principal: Principal = Depends(require_principal),
    storefront: Storefront = Depends(get_storefront),
) -> DescriptionResponse:
    text = await storefront.catalogue.suggest_description(body.name, body.category, body.keywords)
    return DescriptionResponse(description=text)
