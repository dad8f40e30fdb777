"""FastAPI endpoints for the Catalogue: public browsing and back-office management."""

import json

from fastapi import APIRouter, Depends, HTTPException
from protean.utils.globals import current_domain

from storefront.api.deps import admin_user_id
from storefront.catalogue import browsing
from storefront.catalogue.about.about import UpdateAboutContent, current_about
from storefront.catalogue.api.schemas import (
    AboutResponse,
    CategoryIdResponse,
    CategoryResponse,
    ComboDetailResponse,
    CreateCategoryRequest,
    CreateProductRequest,
    ProductIdResponse,
    ProductResponse,
    StatusResponse,
    UpdateAboutRequest,
    UpdateCategoryRequest,
    UpdateProductRequest,
)
from storefront.catalogue.category.management import CreateCategory, DeleteCategory, UpdateCategory
from storefront.catalogue.product.management import CreateProduct, DeleteProduct, UpdateProduct

catalogue_router = APIRouter(tags=["catalogue"])
admin_catalogue_router = APIRouter(prefix="/admin", tags=["admin"], dependencies=[Depends(admin_user_id)])


# --- Public endpoints ---


@catalogue_router.get("/categories", response_model=list[CategoryResponse])
async def list_categories() -> list[CategoryResponse]:
    return [CategoryResponse.from_category(c) for c in browsing.list_categories()]


@catalogue_router.get("/products", response_model=list[ProductResponse])
async def list_products(
    category: str | None = None,
    search: str | None = None,
    sort: str | None = None,
) -> list[ProductResponse]:
    products = browsing.list_products(category_slug=category, search=search, sort=sort)
    return [ProductResponse.from_product(p) for p in products]


@catalogue_router.get("/products/featured", response_model=list[ProductResponse])
async def featured_products() -> list[ProductResponse]:
    return [ProductResponse.from_product(p) for p in browsing.featured_products()]


@catalogue_router.get("/products/{slug}", response_model=ProductResponse)
async def product_detail(slug: str) -> ProductResponse:
    return ProductResponse.from_product(browsing.product_by_slug(slug))


@catalogue_router.get("/combos/{slug}", response_model=ComboDetailResponse)
async def combo_detail(slug: str) -> ComboDetailResponse:
    combo = browsing.combo_by_slug(slug)
    return ComboDetailResponse(
        combo=ProductResponse.from_product(combo),
        eligible_seeds=[ProductResponse.from_product(p) for p in browsing.eligible_seeds(combo)],
    )


@catalogue_router.get("/about", response_model=AboutResponse)
async def about() -> AboutResponse:
    content = current_about()
    if content is None:
        raise HTTPException(status_code=404, detail="About content has not been written yet")
    return AboutResponse(
        title=content.title,
        content=content.content,
        mission=content.mission,
        vision=content.vision,
        values=content.values,
        image_url=content.image_url,
    )


# --- Product management ---


@admin_catalogue_router.post("/products", status_code=201, response_model=ProductIdResponse)
async def create_product(body: CreateProductRequest) -> ProductIdResponse:
    command = CreateProduct(
        name=body.name,
        slug=body.slug,
        description=body.description,
        price=body.price,
        original_price=body.original_price,
        category_id=body.category_id,
        images=json.dumps(body.images),
        stock=body.stock,
        is_new=body.is_new,
        is_promo=body.is_promo,
        genetics=body.genetics,
        flowering_time=body.flowering_time,
        thc_level=body.thc_level,
        cbd_level=body.cbd_level,
        yield_info=body.yield_info,
        is_combo=body.is_combo,
        combo_seed_type=body.combo_seed_type,
        combo_quantity=body.combo_quantity,
        display_order=body.display_order,
    )
    result = current_domain.process(command, asynchronous=False)
    return ProductIdResponse(product_id=result)


@admin_catalogue_router.put("/products/{product_id}", response_model=StatusResponse)
async def update_product(product_id: str, body: UpdateProductRequest) -> StatusResponse:
    # Only fields sent by the client are applied, so an explicit null clears a field
    changes = body.model_dump(exclude_unset=True)
    command = UpdateProduct(product_id=product_id, changes=json.dumps(changes))
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_catalogue_router.delete("/products/{product_id}", response_model=StatusResponse)
async def delete_product(product_id: str) -> StatusResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return StatusResponse()


# --- Category management ---


@admin_catalogue_router.post("/categories", status_code=201, response_model=CategoryIdResponse)
async def create_category(body: CreateCategoryRequest) -> CategoryIdResponse:
    command = CreateCategory(
        name=body.name,
        slug=body.slug,
        description=body.description,
        image_url=body.image_url,
    )
    result = current_domain.process(command, asynchronous=False)
    return CategoryIdResponse(category_id=result)


@admin_catalogue_router.put("/categories/{category_id}", response_model=StatusResponse)
async def update_category(category_id: str, body: UpdateCategoryRequest) -> StatusResponse:
    command = UpdateCategory(
        category_id=category_id,
        name=body.name,
        slug=body.slug,
        description=body.description,
        image_url=body.image_url,
    )
    current_domain.process(command, asynchronous=False)
    return StatusResponse()


@admin_catalogue_router.delete("/categories/{category_id}", response_model=StatusResponse)
async def delete_category(category_id: str) -> StatusResponse:
    current_domain.process(DeleteCategory(category_id=category_id), asynchronous=False)
    return StatusResponse()


# --- About page ---


@admin_catalogue_router.put("/about", response_model=StatusResponse)
async def update_about(body: UpdateAboutRequest) -> StatusResponse:
    current_domain.process(UpdateAboutContent(**body.model_dump()), asynchronous=False)
    return StatusResponse()
