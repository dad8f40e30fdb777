"""Pydantic request/response schemas for the Catalogue API."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field

# --- Response Schemas ---


class CategoryResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    image_url: str | None = None

    @classmethod
    def from_category(cls, category) -> CategoryResponse:
        return cls(
            id=str(category.id),
            name=category.name,
            slug=category.slug,
            description=category.description,
            image_url=category.image_url,
        )


class ProductResponse(BaseModel):
    id: str
    name: str
    slug: str
    description: str | None = None
    price: float
    original_price: float | None = None
    discount_percent: int = 0
    category_id: str | None = None
    images: list[str] = []
    primary_image: str | None = None
    stock: int
    in_stock: bool
    is_new: bool = False
    is_promo: bool = False
    genetics: str | None = None
    flowering_time: str | None = None
    thc_level: str | None = None
    cbd_level: str | None = None
    yield_info: str | None = None
    is_combo: bool = False
    combo_seed_type: str | None = None
    combo_quantity: int | None = None
    display_order: int = 0
    created_at: datetime | None = None

    @classmethod
    def from_product(cls, product) -> ProductResponse:
        return cls(
            id=str(product.id),
            name=product.name,
            slug=product.slug,
            description=product.description,
            price=product.price,
            original_price=product.original_price,
            discount_percent=product.discount_percent,
            category_id=str(product.category_id) if product.category_id else None,
            images=product.image_list,
            primary_image=product.primary_image,
            stock=product.stock,
            in_stock=product.in_stock,
            is_new=product.is_new,
            is_promo=product.is_promo,
            genetics=product.genetics,
            flowering_time=product.flowering_time,
            thc_level=product.thc_level,
            cbd_level=product.cbd_level,
            yield_info=product.yield_info,
            is_combo=product.is_combo,
            combo_seed_type=product.combo_seed_type,
            combo_quantity=product.combo_quantity if product.is_combo else None,
            display_order=product.display_order,
            created_at=product.created_at,
        )


class ComboDetailResponse(BaseModel):
    combo: ProductResponse
    eligible_seeds: list[ProductResponse]


class AboutResponse(BaseModel):
    title: str
    content: str | None = None
    mission: str | None = None
    vision: str | None = None
    values: str | None = None
    image_url: str | None = None


class ProductIdResponse(BaseModel):
    product_id: str


class CategoryIdResponse(BaseModel):
    category_id: str


class StatusResponse(BaseModel):
    status: str = "ok"


# --- Request Schemas ---


class CreateProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Gorilla Glue Auto",
                    "description": "Automatic flowering, dense resin production.",
                    "price": 89.9,
                    "original_price": 109.9,
                    "category_id": "cat-automaticas",
                    "images": ["https://cdn.example.com/gorilla-glue.jpg"],
                    "stock": 25,
                    "is_new": True,
                    "genetics": "Indica dominant",
                    "flowering_time": "8-9 weeks",
                }
            ]
        }
    }

    name: str = Field(..., max_length=255)
    slug: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float = Field(..., gt=0)
    original_price: float | None = Field(None, ge=0)
    category_id: str | None = None
    images: list[str] = []
    stock: int = Field(0, ge=0)
    is_new: bool = False
    is_promo: bool = False
    genetics: str | None = Field(None, max_length=100)
    flowering_time: str | None = Field(None, max_length=100)
    thc_level: str | None = Field(None, max_length=50)
    cbd_level: str | None = Field(None, max_length=50)
    yield_info: str | None = Field(None, max_length=100)
    is_combo: bool = False
    combo_seed_type: str | None = Field(None, max_length=120)
    combo_quantity: int = Field(3, ge=1)
    display_order: int = 0


class UpdateProductRequest(BaseModel):
    """Partial update. Only fields present in the payload change; null clears a field."""

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "price": 79.9,
                    "is_promo": True,
                    "original_price": None,
                }
            ]
        }
    }

    name: str | None = Field(None, max_length=255)
    slug: str | None = Field(None, max_length=255)
    description: str | None = None
    price: float | None = Field(None, gt=0)
    original_price: float | None = Field(None, ge=0)
    category_id: str | None = None
    images: list[str] | None = None
    stock: int | None = Field(None, ge=0)
    is_new: bool | None = None
    is_promo: bool | None = None
    genetics: str | None = Field(None, max_length=100)
    flowering_time: str | None = Field(None, max_length=100)
    thc_level: str | None = Field(None, max_length=50)
    cbd_level: str | None = Field(None, max_length=50)
    yield_info: str | None = Field(None, max_length=100)
    is_combo: bool | None = None
    combo_seed_type: str | None = Field(None, max_length=120)
    combo_quantity: int | None = Field(None, ge=1)
    display_order: int | None = None


class CreateCategoryRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Automáticas",
                    "description": "Autoflowering seeds",
                    "image_url": "https://cdn.example.com/automaticas.jpg",
                }
            ]
        }
    }

    name: str = Field(..., max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)


class UpdateCategoryRequest(BaseModel):
    name: str | None = Field(None, max_length=100)
    slug: str | None = Field(None, max_length=120)
    description: str | None = None
    image_url: str | None = Field(None, max_length=500)


class UpdateAboutRequest(BaseModel):
    title: str | None = Field(None, max_length=255)
    content: str | None = None
    mission: str | None = None
    vision: str | None = None
    values: str | None = None
    image_url: str | None = Field(None, max_length=500)
