"""Pydantic request schemas for the Products API."""

from __future__ import annotations

import json

from pydantic import BaseModel, Field

from petshop.catalogue.product import AnimalSection, ProductCategory, ProductState


class ProductImageRequest(BaseModel):
    url: str = Field(..., max_length=500)
    alt_text: str | None = Field(None, max_length=255)
    is_primary: bool = False
    display_order: int | None = Field(None, ge=0)


class ProductRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "name": "Feather Wand Cat Toy",
                    "description": "Interactive wand with replaceable feathers.",
                    "brand": "Whiskerworks",
                    "price": 12.5,
                    "original_price": 15.0,
                    "stock_quantity": 40,
                    "low_stock_threshold": 10,
                    "section": "Cats",
                    "category": "Toys",
                    "state": "NewProduct",
                    "images": [{"url": "https://cdn.example.com/wand.jpg", "is_primary": True}],
                }
            ]
        }
    }

    name: str = Field(..., min_length=1, max_length=200)
    description: str | None = None
    brand: str | None = Field(None, max_length=100)
    price: float = Field(..., gt=0)
    original_price: float | None = Field(None, gt=0)
    stock_quantity: int = Field(0, ge=0)
    low_stock_threshold: int | None = Field(None, ge=0)
    section: AnimalSection
    category: ProductCategory
    state: ProductState | None = None
    images: list[ProductImageRequest] | None = None

    def command_kwargs(self) -> dict:
        return {
            "name": self.name,
            "description": self.description,
            "brand": self.brand,
            "price": self.price,
            "original_price": self.original_price,
            "stock_quantity": self.stock_quantity,
            "low_stock_threshold": self.low_stock_threshold,
            "section": self.section.value,
            "category": self.category.value,
            "state": self.state.value if self.state else None,
            "images": json.dumps([img.model_dump() for img in self.images]) if self.images is not None else None,
        }
