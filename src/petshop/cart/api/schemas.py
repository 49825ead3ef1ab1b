"""Pydantic request schemas for the Cart API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class AddToCartRequest(BaseModel):
    model_config = {"json_schema_extra": {"examples": [{"product_id": "prod-001", "quantity": 2}]}}

    product_id: str
    quantity: int = Field(1, ge=1, le=100)


class UpdateCartItemRequest(BaseModel):
    quantity: int = Field(..., ge=1, le=100)
