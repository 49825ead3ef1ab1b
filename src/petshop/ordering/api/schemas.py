"""Pydantic request schemas for the Orders API."""

from __future__ import annotations

from pydantic import BaseModel, Field


class CreateOrderRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [{"shipping_address": "12 Bark Street, Springfield", "notes": "Leave at the door"}]
        }
    }

    shipping_address: str = Field(..., min_length=1, max_length=500)
    notes: str | None = Field(None, max_length=1000)


class UpdateOrderStatusRequest(BaseModel):
    status: str = Field(..., min_length=1, max_length=20)
