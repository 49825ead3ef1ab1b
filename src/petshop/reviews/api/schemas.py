"""Pydantic request schemas for the Reviews and review moderation APIs."""

from __future__ import annotations

import json

from pydantic import BaseModel, Field


class CreateReviewRequest(BaseModel):
    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "product_id": "prod-001",
                    "order_id": "order-001",
                    "rating": 5,
                    "title": "My cat loves it",
                    "comment": "Sturdy, and it survived the first week.",
                }
            ]
        }
    }

    product_id: str
    order_id: str
    rating: int = Field(..., ge=1, le=5)
    title: str = Field("", max_length=100)
    comment: str = Field(..., min_length=1, max_length=1000)


class UpdateReviewRequest(BaseModel):
    """Fields left out (or blank) keep their current value."""

    rating: int | None = Field(None, ge=1, le=5)
    title: str | None = Field(None, max_length=100)
    comment: str | None = Field(None, max_length=1000)


class HelpfulnessVoteRequest(BaseModel):
    review_id: str
    is_helpful: bool


class ModerateReviewRequest(BaseModel):
    review_id: str
    action: str = Field(..., description="approve, reject or delete")


class BulkModerateReviewsRequest(BaseModel):
    review_ids: list[str] = Field(..., min_length=1)
    action: str = Field(..., description="approve, reject or delete")

    def command_kwargs(self) -> dict:
        return {"review_ids": json.dumps(self.review_ids), "action": self.action}
