"""FastAPI endpoints for the admin dashboard, review moderation and accounts.

Every route here requires the Admin role.
"""

from datetime import datetime

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from petshop.catalogue import queries as catalogue_queries
from petshop.identity.accounts import DeactivateUser
from petshop.reviews import queries as review_queries
from petshop.reviews.api.schemas import BulkModerateReviewsRequest, ModerateReviewRequest
from petshop.reviews.moderation import BulkModerateReviews, ModerateReview, ModerationAction
from petshop.shared.envelope import ApiResponse, ok
from petshop.shared.security import admin_principal

admin_router = APIRouter(prefix="/api/admin", tags=["admin"], dependencies=[Depends(admin_principal)])


@admin_router.get("/dashboard/stats", response_model=ApiResponse)
async def dashboard_stats() -> ApiResponse:
    return ok(catalogue_queries.dashboard_stats(), "Dashboard statistics retrieved successfully")


@admin_router.get("/products/low-stock", response_model=ApiResponse)
async def low_stock_products() -> ApiResponse:
    return ok(catalogue_queries.low_stock_products(), "Low stock products retrieved successfully")


@admin_router.get("/reviews", response_model=ApiResponse)
async def list_reviews(
    search: str | None = None,
    product_id: str | None = None,
    user_id: str | None = None,
    is_approved: bool | None = None,
    min_rating: int | None = Query(None, ge=1, le=5),
    max_rating: int | None = Query(None, ge=1, le=5),
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    sort_by: str = "createdat",
    sort_direction: str = "desc",
    page: int = Query(1, ge=1),
    page_size: int = Query(review_queries.ADMIN_PAGE_SIZE, ge=1, le=100),
) -> ApiResponse:
    result = review_queries.list_reviews(
        search=search,
        product_id=product_id,
        user_id=user_id,
        is_approved=is_approved,
        min_rating=min_rating,
        max_rating=max_rating,
        from_date=from_date,
        to_date=to_date,
        sort_by=sort_by,
        sort_direction=sort_direction,
        page=page,
        page_size=page_size,
    )
    return ok(result.to_dict(), "Reviews retrieved successfully")


@admin_router.get("/reviews/stats", response_model=ApiResponse)
async def review_stats() -> ApiResponse:
    return ok(review_queries.review_stats(), "Review statistics retrieved successfully")


@admin_router.get("/reviews/{review_id}", response_model=ApiResponse)
async def review_details(review_id: str) -> ApiResponse:
    return ok(review_queries.review_details(review_id), "Review retrieved successfully")


@admin_router.post("/reviews/moderate", response_model=ApiResponse)
async def moderate_review(body: ModerateReviewRequest) -> ApiResponse:
    message = current_domain.process(
        ModerateReview(review_id=body.review_id, action=body.action), asynchronous=False
    )
    return ok(True, message)


@admin_router.post("/reviews/moderate/bulk", response_model=ApiResponse)
async def bulk_moderate_reviews(body: BulkModerateReviewsRequest) -> ApiResponse:
    message = current_domain.process(BulkModerateReviews(**body.command_kwargs()), asynchronous=False)
    return ok(True, message)


@admin_router.post("/users/{user_id}/deactivate", response_model=ApiResponse)
async def deactivate_user(user_id: str) -> ApiResponse:
    changed = current_domain.process(DeactivateUser(user_id=user_id), asynchronous=False)
    return ok(True, "User deactivated" if changed else "User was already inactive")


@admin_router.delete("/reviews/{review_id}", response_model=ApiResponse)
async def delete_review(review_id: str) -> ApiResponse:
    message = current_domain.process(
        ModerateReview(review_id=review_id, action=ModerationAction.DELETE.value), asynchronous=False
    )
    return ok(True, message)
