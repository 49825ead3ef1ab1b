"""FastAPI endpoints for shoppers writing, reading and voting on reviews.

Static paths are declared before ``/{review_id}`` so they are not captured
by it.
"""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from petshop.reviews import queries
from petshop.reviews.api.schemas import CreateReviewRequest, HelpfulnessVoteRequest, UpdateReviewRequest
from petshop.reviews.editing import DeleteReview, EditReview
from petshop.reviews.eligibility import can_review
from petshop.reviews.submission import SubmitReview
from petshop.reviews.voting import VoteOnReview
from petshop.shared.envelope import ApiResponse, ok
from petshop.shared.policy import Principal
from petshop.shared.security import current_principal, optional_principal

review_router = APIRouter(prefix="/api/reviews", tags=["reviews"])


def _viewer(principal: Principal | None):
    return principal.user_id if principal else None


@review_router.post("", status_code=201, response_model=ApiResponse)
async def create_review(body: CreateReviewRequest, principal: Principal = Depends(current_principal)) -> ApiResponse:
    review_id = current_domain.process(
        SubmitReview(user_id=principal.user_id, **body.model_dump()),
        asynchronous=False,
    )
    return ok(queries.get_review(review_id, principal.user_id), "Review created successfully")


@review_router.get("/my", response_model=ApiResponse)
async def my_reviews(principal: Principal = Depends(current_principal)) -> ApiResponse:
    return ok(queries.user_reviews(principal.user_id, principal.user_id), "Reviews retrieved successfully")


@review_router.get("/can-review", response_model=ApiResponse)
async def check_can_review(
    product_id: str, order_id: str, principal: Principal = Depends(current_principal)
) -> ApiResponse:
    return ok(can_review(principal.user_id, product_id, order_id), "Review eligibility checked")


@review_router.post("/helpfulness", response_model=ApiResponse)
async def vote_helpfulness(
    body: HelpfulnessVoteRequest, principal: Principal = Depends(current_principal)
) -> ApiResponse:
    command = VoteOnReview(review_id=body.review_id, user_id=principal.user_id, is_helpful=body.is_helpful)
    current_domain.process(command, asynchronous=False)
    return ok(True, "Vote recorded successfully")


@review_router.get("/product/{product_id}", response_model=ApiResponse)
async def product_reviews(
    product_id: str, principal: Principal | None = Depends(optional_principal)
) -> ApiResponse:
    return ok(queries.product_reviews(product_id, _viewer(principal)), "Reviews retrieved successfully")


@review_router.get("/product/{product_id}/summary", response_model=ApiResponse)
async def product_review_summary(product_id: str) -> ApiResponse:
    return ok(queries.product_review_summary(product_id), "Review summary retrieved successfully")


@review_router.get("/user/{user_id}", response_model=ApiResponse)
async def user_reviews(user_id: str, principal: Principal | None = Depends(optional_principal)) -> ApiResponse:
    return ok(queries.user_reviews(user_id, _viewer(principal)), "Reviews retrieved successfully")


@review_router.get("/{review_id}", response_model=ApiResponse)
async def get_review(review_id: str, principal: Principal | None = Depends(optional_principal)) -> ApiResponse:
    return ok(queries.get_review(review_id, _viewer(principal)), "Review retrieved successfully")


@review_router.put("/{review_id}", response_model=ApiResponse)
async def update_review(
    review_id: str, body: UpdateReviewRequest, principal: Principal = Depends(current_principal)
) -> ApiResponse:
    command = EditReview(review_id=review_id, user_id=principal.user_id, **body.model_dump(exclude_none=True))
    current_domain.process(command, asynchronous=False)
    return ok(queries.get_review(review_id, principal.user_id), "Review updated successfully")


@review_router.delete("/{review_id}", response_model=ApiResponse)
async def delete_review(review_id: str, principal: Principal = Depends(current_principal)) -> ApiResponse:
    current_domain.process(DeleteReview(review_id=review_id, user_id=principal.user_id), asynchronous=False)
    return ok(True, "Review deleted successfully")
