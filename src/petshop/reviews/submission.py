"""SubmitReview: a verified buyer reviews a product from one of their orders.

One review per (user, product, order). The same product bought again in a
different order can be reviewed again.
"""

import structlog
from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from petshop.domain import petshop
from petshop.reviews.eligibility import can_review
from petshop.reviews.review import Review
from petshop.shared.errors import ConflictError, NotEligibleError

logger = structlog.get_logger(__name__)


@petshop.command(part_of="Review")
class SubmitReview:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True)
    title = String(max_length=100)
    comment = Text(required=True)


@petshop.command_handler(part_of=Review)
class SubmitReviewHandler:
    @handle(SubmitReview)
    def submit_review(self, command):
        if not can_review(command.user_id, command.product_id, command.order_id):
            raise NotEligibleError(
                {"review": ["You can only review products you have purchased from completed orders"]}
            )

        repo = current_domain.repository_for(Review)
        if repo.for_purchase(command.user_id, command.product_id, command.order_id):
            raise ConflictError({"review": ["You have already reviewed this product from this order"]})

        review = Review.submit(
            user_id=command.user_id,
            product_id=command.product_id,
            order_id=command.order_id,
            rating=command.rating,
            title=command.title,
            comment=command.comment,
        )
        repo.add(review)
        logger.info(
            "Review submitted",
            review_id=str(review.id),
            product_id=str(command.product_id),
            user_id=str(command.user_id),
        )
        return str(review.id)
