"""EditReview and DeleteReview: the author's own changes to a review."""

from datetime import UTC, datetime

from protean.fields import Identifier, Integer, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from petshop.domain import petshop
from petshop.reviews.events import ReviewDeleted
from petshop.reviews.review import Review
from petshop.shared.policy import Principal, ensure_owner


@petshop.command(part_of="Review")
class EditReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)  # Must match the author
    rating = Integer()
    title = String(max_length=100)
    comment = Text()


@petshop.command(part_of="Review")
class DeleteReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)  # Must match the author


def remove_review(repo, review, deleted_by):
    """Clear votes, save, then delete the record."""
    review.clear_votes()
    review.raise_(
        ReviewDeleted(
            review_id=str(review.id),
            product_id=str(review.product_id),
            deleted_by=deleted_by,
            deleted_at=datetime.now(UTC),
        )
    )
    repo.add(review)
    repo.discard(review)


@petshop.command_handler(part_of=Review)
class ReviewAuthorHandler:
    @handle(EditReview)
    def edit_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.find(command.review_id)
        ensure_owner(Principal(user_id=str(command.user_id)), review.user_id, "You can only edit your own reviews")

        review.edit(rating=command.rating, title=command.title, comment=command.comment)
        repo.add(review)
        return str(review.id)

    @handle(DeleteReview)
    def delete_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.find(command.review_id)
        ensure_owner(Principal(user_id=str(command.user_id)), review.user_id, "You can only delete your own reviews")

        remove_review(repo, review, deleted_by="Owner")
