"""ModerateReview and BulkModerateReviews: admin approve, reject or delete.

The bulk variant applies one action to every review found among the given
ids inside the handler's single unit of work.
"""

import json
from enum import Enum

import structlog
from protean.exceptions import ObjectNotFoundError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from petshop.domain import petshop
from petshop.reviews.editing import remove_review
from petshop.reviews.review import Review
from petshop.shared.errors import InvalidArgumentError

logger = structlog.get_logger(__name__)


class ModerationAction(Enum):
    APPROVE = "approve"
    REJECT = "reject"
    DELETE = "delete"

    @classmethod
    def parse(cls, value) -> "ModerationAction":
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            raise InvalidArgumentError(
                {"action": ["Invalid action. Use 'approve', 'reject', or 'delete'"]}
            ) from None

    @property
    def past_tense(self) -> str:
        return {"approve": "approved", "reject": "rejected", "delete": "deleted"}[self.value]


def apply_action(repo, review, action: ModerationAction):
    if action == ModerationAction.APPROVE:
        review.approve()
        repo.add(review)
    elif action == ModerationAction.REJECT:
        review.reject()
        repo.add(review)
    else:
        remove_review(repo, review, deleted_by="Admin")


@petshop.command(part_of="Review")
class ModerateReview:
    review_id = Identifier(required=True)
    action = String(required=True, max_length=20)


@petshop.command(part_of="Review")
class BulkModerateReviews:
    review_ids = Text(required=True)  # JSON array of review ids
    action = String(required=True, max_length=20)


@petshop.command_handler(part_of=Review)
class ModerationHandler:
    @handle(ModerateReview)
    def moderate_review(self, command):
        action = ModerationAction.parse(command.action)
        repo = current_domain.repository_for(Review)
        review = repo.find(command.review_id)

        apply_action(repo, review, action)
        logger.info("Review moderated", review_id=str(command.review_id), action=action.value)
        return f"Review {action.past_tense} successfully"

    @handle(BulkModerateReviews)
    def bulk_moderate(self, command):
        action = ModerationAction.parse(command.action)
        review_ids = json.loads(command.review_ids) if isinstance(command.review_ids, str) else command.review_ids

        repo = current_domain.repository_for(Review)
        found = repo.find_many(review_ids or [])
        if not found:
            raise ObjectNotFoundError("No reviews found for the provided IDs")

        for review in found:
            apply_action(repo, review, action)

        logger.info("Reviews moderated in bulk", action=action.value, count=len(found))
        return f"{len(found)} review(s) {action.past_tense} successfully"
