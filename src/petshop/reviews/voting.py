"""VoteOnReview: record or change a helpful/unhelpful vote.

Cannot vote on own review. Voting again with a different choice switches the vote.
"""

from protean.fields import Boolean, Identifier
from protean.utils.globals import current_domain
from protean.utils.mixins import handle

from petshop.domain import petshop
from petshop.reviews.review import Review


@petshop.command(part_of="Review")
class VoteOnReview:
    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    is_helpful = Boolean(required=True)


@petshop.command_handler(part_of=Review)
class VoteOnReviewHandler:
    @handle(VoteOnReview)
    def vote_on_review(self, command):
        repo = current_domain.repository_for(Review)
        review = repo.find(command.review_id)

        review.vote(user_id=command.user_id, is_helpful=command.is_helpful)
        repo.add(review)
