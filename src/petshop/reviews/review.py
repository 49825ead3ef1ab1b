"""Review aggregate (CQRS): a verified buyer's rating of a product from one order.

Reviews are published immediately (``is_approved`` defaults to True); an
admin can reject, re-approve or delete them later.

Helpfulness votes live inside the aggregate as ``HelpfulnessVote`` entities,
one per voter. The denormalised ``helpful_votes``/``unhelpful_votes``
counters change in the same method as the vote rows, so both are persisted
by a single repository save and cannot drift apart.
"""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, Integer, String, Text

from petshop.domain import petshop
from petshop.reviews.events import (
    HelpfulnessVoteRecorded,
    ReviewApproved,
    ReviewEdited,
    ReviewRejected,
    ReviewSubmitted,
)

MIN_RATING = 1
MAX_RATING = 5


@petshop.entity(part_of="Review")
class HelpfulnessVote:
    """One user's helpful/unhelpful judgement of a review."""

    user_id = Identifier(required=True)
    is_helpful = Boolean(required=True)
    voted_at = DateTime(required=True)


@petshop.aggregate
class Review:
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)

    rating = Integer(required=True, min_value=MIN_RATING, max_value=MAX_RATING)
    title = String(max_length=100, default="")
    comment = Text(required=True)

    is_approved = Boolean(default=True)
    is_verified_purchase = Boolean(default=False)

    votes = HasMany(HelpfulnessVote)
    helpful_votes = Integer(default=0, min_value=0)
    unhelpful_votes = Integer(default=0, min_value=0)

    created_at = DateTime()
    updated_at = DateTime()

    @invariant.post
    def comment_must_not_be_blank(self):
        if self.comment is not None and not self.comment.strip():
            raise ValidationError({"comment": ["Review comment cannot be empty"]})

    @invariant.post
    def comment_maximum_length(self):
        if self.comment and len(self.comment) > 1000:
            raise ValidationError({"comment": ["Review comment cannot exceed 1000 characters"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def submit(cls, user_id, product_id, order_id, rating, comment, title=None):
        """Create a review for a purchase that has already been verified."""
        now = datetime.now(UTC)
        review = cls(
            user_id=user_id,
            product_id=product_id,
            order_id=order_id,
            rating=rating,
            title=title or "",
            comment=comment,
            is_approved=True,
            is_verified_purchase=True,
            helpful_votes=0,
            unhelpful_votes=0,
            created_at=now,
            updated_at=now,
        )
        review.raise_(
            ReviewSubmitted(
                review_id=str(review.id),
                user_id=str(user_id),
                product_id=str(product_id),
                order_id=str(order_id),
                rating=rating,
                submitted_at=now,
            )
        )
        return review

    # -------------------------------------------------------------------
    # Edit
    # -------------------------------------------------------------------
    def edit(self, rating=None, title=None, comment=None):
        """Apply a partial update. Blank title or comment leave the old value."""
        now = datetime.now(UTC)
        with atomic_change(self):
            if rating is not None:
                self.rating = rating
            if title is not None and title.strip():
                self.title = title
            if comment is not None and comment.strip():
                self.comment = comment
            self.updated_at = now

        self.raise_(ReviewEdited(review_id=str(self.id), rating=self.rating, edited_at=now))

    # -------------------------------------------------------------------
    # Moderation
    # -------------------------------------------------------------------
    def approve(self):
        now = datetime.now(UTC)
        self.is_approved = True
        self.updated_at = now
        self.raise_(ReviewApproved(review_id=str(self.id), product_id=str(self.product_id), approved_at=now))

    def reject(self):
        now = datetime.now(UTC)
        self.is_approved = False
        self.updated_at = now
        self.raise_(ReviewRejected(review_id=str(self.id), product_id=str(self.product_id), rejected_at=now))

    def clear_votes(self):
        """Drop every helpfulness vote, ahead of deleting the review."""
        with atomic_change(self):
            for vote in list(self.votes):
                self.remove_votes(vote)
            self.helpful_votes = 0
            self.unhelpful_votes = 0

    # -------------------------------------------------------------------
    # Voting
    # -------------------------------------------------------------------
    def vote_for(self, user_id):
        """The vote cast by ``user_id``, or None."""
        return next((v for v in self.votes if str(v.user_id) == str(user_id)), None)

    def vote(self, user_id, is_helpful):
        """Record or change a helpfulness vote.

        A first vote bumps one counter. Switching moves one count from the
        old side to the new side. Repeating the same vote changes nothing.
        """
        if str(user_id) == str(self.user_id):
            raise ValidationError({"vote": ["You cannot vote on your own review"]})

        now = datetime.now(UTC)
        existing = self.vote_for(user_id)

        with atomic_change(self):
            if existing is None:
                self.add_votes(HelpfulnessVote(user_id=user_id, is_helpful=is_helpful, voted_at=now))
                if is_helpful:
                    self.helpful_votes += 1
                else:
                    self.unhelpful_votes += 1
            elif existing.is_helpful != is_helpful:
                existing.is_helpful = is_helpful
                existing.voted_at = now
                self.add_votes(existing)
                if is_helpful:
                    self.unhelpful_votes -= 1
                    self.helpful_votes += 1
                else:
                    self.helpful_votes -= 1
                    self.unhelpful_votes += 1
            else:
                return

            self.updated_at = now

        self.raise_(
            HelpfulnessVoteRecorded(
                review_id=str(self.id),
                voter_id=str(user_id),
                is_helpful=is_helpful,
                helpful_votes=self.helpful_votes,
                unhelpful_votes=self.unhelpful_votes,
                voted_at=now,
            )
        )
