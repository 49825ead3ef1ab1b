"""Domain events for the Review aggregate."""

from protean.fields import Boolean, DateTime, Identifier, Integer, String

from petshop.domain import petshop


@petshop.event(part_of="Review")
class ReviewSubmitted:
    """A verified buyer reviewed a product from one of their orders."""

    __version__ = 1

    review_id = Identifier(required=True)
    user_id = Identifier(required=True)
    product_id = Identifier(required=True)
    order_id = Identifier(required=True)
    rating = Integer(required=True)
    submitted_at = DateTime(required=True)


@petshop.event(part_of="Review")
class ReviewEdited:
    __version__ = 1

    review_id = Identifier(required=True)
    rating = Integer(required=True)
    edited_at = DateTime(required=True)


@petshop.event(part_of="Review")
class ReviewApproved:
    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    approved_at = DateTime(required=True)


@petshop.event(part_of="Review")
class ReviewRejected:
    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    rejected_at = DateTime(required=True)


@petshop.event(part_of="Review")
class ReviewDeleted:
    """The review and its helpfulness votes were removed."""

    __version__ = 1

    review_id = Identifier(required=True)
    product_id = Identifier(required=True)
    deleted_by = String(required=True)  # "Owner" or "Admin"
    deleted_at = DateTime(required=True)


@petshop.event(part_of="Review")
class HelpfulnessVoteRecorded:
    __version__ = 1

    review_id = Identifier(required=True)
    voter_id = Identifier(required=True)
    is_helpful = Boolean(required=True)
    helpful_votes = Integer(required=True)
    unhelpful_votes = Integer(required=True)
    voted_at = DateTime(required=True)
