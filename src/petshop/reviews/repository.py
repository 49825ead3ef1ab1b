"""Repository for the Review aggregate."""

from protean.exceptions import ObjectNotFoundError

from petshop.domain import petshop
from petshop.reviews.review import Review

SCAN_LIMIT = 10_000


@petshop.repository(part_of=Review)
class ReviewRepository:
    def find(self, review_id) -> Review:
        review = self._dao.query.filter(id=str(review_id)).all().first if review_id else None
        if review is None:
            raise ObjectNotFoundError("Review not found")
        return review

    def for_purchase(self, user_id, product_id, order_id) -> Review | None:
        return (
            self._dao.query.filter(
                user_id=str(user_id),
                product_id=str(product_id),
                order_id=str(order_id),
            )
            .all()
            .first
        )

    def matching(self, **filters) -> list[Review]:
        """Reviews matching ``filters``, newest first."""
        return list(self._dao.query.filter(**filters).order_by("-created_at").limit(SCAN_LIMIT).all().items)

    def find_many(self, review_ids) -> list[Review]:
        ids = [str(rid) for rid in review_ids]
        if not ids:
            return []
        return list(self._dao.query.filter(id__in=ids).limit(SCAN_LIMIT).all().items)

    def discard(self, review: Review) -> None:
        """Remove the review record. Votes must already be cleared and saved."""
        self._dao.delete(review)
