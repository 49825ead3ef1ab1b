import pytest
from protean.exceptions import ValidationError

from petshop.reviews.events import ReviewApproved, ReviewEdited, ReviewRejected, ReviewSubmitted
from petshop.reviews.review import Review


def _review(**overrides):
    defaults = {
        "user_id": "author-001",
        "product_id": "prod-001",
        "order_id": "order-001",
        "rating": 5,
        "title": "Great",
        "comment": "My cat sleeps in it every day.",
    }
    defaults.update(overrides)
    return Review.submit(**defaults)


class TestSubmit:
    def test_published_and_verified(self):
        review = _review()
        assert review.is_approved is True
        assert review.is_verified_purchase is True
        assert isinstance(review._events[-1], ReviewSubmitted)

    @pytest.mark.parametrize("rating", [0, 6])
    def test_rating_out_of_range(self, rating):
        with pytest.raises(ValidationError):
            _review(rating=rating)

    def test_blank_comment_rejected(self):
        with pytest.raises(ValidationError):
            _review(comment="   ")

    def test_comment_too_long(self):
        with pytest.raises(ValidationError):
            _review(comment="x" * 1001)

    def test_title_optional(self):
        assert _review(title=None).title == ""


class TestEdit:
    def test_partial_update(self):
        review = _review()
        review.edit(rating=3)
        assert review.rating == 3
        assert review.title == "Great"
        assert isinstance(review._events[-1], ReviewEdited)

    def test_blank_text_keeps_old_value(self):
        review = _review()
        review.edit(title="  ", comment="")
        assert review.title == "Great"
        assert review.comment == "My cat sleeps in it every day."


class TestModeration:
    def test_reject_then_approve(self):
        review = _review()
        review.reject()
        assert review.is_approved is False
        assert isinstance(review._events[-1], ReviewRejected)

        review.approve()
        assert review.is_approved is True
        assert isinstance(review._events[-1], ReviewApproved)
