"""Review reads for shoppers and for the admin moderation screens."""

from datetime import UTC, datetime, timedelta

from protean.utils.globals import current_domain

from petshop.catalogue.product import Product
from petshop.identity.user import User
from petshop.reviews.review import MAX_RATING, MIN_RATING, Review
from petshop.shared.dates import as_utc
from petshop.shared.paging import Page, paginate_list

ADMIN_PAGE_SIZE = 20
SORT_KEYS = {
    "createdat": "created_at",
    "created_at": "created_at",
    "rating": "rating",
    "helpfulvotes": "helpful_votes",
    "helpful_votes": "helpful_votes",
}


def _related(reviews):
    users = current_domain.repository_for(User).find_many(r.user_id for r in reviews)
    products = current_domain.repository_for(Product).find_many(r.product_id for r in reviews)
    return users, products


def review_dict(review: Review, users: dict, products: dict, viewer_id=None) -> dict:
    user = users.get(str(review.user_id))
    product = products.get(str(review.product_id))

    data = {
        "id": str(review.id),
        "user_id": str(review.user_id),
        "user_name": user.full_name if user else "",
        "product_id": str(review.product_id),
        "product_name": product.name if product else "",
        "order_id": str(review.order_id),
        "rating": review.rating,
        "title": review.title,
        "comment": review.comment,
        "is_verified_purchase": review.is_verified_purchase,
        "is_approved": review.is_approved,
        "helpful_votes": review.helpful_votes,
        "unhelpful_votes": review.unhelpful_votes,
        "created_at": review.created_at.isoformat() if review.created_at else None,
        "updated_at": review.updated_at.isoformat() if review.updated_at else None,
    }
    if viewer_id:
        vote = review.vote_for(viewer_id)
        data["user_helpfulness_vote"] = vote.is_helpful if vote else None
    return data


def admin_review_dict(review: Review, users: dict, products: dict) -> dict:
    data = review_dict(review, users, products)
    user = users.get(str(review.user_id))
    data["user_email"] = user.email if user else ""
    data["status"] = "Approved" if review.is_approved else "Pending"
    return data


def _many(reviews, viewer_id=None):
    users, products = _related(reviews)
    return [review_dict(r, users, products, viewer_id) for r in reviews]


def get_review(review_id, viewer_id=None) -> dict:
    return _many([current_domain.repository_for(Review).find(review_id)], viewer_id)[0]


def product_reviews(product_id, viewer_id=None) -> list[dict]:
    """Approved reviews of a product, newest first."""
    reviews = current_domain.repository_for(Review).matching(product_id=str(product_id), is_approved=True)
    return _many(reviews, viewer_id)


def user_reviews(user_id, viewer_id=None) -> list[dict]:
    """Every review written by the user, approved or not, newest first."""
    reviews = current_domain.repository_for(Review).matching(user_id=str(user_id))
    return _many(reviews, viewer_id)


def _distribution(reviews) -> dict:
    distribution = {rating: 0 for rating in range(MIN_RATING, MAX_RATING + 1)}
    for review in reviews:
        distribution[review.rating] += 1
    return distribution


def _average(reviews) -> float:
    if not reviews:
        return 0.0
    return round(sum(r.rating for r in reviews) / len(reviews), 2)


def product_review_summary(product_id) -> dict:
    reviews = current_domain.repository_for(Review).matching(product_id=str(product_id), is_approved=True)
    return {
        "product_id": str(product_id),
        "average_rating": _average(reviews),
        "total_reviews": len(reviews),
        "rating_distribution": _distribution(reviews),
    }


# ---------------------------------------------------------------------------
# Admin
# ---------------------------------------------------------------------------
def _matches_search(review, term, users, products) -> bool:
    user = users.get(str(review.user_id))
    product = products.get(str(review.product_id))
    fields = [
        review.comment,
        review.title,
        user.first_name if user else None,
        user.last_name if user else None,
        product.name if product else None,
    ]
    return any(term in value.lower() for value in fields if value)


def list_reviews(
    search=None,
    product_id=None,
    user_id=None,
    is_approved=None,
    min_rating=None,
    max_rating=None,
    from_date=None,
    to_date=None,
    sort_by="createdat",
    sort_direction="desc",
    page=1,
    page_size=ADMIN_PAGE_SIZE,
) -> Page:
    filters = {}
    if product_id:
        filters["product_id"] = str(product_id)
    if user_id:
        filters["user_id"] = str(user_id)
    if is_approved is not None:
        filters["is_approved"] = is_approved
    if min_rating is not None:
        filters["rating__gte"] = min_rating
    if max_rating is not None:
        filters["rating__lte"] = max_rating
    if from_date:
        filters["created_at__gte"] = as_utc(from_date)
    if to_date:
        filters["created_at__lte"] = as_utc(to_date, end_of_day=True)

    reviews = current_domain.repository_for(Review).matching(**filters)
    users, products = _related(reviews)

    if search and search.strip():
        term = search.strip().lower()
        reviews = [r for r in reviews if _matches_search(r, term, users, products)]

    key = SORT_KEYS.get((sort_by or "").lower(), "created_at")
    descending = (sort_direction or "desc").lower() != "asc"
    reviews.sort(key=lambda r: getattr(r, key), reverse=descending)

    result = paginate_list(reviews, page, page_size, default_size=ADMIN_PAGE_SIZE)
    return result.map(lambda r: admin_review_dict(r, users, products))


def review_details(review_id) -> dict:
    review = current_domain.repository_for(Review).find(review_id)
    users, products = _related([review])
    return admin_review_dict(review, users, products)


def review_stats(now=None) -> dict:
    """Counts and averages over every review.

    Weeks start on Sunday. Day, week and month boundaries are in UTC.
    """
    now = now or datetime.now(UTC)
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = today - timedelta(days=(today.weekday() + 1) % 7)
    month_start = today.replace(day=1)

    reviews = current_domain.repository_for(Review).matching()
    created = [(r, as_utc(r.created_at)) for r in reviews if r.created_at]

    approved = sum(1 for r in reviews if r.is_approved)
    return {
        "total_reviews": len(reviews),
        "pending_reviews": len(reviews) - approved,
        "approved_reviews": approved,
        "rejected_reviews": 0,
        "average_rating": _average(reviews),
        "reviews_today": sum(1 for _, at in created if at >= today),
        "reviews_this_week": sum(1 for _, at in created if at >= week_start),
        "reviews_this_month": sum(1 for _, at in created if at >= month_start),
        "rating_distribution": _distribution(reviews),
    }
