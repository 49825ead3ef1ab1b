"""Verified-purchase gate for reviews."""

from protean.utils.globals import current_domain

from petshop.ordering.order import Order


def can_review(user_id, product_id, order_id) -> bool:
    """True iff the user owns a Completed order with this id that contains the product.

    Evaluated on every call; eligibility is never cached.
    """
    if not (user_id and product_id and order_id):
        return False

    order = current_domain.repository_for(Order).completed_for_user(user_id, order_id)
    return order is not None and order.contains_product(product_id)
