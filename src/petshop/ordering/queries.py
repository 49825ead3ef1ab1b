"""Order reads: single order with items, and paginated order lists."""

from protean.utils.globals import current_domain

from petshop.catalogue.product import Product
from petshop.ordering.order import Order


def order_dict(order: Order, products=None) -> dict:
    if products is None:
        products = current_domain.repository_for(Product).find_many(i.product_id for i in order.items)

    items = []
    for item in order.items:
        product = products.get(str(item.product_id))
        items.append(
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "product_name": item.product_name,
                "product_image_url": product.primary_image_url if product else None,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total_price": item.total_price,
            }
        )

    return {
        "id": str(order.id),
        "order_number": order.order_number,
        "user_id": str(order.user_id),
        "status": order.status,
        "total_amount": order.total_amount,
        "shipping_address": order.shipping_address,
        "notes": order.notes,
        "items": items,
        "created_at": order.created_at.isoformat() if order.created_at else None,
        "updated_at": order.updated_at.isoformat() if order.updated_at else None,
    }


def get_order(order_id) -> tuple[Order, dict]:
    """The order aggregate and its response shape.

    The aggregate is returned too so the caller can check ownership.
    """
    order = current_domain.repository_for(Order).find(order_id)
    return order, order_dict(order)


def search_orders(user_id=None, status=None, from_date=None, to_date=None, page=1, page_size=10) -> dict:
    result = current_domain.repository_for(Order).search(
        user_id=user_id,
        status=status,
        from_date=from_date,
        to_date=to_date,
        page=page,
        page_size=page_size,
    )

    product_ids = {str(item.product_id) for order in result.items for item in order.items}
    products = current_domain.repository_for(Product).find_many(product_ids)
    return result.map(lambda order: order_dict(order, products)).to_dict()
