"""Cart view: rows joined with live product data and computed totals."""

from protean.utils.globals import current_domain

from petshop.cart.cart import ShoppingCart
from petshop.catalogue.product import Product


def _is_out_of_stock(product, quantity) -> bool:
    return product is None or not product.is_active or product.stock_quantity <= 0 or quantity > product.stock_quantity


def cart_view(user_id) -> dict:
    cart = current_domain.repository_for(ShoppingCart).for_user(user_id)
    items = list(cart.items) if cart else []
    products = current_domain.repository_for(Product).find_many(i.product_id for i in items)

    rows = []
    for item in sorted(items, key=lambda i: i.created_at):
        product = products.get(str(item.product_id))
        price = product.price if product else 0.0
        rows.append(
            {
                "id": str(item.id),
                "product_id": str(item.product_id),
                "product_name": product.name if product else None,
                "product_image_url": product.primary_image_url if product else None,
                "price": price,
                "quantity": item.quantity,
                "line_total": round(price * item.quantity, 2),
                "stock_quantity": product.stock_quantity if product else 0,
                "is_active": bool(product and product.is_active),
                "is_out_of_stock": _is_out_of_stock(product, item.quantity),
                "created_at": item.created_at.isoformat() if item.created_at else None,
                "updated_at": item.updated_at.isoformat() if item.updated_at else None,
            }
        )

    return {
        "id": str(cart.id) if cart else None,
        "user_id": str(user_id),
        "items": rows,
        "total_items": sum(r["quantity"] for r in rows),
        "unique_product_count": len(rows),
        "total_amount": round(sum(r["line_total"] for r in rows), 2),
        "has_out_of_stock_items": any(r["is_out_of_stock"] for r in rows),
    }
