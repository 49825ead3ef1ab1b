"""Catalogue reads: browsing, product detail, low-stock list and dashboard rollups."""

from protean.utils.globals import current_domain

from petshop.catalogue.product import Product, ProductCategory
from petshop.shared.paging import Page

RECENT_PRODUCTS = 6


def image_dict(image) -> dict:
    return {
        "id": str(image.id),
        "url": image.url,
        "alt_text": image.alt_text,
        "is_primary": image.is_primary,
        "display_order": image.display_order,
    }


def product_dict(product: Product) -> dict:
    return {
        "id": str(product.id),
        "name": product.name,
        "description": product.description,
        "brand": product.brand,
        "price": product.price,
        "original_price": product.original_price,
        "stock_quantity": product.stock_quantity,
        "low_stock_threshold": product.low_stock_threshold,
        "is_low_stock": product.is_low_stock,
        "section": product.section,
        "category": product.category,
        "state": product.state,
        "is_active": product.is_active,
        "primary_image_url": product.primary_image_url,
        "images": [image_dict(img) for img in sorted(product.images, key=lambda i: i.display_order or 0)],
        "created_at": product.created_at.isoformat() if product.created_at else None,
        "updated_at": product.updated_at.isoformat() if product.updated_at else None,
    }


def list_products(
    page=1,
    page_size=10,
    min_price=None,
    max_price=None,
    section=None,
    category=None,
    state=None,
    brand=None,
    search=None,
) -> Page:
    """Active products matching every supplied filter, newest first."""
    filters = {}
    if section:
        filters["section"] = section
    if category:
        filters["category"] = category
    if state:
        filters["state"] = state
    if min_price is not None:
        filters["price__gte"] = min_price
    if max_price is not None:
        filters["price__lte"] = max_price

    return (
        current_domain.repository_for(Product)
        .browse(page=page, page_size=page_size, brand=brand, search=search, **filters)
        .map(product_dict)
    )


def get_product(product_id) -> dict:
    return product_dict(current_domain.repository_for(Product).get_active(product_id))


def low_stock_products() -> list[dict]:
    """Active products at or below their reorder threshold, lowest stock first."""
    products = [p for p in current_domain.repository_for(Product).active() if p.is_low_stock]
    products.sort(key=lambda p: p.stock_quantity)
    return [product_dict(p) for p in products]


def dashboard_stats() -> dict:
    products = current_domain.repository_for(Product).active()
    return {
        "total_products": len(products),
        "total_categories": len(ProductCategory),
        "total_inventory_value": round(sum(p.price * p.stock_quantity for p in products), 2),
        "low_stock_count": sum(1 for p in products if p.is_low_stock),
        "recent_products": [product_dict(p) for p in products[:RECENT_PRODUCTS]],
    }
