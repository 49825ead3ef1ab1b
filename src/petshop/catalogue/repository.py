"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.query import Q

from petshop.catalogue.product import Product
from petshop.domain import petshop
from petshop.shared.paging import Page, paginate

# Upper bound for scans that need every matching row (admin rollups).
SCAN_LIMIT = 10_000


@petshop.repository(part_of=Product)
class ProductRepository:
    def get_active(self, product_id) -> Product:
        """Load a product, treating soft-deleted products as missing."""
        product = self._dao.query.filter(id=str(product_id)).all().first if product_id else None
        if product is None or not product.is_active:
            raise ObjectNotFoundError("Product not found")
        return product

    def active(self, **filters) -> list[Product]:
        return list(
            self._dao.query.filter(is_active=True, **filters).order_by("-created_at").limit(SCAN_LIMIT).all().items
        )

    def browse(self, page=1, page_size=10, brand=None, search=None, **filters) -> Page:
        """One page of active products, newest first.

        ``brand`` and ``search`` are case-insensitive substring matches; the
        search term is looked up in name, description and brand.
        """
        query = self._dao.query.filter(is_active=True, **filters)
        if brand and brand.strip():
            query = query.filter(brand__icontains=brand.strip())
        if search and search.strip():
            term = search.strip()
            query = query.filter(Q(name__icontains=term) | Q(description__icontains=term) | Q(brand__icontains=term))
        return paginate(query.order_by("-created_at"), page, page_size)

    def find_many(self, product_ids) -> dict:
        """Map product id to product for the given ids, active or not."""
        ids = {str(pid) for pid in product_ids}
        if not ids:
            return {}
        products = self._dao.query.filter(id__in=list(ids)).limit(SCAN_LIMIT).all().items
        return {str(p.id): p for p in products}
