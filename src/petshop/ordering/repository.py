"""Repository for the Order aggregate."""

from protean.exceptions import ObjectNotFoundError

from petshop.domain import petshop
from petshop.ordering.order import Order, parse_status
from petshop.shared.dates import as_utc
from petshop.shared.paging import Page, paginate


@petshop.repository(part_of=Order)
class OrderRepository:
    def number_taken(self, order_number) -> bool:
        return self._dao.query.filter(order_number=order_number).all().total > 0

    def search(self, user_id=None, status=None, from_date=None, to_date=None, page=1, page_size=10) -> Page:
        """Orders matching the filters, newest first, one page at a time."""
        filters = {}
        if user_id:
            filters["user_id"] = str(user_id)
        if status:
            filters["status"] = parse_status(status).value
        if from_date:
            filters["created_at__gte"] = as_utc(from_date)
        if to_date:
            filters["created_at__lte"] = as_utc(to_date, end_of_day=True)

        return paginate(self._dao.query.filter(**filters).order_by("-created_at"), page, page_size)

    def completed_for_user(self, user_id, order_id):
        """The user's Completed order with this id, or None."""
        return (
            self._dao.query.filter(id=str(order_id), user_id=str(user_id), status="Completed").all().first
            if order_id
            else None
        )

    def find(self, order_id) -> Order:
        order = self._dao.query.filter(id=str(order_id)).all().first if order_id else None
        if order is None:
            raise ObjectNotFoundError("Order not found")
        return order
