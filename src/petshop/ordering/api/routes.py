"""FastAPI endpoints for checkout and orders."""

from datetime import datetime

from fastapi import APIRouter, Depends, Query, Response
from protean.utils.globals import current_domain

from petshop.ordering import queries
from petshop.ordering.api.schemas import CreateOrderRequest, UpdateOrderStatusRequest
from petshop.ordering.checkout import PlaceOrder
from petshop.ordering.status import UpdateOrderStatus
from petshop.shared.envelope import ApiResponse, ok
from petshop.shared.policy import Principal, ensure_owner_or_admin
from petshop.shared.security import admin_principal, current_principal

order_router = APIRouter(prefix="/api/orders", tags=["orders"])


@order_router.post("", status_code=201, response_model=ApiResponse)
async def create_order(
    body: CreateOrderRequest, response: Response, principal: Principal = Depends(current_principal)
) -> ApiResponse:
    command = PlaceOrder(user_id=principal.user_id, shipping_address=body.shipping_address, notes=body.notes)
    order_id = current_domain.process(command, asynchronous=False)

    _, order = queries.get_order(order_id)
    response.headers["Location"] = f"/api/orders/{order_id}"
    return ok(order, "Order created successfully")


@order_router.get("/my-orders", response_model=ApiResponse)
async def my_orders(
    status: str | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    principal: Principal = Depends(current_principal),
) -> ApiResponse:
    result = queries.search_orders(
        user_id=principal.user_id,
        status=status,
        from_date=from_date,
        to_date=to_date,
        page=page,
        page_size=page_size,
    )
    return ok(result, "Orders retrieved successfully")


@order_router.get("", response_model=ApiResponse)
async def all_orders(
    status: str | None = None,
    from_date: datetime | None = None,
    to_date: datetime | None = None,
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    _: Principal = Depends(admin_principal),
) -> ApiResponse:
    result = queries.search_orders(
        status=status,
        from_date=from_date,
        to_date=to_date,
        page=page,
        page_size=page_size,
    )
    return ok(result, "Orders retrieved successfully")


@order_router.get("/{order_id}", response_model=ApiResponse)
async def get_order(order_id: str, principal: Principal = Depends(current_principal)) -> ApiResponse:
    order, data = queries.get_order(order_id)
    ensure_owner_or_admin(principal, order.user_id)
    return ok(data, "Order retrieved successfully")


@order_router.put("/{order_id}/status", response_model=ApiResponse)
async def update_order_status(
    order_id: str, body: UpdateOrderStatusRequest, _: Principal = Depends(admin_principal)
) -> ApiResponse:
    current_domain.process(UpdateOrderStatus(order_id=order_id, status=body.status), asynchronous=False)
    _, order = queries.get_order(order_id)
    return ok(order, "Order status updated successfully")
