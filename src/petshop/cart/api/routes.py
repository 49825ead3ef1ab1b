"""FastAPI endpoints for the authenticated user's cart."""

from fastapi import APIRouter, Depends
from protean.utils.globals import current_domain

from petshop.cart.api.schemas import AddToCartRequest, UpdateCartItemRequest
from petshop.cart.items import AddToCart, ClearCart, RemoveFromCart, UpdateCartItem
from petshop.cart.queries import cart_view
from petshop.shared.envelope import ApiResponse, ok
from petshop.shared.policy import Principal
from petshop.shared.security import current_principal

cart_router = APIRouter(prefix="/api/cart", tags=["cart"])


@cart_router.get("", response_model=ApiResponse)
async def get_cart(principal: Principal = Depends(current_principal)) -> ApiResponse:
    return ok(cart_view(principal.user_id), "Cart retrieved successfully")


@cart_router.post("/items", response_model=ApiResponse)
async def add_to_cart(body: AddToCartRequest, principal: Principal = Depends(current_principal)) -> ApiResponse:
    command = AddToCart(user_id=principal.user_id, product_id=body.product_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return ok(cart_view(principal.user_id), "Item added to cart successfully")


@cart_router.put("/items/{item_id}", response_model=ApiResponse)
async def update_cart_item(
    item_id: str, body: UpdateCartItemRequest, principal: Principal = Depends(current_principal)
) -> ApiResponse:
    command = UpdateCartItem(user_id=principal.user_id, item_id=item_id, quantity=body.quantity)
    current_domain.process(command, asynchronous=False)
    return ok(cart_view(principal.user_id), "Cart item updated successfully")


@cart_router.delete("/items/{item_id}", response_model=ApiResponse)
async def remove_cart_item(item_id: str, principal: Principal = Depends(current_principal)) -> ApiResponse:
    current_domain.process(RemoveFromCart(user_id=principal.user_id, item_id=item_id), asynchronous=False)
    return ok(True, "Item removed from cart successfully")


@cart_router.delete("", response_model=ApiResponse)
async def clear_cart(principal: Principal = Depends(current_principal)) -> ApiResponse:
    current_domain.process(ClearCart(user_id=principal.user_id), asynchronous=False)
    return ok(True, "Cart cleared successfully")
