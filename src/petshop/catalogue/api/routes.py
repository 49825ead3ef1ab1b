"""FastAPI endpoints for browsing and managing products."""

from fastapi import APIRouter, Depends, Query
from protean.utils.globals import current_domain

from petshop.catalogue import queries
from petshop.catalogue.api.schemas import ProductRequest
from petshop.catalogue.management import CreateProduct, DeleteProduct, UpdateProduct
from petshop.catalogue.product import AnimalSection, ProductCategory, ProductState
from petshop.shared.envelope import ApiResponse, ok
from petshop.shared.policy import Principal
from petshop.shared.security import admin_principal

product_router = APIRouter(prefix="/api/products", tags=["products"])


@product_router.get("", response_model=ApiResponse)
async def list_products(
    page: int = Query(1, ge=1),
    page_size: int = Query(10, ge=1, le=100),
    min_price: float | None = Query(None, ge=0),
    max_price: float | None = Query(None, ge=0),
    section: AnimalSection | None = None,
    category: ProductCategory | None = None,
    state: ProductState | None = None,
    brand: str | None = None,
    search: str | None = None,
) -> ApiResponse:
    result = queries.list_products(
        page=page,
        page_size=page_size,
        min_price=min_price,
        max_price=max_price,
        section=section.value if section else None,
        category=category.value if category else None,
        state=state.value if state else None,
        brand=brand,
        search=search,
    )
    return ok(result.to_dict(), "Products retrieved successfully")


@product_router.get("/low-stock", response_model=ApiResponse)
async def low_stock_products(_: Principal = Depends(admin_principal)) -> ApiResponse:
    return ok(queries.low_stock_products(), "Low stock products retrieved successfully")


@product_router.get("/{product_id}", response_model=ApiResponse)
async def get_product(product_id: str) -> ApiResponse:
    return ok(queries.get_product(product_id), "Product retrieved successfully")


@product_router.post("", status_code=201, response_model=ApiResponse)
async def create_product(body: ProductRequest, _: Principal = Depends(admin_principal)) -> ApiResponse:
    product_id = current_domain.process(CreateProduct(**body.command_kwargs()), asynchronous=False)
    return ok(queries.get_product(product_id), "Product created successfully")


@product_router.put("/{product_id}", response_model=ApiResponse)
async def update_product(
    product_id: str, body: ProductRequest, _: Principal = Depends(admin_principal)
) -> ApiResponse:
    current_domain.process(UpdateProduct(product_id=product_id, **body.command_kwargs()), asynchronous=False)
    return ok(queries.get_product(product_id), "Product updated successfully")


@product_router.delete("/{product_id}", response_model=ApiResponse)
async def delete_product(product_id: str, _: Principal = Depends(admin_principal)) -> ApiResponse:
    current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
    return ok(True, "Product deleted successfully")
