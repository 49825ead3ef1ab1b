"""Pet shop FastAPI application.

Processes commands synchronously over HTTP. Every request runs inside the
petshop domain context and carries a ``request_id`` in its log lines.

Usage:
    uvicorn app:app --app-dir src --host 0.0.0.0 --port 8000 --reload
"""

import uuid

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from petshop import config
from petshop.domain import petshop
from petshop.utils.logging import add_context, clear_context, configure_logging, get_logger

# ---------------------------------------------------------------------------
# Domain initialization
# ---------------------------------------------------------------------------
# PROTEAN_ENV selects the config overlay from domain.toml
# (memory by default, "production" for PostgreSQL, "sqlite" for a local file).
configure_logging(log_dir="logs", log_file_prefix="petshop")
petshop.init()

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# FastAPI app
# ---------------------------------------------------------------------------
app = FastAPI(
    title="Pet Shop API",
    description="Catalogue, cart, checkout, reviews and admin moderation",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def domain_context_middleware(request: Request, call_next):
    """Push the petshop domain context and tag log lines with a request id."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    add_context(request_id=request_id, method=request.method, path=request.url.path)
    try:
        with petshop.domain_context():
            response = await call_next(request)
    finally:
        clear_context()

    response.headers["X-Request-ID"] = request_id
    return response


# ---------------------------------------------------------------------------
# Error mapping and routers
# ---------------------------------------------------------------------------
from petshop.admin.api import admin_router  # noqa: E402
from petshop.cart.api import cart_router  # noqa: E402
from petshop.catalogue.api import product_router  # noqa: E402
from petshop.identity.api import auth_router  # noqa: E402
from petshop.ordering.api import order_router  # noqa: E402
from petshop.reviews.api import review_router  # noqa: E402
from petshop.shared.http_errors import register_exception_handlers  # noqa: E402

register_exception_handlers(app)

app.include_router(auth_router)
app.include_router(product_router)
app.include_router(cart_router)
app.include_router(order_router)
app.include_router(review_router)
app.include_router(admin_router)


# ---------------------------------------------------------------------------
# Health
# ---------------------------------------------------------------------------
@app.get("/health")
async def health():
    return JSONResponse(content={"status": "ok", "domain": petshop.name})
