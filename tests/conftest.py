import json
import os
from datetime import UTC, datetime
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Select the config overlay before the domain is imported."""
    os.environ["PROTEAN_ENV"] = session.config.option.env


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path or "/bdd/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _petshop_domain():
    """Initialize the petshop domain once per session."""
    from petshop.domain import petshop

    petshop.init()
    return petshop


@pytest.fixture(scope="session", autouse=True)
def setup_db(_petshop_domain):
    from petshop.utils.db import drop_db, setup_db

    setup_db(_petshop_domain)

    yield

    drop_db(_petshop_domain)


@pytest.fixture(autouse=True)
def run_around_tests(_petshop_domain):
    """Push the domain context for each test and wipe all data afterwards."""
    ctx = _petshop_domain.domain_context()
    ctx.push()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()
    current_domain.event_store.store._data_reset()

    ctx.pop()


# ---------------------------------------------------------------------------
# Builders shared by every test layer
# ---------------------------------------------------------------------------
@pytest.fixture
def make_product():
    """Create and persist an active product through its command."""
    from protean import current_domain

    from petshop.catalogue.management import CreateProduct

    def _make(**overrides):
        defaults = {
            "name": "Feather Wand",
            "description": "Teaser toy with real feathers",
            "brand": "PurrFect",
            "price": 10.0,
            "stock_quantity": 50,
            "section": "Cats",
            "category": "Toys",
        }
        defaults.update(overrides)
        if isinstance(defaults.get("images"), list):
            defaults["images"] = json.dumps(defaults["images"])
        return current_domain.process(CreateProduct(**defaults), asynchronous=False)

    return _make


@pytest.fixture
def make_user():
    """Register a user and return ``(user_id, token_pair)``."""
    from petshop.identity import sessions

    counter = {"n": 0}

    def _make(email=None, password="s3cret-pass", first_name="Jane", last_name="Doe", role=None):
        counter["n"] += 1
        pair = sessions.register(
            email or f"user{counter['n']}@example.com",
            password,
            first_name,
            last_name,
            role=role,
        )
        return pair["user"]["id"], pair

    return _make


@pytest.fixture
def completed_order():
    """Check out ``product_id`` for ``user_id`` and mark the order Completed."""
    from protean import current_domain

    from petshop.cart.items import AddToCart
    from petshop.ordering.checkout import PlaceOrder
    from petshop.ordering.status import UpdateOrderStatus

    def _complete(user_id, product_id, quantity=1):
        current_domain.process(
            AddToCart(user_id=user_id, product_id=product_id, quantity=quantity), asynchronous=False
        )
        order_id = current_domain.process(
            PlaceOrder(user_id=user_id, shipping_address="1 Paw Lane"), asynchronous=False
        )
        for status in ("InProcessing", "Completed"):
            current_domain.process(UpdateOrderStatus(order_id=order_id, status=status), asynchronous=False)
        return order_id

    return _complete


# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------
@pytest.fixture
def client(_petshop_domain):
    from fastapi import FastAPI, Request
    from fastapi.testclient import TestClient

    from petshop.admin.api import admin_router
    from petshop.cart.api import cart_router
    from petshop.catalogue.api import product_router
    from petshop.identity.api import auth_router
    from petshop.ordering.api import order_router
    from petshop.reviews.api import review_router
    from petshop.shared.http_errors import register_exception_handlers

    app = FastAPI()

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        with _petshop_domain.domain_context():
            return await call_next(request)

    register_exception_handlers(app)
    for router in (auth_router, product_router, cart_router, order_router, review_router, admin_router):
        app.include_router(router)

    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def auth_headers():
    """Bearer headers for an arbitrary principal, no stored user required."""
    from petshop.identity.tokens import create_access_token

    def _headers(user_id="user-001", roles=("User",), email="shopper@example.com", now=None):
        token, _ = create_access_token(user_id, email, roles, now=now or datetime.now(UTC))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def admin_headers(auth_headers):
    return auth_headers(user_id="admin-001", roles=("Admin",), email="admin@example.com")
