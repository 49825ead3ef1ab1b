"""Shared BDD fixtures and step definitions for checkout scenarios."""

import pytest
from protean import current_domain
from pytest_bdd import given, parsers, then

from petshop.cart.items import AddToCart
from petshop.cart.queries import cart_view
from petshop.catalogue.product import Product
from petshop.ordering.order import Order


@pytest.fixture()
def shop():
    """Scenario state: product ids by name, the last order id and any captured error."""
    return {"products": {}, "order_id": None, "error": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given(parsers.cfparse('a product "{name}" priced {price:f} with {stock:d} in stock'))
def product_in_stock(shop, make_product, name, price, stock):
    shop["products"][name] = make_product(name=name, price=price, stock_quantity=stock)


@given(parsers.cfparse('"{user_id}" has {quantity:d} of "{name}" in the cart'))
def item_in_cart(shop, user_id, quantity, name):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=shop["products"][name], quantity=quantity),
        asynchronous=False,
    )


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then(parsers.cfparse('"{name}" has {stock:d} in stock'))
def product_stock_is(shop, name, stock):
    product = current_domain.repository_for(Product).get(shop["products"][name])
    assert product.stock_quantity == stock


@then(parsers.cfparse('the cart of "{user_id}" holds {count:d} items'))
def cart_holds(user_id, count):
    assert cart_view(user_id)["total_items"] == count


@then(parsers.cfparse("{count:d} orders exist"))
def orders_exist(count):
    assert current_domain.repository_for(Order)._dao.query.all().total == count


@then(parsers.cfparse('checkout fails with "{message}"'))
def checkout_failed(shop, message):
    assert shop["error"] is not None
    assert message in str(shop["error"].messages)
