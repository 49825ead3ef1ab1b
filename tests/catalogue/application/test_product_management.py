"""Application tests for product commands and catalogue queries."""

import pytest
from protean import current_domain
from protean.exceptions import ObjectNotFoundError

from petshop.catalogue import queries
from petshop.catalogue.management import DeleteProduct, UpdateProduct
from petshop.catalogue.product import Product


class TestCreateProduct:
    def test_persists_with_images(self, make_product):
        product_id = make_product(images=[{"url": "front.jpg"}, {"url": "back.jpg"}])

        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Feather Wand"
        assert len(product.images) == 2
        assert product.primary_image_url == "front.jpg"


class TestUpdateProduct:
    def test_overwrites_details(self, make_product):
        product_id = make_product()
        current_domain.process(
            UpdateProduct(
                product_id=product_id,
                name="Feather Wand Deluxe",
                price=14.0,
                stock_quantity=7,
                section="Cats",
                category="Toys",
            ),
            asynchronous=False,
        )

        product = current_domain.repository_for(Product).get(product_id)
        assert product.name == "Feather Wand Deluxe"
        assert product.price == 14.0
        assert product.stock_quantity == 7

    def test_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(
                UpdateProduct(product_id="missing", name="X", price=1.0, section="Cats", category="Toys"),
                asynchronous=False,
            )


class TestDeleteProduct:
    def test_soft_delete_hides_product(self, make_product):
        product_id = make_product()
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)

        assert current_domain.repository_for(Product).get(product_id).is_active is False
        with pytest.raises(ObjectNotFoundError):
            queries.get_product(product_id)
        assert queries.list_products().total_count == 0

    def test_deleting_twice_is_not_found(self, make_product):
        product_id = make_product()
        current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)
        with pytest.raises(ObjectNotFoundError):
            current_domain.process(DeleteProduct(product_id=product_id), asynchronous=False)


class TestListProducts:
    def test_pagination(self, make_product):
        for n in range(25):
            make_product(name=f"Toy {n}")

        page = queries.list_products(page=2, page_size=10)
        assert len(page.items) == 10
        assert page.total_count == 25
        assert page.total_pages == 3
        assert page.has_next_page and page.has_previous_page

    def test_filters(self, make_product):
        make_product(name="Cat Tree", section="Cats", category="Accessories", price=80.0, brand="Purrfect")
        make_product(name="Dog Bed", section="Dogs", category="Accessories", price=45.0, brand="WoofCo")
        make_product(name="Dog Treats", section="Dogs", category="Food", price=6.0, brand="WoofCo")

        def names(**filters):
            return sorted(p["name"] for p in queries.list_products(**filters).items)

        assert names(section="Dogs") == ["Dog Bed", "Dog Treats"]
        assert names(category="Accessories") == ["Cat Tree", "Dog Bed"]
        assert names(min_price=10, max_price=50) == ["Dog Bed"]
        assert names(brand="woof") == ["Dog Bed", "Dog Treats"]
        assert names(search="tree") == ["Cat Tree"]

    def test_search_covers_description_and_brand(self, make_product):
        make_product(name="Chew Rope", description="Knotted cotton rope", brand="WoofCo")
        make_product(name="Ball", description="Bouncy", brand="Cotton Paws")
        make_product(name="Scratcher", description="Cardboard", brand=None)

        names = sorted(p["name"] for p in queries.list_products(search="COTTON").items)
        assert names == ["Ball", "Chew Rope"]

    def test_brand_filter_counts_every_match_across_pages(self, make_product):
        for n in range(12):
            make_product(name=f"Woof Toy {n}", brand="WoofCo")
        for n in range(5):
            make_product(name=f"Purr Toy {n}", brand="PurrFect")

        page = queries.list_products(brand="woofco", page=2, page_size=5)
        assert page.total_count == 12
        assert page.total_pages == 3
        assert len(page.items) == 5
        assert {p["brand"] for p in page.items} == {"WoofCo"}

    def test_page_size_is_clamped(self, make_product):
        make_product()
        assert queries.list_products(page_size=1000).page_size == 100


class TestInventoryQueries:
    def test_low_stock_sorted_ascending(self, make_product):
        make_product(name="Plenty", stock_quantity=50)
        make_product(name="Few", stock_quantity=4)
        make_product(name="None", stock_quantity=0)

        assert [p["name"] for p in queries.low_stock_products()] == ["None", "Few"]

    def test_dashboard_stats(self, make_product):
        make_product(price=10.0, stock_quantity=5)
        make_product(price=2.5, stock_quantity=40)

        stats = queries.dashboard_stats()
        assert stats["total_products"] == 2
        assert stats["total_categories"] == 6
        assert stats["total_inventory_value"] == 150.0
        assert stats["low_stock_count"] == 1
        assert len(stats["recent_products"]) == 2
