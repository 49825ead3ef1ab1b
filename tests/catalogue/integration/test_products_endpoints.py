"""Integration tests for the Products API via TestClient."""

from protean import current_domain

from petshop.catalogue.product import Product

PRODUCT = {
    "name": "Catnip Mouse",
    "description": "Organic catnip inside",
    "brand": "PurrFect",
    "price": 5.5,
    "stock_quantity": 30,
    "section": "Cats",
    "category": "Toys",
    "images": [{"url": "https://img.example.com/mouse.jpg"}],
}


class TestBrowse:
    def test_list_is_public_and_enveloped(self, client, make_product):
        make_product()
        response = client.get("/api/products")
        assert response.status_code == 200

        body = response.json()
        assert body["success"] is True
        assert body["message"] == "Products retrieved successfully"
        assert body["data"]["total_count"] == 1

    def test_list_filters_by_enum(self, client, make_product):
        make_product(section="Dogs")
        make_product(section="Cats")
        data = client.get("/api/products", params={"section": "Dogs"}).json()["data"]
        assert [p["section"] for p in data["items"]] == ["Dogs"]

    def test_invalid_enum_is_bad_request(self, client):
        response = client.get("/api/products", params={"section": "Fish"})
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_get_unknown_product(self, client):
        response = client.get("/api/products/missing")
        assert response.status_code == 404
        assert response.json()["message"] == "Product not found"


class TestManage:
    def test_create_requires_token(self, client):
        assert client.post("/api/products", json=PRODUCT).status_code == 401

    def test_create_requires_admin(self, client, auth_headers):
        assert client.post("/api/products", json=PRODUCT, headers=auth_headers()).status_code == 403

    def test_create(self, client, admin_headers):
        response = client.post("/api/products", json=PRODUCT, headers=admin_headers)
        assert response.status_code == 201

        data = response.json()["data"]
        assert data["name"] == "Catnip Mouse"
        assert data["images"][0]["is_primary"] is True
        assert current_domain.repository_for(Product).get(data["id"]).stock_quantity == 30

    def test_create_with_invalid_price(self, client, admin_headers):
        response = client.post("/api/products", json={**PRODUCT, "price": 0}, headers=admin_headers)
        assert response.status_code == 400

    def test_update(self, client, admin_headers, make_product):
        product_id = make_product()
        response = client.put(
            f"/api/products/{product_id}", json={**PRODUCT, "price": 7.0}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["data"]["price"] == 7.0

    def test_delete_is_soft(self, client, admin_headers, make_product):
        product_id = make_product()
        assert client.delete(f"/api/products/{product_id}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/products/{product_id}").status_code == 404
        assert current_domain.repository_for(Product).get(product_id).is_active is False

    def test_low_stock(self, client, admin_headers, make_product):
        make_product(name="Almost gone", stock_quantity=2)
        make_product(name="Plenty", stock_quantity=200)
        data = client.get("/api/products/low-stock", headers=admin_headers).json()["data"]
        assert [p["name"] for p in data] == ["Almost gone"]
