"""Integration tests for the Admin API via TestClient."""

import pytest
from protean import current_domain

from petshop.reviews.submission import SubmitReview


@pytest.fixture
def review_ids(make_product, make_user, completed_order):
    product_id = make_product(name="Dog Harness")
    ids = []
    for rating in (5, 2):
        user_id, _ = make_user()
        order_id = completed_order(user_id, product_id)
        ids.append(
            current_domain.process(
                SubmitReview(
                    user_id=user_id, product_id=product_id, order_id=order_id, rating=rating, comment="Fits well"
                ),
                asynchronous=False,
            )
        )
    return ids


class TestAccess:
    @pytest.mark.parametrize(
        "path", ["/api/admin/dashboard/stats", "/api/admin/reviews", "/api/admin/reviews/stats"]
    )
    def test_shoppers_are_forbidden(self, client, auth_headers, path):
        assert client.get(path, headers=auth_headers()).status_code == 403

    def test_anonymous_is_unauthorized(self, client):
        assert client.get("/api/admin/dashboard/stats").status_code == 401


class TestDashboard:
    def test_stats(self, client, admin_headers, make_product):
        make_product(price=4.0, stock_quantity=5)
        data = client.get("/api/admin/dashboard/stats", headers=admin_headers).json()["data"]
        assert data["total_products"] == 1
        assert data["total_inventory_value"] == 20.0
        assert data["low_stock_count"] == 1

    def test_low_stock(self, client, admin_headers, make_product):
        make_product(stock_quantity=1)
        data = client.get("/api/admin/products/low-stock", headers=admin_headers).json()["data"]
        assert len(data) == 1


class TestReviewModeration:
    def test_list_and_filter(self, client, admin_headers, review_ids):
        data = client.get("/api/admin/reviews", params={"max_rating": 3}, headers=admin_headers).json()["data"]
        assert [r["id"] for r in data["items"]] == [review_ids[1]]
        assert data["page_size"] == 20

    def test_details(self, client, admin_headers, review_ids):
        data = client.get(f"/api/admin/reviews/{review_ids[0]}", headers=admin_headers).json()["data"]
        assert data["status"] == "Approved"
        assert data["product_name"] == "Dog Harness"

    def test_stats(self, client, admin_headers, review_ids):
        data = client.get("/api/admin/reviews/stats", headers=admin_headers).json()["data"]
        assert data["total_reviews"] == 2
        assert data["average_rating"] == 3.5

    def test_moderate(self, client, admin_headers, review_ids):
        response = client.post(
            "/api/admin/reviews/moderate", json={"review_id": review_ids[0], "action": "reject"}, headers=admin_headers
        )
        assert response.status_code == 200
        assert response.json()["message"] == "Review rejected successfully"

    def test_invalid_action(self, client, admin_headers, review_ids):
        response = client.post(
            "/api/admin/reviews/moderate", json={"review_id": review_ids[0], "action": "hide"}, headers=admin_headers
        )
        assert response.status_code == 400
        assert response.json()["message"] == "Invalid action. Use 'approve', 'reject', or 'delete'"

    def test_bulk(self, client, admin_headers, review_ids):
        response = client.post(
            "/api/admin/reviews/moderate/bulk",
            json={"review_ids": review_ids, "action": "approve"},
            headers=admin_headers,
        )
        assert response.json()["message"] == "2 review(s) approved successfully"

    def test_bulk_with_no_known_ids(self, client, admin_headers):
        response = client.post(
            "/api/admin/reviews/moderate/bulk",
            json={"review_ids": ["missing"], "action": "approve"},
            headers=admin_headers,
        )
        assert response.status_code == 404

    def test_delete(self, client, admin_headers, review_ids):
        assert client.delete(f"/api/admin/reviews/{review_ids[0]}", headers=admin_headers).status_code == 200
        assert client.get(f"/api/admin/reviews/{review_ids[0]}", headers=admin_headers).status_code == 404


class TestUserDeactivation:
    def test_deactivated_user_cannot_log_in_or_refresh(self, client, admin_headers, make_user):
        user_id, pair = make_user(email="jane@example.com", password="s3cret-pass")

        response = client.post(f"/api/admin/users/{user_id}/deactivate", headers=admin_headers)
        assert response.status_code == 200
        assert response.json()["message"] == "User deactivated"

        login = client.post("/api/auth/login", json={"email": "jane@example.com", "password": "s3cret-pass"})
        assert login.status_code == 401
        refresh = client.post("/api/auth/refresh", json={"refresh_token": pair["refresh_token"]})
        assert refresh.status_code == 401

    def test_unknown_user(self, client, admin_headers):
        assert client.post("/api/admin/users/no-such-user/deactivate", headers=admin_headers).status_code == 404

    def test_shoppers_are_forbidden(self, client, auth_headers, make_user):
        user_id, _ = make_user()
        assert client.post(f"/api/admin/users/{user_id}/deactivate", headers=auth_headers()).status_code == 403
