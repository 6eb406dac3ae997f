"""
Component tests for the category and product endpoints.
"""
import pytest
from fastapi.testclient import TestClient


@pytest.fixture
def category(test_client: TestClient):
    return test_client.post("/api/categories", json={"name": "Test Category"}).json()


def product_body(category_id, **overrides):
    body = {
        "name": "Test Name",
        "price": 100,
        "description": "Test Description",
        "inventory": 10,
        "taxRate": 0.4,
        "categoryId": category_id,
    }
    body.update(overrides)
    return body


class TestHealth:
    def test_health(self, test_client: TestClient):
        response = test_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestCategoryRoutes:
    def test_create_category(self, test_client: TestClient):
        response = test_client.post("/api/categories", json={"name": "Electronics"})

        assert response.status_code == 201
        data = response.json()
        assert data["name"] == "Electronics"
        assert "id" in data

    def test_duplicate_category(self, test_client: TestClient):
        test_client.post("/api/categories", json={"name": "Electronics"})

        response = test_client.post("/api/categories", json={"name": "Electronics"})

        assert response.status_code == 400

    def test_empty_name_rejected(self, test_client: TestClient):
        response = test_client.post("/api/categories", json={"name": ""})

        assert response.status_code == 400

    def test_list_categories(self, test_client: TestClient):
        for name in ("Electronics", "Books", "Clothing"):
            test_client.post("/api/categories", json={"name": name})

        response = test_client.get("/api/categories")

        assert response.status_code == 200
        assert [c["name"] for c in response.json()] == ["Electronics", "Books", "Clothing"]

    def test_get_missing_category(self, test_client: TestClient):
        response = test_client.get("/api/categories/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Category with id 999 does not exist"


class TestProductRoutes:
    def test_create_product(self, test_client: TestClient, category):
        response = test_client.post("/api/products", json=product_body(category["id"]))

        assert response.status_code == 201
        data = response.json()
        assert "id" in data
        assert data["name"] == "Test Name"
        assert data["price"] == 100
        assert data["description"] == "Test Description"
        assert data["inventory"] == 10
        assert data["taxRate"] == 0.4
        assert data["categoryId"] == category["id"]

    def test_create_with_missing_category(self, test_client: TestClient):
        response = test_client.post("/api/products", json=product_body(999))

        assert response.status_code == 400
        assert response.json()["detail"] == "Category with id 999 does not exist"

    @pytest.mark.parametrize(
        "overrides",
        [{"price": -1}, {"taxRate": 1.5}, {"inventory": -1}, {"inventory": "10"}],
    )
    def test_invalid_product_fields(self, test_client: TestClient, category, overrides):
        response = test_client.post(
            "/api/products", json=product_body(category["id"], **overrides)
        )

        assert response.status_code == 400

    def test_get_product(self, test_client: TestClient, category):
        created = test_client.post("/api/products", json=product_body(category["id"])).json()

        response = test_client.get(f"/api/products/{created['id']}")

        assert response.status_code == 200
        assert response.json()["id"] == created["id"]

    def test_get_missing_product(self, test_client: TestClient):
        response = test_client.get("/api/products/999")

        assert response.status_code == 404
        assert response.json()["detail"] == "Product not found"

    def test_update_product(self, test_client: TestClient, category):
        created = test_client.post("/api/products", json=product_body(category["id"])).json()

        response = test_client.put(
            f"/api/products/{created['id']}", json={"name": "Renamed", "inventory": 3}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["name"] == "Renamed"
        assert data["inventory"] == 3
        assert data["description"] == "Test Description"

    def test_update_with_missing_category(self, test_client: TestClient, category):
        created = test_client.post("/api/products", json=product_body(category["id"])).json()

        response = test_client.put(f"/api/products/{created['id']}", json={"categoryId": 999})

        assert response.status_code == 400

    def test_delete_product(self, test_client: TestClient, category):
        created = test_client.post("/api/products", json=product_body(category["id"])).json()

        assert test_client.delete(f"/api/products/{created['id']}").status_code == 204
        assert test_client.delete(f"/api/products/{created['id']}").status_code == 404

    def test_delete_product_in_a_cart_conflicts(self, test_client: TestClient, category, foreign_keys):
        created = test_client.post("/api/products", json=product_body(category["id"])).json()
        cart = test_client.post("/api/carts/1").json()
        test_client.post(
            f"/api/carts/{cart['id']}/items",
            json={"productId": created["id"], "quantity": 1},
        )

        response = test_client.delete(f"/api/products/{created['id']}")

        assert response.status_code == 409
        assert response.json()["detail"] == "Product is still referenced by cart items"
        assert test_client.get(f"/api/products/{created['id']}").status_code == 200

    def test_products_for_category(self, test_client: TestClient):
        first = test_client.post("/api/categories", json={"name": "Test Category #1"}).json()
        second = test_client.post("/api/categories", json={"name": "Test Category #2"}).json()
        for name, category_id in [
            ("Product A", first["id"]),
            ("Product B", first["id"]),
            ("Product C", second["id"]),
        ]:
            test_client.post(
                "/api/products",
                json=product_body(category_id, name=name, taxRate=0, inventory=20),
            )

        response = test_client.get(f"/api/products/category/{first['id']}")

        assert response.status_code == 200
        assert [p["name"] for p in response.json()] == ["Product A", "Product B"]

        response = test_client.get(
            f"/api/products/category/{first['id']}", params={"sort": "name,DESC", "limit": 1}
        )
        assert [p["name"] for p in response.json()] == ["Product B"]

        response = test_client.get(
            "/api/products/categories", params={"categories": f"{first['id']},{second['id']}"}
        )
        assert len(response.json()) == 3

    def test_categories_parameter_required(self, test_client: TestClient):
        response = test_client.get("/api/products/categories")

        assert response.status_code == 400
        assert response.json()["detail"] == "Categories parameter is required"

    def test_bad_sort(self, test_client: TestClient, category):
        response = test_client.get(
            f"/api/products/category/{category['id']}", params={"sort": "secret,ASC"}
        )

        assert response.status_code == 400
