import json
import os

from app.api.deps import PRODUCTS_FILE
from app.config import settings


def _stored_products():
    with open(os.path.join(settings.DATA_DIR, PRODUCTS_FILE), encoding="utf-8") as fh:
        return json.load(fh)


def test_list_products(client, products, user_headers):
    res = client.get("/articles", headers=user_headers)
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["count"] == 2
    assert [p["id"] for p in body["data"]] == [1, 2]


def test_list_products_without_catalog_file(client, user_headers):
    res = client.get("/articles", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["data"] == []


def test_list_products_rejects_unknown_role(client, headers_for):
    res = client.get("/articles", headers=headers_for(["guest"]))
    assert res.status_code == 403
    assert res.json() == {"success": False, "error": "Forbidden"}


def test_get_product(client, products, user_headers):
    res = client.get("/articles/2", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["data"]["name"] == "Another Product"


def test_get_product_not_found(client, products, user_headers):
    res = client.get("/articles/999", headers=user_headers)
    assert res.status_code == 404
    assert res.json()["error"] == "Product not found"


def test_get_product_invalid_id(client, products, user_headers):
    res = client.get("/articles/abc", headers=user_headers)
    assert res.status_code == 400
    assert res.json()["success"] is False


def test_create_product_as_admin(client, products, admin_headers):
    res = client.post("/articles", json={"name": "  New Thing ", "price": "12.5"}, headers=admin_headers)
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["id"] == 3
    assert data["name"] == "New Thing"
    assert data["price"] == 12.5
    assert "createdAt" in data
    assert _stored_products()[-1]["id"] == 3


def test_create_first_product_gets_id_one(client, admin_headers):
    res = client.post("/articles", json={"name": "First", "price": 1}, headers=admin_headers)
    assert res.status_code == 201
    assert res.json()["data"]["id"] == 1


def test_create_product_forbidden_for_user(client, user_headers):
    res = client.post("/articles", json={"name": "x", "price": 1}, headers=user_headers)
    assert res.status_code == 403


def test_create_product_reports_all_validation_errors(client, admin_headers):
    res = client.post("/articles", json={"name": "", "price": -10}, headers=admin_headers)
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Validation failed"
    assert body["details"] == [
        "Name is required and must be a non-empty string",
        "Price is required and must be a positive number",
    ]


def test_create_product_without_body(client, admin_headers):
    res = client.post("/articles", headers=admin_headers)
    assert res.status_code == 400
    assert len(res.json()["details"]) == 2


def test_create_product_name_too_long(client, admin_headers):
    res = client.post("/articles", json={"name": "A" * 101, "price": 1}, headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["details"] == ["Product name cannot exceed 100 characters"]


def test_update_product(client, products, admin_headers):
    res = client.put("/articles/1", json={"name": "Renamed", "price": 11}, headers=admin_headers)
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["name"] == "Renamed"
    assert data["price"] == 11.0
    assert "updatedAt" in data
    assert _stored_products()[0]["name"] == "Renamed"


def test_update_product_not_found(client, products, admin_headers):
    res = client.put("/articles/999", json={"name": "x", "price": 1}, headers=admin_headers)
    assert res.status_code == 404


def test_update_product_forbidden_for_user(client, products, user_headers):
    res = client.put("/articles/1", json={"name": "x", "price": 1}, headers=user_headers)
    assert res.status_code == 403


def test_delete_product(client, products, admin_headers):
    res = client.delete("/articles/1", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["data"]["id"] == 1
    assert [p["id"] for p in _stored_products()] == [2]


def test_delete_product_not_found(client, products, admin_headers):
    assert client.delete("/articles/999", headers=admin_headers).status_code == 404


def test_clear_products(client, products, admin_headers):
    res = client.delete("/articles", headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["message"] == "All products deleted successfully"
    assert _stored_products() == []
