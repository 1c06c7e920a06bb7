import json
import os

import pytest

from app.api.deps import CART_FILE, PRODUCTS_FILE
from app.config import settings


def test_get_empty_cart(client, user_headers):
    res = client.get("/cart", headers=user_headers)
    assert res.status_code == 200
    assert res.json() == {"success": True, "data": {"items": [], "balance": 0, "itemCount": 0}}


def test_get_cart_requires_token(client):
    res = client.get("/cart")
    assert res.status_code == 401
    assert res.json()["success"] is False


def test_add_item_to_cart(client, products, user_headers):
    res = client.post("/cart", json={"productId": 1, "quantity": 2}, headers=user_headers)
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Product added to cart successfully"
    assert body["data"]["id"] == 1
    assert "addedAt" in body["data"]
    assert body["cart"]["balance"] == pytest.approx(21.0)


def test_add_item_defaults_quantity_to_one(client, products, user_headers):
    res = client.post("/cart", json={"productId": 2}, headers=user_headers)
    assert res.status_code == 201
    assert res.json()["data"]["quantity"] == 1


def test_add_same_product_increases_quantity(client, products, user_headers):
    client.post("/cart", json={"productId": 1, "quantity": 2}, headers=user_headers)
    res = client.post("/cart", json={"productId": 1, "quantity": 3}, headers=user_headers)
    assert res.json()["data"]["quantity"] == 5
    assert len(res.json()["cart"]["items"]) == 1


def test_add_same_product_cannot_exceed_max_quantity(client, products, user_headers):
    client.post("/cart", json={"productId": 1, "quantity": 1000}, headers=user_headers)
    res = client.post("/cart", json={"productId": 1, "quantity": 1000}, headers=user_headers)
    assert res.status_code == 400
    assert res.json()["details"] == ["Quantity cannot exceed 1000"]
    data = client.get("/cart", headers=user_headers).json()["data"]
    assert data["items"][0]["quantity"] == 1000


def test_add_unknown_product(client, products, user_headers):
    res = client.post("/cart", json={"productId": 999, "quantity": 1}, headers=user_headers)
    assert res.status_code == 404
    assert res.json() == {"success": False, "error": "Product not found"}


@pytest.mark.parametrize(
    "payload, message",
    [
        ({"productId": "not-a-number", "quantity": 1}, "Product ID must be a number"),
        ({"productId": -1, "quantity": 1}, "Product ID must be positive"),
        ({"productId": 1.5, "quantity": 1}, "Product ID must be an integer"),
        ({"quantity": 1}, "Product ID is required"),
        ({"productId": 1, "quantity": 0}, "Quantity must be at least 1"),
        ({"productId": 1, "quantity": -5}, "Quantity must be at least 1"),
        ({"productId": 1, "quantity": 1001}, "Quantity cannot exceed 1000"),
        ({"productId": 1, "quantity": "not-a-number"}, "Quantity must be a number"),
    ],
)
def test_add_item_validation(client, products, user_headers, payload, message):
    res = client.post("/cart", json=payload, headers=user_headers)
    assert res.status_code == 400
    body = res.json()
    assert body["success"] is False
    assert message in body["details"]


def test_cart_summary_with_details(client, products, user_headers):
    client.post("/cart", json={"productId": 1, "quantity": 2}, headers=user_headers)
    client.post("/cart", json={"productId": 2, "quantity": 1}, headers=user_headers)
    data = client.get("/cart", headers=user_headers).json()["data"]
    assert data["balance"] == pytest.approx(46.99)
    assert data["itemCount"] == 3
    assert data["items"][0]["subtotal"] == pytest.approx(21.0)
    assert data["items"][1]["product"]["name"] == "Another Product"


def test_orphaned_line_after_product_delete(client, products, user_headers, admin_headers):
    client.post("/cart", json={"productId": 1, "quantity": 2}, headers=user_headers)
    client.delete("/articles/1", headers=admin_headers)
    data = client.get("/cart", headers=user_headers).json()["data"]
    assert data["items"][0]["product"] is None
    assert data["items"][0]["subtotal"] == 0
    assert data["balance"] == 0
    assert data["itemCount"] == 2


def test_get_cart_degrades_on_corrupt_file(client, products, user_headers):
    with open(os.path.join(settings.DATA_DIR, CART_FILE), "w", encoding="utf-8") as fh:
        fh.write("{ not json")
    res = client.get("/cart", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["data"] == {"items": [], "balance": 0, "itemCount": 0}


@pytest.mark.parametrize(
    "file_name, content",
    [(PRODUCTS_FILE, {"oops": 1}), (CART_FILE, [1, 2]), (CART_FILE, {"items": []})],
)
def test_get_cart_degrades_on_wrong_shape(client, products, user_headers, file_name, content):
    client.post("/cart", json={"productId": 1, "quantity": 1}, headers=user_headers)
    with open(os.path.join(settings.DATA_DIR, file_name), "w", encoding="utf-8") as fh:
        json.dump(content, fh)
    res = client.get("/cart", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["data"] == {"items": [], "balance": 0, "itemCount": 0}


def test_update_cart_item(client, products, user_headers):
    client.post("/cart", json={"productId": 1, "quantity": 1}, headers=user_headers)
    res = client.put("/cart/1", json={"quantity": 5}, headers=user_headers)
    assert res.status_code == 200
    assert res.json()["data"]["quantity"] == 5
    assert res.json()["cart"]["itemCount"] == 5


def test_update_missing_cart_item(client, products, user_headers):
    res = client.put("/cart/999", json={"quantity": 5}, headers=user_headers)
    assert res.status_code == 404
    assert res.json()["error"] == "Cart item not found"


def test_update_cart_item_invalid_quantity(client, products, user_headers):
    client.post("/cart", json={"productId": 1, "quantity": 1}, headers=user_headers)
    res = client.put("/cart/1", json={"quantity": -1}, headers=user_headers)
    assert res.status_code == 400
    assert res.json()["details"] == ["Quantity must be at least 1"]


def test_remove_cart_item(client, products, user_headers):
    client.post("/cart", json={"productId": 1, "quantity": 1}, headers=user_headers)
    res = client.delete("/cart/1", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["message"] == "Item removed from cart successfully"
    assert res.json()["cart"]["items"] == []


def test_remove_missing_cart_item(client, products, user_headers):
    assert client.delete("/cart/999", headers=user_headers).status_code == 404


def test_clear_cart(client, products, user_headers):
    client.post("/cart", json={"productId": 1, "quantity": 1}, headers=user_headers)
    res = client.delete("/cart", headers=user_headers)
    assert res.status_code == 200
    assert res.json()["message"] == "Cart cleared successfully"
    with open(os.path.join(settings.DATA_DIR, CART_FILE), encoding="utf-8") as fh:
        assert json.load(fh) == []
    assert os.path.exists(os.path.join(settings.DATA_DIR, PRODUCTS_FILE))
