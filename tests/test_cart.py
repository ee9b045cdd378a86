from decimal import Decimal

import pytest

from agrigrow.data.models.cart import CartModel
from agrigrow.domain.errors import ConcurrentModification, InvalidInput, NotFound, OutOfStock
from agrigrow.repos.cart_repo import CartRepo
from agrigrow.services.cart_service import CartService
from tests.conftest import auth_headers, make_product, make_user


def _add(client, headers, user, product, quantity=1):
    return client.post(
        "/api/cart/add",
        json={"userId": user.id, "productId": product.id, "quantity": quantity},
        headers=headers,
    )


def _quantity_of(cart: dict, product_id: str):
    for item in cart["items"]:
        if item["productId"] == product_id:
            return item["quantity"]
    return None


# ---------------------------------------------------------------- API

def test_fetch_without_cart_returns_empty_value(client, headers, user):
    resp = client.get(f"/api/cart/{user.id}", headers=headers)

    assert resp.status_code == 200
    body = resp.json()
    assert body["userId"] == user.id
    assert body["items"] == []
    assert Decimal(body["total"]) == 0


def test_add_creates_cart_and_resolves_product(client, headers, user, product):
    resp = _add(client, headers, user, product, 2)

    assert resp.status_code == 200
    cart = resp.json()["cart"]
    assert len(cart["items"]) == 1
    line = cart["items"][0]
    assert line["quantity"] == 2
    assert line["product"]["name"] == "Vermicompost 5kg"
    assert line["product"]["stock"] == 5
    assert Decimal(cart["total"]) == Decimal("398.00")


def test_add_increments_existing_line(client, headers, user, product):
    _add(client, headers, user, product, 1)
    resp = _add(client, headers, user, product, 2)

    cart = resp.json()["cart"]
    assert len(cart["items"]) == 1
    assert _quantity_of(cart, product.id) == 3


def test_add_beyond_stock_fails_and_leaves_cart_unchanged(client, headers, user, product):
    assert _add(client, headers, user, product, 3).status_code == 200

    resp = _add(client, headers, user, product, 3)

    assert resp.status_code == 400
    assert resp.json()["maxQuantity"] == 5
    cart = client.get(f"/api/cart/{user.id}", headers=headers).json()
    assert _quantity_of(cart, product.id) == 3


def test_add_unknown_product_is_not_found(client, headers, user):
    resp = client.post(
        "/api/cart/add",
        json={"userId": user.id, "productId": "5b4f7c1e-9a44-4d3c-8d6f-0c1f2a3b4c5d"},
        headers=headers,
    )
    assert resp.status_code == 404


def test_malformed_product_id_is_invalid_input(client, headers, user):
    resp = client.post(
        "/api/cart/add", json={"userId": user.id, "productId": "not-an-id"}, headers=headers
    )
    assert resp.status_code == 400
    assert "productId" in resp.json()["message"]


def test_toggle_removes_whole_line_and_deletes_empty_cart(client, headers, user, product, db):
    _add(client, headers, user, product, 4)

    resp = client.post(
        "/api/cart/toggle", json={"userId": user.id, "productId": product.id}, headers=headers
    )

    assert resp.status_code == 200
    assert resp.json()["message"] == "Removed from cart"
    assert resp.json()["cart"]["items"] == []
    assert db.query(CartModel).filter_by(user_id=user.id).count() == 0


def test_toggle_missing_item_is_reported_not_raised(client, headers, user, product):
    other = make_product(name="Garden Hose 15m", price="899.00", stock=3)
    _add(client, headers, user, other, 1)

    first = client.post(
        "/api/cart/toggle", json={"userId": user.id, "productId": product.id}, headers=headers
    )

    assert first.status_code == 200
    assert first.json()["message"] == "Product not found in cart"
    assert _quantity_of(first.json()["cart"], other.id) == 1


def test_toggle_twice_second_call_is_noop(client, headers, user, product):
    other = make_product(name="Garden Hose 15m", price="899.00", stock=3)
    _add(client, headers, user, product, 2)
    _add(client, headers, user, other, 1)
    body = {"userId": user.id, "productId": product.id}

    first = client.post("/api/cart/toggle", json=body, headers=headers).json()
    second = client.post("/api/cart/toggle", json=body, headers=headers).json()

    assert first["message"] == "Removed from cart"
    assert second["message"] == "Product not found in cart"
    assert second["cart"] == first["cart"]


def test_set_quantity_creates_and_overwrites(client, headers, user, product):
    body = {"userId": user.id, "productId": product.id, "quantity": 4}
    resp = client.put("/api/cart/quantity", json=body, headers=headers)
    assert _quantity_of(resp.json()["cart"], product.id) == 4

    body["quantity"] = 1
    resp = client.put("/api/cart/quantity", json=body, headers=headers)
    assert _quantity_of(resp.json()["cart"], product.id) == 1


def test_set_quantity_validation(client, headers, user, product):
    _add(client, headers, user, product, 2)
    body = {"userId": user.id, "productId": product.id}

    too_low = client.put("/api/cart/quantity", json={**body, "quantity": 0}, headers=headers)
    too_high = client.put("/api/cart/quantity", json={**body, "quantity": 6}, headers=headers)

    assert too_low.status_code == 400
    assert too_high.status_code == 400
    assert too_high.json()["maxQuantity"] == 5
    cart = client.get(f"/api/cart/{user.id}", headers=headers).json()
    assert _quantity_of(cart, product.id) == 2


def test_cart_of_another_user_is_forbidden(client, headers, product):
    other = make_user(name="Ravi")

    assert client.get(f"/api/cart/{other.id}", headers=headers).status_code == 403
    assert _add(client, headers, other, product).status_code == 403


def test_cart_requires_token(client, user):
    assert client.get(f"/api/cart/{user.id}").status_code == 401


def test_deleting_product_drops_lines_and_empty_carts(client, headers, user, product, admin, db):
    other = make_user(name="Ravi")
    shears = make_product(name="Pruning Shears", price="449.00", stock=10, type="Tools")
    _add(client, headers, user, product, 1)
    _add(client, auth_headers(other), other, product, 2)
    _add(client, auth_headers(other), other, shears, 1)

    resp = client.delete(f"/api/products/delete/{product.id}", headers=auth_headers(admin))

    assert resp.status_code == 200
    assert client.get(f"/api/cart/{user.id}", headers=headers).json()["items"] == []
    assert db.query(CartModel).filter_by(user_id=user.id).count() == 0
    remaining = client.get(f"/api/cart/{other.id}", headers=auth_headers(other)).json()
    assert [i["productId"] for i in remaining["items"]] == [shears.id]
    assert Decimal(remaining["total"]) == Decimal("449.00")


def test_missing_product_id_is_reported_as_missing_field(client, headers, user):
    resp = client.post("/api/cart/add", json={"userId": user.id}, headers=headers)

    assert resp.status_code == 400
    body = resp.json()
    assert body["message"] == "Missing required fields: productId."
    assert body["errors"][0]["loc"] == ["body", "productId"]


def test_wrong_quantity_type_keeps_error_shape(client, headers, user, product):
    resp = client.post(
        "/api/cart/add",
        json={"userId": user.id, "productId": product.id, "quantity": "a few"},
        headers=headers,
    )

    assert resp.status_code == 422
    assert resp.json()["message"] == "Invalid request data."


def test_own_id_in_other_letter_case_is_accepted(client, headers, user):
    resp = client.get(f"/api/cart/{user.id.upper()}", headers=headers)

    assert resp.status_code == 200
    assert resp.json()["userId"] == user.id


def test_malformed_user_id_is_invalid_input_not_forbidden(client, headers):
    resp = client.get("/api/cart/not-an-id", headers=headers)

    assert resp.status_code == 400
    assert resp.json()["message"] == "Invalid userId format."


# ---------------------------------------------------------------- service

def test_quantity_never_exceeds_live_stock(db, user):
    product = make_product(stock=4)
    svc = CartService(db)

    svc.add_item(user.id, product.id, 2)
    svc.add_item(user.id, product.id, 2)
    with pytest.raises(OutOfStock) as exc:
        svc.add_item(user.id, product.id, 1)

    assert exc.value.max_quantity == 4
    assert svc.get_cart(user.id)["items"][0]["quantity"] == 4


def test_service_rejects_bad_input(db, user, product):
    svc = CartService(db)

    with pytest.raises(InvalidInput):
        svc.add_item(user.id, product.id, 0)
    with pytest.raises(InvalidInput):
        svc.set_quantity(user.id, product.id, -1)
    with pytest.raises(NotFound):
        svc.set_quantity(user.id, "5b4f7c1e-9a44-4d3c-8d6f-0c1f2a3b4c5d", 1)


def test_stale_version_is_retried_from_a_fresh_read(db, user, product, monkeypatch):
    svc = CartService(db)
    svc.add_item(user.id, product.id, 1)

    real_update = CartRepo.update_cart_version
    calls = []

    def lose_first_write(self, cart_id, old_version, new_data):
        calls.append(old_version)
        if len(calls) == 1:
            # simulate a concurrent request bumping the version between our read and write
            return 0
        return real_update(self, cart_id, old_version, new_data)

    monkeypatch.setattr(CartRepo, "update_cart_version", lose_first_write)

    cart = svc.add_item(user.id, product.id, 1)

    assert len(calls) == 2
    assert cart["items"][0]["quantity"] == 2


def test_persistent_conflict_surfaces_and_keeps_state(db, user, product, monkeypatch):
    svc = CartService(db)
    svc.add_item(user.id, product.id, 1)

    monkeypatch.setattr(CartRepo, "update_cart_version", lambda self, *a, **kw: 0)

    with pytest.raises(ConcurrentModification):
        svc.add_item(user.id, product.id, 1)

    db.expire_all()
    assert svc.get_cart(user.id)["items"][0]["quantity"] == 1


def test_stock_race_between_users_is_not_prevented(db, product):
    # stock is checked, not reserved: two carts may jointly hold more than is available
    first, second = make_user(name="Meena"), make_user(name="Kiran")
    svc = CartService(db)

    svc.add_item(first.id, product.id, 5)
    svc.add_item(second.id, product.id, 5)

    assert svc.get_cart(first.id)["items"][0]["quantity"] == 5
    assert svc.get_cart(second.id)["items"][0]["quantity"] == 5
