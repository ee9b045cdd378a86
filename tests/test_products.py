from agrigrow.data.seed import seed, DEMO_PRODUCTS
from tests.conftest import make_product

NEW_PRODUCT = {
    "name": "Drip Irrigation Kit",
    "price": "1299.00",
    "stock": 20,
    "type": "Irrigation",
    "brand": "AquaLine",
    "sku": "IRR-DK50",
}


def test_admin_adds_updates_and_deletes(client, admin_headers):
    created = client.post("/api/products/add", json=NEW_PRODUCT, headers=admin_headers)
    assert created.status_code == 201
    product_id = created.json()["product"]["id"]
    assert created.json()["product"]["inStock"] is True

    updated = client.put(
        f"/api/products/update/{product_id}", json={"stock": 0}, headers=admin_headers
    )
    assert updated.json()["product"]["stock"] == 0
    assert updated.json()["product"]["inStock"] is False
    assert updated.json()["product"]["name"] == "Drip Irrigation Kit"

    deleted = client.delete(f"/api/products/delete/{product_id}", headers=admin_headers)
    assert deleted.status_code == 200
    assert client.get(f"/api/products/{product_id}").status_code == 404


def test_catalog_writes_are_admin_only(client, headers):
    assert client.post("/api/products/add", json=NEW_PRODUCT, headers=headers).status_code == 403
    assert client.post("/api/products/add", json=NEW_PRODUCT).status_code == 401


def test_schema_rejects_negative_stock_and_free_products(client, admin_headers):
    assert client.post("/api/products/add", json={**NEW_PRODUCT, "stock": -1}, headers=admin_headers).status_code == 422
    assert client.post("/api/products/add", json={**NEW_PRODUCT, "price": "0"}, headers=admin_headers).status_code == 422


def test_list_filters_by_type_and_search(client):
    make_product(name="Garden Hose 15m", type="Irrigation", brand="AquaLine")
    make_product(name="Pruning Shears", type="Tools", brand="FieldPro")

    by_type = client.get("/api/products", params={"type": "Tools"}).json()
    by_brand = client.get("/api/products", params={"search": "aqua"}).json()

    assert [p["name"] for p in by_type] == ["Pruning Shears"]
    assert [p["name"] for p in by_brand] == ["Garden Hose 15m"]


def test_unknown_and_malformed_ids(client, admin_headers):
    assert client.get("/api/products/5b4f7c1e-9a44-4d3c-8d6f-0c1f2a3b4c5d").status_code == 404
    assert client.get("/api/products/xyz").status_code == 400
    assert client.delete(
        "/api/products/delete/5b4f7c1e-9a44-4d3c-8d6f-0c1f2a3b4c5d", headers=admin_headers
    ).status_code == 404


def test_seed_only_fills_an_empty_catalog(db, client):
    assert seed(db) == len(DEMO_PRODUCTS)
    assert seed(db) == 0
    assert len(client.get("/api/products").json()) == len(DEMO_PRODUCTS)
