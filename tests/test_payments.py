from decimal import Decimal

import pytest

from agrigrow.domain.errors import MissingFields, NotFound
from agrigrow.services.payment_service import PaymentService

PAYMENT = {
    "delivery": {"name": "Asha Patil", "phone": "9876543210", "city": "Nashik", "pincode": "422001"},
    "products": [{"name": "Vermicompost 5kg", "quantity": 2}],
    "totalAmount": "398.00",
    "txnId": "TXN-1001",
    "utrId": "UTR-2002",
}


def test_record_payment_starts_pending(client):
    resp = client.post("/api/payments", json=PAYMENT)

    assert resp.status_code == 201
    payment = resp.json()["payment"]
    assert payment["status"] == "Pending"
    assert payment["name"] == "Asha Patil"
    assert Decimal(payment["amount"]) == Decimal("398.00")
    assert payment["products"] == PAYMENT["products"]


@pytest.mark.parametrize("missing", ["delivery", "products", "totalAmount", "txnId", "utrId"])
def test_record_payment_requires_all_fields(client, missing):
    body = dict(PAYMENT)
    body.pop(missing)

    resp = client.post("/api/payments", json=body)

    assert resp.status_code == 400


def test_admin_reviews_and_marks_payment(client, admin_headers, headers):
    payment_id = client.post("/api/payments", json=PAYMENT).json()["payment"]["id"]

    assert client.get("/api/payments", headers=headers).status_code == 403
    listed = client.get("/api/payments", headers=admin_headers).json()
    assert [p["id"] for p in listed] == [payment_id]

    resp = client.put(f"/api/payments/{payment_id}/status", json={"status": "Verified"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["payment"]["status"] == "Verified"


def test_update_status_errors(db):
    svc = PaymentService(db)

    with pytest.raises(MissingFields):
        svc.update_status("5b4f7c1e-9a44-4d3c-8d6f-0c1f2a3b4c5d", "")
    with pytest.raises(NotFound):
        svc.update_status("5b4f7c1e-9a44-4d3c-8d6f-0c1f2a3b4c5d", "Verified")
