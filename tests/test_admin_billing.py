import pytest

from app.models.billing_models import Business


@pytest.fixture
def pending_payment(client, tenant_headers, bank_account):
    created = client.post(
        "/billing/subscription", json={"plan": "basic", "billing_cycle": "month"}, headers=tenant_headers
    ).json()["data"]
    resp = client.post(
        "/billing/payments",
        json={
            "invoice_id": created["invoice"]["id"],
            "bank_name": bank_account.bank_name,
            "account_number": bank_account.account_number,
            "account_name": "Abebe Coffee",
            "transaction_reference": "FT2410099999",
            "payer_name": "Abebe Kebede",
        },
        headers=tenant_headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


def test_verify_requires_admin_key(client, pending_payment):
    resp = client.post(f"/admin/billing/payments/{pending_payment['id']}/verify", json={"status": "verified"})
    assert resp.status_code == 403
    assert resp.json()["error"]["code"] == "ADM200"


def test_verify_rejects_wrong_admin_key(client, pending_payment):
    resp = client.post(
        f"/admin/billing/payments/{pending_payment['id']}/verify",
        json={"status": "verified"},
        headers={"X-Admin-Key": "guess"},
    )
    assert resp.status_code == 403


def test_verify_payment(client, db, business, admin_headers, tenant_headers, pending_payment):
    resp = client.post(
        f"/admin/billing/payments/{pending_payment['id']}/verify",
        json={"status": "verified"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    body = resp.json()
    assert body["message"] == "Payment verified successfully"
    assert body["data"] == {
        "id": pending_payment["id"],
        "status": "verified",
        "invoice_id": pending_payment["invoice_id"],
    }

    invoice = client.get(f"/billing/invoices/{pending_payment['invoice_id']}", headers=tenant_headers).json()["data"]
    assert invoice["status"] == "paid"
    assert invoice["paid_date"] is not None

    subscription = client.get("/billing/subscription", headers=tenant_headers).json()["data"]
    assert subscription["status"] == "active"

    db.expire_all()
    assert db.get(Business, business.id).is_active is True


def test_reject_payment(client, admin_headers, tenant_headers, pending_payment):
    resp = client.post(
        f"/admin/billing/payments/{pending_payment['id']}/verify",
        json={"status": "rejected"},
        headers=admin_headers,
    )
    assert resp.status_code == 200
    assert resp.json()["message"] == "Payment rejected successfully"

    invoice = client.get(f"/billing/invoices/{pending_payment['invoice_id']}", headers=tenant_headers).json()["data"]
    assert invoice["status"] == "rejected"
    subscription = client.get("/billing/subscription", headers=tenant_headers).json()["data"]
    assert subscription["status"] == "pending"


def test_verify_invalid_status(client, admin_headers, pending_payment):
    resp = client.post(
        f"/admin/billing/payments/{pending_payment['id']}/verify",
        json={"status": "refunded"},
        headers=admin_headers,
    )
    assert resp.status_code == 422


def test_verify_unknown_payment(client, admin_headers):
    resp = client.post("/admin/billing/payments/9999/verify", json={"status": "verified"}, headers=admin_headers)
    assert resp.status_code == 404
    assert resp.json()["error"]["code"] == "BIL106"


def test_reverify_returns_conflict(client, admin_headers, tenant_headers, pending_payment):
    url = f"/admin/billing/payments/{pending_payment['id']}/verify"
    assert client.post(url, json={"status": "verified"}, headers=admin_headers).status_code == 200

    resp = client.post(url, json={"status": "verified"}, headers=admin_headers)
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "BIL108"

    subscription = client.get("/billing/subscription", headers=tenant_headers).json()["data"]
    assert subscription["status"] == "active"


def test_reject_after_verify_returns_conflict(client, admin_headers, tenant_headers, pending_payment):
    url = f"/admin/billing/payments/{pending_payment['id']}/verify"
    client.post(url, json={"status": "verified"}, headers=admin_headers)

    resp = client.post(url, json={"status": "rejected"}, headers=admin_headers)
    assert resp.status_code == 409

    invoice = client.get(f"/billing/invoices/{pending_payment['invoice_id']}", headers=tenant_headers).json()["data"]
    assert invoice["status"] == "paid"
    payments = client.get("/billing/payments", headers=tenant_headers).json()["data"]
    assert payments[0]["status"] == "verified"


def test_paid_invoice_rejects_new_proof(client, admin_headers, tenant_headers, bank_account, pending_payment):
    client.post(
        f"/admin/billing/payments/{pending_payment['id']}/verify", json={"status": "verified"}, headers=admin_headers
    )
    resp = client.post(
        "/billing/payments",
        json={
            "invoice_id": pending_payment["invoice_id"],
            "bank_name": bank_account.bank_name,
            "account_number": bank_account.account_number,
            "account_name": "Abebe Coffee",
            "transaction_reference": "FT-AGAIN",
            "payer_name": "Abebe Kebede",
        },
        headers=tenant_headers,
    )
    assert resp.status_code == 409
    assert resp.json()["error"]["code"] == "BIL109"
