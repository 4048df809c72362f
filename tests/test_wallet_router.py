from dependency_injector import providers

from campuspoints.core.exceptions import StorageFailureError
from conftest import make_user


def test_health(client):
    res = client.get("/health")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


def test_register_then_duplicate(client):
    payload = {"email": "oli@example.com", "name": "Oli", "department": "Biology"}

    res = client.post("/api/v1/users", json=payload)
    assert res.status_code == 201
    assert res.json()["points"] == 0

    res = client.post("/api/v1/users", json=payload)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT_001"


def test_earn_use_and_summary(client, session_factory):
    user_id = make_user(session_factory, "Pam")

    res = client.post("/api/v1/wallet/earn", json={"userId": user_id, "amount": 10, "message": "top-up"})
    assert res.status_code == 200
    body = res.json()
    assert body["points"] == 10
    assert body["transaction"]["type"] == "EARN"
    assert body["transaction"]["balanceAfter"] == 10
    assert body["transaction"]["message"] == "top-up"

    res = client.post("/api/v1/wallet/use", json={"userId": user_id, "amount": 15})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "BALANCE_001"

    res = client.post("/api/v1/wallet/use", json={"userId": user_id, "amount": 4, "message": "bought note: A"})
    assert res.status_code == 200
    assert res.json()["points"] == 6

    res = client.get("/api/v1/wallet/summary", params={"userId": user_id})
    assert res.status_code == 200
    summary = res.json()
    assert summary["points"] == 6
    assert summary["user"]["name"] == "Pam"
    assert [r["amount"] for r in summary["earnRecords"]] == [10]
    assert [r["message"] for r in summary["useRecords"]] == ["bought note: A"]


def test_unknown_account_and_invalid_amount(client):
    res = client.get("/api/v1/wallet/summary", params={"userId": 404})
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "ACCOUNT_001"

    res = client.post("/api/v1/wallet/earn", json={"userId": 1, "amount": 0})
    assert res.status_code == 422
    assert res.json()["error"]["code"] == "VALIDATION_001"


def test_packs_and_purchase(client, session_factory):
    user_id = make_user(session_factory, "Quinn")

    res = client.get("/api/v1/wallet/packs")
    assert res.status_code == 200
    assert len(res.json()) == 5

    res = client.post("/api/v1/wallet/packs/100/purchase", json={"userId": user_id})
    assert res.status_code == 200
    assert res.json()["points"] == 100

    res = client.post("/api/v1/wallet/packs/3/purchase", json={"userId": user_id})
    assert res.status_code == 404

    res = client.get("/api/v1/wallet/integrity", params={"userId": user_id})
    assert res.status_code == 200
    assert res.json()["status"] == "OK"


class FailingLedgerService:
    def spend(self, user_id, amount, reason=""):
        raise StorageFailureError("Storage operation could not complete")


def test_storage_failure_maps_to_503(client):
    container = client.app.container
    container.services.ledger_service.override(providers.Factory(FailingLedgerService))
    try:
        res = client.post("/api/v1/wallet/use", json={"userId": 1, "amount": 1})
        assert res.status_code == 503
        assert res.json()["error"]["code"] == "STORAGE_001"
    finally:
        container.services.ledger_service.reset_override()


def test_oversized_amount_is_a_client_error(client, session_factory):
    user_id = make_user(session_factory, "Rex")

    res = client.post("/api/v1/wallet/earn", json={"userId": user_id, "amount": 2**63})
    assert res.status_code == 422
    assert res.json()["error"]["code"] == "VALIDATION_001"

    res = client.post("/api/v1/wallet/use", json={"userId": user_id, "amount": 2**31})
    assert res.status_code == 422

    res = client.get("/api/v1/wallet/summary", params={"userId": user_id})
    assert res.json()["points"] == 0
    assert res.json()["earnRecords"] == []
