"""
Distributor API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health returns ok without configuration
2. GET /root, /token, /digest describe the distributor
3. POST /claim pays out and maps rejections to 409 / 401 / 400 / 502
4. GET /claims/{account} reflects the ledger
5. POST /claim/check dry-runs without changing state
"""
import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.deps import get_airdrop, set_airdrop
from core.crypto.hashing import keccak256, to_hex

from fixtures.common import (
    ALICE,
    ALICE_KEY,
    BOB,
    CONTRACT,
    TOKEN,
    FailingTokenLedger,
    make_airdrop,
    make_claim_request,
)


@pytest.fixture
def distributor():
    tree, airdrop = make_airdrop()
    app.dependency_overrides[get_airdrop] = lambda: airdrop
    yield tree, airdrop
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    return TestClient(app)


def claim_body(airdrop, tree, key=ALICE_KEY, account=ALICE) -> dict:
    return make_claim_request(airdrop, tree, key, account).model_dump()


class TestHealth:
    """Tests for GET /health."""

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["ok"] is True

    def test_root_path(self, client):
        assert client.get("/").status_code == 200


class TestInfo:
    """Tests for the read-only endpoints."""

    def test_root(self, client, distributor):
        tree, airdrop = distributor
        data = client.get("/root").json()
        assert data["merkle_root"] == to_hex(tree.root)
        assert data["domain_separator"] == to_hex(airdrop.domain_separator())
        assert data["domain"]["verifying_contract"] == CONTRACT
        assert data["domain"]["chain_id"] == 1

    def test_token(self, client, distributor):
        data = client.get("/token").json()
        assert data["address"] == TOKEN
        assert data["distributor_balance"] == 1000

    def test_digest(self, client, distributor):
        _, airdrop = distributor
        response = client.get("/digest", params={"account": ALICE, "amount": 100})
        assert response.status_code == 200
        assert response.json()["digest"] == to_hex(airdrop.message_digest(ALICE, 100))

    def test_digest_bad_account(self, client, distributor):
        response = client.get("/digest", params={"account": "nope", "amount": 100})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "CANONICALIZATION_ERROR"

    def test_digest_negative_amount(self, client, distributor):
        response = client.get("/digest", params={"account": ALICE, "amount": -1})
        assert response.status_code == 400


class TestClaim:
    """Tests for POST /claim."""

    def test_success(self, client, distributor):
        tree, airdrop = distributor
        response = client.post("/claim", json=claim_body(airdrop, tree))
        assert response.status_code == 200
        receipt = response.json()["receipt"]
        assert receipt["account"] == ALICE
        assert receipt["amount"] == 100
        assert airdrop.get_token().balance_of(ALICE) == 100

    def test_already_claimed_409(self, client, distributor):
        tree, airdrop = distributor
        body = claim_body(airdrop, tree)
        client.post("/claim", json=body)
        response = client.post("/claim", json=body)
        assert response.status_code == 409
        data = response.json()
        assert data["ok"] is False
        assert data["error"]["code"] == "ALREADY_CLAIMED"

    def test_invalid_signature_401(self, client, distributor):
        tree, airdrop = distributor
        body = claim_body(airdrop, tree)
        body["account"] = BOB
        response = client.post("/claim", json=body)
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "INVALID_SIGNATURE"

    def test_invalid_proof_400(self, client, distributor):
        tree, airdrop = distributor
        body = claim_body(airdrop, tree)
        body["proof"] = [to_hex(keccak256(b"junk"))]
        response = client.post("/claim", json=body)
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PROOF"

    def test_malformed_body_400(self, client, distributor):
        response = client.post("/claim", json={"account": ALICE, "amount": 100})
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "SCHEMA_VALIDATION_ERROR"

    def test_transfer_failed_502(self, client):
        tree, airdrop = make_airdrop(token=FailingTokenLedger())
        app.dependency_overrides[get_airdrop] = lambda: airdrop
        try:
            response = client.post("/claim", json=claim_body(airdrop, tree))
        finally:
            app.dependency_overrides.clear()
        assert response.status_code == 502
        assert response.json()["error"]["code"] == "TRANSFER_FAILED"
        assert not airdrop.has_claimed(ALICE)


class TestClaimStatus:
    """Tests for GET /claims/{account} and POST /claim/check."""

    def test_status_before_and_after(self, client, distributor):
        tree, airdrop = distributor
        assert client.get(f"/claims/{ALICE}").json()["claimed"] is False

        client.post("/claim", json=claim_body(airdrop, tree))
        data = client.get(f"/claims/{ALICE}").json()
        assert data["claimed"] is True
        assert len(data["events"]) == 1
        assert data["events"][0]["amount"] == 100

    def test_check_does_not_claim(self, client, distributor):
        tree, airdrop = distributor
        response = client.post("/claim/check", json=claim_body(airdrop, tree))
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert {c["check_id"] for c in data["checks"]} == {"not_claimed", "signature", "merkle_proof"}
        assert not airdrop.has_claimed(ALICE)

    def test_check_reports_error(self, client, distributor):
        tree, airdrop = distributor
        body = claim_body(airdrop, tree)
        body["amount"] = 200
        data = client.post("/claim/check", json=body).json()
        assert data["ok"] is False
        assert data["error"]["code"] == "INVALID_SIGNATURE"


class TestNotConfigured:
    """Without configuration the distributor endpoints return 503."""

    def test_root_503(self, client, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        set_airdrop(None)
        response = client.get("/root")
        assert response.status_code == 503
        assert response.json()["error"]["code"] == "CONFIG_ERROR"
