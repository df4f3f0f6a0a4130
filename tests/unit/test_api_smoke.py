"""
API Smoke Tests

Tests for the FastAPI endpoints:
1. GET /health reports readiness
2. POST /claim issues a token for the header caller
3. Rejections map to stable error codes and HTTP statuses
4. Admin routes are gated on the caller header
5. Accepted changes are written to the state file, failed writes are undone
"""

import pytest
from fastapi.testclient import TestClient

from api.app import app
from api.deps import CALLER_HEADER, set_gate
from core.crypto.hashing import keccak256, to_hex
from core.crypto.identity import normalize_address
from core.merkle.leaf import leaf_hash
from core.state.store import StateIOError, hold_state_lock, load_state

from fixtures.allowlist import ADMIN, ALICE, BOB, MALLORY, make_allowlist


client = TestClient(app)


def as_caller(address: str) -> dict[str, str]:
    return {CALLER_HEADER: address}


@pytest.fixture(autouse=True)
def installed_gate(gate):
    set_gate(gate)
    yield gate
    set_gate(None)


class TestHealth:

    def test_health(self):
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is True
        assert data["service"] == "merkle-allowlist-api"

    def test_reports_ready_gate(self):
        data = client.get("/health").json()
        assert data["ready"] is True
        assert data["suspended"] is False

    def test_not_ready_without_gate(self, isolated_env):
        set_gate(None)
        data = client.get("/health").json()
        assert data["ok"] is True
        assert data["ready"] is False
        assert "not configured" in data["detail"]


class TestClaim:

    def test_claim_success(self, allowlist):
        response = client.post(
            "/claim",
            json={"token_id": 1, "proof": allowlist.hex_proof_for(ALICE)},
            headers=as_caller(ALICE),
        )
        assert response.status_code == 200
        receipt = response.json()["receipt"]
        assert receipt["claimant"] == normalize_address(ALICE)
        assert receipt["root"] == allowlist.hex_root

        token = client.get("/tokens/1").json()
        assert token["consumed"] is True
        assert token["owner"] == normalize_address(ALICE)

        claimant = client.get(f"/claimants/{ALICE}").json()
        assert claimant["consumed"] is True
        assert claimant["balance"] == 1

    def test_missing_caller_header(self, allowlist):
        response = client.post(
            "/claim", json={"token_id": 1, "proof": allowlist.hex_proof_for(ALICE)}
        )
        assert response.status_code == 401
        assert response.json()["error"]["code"] == "MISSING_CALLER"

    def test_invalid_caller_header(self, allowlist):
        response = client.post(
            "/claim",
            json={"token_id": 1, "proof": []},
            headers=as_caller("not-an-address"),
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_REQUEST"

    def test_double_claim(self, allowlist):
        body = {"token_id": 1, "proof": allowlist.hex_proof_for(ALICE)}
        client.post("/claim", json=body, headers=as_caller(ALICE))
        response = client.post("/claim", json=body, headers=as_caller(ALICE))
        assert response.status_code == 409
        assert response.json()["error"]["code"] == "TOKEN_ALREADY_CLAIMED"

    def test_invalid_proof(self, allowlist):
        response = client.post(
            "/claim",
            json={"token_id": 1, "proof": allowlist.hex_proof_for(ALICE)},
            headers=as_caller(MALLORY),
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_PROOF"
        assert client.get("/tokens/1").json()["consumed"] is False

    def test_malformed_proof_hex(self):
        response = client.post(
            "/claim",
            json={"token_id": 1, "proof": ["zz"]},
            headers=as_caller(ALICE),
        )
        assert response.status_code == 422
        assert response.json()["error"]["code"] == "SCHEMA_VALIDATION_ERROR"

    def test_negative_token_id_rejected_by_request_model(self):
        response = client.post(
            "/claim", json={"token_id": -1, "proof": []}, headers=as_caller(ALICE)
        )
        assert response.status_code == 422

    def test_suspended(self, allowlist):
        client.post("/admin/pause", headers=as_caller(ADMIN))
        response = client.post(
            "/claim",
            json={"token_id": 1, "proof": allowlist.hex_proof_for(ALICE)},
            headers=as_caller(ALICE),
        )
        assert response.status_code == 409
        error = response.json()["error"]
        assert error["code"] == "SYSTEM_SUSPENDED"


class TestCommitmentHelpers:

    def test_leaf(self):
        response = client.post("/leaf", json={"claimant": ALICE, "token_id": 1})
        assert response.status_code == 200
        assert response.json()["leaf"] == to_hex(leaf_hash(ALICE, 1))

    def test_verify_proof(self, allowlist):
        response = client.post(
            "/verify-proof",
            json={"claimant": BOB, "token_id": 2, "proof": allowlist.hex_proof_for(BOB)},
        )
        data = response.json()
        assert data["valid"] is True
        assert data["root"] == allowlist.hex_root

    def test_verify_proof_invalid(self, allowlist):
        response = client.post(
            "/verify-proof",
            json={"claimant": BOB, "token_id": 3, "proof": allowlist.hex_proof_for(BOB)},
        )
        assert response.json()["valid"] is False


class TestReads:

    def test_status(self, allowlist):
        status = client.get("/status").json()["status"]
        assert status["commitment_root"] == allowlist.hex_root
        assert status["suspended"] is False
        assert status["admin"] == normalize_address(ADMIN)

    def test_metadata(self):
        data = client.get("/tokens/7/metadata").json()
        assert data["location"] == "ipfs://base/"

    def test_royalty(self):
        data = client.get("/tokens/1/royalty", params={"sale_price": 10_000}).json()
        assert data["quote"]["amount"] == 500

    def test_bad_token_id(self):
        response = client.get("/tokens/abc")
        assert response.status_code == 422
        assert response.json()["error"]["details"]["field_path"] == "token_id"

    def test_events_filter(self, allowlist):
        client.post("/admin/pause", headers=as_caller(ADMIN))
        client.post("/admin/unpause", headers=as_caller(ADMIN))
        events = client.get("/events", params={"kind": "paused"}).json()["events"]
        assert [e["kind"] for e in events] == ["paused"]


class TestAdmin:

    def test_non_admin_forbidden(self):
        response = client.post("/admin/pause", headers=as_caller(ALICE))
        assert response.status_code == 403
        assert response.json()["error"]["code"] == "NOT_AUTHORIZED"
        assert client.get("/status").json()["status"]["suspended"] is False

    def test_set_root(self, allowlist):
        replacement = make_allowlist([(ALICE, 11)])
        response = client.post(
            "/admin/root",
            json={"root": replacement.hex_root},
            headers=as_caller(ADMIN),
        )
        assert response.status_code == 200
        assert response.json()["status"]["commitment_root"] == replacement.hex_root

    def test_zero_root(self):
        response = client.post(
            "/admin/root",
            json={"root": "0x" + "00" * 32},
            headers=as_caller(ADMIN),
        )
        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ROOT"

    def test_metadata_and_transfer(self):
        client.post(
            "/admin/metadata", json={"location": "ar://x/"}, headers=as_caller(ADMIN)
        )
        response = client.post(
            "/admin/transfer", json={"new_admin": BOB}, headers=as_caller(ADMIN)
        )
        status = response.json()["status"]
        assert status["metadata_location"] == "ar://x/"
        assert status["admin"] == normalize_address(BOB)


class TestPersistence:

    def test_claim_written_to_state_file(self, gate, allowlist, tmp_path):
        path = tmp_path / "state.json"
        set_gate(gate, path)
        client.post(
            "/claim",
            json={"token_id": 1, "proof": allowlist.hex_proof_for(ALICE)},
            headers=as_caller(ALICE),
        )
        assert load_state(path).is_claimant_consumed(ALICE)

    def test_rejected_claim_not_written(self, gate, tmp_path):
        path = tmp_path / "state.json"
        set_gate(gate, path)
        client.post(
            "/claim",
            json={"token_id": 1, "proof": [to_hex(keccak256(b"junk"))]},
            headers=as_caller(ALICE),
        )
        assert not path.exists()


def _failing_save(gate, path):
    raise StateIOError("disk full", path)


class TestFailedStateWrite:

    def test_claim_undone(self, gate, allowlist, tmp_path, monkeypatch):
        set_gate(gate, tmp_path / "state.json")
        monkeypatch.setattr("api.deps.save_state", _failing_save)

        response = client.post(
            "/claim",
            json={"token_id": 1, "proof": allowlist.hex_proof_for(ALICE)},
            headers=as_caller(ALICE),
        )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "STATE_IO_ERROR"
        assert not gate.is_token_consumed(1)
        assert not gate.is_claimant_consumed(ALICE)
        assert gate.registry.issued() == {}
        assert gate.balance_of(ALICE) == 0
        assert gate.events("token_claimed") == []

    def test_claim_succeeds_once_writes_recover(self, gate, allowlist, tmp_path, monkeypatch):
        path = tmp_path / "state.json"
        set_gate(gate, path)
        body = {"token_id": 1, "proof": allowlist.hex_proof_for(ALICE)}

        monkeypatch.setattr("api.deps.save_state", _failing_save)
        assert client.post("/claim", json=body, headers=as_caller(ALICE)).status_code == 500
        monkeypatch.undo()

        response = client.post("/claim", json=body, headers=as_caller(ALICE))
        assert response.status_code == 200
        assert response.json()["receipt"]["event_sequence"] == 0
        assert load_state(path).is_token_consumed(1)

    def test_admin_change_undone(self, gate, tmp_path, monkeypatch):
        set_gate(gate, tmp_path / "state.json")
        monkeypatch.setattr("api.deps.save_state", _failing_save)

        response = client.post("/admin/pause", headers=as_caller(ADMIN))

        assert response.status_code == 500
        assert gate.controls.suspended is False
        assert gate.events("paused") == []

    def test_transfer_undone(self, gate, tmp_path, monkeypatch):
        set_gate(gate, tmp_path / "state.json")
        monkeypatch.setattr("api.deps.save_state", _failing_save)

        response = client.post(
            "/admin/transfer", json={"new_admin": BOB}, headers=as_caller(ADMIN)
        )

        assert response.status_code == 500
        assert gate.controls.admin == normalize_address(ADMIN)


class TestStateFileOwnership:

    def test_served_state_file_is_locked(self, gate, tmp_path):
        path = tmp_path / "state.json"
        set_gate(gate, path)
        with pytest.raises(StateIOError, match="locked"):
            with hold_state_lock(path, timeout=0.05):
                pass

    def test_lock_released_when_gate_cleared(self, gate, tmp_path):
        path = tmp_path / "state.json"
        set_gate(gate, path)
        set_gate(None)
        with hold_state_lock(path, timeout=0.05):
            pass
