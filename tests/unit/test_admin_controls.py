"""
Admin Controls Unit Tests
Tests for core/admin/controls.py

Tests:
- only the admin may mutate configuration
- authorization is checked before input validation
- zero and malformed roots are rejected
- every accepted mutation records one event
"""
import pytest

from core.admin.controls import AdminControls, validate_root
from core.crypto.hashing import ZERO_HASH, keccak256, to_hex
from core.crypto.identity import ZERO_ADDRESS, normalize_address
from core.schemas.errors import (
    ErrorCodes,
    InvalidRootException,
    NotAuthorizedException,
    SchemaValidationException,
)

from fixtures.allowlist import ADMIN, ALICE, BOB


ROOT = keccak256(b"root-1")
ROOT_2 = keccak256(b"root-2")


@pytest.fixture
def controls():
    return AdminControls(ADMIN, ROOT, "ipfs://base/")


class TestValidateRoot:
    def test_accepts_bytes_and_hex(self):
        assert validate_root(ROOT) == ROOT
        assert validate_root(to_hex(ROOT)) == ROOT

    def test_rejects_zero(self):
        with pytest.raises(InvalidRootException):
            validate_root(ZERO_HASH)

    def test_rejects_wrong_length(self):
        with pytest.raises(InvalidRootException):
            validate_root(b"\x01" * 31)

    def test_rejects_malformed_hex(self):
        with pytest.raises(InvalidRootException, match="Malformed"):
            validate_root("0xnothex")


class TestConstruction:
    def test_initial_state(self, controls):
        assert controls.admin == normalize_address(ADMIN)
        assert controls.commitment_root == ROOT
        assert controls.suspended is False
        assert controls.metadata_location == "ipfs://base/"
        assert len(controls.events) == 0

    def test_zero_root_rejected_at_init(self):
        with pytest.raises(InvalidRootException):
            AdminControls(ADMIN, ZERO_HASH)

    def test_zero_admin_rejected_at_init(self):
        with pytest.raises(SchemaValidationException):
            AdminControls(ZERO_ADDRESS, ROOT)

    def test_can_start_suspended(self):
        assert AdminControls(ADMIN, ROOT, suspended=True).suspended


class TestAuthorization:

    @pytest.mark.parametrize("operation, args", [
        ("set_commitment_root", (ROOT_2,)),
        ("set_suspended", (True,)),
        ("pause", ()),
        ("unpause", ()),
        ("set_metadata_location", ("ipfs://other/",)),
        ("transfer_admin", (BOB,)),
    ])
    def test_non_admin_rejected(self, controls, operation, args):
        with pytest.raises(NotAuthorizedException) as excinfo:
            getattr(controls, operation)(ALICE, *args)
        assert excinfo.value.code == ErrorCodes.NOT_AUTHORIZED
        assert controls.commitment_root == ROOT
        assert controls.suspended is False
        assert controls.metadata_location == "ipfs://base/"
        assert controls.admin == normalize_address(ADMIN)
        assert len(controls.events) == 0

    def test_auth_checked_before_root_validation(self, controls):
        with pytest.raises(NotAuthorizedException):
            controls.set_commitment_root(ALICE, ZERO_HASH)

    def test_is_admin_ignores_casing(self, controls):
        assert controls.is_admin(ADMIN.upper().replace("0X", "0x"))
        assert not controls.is_admin(ALICE)


class TestMutations:

    def test_set_root(self, controls):
        assert controls.set_commitment_root(ADMIN, to_hex(ROOT_2)) == ROOT_2
        assert controls.commitment_root == ROOT_2
        (event,) = controls.events.events("root_updated")
        assert event.payload == {"previous_root": to_hex(ROOT), "root": to_hex(ROOT_2)}

    def test_admin_set_zero_root_rejected(self, controls):
        with pytest.raises(InvalidRootException) as excinfo:
            controls.set_commitment_root(ADMIN, ZERO_HASH)
        assert excinfo.value.code == ErrorCodes.INVALID_ROOT
        assert controls.commitment_root == ROOT
        assert len(controls.events) == 0

    def test_pause_and_unpause(self, controls):
        controls.pause(ADMIN)
        assert controls.suspended
        controls.unpause(ADMIN)
        assert not controls.suspended
        assert [e.kind for e in controls.events.events()] == ["paused", "unpaused"]

    def test_pause_when_already_paused(self, controls):
        controls.pause(ADMIN)
        controls.pause(ADMIN)
        assert controls.suspended
        assert len(controls.events.events("paused")) == 2

    def test_set_metadata_location(self, controls):
        controls.set_metadata_location(ADMIN, "https://example.org/meta/")
        assert controls.metadata_location == "https://example.org/meta/"
        (event,) = controls.events.events("metadata_location_updated")
        assert event.payload["location"] == "https://example.org/meta/"

    def test_set_metadata_rejects_non_string(self, controls):
        with pytest.raises(SchemaValidationException):
            controls.set_metadata_location(ADMIN, 42)

    def test_transfer_admin(self, controls):
        controls.transfer_admin(ADMIN, BOB)
        assert controls.admin == normalize_address(BOB)
        with pytest.raises(NotAuthorizedException):
            controls.pause(ADMIN)
        controls.pause(BOB)
        assert controls.suspended

    def test_transfer_admin_to_zero_rejected(self, controls):
        with pytest.raises(SchemaValidationException):
            controls.transfer_admin(ADMIN, ZERO_ADDRESS)
        assert controls.admin == normalize_address(ADMIN)

    def test_event_actor_is_checksummed(self, controls):
        controls.pause(ADMIN.lower())
        assert controls.events.events()[0].actor == normalize_address(ADMIN)


class TestSettings:

    def test_restore_puts_back_every_field(self, controls):
        saved = controls.settings()
        controls.pause(ADMIN)
        controls.set_metadata_location(ADMIN, "ar://x/")
        controls.set_commitment_root(ADMIN, keccak256(b"other"))
        controls.transfer_admin(ADMIN, BOB)

        controls.restore_settings(saved)

        assert controls.settings() == saved
        assert controls.admin == normalize_address(ADMIN)
        assert not controls.suspended
