"""
Leaf Encoder Unit Tests
Tests for core/merkle/leaf.py

Tests:
- abi.encode(address, uint256) layout
- double keccak leaf hashing
- token id range validation
- leaves are independent of address casing
- fixed vectors shared with off-system tree builders
"""
import pytest

from core.crypto.hashing import keccak256
from core.merkle.leaf import (
    MAX_TOKEN_ID,
    WORD_SIZE,
    encode_claim,
    leaf_hash,
    validate_token_id,
)
from core.schemas.errors import SchemaValidationException


CLAIMANT = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"


class TestEncodeClaim:
    """Tests for encode_claim()."""

    def test_length_is_two_words(self):
        assert len(encode_claim(CLAIMANT, 1)) == 2 * WORD_SIZE

    def test_address_left_padded(self):
        encoded = encode_claim(CLAIMANT, 0)
        assert encoded[:12] == b"\x00" * 12
        assert encoded[12:32] == bytes.fromhex(CLAIMANT[2:])

    def test_token_id_big_endian(self):
        encoded = encode_claim(CLAIMANT, 0x0102)
        assert encoded[32:] == b"\x00" * 30 + b"\x01\x02"

    def test_max_token_id(self):
        encoded = encode_claim(CLAIMANT, MAX_TOKEN_ID)
        assert encoded[32:] == b"\xff" * 32

    def test_rejects_invalid_address(self):
        with pytest.raises(SchemaValidationException):
            encode_claim("0x1234", 1)


class TestLeafHash:
    """Tests for leaf_hash()."""

    def test_double_keccak(self):
        encoded = encode_claim(CLAIMANT, 7)
        assert leaf_hash(CLAIMANT, 7) == keccak256(keccak256(encoded))

    def test_not_single_keccak(self):
        assert leaf_hash(CLAIMANT, 7) != keccak256(encode_claim(CLAIMANT, 7))

    def test_deterministic(self):
        assert leaf_hash(CLAIMANT, 42) == leaf_hash(CLAIMANT, 42)

    def test_casing_does_not_change_leaf(self):
        assert leaf_hash(CLAIMANT.lower(), 3) == leaf_hash(CLAIMANT, 3)

    def test_distinct_token_ids(self):
        assert leaf_hash(CLAIMANT, 1) != leaf_hash(CLAIMANT, 2)

    def test_distinct_claimants(self):
        other = "0x" + "11" * 20
        assert leaf_hash(CLAIMANT, 1) != leaf_hash(other, 1)


class TestKnownAnswers:
    """Leaves as produced by OpenZeppelin StandardMerkleTree for (address, uint256)."""

    def test_encoding(self):
        encoded = encode_claim("0x1111111111111111111111111111111111111111", 1)
        assert encoded.hex() == (
            "0000000000000000000000001111111111111111111111111111111111111111"
            "0000000000000000000000000000000000000000000000000000000000000001"
        )

    @pytest.mark.parametrize(
        "claimant,token_id,expected",
        [
            (
                "0x1111111111111111111111111111111111111111",
                1,
                "60648906e1a3f55dd188e992dc24db68c6b6d455fe925705f5e110ed7889ad90",
            ),
            (
                "0x2222222222222222222222222222222222222222",
                2,
                "4397c1fe255e3a9d3a85daaf9e1d39e0eeb9dc120e931f5af6d0a6f8a3315a4d",
            ),
            (
                "0x3333333333333333333333333333333333333333",
                3,
                "1822ae4b563c0815a9cb78809432584aa220f215c2777ddf51cf5bdd1c0ad36f",
            ),
            (
                "0x1111111111111111111111111111111111111111",
                MAX_TOKEN_ID,
                "ed6c11aa506bc5a1977b813e93a8a440c47e9643e3a63e012d1061a82642c517",
            ),
        ],
    )
    def test_leaf_vectors(self, claimant, token_id, expected):
        assert leaf_hash(claimant, token_id).hex() == expected


class TestValidateTokenId:
    @pytest.mark.parametrize("value", [0, 1, 2**64, MAX_TOKEN_ID])
    def test_accepts_uint256(self, value):
        assert validate_token_id(value) == value

    @pytest.mark.parametrize("value", [-1, MAX_TOKEN_ID + 1])
    def test_rejects_out_of_range(self, value):
        with pytest.raises(SchemaValidationException, match="range"):
            validate_token_id(value)

    @pytest.mark.parametrize("value", [True, "1", 1.0, None])
    def test_rejects_non_integers(self, value):
        with pytest.raises(SchemaValidationException, match="integer"):
            validate_token_id(value)
