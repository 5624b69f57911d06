"""
Tests for token content identifiers.
"""

import pytest

from ucan_fixtures.adapters.hash import Blake3HashAdapter, Sha256HashAdapter, get_hasher
from ucan_fixtures.cid import RAW_CODEC, compute_cid, is_cid, parse_cid
from ucan_fixtures.errors import DecodeError, InvalidInputError


class TestComputeCid:
    """Tests for compute_cid."""

    def test_known_sha256_cid_of_empty_input(self):
        assert compute_cid(b"", "SHA2-256") == (
            "bafkreihdwdcefgh4dqkjv67uzcmw7ojee6xedzdetojuzjevtenxquvyku"
        )

    def test_sha256_prefix(self):
        assert compute_cid(b"token", "SHA2-256").startswith("bafkrei")

    def test_blake3_prefix(self):
        assert compute_cid(b"token", "BLAKE3-256").startswith("bafkr4i")

    def test_deterministic(self):
        assert compute_cid(b"token", "SHA2-256") == compute_cid(b"token", "SHA2-256")

    def test_algorithms_differ(self):
        assert compute_cid(b"token", "SHA2-256") != compute_cid(b"token", "BLAKE3-256")

    def test_accepts_adapter_instance(self):
        assert compute_cid(b"token", Sha256HashAdapter()) == compute_cid(
            b"token", "SHA2-256"
        )

    def test_unknown_hasher(self):
        with pytest.raises(InvalidInputError) as exc:
            compute_cid(b"token", "MD5")
        assert exc.value.code == "UCAN_INVALID_INPUT"


class TestParseCid:
    """Tests for parse_cid / is_cid."""

    @pytest.mark.parametrize("name", ["SHA2-256", "BLAKE3-256"])
    def test_parse_computed(self, name):
        hasher = get_hasher(name)
        cid = parse_cid(compute_cid(b"token", name))
        assert cid.version == 1
        assert cid.codec == RAW_CODEC
        assert cid.hash_code == hasher.multihash_code
        assert cid.digest == hasher.digest(b"token")

    def test_str_reproduces_input(self):
        value = compute_cid(b"token", "BLAKE3-256")
        assert str(parse_cid(value)) == value

    def test_multihash_codes(self):
        assert Sha256HashAdapter.multihash_code == 0x12
        assert Blake3HashAdapter.multihash_code == 0x1E

    @pytest.mark.parametrize("value", ["not-a-cid", "", "bafy!!", "zQm123", "bé", 42])
    def test_rejects_non_cids(self, value):
        assert is_cid(value) is False

    def test_parse_error_code(self):
        with pytest.raises(DecodeError) as exc:
            parse_cid("not-a-cid")
        assert exc.value.code == "UCAN_DECODE_ERROR"
