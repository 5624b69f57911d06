"""
Tests for token tampering.
"""

import pytest
import pytest_asyncio

from ucan_fixtures.canonical import decode_part, split_token
from ucan_fixtures.capability import EmailSemantics
from ucan_fixtures.errors import FieldNotFound, UnsupportedPart
from ucan_fixtures.identities import Identities
from ucan_fixtures.tamper import mutate_field, remove_field
from ucan_fixtures.token import Ucan, UcanOptions, build_ucan
from ucan_fixtures.wallet import Wallet


@pytest.fixture(scope="module")
def identities():
    return Identities.load()


@pytest_asyncio.fixture
async def token(identities):
    options = UcanOptions(
        capabilities=[EmailSemantics().parse("mailto:alice@email.com", "email/send")],
        expiration=9246211200,
    )
    ucan = await build_ucan(identities.alice, identities.bob_did, options)
    return ucan.encode()


def signature_valid(token: str, wallet: Wallet) -> bool:
    ucan = Ucan.decode(token)
    return Wallet.verify(ucan.signed_data(), ucan.signature, wallet.public_key)


class TestRemoveField:
    """Tests for remove_field."""

    @pytest.mark.asyncio
    async def test_remove_header_field(self, identities, token):
        tampered = await remove_field(token, "header", "alg", identities.alice)
        header_part, payload_part, _ = split_token(tampered)

        assert decode_part(header_part) == {"typ": "JWT"}
        assert payload_part == split_token(token)[1]
        assert signature_valid(tampered, identities.alice)

    @pytest.mark.asyncio
    async def test_remove_payload_field(self, identities, token):
        tampered = await remove_field(token, "payload", "exp", identities.alice)
        header_part, payload_part, _ = split_token(tampered)

        assert "exp" not in decode_part(payload_part)
        assert header_part == split_token(token)[0]
        assert signature_valid(tampered, identities.alice)

    @pytest.mark.asyncio
    async def test_remove_missing_field_is_noop(self, identities, token):
        """Canonical parts re-encode identically, so the token is unchanged."""
        tampered = await remove_field(token, "payload", "nbf", identities.alice)
        assert tampered == token

    @pytest.mark.asyncio
    async def test_unsupported_part(self, identities, token):
        with pytest.raises(UnsupportedPart) as exc:
            await remove_field(token, "signature", "alg", identities.alice)
        assert exc.value.code == "UCAN_UNSUPPORTED_PART"


class TestMutateField:
    """Tests for mutate_field."""

    @pytest.mark.asyncio
    async def test_mutate_payload_field(self, identities, token):
        tampered = await mutate_field(token, "payload", "exp", "9246211200", identities.alice)
        header_part, payload_part, _ = split_token(tampered)

        assert decode_part(payload_part)["exp"] == "9246211200"
        assert header_part == split_token(token)[0]
        assert signature_valid(tampered, identities.alice)

    @pytest.mark.asyncio
    async def test_mutate_header_field(self, identities, token):
        tampered = await mutate_field(token, "header", "typ", "JWS", identities.alice)
        header_part, payload_part, _ = split_token(tampered)

        assert decode_part(header_part) == {"alg": "EdDSA", "typ": "JWS"}
        assert payload_part == split_token(token)[1]

    @pytest.mark.asyncio
    async def test_mutate_to_null(self, identities, token):
        tampered = await mutate_field(token, "payload", "cap", None, identities.alice)
        assert Ucan.decode(tampered).payload["cap"] is None

    @pytest.mark.asyncio
    async def test_mutate_missing_field(self, identities, token):
        with pytest.raises(FieldNotFound) as exc:
            await mutate_field(token, "payload", "prf", [], identities.alice)
        assert exc.value.details == {"part": "payload", "field": "prf"}

    @pytest.mark.asyncio
    async def test_unsupported_part(self, identities, token):
        with pytest.raises(UnsupportedPart):
            await mutate_field(token, "body", "exp", 1, identities.alice)
