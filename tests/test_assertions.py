"""
Tests for assertion snapshots.
"""

import pytest

from ucan_fixtures.assertions import (
    Absent,
    ExplicitNull,
    HeaderAssertions,
    PayloadAssertions,
    Present,
    UcanAssertions,
    observe,
)
from ucan_fixtures.identities import Identities
from ucan_fixtures.tamper import remove_field
from ucan_fixtures.token import build_ucan


class TestObserve:
    """Tests for the three field variants."""

    def test_variants(self):
        source = {"a": 1, "b": None}
        assert observe(source, "a") == Present(1)
        assert observe(source, "b") == ExplicitNull()
        assert observe(source, "c") == Absent()

    def test_present_falsy_values(self):
        assert observe({"a": 0}, "a") == Present(0)
        assert observe({"a": {}}, "a") == Present({})


class TestSnapshots:
    """Tests for header and payload snapshots."""

    def test_absent_omitted_and_null_kept(self):
        payload = PayloadAssertions.from_fields({"ucv": "0.10.0", "exp": None, "cap": {}})
        assert payload.to_dict() == {"ucv": "0.10.0", "exp": None, "cap": {}}

    def test_header(self):
        header = HeaderAssertions.from_fields({"typ": "JWT"})
        assert header.alg == Absent()
        assert header.to_dict() == {"typ": "JWT"}

    @pytest.mark.asyncio
    async def test_from_token(self):
        identities = Identities.load()
        ucan = await build_ucan(identities.alice, identities.bob_did)
        token = await remove_field(ucan.encode(), "header", "alg", identities.alice)

        snapshot = UcanAssertions.from_token(token)
        data = snapshot.to_dict()
        assert snapshot.header.alg == Absent()
        assert data["header"] == {"typ": "JWT"}
        assert data["payload"]["exp"] is None
        assert "nbf" not in data["payload"]
        assert data["signature"] == token.split(".")[2]
