"""
Tests for capabilities and attenuation.
"""

import pytest

from ucan_fixtures.capability import (
    Capability,
    EmailSemantics,
    capabilities_from_map,
    capabilities_to_map,
    delegation_holds,
    find_witness,
    is_attenuation,
)
from ucan_fixtures.errors import InvalidInputError

EMAIL = "mailto:alice@email.com"


def cap(caveat=None, resource=EMAIL, ability="email/send"):
    return Capability(resource=resource, ability=ability, caveat=caveat or {})


class TestCapabilityMap:
    """Tests for the payload cap map shape."""

    def test_no_caveat_is_empty_object(self):
        assert capabilities_to_map([cap()]) == {EMAIL: {"email/send": [{}]}}

    def test_groups_by_resource_and_ability(self):
        cap_map = capabilities_to_map(
            [cap(), cap({"templates": ["newsletter"]}), cap(resource="mailto:a@b.c")]
        )
        assert cap_map == {
            EMAIL: {"email/send": [{}, {"templates": ["newsletter"]}]},
            "mailto:a@b.c": {"email/send": [{}]},
        }

    def test_map_does_not_share_caveats(self):
        """Editing a map leaves the capability it came from untouched."""
        newsletter = cap({"templates": ["newsletter"]})
        cap_map = capabilities_to_map([newsletter])
        cap_map[EMAIL]["email/send"][0]["templates"].append("marketing")

        assert newsletter.caveat == {"templates": ["newsletter"]}
        assert capabilities_to_map([newsletter]) == {
            EMAIL: {"email/send": [{"templates": ["newsletter"]}]}
        }

    def test_from_map_expands(self):
        cap_map = {EMAIL: {"email/send": [{}, {"templates": ["newsletter"]}]}}
        assert capabilities_from_map(cap_map) == [cap(), cap({"templates": ["newsletter"]})]

    @pytest.mark.parametrize(
        "cap_map",
        [[], {EMAIL: []}, {EMAIL: {"email/send": {}}}, {EMAIL: {"email/send": ["x"]}}],
    )
    def test_from_map_rejects_bad_shape(self, cap_map):
        with pytest.raises(InvalidInputError):
            capabilities_from_map(cap_map)


class TestAttenuation:
    """Tests for is_attenuation."""

    def test_equal_capability(self):
        assert is_attenuation(cap(), cap()) is True

    def test_empty_caveat_attenuates_any(self):
        assert is_attenuation(cap(), cap({"templates": ["newsletter"]})) is True

    def test_list_subset(self):
        held = cap({"templates": ["newsletter", "marketing"]})
        assert is_attenuation(cap({"templates": ["newsletter"]}), held) is True

    def test_list_superset_is_escalation(self):
        held = cap({"templates": ["newsletter"]})
        candidate = cap({"templates": ["newsletter", "marketing"]})
        assert is_attenuation(candidate, held) is False

    def test_new_key_is_escalation(self):
        assert is_attenuation(cap({"templates": ["newsletter"]}), cap()) is False

    def test_nested_objects(self):
        held = cap({"limits": {"daily": 10, "to": ["a", "b"]}})
        assert is_attenuation(cap({"limits": {"to": ["a"]}}), held) is True
        assert is_attenuation(cap({"limits": {"daily": 11}}), held) is False

    def test_resource_mismatch(self):
        assert is_attenuation(cap(resource="mailto:alice@work.com"), cap()) is False

    def test_ability_mismatch(self):
        assert is_attenuation(cap(ability="email/read"), cap()) is False


class TestDelegationHolds:
    """Tests for find_witness / delegation_holds."""

    def test_witness_is_first_match(self):
        held = [cap(resource="mailto:a@b.c"), cap({"templates": ["x"]}), cap()]
        assert find_witness(cap({"templates": ["x"]}), held) == held[1]

    def test_no_witness(self):
        assert find_witness(cap({"templates": ["x"]}), [cap()]) is None

    def test_every_claim_needs_a_witness(self):
        held = [cap()]
        assert delegation_holds([cap()], held) is True
        assert delegation_holds([cap(), cap(resource="mailto:a@b.c")], held) is False

    def test_empty_claim_holds(self):
        assert delegation_holds([], []) is True


class TestEmailSemantics:
    """Tests for EmailSemantics.parse."""

    def test_parse(self):
        parsed = EmailSemantics().parse(EMAIL, "email/send", {"templates": ["newsletter"]})
        assert parsed == cap({"templates": ["newsletter"]})

    def test_parse_without_caveat(self):
        assert EmailSemantics().parse(EMAIL, "email/send").caveat == {}

    @pytest.mark.parametrize(
        "resource,ability,caveat",
        [
            ("https://example.com", "email/send", None),
            ("mailto:nobody", "email/send", None),
            (EMAIL, "email/read", None),
            (EMAIL, "email/send", ["newsletter"]),
        ],
    )
    def test_parse_rejects(self, resource, ability, caveat):
        with pytest.raises(InvalidInputError):
            EmailSemantics().parse(resource, ability, caveat)
