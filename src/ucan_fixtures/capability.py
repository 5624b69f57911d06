"""
Capabilities and attenuation.

A capability is a (resource, ability, caveat) triple. On the wire the
payload's "cap" field groups them as a map:

    {"mailto:alice@email.com": {"email/send": [{}, {"templates": ["newsletter"]}]}}

where every caveat object under an ability is one capability. A capability
without a caveat is written as the empty object.

Attenuation:
    A delegated capability is valid only if its issuer holds a capability with
    the same resource and ability whose caveat covers it. The candidate caveat
    must be empty or a subset of the held caveat: every key it names exists in
    the held caveat with an equal or containing value. Adding a key or a value
    is an escalation.
"""

import copy
import logging
from typing import Any, Iterable, Optional

from pydantic import BaseModel, ConfigDict, Field

from .errors import InvalidInputError

logger = logging.getLogger(__name__)


class Capability(BaseModel):
    """
    One permitted action.

    Attributes:
        resource: URI of the resource (e.g., "mailto:alice@email.com")
        ability: Namespaced action (e.g., "email/send")
        caveat: JSON restriction object, empty when unrestricted
    """

    resource: str
    ability: str
    caveat: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)


def capabilities_to_map(capabilities: Iterable[Capability]) -> dict[str, Any]:
    """Group capabilities into the payload "cap" map, keeping their order.

    Caveats are copied, so the map never aliases a capability's caveat.
    """
    cap_map: dict[str, dict[str, list[dict[str, Any]]]] = {}
    for capability in capabilities:
        abilities = cap_map.setdefault(capability.resource, {})
        caveats = abilities.setdefault(capability.ability, [])
        caveats.append(copy.deepcopy(capability.caveat))
    return cap_map


def capabilities_from_map(cap_map: dict[str, Any]) -> list[Capability]:
    """Expand a payload "cap" map back into capabilities.

    Raises:
        InvalidInputError: If the map does not have the resource / ability /
            caveat list shape
    """
    if not isinstance(cap_map, dict):
        raise InvalidInputError("Capability map must be an object")

    capabilities = []
    for resource, abilities in cap_map.items():
        if not isinstance(abilities, dict):
            raise InvalidInputError(
                "Abilities must be an object", details={"resource": resource}
            )
        for ability, caveats in abilities.items():
            if not isinstance(caveats, list) or not all(
                isinstance(c, dict) for c in caveats
            ):
                raise InvalidInputError(
                    "Caveats must be a list of objects",
                    details={"resource": resource, "ability": ability},
                )
            for caveat in caveats:
                capabilities.append(
                    Capability(resource=resource, ability=ability, caveat=caveat)
                )
    return capabilities


def _value_within(candidate: Any, held: Any) -> bool:
    if isinstance(candidate, dict):
        return isinstance(held, dict) and all(
            key in held and _value_within(value, held[key])
            for key, value in candidate.items()
        )
    if isinstance(candidate, list):
        return isinstance(held, list) and all(item in held for item in candidate)
    return candidate == held


def is_attenuation(candidate: Capability, held: Capability) -> bool:
    """
    Check whether candidate is equal to, or a narrowing of, held.

    Returns:
        True if a holder of `held` may delegate `candidate`
    """
    if candidate.resource != held.resource or candidate.ability != held.ability:
        return False
    return _value_within(candidate.caveat, held.caveat)


def find_witness(
    candidate: Capability, held: Iterable[Capability]
) -> Optional[Capability]:
    """Return the first held capability that candidate attenuates, if any."""
    for capability in held:
        if is_attenuation(candidate, capability):
            return capability
    return None


def delegation_holds(
    claimed: Iterable[Capability],
    held: Iterable[Capability],
) -> bool:
    """Check that every claimed capability attenuates a held one."""
    held = list(held)
    for capability in claimed:
        if find_witness(capability, held) is None:
            logger.debug(
                f"No witness for {capability.resource} {capability.ability} "
                f"{capability.caveat}"
            )
            return False
    return True


class EmailSemantics:
    """
    Capability semantics for sending email.

    Resources are mailto: URIs and the only ability is "email/send". Caveats
    are arbitrary JSON objects, typically {"templates": [...]}.
    """

    scheme = "mailto"
    abilities = ("email/send",)

    def parse(
        self,
        resource: str,
        ability: str,
        caveat: Optional[dict[str, Any]] = None,
    ) -> Capability:
        """
        Parse a capability in the email namespace.

        Raises:
            InvalidInputError: If the resource, ability or caveat is not
                valid for this namespace
        """
        scheme, _, address = resource.partition(":")
        if scheme != self.scheme or "@" not in address:
            raise InvalidInputError(
                f"Not a mailto resource: {resource}",
                details={"resource": resource},
            )
        if ability not in self.abilities:
            raise InvalidInputError(
                f"Unknown email ability: {ability}",
                details={"ability": ability, "supported": list(self.abilities)},
            )
        if caveat is not None and not isinstance(caveat, dict):
            raise InvalidInputError(
                "Caveat must be a JSON object",
                details={"type": type(caveat).__name__},
            )
        return Capability(resource=resource, ability=ability, caveat=caveat or {})
