"""Expected-field snapshots for verify and refute fixtures.

The wire format tells "field omitted" apart from "field present with null",
so every asserted field is one of three variants:

- Present(value): serialized as the value
- ExplicitNull(): serialized as JSON null
- Absent(): the key is left out of the snapshot
"""

import copy
from dataclasses import dataclass, fields
from typing import Any

from .crypto import b64u_encode
from .token import Ucan


class AssertionField:
    """Base of the assertion field variants."""


@dataclass(frozen=True)
class Present(AssertionField):
    value: Any


@dataclass(frozen=True)
class ExplicitNull(AssertionField):
    pass


@dataclass(frozen=True)
class Absent(AssertionField):
    pass


def observe(source: dict[str, Any], key: str) -> AssertionField:
    """Classify a field of a decoded token part."""
    if key not in source:
        return Absent()
    if source[key] is None:
        return ExplicitNull()
    return Present(source[key])


def _serialize(snapshot: Any) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for f in fields(snapshot):
        value = getattr(snapshot, f.name)
        if isinstance(value, Absent):
            continue
        if isinstance(value, ExplicitNull):
            out[f.name] = None
        else:
            out[f.name] = copy.deepcopy(value.value)
    return out


@dataclass(frozen=True)
class HeaderAssertions:
    alg: AssertionField
    typ: AssertionField

    @classmethod
    def from_fields(cls, header: dict[str, Any]) -> "HeaderAssertions":
        return cls(**{f.name: observe(header, f.name) for f in fields(cls)})

    def to_dict(self) -> dict[str, Any]:
        return _serialize(self)


@dataclass(frozen=True)
class PayloadAssertions:
    ucv: AssertionField
    iss: AssertionField
    aud: AssertionField
    exp: AssertionField
    nbf: AssertionField
    nnc: AssertionField
    cap: AssertionField
    fct: AssertionField
    prf: AssertionField

    @classmethod
    def from_fields(cls, payload: dict[str, Any]) -> "PayloadAssertions":
        return cls(**{f.name: observe(payload, f.name) for f in fields(cls)})

    def to_dict(self) -> dict[str, Any]:
        return _serialize(self)


@dataclass(frozen=True)
class UcanAssertions:
    """Field-by-field snapshot of an encoded token."""

    header: HeaderAssertions
    payload: PayloadAssertions
    signature: bytes

    @classmethod
    def from_ucan(cls, ucan: Ucan) -> "UcanAssertions":
        return cls(
            header=HeaderAssertions.from_fields(ucan.header),
            payload=PayloadAssertions.from_fields(ucan.payload),
            signature=ucan.signature,
        )

    @classmethod
    def from_token(cls, token: str) -> "UcanAssertions":
        return cls.from_ucan(Ucan.decode(token))

    def to_dict(self) -> dict[str, Any]:
        return {
            "header": self.header.to_dict(),
            "payload": self.payload.to_dict(),
            "signature": b64u_encode(self.signature),
        }
