"""Fixture records.

One record per scenario, frozen once built. `to_dict()` yields the exact JSON
shape consumers read, including which keys are omitted.
"""

import copy
from typing import Any, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, InstanceOf

from .assertions import UcanAssertions

TASKS = ("verify", "refute", "build", "toCID")


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)


class BuildInputs(_Frozen):
    version: str
    issuer_base64_key: str
    signature_scheme: str
    audience: str
    not_before: Optional[int] = None
    expiration: Optional[int] = None
    facts: Optional[dict[str, Any]] = None
    capabilities: dict[str, Any] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "version": self.version,
            "issuer_base64_key": self.issuer_base64_key,
            "signature_scheme": self.signature_scheme,
            "audience": self.audience,
        }
        if self.not_before is not None:
            data["not_before"] = self.not_before
        # expiration is nullable, never omitted
        data["expiration"] = self.expiration
        if self.facts is not None:
            data["facts"] = copy.deepcopy(self.facts)
        data["capabilities"] = copy.deepcopy(self.capabilities)
        return data


class BuildFixture(_Frozen):
    name: str
    task: Literal["build"] = "build"
    inputs: BuildInputs
    token: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "task": self.task,
            "inputs": self.inputs.to_dict(),
            "outputs": {"token": self.token},
        }


class TokenInputs(_Frozen):
    token: str
    proofs: dict[str, str] = Field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"token": self.token, "proofs": dict(self.proofs)}


class VerifyFixture(_Frozen):
    name: str
    task: Literal["verify"] = "verify"
    inputs: TokenInputs
    assertions: InstanceOf[UcanAssertions]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "task": self.task,
            "inputs": self.inputs.to_dict(),
            "assertions": self.assertions.to_dict(),
        }


class RefuteFixture(_Frozen):
    name: str
    task: Literal["refute"] = "refute"
    inputs: TokenInputs
    assertions: InstanceOf[UcanAssertions]
    errors: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "task": self.task,
            "inputs": self.inputs.to_dict(),
            "assertions": self.assertions.to_dict(),
            "errors": list(self.errors),
        }


class ToCIDFixture(_Frozen):
    name: str
    task: Literal["toCID"] = "toCID"
    token: str
    hasher: str
    cid: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "task": self.task,
            "inputs": {"token": self.token, "hasher": self.hasher},
            "outputs": {"cid": self.cid},
        }


Fixture = Union[BuildFixture, VerifyFixture, RefuteFixture, ToCIDFixture]
