"""Refute fixtures: tokens a conformant verifier must reject, and why."""

from functools import partial

from ..assertions import UcanAssertions
from ..fixtures import RefuteFixture, TokenInputs
from ..identities import Identities
from ..token import UCAN_VERSION, UcanOptions
from .scenario import (
    EXPIRED,
    FAR_FUTURE,
    INCORRECT_PROOFS,
    INCORRECT_TYPE,
    INVALID_DELEGATION,
    MISSING_FIELD,
    NOT_READY,
    PAST,
    SEND_EMAIL_AS_ALICE,
    SEND_NEWSLETTER_AS_ALICE,
    SEND_NEWSLETTER_OR_MARKETING_AS_ALICE,
    SEND_WORK_EMAIL_AS_ALICE,
    TIME_BOUNDS_VIOLATION,
    Job,
    ProofSpec,
    Scenario,
    Tamper,
    build_scenario,
    gather_jobs,
)

# Untampered base for the structural scenarios
_BASE = UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE], expiration=FAR_FUTURE)
_WITH_NOT_BEFORE = _BASE.model_copy(update={"not_before": PAST})
_WITH_FACT = _BASE.model_copy(update={"facts": {"challenge": "abcdef"}})

_ALICE_TO_BOB_PROOF = ProofSpec("alice", "bob", _BASE)


def _missing(part: str, name: str) -> Scenario:
    return Scenario(
        f"UCAN {part} is missing {name} field",
        options=_BASE,
        tamper=Tamper.remove(part, name),
        errors=(MISSING_FIELD,),
    )


def _wrong_type(
    name: str, part: str, field_name: str, value, options: UcanOptions = _BASE
) -> Scenario:
    return Scenario(
        name,
        options=options,
        tamper=Tamper.mutate(part, field_name, value),
        errors=(INCORRECT_TYPE,),
    )


SCENARIOS: tuple[Scenario, ...] = (
    # Time bounds
    Scenario(
        "UCAN has expired",
        options=UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE], expiration=PAST),
        errors=(EXPIRED,),
    ),
    Scenario(
        "UCAN is not ready to be used",
        options=UcanOptions(
            capabilities=[SEND_EMAIL_AS_ALICE],
            not_before=FAR_FUTURE,
            expiration=FAR_FUTURE + 1,
        ),
        errors=(NOT_READY,),
    ),
    Scenario(
        "UCAN delegation expires after its proof",
        issuer="bob",
        audience="mallory",
        options=UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE], expiration=FAR_FUTURE + 1),
        proofs=(_ALICE_TO_BOB_PROOF,),
        errors=(TIME_BOUNDS_VIOLATION,),
    ),
    Scenario(
        "UCAN delegation is usable before its proof",
        issuer="bob",
        audience="mallory",
        options=UcanOptions(
            capabilities=[SEND_EMAIL_AS_ALICE], not_before=PAST, expiration=FAR_FUTURE
        ),
        proofs=(
            ProofSpec(
                "alice",
                "bob",
                UcanOptions(
                    capabilities=[SEND_EMAIL_AS_ALICE],
                    not_before=PAST + 1,
                    expiration=FAR_FUTURE,
                ),
            ),
        ),
        errors=(TIME_BOUNDS_VIOLATION,),
    ),
    # Missing fields
    _missing("header", "alg"),
    _missing("header", "typ"),
    _missing("payload", "ucv"),
    _missing("payload", "iss"),
    _missing("payload", "aud"),
    _missing("payload", "exp"),
    _missing("payload", "cap"),
    # Incorrect types
    _wrong_type("UCAN header alg is not a string", "header", "alg", 1),
    _wrong_type("UCAN header typ is not a string", "header", "typ", 1),
    _wrong_type("UCAN header typ is not JWT", "header", "typ", "JWS"),
    _wrong_type("UCAN payload ucv is not a string", "payload", "ucv", 10),
    _wrong_type("UCAN payload ucv is not a semantic version", "payload", "ucv", "0.10"),
    _wrong_type("UCAN payload iss is not a string", "payload", "iss", 1),
    _wrong_type("UCAN payload aud is not a string", "payload", "aud", 1),
    _wrong_type("UCAN payload exp is not an integer", "payload", "exp", str(FAR_FUTURE)),
    _wrong_type(
        "UCAN payload nbf is not an integer",
        "payload",
        "nbf",
        str(PAST),
        options=_WITH_NOT_BEFORE,
    ),
    _wrong_type("UCAN payload cap is not an object", "payload", "cap", []),
    _wrong_type(
        "UCAN payload fct is not an object", "payload", "fct", [], options=_WITH_FACT
    ),
    Scenario(
        "UCAN payload prf is not an array",
        issuer="bob",
        audience="mallory",
        options=_BASE,
        proofs=(_ALICE_TO_BOB_PROOF,),
        tamper=Tamper.mutate("payload", "prf", {}),
        errors=(INCORRECT_TYPE,),
    ),
    # Proofs
    Scenario(
        "UCAN proofs are not CIDs",
        issuer="bob",
        audience="mallory",
        options=_BASE,
        proofs=(_ALICE_TO_BOB_PROOF,),
        tamper=Tamper.mutate("payload", "prf", ["not-a-cid"]),
        errors=(INCORRECT_PROOFS,),
    ),
    # Delegation
    Scenario(
        "UCAN delegation issuer is not the audience of its proof",
        issuer="mallory",
        audience="bob",
        options=_BASE,
        proofs=(_ALICE_TO_BOB_PROOF,),
        errors=(INVALID_DELEGATION,),
    ),
    Scenario(
        "UCAN delegates a capability its proof does not hold",
        issuer="bob",
        audience="mallory",
        options=UcanOptions(capabilities=[SEND_WORK_EMAIL_AS_ALICE], expiration=FAR_FUTURE),
        proofs=(_ALICE_TO_BOB_PROOF,),
        errors=(INVALID_DELEGATION,),
    ),
    Scenario(
        "UCAN delegation adds a template caveat not held in its proof",
        issuer="bob",
        audience="mallory",
        options=UcanOptions(
            capabilities=[SEND_NEWSLETTER_OR_MARKETING_AS_ALICE], expiration=FAR_FUTURE
        ),
        proofs=(
            ProofSpec(
                "alice",
                "bob",
                UcanOptions(capabilities=[SEND_NEWSLETTER_AS_ALICE], expiration=FAR_FUTURE),
            ),
        ),
        errors=(INVALID_DELEGATION,),
    ),
    Scenario(
        "UCAN delegation adds a caveat where its proof has none",
        issuer="bob",
        audience="mallory",
        options=UcanOptions(capabilities=[SEND_NEWSLETTER_AS_ALICE], expiration=FAR_FUTURE),
        proofs=(_ALICE_TO_BOB_PROOF,),
        errors=(INVALID_DELEGATION,),
    ),
)


async def make_fixture(
    identities: Identities, scenario: Scenario, version: str = UCAN_VERSION
) -> RefuteFixture:
    built = await build_scenario(identities, scenario, version)
    return RefuteFixture(
        name=scenario.name,
        inputs=TokenInputs(token=built.token, proofs=built.proofs),
        assertions=UcanAssertions.from_ucan(built.ucan),
        errors=scenario.errors,
    )


def jobs(identities: Identities, version: str = UCAN_VERSION) -> list[Job]:
    return [
        Job("refute", s.name, partial(make_fixture, identities, s, version))
        for s in SCENARIOS
    ]


async def generate(
    identities: Identities | None = None, version: str = UCAN_VERSION
) -> list[RefuteFixture]:
    return await gather_jobs(jobs(identities or Identities.load(), version))
