"""
Declarative scenarios.

A scenario is one row of a task table: who issues the token to whom, the
option deltas, the proofs it cites, an optional tamper step and the tags a
verifier must report. `build_scenario` turns a row into an encoded token.

Proofs are built depth-first and awaited before the token that cites them.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Awaitable, Callable, Literal, Optional

from ..capability import EmailSemantics, capabilities_from_map, delegation_holds
from ..errors import InvalidInputError
from ..identities import Identities
from ..ports.crypto import ISignerPort
from ..tamper import mutate_field, remove_field
from ..token import UCAN_VERSION, Ucan, UcanOptions, build_ucan

logger = logging.getLogger(__name__)

# Time bounds
PAST = 1
FAR_FUTURE = 9246211200

# Capabilities
EMAIL_SEMANTICS = EmailSemantics()

SEND_EMAIL_AS_ALICE = EMAIL_SEMANTICS.parse("mailto:alice@email.com", "email/send")
SEND_WORK_EMAIL_AS_ALICE = EMAIL_SEMANTICS.parse("mailto:alice@work.com", "email/send")
SEND_NEWSLETTER_AS_ALICE = EMAIL_SEMANTICS.parse(
    "mailto:alice@email.com", "email/send", {"templates": ["newsletter"]}
)
SEND_NEWSLETTER_OR_MARKETING_AS_ALICE = EMAIL_SEMANTICS.parse(
    "mailto:alice@email.com", "email/send", {"templates": ["newsletter", "marketing"]}
)

# Rule-violation tags
EXPIRED = "expired"
NOT_READY = "notReady"
TIME_BOUNDS_VIOLATION = "timeBoundsViolation"
MISSING_FIELD = "missingField"
INCORRECT_TYPE = "incorrectType"
INCORRECT_PROOFS = "incorrectProofs"
INVALID_DELEGATION = "invalidDelegation"


@dataclass(frozen=True)
class Tamper:
    """Remove or replace one field of one part after signing."""

    action: Literal["remove", "mutate"]
    part: Literal["header", "payload"]
    field_name: str
    value: Any = None

    @classmethod
    def remove(cls, part: Literal["header", "payload"], name: str) -> "Tamper":
        return cls("remove", part, name)

    @classmethod
    def mutate(cls, part: Literal["header", "payload"], name: str, value: Any) -> "Tamper":
        return cls("mutate", part, name, value)


@dataclass(frozen=True)
class ProofSpec:
    """A token cited by a scenario, possibly citing proofs of its own."""

    issuer: str
    audience: str
    options: UcanOptions = field(default_factory=UcanOptions)
    proofs: tuple["ProofSpec", ...] = ()


@dataclass(frozen=True)
class Scenario:
    name: str
    issuer: str = "alice"
    audience: str = "bob"
    options: UcanOptions = field(default_factory=UcanOptions)
    proofs: tuple[ProofSpec, ...] = ()
    tamper: Optional[Tamper] = None
    errors: tuple[str, ...] = ()


@dataclass(frozen=True)
class BuiltScenario:
    """Final token of a scenario plus every proof a verifier needs."""

    ucan: Ucan
    token: str
    proofs: dict[str, str]


@dataclass
class _ProofChain:
    cids: list[str] = field(default_factory=list)
    tokens: dict[str, str] = field(default_factory=dict)
    ucans: list[Ucan] = field(default_factory=list)


async def _build_proofs(
    identities: Identities,
    proof_specs: tuple[ProofSpec, ...],
    version: str,
) -> _ProofChain:
    chain = _ProofChain()
    for proof_spec in proof_specs:
        nested = await _build_proofs(identities, proof_spec.proofs, version)
        options = proof_spec.options.model_copy(update={"proofs": nested.cids})
        ucan = await build_ucan(
            identities.by_name(proof_spec.issuer),
            identities.by_name(proof_spec.audience).to_did(),
            options,
            version,
        )
        cid = ucan.to_cid("SHA2-256")
        chain.cids.append(cid)
        chain.tokens.update(nested.tokens)
        chain.tokens[cid] = ucan.encode()
        chain.ucans.append(ucan)
    return chain


def expected_chain_errors(delegate: Ucan, proofs: list[Ucan]) -> set[str]:
    """Tags a verifier derives from the chain binding of an untampered token.

    The delegate must be issued by the audience of every proof it cites, claim
    only capabilities attenuating ones those proofs hold, and stay within
    their time bounds.
    """
    errors: set[str] = set()
    if not proofs:
        return errors

    held = [cap for proof in proofs for cap in capabilities_from_map(proof.payload["cap"])]
    claimed = capabilities_from_map(delegate.payload["cap"])
    if any(proof.audience != delegate.issuer for proof in proofs) or not delegation_holds(
        claimed, held
    ):
        errors.add(INVALID_DELEGATION)

    for proof in proofs:
        if proof.expires_at is not None and (
            delegate.expires_at is None or delegate.expires_at > proof.expires_at
        ):
            errors.add(TIME_BOUNDS_VIOLATION)
        if proof.not_before is not None and (
            delegate.not_before is None or delegate.not_before < proof.not_before
        ):
            errors.add(TIME_BOUNDS_VIOLATION)
    return errors


async def build_scenario(
    identities: Identities,
    scenario: Scenario,
    version: str = UCAN_VERSION,
) -> BuiltScenario:
    """
    Build the token of a scenario.

    Raises:
        InvalidInputError: If an untampered delegation's declared tags do not
            match what its proof chain implies
        FieldNotFound: If the tamper step mutates a field the token lacks
    """
    chain = await _build_proofs(identities, scenario.proofs, version)
    issuer = identities.by_name(scenario.issuer)
    options = scenario.options
    if chain.cids:
        options = options.model_copy(update={"proofs": chain.cids})

    ucan = await build_ucan(
        issuer, identities.by_name(scenario.audience).to_did(), options, version
    )

    if scenario.tamper is None:
        implied = expected_chain_errors(ucan, chain.ucans)
        declared = {
            tag
            for tag in scenario.errors
            if tag in (INVALID_DELEGATION, TIME_BOUNDS_VIOLATION)
        }
        if implied != declared:
            raise InvalidInputError(
                f"Scenario {scenario.name!r} declares {sorted(declared)} "
                f"but its proof chain implies {sorted(implied)}",
                details={"scenario": scenario.name},
            )
        token = ucan.encode()
    else:
        token = await _apply_tamper(ucan.encode(), scenario.tamper, issuer)
        ucan = Ucan.decode(token)

    logger.debug(f"Built scenario {scenario.name!r}")
    return BuiltScenario(ucan=ucan, token=token, proofs=chain.tokens)


async def _apply_tamper(token: str, tamper: Tamper, signer: ISignerPort) -> str:
    if tamper.action == "remove":
        return await remove_field(token, tamper.part, tamper.field_name, signer)
    return await mutate_field(token, tamper.part, tamper.field_name, tamper.value, signer)


@dataclass(frozen=True)
class Job:
    """One deferred fixture construction."""

    task: str
    name: str
    run: Callable[[], Awaitable[Any]]


async def gather_jobs(jobs: list[Job]) -> list[Any]:
    """Run jobs concurrently; results keep the order of `jobs`."""
    return list(await asyncio.gather(*(job.run() for job in jobs)))
