"""Build fixtures: semantic inputs and the exact token they must encode to."""

import copy
from dataclasses import dataclass
from functools import partial

from ..capability import capabilities_to_map
from ..fixtures import BuildFixture, BuildInputs
from ..identities import ALICE_BASE64_KEY, Identities
from ..token import UCAN_VERSION, UcanOptions, build_ucan
from .scenario import (
    FAR_FUTURE,
    PAST,
    SEND_EMAIL_AS_ALICE,
    SEND_NEWSLETTER_AS_ALICE,
    Job,
    gather_jobs,
)

SIGNATURE_SCHEME = "Ed25519"


@dataclass(frozen=True)
class BuildScenario:
    name: str
    options: UcanOptions


SCENARIOS: tuple[BuildScenario, ...] = (
    # Time bounds
    BuildScenario("UCAN has an expiration", UcanOptions(expiration=FAR_FUTURE)),
    BuildScenario("UCAN has a not before", UcanOptions(not_before=PAST)),
    # Capabilities
    BuildScenario(
        "UCAN delegates send email capability",
        UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE]),
    ),
    BuildScenario(
        "UCAN delegates send email capability with newsletter template caveat",
        UcanOptions(capabilities=[SEND_NEWSLETTER_AS_ALICE]),
    ),
    # Facts
    BuildScenario(
        "UCAN has a fact with a challenge",
        UcanOptions(facts={"challenge": "abcdef"}),
    ),
)


async def make_fixture(
    identities: Identities, scenario: BuildScenario, version: str = UCAN_VERSION
) -> BuildFixture:
    options = scenario.options
    ucan = await build_ucan(identities.alice, identities.bob_did, options, version)

    inputs = BuildInputs(
        version=version,
        issuer_base64_key=ALICE_BASE64_KEY,
        signature_scheme=SIGNATURE_SCHEME,
        audience=identities.bob_did,
        not_before=options.not_before,
        expiration=options.expiration,
        facts=copy.deepcopy(options.facts) if options.facts else None,
        capabilities=capabilities_to_map(options.capabilities),
    )
    return BuildFixture(name=scenario.name, inputs=inputs, token=ucan.encode())


def jobs(identities: Identities, version: str = UCAN_VERSION) -> list[Job]:
    return [
        Job("build", s.name, partial(make_fixture, identities, s, version))
        for s in SCENARIOS
    ]


async def generate(
    identities: Identities | None = None, version: str = UCAN_VERSION
) -> list[BuildFixture]:
    return await gather_jobs(jobs(identities or Identities.load(), version))
