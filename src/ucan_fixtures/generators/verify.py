"""Verify fixtures: tokens a conformant verifier must accept."""

from functools import partial

from ..assertions import UcanAssertions
from ..fixtures import TokenInputs, VerifyFixture
from ..identities import Identities
from ..token import UCAN_VERSION, UcanOptions
from .scenario import (
    FAR_FUTURE,
    PAST,
    SEND_EMAIL_AS_ALICE,
    SEND_NEWSLETTER_AS_ALICE,
    SEND_NEWSLETTER_OR_MARKETING_AS_ALICE,
    SEND_WORK_EMAIL_AS_ALICE,
    Job,
    ProofSpec,
    Scenario,
    build_scenario,
    gather_jobs,
)

SCENARIOS: tuple[Scenario, ...] = (
    # Time bounds
    Scenario(
        "UCAN has not expired",
        options=UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE], expiration=FAR_FUTURE),
    ),
    Scenario(
        "UCAN is ready to be used",
        options=UcanOptions(
            capabilities=[SEND_EMAIL_AS_ALICE], not_before=PAST, expiration=FAR_FUTURE
        ),
    ),
    Scenario(
        "UCAN has no expiration",
        options=UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE]),
    ),
    # Capabilities
    Scenario(
        "UCAN delegates multiple capabilities",
        options=UcanOptions(
            capabilities=[SEND_EMAIL_AS_ALICE, SEND_WORK_EMAIL_AS_ALICE],
            expiration=FAR_FUTURE,
        ),
    ),
    Scenario(
        "UCAN delegates send email capability with newsletter template caveat",
        options=UcanOptions(capabilities=[SEND_NEWSLETTER_AS_ALICE], expiration=FAR_FUTURE),
    ),
    # Facts
    Scenario(
        "UCAN has a fact with a challenge",
        options=UcanOptions(
            capabilities=[SEND_EMAIL_AS_ALICE],
            expiration=FAR_FUTURE,
            facts={"challenge": "abcdef"},
        ),
    ),
    # Delegation
    Scenario(
        "UCAN delegates send email capability through a proof",
        issuer="bob",
        audience="mallory",
        options=UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE], expiration=FAR_FUTURE),
        proofs=(
            ProofSpec(
                "alice",
                "bob",
                UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE], expiration=FAR_FUTURE),
            ),
        ),
    ),
    Scenario(
        "UCAN attenuates a template caveat held in its proof",
        issuer="bob",
        audience="mallory",
        options=UcanOptions(capabilities=[SEND_NEWSLETTER_AS_ALICE], expiration=FAR_FUTURE),
        proofs=(
            ProofSpec(
                "alice",
                "bob",
                UcanOptions(
                    capabilities=[SEND_NEWSLETTER_OR_MARKETING_AS_ALICE],
                    expiration=FAR_FUTURE,
                ),
            ),
        ),
    ),
    Scenario(
        "UCAN delegation time bounds are within its proof time bounds",
        issuer="bob",
        audience="mallory",
        options=UcanOptions(
            capabilities=[SEND_EMAIL_AS_ALICE],
            not_before=PAST + 1,
            expiration=FAR_FUTURE - 1,
        ),
        proofs=(
            ProofSpec(
                "alice",
                "bob",
                UcanOptions(
                    capabilities=[SEND_EMAIL_AS_ALICE],
                    not_before=PAST,
                    expiration=FAR_FUTURE,
                ),
            ),
        ),
    ),
    Scenario(
        "UCAN delegates send email capability through a chain of two proofs",
        issuer="mallory",
        audience="alice",
        options=UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE], expiration=FAR_FUTURE),
        proofs=(
            ProofSpec(
                "bob",
                "mallory",
                UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE], expiration=FAR_FUTURE),
                proofs=(
                    ProofSpec(
                        "alice",
                        "bob",
                        UcanOptions(capabilities=[SEND_EMAIL_AS_ALICE], expiration=FAR_FUTURE),
                    ),
                ),
            ),
        ),
    ),
)


async def make_fixture(
    identities: Identities, scenario: Scenario, version: str = UCAN_VERSION
) -> VerifyFixture:
    built = await build_scenario(identities, scenario, version)
    return VerifyFixture(
        name=scenario.name,
        inputs=TokenInputs(token=built.token, proofs=built.proofs),
        assertions=UcanAssertions.from_ucan(built.ucan),
    )


def jobs(identities: Identities, version: str = UCAN_VERSION) -> list[Job]:
    return [
        Job("verify", s.name, partial(make_fixture, identities, s, version))
        for s in SCENARIOS
    ]


async def generate(
    identities: Identities | None = None, version: str = UCAN_VERSION
) -> list[VerifyFixture]:
    return await gather_jobs(jobs(identities or Identities.load(), version))
