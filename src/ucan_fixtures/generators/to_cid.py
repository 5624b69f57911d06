"""toCID fixtures: one token addressed under each supported hasher."""

from functools import partial

from ..fixtures import ToCIDFixture
from ..identities import Identities
from ..token import UCAN_VERSION, build_ucan
from .scenario import Job, gather_jobs

SCENARIOS: tuple[tuple[str, str], ...] = (
    ("Compute CID for token using SHA2-256 hasher", "SHA2-256"),
    ("Compute CID for token using BLAKE3-256 hasher", "BLAKE3-256"),
)


async def make_fixture(
    identities: Identities, name: str, hasher: str, version: str = UCAN_VERSION
) -> ToCIDFixture:
    ucan = await build_ucan(identities.alice, identities.bob_did, version=version)
    return ToCIDFixture(
        name=name,
        token=ucan.encode(),
        hasher=hasher,
        cid=ucan.to_cid(hasher),
    )


def jobs(identities: Identities, version: str = UCAN_VERSION) -> list[Job]:
    return [
        Job("toCID", name, partial(make_fixture, identities, name, hasher, version))
        for name, hasher in SCENARIOS
    ]


async def generate(
    identities: Identities | None = None, version: str = UCAN_VERSION
) -> list[ToCIDFixture]:
    return await gather_jobs(jobs(identities or Identities.load(), version))
