"""
Fixture catalog.

Runs every task's scenarios and assembles the catalog in its fixed order:
verify, refute, build, toCID, each in table order. Consumers may index
fixtures positionally, so the order is part of the output contract.

Failure policy:
    strict (default): the first failed scenario aborts the run with a
        CatalogError and nothing is written
    non-strict: failed scenarios are left out, logged and reported in
        `Catalog.skipped`
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from ..errors import CatalogError, FixtureError
from ..fixtures import BuildFixture, Fixture, RefuteFixture, ToCIDFixture, VerifyFixture
from ..identities import Identities
from ..token import UCAN_VERSION
from . import build, refute, to_cid, verify
from .scenario import Job

logger = logging.getLogger(__name__)

# Task name -> output file name
OUTPUT_FILES = {
    "verify": "verify.json",
    "refute": "refute.json",
    "build": "build.json",
    "toCID": "cid.json",
}
ALL_FILE = "all.json"


@dataclass(frozen=True)
class ScenarioOutcome:
    """Result of one scenario: a fixture or the error that stopped it."""

    task: str
    name: str
    fixture: Optional[Fixture] = None
    error: Optional[FixtureError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict[str, Any]:
        return {
            "task": self.task,
            "name": self.name,
            "error": self.error.to_dict() if self.error else None,
        }


@dataclass
class Catalog:
    verify: list[VerifyFixture] = field(default_factory=list)
    refute: list[RefuteFixture] = field(default_factory=list)
    build: list[BuildFixture] = field(default_factory=list)
    to_cid: list[ToCIDFixture] = field(default_factory=list)
    skipped: list[ScenarioOutcome] = field(default_factory=list)

    def by_task(self) -> dict[str, list[Fixture]]:
        return {
            "verify": list(self.verify),
            "refute": list(self.refute),
            "build": list(self.build),
            "toCID": list(self.to_cid),
        }

    def all(self) -> list[Fixture]:
        return [fixture for fixtures in self.by_task().values() for fixture in fixtures]

    def __len__(self) -> int:
        return len(self.all())

    def files(self) -> dict[str, list[dict[str, Any]]]:
        """Output file name -> JSON array, including the concatenated file."""
        out = {
            OUTPUT_FILES[task]: [fixture.to_dict() for fixture in fixtures]
            for task, fixtures in self.by_task().items()
        }
        out[ALL_FILE] = [fixture.to_dict() for fixture in self.all()]
        return out


def all_jobs(identities: Identities, version: str = UCAN_VERSION) -> list[Job]:
    """Every scenario of every task, in emission order."""
    return [
        *verify.jobs(identities, version),
        *refute.jobs(identities, version),
        *build.jobs(identities, version),
        *to_cid.jobs(identities, version),
    ]


async def _run(job: Job) -> ScenarioOutcome:
    try:
        fixture = await job.run()
    except FixtureError as e:
        logger.debug(f"Scenario {job.task}/{job.name!r} failed: {e.message}")
        return ScenarioOutcome(job.task, job.name, error=e)
    return ScenarioOutcome(job.task, job.name, fixture=fixture)


async def run_jobs(jobs: list[Job]) -> list[ScenarioOutcome]:
    """Run jobs concurrently, collecting one outcome per job in job order."""
    return list(await asyncio.gather(*(_run(job) for job in jobs)))


async def generate_catalog(
    identities: Identities | None = None,
    version: str = UCAN_VERSION,
    strict: bool = True,
    jobs: list[Job] | None = None,
) -> Catalog:
    """
    Build the whole fixture catalog.

    Args:
        identities: Seed identities, loaded once if not given
        version: Token format version written to "ucv"
        strict: Abort on the first failure instead of skipping
        jobs: Scenario jobs to run, all tasks by default

    Raises:
        CatalogError: In strict mode, if any scenario fails
    """
    identities = identities or Identities.load()
    if jobs is None:
        jobs = all_jobs(identities, version)

    outcomes = await run_jobs(jobs)

    catalog = Catalog()
    buckets = {
        "verify": catalog.verify,
        "refute": catalog.refute,
        "build": catalog.build,
        "toCID": catalog.to_cid,
    }
    for outcome in outcomes:
        if outcome.ok:
            buckets[outcome.task].append(outcome.fixture)
            continue
        if strict:
            raise CatalogError(
                f"Scenario {outcome.task}/{outcome.name!r} failed: {outcome.error.message}",
                scenario=outcome.name,
                details=outcome.to_dict(),
                cause=outcome.error,
            ) from outcome.error
        logger.warning(f"Skipping {outcome.task}/{outcome.name!r}: {outcome.error.message}")
        catalog.skipped.append(outcome)

    for task, fixtures in catalog.by_task().items():
        logger.info(f"Generated {len(fixtures)} {task} fixtures")
    return catalog


def write_catalog(
    catalog: Catalog, output_path: Path, indent: int | None = None
) -> list[Path]:
    """Write one JSON array per task plus the concatenated file.

    Returns:
        Paths written, in the order they were written
    """
    output_path.mkdir(parents=True, exist_ok=True)
    written = []
    for filename, records in catalog.files().items():
        path = output_path / filename
        with open(path, "w", encoding="utf-8") as f:
            json.dump(records, f, indent=indent, ensure_ascii=False)
        logger.info(f"Wrote {len(records)} fixtures to {path}")
        written.append(path)
    return written
