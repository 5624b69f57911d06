"""Fixture generators, one module per task."""

from .catalog import Catalog, ScenarioOutcome, generate_catalog, write_catalog
from .scenario import Job, ProofSpec, Scenario, Tamper, build_scenario

__all__ = [
    "Catalog",
    "Job",
    "ProofSpec",
    "Scenario",
    "ScenarioOutcome",
    "Tamper",
    "build_scenario",
    "generate_catalog",
    "write_catalog",
]
