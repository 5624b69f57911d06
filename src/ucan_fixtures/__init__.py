"""UCAN fixture generator.

Produces conformance test vectors for UCAN verifiers: signed tokens built from
fixed seed identities, deliberately corrupted variants re-signed around the
corruption, and the rule-violation tags a verifier must report for each.

Example:
    >>> import asyncio
    >>> from pathlib import Path
    >>> from ucan_fixtures import generate_catalog, write_catalog
    >>> catalog = asyncio.run(generate_catalog())
    >>> write_catalog(catalog, Path("fixtures/0.10.0"))
"""

from .canonical import canonical_json, decode_part, encode_part
from .capability import Capability, EmailSemantics, is_attenuation
from .cid import compute_cid, is_cid, parse_cid
from .errors import (
    CatalogError,
    DecodeError,
    FieldNotFound,
    FixtureError,
    InvalidInputError,
    SigningError,
    UnsupportedPart,
)
from .generators import generate_catalog, write_catalog
from .identities import Identities
from .tamper import mutate_field, remove_field
from .token import UCAN_VERSION, Ucan, UcanOptions, build_ucan, make_proof
from .wallet import Wallet

__version__ = "0.1.0"

__all__ = [
    # Core classes
    "Wallet",
    "Identities",
    "Capability",
    "EmailSemantics",
    "Ucan",
    "UcanOptions",
    # Functions
    "canonical_json",
    "encode_part",
    "decode_part",
    "build_ucan",
    "make_proof",
    "remove_field",
    "mutate_field",
    "compute_cid",
    "parse_cid",
    "is_cid",
    "is_attenuation",
    "generate_catalog",
    "write_catalog",
    # Constants
    "UCAN_VERSION",
    # Errors
    "FixtureError",
    "DecodeError",
    "FieldNotFound",
    "SigningError",
    "UnsupportedPart",
    "InvalidInputError",
    "CatalogError",
]
