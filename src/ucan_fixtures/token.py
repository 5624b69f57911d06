"""
UCAN token builder.

Assembles the header and payload from semantic inputs, encodes both with the
canonical codec and signs `header-part + "." + payload-part` with the issuer.

Usage:
    ucan = await build_ucan(
        identities.alice,
        identities.bob_did,
        UcanOptions(capabilities=[send_email], expiration=9246211200),
    )
    token = ucan.encode()
    cid = ucan.to_cid("SHA2-256")
"""

import copy
import logging
import secrets
from dataclasses import dataclass, field
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .canonical import decode_parts, encode_part, split_token
from .capability import Capability, capabilities_to_map
from .cid import compute_cid
from .crypto import b64u_encode
from .errors import InvalidInputError, SigningError
from .ports.crypto import ISignerPort
from .ports.hash import IHashPort

logger = logging.getLogger(__name__)

UCAN_VERSION = "0.10.0"
TOKEN_TYPE = "JWT"
NONCE_BYTES = 32


class UcanOptions(BaseModel):
    """Optional token fields. Defaults build a token with no capabilities,
    no time bounds, no facts, no proofs and no nonce."""

    capabilities: list[Capability] = Field(default_factory=list)
    expiration: Optional[int] = None
    not_before: Optional[int] = None
    facts: dict[str, Any] = Field(default_factory=dict)
    proofs: list[str] = Field(default_factory=list)
    add_nonce: bool = False

    model_config = ConfigDict(frozen=True)

    def __init__(self, **data: Any) -> None:
        """
        Raises:
            InvalidInputError: If a field has the wrong type or a time bound
                is negative
        """
        try:
            super().__init__(**data)
        except ValidationError as e:
            raise InvalidInputError(
                "Invalid token options",
                details={"errors": [err["msg"] for err in e.errors()]},
                cause=e,
            ) from e
        check_time_bounds(self)


def check_time_bounds(options: UcanOptions) -> None:
    """Reject negative time bounds.

    Runs on construction and again in `build_ucan`, which also sees options
    made with `model_copy(update=...)`.

    Raises:
        InvalidInputError: If expiration or not_before is negative
    """
    for name in ("expiration", "not_before"):
        value = getattr(options, name)
        if value is not None and value < 0:
            raise InvalidInputError(
                f"{name} must be non-negative, got {value}",
                details={"field": name, "value": value},
            )


@dataclass(frozen=True)
class Ucan:
    """An encoded UCAN and the field maps it was built from."""

    header: dict[str, Any]
    payload: dict[str, Any]
    signature: bytes
    header_part: str
    payload_part: str
    signature_part: str = field(repr=False)

    @classmethod
    def decode(cls, token: str) -> "Ucan":
        """Decode an encoded token.

        Tampered tokens decode too: only the codec is checked, not the fields.

        Raises:
            DecodeError: If a part is not base64url JSON
        """
        header_part, payload_part, signature_part = split_token(token)
        header, payload, signature = decode_parts(token)
        return cls(
            header=header,
            payload=payload,
            signature=signature,
            header_part=header_part,
            payload_part=payload_part,
            signature_part=signature_part,
        )

    def encode(self) -> str:
        return f"{self.header_part}.{self.payload_part}.{self.signature_part}"

    def signed_data(self) -> bytes:
        """Bytes covered by the signature."""
        return f"{self.header_part}.{self.payload_part}".encode("utf-8")

    def to_cid(self, hasher: IHashPort | str) -> str:
        """CID over the encoded token under the given hash algorithm."""
        return compute_cid(self.encode().encode("utf-8"), hasher)

    @property
    def algorithm(self) -> Any:
        return self.header.get("alg")

    @property
    def version(self) -> Any:
        return self.payload.get("ucv")

    @property
    def issuer(self) -> Any:
        return self.payload.get("iss")

    @property
    def audience(self) -> Any:
        return self.payload.get("aud")

    @property
    def expires_at(self) -> Any:
        return self.payload.get("exp")

    @property
    def not_before(self) -> Any:
        return self.payload.get("nbf")

    @property
    def proofs(self) -> list[Any]:
        return list(self.payload.get("prf") or [])


async def sign_parts(header_part: str, payload_part: str, signer: ISignerPort) -> str:
    """Sign an encoded header and payload and return the three-part token.

    Raises:
        SigningError: If the signer rejects the body
    """
    data = f"{header_part}.{payload_part}".encode("utf-8")
    try:
        signature = await signer.sign(data)
    except SigningError:
        raise
    except Exception as e:
        raise SigningError(cause=e) from e
    return f"{header_part}.{payload_part}.{b64u_encode(signature)}"


def generate_nonce() -> str:
    """Fresh random nonce, unpadded base64url."""
    return b64u_encode(secrets.token_bytes(NONCE_BYTES))


async def build_ucan(
    issuer: ISignerPort,
    audience: str,
    options: UcanOptions | None = None,
    version: str = UCAN_VERSION,
) -> Ucan:
    """
    Build and sign a UCAN.

    Args:
        issuer: Signing identity; its DID becomes "iss"
        audience: DID of the audience
        options: Capabilities, time bounds, facts, proofs and nonce flag
        version: Value of "ucv"

    Returns:
        Signed Ucan

    Raises:
        InvalidInputError: If the audience is empty or a time bound is
            negative
        SigningError: If the issuer cannot sign
    """
    options = options or UcanOptions()
    if not isinstance(audience, str) or not audience:
        raise InvalidInputError("Audience must be a non-empty string")
    check_time_bounds(options)

    header = {"alg": issuer.algorithm, "typ": TOKEN_TYPE}

    payload: dict[str, Any] = {
        "ucv": version,
        "iss": issuer.to_did(),
        "aud": audience,
        "exp": options.expiration,
    }
    if options.not_before is not None:
        payload["nbf"] = options.not_before
    if options.add_nonce:
        payload["nnc"] = generate_nonce()
    payload["cap"] = capabilities_to_map(options.capabilities)
    if options.facts:
        payload["fct"] = copy.deepcopy(options.facts)
    if options.proofs:
        payload["prf"] = list(options.proofs)

    token = await sign_parts(encode_part(header), encode_part(payload), issuer)
    logger.debug(f"Built UCAN {payload['iss']} -> {audience}")
    return Ucan.decode(token)


async def make_proof(
    issuer: ISignerPort,
    audience: str,
    options: UcanOptions | None = None,
    version: str = UCAN_VERSION,
) -> tuple[str, str]:
    """Build a token to be cited in a proof chain.

    Returns:
        Tuple of (SHA2-256 CID, encoded token)
    """
    ucan = await build_ucan(issuer, audience, options, version)
    return ucan.to_cid("SHA2-256"), ucan.encode()
