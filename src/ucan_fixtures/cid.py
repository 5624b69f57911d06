"""Content identifiers for encoded tokens.

A token CID is a CIDv1 with the raw codec over the token's UTF-8 bytes,
rendered in lowercase base32 multibase (the "b" prefix). The hash algorithm
is chosen per call, never globally.
"""

import base64
import binascii
from dataclasses import dataclass

from .adapters.hash import HASHERS, get_hasher
from .errors import DecodeError
from .ports.hash import IHashPort

CID_VERSION = 1
RAW_CODEC = 0x55
BASE32_PREFIX = "b"


def _encode_varint(value: int) -> bytes:
    out = bytearray()
    while True:
        byte = value & 0x7F
        value >>= 7
        if value:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            return bytes(out)


def _decode_varint(data: bytes, offset: int) -> tuple[int, int]:
    value = 0
    shift = 0
    while offset < len(data):
        byte = data[offset]
        offset += 1
        value |= (byte & 0x7F) << shift
        if not byte & 0x80:
            return value, offset
        shift += 7
        if shift > 63:
            break
    raise DecodeError("Truncated or oversized varint")


def multihash(digest: bytes, code: int) -> bytes:
    """Wrap a digest as a multihash (code, length, digest)."""
    return _encode_varint(code) + _encode_varint(len(digest)) + digest


@dataclass(frozen=True)
class ContentId:
    """Decoded CIDv1."""

    version: int
    codec: int
    hash_code: int
    digest: bytes

    def to_bytes(self) -> bytes:
        return (
            _encode_varint(self.version)
            + _encode_varint(self.codec)
            + multihash(self.digest, self.hash_code)
        )

    def __str__(self) -> str:
        encoded = base64.b32encode(self.to_bytes()).decode("ascii")
        return BASE32_PREFIX + encoded.lower().rstrip("=")


def compute_cid(data: bytes, hasher: IHashPort | str) -> str:
    """Compute the CID of data under one hash algorithm.

    Args:
        data: Bytes to address (an encoded token)
        hasher: Hash adapter or its name ("SHA2-256", "BLAKE3-256")

    Returns:
        CIDv1 string, e.g. bafkrei...
    """
    if isinstance(hasher, str):
        hasher = get_hasher(hasher)
    cid = ContentId(
        version=CID_VERSION,
        codec=RAW_CODEC,
        hash_code=hasher.multihash_code,
        digest=hasher.digest(data),
    )
    return str(cid)


def parse_cid(value: str) -> ContentId:
    """Parse a base32 CIDv1 string.

    Raises:
        DecodeError: If the value is not a CIDv1 with a known hash algorithm
    """
    if not isinstance(value, str) or not value.startswith(BASE32_PREFIX):
        raise DecodeError("CID must be base32 multibase", details={"value": value})

    body = value[1:].upper()
    body += "=" * ((8 - len(body) % 8) % 8)
    try:
        raw = base64.b32decode(body)
    except (binascii.Error, ValueError) as e:
        raise DecodeError("CID is not base32", details={"value": value}, cause=e) from e

    version, offset = _decode_varint(raw, 0)
    codec, offset = _decode_varint(raw, offset)
    hash_code, offset = _decode_varint(raw, offset)
    length, offset = _decode_varint(raw, offset)
    digest = raw[offset:]

    if version != CID_VERSION:
        raise DecodeError(f"Unsupported CID version {version}", details={"value": value})
    if hash_code not in {h.multihash_code for h in HASHERS.values()}:
        raise DecodeError(f"Unknown multihash code {hash_code:#x}", details={"value": value})
    if len(digest) != length:
        raise DecodeError("Multihash length mismatch", details={"value": value})

    return ContentId(version=version, codec=codec, hash_code=hash_code, digest=digest)


def is_cid(value: object) -> bool:
    """Check whether value parses as a CID."""
    try:
        parse_cid(value)  # type: ignore[arg-type]
    except DecodeError:
        return False
    return True
