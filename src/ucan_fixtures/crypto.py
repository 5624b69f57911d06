"""Encoding primitives shared by the codec, the signer and the CID module."""

import base64
import binascii

from .errors import DecodeError

_B64U_ALPHABET = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_"
)


def b64u_encode(data: bytes) -> str:
    """Base64URL encoding without padding."""
    return base64.urlsafe_b64encode(data).decode("utf-8").rstrip("=")


def b64u_decode(data: str) -> bytes:
    """Base64URL decoding without padding.

    Raises:
        DecodeError: If data has characters outside the unpadded base64url
            alphabet or a length no encoder can produce
    """
    if len(data) % 4 == 1 or any(c not in _B64U_ALPHABET for c in data):
        raise DecodeError("Not unpadded base64url", details={"value": data[:32]})

    padding = "=" * ((4 - len(data) % 4) % 4)
    try:
        return base64.urlsafe_b64decode(data + padding)
    except binascii.Error as e:
        raise DecodeError(
            "Not unpadded base64url", details={"value": data[:32]}, cause=e
        ) from e


def b64_decode(data: str) -> bytes:
    """Standard padded base64 decoding, used for the seed keys."""
    try:
        return base64.b64decode(data, validate=True)
    except binascii.Error as e:
        raise DecodeError("Not base64", cause=e) from e
