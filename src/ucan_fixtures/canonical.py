"""Canonical JSON and token part codec.

A token part is the unpadded base64url encoding of a canonical JSON object.
Encoding is deterministic: the same map always yields the same part text.
"""

import json
from typing import Any

from .crypto import b64u_decode, b64u_encode
from .errors import DecodeError


def canonical_json(obj: Any) -> str:
    """Serialize an object to canonical JSON.

    Rules:
    - Keys sorted lexicographically
    - No whitespace outside strings
    - UTF-8 encoding
    - Minimal escaping

    Args:
        obj: Object to serialize

    Returns:
        Canonical JSON string
    """

    def _preprocess(o: Any) -> Any:
        if isinstance(o, dict):
            return {k: _preprocess(v) for k, v in o.items()}
        if isinstance(o, (list, tuple)):
            return [_preprocess(v) for v in o]
        if isinstance(o, float) and o.is_integer():
            return int(o)
        return o

    return json.dumps(
        _preprocess(obj),
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
    )


def canonical_json_bytes(obj: Any) -> bytes:
    """Serialize an object to canonical JSON bytes.

    Args:
        obj: Object to serialize

    Returns:
        UTF-8 encoded canonical JSON bytes
    """
    return canonical_json(obj).encode("utf-8")


def encode_part(fields: dict[str, Any]) -> str:
    """Encode a header or payload field map as a token part."""
    return b64u_encode(canonical_json_bytes(fields))


def decode_part(part: str) -> dict[str, Any]:
    """Decode a token part back into its field map.

    Raises:
        DecodeError: If the part is not base64url, not UTF-8 JSON, or not a
            JSON object
    """
    raw = b64u_decode(part)
    try:
        fields = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise DecodeError("Token part is not JSON", cause=e) from e

    if not isinstance(fields, dict):
        raise DecodeError(
            "Token part is not a JSON object",
            details={"type": type(fields).__name__},
        )
    return fields


def split_token(token: str) -> tuple[str, str, str]:
    """Split an encoded token into its header, payload and signature parts."""
    parts = token.split(".")
    if len(parts) != 3:
        raise DecodeError(
            f"Token must have 3 parts, got {len(parts)}",
            details={"parts": len(parts)},
        )
    return parts[0], parts[1], parts[2]


def decode_parts(token: str) -> tuple[dict[str, Any], dict[str, Any], bytes]:
    """Decode all three parts of a token.

    Returns:
        Tuple of (header fields, payload fields, raw signature bytes)
    """
    header, payload, signature = split_token(token)
    return decode_part(header), decode_part(payload), b64u_decode(signature)
