"""
Token tampering.

Removes or replaces one field of one part of an already-encoded token and
re-signs the result, so the corrupted token still carries a valid signature.
Only the named part is re-encoded; the other part's text is reused as is.
"""

import logging
from typing import Any

from .canonical import decode_part, encode_part, split_token
from .errors import FieldNotFound, UnsupportedPart
from .ports.crypto import ISignerPort
from .token import sign_parts

logger = logging.getLogger(__name__)

PARTS = ("header", "payload")


def _check_part(part_name: str) -> None:
    if part_name not in PARTS:
        raise UnsupportedPart(
            f"Cannot tamper with part {part_name!r}",
            details={"part": part_name, "supported": list(PARTS)},
        )


async def _resign(
    header_part: str,
    payload_part: str,
    part_name: str,
    fields: dict[str, Any],
    signer: ISignerPort,
) -> str:
    if part_name == "header":
        header_part = encode_part(fields)
    else:
        payload_part = encode_part(fields)
    return await sign_parts(header_part, payload_part, signer)


async def remove_field(
    token: str,
    part_name: str,
    field_name: str,
    signer: ISignerPort,
) -> str:
    """
    Remove a field from the header or payload and re-sign.

    Removing a field the part does not carry is a no-op on the fields; the
    part is still re-encoded and the token re-signed.

    Raises:
        UnsupportedPart: If part_name is not "header" or "payload"
        DecodeError: If the named part does not decode
    """
    _check_part(part_name)
    header_part, payload_part, _ = split_token(token)

    fields = decode_part(header_part if part_name == "header" else payload_part)
    fields.pop(field_name, None)

    logger.debug(f"Removed {part_name}.{field_name}")
    return await _resign(header_part, payload_part, part_name, fields, signer)


async def mutate_field(
    token: str,
    part_name: str,
    field_name: str,
    new_value: Any,
    signer: ISignerPort,
) -> str:
    """
    Replace the value of an existing header or payload field and re-sign.

    Raises:
        UnsupportedPart: If part_name is not "header" or "payload"
        FieldNotFound: If the part does not carry field_name
        DecodeError: If the named part does not decode
    """
    _check_part(part_name)
    header_part, payload_part, _ = split_token(token)

    fields = decode_part(header_part if part_name == "header" else payload_part)
    if field_name not in fields:
        raise FieldNotFound(
            f"No field {field_name!r} in {part_name}",
            details={"part": part_name, "field": field_name},
        )
    fields[field_name] = new_value

    logger.debug(f"Mutated {part_name}.{field_name} to {new_value!r}")
    return await _resign(header_part, payload_part, part_name, fields, signer)
