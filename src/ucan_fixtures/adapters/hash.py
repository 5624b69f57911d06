import hashlib

import blake3

from ucan_fixtures.errors import InvalidInputError
from ucan_fixtures.ports.hash import IHashPort


class Sha256HashAdapter(IHashPort):
    name = "SHA2-256"
    multihash_code = 0x12

    def digest(self, data: bytes) -> bytes:
        return hashlib.sha256(data).digest()


class Blake3HashAdapter(IHashPort):
    name = "BLAKE3-256"
    multihash_code = 0x1E

    def digest(self, data: bytes) -> bytes:
        return blake3.blake3(data).digest()


HASHERS: dict[str, IHashPort] = {
    adapter.name: adapter for adapter in (Sha256HashAdapter(), Blake3HashAdapter())
}


def get_hasher(name: str) -> IHashPort:
    """Look up a hash adapter by its fixture name (e.g. "SHA2-256")."""
    try:
        return HASHERS[name]
    except KeyError:
        raise InvalidInputError(
            f"Unsupported hasher: {name}",
            details={"supported": sorted(HASHERS)},
        ) from None
