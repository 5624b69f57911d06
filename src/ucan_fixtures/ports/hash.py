from abc import ABC, abstractmethod


class IHashPort(ABC):
    """Port for content hashing.
    Each adapter is one multihash algorithm used when computing CIDs.
    """

    name: str
    multihash_code: int

    @abstractmethod
    def digest(self, data: bytes) -> bytes:
        """Compute the 32-byte digest of data."""
        ...
