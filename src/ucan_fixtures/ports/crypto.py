from abc import ABC, abstractmethod


class ISignerPort(ABC):
    """Port for token signing.
    Abstracts the key material behind an issuer identity (e.g. Ed25519).
    """

    @property
    @abstractmethod
    def algorithm(self) -> str:
        """JWT algorithm name written to the token header."""
        ...

    @abstractmethod
    def to_did(self) -> str:
        """Stable identifier derived from the public key."""
        ...

    @abstractmethod
    async def sign(self, data: bytes) -> bytes:
        """Sign data with the private key."""
        ...
