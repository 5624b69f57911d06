"""Issuer identities.

An Ed25519 keypair that names itself with a did:key identifier and signs
token bodies.
"""

from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey,
    Ed25519PublicKey,
)

from .crypto import b64_decode
from .errors import InvalidInputError, SigningError
from .ports.crypto import ISignerPort


# Base58btc alphabet for DID encoding
_BASE58_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"

# Multicodec prefix for Ed25519 public key
_ED25519_MULTICODEC = bytes([0xED, 0x01])


def _base58_encode(data: bytes) -> str:
    """Encode bytes to base58btc."""
    num = int.from_bytes(data, "big")
    result = []
    while num > 0:
        num, remainder = divmod(num, 58)
        result.append(_BASE58_ALPHABET[remainder])
    # Handle leading zeros
    for byte in data:
        if byte == 0:
            result.append(_BASE58_ALPHABET[0])
        else:
            break
    return "".join(reversed(result))


class Wallet(ISignerPort):
    """Ed25519 issuer identity used to sign UCANs."""

    def __init__(
        self,
        private_key: Ed25519PrivateKey,
        name: str | None = None,
    ):
        """Initialize a Wallet from a private key.

        Args:
            private_key: Ed25519 private key
            name: Optional human-readable name
        """
        self._private_key = private_key
        self._public_key = private_key.public_key()
        self._name = name

    @classmethod
    def generate(cls, name: str | None = None) -> "Wallet":
        """Generate a new wallet with a random keypair.

        Note:
            This method is non-deterministic (uses secure random).
        """
        return cls(Ed25519PrivateKey.generate(), name)

    @classmethod
    def from_seed(cls, seed: bytes, name: str | None = None) -> "Wallet":
        """Create a wallet from a 32-byte seed.

        Args:
            seed: 32-byte seed (raw bytes)
            name: Optional human-readable name

        Returns:
            A Wallet instance derived deterministically from the seed

        Raises:
            InvalidInputError: If seed length is not 32 bytes
        """
        if len(seed) != 32:
            raise InvalidInputError(
                f"Seed must be exactly 32 bytes, got {len(seed)}",
                details={"seed_length": len(seed)},
            )
        private_key = Ed25519PrivateKey.from_private_bytes(seed)
        return cls(private_key, name)

    @classmethod
    def from_base64_key(cls, encoded_key: str, name: str | None = None) -> "Wallet":
        """Create a wallet from a base64 keypair.

        The keypair is the 32-byte seed optionally followed by the 32-byte
        public key; only the seed is used.

        Raises:
            InvalidInputError: If the key is shorter than 32 bytes
        """
        key_bytes = b64_decode(encoded_key)
        if len(key_bytes) < 32:
            raise InvalidInputError(
                f"Key must hold at least 32 bytes, got {len(key_bytes)}",
                details={"key_length": len(key_bytes)},
            )
        return cls.from_seed(key_bytes[:32], name)

    @property
    def algorithm(self) -> str:
        return "EdDSA"

    def to_did(self) -> str:
        """Convert the wallet's public key to a DID string.

        Returns:
            DID string in format did:key:z6Mk...
        """
        public_bytes = self._public_key.public_bytes_raw()
        return f"did:key:z{_base58_encode(_ED25519_MULTICODEC + public_bytes)}"

    @property
    def public_key(self) -> bytes:
        """Get the 32-byte public key."""
        return self._public_key.public_bytes_raw()

    @property
    def name(self) -> str | None:
        return self._name

    async def sign(self, message: bytes) -> bytes:
        """Sign a message using Ed25519.

        Ed25519 signing is deterministic, so equal messages yield equal
        signatures.

        Raises:
            SigningError: If the key rejects the message
        """
        if not isinstance(message, (bytes, bytearray)):
            raise SigningError(
                "Signer input must be bytes",
                details={"type": type(message).__name__},
            )
        try:
            return self._private_key.sign(bytes(message))
        except (TypeError, ValueError) as e:
            raise SigningError(cause=e) from e

    @staticmethod
    def verify(message: bytes, signature: bytes, public_key: bytes) -> bool:
        """Verify a signature against a message and public key.

        Returns:
            True if signature is valid, False otherwise
        """
        try:
            pk = Ed25519PublicKey.from_public_bytes(public_key)
            pk.verify(signature, message)
            return True
        except Exception:
            return False

    def __repr__(self) -> str:
        return f"Wallet(name={self._name!r}, did={self.to_did()!r})"
