"""Seed identities shared by every scenario.

Each key is a base64 64-byte Ed25519 keypair (seed then public key), so the
DIDs, and therefore every generated token, are reproducible.
"""

from dataclasses import dataclass

from .errors import InvalidInputError
from .wallet import Wallet

SEED_NAMES = ("alice", "bob", "mallory")

ALICE_BASE64_KEY = (
    "U+bzp2GaFQHso587iSFWPSeCzbSfn/CbNHEz7ilKRZ1UQMmMS7qq4UhTzKn3X9Nj/4xgrwa+UqhMOeo4Ki8JUw=="
)
BOB_BASE64_KEY = (
    "G4+QCX1b3a45IzQsQd4gFMMe0UB1UOx9bCsh8uOiKLER69eAvVXvc8P2yc4Iig42Bv7JD2zJxhyFALyTKBHipg=="
)
MALLORY_BASE64_KEY = (
    "LR9AL2MYkMARuvmV3MJV8sKvbSOdBtpggFCW8K62oZDR6UViSXdSV/dDcD8S9xVjS61vh62JITx7qmLgfQUSZQ=="
)


@dataclass(frozen=True)
class Identities:
    alice: Wallet
    bob: Wallet
    mallory: Wallet

    @classmethod
    def load(cls) -> "Identities":
        return cls(
            alice=Wallet.from_base64_key(ALICE_BASE64_KEY, "alice"),
            bob=Wallet.from_base64_key(BOB_BASE64_KEY, "bob"),
            mallory=Wallet.from_base64_key(MALLORY_BASE64_KEY, "mallory"),
        )

    @property
    def alice_did(self) -> str:
        return self.alice.to_did()

    @property
    def bob_did(self) -> str:
        return self.bob.to_did()

    @property
    def mallory_did(self) -> str:
        return self.mallory.to_did()

    def by_name(self, name: str) -> Wallet:
        if name not in SEED_NAMES:
            raise InvalidInputError(
                f"Unknown seed identity: {name}", details={"supported": list(SEED_NAMES)}
            )
        return getattr(self, name)

    def name_for(self, did: str) -> str:
        """Map a DID back to its seed name, or return it unchanged."""
        for wallet in (self.alice, self.bob, self.mallory):
            if wallet.to_did() == did:
                return wallet.name or did
        return did
