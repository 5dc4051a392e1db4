"""EIP-712 username proof claims as verified by the fname server."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from eth_utils import to_checksum_address

MAINNET_CHAIN_ID = 1

USERNAME_PROOF_DOMAIN: dict[str, Any] = {
    "name": "Farcaster name verification",
    "version": "1",
    "chainId": MAINNET_CHAIN_ID,
    "verifyingContract": to_checksum_address(
        "0xe3be01d99baa8db9905b33a3ca391238234b79d1"
    ),
}

USERNAME_PROOF_TYPES: dict[str, list[dict[str, str]]] = {
    "UserNameProof": [
        {"name": "name", "type": "string"},
        {"name": "timestamp", "type": "uint256"},
        {"name": "owner", "type": "address"},
    ],
}

USERNAME_PROOF_PRIMARY_TYPE = "UserNameProof"


@dataclass(frozen=True)
class UserNameProofClaim:
    name: str
    timestamp: int
    owner: str

    @property
    def domain(self) -> dict[str, Any]:
        return dict(USERNAME_PROOF_DOMAIN)

    @property
    def types(self) -> dict[str, list[dict[str, str]]]:
        return {key: list(fields) for key, fields in USERNAME_PROOF_TYPES.items()}

    @property
    def message(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "timestamp": self.timestamp,
            "owner": self.owner,
        }


@dataclass(frozen=True)
class SignedClaim:
    handle: str
    owner: str
    timestamp: int
    signature: str


def make_username_proof_claim(name: str, timestamp: int, owner: str) -> UserNameProofClaim:
    return UserNameProofClaim(
        name=name,
        timestamp=int(timestamp),
        owner=to_checksum_address(owner),
    )
