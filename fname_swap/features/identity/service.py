"""Resolve a wallet address to its Farcaster ID and current fname."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from web3 import Web3
from web3.exceptions import Web3Exception

from fname_swap.features.directory.service import DirectoryClient
from fname_swap.shared.errors import IdentifierNotFound, RegistryError, ValidationError
from fname_swap.shared.protocols import IdentifierRegistry
from fname_swap.shared.validation import AddressValidator

logger = logging.getLogger(__name__)

ID_REGISTRY_ABI: list[dict[str, Any]] = [
    {
        "inputs": [{"internalType": "address", "name": "owner", "type": "address"}],
        "name": "idOf",
        "outputs": [{"internalType": "uint256", "name": "fid", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function",
    },
]


@dataclass(frozen=True)
class Identity:
    address: str
    fid: int
    current_handle: str | None

    @property
    def has_handle(self) -> bool:
        return bool(self.current_handle)


class ContractIdentifierRegistry:
    """Reads ``idOf(address)`` from the on-chain IdRegistry."""

    def __init__(self, rpc_url: str, registry_address: str, timeout: float = 15.0):
        self.rpc_url = rpc_url
        self.web3 = Web3(
            Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout})
        )
        self.contract = self.web3.eth.contract(
            address=Web3.to_checksum_address(registry_address),
            abi=ID_REGISTRY_ABI,
        )

    def id_of(self, address: str) -> int:
        try:
            fid = self.contract.functions.idOf(
                Web3.to_checksum_address(address)
            ).call()
        except (Web3Exception, OSError, ValueError) as e:
            raw = getattr(e, "message", None) or str(e)
            message = str(raw).split("Args:")[0].strip() or "Failed to fetch FID."
            logger.error("IdRegistry lookup for %s failed: %s", address, message)
            raise RegistryError(message) from e
        return int(fid)


class IdentityResolver:
    def __init__(self, registry: IdentifierRegistry, directory: DirectoryClient):
        self.registry = registry
        self.directory = directory

    @staticmethod
    def _normalize_address(address: str) -> str:
        result = AddressValidator.validate(address)
        if not result.is_valid:
            raise ValidationError(result.error_message or "Invalid address", field="owner")
        return result.normalized_value

    def resolve_fid(self, address: str) -> int:
        normalized = self._normalize_address(address)
        fid = self.registry.id_of(normalized)
        if fid <= 0:
            raise IdentifierNotFound(normalized)
        return fid

    def resolve(self, address: str) -> Identity:
        normalized = self._normalize_address(address)
        fid = self.resolve_fid(normalized)
        current_handle = self.directory.lookup_by_identifier(fid)
        if not current_handle:
            logger.info("FID %s does not have an fname assigned", fid)
        return Identity(address=normalized, fid=fid, current_handle=current_handle)
