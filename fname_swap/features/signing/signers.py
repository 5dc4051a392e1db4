"""Concrete signing capabilities."""

from __future__ import annotations

import logging
import os
from typing import Any

from eth_account import Account

from fname_swap.features.signing.claims import MAINNET_CHAIN_ID
from fname_swap.shared.errors import SigningUnavailable

logger = logging.getLogger(__name__)

PRIVATE_KEY_ENV = "FNAME_SWAP_PRIVATE_KEY"


class LocalAccountSigner:
    """Signs with a private key held in process memory.

    There is no user to prompt, so it never rejects; ``switch_chain`` only
    rebinds the chain id reported to callers.
    """

    def __init__(self, private_key: str, chain_id: int = MAINNET_CHAIN_ID):
        self._account = Account.from_key(private_key)
        self._chain_id = chain_id

    @classmethod
    def from_environment(cls, variable: str = PRIVATE_KEY_ENV) -> "LocalAccountSigner":
        private_key = os.getenv(variable)
        if not private_key:
            raise SigningUnavailable(
                f"No signing capability provided. Set {variable} to the custody key."
            )
        try:
            return cls(private_key.strip())
        except ValueError as e:
            raise SigningUnavailable(
                f"{variable} is not a valid private key."
            ) from e

    @property
    def address(self) -> str:
        return self._account.address

    @property
    def chain_id(self) -> int:
        return self._chain_id

    def switch_chain(self, chain_id: int) -> None:
        logger.debug("Local signer switched to chain %s", chain_id)
        self._chain_id = chain_id

    def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        message: dict[str, Any],
    ) -> str:
        signed = self._account.sign_typed_data(domain, types, message)
        return "0x" + bytes(signed.signature).hex()
