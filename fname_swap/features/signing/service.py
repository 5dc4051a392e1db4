"""Signature generation for fname release and claim transfers."""

from __future__ import annotations

import logging

from eth_account import Account
from eth_account.messages import encode_typed_data

from fname_swap.features.signing.claims import (
    MAINNET_CHAIN_ID,
    SignedClaim,
    UserNameProofClaim,
    make_username_proof_claim,
)
from fname_swap.shared.errors import (
    FnameSwapError,
    SigningFailed,
    SigningRejected,
    SigningUnavailable,
)
from fname_swap.shared.protocols import SigningCapability

logger = logging.getLogger(__name__)

REJECTION_CODES = (4001, "ACTION_REJECTED")


def is_user_rejection(error: Exception) -> bool:
    code = getattr(error, "code", None)
    if code in REJECTION_CODES:
        return True
    message = str(error).lower()
    return "rejected" in message or "4001" in message


class SignatureGenerator:
    def __init__(self, chain_id: int = MAINNET_CHAIN_ID):
        self.chain_id = chain_id

    def _ensure_chain(self, capability: SigningCapability) -> None:
        if capability.chain_id != self.chain_id:
            logger.info(
                "Switching signer from chain %s to chain %s",
                capability.chain_id,
                self.chain_id,
            )
            capability.switch_chain(self.chain_id)

    def sign(
        self,
        handle: str,
        owner: str,
        timestamp: int,
        capability: SigningCapability | None,
    ) -> SignedClaim:
        if capability is None:
            raise SigningUnavailable()

        claim = make_username_proof_claim(handle, timestamp, owner)

        try:
            self._ensure_chain(capability)
            signature = capability.sign_typed_data(
                claim.domain, claim.types, claim.message
            )
        except FnameSwapError:
            raise
        except Exception as e:
            if is_user_rejection(e):
                logger.info("Signature for %s rejected by user", handle)
                raise SigningRejected() from e
            logger.error("Signature generation for %s failed: %s", handle, e)
            raise SigningFailed(str(e)) from e

        if not signature:
            raise SigningFailed("signer returned an empty signature")

        logger.debug("Signed claim for %s at %s", handle, timestamp)
        return SignedClaim(
            handle=handle,
            owner=claim.owner,
            timestamp=timestamp,
            signature=signature,
        )


def verify_claim_signature(claim: UserNameProofClaim, signature: str) -> str:
    """Return the address that produced ``signature`` over ``claim``."""
    signable = encode_typed_data(claim.domain, claim.types, claim.message)
    return Account.recover_message(signable, signature=signature)
