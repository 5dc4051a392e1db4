"""Signing feature module for fname-swap.

Builds Farcaster username proof claims and obtains EIP-712 signatures over
them from an injected signing capability.
"""

from fname_swap.features.signing.claims import (
    MAINNET_CHAIN_ID,
    USERNAME_PROOF_DOMAIN,
    USERNAME_PROOF_TYPES,
    SignedClaim,
    UserNameProofClaim,
    make_username_proof_claim,
)
from fname_swap.features.signing.service import (
    SignatureGenerator,
    is_user_rejection,
    verify_claim_signature,
)
from fname_swap.features.signing.signers import LocalAccountSigner

__all__ = [
    "MAINNET_CHAIN_ID",
    "USERNAME_PROOF_DOMAIN",
    "USERNAME_PROOF_TYPES",
    "LocalAccountSigner",
    "SignatureGenerator",
    "SignedClaim",
    "UserNameProofClaim",
    "is_user_rejection",
    "make_username_proof_claim",
    "verify_claim_signature",
]
