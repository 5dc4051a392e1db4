"""fname-swap - rename a Farcaster fname by releasing the old one and claiming a new one.

This package is organized into feature-based modules:
- features.directory: fname directory client
- features.signing: EIP-712 username proof signatures
- features.identity: address -> FID -> current fname
- features.rename: the two-phase rename flow
- features.relay: server-side submission endpoint
- shared: shared utilities (network, validation, logging, errors)
"""

from fname_swap.config import RenamerConfig
from fname_swap.features.directory import DirectoryClient, latest_owned_handle
from fname_swap.features.identity import IdentityResolver
from fname_swap.features.rename import RenameIntent, RenameOrchestrator, RenameStage
from fname_swap.features.signing import LocalAccountSigner, SignatureGenerator
from fname_swap.shared import (
    DirectoryError,
    NameTaken,
    PartialFailure,
    SigningRejected,
    ValidationError,
    is_valid_handle,
)

__version__ = "0.1.0"
__all__ = [
    "RenamerConfig",
    "DirectoryClient",
    "latest_owned_handle",
    "IdentityResolver",
    "RenameIntent",
    "RenameOrchestrator",
    "RenameStage",
    "LocalAccountSigner",
    "SignatureGenerator",
    "DirectoryError",
    "NameTaken",
    "PartialFailure",
    "SigningRejected",
    "ValidationError",
    "is_valid_handle",
]
