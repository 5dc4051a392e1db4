"""Directory feature module for fname-swap.

This module provides access to the Farcaster fname directory:
- Look up the fname an FID currently owns
- Check whether an fname is taken
- Submit signed release and claim transfers
"""

from fname_swap.features.directory.models import (
    SubmissionReceipt,
    TransferRecord,
    TransferRequest,
    latest_owned_handle,
)
from fname_swap.features.directory.service import DirectoryClient

__all__ = [
    "DirectoryClient",
    "SubmissionReceipt",
    "TransferRecord",
    "TransferRequest",
    "latest_owned_handle",
]
