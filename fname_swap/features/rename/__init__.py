"""Rename feature module for fname-swap.

Sequences the availability check, the two signatures and the two directory
submissions of a rename, surfacing a release-without-claim as
``PartialFailure``.
"""

from fname_swap.features.rename.models import RenameIntent, RenameResult
from fname_swap.features.rename.service import RenameOrchestrator, next_timestamp
from fname_swap.features.rename.state import STAGE_SEQUENCE, RenameAttempt, RenameStage

__all__ = [
    "STAGE_SEQUENCE",
    "RenameAttempt",
    "RenameIntent",
    "RenameOrchestrator",
    "RenameResult",
    "RenameStage",
    "next_timestamp",
]
