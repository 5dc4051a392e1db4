"""Rename attempt state machine."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from fname_swap.features.directory.models import SubmissionReceipt
from fname_swap.features.signing.claims import SignedClaim

if TYPE_CHECKING:
    from fname_swap.features.rename.models import RenameIntent
    from fname_swap.shared.errors import FnameSwapError


class RenameStage(Enum):
    IDLE = "idle"
    CHECKING_AVAILABILITY = "checking_availability"
    SIGNING_RELEASE = "signing_release"
    SIGNING_CLAIM = "signing_claim"
    SUBMITTING_RELEASE = "submitting_release"
    SUBMITTING_CLAIM = "submitting_claim"
    DONE = "done"
    FAILED = "failed"

    @property
    def is_terminal(self) -> bool:
        return self in (RenameStage.DONE, RenameStage.FAILED)


STAGE_SEQUENCE: tuple[RenameStage, ...] = (
    RenameStage.IDLE,
    RenameStage.CHECKING_AVAILABILITY,
    RenameStage.SIGNING_RELEASE,
    RenameStage.SIGNING_CLAIM,
    RenameStage.SUBMITTING_RELEASE,
    RenameStage.SUBMITTING_CLAIM,
    RenameStage.DONE,
)


@dataclass
class RenameAttempt:
    intent: "RenameIntent"
    stage: RenameStage = RenameStage.IDLE
    history: list[RenameStage] = field(default_factory=lambda: [RenameStage.IDLE])
    release: SignedClaim | None = None
    claim: SignedClaim | None = None
    receipts: list[SubmissionReceipt] = field(default_factory=list)
    failed_stage: RenameStage | None = None
    error: "FnameSwapError | None" = None

    def advance(self, stage: RenameStage) -> None:
        if self.stage.is_terminal:
            raise RuntimeError(f"Rename attempt already finished ({self.stage.value})")
        current_index = STAGE_SEQUENCE.index(self.stage)
        if stage not in STAGE_SEQUENCE or STAGE_SEQUENCE.index(stage) != current_index + 1:
            raise RuntimeError(
                f"Illegal rename transition {self.stage.value} -> {stage.value}"
            )
        self.stage = stage
        self.history.append(stage)

    def fail(self, error: "FnameSwapError") -> None:
        if self.stage.is_terminal:
            raise RuntimeError(f"Rename attempt already finished ({self.stage.value})")
        self.failed_stage = self.stage
        self.error = error
        error.stage = self.stage
        self.stage = RenameStage.FAILED
        self.history.append(RenameStage.FAILED)

    @property
    def succeeded(self) -> bool:
        return self.stage == RenameStage.DONE

    @property
    def release_submitted(self) -> bool:
        return RenameStage.SUBMITTING_CLAIM in self.history
