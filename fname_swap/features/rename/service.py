"""Two-phase fname rename: release the current fname, then claim the new one."""

from __future__ import annotations

import time
from typing import Callable

from fname_swap.features.directory.models import TransferRequest
from fname_swap.features.directory.service import DirectoryClient
from fname_swap.features.relay.client import RelayClient
from fname_swap.features.rename.models import RenameIntent, RenameResult
from fname_swap.features.rename.state import RenameAttempt, RenameStage
from fname_swap.features.signing.claims import SignedClaim
from fname_swap.features.signing.service import SignatureGenerator
from fname_swap.shared.errors import (
    DirectoryError,
    FnameSwapError,
    NameTaken,
    PartialFailure,
)
from fname_swap.shared.logging import ContextAdapter, get_logger
from fname_swap.shared.protocols import SigningCapability

StageCallback = Callable[[RenameStage, RenameAttempt], None]


def next_timestamp(after: int, now: int) -> int:
    """Smallest usable timestamp strictly greater than ``after``."""
    return max(after + 1, now)


class RenameOrchestrator:
    """Drives one rename attempt through ``RenameStage`` in order.

    Nothing is retried. A failure before ``SUBMITTING_CLAIM`` leaves the
    directory untouched; a failure in ``SUBMITTING_CLAIM`` is raised as
    ``PartialFailure`` because the release has already been accepted.
    """

    def __init__(
        self,
        directory: DirectoryClient,
        signature_generator: SignatureGenerator | None = None,
        relay: RelayClient | None = None,
        clock: Callable[[], float] = time.time,
        on_stage: StageCallback | None = None,
    ):
        self.directory = directory
        self.signature_generator = signature_generator or SignatureGenerator()
        self.relay = relay
        self.clock = clock
        self.on_stage = on_stage

    def _now(self) -> int:
        return int(self.clock())

    def _advance(
        self, attempt: RenameAttempt, stage: RenameStage, log: ContextAdapter
    ) -> None:
        attempt.advance(stage)
        log.info("Rename stage: %s", stage.value)
        if self.on_stage:
            self.on_stage(stage, attempt)

    def rename(
        self, intent: RenameIntent, capability: SigningCapability | None
    ) -> RenameResult:
        attempt = RenameAttempt(intent=intent)
        log = get_logger(
            __name__,
            {
                "fid": intent.fid,
                "current": intent.current_handle,
                "desired": intent.desired_handle,
            },
        )

        try:
            self._check_availability(attempt, log)
            release = self._sign_release(attempt, capability, log)
            claim = self._sign_claim(attempt, capability, release.timestamp, log)
            if self.relay is not None:
                self._submit_via_relay(attempt, release, claim, log)
            else:
                self._submit_release(attempt, release, log)
                self._submit_claim(attempt, claim, log)
        except FnameSwapError as e:
            attempt.fail(e)
            log.error("Rename failed at %s: %s", e.stage.value if e.stage else "?", e)
            if self.on_stage:
                self.on_stage(RenameStage.FAILED, attempt)
            raise

        self._advance(attempt, RenameStage.DONE, log)
        return RenameResult(intent=intent, release=release, claim=claim, attempt=attempt)

    def _check_availability(self, attempt: RenameAttempt, log: ContextAdapter) -> None:
        self._advance(attempt, RenameStage.CHECKING_AVAILABILITY, log)
        desired = attempt.intent.desired_handle
        if self.directory.lookup_by_handle(desired):
            raise NameTaken(desired)

    def _sign_release(
        self,
        attempt: RenameAttempt,
        capability: SigningCapability | None,
        log: ContextAdapter,
    ) -> SignedClaim:
        self._advance(attempt, RenameStage.SIGNING_RELEASE, log)
        intent = attempt.intent
        attempt.release = self.signature_generator.sign(
            intent.current_handle, intent.owner, self._now(), capability
        )
        return attempt.release

    def _sign_claim(
        self,
        attempt: RenameAttempt,
        capability: SigningCapability | None,
        release_timestamp: int,
        log: ContextAdapter,
    ) -> SignedClaim:
        self._advance(attempt, RenameStage.SIGNING_CLAIM, log)
        intent = attempt.intent
        timestamp = next_timestamp(release_timestamp, self._now())
        attempt.claim = self.signature_generator.sign(
            intent.desired_handle, intent.owner, timestamp, capability
        )
        return attempt.claim

    def _submit_release(
        self, attempt: RenameAttempt, release: SignedClaim, log: ContextAdapter
    ) -> None:
        self._advance(attempt, RenameStage.SUBMITTING_RELEASE, log)
        intent = attempt.intent
        receipt = self.directory.submit_transfer(
            TransferRequest.release(
                handle=intent.current_handle,
                owner=intent.owner,
                fid=intent.fid,
                timestamp=release.timestamp,
                signature=release.signature,
            )
        )
        attempt.receipts.append(receipt)

    def _submit_claim(
        self, attempt: RenameAttempt, claim: SignedClaim, log: ContextAdapter
    ) -> None:
        self._advance(attempt, RenameStage.SUBMITTING_CLAIM, log)
        intent = attempt.intent
        try:
            receipt = self.directory.submit_transfer(
                TransferRequest.claim(
                    handle=intent.desired_handle,
                    owner=intent.owner,
                    fid=intent.fid,
                    timestamp=claim.timestamp,
                    signature=claim.signature,
                )
            )
        except Exception as e:
            # the release is already accepted; every claim failure is partial
            detail = e.detail if isinstance(e, DirectoryError) else str(e)
            raise PartialFailure(
                released=intent.current_handle,
                attempted=intent.desired_handle,
                detail=detail or type(e).__name__,
            ) from e
        attempt.receipts.append(receipt)

    def _submit_via_relay(
        self,
        attempt: RenameAttempt,
        release: SignedClaim,
        claim: SignedClaim,
        log: ContextAdapter,
    ) -> None:
        self._advance(attempt, RenameStage.SUBMITTING_RELEASE, log)
        intent = attempt.intent
        try:
            message = self.relay.submit_rename(intent.fid, intent.owner, release, claim)
        except PartialFailure:
            self._advance(attempt, RenameStage.SUBMITTING_CLAIM, log)
            raise
        self._advance(attempt, RenameStage.SUBMITTING_CLAIM, log)
        log.info("Relay: %s", message)
