"""Server-side execution of a pre-signed release/claim pair."""

from __future__ import annotations

import logging
import time
from typing import Callable

from fname_swap.features.directory.models import TransferRequest
from fname_swap.features.directory.service import DirectoryClient
from fname_swap.features.relay.schemas import RenameRequest
from fname_swap.shared.errors import DirectoryError, OutcomeUnknown, PartialFailure

logger = logging.getLogger(__name__)


class RelayService:
    def __init__(
        self,
        directory: DirectoryClient,
        delay: float = 1.0,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.directory = directory
        self.delay = delay
        self.sleep = sleep

    def execute(self, request: RenameRequest) -> str:
        release = TransferRequest.release(
            handle=request.current_fname,
            owner=request.owner,
            fid=request.fid,
            timestamp=request.delete_timestamp,
            signature=request.delete_signature,
        )
        claim = TransferRequest.claim(
            handle=request.new_fname,
            owner=request.owner,
            fid=request.fid,
            timestamp=request.register_timestamp,
            signature=request.register_signature,
        )

        logger.info(
            "Relaying release of %s for FID %s", request.current_fname, request.fid
        )
        try:
            self.directory.submit_transfer(release)
        except OutcomeUnknown:
            raise
        except DirectoryError as e:
            raise DirectoryError(
                f"Failed to delete username: {e.detail}",
                status_code=e.status_code,
                response_text=e.response_text,
            ) from e

        # read-after-write mitigation on the directory side
        self.sleep(self.delay)

        logger.info("Relaying claim of %s for FID %s", request.new_fname, request.fid)
        try:
            self.directory.submit_transfer(claim)
        except DirectoryError as e:
            raise PartialFailure(
                released=request.current_fname,
                attempted=request.new_fname,
                detail=e.detail,
            ) from e

        logger.info(
            "Renamed %s to %s for FID %s",
            request.current_fname,
            request.new_fname,
            request.fid,
        )
        return f"Successfully renamed {request.current_fname} to {request.new_fname}."
