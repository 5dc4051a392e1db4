"""Client for the Farcaster fname directory (``/transfers``)."""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import urlencode

from fname_swap.features.directory.models import (
    SubmissionReceipt,
    TransferRecord,
    TransferRequest,
    latest_owned_handle,
)
from fname_swap.shared.errors import DirectoryError, NotFound, OutcomeUnknown
from fname_swap.shared.network import (
    NetworkClient,
    NetworkError,
    RetryConfig,
    TimeoutConfig,
)

logger = logging.getLogger(__name__)

TRANSFERS_ENDPOINT = "/transfers"


def extract_error_detail(response_text: str | None, status_code: int | None) -> str:
    """Pick a readable reason out of a rejected response body."""
    fallback = f"Directory returned status {status_code}."
    if not response_text:
        return fallback
    try:
        body = json.loads(response_text)
    except ValueError:
        return fallback
    if isinstance(body, dict):
        detail = body.get("message") or body.get("error")
        if detail:
            return str(detail)
    return fallback


class DirectoryClient:
    def __init__(
        self,
        base_url: str,
        timeout_config: TimeoutConfig | None = None,
        read_retry_config: RetryConfig | None = None,
        network_client: NetworkClient | None = None,
    ):
        self.network_client = network_client or NetworkClient(
            base_url,
            timeout_config=timeout_config,
            retry_config=read_retry_config,
        )

    @property
    def base_url(self) -> str:
        return self.network_client.base_url

    def _get_transfers(self, params: dict[str, Any], context: str) -> dict[str, Any]:
        endpoint = f"{TRANSFERS_ENDPOINT}?{urlencode(params)}"
        try:
            return self.network_client.get(endpoint, context=context)
        except NetworkError as e:
            if e.status_code == 404:
                raise NotFound(str(e)) from e
            raise DirectoryError(
                str(e), status_code=e.status_code, response_text=e.response_text
            ) from e

    def fetch_transfers_for_identifier(self, fid: int) -> list[TransferRecord]:
        try:
            response = self._get_transfers({"fid": fid}, f"Fetch transfers for FID {fid}")
        except NotFound:
            logger.warning("Fname directory returned 404 for FID %s", fid)
            return []
        return [
            TransferRecord.from_api_response(item)
            for item in response.get("transfers") or []
        ]

    def lookup_by_identifier(self, fid: int) -> str | None:
        if fid <= 0:
            return None

        transfers = self.fetch_transfers_for_identifier(fid)
        if not transfers:
            logger.info("No transfers found for FID %s", fid)
            return None

        handle = latest_owned_handle(fid, transfers)
        if handle:
            logger.info("Found current fname for FID %s: %s", fid, handle)
        else:
            logger.info("FID %s has no current fname", fid)
        return handle

    def fetch_transfer_for_handle(self, name: str) -> TransferRecord | None:
        normalized = name.strip().lower()
        try:
            response = self._get_transfers(
                {"name": normalized}, f"Check availability of {normalized}"
            )
        except NotFound:
            return None
        transfer = response.get("transfer")
        if not transfer:
            return None
        return TransferRecord.from_api_response(transfer)

    def lookup_by_handle(self, name: str) -> bool:
        """Return True if ``name`` is currently owned by some FID."""
        transfer = self.fetch_transfer_for_handle(name)
        return transfer is not None and transfer.to_fid != 0

    def submit_transfer(self, request: TransferRequest) -> SubmissionReceipt:
        action = "release" if request.is_release else "claim"
        context = f"Submit {action} of {request.handle}"
        logger.info(
            "Submitting %s of fname %s for FID %s", action, request.handle, request.fid
        )

        try:
            response = self.network_client.post(
                TRANSFERS_ENDPOINT,
                context=context,
                json=request.to_payload(),
            )
        except NetworkError as e:
            if e.may_have_reached_server:
                logger.error("%s sent but unconfirmed: %s", context, e)
                raise OutcomeUnknown(request.handle, str(e)) from e
            logger.error("%s failed before reaching the directory: %s", context, e)
            raise DirectoryError(str(e)) from e

        logger.info("%s response status: %s", context, response.status_code)
        logger.debug("%s response body: %s", context, response.text)

        if not response.ok:
            detail = extract_error_detail(response.text, response.status_code)
            logger.error("Failed to %s fname %s: %s", action, request.handle, detail)
            raise DirectoryError(
                detail,
                status_code=response.status_code,
                response_text=response.text,
            )

        return SubmissionReceipt(status_code=response.status_code, body=response.text)
