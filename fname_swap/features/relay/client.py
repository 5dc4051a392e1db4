"""Client side of the rename relay."""

from __future__ import annotations

import logging
from typing import Any

from fname_swap.config import DEFAULT_RELAY_DELAY_SECONDS, relay_timeouts
from fname_swap.features.signing.claims import SignedClaim
from fname_swap.shared.errors import DirectoryError, OutcomeUnknown, PartialFailure
from fname_swap.shared.network import NetworkClient, NetworkError, TimeoutConfig

logger = logging.getLogger(__name__)

RENAME_ENDPOINT = "/api/rename"


def build_rename_payload(
    fid: int,
    owner: str,
    release: SignedClaim,
    claim: SignedClaim,
) -> dict[str, Any]:
    return {
        "currentFname": release.handle,
        "newFname": claim.handle,
        "fid": fid,
        "owner": owner,
        "deleteSignature": release.signature,
        "deleteTimestamp": release.timestamp,
        "registerSignature": claim.signature,
        "registerTimestamp": claim.timestamp,
    }


class RelayClient:
    def __init__(
        self,
        relay_url: str,
        timeout_config: TimeoutConfig | None = None,
        network_client: NetworkClient | None = None,
    ):
        self.network_client = network_client or NetworkClient(
            relay_url,
            timeout_config=timeout_config
            or relay_timeouts(TimeoutConfig(), DEFAULT_RELAY_DELAY_SECONDS),
        )

    def submit_rename(
        self, fid: int, owner: str, release: SignedClaim, claim: SignedClaim
    ) -> str:
        """Hand both signed claims to the relay.

        Raises ``DirectoryError`` if the release was not applied,
        ``OutcomeUnknown`` if nobody can tell, and ``PartialFailure`` if the
        relay reports the claim step failed.
        """
        payload = build_rename_payload(fid, owner, release, claim)
        try:
            response = self.network_client.post(
                RENAME_ENDPOINT, context="Relay rename", json=payload
            )
        except NetworkError as e:
            if e.may_have_reached_server:
                raise OutcomeUnknown(release.handle, str(e)) from e
            raise DirectoryError(str(e)) from e

        data = response.data if isinstance(response.data, dict) else {}
        if response.ok:
            return data.get("message", "")

        error = data.get("error") or f"Relay returned status {response.status_code}."
        logger.error("Relay rejected rename: %s", error)
        if data.get("stage") == "claim":
            raise PartialFailure(
                released=data.get("released") or release.handle,
                attempted=claim.handle,
                detail=data.get("detail") or error,
            )
        if data.get("outcome") == "unknown":
            raise OutcomeUnknown(release.handle, data.get("detail") or error)
        raise DirectoryError(
            error, status_code=response.status_code, response_text=response.text
        )
