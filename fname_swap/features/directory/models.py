"""Data types exchanged with the fname directory."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True)
class TransferRecord:
    id: int
    timestamp: int
    username: str
    owner: str
    from_fid: int
    to_fid: int
    user_signature: str = ""
    server_signature: str = ""

    @property
    def is_claim(self) -> bool:
        return self.from_fid == 0 and self.to_fid != 0

    @property
    def is_release(self) -> bool:
        return self.to_fid == 0

    @classmethod
    def from_api_response(cls, data: dict[str, Any]) -> "TransferRecord":
        return cls(
            id=int(data.get("id", 0)),
            timestamp=int(data.get("timestamp", 0)),
            username=data.get("username", ""),
            owner=data.get("owner", ""),
            from_fid=int(data.get("from", 0)),
            to_fid=int(data.get("to", 0)),
            user_signature=data.get("user_signature", ""),
            server_signature=data.get("server_signature", ""),
        )


@dataclass(frozen=True)
class TransferRequest:
    handle: str
    owner: str
    signature: str
    from_fid: int
    to_fid: int
    timestamp: int
    fid: int

    @classmethod
    def release(
        cls, handle: str, owner: str, fid: int, timestamp: int, signature: str
    ) -> "TransferRequest":
        return cls(
            handle=handle,
            owner=owner,
            signature=signature,
            from_fid=fid,
            to_fid=0,
            timestamp=timestamp,
            fid=fid,
        )

    @classmethod
    def claim(
        cls, handle: str, owner: str, fid: int, timestamp: int, signature: str
    ) -> "TransferRequest":
        return cls(
            handle=handle,
            owner=owner,
            signature=signature,
            from_fid=0,
            to_fid=fid,
            timestamp=timestamp,
            fid=fid,
        )

    @property
    def is_release(self) -> bool:
        return self.to_fid == 0

    def to_payload(self) -> dict[str, Any]:
        return {
            "name": self.handle,
            "owner": self.owner,
            "signature": self.signature,
            "from": self.from_fid,
            "to": self.to_fid,
            "timestamp": self.timestamp,
            "fid": self.fid,
        }


@dataclass(frozen=True)
class SubmissionReceipt:
    status_code: int
    body: str


def latest_owned_handle(fid: int, transfers: Iterable[TransferRecord]) -> str | None:
    """Derive the handle ``fid`` currently owns from its transfer history.

    A release as the single most recent event wins over any earlier claim.
    Otherwise the newest transfer *to* ``fid`` names the handle.
    """
    ordered = sorted(transfers, key=lambda t: t.timestamp, reverse=True)
    if not ordered:
        return None

    latest = ordered[0]
    if latest.from_fid == fid and latest.to_fid == 0:
        return None

    for transfer in ordered:
        if transfer.to_fid == fid:
            return transfer.username
    return None
