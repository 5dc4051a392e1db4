import json
import os
from unittest.mock import Mock

import pytest
from requests.exceptions import HTTPError

from fname_swap.features.directory.models import (
    SubmissionReceipt,
    TransferRecord,
    TransferRequest,
    latest_owned_handle,
)
from fname_swap.features.signing.signers import LocalAccountSigner
from fname_swap.shared.errors import DirectoryError

# Well-known development key (Hardhat/Anvil account #0); never funded on mainnet.
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class InMemoryDirectory:
    """Directory double that keeps an append-only transfer log."""

    def __init__(self, fail_handles: dict[str, tuple[int, str]] | None = None):
        self.transfers: list[TransferRecord] = []
        self.submitted: list[TransferRequest] = []
        self.availability_checks: list[str] = []
        self.fail_handles = fail_handles or {}

    def add_transfer(self, username: str, from_fid: int, to_fid: int, timestamp: int):
        self.transfers.append(
            TransferRecord(
                id=len(self.transfers) + 1,
                timestamp=timestamp,
                username=username,
                owner=TEST_ADDRESS,
                from_fid=from_fid,
                to_fid=to_fid,
            )
        )

    def lookup_by_handle(self, name: str) -> bool:
        self.availability_checks.append(name)
        matching = [t for t in self.transfers if t.username == name.lower()]
        if not matching:
            return False
        return max(matching, key=lambda t: t.timestamp).to_fid != 0

    def fetch_transfers_for_identifier(self, fid: int) -> list[TransferRecord]:
        return [t for t in self.transfers if fid in (t.from_fid, t.to_fid)]

    def lookup_by_identifier(self, fid: int) -> str | None:
        relevant = self.fetch_transfers_for_identifier(fid)
        return latest_owned_handle(fid, relevant)

    def submit_transfer(self, request: TransferRequest) -> SubmissionReceipt:
        self.submitted.append(request)
        if request.handle in self.fail_handles:
            status, detail = self.fail_handles[request.handle]
            raise DirectoryError(detail, status_code=status, response_text=detail)
        self.add_transfer(
            request.handle, request.from_fid, request.to_fid, request.timestamp
        )
        return SubmissionReceipt(status_code=200, body='{"transfer": {}}')


@pytest.fixture
def signer():
    return LocalAccountSigner(TEST_PRIVATE_KEY)


@pytest.fixture
def owner_address():
    return TEST_ADDRESS


@pytest.fixture
def in_memory_directory():
    return InMemoryDirectory()


@pytest.fixture
def make_response():
    """Build a requests.Response stand-in."""

    def _make(status_code=200, json_data=None, text=None):
        response = Mock()
        response.status_code = status_code
        if json_data is not None:
            response.json.return_value = json_data
        else:
            response.json.side_effect = ValueError("No JSON")
        if text is None:
            text = json.dumps(json_data) if json_data is not None else ""
        response.text = text
        response.content = text.encode()
        if status_code >= 400:
            response.raise_for_status.side_effect = HTTPError(response=response)
        return response

    return _make


@pytest.fixture
def directory_url():
    return "https://fnames.example.test"


def pytest_collection_modifyitems(config, items):
    if os.getenv("FNAME_SWAP_LIVE_TESTS") == "1":
        return
    skip_live = pytest.mark.skip(reason="set FNAME_SWAP_LIVE_TESTS=1 to run live tests")
    for item in items:
        if "integration" in item.keywords:
            item.add_marker(skip_live)
