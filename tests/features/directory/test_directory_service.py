"""Tests for the fname directory client."""

from __future__ import annotations

from unittest.mock import patch

import pytest
from requests.exceptions import ConnectionError, ConnectTimeout, ReadTimeout, Timeout

from fname_swap.features.directory.models import (
    TransferRecord,
    TransferRequest,
    latest_owned_handle,
)
from fname_swap.features.directory.service import DirectoryClient, extract_error_detail
from fname_swap.shared.errors import DirectoryError, OutcomeUnknown

OWNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


def transfer(name: str, from_fid: int, to_fid: int, timestamp: int, id: int = 1) -> TransferRecord:
    return TransferRecord(
        id=id,
        timestamp=timestamp,
        username=name,
        owner=OWNER,
        from_fid=from_fid,
        to_fid=to_fid,
    )


def api_transfer(name: str, from_fid: int, to_fid: int, timestamp: int, id: int = 1) -> dict:
    return {
        "id": id,
        "timestamp": timestamp,
        "username": name,
        "owner": OWNER,
        "from": from_fid,
        "to": to_fid,
        "user_signature": "0xaa",
        "server_signature": "0xbb",
    }


@pytest.fixture
def client(directory_url):
    return DirectoryClient(directory_url)


class TestLatestOwnedHandle:
    def test_empty_history(self):
        assert latest_owned_handle(42, []) is None

    def test_release_after_claim_means_no_handle(self):
        history = [transfer("a", 0, 42, 100), transfer("a", 42, 0, 200)]
        assert latest_owned_handle(42, history) is None

    def test_latest_claim_wins(self):
        history = [transfer("a", 0, 42, 100), transfer("b", 0, 42, 300)]
        assert latest_owned_handle(42, history) == "b"

    def test_order_of_input_does_not_matter(self):
        history = [transfer("b", 0, 42, 300), transfer("a", 0, 42, 100)]
        assert latest_owned_handle(42, history) == "b"

    def test_rename_history(self):
        history = [
            transfer("old", 0, 42, 100),
            transfer("old", 42, 0, 200),
            transfer("new", 0, 42, 201),
        ]
        assert latest_owned_handle(42, history) == "new"

    def test_only_outgoing_transfers(self):
        assert latest_owned_handle(42, [transfer("a", 42, 7, 100)]) is None

    def test_transfer_to_another_fid_is_not_a_release(self):
        history = [transfer("a", 0, 42, 100), transfer("b", 42, 7, 200)]
        assert latest_owned_handle(42, history) == "a"


class TestTransferRecord:
    def test_from_api_response(self):
        record = TransferRecord.from_api_response(api_transfer("alice", 0, 7, 1000, id=5))
        assert record.id == 5
        assert record.username == "alice"
        assert record.from_fid == 0
        assert record.to_fid == 7
        assert record.user_signature == "0xaa"
        assert record.is_claim is True
        assert record.is_release is False


class TestTransferRequest:
    def test_release_payload(self):
        request = TransferRequest.release("alice", OWNER, fid=7, timestamp=1000, signature="0x01")
        assert request.to_payload() == {
            "name": "alice",
            "owner": OWNER,
            "signature": "0x01",
            "from": 7,
            "to": 0,
            "timestamp": 1000,
            "fid": 7,
        }

    def test_claim_payload(self):
        request = TransferRequest.claim("alice2", OWNER, fid=7, timestamp=1001, signature="0x02")
        payload = request.to_payload()
        assert payload["from"] == 0
        assert payload["to"] == 7
        assert payload["fid"] == 7
        assert request.is_release is False


class TestLookupByIdentifier:
    def test_returns_current_handle(self, client, make_response):
        body = {
            "transfers": [
                api_transfer("a", 0, 42, 100, id=1),
                api_transfer("b", 0, 42, 300, id=2),
            ]
        }
        with patch("requests.get", return_value=make_response(200, body)) as mock_get:
            assert client.lookup_by_identifier(42) == "b"
        assert mock_get.call_args[0][0].endswith("/transfers?fid=42")

    def test_released_handle_returns_none(self, client, make_response):
        body = {"transfers": [api_transfer("a", 0, 42, 100), api_transfer("a", 42, 0, 200)]}
        with patch("requests.get", return_value=make_response(200, body)):
            assert client.lookup_by_identifier(42) is None

    def test_not_found_is_no_records(self, client, make_response):
        with patch("requests.get", return_value=make_response(404)):
            assert client.lookup_by_identifier(42) is None

    def test_empty_transfers(self, client, make_response):
        with patch("requests.get", return_value=make_response(200, {"transfers": []})):
            assert client.lookup_by_identifier(42) is None

    def test_non_positive_fid_skips_network(self, client):
        with patch("requests.get") as mock_get:
            assert client.lookup_by_identifier(0) is None
        mock_get.assert_not_called()

    def test_server_error_raises_directory_error(self, client, make_response):
        with patch("requests.get", return_value=make_response(500, text="oops")):
            with pytest.raises(DirectoryError) as exc_info:
                client.lookup_by_identifier(42)
        assert exc_info.value.status_code == 500


class TestLookupByHandle:
    def test_not_found_means_available(self, client, make_response):
        with patch("requests.get", return_value=make_response(404)):
            assert client.lookup_by_handle("bob") is False

    def test_released_name_is_available(self, client, make_response):
        body = {"transfer": api_transfer("bob", 3, 0, 500)}
        with patch("requests.get", return_value=make_response(200, body)):
            assert client.lookup_by_handle("bob") is False

    def test_owned_name_is_taken(self, client, make_response):
        body = {"transfer": api_transfer("bob", 0, 3, 500)}
        with patch("requests.get", return_value=make_response(200, body)):
            assert client.lookup_by_handle("bob") is True

    def test_empty_transfers_shape(self, client, make_response):
        with patch("requests.get", return_value=make_response(200, {"transfers": []})):
            assert client.lookup_by_handle("bob") is False

    def test_name_is_lowercased(self, client, make_response):
        with patch("requests.get", return_value=make_response(404)) as mock_get:
            client.lookup_by_handle("BoB")
        assert mock_get.call_args[0][0].endswith("/transfers?name=bob")

    def test_repeated_lookup_is_stable(self, client, make_response):
        body = {"transfer": api_transfer("bob", 0, 3, 500)}
        with patch("requests.get", return_value=make_response(200, body)):
            first = client.lookup_by_handle("bob")
            second = client.lookup_by_handle("bob")
        assert first is second is True

    def test_timeout_raises_directory_error(self, client):
        with patch("requests.get", side_effect=Timeout("slow")):
            with pytest.raises(DirectoryError) as exc_info:
                client.lookup_by_handle("bob")
        assert "timeout" in str(exc_info.value).lower()


class TestSubmitTransfer:
    def test_success_returns_receipt(self, client, make_response):
        request = TransferRequest.release("alice", OWNER, fid=7, timestamp=1000, signature="0x01")
        body = {"transfer": api_transfer("alice", 7, 0, 1000)}
        with patch("requests.post", return_value=make_response(200, body)) as mock_post:
            receipt = client.submit_transfer(request)

        assert receipt.status_code == 200
        assert "alice" in receipt.body
        assert mock_post.call_args[0][0].endswith("/transfers")
        assert mock_post.call_args[1]["json"] == request.to_payload()

    def test_error_message_from_body(self, client, make_response):
        request = TransferRequest.claim("alice2", OWNER, fid=7, timestamp=1001, signature="0x02")
        with patch(
            "requests.post",
            return_value=make_response(400, {"message": "Invalid signature"}),
        ):
            with pytest.raises(DirectoryError) as exc_info:
                client.submit_transfer(request)

        assert exc_info.value.detail == "Invalid signature"
        assert exc_info.value.status_code == 400
        assert "Invalid signature" in exc_info.value.response_text

    def test_error_field_used_when_no_message(self, client, make_response):
        request = TransferRequest.claim("alice2", OWNER, fid=7, timestamp=1001, signature="0x02")
        with patch("requests.post", return_value=make_response(409, {"error": "Name taken"})):
            with pytest.raises(DirectoryError, match="Name taken"):
                client.submit_transfer(request)

    def test_falls_back_to_status_code(self, client, make_response):
        request = TransferRequest.claim("alice2", OWNER, fid=7, timestamp=1001, signature="0x02")
        with patch("requests.post", return_value=make_response(500, text="<html>bad gateway</html>")):
            with pytest.raises(DirectoryError) as exc_info:
                client.submit_transfer(request)
        assert exc_info.value.detail == "Directory returned status 500."
        assert exc_info.value.response_text == "<html>bad gateway</html>"

    def test_connection_failure(self, client):
        request = TransferRequest.claim("alice2", OWNER, fid=7, timestamp=1001, signature="0x02")
        with patch("requests.post", side_effect=ConnectionError("refused")) as mock_post:
            with pytest.raises(OutcomeUnknown) as exc_info:
                client.submit_transfer(request)
        assert mock_post.call_count == 1
        assert exc_info.value.remote_state_changed is True

    def test_read_timeout_outcome_unknown(self, client):
        request = TransferRequest.release("alice", OWNER, fid=7, timestamp=1000, signature="0x01")
        with patch("requests.post", side_effect=ReadTimeout("slow")):
            with pytest.raises(OutcomeUnknown) as exc_info:
                client.submit_transfer(request)
        error = exc_info.value
        assert isinstance(error, DirectoryError)
        assert error.handle == "alice"
        assert "may already be released" in str(error)

    def test_connect_timeout_is_plain_failure(self, client):
        request = TransferRequest.release("alice", OWNER, fid=7, timestamp=1000, signature="0x01")
        with patch("requests.post", side_effect=ConnectTimeout("slow")):
            with pytest.raises(DirectoryError) as exc_info:
                client.submit_transfer(request)
        assert not isinstance(exc_info.value, OutcomeUnknown)
        assert exc_info.value.remote_state_changed is False


class TestExtractErrorDetail:
    def test_non_dict_json(self):
        assert extract_error_detail("[1, 2]", 400) == "Directory returned status 400."

    def test_empty_body(self):
        assert extract_error_detail("", 502) == "Directory returned status 502."
