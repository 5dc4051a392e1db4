"""Tests for address to FID/fname resolution."""

from unittest.mock import Mock, patch

import pytest
from web3.exceptions import ContractLogicError

from fname_swap.features.identity.service import (
    ContractIdentifierRegistry,
    IdentityResolver,
)
from fname_swap.shared.errors import IdentifierNotFound, RegistryError, ValidationError

ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class FakeRegistry:
    def __init__(self, fids):
        self.fids = fids
        self.calls = []

    def id_of(self, address):
        self.calls.append(address)
        return self.fids.get(address, 0)


class TestIdentityResolver:
    def test_resolves_fid_and_handle(self, in_memory_directory):
        in_memory_directory.add_transfer("alice", 0, 7, 1000)
        resolver = IdentityResolver(FakeRegistry({ADDRESS: 7}), in_memory_directory)

        identity = resolver.resolve(ADDRESS)

        assert identity.address == ADDRESS
        assert identity.fid == 7
        assert identity.current_handle == "alice"
        assert identity.has_handle is True

    def test_lowercase_address_is_checksummed(self, in_memory_directory):
        registry = FakeRegistry({ADDRESS: 7})
        resolver = IdentityResolver(registry, in_memory_directory)

        assert resolver.resolve_fid(ADDRESS.lower()) == 7
        assert registry.calls == [ADDRESS]

    def test_fid_without_handle(self, in_memory_directory):
        resolver = IdentityResolver(FakeRegistry({ADDRESS: 7}), in_memory_directory)

        identity = resolver.resolve(ADDRESS)

        assert identity.fid == 7
        assert identity.current_handle is None
        assert identity.has_handle is False

    def test_zero_fid_means_not_registered(self, in_memory_directory):
        resolver = IdentityResolver(FakeRegistry({}), in_memory_directory)
        with pytest.raises(IdentifierNotFound) as exc_info:
            resolver.resolve(ADDRESS)
        assert exc_info.value.address == ADDRESS

    def test_invalid_address(self, in_memory_directory):
        registry = FakeRegistry({})
        resolver = IdentityResolver(registry, in_memory_directory)
        with pytest.raises(ValidationError) as exc_info:
            resolver.resolve("not-an-address")
        assert exc_info.value.field == "owner"
        assert registry.calls == []


class TestContractIdentifierRegistry:
    @pytest.fixture
    def registry(self):
        return ContractIdentifierRegistry(
            "http://localhost:8545",
            "0x00000000fc6c5f01fc30151999387bb99a9f489b",
        )

    def test_id_of(self, registry):
        call = Mock()
        call.call.return_value = 42
        with patch.object(registry.contract.functions, "idOf", return_value=call) as id_of:
            assert registry.id_of(ADDRESS.lower()) == 42
        id_of.assert_called_once_with(ADDRESS)

    def test_contract_error_wrapped(self, registry):
        call = Mock()
        call.call.side_effect = ContractLogicError("execution reverted Args: ('0x',)")
        with patch.object(registry.contract.functions, "idOf", return_value=call):
            with pytest.raises(RegistryError) as exc_info:
                registry.id_of(ADDRESS)
        assert str(exc_info.value) == "execution reverted"

    def test_contract_error_with_revert_data(self, registry):
        call = Mock()
        call.call.side_effect = ContractLogicError(
            "execution reverted: paused", data="0x08c379a0"
        )
        with patch.object(registry.contract.functions, "idOf", return_value=call):
            with pytest.raises(RegistryError) as exc_info:
                registry.id_of(ADDRESS)
        assert str(exc_info.value) == "execution reverted: paused"

    def test_transport_error_wrapped(self, registry):
        call = Mock()
        call.call.side_effect = ConnectionRefusedError("connection refused")
        with patch.object(registry.contract.functions, "idOf", return_value=call):
            with pytest.raises(RegistryError, match="connection refused"):
                registry.id_of(ADDRESS)
