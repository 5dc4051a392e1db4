"""Structural interfaces for collaborators supplied by the execution environment."""

from __future__ import annotations

from typing import Any, Protocol


class SigningCapability(Protocol):
    """Something that can produce an EIP-712 signature, possibly by asking the user.

    Implementations signal an explicit user refusal by raising an exception
    with ``code`` 4001 / ``"ACTION_REJECTED"`` or a message mentioning
    "rejected".
    """

    @property
    def address(self) -> str: ...

    @property
    def chain_id(self) -> int: ...

    def switch_chain(self, chain_id: int) -> None: ...

    def sign_typed_data(
        self,
        domain: dict[str, Any],
        types: dict[str, list[dict[str, str]]],
        message: dict[str, Any],
    ) -> str: ...


class IdentifierRegistry(Protocol):
    def id_of(self, address: str) -> int: ...
