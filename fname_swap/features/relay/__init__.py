"""Relay feature module for fname-swap.

A small HTTP service that accepts a pre-signed rename and performs the
release and claim submissions server-side, plus the client used to call it.
"""

from fname_swap.features.relay.app import create_app
from fname_swap.features.relay.client import RelayClient, build_rename_payload
from fname_swap.features.relay.schemas import RenameRequest, format_validation_errors
from fname_swap.features.relay.service import RelayService

__all__ = [
    "RelayClient",
    "RelayService",
    "RenameRequest",
    "build_rename_payload",
    "create_app",
    "format_validation_errors",
]
