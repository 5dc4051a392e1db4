"""Runtime configuration for fname-swap, read from the environment."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from fname_swap.shared.network import RetryConfig, TimeoutConfig

DEFAULT_DIRECTORY_URL = "https://fnames.farcaster.xyz"
DEFAULT_RPC_URL = "https://mainnet.optimism.io"
# Farcaster IdRegistry on OP Mainnet
DEFAULT_ID_REGISTRY_ADDRESS = "0x00000000Fc6c5F01Fc30151999387Bb99A9f489b"
DEFAULT_RELAY_DELAY_SECONDS = 1.0
RELAY_TIMEOUT_MARGIN_SECONDS = 5.0


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def relay_timeouts(
    directory_timeout: TimeoutConfig, relay_delay: float
) -> TimeoutConfig:
    """Timeouts for a relay call, which spans two directory writes and a pause."""
    per_write = directory_timeout.connect_timeout + directory_timeout.read_timeout
    return TimeoutConfig(
        connect_timeout=directory_timeout.connect_timeout,
        read_timeout=2 * per_write + relay_delay + RELAY_TIMEOUT_MARGIN_SECONDS,
    )


@dataclass
class RenamerConfig:
    directory_url: str = DEFAULT_DIRECTORY_URL
    rpc_url: str = DEFAULT_RPC_URL
    id_registry_address: str = DEFAULT_ID_REGISTRY_ADDRESS
    relay_url: str | None = None
    relay_delay: float = DEFAULT_RELAY_DELAY_SECONDS
    timeout_config: TimeoutConfig = field(default_factory=TimeoutConfig)
    read_retry_config: RetryConfig = field(default_factory=RetryConfig)

    @property
    def relay_timeout_config(self) -> TimeoutConfig:
        return relay_timeouts(self.timeout_config, self.relay_delay)

    @classmethod
    def from_environment(cls) -> "RenamerConfig":
        timeout_config = TimeoutConfig(
            connect_timeout=_env_float("FNAME_SWAP_CONNECT_TIMEOUT", 5.0),
            read_timeout=_env_float("FNAME_SWAP_READ_TIMEOUT", 15.0),
        )
        read_retry_config = RetryConfig(
            max_retries=max(0, _env_int("FNAME_SWAP_READ_RETRIES", 0))
        )

        return cls(
            directory_url=os.getenv("FNAME_SWAP_DIRECTORY_URL", DEFAULT_DIRECTORY_URL),
            rpc_url=os.getenv("FNAME_SWAP_RPC_URL", DEFAULT_RPC_URL),
            id_registry_address=os.getenv(
                "FNAME_SWAP_ID_REGISTRY", DEFAULT_ID_REGISTRY_ADDRESS
            ),
            relay_url=os.getenv("FNAME_SWAP_RELAY_URL") or None,
            relay_delay=_env_float("FNAME_SWAP_RELAY_DELAY", DEFAULT_RELAY_DELAY_SECONDS),
            timeout_config=timeout_config,
            read_retry_config=read_retry_config,
        )
