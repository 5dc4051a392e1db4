"""Identity feature module for fname-swap.

Maps a custody address to its Farcaster ID (via the IdRegistry) and the
fname that ID currently owns (via the directory's transfer history).
"""

from fname_swap.features.identity.service import (
    ID_REGISTRY_ABI,
    ContractIdentifierRegistry,
    Identity,
    IdentityResolver,
)

__all__ = [
    "ID_REGISTRY_ABI",
    "ContractIdentifierRegistry",
    "Identity",
    "IdentityResolver",
]
