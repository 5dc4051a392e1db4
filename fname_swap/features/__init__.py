"""Feature modules for fname-swap.

- directory: Farcaster fname directory client
- signing: username proof claims and signers
- identity: address to FID and current fname
- rename: the release/claim rename flow
- relay: server-side submission endpoint and its client
"""
