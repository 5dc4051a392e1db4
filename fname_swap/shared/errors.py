"""Error taxonomy shared by the directory client, signer, resolver and rename flow.

Every error says whether remote directory state may have changed:
only ``PartialFailure`` is raised after a successful release.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fname_swap.features.rename.state import RenameStage


class FnameSwapError(Exception):
    """Base class for every failure surfaced to callers."""

    remote_state_changed = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message
        self.stage: RenameStage | None = None

    def __str__(self) -> str:
        return self.message


class ValidationError(FnameSwapError):
    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


class NotFound(FnameSwapError):
    """Directory has no records for the query. Absorbed as "no data"."""


class DirectoryError(FnameSwapError):
    def __init__(
        self,
        detail: str,
        status_code: int | None = None,
        response_text: str | None = None,
    ):
        super().__init__(detail)
        self.detail = detail
        self.status_code = status_code
        self.response_text = response_text


class OutcomeUnknown(DirectoryError):
    """A write was sent but no response confirmed whether it was applied.

    Treat remote state as possibly changed: the directory may have accepted
    the transfer before the connection failed.
    """

    remote_state_changed = True

    def __init__(self, handle: str, reason: str):
        super().__init__(
            f"Could not confirm whether the transfer of '{handle}' was applied: {reason.rstrip('.')}. "
            "Your old fname may already be released; check your current fname "
            "before retrying."
        )
        self.handle = handle
        self.reason = reason


class NameTaken(FnameSwapError):
    def __init__(self, handle: str):
        super().__init__(f"The fname '{handle}' is already taken.")
        self.handle = handle


class SigningUnavailable(FnameSwapError):
    def __init__(self, message: str = "No signing capability provided."):
        super().__init__(message)


class SigningRejected(FnameSwapError):
    def __init__(self, message: str = "Signature request rejected by user."):
        super().__init__(message)


class SigningFailed(FnameSwapError):
    def __init__(self, detail: str):
        super().__init__(f"Failed to sign the message: {detail}" if detail else "Failed to sign the message.")
        self.detail = detail


class IdentifierNotFound(FnameSwapError):
    def __init__(self, address: str):
        super().__init__("Connected address does not own a Farcaster ID.")
        self.address = address


class RegistryError(FnameSwapError):
    pass


class PartialFailure(FnameSwapError):
    """The release went through but the claim did not.

    The user now owns neither handle. They can retry the claim or re-register
    ``released`` through the same protocol.
    """

    remote_state_changed = True

    def __init__(self, released: str, attempted: str, detail: str):
        super().__init__(
            f"Deleted {released}, but failed to register {attempted}: {detail}"
        )
        self.released = released
        self.attempted = attempted
        self.detail = detail

    @property
    def user_guidance(self) -> str:
        return (
            f"Your old fname '{self.released}' has been released, but '{self.attempted}' "
            f"was NOT registered ({self.detail}). You currently have no fname. "
            f"Retry claiming '{self.attempted}', or re-register '{self.released}' "
            "before someone else takes it."
        )
