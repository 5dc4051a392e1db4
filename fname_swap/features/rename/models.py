"""Rename intent and result types."""

from __future__ import annotations

from dataclasses import dataclass

from fname_swap.features.rename.state import RenameAttempt
from fname_swap.features.signing.claims import SignedClaim
from fname_swap.shared.errors import ValidationError
from fname_swap.shared.validation import (
    AddressValidator,
    HandleValidator,
    IdentifierValidator,
)


@dataclass(frozen=True)
class RenameIntent:
    fid: int
    owner: str
    current_handle: str
    desired_handle: str

    @classmethod
    def create(
        cls,
        fid: int,
        owner: str,
        current_handle: str | None,
        desired_handle: str,
    ) -> "RenameIntent":
        fid_result = IdentifierValidator.validate(fid)
        if not fid_result.is_valid:
            raise ValidationError(fid_result.error_message or "Invalid FID", field="fid")

        owner_result = AddressValidator.validate(owner)
        if not owner_result.is_valid:
            raise ValidationError(
                owner_result.error_message or "Invalid address", field="owner"
            )

        if not current_handle or not current_handle.strip():
            raise ValidationError(
                f"Your FID ({fid}) does not seem to have an fname assigned.",
                field="current_handle",
            )
        current = current_handle.strip().lower()

        desired_result = HandleValidator.validate(desired_handle)
        if not desired_result.is_valid:
            raise ValidationError(
                desired_result.error_message or "Invalid fname",
                field="desired_handle",
            )
        desired = desired_result.normalized_value

        if desired == current:
            raise ValidationError(
                "New fname cannot be the same as the current one.",
                field="desired_handle",
            )

        return cls(
            fid=fid_result.normalized_value,
            owner=owner_result.normalized_value,
            current_handle=current,
            desired_handle=desired,
        )


@dataclass(frozen=True)
class RenameResult:
    intent: RenameIntent
    release: SignedClaim
    claim: SignedClaim
    attempt: RenameAttempt

    @property
    def new_handle(self) -> str:
        return self.intent.desired_handle

    @property
    def message(self) -> str:
        return (
            f"Successfully renamed {self.intent.current_handle} "
            f"to {self.intent.desired_handle}."
        )
