"""Request schema for the rename relay endpoint."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from fname_swap.shared.validation import (
    AddressValidator,
    IdentifierValidator,
    SignatureValidator,
    TimestampValidator,
    is_valid_handle,
)


class RenameRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    current_fname: str = Field(alias="currentFname")
    new_fname: str = Field(alias="newFname")
    fid: int = Field(strict=True)
    owner: str
    delete_signature: str = Field(alias="deleteSignature")
    delete_timestamp: int = Field(alias="deleteTimestamp", strict=True)
    register_signature: str = Field(alias="registerSignature")
    register_timestamp: int = Field(alias="registerTimestamp", strict=True)

    @field_validator("current_fname")
    @classmethod
    def _current_fname_present(cls, value: str) -> str:
        if not value:
            raise ValueError("Current fname is required.")
        return value

    @field_validator("new_fname")
    @classmethod
    def _new_fname_format(cls, value: str) -> str:
        if not value:
            raise ValueError("New fname is required.")
        if value.startswith("-") or value.endswith("-"):
            raise ValueError("New fname cannot start or end with a hyphen.")
        if not is_valid_handle(value):
            raise ValueError("Invalid new fname format.")
        return value

    @field_validator("fid")
    @classmethod
    def _fid_positive(cls, value: int) -> int:
        if not IdentifierValidator.validate(value).is_valid:
            raise ValueError("Valid FID is required.")
        return value

    @field_validator("owner")
    @classmethod
    def _owner_address(cls, value: str) -> str:
        if not AddressValidator.validate(value).is_valid:
            raise ValueError("Valid owner address is required.")
        return value

    @field_validator("delete_signature", "register_signature")
    @classmethod
    def _signature_hex(cls, value: str) -> str:
        result = SignatureValidator.validate(value)
        if not result.is_valid:
            raise ValueError(f"{result.error_message}.")
        return value

    @field_validator("delete_timestamp")
    @classmethod
    def _delete_timestamp_positive(cls, value: int) -> int:
        if not TimestampValidator.validate(value).is_valid:
            raise ValueError("Valid delete timestamp is required.")
        return value

    @field_validator("register_timestamp")
    @classmethod
    def _register_timestamp_positive(cls, value: int) -> int:
        if not TimestampValidator.validate(value).is_valid:
            raise ValueError("Valid register timestamp is required.")
        return value


def format_validation_errors(exc: ValidationError) -> str:
    """Render pydantic errors as ``field: message, field: message``."""
    parts = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()))
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        parts.append(f"{location}: {message}" if location else message)
    return ", ".join(parts)
