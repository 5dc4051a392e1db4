"""Input validation for handles, addresses, identifiers and timestamps."""

import re
from dataclasses import dataclass
from typing import Any

from eth_utils import is_address, is_checksum_address, to_checksum_address

HANDLE_PATTERN = re.compile(r"^[a-z0-9][a-z0-9-]{0,15}$")
HEX_SIGNATURE_PATTERN = re.compile(r"^0x[0-9a-fA-F]+$")
MAX_HANDLE_LENGTH = 16


@dataclass
class ValidationResult:
    is_valid: bool
    error_message: str | None = None
    normalized_value: Any = None


def is_valid_handle(handle: str) -> bool:
    """Strict check: no trimming, no lowercasing."""
    if not isinstance(handle, str):
        return False
    return bool(HANDLE_PATTERN.match(handle)) and not handle.endswith("-")


class HandleValidator:
    @staticmethod
    def validate(value: str) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Fname is required",
            )

        normalized = value.strip().lower()

        if len(normalized) > MAX_HANDLE_LENGTH:
            return ValidationResult(
                is_valid=False,
                error_message=f"Fname exceeds {MAX_HANDLE_LENGTH} characters",
            )

        if normalized.startswith("-") or normalized.endswith("-"):
            return ValidationResult(
                is_valid=False,
                error_message="Fname cannot start or end with a hyphen",
            )

        if not HANDLE_PATTERN.match(normalized):
            return ValidationResult(
                is_valid=False,
                error_message="Fname can only contain a-z, 0-9 and -",
            )

        return ValidationResult(is_valid=True, normalized_value=normalized)


class AddressValidator:
    @staticmethod
    def validate(value: str) -> ValidationResult:
        if not value or not value.strip():
            return ValidationResult(
                is_valid=False,
                error_message="Address is required",
            )

        normalized = value.strip()

        if not normalized.startswith("0x") or len(normalized) != 42:
            return ValidationResult(
                is_valid=False,
                error_message="Address must be 0x followed by 40 hex characters",
            )

        if not is_address(normalized):
            return ValidationResult(
                is_valid=False,
                error_message="Address is not a valid EVM address",
            )

        digits = normalized[2:]
        mixed_case = digits != digits.lower() and digits != digits.upper()
        if mixed_case and not is_checksum_address(normalized):
            return ValidationResult(
                is_valid=False,
                error_message="Address checksum does not match",
            )

        return ValidationResult(
            is_valid=True,
            normalized_value=to_checksum_address(normalized),
        )


class IdentifierValidator:
    @staticmethod
    def validate(value: Any) -> ValidationResult:
        if isinstance(value, bool) or not isinstance(value, int):
            return ValidationResult(
                is_valid=False,
                error_message="FID must be an integer",
            )

        if value <= 0:
            return ValidationResult(
                is_valid=False,
                error_message="FID must be a positive integer",
            )

        return ValidationResult(is_valid=True, normalized_value=value)


class TimestampValidator:
    @staticmethod
    def validate(value: Any) -> ValidationResult:
        if isinstance(value, bool) or not isinstance(value, int):
            return ValidationResult(
                is_valid=False,
                error_message="Timestamp must be an integer number of seconds",
            )

        if value <= 0:
            return ValidationResult(
                is_valid=False,
                error_message="Timestamp must be positive",
            )

        return ValidationResult(is_valid=True, normalized_value=value)


class SignatureValidator:
    @staticmethod
    def validate(value: Any) -> ValidationResult:
        if not isinstance(value, str) or not value:
            return ValidationResult(
                is_valid=False,
                error_message="Signature is required",
            )

        if not HEX_SIGNATURE_PATTERN.match(value):
            return ValidationResult(
                is_valid=False,
                error_message="Signature must be a 0x-prefixed hex string",
            )

        return ValidationResult(is_valid=True, normalized_value=value)
