"""Shared utilities for fname-swap."""

from fname_swap.shared.errors import (
    DirectoryError,
    FnameSwapError,
    IdentifierNotFound,
    NameTaken,
    NotFound,
    OutcomeUnknown,
    PartialFailure,
    RegistryError,
    SigningFailed,
    SigningRejected,
    SigningUnavailable,
    ValidationError,
)
from fname_swap.shared.logging import (
    ContextAdapter,
    LoggingConfig,
    LogLevel,
    format_error_for_user,
    get_logger,
    get_user_friendly_error,
    sanitize_dict,
    sanitize_message,
    setup_logging,
)
from fname_swap.shared.network import (
    NetworkClient,
    NetworkError,
    NetworkErrorType,
    NetworkResponse,
    RetryConfig,
    TimeoutConfig,
)
from fname_swap.shared.validation import (
    AddressValidator,
    HandleValidator,
    IdentifierValidator,
    ValidationResult,
    is_valid_handle,
)

__all__ = [
    "DirectoryError",
    "FnameSwapError",
    "IdentifierNotFound",
    "NameTaken",
    "NotFound",
    "OutcomeUnknown",
    "PartialFailure",
    "RegistryError",
    "SigningFailed",
    "SigningRejected",
    "SigningUnavailable",
    "ValidationError",
    "NetworkClient",
    "NetworkError",
    "NetworkErrorType",
    "NetworkResponse",
    "RetryConfig",
    "TimeoutConfig",
    "AddressValidator",
    "HandleValidator",
    "IdentifierValidator",
    "ValidationResult",
    "is_valid_handle",
    "ContextAdapter",
    "LoggingConfig",
    "LogLevel",
    "format_error_for_user",
    "get_logger",
    "get_user_friendly_error",
    "sanitize_dict",
    "sanitize_message",
    "setup_logging",
]
