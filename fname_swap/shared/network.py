"""HTTP utilities for fname-swap with timeout handling and optional read retries."""

import logging
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, TypeVar

import requests
from requests.exceptions import (
    ConnectionError,
    ConnectTimeout,
    HTTPError,
    RequestException,
    Timeout,
)
from urllib3.exceptions import NewConnectionError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class NetworkErrorType(Enum):
    TIMEOUT = "timeout"
    CONNECTION_ERROR = "connection_error"
    HTTP_ERROR = "http_error"
    UNKNOWN = "unknown"


@dataclass
class NetworkError(Exception):
    error_type: NetworkErrorType
    message: str
    original_error: Exception | None = None
    status_code: int | None = None
    response_text: str | None = None
    may_have_reached_server: bool = False

    def __str__(self) -> str:
        return self.message


@dataclass
class NetworkResponse:
    status_code: int
    text: str
    data: Any = None

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 300


@dataclass
class TimeoutConfig:
    connect_timeout: float = 5.0
    read_timeout: float = 15.0

    @property
    def request_timeout(self) -> tuple[float, float]:
        return (self.connect_timeout, self.read_timeout)


@dataclass
class RetryConfig:
    max_retries: int = 0
    base_delay: float = 1.0
    max_delay: float = 30.0
    exponential_base: float = 2.0
    retryable_status_codes: set[int] = field(
        default_factory=lambda: {408, 429, 500, 502, 503, 504}
    )

    def calculate_delay(self, attempt: int) -> float:
        delay = self.base_delay * (self.exponential_base**attempt)
        return min(delay, self.max_delay)


DEFAULT_TIMEOUT_CONFIG = TimeoutConfig()
DEFAULT_RETRY_CONFIG = RetryConfig()


def classify_error(error: Exception) -> NetworkErrorType:
    if isinstance(error, Timeout):
        return NetworkErrorType.TIMEOUT
    elif isinstance(error, ConnectionError):
        return NetworkErrorType.CONNECTION_ERROR
    elif isinstance(error, HTTPError):
        return NetworkErrorType.HTTP_ERROR
    return NetworkErrorType.UNKNOWN


def create_network_error(
    error: Exception, base_url: str, context: str = ""
) -> NetworkError:
    error_type = classify_error(error)
    context_prefix = f"{context}: " if context else ""

    if error_type == NetworkErrorType.TIMEOUT:
        message = (
            f"{context_prefix}Connection timeout. Server may be unavailable: {base_url}"
        )
    elif error_type == NetworkErrorType.CONNECTION_ERROR:
        message = (
            f"{context_prefix}Cannot connect to server: {base_url}. "
            "Check your network connection."
        )
    elif error_type == NetworkErrorType.HTTP_ERROR:
        status_code = getattr(error.response, "status_code", None)
        response_text = getattr(error.response, "text", None)
        message = f"{context_prefix}HTTP error {status_code}: {response_text or 'Unknown error'}"
        return NetworkError(
            error_type=error_type,
            message=message,
            original_error=error,
            status_code=status_code,
            response_text=response_text,
        )
    else:
        message = f"{context_prefix}Network error: {str(error)}"

    return NetworkError(
        error_type=error_type,
        message=message,
        original_error=error,
    )


def request_may_have_reached_server(error: Exception) -> bool:
    """False only when the request provably never left this host."""
    if isinstance(error, ConnectTimeout):
        return False
    if isinstance(error, ConnectionError):
        reason = getattr(error.args[0], "reason", None) if error.args else None
        return not isinstance(reason, NewConnectionError)
    return True


def should_retry(error: Exception, retry_config: RetryConfig) -> bool:
    if isinstance(error, Timeout):
        return True
    if isinstance(error, ConnectionError):
        return True
    if isinstance(error, HTTPError):
        status_code = getattr(error.response, "status_code", None)
        if status_code and status_code in retry_config.retryable_status_codes:
            return True
    return False


class NetworkClient:
    """Thin wrapper over ``requests`` bound to a single base URL.

    Reads (``get``) go through the retry loop, which is a no-op with the
    default ``RetryConfig(max_retries=0)``. ``post`` never retries and never
    raises on an HTTP status: it returns the raw response so the caller can
    inspect the body of a rejected write. Transport failures on ``post`` are
    raised as ``NetworkError`` with ``may_have_reached_server`` set unless the
    request provably never left this host.
    """

    def __init__(
        self,
        base_url: str,
        timeout_config: TimeoutConfig | None = None,
        retry_config: RetryConfig | None = None,
        on_retry: Callable[[int, Exception, float], None] | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout_config = timeout_config or DEFAULT_TIMEOUT_CONFIG
        self.retry_config = retry_config or DEFAULT_RETRY_CONFIG
        self.on_retry = on_retry

    def _execute_with_retry(
        self,
        operation: Callable[[], T],
        context: str = "",
    ) -> T:
        last_error: Exception | None = None

        for attempt in range(self.retry_config.max_retries + 1):
            try:
                return operation()
            except Exception as e:
                last_error = e

                if attempt < self.retry_config.max_retries and should_retry(
                    e, self.retry_config
                ):
                    delay = self.retry_config.calculate_delay(attempt)
                    logger.warning(
                        "Network operation failed (attempt %d/%d), retrying in %.1fs: %s",
                        attempt + 1,
                        self.retry_config.max_retries + 1,
                        delay,
                        str(e),
                    )

                    if self.on_retry:
                        self.on_retry(attempt + 1, e, delay)

                    time.sleep(delay)
                else:
                    break

        raise create_network_error(
            last_error or Exception("Unknown error"), self.base_url, context
        )

    def get(
        self,
        endpoint: str,
        context: str = "",
        **kwargs,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        timeout = kwargs.pop("timeout", self.timeout_config.request_timeout)

        def operation() -> dict[str, Any]:
            response = requests.get(url, timeout=timeout, **kwargs)
            if response.status_code == 404:
                raise HTTPError(response=response)
            response.raise_for_status()
            return response.json()

        return self._execute_with_retry(operation, context)

    def post(
        self,
        endpoint: str,
        context: str = "",
        **kwargs,
    ) -> NetworkResponse:
        url = f"{self.base_url}{endpoint}"
        timeout = kwargs.pop("timeout", self.timeout_config.request_timeout)

        try:
            response = requests.post(url, timeout=timeout, **kwargs)
        except RequestException as e:
            error = create_network_error(e, self.base_url, context)
            error.may_have_reached_server = request_may_have_reached_server(e)
            raise error from e

        text = response.text or ""
        data: Any = None
        if text:
            try:
                data = response.json()
            except ValueError:
                data = None

        return NetworkResponse(status_code=response.status_code, text=text, data=data)
