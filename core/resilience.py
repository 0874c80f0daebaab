"""
Resilience Patterns

Provides retry decorators, circuit breakers, and HTTP error classification
for handling transient failures when reading from the document store.
"""

from typing import Any, Callable, Optional, TypeVar

import requests
from circuitbreaker import circuit, CircuitBreakerError
from tenacity import (
    retry,
    stop_after_attempt,
    wait_exponential,
    retry_if_exception_type,
)

from core.logging import get_logger
from core.settings import settings


T = TypeVar("T")


# -----------------------------------------------------------------------------
# Custom Exceptions
# -----------------------------------------------------------------------------


class RetryableError(Exception):
    """Base class for errors that should trigger retries."""

    pass


class RateLimitError(RetryableError):
    """Raised when rate limited (HTTP 429)."""

    def __init__(self, message: str, retry_after: Optional[int] = None):
        super().__init__(message)
        self.retry_after = retry_after


class NetworkError(RetryableError):
    """Raised on network/timeout errors."""

    pass


class ServerError(RetryableError):
    """Raised on server errors (5xx)."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code


class ClientError(Exception):
    """Raised on client errors (4xx). Not retryable."""

    def __init__(self, message: str, status_code: int):
        super().__init__(message)
        self.status_code = status_code

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


# Errors a read call site may catch and degrade on
FETCH_ERRORS = (RetryableError, ClientError, CircuitBreakerError)


# -----------------------------------------------------------------------------
# Retry Decorators
# -----------------------------------------------------------------------------


def with_retry(
    max_attempts: int = 3,
    base_delay: float = 2.0,
    max_delay: float = 30.0,
) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """
    Decorator factory for retrying functions on RetryableError.

    Args:
        max_attempts: Maximum number of retry attempts
        base_delay: Initial delay between retries (seconds)
        max_delay: Maximum delay between retries (seconds)

    Example:
        @with_retry(max_attempts=3)
        def list_players():
            ...
    """
    log = get_logger("retry")

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @retry(
            stop=stop_after_attempt(max_attempts),
            wait=wait_exponential(multiplier=base_delay, max=max_delay),
            retry=retry_if_exception_type(RetryableError),
            reraise=True,
        )
        def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return func(*args, **kwargs)
            except RetryableError as e:
                log.warning(
                    "retry_attempt",
                    function=func.__name__,
                    error=str(e),
                    error_type=type(e).__name__,
                )
                raise

        return wrapper

    return decorator


# -----------------------------------------------------------------------------
# Circuit Breakers
# -----------------------------------------------------------------------------


def create_circuit_breaker(
    name: str,
    failure_threshold: int = 5,
    recovery_timeout: int = 60,
) -> Callable:
    """
    Create a circuit breaker decorator.

    Args:
        name: Name of the circuit breaker for identification
        failure_threshold: Number of failures before opening circuit
        recovery_timeout: Seconds to wait before attempting recovery

    Returns:
        A circuit breaker decorator
    """
    return circuit(
        failure_threshold=failure_threshold,
        recovery_timeout=recovery_timeout,
        expected_exception=RetryableError,
        name=name,
    )


firestore_circuit = create_circuit_breaker(
    name="firestore",
    failure_threshold=settings.circuit_breaker_threshold,
    recovery_timeout=settings.circuit_breaker_timeout,
)


# -----------------------------------------------------------------------------
# HTTP
# -----------------------------------------------------------------------------


def classify_response_error(response: requests.Response) -> None:
    """
    Classify HTTP response errors and raise appropriate exceptions.

    Raises:
        RateLimitError: For 429 responses
        ServerError: For 5xx responses
        ClientError: For 4xx responses
    """
    if response.status_code == 429:
        retry_after = response.headers.get("Retry-After")
        retry_seconds = int(retry_after) if retry_after else 60
        raise RateLimitError(
            f"Rate limited, retry after {retry_seconds}s",
            retry_after=retry_seconds,
        )

    if response.status_code >= 500:
        raise ServerError(
            f"Server error: {response.status_code}",
            status_code=response.status_code,
        )

    if response.status_code >= 400:
        raise ClientError(
            f"Client error: {response.status_code} - {response.text[:200]}",
            status_code=response.status_code,
        )


def resilient_request(
    method: str,
    url: str,
    timeout: int = 30,
    **kwargs: Any,
) -> requests.Response:
    """
    Make an HTTP request with retry-aware error handling.

    Args:
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        timeout: Request timeout in seconds
        **kwargs: Additional arguments passed to requests

    Returns:
        The HTTP response

    Raises:
        NetworkError: On connection or timeout errors
        RateLimitError: On 429 responses
        ServerError: On 5xx responses
        ClientError: On 4xx responses
    """
    log = get_logger("http")

    try:
        log.debug("http_request", method=method, url=url)
        response = requests.request(method, url, timeout=timeout, **kwargs)
        classify_response_error(response)
        log.debug("http_response", method=method, url=url, status=response.status_code)
        return response

    except requests.exceptions.Timeout:
        log.warning("http_timeout", method=method, url=url)
        raise NetworkError(f"Request timed out: {url}")

    except requests.exceptions.ConnectionError as e:
        log.warning("http_connection_error", method=method, url=url, error=str(e))
        raise NetworkError(f"Connection failed: {url}")

    except (RateLimitError, ServerError, ClientError):
        raise

    except requests.exceptions.RequestException as e:
        log.error("http_error", method=method, url=url, error=str(e))
        raise NetworkError(f"Request failed: {url} - {e}")


__all__ = [
    "RetryableError",
    "RateLimitError",
    "NetworkError",
    "ServerError",
    "ClientError",
    "CircuitBreakerError",
    "FETCH_ERRORS",
    "with_retry",
    "create_circuit_breaker",
    "firestore_circuit",
    "classify_response_error",
    "resilient_request",
]
