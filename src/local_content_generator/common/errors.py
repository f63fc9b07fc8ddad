"""Error taxonomy for the local LLM adapter."""
from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator

import httpx

LOGGER = logging.getLogger("localgen.errors")


class LocalLLMError(Exception):
    """Base class for every error raised by this package."""


class ConfigurationError(LocalLLMError):
    pass


class TransportError(LocalLLMError):
    """No usable response: connection failure, timeout or missing body."""

    def __init__(self, reason: str, message: str | None = None) -> None:
        super().__init__(message or reason)
        self.reason = reason


class HttpStatusError(LocalLLMError):
    def __init__(self, status: int, status_text: str) -> None:
        super().__init__(f"HTTP error! status: {status} {status_text}")
        self.status = status
        self.status_text = status_text


class DecodeError(LocalLLMError):
    """Response bytes are not valid JSON of the expected shape."""


class NotSupportedError(LocalLLMError):
    """Permanent capability gap of the local server. Never retry."""

    def __init__(self, operation: str) -> None:
        super().__init__(f"{operation} is not supported by the local LLM server.")
        self.operation = operation


class ContentGenerationError(LocalLLMError):
    """The single error shape surfaced by both generation operations."""

    def __init__(self, operation: str, prefix: str, cause: BaseException) -> None:
        super().__init__(f"{prefix}: {get_error_message(cause)}")
        self.operation = operation
        self.cause = cause


def get_error_message(error: BaseException) -> str:
    return str(error) or type(error).__name__


@contextmanager
def wrap_errors(operation: str, prefix: str, timeout_ms: int | None = None) -> Iterator[None]:
    """Re-raise transport and decode failures as one ``ContentGenerationError``.

    httpx exceptions are first translated into ``TransportError``.
    ``GeneratorExit`` is not an ``Exception`` and passes through untouched.
    """
    try:
        yield
    except httpx.TimeoutException as e:
        inner = TransportError("timeout", f"Request timed out after {timeout_ms}ms" if timeout_ms else "Request timed out")
        LOGGER.error("%s failed: %s", operation, inner)
        raise ContentGenerationError(operation, prefix, inner) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        inner = TransportError(get_error_message(e))
        LOGGER.error("%s failed: %s", operation, inner)
        raise ContentGenerationError(operation, prefix, inner) from e
    except (TransportError, HttpStatusError, DecodeError) as e:
        LOGGER.error("%s failed: %s", operation, e)
        raise ContentGenerationError(operation, prefix, e) from e
