"""Exception hierarchy for pokesdk.

All exceptions inherit from :class:`PokeSDKError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`pokesdk.exit_codes`
and the request ``url`` when one is known. Callers distinguish failures by
type (``except NotFoundError``), never by matching message text.

Subclass hierarchy::

    PokeSDKError (exit 1)
    +-- InvalidUsageError   (exit 2)
    +-- NotFoundError       (exit 4)
    +-- RequestFailedError  (exit 5)
    +-- TransportError      (exit 6)
    +-- DecodeError         (exit 7)
    +-- PagesExhausted      (exit 8)
    +-- ConfigError         (exit 1)
"""

from __future__ import annotations

import copy
from typing import Optional

from pokesdk.exit_codes import (
    EXIT_DECODE_ERROR,
    EXIT_END_OF_PAGES,
    EXIT_GENERIC_FAILURE,
    EXIT_INVALID_USAGE,
    EXIT_NOT_FOUND,
    EXIT_REQUEST_FAILED,
    EXIT_TRANSPORT_ERROR,
)


class PokeSDKError(Exception):
    """Base exception for all pokesdk errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`pokesdk.exit_codes`. The CLI entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description.
        exit_code: Optional override for the class-level exit code.
        url: The request URL involved, if any.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        url: Optional[str] = None,
    ):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code
        self.url = url

    def with_context(self, context: str) -> PokeSDKError:
        """Return a copy of this error, of the same class, with *context* prefixed.

        Attributes such as ``url`` and ``status_code`` are preserved. Raise
        the copy ``from`` the original so the chain stays intact.
        """
        wrapped = copy.copy(self)
        wrapped.args = (f"{context}: {self}",)
        return wrapped


class InvalidUsageError(PokeSDKError):
    """Raised for invalid arguments such as an empty identifier or a zero page size."""

    exit_code = EXIT_INVALID_USAGE


class NotFoundError(PokeSDKError):
    """Raised when the API returns HTTP 404 (resource does not exist)."""

    exit_code = EXIT_NOT_FOUND


class RequestFailedError(PokeSDKError):
    """Raised when the API returns any status other than 200 or 404.

    The offending status is available as ``status_code``.
    """

    exit_code = EXIT_REQUEST_FAILED

    def __init__(
        self,
        message: str,
        exit_code: int | None = None,
        url: Optional[str] = None,
        status_code: int = 0,
    ):
        super().__init__(message, exit_code=exit_code, url=url)
        self.status_code = status_code


class TransportError(PokeSDKError):
    """Raised on network-level failures (timeout, DNS, connection refused) and cancellation."""

    exit_code = EXIT_TRANSPORT_ERROR


class DecodeError(PokeSDKError):
    """Raised when a freshly fetched payload cannot be decoded into the target model."""

    exit_code = EXIT_DECODE_ERROR


class PagesExhausted(PokeSDKError):
    """End-of-sequence signal raised by a cursor once its last page was delivered."""

    exit_code = EXIT_END_OF_PAGES


class ConfigError(PokeSDKError):
    """Raised for configuration problems (bad environment values, invalid project config)."""

    exit_code = EXIT_GENERIC_FAILURE
