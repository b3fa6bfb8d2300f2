"""Error hierarchy for the okgroups SDK.

Every public error class inherits from :class:`OkError`.  Each carries a
machine-readable ``code`` (from :class:`ErrorCode`), a human-readable
``message``, an optional structured ``context`` dict, and an optional
``cause`` (chained exception).

Application-level failures reported by the OK gateway (HTTP 200 with an
``error_code`` payload) are normally returned as data on
:class:`~okgroups.models.GroupsResult`; :class:`OkApiError` exists for
callers who opt into exceptions via ``raise_for_error()``.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

# ---------------------------------------------------------------------------
# Error code enum
# ---------------------------------------------------------------------------

class ErrorCode(str, Enum):
    """Machine-readable error codes for every error the SDK can raise."""

    CONFIG_ERROR = "CONFIG_ERROR"
    NETWORK_ERROR = "NETWORK_ERROR"
    HTTP_ERROR = "HTTP_ERROR"
    DECODE_ERROR = "DECODE_ERROR"
    API_ERROR = "API_ERROR"
    PROBE_FAILED = "PROBE_FAILED"


# ---------------------------------------------------------------------------
# Base error
# ---------------------------------------------------------------------------

class OkError(Exception):
    """Base exception for all okgroups errors.

    Parameters
    ----------
    code:
        A value from :class:`ErrorCode` (or any string) identifying the
        error category.
    message:
        A developer-friendly description of what went wrong.
    context:
        Arbitrary structured data providing extra diagnostic detail.
    cause:
        The underlying exception, if this error wraps another.
    """

    def __init__(
        self,
        code: str,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.code: str = code
        self.message: str = message
        self.context: dict[str, Any] = context or {}
        self.cause: Exception | None = cause
        super().__init__(message)
        if cause is not None:
            self.__cause__ = cause

    def __repr__(self) -> str:
        ctx = f", context={self.context!r}" if self.context else ""
        return f"{type(self).__name__}(code={self.code!r}, message={self.message!r}{ctx})"


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class OkConfigError(OkError):
    """The client configuration is invalid.

    Context keys: ``field``, ``value``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.CONFIG_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Transport errors
# ---------------------------------------------------------------------------

class OkNetworkError(OkError):
    """A transport-level failure occurred (timeout, DNS, connection reset).

    Context keys: ``url``, ``api_method``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.NETWORK_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


class OkHttpError(OkError):
    """The gateway answered with a non-2xx HTTP status.

    Context keys: ``status_code``, ``api_method``, ``body``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.HTTP_ERROR,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def status_code(self) -> int | None:
        return self.context.get("status_code")


class OkDecodeError(OkError):
    """A response body could not be turned into the expected shape.

    Raised for non-JSON bodies, malformed group records and unrecognised
    ``role`` tags.

    Context keys: ``field``, ``value``, ``body``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.DECODE_ERROR,
            message=message,
            context=context,
            cause=cause,
        )


# ---------------------------------------------------------------------------
# Application errors
# ---------------------------------------------------------------------------

class OkApiError(OkError):
    """The gateway reported an application-level error.

    Context keys: ``error_code``, ``error_msg``, ``error_data``,
    ``api_method``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.API_ERROR,
            message=message,
            context=context,
            cause=cause,
        )

    @property
    def error_code(self) -> int | None:
        return self.context.get("error_code")

    @property
    def error_msg(self) -> str | None:
        return self.context.get("error_msg")


# ---------------------------------------------------------------------------
# Probe errors
# ---------------------------------------------------------------------------

class ProbeAssertionError(OkError, AssertionError):
    """A probe scenario's response did not match its expectation.

    Subclasses :class:`AssertionError` so that pytest reports it as a test
    failure rather than an error.

    Context keys: ``scenario``, ``expected``, ``actual``.
    """

    def __init__(
        self,
        message: str,
        context: dict[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            code=ErrorCode.PROBE_FAILED,
            message=message,
            context=context,
            cause=cause,
        )
