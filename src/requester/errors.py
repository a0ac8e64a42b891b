# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Error taxonomy and exception helpers."""

from __future__ import annotations

import socket
import ssl as ssl_module
from collections.abc import Iterator
from enum import Enum
from typing import TYPE_CHECKING

import httpx
from httpx import codes

if TYPE_CHECKING:
    from .http.models import ShapedResponse


class ErrorCategory(str, Enum):
    TIMEOUT = "TIMEOUT"
    SSL_ERROR = "SSL_ERROR"
    CONNECTION_ERROR = "CONNECTION_ERROR"
    DNS_ERROR = "DNS_ERROR"
    PROTOCOL_ERROR = "PROTOCOL_ERROR"
    UNKNOWN_ERROR = "UNKNOWN_ERROR"


class RequesterError(Exception):
    """Base class for every error raised by requester."""


class TransportError(RequesterError):
    """The exchange failed before any response was available (DNS, refused, timeout...)."""

    def __init__(self, message: str, *, url: str | None = None, category: ErrorCategory = ErrorCategory.UNKNOWN_ERROR):
        super().__init__(message)
        self.url = url
        self.category = category

    @property
    def is_timeout(self) -> bool:
        return self.category is ErrorCategory.TIMEOUT


class SerializationError(RequesterError):
    """A structured request body could not be encoded for the wire."""


class InvalidUrlError(RequesterError, ValueError):
    """The request URL is not absolute and no base URL was configured."""


class HttpError(RequesterError):
    """A complete response was received but its status is outside the success range."""

    def __init__(self, response: ShapedResponse, message: str | None = None):
        super().__init__(message or status_message(response.status_code, response.reason))
        self.response = response

    @property
    def status_code(self) -> int:
        return self.response.status_code


def status_message(status_code: int, reason: str | None = None) -> str:
    """Human-readable message for a status: wire reason, standard phrase, then a generic fallback."""
    if reason and reason.strip():
        return reason.strip()
    phrase = codes.get_reason_phrase(status_code)
    if phrase:
        return phrase
    return f"Request failed with status {status_code}"


def _exception_chain(exc: BaseException) -> Iterator[BaseException]:
    seen: set[int] = set()
    current: BaseException | None = exc
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = current.__cause__ or current.__context__


def categorize_exception(exc: BaseException) -> ErrorCategory:
    """
    Map Python/httpx exceptions to ErrorCategory.

    httpx wraps socket-level failures, so the cause chain is inspected for the
    underlying ssl/socket error before falling back to the httpx class.
    """
    if isinstance(exc, (httpx.TimeoutException, TimeoutError)):
        return ErrorCategory.TIMEOUT

    for item in _exception_chain(exc):
        if isinstance(item, (ssl_module.SSLError, ssl_module.CertificateError)):
            return ErrorCategory.SSL_ERROR
        if isinstance(item, (socket.gaierror, socket.herror)):
            return ErrorCategory.DNS_ERROR

    if isinstance(exc, httpx.ProtocolError):
        return ErrorCategory.PROTOCOL_ERROR

    if isinstance(exc, (httpx.NetworkError, httpx.ProxyError, ConnectionError)):
        return ErrorCategory.CONNECTION_ERROR

    return ErrorCategory.UNKNOWN_ERROR


def error_category_to_reason(category: ErrorCategory | None) -> str:
    """User-facing reason string."""
    mapping = {
        ErrorCategory.TIMEOUT: "Request timed out",
        ErrorCategory.SSL_ERROR: "TLS/certificate issue",
        ErrorCategory.CONNECTION_ERROR: "Network connectivity issue",
        ErrorCategory.DNS_ERROR: "DNS resolution failure",
        ErrorCategory.PROTOCOL_ERROR: "HTTP protocol violation",
        ErrorCategory.UNKNOWN_ERROR: "Network error during request",
        None: "",
    }
    return mapping.get(category, "Request failed due to network error")


__all__ = [
    "ErrorCategory",
    "HttpError",
    "InvalidUrlError",
    "RequesterError",
    "SerializationError",
    "TransportError",
    "categorize_exception",
    "error_category_to_reason",
    "status_message",
]
