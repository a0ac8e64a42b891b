# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""
requester package entrypoint.

requester is a convenience asynchronous HTTP client: verb shortcuts, automatic
JSON request bodies, automatic response decompression and parsing, and
non-success statuses raised as HttpError by default. The transport is
abstracted behind an injectable interface and data is modeled with typed
dataclasses.
"""

from .client import Client
from .config import ClientSettings, load_client_settings
from .errors import (
    ErrorCategory,
    HttpError,
    InvalidUrlError,
    RequesterError,
    SerializationError,
    TransportError,
)
from .http import (
    HttpxTransport,
    RawResponse,
    RequestEcho,
    RequestOptions,
    ResolvedRequest,
    ShapedResponse,
    StubTransport,
    Transport,
    shape_request,
    shape_response,
)
from .log import LogLevel, setup_logging
from .version import __version__

__all__ = [
    "Client",
    "ClientSettings",
    "ErrorCategory",
    "HttpError",
    "HttpxTransport",
    "InvalidUrlError",
    "LogLevel",
    "RawResponse",
    "RequestEcho",
    "RequestOptions",
    "RequesterError",
    "ResolvedRequest",
    "SerializationError",
    "ShapedResponse",
    "StubTransport",
    "Transport",
    "TransportError",
    "load_client_settings",
    "setup_logging",
    "shape_request",
    "shape_response",
    "__version__",
]
