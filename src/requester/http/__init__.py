# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request/response shaping and transport exports."""

from .codecs import decompress, dumps_json
from .headers import header_value, merge_headers, normalize_headers
from .models import (
    Headers,
    RawResponse,
    RequestEcho,
    RequestOptions,
    ResolvedRequest,
    ShapedResponse,
)
from .request import default_request_headers, encode_body, shape_request
from .response import is_ok_status, parse_body, shape_response
from .transport import HttpxTransport, StubTransport, Transport, create_default_transport
from .url import resolve_url

__all__ = [
    "Headers",
    "HttpxTransport",
    "RawResponse",
    "RequestEcho",
    "RequestOptions",
    "ResolvedRequest",
    "ShapedResponse",
    "StubTransport",
    "Transport",
    "create_default_transport",
    "decompress",
    "default_request_headers",
    "dumps_json",
    "encode_body",
    "header_value",
    "is_ok_status",
    "merge_headers",
    "normalize_headers",
    "parse_body",
    "resolve_url",
    "shape_request",
    "shape_response",
]
