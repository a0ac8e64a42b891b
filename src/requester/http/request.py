# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Request shaping: turn a url plus merged options into a wire-ready ResolvedRequest."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from ..config import DEFAULT_USER_AGENT
from ..errors import SerializationError
from .codecs import ACCEPT_ENCODING, dumps_json
from .headers import merge_headers
from .models import RequestOptions, ResolvedRequest
from .url import resolve_url

JSON_CONTENT_TYPE = "application/json"


def default_request_headers(user_agent: str | None = None) -> dict[str, str]:
    # Only advertise codings the response shaper can undo.
    return {"user-agent": user_agent or DEFAULT_USER_AGENT, "accept-encoding": ACCEPT_ENCODING}


def encode_body(body: Any) -> tuple[bytes | None, dict[str, str]]:
    """
    Encode a request body for the wire.

    Returns the body bytes plus any headers implied by the encoding. Structured
    values become JSON with an exact byte content-length; str and bytes are
    passed through without a content-type.
    """
    if body is None:
        return None, {}
    if isinstance(body, str):
        return body.encode("utf-8"), {}
    if isinstance(body, (bytes, bytearray, memoryview)):
        return bytes(body), {}

    try:
        text = dumps_json(body)
    except (TypeError, ValueError, RecursionError) as exc:
        raise SerializationError(f"Request body is not JSON serializable: {exc}") from exc
    encoded = text.encode("utf-8")
    return encoded, {"content-type": JSON_CONTENT_TYPE, "content-length": str(len(encoded))}


def shape_request(
    url: str,
    options: RequestOptions,
    *,
    default_headers: Mapping[str, str] | None = None,
) -> ResolvedRequest:
    """Build the ResolvedRequest for ``url``; performs no I/O."""
    effective = options.with_defaults()
    resolved_url = resolve_url(url, effective.base_url)
    body, implied_headers = encode_body(effective.body)

    base_headers = default_headers if default_headers is not None else default_request_headers()
    headers = merge_headers(base_headers, effective.headers, implied_headers)

    return ResolvedRequest(
        url=resolved_url,
        method=effective.method,
        headers=headers,
        body=body,
        timeout=effective.timeout,
    )


__all__ = [
    "JSON_CONTENT_TYPE",
    "default_request_headers",
    "encode_body",
    "shape_request",
]
