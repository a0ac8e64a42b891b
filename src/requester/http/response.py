# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Response shaping: turn an accumulated RawResponse into a ShapedResponse.

This is a pure function of its input. Nothing here raises on bad payloads:
undecodable compression and malformed JSON degrade to the unparsed value and
are reported through the module logger.
"""

from __future__ import annotations

import json
import logging
from email.message import Message
from typing import Any
from urllib.parse import parse_qsl

from .codecs import decompress
from .headers import header_value
from .models import RawResponse, RequestEcho, ShapedResponse

logger = logging.getLogger(__name__)

JSON_MARKER = "application/json"
FORM_MARKER = "application/x-www-form-urlencoded"
TEXT_MARKER = "text/"
DEFAULT_CHARSET = "utf-8"


def is_ok_status(status_code: int) -> bool:
    """Success classification: 2xx and 3xx."""
    return 200 <= status_code < 400


def is_text_content_type(content_type: str) -> bool:
    """Text when absent or one of text/*, JSON or form-urlencoded; everything else stays bytes."""
    lowered = (content_type or "").lower()
    if not lowered:
        return True
    return TEXT_MARKER in lowered or JSON_MARKER in lowered or FORM_MARKER in lowered


def content_type_charset(content_type: str, default: str = DEFAULT_CHARSET) -> str:
    if not content_type:
        return default
    message = Message()
    message["content-type"] = content_type
    return message.get_content_charset() or default


def decode_text(data: bytes, content_type: str) -> str:
    charset = content_type_charset(content_type)
    try:
        return data.decode(charset, errors="replace")
    except LookupError:
        return data.decode(DEFAULT_CHARSET, errors="replace")


def parse_json_body(text: str) -> Any:
    """Parse JSON leniently: on failure log a diagnostic and return the text unchanged."""
    try:
        return json.loads(text)
    except (ValueError, RecursionError) as exc:
        logger.warning("Failed to parse JSON response body: %s", exc)
        return text


def parse_form_body(text: str) -> dict[str, str]:
    """Decode an application/x-www-form-urlencoded body into a flat mapping (last duplicate wins)."""
    return dict(parse_qsl(text, keep_blank_values=True))


def parse_body(data: bytes, content_type: str) -> Any:
    """Interpret decompressed body bytes according to the response content type."""
    if not data:
        return None
    if not is_text_content_type(content_type):
        return data

    text = decode_text(data, content_type)
    lowered = (content_type or "").lower()
    if JSON_MARKER in lowered:
        return parse_json_body(text)
    if FORM_MARKER in lowered:
        return parse_form_body(text)
    return text


def shape_response(raw: RawResponse, *, request: RequestEcho | None = None) -> ShapedResponse:
    """Build the caller-facing ShapedResponse for a fully accumulated exchange."""
    headers = dict(raw.headers)
    content_type = header_value(headers, "content-type")
    body_bytes = decompress(raw.body, header_value(headers, "content-encoding"))

    return ShapedResponse(
        status_code=raw.status_code,
        ok=is_ok_status(raw.status_code),
        headers=headers,
        raw_body=body_bytes,
        body=parse_body(body_bytes, content_type),
        reason=raw.reason,
        request=request,
    )


__all__ = [
    "decode_text",
    "is_ok_status",
    "is_text_content_type",
    "parse_body",
    "parse_form_body",
    "parse_json_body",
    "shape_response",
]
