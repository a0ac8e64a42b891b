# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Body codecs: JSON encoding for request bodies and content-encoding decompression for responses."""

from __future__ import annotations

import datetime
import decimal
import json
import logging
import uuid
import zlib
from typing import Any

import brotli

logger = logging.getLogger(__name__)


class RequestJSONEncoder(json.JSONEncoder):
    """JSON encoder adding support for a few common python value types.

    Anything else still raises ``TypeError`` so unsupported bodies fail loudly.
    """

    def default(self, obj) -> Any:
        if isinstance(obj, (datetime.datetime, datetime.date, datetime.time)):
            return obj.isoformat()
        if isinstance(obj, decimal.Decimal):
            return str(obj)
        if isinstance(obj, uuid.UUID):
            return str(obj)
        if isinstance(obj, (set, frozenset)):
            return list(obj)
        return super().default(obj)


def dumps_json(value: Any) -> str:
    """Serialize a structured value to compact JSON text (strict: no NaN/Infinity, no cycles)."""
    return json.dumps(value, cls=RequestJSONEncoder, allow_nan=False, ensure_ascii=False, separators=(",", ":"))


def _gunzip(data: bytes) -> bytes:
    # wbits=16+MAX_WBITS only accepts the gzip container.
    return zlib.decompress(data, zlib.MAX_WBITS | 16)


def _inflate(data: bytes) -> bytes:
    # Servers disagree on whether "deflate" means zlib-wrapped or raw deflate; accept both.
    try:
        return zlib.decompress(data)
    except zlib.error:
        return zlib.decompress(data, -zlib.MAX_WBITS)


def _unbrotli(data: bytes) -> bytes:
    return brotli.decompress(data)


DECODERS = {
    "gzip": _gunzip,
    "x-gzip": _gunzip,
    "deflate": _inflate,
    "br": _unbrotli,
}

ACCEPT_ENCODING = "gzip, deflate, br"


def parse_content_encoding(value: str | None) -> list[str]:
    """Split a content-encoding header into lower-cased codings, in the order they were applied."""
    if not value:
        return []
    return [token.strip().lower() for token in value.split(",") if token.strip()]


def decompress(data: bytes, content_encoding: str | None) -> bytes:
    """
    Undo the codings listed in ``content_encoding``.

    Codings are removed in reverse order of application. Unknown codings and
    ``identity`` pass through unchanged. When a known coding fails to decode
    the bytes are returned exactly as received and a warning is logged.
    """
    if not data:
        return data
    codings = parse_content_encoding(content_encoding)
    if not codings:
        return data

    decoded = data
    for coding in reversed(codings):
        decoder = DECODERS.get(coding)
        if decoder is None:
            if coding != "identity":
                logger.debug("Passing through unsupported content-encoding %r", coding)
            continue
        try:
            decoded = decoder(decoded)
        except (zlib.error, brotli.error) as exc:
            logger.warning("Failed to decode %s response body, keeping raw bytes: %s", coding, exc)
            return data
    return decoded


__all__ = [
    "ACCEPT_ENCODING",
    "DECODERS",
    "RequestJSONEncoder",
    "decompress",
    "dumps_json",
    "parse_content_encoding",
]
