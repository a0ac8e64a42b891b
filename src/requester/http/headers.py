# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Header normalization utilities.

HTTP header field names are case-insensitive (RFC 9110). requester keeps headers as plain
lower-cased dicts so that layered defaults can never produce duplicate content-type or
content-length entries.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any


def _coerce_headers_mapping(headers: Any) -> Mapping[object, object] | None:
    """
    Coerce "dict-like" header containers into a Mapping.

    Accepts plain dicts, httpx.Headers (multi-valued, exposes `.items()`) and
    iterables of pairs such as ``list[tuple[str, str]]``.
    """
    if not headers:
        return None
    if isinstance(headers, Mapping):
        return headers

    items = getattr(headers, "items", None)
    if callable(items):
        return dict(items())

    return dict(headers)


def normalize_headers(headers: Any) -> dict[str, str]:
    """Return a lowercase-keyed copy of a header mapping with string values."""
    coerced = _coerce_headers_mapping(headers)
    if not coerced:
        return {}
    out: dict[str, str] = {}
    for key, value in coerced.items():
        if key is None:
            continue
        name = str(key).strip().lower()
        if not name:
            continue
        out[name] = "" if value is None else str(value)
    return out


def merge_headers(*layers: Any) -> dict[str, str]:
    """Merge header layers left to right; later layers win per (case-insensitive) key."""
    merged: dict[str, str] = {}
    for layer in layers:
        merged.update(normalize_headers(layer))
    return merged


def header_value(headers: Mapping[object, object] | None, name: str, default: str = "") -> str:
    """
    Return a header value using case-insensitive key matching.

    Fast-paths the lower-case key before falling back to a full scan.
    """
    if not headers or not name:
        return default

    lower = str(name).lower()
    value = headers.get(lower)
    if value is not None:
        return str(value).strip()

    for key, value in headers.items():
        if key is None:
            continue
        if str(key).lower() == lower:
            return default if value is None else str(value).strip()

    return default


__all__ = ["header_value", "merge_headers", "normalize_headers"]
