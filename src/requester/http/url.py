# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""URL helpers for request shaping."""

from __future__ import annotations

from urllib.parse import urljoin, urlparse

from ..errors import InvalidUrlError

SUPPORTED_SCHEMES = ("http", "https")


def is_absolute_url(url: str) -> bool:
    """Return True when the URL carries an http(s) scheme and a host."""
    parsed = urlparse(str(url or ""))
    return parsed.scheme.lower() in SUPPORTED_SCHEMES and bool(parsed.netloc)


def resolve_url(url: str, base_url: str | None = None) -> str:
    """
    Resolve ``url`` against ``base_url`` using standard relative-reference rules.

    Example:
      resolve_url("/users", "http://host/api/") -> http://host/users
      resolve_url("users", "http://host/api/")  -> http://host/api/users

    Without a base the URL must already be absolute.
    """
    target = str(url or "")
    if base_url:
        if not is_absolute_url(base_url):
            raise InvalidUrlError(f"Base URL must be absolute: {base_url!r}")
        resolved = urljoin(base_url, target)
    else:
        resolved = target
    if not is_absolute_url(resolved):
        raise InvalidUrlError(f"Request URL must be absolute when no base URL is configured: {target!r}")
    return resolved


__all__ = ["SUPPORTED_SCHEMES", "is_absolute_url", "resolve_url"]
