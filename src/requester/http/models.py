# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""HTTP request/response data models used across requester."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from types import MappingProxyType
from typing import Any

from ..config import DEFAULT_LOG_LEVEL, DEFAULT_TIMEOUT
from .headers import merge_headers, normalize_headers

Headers = dict[str, str]

DEFAULT_METHOD = "GET"


@dataclass
class RequestOptions:
    """
    Per-client and per-call request options.

    Every field defaults to None meaning "unset" so that option layers merge by
    field; ``with_defaults()`` fills the documented defaults (GET, 60s timeout,
    should_throw=True, log_level="info").
    """

    method: str | None = None
    headers: Headers | None = None
    body: Any = None
    base_url: str | None = None
    timeout: float | None = None
    should_throw: bool | None = None
    log_level: str | None = None

    def __post_init__(self) -> None:
        if self.headers is not None:
            self.headers = normalize_headers(self.headers)
        if self.method is not None:
            self.method = str(self.method).upper()

    def merge(self, other: RequestOptions | None) -> RequestOptions:
        """Return a new options object with ``other``'s set fields layered on top; headers merge key-wise."""
        if other is None:
            return replace(self, headers=dict(self.headers) if self.headers is not None else None)
        updates: dict[str, Any] = {}
        for item in fields(self):
            value = getattr(other, item.name)
            if value is not None:
                updates[item.name] = value
        if self.headers is not None or other.headers is not None:
            updates["headers"] = merge_headers(self.headers, other.headers)
        return replace(self, **updates)

    def with_defaults(self) -> RequestOptions:
        """Return a copy where every unset field carries its documented default."""
        return replace(
            self,
            method=self.method or DEFAULT_METHOD,
            headers=dict(self.headers or {}),
            timeout=self.timeout if self.timeout is not None else DEFAULT_TIMEOUT,
            should_throw=True if self.should_throw is None else self.should_throw,
            log_level=self.log_level or DEFAULT_LOG_LEVEL,
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> RequestOptions:
        """Build options from keyword-style overrides; camelCase aliases are accepted."""
        aliases = {"baseUrl": "base_url", "shouldThrow": "should_throw", "logLevel": "log_level"}
        known = {item.name for item in fields(cls)}
        kwargs: dict[str, Any] = {}
        for key, value in data.items():
            name = aliases.get(key, key)
            if name not in known:
                raise TypeError(f"Unknown request option: {key!r}")
            kwargs[name] = value
        return cls(**kwargs)


@dataclass(frozen=True)
class ResolvedRequest:
    """Wire-ready request produced by the request shaper; handed to the transport unchanged."""

    url: str
    method: str = DEFAULT_METHOD
    headers: Headers = field(default_factory=dict)
    body: bytes | None = None
    timeout: float = DEFAULT_TIMEOUT


@dataclass(frozen=True)
class RawResponse:
    """A completed exchange as accumulated by the transport: status, headers and encoded body bytes."""

    status_code: int
    headers: Headers = field(default_factory=dict)
    body: bytes = b""
    reason: str | None = None
    url: str | None = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "headers", normalize_headers(self.headers))


@dataclass(frozen=True)
class RequestEcho:
    """The originating url and effective options, attached to every shaped response for diagnostics."""

    url: str
    options: RequestOptions

    def __post_init__(self) -> None:
        # Private copy of the options with read-only headers.
        snapshot = replace(self.options)
        snapshot.headers = MappingProxyType(dict(self.options.headers or {}))
        object.__setattr__(self, "options", snapshot)


@dataclass(frozen=True)
class ShapedResponse:
    """Caller-ready response with the status classification and the decoded body."""

    status_code: int
    ok: bool
    headers: Headers = field(default_factory=dict)
    raw_body: bytes = b""
    body: Any = None
    reason: str | None = None
    request: RequestEcho | None = None

    @property
    def text(self) -> str:
        """Return the (decompressed) body decoded as UTF-8 for quick inspection."""
        return self.raw_body.decode("utf-8", errors="replace")

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")


__all__ = [
    "DEFAULT_METHOD",
    "Headers",
    "RawResponse",
    "RequestEcho",
    "RequestOptions",
    "ResolvedRequest",
    "ShapedResponse",
]
