# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""High-level requester client: option merging and request/response sequencing."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from .config import ClientSettings, load_client_settings
from .errors import HttpError, TransportError
from .http.models import RequestEcho, RequestOptions, ShapedResponse
from .http.request import default_request_headers, shape_request
from .http.response import shape_response
from .http.transport import Transport, create_default_transport
from .log import LogLevel

logger = logging.getLogger(__name__)

OptionsLike = RequestOptions | Mapping[str, Any] | None


def _coerce_options(options: OptionsLike) -> RequestOptions | None:
    if options is None or isinstance(options, RequestOptions):
        return options
    return RequestOptions.from_mapping(options)


class Client:
    """
    Convenience HTTP client wiring option defaults, shaping and one transport.

    Instance defaults are layered as: environment settings, then ``options``,
    then keyword overrides. They are never written after construction, so one
    client can serve concurrent calls.
    """

    def __init__(
        self,
        options: OptionsLike = None,
        *,
        settings: ClientSettings | None = None,
        transport: Transport | None = None,
        **overrides: Any,
    ):
        self.settings = settings or load_client_settings()
        base = RequestOptions(
            timeout=self.settings.timeout,
            should_throw=self.settings.should_throw,
            log_level=self.settings.log_level,
        )
        self.options = base.merge(_coerce_options(options)).merge(_coerce_options(overrides or None))
        self.default_headers = default_request_headers(self.settings.user_agent)
        self._owns_transport = transport is None
        self.transport = transport or create_default_transport()

    def _log(self, threshold: LogLevel, level: int, msg: str, *args: Any) -> None:
        if level >= threshold.levelno:
            logger.log(level, msg, *args)

    def merged_options(self, options: OptionsLike = None, **overrides: Any) -> RequestOptions:
        """Return the effective options for one call without touching the instance defaults."""
        merged = self.options.merge(_coerce_options(options))
        if overrides:
            merged = merged.merge(RequestOptions.from_mapping(overrides))
        return merged.with_defaults()

    async def request(self, url: str, options: OptionsLike = None, **overrides: Any) -> ShapedResponse:
        """
        Perform one HTTP exchange.

        Raises SerializationError before any I/O when the body cannot be encoded,
        TransportError when no response was received and HttpError for statuses
        outside [200, 400) unless ``should_throw`` is disabled.
        """
        effective = self.merged_options(options, **overrides)
        threshold = LogLevel.parse(effective.log_level)
        resolved = shape_request(url, effective, default_headers=self.default_headers)
        self._log(threshold, logging.DEBUG, "Request: %s %s headers=%s", resolved.method, resolved.url, resolved.headers)

        try:
            raw = await self.transport.send(resolved)
        except TransportError as exc:
            self._log(threshold, logging.ERROR, "%s %s failed: %s", resolved.method, resolved.url, exc)
            raise

        response = shape_response(raw, request=RequestEcho(url=resolved.url, options=effective))
        self._log(
            threshold,
            logging.DEBUG,
            "Response: %s %s -> %s (%d bytes)",
            resolved.method,
            resolved.url,
            response.status_code,
            len(response.raw_body),
        )

        if effective.should_throw and not response.ok:
            raise HttpError(response)
        return response

    async def get(self, url: str, options: OptionsLike = None, **overrides: Any) -> ShapedResponse:
        return await self.request(url, options, **{**overrides, "method": "GET"})

    async def post(self, url: str, options: OptionsLike = None, **overrides: Any) -> ShapedResponse:
        return await self.request(url, options, **{**overrides, "method": "POST"})

    async def put(self, url: str, options: OptionsLike = None, **overrides: Any) -> ShapedResponse:
        return await self.request(url, options, **{**overrides, "method": "PUT"})

    async def delete(self, url: str, options: OptionsLike = None, **overrides: Any) -> ShapedResponse:
        return await self.request(url, options, **{**overrides, "method": "DELETE"})

    async def aclose(self) -> None:
        if self._owns_transport:
            await self.transport.aclose()

    async def __aenter__(self) -> Client:
        return self

    async def __aexit__(self, _exc_type, _exc, _tb) -> None:  # noqa: ANN001
        await self.aclose()


__all__ = ["Client"]
