# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Transport protocol and the httpx-backed implementation."""

from __future__ import annotations

import logging
from typing import Protocol

import anyio
import httpx

from ..errors import ErrorCategory, TransportError, categorize_exception, error_category_to_reason
from .models import RawResponse, ResolvedRequest

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Minimal protocol for performing one HTTP exchange."""

    async def send(self, request: ResolvedRequest) -> RawResponse: ...

    async def aclose(self) -> None:  # pragma: no cover - optional for adapters
        ...


class HttpxTransport(Transport):
    """
    Asynchronous httpx transport.

    Redirects are never followed and the body is read with ``aiter_raw`` so the
    bytes reach the response shaper still content-encoded.
    """

    def __init__(self, client: httpx.AsyncClient | None = None):
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(follow_redirects=False)

    async def send(self, request: ResolvedRequest) -> RawResponse:
        try:
            # httpx timeouts apply per phase; the deadline bounds the whole exchange.
            with anyio.fail_after(request.timeout):
                async with self._client.stream(
                    request.method,
                    request.url,
                    headers=request.headers,
                    content=request.body,
                    timeout=request.timeout,
                    follow_redirects=False,
                ) as resp:
                    chunks: list[bytes] = []
                    async for chunk in resp.aiter_raw():
                        if chunk:
                            chunks.append(chunk)

                    return RawResponse(
                        status_code=resp.status_code,
                        headers=dict(resp.headers),
                        body=b"".join(chunks),
                        reason=resp.reason_phrase or None,
                        url=str(resp.url),
                    )
        except TimeoutError as exc:
            logger.debug("%s %s exceeded the %ss deadline", request.method, request.url, request.timeout)
            message = f"Request timed out after {request.timeout}s"
            raise TransportError(message, url=request.url, category=categorize_exception(exc)) from exc
        except httpx.TransportError as exc:
            category = categorize_exception(exc)
            logger.debug("%s %s failed: %s (%s)", request.method, request.url, exc, category.value)
            message = str(exc) or error_category_to_reason(category)
            raise TransportError(message, url=request.url, category=category) from exc

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class StubTransport(Transport):
    """Deterministic, programmable transport for tests and offline use."""

    def __init__(self, responses: dict[str, RawResponse] | None = None):
        self._responses = responses or {}
        self.requests: list[ResolvedRequest] = []

    def add(self, url: str, response: RawResponse) -> None:
        self._responses[url] = response

    async def send(self, request: ResolvedRequest) -> RawResponse:
        self.requests.append(request)
        if request.url in self._responses:
            return self._responses[request.url]
        raise TransportError("No stubbed response configured", url=request.url, category=ErrorCategory.CONNECTION_ERROR)

    async def aclose(self) -> None:
        return None


def create_default_transport(client: httpx.AsyncClient | None = None) -> Transport:
    """Factory for the default httpx-backed transport."""
    return HttpxTransport(client)


__all__ = ["HttpxTransport", "StubTransport", "Transport", "create_default_transport"]
