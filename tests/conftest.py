# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

import httpx
import pytest

from requester.client import Client
from requester.config import ClientSettings
from requester.http.transport import HttpxTransport


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def mock_client():
    """Factory building a Client whose httpx transport is served by ``handler``."""

    def factory(handler, **options) -> Client:
        transport = HttpxTransport(httpx.AsyncClient(transport=httpx.MockTransport(handler)))
        return Client(settings=ClientSettings(), transport=transport, **options)

    return factory
