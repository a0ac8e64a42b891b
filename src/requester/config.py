# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Configuration helpers for requester."""

import os
from dataclasses import dataclass

from .version import __version__

DEFAULT_USER_AGENT = f"requester/{__version__} (+https://github.com/ianwalter/requester)"
DEFAULT_TIMEOUT = 60.0
DEFAULT_LOG_LEVEL = "info"


def _float_env(name: str, default: float) -> float:
    try:
        value = os.getenv(name)
        return float(value) if value is not None else default
    except ValueError:
        return default


def _bool_env(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    return value.strip()


@dataclass
class ClientSettings:
    """Client defaults applied underneath per-instance and per-call options."""

    timeout: float = DEFAULT_TIMEOUT
    user_agent: str = DEFAULT_USER_AGENT
    should_throw: bool = True
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Create settings from environment variables (evaluated at call time)."""
        timeout = _float_env("REQUESTER_HTTP_TIMEOUT", cls.timeout)
        if timeout <= 0:
            timeout = cls.timeout
        return cls(
            timeout=timeout,
            user_agent=_str_env("REQUESTER_USER_AGENT", cls.user_agent),
            should_throw=_bool_env("REQUESTER_SHOULD_THROW", cls.should_throw),
            log_level=_str_env("REQUESTER_LOG_LEVEL", cls.log_level).lower(),
        )


def load_client_settings() -> ClientSettings:
    """Load client settings from environment with sensible defaults."""
    return ClientSettings.from_env()
