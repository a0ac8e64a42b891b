# SPDX-FileCopyrightText: 2025 The requester authors
# SPDX-License-Identifier: AGPL-3.0-or-later

"""Logging helpers for requester."""

from __future__ import annotations

import enum
import logging
import os

DEFAULT_LOG_LEVEL = os.getenv("REQUESTER_LOG_LEVEL", "WARNING").upper()


class LogLevel(str, enum.Enum):
    """Log levels accepted by the ``log_level`` client option."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"

    @classmethod
    def parse(cls, value: LogLevel | str | None) -> LogLevel:
        """Coerce an option value into a LogLevel, defaulting to INFO."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value or "").strip().lower())
        except ValueError:
            return cls.INFO

    @property
    def levelno(self) -> int:
        return getattr(logging, self.name)


def setup_logging(level: str | None = None) -> None:
    """Configure standard logging for application use."""
    effective_level = (level or DEFAULT_LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, effective_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )


__all__ = ["LogLevel", "setup_logging"]
