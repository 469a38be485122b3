# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Utility functions and helpers for Roster.

This package contains cross-cutting utilities:
- logging: Structured logging with structlog
- datetime: Timezone-aware datetime and day-boundary operations
"""

from roster.utils.datetime import (
    end_of_day,
    ensure_utc,
    format_date,
    local_timezone,
    start_of_day,
)
from roster.utils.logging import log_context, setup_logging

__all__ = [
    # Logging
    "setup_logging",
    "log_context",
    # Datetime
    "ensure_utc",
    "local_timezone",
    "start_of_day",
    "end_of_day",
    "format_date",
]
