# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Centralized event type definitions for Roster.

Using constants instead of string literals keeps publishers and
subscribers agreeing on names.
"""


class EventTypes:
    """All event types in Roster organized by domain."""

    class Enrollment:
        """Enrollment collection events.

        Payloads:
            LOADED: {"count"}
            STATUS_CHANGED: {"ids", "status", "confirmed_date"}
            UPDATED: {"id", "fields"}
            DELETED: {"id"}
        """

        LOADED = "enrollment.loaded"
        STATUS_CHANGED = "enrollment.status.changed"
        UPDATED = "enrollment.updated"
        DELETED = "enrollment.deleted"


class EventPatterns:
    """Wildcard patterns for subscribing to multiple events."""

    ALL_ENROLLMENT = "enrollment.*"
    ALL = "*"
