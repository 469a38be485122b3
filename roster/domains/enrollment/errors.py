# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Exceptions for the enrollment engine.

Expected conditions (missing confirmation date, remote failures) are
reported as outcome values, not exceptions. These classes cover caller
mistakes only.
"""


class EnrollmentEngineError(Exception):
    """Base exception for enrollment engine errors."""

    pass


class UnknownEnrollmentError(EnrollmentEngineError):
    """Raised when an enrollment id is not in the cached collection.

    Attributes:
        ids: The ids that could not be found.
    """

    def __init__(self, ids: frozenset[str]) -> None:
        self.ids = ids
        super().__init__(f"Unknown enrollment id(s): {', '.join(sorted(ids))}")


class InvalidStatusError(EnrollmentEngineError, ValueError):
    """Raised when a value is not one of the enrollment statuses."""

    pass
