# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Outcome values returned by enrollment operations.

Suspend points and remote failures are expected and frequent, so they are
returned rather than raised. The presentation layer turns these into
messages; nothing here is formatted for display.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Any

from roster.domains.enrollment.status import EnrollmentStatus


@dataclass(frozen=True)
class TransitionApplied:
    """Every expanded record was written remotely and merged locally.

    Attributes:
        ids: Cascade-expanded ids that were updated.
        status: New status.
        confirmed_date: New confirmation date (None unless confirmed).
        invited_date: New invitation date (None unless invited).
    """

    ids: frozenset[str]
    status: EnrollmentStatus
    confirmed_date: date | None = None
    invited_date: date | None = None

    @property
    def count(self) -> int:
        """Number of records updated, after cascade expansion."""
        return len(self.ids)


@dataclass(frozen=True)
class NeedsConfirmationDate:
    """Entering confirmed needs a date from the caller; nothing was written.

    Attributes:
        ids: Ids the caller asked to confirm.
        status: Always confirmed.
        suggested_date: Invitation date of the first requested record that
            has one, for prefilling the date prompt. None means no hint.
    """

    ids: frozenset[str]
    status: EnrollmentStatus = EnrollmentStatus.CONFIRMED
    suggested_date: date | None = None


@dataclass(frozen=True)
class TransitionFailed:
    """The remote write failed; the cache is unchanged."""

    ids: frozenset[str]
    status: EnrollmentStatus
    reason: str
    cause: Exception | None = field(default=None, compare=False)


@dataclass(frozen=True)
class NoOp:
    """Nothing to do (e.g. an empty selection)."""

    reason: str


@dataclass(frozen=True)
class Deleted:
    enrollment_id: str


@dataclass(frozen=True)
class DeleteFailed:
    """The remote delete failed; the cache is unchanged."""

    enrollment_id: str
    reason: str
    cause: Exception | None = field(default=None, compare=False)


@dataclass(frozen=True)
class FieldsUpdated:
    """Non-status fields (notes, priority) were written and merged."""

    enrollment_id: str
    fields: dict[str, Any]


@dataclass(frozen=True)
class UpdateFailed:
    enrollment_id: str
    reason: str
    cause: Exception | None = field(default=None, compare=False)


TransitionOutcome = TransitionApplied | NeedsConfirmationDate | TransitionFailed | NoOp
DeleteOutcome = Deleted | DeleteFailed
UpdateOutcome = FieldsUpdated | UpdateFailed
