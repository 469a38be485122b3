# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Bulk status transitions over an operator's selection.

The selection belongs to the caller's session. The coordinator only
reads it, and clears it after a successful bulk transition since the
records it pointed at have changed.

The effective update count can exceed the selection size: siblings of a
selected enrollment are added when the target status cascades. Callers
should report TransitionApplied.count, not len(selection).
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, MutableSet
from datetime import date

from roster.domains.enrollment.cache import EnrollmentCache
from roster.domains.enrollment.cascade import resolve_cascade
from roster.domains.enrollment.executor import TransitionExecutor, suggest_confirmation_date
from roster.domains.enrollment.outcomes import (
    NeedsConfirmationDate,
    NoOp,
    TransitionApplied,
    TransitionOutcome,
)
from roster.domains.enrollment.status import (
    EnrollmentStatus,
    coerce_status,
    requires_confirmed_date,
)

logger = logging.getLogger(__name__)


class Selection(MutableSet[str]):
    """Set of enrollment ids checked for a bulk operation."""

    def __init__(self, ids: Iterable[str] = ()) -> None:
        self._ids: set[str] = set(ids)

    def __contains__(self, enrollment_id: object) -> bool:
        return enrollment_id in self._ids

    def __iter__(self) -> Iterator[str]:
        return iter(self._ids)

    def __len__(self) -> int:
        return len(self._ids)

    def __repr__(self) -> str:
        return f"Selection({sorted(self._ids)!r})"

    def add(self, enrollment_id: str) -> None:
        self._ids.add(enrollment_id)

    def discard(self, enrollment_id: str) -> None:
        self._ids.discard(enrollment_id)

    def clear(self) -> None:
        self._ids.clear()

    def toggle(self, enrollment_id: str) -> bool:
        """Flip one id in or out. Returns True if it is now selected."""
        if enrollment_id in self._ids:
            self._ids.discard(enrollment_id)
            return False
        self._ids.add(enrollment_id)
        return True

    def toggle_all(self, ids: Iterable[str]) -> None:
        """Select every id, or deselect them all if all are already selected.

        Used for "select column" checkboxes.
        """
        ids = list(ids)
        if ids and all(i in self._ids for i in ids):
            self._ids.difference_update(ids)
        else:
            self._ids.update(ids)


class BulkOperationCoordinator:
    """Expands a selection through the cascade and issues one transition."""

    def __init__(self, executor: TransitionExecutor, cache: EnrollmentCache) -> None:
        self.executor = executor
        self.cache = cache

    def expand(
        self,
        selection: Iterable[str],
        target_status: EnrollmentStatus | str,
    ) -> frozenset[str]:
        """Selected ids plus any unselected cascade siblings."""
        return resolve_cascade(selection, target_status, self.cache.snapshot())

    async def bulk_transition(
        self,
        selection: MutableSet[str],
        target_status: EnrollmentStatus | str,
        confirmed_date: date | None = None,
        invited_date: date | None = None,
    ) -> TransitionOutcome:
        """Move every selected enrollment (plus cascade siblings) to a status.

        Ids that are no longer cached (deleted or gone after a refresh) are
        dropped from the selection first.

        Args:
            selection: Caller-owned selection. Cleared on success.
            target_status: Status to move to.
            confirmed_date: Required when target_status is confirmed.
            invited_date: Stored when target_status is invited.

        Returns:
            Outcome of the single delegated transition, NoOp for an empty
            selection, or NeedsConfirmationDate before anything is touched.
        """
        target = coerce_status(target_status)

        stale = self.cache.missing(selection)
        if stale:
            logger.info("Dropping %d stale id(s) from selection", len(stale))
            for enrollment_id in stale:
                selection.discard(enrollment_id)

        selected = frozenset(selection)

        if not selected:
            return NoOp("No enrollments selected")

        if requires_confirmed_date(target) and confirmed_date is None:
            return NeedsConfirmationDate(
                ids=selected,
                suggested_date=suggest_confirmation_date(selected, self.cache),
            )

        expanded = self.expand(selected, target)
        if len(expanded) > len(selected):
            logger.debug(
                "Bulk %s expanded %d selected to %d enrollments",
                target.value,
                len(selected),
                len(expanded),
            )

        outcome = await self.executor.transition(
            expanded, target, confirmed_date, invited_date
        )

        if isinstance(outcome, TransitionApplied):
            selection.clear()
            logger.info(
                "Bulk transition: status=%s, selected=%d, updated=%d",
                target.value,
                len(selected),
                outcome.count,
            )

        return outcome
