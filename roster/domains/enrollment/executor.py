# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Transition executor.

Applies a status transition to a set of enrollments:
1. Suspend if confirmed is requested without a date
2. Expand the ids through the cascade resolver
3. Issue exactly one remote update for the expanded set
4. Merge the patch into the cache only after the remote call succeeded

The remote batched update is the atomicity boundary: either every
expanded record changes (remote and cache agree) or none do.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from roster.domains.enrollment.cache import EnrollmentCache
from roster.domains.enrollment.cascade import resolve_cascade
from roster.domains.enrollment.errors import UnknownEnrollmentError
from roster.domains.enrollment.outcomes import (
    NeedsConfirmationDate,
    NoOp,
    TransitionApplied,
    TransitionFailed,
    TransitionOutcome,
)
from roster.domains.enrollment.status import (
    EnrollmentStatus,
    coerce_status,
    requires_confirmed_date,
)
from roster.infrastructure.store.base import EnrollmentStore, StoreError

logger = logging.getLogger(__name__)


def build_status_patch(
    target_status: EnrollmentStatus,
    confirmed_date: date | None,
    invited_date: date | None = None,
) -> dict[str, Any]:
    """Field values written for a transition.

    Both dates are always derived from the target status, never carried
    over from the stored record, so stale records get corrected. The
    invitation date is optional: inviting without one stores None.
    """
    return {
        "status": target_status,
        "confirmed_date": confirmed_date if requires_confirmed_date(target_status) else None,
        "invited_date": invited_date if target_status is EnrollmentStatus.INVITED else None,
    }


def suggest_confirmation_date(ids: Iterable[str], cache: EnrollmentCache) -> date | None:
    """Invitation date of the first (by id) cached record that has one."""
    for enrollment_id in sorted(ids):
        enrollment = cache.get(enrollment_id)
        if enrollment is not None and enrollment.invited_date is not None:
            return enrollment.invited_date
    return None


class TransitionExecutor:
    """Writes status transitions to the remote store and the cache.

    Attributes:
        store: Remote system of record.
        cache: Locally cached collection.
    """

    def __init__(self, store: EnrollmentStore, cache: EnrollmentCache) -> None:
        self.store = store
        self.cache = cache

    async def transition(
        self,
        ids: str | Iterable[str],
        target_status: EnrollmentStatus | str,
        confirmed_date: date | None = None,
        invited_date: date | None = None,
    ) -> TransitionOutcome:
        """Move enrollments (and their cascade siblings) to a status.

        Args:
            ids: A single enrollment id or several.
            target_status: Status to move to.
            confirmed_date: Required when target_status is confirmed.
            invited_date: Stored when target_status is invited.

        Returns:
            TransitionApplied, NeedsConfirmationDate, TransitionFailed, or
            NoOp for an empty id set.

        Raises:
            UnknownEnrollmentError: If an id is not in the cache.
            InvalidStatusError: If target_status is not a known status.
        """
        if isinstance(ids, str):
            ids = [ids]
        requested = frozenset(ids)
        target = coerce_status(target_status)

        if not requested:
            return NoOp("No enrollments to update")

        if requires_confirmed_date(target) and confirmed_date is None:
            logger.debug("Confirmation date required for %d enrollment(s)", len(requested))
            return NeedsConfirmationDate(
                ids=requested,
                suggested_date=suggest_confirmation_date(requested, self.cache),
            )

        missing = self.cache.missing(requested)
        if missing:
            raise UnknownEnrollmentError(missing)

        expanded = resolve_cascade(requested, target, self.cache.snapshot())
        patch = build_status_patch(target, confirmed_date, invited_date)

        try:
            await self.store.update_enrollments(expanded, patch)
        except StoreError as e:
            logger.warning(
                "Transition to %s failed for %d enrollment(s): %s",
                target.value,
                len(expanded),
                e,
            )
            return TransitionFailed(
                ids=expanded,
                status=target,
                reason=str(e),
                cause=e,
            )

        self.cache.merge(expanded, patch)

        logger.info(
            "Transitioned enrollments: status=%s, requested=%d, updated=%d",
            target.value,
            len(requested),
            len(expanded),
        )

        return TransitionApplied(
            ids=expanded,
            status=target,
            confirmed_date=patch["confirmed_date"],
            invited_date=patch["invited_date"],
        )
