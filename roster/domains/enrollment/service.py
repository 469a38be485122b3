# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment service for managing the enrollment board.

This module provides the EnrollmentService class for:
- Loading the enrollment collection from the remote store
- Single and bulk status transitions with variant cascades
- Notes, priority and deletion
- Filtered board views and status counts

The service exclusively owns the cached collection. Every mutation goes to
the remote store first; the cache changes only once the store confirms,
after which a change notification is published on the event bus.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, MutableSet
from datetime import date
from typing import Any

from roster.core.config.settings import BoardSettings, get_settings
from roster.domains.enrollment.bulk import BulkOperationCoordinator
from roster.domains.enrollment.cache import EnrollmentCache
from roster.domains.enrollment.errors import UnknownEnrollmentError
from roster.domains.enrollment.executor import TransitionExecutor
from roster.domains.enrollment.models import Enrollment
from roster.domains.enrollment.outcomes import (
    Deleted,
    DeleteFailed,
    DeleteOutcome,
    FieldsUpdated,
    TransitionApplied,
    TransitionOutcome,
    UpdateFailed,
    UpdateOutcome,
)
from roster.domains.enrollment.status import EnrollmentStatus, coerce_status
from roster.domains.enrollment.views import BoardView, FilterCriteria, SortOrder, build_board
from roster.infrastructure.events import EventBus, EventTypes, get_event_bus
from roster.infrastructure.store.base import EnrollmentStore, StoreError
from roster.utils.datetime import format_date, local_timezone
from roster.utils.logging import log_context

logger = logging.getLogger(__name__)


class EnrollmentService:
    """Service for the enrollment lifecycle.

    Attributes:
        store: Remote system of record.
        cache: Locally cached collection.
        executor: Transition executor.
        bulk: Bulk operation coordinator.
    """

    def __init__(
        self,
        store: EnrollmentStore,
        event_bus: EventBus | None = None,
        board_settings: BoardSettings | None = None,
    ) -> None:
        """Initialize enrollment service.

        Args:
            store: Remote enrollment store.
            event_bus: Bus for change notifications (singleton if None).
            board_settings: Board defaults (from application settings if None).
        """
        self.store = store
        self.cache = EnrollmentCache()
        self.executor = TransitionExecutor(store, self.cache)
        self.bulk = BulkOperationCoordinator(self.executor, self.cache)
        self._event_bus = event_bus or get_event_bus()
        self._board_settings = board_settings or get_settings().board

    @property
    def enrollments(self) -> tuple[Enrollment, ...]:
        """Read-only snapshot of the cached collection."""
        return self.cache.snapshot()

    def get(self, enrollment_id: str) -> Enrollment | None:
        return self.cache.get(enrollment_id)

    async def refresh(self) -> tuple[Enrollment, ...]:
        """Reload the whole collection from the remote store.

        Returns:
            The new snapshot.

        Raises:
            StoreError: If the fetch fails. The cache is left as it was.
        """
        enrollments = await self.store.list_enrollments()
        self.cache.replace(enrollments)

        logger.info("Loaded %d enrollments", len(self.cache))
        await self._event_bus.publish(EventTypes.Enrollment.LOADED, {"count": len(self.cache)})
        return self.cache.snapshot()

    async def transition(
        self,
        ids: str | Iterable[str],
        status: EnrollmentStatus | str,
        confirmed_date: date | None = None,
        invited_date: date | None = None,
    ) -> TransitionOutcome:
        """Move one or more enrollments to a status.

        Args:
            ids: A single enrollment id or several.
            status: Target status.
            confirmed_date: Required when status is confirmed.
            invited_date: Optional invitation date, stored when status is
                invited and cleared otherwise.

        Returns:
            Transition outcome.

        Raises:
            UnknownEnrollmentError: If an id is not cached.
        """
        with log_context(operation="transition", target_status=coerce_status(status).value):
            outcome = await self.executor.transition(ids, status, confirmed_date, invited_date)
        await self._publish_transition(outcome)
        return outcome

    async def bulk_transition(
        self,
        selection: MutableSet[str],
        status: EnrollmentStatus | str,
        confirmed_date: date | None = None,
        invited_date: date | None = None,
    ) -> TransitionOutcome:
        """Move every selected enrollment to a status.

        The selection is cleared on success. Report the outcome's count to
        the operator: it includes cascade siblings that were not selected.
        """
        with log_context(operation="bulk_transition", target_status=coerce_status(status).value):
            outcome = await self.bulk.bulk_transition(
                selection, status, confirmed_date, invited_date
            )
        await self._publish_transition(outcome)
        return outcome

    async def delete_enrollment(
        self,
        enrollment_id: str,
        selection: MutableSet[str] | None = None,
    ) -> DeleteOutcome:
        """Permanently delete one enrollment.

        Deletion is independent of the status pipeline and never cascades.

        Args:
            enrollment_id: Enrollment to delete.
            selection: Optional caller selection to drop the id from.

        Returns:
            Deleted or DeleteFailed.

        Raises:
            UnknownEnrollmentError: If the id is not cached.
        """
        self._require(enrollment_id)

        with log_context(operation="delete", enrollment_id=enrollment_id):
            try:
                await self.store.delete_enrollment(enrollment_id)
            except StoreError as e:
                logger.warning("Delete failed for enrollment %s: %s", enrollment_id, e)
                return DeleteFailed(enrollment_id=enrollment_id, reason=str(e), cause=e)

        self.cache.remove(enrollment_id)
        if selection is not None:
            selection.discard(enrollment_id)

        logger.info("Deleted enrollment: %s", enrollment_id)
        await self._event_bus.publish(EventTypes.Enrollment.DELETED, {"id": enrollment_id})
        return Deleted(enrollment_id=enrollment_id)

    async def update_notes(self, enrollment_id: str, notes: str | None) -> UpdateOutcome:
        """Replace the free-text notes of one enrollment."""
        return await self._update_fields(enrollment_id, {"notes": notes})

    async def set_priority(self, enrollment_id: str, is_priority: bool) -> UpdateOutcome:
        """Set or clear the priority flag of one enrollment."""
        return await self._update_fields(enrollment_id, {"is_priority": is_priority})

    async def toggle_priority(self, enrollment_id: str) -> UpdateOutcome:
        current = self._require(enrollment_id)
        return await self.set_priority(enrollment_id, not current.is_priority)

    def board(
        self,
        criteria: FilterCriteria | None = None,
        order: SortOrder | str | None = None,
    ) -> BoardView:
        """Build the board view from the current snapshot."""
        return build_board(
            self.cache.snapshot(),
            criteria,
            order or self._board_settings.default_sort,
            local_timezone(self._board_settings.timezone),
        )

    def _require(self, enrollment_id: str) -> Enrollment:
        enrollment = self.cache.get(enrollment_id)
        if enrollment is None:
            raise UnknownEnrollmentError(frozenset({enrollment_id}))
        return enrollment

    async def _update_fields(self, enrollment_id: str, values: dict[str, Any]) -> UpdateOutcome:
        self._require(enrollment_id)

        with log_context(operation="update_fields", enrollment_id=enrollment_id):
            try:
                await self.store.update_enrollments(frozenset({enrollment_id}), values)
            except StoreError as e:
                logger.warning("Update failed for enrollment %s: %s", enrollment_id, e)
                return UpdateFailed(enrollment_id=enrollment_id, reason=str(e), cause=e)

        self.cache.merge([enrollment_id], values)
        await self._event_bus.publish(
            EventTypes.Enrollment.UPDATED,
            {"id": enrollment_id, "fields": sorted(values)},
        )
        return FieldsUpdated(enrollment_id=enrollment_id, fields=values)

    async def _publish_transition(self, outcome: TransitionOutcome) -> None:
        if not isinstance(outcome, TransitionApplied):
            return
        await self._event_bus.publish(
            EventTypes.Enrollment.STATUS_CHANGED,
            {
                "ids": sorted(outcome.ids),
                "status": outcome.status.value,
                "confirmed_date": format_date(outcome.confirmed_date),
                "invited_date": format_date(outcome.invited_date),
            },
        )
