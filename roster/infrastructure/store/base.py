# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Abstract base class for the remote enrollment store.

The remote store is the system of record. The engine relies on three
operations only: fetch the collection, update a set of records in one
atomic call, and delete a single record.
"""

from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from roster.domains.enrollment.models import Enrollment


class StoreError(Exception):
    """Raised when the remote store rejects or cannot complete a call.

    Attributes:
        message: Error description.
        status_code: HTTP status code, if the failure came from a response.
        details: Additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class StoreUnavailableError(StoreError):
    """Raised when the remote store cannot be reached."""

    pass


class EnrollmentStore(ABC):
    """Remote CRUD boundary for enrollments."""

    @abstractmethod
    async def list_enrollments(self) -> list["Enrollment"]:
        """Fetch the full collection with embedded student/course summaries.

        Raises:
            StoreError: If the fetch fails.
        """

    @abstractmethod
    async def update_enrollments(
        self,
        ids: frozenset[str],
        values: Mapping[str, Any],
    ) -> None:
        """Set ``values`` on every record in ``ids`` in one atomic call.

        Args:
            ids: Enrollment ids to update.
            values: New values keyed by Enrollment field name.

        Raises:
            StoreError: If the update fails. No record is changed.
        """

    @abstractmethod
    async def delete_enrollment(self, enrollment_id: str) -> None:
        """Delete one enrollment.

        Raises:
            StoreError: If the delete fails.
        """
