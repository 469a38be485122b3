# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Locally cached enrollment collection.

The cache is a snapshot of the remote store, never the authority. It is
only changed after the remote store has confirmed a write, and callers
only ever receive immutable snapshots of it.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from roster.domains.enrollment.models import Enrollment

logger = logging.getLogger(__name__)


class EnrollmentCache:
    """Ordered mapping from enrollment id to its latest known record.

    Insertion order is the order returned by the remote store.
    """

    def __init__(self, enrollments: Iterable[Enrollment] = ()) -> None:
        self._records: dict[str, Enrollment] = {}
        self.replace(enrollments)

    def __len__(self) -> int:
        return len(self._records)

    def __contains__(self, enrollment_id: object) -> bool:
        return enrollment_id in self._records

    def get(self, enrollment_id: str) -> Enrollment | None:
        return self._records.get(enrollment_id)

    def snapshot(self) -> tuple[Enrollment, ...]:
        """Read-only view of the collection in store order."""
        return tuple(self._records.values())

    def missing(self, ids: Iterable[str]) -> frozenset[str]:
        """Ids from ``ids`` that are not cached."""
        return frozenset(i for i in ids if i not in self._records)

    def replace(self, enrollments: Iterable[Enrollment]) -> None:
        """Swap the whole collection for a freshly fetched one."""
        self._records = {e.id: e for e in enrollments}

    def merge(self, ids: Iterable[str], values: Mapping[str, Any]) -> list[Enrollment]:
        """Apply a confirmed patch to every cached record in ``ids``.

        Args:
            ids: Enrollment ids the remote write covered.
            values: Attribute values to set, keyed by model field name.

        Returns:
            The updated records. Ids no longer cached are skipped.
        """
        updated = []
        for enrollment_id in ids:
            current = self._records.get(enrollment_id)
            if current is None:
                logger.debug("Skipping merge for uncached enrollment %s", enrollment_id)
                continue
            record = current.model_copy(update=dict(values))
            self._records[enrollment_id] = record
            updated.append(record)
        return updated

    def remove(self, enrollment_id: str) -> Enrollment | None:
        return self._records.pop(enrollment_id, None)
