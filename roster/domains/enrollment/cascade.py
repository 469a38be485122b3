# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Cascade resolution across variant enrollments.

A cascade group is every enrollment sharing (student_id, course_id),
whatever its variant. Moving one member to "completed" or "withdrawn"
moves the entire group. Other statuses move records independently.

Example:
    >>> ids = resolve_cascade({"a"}, EnrollmentStatus.COMPLETED, enrollments)
    >>> # ids now also holds every variant sibling of "a"
"""

from collections import defaultdict
from collections.abc import Iterable

from roster.domains.enrollment.models import Enrollment
from roster.domains.enrollment.status import EnrollmentStatus, is_cascading


class CascadeIndex:
    """Secondary index from cascade group key to member ids.

    Built in one pass over a collection snapshot. Member order follows
    the collection order.
    """

    def __init__(self, enrollments: Iterable[Enrollment]) -> None:
        self._groups: dict[tuple[str, str], list[str]] = defaultdict(list)
        self._keys: dict[str, tuple[str, str]] = {}
        for enrollment in enrollments:
            self._groups[enrollment.group_key].append(enrollment.id)
            self._keys[enrollment.id] = enrollment.group_key

    def __contains__(self, enrollment_id: object) -> bool:
        return enrollment_id in self._keys

    def group_of(self, enrollment_id: str) -> list[str]:
        """Ids in the same cascade group, the id itself included.

        An id missing from the index forms a group of one.
        """
        key = self._keys.get(enrollment_id)
        if key is None:
            return [enrollment_id]
        return list(self._groups[key])

    def siblings_of(self, enrollment_id: str) -> list[str]:
        return [i for i in self.group_of(enrollment_id) if i != enrollment_id]


def cascade_group(
    enrollment: Enrollment,
    enrollments: Iterable[Enrollment],
) -> list[Enrollment]:
    """All enrollments in the same cascade group as ``enrollment``."""
    return [e for e in enrollments if e.group_key == enrollment.group_key]


def resolve_cascade(
    ids: Iterable[str],
    target_status: EnrollmentStatus | str,
    enrollments: Iterable[Enrollment],
) -> frozenset[str]:
    """Compute the ids that must be written together.

    Args:
        ids: Enrollment ids the caller asked to move.
        target_status: Status being moved to.
        enrollments: Current collection snapshot.

    Returns:
        The input ids for a non-cascading target; otherwise the union of
        the cascade groups of every input id. Overlapping groups are
        counted once.
    """
    requested = frozenset(ids)
    if not is_cascading(target_status):
        return requested

    index = CascadeIndex(enrollments)
    expanded: set[str] = set()
    for enrollment_id in requested:
        expanded.update(index.group_of(enrollment_id))
    return frozenset(expanded)
