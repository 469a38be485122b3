# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Filtered views and status aggregation over the enrollment collection.

Everything here is pure and read-only, recomputed from a collection
snapshot on each call. There is no incremental index: collections in
this domain are small.

Two aggregations are independent:
- group_by_status() partitions the filtered collection into board columns
- count_by_status() counts the unfiltered collection for the summary bar
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, tzinfo
from enum import Enum

from roster.domains.enrollment.models import CourseSummary, Enrollment
from roster.domains.enrollment.status import (
    ALL_STATUSES,
    SECONDARY_STATUSES,
    EnrollmentStatus,
)
from roster.utils.datetime import end_of_day, start_of_day

ALL = "all"


class SortOrder(str, Enum):
    """Ordering inside a status column."""

    DATE_ASC = "date_asc"
    DATE_DESC = "date_desc"
    NAME = "name"


@dataclass(frozen=True)
class FilterCriteria:
    """Active board filters. None (or "all") disables a filter.

    Attributes:
        course_id: Exact course match.
        variant: Case-insensitive variant match.
        query: Free text matched against student name, email and phone.
        date_from: First creation day included.
        date_to: Last creation day included.
    """

    course_id: str | None = None
    variant: str | None = None
    query: str = ""
    date_from: date | None = None
    date_to: date | None = None

    @property
    def is_active(self) -> bool:
        return bool(
            _enabled(self.course_id)
            or _enabled(self.variant)
            or self.query.strip()
            or self.date_from
            or self.date_to
        )


def _enabled(value: str | None) -> bool:
    return value is not None and value != ALL


def _normalize_variant(value: str | None) -> str:
    return (value or "").strip().casefold()


def filter_by_course(enrollments: Iterable[Enrollment], course_id: str | None) -> list[Enrollment]:
    if not _enabled(course_id):
        return list(enrollments)
    return [e for e in enrollments if e.course_id == course_id]


def filter_by_variant(enrollments: Iterable[Enrollment], variant: str | None) -> list[Enrollment]:
    if not _enabled(variant):
        return list(enrollments)
    wanted = _normalize_variant(variant)
    return [e for e in enrollments if _normalize_variant(e.variant) == wanted]


def matches_text(enrollment: Enrollment, query: str) -> bool:
    """Case-insensitive substring match on any one student contact field."""
    needle = query.strip().casefold()
    if not needle:
        return True
    student = enrollment.student
    if student is None:
        return False
    fields = (student.first_name, student.last_name, student.email, student.phone)
    return any(needle in (value or "").casefold() for value in fields)


def filter_by_text(enrollments: Iterable[Enrollment], query: str) -> list[Enrollment]:
    if not query.strip():
        return list(enrollments)
    return [e for e in enrollments if matches_text(e, query)]


def filter_by_date_range(
    enrollments: Iterable[Enrollment],
    date_from: date | None,
    date_to: date | None,
    tz: tzinfo | None = None,
) -> list[Enrollment]:
    """Keep enrollments created within [start of date_from, end of date_to].

    Day boundaries are taken in ``tz`` (local time when None), so a
    same-day range selects that whole day.
    """
    lower = start_of_day(date_from, tz) if date_from else None
    upper = end_of_day(date_to, tz) if date_to else None

    result = []
    for enrollment in enrollments:
        if lower is not None and enrollment.created_at < lower:
            continue
        if upper is not None and enrollment.created_at > upper:
            continue
        result.append(enrollment)
    return result


def apply_filters(
    enrollments: Iterable[Enrollment],
    criteria: FilterCriteria,
    tz: tzinfo | None = None,
) -> list[Enrollment]:
    """Apply every active filter. The filters commute."""
    result = filter_by_course(enrollments, criteria.course_id)
    result = filter_by_variant(result, criteria.variant)
    result = filter_by_text(result, criteria.query)
    if criteria.date_from or criteria.date_to:
        result = filter_by_date_range(result, criteria.date_from, criteria.date_to, tz)
    return result


def _name_key(enrollment: Enrollment) -> str:
    student = enrollment.student
    if student is None:
        return ""
    return f"{student.last_name or ''} {student.first_name or ''}".casefold()


def sort_enrollments(
    enrollments: Iterable[Enrollment],
    order: SortOrder | str = SortOrder.DATE_ASC,
) -> list[Enrollment]:
    """Priority enrollments first, then by creation time or student name."""
    order = SortOrder(order)
    if order is SortOrder.NAME:
        return sorted(enrollments, key=lambda e: (not e.is_priority, _name_key(e)))
    if order is SortOrder.DATE_DESC:
        return sorted(enrollments, key=lambda e: (not e.is_priority, -e.created_at.timestamp()))
    return sorted(enrollments, key=lambda e: (not e.is_priority, e.created_at))


def group_by_status(
    enrollments: Iterable[Enrollment],
    order: SortOrder | str = SortOrder.DATE_ASC,
) -> dict[EnrollmentStatus, list[Enrollment]]:
    """Partition enrollments into one sorted list per status.

    Every status has a key, empty columns included.
    """
    groups: dict[EnrollmentStatus, list[Enrollment]] = {s: [] for s in ALL_STATUSES}
    for enrollment in enrollments:
        groups[enrollment.status].append(enrollment)
    return {status: sort_enrollments(items, order) for status, items in groups.items()}


def count_by_status(enrollments: Iterable[Enrollment]) -> dict[EnrollmentStatus, int]:
    """Count enrollments per status. The counts sum to the collection size."""
    counts = {status: 0 for status in ALL_STATUSES}
    for enrollment in enrollments:
        counts[enrollment.status] += 1
    return counts


def unique_courses(enrollments: Iterable[Enrollment]) -> list[CourseSummary]:
    """Distinct courses present in the collection, sorted by name."""
    seen: dict[str, CourseSummary] = {}
    for enrollment in enrollments:
        course = enrollment.course
        if course is not None and course.name and enrollment.course_id not in seen:
            seen[enrollment.course_id] = course
    return sorted(seen.values(), key=lambda c: c.name.casefold())


def unique_variants(enrollments: Iterable[Enrollment], course_id: str | None) -> list[str]:
    """Distinct variants of one course, de-duplicated case-insensitively.

    Returns an empty list when no specific course is chosen.
    """
    if not _enabled(course_id):
        return []
    seen: dict[str, str] = {}
    for enrollment in enrollments:
        if enrollment.course_id != course_id:
            continue
        variant = (enrollment.variant or "").strip()
        if variant and variant.casefold() not in seen:
            seen[variant.casefold()] = variant.capitalize()
    return sorted(seen.values())


def collect_emails(enrollments: Iterable[Enrollment]) -> str:
    """Unique non-blank student emails, in first-seen order, joined with "; "."""
    emails: dict[str, None] = {}
    for enrollment in enrollments:
        email = enrollment.student.email if enrollment.student else None
        if email and email.strip():
            emails.setdefault(email, None)
    return "; ".join(emails)


def course_label(enrollment: Enrollment) -> str:
    """Course name with the variant in brackets, e.g. "Beginners (Irish)"."""
    name = enrollment.course.name if enrollment.course else "Unknown"
    variant = (enrollment.variant or "").strip()
    return f"{name} ({variant})" if variant else name


@dataclass(frozen=True)
class BoardView:
    """Everything the enrollment board renders.

    Attributes:
        columns: Filtered enrollments per status, sorted.
        counts: Unfiltered counts per status.
        total: Size of the unfiltered collection.
        filtered_total: Size of the filtered collection.
        courses: Course chips.
        variants: Variant chips for the selected course.
    """

    columns: dict[EnrollmentStatus, list[Enrollment]]
    counts: dict[EnrollmentStatus, int]
    total: int
    filtered_total: int
    courses: list[CourseSummary] = field(default_factory=list)
    variants: list[str] = field(default_factory=list)

    @property
    def secondary_count(self) -> int:
        """Filtered enrollments sitting in the withdrawn/rejected columns."""
        return sum(len(self.columns[s]) for s in SECONDARY_STATUSES)


def build_board(
    enrollments: Sequence[Enrollment],
    criteria: FilterCriteria | None = None,
    order: SortOrder | str = SortOrder.DATE_ASC,
    tz: tzinfo | None = None,
) -> BoardView:
    """Compute the full board from a collection snapshot."""
    criteria = criteria or FilterCriteria()
    filtered = apply_filters(enrollments, criteria, tz)
    return BoardView(
        columns=group_by_status(filtered, order),
        counts=count_by_status(enrollments),
        total=len(enrollments),
        filtered_total=len(filtered),
        courses=unique_courses(enrollments),
        variants=unique_variants(enrollments, criteria.course_id),
    )
