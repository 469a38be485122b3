# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment status pipeline.

Four pipeline states (requested -> invited -> confirmed -> completed) plus two
secondary exit states (withdrawn, rejected). The pipeline is advisory: any
state may be moved to any other state so operators can correct mistakes.
"""

from enum import Enum

from roster.domains.enrollment.errors import InvalidStatusError


class EnrollmentStatus(str, Enum):
    """Status of an enrollment."""

    REQUESTED = "requested"
    INVITED = "invited"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    WITHDRAWN = "withdrawn"
    REJECTED = "rejected"


PIPELINE_STATUSES: tuple[EnrollmentStatus, ...] = (
    EnrollmentStatus.REQUESTED,
    EnrollmentStatus.INVITED,
    EnrollmentStatus.CONFIRMED,
    EnrollmentStatus.COMPLETED,
)
SECONDARY_STATUSES: tuple[EnrollmentStatus, ...] = (
    EnrollmentStatus.WITHDRAWN,
    EnrollmentStatus.REJECTED,
)
ALL_STATUSES: tuple[EnrollmentStatus, ...] = PIPELINE_STATUSES + SECONDARY_STATUSES

# Statuses describing the student's relationship to the whole course,
# so every variant enrollment must agree on them.
CASCADING_STATUSES = frozenset({EnrollmentStatus.COMPLETED, EnrollmentStatus.WITHDRAWN})


def coerce_status(value: EnrollmentStatus | str) -> EnrollmentStatus:
    """Convert a status value or its string form to EnrollmentStatus.

    Raises:
        InvalidStatusError: If the value is not one of the six statuses.
    """
    try:
        return EnrollmentStatus(value)
    except ValueError as e:
        raise InvalidStatusError(f"Unknown enrollment status: {value!r}") from e


def is_cascading(status: EnrollmentStatus | str) -> bool:
    """Whether moving to this status drags the whole cascade group along."""
    return coerce_status(status) in CASCADING_STATUSES


def requires_confirmed_date(status: EnrollmentStatus | str) -> bool:
    """Whether entering this status needs a caller-supplied confirmation date."""
    return coerce_status(status) is EnrollmentStatus.CONFIRMED


def is_pipeline(status: EnrollmentStatus | str) -> bool:
    return coerce_status(status) in PIPELINE_STATUSES


def can_transition(
    current: EnrollmentStatus | str,
    target: EnrollmentStatus | str,
) -> bool:
    """Check whether a move between two statuses is allowed.

    Every pair is allowed. Kept as a single hook in case a stricter
    workflow is introduced.
    """
    coerce_status(current)
    coerce_status(target)
    return True


def available_transitions(current: EnrollmentStatus | str) -> list[EnrollmentStatus]:
    """List the statuses an operator can move to, in display order."""
    current = coerce_status(current)
    return [
        status
        for status in ALL_STATUSES
        if status is not current and can_transition(current, status)
    ]
