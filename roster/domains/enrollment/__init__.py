# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Enrollment domain package.

This package provides the enrollment lifecycle engine:
- Status pipeline and per-state rules
- Cascading transitions across variant enrollments
- Bulk transitions over a selection
- Filtered board views and status counts
"""

from roster.domains.enrollment.bulk import BulkOperationCoordinator, Selection
from roster.domains.enrollment.cache import EnrollmentCache
from roster.domains.enrollment.cascade import CascadeIndex, cascade_group, resolve_cascade
from roster.domains.enrollment.errors import (
    EnrollmentEngineError,
    InvalidStatusError,
    UnknownEnrollmentError,
)
from roster.domains.enrollment.executor import TransitionExecutor, build_status_patch
from roster.domains.enrollment.models import CourseSummary, Enrollment, StudentSummary
from roster.domains.enrollment.outcomes import (
    Deleted,
    DeleteFailed,
    FieldsUpdated,
    NeedsConfirmationDate,
    NoOp,
    TransitionApplied,
    TransitionFailed,
    UpdateFailed,
)
from roster.domains.enrollment.service import EnrollmentService
from roster.domains.enrollment.status import (
    ALL_STATUSES,
    PIPELINE_STATUSES,
    SECONDARY_STATUSES,
    EnrollmentStatus,
    available_transitions,
    can_transition,
    is_cascading,
    requires_confirmed_date,
)
from roster.domains.enrollment.views import (
    BoardView,
    FilterCriteria,
    SortOrder,
    build_board,
)

__all__ = [
    # Service
    "EnrollmentService",
    "TransitionExecutor",
    "BulkOperationCoordinator",
    "Selection",
    "EnrollmentCache",
    # Models
    "Enrollment",
    "StudentSummary",
    "CourseSummary",
    # Status
    "EnrollmentStatus",
    "PIPELINE_STATUSES",
    "SECONDARY_STATUSES",
    "ALL_STATUSES",
    "is_cascading",
    "requires_confirmed_date",
    "can_transition",
    "available_transitions",
    # Cascade
    "CascadeIndex",
    "cascade_group",
    "resolve_cascade",
    "build_status_patch",
    # Outcomes
    "TransitionApplied",
    "NeedsConfirmationDate",
    "TransitionFailed",
    "NoOp",
    "Deleted",
    "DeleteFailed",
    "FieldsUpdated",
    "UpdateFailed",
    # Views
    "BoardView",
    "FilterCriteria",
    "SortOrder",
    "build_board",
    # Errors
    "EnrollmentEngineError",
    "UnknownEnrollmentError",
    "InvalidStatusError",
]
