# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Pytest configuration and shared fixtures."""

import logging
from collections.abc import Callable, Iterator
from datetime import datetime, timezone
from itertools import count
from typing import Any
from unittest.mock import AsyncMock

import pytest

from roster.domains.enrollment.models import CourseSummary, Enrollment, StudentSummary
from roster.domains.enrollment.status import EnrollmentStatus
from roster.infrastructure.store.base import EnrollmentStore


# =============================================================================
# Marker Configuration
# =============================================================================


def pytest_configure(config: pytest.Config) -> None:
    """Configure custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")


# =============================================================================
# Domain Fixtures
# =============================================================================


@pytest.fixture
def student_s() -> StudentSummary:
    """Provide the student used by the cascade scenarios."""
    return StudentSummary(
        id="student-s",
        first_name="Siobhan",
        last_name="Murphy",
        email="siobhan@example.ie",
        phone="087 123 4567",
    )


@pytest.fixture
def course_c() -> CourseSummary:
    """Provide the course used by the cascade scenarios."""
    return CourseSummary(id="course-c", name="Beginners")


@pytest.fixture
def make_enrollment() -> Callable[..., Enrollment]:
    """Factory for enrollments with sensible defaults."""
    ids = count(1)

    def factory(**overrides: Any) -> Enrollment:
        n = next(ids)
        values: dict[str, Any] = {
            "id": f"enr-{n}",
            "student_id": f"student-{n}",
            "course_id": "course-c",
            "status": EnrollmentStatus.REQUESTED,
            "created_at": datetime(2026, 3, 1, 12, 0, tzinfo=timezone.utc),
        }
        values.update(overrides)
        return Enrollment(**values)

    return factory


@pytest.fixture
def mock_store() -> AsyncMock:
    """Create mock remote enrollment store."""
    store = AsyncMock(spec=EnrollmentStore)
    store.list_enrollments.return_value = []
    store.update_enrollments.return_value = None
    store.delete_enrollment.return_value = None
    return store


@pytest.fixture
def restore_logging() -> Iterator[None]:
    """Undo setup_logging() changes to the package logger after a test."""
    package_logger = logging.getLogger("roster")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    propagate = package_logger.propagate
    yield
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
    package_logger.propagate = propagate
