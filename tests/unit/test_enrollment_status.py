# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for the enrollment status pipeline."""

import pytest

from roster.domains.enrollment.errors import InvalidStatusError
from roster.domains.enrollment.status import (
    ALL_STATUSES,
    PIPELINE_STATUSES,
    SECONDARY_STATUSES,
    EnrollmentStatus,
    available_transitions,
    can_transition,
    coerce_status,
    is_cascading,
    is_pipeline,
    requires_confirmed_date,
)


class TestStatusSets:
    """Tests for the closed status set."""

    def test_six_mutually_exclusive_statuses(self) -> None:
        """Test pipeline and secondary statuses partition the set."""
        assert len(ALL_STATUSES) == 6
        assert set(PIPELINE_STATUSES).isdisjoint(SECONDARY_STATUSES)
        assert set(ALL_STATUSES) == set(EnrollmentStatus)

    def test_pipeline_order(self) -> None:
        """Test pipeline statuses are in progression order."""
        assert [s.value for s in PIPELINE_STATUSES] == [
            "requested",
            "invited",
            "confirmed",
            "completed",
        ]

    def test_is_pipeline(self) -> None:
        """Test pipeline membership."""
        assert is_pipeline("invited")
        assert not is_pipeline(EnrollmentStatus.REJECTED)


class TestStatusRules:
    """Tests for per-status rules."""

    @pytest.mark.parametrize("status", list(EnrollmentStatus))
    def test_is_cascading_only_completed_and_withdrawn(self, status: EnrollmentStatus) -> None:
        """Test only completed and withdrawn cascade."""
        expected = status in (EnrollmentStatus.COMPLETED, EnrollmentStatus.WITHDRAWN)
        assert is_cascading(status) is expected

    @pytest.mark.parametrize("status", list(EnrollmentStatus))
    def test_requires_confirmed_date_only_confirmed(self, status: EnrollmentStatus) -> None:
        """Test only confirmed needs a confirmation date."""
        assert requires_confirmed_date(status) is (status is EnrollmentStatus.CONFIRMED)

    def test_accepts_string_values(self) -> None:
        """Test rules accept plain status strings."""
        assert is_cascading("withdrawn")
        assert requires_confirmed_date("confirmed")

    def test_unknown_status_raises(self) -> None:
        """Test values outside the closed set are rejected."""
        with pytest.raises(InvalidStatusError):
            coerce_status("archived")

    def test_invalid_status_is_value_error(self) -> None:
        """Test InvalidStatusError can be caught as ValueError."""
        with pytest.raises(ValueError):
            is_cascading("pending")


class TestTransitions:
    """Tests for transition availability."""

    def test_any_state_reachable_from_any_state(self) -> None:
        """Test no transition pair is forbidden."""
        for current in EnrollmentStatus:
            for target in EnrollmentStatus:
                assert can_transition(current, target)

    def test_available_transitions_excludes_current(self) -> None:
        """Test the menu offers every status except the current one."""
        options = available_transitions(EnrollmentStatus.INVITED)

        assert EnrollmentStatus.INVITED not in options
        assert len(options) == 5
        assert options[0] is EnrollmentStatus.REQUESTED
        assert options[-1] is EnrollmentStatus.REJECTED
