# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Unit tests for bulk transitions and selections."""

from datetime import date

import pytest

from roster.domains.enrollment.bulk import BulkOperationCoordinator, Selection
from roster.domains.enrollment.cache import EnrollmentCache
from roster.domains.enrollment.executor import TransitionExecutor
from roster.domains.enrollment.outcomes import (
    NeedsConfirmationDate,
    NoOp,
    TransitionApplied,
    TransitionFailed,
)
from roster.domains.enrollment.status import EnrollmentStatus
from roster.infrastructure.store.base import StoreUnavailableError


@pytest.fixture
def cache(make_enrollment):
    """Two cascade groups: (S, C) = a1, a2, a3 and (T, C) = b1, b2."""
    return EnrollmentCache(
        [
            make_enrollment(id="a1", student_id="S", course_id="C", variant="English"),
            make_enrollment(id="a2", student_id="S", course_id="C", variant="Irish"),
            make_enrollment(id="a3", student_id="S", course_id="C", variant="French"),
            make_enrollment(id="b1", student_id="T", course_id="C"),
            make_enrollment(id="b2", student_id="T", course_id="C", variant="Irish"),
        ]
    )


@pytest.fixture
def coordinator(mock_store, cache):
    """Create coordinator backed by a mock store."""
    executor = TransitionExecutor(store=mock_store, cache=cache)
    return BulkOperationCoordinator(executor=executor, cache=cache)


class TestSelection:
    """Tests for the caller-owned selection."""

    def test_toggle(self) -> None:
        """Test toggling an id in and out."""
        selection = Selection()

        assert selection.toggle("a") is True
        assert "a" in selection
        assert selection.toggle("a") is False
        assert len(selection) == 0

    def test_toggle_all_selects_then_deselects(self) -> None:
        """Test column select-all flips between all and none."""
        selection = Selection({"x"})

        selection.toggle_all(["a", "b"])
        assert set(selection) == {"x", "a", "b"}

        selection.toggle_all(["a", "b"])
        assert set(selection) == {"x"}

    def test_toggle_all_partial_selects_rest(self) -> None:
        """Test a partially selected column becomes fully selected."""
        selection = Selection({"a"})

        selection.toggle_all(["a", "b"])

        assert set(selection) == {"a", "b"}

    def test_clear(self) -> None:
        """Test clearing empties the selection."""
        selection = Selection({"a", "b"})

        selection.clear()

        assert not selection


class TestBulkTransition:
    """Tests for BulkOperationCoordinator.bulk_transition."""

    @pytest.mark.asyncio
    async def test_withdrawn_expands_across_groups(self, coordinator, mock_store, cache) -> None:
        """Test three selections in two groups withdraw every sibling."""
        selection = Selection({"a1", "a2", "b1"})

        outcome = await coordinator.bulk_transition(selection, EnrollmentStatus.WITHDRAWN)

        expected = frozenset({"a1", "a2", "a3", "b1", "b2"})
        assert isinstance(outcome, TransitionApplied)
        assert outcome.ids == expected
        assert outcome.count == 5
        mock_store.update_enrollments.assert_awaited_once()
        assert mock_store.update_enrollments.await_args.args[0] == expected
        assert all(e.status is EnrollmentStatus.WITHDRAWN for e in cache.snapshot())

    @pytest.mark.asyncio
    async def test_success_clears_selection(self, coordinator) -> None:
        """Test a successful bulk transition invalidates the selection."""
        selection = {"a1", "b1"}

        await coordinator.bulk_transition(selection, "invited")

        assert selection == set()

    @pytest.mark.asyncio
    async def test_non_cascading_keeps_selection_size(self, coordinator) -> None:
        """Test non-cascading targets update exactly the selection."""
        outcome = await coordinator.bulk_transition({"a1", "b1"}, "rejected")

        assert outcome.ids == frozenset({"a1", "b1"})

    @pytest.mark.asyncio
    async def test_empty_selection_is_noop(self, coordinator, mock_store) -> None:
        """Test an empty selection is rejected immediately."""
        outcome = await coordinator.bulk_transition(Selection(), "completed")

        assert isinstance(outcome, NoOp)
        mock_store.update_enrollments.assert_not_called()

    @pytest.mark.asyncio
    async def test_confirmed_without_date_suspends(self, coordinator, mock_store) -> None:
        """Test bulk confirm without a date writes nothing and keeps the selection."""
        selection = Selection({"a1", "b1"})

        outcome = await coordinator.bulk_transition(selection, "confirmed")

        assert isinstance(outcome, NeedsConfirmationDate)
        assert outcome.ids == frozenset({"a1", "b1"})
        assert len(selection) == 2
        mock_store.update_enrollments.assert_not_called()

    @pytest.mark.asyncio
    async def test_confirmed_with_date(self, coordinator, cache) -> None:
        """Test bulk confirm applies the date to each selected record only."""
        outcome = await coordinator.bulk_transition({"a1", "b1"}, "confirmed", date(2026, 3, 15))

        assert outcome.count == 2
        assert cache.get("a1").confirmed_date == date(2026, 3, 15)
        assert cache.get("a2").status is EnrollmentStatus.REQUESTED

    @pytest.mark.asyncio
    async def test_failure_keeps_selection(self, coordinator, mock_store, cache) -> None:
        """Test a remote failure leaves selection and cache untouched."""
        mock_store.update_enrollments.side_effect = StoreUnavailableError("timeout")
        selection = Selection({"a1"})
        before = cache.snapshot()

        outcome = await coordinator.bulk_transition(selection, "completed")

        assert isinstance(outcome, TransitionFailed)
        assert set(selection) == {"a1"}
        assert cache.snapshot() == before

    def test_expand_preview(self, coordinator) -> None:
        """Test the expansion can be previewed without writing."""
        assert coordinator.expand({"b2"}, "completed") == frozenset({"b1", "b2"})

    @pytest.mark.asyncio
    async def test_stale_ids_dropped_from_selection(self, coordinator, mock_store, cache) -> None:
        """Test ids removed by a refresh are pruned instead of failing the batch."""
        cache.remove("b2")
        selection = Selection({"a1", "b2"})

        outcome = await coordinator.bulk_transition(selection, "rejected")

        assert isinstance(outcome, TransitionApplied)
        assert outcome.ids == frozenset({"a1"})
        assert mock_store.update_enrollments.await_args.args[0] == frozenset({"a1"})

    @pytest.mark.asyncio
    async def test_only_stale_ids_is_noop(self, coordinator, mock_store) -> None:
        """Test a selection holding only vanished ids does nothing."""
        selection = Selection({"gone"})

        outcome = await coordinator.bulk_transition(selection, "completed")

        assert isinstance(outcome, NoOp)
        assert not selection
        mock_store.update_enrollments.assert_not_called()

    @pytest.mark.asyncio
    async def test_bulk_invite_stores_date(self, coordinator, cache) -> None:
        """Test a bulk invite writes the invitation date on every selected record."""
        await coordinator.bulk_transition({"a1", "b1"}, "invited", invited_date=date(2026, 4, 1))

        assert cache.get("a1").invited_date == date(2026, 4, 1)
        assert cache.get("b1").invited_date == date(2026, 4, 1)
        assert cache.get("a2").invited_date is None
