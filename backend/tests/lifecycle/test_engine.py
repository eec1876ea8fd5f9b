"""Tests for lifecycle.engine: manager-driven status progression."""

from datetime import timedelta

import pytest

from lifecycle.engine import advance_status, change_priority, plan_advance
from lifecycle.enums import Priority, RequestStatus, UpdatedByRole, UserRole
from lifecycle.errors import (
    ForbiddenError,
    InvalidPriorityError,
    InvalidStatusError,
    NotFoundError,
    OutOfOrderTransitionError,
)
from lifecycle.state import RequestState


class TestPlanAdvance:
    def test_next_stage_sets_status_and_timestamp(self, new_request, clock) -> None:
        now = clock.advance(hours=1)
        transition = plan_advance(new_request, "viewed", now)

        assert transition.target is RequestStatus.VIEWED
        assert transition.changes == {
            "viewed_at": now,
            "status": RequestStatus.VIEWED,
            "last_updated_by_role": UpdatedByRole.MANAGER,
        }

    def test_same_status_only_touches_role(self, new_request, clock) -> None:
        transition = plan_advance(new_request, RequestStatus.IN_QUEUE, clock())

        assert transition.changes == {"last_updated_by_role": UpdatedByRole.MANAGER}

    def test_skip_raises_with_pipeline_order(self, new_request, clock) -> None:
        with pytest.raises(OutOfOrderTransitionError) as exc:
            plan_advance(new_request, "maintenance_requested", clock())

        assert "In Queue → Viewed → Maintenance Requested" in exc.value.message
        assert exc.value.current == "in_queue"
        assert exc.value.requested == "maintenance_requested"

    def test_backward_move_rejected(self, clock) -> None:
        state = RequestState(
            request_id=1,
            tenant_id=7,
            status=RequestStatus.VIEWED,
            created_at=clock.now,
            in_queue_at=clock.now,
            viewed_at=clock.now,
        )
        with pytest.raises(OutOfOrderTransitionError):
            plan_advance(state, "in_queue", clock())

    def test_unknown_status_rejected(self, new_request, clock) -> None:
        with pytest.raises(InvalidStatusError):
            plan_advance(new_request, "on_hold", clock())

    def test_missing_in_queue_backfilled_from_created_at(self, clock) -> None:
        """Rows created before stage tracking get in_queue_at from created_at."""
        created = clock.now
        legacy = RequestState(request_id=1, tenant_id=7, created_at=created)
        now = clock.advance(days=2)

        transition = plan_advance(legacy, "viewed", now)

        assert transition.changes["in_queue_at"] == created
        assert transition.changes["viewed_at"] == now

    def test_existing_target_timestamp_kept(self, clock) -> None:
        """A stage timed before (e.g. by a legacy import) is not re-stamped."""
        earlier = clock.now + timedelta(minutes=5)
        state = RequestState(
            request_id=1,
            tenant_id=7,
            created_at=clock.now,
            in_queue_at=clock.now,
            viewed_at=earlier,
        )
        transition = plan_advance(state, "viewed", clock.advance(hours=1))

        assert "viewed_at" not in transition.changes
        assert transition.changes["status"] is RequestStatus.VIEWED


class TestAdvanceStatus:
    @pytest.mark.asyncio
    async def test_scenario_a_in_queue_to_viewed(self, store, clock) -> None:
        t0 = clock.now
        t1 = clock.advance(minutes=30)

        result = await advance_status(store, 1, "viewed", UserRole.MANAGER, clock)

        assert result.status is RequestStatus.VIEWED
        assert result.viewed_at == t1
        assert result.in_queue_at == t0
        assert result.last_updated_by_role is UpdatedByRole.MANAGER

    @pytest.mark.asyncio
    async def test_scenario_b_skip_leaves_request_unmodified(
        self, store, clock
    ) -> None:
        await advance_status(store, 1, "viewed", UserRole.MANAGER, clock)
        before = store.states[1]
        clock.advance(hours=1)

        with pytest.raises(OutOfOrderTransitionError):
            await advance_status(store, 1, "completed", UserRole.MANAGER, clock)

        assert store.states[1] == before
        assert store.states[1].status is RequestStatus.VIEWED
        assert len(store.saves) == 1

    @pytest.mark.asyncio
    async def test_full_pipeline_walk(self, store, clock) -> None:
        stamps = []
        for stage in list(RequestStatus)[1:]:
            stamps.append(clock.advance(hours=1))
            await advance_status(store, 1, stage.value, UserRole.MANAGER, clock)

        final = store.states[1]
        assert final.status is RequestStatus.COMPLETED
        assert final.timestamps()[1:] == stamps

    @pytest.mark.asyncio
    async def test_admin_may_advance(self, store, clock) -> None:
        result = await advance_status(store, 1, "viewed", "admin", clock)
        assert result.status is RequestStatus.VIEWED
        assert result.last_updated_by_role is UpdatedByRole.MANAGER

    @pytest.mark.asyncio
    async def test_tenant_may_not_advance(self, store, clock) -> None:
        with pytest.raises(ForbiddenError):
            await advance_status(store, 1, "viewed", UserRole.TENANT, clock)
        assert store.saves == []

    @pytest.mark.asyncio
    async def test_invalid_status_checked_before_lookup(self, store, clock) -> None:
        with pytest.raises(InvalidStatusError):
            await advance_status(store, 999, "bogus", UserRole.MANAGER, clock)

    @pytest.mark.asyncio
    async def test_missing_status_is_invalid(self, store, clock) -> None:
        with pytest.raises(InvalidStatusError):
            await advance_status(store, 1, None, UserRole.MANAGER, clock)

    @pytest.mark.asyncio
    async def test_unknown_request(self, store, clock) -> None:
        with pytest.raises(NotFoundError) as exc:
            await advance_status(store, 42, "viewed", UserRole.MANAGER, clock)
        assert exc.value.status_code == 404


class TestChangePriority:
    @pytest.mark.asyncio
    async def test_sets_priority_only(self, store, new_request) -> None:
        result = await change_priority(store, 1, "emergency", UserRole.MANAGER)

        assert result.priority is Priority.EMERGENCY
        assert result.last_updated_by_role is UpdatedByRole.MANAGER
        assert result.status is new_request.status
        assert result.timestamps() == new_request.timestamps()

    @pytest.mark.asyncio
    async def test_invalid_priority(self, store) -> None:
        with pytest.raises(InvalidPriorityError):
            await change_priority(store, 1, "urgent", UserRole.MANAGER)
        assert store.saves == []

    @pytest.mark.asyncio
    async def test_tenant_forbidden(self, store) -> None:
        with pytest.raises(ForbiddenError):
            await change_priority(store, 1, "high", UserRole.TENANT)
