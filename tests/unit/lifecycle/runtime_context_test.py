"""
Unit tests for ServiceRuntimeContext.

Covers the monotonic lifecycle, the single-context-per-process rule and
waiting for states from other threads.
"""

import threading

import pytest

from microservices_common.errors import LifecycleError
from microservices_common.lifecycle.lifecycle_state import LifecycleState
from microservices_common.lifecycle.runtime_context import ServiceRuntimeContext


class TestLifecycleTransitions:

    def test_new_context_is_uninitialized(self) -> None:
        # Given/When
        context = ServiceRuntimeContext("recommendation")

        # Then
        assert context.service_name == "recommendation"
        assert context.state == LifecycleState.UNINITIALIZED
        assert context.history == [LifecycleState.UNINITIALIZED]
        assert context.is_running is False

    def test_full_lifecycle_is_recorded_in_order(self) -> None:
        # Given
        context = ServiceRuntimeContext("recommendation")

        # When
        for state in (
            LifecycleState.INITIALIZING,
            LifecycleState.RUNNING,
            LifecycleState.SHUTTING_DOWN,
            LifecycleState.STOPPED,
        ):
            context.transition(state)

        # Then
        assert [s.value for s in context.history] == [
            "Uninitialized", "Initializing", "Running", "ShuttingDown", "Stopped"
        ]

    def test_initializing_may_fail_straight_to_stopped(self) -> None:
        # Given
        context = ServiceRuntimeContext("review")
        context.transition(LifecycleState.INITIALIZING)

        # When
        context.transition(LifecycleState.STOPPED)

        # Then
        assert context.history == [
            LifecycleState.UNINITIALIZED,
            LifecycleState.INITIALIZING,
            LifecycleState.STOPPED,
        ]

    @pytest.mark.parametrize(
        "path,illegal",
        [
            ([], LifecycleState.RUNNING),
            ([], LifecycleState.STOPPED),
            ([LifecycleState.INITIALIZING], LifecycleState.SHUTTING_DOWN),
            ([LifecycleState.INITIALIZING], LifecycleState.INITIALIZING),
            ([LifecycleState.INITIALIZING, LifecycleState.RUNNING], LifecycleState.STOPPED),
            ([LifecycleState.INITIALIZING, LifecycleState.RUNNING], LifecycleState.INITIALIZING),
            ([LifecycleState.INITIALIZING, LifecycleState.STOPPED], LifecycleState.RUNNING),
        ],
    )
    def test_illegal_transitions_are_rejected(self, path, illegal) -> None:
        # Given
        context = ServiceRuntimeContext("recommendation")
        for state in path:
            context.transition(state)
        before = context.history

        # When/Then
        with pytest.raises(LifecycleError):
            context.transition(illegal)
        assert context.history == before

    def test_empty_service_name_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            ServiceRuntimeContext("")


class TestProcessWideContext:

    def test_create_registers_current_context(self) -> None:
        # Given
        assert ServiceRuntimeContext.current() is None

        # When
        context = ServiceRuntimeContext.create("recommendation")

        # Then
        assert ServiceRuntimeContext.current() is context

    def test_second_context_in_same_process_is_rejected(self) -> None:
        # Given
        ServiceRuntimeContext.create("recommendation")

        # When/Then
        with pytest.raises(LifecycleError, match="recommendation"):
            ServiceRuntimeContext.create("review")


class TestWaitForState:

    def test_returns_immediately_for_state_already_passed(self) -> None:
        # Given
        context = ServiceRuntimeContext("review")
        context.transition(LifecycleState.INITIALIZING)
        context.transition(LifecycleState.STOPPED)

        # When/Then
        assert context.wait_for_state(LifecycleState.INITIALIZING, timeout=0) is True

    def test_times_out_when_state_never_reached(self) -> None:
        # Given
        context = ServiceRuntimeContext("review")

        # When/Then
        assert context.wait_for_state(LifecycleState.RUNNING, timeout=0.05) is False

    def test_wakes_up_on_transition_from_other_thread(self) -> None:
        # Given
        context = ServiceRuntimeContext("recommendation")
        context.transition(LifecycleState.INITIALIZING)
        worker = threading.Timer(0.05, context.transition, args=(LifecycleState.RUNNING,))

        # When
        worker.start()
        reached = context.wait_for_state(LifecycleState.RUNNING, timeout=5)
        worker.join()

        # Then
        assert reached is True
        assert context.is_running is True

    def test_returns_false_once_stopped_without_reaching_state(self) -> None:
        # Given
        context = ServiceRuntimeContext("review")
        context.transition(LifecycleState.INITIALIZING)
        context.transition(LifecycleState.STOPPED)

        # When
        reached = context.wait_for_state(LifecycleState.RUNNING)

        # Then
        assert reached is False

    def test_waiter_released_when_startup_stops_before_running(self) -> None:
        # Given
        context = ServiceRuntimeContext("recommendation")
        context.transition(LifecycleState.INITIALIZING)
        worker = threading.Timer(0.05, context.transition, args=(LifecycleState.STOPPED,))

        # When
        worker.start()
        reached = context.wait_for_state(LifecycleState.RUNNING, timeout=5)
        worker.join()

        # Then
        assert reached is False
        assert context.state is LifecycleState.STOPPED
