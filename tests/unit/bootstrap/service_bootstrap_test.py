"""
Unit tests for ServiceBootstrap.

Drives the lifecycle with a fake wiring collaborator and a fake signal
source so that no configuration, socket or signal handler is involved.
"""

import threading
import time
from typing import List

import pytest
from injector import Module

from microservices_common.base.base_application_config import BaseApplicationConfig
from microservices_common.errors import InitializationError, LifecycleError
from microservices_common.infrastructure.bootstrap.service_bootstrap import (
    EXIT_INITIALIZATION_FAILURE,
    ServiceBootstrap,
)
from microservices_common.infrastructure.bootstrap.signal_source import ProcessSignalSource
from microservices_common.infrastructure.wiring.injector_runtime_wiring import (
    InjectorRuntimeWiring,
)
from microservices_common.lifecycle.lifecycle_state import LifecycleState
from microservices_common.lifecycle.runtime_context import ServiceRuntimeContext
from microservices_recommendation.infrastructure.bootstrap.recommendation_service_bootstrap import (
    RecommendationServiceBootstrap,
)
from microservices_review.infrastructure.bootstrap.review_service_bootstrap import (
    ReviewServiceBootstrap,
)


class _MinimalBootstrap(ServiceBootstrap):

    def get_dependency_modules(self, app_config: BaseApplicationConfig) -> List[Module]:
        return []


def _history_values(bootstrap: ServiceBootstrap) -> List[str]:
    assert bootstrap.context is not None
    return [state.value for state in bootstrap.context.history]


class TestSuccessfulStart:

    def test_recommendation_runs_until_termination_then_stops(
        self, fake_wiring, fake_signal_source
    ) -> None:
        # Given
        bootstrap = RecommendationServiceBootstrap(
            wiring=fake_wiring, signal_source=fake_signal_source
        )

        # When
        result = bootstrap.start(["--webapi.port=9000"])

        # Then
        assert result is None
        assert fake_wiring.calls == [("recommendation", ["--webapi.port=9000"])]
        assert fake_signal_source.states_while_waiting == ["Running"]
        assert _history_values(bootstrap)[:3] == ["Uninitialized", "Initializing", "Running"]
        assert bootstrap.context.state == LifecycleState.STOPPED
        assert fake_wiring.shutdown_calls == 1

    def test_success_path_passes_through_shutting_down(
        self, fake_wiring, fake_signal_source
    ) -> None:
        # Given
        bootstrap = RecommendationServiceBootstrap(
            wiring=fake_wiring, signal_source=fake_signal_source
        )

        # When
        bootstrap.start([])

        # Then
        assert _history_values(bootstrap) == [
            "Uninitialized", "Initializing", "Running", "ShuttingDown", "Stopped"
        ]

    def test_empty_arguments_reach_wiring_unchanged(
        self, fake_wiring, fake_signal_source
    ) -> None:
        # Given
        arguments: List[str] = []
        bootstrap = ReviewServiceBootstrap(wiring=fake_wiring, signal_source=fake_signal_source)

        # When
        bootstrap.start(arguments)

        # Then
        assert len(fake_wiring.calls) == 1
        service_name, received = fake_wiring.calls[0]
        assert service_name == "review"
        assert received is arguments
        assert received == []

    def test_signal_source_is_installed_and_restored(
        self, fake_wiring, fake_signal_source
    ) -> None:
        # Given
        bootstrap = RecommendationServiceBootstrap(
            wiring=fake_wiring, signal_source=fake_signal_source
        )

        # When
        bootstrap.start()

        # Then
        assert fake_signal_source.installed is True
        assert fake_signal_source.restored is True

    def test_context_is_registered_process_wide(self, fake_wiring, fake_signal_source) -> None:
        # Given
        bootstrap = RecommendationServiceBootstrap(
            wiring=fake_wiring, signal_source=fake_signal_source
        )

        # When
        bootstrap.start()

        # Then
        assert ServiceRuntimeContext.current() is bootstrap.context
        assert bootstrap.context.service_name == "recommendation"

    def test_shutdown_error_still_reaches_stopped(self, fake_wiring, fake_signal_source) -> None:
        # Given
        fake_wiring.shutdown_error = RuntimeError("listener already closed")
        bootstrap = RecommendationServiceBootstrap(
            wiring=fake_wiring, signal_source=fake_signal_source
        )

        # When
        bootstrap.start()

        # Then
        assert bootstrap.context.state == LifecycleState.STOPPED
        assert "ShuttingDown" in _history_values(bootstrap)


class TestFailedStart:

    def test_review_initialization_failure_exits_with_code_one(
        self, failing_wiring, fake_signal_source
    ) -> None:
        # Given
        bootstrap = ReviewServiceBootstrap(wiring=failing_wiring, signal_source=fake_signal_source)

        # When
        with pytest.raises(SystemExit) as exc_info:
            bootstrap.start([])

        # Then
        assert exc_info.value.code == EXIT_INITIALIZATION_FAILURE == 1
        assert _history_values(bootstrap) == ["Uninitialized", "Initializing", "Stopped"]

    def test_failure_never_waits_for_termination(self, failing_wiring, fake_signal_source) -> None:
        # Given
        bootstrap = ReviewServiceBootstrap(wiring=failing_wiring, signal_source=fake_signal_source)

        # When
        with pytest.raises(SystemExit):
            bootstrap.start()

        # Then
        assert fake_signal_source.states_while_waiting == []
        assert failing_wiring.shutdown_calls == 0
        assert fake_signal_source.restored is True

    def test_failure_is_logged_with_cause(self, failing_wiring, fake_signal_source, caplog) -> None:
        # Given
        bootstrap = ReviewServiceBootstrap(wiring=failing_wiring, signal_source=fake_signal_source)

        # When
        with caplog.at_level("ERROR"), pytest.raises(SystemExit):
            bootstrap.start()

        # Then
        assert "port in use" in caplog.text

    def test_unexpected_error_propagates_after_stopping(self, fake_wiring, fake_signal_source) -> None:
        # Given
        broken = RuntimeError("wiring bug")

        def explode(service_name, arguments):
            raise broken

        fake_wiring.wire = explode
        bootstrap = RecommendationServiceBootstrap(
            wiring=fake_wiring, signal_source=fake_signal_source
        )

        # When
        with pytest.raises(RuntimeError) as exc_info:
            bootstrap.start()

        # Then
        assert exc_info.value is broken
        assert _history_values(bootstrap) == ["Uninitialized", "Initializing", "Stopped"]


class TestRepeatedStart:

    def test_second_start_on_same_bootstrap_is_rejected(
        self, fake_wiring, fake_signal_source
    ) -> None:
        # Given
        bootstrap = RecommendationServiceBootstrap(
            wiring=fake_wiring, signal_source=fake_signal_source
        )
        bootstrap.start()

        # When/Then
        with pytest.raises(LifecycleError):
            bootstrap.start()
        assert len(fake_wiring.calls) == 1

    def test_second_start_after_failure_is_rejected(
        self, failing_wiring, fake_signal_source
    ) -> None:
        # Given
        bootstrap = ReviewServiceBootstrap(wiring=failing_wiring, signal_source=fake_signal_source)
        with pytest.raises(SystemExit):
            bootstrap.start()

        # When/Then
        with pytest.raises(LifecycleError):
            bootstrap.start()
        assert len(failing_wiring.calls) == 1

    def test_second_bootstrap_in_same_process_is_rejected(
        self, fake_wiring, fake_signal_source
    ) -> None:
        # Given
        RecommendationServiceBootstrap(wiring=fake_wiring, signal_source=fake_signal_source).start()
        other_wiring = type(fake_wiring)()
        other = ReviewServiceBootstrap(wiring=other_wiring, signal_source=fake_signal_source)

        # When/Then
        with pytest.raises(LifecycleError):
            other.start()
        assert other_wiring.calls == []


class TestBlockingStart:

    def test_start_blocks_in_running_until_stop(self, fake_wiring, blocking_signal_source) -> None:
        # Given
        bootstrap = RecommendationServiceBootstrap(
            wiring=fake_wiring, signal_source=blocking_signal_source
        )
        worker = threading.Thread(target=bootstrap.start, args=([],), daemon=True)

        # When
        worker.start()
        context = None
        for _ in range(500):
            context = bootstrap.context
            if context is not None:
                break
            time.sleep(0.01)
        assert context is not None
        assert context.wait_for_state(LifecycleState.RUNNING, timeout=5)

        # Then
        assert worker.is_alive()
        assert bootstrap.is_running is True
        assert fake_wiring.shutdown_calls == 0

        # When
        bootstrap.stop("test finished")
        worker.join(timeout=5)

        # Then
        assert not worker.is_alive()
        assert context.state == LifecycleState.STOPPED
        assert bootstrap.is_running is False
        assert fake_wiring.shutdown_calls == 1


class TestDefaults:

    def test_default_collaborators(self) -> None:
        # Given/When
        bootstrap = _MinimalBootstrap("recommendation", BaseApplicationConfig)

        # Then
        assert isinstance(bootstrap.wiring, InjectorRuntimeWiring)
        assert isinstance(bootstrap.signal_source, ProcessSignalSource)
        assert bootstrap.context is None
        assert bootstrap.is_running is False

    def test_optional_hooks_default_to_nothing(self) -> None:
        # Given
        bootstrap = _MinimalBootstrap("review", BaseApplicationConfig)
        config = BaseApplicationConfig(app_name="review-service")

        # When/Then
        assert bootstrap.get_health_checks(config) == []
        assert bootstrap.get_route_registrar() is None

    def test_service_modules_reject_foreign_config(self) -> None:
        # Given
        bootstrap = RecommendationServiceBootstrap()
        config = BaseApplicationConfig(app_name="other-service")

        # When/Then
        with pytest.raises(TypeError):
            bootstrap.get_dependency_modules(config)


def test_initialization_error_exposes_message() -> None:
    error = InitializationError("port in use")

    assert error.message == "port in use"
    assert str(error) == "port in use"
