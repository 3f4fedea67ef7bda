"""Unit tests for scheduled tasks job coordination.

Tests the scheduling logic, error handling, and task integration without
executing the actual scheduled work.
"""

from unittest.mock import MagicMock, call, patch

import pytest

from infrastructure.configuration import Settings
from jobs import scheduled_tasks
from jobs.scheduled_tasks import safe_run, scheduler_heartbeat, run_continuously


@pytest.mark.unit
class TestSafeRun:
    """Tests for the safe_run error handling wrapper."""

    @patch("jobs.scheduled_tasks.logger")
    def test_safe_run_executes_job_successfully(self, mock_logger) -> None:
        """Test that safe_run executes a successful job without logging errors."""
        job = MagicMock()
        job.__module__ = "test_module"
        job.__name__ = "test_job"

        wrapper = safe_run(job)
        wrapper()

        job.assert_called_once()
        mock_logger.error.assert_not_called()

    @patch("jobs.scheduled_tasks.logger")
    def test_safe_run_catches_exception(self, mock_logger) -> None:
        """Test that safe_run catches and logs exceptions."""

        def failing_job():
            raise ValueError("Test error")

        failing_job.__module__ = "test_module"
        failing_job.__name__ = "failing_job"

        wrapper = safe_run(failing_job)
        wrapper()

        # Verify error was logged with context
        assert mock_logger.error.call_count == 1
        error_call = mock_logger.error.call_args
        assert error_call[0][0] == "safe_run_error"
        assert error_call[1]["error"] == "Test error"
        assert error_call[1]["function"] == "failing_job"
        assert error_call[1]["module"] == "test_module"

    @patch("jobs.scheduled_tasks.logger")
    def test_safe_run_preserves_job_arguments(self, mock_logger) -> None:
        """Test that safe_run passes through job arguments and kwargs."""
        job = MagicMock()
        job.__module__ = "test_module"
        job.__name__ = "test_job"

        wrapper = safe_run(job)
        wrapper("arg1", "arg2", kwarg1="value1", kwarg2="value2")

        job.assert_called_once_with("arg1", "arg2", kwarg1="value1", kwarg2="value2")

    @patch("jobs.scheduled_tasks.logger")
    def test_safe_run_logs_arguments_on_exception(self, mock_logger) -> None:
        """Test that safe_run logs job arguments when exception occurs."""

        def failing_job(arg1, kwargs_dict):
            raise RuntimeError("Failed")

        failing_job.__module__ = "test_module"
        failing_job.__name__ = "failing_job"

        wrapper = safe_run(failing_job)
        wrapper("test_arg", {"key": "value"})

        error_call = mock_logger.error.call_args
        assert error_call[1]["job_args"] == ("test_arg", {"key": "value"})


@pytest.mark.unit
class TestSchedulerHeartbeat:
    """Tests for scheduler heartbeat logging."""

    @patch("jobs.scheduled_tasks.time")
    @patch("jobs.scheduled_tasks.logger")
    def test_scheduler_heartbeat_logs_current_time(
        self, mock_logger, mock_time
    ) -> None:
        """Test that scheduler_heartbeat logs the current time."""
        mock_time.ctime.return_value = "Thu Feb  6 10:30:00 2026"

        scheduler_heartbeat()

        assert mock_logger.info.call_count == 1
        log_call = mock_logger.info.call_args
        assert log_call[0][0] == "running_scheduler_heartbeat"
        assert log_call[1]["module"] == "scheduled_tasks"
        assert "10:30:00" in log_call[1]["time"]

    @patch("jobs.scheduled_tasks.time")
    @patch("jobs.scheduled_tasks.logger")
    def test_scheduler_heartbeat_calls_ctime(self, mock_logger, mock_time) -> None:
        """Test that scheduler_heartbeat calls time.ctime()."""
        scheduler_heartbeat()

        mock_time.ctime.assert_called_once()


@pytest.mark.unit
class TestRunContinuously:
    """Tests for continuous run loop."""

    def test_run_continuously_returns_event(self) -> None:
        """Test that run_continuously returns a threading.Event.

        Note: Full mocking of run_continuously is complex due to the
        nested ScheduleThread class. This test verifies the function
        can be called without errors and returns the correct type.
        """
        # This is an integration test - it actually starts a thread
        result = run_continuously(interval=1440)  # 24 hour interval so it barely runs

        # Verify it returns an Event object
        assert hasattr(result, "is_set")
        assert hasattr(result, "set")

        # Stop the thread
        result.set()


@pytest.mark.unit
class TestInit:
    """Tests for job registration."""

    @patch("jobs.scheduled_tasks.schedule")
    def test_init_schedules_all_jobs(self, schedule_mock, test_settings) -> None:
        scheduled_tasks.init(test_settings)

        schedule_mock.every.assert_has_calls(
            calls=[call(5), call(5), call()], any_order=True
        )
        schedule_mock.every().day.at.assert_called_once_with(
            "00:00", "America/New_York"
        )
        do_calls = [c for c in schedule_mock.mock_calls if ".do(" in str(c)]
        assert len(do_calls) == 3

    @patch("jobs.scheduled_tasks.schedule")
    def test_init_uses_configured_sweep_time(self, schedule_mock, monkeypatch) -> None:
        monkeypatch.setenv("SWEEP_TIME", "03:30")
        monkeypatch.setenv("SWEEP_TIMEZONE", "UTC")

        scheduled_tasks.init(Settings(PREFIX="test-"))

        schedule_mock.every().day.at.assert_called_once_with("03:30", "UTC")

    def test_init_registers_real_jobs(self, test_settings) -> None:
        """The real scheduler accepts the timezone-aware daily job."""
        import schedule

        scheduler = schedule.Scheduler()
        with patch("jobs.scheduled_tasks.schedule", scheduler):
            scheduled_tasks.init(test_settings)

        assert len(scheduler.get_jobs()) == 3


@pytest.mark.unit
class TestIntegrationHealthchecks:
    @patch("jobs.scheduled_tasks.logger")
    @patch("jobs.scheduled_tasks.get_dispatch_engine")
    def test_logs_each_collaborator(self, mock_get_engine, mock_logger) -> None:
        mock_get_engine.return_value.health_check.return_value = {
            "directory": True,
            "transport": False,
        }

        scheduled_tasks.integration_healthchecks()

        mock_logger.info.assert_any_call("integration_healthy", integration="directory")
        mock_logger.error.assert_called_once_with(
            "integration_unhealthy", integration="transport"
        )

    @patch("jobs.scheduled_tasks.get_dispatch_engine")
    def test_uses_engine_health_check(self, mock_get_engine, engine) -> None:
        mock_get_engine.return_value = engine

        scheduled_tasks.integration_healthchecks()

        mock_get_engine.assert_called_once()


@pytest.mark.unit
class TestRetentionJob:
    @patch("jobs.scheduled_tasks.logger")
    def test_safe_run_wraps_sweep_failure(self, mock_logger) -> None:
        job = MagicMock(side_effect=RuntimeError("sweep failed"))
        job.__module__ = "modules.messaging.handlers"
        job.__name__ = "run_retention_sweep"

        safe_run(job)()

        assert mock_logger.error.call_args[1]["function"] == "run_retention_sweep"
