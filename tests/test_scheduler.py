"""Tests for the cooperative scheduler."""

from unittest.mock import Mock

import pytest

from anagram.scheduler import DeferredScheduler, ManualClock


class TestDeferredScheduler:
    """Test cases for DeferredScheduler."""

    def setup_method(self):
        """Setup for each test."""
        self.clock = ManualClock()
        self.scheduler = DeferredScheduler(clock=self.clock)

    def test_call_later_runs_once_when_due(self):
        callback = Mock()
        self.scheduler.call_later(500, callback)

        self.clock.advance(0.25)
        assert self.scheduler.run_pending() == 0
        callback.assert_not_called()

        self.clock.advance(0.5)
        assert self.scheduler.run_pending() == 1
        self.clock.advance(5)
        self.scheduler.run_pending()
        callback.assert_called_once()

    def test_call_every_catches_up(self):
        """Test a periodic task runs once per elapsed interval."""
        callback = Mock()
        task = self.scheduler.call_every(1000, callback)

        self.clock.advance(3.5)
        self.scheduler.run_pending()

        assert callback.call_count == 3
        assert task.runs == 3

    def test_order_by_due_time_then_insertion(self):
        order = []
        self.scheduler.call_later(200, lambda: order.append("late"))
        self.scheduler.call_later(100, lambda: order.append("first"))
        self.scheduler.call_later(100, lambda: order.append("second"))

        self.clock.advance(1)
        self.scheduler.run_pending()

        assert order == ["first", "second", "late"]

    def test_cancel(self):
        callback = Mock()
        task = self.scheduler.call_every(1000, callback)

        assert self.scheduler.cancel(task) is True
        assert self.scheduler.cancel(task) is False
        assert self.scheduler.cancel(None) is False

        self.clock.advance(5)
        self.scheduler.run_pending()
        callback.assert_not_called()
        assert self.scheduler.pending() == 0

    def test_periodic_task_can_cancel_itself(self):
        """Test a task that cancels itself mid-run stops repeating."""
        calls = []

        def callback():
            calls.append(self.clock())
            if len(calls) == 2:
                self.scheduler.cancel(task)

        task = self.scheduler.call_every(1000, callback)
        self.clock.advance(10)
        self.scheduler.run_pending()

        assert len(calls) == 2

    def test_callbacks_scheduled_while_running(self):
        """Test tasks added by a callback run when they fall due."""
        inner = Mock()
        self.scheduler.call_later(100, lambda: self.scheduler.call_later(100, inner))

        self.clock.advance(0.15)
        self.scheduler.run_pending()
        inner.assert_not_called()

        self.clock.advance(0.1)
        self.scheduler.run_pending()
        inner.assert_called_once()

    def test_clear(self):
        self.scheduler.call_later(100, Mock())
        self.scheduler.call_every(100, Mock())
        self.scheduler.clear()
        assert self.scheduler.pending() == 0

    def test_invalid_interval(self):
        with pytest.raises(ValueError):
            self.scheduler.call_every(0, Mock())

    def test_default_clock_is_monotonic(self):
        scheduler = DeferredScheduler()
        callback = Mock()
        scheduler.call_later(0, callback)
        scheduler.run_pending()
        callback.assert_called_once()
