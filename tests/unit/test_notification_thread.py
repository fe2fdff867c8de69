"""
Unit tests for catpoint.notification.notification_thread.QueuedStatusListener.

Validates:
- statuses are forwarded to every downstream listener from the worker thread
- failing listeners are retried and finally given up without killing the thread
- a full queue drops the newest status
- stop() delivers statuses queued before it was called
"""

from __future__ import annotations

import threading
import time
from typing import List

from catpoint.domain.models import AlarmStatus
from catpoint.notification.notification_thread import NotificationThreadConfig, QueuedStatusListener

FAST = NotificationThreadConfig(retry_count=2, retry_backoff_s=0.001, poll_timeout_s=0.01)


class _CollectingListener:
    def __init__(self, expected: int) -> None:
        self.seen: List[AlarmStatus] = []
        self._expected = expected
        self.done = threading.Event()

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        self.seen.append(status)
        if len(self.seen) >= self._expected:
            self.done.set()


class _FlakyListener:
    def __init__(self, failures: int) -> None:
        self.failures = failures
        self.attempts = 0

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        self.attempts += 1
        if self.attempts <= self.failures:
            raise ConnectionError("downstream unavailable")


def test_forwards_statuses_in_order() -> None:
    sink = _CollectingListener(expected=2)
    q = QueuedStatusListener([sink], FAST)
    q.start()
    try:
        q.on_alarm_status_changed(AlarmStatus.PENDING_ALARM)
        q.on_alarm_status_changed(AlarmStatus.ALARM)
        assert sink.done.wait(2.0)
    finally:
        q.stop()

    assert sink.seen == [AlarmStatus.PENDING_ALARM, AlarmStatus.ALARM]


def test_retries_then_delivers() -> None:
    flaky = _FlakyListener(failures=2)
    sink = _CollectingListener(expected=1)
    q = QueuedStatusListener([flaky, sink], FAST)
    q.start()
    try:
        q.on_alarm_status_changed(AlarmStatus.ALARM)
        assert sink.done.wait(2.0)
    finally:
        q.stop()

    assert flaky.attempts == 3


def test_gives_up_after_retries_and_keeps_running() -> None:
    broken = _FlakyListener(failures=100)
    sink = _CollectingListener(expected=2)
    q = QueuedStatusListener([broken, sink], FAST)
    q.start()
    try:
        q.on_alarm_status_changed(AlarmStatus.ALARM)
        q.on_alarm_status_changed(AlarmStatus.NO_ALARM)
        assert sink.done.wait(2.0)
    finally:
        q.stop()

    assert broken.attempts == 2 * (FAST.retry_count + 1)
    assert sink.seen == [AlarmStatus.ALARM, AlarmStatus.NO_ALARM]


def test_full_queue_drops_newest() -> None:
    sink = _CollectingListener(expected=1)
    q = QueuedStatusListener([sink], NotificationThreadConfig(max_queue=1, poll_timeout_s=0.01))

    # Not started: the queue fills up.
    q.on_alarm_status_changed(AlarmStatus.PENDING_ALARM)
    q.on_alarm_status_changed(AlarmStatus.ALARM)

    q.start()
    try:
        assert sink.done.wait(2.0)
        time.sleep(0.05)
    finally:
        q.stop()

    assert sink.seen == [AlarmStatus.PENDING_ALARM]


def test_stop_without_start_is_safe() -> None:
    q = QueuedStatusListener([], FAST)
    q.stop()


class _SlowListener:
    def __init__(self, delay_s: float) -> None:
        self.delay_s = delay_s
        self.seen: List[AlarmStatus] = []

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        time.sleep(self.delay_s)
        self.seen.append(status)


def test_stop_drains_already_queued_statuses() -> None:
    slow = _SlowListener(delay_s=0.02)
    q = QueuedStatusListener([slow], FAST)
    q.start()

    statuses = [AlarmStatus.PENDING_ALARM, AlarmStatus.ALARM, AlarmStatus.NO_ALARM, AlarmStatus.PENDING_ALARM]
    for status in statuses:
        q.on_alarm_status_changed(status)
    q.stop()

    assert slow.seen == statuses
