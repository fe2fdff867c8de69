"""
Unit tests for catpoint.notification.base and the logging listener.

These tests validate notification-layer contracts:
- StatusListener protocol supports duck typing (no inheritance required)
- LoggingStatusListener log levels and threat de-duplication

No external I/O is involved.
"""

from __future__ import annotations

import logging

from catpoint.domain.models import AlarmStatus
from catpoint.notification.base import StatusListener
from catpoint.notification.logging_listener import LoggingStatusListener


class _FakeListener:
    """
    Minimal listener for protocol conformance testing.

    This class does not inherit from StatusListener; it only implements the
    required on_alarm_status_changed(status) method.
    """

    def __init__(self) -> None:
        self.seen: list[AlarmStatus] = []

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        self.seen.append(status)


def test_status_listener_protocol_duck_typing() -> None:
    listener: StatusListener = _FakeListener()

    listener.on_alarm_status_changed(AlarmStatus.ALARM)

    assert listener.seen == [AlarmStatus.ALARM]  # type: ignore[attr-defined]


def test_logging_listener_levels(caplog) -> None:
    listener = LoggingStatusListener()

    with caplog.at_level(logging.INFO, logger="catpoint.notification.logging_listener"):
        listener.on_alarm_status_changed(AlarmStatus.PENDING_ALARM)
        listener.on_alarm_status_changed(AlarmStatus.ALARM)

    levels = [(r.levelno, r.getMessage()) for r in caplog.records]
    assert levels == [
        (logging.INFO, "Alarm status changed: PENDING_ALARM"),
        (logging.WARNING, "Alarm status changed: ALARM"),
    ]


def test_logging_listener_logs_threat_only_when_it_flips(caplog) -> None:
    listener = LoggingStatusListener()

    with caplog.at_level(logging.INFO, logger="catpoint.notification.logging_listener"):
        for threat in (True, True, False, False, True):
            listener.on_threat_detected(threat)

    messages = [r.getMessage() for r in caplog.records]
    assert messages == [
        "Threat detected by camera",
        "Camera reports no threat",
        "Threat detected by camera",
    ]
