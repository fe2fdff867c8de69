"""
Alarm status transition rules.

Stateless decision logic mapping ``(alarm status, arming status, event)`` to
the next alarm status. The security engine reads state, builds an event, asks
`next_alarm_status` for the outcome and writes it back.

No I/O and no mutation happen here, which keeps every rule testable in
isolation.
"""

from __future__ import annotations

from catpoint.core.security.security_base import (
    ArmingChange,
    ImageAnalysis,
    SecurityEvent,
    SensorActivation,
)
from catpoint.domain.models import AlarmStatus, ArmingStatus


def _on_sensor_activation(alarm: AlarmStatus, arming: ArmingStatus, ev: SensorActivation) -> AlarmStatus:
    # A ringing alarm ignores sensors.
    if alarm is AlarmStatus.ALARM:
        return alarm

    # Case 1: activation while armed => escalate one step
    if ev.active and arming.is_armed:
        if alarm is AlarmStatus.NO_ALARM:
            return AlarmStatus.PENDING_ALARM
        return AlarmStatus.ALARM

    # Case 2: deactivation => pending clears once every sensor is quiet
    if not ev.active:
        if alarm is AlarmStatus.PENDING_ALARM and not ev.any_sensor_active:
            return AlarmStatus.NO_ALARM
        return alarm

    # Case 3: activation while disarmed => no effect
    return alarm


def _on_image_analysis(alarm: AlarmStatus, arming: ArmingStatus, ev: ImageAnalysis) -> AlarmStatus:
    if ev.threat:
        return AlarmStatus.ALARM if arming.is_armed else alarm

    # An absent threat must not mask sensor activity.
    if ev.any_sensor_active:
        return alarm
    return AlarmStatus.NO_ALARM


def _on_arming_change(alarm: AlarmStatus, ev: ArmingChange) -> AlarmStatus:
    if ev.arming is ArmingStatus.DISARMED:
        return AlarmStatus.NO_ALARM
    # Arming resets sensors but leaves the status to later events.
    return alarm


def next_alarm_status(alarm: AlarmStatus, arming: ArmingStatus, event: SecurityEvent) -> AlarmStatus:
    """
    Compute the alarm status that follows an event.

    Parameters
    ----------
    alarm
        Current alarm status.
    arming
        Current arming status (before the event, for ArmingChange).
    event
        The event being applied.

    Returns
    -------
    AlarmStatus
        The next alarm status. Equal to ``alarm`` when nothing changes.

    Raises
    ------
    TypeError
        If ``event`` is not one of the known event types.
    """
    if isinstance(event, SensorActivation):
        return _on_sensor_activation(alarm, arming, event)
    if isinstance(event, ImageAnalysis):
        return _on_image_analysis(alarm, arming, event)
    if isinstance(event, ArmingChange):
        return _on_arming_change(alarm, event)
    raise TypeError(f"Unsupported security event: {event!r}")
