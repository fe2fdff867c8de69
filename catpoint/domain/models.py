"""
Domain models and enums.

This module defines the core domain-level types used across the system:
- Sensor types, alarm statuses and arming statuses
- The `Sensor` entity whose active flag is flipped by the security engine

Enums derive from ``str`` so values serialize cleanly into logs and YAML.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class SensorType(str, Enum):
    """
    Kind of physical detector.

    Members
    -------
    DOOR : str
        Door contact sensor.
    WINDOW : str
        Window contact sensor.
    MOTION : str
        Motion (PIR) sensor.
    """

    DOOR = "DOOR"
    WINDOW = "WINDOW"
    MOTION = "MOTION"


class AlarmStatus(str, Enum):
    """
    Escalation ladder for the monitored premises.

    Members
    -------
    NO_ALARM : str
        Nothing is wrong.
    PENDING_ALARM : str
        A sensor tripped while armed; a second trigger raises the alarm.
    ALARM : str
        The alarm is ringing. Only disarming or a clearing image reading resets it.
    """

    NO_ALARM = "NO_ALARM"
    PENDING_ALARM = "PENDING_ALARM"
    ALARM = "ALARM"


class ArmingStatus(str, Enum):
    """
    Operator-selected monitoring mode.

    Members
    -------
    DISARMED : str
        Sensors and camera never raise the alarm.
    ARMED_HOME : str
        Occupants are home; all triggers are monitored.
    ARMED_AWAY : str
        Premises are empty; all triggers are monitored.
    """

    DISARMED = "DISARMED"
    ARMED_HOME = "ARMED_HOME"
    ARMED_AWAY = "ARMED_AWAY"

    @property
    def is_armed(self) -> bool:
        """True for ARMED_HOME and ARMED_AWAY."""
        return self is not ArmingStatus.DISARMED


@dataclass(unsafe_hash=True)
class Sensor:
    """
    A binary presence/motion/contact detector.

    Identity is ``(name, sensor_type)``. The ``active`` flag is excluded from
    equality and hashing so a sensor keeps its place in a set while it is
    toggled.

    Parameters
    ----------
    name
        Human-readable sensor name, unique within a registry.
    sensor_type
        Kind of detector.
    active
        Whether the sensor is currently tripped.
    """

    name: str
    sensor_type: SensorType
    active: bool = field(default=False, compare=False)
