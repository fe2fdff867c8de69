"""
Alarm status change domain events.

An `AlarmStatusChange` represents *what happened* at a specific time, while the
alarm state store holds *what is currently true*.

Events are typically used for:
- logging and audit trails
- listener notification streams
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Optional

from catpoint.domain.models import AlarmStatus


class ChangeCause(str, Enum):
    """
    Engine operation that produced a status change.

    Members
    -------
    SENSOR : str
        A sensor was activated or deactivated.
    IMAGE : str
        A camera image was analyzed.
    ARMING : str
        The arming status was changed.
    """

    SENSOR = "SENSOR"
    IMAGE = "IMAGE"
    ARMING = "ARMING"


@dataclass(frozen=True)
class AlarmStatusChange:
    """
    Alarm status transition emitted by the security engine.

    Parameters
    ----------
    previous
        Status before the operation.
    current
        Status written by the operation.
    cause
        Operation that produced the change.
    timestamp
        When the change was written.
    detail
        Optional extra context (e.g. the sensor name).
    """

    previous: AlarmStatus
    current: AlarmStatus
    cause: ChangeCause
    timestamp: datetime
    detail: Optional[str] = None
