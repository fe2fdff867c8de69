from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from catpoint.domain.events import AlarmStatusChange
from catpoint.domain.models import AlarmStatus, ArmingStatus


@dataclass
class AlarmStateStore:
    """
    In-memory store for alarm and arming status.

    This store maintains:
    - the current alarm status and arming status
    - a history of alarm status changes, in insertion order

    Notes
    -----
    - This store is intentionally simple and not thread-safe.
      Synchronization is handled by the enclosing `SecurityRepository`.
    """

    alarm_status: AlarmStatus = AlarmStatus.NO_ALARM
    arming_status: ArmingStatus = ArmingStatus.DISARMED
    history: List[AlarmStatusChange] = field(default_factory=list)

    def add_change(self, change: AlarmStatusChange) -> None:
        """
        Append a status change to the history.

        Parameters
        ----------
        change
            AlarmStatusChange to add.
        """
        self.history.append(change)
