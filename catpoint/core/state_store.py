from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import List, Set

from catpoint.core.state.alarm_state_store import AlarmStateStore
from catpoint.core.state.sensor_registry import SensorRegistry
from catpoint.domain.events import AlarmStatusChange
from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor


@dataclass
class SecurityRepository:
    """
    Thread-safe facade for security state.

    'SecurityRepository' aggregates and coordinates access to:
    - the sensor registry (known sensors and their active flags)
    - the alarm state store (alarm status, arming status, change history)

    It satisfies both collaborator contracts the `SecurityEngine` consumes,
    so one instance is usually passed in for both.

    Concurrency Model
    -----------------
    All reads/writes are guarded by a single re-entrant lock (`threading.RLock`).
    This keeps individual calls consistent; atomicity of a whole
    read-decide-write sequence is the engine's job.

    Attributes
    ----------
    sensors
        Sensor registry.
    alarms
        Alarm/arming status store.
    """

    sensors: SensorRegistry = field(default_factory=SensorRegistry)
    alarms: AlarmStateStore = field(default_factory=AlarmStateStore)

    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    # --- Sensor registry API ---
    def get_sensors(self) -> Set[Sensor]:
        """
        Return the registered sensors.

        Returns
        -------
        set of Sensor
            Registered sensor objects (a new set on every call).
        """
        with self._lock:
            return self.sensors.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.sensors.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.sensors.remove_sensor(sensor)

    def update_sensor(self, sensor: Sensor) -> None:
        """
        Persist the active flag of a registered sensor.

        Raises
        ------
        SensorNotFoundError
            If the sensor is not registered.
        """
        with self._lock:
            self.sensors.update_sensor(sensor)

    # --- Alarm state API (used by SecurityEngine) ---
    def get_alarm_status(self) -> AlarmStatus:
        with self._lock:
            return self.alarms.alarm_status

    def set_alarm_status(self, status: AlarmStatus) -> None:
        with self._lock:
            self.alarms.alarm_status = status

    def get_arming_status(self) -> ArmingStatus:
        with self._lock:
            return self.alarms.arming_status

    def set_arming_status(self, status: ArmingStatus) -> None:
        with self._lock:
            self.alarms.arming_status = status

    def add_status_change(self, change: AlarmStatusChange) -> None:
        """
        Append an alarm status change to the history.

        Parameters
        ----------
        change
            Change record to persist.
        """
        with self._lock:
            self.alarms.add_change(change)

    # -------------------------
    # Snapshot properties
    # Return copies to avoid "list changed size during iteration"
    # -------------------------
    @property
    def status_history(self) -> List[AlarmStatusChange]:
        """
        Snapshot copy of the alarm status change history.

        Returns
        -------
        list of AlarmStatusChange
            Changes in insertion order.
        """
        with self._lock:
            return list(self.alarms.history)

    @property
    def active_sensors(self) -> List[Sensor]:
        """Registered sensors whose ``active`` flag is set, sorted by name."""
        with self._lock:
            return sorted((s for s in self.sensors.get_sensors() if s.active), key=lambda s: s.name)
