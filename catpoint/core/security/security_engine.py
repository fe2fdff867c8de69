"""
Security engine.

This module contains the stateful orchestrator that turns sensor changes,
camera images and arming requests into alarm status transitions:
- reads the current alarm/arming status and sensors from the repository
- asks the stateless transition rules for the next status
- writes the outcome back and notifies status listeners

The engine does not implement the rules itself (see `transitions`); it owns
the read-decide-write sequence and its atomicity.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, List, Optional, Set

from catpoint.core.security.security_base import (
    ArmingChange,
    ImageAnalysis,
    ImageAnalyzer,
    SecurityRepositoryLike,
    SensorActivation,
)
from catpoint.core.security.transitions import next_alarm_status
from catpoint.core.state.sensor_registry import SensorNotFoundError
from catpoint.domain.events import AlarmStatusChange, ChangeCause
from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor
from catpoint.notification.base import StatusListener

logger = logging.getLogger(__name__)

DEFAULT_CONFIDENCE_THRESHOLD = 50.0


@dataclass
class SecurityEngine:
    """
    Alarm status manager for one monitored installation.

    Operations
    ----------
    - `change_sensor_activation`: sensor tripped / released
    - `process_image`: camera frame analyzed for a threat
    - `set_arming_status`: operator arms or disarms

    Each operation reads the current state, computes the next status and
    writes it back while holding the engine lock, so concurrent calls are
    serialized. Listeners are notified synchronously after the write, and only
    when the status actually changed.

    Notes
    -----
    - If the repository provides ``add_status_change(change)``, every
      transition is recorded through it.
    - If a listener provides ``on_threat_detected(threat)`` or
      ``on_sensors_changed()``, they are called as well.
    - Collaborator errors propagate to the caller untouched.

    Parameters
    ----------
    repository
        Sensor registry and alarm state store (usually a `SecurityRepository`).
    image_analyzer
        Threat detector used by `process_image`.
    confidence_threshold
        Threshold passed to the analyzer on every call.
    listeners
        Initial status listeners.
    clock
        Timestamp source for change records.
    """

    repository: SecurityRepositoryLike
    image_analyzer: ImageAnalyzer
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    listeners: List[StatusListener] = field(default_factory=list)
    clock: Callable[[], datetime] = datetime.now

    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False)

    # --- Listener registration ---
    def add_status_listener(self, listener: StatusListener) -> None:
        with self._lock:
            self.listeners.append(listener)

    def remove_status_listener(self, listener: StatusListener) -> None:
        with self._lock:
            self.listeners.remove(listener)

    # --- Operations ---
    def change_sensor_activation(self, sensor: Sensor, active: bool) -> Optional[AlarmStatusChange]:
        """
        Set a sensor active or inactive and update the alarm status.

        Parameters
        ----------
        sensor
            A registered sensor.
        active
            New active flag. Repeating the current value is allowed and runs
            the same rules.

        Returns
        -------
        AlarmStatusChange or None
            The transition written, or None if the status did not change.

        Raises
        ------
        SensorNotFoundError
            If the sensor is not registered.
        """
        with self._lock:
            alarm = self.repository.get_alarm_status()
            arming = self.repository.get_arming_status()

            if sensor not in self.repository.get_sensors():
                raise SensorNotFoundError(sensor)

            sensor.active = active
            self.repository.update_sensor(sensor)

            event = SensorActivation(active=active, any_sensor_active=self._any_sensor_active())
            change = self._apply(alarm, next_alarm_status(alarm, arming, event), ChangeCause.SENSOR, sensor.name)

            self._call_listeners("on_sensors_changed")
            return change

    def process_image(self, image: Any) -> Optional[AlarmStatusChange]:
        """
        Analyze a camera image and update the alarm status.

        A threat while armed raises the alarm. No threat clears the alarm
        unless some sensor is still active.

        Parameters
        ----------
        image
            Image passed through to the analyzer.

        Returns
        -------
        AlarmStatusChange or None
            The transition written, or None if the status did not change.
        """
        with self._lock:
            threat = bool(self.image_analyzer.contains_threat(image, self.confidence_threshold))
            logger.debug(f"Image analyzed: threat={threat} threshold={self.confidence_threshold}")

            alarm = self.repository.get_alarm_status()
            arming = self.repository.get_arming_status()

            event = ImageAnalysis(threat=threat, any_sensor_active=self._any_sensor_active())
            change = self._apply(alarm, next_alarm_status(alarm, arming, event), ChangeCause.IMAGE)

            self._call_listeners("on_threat_detected", threat)
            return change

    def set_arming_status(self, status: ArmingStatus) -> Optional[AlarmStatusChange]:
        """
        Arm or disarm the system.

        Disarming forces NO_ALARM. Arming (home or away) resets every sensor
        to inactive and leaves the alarm status alone.

        Parameters
        ----------
        status
            Requested arming status.

        Returns
        -------
        AlarmStatusChange or None
            The transition written, or None if the status did not change.

        Raises
        ------
        TypeError
            If ``status`` is not an ArmingStatus.
        """
        if not isinstance(status, ArmingStatus):
            raise TypeError(f"Expected ArmingStatus, got {status!r}")

        with self._lock:
            alarm = self.repository.get_alarm_status()
            arming = self.repository.get_arming_status()

            self.repository.set_arming_status(status)
            logger.info(f"Arming status {arming.value} -> {status.value}")

            if status.is_armed:
                self._reset_sensors()

            event = ArmingChange(arming=status)
            change = self._apply(alarm, next_alarm_status(alarm, arming, event), ChangeCause.ARMING, status.value)

            if status.is_armed:
                self._call_listeners("on_sensors_changed")
            return change

    # --- Pass-through queries ---
    def get_alarm_status(self) -> AlarmStatus:
        return self.repository.get_alarm_status()

    def get_arming_status(self) -> ArmingStatus:
        return self.repository.get_arming_status()

    def get_sensors(self) -> Set[Sensor]:
        return self.repository.get_sensors()

    def add_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.repository.add_sensor(sensor)

    def remove_sensor(self, sensor: Sensor) -> None:
        with self._lock:
            self.repository.remove_sensor(sensor)

    # --- Internals ---
    def _any_sensor_active(self) -> bool:
        return any(s.active for s in self.repository.get_sensors())

    def _reset_sensors(self) -> None:
        for sensor in self.repository.get_sensors():
            sensor.active = False
            self.repository.update_sensor(sensor)

    def _apply(
        self,
        previous: AlarmStatus,
        current: AlarmStatus,
        cause: ChangeCause,
        detail: Optional[str] = None,
    ) -> Optional[AlarmStatusChange]:
        """
        Persist a computed status and notify listeners if it differs.

        Parameters
        ----------
        previous
            Status read at the start of the operation.
        current
            Status computed by the transition rules.
        cause
            Operation that produced the status.
        detail
            Optional context for the change record.

        Returns
        -------
        AlarmStatusChange or None
            The change record, or None when nothing was written.
        """
        if current == previous:
            logger.debug(f"{cause.value}: alarm status stays {previous.value}")
            return None

        self.repository.set_alarm_status(current)

        change = AlarmStatusChange(
            previous=previous,
            current=current,
            cause=cause,
            timestamp=self.clock(),
            detail=detail,
        )

        # Optional store hook.
        if hasattr(self.repository, "add_status_change"):
            self.repository.add_status_change(change)  # type: ignore[attr-defined]

        logger.info(f"Alarm status {previous.value} -> {current.value} ({cause.value})")

        for listener in list(self.listeners):
            listener.on_alarm_status_changed(current)
        return change

    def _call_listeners(self, hook: str, *args: Any) -> None:
        for listener in list(self.listeners):
            fn = getattr(listener, hook, None)
            if fn is not None:
                fn(*args)
