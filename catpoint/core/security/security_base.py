"""
Security engine contracts (collaborators and input events).

This module defines the data structures and protocols that form the contract
between:

- The transition rules (stateless evaluator) consuming an event -> new `AlarmStatus`
- The security engine (stateful read-decide-write orchestrator)
- The external collaborators the engine calls: sensor registry, alarm state
  store and image analyzer

The event objects are immutable, so they can be logged or passed across
threads without surprises.

Notes
-----

- `SecurityEvent` is a closed union. The transition rules reject anything else.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, Set, Union

from catpoint.domain.models import AlarmStatus, ArmingStatus, Sensor


@dataclass(frozen=True)
class SensorActivation:
    """
    A sensor was set active or inactive.

    Parameters
    ----------
    active
        The sensor's new active flag.
    any_sensor_active
        Whether any registered sensor is active after the update.
    """

    active: bool
    any_sensor_active: bool


@dataclass(frozen=True)
class ImageAnalysis:
    """
    A camera image was analyzed.

    Parameters
    ----------
    threat
        Whether the analyzer reported a threat above the confidence threshold.
    any_sensor_active
        Whether any registered sensor is currently active.
    """

    threat: bool
    any_sensor_active: bool


@dataclass(frozen=True)
class ArmingChange:
    """
    The operator selected a new arming status.

    Parameters
    ----------
    arming
        Requested arming status.
    """

    arming: ArmingStatus


SecurityEvent = Union[SensorActivation, ImageAnalysis, ArmingChange]


class SensorRepository(Protocol):
    """
    Protocol interface for the sensor registry.

    Methods
    -------
    get_sensors()
        Return the registered sensors.
    add_sensor(sensor), remove_sensor(sensor)
        Register / unregister a sensor.
    update_sensor(sensor)
        Persist a mutated ``active`` flag; raises SensorNotFoundError if unknown.
    """

    def get_sensors(self) -> Set[Sensor]:
        ...

    def add_sensor(self, sensor: Sensor) -> None:
        ...

    def remove_sensor(self, sensor: Sensor) -> None:
        ...

    def update_sensor(self, sensor: Sensor) -> None:
        ...


class AlarmRepository(Protocol):
    """
    Protocol interface for the alarm state store.

    Stores may additionally provide an ``add_status_change(change)`` hook; the
    engine calls it when present.
    """

    def get_alarm_status(self) -> AlarmStatus:
        ...

    def set_alarm_status(self, status: AlarmStatus) -> None:
        ...

    def get_arming_status(self) -> ArmingStatus:
        ...

    def set_arming_status(self, status: ArmingStatus) -> None:
        ...


class SecurityRepositoryLike(SensorRepository, AlarmRepository, Protocol):
    """Both collaborator contracts served by one object."""


class ImageAnalyzer(Protocol):
    """
    Protocol interface for image threat detection.

    Any class implementing this protocol can be used by -> class:`SecurityEngine`.
    Implementations may raise on malformed images; the engine lets such errors
    propagate to its caller.
    """

    def contains_threat(self, image: Any, confidence_threshold: float) -> bool:
        """
        Report whether the tracked threat is present in the image.

        Parameters
        ----------
        image
            Image in whatever representation the analyzer accepts.
        confidence_threshold
            Minimum confidence (percent) for a positive result.

        Returns
        -------
        bool
            True if a threat was detected.
        """
        ...
