from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, Set

from catpoint.domain.models import Sensor

logger = logging.getLogger(__name__)


class SensorNotFoundError(LookupError):
    """Raised when an operation targets a sensor that is not registered."""

    def __init__(self, sensor: Sensor):
        super().__init__(f"Sensor not found: {sensor.name!r} ({sensor.sensor_type.value})")
        self.sensor = sensor


@dataclass
class SensorRegistry:
    """
    In-memory registry of known sensors.

    The registry maps sensor name to the registered `Sensor` object. The
    objects themselves are handed out by `get_sensors`, so callers that flip
    ``active`` on a returned sensor must call `update_sensor` to persist it.

    Notes
    -----
    - This registry is not thread-safe.
      Synchronization is handled by the enclosing `SecurityRepository`.
    - Names are unique: registering a different sensor under a taken name is
      rejected, re-registering the same sensor replaces it.

    Attributes
    ----------
    _sensors
        Internal mapping of sensor name to Sensor.
    """

    _sensors: Dict[str, Sensor] = field(default_factory=dict)

    def load(self, sensors: Iterable[Sensor]) -> None:
        """
        Register several sensors at once.

        Parameters
        ----------
        sensors
            Sensors to register.
        """
        for sensor in sensors:
            self.add_sensor(sensor)

    def add_sensor(self, sensor: Sensor) -> None:
        """
        Register a sensor.

        Re-adding a registered sensor (or an equal copy) is a no-op: the
        stored object and its ``active`` flag are kept.

        Raises
        ------
        ValueError
            If another sensor with the same name but a different type exists.
        """
        existing = self._sensors.get(sensor.name)
        if existing is not None:
            if existing == sensor:
                return
            raise ValueError(
                f"Sensor name {sensor.name!r} already registered as {existing.sensor_type.value}"
            )
        self._sensors[sensor.name] = sensor
        logger.debug(f"Registered sensor {sensor.name!r} ({sensor.sensor_type.value})")

    def remove_sensor(self, sensor: Sensor) -> None:
        """
        Unregister a sensor.

        Raises
        ------
        SensorNotFoundError
            If the sensor is not registered.
        """
        self._require(sensor)
        del self._sensors[sensor.name]
        logger.debug(f"Removed sensor {sensor.name!r}")

    def update_sensor(self, sensor: Sensor) -> None:
        """
        Persist the ``active`` flag of a registered sensor.

        Parameters
        ----------
        sensor
            The registered sensor, or an equal sensor carrying the new flag.

        Raises
        ------
        SensorNotFoundError
            If the sensor is not registered.
        """
        stored = self._require(sensor)
        stored.active = sensor.active

    def get_sensors(self) -> Set[Sensor]:
        """
        Return the registered sensors.

        Returns
        -------
        set of Sensor
            A new set holding the registered sensor objects.
        """
        return set(self._sensors.values())

    def _require(self, sensor: Sensor) -> Sensor:
        stored = self._sensors.get(sensor.name)
        if stored is None or stored != sensor:
            raise SensorNotFoundError(sensor)
        return stored
