from __future__ import annotations

from typing import Protocol

from catpoint.domain.models import AlarmStatus


class StatusListener(Protocol):
    """
    Protocol interface for alarm status observers.

    Any listener implementation can be registered with the security engine if
    it provides an 'on_alarm_status_changed(status)' method with the correct
    signature. This enables dependency inversion and makes notification easy
    to test with fakes/mocks.

    Listeners may also define, and the engine will call when present:
    - ``on_threat_detected(threat: bool)`` after every analyzed image
    - ``on_sensors_changed()`` after sensor flags were modified

    Methods
    -------
    on_alarm_status_changed(status)
        React to a new alarm status.
    """

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        """
        React to a new alarm status.

        Parameters
        ----------
        status
            The status that was just written.
        """
        ...
