from __future__ import annotations

import logging
from typing import Optional

from catpoint.domain.models import AlarmStatus

logger = logging.getLogger(__name__)


class LoggingStatusListener:
    """
    Status listener that writes alarm activity to the log.

    ALARM is logged at WARNING, every other status at INFO. Threat readings
    are logged only when they flip, to keep a camera stream from flooding the log.
    """

    def __init__(self, log: Optional[logging.Logger] = None):
        self._log = log or logger
        self._last_threat: Optional[bool] = None

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        level = logging.WARNING if status is AlarmStatus.ALARM else logging.INFO
        self._log.log(level, f"Alarm status changed: {status.value}")

    def on_threat_detected(self, threat: bool) -> None:
        if threat == self._last_threat:
            return
        self._last_threat = threat
        if threat:
            self._log.warning("Threat detected by camera")
        else:
            self._log.info("Camera reports no threat")
