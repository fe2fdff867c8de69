from __future__ import annotations

import logging
import queue
import threading
import time
from dataclasses import dataclass
from typing import List

from catpoint.domain.models import AlarmStatus
from catpoint.notification.base import StatusListener

logger = logging.getLogger(__name__)

_STOP = object()


@dataclass(frozen=True)
class NotificationThreadConfig:
    max_queue: int = 2000
    retry_count: int = 3
    retry_backoff_s: float = 0.5
    poll_timeout_s: float = 0.5


class QueuedStatusListener:
    """
    Status listener that hands changes to a background worker thread.

    The engine calls `on_alarm_status_changed` synchronously while holding its
    lock; this adapter only enqueues, so slow downstream listeners never block
    the engine. The worker forwards each status to every downstream listener,
    retrying failures with exponential backoff.

    Backpressure Policy
    -------------------
    If the queue is full the newest status is dropped and a warning is logged.
    """

    def __init__(self, listeners: List[StatusListener], cfg: NotificationThreadConfig | None = None):
        self._listeners = listeners
        self._cfg = cfg or NotificationThreadConfig()
        self._q: "queue.Queue[object]" = queue.Queue(maxsize=self._cfg.max_queue)
        self._stop = threading.Event()
        self._thread = threading.Thread(target=self._run, name="notification-worker", daemon=True)

    def start(self) -> None:
        if not self._thread.is_alive():
            self._thread.start()

    def stop(self) -> None:
        """Deliver what is already queued, then end the worker."""
        try:
            self._q.put_nowait(_STOP)
        except queue.Full:
            self._stop.set()
        if self._thread.is_alive():
            self._thread.join(timeout=2.0)
        self._stop.set()

    def on_alarm_status_changed(self, status: AlarmStatus) -> None:
        try:
            self._q.put_nowait(status)
        except queue.Full:
            logger.warning(f"Notification queue full, dropping status {status.value}")

    def _run(self) -> None:
        while not self._stop.is_set():
            try:
                item = self._q.get(timeout=self._cfg.poll_timeout_s)
            except queue.Empty:
                continue

            if item is _STOP:
                break

            for listener in self._listeners:
                self._send_with_retries(listener, item)  # type: ignore[arg-type]

    def _send_with_retries(self, listener: StatusListener, status: AlarmStatus) -> None:
        for attempt in range(self._cfg.retry_count + 1):
            try:
                listener.on_alarm_status_changed(status)
                return
            except Exception:
                if attempt >= self._cfg.retry_count:
                    logger.exception(f"Giving up notifying {listener!r} of {status.value}")
                    return
                time.sleep(self._cfg.retry_backoff_s * (2 ** attempt))
