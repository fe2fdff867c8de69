from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from catpoint.core.config.yaml_config import AppConfig, load_app_config
from catpoint.core.security.security_base import ImageAnalyzer
from catpoint.core.security.security_engine import SecurityEngine
from catpoint.core.state_store import SecurityRepository
from catpoint.domain.models import Sensor
from catpoint.image.fake_image_analyzer import FakeImageAnalyzer
from catpoint.notification.base import StatusListener
from catpoint.notification.logging_listener import LoggingStatusListener
from catpoint.notification.notification_thread import NotificationThreadConfig, QueuedStatusListener


@dataclass(frozen=True)
class SecurityWiring:
    """Everything a host application needs to drive the system."""
    config: AppConfig
    repository: SecurityRepository
    engine: SecurityEngine
    notifier: QueuedStatusListener


def build_repository(cfg: AppConfig) -> SecurityRepository:
    repository = SecurityRepository()
    repository.sensors.load(Sensor(name=s.name, sensor_type=s.sensor_type) for s in cfg.sensors)
    repository.set_arming_status(cfg.security.initial_arming_status)
    return repository


def build_notifier(cfg: AppConfig, listeners: List[StatusListener]) -> QueuedStatusListener:
    return QueuedStatusListener(
        listeners=listeners,
        cfg=NotificationThreadConfig(
            max_queue=cfg.notification.max_queue,
            retry_count=cfg.notification.retry_count,
            retry_backoff_s=cfg.notification.retry_backoff_s,
        ),
    )


def build_security_system(
    config_path: Optional[str] = None,
    image_analyzer: Optional[ImageAnalyzer] = None,
    listeners: Optional[List[StatusListener]] = None,
    config: Optional[AppConfig] = None,
) -> SecurityWiring:
    """
    Wire repository, engine and notification from configuration.

    Parameters
    ----------
    config_path
        Path to config.yaml; ignored when ``config`` is given.
    image_analyzer
        Threat detector. Defaults to `FakeImageAnalyzer`.
    listeners
        Downstream listeners fed by the queued notifier. The notifier forwards
        only to these; with none given it accepts and discards every status.
    config
        Already-loaded configuration.

    Notes
    -----
    The returned notifier is started; call ``wiring.notifier.stop()`` on shutdown.
    """
    cfg = config or load_app_config(config_path)

    # --- STATE ---
    repository = build_repository(cfg)

    # --- NOTIFICATIONS ---
    notifier = build_notifier(cfg, listeners or [])
    notifier.start()

    # --- ENGINE ---
    engine = SecurityEngine(
        repository=repository,
        image_analyzer=image_analyzer or FakeImageAnalyzer(),
        confidence_threshold=cfg.security.confidence_threshold,
        listeners=[LoggingStatusListener(), notifier],
    )

    return SecurityWiring(config=cfg, repository=repository, engine=engine, notifier=notifier)
