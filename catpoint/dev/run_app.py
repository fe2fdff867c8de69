from __future__ import annotations

import logging
import random
import sys

from catpoint.bootstrap import build_security_system
from catpoint.domain.models import ArmingStatus
from catpoint.image.fake_image_analyzer import FakeImageAnalyzer
from catpoint.notification.logging_listener import LoggingStatusListener

logger = logging.getLogger(__name__)


def main() -> None:
    """
    Run a scripted session against the security engine and log the outcome.

    Notes
    -----
    - Loads configuration from `config.yaml` by default.
    - Optional CLI usage:
        python -m catpoint.dev.run_app --config path/to/config.yaml --seed 7
    """
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    config_path = None
    if "--config" in sys.argv:
        i = sys.argv.index("--config")
        if i + 1 < len(sys.argv):
            config_path = sys.argv[i + 1]

    seed = None
    if "--seed" in sys.argv:
        i = sys.argv.index("--seed")
        if i + 1 < len(sys.argv):
            seed = int(sys.argv[i + 1])

    wiring = build_security_system(
        config_path=config_path,
        image_analyzer=FakeImageAnalyzer(random.Random(seed)),
        # Stands in for a remote channel behind the queued notifier.
        listeners=[LoggingStatusListener(logging.getLogger("catpoint.dev.notifications"))],
    )
    engine = wiring.engine

    try:
        sensors = sorted(engine.get_sensors(), key=lambda s: s.name)
        if not sensors:
            logger.warning("No sensors configured, nothing to simulate")
            return

        print("\n=== ARM AWAY ===")
        engine.set_arming_status(ArmingStatus.ARMED_AWAY)

        print("\n=== SENSORS TRIP ===")
        for sensor in sensors[:2]:
            engine.change_sensor_activation(sensor, True)
            print(f"{sensor.name}: active -> alarm={engine.get_alarm_status().value}")
        print("active:", ", ".join(s.name for s in wiring.repository.active_sensors))

        print("\n=== SENSORS RELEASE ===")
        for sensor in sensors[:2]:
            engine.change_sensor_activation(sensor, False)
            print(f"{sensor.name}: inactive -> alarm={engine.get_alarm_status().value}")
        print("active:", ", ".join(s.name for s in wiring.repository.active_sensors) or "none")

        print("\n=== CAMERA ===")
        for frame in range(3):
            engine.process_image(f"frame-{frame}")
            print(f"frame-{frame}: alarm={engine.get_alarm_status().value}")

        print("\n=== DISARM ===")
        engine.set_arming_status(ArmingStatus.DISARMED)
        print(f"alarm={engine.get_alarm_status().value}")

        print("\n=== HISTORY ===")
        for change in wiring.repository.status_history:
            print(
                f"{change.timestamp.isoformat(timespec='seconds')} "
                f"{change.previous.value} -> {change.current.value} ({change.cause.value})"
            )
    finally:
        wiring.notifier.stop()


if __name__ == "__main__":
    main()
