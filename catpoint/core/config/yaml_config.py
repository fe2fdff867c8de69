from __future__ import annotations

import os
import sys
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Type, TypeVar

import yaml

from catpoint.core.security.security_engine import DEFAULT_CONFIDENCE_THRESHOLD
from catpoint.domain.models import ArmingStatus, SensorType

E = TypeVar("E", bound=Enum)
N = TypeVar("N", int, float)


@dataclass(frozen=True)
class SensorSpec:
    """A sensor to register at startup."""
    name: str
    sensor_type: SensorType


@dataclass(frozen=True)
class SecurityConfig:
    """Security engine parameters."""
    confidence_threshold: float = DEFAULT_CONFIDENCE_THRESHOLD
    initial_arming_status: ArmingStatus = ArmingStatus.DISARMED


@dataclass(frozen=True)
class NotificationConfig:
    """Queued status listener settings."""
    max_queue: int = 2000
    retry_count: int = 3
    retry_backoff_s: float = 0.5


@dataclass(frozen=True)
class AppConfig:
    """
    Root application configuration loaded from YAML.

    This is the single source of truth for runtime-tunable values.
    """
    security: SecurityConfig
    sensors: List[SensorSpec]
    notification: NotificationConfig


def _read_yaml(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError("config.yaml must contain a YAML mapping at the root")
    return data


def _parse_enum(enum_cls: Type[E], value: Any, key: str) -> E:
    try:
        return enum_cls(str(value).upper())
    except ValueError:
        allowed = ", ".join(m.value for m in enum_cls)
        raise ValueError(f"Invalid {key}: {value!r} (expected one of {allowed})") from None


def _section(raw: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = raw.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ValueError(f"Config section {key!r} must be a mapping, got {value!r}")
    return value


def _number(section: Dict[str, Any], key: str, default: Any, cast: Callable[[Any], N]) -> N:
    value = section.get(key, default)
    try:
        return cast(value)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid {key}: {value!r} (expected a number)") from None


def _resolve_default_config_path() -> Path:
    """
    Resolve config.yaml location.

    Priority:
    1) CATPOINT_CONFIG env var if provided
    2) config.yaml next to the executable
    3) ./config.yaml in current working directory
    """
    env = os.getenv("CATPOINT_CONFIG")
    if env:
        return Path(env).expanduser().resolve()

    exe_dir = Path(sys.executable).resolve().parent
    candidate = exe_dir / "config.yaml"
    if candidate.exists():
        return candidate

    return Path("config.yaml").resolve()


def parse_app_config(raw: Dict[str, Any]) -> AppConfig:
    """
    Convert a raw YAML mapping into typed config objects.

    Raises
    ------
    ValueError
        If required fields are missing or invalid.
    """
    # ---- security ----
    s = _section(raw, "security")
    security = SecurityConfig(
        confidence_threshold=_number(s, "confidence_threshold", DEFAULT_CONFIDENCE_THRESHOLD, float),
        initial_arming_status=_parse_enum(
            ArmingStatus, s.get("initial_arming_status", ArmingStatus.DISARMED.value), "initial_arming_status"
        ),
    )

    # ---- sensors ----
    sensors_raw = raw.get("sensors") or []
    if not isinstance(sensors_raw, list):
        raise ValueError(f"Config section 'sensors' must be a list, got {sensors_raw!r}")
    sensors: List[SensorSpec] = []
    seen = set()
    for item in sensors_raw:
        try:
            name = str(item["name"])
            type_raw = item["type"]
        except (KeyError, TypeError):
            raise ValueError(f"Sensor entry needs 'name' and 'type': {item!r}") from None
        if name in seen:
            raise ValueError(f"Duplicate sensor name: {name!r}")
        seen.add(name)
        sensors.append(SensorSpec(name=name, sensor_type=_parse_enum(SensorType, type_raw, "sensor type")))

    # ---- notification ----
    n = _section(raw, "notification")
    notification = NotificationConfig(
        max_queue=_number(n, "max_queue", 2000, int),
        retry_count=_number(n, "retry_count", 3, int),
        retry_backoff_s=_number(n, "retry_backoff_s", 0.5, float),
    )

    return AppConfig(security=security, sensors=sensors, notification=notification)


def load_app_config(path: Optional[str] = None) -> AppConfig:
    """
    Load application configuration from YAML and convert into typed config objects.

    Parameters
    ----------
    path
        Explicit path to config.yaml. If None, uses default resolution.

    Returns
    -------
    AppConfig
        Parsed and validated configuration.

    Raises
    ------
    FileNotFoundError
        If config file does not exist.
    ValueError
        If required fields are missing or invalid.
    """
    cfg_path = Path(path).expanduser().resolve() if path else _resolve_default_config_path()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Config not found: {cfg_path}")

    return parse_app_config(_read_yaml(cfg_path))
