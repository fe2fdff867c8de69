"""
Unit tests for catpoint.core.config.yaml_config.

These tests validate YAML loading and conversion into typed config objects:
- defaults for missing optional sections
- enum parsing (case-insensitive) and rejection of unknown names
- config path resolution via CATPOINT_CONFIG
"""

from __future__ import annotations

from pathlib import Path

import pytest

from catpoint.core.config.yaml_config import SensorSpec, load_app_config, parse_app_config
from catpoint.domain.models import ArmingStatus, SensorType

FULL_CONFIG = """
security:
  confidence_threshold: 65.5
  initial_arming_status: armed_home
sensors:
  - name: Front Door
    type: DOOR
  - name: Hall Motion
    type: motion
notification:
  max_queue: 10
  retry_count: 1
  retry_backoff_s: 0.01
"""


def _write(tmp_path: Path, text: str) -> Path:
    p = tmp_path / "config.yaml"
    p.write_text(text, encoding="utf-8")
    return p


def test_load_full_config(tmp_path: Path) -> None:
    cfg = load_app_config(str(_write(tmp_path, FULL_CONFIG)))

    assert cfg.security.confidence_threshold == 65.5
    assert cfg.security.initial_arming_status is ArmingStatus.ARMED_HOME
    assert cfg.sensors == [
        SensorSpec(name="Front Door", sensor_type=SensorType.DOOR),
        SensorSpec(name="Hall Motion", sensor_type=SensorType.MOTION),
    ]
    assert cfg.notification.max_queue == 10
    assert cfg.notification.retry_count == 1
    assert cfg.notification.retry_backoff_s == 0.01


def test_empty_file_uses_defaults(tmp_path: Path) -> None:
    cfg = load_app_config(str(_write(tmp_path, "")))

    assert cfg.security.confidence_threshold == 50.0
    assert cfg.security.initial_arming_status is ArmingStatus.DISARMED
    assert cfg.sensors == []
    assert cfg.notification.max_queue == 2000


def test_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_app_config(str(tmp_path / "nope.yaml"))


def test_non_mapping_root_raises(tmp_path: Path) -> None:
    with pytest.raises(ValueError):
        load_app_config(str(_write(tmp_path, "- just\n- a list\n")))


def test_unknown_sensor_type_raises() -> None:
    with pytest.raises(ValueError, match="sensor type"):
        parse_app_config({"sensors": [{"name": "Garage", "type": "LASER"}]})


def test_sensor_entry_without_type_raises() -> None:
    with pytest.raises(ValueError):
        parse_app_config({"sensors": [{"name": "Garage"}]})


def test_duplicate_sensor_names_rejected() -> None:
    raw = {"sensors": [{"name": "A", "type": "DOOR"}, {"name": "A", "type": "WINDOW"}]}
    with pytest.raises(ValueError, match="Duplicate"):
        parse_app_config(raw)


def test_unknown_arming_status_raises() -> None:
    with pytest.raises(ValueError, match="initial_arming_status"):
        parse_app_config({"security": {"initial_arming_status": "PANIC"}})


def test_env_var_resolution(tmp_path: Path, monkeypatch) -> None:
    p = _write(tmp_path, FULL_CONFIG)
    monkeypatch.setenv("CATPOINT_CONFIG", str(p))

    cfg = load_app_config()

    assert cfg.security.confidence_threshold == 65.5


@pytest.mark.parametrize("section", ["security", "notification"])
def test_scalar_section_raises_value_error(section: str) -> None:
    with pytest.raises(ValueError, match=section):
        parse_app_config({section: 5})


def test_scalar_sensors_section_raises_value_error() -> None:
    with pytest.raises(ValueError, match="sensors"):
        parse_app_config({"sensors": "Front Door"})


@pytest.mark.parametrize(
    "raw, key",
    [
        ({"notification": {"max_queue": None}}, "max_queue"),
        ({"notification": {"retry_backoff_s": "soon"}}, "retry_backoff_s"),
        ({"security": {"confidence_threshold": None}}, "confidence_threshold"),
    ],
)
def test_bad_numeric_value_raises_value_error_naming_key(raw, key: str) -> None:
    with pytest.raises(ValueError, match=key):
        parse_app_config(raw)


def test_null_section_uses_defaults(tmp_path: Path) -> None:
    cfg = load_app_config(str(_write(tmp_path, "security:\nnotification:\n")))

    assert cfg.security.confidence_threshold == 50.0
    assert cfg.notification.retry_count == 3
