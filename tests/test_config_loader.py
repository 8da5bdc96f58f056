from __future__ import annotations

import json
from pathlib import Path

import pytest

from config import Config, load_config
from core.registry import DEFAULT_SENSORS
from core.thresholds import ThresholdKind
from infra.exceptions import ConfigurationError

REPO_CONFIG = Path(__file__).resolve().parents[1] / "config" / "monitor.yaml"


def _write(tmp_path: Path, name: str, content: str) -> Path:
    path = tmp_path / name
    path.write_text(content, encoding="utf-8")
    return path


def test_no_path_returns_builtin_defaults() -> None:
    config = load_config(None)

    assert config == Config()
    assert config.sensors == DEFAULT_SENSORS
    assert config.monitor.mode == "per_sensor"
    assert config.bus.address == "system"


def test_shipped_config_matches_defaults() -> None:
    config = load_config(REPO_CONFIG)

    assert config.sensors == DEFAULT_SENSORS
    assert config.action == Config().action
    assert config.logging.filepath == (REPO_CONFIG.parent / "../logs/threshold-monitor.log").resolve()


def test_yaml_sensors_and_logging(tmp_path) -> None:
    path = _write(
        tmp_path,
        "monitor.yaml",
        """
bus:
  address: session
sensors:
  - path: /sensors/temperature/Temp1
    thresholds: [Low, HIGH]
  - path: /sensors/temperature/Temp2
    thresholds: high
  - path: /sensors/voltage/P3V3
logging:
  level: DEBUG
  filepath: logs/monitor.log
  console: false
""",
    )

    config = load_config(path)

    assert config.bus.address == "session"
    assert [sensor.path for sensor in config.sensors] == [
        "/sensors/temperature/Temp1",
        "/sensors/temperature/Temp2",
        "/sensors/voltage/P3V3",
    ]
    assert config.sensors[0].watched_kinds == ThresholdKind.LOW | ThresholdKind.HIGH
    assert config.sensors[1].watched_kinds == ThresholdKind.HIGH
    assert config.sensors[2].watched_kinds == ThresholdKind.LOW | ThresholdKind.HIGH
    assert config.logging.level == "DEBUG"
    assert config.logging.filepath == (tmp_path / "logs" / "monitor.log").resolve()
    assert config.logging.console is False


def test_json_global_mode_and_action(tmp_path) -> None:
    path = _write(
        tmp_path,
        "monitor.json",
        json.dumps(
            {
                "monitor": {"mode": "global", "global_thresholds": ["low"]},
                "action": {"value": "xyz.openbmc_project.State.Chassis.Transition.PowerCycle"},
                "logging": {"filepath": None},
            }
        ),
    )

    config = load_config(path)

    assert config.monitor.mode == "global"
    assert config.monitor.global_kinds == ThresholdKind.LOW
    assert config.action.value.endswith("PowerCycle")
    assert config.action.service == "xyz.openbmc_project.State.Chassis"
    assert config.logging.filepath is None
    assert config.logging.resolved_path() is None


def test_empty_sensor_list_is_allowed(tmp_path) -> None:
    config = load_config(_write(tmp_path, "monitor.yaml", "sensors: []\n"))
    assert config.sensors == ()


@pytest.mark.parametrize(
    "content, message",
    [
        (
            "sensors:\n  - path: /sensors/a\n  - path: /sensors/a\n",
            "Duplicate sensor path",
        ),
        ("sensors:\n  - path: /sensors/a\n    thresholds: [medium]\n", "Unknown threshold kind"),
        ("sensors:\n  - path: /sensors/a\n    thresholds: 3\n", "Unknown threshold kind"),
        ("sensors:\n  - thresholds: [high]\n", "must include a 'path'"),
        ("sensors: /sensors/a\n", "must be a list"),
        ("monitor:\n  mode: fan_out\n", "Unknown monitor mode"),
        ("action:\n  method: Reboot\n", "Unknown action keys"),
        ("bus:\n  port: 5\n", "Invalid configuration"),
        ("bus: system\n", "must be a mapping"),
        ("- just\n- a list\n", "Top level"),
        ("bus: [unclosed\n", "Cannot parse"),
    ],
)
def test_invalid_configuration_is_rejected(tmp_path, content: str, message: str) -> None:
    with pytest.raises(ConfigurationError, match=message):
        load_config(_write(tmp_path, "monitor.yaml", content))


def test_missing_file_and_unknown_suffix(tmp_path) -> None:
    with pytest.raises(ConfigurationError, match="not found"):
        load_config(tmp_path / "absent.yaml")

    with pytest.raises(ConfigurationError, match="Unsupported config format"):
        load_config(_write(tmp_path, "monitor.toml", "[bus]\n"))
