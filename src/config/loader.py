"""Configuration loader utilities."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from core.entities import ActionDescriptor
from core.registry import SensorConfig
from core.thresholds import parse_kinds
from infra.exceptions import ConfigurationError

from .models import BusConfig, Config, LoggingConfig, MonitorConfig

_ACTION_FIELDS = ("service", "object_path", "interface", "property", "value")


def _normalize_path(path: Path | str) -> Path:
    return path if isinstance(path, Path) else Path(path)


def _load_raw_config(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        raise ConfigurationError(f"Config file not found at {config_path}")

    suffix = config_path.suffix.lower()
    with config_path.open("r", encoding="utf-8") as stream:
        try:
            if suffix in {".yaml", ".yml"}:
                raw = yaml.safe_load(stream) or {}
            elif suffix == ".json":
                raw = json.load(stream)
            else:
                raise ConfigurationError(f"Unsupported config format: {suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Cannot parse {config_path}: {exc}") from exc

    if not isinstance(raw, dict):
        raise ConfigurationError(f"Top level of {config_path} must be a mapping.")
    return raw


def load_config(config_path: Optional[Path | str] = None) -> Config:
    """Load configuration file and construct Config dataclass.

    Without a path the compiled-in defaults are returned.
    """

    if config_path is None:
        return Config()

    config_path = _normalize_path(config_path)
    raw = _load_raw_config(config_path)

    try:
        bus = BusConfig(**_section(raw, "bus"))
        monitor = _load_monitor_config(_section(raw, "monitor"))
        action = _load_action(_section(raw, "action"))

        logging_raw = _section(raw, "logging")
        if "filepath" in logging_raw:
            log_path = logging_raw["filepath"]
            # Normalize log path relative to config file for predictable behaviour.
            logging_raw["filepath"] = (config_path.parent / log_path).resolve() if log_path else None
        logging = LoggingConfig(**logging_raw)
    except TypeError as exc:
        raise ConfigurationError(f"Invalid configuration in {config_path}: {exc}") from exc

    if "sensors" in raw:
        sensors = _load_sensors(raw["sensors"])
        return Config(bus=bus, monitor=monitor, sensors=sensors, action=action, logging=logging)
    return Config(bus=bus, monitor=monitor, action=action, logging=logging)


def _section(raw: Dict[str, Any], name: str) -> Dict[str, Any]:
    value = raw.get(name) or {}
    if not isinstance(value, dict):
        raise ConfigurationError(f"Configuration section '{name}' must be a mapping.")
    return dict(value)


def _load_monitor_config(raw: Dict[str, Any]) -> MonitorConfig:
    mode = raw.pop("mode", "per_sensor")
    if mode not in {"per_sensor", "global"}:
        raise ConfigurationError(f"Unknown monitor mode: {mode!r}")
    if "global_thresholds" in raw:
        return MonitorConfig(mode=mode, global_kinds=parse_kinds(raw.pop("global_thresholds")), **raw)
    return MonitorConfig(mode=mode, **raw)


def _load_action(raw: Dict[str, Any]) -> ActionDescriptor:
    unknown = sorted(set(raw) - set(_ACTION_FIELDS))
    if unknown:
        raise ConfigurationError(f"Unknown action keys: {', '.join(unknown)}")
    return ActionDescriptor(**{key: str(value) for key, value in raw.items()})


def _load_sensors(raw_sensors: Any) -> tuple[SensorConfig, ...]:
    if raw_sensors is None:
        return ()
    if not isinstance(raw_sensors, list):
        raise ConfigurationError("'sensors' must be a list of {path, thresholds} entries.")

    sensors: list[SensorConfig] = []
    seen: set[str] = set()
    for index, entry in enumerate(raw_sensors):
        try:
            path = str(entry["path"])
            thresholds = entry.get("thresholds", ["high", "low"])
        except (TypeError, KeyError, AttributeError) as exc:
            raise ConfigurationError(f"Sensor entry #{index} must include a 'path'.") from exc
        if path in seen:
            raise ConfigurationError(f"Duplicate sensor path in configuration: {path}")
        seen.add(path)
        sensors.append(SensorConfig(path=path, watched_kinds=parse_kinds(thresholds or [])))
    return tuple(sensors)
