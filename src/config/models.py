"""Dataclass definitions for application configuration."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal, Optional

from core.entities import ActionDescriptor
from core.registry import DEFAULT_SENSORS, SensorConfig
from core.thresholds import ThresholdKind


@dataclass(frozen=True)
class BusConfig:
    """D-Bus connection configuration."""

    # "system", "session", or an explicit address such as "unix:path=/run/dbus/system_bus_socket".
    address: str = "system"
    # Remote call timeout in seconds; negative uses the libdbus default.
    call_timeout_s: float = -1.0


@dataclass(frozen=True)
class MonitorConfig:
    """Classification behaviour.

    ``per_sensor`` consults the sensor table for every signal and ignores
    unknown senders. ``global`` applies ``global_kinds`` to every sender and
    cannot express different kinds per sensor.
    """

    mode: Literal["per_sensor", "global"] = "per_sensor"
    global_kinds: ThresholdKind = ThresholdKind.HIGH | ThresholdKind.LOW


@dataclass(frozen=True)
class LoggingConfig:
    """Logging configuration."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    filepath: Optional[Path] = Path("logs/threshold-monitor.log")
    max_bytes: int = 5 * 1024 * 1024
    backup_count: int = 5
    console: bool = True

    def resolved_path(self) -> Optional[Path]:
        if self.filepath is None:
            return None
        path = self.filepath if isinstance(self.filepath, Path) else Path(self.filepath)
        return path.expanduser().resolve()


@dataclass(frozen=True)
class Config:
    """Root configuration object."""

    bus: BusConfig = field(default_factory=BusConfig)
    monitor: MonitorConfig = field(default_factory=MonitorConfig)
    sensors: tuple[SensorConfig, ...] = DEFAULT_SENSORS
    action: ActionDescriptor = field(default_factory=ActionDescriptor)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
