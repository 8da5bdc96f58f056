"""Static registry of monitored sensors."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Iterator, Optional

from core.thresholds import ThresholdKind, describe_kinds
from infra.exceptions import ConfigurationError

logger = logging.getLogger("monitor.registry")


@dataclass(frozen=True)
class SensorConfig:
    """A sensor object path and the threshold kinds watched on it."""

    path: str
    watched_kinds: ThresholdKind = ThresholdKind.HIGH | ThresholdKind.LOW


# Monitor low and high events on Temp1, only high events on Temp2.
DEFAULT_SENSORS: tuple[SensorConfig, ...] = (
    SensorConfig("/xyz/openbmc_project/sensors/temperature/Temp1", ThresholdKind.LOW | ThresholdKind.HIGH),
    SensorConfig("/xyz/openbmc_project/sensors/temperature/Temp2", ThresholdKind.HIGH),
)


class SensorRegistry:
    """Read-only lookup of sensor configuration by exact object path."""

    def __init__(self, sensors: Iterable[SensorConfig]) -> None:
        table: dict[str, SensorConfig] = {}
        for sensor in sensors:
            if sensor.path in table:
                raise ConfigurationError(f"Duplicate sensor path in configuration: {sensor.path}")
            table[sensor.path] = sensor
        self._sensors = MappingProxyType(table)

    def lookup(self, path: Optional[str]) -> Optional[SensorConfig]:
        if not path:
            return None
        return self._sensors.get(path)

    def __contains__(self, path: object) -> bool:
        return path in self._sensors

    def __iter__(self) -> Iterator[SensorConfig]:
        return iter(self._sensors.values())

    def __len__(self) -> int:
        return len(self._sensors)

    def log_summary(self) -> None:
        if not self._sensors:
            logger.warning("No sensors configured; no threshold event will ever be acted on.")
            return
        for sensor in self._sensors.values():
            logger.info("Watching %s for thresholds: %s", sensor.path, describe_kinds(sensor.watched_kinds))
