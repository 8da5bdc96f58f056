"""Threshold kinds and their wire property names."""

from __future__ import annotations

from enum import Flag
from types import MappingProxyType
from typing import TYPE_CHECKING, Iterable, Mapping, Optional

from infra.exceptions import ConfigurationError

if TYPE_CHECKING:
    from core.registry import SensorConfig


class ThresholdKind(Flag):
    """Alarm kinds a sensor may be watched for; combine with ``|``."""

    NONE = 0
    HIGH = 0x1
    LOW = 0x2


PROPERTY_NAMES: Mapping[ThresholdKind, str] = MappingProxyType(
    {
        ThresholdKind.HIGH: "CriticalAlarmHigh",
        ThresholdKind.LOW: "CriticalAlarmLow",
    }
)

_KINDS_BY_PROPERTY: Mapping[str, ThresholdKind] = MappingProxyType(
    {name: kind for kind, name in PROPERTY_NAMES.items()}
)


def kind_for_property(property_name: str) -> Optional[ThresholdKind]:
    """Return the threshold kind a property represents, or None if unrelated."""
    return _KINDS_BY_PROPERTY.get(property_name)


def property_for_kind(kind: ThresholdKind) -> str:
    return PROPERTY_NAMES[kind]


def matches(config: "SensorConfig", property_name: str) -> bool:
    """Return whether ``property_name`` is a threshold the sensor is watched for."""
    kind = kind_for_property(property_name)
    if kind is None:
        return False
    return bool(kind & config.watched_kinds)


def parse_kinds(names: Iterable[str]) -> ThresholdKind:
    """Combine threshold names such as ``["low", "high"]`` into one bitmask."""
    if isinstance(names, str):
        names = [names]
    elif not isinstance(names, (list, tuple, set, frozenset)):
        raise ConfigurationError(f"Unknown threshold kind: {names!r}")
    combined = ThresholdKind.NONE
    for name in names:
        key = str(name).strip().upper()
        if key == "NONE" or key not in ThresholdKind.__members__:
            raise ConfigurationError(f"Unknown threshold kind: {name!r}")
        combined |= ThresholdKind[key]
    return combined


def describe_kinds(kinds: ThresholdKind) -> str:
    names = [kind.name.lower() for kind in PROPERTY_NAMES if kind & kinds]
    return ",".join(names) if names else "none"
