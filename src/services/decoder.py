"""Walks a changed-properties map looking for an asserted threshold."""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from core.entities import AssertionResult, IncomingSignal, Variant
from core.registry import SensorConfig
from core.thresholds import matches
from infra.exceptions import DecodeError

logger = logging.getLogger("monitor.decoder")

BOOLEAN_SIGNATURE = "b"


def changed_properties(signal: IncomingSignal) -> Iterable[Any]:
    """Return the second positional argument: the ordered (name, value) entries."""
    if len(signal.args) < 2:
        raise DecodeError(f"Property change from {signal.path} carries no changed-properties argument")
    entries = signal.args[1]
    if isinstance(entries, Mapping):
        return entries.items()
    if isinstance(entries, (str, bytes)) or not hasattr(entries, "__iter__"):
        raise DecodeError(
            f"Property change from {signal.path}: changed properties must be a sequence, "
            f"got {type(entries).__name__}"
        )
    return entries


def find_assertion(sensor: SensorConfig, entries: Iterable[Any]) -> Optional[AssertionResult]:
    """Return the first watched threshold property whose value is true.

    Entries whose name is not watched for ``sensor`` are skipped without
    inspecting their value. Iteration stops at the first assertion; later
    entries are never read.
    """
    for entry in entries:
        name, value = _split_entry(entry)
        if not matches(sensor, name):
            continue
        if read_boolean(name, value):
            return AssertionResult(sensor_path=sensor.path, property_name=name)
        logger.debug("%s: %s is clear", sensor.path, name)
    return None


def read_boolean(name: str, value: Any) -> bool:
    if not isinstance(value, Variant):
        raise DecodeError(f"Property {name}: expected a variant, got {type(value).__name__}")
    if value.signature != BOOLEAN_SIGNATURE:
        raise DecodeError(f"Property {name}: expected boolean variant, got signature {value.signature!r}")
    return bool(value.value)


def _split_entry(entry: Any) -> tuple[str, Any]:
    try:
        name, value = entry
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"Changed-properties entry is not a (name, value) pair: {entry!r}") from exc
    if not isinstance(name, str):
        raise DecodeError(f"Changed-properties entry name must be a string, got {type(name).__name__}")
    return name, value
