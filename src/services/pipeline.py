"""Per-message pipeline: filter, decode, dispatch."""

from __future__ import annotations

import logging
from typing import Optional

from core.entities import AssertionResult, IncomingSignal
from core.registry import SensorConfig, SensorRegistry
from core.thresholds import ThresholdKind
from infra.exceptions import ConfigurationError, DecodeError

from .decoder import changed_properties, find_assertion
from .dispatcher import ActionDispatcher
from .signal_filter import SignalFilter

logger = logging.getLogger("monitor.pipeline")


class SensorResolver:
    """Chooses which sensor configuration applies to a signal's object path.

    In ``per_sensor`` mode only registered paths resolve. In ``global`` mode
    every sender resolves to the same watched kinds, so per-sensor settings
    are ignored entirely.
    """

    def __init__(
        self,
        registry: SensorRegistry,
        mode: str = "per_sensor",
        global_kinds: ThresholdKind = ThresholdKind.HIGH | ThresholdKind.LOW,
    ) -> None:
        if mode not in {"per_sensor", "global"}:
            raise ConfigurationError(f"Unknown classification mode: {mode!r}")
        self._registry = registry
        self._mode = mode
        self._global_kinds = global_kinds

    @property
    def mode(self) -> str:
        return self._mode

    def resolve(self, path: Optional[str]) -> Optional[SensorConfig]:
        if self._mode == "global":
            if not path:
                return None
            return SensorConfig(path=path, watched_kinds=self._global_kinds)
        return self._registry.lookup(path)


def evaluate_signal(
    signal: IncomingSignal,
    signal_filter: SignalFilter,
    resolver: SensorResolver,
) -> Optional[AssertionResult]:
    """Return the assertion carried by ``signal``, if any.

    Raises :class:`DecodeError` when a signal that passed the filter's header
    checks turns out to be malformed.
    """
    if not signal_filter.accept(signal):
        return None

    sensor = resolver.resolve(signal.path)
    if sensor is None:
        logger.debug("Ignoring threshold change from unconfigured sensor %s", signal.path)
        return None

    return find_assertion(sensor, changed_properties(signal))


class SignalHandler:
    """Callback invoked by the transport for every received message."""

    def __init__(
        self,
        signal_filter: SignalFilter,
        resolver: SensorResolver,
        dispatcher: ActionDispatcher,
    ) -> None:
        self._filter = signal_filter
        self._resolver = resolver
        self._dispatcher = dispatcher

    def __call__(self, signal: IncomingSignal) -> Optional[AssertionResult]:
        try:
            result = evaluate_signal(signal, self._filter, self._resolver)
        except DecodeError as exc:
            logger.warning("Dropping malformed message from %s: %s", signal.path, exc)
            return None

        if result is not None:
            self._dispatcher.dispatch(result)
        return result
