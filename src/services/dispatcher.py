"""Issues the configured remote action when a threshold asserts."""

from __future__ import annotations

import logging
from typing import Protocol

from core.entities import ActionDescriptor, AssertionResult
from infra.exceptions import RemoteCallError

logger = logging.getLogger("monitor.dispatcher")


class RemoteCaller(Protocol):
    def call_action(self, action: ActionDescriptor) -> None:
        ...


class ActionDispatcher:
    """Requests one fixed state transition for any triggering sensor.

    The remote call carries only the configured action; which sensor and
    threshold fired is reported in the local log line. Failures are logged and
    never retried.
    """

    def __init__(self, caller: RemoteCaller, action: ActionDescriptor) -> None:
        self._caller = caller
        self._action = action

    @property
    def action(self) -> ActionDescriptor:
        return self._action

    def trigger(self, sensor_path: str, property_name: str) -> bool:
        logger.warning("Sensor %s asserted %s!", sensor_path, property_name)
        try:
            self._caller.call_action(self._action)
        except RemoteCallError as exc:
            logger.error("Failed to trigger host transition (%s): %s", self._action.describe(), exc)
            return False
        logger.info("Requested %s", self._action.describe())
        return True

    def dispatch(self, result: AssertionResult) -> bool:
        return self.trigger(result.sensor_path, result.property_name)
