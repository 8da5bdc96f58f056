"""Acceptance rules for critical-threshold property-change signals."""

from __future__ import annotations

import logging

from core.entities import IncomingSignal, MessageType
from core.protocol import CRITICAL_THRESHOLD_INTERFACE, PROPERTIES_CHANGED, PROPERTIES_INTERFACE
from infra.exceptions import DecodeError

logger = logging.getLogger("monitor.filter")


class SignalFilter:
    """Decides whether an incoming message is a threshold property change.

    A message is accepted only when it is a signal, its interface/member are
    exactly ``org.freedesktop.DBus.Properties.PropertiesChanged`` and its first
    argument names the watched interface. Anything else is rejected silently.
    A property-change signal whose first argument cannot be read as a string
    raises :class:`DecodeError` instead, so corrupt messages are not mistaken
    for unrelated ones.
    """

    def __init__(self, interface: str = CRITICAL_THRESHOLD_INTERFACE) -> None:
        self._interface = interface

    @property
    def interface(self) -> str:
        return self._interface

    def accept(self, signal: IncomingSignal) -> bool:
        if signal.message_type is not MessageType.SIGNAL:
            return False
        if signal.interface != PROPERTIES_INTERFACE or signal.member != PROPERTIES_CHANGED:
            return False

        changed_interface = first_argument(signal)
        if changed_interface != self._interface:
            logger.debug("Ignoring property change on %s from %s", changed_interface, signal.path)
            return False
        return True

    def match_rule(self) -> str:
        """Render the bus match expression subscribing to the accepted signals."""
        return (
            f"type='signal',interface='{PROPERTIES_INTERFACE}',"
            f"member='{PROPERTIES_CHANGED}',arg0='{self._interface}'"
        )


def first_argument(signal: IncomingSignal) -> str:
    if not signal.args:
        raise DecodeError(f"{PROPERTIES_CHANGED} from {signal.path} carries no interface argument")
    value = signal.args[0]
    if not isinstance(value, str):
        raise DecodeError(
            f"{PROPERTIES_CHANGED} from {signal.path}: expected interface name string, got {type(value).__name__}"
        )
    return value
