"""D-Bus connection used by the monitor event loop."""

from __future__ import annotations

import logging
from typing import Callable, Optional

import dbus
import dbus.bus
import dbus.lowlevel
from dbus.exceptions import DBusException
from dbus.mainloop.glib import DBusGMainLoop
from gi.repository import GLib

from config.models import BusConfig
from core.entities import ActionDescriptor, IncomingSignal
from core.protocol import DISCONNECTED, LOCAL_INTERFACE, PROPERTIES_CHANGED, PROPERTIES_INTERFACE
from infra.exceptions import DecodeError, RemoteCallError, SetupError, TransportError

from .messages import signal_from_message

logger = logging.getLogger("bus.transport")

SignalCallback = Callable[[IncomingSignal], object]


class DbusTransport:
    """A single client connection driven by the default GLib main context.

    ``process`` dispatches whatever is already pending without blocking and
    reports whether anything was done; ``wait`` blocks until the connection
    has activity. Both raise :class:`TransportError` once the bus has gone
    away.
    """

    def __init__(self, config: BusConfig, name: str = "dbus") -> None:
        self._name = name
        self._config = config
        self._bus: Optional[dbus.bus.BusConnection] = None
        self._context: Optional[GLib.MainContext] = None
        self._handler: Optional[SignalCallback] = None
        self._failure: Optional[TransportError] = None

    @property
    def is_open(self) -> bool:
        return self._bus is not None

    @property
    def config(self) -> BusConfig:
        return self._config

    def open(self) -> None:
        if self._bus is not None:
            return
        mainloop = DBusGMainLoop()
        address = self._config.address
        try:
            if address == "system":
                bus = dbus.SystemBus(private=True, mainloop=mainloop)
            elif address == "session":
                bus = dbus.SessionBus(private=True, mainloop=mainloop)
            else:
                bus = dbus.bus.BusConnection(address, mainloop=mainloop)
        except DBusException as exc:
            raise SetupError(f"can't connect to dbus ({address}): {exc}") from exc

        bus.set_exit_on_disconnect(False)
        self._bus = bus
        self._context = GLib.MainContext.default()
        self._failure = None
        logger.info("%s: connected to %s bus as %s", self._name, address, bus.get_unique_name())

    def add_match(self, rule: str, handler: SignalCallback) -> None:
        """Subscribe to ``rule`` and route every received message to ``handler``."""
        bus = self._require_bus()
        try:
            bus.add_match_string(rule)
        except DBusException as exc:
            raise SetupError(f"can't establish match {rule!r}: {exc}") from exc
        if self._handler is None:
            bus.add_message_filter(self._filter_message)
        self._handler = handler
        logger.info("%s: subscribed with match %s", self._name, rule)

    def process(self) -> bool:
        self._raise_failure()
        context = self._require_context()
        try:
            worked = context.iteration(False)
        except GLib.Error as exc:
            raise TransportError(f"{self._name}: can't process dbus events: {exc}") from exc
        self._raise_failure()
        return bool(worked)

    def wait(self) -> None:
        self._raise_failure()
        context = self._require_context()
        try:
            context.iteration(True)
        except GLib.Error as exc:
            raise TransportError(f"{self._name}: wait for dbus events failed: {exc}") from exc
        self._raise_failure()

    def call_action(self, action: ActionDescriptor) -> None:
        bus = self._require_bus()
        interface, prop, value = action.arguments()
        try:
            bus.call_blocking(
                action.service,
                action.object_path,
                action.method_interface,
                action.method,
                action.signature,
                [interface, prop, dbus.String(value, variant_level=1)],
                timeout=self._config.call_timeout_s,
            )
        except DBusException as exc:
            raise RemoteCallError(exc.get_dbus_message() or str(exc)) from exc

    def close(self) -> None:
        if self._bus is None:
            return
        logger.info("%s: closing connection", self._name)
        try:
            self._bus.close()
        finally:
            self._bus = None
            self._context = None
            self._handler = None

    def _filter_message(self, connection, message):
        if message.is_signal(LOCAL_INTERFACE, DISCONNECTED):
            logger.error("%s: bus connection closed by peer", self._name)
            self._failure = TransportError(f"{self._name}: disconnected from bus")
            return dbus.lowlevel.HANDLER_RESULT_NOT_YET_HANDLED

        # Only PropertiesChanged signals are unpacked.
        if message.get_type() != dbus.lowlevel.MESSAGE_TYPE_SIGNAL or not message.is_signal(
            PROPERTIES_INTERFACE, PROPERTIES_CHANGED
        ):
            return dbus.lowlevel.HANDLER_RESULT_NOT_YET_HANDLED

        if self._handler is not None:
            try:
                signal = signal_from_message(message)
                self._handler(signal)
            except DecodeError as exc:
                logger.warning("%s: dropping undecodable message: %s", self._name, exc)
            except Exception:
                logger.exception("%s: signal handler failed", self._name)
        return dbus.lowlevel.HANDLER_RESULT_NOT_YET_HANDLED

    def _raise_failure(self) -> None:
        if self._failure is not None:
            raise self._failure

    def _require_bus(self) -> dbus.bus.BusConnection:
        if self._bus is None:
            raise TransportError(f"{self._name}: connection is not open")
        return self._bus

    def _require_context(self) -> GLib.MainContext:
        if self._context is None:
            raise TransportError(f"{self._name}: connection is not open")
        return self._context
