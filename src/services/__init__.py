"""Message handling services for the threshold monitor."""

from .decoder import changed_properties, find_assertion, read_boolean
from .dispatcher import ActionDispatcher, RemoteCaller
from .pipeline import SensorResolver, SignalHandler, evaluate_signal
from .signal_filter import SignalFilter

__all__ = [
    "ActionDispatcher",
    "RemoteCaller",
    "SensorResolver",
    "SignalFilter",
    "SignalHandler",
    "changed_properties",
    "evaluate_signal",
    "find_assertion",
    "read_boolean",
]
