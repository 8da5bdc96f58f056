"""D-Bus communication helpers for the threshold monitor."""

from .messages import signal_from_message, signature_of
from .transport import DbusTransport

__all__ = [
    "DbusTransport",
    "signal_from_message",
    "signature_of",
]
