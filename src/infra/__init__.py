"""Infrastructure helpers: logging setup and the error taxonomy."""

from .exceptions import (
    ConfigurationError,
    DecodeError,
    MonitorError,
    RemoteCallError,
    SetupError,
    TransportError,
    install_exception_hook,
)
from .logging import configure_logging

__all__ = [
    "ConfigurationError",
    "DecodeError",
    "MonitorError",
    "RemoteCallError",
    "SetupError",
    "TransportError",
    "configure_logging",
    "install_exception_hook",
]
