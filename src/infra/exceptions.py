"""Error taxonomy and global exception handling for the monitor."""

from __future__ import annotations

import logging
import sys
import threading
from dataclasses import dataclass
from typing import Callable, Optional

logger = logging.getLogger("app.exceptions")


class MonitorError(Exception):
    """Base class for all threshold monitor errors."""


class ConfigurationError(MonitorError, ValueError):
    """Configuration is invalid (bad file, duplicate sensor, unknown threshold)."""


class SetupError(MonitorError):
    """The bus connection or the signal subscription could not be established."""


class DecodeError(MonitorError):
    """An inbound message claiming to be ours has an unexpected shape or type."""


class TransportError(MonitorError):
    """The bus failed while polling or dispatching; the event loop cannot continue."""


class RemoteCallError(MonitorError):
    """A remote method invocation reported failure."""


def install_exception_hook() -> None:
    """Install global exception handlers for main thread and other threads."""

    hook = _ExceptionHook()
    hook.install()


@dataclass
class _ExceptionHook:
    _original_excepthook: Optional[Callable] = None
    _original_thread_excepthook: Optional[Callable] = None

    def install(self) -> None:
        self._original_excepthook = sys.excepthook
        sys.excepthook = self._handle_exception

        if hasattr(threading, "excepthook"):
            self._original_thread_excepthook = threading.excepthook
            threading.excepthook = self._handle_thread_exception  # type: ignore[assignment]

    def _handle_exception(self, exc_type, exc_value, exc_traceback) -> None:
        if issubclass(exc_type, KeyboardInterrupt):
            if self._original_excepthook:
                self._original_excepthook(exc_type, exc_value, exc_traceback)
            return
        logger.critical(
            "Unhandled exception: %s",
            exc_value,
            exc_info=(exc_type, exc_value, exc_traceback),
        )
        if self._original_excepthook:
            self._original_excepthook(exc_type, exc_value, exc_traceback)

    def _handle_thread_exception(self, args: "threading.ExceptHookArgs") -> None:  # pragma: no cover
        logger.critical(
            "Unhandled thread exception in %s: %s",
            args.thread.name if args.thread else "<unknown>",
            args.exc_value,
            exc_info=(args.exc_type, args.exc_value, args.exc_traceback),
        )
        if self._original_thread_excepthook:
            self._original_thread_excepthook(args)
