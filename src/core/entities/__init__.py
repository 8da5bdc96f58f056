"""Entity definitions for domain objects."""

from .action import ActionDescriptor
from .signal import AssertionResult, IncomingSignal, MessageType, Variant

__all__ = ["ActionDescriptor", "AssertionResult", "IncomingSignal", "MessageType", "Variant"]
