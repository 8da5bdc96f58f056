"""Bus message containers used across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class MessageType(Enum):
    METHOD_CALL = "method_call"
    METHOD_RETURN = "method_return"
    ERROR = "error"
    SIGNAL = "signal"
    INVALID = "invalid"


@dataclass(frozen=True)
class Variant:
    """A self-describing value: its D-Bus type signature plus the payload."""

    signature: str
    value: Any


@dataclass(frozen=True)
class IncomingSignal:
    """One inbound bus message, converted from the transport's representation.

    ``args`` holds the positional body arguments. For a ``PropertiesChanged``
    signal, ``args[1]`` is the ordered sequence of ``(name, Variant)`` pairs.
    """

    message_type: MessageType
    interface: Optional[str]
    member: Optional[str]
    path: Optional[str]
    args: tuple[Any, ...] = field(default_factory=tuple)
    sender: Optional[str] = None


@dataclass(frozen=True)
class AssertionResult:
    """A sensor threshold property that transitioned to true."""

    sensor_path: str
    property_name: str
