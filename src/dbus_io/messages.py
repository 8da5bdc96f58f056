"""Conversion of dbus-python messages into pipeline entities."""

from __future__ import annotations

from typing import Any

import dbus
import dbus.lowlevel

from core.entities import IncomingSignal, MessageType, Variant
from infra.exceptions import DecodeError

_MESSAGE_TYPES = {
    dbus.lowlevel.MESSAGE_TYPE_METHOD_CALL: MessageType.METHOD_CALL,
    dbus.lowlevel.MESSAGE_TYPE_METHOD_RETURN: MessageType.METHOD_RETURN,
    dbus.lowlevel.MESSAGE_TYPE_ERROR: MessageType.ERROR,
    dbus.lowlevel.MESSAGE_TYPE_SIGNAL: MessageType.SIGNAL,
}

# Order matters: the dbus integer and string types are subclasses of int/str.
_BASIC_SIGNATURES: tuple[tuple[type, str], ...] = (
    (dbus.Boolean, "b"),
    (dbus.Byte, "y"),
    (dbus.Int16, "n"),
    (dbus.UInt16, "q"),
    (dbus.Int32, "i"),
    (dbus.UInt32, "u"),
    (dbus.Int64, "x"),
    (dbus.UInt64, "t"),
    (dbus.Double, "d"),
    (dbus.ObjectPath, "o"),
    (dbus.Signature, "g"),
    (dbus.String, "s"),
    (dbus.ByteArray, "ay"),
    (bool, "b"),
    (str, "s"),
    (bytes, "ay"),
    (float, "d"),
    (int, "i"),
)


def signature_of(value: Any) -> str:
    """Return the D-Bus type signature of a value unpacked by dbus-python."""
    unix_fd = getattr(dbus, "UnixFd", None)
    if unix_fd is not None and isinstance(value, unix_fd):
        return "h"
    for value_type, code in _BASIC_SIGNATURES:
        if isinstance(value, value_type):
            return code
    if isinstance(value, dbus.Dictionary):
        if value.signature:
            return f"a{{{value.signature}}}"
        return "a{sv}"
    if isinstance(value, dbus.Array):
        if value.signature:
            return f"a{value.signature}"
        return f"a{signature_of(value[0])}" if len(value) else "av"
    if isinstance(value, (dbus.Struct, tuple)):
        return "(" + "".join(signature_of(item) for item in value) + ")"
    return "v"


def _convert_argument(value: Any) -> Any:
    if isinstance(value, dbus.Dictionary):
        return tuple((str(key), Variant(signature_of(item), item)) for key, item in value.items())
    if isinstance(value, (dbus.String, dbus.ObjectPath)):
        return str(value)
    return value


def signal_from_message(message: "dbus.lowlevel.Message") -> IncomingSignal:
    """Build an :class:`IncomingSignal` from a raw dbus-python message.

    Dictionaries become ordered ``(key, Variant)`` tuples so property maps keep
    their wire order and each value keeps its type tag.
    """
    try:
        raw_args = message.get_args_list()
    except (TypeError, ValueError) as exc:
        raise DecodeError(f"Cannot unpack message body from {message.get_path()}: {exc}") from exc

    return IncomingSignal(
        message_type=_MESSAGE_TYPES.get(message.get_type(), MessageType.INVALID),
        interface=message.get_interface(),
        member=message.get_member(),
        path=message.get_path(),
        args=tuple(_convert_argument(arg) for arg in raw_args),
        sender=message.get_sender(),
    )
