"""Builders and fakes shared by the test modules."""

from __future__ import annotations

from typing import Any, Iterable

from core.entities import ActionDescriptor, IncomingSignal, MessageType, Variant
from core.protocol import CRITICAL_THRESHOLD_INTERFACE, PROPERTIES_CHANGED, PROPERTIES_INTERFACE
from infra.exceptions import RemoteCallError


def make_signal(
    path: str,
    properties: Any = (),
    interface: Any = CRITICAL_THRESHOLD_INTERFACE,
    message_type: MessageType = MessageType.SIGNAL,
    member: str = PROPERTIES_CHANGED,
    extra_args: Iterable[Any] = ((),),
) -> IncomingSignal:
    changed = properties if isinstance(properties, RecordingEntries) else tuple(properties)
    return IncomingSignal(
        message_type=message_type,
        interface=PROPERTIES_INTERFACE,
        member=member,
        path=path,
        args=(interface, changed, *extra_args),
    )


def boolean(value: bool) -> Variant:
    return Variant("b", value)


class RecordingCaller:
    def __init__(self, fail: bool = False) -> None:
        self.calls: list[ActionDescriptor] = []
        self.fail = fail

    def call_action(self, action: ActionDescriptor) -> None:
        self.calls.append(action)
        if self.fail:
            raise RemoteCallError("org.freedesktop.DBus.Error.ServiceUnknown")


class UntouchableValue:
    """Stands in for a payload that must never be read."""

    def __getattr__(self, name: str) -> Any:
        raise AssertionError(f"skipped value was read ({name})")

    def __bool__(self) -> bool:
        raise AssertionError("skipped value was evaluated")


class RecordingEntries:
    """Changed-properties sequence that records which entries were read."""

    def __init__(self, entries: Iterable[tuple[str, Any]]) -> None:
        self._entries = list(entries)
        self.read: list[str] = []

    def __iter__(self):
        for name, value in self._entries:
            self.read.append(name)
            yield name, value
