"""Descriptor for the remote action taken on threshold assertion."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.protocol import (
    CHASSIS_INTERFACE,
    CHASSIS_OBJECT_PATH,
    CHASSIS_SERVICE,
    PROPERTIES_INTERFACE,
    PROPERTIES_SET,
    REQUESTED_POWER_TRANSITION,
    TRANSITION_OFF,
)


@dataclass(frozen=True)
class ActionDescriptor:
    """A property write on a remote object: ``Properties.Set(interface, property, value)``."""

    service: str = CHASSIS_SERVICE
    object_path: str = CHASSIS_OBJECT_PATH
    interface: str = CHASSIS_INTERFACE
    property: str = REQUESTED_POWER_TRANSITION
    value: str = TRANSITION_OFF

    # Fixed call shape; only the target and the written value are configurable.
    method_interface: str = field(init=False, default=PROPERTIES_INTERFACE)
    method: str = field(init=False, default=PROPERTIES_SET)
    signature: str = field(init=False, default="ssv")

    def arguments(self) -> tuple[str, str, str]:
        return self.interface, self.property, self.value

    def describe(self) -> str:
        return f"{self.service}{self.object_path} {self.interface}.{self.property}={self.value}"
