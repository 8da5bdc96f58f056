"""Event loop orchestration for the bus connection."""

from __future__ import annotations

import logging
from typing import Optional, Protocol

from statemachine import State, StateMachine

from infra.exceptions import TransportError

logger = logging.getLogger("monitor.loop")


class MessageTransport(Protocol):
    def process(self) -> bool:
        """Dispatch one pending message; return False when nothing was pending."""

    def wait(self) -> None:
        """Block until the connection has activity."""


class EventLoopStateMachine(StateMachine):
    """Draining while messages may be pending, Waiting while blocked on the bus."""

    draining = State("Draining", initial=True)
    waiting = State("Waiting")

    exhausted = draining.to(waiting)
    activity = waiting.to(draining)

    def on_enter_waiting(self) -> None:
        logger.debug("No pending messages; waiting for bus activity.")

    def on_enter_draining(self) -> None:
        logger.debug("Draining pending messages.")


class EventLoop:
    """Drives the transport forever; returns only by raising TransportError."""

    def __init__(self, transport: MessageTransport, state_machine: Optional[EventLoopStateMachine] = None) -> None:
        self.transport = transport
        self.state_machine = state_machine or EventLoopStateMachine()

    @property
    def state_name(self) -> str:
        state = self.state_machine.current_state
        return getattr(state, "id", str(state))

    def step(self) -> None:
        """Run the action of the current state once."""
        if self.state_name == "draining":
            if not self.transport.process():
                self.state_machine.exhausted()
            return

        self.transport.wait()
        self.state_machine.activity()

    def run(self) -> None:
        logger.info("Event loop started in state %s", self.state_name)
        try:
            while True:
                self.step()
        except TransportError as exc:
            logger.error("Event loop terminated: %s", exc)
            raise
