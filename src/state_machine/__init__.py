"""State machine package exports."""

from .controller import EventLoop, EventLoopStateMachine, MessageTransport

__all__ = [
    "EventLoop",
    "EventLoopStateMachine",
    "MessageTransport",
]
