"""Run event system for observer pattern notifications."""

from repogen.domain.events.event_types import RunEventType
from repogen.domain.events.event import RunEvent
from repogen.domain.events.observer import RunObserver
from repogen.domain.events.emitter import RunEventEmitter
from repogen.domain.events.stderr_observer import StderrEventObserver

__all__ = [
    "RunEventType",
    "RunEvent",
    "RunObserver",
    "RunEventEmitter",
    "StderrEventObserver",
]
