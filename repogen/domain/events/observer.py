"""Observer interface for run events."""

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from repogen.domain.events.event import RunEvent


class RunObserver(Protocol):
    """Anything with an `on_event(event)` method can watch a run.

    Called synchronously between generation steps, so it should return quickly.
    """

    def on_event(self, event: "RunEvent") -> None: ...
