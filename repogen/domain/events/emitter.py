"""Fan-out of run events to the observers attached to one run."""

import logging

from repogen.domain.events.event import RunEvent
from repogen.domain.events.observer import RunObserver

logger = logging.getLogger(__name__)


class RunEventEmitter:
    """Delivers every emitted RunEvent to each subscribed observer, in subscription order.

    An observer that raises is logged and skipped; the run and the remaining
    observers are unaffected.
    """

    def __init__(self) -> None:
        self._observers: list[RunObserver] = []

    def subscribe(self, observer: RunObserver) -> None:
        self._observers.append(observer)

    def emit(self, event: RunEvent) -> None:
        for observer in self._observers:
            try:
                observer.on_event(event)
            except Exception as e:
                logger.warning(
                    f"Observer {observer!r} failed on {event.event_type.value} "
                    f"for {event.path or event.output_root}: {e}"
                )
