"""Stderr event observer for CLI integration."""

import click

from repogen.domain.events.event import RunEvent


class StderrEventObserver:
    """Emits events as structured lines to stderr."""

    def on_event(self, event: RunEvent) -> None:
        """Emit event as structured line to stderr."""
        parts = [f"[EVENT] {event.event_type.value}"]
        if event.position is not None and event.total is not None:
            parts.append(f"step={event.position}/{event.total}")
        if event.path:
            parts.append(f"path={event.path}")
        if "error" in event.metadata:
            parts.append(f"error={event.metadata['error']}")
        click.echo(" ".join(parts), err=True)
