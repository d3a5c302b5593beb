"""Integration test fixtures.

These fixtures set up the full orchestrator with real file I/O under
tmp_path and a deterministic fake provider.
"""

from pathlib import Path

import pytest

from repogen.application.generation_orchestrator import GenerationOrchestrator
from repogen.domain.events.emitter import RunEventEmitter

from tests.integration.providers.fake_response_provider import FakeResponseProvider


class RecordingObserver:
    def __init__(self) -> None:
        self.events = []

    def on_event(self, event) -> None:
        self.events.append(event)

    @property
    def types(self) -> list[str]:
        return [event.event_type.value for event in self.events]


@pytest.fixture
def output_root(tmp_path: Path) -> Path:
    """Output root for one run (not created up front)."""
    return tmp_path / "out" / "project"


@pytest.fixture
def fake_provider() -> FakeResponseProvider:
    return FakeResponseProvider()


@pytest.fixture
def recorder() -> RecordingObserver:
    return RecordingObserver()


@pytest.fixture
def orchestrator(fake_provider: FakeResponseProvider, recorder: RecordingObserver) -> GenerationOrchestrator:
    emitter = RunEventEmitter()
    emitter.subscribe(recorder)
    return GenerationOrchestrator(provider=fake_provider, timeout_seconds=30, event_emitter=emitter)
