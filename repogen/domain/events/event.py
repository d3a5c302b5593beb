"""Run event payload model."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, Field

from repogen.domain.events.event_types import RunEventType


class RunEvent(BaseModel):
    """Immutable event payload for run notifications."""

    model_config = {"frozen": True}

    event_type: RunEventType
    output_root: str
    timestamp: datetime
    path: str | None = None
    position: int | None = None  # 1-based index in the generation order
    total: int | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
