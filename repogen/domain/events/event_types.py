"""Run event types for observer pattern notifications."""

from enum import Enum


class RunEventType(str, Enum):
    """Typed events emitted while a generation run progresses."""

    # Run lifecycle
    RUN_STARTED = "run_started"
    RUN_COMPLETED = "run_completed"
    RUN_FAILED = "run_failed"

    # Output root
    OUTPUT_RESET = "output_reset"

    # Per-file
    FILE_STARTED = "file_started"
    FILE_WRITTEN = "file_written"

    # Warnings
    FILE_EMPTY = "file_empty"
    DEPENDENCY_UNRESOLVED = "dependency_unresolved"
