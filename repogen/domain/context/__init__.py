"""Context accumulated across sequential generation steps."""

from .generation_context import DEFAULT_MAX_CHARS_PER_ENTRY, GenerationContext, render_context

__all__ = ["DEFAULT_MAX_CHARS_PER_ENTRY", "GenerationContext", "render_context"]
