"""Append-only context of files already generated in the current run."""

from types import MappingProxyType
from typing import Mapping

from repogen.domain.errors import ContextError

# Characters kept from each file when rendering the context.
DEFAULT_MAX_CHARS_PER_ENTRY = 2500


class GenerationContext:
    """Mapping of path -> generated content, in generation order.

    Owned by a single run. Entries are never removed or rewritten; a second
    update for the same path raises ContextError.
    """

    def __init__(self) -> None:
        self._entries: dict[str, str] = {}

    def update(self, path: str, content: str) -> None:
        """Append the written content for `path`."""
        if path in self._entries:
            raise ContextError(f"Context entry already recorded for '{path}'")
        self._entries[path] = content

    def entries(self) -> Mapping[str, str]:
        """Read-only view of the recorded entries."""
        return MappingProxyType(self._entries)

    def paths(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def render_context(
    context: GenerationContext,
    max_chars_per_entry: int = DEFAULT_MAX_CHARS_PER_ENTRY,
) -> str:
    """Render every recorded file as a labeled, truncated excerpt.

    Truncation is a plain prefix cut to `max_chars_per_entry` characters.
    An empty context renders as an empty string.

    Raises:
        ValueError: If max_chars_per_entry is negative
    """
    if max_chars_per_entry < 0:
        raise ValueError("max_chars_per_entry must be >= 0")

    blocks = []
    for path, content in context.entries().items():
        excerpt = content[:max_chars_per_entry]
        blocks.append(f"### FILE: {path}\n```\n{excerpt}\n```")
    return "\n\n".join(blocks)
