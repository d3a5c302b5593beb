"""Tests for GenerationContext and render_context."""

import pytest

from repogen.domain.context.generation_context import (
    DEFAULT_MAX_CHARS_PER_ENTRY,
    GenerationContext,
    render_context,
)
from repogen.domain.errors import ContextError


class TestGenerationContext:
    def test_update_appends_in_order(self):
        ctx = GenerationContext()
        ctx.update("b.py", "B")
        ctx.update("a.py", "A")

        assert ctx.paths() == ["b.py", "a.py"]
        assert dict(ctx.entries()) == {"b.py": "B", "a.py": "A"}
        assert "a.py" in ctx
        assert len(ctx) == 2

    def test_entries_cannot_be_rewritten(self):
        ctx = GenerationContext()
        ctx.update("a.py", "A")

        with pytest.raises(ContextError):
            ctx.update("a.py", "changed")

        assert ctx.entries()["a.py"] == "A"

    def test_entries_view_is_read_only(self):
        ctx = GenerationContext()
        ctx.update("a.py", "A")

        with pytest.raises(TypeError):
            ctx.entries()["a.py"] = "x"  # type: ignore[index]


class TestRenderContext:
    def test_empty_context_renders_empty_string(self):
        assert render_context(GenerationContext()) == ""

    def test_labels_and_fences_each_entry(self):
        ctx = GenerationContext()
        ctx.update("a.py", "print('a')")
        ctx.update("b.py", "print('b')")

        rendered = render_context(ctx)

        assert rendered == (
            "### FILE: a.py\n```\nprint('a')\n```"
            "\n\n"
            "### FILE: b.py\n```\nprint('b')\n```"
        )

    def test_prefix_truncation_per_entry(self):
        ctx = GenerationContext()
        ctx.update("long.txt", "x" * 10 + "y" * 10)
        ctx.update("short.txt", "ok")

        rendered = render_context(ctx, max_chars_per_entry=10)

        assert "x" * 10 in rendered
        assert "y" not in rendered
        assert "ok" in rendered

    def test_default_limit(self):
        ctx = GenerationContext()
        ctx.update("big.txt", "a" * (DEFAULT_MAX_CHARS_PER_ENTRY + 100))

        rendered = render_context(ctx)

        assert rendered.count("a") == DEFAULT_MAX_CHARS_PER_ENTRY

    def test_negative_limit_rejected(self):
        with pytest.raises(ValueError):
            render_context(GenerationContext(), max_chars_per_entry=-1)
