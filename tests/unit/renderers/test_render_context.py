#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/renderers/test_render_context.py
"""Unit tests for RenderContext."""

import pytest

from bbhtml.ast import Document, Tag, Text
from bbhtml.diagnostics import DiagnosticCollector
from bbhtml.options import BBCodeRenderOptions
from bbhtml.registry import TagRegistry
from bbhtml.renderers import HtmlRenderer, RenderContext
from bbhtml.tags import TagDefinition


def _context(document):
    return RenderContext(document, BBCodeRenderOptions(), DiagnosticCollector())


@pytest.mark.unit
class TestRenderContext:
    """Tests for the tag stack helpers."""

    def test_empty_stack(self):
        context = _context(Document())

        assert context.current is None
        assert context.parent is None
        assert context.container(0) is None
        assert context.is_first_of_kind() is False

    def test_parent_and_container(self):
        """Test parent lookup, including the document at the top level."""
        inner = Tag("i")
        outer = Tag("b", children=[inner])
        document = Document(children=[outer])
        context = _context(document)

        context.push(outer)
        assert context.parent is document
        context.push(inner)
        assert context.current is inner
        assert context.parent is outer
        assert context.container(1) is document
        assert context.pop() is inner

    def test_is_first_of_kind(self):
        """Test sibling position among tags of the same name."""
        first = Tag("row")
        second = Tag("row")
        table = Tag("table", children=[Text("\n"), first, Tag("other"), second])
        context = _context(Document(children=[table]))
        context.push(table)

        context.push(first)
        assert context.is_first_of_kind() is True
        context.pop()

        context.push(second)
        assert context.is_first_of_kind() is False
        assert context.is_first_of_kind(1) is True

    def test_add_diagnostic(self):
        context = _context(Document())
        context.add_diagnostic("bad param", "tag")
        assert [d.message for d in context.diagnostics] == ["bad param"]


@pytest.mark.unit
class TestContextInCallbacks:
    """Tests for what callbacks see while rendering."""

    def test_callbacks_see_current_tag_and_options(self):
        """Test that the context exposes the tag being rendered and the options."""
        seen = []

        def record(params, content, context):
            seen.append((context.current.name, context.parent.name, context.options.add_line_breaks))
            return ""

        registry = TagRegistry([TagDefinition(name="a", render_open=record), TagDefinition(name="b", render_open=record)])
        document = Document(children=[Tag("a", children=[Tag("b")])])
        HtmlRenderer(registry, BBCodeRenderOptions(add_line_breaks=True)).render_to_string(document)

        assert seen == [("b", "a", True), ("a", "bbcode", True)]

    def test_callback_diagnostics(self):
        """Test that diagnostics added by callbacks reach the collector."""

        def warn(params, content, context):
            context.add_diagnostic(f"Unknown size {params}")
            return ""

        registry = TagRegistry([TagDefinition(name="size", render_open=warn)])
        collector = DiagnosticCollector()
        HtmlRenderer(registry).render_to_string(Document(children=[Tag("size", params="huge")]), collector)

        assert collector.messages == ["Unknown size huge"]
