#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/integration/test_custom_tags.py
"""Integration tests for registering custom tags."""

import pytest

from bbhtml import DuplicateTagError, TagDefinition, list_tags, register_tags, render, tag_registry


@pytest.fixture
def spoiler_tag():
    """Register a spoiler tag on the global registry for one test."""
    definition = TagDefinition.simple("spoiler", '<span class="bb-spoiler">', "</span>")
    register_tags({"spoiler": definition})
    yield definition
    tag_registry.unregister("spoiler")


@pytest.mark.integration
class TestGlobalRegistration:
    def test_registered_tag_renders(self, spoiler_tag):
        assert render("[SPOILER]x[/spoiler]").html == '<span class="bb-spoiler">x</span>'

    def test_list_tags(self, spoiler_tag):
        tags = list_tags()

        assert tags["spoiler"] is spoiler_tag
        assert "b" in tags
        with pytest.raises(TypeError):
            tags["spoiler"] = spoiler_tag

    def test_duplicate_rejected(self, spoiler_tag):
        with pytest.raises(DuplicateTagError):
            register_tags([TagDefinition.simple("spoiler", "<b>", "</b>")])

        assert render("[spoiler]x[/spoiler]").html == '<span class="bb-spoiler">x</span>'

    def test_override(self, spoiler_tag):
        register_tags([TagDefinition.simple("spoiler", "<em>", "</em>")], override=True)
        assert render("[spoiler]x[/spoiler]").html == "<em>x</em>"

    def test_unregistered_after_fixture(self):
        assert "spoiler" not in list_tags()
        assert render("[spoiler]x[/spoiler]").html == "&#91;spoiler&#93;x&#91;/spoiler&#93;"


@pytest.mark.integration
class TestCustomTagBehaviour:
    """Tests for custom tags using the definition flags."""

    def test_callback_receives_params_and_content(self, builtin_registry):
        """Test that a callback sees its parameter and rendered children."""

        def open_size(params, content, context):
            size = params if params in {"small", "large"} else "normal"
            return f'<span class="bb-size-{size}" data-length="{len(content)}">'

        builtin_registry.register(
            TagDefinition(name="size", render_open=open_size, render_close=lambda p, c, ctx: "</span>")
        )

        html = render("[size=large][b]ab[/b][/size]", registry=builtin_registry).html
        assert html == '<span class="bb-size-large" data-length="28"><span class="bb-b">ab</span></span>'

    def test_display_content_suppressed(self, builtin_registry):
        """Test that a tag can use its content without showing it."""
        builtin_registry.register(
            TagDefinition(
                name="email",
                render_open=lambda params, content, context: f'<a href="mailto:{content}">contact</a>',
                display_content=False,
            )
        )

        html = render("[email]me@example.com[/email]", registry=builtin_registry).html
        assert html == '<a href="mailto:me@example.com">contact</a>'

    def test_custom_no_parse_tag(self, builtin_registry):
        builtin_registry.register(TagDefinition.simple("raw", "<samp>", "</samp>", no_parse=True))

        html = render("[raw][b]x[/b][/raw] [b]y[/b]", registry=builtin_registry).html
        assert html == '<samp>&#91;b&#93;x&#91;/b&#93;</samp> <span class="bb-b">y</span>'

    def test_isolated_registry_does_not_leak(self, builtin_registry):
        builtin_registry.register(TagDefinition.simple("ooc", '<span class="bb-ooc">', "</span>"))

        assert render("[ooc]x[/ooc]", registry=builtin_registry).html == '<span class="bb-ooc">x</span>'
        assert render("[ooc]x[/ooc]").html == "&#91;ooc&#93;x&#91;/ooc&#93;"
