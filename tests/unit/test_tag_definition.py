#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_tag_definition.py
"""Unit tests for TagDefinition.

Tests cover:
- Name normalization and validation
- Nesting restriction normalization
- Contradictory flags
- The simple() and renamed() helpers

"""

import pytest

from bbhtml.exceptions import InvalidTagDefinitionError
from bbhtml.tags import TagDefinition, normalize_tag_name


@pytest.mark.unit
class TestNormalizeTagName:
    """Tests for normalize_tag_name."""

    def test_lower_cases_name(self):
        """Test that names are lower-cased."""
        assert normalize_tag_name("SpOiLeR") == "spoiler"

    def test_star_is_valid(self):
        """Test that the list item name is accepted."""
        assert normalize_tag_name("*") == "*"

    @pytest.mark.parametrize("name", ["", "a b", "a[b", "a]", "<x>", "x=y", "/x", "a\tb", 'a"b'])
    def test_invalid_names_rejected(self, name):
        """Test that empty names and names with markup characters are rejected."""
        with pytest.raises(InvalidTagDefinitionError):
            normalize_tag_name(name)

    def test_reserved_root_name_rejected(self):
        """Test that the document root name cannot be registered."""
        with pytest.raises(InvalidTagDefinitionError, match="reserved"):
            normalize_tag_name("BBCode")

    def test_non_string_rejected(self):
        """Test that a non-string name is rejected."""
        with pytest.raises(InvalidTagDefinitionError):
            normalize_tag_name(None)


@pytest.mark.unit
class TestTagDefinition:
    """Tests for TagDefinition construction."""

    def test_defaults(self):
        """Test default flag values."""
        definition = TagDefinition(name="X")

        assert definition.name == "x"
        assert definition.display_content is True
        assert definition.no_parse is False
        assert definition.self_closing is False
        assert definition.trim_contents is False
        assert definition.allowed_children == frozenset()
        assert definition.allowed_parents == frozenset()
        assert definition.render_open(None, "content", None) == ""
        assert definition.render_close(None, "content", None) == ""

    def test_nesting_sets_normalized(self):
        """Test that allowed children and parents are lower-cased frozensets."""
        definition = TagDefinition(name="row", allowed_children=["CELL"], allowed_parents={"Table"})

        assert definition.allowed_children == frozenset({"cell"})
        assert definition.allowed_parents == frozenset({"table"})

    def test_string_nesting_set_rejected(self):
        """Test that a bare string is not mistaken for a set of names."""
        with pytest.raises(InvalidTagDefinitionError, match="collection"):
            TagDefinition(name="list", allowed_children="*")

    def test_non_callable_renderer_rejected(self):
        """Test that render callbacks must be callable."""
        with pytest.raises(InvalidTagDefinitionError, match="render_open"):
            TagDefinition(name="x", render_open="<b>")
        with pytest.raises(InvalidTagDefinitionError, match="render_close"):
            TagDefinition(name="x", render_close="</b>")

    def test_self_closing_no_parse_conflict(self):
        """Test that a tag cannot be both self-closing and no-parse."""
        with pytest.raises(InvalidTagDefinitionError, match="self_closing and no_parse"):
            TagDefinition(name="x", self_closing=True, no_parse=True)

    def test_self_closing_children_conflict(self):
        """Test that a self-closing tag cannot restrict children."""
        with pytest.raises(InvalidTagDefinitionError, match="cannot restrict children"):
            TagDefinition(name="x", self_closing=True, allowed_children=frozenset({"b"}))

    def test_frozen(self):
        """Test that definitions are immutable."""
        definition = TagDefinition(name="x")
        with pytest.raises(AttributeError):
            definition.name = "y"


@pytest.mark.unit
class TestTagDefinitionHelpers:
    """Tests for simple() and renamed()."""

    def test_simple_constant_fragments(self):
        """Test that simple() produces constant open and close HTML."""
        definition = TagDefinition.simple("spoiler", '<span class="spoiler">', "</span>", trim_contents=True)

        assert definition.render_open("ignored", "content", None) == '<span class="spoiler">'
        assert definition.render_close(None, "content", None) == "</span>"
        assert definition.trim_contents is True

    def test_simple_close_defaults_to_empty(self):
        """Test that simple() without close HTML closes with nothing."""
        definition = TagDefinition.simple("hr", "<hr>", self_closing=True)
        assert definition.render_close(None, "", None) == ""

    def test_renamed_keeps_callbacks(self):
        """Test that renamed() copies everything except the name."""
        definition = TagDefinition.simple("center", "<div>", "</div>", trim_contents=True)
        alias = definition.renamed("Centre")

        assert alias.name == "centre"
        assert alias.trim_contents is True
        assert alias.render_open(None, "", None) == "<div>"
        assert definition.name == "center"

    def test_renamed_validates_name(self):
        """Test that renamed() validates the new name."""
        with pytest.raises(InvalidTagDefinitionError):
            TagDefinition(name="x").renamed("bad name")
