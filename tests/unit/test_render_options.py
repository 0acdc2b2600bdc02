#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# tests/unit/test_render_options.py
"""Unit tests for BBCodeRenderOptions."""

from dataclasses import FrozenInstanceError, fields

import pytest

from bbhtml.constants import DEFAULT_MAX_NESTING_DEPTH, MAX_NESTING_DEPTH_LIMIT
from bbhtml.options import BBCodeRenderOptions


@pytest.mark.unit
class TestDefaults:
    def test_all_passes_off(self):
        options = BBCodeRenderOptions()

        assert options.add_line_breaks is False
        assert options.strip_misaligned_tags is False
        assert options.convert_newlines is False
        assert options.greentext is False
        assert options.smilies is False
        assert options.mentions is False
        assert options.autolink is False
        assert options.mention_exists is None
        assert options.internal_hosts == ()
        assert options.max_input_length is None
        assert options.max_nesting_depth == DEFAULT_MAX_NESTING_DEPTH

    def test_every_field_has_help(self):
        for field in fields(BBCodeRenderOptions):
            assert field.metadata.get("help"), field.name

    def test_frozen(self):
        options = BBCodeRenderOptions()
        with pytest.raises(FrozenInstanceError):
            options.add_line_breaks = True


@pytest.mark.unit
class TestValidation:
    """Tests for __post_init__ checks."""

    @pytest.mark.parametrize("length", [0, -5])
    def test_max_input_length_positive(self, length):
        with pytest.raises(ValueError, match="max_input_length"):
            BBCodeRenderOptions(max_input_length=length)

    @pytest.mark.parametrize("depth", [0, MAX_NESTING_DEPTH_LIMIT + 1])
    def test_max_nesting_depth_range(self, depth):
        with pytest.raises(ValueError, match="max_nesting_depth"):
            BBCodeRenderOptions(max_nesting_depth=depth)

    def test_depth_bounds_accepted(self):
        assert BBCodeRenderOptions(max_nesting_depth=1).max_nesting_depth == 1
        assert BBCodeRenderOptions(max_nesting_depth=MAX_NESTING_DEPTH_LIMIT).max_nesting_depth == MAX_NESTING_DEPTH_LIMIT

    def test_smilie_template_placeholder(self):
        with pytest.raises(ValueError, match="smilie_url_template"):
            BBCodeRenderOptions(smilie_url_template="/smilies/x.gif")

    def test_mention_template_placeholder(self):
        with pytest.raises(ValueError, match="mention_url_template"):
            BBCodeRenderOptions(mention_url_template="/users/")

    def test_internal_hosts_normalized(self):
        options = BBCodeRenderOptions(internal_hosts=["Example.ORG", "forum.example.net"])
        assert options.internal_hosts == ("example.org", "forum.example.net")


@pytest.mark.unit
class TestCreateUpdated:
    def test_returns_copy(self):
        options = BBCodeRenderOptions()
        updated = options.create_updated(add_line_breaks=True, greentext=True)

        assert updated.add_line_breaks is True
        assert updated.greentext is True
        assert options.add_line_breaks is False

    def test_unknown_field(self):
        with pytest.raises(TypeError, match="no_such_option"):
            BBCodeRenderOptions().create_updated(no_such_option=True)

    def test_revalidates(self):
        with pytest.raises(ValueError):
            BBCodeRenderOptions().create_updated(max_nesting_depth=0)
