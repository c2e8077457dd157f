#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Unit tests for option dataclasses."""

from dataclasses import FrozenInstanceError, fields

import pytest

from concisemark.options import (
    AstJsonRendererOptions,
    ConciseMarkOptions,
    HtmlRendererOptions,
    LatexRendererOptions,
)

ALL_OPTIONS = [ConciseMarkOptions, HtmlRendererOptions, LatexRendererOptions, AstJsonRendererOptions]


@pytest.mark.unit
class TestOptions:
    """Tests shared by every options class."""

    @pytest.mark.parametrize("options_class", ALL_OPTIONS)
    def test_frozen(self, options_class):
        """Test that options cannot be modified in place."""
        options = options_class()
        field_name = fields(options)[0].name
        with pytest.raises(FrozenInstanceError):
            setattr(options, field_name, None)

    @pytest.mark.parametrize("options_class", ALL_OPTIONS)
    def test_every_field_has_help(self, options_class):
        """Test that field metadata documents each option."""
        for field in fields(options_class):
            assert field.metadata.get("help"), f"{options_class.__name__}.{field.name} has no help text"

    def test_create_updated(self):
        """Test that create_updated returns a modified copy."""
        options = HtmlRendererOptions()
        updated = options.create_updated(heading_ids=True)
        assert updated.heading_ids is True
        assert options.heading_ids is False
        assert updated.wrap_document == options.wrap_document

    def test_create_updated_validates(self):
        """Test that copies are validated again."""
        with pytest.raises(ValueError):
            ConciseMarkOptions().create_updated(list_indent_width=0)


@pytest.mark.unit
class TestConciseMarkOptions:
    """Tests for parser options."""

    def test_defaults(self):
        """Test the default parser configuration."""
        options = ConciseMarkOptions()
        assert options.extract_metadata is True
        assert options.list_indent_width == 4
        assert options.strict_extension_keys is False

    def test_list_indent_width_must_be_positive(self):
        """Test validation of the list width."""
        with pytest.raises(ValueError):
            ConciseMarkOptions(list_indent_width=0)
