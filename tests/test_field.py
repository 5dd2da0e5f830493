"""Tests for the Field model and its factories."""

import pytest

from python_docx_builder.errors import ValidationError
from python_docx_builder.models.field import (
    Field,
    FieldType,
    new_custom_field,
    new_date_field,
    new_hyperlink_field,
    new_page_count_field,
    new_page_number_field,
    new_ref_field,
    new_seq_field,
    new_style_ref_field,
    new_toc_field,
)


class TestFieldFactories:
    """Test the field constructors."""

    def test_page_fields(self) -> None:
        """Test PAGE and NUMPAGES codes."""
        assert new_page_number_field().code == "PAGE"
        assert new_page_count_field().code == "NUMPAGES"

    def test_toc_field_code(self) -> None:
        """Test the TOC switches."""
        field = new_toc_field(levels="1-2")
        assert field.code == 'TOC \\o "1-2" \\h \\z \\u'
        assert field.get_property("levels") == "1-2"
        assert field.dirty

    def test_toc_field_options(self) -> None:
        """Test optional TOC switches."""
        field = new_toc_field(hyperlinks=False, hide_page_numbers=True)
        assert field.code == 'TOC \\o "1-3" \\n \\z \\u'

    def test_toc_field_requires_levels(self) -> None:
        """Test that a blank level range is rejected."""
        with pytest.raises(ValidationError):
            new_toc_field(levels=" ")

    def test_date_field_with_format(self) -> None:
        """Test the date picture switch."""
        assert new_date_field("M/d/yyyy").code == 'DATE \\@ "M/d/yyyy"'
        assert new_date_field().code == "DATE"

    def test_reference_fields(self) -> None:
        """Test STYLEREF, SEQ and REF codes."""
        assert new_style_ref_field("Heading 1").code == 'STYLEREF "Heading 1"'
        assert new_seq_field("Table").code == "SEQ Table"
        assert new_ref_field("intro").code == "REF intro \\h"
        assert new_ref_field("intro", hyperlink=False).code == "REF intro"

    def test_hyperlink_field_is_clean(self) -> None:
        """Test that a HYPERLINK field already knows its result."""
        field = new_hyperlink_field("https://example.com", "Example")
        assert not field.dirty
        assert field.display_result() == "Example"

    def test_custom_field_requires_code(self) -> None:
        """Test that a custom field needs an instruction."""
        with pytest.raises(ValidationError):
            new_custom_field("  ")
        assert new_custom_field("AUTHOR").field_type is FieldType.CUSTOM


class TestFieldBehavior:
    """Test updates and codes."""

    def test_update_sets_placeholder(self) -> None:
        """Test that update() fills a placeholder and clears dirty."""
        field = new_page_number_field()
        field.update()
        assert field.result == "1"
        assert not field.dirty

    def test_update_is_noop_when_clean(self) -> None:
        """Test that a clean field keeps its result."""
        field = Field(FieldType.PAGE_NUMBER, result="7", dirty=False)
        field.update()
        assert field.result == "7"

    def test_set_code_marks_dirty(self) -> None:
        """Test that changing the code requests recalculation."""
        field = Field(FieldType.CUSTOM, code="AUTHOR", dirty=False)
        field.set_code("TITLE")
        assert field.dirty
        with pytest.raises(ValidationError):
            field.set_code("")

    def test_from_code(self) -> None:
        """Test classification of field codes."""
        assert FieldType.from_code(" PAGE ") is FieldType.PAGE_NUMBER
        assert FieldType.from_code('TOC \\o "1-3"') is FieldType.TOC
        assert FieldType.from_code("AUTHOR") is FieldType.CUSTOM
        assert FieldType.from_code("") is FieldType.CUSTOM

    def test_copy_is_independent(self) -> None:
        """Test that copies do not share properties."""
        field = new_toc_field()
        clone = field.copy()
        clone.set_property("levels", "1-9")
        assert field.get_property("levels") == "1-3"


class TestFieldText:
    """Test that field codes and results must be writable as XML."""

    def test_code_with_control_character_rejected(self) -> None:
        """Test construction and set_code with a control character."""
        with pytest.raises(ValidationError):
            new_custom_field("MERGEFIELD \x01Name")
        field = new_custom_field("MERGEFIELD Name")
        with pytest.raises(ValidationError):
            field.set_code("MERGEFIELD \x02Name")
        assert field.code == "MERGEFIELD Name"

    def test_result_with_control_character_rejected(self) -> None:
        """Test that a cached result is checked too."""
        with pytest.raises(ValidationError):
            new_custom_field("DATE", "\x0c")
