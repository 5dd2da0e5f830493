"""Tests for the Document class."""

import io

import pytest

from python_docx_builder import Document, Metadata
from python_docx_builder.errors import InvalidStateError, ValidationError
from python_docx_builder.models.field import FieldType
from python_docx_builder.models.formatting import BreakType
from python_docx_builder.models.style import Style, StyleType
from python_docx_builder.relationships import RelationshipTypes


class TestDocumentCreation:
    """Test a new document."""

    def test_fixed_relationships(self, doc: Document) -> None:
        """Test that styles, settings, fonts and theme are linked up front."""
        rels = doc.relationships.all()
        assert [rel.id for rel in rels] == ["rId1", "rId2", "rId3", "rId4"]
        assert {rel.type for rel in rels} == {
            RelationshipTypes.STYLES,
            RelationshipTypes.SETTINGS,
            RelationshipTypes.FONT_TABLE,
            RelationshipTypes.THEME,
        }

    def test_starts_empty(self, doc: Document) -> None:
        """Test that there is no content and one section."""
        assert doc.blocks() == []
        assert len(doc.sections()) == 1
        assert "Normal" in doc.styles

    def test_independent_documents(self) -> None:
        """Test that two documents do not share ID counters."""
        first = Document()
        first.add_paragraph()
        assert Document().add_paragraph().id == "para1"


class TestMetadata:
    """Test core properties."""

    def test_metadata_is_copied(self) -> None:
        """Test that callers cannot change metadata behind the document's back."""
        meta = Metadata(title="Report", keywords=["a"])
        doc = Document(metadata=meta)
        meta.keywords.append("b")
        returned = doc.metadata
        returned.title = "Changed"
        assert doc.metadata.title == "Report"
        assert doc.metadata.keywords == ["a"]

    def test_set_metadata(self, doc: Document) -> None:
        """Test replacing the metadata."""
        doc.set_metadata(Metadata(creator="Ops"))
        assert doc.metadata.creator == "Ops"
        with pytest.raises(ValidationError):
            doc.set_metadata(None)

    def test_metadata_rejects_control_characters(self, doc: Document) -> None:
        """Test that properties XML cannot hold are refused at construction and on set."""
        with pytest.raises(ValidationError):
            Document(metadata=Metadata(title="Bad\x01Title"))
        with pytest.raises(ValidationError):
            doc.set_metadata(Metadata(keywords=["ok", "bad\x0b"]))
        assert doc.metadata.keywords == []


class TestBodyContent:
    """Test paragraphs, headings, tables and breaks."""

    def test_blocks_in_order(self, doc: Document) -> None:
        """Test that blocks keep insertion order."""
        para = doc.add_paragraph("intro")
        table = doc.add_table(1, 1)
        closing = doc.add_paragraph("end")
        assert doc.blocks() == [para, table, closing]
        assert doc.paragraphs() == [para, closing]
        assert doc.tables() == [table]

    def test_add_paragraph_with_style(self, doc: Document) -> None:
        """Test the style shorthand."""
        para = doc.add_paragraph("Quote", style="Quote")
        assert para.style == "Quote"
        assert para.text == "Quote"

    def test_add_heading(self, doc: Document) -> None:
        """Test that headings use the HeadingN styles."""
        assert doc.add_heading("Title", 2).style == "Heading2"
        with pytest.raises(ValidationError):
            doc.add_heading("Too deep", 10)

    def test_add_page_break(self, doc: Document) -> None:
        """Test that the break paragraph holds a page break."""
        para = doc.add_page_break()
        assert para.runs()[0].breaks() == [BreakType.PAGE]

    def test_add_table_of_contents(self, doc: Document) -> None:
        """Test the TOC paragraph."""
        para = doc.add_table_of_contents("1-2")
        (field,) = para.fields()
        assert field.field_type is FieldType.TOC
        assert '"1-2"' in field.code

    def test_add_custom_style(self, doc: Document) -> None:
        """Test registering a style through the document."""
        doc.add_style(Style(style_id="Note", name="Note", style_type=StyleType.PARAGRAPH))
        assert doc.styles.has_style("Note")


class TestValidateAndOutput:
    """Test validation and the output entry points."""

    def test_validate_empty(self, doc: Document) -> None:
        """Test that an empty document is rejected."""
        with pytest.raises(InvalidStateError):
            doc.validate()

    def test_validate_with_only_section_break(self, doc: Document) -> None:
        """Test that a section break alone is not content."""
        doc.add_section()
        with pytest.raises(InvalidStateError):
            doc.validate()

    def test_validate_with_table(self, doc: Document) -> None:
        """Test that a table counts as content."""
        doc.add_table(1, 1)
        doc.validate()

    def test_write_to_returns_length(self, doc: Document) -> None:
        """Test that write_to reports the bytes written."""
        doc.add_paragraph("Hello")
        buffer = io.BytesIO()
        written = doc.write_to(buffer)
        assert written == len(buffer.getvalue())
        assert buffer.getvalue()[:2] == b"PK"

    def test_to_bytes_does_not_mutate(self, doc: Document) -> None:
        """Test that packaging twice gives equivalent documents."""
        doc.add_paragraph("Hello")
        blocks = doc.blocks()
        rels = doc.relationships.all()
        doc.to_bytes()
        doc.to_bytes()
        assert doc.blocks() == blocks
        assert doc.relationships.all() == rels
