"""Tests for the Paragraph model."""

from pathlib import Path

import pytest

from python_docx_builder import Document
from python_docx_builder.errors import DocxIOError, UnsupportedError, ValidationError
from python_docx_builder.models.field import new_page_number_field
from python_docx_builder.models.formatting import (
    HYPERLINK_BLUE,
    Alignment,
    Borders,
    BorderStyle,
    Indentation,
    LineSpacing,
    LineSpacingRule,
    UnderlineStyle,
)
from python_docx_builder.models.image import floating_position, new_image_size
from python_docx_builder.relationships import RelationshipTypes


class TestParagraphContent:
    """Test runs and text."""

    def test_text_joins_runs(self, doc: Document) -> None:
        """Test that text concatenates every run."""
        para = doc.add_paragraph("Hello")
        para.add_run(", ")
        para.add_text("world")
        assert para.text == "Hello, world"
        assert len(para.runs()) == 3

    def test_runs_returns_copy(self, doc: Document) -> None:
        """Test that the run list cannot be changed from outside."""
        para = doc.add_paragraph("a")
        para.runs().clear()
        assert len(para.runs()) == 1

    def test_add_field(self, doc: Document) -> None:
        """Test that a field gets its own run."""
        para = doc.add_paragraph("Page ")
        field = para.add_field(new_page_number_field())
        assert para.fields() == [field]
        assert para.runs()[-1].fields() == [field]


class TestHyperlinks:
    """Test external hyperlinks."""

    def test_add_hyperlink(self, doc: Document) -> None:
        """Test the run and the external relationship it creates."""
        run = doc.add_paragraph().add_hyperlink("https://example.com", "Example")
        rel = doc.relationships.get(run.hyperlink_id)
        assert rel.type == RelationshipTypes.HYPERLINK
        assert rel.target == "https://example.com"
        assert rel.is_external
        assert run.style == "Hyperlink"
        assert run.color == HYPERLINK_BLUE
        assert run.underline is UnderlineStyle.SINGLE

    def test_hyperlink_requires_url_and_text(self, doc: Document) -> None:
        """Test that empty URLs and texts are rejected."""
        para = doc.add_paragraph()
        with pytest.raises(ValidationError):
            para.add_hyperlink("", "text")
        with pytest.raises(ValidationError):
            para.add_hyperlink("https://example.com", "")
        assert para.runs() == []

    def test_hyperlink_rejects_control_characters(self, doc: Document) -> None:
        """Test that URLs and texts XML cannot hold register nothing."""
        para = doc.add_paragraph()
        before = len(doc.relationships)
        with pytest.raises(ValidationError):
            para.add_hyperlink("https://example.com/\x07", "text")
        with pytest.raises(ValidationError):
            para.add_hyperlink("https://example.com", "bad\x0ctext")
        assert para.runs() == []
        assert len(doc.relationships) == before

    def test_add_run_rejects_control_characters(self, doc: Document) -> None:
        """Test that paragraph text is checked when the run is created."""
        with pytest.raises(ValidationError):
            doc.add_paragraph().add_run("page\x0cbreak")


class TestImages:
    """Test adding images to a paragraph."""

    def test_add_image_bytes(self, doc: Document, png_bytes: bytes) -> None:
        """Test that the image is stored and linked."""
        image = doc.add_paragraph().add_image_bytes(png_bytes, "logo.png")
        rel = doc.relationships.get(image.relationship_id)
        assert rel.type == RelationshipTypes.IMAGE
        assert rel.target == "media/image1.png"
        assert image.target == "media/image1.png"
        assert doc.media.get_by_path("word/media/image1.png").data == png_bytes

    def test_add_image_from_path(self, doc: Document, png_bytes: bytes, tmp_path: Path) -> None:
        """Test reading the payload from disk."""
        path = tmp_path / "chart.png"
        path.write_bytes(png_bytes)
        para = doc.add_paragraph()
        image = para.add_image(path)
        assert para.images() == [image]
        assert image.size == new_image_size(40, 20)

    def test_add_image_with_size_and_position(self, doc: Document, png_bytes: bytes, tmp_path: Path) -> None:
        """Test the explicit size and floating variants."""
        path = tmp_path / "chart.png"
        path.write_bytes(png_bytes)
        para = doc.add_paragraph()
        sized = para.add_image_with_size(path, new_image_size(400, 200))
        floating = para.add_image_with_position(path, None, floating_position())
        assert sized.size.width_px == 400
        assert floating.position.is_floating
        assert len(doc.media) == 2

    def test_missing_file(self, doc: Document, tmp_path: Path) -> None:
        """Test that an unreadable path raises DocxIOError naming the operation."""
        with pytest.raises(DocxIOError) as exc_info:
            doc.add_paragraph().add_image(tmp_path / "missing.png")
        assert exc_info.value.op == "Paragraph.add_image"

    def test_failed_image_registers_nothing(self, doc: Document) -> None:
        """Test that a rejected payload leaves media and relationships alone."""
        rels_before = len(doc.relationships)
        para = doc.add_paragraph()
        with pytest.raises(UnsupportedError):
            para.add_image_bytes(b"data", "notes.txt")
        with pytest.raises(ValidationError):
            para.add_image_bytes(b"not an image", "broken.png")
        assert len(doc.media) == 0
        assert len(doc.relationships) == rels_before
        assert para.runs() == []


class TestParagraphFormatting:
    """Test formatting setters and their validation."""

    def test_alignment(self, doc: Document) -> None:
        """Test alignment and its type check."""
        para = doc.add_paragraph()
        para.set_alignment(Alignment.JUSTIFY)
        assert para.alignment is Alignment.JUSTIFY
        with pytest.raises(ValidationError):
            para.set_alignment("center")

    def test_indent(self, doc: Document) -> None:
        """Test a valid indentation."""
        para = doc.add_paragraph()
        para.set_indent(Indentation(left=720, hanging=360))
        assert para.indentation.hanging == 360

    def test_first_line_and_hanging_exclusive(self, doc: Document) -> None:
        """Test that first-line and hanging indents cannot both be set."""
        para = doc.add_paragraph()
        with pytest.raises(ValidationError):
            para.set_indent(Indentation(first_line=360, hanging=360))
        assert para.indentation == Indentation()

    def test_indent_bounds(self, doc: Document) -> None:
        """Test the indentation limits."""
        para = doc.add_paragraph()
        para.set_indent(Indentation(left=-31680))
        with pytest.raises(ValidationError):
            para.set_indent(Indentation(left=31681))
        with pytest.raises(ValidationError):
            para.set_indent(Indentation(first_line=-1))

    def test_spacing(self, doc: Document) -> None:
        """Test spacing bounds."""
        para = doc.add_paragraph()
        para.set_spacing_before(240)
        para.set_spacing_after(0)
        assert para.spacing_before == 240
        with pytest.raises(ValidationError):
            para.set_spacing_after(-1)
        with pytest.raises(ValidationError):
            para.set_line_spacing(LineSpacing(LineSpacingRule.EXACT, 40000))

    def test_numbering(self, doc: Document) -> None:
        """Test list membership and its bounds."""
        para = doc.add_paragraph()
        para.set_numbering(1, 8)
        assert para.numbering.level == 8
        with pytest.raises(ValidationError):
            para.set_numbering(0)
        with pytest.raises(ValidationError):
            para.set_numbering(1, 9)
        para.clear_numbering()
        assert para.numbering is None

    def test_toggles_and_borders(self, doc: Document) -> None:
        """Test keep/page-break toggles and borders."""
        para = doc.add_paragraph()
        para.set_keep_with_next(True)
        para.set_keep_lines(True)
        para.set_page_break_before(True)
        para.set_borders(Borders(bottom=BorderStyle()))
        assert para.keep_with_next and para.keep_lines and para.page_break_before
        assert para.borders.bottom is not None


class TestBookmarks:
    """Test bookmarks."""

    def test_set_bookmark(self, doc: Document) -> None:
        """Test that bookmarks get sequential IDs."""
        first = doc.add_paragraph("a").set_bookmark("intro")
        second = doc.add_paragraph("b").set_bookmark("Section_2")
        assert first.id == "bm1"
        assert second.id == "bm2"
        assert first.name == "intro"

    @pytest.mark.parametrize("name", ["", "1st", "has space", "x" * 41])
    def test_invalid_names(self, doc: Document, name: str) -> None:
        """Test bookmark name rules."""
        with pytest.raises(ValidationError):
            doc.add_paragraph().set_bookmark(name)
