"""Tests for re-reading packages written by the library."""

import io
import zipfile
from pathlib import Path

import pytest

from python_docx_builder import (
    Alignment,
    Document,
    FieldType,
    HeaderFooterType,
    Metadata,
    Orientation,
    Paragraph,
    SectionBreakType,
    Table,
    VerticalMerge,
    XMLError,
)
from python_docx_builder.models.field import new_page_number_field
from python_docx_builder.models.image import new_image_size


def _reopen(doc: Document) -> Document:
    return Document.open(doc.to_bytes())


class TestReadSources:
    """Test the accepted sources of Document.open."""

    def test_bytes_path_and_stream(self, tmp_path: Path) -> None:
        """Test that bytes, paths and streams give the same document."""
        doc = Document()
        doc.add_paragraph("Hello")
        data = doc.to_bytes()
        path = tmp_path / "hello.docx"
        path.write_bytes(data)

        for source in (data, path, str(path), io.BytesIO(data)):
            assert Document.open(source).paragraphs()[0].text == "Hello"

    def test_package_without_document_part(self) -> None:
        """Test that a ZIP without word/document.xml is rejected."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w") as archive:
            archive.writestr("readme.txt", "not a document")
        with pytest.raises(XMLError):
            Document.open(buffer.getvalue())


class TestReadContent:
    """Test body content survives a write and read."""

    def test_metadata(self) -> None:
        """Test that core properties are read back."""
        doc = Document(metadata=Metadata(title="Report", creator="Ada", keywords=["a", "b"]))
        doc.add_paragraph("x")
        meta = _reopen(doc).metadata
        assert meta.title == "Report"
        assert meta.creator == "Ada"
        assert meta.keywords == ["a", "b"]

    def test_paragraph_formatting(self) -> None:
        """Test paragraph and run properties."""
        doc = Document()
        para = doc.add_paragraph(style="Quote")
        para.set_alignment(Alignment.CENTER)
        para.set_spacing_after(240)
        run = para.add_run("Bold text")
        run.set_bold(True)
        run.set_size(32)

        read = _reopen(doc).paragraphs()[0]
        assert read.style == "Quote"
        assert read.alignment is Alignment.CENTER
        assert read.spacing_after == 240
        read_run = read.runs()[0]
        assert read_run.text == "Bold text"
        assert read_run.bold is True
        assert read_run.size == 32

    def test_tabs_and_line_breaks(self) -> None:
        """Test that tab and break elements become text again."""
        doc = Document()
        doc.add_paragraph("a\tb\nc")
        assert _reopen(doc).paragraphs()[0].text == "a\tb\nc"

    def test_heading_style(self) -> None:
        """Test that headings keep their style."""
        doc = Document()
        doc.add_heading("Intro", 2)
        assert _reopen(doc).paragraphs()[0].style == "Heading2"

    def test_hyperlink(self) -> None:
        """Test that a hyperlink keeps its URL and relationship."""
        doc = Document()
        run = doc.add_paragraph().add_hyperlink("https://example.com", "Example")

        read_run = _reopen(doc).paragraphs()[0].runs()[0]
        assert read_run.text == "Example"
        assert read_run.hyperlink_id == run.hyperlink_id
        assert read_run.hyperlink_url == "https://example.com"

    def test_field(self) -> None:
        """Test that a complex field is collected from its runs."""
        doc = Document()
        para = doc.add_paragraph("Page ")
        para.add_field(new_page_number_field())

        read = _reopen(doc).paragraphs()[0]
        fields = read.fields()
        assert len(fields) == 1
        assert fields[0].field_type is FieldType.PAGE_NUMBER
        assert fields[0].code == "PAGE"
        assert read.runs()[0].text == "Page "

    def test_image(self, png_bytes: bytes) -> None:
        """Test that a picture keeps its bytes, size and relationship."""
        doc = Document()
        image = doc.add_paragraph().add_image_bytes(png_bytes, "logo.png", new_image_size(80, 40))

        read_doc = _reopen(doc)
        images = read_doc.paragraphs()[0].images()
        assert len(images) == 1
        assert images[0].data == png_bytes
        assert images[0].size == image.size
        assert images[0].relationship_id == image.relationship_id
        assert images[0].target == "media/image1.png"
        assert (images[0].original_size.width_px, images[0].original_size.height_px) == (40, 20)

    def test_table(self) -> None:
        """Test table shape, text and merges."""
        doc = Document()
        table = doc.add_table(3, 3)
        table.cell(0, 0).add_paragraph("Merged")
        table.cell(2, 2).add_paragraph("Corner")
        table.merge_cells(0, 0, cols=2, rows=2)

        read = _reopen(doc).tables()[0]
        assert isinstance(read, Table)
        assert (read.row_count, read.column_count) == (3, 3)
        assert read.cell(0, 0).text == "Merged"
        assert read.cell(2, 2).text == "Corner"

        anchor = read.cell(0, 0).merge_info()
        assert anchor.grid_span == 2
        assert anchor.v_merge is VerticalMerge.RESTART
        assert anchor.row_span == 2
        assert read.cell(0, 1).h_merge_continuation
        assert read.cell(1, 0).v_merge is VerticalMerge.CONTINUE

    def test_nested_table(self) -> None:
        """Test that tables inside cells are read back."""
        doc = Document()
        inner = doc.add_table(1, 1).cell(0, 0).add_table(2, 2)
        inner.cell(1, 1).add_paragraph("deep")

        read_cell = _reopen(doc).tables()[0].cell(0, 0)
        nested = read_cell.tables()
        assert len(nested) == 1
        assert nested[0].cell(1, 1).text == "deep"

    def test_trailing_table_anchor_is_dropped(self) -> None:
        """Test that the paragraph written after a final table is not read as content."""
        doc = Document()
        doc.add_paragraph("before")
        doc.add_table(1, 1)
        read = _reopen(doc)
        assert len(read.blocks()) == 2
        assert len(read.paragraphs()) == 1


    def test_empty_paragraph_after_final_table_is_kept(self) -> None:
        """Test that a user paragraph after the last table survives a re-read."""
        doc = Document()
        doc.add_paragraph("x")
        doc.add_table(1, 1)
        doc.add_paragraph()

        read = _reopen(doc)
        assert len(read.paragraphs()) == 2
        assert isinstance(read.blocks()[-1], Paragraph)
        assert read.paragraphs()[1].text == ""

    def test_cell_with_one_empty_paragraph(self) -> None:
        """Test that a cell holding only an empty user paragraph keeps it."""
        doc = Document()
        table = doc.add_table(1, 2)
        table.cell(0, 0).add_paragraph()

        read = _reopen(doc).tables()[0]
        assert len(read.cell(0, 0).paragraphs()) == 1
        assert read.cell(0, 1).paragraphs() == []

    def test_empty_paragraph_after_nested_table(self) -> None:
        """Test a user paragraph alongside a nested table in a cell."""
        doc = Document()
        cell = doc.add_table(1, 1).cell(0, 0)
        cell.add_paragraph()
        cell.add_table(1, 1)

        read_cell = _reopen(doc).tables()[0].cell(0, 0)
        assert len(read_cell.paragraphs()) == 1
        assert len(read_cell.tables()) == 1


class TestReadSections:
    """Test sections, headers and footers."""

    def test_sections_and_orientation(self) -> None:
        """Test that section breaks and landscape pages are read back."""
        doc = Document()
        doc.add_paragraph("first")
        section = doc.add_section(SectionBreakType.ODD_PAGE)
        section.set_orientation(Orientation.LANDSCAPE)
        section.set_columns(2)
        doc.add_paragraph("second")

        read = _reopen(doc)
        sections = read.sections()
        assert len(sections) == 2
        assert [p.text for p in read.paragraphs()] == ["first", "second"]
        last = sections[1]
        assert last.orientation is Orientation.LANDSCAPE
        assert last.page_size == section.page_size
        assert last.columns == 2
        assert last.start_type is SectionBreakType.ODD_PAGE

    def test_headers_and_footers(self) -> None:
        """Test header and footer parts and their text."""
        doc = Document()
        doc.add_paragraph("body")
        section = doc.default_section
        section.header().add_paragraph("Default header")
        section.header(HeaderFooterType.FIRST).add_paragraph("First header")
        section.footer().add_paragraph("Footer")

        read_section = _reopen(doc).default_section
        assert read_section.header().text == "Default header"
        assert read_section.header(HeaderFooterType.FIRST).text == "First header"
        assert read_section.footer().text == "Footer"
        assert read_section.has_title_page

    def test_empty_header_reads_back_empty(self) -> None:
        """Test that the filler paragraph of an empty header is not read as content."""
        doc = Document()
        doc.add_paragraph("body")
        doc.default_section.header()

        assert _reopen(doc).default_section.header().paragraphs() == []

    def test_header_hyperlink_uses_part_relationships(self) -> None:
        """Test that header hyperlinks resolve against the header's own rels."""
        doc = Document()
        doc.add_paragraph("body")
        doc.default_section.header().add_paragraph().add_hyperlink("https://example.org", "site")

        header = _reopen(doc).default_section.header()
        run = header.paragraphs()[0].runs()[0]
        assert run.hyperlink_url == "https://example.org"


class TestReadThenEdit:
    """Test editing a document after opening it."""

    def test_new_relationship_ids_do_not_collide(self) -> None:
        """Test that relationships added after opening get unused IDs."""
        doc = Document()
        doc.add_paragraph().add_hyperlink("https://one.example", "one")
        doc.default_section.header().add_paragraph("h")

        read = _reopen(doc)
        existing = {rel.id for rel in read.relationships.all()}
        run = read.add_paragraph().add_hyperlink("https://two.example", "two")
        assert run.hyperlink_id not in existing

    def test_new_header_gets_fresh_part_name(self) -> None:
        """Test that a header added after opening does not reuse header1.xml."""
        doc = Document()
        doc.add_paragraph("body")
        doc.default_section.header().add_paragraph("h")

        read = _reopen(doc)
        new_header = read.default_section.footer()
        assert new_header.target == "footer1.xml"
        even = read.default_section.header(HeaderFooterType.EVEN)
        assert even.target == "header2.xml"

    def test_reopened_document_saves_again(self, tmp_path: Path) -> None:
        """Test that a re-read document can be packaged again."""
        doc = Document()
        doc.add_paragraph("again")
        read = _reopen(doc)
        read.save(tmp_path / "again.docx")
        assert Document.open(tmp_path / "again.docx").paragraphs()[0].text == "again"
