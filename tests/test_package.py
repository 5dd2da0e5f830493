"""Tests for Packager and PackageReader."""

import io
import os
import zipfile
from pathlib import Path

import pytest
from lxml import etree

from python_docx_builder import Document, Metadata
from python_docx_builder.constants import CONTENT_TYPES_NAMESPACE, w
from python_docx_builder.errors import DocxIOError, NotFoundError, ValidationError, XMLError
from python_docx_builder.package import Packager, PackageReader, rels_part_name
from python_docx_builder.relationships import RELS_NAMESPACE

REQUIRED_PARTS = {
    "[Content_Types].xml",
    "_rels/.rels",
    "word/document.xml",
    "word/_rels/document.xml.rels",
    "word/styles.xml",
    "word/settings.xml",
    "word/fontTable.xml",
    "word/theme/theme1.xml",
    "docProps/core.xml",
    "docProps/app.xml",
}


@pytest.fixture
def sample_doc(png_bytes: bytes) -> Document:
    """A document with text, a table, an image and a header."""
    doc = Document(metadata=Metadata(title="Sample"))
    doc.add_paragraph("Hello")
    doc.add_table(2, 3)
    doc.add_paragraph().add_image_bytes(png_bytes, "logo.png")
    doc.default_section.header().add_paragraph("Header text")
    return doc


def _open_zip(data: bytes) -> zipfile.ZipFile:
    return zipfile.ZipFile(io.BytesIO(data))


class TestPackagerParts:
    """Test the parts written into the archive."""

    def test_required_parts_present(self, sample_doc: Document) -> None:
        """Test that every required part is in the archive."""
        names = set(_open_zip(sample_doc.to_bytes()).namelist())
        assert REQUIRED_PARTS <= names
        assert "word/header1.xml" in names
        assert "word/media/image1.png" in names

    def test_xml_parts_are_well_formed(self, sample_doc: Document) -> None:
        """Test that every XML part parses and declares UTF-8."""
        with _open_zip(sample_doc.to_bytes()) as archive:
            for name in archive.namelist():
                if name.endswith((".xml", ".rels")):
                    data = archive.read(name)
                    assert data.startswith(b"<?xml version='1.0' encoding='UTF-8' standalone='yes'?>")
                    etree.fromstring(data)

    def test_content_types_cover_parts(self, sample_doc: Document) -> None:
        """Test overrides for XML parts and a default for png."""
        with _open_zip(sample_doc.to_bytes()) as archive:
            root = etree.fromstring(archive.read("[Content_Types].xml"))
        overrides = {
            elem.get("PartName") for elem in root.iter(f"{{{CONTENT_TYPES_NAMESPACE}}}Override")
        }
        defaults = {elem.get("Extension") for elem in root.iter(f"{{{CONTENT_TYPES_NAMESPACE}}}Default")}
        assert "/word/document.xml" in overrides
        assert "/word/header1.xml" in overrides
        assert "/docProps/core.xml" in overrides
        assert {"rels", "xml", "png"} <= defaults

    def test_root_relationships(self, sample_doc: Document) -> None:
        """Test that _rels/.rels points at the document and properties."""
        with _open_zip(sample_doc.to_bytes()) as archive:
            root = etree.fromstring(archive.read("_rels/.rels"))
        targets = [rel.get("Target") for rel in root.iter(f"{{{RELS_NAMESPACE}}}Relationship")]
        assert targets == ["word/document.xml", "docProps/core.xml", "docProps/app.xml"]

    def test_table_grid_in_package(self) -> None:
        """Test that a 3x4 table is written with 4 grid columns and 3 rows."""
        doc = Document()
        doc.add_table(3, 4)
        with _open_zip(doc.to_bytes()) as archive:
            root = etree.fromstring(archive.read("word/document.xml"))
        tbl = root.find(f"{w('body')}/{w('tbl')}")
        assert len(tbl.findall(f"{w('tblGrid')}/{w('gridCol')}")) == 4
        assert len(tbl.findall(w("tr"))) == 3

    def test_header_without_links_has_no_rels(self, sample_doc: Document) -> None:
        """Test that empty header relationship parts are not written."""
        names = _open_zip(sample_doc.to_bytes()).namelist()
        assert "word/_rels/header1.xml.rels" not in names

    def test_extensionless_media_gets_override(self) -> None:
        """Test that a registered media part without extension is still typed."""
        doc = Document()
        doc.add_paragraph("x")
        doc.media.register_existing("", "word/media/blob", "image/png", b"data")
        with _open_zip(doc.to_bytes()) as archive:
            root = etree.fromstring(archive.read("[Content_Types].xml"))
        overrides = {
            elem.get("PartName"): elem.get("ContentType")
            for elem in root.iter(f"{{{CONTENT_TYPES_NAMESPACE}}}Override")
        }
        assert overrides["/word/media/blob"] == "image/png"

    def test_unserializable_value_raises_docx_error(self) -> None:
        """Test that a value XML cannot hold surfaces as XMLError, not ValueError."""
        doc = Document()
        doc.add_paragraph("x")
        doc.application = "tool\x01"
        with pytest.raises(XMLError) as exc_info:
            Packager().to_bytes(doc)
        assert exc_info.value.op == "Packager.build_parts"

    def test_rels_part_name(self) -> None:
        """Test the .rels naming rule."""
        assert rels_part_name("word/document.xml") == "word/_rels/document.xml.rels"
        assert rels_part_name("word/header2.xml") == "word/_rels/header2.xml.rels"


class TestPackagerOutput:
    """Test writing to streams and files."""

    def test_write_to_stream(self, sample_doc: Document) -> None:
        """Test that the byte count matches the stream contents."""
        buffer = io.BytesIO()
        written = Packager().write_to(sample_doc, buffer)
        assert written == len(buffer.getvalue()) > 0

    def test_write_to_failing_stream(self, sample_doc: Document) -> None:
        """Test that stream errors become DocxIOError."""

        class BrokenStream(io.RawIOBase):
            def writable(self) -> bool:
                return True

            def write(self, data) -> int:
                raise OSError("disk full")

        with pytest.raises(DocxIOError):
            Packager().write_to(sample_doc, BrokenStream())

    def test_save(self, sample_doc: Document, tmp_path: Path) -> None:
        """Test that save writes a readable archive and leaves no temp files."""
        target = tmp_path / "out.docx"
        sample_doc.save(target)
        assert zipfile.is_zipfile(target)
        assert os.listdir(tmp_path) == ["out.docx"]

    def test_save_replaces_existing(self, sample_doc: Document, tmp_path: Path) -> None:
        """Test that an existing file is replaced."""
        target = tmp_path / "out.docx"
        target.write_bytes(b"old")
        sample_doc.save(str(target))
        assert target.read_bytes()[:2] == b"PK"

    def test_save_to_missing_directory(self, sample_doc: Document, tmp_path: Path) -> None:
        """Test that an unwritable path raises DocxIOError."""
        with pytest.raises(DocxIOError):
            sample_doc.save(tmp_path / "missing" / "out.docx")

    def test_save_empty_path(self, sample_doc: Document) -> None:
        """Test that an empty path is a validation error."""
        with pytest.raises(ValidationError):
            sample_doc.save("")


class TestPackageReader:
    """Test opening archives."""

    def test_open_sources(self, sample_doc: Document, tmp_path: Path) -> None:
        """Test bytes, path and stream sources."""
        data = sample_doc.to_bytes()
        path = tmp_path / "doc.docx"
        path.write_bytes(data)
        for source in (data, path, str(path), io.BytesIO(data)):
            assert PackageReader.open(source).has_part("word/document.xml")

    def test_read_parts(self, sample_doc: Document) -> None:
        """Test bytes, XML and relationship access."""
        reader = PackageReader.open(sample_doc.to_bytes())
        assert reader.read_xml("word/document.xml").tag == w("document")
        targets = [rel.target for rel in reader.relationships("word/document.xml")]
        assert targets[:4] == ["styles.xml", "settings.xml", "fontTable.xml", "theme/theme1.xml"]
        assert reader.relationships("word/styles.xml") == []

    def test_missing_part(self, sample_doc: Document) -> None:
        """Test that unknown parts raise NotFoundError."""
        reader = PackageReader.open(sample_doc.to_bytes())
        with pytest.raises(NotFoundError):
            reader.read_bytes("word/comments.xml")

    def test_not_a_zip(self) -> None:
        """Test that non-archives raise XMLError."""
        with pytest.raises(XMLError):
            PackageReader.open(b"definitely not a zip")

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that unreadable paths raise DocxIOError."""
        with pytest.raises(DocxIOError):
            PackageReader.open(tmp_path / "nope.docx")

    def test_malformed_xml(self) -> None:
        """Test that a broken part raises XMLError."""
        reader = PackageReader({"word/document.xml": b"<w:document"})
        with pytest.raises(XMLError):
            reader.read_xml("word/document.xml")
