"""
Packaging: the OOXML ZIP container on both the write and the read side.

Packager assembles every part of a document in one linear pass into an
in-memory archive, so a failure never leaves a partial file behind, and
``save`` moves the finished bytes into place atomically. PackageReader
opens an existing archive and hands out its parts as bytes, parsed XML or
relationship records.

Example:
    >>> data = Packager().to_bytes(doc)
    >>> reader = PackageReader.open(data)
    >>> reader.read_xml("word/document.xml").tag
    '{http://schemas.openxmlformats.org/wordprocessingml/2006/main}document'
"""

from __future__ import annotations

import io
import logging
import os
import posixpath
import tempfile
import zipfile
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from lxml import etree

from .constants import (
    APP_PROPERTIES_PATH,
    CONTENT_TYPES_PATH,
    CORE_PROPERTIES_PATH,
    DOCUMENT_PATH,
    DOCUMENT_RELS_PATH,
    FONT_TABLE_PATH,
    ROOT_RELS_PATH,
    SETTINGS_PATH,
    STYLES_PATH,
    THEME_PATH,
)
from .content_types import ContentTypeManifest, ContentTypes
from .errors import DocxError, DocxIOError, NotFoundError, ValidationError, XMLError
from .relationships import (
    RELS_NAMESPACE,
    Relationship,
    RelationshipTypes,
    TargetMode,
    build_relationships_element,
)
from .serializer import DocumentSerializer

if TYPE_CHECKING:
    from .document import Document

logger = logging.getLogger(__name__)

# Relationships of the package itself (_rels/.rels)
ROOT_RELATIONSHIPS = (
    Relationship("rId1", RelationshipTypes.OFFICE_DOCUMENT, DOCUMENT_PATH),
    Relationship("rId2", RelationshipTypes.CORE_PROPERTIES, CORE_PROPERTIES_PATH),
    Relationship("rId3", RelationshipTypes.EXTENDED_PROPERTIES, APP_PROPERTIES_PATH),
)

# Permissions of saved files; mkstemp creates files readable by the owner only
SAVED_FILE_MODE = 0o644


def to_xml_bytes(element: etree._Element) -> bytes:
    """Serialize a part root with the declaration Word writes."""
    return etree.tostring(element, xml_declaration=True, encoding="UTF-8", standalone=True)


def rels_part_name(part_name: str) -> str:
    """Name of the .rels part holding ``part_name``'s relationships.

    Example:
        >>> rels_part_name("word/document.xml")
        'word/_rels/document.xml.rels'
    """
    directory, name = posixpath.split(part_name)
    return posixpath.join(directory, "_rels", f"{name}.rels")


class Packager:
    """Writes a Document as a .docx archive.

    Packaging reads the document and never changes it, so one document can
    be packaged any number of times.

    Args:
        compression: zipfile compression method for every entry
    """

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self.compression = compression

    def build_parts(self, document: Document) -> list[tuple[str, bytes]]:
        """Serialize every part of the package, in archive order.

        Returns:
            List of (part name, bytes) pairs

        Raises:
            XMLError: If a value reached the serializer that XML cannot hold
        """
        try:
            return self._build_parts(document)
        except DocxError:
            raise
        except ValueError as e:
            raise XMLError("Packager.build_parts", f"cannot serialize document: {e}") from e

    def _build_parts(self, document: Document) -> list[tuple[str, bytes]]:
        serializer = DocumentSerializer(document)
        parts: list[tuple[str, bytes]] = [
            (CONTENT_TYPES_PATH, to_xml_bytes(self.content_types(document).to_element())),
            (ROOT_RELS_PATH, to_xml_bytes(build_relationships_element(list(ROOT_RELATIONSHIPS)))),
            (DOCUMENT_PATH, to_xml_bytes(serializer.serialize_document())),
            (DOCUMENT_RELS_PATH, to_xml_bytes(document.relationships.to_element())),
            (STYLES_PATH, to_xml_bytes(serializer.serialize_styles())),
            (SETTINGS_PATH, to_xml_bytes(serializer.serialize_settings())),
            (FONT_TABLE_PATH, to_xml_bytes(serializer.serialize_font_table())),
            (THEME_PATH, to_xml_bytes(serializer.serialize_theme())),
            (CORE_PROPERTIES_PATH, to_xml_bytes(serializer.serialize_core_properties())),
            (APP_PROPERTIES_PATH, to_xml_bytes(serializer.serialize_app_properties())),
        ]

        for header in document.headers():
            parts.append((header.part_name, to_xml_bytes(serializer.serialize_header(header))))
            if len(header.relationships):
                parts.append((header.rels_part_name, to_xml_bytes(header.relationships.to_element())))
        for footer in document.footers():
            parts.append((footer.part_name, to_xml_bytes(serializer.serialize_footer(footer))))
            if len(footer.relationships):
                parts.append((footer.rels_part_name, to_xml_bytes(footer.relationships.to_element())))

        for media in document.media.all():
            parts.append((media.path, media.data))

        return parts

    def content_types(self, document: Document) -> ContentTypeManifest:
        """Build [Content_Types].xml for the parts ``build_parts`` writes."""
        manifest = ContentTypeManifest()
        manifest.add_default("rels", ContentTypes.RELATIONSHIPS)
        manifest.add_default("xml", ContentTypes.XML)
        for media in document.media.all():
            if media.extension:
                manifest.add_default(media.extension, media.content_type)
            else:
                manifest.add_override(media.path, media.content_type)

        manifest.add_override(DOCUMENT_PATH, ContentTypes.DOCUMENT)
        manifest.add_override(STYLES_PATH, ContentTypes.STYLES)
        manifest.add_override(SETTINGS_PATH, ContentTypes.SETTINGS)
        manifest.add_override(FONT_TABLE_PATH, ContentTypes.FONT_TABLE)
        manifest.add_override(THEME_PATH, ContentTypes.THEME)
        manifest.add_override(CORE_PROPERTIES_PATH, ContentTypes.CORE_PROPERTIES)
        manifest.add_override(APP_PROPERTIES_PATH, ContentTypes.EXTENDED_PROPERTIES)
        for header in document.headers():
            manifest.add_override(header.part_name, ContentTypes.HEADER)
        for footer in document.footers():
            manifest.add_override(footer.part_name, ContentTypes.FOOTER)
        return manifest

    def to_bytes(self, document: Document) -> bytes:
        """Package the document into an in-memory .docx."""
        buffer = io.BytesIO()
        with zipfile.ZipFile(buffer, "w", self.compression) as zip_ref:
            for name, data in self.build_parts(document):
                zip_ref.writestr(name, data)
                logger.debug(f"Wrote part {name} ({len(data)} bytes)")
        return buffer.getvalue()

    def write_to(self, document: Document, stream: BinaryIO) -> int:
        """Package the document into a writable binary stream.

        Returns:
            Number of bytes written

        Raises:
            DocxIOError: If writing to the stream fails
        """
        data = self.to_bytes(document)
        try:
            stream.write(data)
        except OSError as e:
            raise DocxIOError("Packager.write_to", f"cannot write package: {e}") from e
        return len(data)

    def save(self, document: Document, path: str | Path) -> None:
        """Package the document to a file, replacing it atomically.

        The archive is written to a temporary file next to ``path`` and
        renamed over it only once complete.

        Raises:
            ValidationError: If path is empty
            DocxIOError: If the file cannot be written
        """
        if not path or not str(path).strip():
            raise ValidationError("Packager.save", "path", path, "path cannot be empty")
        target = Path(path)
        data = self.to_bytes(document)

        try:
            fd, tmp_name = tempfile.mkstemp(prefix=f".{target.name}.", suffix=".tmp", dir=target.parent)
        except OSError as e:
            raise DocxIOError("Packager.save", f"cannot write {target}: {e}") from e

        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
            os.chmod(tmp_name, SAVED_FILE_MODE)
            os.replace(tmp_name, target)
        except OSError as e:
            _remove_temp_file(tmp_name)
            raise DocxIOError("Packager.save", f"cannot write {target}: {e}") from e

        logger.debug(f"Saved {target} ({len(data)} bytes)")


def _remove_temp_file(name: str) -> None:
    try:
        os.unlink(name)
    except FileNotFoundError:
        pass
    except OSError as e:
        logger.warning(f"Could not remove temporary file {name}: {e}")


class PackageReader:
    """Read access to the parts of a .docx archive.

    The archive is read into memory when opened; no file handle stays open.

    Example:
        >>> reader = PackageReader.open("report.docx")
        >>> [rel.target for rel in reader.relationships("word/document.xml")]
        ['styles.xml', 'settings.xml', 'fontTable.xml', 'theme/theme1.xml']
    """

    def __init__(self, parts: dict[str, bytes]) -> None:
        self._parts = parts

    @classmethod
    def open(cls, source: str | Path | bytes | BinaryIO) -> PackageReader:
        """Open a package from a path, raw bytes or a binary file object.

        Raises:
            DocxIOError: If the source cannot be read
            XMLError: If the source is not a ZIP archive
        """
        op = "PackageReader.open"
        try:
            if isinstance(source, (bytes, bytearray)):
                data = bytes(source)
            elif isinstance(source, (str, Path)):
                data = Path(source).read_bytes()
            else:
                data = source.read()
        except OSError as e:
            raise DocxIOError(op, f"cannot read package: {e}") from e

        try:
            with zipfile.ZipFile(io.BytesIO(data)) as zip_ref:
                parts = {info.filename: zip_ref.read(info) for info in zip_ref.infolist() if not info.is_dir()}
        except zipfile.BadZipFile as e:
            raise XMLError(op, f"not a valid .docx (ZIP) package: {e}") from e

        logger.debug(f"Opened package with {len(parts)} parts")
        return cls(parts)

    def part_names(self) -> list[str]:
        return list(self._parts)

    def has_part(self, part_name: str) -> bool:
        return part_name in self._parts

    def read_bytes(self, part_name: str) -> bytes:
        """Raw bytes of a part.

        Raises:
            NotFoundError: If the package has no such part
        """
        if part_name not in self._parts:
            raise NotFoundError("PackageReader.read_bytes", f"part {part_name!r}")
        return self._parts[part_name]

    def read_xml(self, part_name: str) -> etree._Element:
        """Parse a part as XML.

        Raises:
            NotFoundError: If the package has no such part
            XMLError: If the part is not well-formed
        """
        data = self.read_bytes(part_name)
        parser = etree.XMLParser(remove_blank_text=False, resolve_entities=False)
        try:
            return etree.fromstring(data, parser)
        except etree.XMLSyntaxError as e:
            raise XMLError("PackageReader.read_xml", f"{part_name} is not well-formed: {e}") from e

    def relationships(self, part_name: str) -> list[Relationship]:
        """Relationships of ``part_name``; empty if it has no .rels part."""
        rels_name = rels_part_name(part_name)
        if rels_name not in self._parts:
            return []
        root = self.read_xml(rels_name)
        rels = []
        for elem in root.iter(f"{{{RELS_NAMESPACE}}}Relationship"):
            rel_id = elem.get("Id")
            rel_type = elem.get("Type")
            target = elem.get("Target")
            if not rel_id or not rel_type or not target:
                logger.warning(f"Skipping incomplete relationship in {rels_name}")
                continue
            rels.append(Relationship(rel_id, rel_type, target, TargetMode.parse(elem.get("TargetMode"))))
        return rels
