"""
Document class, the root of the entity graph.

A Document owns its body content (paragraphs, tables and section breaks in
insertion order), its sections, metadata and style registry, and the
bookkeeping that keeps them consistent: one ID generator, the relationship
table of word/document.xml and the media store.

Example:
    >>> doc = Document(metadata=Metadata(title="Report", creator="Ops"))
    >>> para = doc.add_paragraph()
    >>> run = para.add_run("Quarterly numbers")
    >>> run.set_bold(True)
    >>> table = doc.add_table(3, 4)
    >>> doc.save("report.docx")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, BinaryIO

from .constants import DEFAULT_APPLICATION, FONT_TABLE_PATH, SETTINGS_PATH, STYLES_PATH, THEME_PATH
from .errors import InvalidStateError, ValidationError
from .ids import IDGenerator
from .media import MediaStore
from .models.context import PartContext
from .models.field import DEFAULT_TOC_LEVELS, new_toc_field
from .models.formatting import BreakType
from .models.metadata import Metadata
from .models.paragraph import Paragraph
from .models.section import Section, SectionBreakType
from .models.style import Style
from .models.table import Table, new_table
from .package import Packager
from .relationships import RelationshipTable, RelationshipTypes
from .styles import StyleRegistry

if TYPE_CHECKING:
    from .models.header_footer import Footer, Header

logger = logging.getLogger(__name__)

# Parts every package carries, as (relationship type, target relative to word/)
FIXED_PART_RELATIONSHIPS = (
    (RelationshipTypes.STYLES, STYLES_PATH.removeprefix("word/")),
    (RelationshipTypes.SETTINGS, SETTINGS_PATH.removeprefix("word/")),
    (RelationshipTypes.FONT_TABLE, FONT_TABLE_PATH.removeprefix("word/")),
    (RelationshipTypes.THEME, THEME_PATH.removeprefix("word/")),
)


@dataclass(frozen=True)
class SectionBreak:
    """Body marker closing ``section``; the next section starts after it."""

    section: Section


Block = Paragraph | Table | SectionBreak


class Document:
    """A Word document under construction.

    Every mutation is validated immediately, so a document can be
    serialized at any point. Accessors returning lists return copies.

    Args:
        metadata: Core properties; empty if omitted
        application: Application name written to docProps/app.xml
    """

    def __init__(
        self,
        metadata: Metadata | None = None,
        application: str = DEFAULT_APPLICATION,
    ) -> None:
        if metadata is not None:
            metadata.validate("Document")
        self._init_state(metadata, application)
        for rel_type, target in FIXED_PART_RELATIONSHIPS:
            self.relationships.add(rel_type, target)

    def _init_state(self, metadata: Metadata | None, application: str) -> None:
        self.ids = IDGenerator()
        self.relationships = RelationshipTable(self.ids)
        self.media = MediaStore(self.ids)
        self.styles = StyleRegistry()
        self.application = application
        self._metadata = metadata.copy() if metadata is not None else Metadata()
        self._context = PartContext(self.ids, self.relationships, self.media)
        self._blocks: list[Block] = []
        self._sections = [Section(self._context)]

    @classmethod
    def _blank(cls, application: str = DEFAULT_APPLICATION) -> Document:
        """A document without the fixed part relationships, for re-hydration."""
        doc = cls.__new__(cls)
        doc._init_state(None, application)
        return doc

    @classmethod
    def open(cls, source: str | Path | bytes | BinaryIO) -> Document:
        """Re-read a package written by this library.

        Args:
            source: Path, raw bytes or a binary file object

        Raises:
            DocxIOError: If the source cannot be read
            XMLError: If the package or a part is malformed
        """
        from .reader import read_document

        return read_document(source)

    def __repr__(self) -> str:
        return f"<Document blocks={len(self._blocks)} sections={len(self._sections)}>"

    @property
    def context(self) -> PartContext:
        """Bookkeeping handle for entities in word/document.xml."""
        return self._context

    # -------------------------------------------------------------------------
    # Metadata
    # -------------------------------------------------------------------------

    @property
    def metadata(self) -> Metadata:
        return self._metadata.copy()

    def set_metadata(self, metadata: Metadata) -> None:
        """Replace the core properties as a whole.

        Raises:
            ValidationError: If metadata is None or a property contains characters XML forbids
        """
        if metadata is None:
            raise ValidationError("Document.set_metadata", "metadata", None, "metadata cannot be None")
        metadata.validate("Document.set_metadata")
        self._metadata = metadata.copy()

    # -------------------------------------------------------------------------
    # Body content
    # -------------------------------------------------------------------------

    def add_paragraph(self, text: str = "", style: str | None = None) -> Paragraph:
        """Append a paragraph, optionally with one run of text and a style."""
        para = Paragraph(self.ids.next_paragraph_id(), self._context)
        if text:
            para.add_run(text)
        if style:
            para.set_style(style)
        self._blocks.append(para)
        return para

    def add_heading(self, text: str, level: int = 1) -> Paragraph:
        """Append a paragraph using the built-in HeadingN style.

        Raises:
            ValidationError: If level is not between 1 and 9
        """
        if not 1 <= level <= 9:
            raise ValidationError("Document.add_heading", "level", level, "must be between 1 and 9")
        return self.add_paragraph(text, style=f"Heading{level}")

    def add_table(self, rows: int, cols: int) -> Table:
        """Append a rows x cols table.

        Raises:
            ValidationError: If rows is outside [1, 1000] or cols outside [1, 63]
        """
        table = new_table(self._context, rows, cols, op="Document.add_table")
        self._blocks.append(table)
        return table

    def add_page_break(self) -> Paragraph:
        para = self.add_paragraph()
        para.add_run().add_break(BreakType.PAGE)
        return para

    def add_table_of_contents(self, levels: str = DEFAULT_TOC_LEVELS) -> Paragraph:
        """Append a paragraph holding a TOC field that Word fills on update."""
        para = self.add_paragraph()
        para.add_field(new_toc_field(levels=levels))
        return para

    def add_section(self, break_type: SectionBreakType = SectionBreakType.NEXT_PAGE) -> Section:
        """Close the current section and start a new one.

        Args:
            break_type: How the new section starts

        Returns:
            The new, now current, section
        """
        if not isinstance(break_type, SectionBreakType):
            raise ValidationError("Document.add_section", "break_type", break_type, "not a SectionBreakType")
        self._blocks.append(SectionBreak(self._sections[-1]))
        section = Section(self._context, start_type=break_type)
        self._sections.append(section)
        logger.debug(f"Started section {len(self._sections)} ({break_type.value})")
        return section

    def blocks(self) -> list[Block]:
        """Body content in document order."""
        return list(self._blocks)

    def paragraphs(self) -> list[Paragraph]:
        """Top-level body paragraphs (section breaks excluded)."""
        return [b for b in self._blocks if isinstance(b, Paragraph)]

    def tables(self) -> list[Table]:
        return [b for b in self._blocks if isinstance(b, Table)]

    # -------------------------------------------------------------------------
    # Sections, headers, footers
    # -------------------------------------------------------------------------

    def sections(self) -> list[Section]:
        return list(self._sections)

    @property
    def default_section(self) -> Section:
        """The first section; always present."""
        return self._sections[0]

    @property
    def current_section(self) -> Section:
        """The last section, which new body content belongs to."""
        return self._sections[-1]

    def headers(self) -> list[Header]:
        return [h for s in self._sections for h in s.headers()]

    def footers(self) -> list[Footer]:
        return [f for s in self._sections for f in s.footers()]

    # -------------------------------------------------------------------------
    # Styles
    # -------------------------------------------------------------------------

    def add_style(self, style: Style) -> None:
        """Register a custom style; see StyleRegistry.add_style."""
        self.styles.add_style(style)

    # -------------------------------------------------------------------------
    # Validation and output
    # -------------------------------------------------------------------------

    def validate(self) -> None:
        """Cheap pre-flight check before packaging.

        Raises:
            InvalidStateError: If the document has no paragraphs and no tables
        """
        if not any(isinstance(b, (Paragraph, Table)) for b in self._blocks):
            raise InvalidStateError("Document.validate", "document is empty")

    def to_bytes(self) -> bytes:
        """Package the document and return the .docx bytes."""
        return Packager().to_bytes(self)

    def write_to(self, stream: BinaryIO) -> int:
        """Package the document into a binary stream.

        Returns:
            Number of bytes written
        """
        return Packager().write_to(self, stream)

    def save(self, path: str | Path) -> None:
        """Package the document to ``path``.

        The file is replaced atomically; a failed save leaves any existing
        file untouched.

        Raises:
            ValidationError: If path is empty
            DocxIOError: If the file cannot be written
        """
        Packager().save(self, path)
