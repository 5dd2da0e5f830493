"""
python_docx_builder - Build Word (.docx) documents from Python.

This package provides an in-memory object model for WordprocessingML
documents (paragraphs, runs, tables, images, fields, sections, headers and
footers, styles) and writes it out as a standards-conforming OOXML package.
Every setter validates its input immediately, so a document can be saved at
any point.

Example:
    >>> from python_docx_builder import Document, Metadata
    >>> doc = Document(metadata=Metadata(title="Sample Document"))
    >>> run = doc.add_paragraph().add_run("Welcome")
    >>> run.set_bold(True)
    >>> table = doc.add_table(3, 4)
    >>> table.cell(0, 0).add_paragraph("Header 1")
    >>> doc.save("sample.docx")
"""

__version__ = "0.1.0"
__all__ = [
    "Document",
    "SectionBreak",
    "Packager",
    "PackageReader",
    "DocumentSerializer",
    "read_document",
    "IDGenerator",
    "IDKind",
    "RelationshipTable",
    "RelationshipTypes",
    "TargetMode",
    "MediaStore",
    "StyleRegistry",
    # Errors
    "DocxError",
    "ValidationError",
    "NotFoundError",
    "InvalidStateError",
    "DocxIOError",
    "XMLError",
    "UnsupportedError",
    "InternalError",
    # Model
    "Bookmark",
    "Field",
    "FieldType",
    "Footer",
    "Header",
    "HeaderFooterType",
    "Image",
    "ImageFormat",
    "ImagePosition",
    "ImageSize",
    "Margins",
    "Metadata",
    "Orientation",
    "PageSize",
    "Paragraph",
    "ParagraphFormatting",
    "Run",
    "RunFormatting",
    "Section",
    "SectionBreakType",
    "Style",
    "StyleType",
    "Table",
    "TableCell",
    "TableRow",
    "VerticalMerge",
    # Formatting values
    "Alignment",
    "BorderLineStyle",
    "BorderStyle",
    "Borders",
    "BreakType",
    "Color",
    "Font",
    "HighlightColor",
    "Indentation",
    "LineSpacing",
    "LineSpacingRule",
    "TableWidth",
    "UnderlineStyle",
    "VerticalAlignment",
    "WidthType",
]

from .document import Document, SectionBreak
from .errors import (
    DocxError,
    DocxIOError,
    InternalError,
    InvalidStateError,
    NotFoundError,
    UnsupportedError,
    ValidationError,
    XMLError,
)
from .ids import IDGenerator, IDKind
from .media import MediaStore
from .models import (
    Bookmark,
    Field,
    FieldType,
    Footer,
    Header,
    HeaderFooterType,
    Image,
    ImageFormat,
    ImagePosition,
    ImageSize,
    Margins,
    Metadata,
    Orientation,
    PageSize,
    Paragraph,
    ParagraphFormatting,
    Run,
    RunFormatting,
    Section,
    SectionBreakType,
    Style,
    StyleType,
    Table,
    TableCell,
    TableRow,
    VerticalMerge,
)
from .models.formatting import (
    Alignment,
    BorderLineStyle,
    Borders,
    BorderStyle,
    BreakType,
    Color,
    Font,
    HighlightColor,
    Indentation,
    LineSpacing,
    LineSpacingRule,
    TableWidth,
    UnderlineStyle,
    VerticalAlignment,
    WidthType,
)
from .package import Packager, PackageReader
from .reader import read_document
from .relationships import RelationshipTable, RelationshipTypes, TargetMode
from .serializer import DocumentSerializer
from .styles import StyleRegistry
