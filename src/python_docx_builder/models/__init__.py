"""
Document model classes for python_docx_builder.

These classes form the in-memory entity graph that the serializer turns
into WordprocessingML.
"""

from python_docx_builder.models.field import Field, FieldType
from python_docx_builder.models.header_footer import Footer, Header, HeaderFooterType
from python_docx_builder.models.image import (
    Image,
    ImageFormat,
    ImagePosition,
    ImageSize,
)
from python_docx_builder.models.metadata import Metadata
from python_docx_builder.models.paragraph import Bookmark, Paragraph
from python_docx_builder.models.run import Run
from python_docx_builder.models.section import Margins, Orientation, PageSize, Section, SectionBreakType
from python_docx_builder.models.style import ParagraphFormatting, RunFormatting, Style, StyleType
from python_docx_builder.models.table import Table, TableCell, TableRow, VerticalMerge

__all__ = [
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
]
