"""
Section model: page setup plus the headers and footers of a run of pages.

Page dimensions and margins are in twips. The stored page size is always
given portrait-wise; landscape orientation swaps width and height when the
section is written.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from python_docx_builder.constants import MAX_COLUMNS, MIN_COLUMNS
from python_docx_builder.errors import DocxError, ValidationError, wrap
from python_docx_builder.ids import IDKind
from python_docx_builder.models.context import PartContext
from python_docx_builder.models.header_footer import Footer, Header, HeaderFooterType

logger = logging.getLogger(__name__)


class Orientation(Enum):
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class SectionBreakType(Enum):
    """How a section starts relative to the previous one (w:type)."""

    NEXT_PAGE = "nextPage"
    CONTINUOUS = "continuous"
    EVEN_PAGE = "evenPage"
    ODD_PAGE = "oddPage"


@dataclass(frozen=True)
class PageSize:
    width: int
    height: int


PAGE_SIZE_A4 = PageSize(11906, 16838)
PAGE_SIZE_LETTER = PageSize(12240, 15840)
PAGE_SIZE_LEGAL = PageSize(12240, 20160)
PAGE_SIZE_A3 = PageSize(16838, 23811)
PAGE_SIZE_TABLOID = PageSize(15840, 24480)


@dataclass(frozen=True)
class Margins:
    """Page margins in twips; header/footer are distances from the page edge."""

    top: int = 1440
    right: int = 1440
    bottom: int = 1440
    left: int = 1440
    header: int = 720
    footer: int = 720


DEFAULT_MARGINS = Margins()


class Section:
    """Page setup and headers/footers for a section of the document.

    Headers and footers are created on first access, at most one per type.

    Example:
        >>> section = doc.default_section
        >>> section.set_page_size(PAGE_SIZE_A4)
        >>> section.header(HeaderFooterType.DEFAULT).add_paragraph("Draft")
    """

    def __init__(
        self,
        context: PartContext,
        start_type: SectionBreakType = SectionBreakType.NEXT_PAGE,
    ) -> None:
        self._context = context
        self.start_type = start_type
        self.page_size = PAGE_SIZE_LETTER
        self.margins = DEFAULT_MARGINS
        self.orientation = Orientation.PORTRAIT
        self.columns = 1
        self._headers: dict[HeaderFooterType, Header] = {}
        self._footers: dict[HeaderFooterType, Footer] = {}

    def __repr__(self) -> str:
        return f"<Section {self.page_size.width}x{self.page_size.height} {self.orientation.value}>"

    # ---- Page setup ----

    def set_page_size(self, size: PageSize) -> None:
        if size.width < 0 or size.height < 0:
            raise ValidationError("Section.set_page_size", "size", size, "width and height cannot be negative")
        self.page_size = size

    def set_margins(self, margins: Margins) -> None:
        for name in ("top", "right", "bottom", "left", "header", "footer"):
            value = getattr(margins, name)
            if value < 0:
                raise ValidationError("Section.set_margins", name, value, "margins cannot be negative")
        self.margins = margins

    def set_orientation(self, orientation: Orientation) -> None:
        if not isinstance(orientation, Orientation):
            raise ValidationError("Section.set_orientation", "orientation", orientation, "not an Orientation")
        self.orientation = orientation

    def set_columns(self, count: int) -> None:
        if not MIN_COLUMNS <= count <= MAX_COLUMNS:
            raise ValidationError(
                "Section.set_columns", "count", count, f"must be between {MIN_COLUMNS} and {MAX_COLUMNS}"
            )
        self.columns = count

    def set_start_type(self, start_type: SectionBreakType) -> None:
        if not isinstance(start_type, SectionBreakType):
            raise ValidationError("Section.set_start_type", "start_type", start_type, "not a SectionBreakType")
        self.start_type = start_type

    @property
    def effective_page_size(self) -> PageSize:
        """Page size as written: swapped for landscape."""
        if self.orientation is Orientation.LANDSCAPE:
            return PageSize(self.page_size.height, self.page_size.width)
        return self.page_size

    # ---- Headers and footers ----

    def header(self, header_type: HeaderFooterType = HeaderFooterType.DEFAULT) -> Header:
        """Get the header of ``header_type``, creating it on first use."""
        if header_type not in self._headers:
            self._headers[header_type] = self._create(Header, header_type, IDKind.HEADER)
        return self._headers[header_type]

    def footer(self, footer_type: HeaderFooterType = HeaderFooterType.DEFAULT) -> Footer:
        """Get the footer of ``footer_type``, creating it on first use."""
        if footer_type not in self._footers:
            self._footers[footer_type] = self._create(Footer, footer_type, IDKind.FOOTER)
        return self._footers[footer_type]

    def _create(self, cls, hf_type: HeaderFooterType, kind: IDKind):
        op = f"Section.{cls.kind}"
        if not isinstance(hf_type, HeaderFooterType):
            raise ValidationError(op, "type", hf_type, "not a HeaderFooterType")
        part_id = self._context.ids.next_id(kind)
        target = f"{part_id}.xml"
        try:
            if cls is Header:
                rel_id = self._context.relationships.add_header(target)
            else:
                rel_id = self._context.relationships.add_footer(target)
        except DocxError as e:
            raise wrap(e, op) from e
        logger.debug(f"Created {cls.kind} {target} ({hf_type.value}) as {rel_id}")
        return cls(part_id, hf_type, rel_id, target, self._context)

    def attach_header(self, header: Header) -> None:
        """Install an already built header (used when re-reading a package)."""
        self._headers[header.type] = header

    def attach_footer(self, footer: Footer) -> None:
        self._footers[footer.type] = footer

    def headers(self) -> list[Header]:
        return list(self._headers.values())

    def footers(self) -> list[Footer]:
        return list(self._footers.values())

    @property
    def has_title_page(self) -> bool:
        """Whether a first-page header or footer exists (w:titlePg)."""
        return HeaderFooterType.FIRST in self._headers or HeaderFooterType.FIRST in self._footers
