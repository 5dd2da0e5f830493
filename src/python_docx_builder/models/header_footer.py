"""
Header and Footer model classes.

Headers and footers in OOXML are stored in separate XML parts (header1.xml,
footer1.xml, etc.) that sections link to through relationships of the main
document part. Each part has its own relationship table, so images and
hyperlinks placed in a header are resolved against that header's rels.
"""

from __future__ import annotations

from enum import Enum

from python_docx_builder.models.context import PartContext
from python_docx_builder.models.paragraph import Paragraph
from python_docx_builder.relationships import RelationshipTable


class HeaderFooterType(Enum):
    """Types of headers and footers in Word documents.

    Word supports three types of headers/footers per section:
    - DEFAULT: Used on all pages except first (if first is different) and even pages
    - FIRST: Used on the first page of the section
    - EVEN: Used on even-numbered pages
    """

    DEFAULT = "default"
    FIRST = "first"
    EVEN = "even"


# The two share a vocabulary in OOXML (w:headerReference/w:footerReference)
HeaderType = HeaderFooterType
FooterType = HeaderFooterType


class _HeaderFooterBase:
    """Paragraph container stored in its own package part.

    Attributes:
        id: Part ID from the document's generator (e.g., "header1")
        type: Which pages of the section it applies to
        rel_id: ID of the relationship from word/document.xml to the part
        target: Part name relative to word/ (e.g., "header1.xml")
        relationships: Relationship table of the part itself
    """

    kind = ""

    def __init__(
        self,
        part_id: str,
        hf_type: HeaderFooterType,
        rel_id: str,
        target: str,
        context: PartContext,
    ) -> None:
        self.id = part_id
        self.type = hf_type
        self.rel_id = rel_id
        self.target = target
        self.relationships = RelationshipTable(context.ids)
        self._context = context.for_part(self.relationships)
        self._paragraphs: list[Paragraph] = []

    def __repr__(self) -> str:
        return f"<{type(self).__name__} type={self.type.value} target={self.target!r}>"

    @property
    def part_name(self) -> str:
        """Full in-package path (e.g., "word/header1.xml")."""
        return f"word/{self.target}"

    @property
    def rels_part_name(self) -> str:
        return f"word/_rels/{self.target}.rels"

    @property
    def text(self) -> str:
        return "\n".join(p.text for p in self._paragraphs)

    def add_paragraph(self, text: str = "") -> Paragraph:
        para = Paragraph(self._context.ids.next_paragraph_id(), self._context)
        if text:
            para.add_run(text)
        self._paragraphs.append(para)
        return para

    def paragraphs(self) -> list[Paragraph]:
        return list(self._paragraphs)


class Header(_HeaderFooterBase):
    """A section header (w:hdr part)."""

    kind = "header"


class Footer(_HeaderFooterBase):
    """A section footer (w:ftr part)."""

    kind = "footer"
