"""
Document metadata written to docProps/core.xml.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone

from python_docx_builder.validation import check_xml_text


def w3cdtf_now() -> str:
    """Current UTC time in the W3CDTF form core.xml uses (no fractions)."""
    return datetime.now(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


@dataclass
class Metadata:
    """Core document properties.

    Attributes:
        title: dc:title
        subject: dc:subject
        creator: dc:creator (author)
        keywords: cp:keywords, written comma separated
        description: dc:description
        created: dcterms:created as an ISO 8601 string; now if empty
        modified: dcterms:modified as an ISO 8601 string; now if empty
    """

    title: str = ""
    subject: str = ""
    creator: str = ""
    keywords: list[str] = field(default_factory=list)
    description: str = ""
    created: str = ""
    modified: str = ""

    def copy(self) -> Metadata:
        return Metadata(
            self.title,
            self.subject,
            self.creator,
            list(self.keywords),
            self.description,
            self.created,
            self.modified,
        )

    def validate(self, op: str) -> None:
        """Check that every property can be written to core.xml.

        Raises:
            ValidationError: If a property contains characters XML forbids
        """
        for name in ("title", "subject", "creator", "description", "created", "modified"):
            check_xml_text(op, name, getattr(self, name))
        for keyword in self.keywords:
            check_xml_text(op, "keywords", keyword)
