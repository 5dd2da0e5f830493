"""
Bookkeeping shared by the entities of one package part.

Paragraphs and tables mint IDs, register images and hyperlinks as they are
built. They do that through a PartContext: the document's ID generator and
media store, plus the relationship table of the part that will contain them
(word/document.xml or one header/footer part).
"""

from __future__ import annotations

from dataclasses import dataclass

from python_docx_builder.ids import IDGenerator
from python_docx_builder.media import MediaStore
from python_docx_builder.relationships import RelationshipTable


@dataclass(frozen=True)
class PartContext:
    ids: IDGenerator
    relationships: RelationshipTable
    media: MediaStore

    def for_part(self, relationships: RelationshipTable) -> PartContext:
        """A context for another part of the same document."""
        return PartContext(self.ids, relationships, self.media)
