"""
RelationshipTable class for managing the relationships of a package part.

A relationship links the main document part to another part (styles, a
header, an image) or to an external resource (a hyperlink URL) using a unique
ID (rId), a relationship type URI, and a target. Content refers to
relationships only by ID, so every ID used by the entity graph must have
exactly one entry here before packaging.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from lxml import etree

from .constants import (
    PACKAGE_RELATIONSHIPS_NAMESPACE,
    REL_TYPE_CORE_PROPERTIES,
    REL_TYPE_EXTENDED_PROPERTIES,
    REL_TYPE_FONT_TABLE,
    REL_TYPE_FOOTER,
    REL_TYPE_HEADER,
    REL_TYPE_HYPERLINK,
    REL_TYPE_IMAGE,
    REL_TYPE_OFFICE_DOCUMENT,
    REL_TYPE_SETTINGS,
    REL_TYPE_STYLES,
    REL_TYPE_THEME,
)
from .errors import NotFoundError, ValidationError
from .ids import IDGenerator, IDKind
from .locks import ReadWriteLock

logger = logging.getLogger(__name__)

# OOXML relationship namespace
RELS_NAMESPACE = PACKAGE_RELATIONSHIPS_NAMESPACE


class TargetMode(Enum):
    """Whether a relationship target lives inside the package."""

    INTERNAL = "Internal"
    EXTERNAL = "External"

    @classmethod
    def parse(cls, value: str | TargetMode | None) -> TargetMode:
        """Accept an enum member, its token (any case) or None (internal)."""
        if isinstance(value, TargetMode):
            return value
        if not value or value.strip().lower() == "internal":
            return cls.INTERNAL
        if value.strip().lower() == "external":
            return cls.EXTERNAL
        raise ValidationError("TargetMode.parse", "mode", value, "must be Internal or External")


@dataclass(frozen=True)
class Relationship:
    """One entry of a .rels part.

    Attributes:
        id: Relationship ID (e.g., "rId3")
        type: Relationship type URI
        target: Target path relative to the source part, or a URL
        mode: Internal for in-package parts, External for hyperlinks
    """

    id: str
    type: str
    target: str
    mode: TargetMode = TargetMode.INTERNAL

    @property
    def is_external(self) -> bool:
        return self.mode is TargetMode.EXTERNAL


class RelationshipTable:
    """Relationships of one package part (word/document.xml or a header/footer).

    IDs come from the owning document's IDGenerator, so an ID is never
    handed out twice even after the relationship carrying it is deleted.
    All access goes through a readers/writer lock.

    Example:
        >>> table = RelationshipTable(IDGenerator())
        >>> rel_id = table.add(RelationshipTypes.HYPERLINK, "https://example.com",
        ...                    TargetMode.EXTERNAL)
        >>> table.get(rel_id).target
        'https://example.com'
    """

    def __init__(self, id_generator: IDGenerator) -> None:
        """Initialize an empty table.

        Args:
            id_generator: The owning document's generator; its RELATIONSHIP
                counter supplies new IDs
        """
        self._ids = id_generator
        self._relationships: dict[str, Relationship] = {}
        self._lock = ReadWriteLock()

    # ---- Write Operations ----

    def add(
        self,
        rel_type: str,
        target: str,
        mode: TargetMode | str = TargetMode.INTERNAL,
    ) -> str:
        """Add a relationship under a freshly minted ID.

        Args:
            rel_type: The relationship type URI
            target: The target path or URL
            mode: Internal (default) or External

        Returns:
            The new relationship ID (e.g., "rId3")

        Raises:
            ValidationError: If rel_type or target is empty
        """
        if not rel_type:
            raise ValidationError(
                "RelationshipTable.add", "rel_type", rel_type, "relationship type cannot be empty"
            )
        if not target:
            raise ValidationError("RelationshipTable.add", "target", target, "target cannot be empty")
        target_mode = TargetMode.parse(mode)

        with self._lock.write():
            rel_id = self._ids.next_relationship_id()
            self._relationships[rel_id] = Relationship(rel_id, rel_type, target, target_mode)

        logger.debug(f"Added relationship {rel_id}: {rel_type} -> {target}")
        return rel_id

    def add_image(self, target: str) -> str:
        return self.add(RelationshipTypes.IMAGE, target)

    def add_hyperlink(self, url: str) -> str:
        return self.add(RelationshipTypes.HYPERLINK, url, TargetMode.EXTERNAL)

    def add_header(self, target: str) -> str:
        return self.add(RelationshipTypes.HEADER, target)

    def add_footer(self, target: str) -> str:
        return self.add(RelationshipTypes.FOOTER, target)

    def register_existing(
        self,
        rel_id: str,
        rel_type: str,
        target: str,
        mode: TargetMode | str = TargetMode.INTERNAL,
    ) -> None:
        """Register a relationship read from an existing package.

        Registering an ID that is already present is a no-op. The ID
        generator is advanced past the ID's numeric suffix so relationships
        added afterwards cannot collide with it.

        Args:
            rel_id: The ID as it appears in the package (e.g., "rId7")
            rel_type: The relationship type URI
            target: The target path or URL
            mode: Internal or External

        Raises:
            ValidationError: If any argument is empty
        """
        op = "RelationshipTable.register_existing"
        if not rel_id:
            raise ValidationError(op, "rel_id", rel_id, "relationship id cannot be empty")
        if not rel_type:
            raise ValidationError(op, "rel_type", rel_type, "relationship type cannot be empty")
        if not target:
            raise ValidationError(op, "target", target, "relationship target cannot be empty")
        target_mode = TargetMode.parse(mode)

        with self._lock.write():
            if rel_id in self._relationships:
                logger.debug(f"Relationship {rel_id} already registered")
                return
            self._relationships[rel_id] = Relationship(rel_id, rel_type, target, target_mode)
            self._ids.advance_past(IDKind.RELATIONSHIP, rel_id)

        logger.debug(f"Registered existing relationship {rel_id}: {rel_type} -> {target}")

    def delete(self, rel_id: str) -> None:
        """Remove a relationship by ID.

        Raises:
            NotFoundError: If no relationship has this ID
        """
        with self._lock.write():
            if rel_id not in self._relationships:
                raise NotFoundError("RelationshipTable.delete", f"relationship {rel_id!r}")
            del self._relationships[rel_id]
        logger.debug(f"Removed relationship {rel_id}")

    # ---- Read Operations ----

    def get(self, rel_id: str) -> Relationship:
        """Get a relationship by ID.

        Raises:
            NotFoundError: If no relationship has this ID
        """
        with self._lock.read():
            rel = self._relationships.get(rel_id)
        if rel is None:
            raise NotFoundError("RelationshipTable.get", f"relationship {rel_id!r}")
        return rel

    def get_by_target(self, target: str) -> Relationship:
        """Get the first relationship pointing at ``target``.

        Raises:
            NotFoundError: If nothing points at the target
        """
        with self._lock.read():
            for rel in self._relationships.values():
                if rel.target == target:
                    return rel
        raise NotFoundError("RelationshipTable.get_by_target", f"relationship to {target!r}")

    def all(self) -> list[Relationship]:
        """Return every relationship in registration order."""
        with self._lock.read():
            return list(self._relationships.values())

    def count(self) -> int:
        with self._lock.read():
            return len(self._relationships)

    def __contains__(self, rel_id: object) -> bool:
        with self._lock.read():
            return rel_id in self._relationships

    def __len__(self) -> int:
        return self.count()

    # ---- Serialization ----

    def to_element(self) -> etree._Element:
        """Build the w:Relationships root for word/_rels/document.xml.rels."""
        return build_relationships_element(self.all())


def build_relationships_element(relationships: list[Relationship]) -> etree._Element:
    """Build a Relationships element from relationship records.

    Internal relationships omit TargetMode entirely, which is what Word
    writes itself.
    """
    root = etree.Element(f"{{{RELS_NAMESPACE}}}Relationships", nsmap={None: RELS_NAMESPACE})
    for rel in relationships:
        rel_elem = etree.SubElement(root, f"{{{RELS_NAMESPACE}}}Relationship")
        rel_elem.set("Id", rel.id)
        rel_elem.set("Type", rel.type)
        rel_elem.set("Target", rel.target)
        if rel.is_external:
            rel_elem.set("TargetMode", TargetMode.EXTERNAL.value)
    return root


# Common relationship type constants for convenience
class RelationshipTypes:
    """Common OOXML relationship type URIs."""

    OFFICE_DOCUMENT = REL_TYPE_OFFICE_DOCUMENT
    CORE_PROPERTIES = REL_TYPE_CORE_PROPERTIES
    EXTENDED_PROPERTIES = REL_TYPE_EXTENDED_PROPERTIES
    STYLES = REL_TYPE_STYLES
    SETTINGS = REL_TYPE_SETTINGS
    FONT_TABLE = REL_TYPE_FONT_TABLE
    THEME = REL_TYPE_THEME
    HEADER = REL_TYPE_HEADER
    FOOTER = REL_TYPE_FOOTER
    IMAGE = REL_TYPE_IMAGE
    HYPERLINK = REL_TYPE_HYPERLINK
