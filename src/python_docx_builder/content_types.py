"""
ContentTypeManifest class for building [Content_Types].xml.

Content types in OOXML use two mechanisms:
- Default: maps a file extension to a content type (e.g., png -> image/png)
- Override: maps one specific part name to a content type
  (e.g., /word/document.xml -> ...document.main+xml)

The packager declares the rels/xml defaults, one default per distinct media
extension, and one override per XML part it writes.
"""

from __future__ import annotations

import logging

from lxml import etree

from .constants import CONTENT_TYPES_NAMESPACE

logger = logging.getLogger(__name__)


class ContentTypeManifest:
    """In-memory [Content_Types].xml.

    Entries keep insertion order. Adding an extension or part name that is
    already declared is a no-op, so callers can add freely while walking the
    parts they write.

    Example:
        >>> manifest = ContentTypeManifest()
        >>> manifest.add_default("png", ContentTypes.PNG)
        True
        >>> manifest.add_override("/word/document.xml", ContentTypes.DOCUMENT)
        True
        >>> root = manifest.to_element()
    """

    def __init__(self) -> None:
        self._defaults: dict[str, str] = {}
        self._overrides: dict[str, str] = {}

    def add_default(self, extension: str, content_type: str) -> bool:
        """Declare a content type for a file extension.

        Args:
            extension: Extension with or without the dot, any case
            content_type: The MIME type

        Returns:
            True if a new default was added, False if the extension was
            already declared or an argument was empty
        """
        ext = extension.lower().lstrip(".")
        if not ext or not content_type:
            return False
        if ext in self._defaults:
            return False
        self._defaults[ext] = content_type
        logger.debug(f"Added content type default: {ext} -> {content_type}")
        return True

    def add_override(self, part_name: str, content_type: str) -> bool:
        """Declare a content type for one part.

        Args:
            part_name: Part name; a leading "/" is added if missing
            content_type: The MIME type

        Returns:
            True if a new override was added, False if it already existed
        """
        if not part_name or not content_type:
            return False
        if not part_name.startswith("/"):
            part_name = f"/{part_name}"
        if part_name in self._overrides:
            logger.debug(f"Content type override already exists for {part_name}")
            return False
        self._overrides[part_name] = content_type
        logger.debug(f"Added content type override: {part_name} -> {content_type}")
        return True

    def get_content_type(self, part_name: str) -> str | None:
        """Resolve the content type of a part (override first, then default)."""
        if not part_name.startswith("/"):
            part_name = f"/{part_name}"
        if part_name in self._overrides:
            return self._overrides[part_name]
        _, _, ext = part_name.rpartition(".")
        return self._defaults.get(ext.lower())

    @property
    def defaults(self) -> dict[str, str]:
        return dict(self._defaults)

    @property
    def overrides(self) -> dict[str, str]:
        return dict(self._overrides)

    def to_element(self) -> etree._Element:
        """Build the Types root element."""
        root = etree.Element(
            f"{{{CONTENT_TYPES_NAMESPACE}}}Types",
            nsmap={None: CONTENT_TYPES_NAMESPACE},
        )
        for ext, content_type in self._defaults.items():
            default = etree.SubElement(root, f"{{{CONTENT_TYPES_NAMESPACE}}}Default")
            default.set("Extension", ext)
            default.set("ContentType", content_type)
        for part_name, content_type in self._overrides.items():
            override = etree.SubElement(root, f"{{{CONTENT_TYPES_NAMESPACE}}}Override")
            override.set("PartName", part_name)
            override.set("ContentType", content_type)
        return root


# Common content type constants for convenience
class ContentTypes:
    """Common OOXML content type strings."""

    # Package
    RELATIONSHIPS = "application/vnd.openxmlformats-package.relationships+xml"
    XML = "application/xml"
    CORE_PROPERTIES = "application/vnd.openxmlformats-package.core-properties+xml"
    EXTENDED_PROPERTIES = "application/vnd.openxmlformats-officedocument.extended-properties+xml"

    # Word document parts
    DOCUMENT = "application/vnd.openxmlformats-officedocument.wordprocessingml.document.main+xml"
    STYLES = "application/vnd.openxmlformats-officedocument.wordprocessingml.styles+xml"
    SETTINGS = "application/vnd.openxmlformats-officedocument.wordprocessingml.settings+xml"
    FONT_TABLE = "application/vnd.openxmlformats-officedocument.wordprocessingml.fontTable+xml"
    HEADER = "application/vnd.openxmlformats-officedocument.wordprocessingml.header+xml"
    FOOTER = "application/vnd.openxmlformats-officedocument.wordprocessingml.footer+xml"
    THEME = "application/vnd.openxmlformats-officedocument.theme+xml"

    # Images
    PNG = "image/png"
    JPEG = "image/jpeg"
    GIF = "image/gif"
    BMP = "image/bmp"
    TIFF = "image/tiff"
    SVG = "image/svg+xml"
    WEBP = "image/webp"
    WMF = "image/x-wmf"
    EMF = "image/x-emf"
    OCTET_STREAM = "application/octet-stream"

    IMAGE_EXTENSION_MAP = {
        "png": PNG,
        "jpg": JPEG,
        "jpeg": JPEG,
        "gif": GIF,
        "bmp": BMP,
        "tif": TIFF,
        "tiff": TIFF,
        "svg": SVG,
        "webp": WEBP,
        "wmf": WMF,
        "emf": EMF,
    }


def content_type_for_extension(extension: str) -> str:
    """Map a file extension to its MIME type.

    Unknown extensions map to application/octet-stream.

    Example:
        >>> content_type_for_extension(".JPG")
        'image/jpeg'
    """
    return ContentTypes.IMAGE_EXTENSION_MAP.get(
        extension.lower().lstrip("."), ContentTypes.OCTET_STREAM
    )
