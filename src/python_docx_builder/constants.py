"""
Centralized constants for OOXML namespaces, part names and value limits.

Everything the object model, serializer and packager need to agree on lives
here: namespace URLs and Clark-notation helpers, in-package part paths,
relationship type URIs, and the validation bounds enforced by setters.
"""

# =============================================================================
# Word Processing Namespaces
# =============================================================================

# Main WordprocessingML namespace (Word 2007+)
WORD_NAMESPACE = "http://schemas.openxmlformats.org/wordprocessingml/2006/main"


# =============================================================================
# DrawingML Namespaces
# =============================================================================

# DrawingML main namespace
A_NAMESPACE = "http://schemas.openxmlformats.org/drawingml/2006/main"

# Drawing picture namespace
PIC_NAMESPACE = "http://schemas.openxmlformats.org/drawingml/2006/picture"

# Word Processing Drawing namespace (inline/anchor positioning)
WP_NAMESPACE = "http://schemas.openxmlformats.org/drawingml/2006/wordprocessingDrawing"


# =============================================================================
# Package and Relationship Namespaces
# =============================================================================

# Open Packaging Convention namespaces
PACKAGE_RELATIONSHIPS_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/relationships"
CONTENT_TYPES_NAMESPACE = "http://schemas.openxmlformats.org/package/2006/content-types"

# Office Document relationships
OFFICE_RELATIONSHIPS_NAMESPACE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships"
)

# XML namespace
XML_NAMESPACE = "http://www.w3.org/XML/1998/namespace"


# =============================================================================
# Document Properties Namespaces
# =============================================================================

CORE_PROPERTIES_NAMESPACE = (
    "http://schemas.openxmlformats.org/package/2006/metadata/core-properties"
)
EXTENDED_PROPERTIES_NAMESPACE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/extended-properties"
)
DC_NAMESPACE = "http://purl.org/dc/elements/1.1/"
DCTERMS_NAMESPACE = "http://purl.org/dc/terms/"
XSI_NAMESPACE = "http://www.w3.org/2001/XMLSchema-instance"


# =============================================================================
# Namespace Maps
# =============================================================================

# Basic namespace map with just the main Word namespace
NSMAP = {"w": WORD_NAMESPACE}

# Namespace map for document, header and footer roots
NSMAP_BODY = {
    "w": WORD_NAMESPACE,
    "r": OFFICE_RELATIONSHIPS_NAMESPACE,
    "wp": WP_NAMESPACE,
    "a": A_NAMESPACE,
    "pic": PIC_NAMESPACE,
}

# DrawingML namespace map
NSMAP_DRAWING = {
    "a": A_NAMESPACE,
    "pic": PIC_NAMESPACE,
    "wp": WP_NAMESPACE,
    "r": OFFICE_RELATIONSHIPS_NAMESPACE,
}

# docProps/core.xml namespace map
NSMAP_CORE = {
    "cp": CORE_PROPERTIES_NAMESPACE,
    "dc": DC_NAMESPACE,
    "dcterms": DCTERMS_NAMESPACE,
    "xsi": XSI_NAMESPACE,
}


# =============================================================================
# Package Part Paths
# =============================================================================

CONTENT_TYPES_PATH = "[Content_Types].xml"
ROOT_RELS_PATH = "_rels/.rels"
DOCUMENT_PATH = "word/document.xml"
DOCUMENT_RELS_PATH = "word/_rels/document.xml.rels"
STYLES_PATH = "word/styles.xml"
SETTINGS_PATH = "word/settings.xml"
FONT_TABLE_PATH = "word/fontTable.xml"
THEME_PATH = "word/theme/theme1.xml"
CORE_PROPERTIES_PATH = "docProps/core.xml"
APP_PROPERTIES_PATH = "docProps/app.xml"

# Directory (relative to word/) that holds media parts
MEDIA_DIR = "media"


# =============================================================================
# Relationship Types
# =============================================================================

REL_TYPE_OFFICE_DOCUMENT = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships/officeDocument"
)
REL_TYPE_CORE_PROPERTIES = (
    "http://schemas.openxmlformats.org/package/2006/relationships/metadata/core-properties"
)
REL_TYPE_EXTENDED_PROPERTIES = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships/extended-properties"
)
REL_TYPE_STYLES = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/styles"
REL_TYPE_SETTINGS = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/settings"
REL_TYPE_FONT_TABLE = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships/fontTable"
)
REL_TYPE_THEME = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/theme"
REL_TYPE_HEADER = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/header"
REL_TYPE_FOOTER = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/footer"
REL_TYPE_IMAGE = "http://schemas.openxmlformats.org/officeDocument/2006/relationships/image"
REL_TYPE_HYPERLINK = (
    "http://schemas.openxmlformats.org/officeDocument/2006/relationships/hyperlink"
)


# =============================================================================
# Defaults
# =============================================================================

DEFAULT_FONT_NAME = "Calibri"
DEFAULT_HEADING_FONT_NAME = "Calibri Light"

# Font size in half-points (11pt)
DEFAULT_FONT_SIZE = 22

# Single line spacing in 240ths of a line
DEFAULT_LINE_SPACING = 240

DEFAULT_APPLICATION = "python-docx-builder"

# Placeholder size for images whose pixel dimensions cannot be decoded
DEFAULT_IMAGE_SIZE_PX = 96


# =============================================================================
# Limits
# =============================================================================

# Font size in half-points
MIN_FONT_SIZE = 2
MAX_FONT_SIZE = 3276

# Indentation and spacing in twips (roughly 22 inches)
MAX_INDENT = 31680
MIN_INDENT = -31680
MAX_SPACING = 31680
MAX_LINE_SPACING = 31680

# Table dimensions
MIN_TABLE_ROWS = 1
MAX_TABLE_ROWS = 1000
MIN_TABLE_COLS = 1
MAX_TABLE_COLS = 63

# Section columns
MIN_COLUMNS = 1
MAX_COLUMNS = 10

# Paragraph style outline levels and list levels
MIN_OUTLINE_LEVEL = 0
MAX_OUTLINE_LEVEL = 9
MAX_NUMBERING_LEVEL = 8

# Border width in eighths of a point
MAX_BORDER_WIDTH = 96


# =============================================================================
# Helper Functions
# =============================================================================


def w(tag: str) -> str:
    """Create a fully qualified Word namespace tag.

    Args:
        tag: Tag name without namespace prefix (e.g., "p", "r", "t")

    Returns:
        Fully qualified tag (e.g., "{http://...wordprocessingml/2006/main}p")

    Example:
        >>> w("p")
        '{http://schemas.openxmlformats.org/wordprocessingml/2006/main}p'
    """
    return f"{{{WORD_NAMESPACE}}}{tag}"


def a(tag: str) -> str:
    """Create a fully qualified DrawingML main namespace tag."""
    return f"{{{A_NAMESPACE}}}{tag}"


def pic(tag: str) -> str:
    """Create a fully qualified DrawingML picture namespace tag."""
    return f"{{{PIC_NAMESPACE}}}{tag}"


def wp(tag: str) -> str:
    """Create a fully qualified Word Processing Drawing namespace tag."""
    return f"{{{WP_NAMESPACE}}}{tag}"


def r(tag: str) -> str:
    """Create a fully qualified Office Relationships namespace tag.

    Args:
        tag: Tag name without namespace prefix (e.g., "embed", "id")

    Returns:
        Fully qualified tag with the relationships namespace
    """
    return f"{{{OFFICE_RELATIONSHIPS_NAMESPACE}}}{tag}"


def xml_space() -> str:
    """Return the qualified xml:space attribute name."""
    return f"{{{XML_NAMESPACE}}}space"
