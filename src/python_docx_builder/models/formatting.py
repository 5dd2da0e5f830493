"""
Formatting value types shared by runs, paragraphs, tables and styles.

Enumerations carry their OOXML token as ``.value`` so the serializer can emit
them verbatim. Record types are small frozen dataclasses; lengths are in
twips and border widths in eighths of a point, as OOXML stores them.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from python_docx_builder.constants import MAX_BORDER_WIDTH
from python_docx_builder.errors import ValidationError

_HEX_RE = re.compile(r"^#?([0-9A-Fa-f]{6})$")


class Alignment(Enum):
    """Horizontal alignment of paragraphs and tables."""

    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"
    JUSTIFY = "both"
    DISTRIBUTE = "distribute"


class UnderlineStyle(Enum):
    """Underline styles for runs."""

    NONE = "none"
    SINGLE = "single"
    DOUBLE = "double"
    THICK = "thick"
    DOTTED = "dotted"
    DASHED = "dash"
    WAVE = "wave"


class HighlightColor(Enum):
    """Text highlight colors Word accepts in w:highlight."""

    NONE = "none"
    YELLOW = "yellow"
    GREEN = "green"
    CYAN = "cyan"
    MAGENTA = "magenta"
    BLUE = "blue"
    RED = "red"
    DARK_BLUE = "darkBlue"
    DARK_CYAN = "darkCyan"
    DARK_GREEN = "darkGreen"
    DARK_MAGENTA = "darkMagenta"
    DARK_RED = "darkRed"
    DARK_YELLOW = "darkYellow"
    DARK_GRAY = "darkGray"
    LIGHT_GRAY = "lightGray"


class LineSpacingRule(Enum):
    """How a line spacing value is interpreted.

    AUTO values are in 240ths of a line (240 = single); EXACT and AT_LEAST
    values are in twips.
    """

    AUTO = "auto"
    EXACT = "exact"
    AT_LEAST = "atLeast"


class BorderLineStyle(Enum):
    """Line styles for paragraph, table and cell borders."""

    NONE = "none"
    SINGLE = "single"
    DOTTED = "dotted"
    DASHED = "dashed"
    DOUBLE = "double"
    TRIPLE = "triple"
    THICK = "thick"


class BreakType(Enum):
    """Break kinds a run can carry."""

    PAGE = "page"
    COLUMN = "column"
    LINE = "textWrapping"


class WidthType(Enum):
    """Units of a table or cell width."""

    AUTO = "auto"
    DXA = "dxa"  # twips
    PCT = "pct"  # fiftieths of a percent


class VerticalAlignment(Enum):
    """Vertical alignment of content within a table cell."""

    TOP = "top"
    CENTER = "center"
    BOTTOM = "bottom"


@dataclass(frozen=True)
class Color:
    """An RGB color.

    Example:
        >>> Color(255, 0, 0).hex
        'FF0000'
        >>> Color.from_hex("#0000ff")
        Color(r=0, g=0, b=255)
    """

    r: int = 0
    g: int = 0
    b: int = 0

    def __post_init__(self) -> None:
        for name in ("r", "g", "b"):
            value = getattr(self, name)
            if not isinstance(value, int) or not 0 <= value <= 255:
                raise ValidationError("Color", name, value, "component must be in [0, 255]")

    @property
    def hex(self) -> str:
        """Six upper-case hex digits, as OOXML writes colors."""
        return f"{self.r:02X}{self.g:02X}{self.b:02X}"

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse "RRGGBB" or "#RRGGBB".

        Raises:
            ValidationError: If the string is not six hex digits
        """
        match = _HEX_RE.match(value or "")
        if match is None:
            raise ValidationError("Color.from_hex", "value", value, "expected six hex digits")
        digits = match.group(1)
        return cls(int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


BLACK = Color(0, 0, 0)
WHITE = Color(255, 255, 255)
RED = Color(255, 0, 0)
GREEN = Color(0, 255, 0)
BLUE = Color(0, 0, 255)
HYPERLINK_BLUE = Color(0x00, 0x00, 0xFF)
FOLLOWED_HYPERLINK_PURPLE = Color(0x80, 0x00, 0x80)


@dataclass(frozen=True)
class Font:
    """Font family names for the script ranges of a run.

    Attributes:
        name: Font for ASCII and high-ANSI text
        east_asia: Font for East Asian text (empty = inherit)
        complex_script: Font for complex-script text (empty = inherit)
    """

    name: str
    east_asia: str = ""
    complex_script: str = ""


@dataclass(frozen=True)
class Indentation:
    """Paragraph indentation in twips.

    ``first_line`` and ``hanging`` are mutually exclusive; the paragraph
    setter enforces that.
    """

    left: int = 0
    right: int = 0
    first_line: int = 0
    hanging: int = 0

    @property
    def is_empty(self) -> bool:
        return not (self.left or self.right or self.first_line or self.hanging)


@dataclass(frozen=True)
class LineSpacing:
    """Line spacing as a rule plus a value."""

    rule: LineSpacingRule = LineSpacingRule.AUTO
    value: int = 240


@dataclass(frozen=True)
class BorderStyle:
    """One edge of a border.

    Attributes:
        style: Line style
        width: Line width in eighths of a point
        color: Line color
        space: Padding between the border and the content, in points
    """

    style: BorderLineStyle = BorderLineStyle.SINGLE
    width: int = 4
    color: Color = BLACK
    space: int = 0

    def __post_init__(self) -> None:
        if not 0 <= self.width <= MAX_BORDER_WIDTH:
            raise ValidationError(
                "BorderStyle", "width", self.width, f"must be in [0, {MAX_BORDER_WIDTH}]"
            )
        if self.space < 0:
            raise ValidationError("BorderStyle", "space", self.space, "must be non-negative")


@dataclass(frozen=True)
class Borders:
    """Borders of a paragraph, cell or table.

    Edges left as None are not emitted.
    """

    top: BorderStyle | None = None
    left: BorderStyle | None = None
    bottom: BorderStyle | None = None
    right: BorderStyle | None = None
    inside_h: BorderStyle | None = None
    inside_v: BorderStyle | None = None

    @classmethod
    def all(cls, border: BorderStyle) -> Borders:
        """Use the same border on the four outer edges."""
        return cls(top=border, left=border, bottom=border, right=border)

    def edges(self) -> list[tuple[str, BorderStyle]]:
        """Return (OOXML edge name, border) pairs for the edges that are set."""
        names = [
            ("top", self.top),
            ("left", self.left),
            ("bottom", self.bottom),
            ("right", self.right),
            ("insideH", self.inside_h),
            ("insideV", self.inside_v),
        ]
        return [(name, border) for name, border in names if border is not None]

    @property
    def is_empty(self) -> bool:
        return not self.edges()


@dataclass(frozen=True)
class TableWidth:
    """Width of a table or cell."""

    type: WidthType = WidthType.AUTO
    value: int = 0


@dataclass
class NumberingReference:
    """Reference to a list definition (w:numPr)."""

    num_id: int
    level: int = 0

