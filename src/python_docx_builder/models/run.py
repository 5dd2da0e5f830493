"""
Run model: a span of text sharing one set of character formatting.

A run holds either text (with explicit breaks) or a single image. It can
also carry fields, which the serializer expands into the begin/instruction/
separate/result/end run sequence Word expects, and a hyperlink target.
"""

from __future__ import annotations

from python_docx_builder.constants import (
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
    MAX_FONT_SIZE,
    MIN_FONT_SIZE,
)
from python_docx_builder.errors import ValidationError
from python_docx_builder.models.field import Field
from python_docx_builder.models.formatting import (
    BLACK,
    BreakType,
    Color,
    Font,
    HighlightColor,
    UnderlineStyle,
)
from python_docx_builder.models.image import Image
from python_docx_builder.validation import check_xml_text

# A run's content is a sequence of text chunks and explicit breaks
RunContent = str | BreakType


class Run:
    """A run of text.

    Formatting defaults match the document defaults written to styles.xml
    (Calibri, 11pt, black), and only values that differ from them are
    serialized.

    Setting an image clears the text and fields of the run; setting text on
    an image run removes the image.

    Example:
        >>> run = paragraph.add_run("Hello")
        >>> run.set_bold(True)
        >>> run.set_size(28)
    """

    def __init__(self, run_id: str, text: str = "") -> None:
        if text:
            check_xml_text("Run", "text", text)
        self.id = run_id
        self._content: list[RunContent] = [text] if text else []
        self.font = Font(DEFAULT_FONT_NAME)
        self.color: Color = BLACK
        self.size = DEFAULT_FONT_SIZE
        self.bold = False
        self.italic = False
        self.strike = False
        self.underline = UnderlineStyle.NONE
        self.highlight = HighlightColor.NONE
        self.style: str | None = None
        self._fields: list[Field] = []
        self._image: Image | None = None
        # Set for runs created by Paragraph.add_hyperlink
        self.hyperlink_id: str | None = None
        self.hyperlink_url: str | None = None

    def __repr__(self) -> str:
        if self._image is not None:
            return f"<Run id={self.id!r} image={self._image.id!r}>"
        return f"<Run id={self.id!r} text={self.text!r}>"

    # ---- Content ----

    @property
    def text(self) -> str:
        """The run's text; line breaks added as "\\n" are included."""
        return "".join(item for item in self._content if isinstance(item, str))

    def content(self) -> list[RunContent]:
        """Text chunks and explicit breaks, in order."""
        return list(self._content)

    def set_text(self, text: str) -> None:
        """Replace the run's content with ``text``.

        "\\n" becomes a line break and "\\t" a tab when serialized. Any image
        on the run is removed.
        """
        if text:
            check_xml_text("Run.set_text", "text", text)
        self._content = [text] if text else []
        self._image = None

    def add_text(self, text: str) -> None:
        """Append text to the run."""
        if not text:
            return
        check_xml_text("Run.add_text", "text", text)
        self._image = None
        if self._content and isinstance(self._content[-1], str):
            self._content[-1] += text
        else:
            self._content.append(text)

    def add_break(self, break_type: BreakType = BreakType.LINE) -> None:
        """Append a page, column or line break."""
        if not isinstance(break_type, BreakType):
            raise ValidationError("Run.add_break", "break_type", break_type, "not a BreakType")
        self._image = None
        self._content.append(break_type)

    def breaks(self) -> list[BreakType]:
        return [item for item in self._content if isinstance(item, BreakType)]

    @property
    def image(self) -> Image | None:
        return self._image

    def set_image(self, image: Image) -> None:
        """Make this an image run; text and fields are cleared."""
        self._content = []
        self._fields = []
        self._image = image

    @property
    def has_image(self) -> bool:
        return self._image is not None

    def fields(self) -> list[Field]:
        return list(self._fields)

    def add_field(self, field: Field) -> None:
        if not isinstance(field, Field):
            raise ValidationError("Run.add_field", "field", field, "not a Field")
        self._image = None
        self._fields.append(field)

    # ---- Formatting ----

    def set_font(self, font: Font | str) -> None:
        if isinstance(font, str):
            font = Font(font)
        if not font.name or not font.name.strip():
            raise ValidationError("Run.set_font", "font", font.name, "font name cannot be empty")
        self.font = font

    def set_color(self, color: Color) -> None:
        if not isinstance(color, Color):
            raise ValidationError("Run.set_color", "color", color, "not a Color")
        self.color = color

    def set_size(self, size: int) -> None:
        """Set the font size in half-points.

        Raises:
            ValidationError: If size is outside [2, 3276]
        """
        if not isinstance(size, int) or not MIN_FONT_SIZE <= size <= MAX_FONT_SIZE:
            raise ValidationError(
                "Run.set_size",
                "size",
                size,
                f"font size must be between {MIN_FONT_SIZE} and {MAX_FONT_SIZE} half-points",
            )
        self.size = size

    def set_bold(self, bold: bool) -> None:
        self.bold = bool(bold)

    def set_italic(self, italic: bool) -> None:
        self.italic = bool(italic)

    def set_strike(self, strike: bool) -> None:
        self.strike = bool(strike)

    def set_underline(self, underline: UnderlineStyle) -> None:
        if not isinstance(underline, UnderlineStyle):
            raise ValidationError("Run.set_underline", "underline", underline, "not an UnderlineStyle")
        self.underline = underline

    def set_highlight(self, highlight: HighlightColor) -> None:
        if not isinstance(highlight, HighlightColor):
            raise ValidationError("Run.set_highlight", "highlight", highlight, "not a HighlightColor")
        self.highlight = highlight

    def set_style(self, style_id: str | None) -> None:
        """Reference a character style by ID (not checked against the registry)."""
        self.style = style_id or None
