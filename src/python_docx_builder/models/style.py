"""
Style model classes for Word document style management.

Provides data classes for representing styles, run formatting, and paragraph
formatting. Values are kept in OOXML-native units: font sizes in half-points,
spacing and indentation in twips.

These models are held by StyleRegistry and written to word/styles.xml by the
serializer.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum

from python_docx_builder.constants import (
    MAX_FONT_SIZE,
    MAX_INDENT,
    MAX_LINE_SPACING,
    MAX_OUTLINE_LEVEL,
    MAX_SPACING,
    MIN_FONT_SIZE,
    MIN_INDENT,
    MIN_OUTLINE_LEVEL,
)
from python_docx_builder.errors import ValidationError
from python_docx_builder.models.formatting import (
    Alignment,
    Color,
    Font,
    HighlightColor,
    Indentation,
    LineSpacing,
    UnderlineStyle,
)


class StyleType(Enum):
    """Types of styles in Word documents.

    Attributes:
        PARAGRAPH: Applied to whole paragraphs (includes both paragraph
            and character formatting)
        CHARACTER: Applied to runs of text within paragraphs
        TABLE: Applied to tables
        NUMBERING: Applied to numbered/bulleted lists
    """

    PARAGRAPH = "paragraph"
    CHARACTER = "character"
    TABLE = "table"
    NUMBERING = "numbering"


@dataclass
class RunFormatting:
    """Character-level formatting properties.

    All properties are optional (None means inherit from the parent style or
    document defaults).

    Attributes:
        bold: Whether text is bold
        italic: Whether text is italic
        strike: Whether text has strikethrough
        underline: Underline style
        font: Font family names
        size: Font size in half-points (e.g., 24 for 12pt)
        color: Text color
        highlight: Highlight color

    Example:
        >>> fmt = RunFormatting(bold=True, size=28, color=Color(255, 0, 0))
        >>> fmt.bold
        True
    """

    bold: bool | None = None
    italic: bool | None = None
    strike: bool | None = None
    underline: UnderlineStyle | None = None
    font: Font | None = None
    size: int | None = None
    color: Color | None = None
    highlight: HighlightColor | None = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in self.__dataclass_fields__)


@dataclass
class ParagraphFormatting:
    """Paragraph-level formatting properties.

    All properties are optional (None means inherit).

    Attributes:
        alignment: Horizontal alignment
        spacing_before: Space before the paragraph in twips
        spacing_after: Space after the paragraph in twips
        line_spacing: Line spacing rule and value
        indentation: Left/right/first-line/hanging indents in twips
        keep_next: Keep paragraph with the next one on the same page
        keep_lines: Keep all lines of the paragraph on the same page
        page_break_before: Start the paragraph on a new page
        outline_level: Heading level 1-9, or 0 for body text
    """

    alignment: Alignment | None = None
    spacing_before: int | None = None
    spacing_after: int | None = None
    line_spacing: LineSpacing | None = None
    indentation: Indentation | None = None
    keep_next: bool | None = None
    keep_lines: bool | None = None
    page_break_before: bool | None = None
    outline_level: int | None = None

    @property
    def is_empty(self) -> bool:
        return all(getattr(self, name) is None for name in self.__dataclass_fields__)


@dataclass
class Style:
    """Represents a Word document style.

    A style combines an identifier, metadata, and formatting properties
    that can be applied to paragraphs, runs or tables. Styles can inherit
    from other styles via the based_on property; the registry keeps that
    chain acyclic.

    Attributes:
        style_id: Internal style identifier used in document references
            (e.g., "Heading1", "Strong")
        name: Display name shown in Word's UI (e.g., "heading 1")
        style_type: Type of style (paragraph, character, table, numbering)
        based_on: style_id of parent style to inherit from
        next_style: style_id of style to apply to the following paragraph
        linked_style: style_id of the linked paragraph/character style
        run_formatting: Character formatting properties
        paragraph_formatting: Paragraph formatting properties (paragraph
            styles only)
        ui_priority: Sort order in Word's style gallery
        quick_format: Whether style appears in the Quick Style gallery
        semi_hidden: Whether style is hidden from UI
        unhide_when_used: Whether to unhide style when first used
        is_default: Whether this is the default style for its type
        built_in: Whether the style belongs to the built-in catalog

    Example:
        >>> style = Style(
        ...     style_id="Callout",
        ...     name="Callout",
        ...     style_type=StyleType.PARAGRAPH,
        ...     based_on="Normal",
        ... )
        >>> style.set_spacing_after(120)
    """

    style_id: str
    name: str
    style_type: StyleType
    based_on: str | None = None
    next_style: str | None = None
    linked_style: str | None = None
    run_formatting: RunFormatting = field(default_factory=RunFormatting)
    paragraph_formatting: ParagraphFormatting = field(default_factory=ParagraphFormatting)
    ui_priority: int | None = None
    quick_format: bool = False
    semi_hidden: bool = False
    unhide_when_used: bool = False
    is_default: bool = False
    built_in: bool = False

    def __repr__(self) -> str:
        """String representation of the style."""
        return f"<Style style_id={self.style_id!r} name={self.name!r} type={self.style_type.value}>"

    def copy(self) -> Style:
        """Return an independent copy (formatting records included)."""
        return replace(
            self,
            run_formatting=replace(self.run_formatting),
            paragraph_formatting=replace(self.paragraph_formatting),
        )

    # ---- Character Formatting ----

    def set_font(self, font: Font | str) -> None:
        if isinstance(font, str):
            font = Font(font)
        if not font.name:
            raise ValidationError("Style.set_font", "font", font.name, "font name cannot be empty")
        self.run_formatting.font = font

    def set_size(self, size: int) -> None:
        """Set the font size in half-points ([2, 3276])."""
        if not MIN_FONT_SIZE <= size <= MAX_FONT_SIZE:
            raise ValidationError(
                "Style.set_size",
                "size",
                size,
                f"font size must be between {MIN_FONT_SIZE} and {MAX_FONT_SIZE} half-points",
            )
        self.run_formatting.size = size

    def set_bold(self, bold: bool) -> None:
        self.run_formatting.bold = bold

    def set_italic(self, italic: bool) -> None:
        self.run_formatting.italic = italic

    def set_underline(self, underline: UnderlineStyle) -> None:
        if not isinstance(underline, UnderlineStyle):
            raise ValidationError("Style.set_underline", "underline", underline, "not an UnderlineStyle")
        self.run_formatting.underline = underline

    def set_color(self, color: Color) -> None:
        self.run_formatting.color = color

    # ---- Paragraph Formatting ----

    def _require_paragraph(self, op: str) -> None:
        if self.style_type is not StyleType.PARAGRAPH:
            raise ValidationError(
                op, "style_type", self.style_type.value, "only paragraph styles carry paragraph formatting"
            )

    def set_alignment(self, alignment: Alignment) -> None:
        self._require_paragraph("Style.set_alignment")
        if not isinstance(alignment, Alignment):
            raise ValidationError("Style.set_alignment", "alignment", alignment, "not an Alignment")
        self.paragraph_formatting.alignment = alignment

    def set_spacing_before(self, twips: int) -> None:
        self._require_paragraph("Style.set_spacing_before")
        check_spacing("Style.set_spacing_before", "spacing_before", twips)
        self.paragraph_formatting.spacing_before = twips

    def set_spacing_after(self, twips: int) -> None:
        self._require_paragraph("Style.set_spacing_after")
        check_spacing("Style.set_spacing_after", "spacing_after", twips)
        self.paragraph_formatting.spacing_after = twips

    def set_line_spacing(self, spacing: LineSpacing) -> None:
        self._require_paragraph("Style.set_line_spacing")
        if not 0 <= spacing.value <= MAX_LINE_SPACING:
            raise ValidationError(
                "Style.set_line_spacing",
                "line_spacing",
                spacing.value,
                f"must be between 0 and {MAX_LINE_SPACING}",
            )
        self.paragraph_formatting.line_spacing = spacing

    def set_indentation(self, indentation: Indentation) -> None:
        self._require_paragraph("Style.set_indentation")
        validate_indentation("Style.set_indentation", indentation)
        self.paragraph_formatting.indentation = indentation

    def set_keep_next(self, keep: bool) -> None:
        self._require_paragraph("Style.set_keep_next")
        self.paragraph_formatting.keep_next = keep

    def set_keep_lines(self, keep: bool) -> None:
        self._require_paragraph("Style.set_keep_lines")
        self.paragraph_formatting.keep_lines = keep

    def set_page_break_before(self, page_break: bool) -> None:
        self._require_paragraph("Style.set_page_break_before")
        self.paragraph_formatting.page_break_before = page_break

    def set_outline_level(self, level: int) -> None:
        """Set the heading level (1-9), or 0 for body text."""
        self._require_paragraph("Style.set_outline_level")
        if not MIN_OUTLINE_LEVEL <= level <= MAX_OUTLINE_LEVEL:
            raise ValidationError(
                "Style.set_outline_level",
                "outline_level",
                level,
                f"must be between {MIN_OUTLINE_LEVEL} and {MAX_OUTLINE_LEVEL}",
            )
        self.paragraph_formatting.outline_level = level


def check_spacing(op: str, field_name: str, twips: int) -> None:
    if not 0 <= twips <= MAX_SPACING:
        raise ValidationError(op, field_name, twips, f"must be between 0 and {MAX_SPACING} twips")


def validate_indentation(op: str, indentation: Indentation) -> None:
    """Check indentation bounds and the first-line/hanging exclusion.

    Raises:
        ValidationError: If any value is out of range or both first_line and
            hanging are positive
    """
    for name in ("left", "right"):
        value = getattr(indentation, name)
        if not MIN_INDENT <= value <= MAX_INDENT:
            raise ValidationError(op, name, value, f"must be between {MIN_INDENT} and {MAX_INDENT} twips")
    for name in ("first_line", "hanging"):
        value = getattr(indentation, name)
        if not 0 <= value <= MAX_INDENT:
            raise ValidationError(op, name, value, f"must be between 0 and {MAX_INDENT} twips")
    if indentation.first_line > 0 and indentation.hanging > 0:
        raise ValidationError(
            op,
            "indentation",
            indentation,
            "first_line and hanging indents are mutually exclusive",
        )
