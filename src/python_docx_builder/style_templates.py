"""
Built-in style catalog for new documents.

This module provides factory functions that return Style objects for the
styles Word itself assumes exist: Normal, the heading ladder, TOC levels,
the common character styles and the base table styles. Formatting values
match Word's own definitions closely enough that documents look the same
whether Word or this library supplies the style.

Every factory returns a fresh Style with ``built_in=True``; StyleRegistry
seeds itself from BUILT_IN_STYLES.

Example:
    >>> from python_docx_builder.style_templates import get_heading_style
    >>> style = get_heading_style(1)
    >>> style.run_formatting.size
    32
"""

from __future__ import annotations

from collections.abc import Callable

from .constants import DEFAULT_HEADING_FONT_NAME
from .models.formatting import (
    FOLLOWED_HYPERLINK_PURPLE,
    HYPERLINK_BLUE,
    Alignment,
    Color,
    Font,
    Indentation,
    UnderlineStyle,
)
from .models.style import ParagraphFormatting, RunFormatting, Style, StyleType

# Heading sizes in half-points, index 0 = Heading1
HEADING_SIZES = (32, 26, 24, 24, 22, 22, 22, 22, 22)

# Levels 1-5 are bold
BOLD_HEADING_LEVELS = 5

HEADING_COLOR = Color(0x2F, 0x54, 0x96)


def _paragraph_style(style_id: str, name: str, **kwargs) -> Style:
    kwargs.setdefault("based_on", "Normal")
    kwargs.setdefault("next_style", "Normal")
    return Style(
        style_id=style_id,
        name=name,
        style_type=StyleType.PARAGRAPH,
        built_in=True,
        **kwargs,
    )


def _character_style(style_id: str, name: str, **kwargs) -> Style:
    kwargs.setdefault("based_on", "DefaultParagraphFont")
    return Style(
        style_id=style_id,
        name=name,
        style_type=StyleType.CHARACTER,
        built_in=True,
        **kwargs,
    )


# =============================================================================
# Paragraph Styles
# =============================================================================


def get_normal_style() -> Style:
    """Get the Normal style, the default paragraph style.

    Normal carries no formatting of its own; document defaults in
    word/styles.xml supply font and size.
    """
    return Style(
        style_id="Normal",
        name="Normal",
        style_type=StyleType.PARAGRAPH,
        paragraph_formatting=ParagraphFormatting(alignment=Alignment.LEFT),
        ui_priority=0,
        quick_format=True,
        is_default=True,
        built_in=True,
    )


def get_heading_style(level: int) -> Style:
    """Get the HeadingN style definition.

    Args:
        level: Heading level (1-9)

    Returns:
        A Style with outline level ``level``, keep-with-next, keep-lines,
        240 twips before and 120 after, the heading font, and bold for
        levels 1-5.

    Raises:
        ValueError: If level is not between 1 and 9.

    Example:
        >>> get_heading_style(2).run_formatting.size
        26
    """
    if level < 1 or level > 9:
        raise ValueError(f"Heading level must be between 1 and 9, got {level}")

    return _paragraph_style(
        f"Heading{level}",
        f"heading {level}",
        paragraph_formatting=ParagraphFormatting(
            spacing_before=240,
            spacing_after=120,
            keep_next=True,
            keep_lines=True,
            outline_level=level,
        ),
        run_formatting=RunFormatting(
            bold=True if level <= BOLD_HEADING_LEVELS else None,
            font=Font(DEFAULT_HEADING_FONT_NAME),
            size=HEADING_SIZES[level - 1],
            color=HEADING_COLOR,
        ),
        ui_priority=8 + level,
        quick_format=True,
    )


def get_title_style() -> Style:
    return _paragraph_style(
        "Title",
        "Title",
        paragraph_formatting=ParagraphFormatting(spacing_after=180),
        run_formatting=RunFormatting(font=Font(DEFAULT_HEADING_FONT_NAME), size=56),
        ui_priority=10,
        quick_format=True,
    )


def get_subtitle_style() -> Style:
    return _paragraph_style(
        "Subtitle",
        "Subtitle",
        paragraph_formatting=ParagraphFormatting(spacing_after=160),
        run_formatting=RunFormatting(color=Color(0x5A, 0x5A, 0x5A), size=22),
        ui_priority=11,
        quick_format=True,
    )


def get_quote_style() -> Style:
    return _paragraph_style(
        "Quote",
        "Quote",
        paragraph_formatting=ParagraphFormatting(
            alignment=Alignment.CENTER,
            spacing_before=200,
            spacing_after=160,
            indentation=Indentation(left=720, right=720),
        ),
        run_formatting=RunFormatting(italic=True, color=Color(0x40, 0x40, 0x40)),
        ui_priority=29,
        quick_format=True,
    )


def get_intense_quote_style() -> Style:
    return _paragraph_style(
        "IntenseQuote",
        "Intense Quote",
        paragraph_formatting=ParagraphFormatting(
            alignment=Alignment.CENTER,
            spacing_before=360,
            spacing_after=360,
            indentation=Indentation(left=864, right=864),
        ),
        run_formatting=RunFormatting(italic=True, color=Color(0x44, 0x72, 0xC4)),
        ui_priority=30,
        quick_format=True,
    )


def get_list_paragraph_style() -> Style:
    return _paragraph_style(
        "ListParagraph",
        "List Paragraph",
        paragraph_formatting=ParagraphFormatting(indentation=Indentation(left=720)),
        ui_priority=34,
        quick_format=True,
    )


def get_caption_style() -> Style:
    return _paragraph_style(
        "Caption",
        "caption",
        paragraph_formatting=ParagraphFormatting(spacing_after=200),
        run_formatting=RunFormatting(italic=True, size=18, color=Color(0x44, 0x54, 0x6A)),
        ui_priority=35,
        quick_format=True,
        unhide_when_used=True,
        semi_hidden=True,
    )


def get_toc_level_style(level: int) -> Style:
    """Get the TOC level style definition (TOC1, TOC2, etc.).

    Each level is indented 220 twips more than the previous one.

    Args:
        level: The TOC level (1-9). Level 1 is for top-level headings.

    Raises:
        ValueError: If level is not between 1 and 9.

    Example:
        >>> get_toc_level_style(3).paragraph_formatting.indentation.left
        440
    """
    if level < 1 or level > 9:
        raise ValueError(f"TOC level must be between 1 and 9, got {level}")

    return _paragraph_style(
        f"TOC{level}",
        f"toc {level}",
        paragraph_formatting=ParagraphFormatting(
            spacing_after=100,
            indentation=Indentation(left=(level - 1) * 220),
        ),
        ui_priority=39,
        semi_hidden=True,
        unhide_when_used=True,
    )


def get_header_style() -> Style:
    return _paragraph_style(
        "Header",
        "header",
        paragraph_formatting=ParagraphFormatting(spacing_after=0),
        ui_priority=99,
        unhide_when_used=True,
    )


def get_footer_style() -> Style:
    return _paragraph_style(
        "Footer",
        "footer",
        paragraph_formatting=ParagraphFormatting(spacing_after=0),
        ui_priority=99,
        unhide_when_used=True,
    )


def get_footnote_text_style() -> Style:
    """Footnote text: 10pt, no spacing after."""
    return _paragraph_style(
        "FootnoteText",
        "footnote text",
        paragraph_formatting=ParagraphFormatting(spacing_after=0),
        run_formatting=RunFormatting(size=20),
        ui_priority=99,
        semi_hidden=True,
        unhide_when_used=True,
    )


def get_endnote_text_style() -> Style:
    """Endnote text: 10pt, no spacing after."""
    return _paragraph_style(
        "EndnoteText",
        "endnote text",
        paragraph_formatting=ParagraphFormatting(spacing_after=0),
        run_formatting=RunFormatting(size=20),
        ui_priority=99,
        semi_hidden=True,
        unhide_when_used=True,
    )


def get_body_text_style() -> Style:
    return _paragraph_style(
        "BodyText",
        "Body Text",
        paragraph_formatting=ParagraphFormatting(spacing_after=120),
        ui_priority=99,
        unhide_when_used=True,
    )


def get_body_text_indent_style() -> Style:
    return _paragraph_style(
        "BodyTextIndent",
        "Body Text Indent",
        paragraph_formatting=ParagraphFormatting(
            spacing_after=120,
            indentation=Indentation(left=360),
        ),
        ui_priority=99,
        unhide_when_used=True,
    )


def get_no_spacing_style() -> Style:
    return _paragraph_style(
        "NoSpacing",
        "No Spacing",
        paragraph_formatting=ParagraphFormatting(spacing_before=0, spacing_after=0),
        ui_priority=1,
        quick_format=True,
    )


# =============================================================================
# Character Styles
# =============================================================================


def get_default_paragraph_font_style() -> Style:
    """The default character style every other character style derives from."""
    return Style(
        style_id="DefaultParagraphFont",
        name="Default Paragraph Font",
        style_type=StyleType.CHARACTER,
        ui_priority=1,
        semi_hidden=True,
        unhide_when_used=True,
        is_default=True,
        built_in=True,
    )


def get_emphasis_style() -> Style:
    return _character_style(
        "Emphasis",
        "Emphasis",
        run_formatting=RunFormatting(italic=True),
        ui_priority=20,
        quick_format=True,
    )


def get_strong_style() -> Style:
    return _character_style(
        "Strong",
        "Strong",
        run_formatting=RunFormatting(bold=True),
        ui_priority=22,
        quick_format=True,
    )


def get_subtle_emphasis_style() -> Style:
    return _character_style(
        "SubtleEmphasis",
        "Subtle Emphasis",
        run_formatting=RunFormatting(italic=True, color=Color(0x40, 0x40, 0x40)),
        ui_priority=19,
        quick_format=True,
    )


def get_intense_emphasis_style() -> Style:
    return _character_style(
        "IntenseEmphasis",
        "Intense Emphasis",
        run_formatting=RunFormatting(italic=True, color=Color(0x44, 0x72, 0xC4)),
        ui_priority=21,
        quick_format=True,
    )


def get_intense_reference_style() -> Style:
    return _character_style(
        "IntenseReference",
        "Intense Reference",
        run_formatting=RunFormatting(
            bold=True,
            underline=UnderlineStyle.SINGLE,
            color=Color(0x44, 0x72, 0xC4),
        ),
        ui_priority=32,
        quick_format=True,
    )


def get_book_title_style() -> Style:
    return _character_style(
        "BookTitle",
        "Book Title",
        run_formatting=RunFormatting(bold=True, italic=True),
        ui_priority=33,
        quick_format=True,
    )


def get_hyperlink_style() -> Style:
    """Get the Hyperlink character style: blue with single underline.

    Example:
        >>> get_hyperlink_style().run_formatting.color.hex
        '0000FF'
    """
    return _character_style(
        "Hyperlink",
        "Hyperlink",
        run_formatting=RunFormatting(color=HYPERLINK_BLUE, underline=UnderlineStyle.SINGLE),
        ui_priority=99,
        unhide_when_used=True,
    )


def get_followed_hyperlink_style() -> Style:
    return _character_style(
        "FollowedHyperlink",
        "FollowedHyperlink",
        run_formatting=RunFormatting(
            color=FOLLOWED_HYPERLINK_PURPLE,
            underline=UnderlineStyle.SINGLE,
        ),
        ui_priority=99,
        semi_hidden=True,
        unhide_when_used=True,
    )


# =============================================================================
# Table Styles
# =============================================================================


def get_table_normal_style() -> Style:
    """The default table style."""
    return Style(
        style_id="TableNormal",
        name="Normal Table",
        style_type=StyleType.TABLE,
        ui_priority=99,
        semi_hidden=True,
        unhide_when_used=True,
        is_default=True,
        built_in=True,
    )


def get_table_grid_style() -> Style:
    return Style(
        style_id="TableGrid",
        name="Table Grid",
        style_type=StyleType.TABLE,
        based_on="TableNormal",
        ui_priority=39,
        built_in=True,
    )


# Dictionary mapping built-in style IDs to factory functions, in the order
# they are written to word/styles.xml
BUILT_IN_STYLES: dict[str, Callable[[], Style]] = {
    "Normal": get_normal_style,
    **{f"Heading{level}": (lambda level=level: get_heading_style(level)) for level in range(1, 10)},
    "Title": get_title_style,
    "Subtitle": get_subtitle_style,
    "Quote": get_quote_style,
    "IntenseQuote": get_intense_quote_style,
    "ListParagraph": get_list_paragraph_style,
    "Caption": get_caption_style,
    **{f"TOC{level}": (lambda level=level: get_toc_level_style(level)) for level in range(1, 10)},
    "Header": get_header_style,
    "Footer": get_footer_style,
    "FootnoteText": get_footnote_text_style,
    "EndnoteText": get_endnote_text_style,
    "BodyText": get_body_text_style,
    "BodyTextIndent": get_body_text_indent_style,
    "NoSpacing": get_no_spacing_style,
    "DefaultParagraphFont": get_default_paragraph_font_style,
    "Emphasis": get_emphasis_style,
    "Strong": get_strong_style,
    "SubtleEmphasis": get_subtle_emphasis_style,
    "IntenseEmphasis": get_intense_emphasis_style,
    "IntenseReference": get_intense_reference_style,
    "BookTitle": get_book_title_style,
    "Hyperlink": get_hyperlink_style,
    "FollowedHyperlink": get_followed_hyperlink_style,
    "TableNormal": get_table_normal_style,
    "TableGrid": get_table_grid_style,
}


def built_in_style_ids() -> frozenset[str]:
    """Return the IDs of every built-in style."""
    return frozenset(BUILT_IN_STYLES)
