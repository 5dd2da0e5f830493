"""
StyleRegistry class for the styles of a document.

The registry is seeded with the built-in catalog (see style_templates) and
accepts user-defined styles on top of it. Built-in styles cannot be replaced
or removed, and ``basedOn`` chains are kept acyclic. The registry also owns
the conversion between Style objects and the w:style elements of
word/styles.xml, in both directions.

Example:
    >>> registry = StyleRegistry()
    >>> registry.add_style(
    ...     Style(style_id="Callout", name="Callout", style_type=StyleType.PARAGRAPH, based_on="Normal")
    ... )
    >>> registry.inheritance_chain("Callout")
    ['Callout', 'Normal']
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from lxml import etree

from .constants import (
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_SPACING,
    NSMAP_BODY,
    w,
)
from .errors import NotFoundError, ValidationError
from .locks import ReadWriteLock
from .models.formatting import (
    Alignment,
    Color,
    Font,
    HighlightColor,
    Indentation,
    LineSpacing,
    LineSpacingRule,
    UnderlineStyle,
)
from .models.style import ParagraphFormatting, RunFormatting, Style, StyleType
from .style_templates import BUILT_IN_STYLES

logger = logging.getLogger(__name__)


class StyleRegistry:
    """Built-in and user-defined styles of one document.

    Lookups take the lock in shared mode, registrations in exclusive mode, so
    many paragraphs can query styles while a custom style is being added.

    Built-in styles handed out by ``get_style`` are copies; changing them has
    no effect on the registry.
    """

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._styles: dict[str, Style] = {}
        self._defaults: dict[StyleType, str] = {}
        self._built_in_ids: frozenset[str] = frozenset(BUILT_IN_STYLES)

        for style_id, factory in BUILT_IN_STYLES.items():
            style = factory()
            self._styles[style_id] = style
            if style.is_default:
                self._defaults[style.style_type] = style_id

        logger.debug(f"Seeded style registry with {len(self._styles)} built-in styles")

    # -------------------------------------------------------------------------
    # Read Operations
    # -------------------------------------------------------------------------

    def get_style(self, style_id: str) -> Style:
        """Get a style by ID.

        Raises:
            NotFoundError: If no style has this ID
        """
        with self._lock.read():
            style = self._styles.get(style_id)
        if style is None:
            raise NotFoundError("StyleRegistry.get_style", f"style {style_id!r}")
        return style.copy() if style.built_in else style

    def has_style(self, style_id: str) -> bool:
        with self._lock.read():
            return style_id in self._styles

    def is_built_in(self, style_id: str) -> bool:
        return style_id in self._built_in_ids

    def list_styles(self) -> list[str]:
        """Return every style ID in registration order."""
        with self._lock.read():
            return list(self._styles)

    def styles_by_type(self, style_type: StyleType) -> list[Style]:
        """Return the styles of one type in registration order."""
        with self._lock.read():
            styles = [s for s in self._styles.values() if s.style_type is style_type]
        return [s.copy() if s.built_in else s for s in styles]

    def default_style(self, style_type: StyleType) -> str | None:
        """Return the ID of the default style for ``style_type``, if any."""
        with self._lock.read():
            return self._defaults.get(style_type)

    def inheritance_chain(self, style_id: str) -> list[str]:
        """Return ``style_id`` followed by its basedOn ancestors.

        Ancestors missing from the registry end the chain.

        Raises:
            NotFoundError: If ``style_id`` is not registered
        """
        with self._lock.read():
            if style_id not in self._styles:
                raise NotFoundError("StyleRegistry.inheritance_chain", f"style {style_id!r}")
            return self._chain(style_id)

    def resolve_run_formatting(self, style_id: str) -> RunFormatting:
        """Merge run formatting along the basedOn chain, nearest style winning.

        The serializer does not need this (Word cascades styles itself); it
        is for callers that want to know the effective formatting of a style.
        """
        chain = self.inheritance_chain(style_id)
        resolved = RunFormatting()
        with self._lock.read():
            for ancestor in reversed(chain):
                fmt = self._styles[ancestor].run_formatting
                for name in fmt.__dataclass_fields__:
                    value = getattr(fmt, name)
                    if value is not None:
                        setattr(resolved, name, value)
        return resolved

    def _chain(self, style_id: str) -> list[str]:
        chain = [style_id]
        current = self._styles[style_id].based_on
        while current and current in self._styles and current not in chain:
            chain.append(current)
            current = self._styles[current].based_on
        return chain

    def _would_cycle(self, style_id: str, parent_id: str | None) -> bool:
        current = parent_id
        seen: set[str] = set()
        while current:
            if current == style_id:
                return True
            if current in seen or current not in self._styles:
                return False
            seen.add(current)
            current = self._styles[current].based_on
        return False

    def __contains__(self, style_id: object) -> bool:
        return isinstance(style_id, str) and self.has_style(style_id)

    def __len__(self) -> int:
        with self._lock.read():
            return len(self._styles)

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_styles())

    # -------------------------------------------------------------------------
    # Write Operations
    # -------------------------------------------------------------------------

    def add_style(self, style: Style) -> None:
        """Register a user-defined style.

        Args:
            style: The style to add; the registry keeps this object

        Raises:
            ValidationError: If the ID is empty, already registered, a
                built-in ID, flagged built-in, or its basedOn chain would
                lead back to itself
        """
        op = "StyleRegistry.add_style"
        if not style.style_id or not style.style_id.strip():
            raise ValidationError(op, "style_id", style.style_id, "style ID cannot be empty")
        if style.built_in:
            raise ValidationError(op, "built_in", True, "cannot register a style flagged as built-in")
        if style.style_id in self._built_in_ids:
            raise ValidationError(op, "style_id", style.style_id, "cannot overwrite a built-in style")

        with self._lock.write():
            if style.style_id in self._styles:
                raise ValidationError(op, "style_id", style.style_id, "style already exists")
            if self._would_cycle(style.style_id, style.based_on):
                raise ValidationError(op, "based_on", style.based_on, "basedOn chain forms a cycle")
            self._styles[style.style_id] = style
            if style.is_default:
                self._set_default_locked(style.style_type, style.style_id)

        logger.debug(f"Added style: {style.style_id}")

    def remove_style(self, style_id: str) -> None:
        """Remove a user-defined style.

        If the style was the default for its type, the catalog default is
        restored.

        Raises:
            NotFoundError: If no style has this ID
            ValidationError: If the style is built-in
        """
        op = "StyleRegistry.remove_style"
        if style_id in self._built_in_ids:
            raise ValidationError(op, "style_id", style_id, "cannot remove a built-in style")

        with self._lock.write():
            style = self._styles.pop(style_id, None)
            if style is None:
                raise NotFoundError(op, f"style {style_id!r}")
            if self._defaults.get(style.style_type) == style_id:
                self._restore_catalog_default(style.style_type)

        logger.debug(f"Removed style: {style_id}")

    def set_default_style(self, style_type: StyleType, style_id: str) -> None:
        """Make an existing style the default for ``style_type``.

        Raises:
            NotFoundError: If no style has this ID
            ValidationError: If the style is of another type
        """
        op = "StyleRegistry.set_default_style"
        with self._lock.write():
            style = self._styles.get(style_id)
            if style is None:
                raise NotFoundError(op, f"style {style_id!r}")
            if style.style_type is not style_type:
                raise ValidationError(
                    op,
                    "style_type",
                    style_type.value,
                    f"style {style_id!r} is a {style.style_type.value} style",
                )
            self._set_default_locked(style_type, style_id)

        logger.debug(f"Default {style_type.value} style is now {style_id}")

    def set_based_on(self, style_id: str, parent_id: str | None) -> None:
        """Change the parent of a user-defined style.

        Args:
            style_id: Style to change
            parent_id: New parent ID, or None to detach

        Raises:
            NotFoundError: If ``style_id`` is not registered
            ValidationError: If the style is built-in or the new parent would
                create a cycle
        """
        op = "StyleRegistry.set_based_on"
        if style_id in self._built_in_ids:
            raise ValidationError(op, "style_id", style_id, "built-in styles cannot be changed")

        with self._lock.write():
            style = self._styles.get(style_id)
            if style is None:
                raise NotFoundError(op, f"style {style_id!r}")
            if self._would_cycle(style_id, parent_id):
                raise ValidationError(op, "based_on", parent_id, "basedOn chain forms a cycle")
            style.based_on = parent_id or None

        logger.debug(f"Style {style_id} is now based on {parent_id}")

    def _set_default_locked(self, style_type: StyleType, style_id: str) -> None:
        previous = self._defaults.get(style_type)
        if previous and previous in self._styles and not self._styles[previous].built_in:
            self._styles[previous].is_default = False
        self._defaults[style_type] = style_id

    def _restore_catalog_default(self, style_type: StyleType) -> None:
        for style in self._styles.values():
            if style.built_in and style.is_default and style.style_type is style_type:
                self._defaults[style_type] = style.style_id
                return
        self._defaults.pop(style_type, None)

    # -------------------------------------------------------------------------
    # XML
    # -------------------------------------------------------------------------

    def to_element(self) -> etree._Element:
        """Build the w:styles root of word/styles.xml."""
        root = etree.Element(w("styles"), nsmap={"w": NSMAP_BODY["w"], "r": NSMAP_BODY["r"]})
        root.append(_doc_defaults_element())

        with self._lock.read():
            for style in self._styles.values():
                is_default = self._defaults.get(style.style_type) == style.style_id
                root.append(style_to_element(style, is_default=is_default))

        return root


# =============================================================================
# Style <-> XML
# =============================================================================


def _doc_defaults_element() -> etree._Element:
    doc_defaults = etree.Element(w("docDefaults"))

    rpr = etree.SubElement(etree.SubElement(doc_defaults, w("rPrDefault")), w("rPr"))
    fonts = etree.SubElement(rpr, w("rFonts"))
    for attr in ("ascii", "hAnsi", "eastAsia", "cs"):
        fonts.set(w(attr), DEFAULT_FONT_NAME)
    etree.SubElement(rpr, w("sz")).set(w("val"), str(DEFAULT_FONT_SIZE))
    etree.SubElement(rpr, w("szCs")).set(w("val"), str(DEFAULT_FONT_SIZE))

    ppr = etree.SubElement(etree.SubElement(doc_defaults, w("pPrDefault")), w("pPr"))
    spacing = etree.SubElement(ppr, w("spacing"))
    spacing.set(w("line"), str(DEFAULT_LINE_SPACING))
    spacing.set(w("lineRule"), LineSpacingRule.AUTO.value)

    return doc_defaults


def _val_child(parent: etree._Element, tag: str, value: str) -> etree._Element:
    child = etree.SubElement(parent, w(tag))
    child.set(w("val"), value)
    return child


def _toggle(parent: etree._Element, tag: str, value: bool) -> None:
    child = etree.SubElement(parent, w(tag))
    if not value:
        child.set(w("val"), "0")


def style_to_element(style: Style, is_default: bool = False) -> etree._Element:
    """Convert a Style object to a w:style XML element.

    Args:
        style: The Style object to convert
        is_default: Whether to mark the style as the default for its type

    Returns:
        A w:style element with name, inheritance, UI flags, pPr and rPr
    """
    style_elem = etree.Element(w("style"))
    style_elem.set(w("type"), style.style_type.value)
    if is_default:
        style_elem.set(w("default"), "1")
    style_elem.set(w("styleId"), style.style_id)

    _val_child(style_elem, "name", style.name)
    if style.based_on:
        _val_child(style_elem, "basedOn", style.based_on)
    if style.next_style:
        _val_child(style_elem, "next", style.next_style)
    if style.linked_style:
        _val_child(style_elem, "link", style.linked_style)
    if style.ui_priority is not None:
        _val_child(style_elem, "uiPriority", str(style.ui_priority))
    if style.semi_hidden:
        etree.SubElement(style_elem, w("semiHidden"))
    if style.unhide_when_used:
        etree.SubElement(style_elem, w("unhideWhenUsed"))
    if style.quick_format:
        etree.SubElement(style_elem, w("qFormat"))

    ppr = paragraph_formatting_to_element(style.paragraph_formatting)
    if ppr is not None:
        style_elem.append(ppr)

    rpr = run_formatting_to_element(style.run_formatting)
    if rpr is not None:
        style_elem.append(rpr)

    return style_elem


def run_formatting_to_element(fmt: RunFormatting) -> etree._Element | None:
    """Convert RunFormatting to a w:rPr element, or None if nothing is set."""
    if fmt.is_empty:
        return None

    rpr = etree.Element(w("rPr"))
    if fmt.font is not None:
        fonts = etree.SubElement(rpr, w("rFonts"))
        fonts.set(w("ascii"), fmt.font.name)
        fonts.set(w("hAnsi"), fmt.font.name)
        if fmt.font.east_asia:
            fonts.set(w("eastAsia"), fmt.font.east_asia)
        if fmt.font.complex_script:
            fonts.set(w("cs"), fmt.font.complex_script)
    if fmt.bold is not None:
        _toggle(rpr, "b", fmt.bold)
    if fmt.italic is not None:
        _toggle(rpr, "i", fmt.italic)
    if fmt.strike is not None:
        _toggle(rpr, "strike", fmt.strike)
    if fmt.color is not None:
        _val_child(rpr, "color", fmt.color.hex)
    if fmt.size is not None:
        _val_child(rpr, "sz", str(fmt.size))
        _val_child(rpr, "szCs", str(fmt.size))
    if fmt.highlight is not None:
        _val_child(rpr, "highlight", fmt.highlight.value)
    if fmt.underline is not None:
        _val_child(rpr, "u", fmt.underline.value)
    return rpr


def paragraph_formatting_to_element(fmt: ParagraphFormatting) -> etree._Element | None:
    """Convert ParagraphFormatting to a w:pPr element, or None if nothing is set."""
    if fmt.is_empty:
        return None

    ppr = etree.Element(w("pPr"))
    if fmt.keep_next:
        etree.SubElement(ppr, w("keepNext"))
    if fmt.keep_lines:
        etree.SubElement(ppr, w("keepLines"))
    if fmt.page_break_before:
        etree.SubElement(ppr, w("pageBreakBefore"))

    if (
        fmt.spacing_before is not None
        or fmt.spacing_after is not None
        or fmt.line_spacing is not None
    ):
        spacing = etree.SubElement(ppr, w("spacing"))
        if fmt.spacing_before is not None:
            spacing.set(w("before"), str(fmt.spacing_before))
        if fmt.spacing_after is not None:
            spacing.set(w("after"), str(fmt.spacing_after))
        if fmt.line_spacing is not None:
            spacing.set(w("line"), str(fmt.line_spacing.value))
            spacing.set(w("lineRule"), fmt.line_spacing.rule.value)

    if fmt.indentation is not None and not fmt.indentation.is_empty:
        ppr.append(indentation_to_element(fmt.indentation))

    if fmt.alignment is not None:
        _val_child(ppr, "jc", fmt.alignment.value)

    # Heading levels are 1-based in the model, 0-based in OOXML
    if fmt.outline_level:
        _val_child(ppr, "outlineLvl", str(fmt.outline_level - 1))

    return ppr if len(ppr) else None


def indentation_to_element(indentation: Indentation) -> etree._Element:
    ind = etree.Element(w("ind"))
    if indentation.left:
        ind.set(w("left"), str(indentation.left))
    if indentation.right:
        ind.set(w("right"), str(indentation.right))
    if indentation.first_line:
        ind.set(w("firstLine"), str(indentation.first_line))
    if indentation.hanging:
        ind.set(w("hanging"), str(indentation.hanging))
    return ind


def get_val(parent: etree._Element, tag: str) -> str | None:
    child = parent.find(w(tag))
    return None if child is None else child.get(w("val"))


def parse_bool_property(parent: etree._Element, tag: str) -> bool | None:
    """Parse a toggle property: present means True unless w:val is off."""
    elem = parent.find(w(tag))
    if elem is None:
        return None
    val = elem.get(w("val"))
    if val is None:
        return True
    return val.lower() not in ("0", "false", "off")


def parse_int(value: str | None, context: str) -> int | None:
    """Parse an integer attribute, logging and returning None if it is bad."""
    if value is None:
        return None
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring non-numeric {context}: {value!r}")
        return None


def parse_enum(enum_type, value: str | None, context: str):
    """Look up an enum member by its OOXML token, logging unknown tokens."""
    if value is None:
        return None
    try:
        return enum_type(value)
    except ValueError:
        logger.warning(f"Ignoring unknown {context}: {value!r}")
        return None


def parse_color(value: str | None) -> Color | None:
    if not value or value == "auto":
        return None
    try:
        return Color.from_hex(value)
    except ValidationError:
        logger.warning(f"Ignoring malformed color: {value!r}")
        return None


def parse_run_formatting(rpr: etree._Element | None) -> RunFormatting:
    """Parse run formatting from a w:rPr element."""
    if rpr is None:
        return RunFormatting()

    font = None
    fonts = rpr.find(w("rFonts"))
    if fonts is not None:
        name = fonts.get(w("ascii")) or fonts.get(w("hAnsi"))
        if name:
            font = Font(name, fonts.get(w("eastAsia"), ""), fonts.get(w("cs"), ""))

    return RunFormatting(
        bold=parse_bool_property(rpr, "b"),
        italic=parse_bool_property(rpr, "i"),
        strike=parse_bool_property(rpr, "strike"),
        underline=parse_enum(UnderlineStyle, get_val(rpr, "u"), "underline style"),
        font=font,
        size=parse_int(get_val(rpr, "sz"), "font size"),
        color=parse_color(get_val(rpr, "color")),
        highlight=parse_enum(HighlightColor, get_val(rpr, "highlight"), "highlight color"),
    )


def parse_indentation(ind: etree._Element | None) -> Indentation | None:
    if ind is None:
        return None
    values = {}
    for attr, name in (("left", "left"), ("right", "right"), ("firstLine", "first_line"), ("hanging", "hanging")):
        number = parse_int(ind.get(w(attr)), f"indentation {attr}")
        if number is not None:
            values[name] = number
    return Indentation(**values)


def parse_paragraph_formatting(ppr: etree._Element | None) -> ParagraphFormatting:
    """Parse paragraph formatting from a w:pPr element."""
    if ppr is None:
        return ParagraphFormatting()

    fmt = ParagraphFormatting(
        alignment=parse_enum(Alignment, get_val(ppr, "jc"), "alignment"),
        keep_next=parse_bool_property(ppr, "keepNext"),
        keep_lines=parse_bool_property(ppr, "keepLines"),
        page_break_before=parse_bool_property(ppr, "pageBreakBefore"),
        indentation=parse_indentation(ppr.find(w("ind"))),
    )

    spacing = ppr.find(w("spacing"))
    if spacing is not None:
        fmt.spacing_before = parse_int(spacing.get(w("before")), "spacing before")
        fmt.spacing_after = parse_int(spacing.get(w("after")), "spacing after")
        line = parse_int(spacing.get(w("line")), "line spacing")
        if line is not None:
            rule = parse_enum(LineSpacingRule, spacing.get(w("lineRule"), "auto"), "line rule")
            fmt.line_spacing = LineSpacing(rule or LineSpacingRule.AUTO, line)

    outline = parse_int(get_val(ppr, "outlineLvl"), "outline level")
    if outline is not None:
        fmt.outline_level = outline + 1

    return fmt


def style_from_element(style_elem: etree._Element) -> Style | None:
    """Build a Style from a w:style element.

    Returns:
        The style, or None if its type is not one this library models
    """
    style_type = parse_enum(StyleType, style_elem.get(w("type")), "style type")
    style_id = style_elem.get(w("styleId"))
    if style_type is None or not style_id:
        return None

    ui_priority = parse_int(get_val(style_elem, "uiPriority"), "uiPriority")
    return Style(
        style_id=style_id,
        name=get_val(style_elem, "name") or style_id,
        style_type=style_type,
        based_on=get_val(style_elem, "basedOn"),
        next_style=get_val(style_elem, "next"),
        linked_style=get_val(style_elem, "link"),
        run_formatting=parse_run_formatting(style_elem.find(w("rPr"))),
        paragraph_formatting=parse_paragraph_formatting(style_elem.find(w("pPr"))),
        ui_priority=ui_priority,
        quick_format=style_elem.find(w("qFormat")) is not None,
        semi_hidden=style_elem.find(w("semiHidden")) is not None,
        unhide_when_used=style_elem.find(w("unhideWhenUsed")) is not None,
        is_default=style_elem.get(w("default")) in ("1", "true"),
    )
