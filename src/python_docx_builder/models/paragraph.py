"""
Paragraph model class.

A paragraph owns an ordered list of runs (text runs, image runs, hyperlink
runs and runs carrying fields) and the paragraph-level formatting: style,
alignment, indentation, spacing, numbering, borders and an optional
bookmark around its content.

Every setter validates its argument before changing anything, so a rejected
call leaves the paragraph exactly as it was.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from python_docx_builder.constants import MAX_LINE_SPACING, MAX_NUMBERING_LEVEL
from python_docx_builder.errors import DocxError, ValidationError, wrap
from python_docx_builder.models.context import PartContext
from python_docx_builder.models.field import Field
from python_docx_builder.models.formatting import (
    HYPERLINK_BLUE,
    Alignment,
    Borders,
    Indentation,
    LineSpacing,
    NumberingReference,
    UnderlineStyle,
)
from python_docx_builder.models.image import (
    Image,
    ImagePosition,
    ImageSize,
    new_image,
    read_image_file,
)
from python_docx_builder.models.run import Run
from python_docx_builder.models.style import check_spacing, validate_indentation
from python_docx_builder.validation import check_xml_text

logger = logging.getLogger(__name__)

# Word limits bookmark names to 40 characters starting with a letter
_BOOKMARK_NAME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9_]{0,39}$")


@dataclass(frozen=True)
class Bookmark:
    id: str
    name: str


class Paragraph:
    """A paragraph of body, cell, header or footer content.

    Paragraphs are created by their container (Document.add_paragraph,
    TableCell.add_paragraph, Header.add_paragraph); they are never
    constructed directly.

    Example:
        >>> para = doc.add_paragraph()
        >>> run = para.add_run("Hello ")
        >>> para.add_hyperlink("https://example.com", "world")
        >>> para.set_alignment(Alignment.CENTER)
    """

    def __init__(self, paragraph_id: str, context: PartContext) -> None:
        self.id = paragraph_id
        self._context = context
        self._runs: list[Run] = []
        self.style: str | None = None
        self.alignment = Alignment.LEFT
        self.indentation = Indentation()
        self.spacing_before = 0
        self.spacing_after = 0
        self.line_spacing: LineSpacing | None = None
        self.numbering: NumberingReference | None = None
        self.borders: Borders | None = None
        self.keep_with_next = False
        self.keep_lines = False
        self.page_break_before = False
        self.bookmark: Bookmark | None = None

    def __repr__(self) -> str:
        return f"<Paragraph id={self.id!r} runs={len(self._runs)}>"

    # -------------------------------------------------------------------------
    # Content
    # -------------------------------------------------------------------------

    @property
    def text(self) -> str:
        """Concatenated text of every run."""
        return "".join(run.text for run in self._runs)

    def runs(self) -> list[Run]:
        return list(self._runs)

    def images(self) -> list[Image]:
        return [run.image for run in self._runs if run.image is not None]

    def fields(self) -> list[Field]:
        return [field for run in self._runs for field in run.fields()]

    def add_run(self, text: str = "") -> Run:
        """Append a run, optionally with initial text."""
        run = Run(self._context.ids.next_run_id(), text)
        self._runs.append(run)
        return run

    def add_text(self, text: str) -> Run:
        """Shorthand for ``add_run(text)``."""
        return self.add_run(text)

    def add_field(self, field: Field) -> Field:
        """Append a run carrying ``field`` and return the field."""
        if not isinstance(field, Field):
            raise ValidationError("Paragraph.add_field", "field", field, "not a Field")
        run = Run(self._context.ids.next_run_id())
        run.add_field(field)
        self._runs.append(run)
        return field

    def add_hyperlink(self, url: str, text: str) -> Run:
        """Append a run linking to an external URL.

        The run uses the Hyperlink character style and is colored and
        underlined directly, so it looks like a link even where the style
        is missing.

        Raises:
            ValidationError: If url or text is empty or contains characters XML forbids
        """
        op = "Paragraph.add_hyperlink"
        if not url or not url.strip():
            raise ValidationError(op, "url", url, "url cannot be empty")
        if not text:
            raise ValidationError(op, "text", text, "link text cannot be empty")
        check_xml_text(op, "url", url)
        check_xml_text(op, "text", text)

        try:
            rel_id = self._context.relationships.add_hyperlink(url)
        except DocxError as e:
            raise wrap(e, op) from e

        run = Run(self._context.ids.next_run_id(), text)
        run.set_style("Hyperlink")
        run.set_color(HYPERLINK_BLUE)
        run.set_underline(UnderlineStyle.SINGLE)
        run.hyperlink_id = rel_id
        run.hyperlink_url = url
        self._runs.append(run)
        logger.debug(f"Added hyperlink {rel_id} to {url} in {self.id}")
        return run

    # ---- Images ----

    def add_image(self, path: str | Path) -> Image:
        """Append an inline image read from ``path`` at its natural size."""
        return self._add_image_file("Paragraph.add_image", path, None, None)

    def add_image_with_size(self, path: str | Path, size: ImageSize) -> Image:
        return self._add_image_file("Paragraph.add_image_with_size", path, size, None)

    def add_image_with_position(
        self,
        path: str | Path,
        size: ImageSize | None,
        position: ImagePosition,
    ) -> Image:
        return self._add_image_file("Paragraph.add_image_with_position", path, size, position)

    def add_image_bytes(
        self,
        data: bytes,
        filename: str,
        size: ImageSize | None = None,
        position: ImagePosition | None = None,
    ) -> Image:
        """Append an image from an in-memory payload.

        Args:
            data: Raw image bytes
            filename: Name whose extension gives the format (e.g., "logo.png")
            size: Display size; decoded size if omitted
            position: Placement; inline if omitted

        Returns:
            The attached Image

        Raises:
            ValidationError: If the payload, size or position is invalid
            UnsupportedError: If the format is not supported
        """
        return self._attach_image("Paragraph.add_image_bytes", data, filename, size, position)

    def _add_image_file(
        self,
        op: str,
        path: str | Path,
        size: ImageSize | None,
        position: ImagePosition | None,
    ) -> Image:
        try:
            data = read_image_file(path)
        except DocxError as e:
            raise wrap(e, op) from e
        return self._attach_image(op, data, Path(path).name, size, position)

    def _attach_image(
        self,
        op: str,
        data: bytes,
        filename: str,
        size: ImageSize | None,
        position: ImagePosition | None,
    ) -> Image:
        """Measure, store and link an image, then append its run.

        The run is appended only after every registration succeeded; a
        failure part-way removes what was already registered.
        """
        ctx = self._context
        try:
            image = new_image(ctx.ids.next_image_id(), data, filename, size, position)
            media_id, path = ctx.media.add(data, filename)
            media = ctx.media.get(media_id)
            try:
                rel_id = ctx.relationships.add_image(media.relationship_target)
            except DocxError:
                ctx.media.delete(media_id)
                raise
        except DocxError as e:
            raise wrap(e, op) from e

        image.attach(rel_id, media.relationship_target)
        run = Run(ctx.ids.next_run_id())
        run.set_image(image)
        self._runs.append(run)
        logger.debug(f"Attached image {image.id} ({path}) as {rel_id} in {self.id}")
        return image

    # -------------------------------------------------------------------------
    # Formatting
    # -------------------------------------------------------------------------

    def set_style(self, style_id: str | None) -> None:
        """Reference a paragraph style by ID; resolved by Word, not checked here."""
        self.style = style_id or None

    def set_alignment(self, alignment: Alignment) -> None:
        if not isinstance(alignment, Alignment):
            raise ValidationError("Paragraph.set_alignment", "alignment", alignment, "not an Alignment")
        self.alignment = alignment

    def set_indent(self, indentation: Indentation) -> None:
        """Set left/right/first-line/hanging indentation in twips.

        Raises:
            ValidationError: If a value is out of range, or first_line and
                hanging are both positive
        """
        validate_indentation("Paragraph.set_indent", indentation)
        self.indentation = indentation

    def set_spacing_before(self, twips: int) -> None:
        check_spacing("Paragraph.set_spacing_before", "spacing_before", twips)
        self.spacing_before = twips

    def set_spacing_after(self, twips: int) -> None:
        check_spacing("Paragraph.set_spacing_after", "spacing_after", twips)
        self.spacing_after = twips

    def set_line_spacing(self, spacing: LineSpacing) -> None:
        if not 0 <= spacing.value <= MAX_LINE_SPACING:
            raise ValidationError(
                "Paragraph.set_line_spacing",
                "line_spacing",
                spacing.value,
                f"must be between 0 and {MAX_LINE_SPACING}",
            )
        self.line_spacing = spacing

    def set_numbering(self, num_id: int, level: int = 0) -> None:
        """Make the paragraph a list item.

        Args:
            num_id: Numbering definition ID (>= 1)
            level: List level, 0-8
        """
        op = "Paragraph.set_numbering"
        if num_id < 1:
            raise ValidationError(op, "num_id", num_id, "must be at least 1")
        if not 0 <= level <= MAX_NUMBERING_LEVEL:
            raise ValidationError(op, "level", level, f"must be between 0 and {MAX_NUMBERING_LEVEL}")
        self.numbering = NumberingReference(num_id, level)

    def clear_numbering(self) -> None:
        self.numbering = None

    def set_borders(self, borders: Borders | None) -> None:
        self.borders = borders

    def set_keep_with_next(self, keep: bool) -> None:
        self.keep_with_next = bool(keep)

    def set_keep_lines(self, keep: bool) -> None:
        self.keep_lines = bool(keep)

    def set_page_break_before(self, page_break: bool) -> None:
        self.page_break_before = bool(page_break)

    def set_bookmark(self, name: str) -> Bookmark:
        """Wrap the paragraph's content in a named bookmark.

        Raises:
            ValidationError: If the name is not a valid bookmark name
        """
        if not name or not _BOOKMARK_NAME_RE.match(name):
            raise ValidationError(
                "Paragraph.set_bookmark",
                "name",
                name,
                "must start with a letter and hold at most 40 letters, digits or underscores",
            )
        self.bookmark = Bookmark(self._context.ids.next_bookmark_id(), name)
        return self.bookmark
