"""
Re-hydration of packages written by this library.

``read_document`` rebuilds a Document from a .docx: metadata, custom
styles, body paragraphs and tables, section setup, headers and footers,
with their relationships and media registered as existing entries so that
content added afterwards never reuses an ID found in the package.

Markup this library does not write itself is skipped with a warning; the
reader is not a general-purpose Word importer.
"""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable
from pathlib import Path
from typing import BinaryIO

from lxml import etree

from .constants import (
    APP_PROPERTIES_PATH,
    CORE_PROPERTIES_NAMESPACE,
    CORE_PROPERTIES_PATH,
    DC_NAMESPACE,
    DCTERMS_NAMESPACE,
    DEFAULT_APPLICATION,
    DOCUMENT_PATH,
    EXTENDED_PROPERTIES_NAMESPACE,
    STYLES_PATH,
    a,
    r,
    w,
    wp,
)
from .document import FIXED_PART_RELATIONSHIPS, Document
from .errors import DocxError, NotFoundError, XMLError
from .ids import IDKind
from .media import MEDIA_PREFIX
from .models.field import Field, FieldType
from .models.formatting import (
    BLACK,
    Alignment,
    BorderLineStyle,
    Borders,
    BorderStyle,
    BreakType,
    Indentation,
    LineSpacing,
    LineSpacingRule,
    TableWidth,
    VerticalAlignment,
    WidthType,
)
from .models.header_footer import Footer, Header, HeaderFooterType
from .models.image import (
    HorizontalAlign,
    Image,
    ImageFormat,
    ImagePosition,
    ImagePositionType,
    ImageSize,
    TextWrapType,
    VerticalAlign,
    decode_dimensions,
    new_image_size,
)
from .models.metadata import Metadata
from .models.paragraph import Bookmark, Paragraph
from .models.run import Run
from .models.section import Margins, Orientation, PageSize, Section, SectionBreakType
from .models.table import Table, TableCell, VerticalMerge
from .package import PackageReader
from .relationships import RelationshipTable
from .styles import (
    get_val,
    parse_bool_property,
    parse_color,
    parse_enum,
    parse_indentation,
    parse_int,
    parse_run_formatting,
    style_from_element,
)
from .units import EMU_PER_PIXEL

logger = logging.getLogger(__name__)

_BORDER_EDGES = {
    "top": "top",
    "left": "left",
    "bottom": "bottom",
    "right": "right",
    "insideH": "inside_h",
    "insideV": "inside_v",
}

_BREAK_TYPES = {bt.value: bt for bt in BreakType}

_WRAP_TAGS = {
    "wrapNone": TextWrapType.NONE,
    "wrapSquare": TextWrapType.SQUARE,
    "wrapTight": TextWrapType.TIGHT,
    "wrapThrough": TextWrapType.THROUGH,
    "wrapTopAndBottom": TextWrapType.TOP_BOTTOM,
}


def read_document(source: str | Path | bytes | BinaryIO) -> Document:
    """Open a .docx and rebuild its Document.

    Args:
        source: Path, raw bytes or a binary file object

    Returns:
        The re-hydrated document

    Raises:
        DocxIOError: If the source cannot be read
        XMLError: If the package or one of its parts is malformed
    """
    package = PackageReader.open(source)
    return DocumentReader(package).read()


def _apply(what: str, setter: Callable, *args) -> None:
    """Call a model setter, logging values the model rejects."""
    try:
        setter(*args)
    except DocxError as e:
        logger.warning(f"Ignoring {what}: {e}")


def _is_empty_paragraph(elem: etree._Element) -> bool:
    """A bare w:p, which the serializer writes only as filler."""
    return elem.tag == w("p") and len(elem) == 0


class _FieldState:
    """A complex field being collected across runs."""

    def __init__(self, rpr: etree._Element | None, dirty: bool) -> None:
        self.rpr = rpr
        self.dirty = dirty
        self.code: list[str] = []
        self.result: list[str] = []
        self.in_result = False


class DocumentReader:
    """Rebuilds one Document from an opened package."""

    def __init__(self, package: PackageReader) -> None:
        self._package = package
        self._doc: Document | None = None

    @property
    def doc(self) -> Document:
        if self._doc is None:
            raise NotFoundError("DocumentReader.doc", "document (call read() first)")
        return self._doc

    def read(self) -> Document:
        if not self._package.has_part(DOCUMENT_PATH):
            raise XMLError("read_document", f"package has no {DOCUMENT_PATH} part")

        self._doc = Document._blank(self._read_application())
        self._read_metadata()
        self._read_relationships()
        self._read_media()
        self._read_styles()
        self._read_body()
        logger.debug(f"Read document with {len(self.doc.blocks())} blocks")
        return self.doc

    # =========================================================================
    # Package-level parts
    # =========================================================================

    def _read_application(self) -> str:
        if not self._package.has_part(APP_PROPERTIES_PATH):
            return DEFAULT_APPLICATION
        root = self._package.read_xml(APP_PROPERTIES_PATH)
        app = root.find(f"{{{EXTENDED_PROPERTIES_NAMESPACE}}}Application")
        return app.text if app is not None and app.text else DEFAULT_APPLICATION

    def _read_metadata(self) -> None:
        if not self._package.has_part(CORE_PROPERTIES_PATH):
            logger.warning(f"Package has no {CORE_PROPERTIES_PATH}")
            return
        root = self._package.read_xml(CORE_PROPERTIES_PATH)

        def text(namespace: str, tag: str) -> str:
            elem = root.find(f"{{{namespace}}}{tag}")
            return (elem.text or "") if elem is not None else ""

        keywords = [k.strip() for k in text(CORE_PROPERTIES_NAMESPACE, "keywords").split(",") if k.strip()]
        self.doc.set_metadata(
            Metadata(
                title=text(DC_NAMESPACE, "title"),
                subject=text(DC_NAMESPACE, "subject"),
                creator=text(DC_NAMESPACE, "creator"),
                keywords=keywords,
                description=text(DC_NAMESPACE, "description"),
                created=text(DCTERMS_NAMESPACE, "created"),
                modified=text(DCTERMS_NAMESPACE, "modified"),
            )
        )

    def _read_relationships(self) -> None:
        table = self.doc.relationships
        for rel in self._package.relationships(DOCUMENT_PATH):
            table.register_existing(rel.id, rel.type, rel.target, rel.mode)

        present = {rel.type for rel in table.all()}
        for rel_type, target in FIXED_PART_RELATIONSHIPS:
            if rel_type not in present:
                table.add(rel_type, target)

    def _read_media(self) -> None:
        for name in self._package.part_names():
            if name.startswith(MEDIA_PREFIX):
                self.doc.media.register_existing("", name, "", self._package.read_bytes(name))

    def _read_styles(self) -> None:
        if not self._package.has_part(STYLES_PATH):
            return
        registry = self.doc.styles
        for style_elem in self._package.read_xml(STYLES_PATH).iter(w("style")):
            style = style_from_element(style_elem)
            if style is None or registry.is_built_in(style.style_id):
                continue
            _apply(f"style {style.style_id!r}", registry.add_style, style)

    # =========================================================================
    # Body
    # =========================================================================

    def _read_body(self) -> None:
        root = self._package.read_xml(DOCUMENT_PATH)
        body = root.find(w("body"))
        if body is None:
            raise XMLError("read_document", f"{DOCUMENT_PATH} has no w:body")

        doc = self.doc
        rels = doc.relationships
        children = list(body)
        for index, child in enumerate(children):
            if child.tag == w("p"):
                if self._is_table_anchor(children, index):
                    continue
                sect_pr = child.find(f"{w('pPr')}/{w('sectPr')}")
                if sect_pr is None or self._has_content(child):
                    self._read_paragraph(child, doc.add_paragraph(), rels)
                if sect_pr is not None:
                    self._read_section(sect_pr, doc.current_section)
                    doc.add_section()
            elif child.tag == w("tbl"):
                self._read_table(child, doc.add_table, rels)
            elif child.tag == w("sectPr"):
                self._read_section(child, doc.current_section)
            else:
                logger.warning(f"Skipping unsupported body element {etree.QName(child).localname}")

    @staticmethod
    def _is_table_anchor(children: list[etree._Element], index: int) -> bool:
        """Whether children[index] is the empty paragraph written after a final table."""
        if not _is_empty_paragraph(children[index]) or index == 0:
            return False
        following = children[index + 1 :]
        return children[index - 1].tag == w("tbl") and all(c.tag == w("sectPr") for c in following)

    @staticmethod
    def _has_content(p_elem: etree._Element) -> bool:
        return any(child.tag != w("pPr") for child in p_elem)

    # ---- Paragraphs ----

    def _read_paragraph(self, p_elem: etree._Element, para: Paragraph, rels: RelationshipTable) -> None:
        ppr = p_elem.find(w("pPr"))
        if ppr is not None:
            self._read_paragraph_properties(ppr, para)

        field: _FieldState | None = None
        for child in p_elem:
            tag = child.tag
            if tag == w("bookmarkStart"):
                self._read_bookmark(child, para)
            elif tag == w("r"):
                field = self._read_run_or_field(child, para, rels, field, None)
            elif tag == w("hyperlink"):
                rel_id = child.get(r("id"))
                for run_elem in child.iter(w("r")):
                    field = self._read_run_or_field(run_elem, para, rels, field, rel_id)
            elif tag not in (w("pPr"), w("bookmarkEnd")):
                logger.warning(f"Skipping unsupported paragraph element {etree.QName(child).localname}")

        if field is not None:
            logger.warning(f"Dropping unterminated field in {para.id}")

    def _read_paragraph_properties(self, ppr: etree._Element, para: Paragraph) -> None:
        style = get_val(ppr, "pStyle")
        if style:
            para.set_style(style)
        para.set_keep_with_next(bool(parse_bool_property(ppr, "keepNext")))
        para.set_keep_lines(bool(parse_bool_property(ppr, "keepLines")))
        para.set_page_break_before(bool(parse_bool_property(ppr, "pageBreakBefore")))

        num_pr = ppr.find(w("numPr"))
        if num_pr is not None:
            num_id = parse_int(get_val(num_pr, "numId"), "numbering id")
            level = parse_int(get_val(num_pr, "ilvl"), "numbering level") or 0
            if num_id is not None:
                _apply("numbering", para.set_numbering, num_id, level)

        borders = _read_borders(ppr.find(w("pBdr")))
        if borders is not None:
            para.set_borders(borders)

        spacing = ppr.find(w("spacing"))
        if spacing is not None:
            before = parse_int(spacing.get(w("before")), "spacing before")
            after = parse_int(spacing.get(w("after")), "spacing after")
            line = parse_int(spacing.get(w("line")), "line spacing")
            if before is not None:
                _apply("spacing before", para.set_spacing_before, before)
            if after is not None:
                _apply("spacing after", para.set_spacing_after, after)
            if line is not None:
                rule = parse_enum(LineSpacingRule, spacing.get(w("lineRule"), "auto"), "line rule")
                _apply("line spacing", para.set_line_spacing, LineSpacing(rule or LineSpacingRule.AUTO, line))

        indentation = parse_indentation(ppr.find(w("ind")))
        if indentation is not None and indentation != Indentation():
            _apply("indentation", para.set_indent, indentation)

        alignment = parse_enum(Alignment, get_val(ppr, "jc"), "alignment")
        if alignment is not None:
            para.set_alignment(alignment)

    def _read_bookmark(self, elem: etree._Element, para: Paragraph) -> None:
        name = elem.get(w("name"))
        number = parse_int(elem.get(w("id")), "bookmark id")
        if not name or number is None:
            logger.warning(f"Skipping incomplete bookmark in {para.id}")
            return
        para.bookmark = Bookmark(f"{IDKind.BOOKMARK.prefix}{number}", name)
        self.doc.ids.advance_past(IDKind.BOOKMARK, number)

    # ---- Runs and fields ----

    def _read_run_or_field(
        self,
        r_elem: etree._Element,
        para: Paragraph,
        rels: RelationshipTable,
        field: _FieldState | None,
        hyperlink_id: str | None,
    ) -> _FieldState | None:
        """Read one w:r, threading the state of a complex field through.

        Returns:
            The field still being collected, or None
        """
        fld_char = r_elem.find(w("fldChar"))
        if fld_char is not None:
            kind = fld_char.get(w("fldCharType"))
            if kind == "begin":
                if field is not None:
                    logger.warning(f"Nested field in {para.id}; keeping the outer field only")
                    return field
                dirty = fld_char.get(w("dirty"), "").lower() in ("1", "true", "on")
                return _FieldState(r_elem.find(w("rPr")), dirty)
            if field is None:
                logger.warning(f"Stray fldChar {kind!r} in {para.id}")
                return None
            if kind == "separate":
                field.in_result = True
                return field
            if kind == "end":
                self._finish_field(field, para)
                return None
            return field

        if field is not None:
            if field.in_result:
                field.result.extend(t.text or "" for t in r_elem.iter(w("t")))
            else:
                field.code.extend(t.text or "" for t in r_elem.iter(w("instrText")))
            return field

        self._read_run(r_elem, para, rels, hyperlink_id)
        return None

    def _finish_field(self, state: _FieldState, para: Paragraph) -> None:
        code = "".join(state.code).strip()
        if not code:
            logger.warning(f"Dropping field without instruction in {para.id}")
            return
        field = Field(FieldType.from_code(code), code, "".join(state.result), state.dirty)
        para.add_field(field)
        self._apply_run_properties(state.rpr, para.runs()[-1])

    def _read_run(
        self,
        r_elem: etree._Element,
        para: Paragraph,
        rels: RelationshipTable,
        hyperlink_id: str | None,
    ) -> None:
        run = para.add_run()
        self._apply_run_properties(r_elem.find(w("rPr")), run)

        for child in r_elem:
            tag = child.tag
            if tag == w("t"):
                run.add_text(child.text or "")
            elif tag == w("tab"):
                run.add_text("\t")
            elif tag == w("br"):
                break_type = child.get(w("type"))
                if break_type is None:
                    run.add_text("\n")
                elif break_type in _BREAK_TYPES:
                    run.add_break(_BREAK_TYPES[break_type])
                else:
                    logger.warning(f"Ignoring unknown break type {break_type!r}")
            elif tag == w("drawing"):
                image = self._read_drawing(child, rels)
                if image is not None:
                    run.set_image(image)
            elif tag != w("rPr"):
                logger.warning(f"Skipping unsupported run element {etree.QName(child).localname}")

        if hyperlink_id:
            run.hyperlink_id = hyperlink_id
            try:
                run.hyperlink_url = rels.get(hyperlink_id).target
            except NotFoundError:
                logger.warning(f"Hyperlink {hyperlink_id} has no relationship")

    def _apply_run_properties(self, rpr: etree._Element | None, run: Run) -> None:
        if rpr is None:
            return
        style = get_val(rpr, "rStyle")
        if style:
            run.set_style(style)

        fmt = parse_run_formatting(rpr)
        if fmt.font is not None:
            _apply("font", run.set_font, fmt.font)
        if fmt.size is not None:
            _apply("font size", run.set_size, fmt.size)
        if fmt.color is not None:
            run.set_color(fmt.color)
        if fmt.bold is not None:
            run.set_bold(fmt.bold)
        if fmt.italic is not None:
            run.set_italic(fmt.italic)
        if fmt.strike is not None:
            run.set_strike(fmt.strike)
        if fmt.underline is not None:
            run.set_underline(fmt.underline)
        if fmt.highlight is not None:
            run.set_highlight(fmt.highlight)

    # ---- Drawings ----

    def _read_drawing(self, drawing: etree._Element, rels: RelationshipTable) -> Image | None:
        container = drawing.find(wp("inline"))
        if container is None:
            container = drawing.find(wp("anchor"))
        blip = drawing.find(f".//{a('blip')}")
        if container is None or blip is None:
            logger.warning("Skipping drawing that is not a picture")
            return None

        rel_id = blip.get(r("embed"))
        try:
            rel = rels.get(rel_id or "")
            media = self.doc.media.get_by_path(posixpath.normpath(f"word/{rel.target}"))
        except NotFoundError as e:
            logger.warning(f"Skipping picture whose bytes are missing: {e}")
            return None

        try:
            image_format = ImageFormat.from_filename(media.name)
            width_px, height_px = decode_dimensions(media.data, image_format)
        except DocxError as e:
            logger.warning(f"Skipping picture {media.path}: {e}")
            return None

        extent = container.find(wp("extent"))
        cx = parse_int(extent.get("cx"), "extent cx") if extent is not None else None
        cy = parse_int(extent.get("cy"), "extent cy") if extent is not None else None
        size = None
        if cx and cy:
            size = ImageSize(cx // EMU_PER_PIXEL, cy // EMU_PER_PIXEL, cx, cy)

        doc_pr = container.find(wp("docPr"))
        image = Image(
            self.doc.ids.next_image_id(),
            media.data,
            image_format,
            original_size=new_image_size(width_px, height_px),
            size=size,
            position=_read_position(container) if container.tag == wp("anchor") else None,
            description=doc_pr.get("descr", "") if doc_pr is not None else "",
        )
        image.attach(rel.id, rel.target)
        return image

    # ---- Tables ----

    def _read_table(
        self,
        tbl_elem: etree._Element,
        create: Callable[[int, int], Table],
        rels: RelationshipTable,
    ) -> None:
        rows = tbl_elem.findall(w("tr"))
        cols = len(tbl_elem.findall(f"{w('tblGrid')}/{w('gridCol')}"))
        if not cols:
            cols = max((self._row_width(tr) for tr in rows), default=0)
        try:
            table = create(len(rows), cols)
        except DocxError as e:
            logger.warning(f"Skipping table: {e}")
            return

        tbl_pr = tbl_elem.find(w("tblPr"))
        if tbl_pr is not None:
            style = get_val(tbl_pr, "tblStyle")
            if style:
                table.set_style(style)
            tbl_w = tbl_pr.find(w("tblW"))
            if tbl_w is not None:
                width_type = parse_enum(WidthType, tbl_w.get(w("type")), "table width type")
                value = parse_int(tbl_w.get(w("w")), "table width") or 0
                _apply("table width", table.set_width, TableWidth(width_type or WidthType.AUTO, value))
            alignment = parse_enum(Alignment, get_val(tbl_pr, "jc"), "table alignment")
            if alignment is not None:
                table.set_alignment(alignment)
            borders = _read_borders(tbl_pr.find(w("tblBorders")))
            if borders is not None:
                table.set_borders(borders)

        for row_index, tr in enumerate(rows):
            row = table.row(row_index)
            tr_pr = tr.find(w("trPr"))
            height = parse_int(get_val(tr_pr, "trHeight"), "row height") if tr_pr is not None else None
            if height:
                _apply("row height", row.set_height, height)

            col = 0
            for tc in tr.findall(w("tc")):
                if col >= cols:
                    logger.warning(f"Row {row_index} has more cells than the grid; extra cells dropped")
                    break
                cell = row.cell(col)
                span = self._read_cell(tc, cell, rels)
                span = min(span, cols - col)
                if span > 1:
                    cell.set_grid_span(span)
                    for covered in range(col + 1, col + span):
                        row.cell(covered).h_merge_continuation = True
                col += span

        _recompute_row_spans(table)

    @staticmethod
    def _row_width(tr: etree._Element) -> int:
        total = 0
        for tc in tr.findall(w("tc")):
            tc_pr = tc.find(w("tcPr"))
            span = parse_int(get_val(tc_pr, "gridSpan"), "grid span") if tc_pr is not None else None
            total += span or 1
        return total

    def _read_cell(self, tc: etree._Element, cell: TableCell, rels: RelationshipTable) -> int:
        """Fill ``cell`` from a w:tc and return its grid span."""
        span = 1
        tc_pr = tc.find(w("tcPr"))
        if tc_pr is not None:
            tc_w = tc_pr.find(w("tcW"))
            if tc_w is not None and tc_w.get(w("type")) == WidthType.DXA.value:
                width = parse_int(tc_w.get(w("w")), "cell width")
                if width is not None:
                    _apply("cell width", cell.set_width, width)
            span = max(parse_int(get_val(tc_pr, "gridSpan"), "grid span") or 1, 1)

            v_merge = tc_pr.find(w("vMerge"))
            if v_merge is not None:
                restart = v_merge.get(w("val")) == VerticalMerge.RESTART.value
                cell.set_v_merge(VerticalMerge.RESTART if restart else VerticalMerge.CONTINUE)

            borders = _read_borders(tc_pr.find(w("tcBorders")))
            if borders is not None:
                cell.set_borders(borders)
            shd = tc_pr.find(w("shd"))
            if shd is not None:
                fill = parse_color(shd.get(w("fill")))
                if fill is not None:
                    cell.set_shading(fill)
            v_align = parse_enum(VerticalAlignment, get_val(tc_pr, "vAlign"), "vertical alignment")
            if v_align is not None:
                cell.set_vertical_alignment(v_align)

        blocks = [child for child in tc if child.tag in (w("p"), w("tbl"))]
        for index, child in enumerate(blocks):
            if child.tag == w("tbl"):
                self._read_table(child, cell.add_table, rels)
                continue
            is_last = index == len(blocks) - 1
            if is_last and _is_empty_paragraph(child) and (index == 0 or blocks[index - 1].tag == w("tbl")):
                continue
            self._read_paragraph(child, cell.add_paragraph(), rels)
        return span

    # =========================================================================
    # Sections, headers, footers
    # =========================================================================

    def _read_section(self, sect_pr: etree._Element, section: Section) -> None:
        for ref in sect_pr:
            if ref.tag == w("headerReference"):
                self._read_header_footer(ref, section, Header, IDKind.HEADER)
            elif ref.tag == w("footerReference"):
                self._read_header_footer(ref, section, Footer, IDKind.FOOTER)

        start_type = parse_enum(SectionBreakType, get_val(sect_pr, "type"), "section type")
        if start_type is not None:
            section.set_start_type(start_type)

        pg_sz = sect_pr.find(w("pgSz"))
        if pg_sz is not None:
            width = parse_int(pg_sz.get(w("w")), "page width")
            height = parse_int(pg_sz.get(w("h")), "page height")
            landscape = pg_sz.get(w("orient")) == Orientation.LANDSCAPE.value
            if landscape:
                section.set_orientation(Orientation.LANDSCAPE)
            if width and height:
                # Stored portrait-wise; landscape sizes are written swapped
                size = PageSize(height, width) if landscape else PageSize(width, height)
                _apply("page size", section.set_page_size, size)

        pg_mar = sect_pr.find(w("pgMar"))
        if pg_mar is not None:
            values = {}
            for name in ("top", "right", "bottom", "left", "header", "footer"):
                number = parse_int(pg_mar.get(w(name)), f"{name} margin")
                if number is not None:
                    values[name] = number
            _apply("margins", section.set_margins, Margins(**values))

        cols = sect_pr.find(w("cols"))
        if cols is not None:
            count = parse_int(cols.get(w("num")), "column count")
            if count:
                _apply("columns", section.set_columns, count)

    def _read_header_footer(self, ref: etree._Element, section: Section, cls, kind: IDKind) -> None:
        hf_type = parse_enum(HeaderFooterType, ref.get(w("type")), f"{cls.kind} type")
        rel_id = ref.get(r("id"))
        if hf_type is None or not rel_id:
            return
        try:
            rel = self.doc.relationships.get(rel_id)
        except NotFoundError as e:
            logger.warning(f"Skipping {cls.kind}: {e}")
            return

        part_name = posixpath.normpath(f"word/{rel.target}")
        if not self._package.has_part(part_name):
            logger.warning(f"Skipping {cls.kind}: package has no {part_name}")
            return

        part_id = posixpath.splitext(posixpath.basename(rel.target))[0]
        part = cls(part_id, hf_type, rel_id, rel.target, self.doc.context)
        self.doc.ids.advance_past(kind, part_id)
        for part_rel in self._package.relationships(part_name):
            part.relationships.register_existing(part_rel.id, part_rel.type, part_rel.target, part_rel.mode)

        for p_elem in self._package.read_xml(part_name).findall(w("p")):
            if _is_empty_paragraph(p_elem):
                continue
            para = part.add_paragraph()
            self._read_paragraph(p_elem, para, part.relationships)

        if cls is Header:
            section.attach_header(part)
        else:
            section.attach_footer(part)
        logger.debug(f"Read {cls.kind} {part_name} ({hf_type.value})")


# =============================================================================
# Helpers
# =============================================================================


def _read_borders(container: etree._Element | None) -> Borders | None:
    if container is None:
        return None
    edges = {}
    for tag, name in _BORDER_EDGES.items():
        elem = container.find(w(tag))
        if elem is None:
            continue
        try:
            edges[name] = BorderStyle(
                style=parse_enum(BorderLineStyle, elem.get(w("val")), "border style") or BorderLineStyle.SINGLE,
                width=parse_int(elem.get(w("sz")), "border width") or 0,
                color=parse_color(elem.get(w("color"))) or BLACK,
                space=parse_int(elem.get(w("space")), "border space") or 0,
            )
        except DocxError as e:
            logger.warning(f"Ignoring {tag} border: {e}")
    return Borders(**edges) if edges else None


def _read_position(anchor: etree._Element) -> ImagePosition:
    def placement(tag: str, enum_type):
        elem = anchor.find(wp(tag))
        if elem is None:
            return 0, None
        offset = elem.find(wp("posOffset"))
        align = elem.find(wp("align"))
        return (
            parse_int(offset.text if offset is not None else None, f"{tag} offset") or 0,
            parse_enum(enum_type, align.text if align is not None else None, f"{tag} alignment"),
        )

    offset_x, h_align = placement("positionH", HorizontalAlign)
    offset_y, v_align = placement("positionV", VerticalAlign)

    wrap = TextWrapType.NONE
    for tag, wrap_type in _WRAP_TAGS.items():
        if anchor.find(wp(tag)) is not None:
            wrap = wrap_type
            break
    behind = anchor.get("behindDoc") in ("1", "true")
    if wrap is TextWrapType.NONE and behind:
        wrap = TextWrapType.BEHIND_TEXT

    return ImagePosition(
        type=ImagePositionType.FLOATING,
        h_align=h_align or HorizontalAlign.LEFT,
        v_align=v_align or VerticalAlign.TOP,
        offset_x=offset_x,
        offset_y=offset_y,
        wrap_text=wrap,
        z_order=max(parse_int(anchor.get("relativeHeight"), "relative height") or 0, 0),
        behind_text=behind,
    )


def _recompute_row_spans(table: Table) -> None:
    """Set row_span on vertical merge anchors from the continuation cells below."""
    rows = table.rows()
    for col in range(table.column_count):
        for index, row in enumerate(rows):
            cell = row.cell(col)
            if cell.v_merge is not VerticalMerge.RESTART:
                continue
            span = 1
            for below in rows[index + 1 :]:
                if below.cell(col).v_merge is not VerticalMerge.CONTINUE:
                    break
                span += 1
            cell.row_span = span
