"""
Serializer: turns a Document's entity graph into WordprocessingML trees.

Every method returns a fresh lxml element and never mutates the document.
Units are written as the object model stores them (twips, half-points,
EMUs); enums are written as their OOXML tokens. Style references are
written by ID and left for Word to resolve against word/styles.xml.

Example:
    >>> serializer = DocumentSerializer(doc)
    >>> body = serializer.serialize_document()
    >>> etree.tostring(body)[:40]
    b'<w:document xmlns:w="http://schemas.op'
"""

from __future__ import annotations

import itertools
import logging
import posixpath
import re
from typing import TYPE_CHECKING

from lxml import etree

from .constants import (
    CORE_PROPERTIES_NAMESPACE,
    DC_NAMESPACE,
    DCTERMS_NAMESPACE,
    DEFAULT_FONT_NAME,
    DEFAULT_FONT_SIZE,
    DEFAULT_LINE_SPACING,
    EXTENDED_PROPERTIES_NAMESPACE,
    NSMAP,
    NSMAP_BODY,
    NSMAP_CORE,
    NSMAP_DRAWING,
    PIC_NAMESPACE,
    XSI_NAMESPACE,
    a,
    pic,
    r,
    w,
    wp,
    xml_space,
)
from .ids import numeric_suffix
from .models.field import Field
from .models.formatting import (
    BLACK,
    WHITE,
    Alignment,
    BorderStyle,
    Borders,
    BreakType,
    HighlightColor,
    LineSpacingRule,
    UnderlineStyle,
    VerticalAlignment,
    WidthType,
)
from .models.header_footer import Footer, Header, HeaderFooterType
from .models.image import HorizontalAlign, Image, TextWrapType, VerticalAlign
from .models.metadata import w3cdtf_now
from .models.paragraph import Paragraph
from .models.run import Run
from .models.section import Orientation, Section
from .models.table import Table, TableCell, VerticalMerge
from .styles import indentation_to_element
from .theme import theme_element

if TYPE_CHECKING:
    from .document import Document

logger = logging.getLogger(__name__)

VT_NAMESPACE = "http://schemas.openxmlformats.org/officeDocument/2006/docPropsVTypes"

# Word's compatibility mode for documents created by Word 2013 and later
COMPATIBILITY_MODE = "15"

DEFAULT_TAB_STOP = 720

# (name, panose) of the fonts declared in fontTable.xml
FONT_TABLE = (
    ("Calibri", "020F0502020204030204"),
    ("Calibri Light", "020F0302020204030204"),
)

# Splits run text into text, "\n" and "\t" tokens
_SPECIAL_CHARS_RE = re.compile(r"(\n|\t)")

# Horizontal distance between a floating picture and the text (0.125")
_ANCHOR_DIST_LR = "114300"

_MARGIN_RELATIVE_H = (HorizontalAlign.INSIDE, HorizontalAlign.OUTSIDE)
_MARGIN_RELATIVE_V = (VerticalAlign.INSIDE, VerticalAlign.OUTSIDE)


def _val(parent: etree._Element, tag: str, value: str) -> etree._Element:
    child = etree.SubElement(parent, w(tag))
    child.set(w("val"), value)
    return child


def _border_element(parent: etree._Element, edge: str, border: BorderStyle) -> None:
    elem = etree.SubElement(parent, w(edge))
    elem.set(w("val"), border.style.value)
    elem.set(w("sz"), str(border.width))
    elem.set(w("space"), str(border.space))
    elem.set(w("color"), border.color.hex)


def _borders_element(tag: str, borders: Borders, edges: tuple[str, ...] | None = None) -> etree._Element:
    container = etree.Element(w(tag))
    for edge, border in borders.edges():
        if edges is None or edge in edges:
            _border_element(container, edge, border)
    return container


def _text_element(parent: etree._Element, tag: str, text: str) -> None:
    elem = etree.SubElement(parent, w(tag))
    elem.text = text
    if text != text.strip():
        elem.set(xml_space(), "preserve")


class DocumentSerializer:
    """Builds the XML parts of one document.

    Drawing IDs (wp:docPr/@id) are unique per serializer, so use one
    instance for every part of a package.

    Args:
        document: The document to serialize
    """

    def __init__(self, document: Document) -> None:
        self._document = document
        self._drawing_ids = itertools.count(1)

    # =========================================================================
    # Parts
    # =========================================================================

    def serialize_document(self) -> etree._Element:
        """Build the w:document root of word/document.xml."""
        root = etree.Element(w("document"), nsmap=NSMAP_BODY)
        body = etree.SubElement(root, w("body"))

        blocks = self._document.blocks()
        for block in blocks:
            if isinstance(block, Paragraph):
                body.append(self.paragraph_element(block))
            elif isinstance(block, Table):
                body.append(self.table_element(block))
            else:
                para = etree.SubElement(body, w("p"))
                ppr = etree.SubElement(para, w("pPr"))
                ppr.append(self.section_element(block.section))

        # Word needs a paragraph between a trailing table and the section
        if blocks and isinstance(blocks[-1], Table):
            etree.SubElement(body, w("p"))

        body.append(self.section_element(self._document.current_section))
        logger.debug(f"Serialized document body with {len(blocks)} blocks")
        return root

    def serialize_header(self, header: Header) -> etree._Element:
        return self._header_footer_element("hdr", header)

    def serialize_footer(self, footer: Footer) -> etree._Element:
        return self._header_footer_element("ftr", footer)

    def _header_footer_element(self, tag: str, part: Header | Footer) -> etree._Element:
        root = etree.Element(w(tag), nsmap=NSMAP_BODY)
        paragraphs = part.paragraphs()
        for para in paragraphs:
            root.append(self.paragraph_element(para))
        if not paragraphs:
            etree.SubElement(root, w("p"))
        return root

    def serialize_styles(self) -> etree._Element:
        return self._document.styles.to_element()

    def serialize_settings(self) -> etree._Element:
        """Build w:settings; evenAndOddHeaders is set when an even header/footer exists."""
        root = etree.Element(w("settings"), nsmap=NSMAP)
        etree.SubElement(root, w("zoom")).set(w("percent"), "100")
        _val(root, "defaultTabStop", str(DEFAULT_TAB_STOP))

        parts = self._document.headers() + self._document.footers()
        if any(part.type is HeaderFooterType.EVEN for part in parts):
            etree.SubElement(root, w("evenAndOddHeaders"))

        _val(root, "characterSpacingControl", "doNotCompress")
        compat = etree.SubElement(root, w("compat"))
        setting = etree.SubElement(compat, w("compatSetting"))
        setting.set(w("name"), "compatibilityMode")
        setting.set(w("uri"), "http://schemas.microsoft.com/office/word")
        setting.set(w("val"), COMPATIBILITY_MODE)
        return root

    def serialize_font_table(self) -> etree._Element:
        root = etree.Element(w("fonts"), nsmap=NSMAP)
        for name, panose in FONT_TABLE:
            font = etree.SubElement(root, w("font"))
            font.set(w("name"), name)
            _val(font, "panose1", panose)
            _val(font, "charset", "00")
            _val(font, "family", "swiss")
            _val(font, "pitch", "variable")
        return root

    def serialize_theme(self) -> etree._Element:
        return theme_element()

    def serialize_core_properties(self) -> etree._Element:
        """Build cp:coreProperties from the document metadata.

        Empty text properties are omitted; empty timestamps are filled with
        the current time.
        """
        meta = self._document.metadata
        root = etree.Element(f"{{{CORE_PROPERTIES_NAMESPACE}}}coreProperties", nsmap=NSMAP_CORE)

        for namespace, tag, value in (
            (DC_NAMESPACE, "title", meta.title),
            (DC_NAMESPACE, "subject", meta.subject),
            (DC_NAMESPACE, "creator", meta.creator),
            (CORE_PROPERTIES_NAMESPACE, "keywords", ", ".join(k for k in meta.keywords if k)),
            (DC_NAMESPACE, "description", meta.description),
        ):
            if value:
                etree.SubElement(root, f"{{{namespace}}}{tag}").text = value

        now = w3cdtf_now()
        for tag, value in (("created", meta.created), ("modified", meta.modified)):
            elem = etree.SubElement(root, f"{{{DCTERMS_NAMESPACE}}}{tag}")
            elem.set(f"{{{XSI_NAMESPACE}}}type", "dcterms:W3CDTF")
            elem.text = value or now
        return root

    def serialize_app_properties(self) -> etree._Element:
        ns = EXTENDED_PROPERTIES_NAMESPACE
        root = etree.Element(f"{{{ns}}}Properties", nsmap={None: ns, "vt": VT_NAMESPACE})
        etree.SubElement(root, f"{{{ns}}}Application").text = self._document.application
        etree.SubElement(root, f"{{{ns}}}DocSecurity").text = "0"
        etree.SubElement(root, f"{{{ns}}}Paragraphs").text = str(len(self._document.paragraphs()))
        return root

    # =========================================================================
    # Paragraphs and runs
    # =========================================================================

    def paragraph_element(self, para: Paragraph) -> etree._Element:
        # w:pPr is always written, so only the filler paragraphs Word requires
        # after a table or in an empty part are bare w:p elements
        p = etree.Element(w("p"))
        p.append(self._paragraph_properties(para))

        bookmark_id = None
        if para.bookmark is not None:
            bookmark_id = str(numeric_suffix(para.bookmark.id) or 0)
            start = etree.SubElement(p, w("bookmarkStart"))
            start.set(w("id"), bookmark_id)
            start.set(w("name"), para.bookmark.name)

        for run in para.runs():
            for elem in self.run_elements(run):
                p.append(elem)

        if bookmark_id is not None:
            etree.SubElement(p, w("bookmarkEnd")).set(w("id"), bookmark_id)
        return p

    def _paragraph_properties(self, para: Paragraph) -> etree._Element:
        ppr = etree.Element(w("pPr"))
        if para.style:
            _val(ppr, "pStyle", para.style)
        if para.keep_with_next:
            etree.SubElement(ppr, w("keepNext"))
        if para.keep_lines:
            etree.SubElement(ppr, w("keepLines"))
        if para.page_break_before:
            etree.SubElement(ppr, w("pageBreakBefore"))

        if para.numbering is not None:
            num_pr = etree.SubElement(ppr, w("numPr"))
            _val(num_pr, "ilvl", str(para.numbering.level))
            _val(num_pr, "numId", str(para.numbering.num_id))

        if para.borders is not None and not para.borders.is_empty:
            ppr.append(_borders_element("pBdr", para.borders, ("top", "left", "bottom", "right")))

        line = para.line_spacing
        custom_line = line is not None and (
            line.rule is not LineSpacingRule.AUTO or line.value != DEFAULT_LINE_SPACING
        )
        if para.spacing_before or para.spacing_after or custom_line:
            spacing = etree.SubElement(ppr, w("spacing"))
            spacing.set(w("before"), str(para.spacing_before))
            spacing.set(w("after"), str(para.spacing_after))
            if custom_line:
                spacing.set(w("line"), str(line.value))
                spacing.set(w("lineRule"), line.rule.value)

        if not para.indentation.is_empty:
            ppr.append(indentation_to_element(para.indentation))

        if para.alignment is not Alignment.LEFT:
            _val(ppr, "jc", para.alignment.value)
        return ppr

    def run_properties(self, run: Run) -> etree._Element | None:
        """Build w:rPr with only the values that differ from the document defaults."""
        rpr = etree.Element(w("rPr"))
        if run.style:
            _val(rpr, "rStyle", run.style)

        font = run.font
        if font.name != DEFAULT_FONT_NAME or font.east_asia or font.complex_script:
            fonts = etree.SubElement(rpr, w("rFonts"))
            fonts.set(w("ascii"), font.name)
            fonts.set(w("hAnsi"), font.name)
            if font.east_asia:
                fonts.set(w("eastAsia"), font.east_asia)
            if font.complex_script:
                fonts.set(w("cs"), font.complex_script)

        if run.bold:
            etree.SubElement(rpr, w("b"))
        if run.italic:
            etree.SubElement(rpr, w("i"))
        if run.strike:
            etree.SubElement(rpr, w("strike"))
        if run.color != BLACK:
            _val(rpr, "color", run.color.hex)
        if run.size != DEFAULT_FONT_SIZE:
            _val(rpr, "sz", str(run.size))
            _val(rpr, "szCs", str(run.size))
        if run.highlight is not HighlightColor.NONE:
            _val(rpr, "highlight", run.highlight.value)
        if run.underline is not UnderlineStyle.NONE:
            _val(rpr, "u", run.underline.value)

        return rpr if len(rpr) else None

    def _new_run(self, run: Run) -> etree._Element:
        r_elem = etree.Element(w("r"))
        rpr = self.run_properties(run)
        if rpr is not None:
            r_elem.append(rpr)
        return r_elem

    def run_elements(self, run: Run) -> list[etree._Element]:
        """Build the elements for one run.

        A plain run gives one w:r. Fields expand into five runs each, and a
        hyperlink run is wrapped in w:hyperlink.
        """
        elements: list[etree._Element] = []

        if run.image is not None:
            r_elem = self._new_run(run)
            r_elem.append(self.drawing_element(run.image))
            elements.append(r_elem)
        else:
            fields = run.fields()
            content = run.content()
            if content or not fields:
                r_elem = self._new_run(run)
                for item in content:
                    self._append_content(r_elem, item)
                elements.append(r_elem)
            for field in fields:
                elements.extend(self.field_runs(run, field))

        if run.hyperlink_id:
            link = etree.Element(w("hyperlink"))
            link.set(r("id"), run.hyperlink_id)
            link.set(w("history"), "1")
            link.extend(elements)
            return [link]
        return elements

    def _append_content(self, r_elem: etree._Element, item: str | BreakType) -> None:
        if isinstance(item, BreakType):
            br = etree.SubElement(r_elem, w("br"))
            br.set(w("type"), item.value)
            return
        for token in _SPECIAL_CHARS_RE.split(item):
            if token == "\n":
                etree.SubElement(r_elem, w("br"))
            elif token == "\t":
                etree.SubElement(r_elem, w("tab"))
            elif token:
                _text_element(r_elem, "t", token)

    def field_runs(self, run: Run, field: Field) -> list[etree._Element]:
        """Expand a field into begin, instruction, separate, result and end runs."""
        begin = self._new_run(run)
        fld = etree.SubElement(begin, w("fldChar"))
        fld.set(w("fldCharType"), "begin")
        if field.dirty:
            fld.set(w("dirty"), "true")

        instr = self._new_run(run)
        instr_text = etree.SubElement(instr, w("instrText"))
        instr_text.set(xml_space(), "preserve")
        instr_text.text = f" {field.code} "

        separate = self._new_run(run)
        etree.SubElement(separate, w("fldChar")).set(w("fldCharType"), "separate")

        result = self._new_run(run)
        cached = field.display_result()
        if cached:
            _text_element(result, "t", cached)

        end = self._new_run(run)
        etree.SubElement(end, w("fldChar")).set(w("fldCharType"), "end")
        return [begin, instr, separate, result, end]

    # =========================================================================
    # Drawings
    # =========================================================================

    def drawing_element(self, image: Image) -> etree._Element:
        """Build w:drawing holding a wp:inline or wp:anchor picture."""
        drawing_id = next(self._drawing_ids)
        drawing = etree.Element(w("drawing"))
        if image.position.is_floating:
            container = self._anchor_element(drawing, image)
        else:
            container = etree.SubElement(
                drawing,
                wp("inline"),
                nsmap=NSMAP_DRAWING,
                attrib={"distT": "0", "distB": "0", "distL": "0", "distR": "0"},
            )
            self._extent_elements(container, image)
        self._picture_elements(container, image, drawing_id)
        return drawing

    def _extent_elements(self, container: etree._Element, image: Image) -> None:
        etree.SubElement(
            container,
            wp("extent"),
            attrib={"cx": str(image.size.width_emu), "cy": str(image.size.height_emu)},
        )
        etree.SubElement(container, wp("effectExtent"), attrib={"l": "0", "t": "0", "r": "0", "b": "0"})

    def _anchor_element(self, drawing: etree._Element, image: Image) -> etree._Element:
        pos = image.position
        behind = pos.behind_text or pos.wrap_text is TextWrapType.BEHIND_TEXT
        anchor = etree.SubElement(
            drawing,
            wp("anchor"),
            nsmap=NSMAP_DRAWING,
            attrib={
                "distT": "0",
                "distB": "0",
                "distL": _ANCHOR_DIST_LR,
                "distR": _ANCHOR_DIST_LR,
                "simplePos": "0",
                "relativeHeight": str(pos.z_order),
                "behindDoc": "1" if behind else "0",
                "locked": "0",
                "layoutInCell": "1",
                "allowOverlap": "1",
            },
        )
        etree.SubElement(anchor, wp("simplePos"), attrib={"x": "0", "y": "0"})

        pos_h = etree.SubElement(anchor, wp("positionH"))
        pos_h.set("relativeFrom", "margin" if pos.h_align in _MARGIN_RELATIVE_H else "column")
        if pos.offset_x:
            etree.SubElement(pos_h, wp("posOffset")).text = str(pos.offset_x)
        else:
            etree.SubElement(pos_h, wp("align")).text = pos.h_align.value

        pos_v = etree.SubElement(anchor, wp("positionV"))
        pos_v.set("relativeFrom", "margin" if pos.v_align in _MARGIN_RELATIVE_V else "paragraph")
        if pos.offset_y:
            etree.SubElement(pos_v, wp("posOffset")).text = str(pos.offset_y)
        else:
            etree.SubElement(pos_v, wp("align")).text = pos.v_align.value

        self._extent_elements(anchor, image)

        if pos.wrap_text in (TextWrapType.NONE, TextWrapType.BEHIND_TEXT, TextWrapType.IN_FRONT_OF_TEXT):
            etree.SubElement(anchor, wp("wrapNone"))
        elif pos.wrap_text is TextWrapType.TOP_BOTTOM:
            etree.SubElement(anchor, wp("wrapTopAndBottom"))
        else:
            # Tight and through wrapping need a polygon; square is the closest
            etree.SubElement(anchor, wp("wrapSquare")).set("wrapText", "bothSides")
        return anchor

    def _picture_elements(self, container: etree._Element, image: Image, drawing_id: int) -> None:
        name = f"Picture {drawing_id}"
        doc_pr = {"id": str(drawing_id), "name": name}
        if image.description:
            doc_pr["descr"] = image.description
        etree.SubElement(container, wp("docPr"), attrib=doc_pr)

        frame_pr = etree.SubElement(container, wp("cNvGraphicFramePr"))
        etree.SubElement(frame_pr, a("graphicFrameLocks"), attrib={"noChangeAspect": "1"})

        graphic = etree.SubElement(container, a("graphic"))
        graphic_data = etree.SubElement(graphic, a("graphicData"), attrib={"uri": PIC_NAMESPACE})
        pic_elem = etree.SubElement(graphic_data, pic("pic"))

        nv_pic_pr = etree.SubElement(pic_elem, pic("nvPicPr"))
        file_name = posixpath.basename(image.target) or name
        etree.SubElement(nv_pic_pr, pic("cNvPr"), attrib={"id": str(drawing_id), "name": file_name})
        cnv_pic_pr = etree.SubElement(nv_pic_pr, pic("cNvPicPr"))
        etree.SubElement(cnv_pic_pr, a("picLocks"), attrib={"noChangeAspect": "1"})

        blip_fill = etree.SubElement(pic_elem, pic("blipFill"))
        etree.SubElement(blip_fill, a("blip"), attrib={r("embed"): image.relationship_id})
        stretch = etree.SubElement(blip_fill, a("stretch"))
        etree.SubElement(stretch, a("fillRect"))

        sp_pr = etree.SubElement(pic_elem, pic("spPr"))
        xfrm = etree.SubElement(sp_pr, a("xfrm"))
        etree.SubElement(xfrm, a("off"), attrib={"x": "0", "y": "0"})
        etree.SubElement(
            xfrm,
            a("ext"),
            attrib={"cx": str(image.size.width_emu), "cy": str(image.size.height_emu)},
        )
        geom = etree.SubElement(sp_pr, a("prstGeom"), attrib={"prst": "rect"})
        etree.SubElement(geom, a("avLst"))

    # =========================================================================
    # Tables
    # =========================================================================

    def table_element(self, table: Table) -> etree._Element:
        tbl = etree.Element(w("tbl"))
        tbl_pr = etree.SubElement(tbl, w("tblPr"))
        if table.style:
            _val(tbl_pr, "tblStyle", table.style)
        tbl_w = etree.SubElement(tbl_pr, w("tblW"))
        tbl_w.set(w("w"), str(table.width.value))
        tbl_w.set(w("type"), table.width.type.value)
        if table.alignment is not Alignment.LEFT:
            _val(tbl_pr, "jc", table.alignment.value)
        if table.borders is not None and not table.borders.is_empty:
            tbl_pr.append(_borders_element("tblBorders", table.borders))
        _val(tbl_pr, "tblLook", "04A0")

        grid = etree.SubElement(tbl, w("tblGrid"))
        for width in self._grid_widths(table):
            etree.SubElement(grid, w("gridCol")).set(w("w"), str(width))

        for row in table.rows():
            tr = etree.SubElement(tbl, w("tr"))
            if row.height > 0:
                tr_pr = etree.SubElement(tr, w("trPr"))
                height = etree.SubElement(tr_pr, w("trHeight"))
                height.set(w("val"), str(row.height))
                height.set(w("hRule"), "atLeast")
            for cell in row.cells():
                if cell.h_merge_continuation:
                    continue
                tr.append(self.cell_element(cell))
        return tbl

    def _grid_widths(self, table: Table) -> list[int]:
        """Column widths for w:tblGrid, one per table column.

        Explicit widths of the first row win; otherwise a fixed table width
        or the text width of the page is split evenly.
        """
        cols = table.column_count
        widths = [0] * cols
        col = 0
        for cell in table.row(0).cells():
            if col >= cols:
                break
            if cell.h_merge_continuation:
                col += 1
                continue
            span = min(cell.grid_span, cols - col)
            for offset in range(span):
                widths[col + offset] = cell.width // span
            col += span
        if all(widths):
            return widths

        if table.width.type is WidthType.DXA and table.width.value > 0:
            total = table.width.value
        else:
            section = self._document.current_section
            total = section.effective_page_size.width - section.margins.left - section.margins.right
        return [max(total, 0) // cols] * cols

    def cell_element(self, cell: TableCell) -> etree._Element:
        tc = etree.Element(w("tc"))
        tc_pr = etree.SubElement(tc, w("tcPr"))

        tc_w = etree.SubElement(tc_pr, w("tcW"))
        if cell.width > 0:
            tc_w.set(w("w"), str(cell.width))
            tc_w.set(w("type"), WidthType.DXA.value)
        else:
            tc_w.set(w("w"), "0")
            tc_w.set(w("type"), WidthType.AUTO.value)

        if cell.grid_span > 1:
            _val(tc_pr, "gridSpan", str(cell.grid_span))
        if cell.v_merge is VerticalMerge.RESTART:
            _val(tc_pr, "vMerge", "restart")
        elif cell.v_merge is VerticalMerge.CONTINUE:
            etree.SubElement(tc_pr, w("vMerge"))
        if cell.borders is not None and not cell.borders.is_empty:
            tc_pr.append(_borders_element("tcBorders", cell.borders))
        if cell.shading != WHITE:
            shd = etree.SubElement(tc_pr, w("shd"))
            shd.set(w("val"), "clear")
            shd.set(w("color"), "auto")
            shd.set(w("fill"), cell.shading.hex)
        if cell.vertical_alignment is not VerticalAlignment.TOP:
            _val(tc_pr, "vAlign", cell.vertical_alignment.value)

        paragraphs = cell.paragraphs()
        tables = cell.tables()
        for para in paragraphs:
            tc.append(self.paragraph_element(para))
        for nested in tables:
            tc.append(self.table_element(nested))
        # A cell must end with a paragraph
        if tables or not paragraphs:
            etree.SubElement(tc, w("p"))
        return tc

    # =========================================================================
    # Sections
    # =========================================================================

    def section_element(self, section: Section) -> etree._Element:
        sect_pr = etree.Element(w("sectPr"))
        for tag, parts in (("headerReference", section.headers()), ("footerReference", section.footers())):
            for part in parts:
                ref = etree.SubElement(sect_pr, w(tag))
                ref.set(w("type"), part.type.value)
                ref.set(r("id"), part.rel_id)

        _val(sect_pr, "type", section.start_type.value)

        size = section.effective_page_size
        pg_sz = etree.SubElement(sect_pr, w("pgSz"))
        pg_sz.set(w("w"), str(size.width))
        pg_sz.set(w("h"), str(size.height))
        if section.orientation is Orientation.LANDSCAPE:
            pg_sz.set(w("orient"), Orientation.LANDSCAPE.value)

        margins = section.margins
        pg_mar = etree.SubElement(sect_pr, w("pgMar"))
        for name in ("top", "right", "bottom", "left", "header", "footer"):
            pg_mar.set(w(name), str(getattr(margins, name)))
        pg_mar.set(w("gutter"), "0")

        cols = etree.SubElement(sect_pr, w("cols"))
        cols.set(w("space"), "720")
        if section.columns > 1:
            cols.set(w("num"), str(section.columns))

        if section.has_title_page:
            etree.SubElement(sect_pr, w("titlePg"))
        return sect_pr
