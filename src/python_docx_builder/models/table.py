"""
Table model classes: Table, TableRow and TableCell.

Tables are rectangular when created (rows x columns). Merging does not
remove cells: a horizontally merged cell carries a grid span and the cells
it covers are flagged as continuations, which the serializer skips. Cells
can hold nested tables.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum

from python_docx_builder.constants import (
    MAX_TABLE_COLS,
    MAX_TABLE_ROWS,
    MIN_TABLE_COLS,
    MIN_TABLE_ROWS,
)
from python_docx_builder.errors import InvalidStateError, NotFoundError, ValidationError
from python_docx_builder.models.context import PartContext
from python_docx_builder.models.formatting import (
    WHITE,
    Alignment,
    Borders,
    Color,
    TableWidth,
    VerticalAlignment,
    WidthType,
)
from python_docx_builder.models.paragraph import Paragraph

logger = logging.getLogger(__name__)


class VerticalMerge(Enum):
    """Vertical merge state of a cell (w:vMerge)."""

    NONE = "none"
    RESTART = "restart"
    CONTINUE = "continue"


@dataclass(frozen=True)
class CellMergeInfo:
    """Snapshot of a cell's merge state.

    Attributes:
        grid_span: Columns spanned (w:gridSpan)
        v_merge: Vertical merge state
        row_span: Rows spanned, as given to ``merge``
        col_span: Same as grid_span
    """

    grid_span: int
    v_merge: VerticalMerge
    row_span: int
    col_span: int


def validate_table_shape(op: str, rows: int, cols: int) -> None:
    """Check table dimensions against Word's limits.

    Raises:
        ValidationError: If rows is outside [1, 1000] or cols outside [1, 63]
    """
    if not isinstance(rows, int) or not MIN_TABLE_ROWS <= rows <= MAX_TABLE_ROWS:
        raise ValidationError(op, "rows", rows, f"must be between {MIN_TABLE_ROWS} and {MAX_TABLE_ROWS}")
    if not isinstance(cols, int) or not MIN_TABLE_COLS <= cols <= MAX_TABLE_COLS:
        raise ValidationError(op, "cols", cols, f"must be between {MIN_TABLE_COLS} and {MAX_TABLE_COLS}")


class TableCell:
    """A table cell holding paragraphs and, optionally, nested tables."""

    def __init__(self, cell_id: str, context: PartContext) -> None:
        self.id = cell_id
        self._context = context
        self._paragraphs: list[Paragraph] = []
        self._tables: list[Table] = []
        self.width = 0
        self.vertical_alignment = VerticalAlignment.TOP
        self.borders: Borders | None = None
        self.shading: Color = WHITE
        self.grid_span = 1
        self.v_merge = VerticalMerge.NONE
        self.row_span = 1
        # Covered by a cell to its left with grid_span > 1
        self.h_merge_continuation = False

    def __repr__(self) -> str:
        return f"<TableCell id={self.id!r} span={self.grid_span}>"

    @property
    def text(self) -> str:
        """Text of the cell's paragraphs joined with newlines."""
        return "\n".join(p.text for p in self._paragraphs)

    @property
    def col_span(self) -> int:
        return self.grid_span

    def paragraphs(self) -> list[Paragraph]:
        return list(self._paragraphs)

    def tables(self) -> list[Table]:
        return list(self._tables)

    def add_paragraph(self, text: str = "") -> Paragraph:
        """Append a paragraph, optionally with one run of text."""
        para = Paragraph(self._context.ids.next_paragraph_id(), self._context)
        if text:
            para.add_run(text)
        self._paragraphs.append(para)
        return para

    def add_table(self, rows: int, cols: int) -> Table:
        """Nest a new table in this cell."""
        table = new_table(self._context, rows, cols, op="TableCell.add_table")
        self._tables.append(table)
        return table

    def set_width(self, twips: int) -> None:
        """Set a fixed width in twips; 0 means automatic."""
        if twips < 0:
            raise ValidationError("TableCell.set_width", "twips", twips, "width cannot be negative")
        self.width = twips

    def set_vertical_alignment(self, alignment: VerticalAlignment) -> None:
        if not isinstance(alignment, VerticalAlignment):
            raise ValidationError(
                "TableCell.set_vertical_alignment", "alignment", alignment, "not a VerticalAlignment"
            )
        self.vertical_alignment = alignment

    def set_borders(self, borders: Borders | None) -> None:
        self.borders = borders

    def set_shading(self, color: Color) -> None:
        """Set the background fill; white means no shading."""
        if not isinstance(color, Color):
            raise ValidationError("TableCell.set_shading", "color", color, "not a Color")
        self.shading = color

    def merge(self, cols: int, rows: int) -> None:
        """Span this cell over ``cols`` columns and start a ``rows``-row merge.

        Only this cell changes; use Table.merge_cells to also flag the cells
        being covered.

        Raises:
            ValidationError: If cols or rows is less than 1
        """
        if cols < 1:
            raise ValidationError("TableCell.merge", "cols", cols, "must be at least 1")
        if rows < 1:
            raise ValidationError("TableCell.merge", "rows", rows, "must be at least 1")
        self.grid_span = cols
        self.row_span = rows
        if rows > 1:
            self.v_merge = VerticalMerge.RESTART

    def set_grid_span(self, span: int) -> None:
        if span < 1:
            raise ValidationError("TableCell.set_grid_span", "span", span, "span must be at least 1")
        self.grid_span = span

    def set_v_merge(self, v_merge: VerticalMerge) -> None:
        if not isinstance(v_merge, VerticalMerge):
            raise ValidationError("TableCell.set_v_merge", "v_merge", v_merge, "not a VerticalMerge")
        self.v_merge = v_merge

    def merge_info(self) -> CellMergeInfo:
        return CellMergeInfo(self.grid_span, self.v_merge, self.row_span, self.grid_span)


class TableRow:
    """A row of cells."""

    def __init__(self, row_id: str, context: PartContext, cols: int) -> None:
        self.id = row_id
        self._context = context
        self._cells = [TableCell(context.ids.next_cell_id(), context) for _ in range(cols)]
        self.height = 0

    def __repr__(self) -> str:
        return f"<TableRow id={self.id!r} cells={len(self._cells)}>"

    def cell(self, col: int) -> TableCell:
        """Get the cell at ``col``.

        Raises:
            NotFoundError: If col is out of range
        """
        if not 0 <= col < len(self._cells):
            raise NotFoundError("TableRow.cell", f"cell at column {col}")
        return self._cells[col]

    def cells(self) -> list[TableCell]:
        return list(self._cells)

    def set_height(self, twips: int) -> None:
        """Set a minimum row height in twips; 0 lets Word size the row."""
        if twips < 0:
            raise ValidationError("TableRow.set_height", "twips", twips, "height cannot be negative")
        self.height = twips


class Table:
    """A table of rows and cells.

    Example:
        >>> table = doc.add_table(3, 4)
        >>> table.cell(0, 0).add_paragraph("Header 1")
        >>> table.merge_cells(1, 0, cols=2, rows=2)
    """

    def __init__(self, table_id: str, context: PartContext, rows: int, cols: int) -> None:
        self.id = table_id
        self._context = context
        self._cols = cols
        self._rows = [TableRow(context.ids.next_row_id(), context, cols) for _ in range(rows)]
        self.width = TableWidth(WidthType.AUTO, 0)
        self.alignment = Alignment.LEFT
        self.style: str | None = None
        self.borders: Borders | None = None

    def __repr__(self) -> str:
        return f"<Table id={self.id!r} rows={len(self._rows)} cols={self._cols}>"

    # ---- Rows ----

    def row(self, index: int) -> TableRow:
        """Get the row at ``index``.

        Raises:
            NotFoundError: If index is out of range
        """
        if not 0 <= index < len(self._rows):
            raise NotFoundError("Table.row", f"row {index}")
        return self._rows[index]

    def rows(self) -> list[TableRow]:
        return list(self._rows)

    def cell(self, row: int, col: int) -> TableCell:
        return self.row(row).cell(col)

    @property
    def row_count(self) -> int:
        return len(self._rows)

    @property
    def column_count(self) -> int:
        return self._cols

    def add_row(self) -> TableRow:
        """Append a row with one cell per column.

        Raises:
            ValidationError: If the table already has the maximum row count
        """
        return self.insert_row(len(self._rows))

    def insert_row(self, index: int) -> TableRow:
        op = "Table.insert_row"
        if len(self._rows) >= MAX_TABLE_ROWS:
            raise ValidationError(op, "rows", len(self._rows) + 1, f"a table holds at most {MAX_TABLE_ROWS} rows")
        if not 0 <= index <= len(self._rows):
            raise ValidationError(op, "index", index, f"must be between 0 and {len(self._rows)}")
        new_row = TableRow(self._context.ids.next_row_id(), self._context, self._cols)
        self._rows.insert(index, new_row)
        return new_row

    def delete_row(self, index: int) -> None:
        """Remove a row.

        Raises:
            NotFoundError: If index is out of range
            InvalidStateError: If it is the only row
        """
        if not 0 <= index < len(self._rows):
            raise NotFoundError("Table.delete_row", f"row {index}")
        if len(self._rows) == 1:
            raise InvalidStateError("Table.delete_row", "a table must keep at least one row")
        del self._rows[index]

    # ---- Properties ----

    def set_width(self, width: TableWidth) -> None:
        if width.value < 0:
            raise ValidationError("Table.set_width", "width", width.value, "width cannot be negative")
        self.width = width

    def set_alignment(self, alignment: Alignment) -> None:
        if not isinstance(alignment, Alignment):
            raise ValidationError("Table.set_alignment", "alignment", alignment, "not an Alignment")
        self.alignment = alignment

    def set_style(self, style_id: str | None) -> None:
        """Reference a table style by ID (e.g., "TableGrid")."""
        self.style = style_id or None

    def set_borders(self, borders: Borders | None) -> None:
        self.borders = borders

    # ---- Merging ----

    def merge_cells(self, row: int, col: int, cols: int = 1, rows: int = 1) -> TableCell:
        """Merge a block of cells into the cell at (row, col).

        The anchor cell gets the grid span and a vertical merge restart;
        cells to its right in the same rows are flagged as continuations,
        and the anchors of the rows below continue the vertical merge.

        Raises:
            ValidationError: If cols or rows is less than 1, or the block
                does not fit in the table
            NotFoundError: If (row, col) is not a cell
        """
        op = "Table.merge_cells"
        anchor = self.cell(row, col)
        if cols < 1 or col + cols > self._cols:
            raise ValidationError(op, "cols", cols, "merge block must fit within the table columns")
        if rows < 1 or row + rows > len(self._rows):
            raise ValidationError(op, "rows", rows, "merge block must fit within the table rows")

        anchor.merge(cols, rows)
        for r in range(row, row + rows):
            cells = self._rows[r]._cells
            if r > row:
                cells[col].grid_span = cols
                cells[col].v_merge = VerticalMerge.CONTINUE
            for c in range(col + 1, col + cols):
                cells[c].h_merge_continuation = True

        logger.debug(f"Merged {rows}x{cols} cells at ({row}, {col}) in {self.id}")
        return anchor


def new_table(context: PartContext, rows: int, cols: int, op: str = "new_table") -> Table:
    """Create a rows x cols table after checking the dimensions."""
    validate_table_shape(op, rows, cols)
    return Table(context.ids.next_table_id(), context, rows, cols)
