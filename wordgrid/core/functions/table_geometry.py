# wordgrid/core/functions/table_geometry.py
"""
Table Geometry - Absolute cell positions from row/cell enumeration

Walks the rows of one source table top to bottom and turns declared widths,
row heights and vertical merge markers into positioned Cell objects.

Algorithm:
1. Resolve every row height (explicit > 0, default when absent/zero,
   absolute value when negative)
2. Per row, advance x by each cell's resolved width (absorbed cells too)
3. RESTART cells grow downward through matching CONTINUE cells below
4. The last row fixes the table bounding box

Width resolution order:
- Sum of grid-column widths over the cell's gridSpan (when a grid exists)
- The cell's own width attribute
- ExtractionConfig.default_cell_width

Usage Example:
    from wordgrid.core.functions.table_geometry import TableGeometryBuilder

    builder = TableGeometryBuilder(config)
    table = builder.build(table_source)
"""
import logging
from typing import List, Optional, Sequence, Tuple

from wordgrid.core.functions.content_model import Cell, Table
from wordgrid.core.functions.document_adapter import (
    BaseTableSource,
    MergeState,
    RawRowCell,
)
from wordgrid.core.functions.extraction_config import (
    DEFAULT_EXTRACTION_CONFIG,
    ExtractionConfig,
)

logger = logging.getLogger("document-processor")


def accumulate_merged_height(
    rows: Sequence[Sequence[RawRowCell]],
    row_heights: Sequence[float],
    anchor_row: int,
    anchor_width: float,
    anchor_offset: float,
) -> float:
    """Height added to a RESTART anchor by the CONTINUE cells below it.

    Each following row must hold a CONTINUE cell whose nominal width and
    nominal left offset equal the anchor's exactly. The walk stops at the
    first row without such a cell, so it never exceeds the table's row count.

    Args:
        rows: All rows of the table
        row_heights: Resolved height of every row
        anchor_row: Row index of the RESTART cell
        anchor_width: Nominal width of the RESTART cell
        anchor_offset: Sum of nominal widths left of the RESTART cell

    Returns:
        Sum of the absorbed rows' heights (0 when nothing continues the anchor)
    """
    total = 0.0
    row_index = anchor_row + 1

    while row_index < len(rows):
        offset = 0.0
        matched = False
        for cell in rows[row_index]:
            width = cell.nominal_width
            if (
                cell.merge_state is MergeState.CONTINUE
                and width == anchor_width
                and offset == anchor_offset
            ):
                matched = True
                break
            offset += width

        if not matched:
            break

        total += row_heights[row_index]
        row_index += 1

    return total


class TableGeometryBuilder:
    """Builds positioned cells and the bounding box for one table.

    The builder keeps no per-table state between build() calls, so one
    instance can serve every table of a document.
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self._config = config or DEFAULT_EXTRACTION_CONFIG

    @property
    def config(self) -> ExtractionConfig:
        return self._config

    def build(self, source: BaseTableSource) -> Table:
        """Compute absolute geometry for every non-absorbed cell.

        Args:
            source: Row/cell enumerator of one table

        Returns:
            Table with cells in row-major order and its width/height set.
            Grid fields (row, col, spans) are left for GridIndexAssigner.
        """
        num_rows = source.num_rows()
        rows = [list(source.row_cells(i)) for i in range(num_rows)]
        row_heights = [self.resolve_row_height(source.row_height(i), i) for i in range(num_rows)]
        grid_widths = self._load_grid_widths(source)

        table = Table()
        x = 0.0
        y = 0.0

        for row_index, row_cells in enumerate(rows):
            row_height = row_heights[row_index]
            x = 0.0
            nominal_offset = 0.0
            grid_cursor = 0

            for col_index, raw_cell in enumerate(row_cells):
                width, grid_cursor = self._resolve_cell_width(
                    raw_cell, grid_widths, grid_cursor, row_index, col_index
                )

                if raw_cell.merge_state is not MergeState.CONTINUE:
                    height = row_height
                    if raw_cell.merge_state is MergeState.RESTART:
                        height += accumulate_merged_height(
                            rows,
                            row_heights,
                            row_index,
                            raw_cell.nominal_width,
                            nominal_offset,
                        )
                    table.cells.append(Cell(
                        x=x,
                        y=y,
                        width=width,
                        height=height,
                        text=raw_cell.text,
                        font_size=self._config.font_size,
                    ))

                x += width
                nominal_offset += raw_cell.nominal_width

            y += row_height

        table.width = x
        table.height = y
        logger.debug(
            f"Built table geometry: {num_rows} rows, {len(table.cells)} cells, "
            f"bbox={table.width}x{table.height}"
        )
        return table

    def resolve_row_height(self, raw_height: Optional[float], row_index: int = 0) -> float:
        """Row height in output units, with default and sign correction."""
        if raw_height is None or raw_height == 0:
            return self._config.default_row_height
        if raw_height < 0:
            logger.info(f"Negative row height {raw_height} at row {row_index}, using absolute value")
            raw_height = abs(raw_height)
        return raw_height / self._config.unit_divisor

    def _load_grid_widths(self, source: BaseTableSource) -> Optional[List[float]]:
        """Declared grid widths, or None (per-cell widths are used instead)."""
        try:
            grid_widths = source.grid_column_widths()
        except (ValueError, TypeError, AttributeError) as e:
            logger.info(f"Table grid could not be read, using cell widths: {e}")
            return None

        if not grid_widths:
            logger.info("Table has no column grid, using cell widths")
            return None
        return list(grid_widths)

    def _resolve_cell_width(
        self,
        raw_cell: RawRowCell,
        grid_widths: Optional[List[float]],
        grid_cursor: int,
        row_index: int,
        col_index: int,
    ) -> Tuple[float, int]:
        """Resolve one cell's width.

        Returns:
            (width in output units, grid cursor after this cell)
        """
        span = max(raw_cell.grid_span, 1)
        width = 0.0

        if grid_widths is not None:
            if grid_cursor + span <= len(grid_widths):
                width = sum(grid_widths[grid_cursor:grid_cursor + span])
            else:
                logger.info(
                    f"Cell ({row_index}, {col_index}) spans past the table grid "
                    f"({grid_cursor}+{span} > {len(grid_widths)}), using cell width"
                )
        next_cursor = grid_cursor + span

        if width <= 0 and raw_cell.width:
            width = raw_cell.width
            if width < 0:
                logger.info(f"Negative cell width {width} at ({row_index}, {col_index}), using absolute value")
                width = abs(width)

        if width <= 0:
            return self._config.default_cell_width, next_cursor

        return width / self._config.unit_divisor, next_cursor


__all__ = [
    "accumulate_merged_height",
    "TableGeometryBuilder",
]
