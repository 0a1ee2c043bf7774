# wordgrid/core/functions/grid_index.py
"""
Grid Index - Logical row/column coordinates from absolute geometry

Second pass over a finished Table: every distinct top/bottom edge becomes a
row boundary and every distinct left/right edge a column boundary. Each cell
is located in the sorted boundary lists with a tolerance-based binary search,
which absorbs the rounding noise of unit conversions.

Known limitation: the search assumes neighbouring boundaries are more than
twice the tolerance apart. Two distinct edges closer than that may resolve
to either index.

Usage Example:
    from wordgrid.core.functions.grid_index import GridIndexAssigner

    GridIndexAssigner(config).assign(table)
    print(table.cells[0].row, table.cells[0].colspan)
"""
import logging
from typing import List, Optional, Sequence, Tuple

from wordgrid.core.functions.content_model import Cell, Table
from wordgrid.core.functions.extraction_config import (
    DEFAULT_EXTRACTION_CONFIG,
    ExtractionConfig,
)

logger = logging.getLogger("document-processor")

NOT_FOUND = -1


def tolerant_binary_search(boundaries: Sequence[float], target: float, tolerance: float) -> int:
    """Binary search that treats values closer than tolerance as equal.

    Args:
        boundaries: Ascending boundary coordinates
        target: Coordinate to locate
        tolerance: Match distance (exclusive)

    Returns:
        Index (0-based) of the matching boundary, or NOT_FOUND
    """
    start = 0
    end = len(boundaries) - 1

    while start <= end:
        mid = (start + end) // 2
        if abs(boundaries[mid] - target) < tolerance:
            return mid
        if boundaries[mid] > target:
            end = mid - 1
        else:
            start = mid + 1

    return NOT_FOUND


def collect_boundaries(cells: Sequence[Cell]) -> Tuple[List[float], List[float]]:
    """Sorted, de-duplicated row and column boundaries of a cell list.

    Returns:
        (row_boundaries, col_boundaries)
    """
    row_edges = set()
    col_edges = set()
    for cell in cells:
        row_edges.add(cell.y)
        row_edges.add(cell.bottom)
        col_edges.add(cell.x)
        col_edges.add(cell.right)
    return sorted(row_edges), sorted(col_edges)


class GridIndexAssigner:
    """Assigns row, col, rowspan and colspan to every cell of a table."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self._config = config or DEFAULT_EXTRACTION_CONFIG

    def assign(self, table: Table) -> Table:
        """Fill grid coordinates in place.

        Spans are clamped to at least 1. A missing top or left index is
        reported and replaced with 0.

        Returns:
            The same table, for chaining
        """
        row_boundaries, col_boundaries = collect_boundaries(table.cells)
        tolerance = self._config.grid_tolerance

        for cell in table.cells:
            top = tolerant_binary_search(row_boundaries, cell.y, tolerance)
            bottom = tolerant_binary_search(row_boundaries, cell.bottom, tolerance)
            left = tolerant_binary_search(col_boundaries, cell.x, tolerance)
            right = tolerant_binary_search(col_boundaries, cell.right, tolerance)

            if NOT_FOUND in (top, bottom, left, right):
                logger.warning(
                    f"Grid boundary lookup failed for cell at ({cell.x}, {cell.y}) "
                    f"size {cell.width}x{cell.height}: top={top}, bottom={bottom}, "
                    f"left={left}, right={right}"
                )

            cell.row = max(top, 0)
            cell.col = max(left, 0)
            cell.rowspan = max(bottom - top, 1)
            cell.colspan = max(right - left, 1)

        return table


__all__ = [
    "NOT_FOUND",
    "tolerant_binary_search",
    "collect_boundaries",
    "GridIndexAssigner",
]
