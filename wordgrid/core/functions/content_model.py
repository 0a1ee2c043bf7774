# wordgrid/core/functions/content_model.py
"""
Content Model - Output data structures

Normalized result of a document extraction: plain text plus positioned tables.

Module Components:
- Cell: One emitted table cell with absolute geometry and grid coordinates
- Table: Ordered cells of one source table plus its bounding box
- DocumentContent: Final extraction result (text + tables)

Usage Example:
    from wordgrid.core.functions.content_model import DocumentContent

    content = extractor.extract("report.docx", "docx")
    for table in content.tables:
        for cell in table.cells:
            print(cell.row, cell.col, cell.text)
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass
class Cell:
    """A positioned table cell.

    Attributes:
        x: Left edge relative to the table origin
        y: Top edge relative to the table origin
        width: Horizontal extent
        height: Vertical extent (includes absorbed continuation rows)
        text: Raw cell text
        font_size: Fixed font size
        row: Grid row index (0-based), set by the grid pass
        col: Grid column index (0-based), set by the grid pass
        rowspan: Number of grid rows covered (>= 1)
        colspan: Number of grid columns covered (>= 1)
    """
    x: float
    y: float
    width: float
    height: float
    text: str = ""
    font_size: float = 12.0
    row: int = 0
    col: int = 0
    rowspan: int = 1
    colspan: int = 1

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
            "text": self.text,
            "fontSize": self.font_size,
            "row": self.row,
            "col": self.col,
            "rowspan": self.rowspan,
            "colspan": self.colspan,
        }


@dataclass
class Table:
    """Cells of one source table and its bounding box."""
    cells: List[Cell] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0

    @property
    def num_rows(self) -> int:
        """Number of grid rows (valid after grid assignment)."""
        return max((c.row + c.rowspan for c in self.cells), default=0)

    @property
    def num_cols(self) -> int:
        """Number of grid columns (valid after grid assignment)."""
        return max((c.col + c.colspan for c in self.cells), default=0)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "cells": [cell.to_dict() for cell in self.cells],
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True)
class DocumentContent:
    """Extraction result.

    Attributes:
        text: Paragraph text outside tables, one paragraph per line
        tables: Tables in document order
    """
    text: str = ""
    tables: List[Table] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "text": self.text,
            "tables": [table.to_dict() for table in self.tables],
        }


__all__ = [
    "Cell",
    "Table",
    "DocumentContent",
]
