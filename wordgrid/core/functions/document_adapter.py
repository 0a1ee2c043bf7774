# wordgrid/core/functions/document_adapter.py
"""
Document Adapter - Abstract Interface for Row/Cell Enumeration

Provides the format-independent view of a word-processor document that the
geometry, grid and text passes work on. Format-specific implementations live
in the respective helper packages (docx_helper, ole_helper).

Module Components:
- MergeState: Vertical merge marker of a raw cell
- RawRowCell: One source cell as declared by the document
- BodyElement / BodyElementType: Ordered body walk for text assembly
- BaseTableSource: Abstract row/cell enumerator for one table
- BaseDocumentAdapter: Abstract document-level adapter
- InMemoryTableSource / InMemoryDocumentAdapter: Adapters over plain lists

Usage Example:
    from wordgrid.core.functions.document_adapter import (
        BaseTableSource,
        MergeState,
        RawRowCell,
    )

    class MyTableSource(BaseTableSource):
        def num_rows(self):
            ...
        def row_cells(self, row_index):
            ...
        def row_height(self, row_index):
            ...
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, List, Optional, Sequence


class MergeState(Enum):
    """Vertical merge state of a source cell."""
    NONE = "none"
    RESTART = "restart"      # Anchor of a vertically merged group
    CONTINUE = "continue"    # Placeholder absorbed into the anchor above


@dataclass
class RawRowCell:
    """A cell as declared by the source document, before geometry.

    Attributes:
        width: Declared width (may be None, zero or negative)
        merge_state: Vertical merge marker
        text: Raw cell text
        grid_span: Number of grid columns the cell covers (OOXML gridSpan)
    """
    width: Optional[float] = None
    merge_state: MergeState = MergeState.NONE
    text: str = ""
    grid_span: int = 1

    @property
    def nominal_width(self) -> float:
        """Declared width used for merge matching (absolute, 0 when absent)."""
        if not self.width:
            return 0.0
        return abs(self.width)


class BodyElementType(Enum):
    """Kind of top-level body element."""
    PARAGRAPH = "paragraph"
    TABLE = "table"


@dataclass
class BodyElement:
    """One element of the ordered body walk.

    Attributes:
        element_type: Paragraph or table
        text: Raw paragraph text (empty for table elements)
        in_table: Whether the paragraph reports table membership (legacy format)
        table_level: Table nesting depth reported by the paragraph (legacy format)
    """
    element_type: BodyElementType
    text: str = ""
    in_table: bool = False
    table_level: int = 0

    @property
    def is_table(self) -> bool:
        return self.element_type is BodyElementType.TABLE


class BaseTableSource(ABC):
    """Abstract row/cell enumerator for one source table.

    Implementation Guidelines:
        - row_cells() returns the cells of one row in column order
        - row_height() returns the explicit row height, or None when absent
        - grid_column_widths() returns declared grid widths, or None when the
          format (or this table) has none
    """

    @abstractmethod
    def num_rows(self) -> int:
        """Number of rows in the table."""
        pass

    @abstractmethod
    def row_cells(self, row_index: int) -> List[RawRowCell]:
        """Cells of the given row, in column order."""
        pass

    @abstractmethod
    def row_height(self, row_index: int) -> Optional[float]:
        """Explicit height of the given row, or None."""
        pass

    def grid_column_widths(self) -> Optional[List[float]]:
        """Declared column-grid widths, or None when unavailable."""
        return None

    def raw_text(self) -> str:
        """All cell text of the table in reading order."""
        parts = []
        for row_index in range(self.num_rows()):
            for cell in self.row_cells(row_index):
                parts.append(cell.text)
        return "".join(parts)


class BaseDocumentAdapter(ABC):
    """Abstract document-level adapter.

    Exposes the tables of a document (for geometry) and an ordered body walk
    (for text assembly). The core passes depend only on this interface.
    """

    format_name: str = ""

    @abstractmethod
    def iter_tables(self) -> Iterator[BaseTableSource]:
        """Yield top-level tables in document order."""
        pass

    @abstractmethod
    def iter_body_elements(self) -> Iterator[BodyElement]:
        """Yield body elements in source order."""
        pass

    def supports_format(self, format_type: str) -> bool:
        """Check if this adapter handles the given format identifier."""
        return format_type.lower() == self.format_name


class InMemoryTableSource(BaseTableSource):
    """Table source over already-decoded rows.

    Args:
        rows: Rows of RawRowCell
        row_heights: Explicit height per row (None entries allowed)
        grid_widths: Optional column-grid widths
    """

    def __init__(
        self,
        rows: Sequence[Sequence[RawRowCell]],
        row_heights: Optional[Sequence[Optional[float]]] = None,
        grid_widths: Optional[Sequence[float]] = None,
    ):
        self._rows = [list(row) for row in rows]
        self._row_heights = list(row_heights) if row_heights is not None else []
        self._grid_widths = list(grid_widths) if grid_widths is not None else None

    def num_rows(self) -> int:
        return len(self._rows)

    def row_cells(self, row_index: int) -> List[RawRowCell]:
        return self._rows[row_index]

    def row_height(self, row_index: int) -> Optional[float]:
        if row_index < len(self._row_heights):
            return self._row_heights[row_index]
        return None

    def grid_column_widths(self) -> Optional[List[float]]:
        return self._grid_widths


@dataclass
class InMemoryDocumentAdapter(BaseDocumentAdapter):
    """Document adapter over already-decoded tables and body elements."""
    tables: List[BaseTableSource] = field(default_factory=list)
    body_elements: List[BodyElement] = field(default_factory=list)
    format_name: str = "memory"

    def iter_tables(self) -> Iterator[BaseTableSource]:
        return iter(self.tables)

    def iter_body_elements(self) -> Iterator[BodyElement]:
        return iter(self.body_elements)


__all__ = [
    "MergeState",
    "RawRowCell",
    "BodyElementType",
    "BodyElement",
    "BaseTableSource",
    "BaseDocumentAdapter",
    "InMemoryTableSource",
    "InMemoryDocumentAdapter",
]
