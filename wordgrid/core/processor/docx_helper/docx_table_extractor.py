# wordgrid/core/processor/docx_helper/docx_table_extractor.py
"""
DOCX Table Extractor - OOXML table rows as raw cells

Exposes one w:tbl element through the BaseTableSource interface.

DOCX Table Structure (OOXML):
- w:tblGrid/w:gridCol/@w:w: grid column widths (twips, optional)
- w:tr/w:trPr/w:trHeight/@w:val: explicit row height (twips, optional)
- w:tc/w:tcPr/w:tcW/@w:w: cell width
- w:tc/w:tcPr/w:gridSpan/@w:val: number of grid columns covered
- w:tc/w:tcPr/w:vMerge val="restart": vertical merge anchor
- w:tc/w:tcPr/w:vMerge (no val, or val="continue"): merged-away cell

Usage:
    from wordgrid.core.processor.docx_helper.docx_table_extractor import (
        DOCXTableSource,
    )

    source = DOCXTableSource(table_elem)
    table = TableGeometryBuilder(config).build(source)
"""
import logging
from typing import List, Optional

from wordgrid.core.functions.document_adapter import (
    BaseTableSource,
    MergeState,
    RawRowCell,
)
from wordgrid.core.processor.docx_helper.docx_constants import (
    ATTR_VAL,
    ATTR_W,
    NAMESPACES,
    TAG_CELL,
    TAG_SDT,
    VMERGE_CONTINUE,
    VMERGE_RESTART,
)
from wordgrid.core.processor.docx_helper.docx_paragraph import extract_cell_text

logger = logging.getLogger("document-processor")


class DOCXTableSource(BaseTableSource):
    """Row/cell enumerator over a w:tbl element.

    Rows are parsed once on first access and cached, so repeated row
    lookups during merge resolution do not re-walk the XML.
    """

    def __init__(self, table_elem):
        self._table_elem = table_elem
        self._row_elems = table_elem.findall('w:tr', NAMESPACES)
        self._rows: Optional[List[List[RawRowCell]]] = None

    def num_rows(self) -> int:
        return len(self._row_elems)

    def row_cells(self, row_index: int) -> List[RawRowCell]:
        if self._rows is None:
            self._rows = [
                [read_raw_cell(tc) for tc in iter_row_cells(tr)]
                for tr in self._row_elems
            ]
        return self._rows[row_index]

    def row_height(self, row_index: int) -> Optional[float]:
        tr = self._row_elems[row_index]
        tr_height = tr.find('w:trPr/w:trHeight', NAMESPACES)
        if tr_height is None:
            return None
        return _parse_int(tr_height.get(ATTR_VAL))

    def grid_column_widths(self) -> Optional[List[float]]:
        tbl_grid = self._table_elem.find('w:tblGrid', NAMESPACES)
        if tbl_grid is None:
            return None

        grid_cols = tbl_grid.findall('w:gridCol', NAMESPACES)
        if not grid_cols:
            return None

        widths = []
        for col in grid_cols:
            width = _parse_int(col.get(ATTR_W))
            widths.append(width if width is not None else 0)
        return widths


def iter_row_cells(row_elem):
    """Yield the w:tc elements of a row, unwrapping content controls."""
    for child in row_elem:
        if child.tag == TAG_CELL:
            yield child
        elif child.tag == TAG_SDT:
            content = child.find('w:sdtContent', NAMESPACES)
            if content is not None:
                yield from content.findall('w:tc', NAMESPACES)


def read_raw_cell(cell_elem) -> RawRowCell:
    """Read width, span, merge state and text of one w:tc element."""
    width = None
    grid_span = 1
    merge_state = MergeState.NONE

    tcPr = cell_elem.find('w:tcPr', NAMESPACES)
    if tcPr is not None:
        tcW = tcPr.find('w:tcW', NAMESPACES)
        if tcW is not None:
            width = _parse_int(tcW.get(ATTR_W))

        gs = tcPr.find('w:gridSpan', NAMESPACES)
        if gs is not None:
            span = _parse_int(gs.get(ATTR_VAL))
            if span is not None and span > 0:
                grid_span = span

        merge_state = get_merge_state(tcPr)

    return RawRowCell(
        width=width,
        merge_state=merge_state,
        text=extract_cell_text(cell_elem),
        grid_span=grid_span,
    )


def get_merge_state(tcPr) -> MergeState:
    """Classify w:vMerge of a cell property element."""
    vMerge = tcPr.find('w:vMerge', NAMESPACES)
    if vMerge is None:
        return MergeState.NONE

    val = vMerge.get(ATTR_VAL)
    if val is None or val == VMERGE_CONTINUE:
        return MergeState.CONTINUE
    if val == VMERGE_RESTART:
        return MergeState.RESTART
    return MergeState.NONE


def _parse_int(value) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(value)
    except (ValueError, TypeError):
        try:
            return int(float(value))
        except (ValueError, TypeError):
            logger.debug(f"Unparseable OOXML measurement: {value!r}")
            return None


__all__ = [
    'DOCXTableSource',
    'iter_row_cells',
    'read_raw_cell',
    'get_merge_state',
]
