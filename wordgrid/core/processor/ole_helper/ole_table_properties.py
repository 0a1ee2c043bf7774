# wordgrid/core/processor/ole_helper/ole_table_properties.py
"""
OLE Table Properties Parser

Parses the row definition carried by sprmTDefTable in the TAPX of a
table-row-terminating paragraph.

MS-DOC Specification Reference:
- sprmTDefTable (0xD608): Defines the cells of one row
  - cb (2 bytes): size of the rest of the operand + 1
  - itcMac (1 byte): Number of cells
  - rgdxaCenter[itcMac+1] (int16): Cell boundaries in twips
  - rgTc80[itcMac]: Cell properties (TC80, 20 bytes each)

- TC80 structure:
  - tcgrf (2 bytes): Cell flags
    - bit 5 (0x20): fVertMerge - cell is part of vertical merge
    - bit 6 (0x40): fVertRestart - cell starts vertical merge
  - wWidth (2 bytes): Preferred width
  - brcTop/brcLeft/brcBottom/brcRight (4 bytes each)

Cell widths are taken from the rgdxaCenter differences, which Word keeps in
sync with the rendered layout; wWidth is only a preference.
"""
import logging
import struct
from dataclasses import dataclass, field
from typing import List, Optional

from wordgrid.core.functions.document_adapter import MergeState

logger = logging.getLogger("document-processor")

TC_SIZE = 20  # Size of TC80 structure in bytes


@dataclass
class TCProperties:
    """Table Cell Properties from TC80 structure."""

    col_index: int

    # Vertical merge flags
    f_vert_restart: bool = False  # Starts vertical merge
    f_vert_merge: bool = False    # Part of vertical merge

    @classmethod
    def from_bytes(cls, data: bytes, col_index: int) -> "TCProperties":
        """Parse TC80 structure from bytes.

        Args:
            data: TC80 bytes (at least tcgrf)
            col_index: Column index

        Returns:
            TCProperties instance
        """
        if len(data) < 2:
            return cls(col_index=col_index)

        tcgrf = struct.unpack_from('<H', data, 0)[0]

        return cls(
            col_index=col_index,
            f_vert_merge=(tcgrf >> 5) & 1 == 1,
            f_vert_restart=(tcgrf >> 6) & 1 == 1,
        )

    def is_merged_vertically(self) -> bool:
        """Check if cell is merged with cell above."""
        return self.f_vert_merge and not self.f_vert_restart

    def starts_vertical_merge(self) -> bool:
        """Check if cell starts a vertical merge."""
        return self.f_vert_restart

    @property
    def merge_state(self) -> MergeState:
        if self.starts_vertical_merge():
            return MergeState.RESTART
        if self.is_merged_vertically():
            return MergeState.CONTINUE
        return MergeState.NONE


@dataclass
class RowDefinition:
    """Table row definition from sprmTDefTable."""

    row_index: int
    col_count: int
    col_boundaries: List[int] = field(default_factory=list)  # twips
    col_widths: List[int] = field(default_factory=list)  # twips
    cells: List[TCProperties] = field(default_factory=list)

    def cell_width(self, col_index: int) -> Optional[int]:
        if col_index < len(self.col_widths):
            return self.col_widths[col_index]
        return None

    def cell_merge_state(self, col_index: int) -> MergeState:
        if col_index < len(self.cells):
            return self.cells[col_index].merge_state
        return MergeState.NONE


def parse_tdef_table_operand(operand: bytes, row_index: int = 0) -> Optional[RowDefinition]:
    """Parse the operand of sprmTDefTable (the bytes after its cb field).

    Args:
        operand: itcMac, rgdxaCenter and rgTc80
        row_index: Row index to assign

    Returns:
        RowDefinition or None if the operand is unusable
    """
    if len(operand) < 1:
        return None

    itc_mac = operand[0]
    if itc_mac < 1:
        logger.debug(f"sprmTDefTable with {itc_mac} cells at row {row_index}")
        return None

    boundary_end = 1 + (itc_mac + 1) * 2
    if boundary_end > len(operand):
        logger.debug(f"sprmTDefTable truncated in rgdxaCenter at row {row_index}")
        return None

    col_boundaries = list(struct.unpack_from(f'<{itc_mac + 1}h', operand, 1))
    col_widths = [
        col_boundaries[i + 1] - col_boundaries[i]
        for i in range(itc_mac)
    ]

    cells = []
    for i in range(itc_mac):
        tc_offset = boundary_end + i * TC_SIZE
        if tc_offset + TC_SIZE <= len(operand):
            cells.append(TCProperties.from_bytes(operand[tc_offset:tc_offset + TC_SIZE], i))
        else:
            # rgTc80 may be shorter than itcMac; missing cells use defaults
            remaining = len(operand) - tc_offset
            if remaining >= 2:
                cells.append(TCProperties.from_bytes(operand[tc_offset:], i))
            else:
                cells.append(TCProperties(col_index=i))

    return RowDefinition(
        row_index=row_index,
        col_count=itc_mac,
        col_boundaries=col_boundaries,
        col_widths=col_widths,
        cells=cells,
    )


__all__ = [
    'TC_SIZE',
    'TCProperties',
    'RowDefinition',
    'parse_tdef_table_operand',
]
