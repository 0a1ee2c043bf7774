# wordgrid/core/processor/ole_helper/ole_paragraph.py
"""
OLE Paragraph Properties

Resolves the paragraph properties (PAPX) of a paragraph from the formatted
disk pages (FKP) of the WordDocument stream, and decodes the table-related
sprms they carry.

MS-DOC Specification Reference:
- PlcBtePapx (table stream): aFC[n+1] (uint32), aPnBtePapx[n] (uint32, low
  22 bits = page number). Page pn lives at pn*512 in the WordDocument stream.
- PapxFkp (512 bytes): rgfc[crun+1], rgbx[crun] (13 bytes each, first byte
  bOffset), crun at byte 511
- PapxInFkp at bOffset*2: cb (1 byte); grpprlInPapx of 2*cb-1 bytes, or when
  cb is 0 a second cb' byte and 2*cb' bytes. grpprlInPapx = istd (2 bytes) +
  grpprl.
- Sprm (2 bytes): spra (bits 13-15) selects the operand size

Table sprms:
- sprmPFInTable (0x2416), sprmPFTtp (0x2417): depth-1 membership / row end
- sprmPItap (0x6649): table depth
- sprmPFInnerTtp (0x244C): nested row end
- sprmTDefTable (0xD608), sprmTDyaRowHeight (0x9407): row definition / height
"""
import bisect
import logging
import struct
from dataclasses import dataclass
from typing import Dict, Iterator, List, Optional, Tuple

from wordgrid.core.processor.ole_helper.ole_table_properties import (
    RowDefinition,
    parse_tdef_table_operand,
)

logger = logging.getLogger("document-processor")

FKP_PAGE_SIZE = 512
BX_SIZE = 13
PN_MASK = 0x3FFFFF

# SPRM codes
SPRM_P_F_IN_TABLE = 0x2416
SPRM_P_F_TTP = 0x2417
SPRM_P_ITAP = 0x6649
SPRM_P_F_INNER_TTP = 0x244C
SPRM_P_CHG_TABS = 0xC615
SPRM_T_DEF_TABLE = 0xD608
SPRM_T_DEF_TABLE_10 = 0xD606
SPRM_T_DYA_ROW_HEIGHT = 0x9407

# Fixed operand size by spra; spra 6 is variable
SPRA_OPERAND_SIZES = {0: 1, 1: 1, 2: 2, 3: 4, 4: 2, 5: 2, 7: 3}


def sprm_operand_span(sprm: int, data: bytes, pos: int) -> Tuple[int, int]:
    """Locate the operand of the sprm whose operand region starts at pos.

    Returns:
        (operand start, operand length); the operand excludes any size prefix
    """
    spra = sprm >> 13
    if spra in SPRA_OPERAND_SIZES:
        return pos, SPRA_OPERAND_SIZES[spra]

    if sprm in (SPRM_T_DEF_TABLE, SPRM_T_DEF_TABLE_10):
        if pos + 2 > len(data):
            return pos, len(data) - pos
        cb = struct.unpack_from('<H', data, pos)[0]
        return pos + 2, max(cb - 1, 0)

    if pos >= len(data):
        return pos, 0
    cb = data[pos]

    if sprm == SPRM_P_CHG_TABS and cb == 255:
        # PChgTabsDelClose + PChgTabsAdd
        cursor = pos + 1
        if cursor < len(data):
            cursor += 1 + data[cursor] * 4
        if cursor < len(data):
            cursor += 1 + data[cursor] * 3
        return pos + 1, cursor - (pos + 1)

    return pos + 1, cb


def iter_sprms(grpprl: bytes) -> Iterator[Tuple[int, bytes]]:
    """Yield (sprm, operand) pairs of a grpprl, stopping at truncation."""
    pos = 0
    while pos + 2 <= len(grpprl):
        sprm = struct.unpack_from('<H', grpprl, pos)[0]
        start, length = sprm_operand_span(sprm, grpprl, pos + 2)
        end = start + length
        if end > len(grpprl):
            logger.debug(f"Truncated sprm {hex(sprm)} at grpprl offset {pos}")
            return
        yield sprm, grpprl[start:end]
        pos = end


@dataclass
class ParagraphProperties:
    """Table-related paragraph properties of one paragraph."""

    in_table: bool = False
    table_terminator: bool = False
    itap: Optional[int] = None
    inner_table_terminator: bool = False
    row_height: Optional[int] = None
    row_definition: Optional[RowDefinition] = None

    @property
    def table_depth(self) -> int:
        """Table nesting depth; 0 outside tables."""
        if self.itap is not None:
            return max(self.itap, 0)
        return 1 if self.in_table else 0

    @classmethod
    def from_grpprl(cls, grpprl: bytes) -> "ParagraphProperties":
        props = cls()
        for sprm, operand in iter_sprms(grpprl):
            if sprm == SPRM_P_F_IN_TABLE:
                props.in_table = operand[0] != 0
            elif sprm == SPRM_P_F_TTP:
                props.table_terminator = operand[0] != 0
            elif sprm == SPRM_P_ITAP:
                props.itap = struct.unpack('<i', operand)[0]
            elif sprm == SPRM_P_F_INNER_TTP:
                props.inner_table_terminator = operand[0] != 0
            elif sprm == SPRM_T_DYA_ROW_HEIGHT:
                props.row_height = struct.unpack('<h', operand)[0]
            elif sprm == SPRM_T_DEF_TABLE:
                props.row_definition = parse_tdef_table_operand(operand)
        return props


class PapxReader:
    """Looks up paragraph properties by stream offset (FC).

    Args:
        word_stream: WordDocument stream bytes (holds the FKP pages)
        plcf_bte_papx: PlcBtePapx bytes from the table stream
    """

    def __init__(self, word_stream: bytes, plcf_bte_papx: bytes):
        self._word_stream = word_stream
        self._fcs: List[int] = []
        self._pns: List[int] = []
        self._fkp_cache: Dict[int, Tuple[List[int], List[ParagraphProperties]]] = {}
        self._parse_bte(plcf_bte_papx)

    def _parse_bte(self, plc: bytes) -> None:
        if len(plc) < 4:
            return
        n = (len(plc) - 4) // 8
        self._fcs = list(struct.unpack_from(f'<{n + 1}I', plc, 0))
        self._pns = [pn & PN_MASK for pn in struct.unpack_from(f'<{n}I', plc, (n + 1) * 4)]

    def properties_at(self, fc: int) -> ParagraphProperties:
        """Properties of the paragraph containing stream offset fc.

        Offsets outside every FKP yield default (non-table) properties.
        """
        index = bisect.bisect_right(self._fcs, fc) - 1
        if fc < 0 or index < 0 or index >= len(self._pns):
            return ParagraphProperties()

        rgfc, runs = self._load_fkp(self._pns[index])
        run = bisect.bisect_right(rgfc, fc) - 1
        if run < 0 or run >= len(runs):
            return ParagraphProperties()
        return runs[run]

    def _load_fkp(self, pn: int) -> Tuple[List[int], List[ParagraphProperties]]:
        if pn in self._fkp_cache:
            return self._fkp_cache[pn]

        start = pn * FKP_PAGE_SIZE
        page = self._word_stream[start:start + FKP_PAGE_SIZE]
        if len(page) < FKP_PAGE_SIZE:
            logger.warning(f"PAPX FKP page {pn} lies outside the WordDocument stream")
            parsed: Tuple[List[int], List[ParagraphProperties]] = ([], [])
            self._fkp_cache[pn] = parsed
            return parsed

        crun = page[FKP_PAGE_SIZE - 1]
        rgfc = list(struct.unpack_from(f'<{crun + 1}I', page, 0))
        bx_start = (crun + 1) * 4

        runs = []
        for i in range(crun):
            b_offset = page[bx_start + i * BX_SIZE]
            runs.append(_read_papx_in_fkp(page, b_offset * 2))

        parsed = (rgfc, runs)
        self._fkp_cache[pn] = parsed
        return parsed


def _read_papx_in_fkp(page: bytes, offset: int) -> ParagraphProperties:
    if offset == 0 or offset >= len(page) - 1:
        return ParagraphProperties()

    cb = page[offset]
    if cb != 0:
        start = offset + 1
        length = 2 * cb - 1
    else:
        start = offset + 2
        length = 2 * page[offset + 1]

    data = page[start:start + length]
    if len(data) < 2:
        return ParagraphProperties()

    # Skip istd
    return ParagraphProperties.from_grpprl(data[2:])


__all__ = [
    'SPRM_P_F_IN_TABLE',
    'SPRM_P_F_TTP',
    'SPRM_P_ITAP',
    'SPRM_P_F_INNER_TTP',
    'SPRM_T_DEF_TABLE',
    'SPRM_T_DYA_ROW_HEIGHT',
    'sprm_operand_span',
    'iter_sprms',
    'ParagraphProperties',
    'PapxReader',
]
