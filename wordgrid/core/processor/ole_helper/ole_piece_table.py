# wordgrid/core/processor/ole_helper/ole_piece_table.py
"""
OLE Piece Table

Maps character positions (CP) of the document text to byte offsets in the
WordDocument stream.

MS-DOC Specification Reference:
- Clx: zero or more Prc (clxt=0x01, cbGrpprl int16, GrpPrl) followed by one
  Pcdt (clxt=0x02, lcb uint32, PlcPcd)
- PlcPcd: aCP[n+1] (uint32), aPcd[n] (8 bytes each)
- Pcd: 2 bytes flags, fc (uint32, FcCompressed), prm (2 bytes)
  - bit 30 of fc set: 8-bit cp1252 text at (fc & 0x3FFFFFFF) / 2
  - otherwise: UTF-16LE text at fc

Piece property modifiers (prm) are not applied.
"""
import bisect
import logging
import struct
from dataclasses import dataclass, field
from typing import List

from wordgrid.core.processor.ole_helper.ole_fib import OLEFormatError

logger = logging.getLogger("document-processor")

CLXT_PRC = 0x01
CLXT_PCDT = 0x02

PCD_SIZE = 8
FC_COMPRESSED_FLAG = 0x40000000
FC_MASK = 0x3FFFFFFF

COMPRESSED_ENCODING = 'cp1252'


@dataclass
class Piece:
    """One contiguous run of text in the WordDocument stream."""

    cp_start: int
    cp_end: int
    byte_offset: int
    compressed: bool

    @property
    def char_size(self) -> int:
        return 1 if self.compressed else 2

    def fc_for_cp(self, cp: int) -> int:
        return self.byte_offset + (cp - self.cp_start) * self.char_size

    def decode(self, word_stream: bytes, cp_start: int, cp_end: int) -> str:
        """Decode the characters [cp_start, cp_end) of this piece.

        UTF-16 text is decoded per code unit, so the result always holds
        exactly one character per CP.
        """
        count = cp_end - cp_start
        if count <= 0:
            return ""

        start = self.fc_for_cp(cp_start)
        raw = word_stream[start:start + count * self.char_size]

        if self.compressed:
            return raw.decode(COMPRESSED_ENCODING, errors='replace')

        units = len(raw) // 2
        return ''.join(chr(u) for u in struct.unpack(f'<{units}H', raw[:units * 2]))


@dataclass
class PieceTable:
    """Ordered pieces of the document text."""

    pieces: List[Piece] = field(default_factory=list)
    _starts: List[int] = field(init=False, repr=False)

    def __post_init__(self):
        self._starts = [p.cp_start for p in self.pieces]

    @classmethod
    def from_clx(cls, clx: bytes) -> "PieceTable":
        """Parse a Clx structure.

        Raises:
            OLEFormatError: Unknown clxt or truncated data
        """
        pos = 0
        while pos < len(clx):
            clxt = clx[pos]
            if clxt == CLXT_PRC:
                if pos + 3 > len(clx):
                    raise OLEFormatError("Truncated Prc in Clx")
                cb = struct.unpack_from('<h', clx, pos + 1)[0]
                pos += 3 + max(cb, 0)
            elif clxt == CLXT_PCDT:
                if pos + 5 > len(clx):
                    raise OLEFormatError("Truncated Pcdt in Clx")
                lcb = struct.unpack_from('<I', clx, pos + 1)[0]
                return cls(pieces=_parse_plc_pcd(clx[pos + 5:pos + 5 + lcb]))
            else:
                raise OLEFormatError(f"Unexpected clxt {hex(clxt)} at Clx offset {pos}")

        raise OLEFormatError("Clx has no piece table")

    def find_piece(self, cp: int) -> int:
        """Index of the piece containing cp, or -1."""
        index = bisect.bisect_right(self._starts, cp) - 1
        if index >= 0 and cp < self.pieces[index].cp_end:
            return index
        return -1

    def fc_for_cp(self, cp: int) -> int:
        """Stream byte offset of the character at cp, or -1."""
        index = self.find_piece(cp)
        if index < 0:
            return -1
        return self.pieces[index].fc_for_cp(cp)

    def text(self, word_stream: bytes, cp_limit: int) -> str:
        """Text of the CP range [0, cp_limit), one character per CP."""
        parts = []
        for piece in self.pieces:
            if piece.cp_start >= cp_limit:
                break
            parts.append(piece.decode(word_stream, piece.cp_start, min(piece.cp_end, cp_limit)))
        return ''.join(parts)


def _parse_plc_pcd(plc: bytes) -> List[Piece]:
    if len(plc) < 4:
        raise OLEFormatError("PlcPcd too short")

    n = (len(plc) - 4) // (4 + PCD_SIZE)
    cps = struct.unpack_from(f'<{n + 1}I', plc, 0)
    pcd_start = (n + 1) * 4

    pieces = []
    for i in range(n):
        fc = struct.unpack_from('<I', plc, pcd_start + i * PCD_SIZE + 2)[0]
        compressed = bool(fc & FC_COMPRESSED_FLAG)
        if compressed:
            byte_offset = (fc & FC_MASK) // 2
        else:
            byte_offset = fc & FC_MASK
        pieces.append(Piece(
            cp_start=cps[i],
            cp_end=cps[i + 1],
            byte_offset=byte_offset,
            compressed=compressed,
        ))

    logger.debug(f"Piece table: {len(pieces)} pieces")
    return pieces


__all__ = [
    'Piece',
    'PieceTable',
]
