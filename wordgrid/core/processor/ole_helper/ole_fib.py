# wordgrid/core/processor/ole_helper/ole_fib.py
"""
OLE File Information Block (FIB) Parser

Reads the fields of the WordDocument stream header that are needed to locate
the main-document text and the paragraph property pages.

MS-DOC Specification Reference:
- FibBase (32 bytes): wIdent (0xA5EC), flags at 0x0A
  - fEncrypted (0x0100), fWhichTblStm (0x0200)
- csw + fibRgW (2*csw bytes)
- cslw + fibRgLw (4*cslw bytes): ccpText is the 4th entry
- cbRgFcLcb + fibRgFcLcbBlob (8*cbRgFcLcb bytes): (fc, lcb) pairs
  - index 13: fcPlcfBtePapx / lcbPlcfBtePapx
  - index 33: fcClx / lcbClx

The variable-length arrays are walked using their declared counts, so FIBs
written by any Word version from 97 onward are accepted.
"""
import logging
import struct
from dataclasses import dataclass

logger = logging.getLogger("document-processor")

WORD_IDENT = 0xA5EC

FIB_FLAG_ENCRYPTED = 0x0100
FIB_FLAG_WHICH_TABLE_STREAM = 0x0200

FIB_BASE_SIZE = 0x20

# Indices into fibRgLw / fibRgFcLcb
RGLW_CCP_TEXT = 3
FCLCB_PLCF_BTE_PAPX = 13
FCLCB_CLX = 33


class OLEFormatError(ValueError):
    """Raised when an OLE Word document cannot be decoded."""


@dataclass
class FileInformationBlock:
    """Subset of the FIB used for text and table extraction."""

    w_ident: int
    flags: int
    ccp_text: int
    fc_clx: int
    lcb_clx: int
    fc_plcf_bte_papx: int
    lcb_plcf_bte_papx: int

    @property
    def is_encrypted(self) -> bool:
        return bool(self.flags & FIB_FLAG_ENCRYPTED)

    @property
    def table_stream_name(self) -> str:
        """Name of the table stream ("1Table" or "0Table")."""
        return "1Table" if self.flags & FIB_FLAG_WHICH_TABLE_STREAM else "0Table"

    @classmethod
    def from_bytes(cls, data: bytes) -> "FileInformationBlock":
        """Parse the FIB at the start of a WordDocument stream.

        Args:
            data: WordDocument stream bytes

        Returns:
            FileInformationBlock instance

        Raises:
            OLEFormatError: Stream too short or not a Word binary document
        """
        if len(data) < FIB_BASE_SIZE + 2:
            raise OLEFormatError("WordDocument stream too short for a FIB")

        w_ident = struct.unpack_from('<H', data, 0x00)[0]
        if w_ident != WORD_IDENT:
            raise OLEFormatError(f"Invalid FIB identifier: {hex(w_ident)}")

        flags = struct.unpack_from('<H', data, 0x0A)[0]

        pos = FIB_BASE_SIZE
        csw = _read_u16(data, pos)
        pos += 2 + csw * 2

        cslw = _read_u16(data, pos)
        rglw_start = pos + 2
        if cslw <= RGLW_CCP_TEXT:
            raise OLEFormatError(f"FIB fibRgLw too short: {cslw} entries")
        ccp_text = _read_i32(data, rglw_start + RGLW_CCP_TEXT * 4)
        pos = rglw_start + cslw * 4

        cb_rg_fc_lcb = _read_u16(data, pos)
        blob_start = pos + 2
        if cb_rg_fc_lcb <= FCLCB_CLX:
            raise OLEFormatError(f"FIB fibRgFcLcb too short: {cb_rg_fc_lcb} pairs")

        fc_papx, lcb_papx = _read_fc_lcb(data, blob_start, FCLCB_PLCF_BTE_PAPX)
        fc_clx, lcb_clx = _read_fc_lcb(data, blob_start, FCLCB_CLX)

        fib = cls(
            w_ident=w_ident,
            flags=flags,
            ccp_text=max(ccp_text, 0),
            fc_clx=fc_clx,
            lcb_clx=lcb_clx,
            fc_plcf_bte_papx=fc_papx,
            lcb_plcf_bte_papx=lcb_papx,
        )
        logger.debug(
            f"FIB: ccpText={fib.ccp_text}, clx={fc_clx}/{lcb_clx}, "
            f"bte_papx={fc_papx}/{lcb_papx}, table={fib.table_stream_name}"
        )
        return fib


def _read_u16(data: bytes, pos: int) -> int:
    if pos + 2 > len(data):
        raise OLEFormatError(f"FIB truncated at offset {hex(pos)}")
    return struct.unpack_from('<H', data, pos)[0]


def _read_i32(data: bytes, pos: int) -> int:
    if pos + 4 > len(data):
        raise OLEFormatError(f"FIB truncated at offset {hex(pos)}")
    return struct.unpack_from('<i', data, pos)[0]


def _read_fc_lcb(data: bytes, blob_start: int, index: int):
    pos = blob_start + index * 8
    if pos + 8 > len(data):
        raise OLEFormatError(f"FIB truncated at offset {hex(pos)}")
    return struct.unpack_from('<II', data, pos)


__all__ = [
    'OLEFormatError',
    'FileInformationBlock',
    'WORD_IDENT',
]
