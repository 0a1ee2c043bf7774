"""Shared test fixtures: in-memory DOCX documents and legacy Word streams."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import io
import struct
from typing import List, Optional, Sequence, Tuple
from xml.sax.saxutils import escape

import pytest
from docx import Document
from docx.oxml import parse_xml
from docx.oxml.ns import nsdecls, qn

# ===========================================================================
# DOCX
# ===========================================================================


def cell_xml(text: str = "", width: Optional[int] = None, span: Optional[int] = None,
             vmerge: Optional[str] = None) -> str:
    """w:tc markup; vmerge is "restart", "continue" or "bare" (w:vMerge without val)."""
    props = []
    if width is not None:
        props.append(f'<w:tcW w:w="{width}" w:type="dxa"/>')
    if span is not None:
        props.append(f'<w:gridSpan w:val="{span}"/>')
    if vmerge == "restart":
        props.append('<w:vMerge w:val="restart"/>')
    elif vmerge == "continue":
        props.append('<w:vMerge w:val="continue"/>')
    elif vmerge == "bare":
        props.append('<w:vMerge/>')
    tc_pr = f"<w:tcPr>{''.join(props)}</w:tcPr>" if props else ""

    if text:
        paras = "".join(
            f'<w:p><w:r><w:t xml:space="preserve">{escape(line)}</w:t></w:r></w:p>'
            for line in text.split("\n")
        )
    else:
        paras = "<w:p/>"
    return f"<w:tc>{tc_pr}{paras}</w:tc>"


def row_xml(cells: Sequence[str], height: Optional[int] = None) -> str:
    tr_pr = f'<w:trPr><w:trHeight w:val="{height}"/></w:trPr>' if height is not None else ""
    return f"<w:tr>{tr_pr}{''.join(cells)}</w:tr>"


def table_xml(rows: Sequence[str], grid: Optional[Sequence[int]] = None) -> str:
    grid_xml = ""
    if grid is not None:
        cols = "".join(f'<w:gridCol w:w="{w}"/>' for w in grid)
        grid_xml = f"<w:tblGrid>{cols}</w:tblGrid>"
    return f"<w:tbl {nsdecls('w')}><w:tblPr/>{grid_xml}{''.join(rows)}</w:tbl>"


class DocxBuilder:
    """Builds a python-docx Document block by block, in order."""

    def __init__(self):
        self.document = Document()
        self._body = self.document.element.body

    def paragraph(self, text: str) -> "DocxBuilder":
        self.document.add_paragraph(text)
        return self

    def table(self, rows: Sequence[str], grid: Optional[Sequence[int]] = None) -> "DocxBuilder":
        self._append(parse_xml(table_xml(rows, grid)))
        return self

    def content_control(self, inner_xml: str) -> "DocxBuilder":
        self._append(parse_xml(
            f"<w:sdt {nsdecls('w')}><w:sdtPr/><w:sdtContent>{inner_xml}</w:sdtContent></w:sdt>"
        ))
        return self

    def to_bytes(self) -> bytes:
        buffer = io.BytesIO()
        self.document.save(buffer)
        return buffer.getvalue()

    def _append(self, elem) -> None:
        sect_pr = self._body.find(qn("w:sectPr"))
        if sect_pr is not None:
            sect_pr.addprevious(elem)
        else:
            self._body.append(elem)


@pytest.fixture
def docx_builder() -> DocxBuilder:
    return DocxBuilder()


# ===========================================================================
# Legacy binary (.doc) streams
# ===========================================================================


class Sprm:
    """Encoders for the paragraph/table sprms the reader understands."""

    @staticmethod
    def in_table() -> bytes:
        return struct.pack("<HB", 0x2416, 1)

    @staticmethod
    def ttp() -> bytes:
        return struct.pack("<HB", 0x2417, 1)

    @staticmethod
    def itap(depth: int) -> bytes:
        return struct.pack("<Hi", 0x6649, depth)

    @staticmethod
    def inner_cell() -> bytes:
        return struct.pack("<HB", 0x244B, 1)

    @staticmethod
    def inner_ttp() -> bytes:
        return struct.pack("<HB", 0x244C, 1)

    @staticmethod
    def row_height(height: int) -> bytes:
        return struct.pack("<Hh", 0x9407, height)

    @staticmethod
    def justification(value: int) -> bytes:
        # sprmPJc80, unrelated to tables
        return struct.pack("<HB", 0x2403, value)

    @staticmethod
    def tdef(boundaries: Sequence[int], tcgrfs: Optional[Sequence[int]] = None) -> bytes:
        count = len(boundaries) - 1
        tcgrfs = list(tcgrfs) if tcgrfs is not None else [0] * count
        body = bytes([count]) + struct.pack(f"<{count + 1}h", *boundaries)
        for tcgrf in tcgrfs:
            body += struct.pack("<HH", tcgrf, 0) + b"\x00" * 16
        return struct.pack("<HH", 0xD608, len(body) + 1) + body


# TC80.tcgrf vertical merge flags
TCGRF_VERT_RESTART = 0x60
TCGRF_VERT_CONTINUE = 0x20


class DocStreamBuilder:
    """Assembles a WordDocument stream and a 1Table stream.

    Layout: FIB in the first 0x400 bytes, text at 0x400, then one 512-byte
    PAPX FKP page per group of paragraphs. The table stream holds the Clx at
    offset 0 followed by PlcBtePapx.
    """

    TEXT_OFFSET = 0x400
    PAGE_SIZE = 512

    def __init__(self, compressed: bool = False):
        self.compressed = compressed
        self.flags = 0x0200  # fWhichTblStm -> 1Table
        self.split_at: Optional[int] = None
        self.with_prc = False
        self._paragraphs: List[Tuple[str, bytes]] = []

    def paragraph(self, text: str = "", *sprms: bytes, terminator: str = "\r") -> "DocStreamBuilder":
        self._paragraphs.append((text + terminator, b"".join(sprms)))
        return self

    def cell(self, text: str = "", *sprms: bytes) -> "DocStreamBuilder":
        return self.paragraph(text, Sprm.in_table(), *sprms, terminator="\x07")

    def row_end(self, boundaries: Sequence[int], tcgrfs: Optional[Sequence[int]] = None,
                height: Optional[int] = None) -> "DocStreamBuilder":
        sprms = [Sprm.in_table(), Sprm.ttp(), Sprm.tdef(boundaries, tcgrfs)]
        if height is not None:
            sprms.append(Sprm.row_height(height))
        return self.paragraph("", *sprms, terminator="\x07")

    def row(self, texts: Sequence[str], boundaries: Sequence[int],
            tcgrfs: Optional[Sequence[int]] = None, height: Optional[int] = None) -> "DocStreamBuilder":
        for text in texts:
            self.cell(text)
        return self.row_end(boundaries, tcgrfs, height)

    @property
    def char_size(self) -> int:
        return 1 if self.compressed else 2

    def build(self) -> Tuple[bytes, bytes]:
        text = "".join(t for t, _ in self._paragraphs)
        encoded = text.encode("cp1252") if self.compressed else text.encode("utf-16-le")
        cp_count = len(encoded) // self.char_size

        # Paragraph FC ranges
        ranges = []
        cp = 0
        for para_text, grpprl in self._paragraphs:
            start = self.TEXT_OFFSET + cp * self.char_size
            cp += len(para_text)
            ranges.append((start, self.TEXT_OFFSET + cp * self.char_size, grpprl))

        text_end = self.TEXT_OFFSET + len(encoded)
        first_pn = -(-text_end // self.PAGE_SIZE)
        pages = self._pack_fkps(ranges)

        word = bytearray(first_pn * self.PAGE_SIZE)
        word[self.TEXT_OFFSET:text_end] = encoded
        for page, _, _ in pages:
            word += page

        clx = self._clx(cp_count)
        bte = self._plcf_bte_papx(pages, first_pn)
        table = clx + bte

        self._write_fib(word, cp_count, fc_clx=0, lcb_clx=len(clx),
                        fc_bte=len(clx), lcb_bte=len(bte))
        return bytes(word), bytes(table)

    # -----------------------------------------------------------------------

    def _pack_fkps(self, ranges):
        """Greedy FKP packing; returns [(page bytes, first fc, last fc)]."""
        pages = []
        group = []
        for item in ranges:
            if group and not self._fits(group + [item]):
                pages.append(self._fkp(group))
                group = []
            group.append(item)
        if group:
            pages.append(self._fkp(group))
        return pages

    @staticmethod
    def _papx(grpprl: bytes) -> bytes:
        data = b"\x00\x00" + grpprl  # istd 0
        if len(data) % 2 == 1:
            return bytes([(len(data) + 1) // 2]) + data
        return bytes([0, len(data) // 2]) + data

    def _fits(self, group) -> bool:
        crun = len(group)
        used = 4 * (crun + 1) + 13 * crun + sum(len(self._papx(g)) + 1 for _, _, g in group)
        return used <= self.PAGE_SIZE - 1

    def _fkp(self, group):
        crun = len(group)
        page = bytearray(self.PAGE_SIZE)
        fcs = [group[0][0]] + [end for _, end, _ in group]
        struct.pack_into(f"<{crun + 1}I", page, 0, *fcs)

        bx_start = 4 * (crun + 1)
        top = self.PAGE_SIZE - 1
        for i, (_, _, grpprl) in enumerate(group):
            papx = self._papx(grpprl)
            offset = (top - len(papx)) & ~1
            page[offset:offset + len(papx)] = papx
            page[bx_start + i * 13] = offset // 2
            top = offset
        page[self.PAGE_SIZE - 1] = crun
        return bytes(page), fcs[0], fcs[-1]

    def _clx(self, cp_count: int) -> bytes:
        if self.compressed:
            def fc_of(cp):
                return ((self.TEXT_OFFSET + cp) * 2) | 0x40000000
        else:
            def fc_of(cp):
                return self.TEXT_OFFSET + cp * 2

        if self.split_at is not None and 0 < self.split_at < cp_count:
            cps = [0, self.split_at, cp_count]
        else:
            cps = [0, cp_count]

        plc = struct.pack(f"<{len(cps)}I", *cps)
        for start in cps[:-1]:
            plc += struct.pack("<HIH", 0, fc_of(start), 0)

        prc = b""
        if self.with_prc:
            prc = b"\x01" + struct.pack("<h", 3) + Sprm.justification(1)
        return prc + b"\x02" + struct.pack("<I", len(plc)) + plc

    @staticmethod
    def _plcf_bte_papx(pages, first_pn: int) -> bytes:
        fcs = [first for _, first, _ in pages] + [pages[-1][2]]
        pns = [first_pn + i for i in range(len(pages))]
        return struct.pack(f"<{len(fcs)}I", *fcs) + struct.pack(f"<{len(pns)}I", *pns)

    def _write_fib(self, word: bytearray, cp_count: int, fc_clx: int, lcb_clx: int,
                   fc_bte: int, lcb_bte: int) -> None:
        struct.pack_into("<H", word, 0x00, 0xA5EC)
        struct.pack_into("<H", word, 0x0A, self.flags)
        struct.pack_into("<H", word, 0x20, 14)      # csw
        struct.pack_into("<H", word, 0x3E, 22)      # cslw
        struct.pack_into("<i", word, 0x4C, cp_count)  # ccpText
        struct.pack_into("<H", word, 0x98, 0x5D)    # cbRgFcLcb
        struct.pack_into("<II", word, 0x102, fc_bte, lcb_bte)
        struct.pack_into("<II", word, 0x1A2, fc_clx, lcb_clx)


@pytest.fixture
def doc_builder():
    def factory(compressed: bool = False) -> DocStreamBuilder:
        return DocStreamBuilder(compressed=compressed)
    return factory


@pytest.fixture
def sprm():
    return Sprm
