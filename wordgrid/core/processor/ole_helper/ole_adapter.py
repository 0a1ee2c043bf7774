# wordgrid/core/processor/ole_helper/ole_adapter.py
"""
OLE Document Adapter

Turns the WordDocument and table streams of a Word 97-2003 file into the
format-independent adapter interface.

Processing Steps:
1. Parse the FIB, the piece table (Clx) and PlcBtePapx
2. Decode main-document text (CP 0 .. ccpText)
3. Split into paragraphs at paragraph marks (\\r) and cell marks (\\x07),
   dropping field instructions and keeping field results
4. Attach PAPX properties to each paragraph via its terminating character
5. Group depth-1 table paragraphs into cells and rows; the row-terminating
   paragraph carries the row definition (sprmTDefTable) and height

Nested-table paragraphs (depth > 1) add their text to the enclosing
outer cell; nested row marks (fInnerTtp) are dropped.

Usage Example:
    from wordgrid.core.processor.ole_helper.ole_adapter import OLEDocumentAdapter

    adapter = OLEDocumentAdapter.from_streams(word_stream, table_stream)
    for source in adapter.iter_tables():
        ...
"""
import logging
from dataclasses import dataclass, field
from typing import Iterator, List, Optional

from wordgrid.core.functions.document_adapter import (
    BaseDocumentAdapter,
    BodyElement,
    BodyElementType,
    InMemoryTableSource,
    RawRowCell,
)
from wordgrid.core.processor.ole_helper.ole_fib import (
    FileInformationBlock,
    OLEFormatError,
)
from wordgrid.core.processor.ole_helper.ole_paragraph import (
    PapxReader,
    ParagraphProperties,
)
from wordgrid.core.processor.ole_helper.ole_piece_table import PieceTable

logger = logging.getLogger("document-processor")

PARAGRAPH_MARK = '\r'
CELL_MARK = '\x07'
PAGE_BREAK = '\x0c'

FIELD_BEGIN = '\x13'
FIELD_SEPARATOR = '\x14'
FIELD_END = '\x15'

# Anchors for pictures, footnote/annotation references and drawn objects
OBJECT_ANCHORS = frozenset('\x01\x02\x03\x04\x05\x06')


@dataclass
class OLEParagraph:
    """One paragraph of the main document."""

    text: str
    terminator: str
    cp_end: int
    properties: ParagraphProperties = field(default_factory=ParagraphProperties)

    @property
    def depth(self) -> int:
        return self.properties.table_depth

    @property
    def ends_cell(self) -> bool:
        return self.terminator == CELL_MARK

    @property
    def ends_row(self) -> bool:
        """Depth-1 row end: a cell mark carrying fTtp."""
        return self.ends_cell and self.properties.table_terminator

    @property
    def ends_nested_row(self) -> bool:
        """Nested row end: a cell mark carrying fInnerTtp."""
        return self.ends_cell and self.properties.inner_table_terminator


class FieldCodeFilter:
    """Drops field instructions across paragraph boundaries.

    A field is \\x13 instruction \\x14 result \\x15, possibly nested; only
    characters outside every instruction part are kept.
    """

    def __init__(self):
        self._stack: List[bool] = []  # True while in the instruction part

    def feed(self, char: str) -> bool:
        """Consume one character; return whether it is visible text."""
        if char == FIELD_BEGIN:
            self._stack.append(True)
            return False
        if char == FIELD_SEPARATOR:
            if self._stack:
                self._stack[-1] = False
            return False
        if char == FIELD_END:
            if self._stack:
                self._stack.pop()
            return False
        return not any(self._stack)


def split_paragraphs(text: str, piece_table: PieceTable, papx: PapxReader) -> List[OLEParagraph]:
    """Split decoded main-document text into paragraphs with properties."""
    paragraphs = []
    fields = FieldCodeFilter()
    buffer: List[str] = []

    for cp, char in enumerate(text):
        if char in (PARAGRAPH_MARK, CELL_MARK):
            paragraphs.append(OLEParagraph(
                text=_finish_text(buffer),
                terminator=char,
                cp_end=cp,
                properties=papx.properties_at(piece_table.fc_for_cp(cp)),
            ))
            buffer = []
            continue

        if not fields.feed(char) or char in OBJECT_ANCHORS:
            continue
        buffer.append('\n' if char == PAGE_BREAK else char)

    if buffer:
        last_cp = len(text) - 1
        paragraphs.append(OLEParagraph(
            text=_finish_text(buffer),
            terminator='',
            cp_end=last_cp,
            properties=papx.properties_at(piece_table.fc_for_cp(last_cp)),
        ))

    return paragraphs


def _finish_text(chars: List[str]) -> str:
    # Recombine UTF-16 surrogate halves decoded one CP at a time
    text = ''.join(chars)
    return text.encode('utf-16-le', 'surrogatepass').decode('utf-16-le', 'replace')


class OLETableBuilder:
    """Accumulates depth-1 table paragraphs into rows of raw cells."""

    def __init__(self, table_index: int):
        self._table_index = table_index
        self._rows: List[List[RawRowCell]] = []
        self._row_heights: List[Optional[int]] = []
        self._cell_texts: List[str] = []
        self._cell_parts: List[str] = []

    def add(self, paragraph: OLEParagraph) -> None:
        if paragraph.ends_nested_row:
            return

        if paragraph.depth == 1 and paragraph.ends_row:
            self._end_row(paragraph.properties)
            return

        if paragraph.text:
            self._cell_parts.append(paragraph.text)

        if paragraph.depth == 1 and paragraph.ends_cell:
            self._cell_texts.append('\n'.join(self._cell_parts))
            self._cell_parts = []

    def _end_row(self, properties: ParagraphProperties) -> None:
        row_def = properties.row_definition
        row_index = len(self._rows)

        if row_def is None:
            logger.warning(
                f"Table {self._table_index} row {row_index} has no row definition, "
                f"using default widths"
            )
            cell_count = len(self._cell_texts)
        else:
            cell_count = max(row_def.col_count, len(self._cell_texts))
            if row_def.col_count != len(self._cell_texts):
                logger.info(
                    f"Table {self._table_index} row {row_index}: {len(self._cell_texts)} cells "
                    f"for {row_def.col_count} defined columns"
                )

        cells = []
        for i in range(cell_count):
            text = self._cell_texts[i] if i < len(self._cell_texts) else ""
            if row_def is not None:
                cells.append(RawRowCell(
                    width=row_def.cell_width(i),
                    merge_state=row_def.cell_merge_state(i),
                    text=text,
                ))
            else:
                cells.append(RawRowCell(text=text))

        self._rows.append(cells)
        self._row_heights.append(properties.row_height)
        self._cell_texts = []
        self._cell_parts = []

    def finish(self) -> Optional[InMemoryTableSource]:
        if self._cell_texts or self._cell_parts:
            logger.warning(
                f"Table {self._table_index} ends without a row mark, "
                f"{len(self._cell_texts)} trailing cells dropped"
            )
        if not self._rows:
            return None
        return InMemoryTableSource(self._rows, row_heights=self._row_heights)


class OLEDocumentAdapter(BaseDocumentAdapter):
    """Adapter over the decoded paragraphs of a legacy Word document."""

    format_name = "doc"

    def __init__(self, paragraphs: List[OLEParagraph]):
        self._paragraphs = paragraphs
        self._tables: List[InMemoryTableSource] = []
        self._group_tables()

    @classmethod
    def from_streams(cls, word_stream: bytes, table_stream: bytes) -> "OLEDocumentAdapter":
        """Decode a document from its WordDocument and table streams.

        Raises:
            OLEFormatError: Encrypted document or unreadable structures
        """
        fib = FileInformationBlock.from_bytes(word_stream)
        if fib.is_encrypted:
            raise OLEFormatError("Encrypted Word documents are not supported")

        clx = table_stream[fib.fc_clx:fib.fc_clx + fib.lcb_clx]
        if fib.lcb_clx == 0 or len(clx) < fib.lcb_clx:
            raise OLEFormatError(
                f"Clx outside table stream ({fib.fc_clx}+{fib.lcb_clx} > {len(table_stream)})"
            )
        piece_table = PieceTable.from_clx(clx)

        bte = table_stream[fib.fc_plcf_bte_papx:fib.fc_plcf_bte_papx + fib.lcb_plcf_bte_papx]
        papx = PapxReader(word_stream, bte)

        text = piece_table.text(word_stream, fib.ccp_text)
        paragraphs = split_paragraphs(text, piece_table, papx)
        logger.debug(f"Legacy document: {len(text)} chars, {len(paragraphs)} paragraphs")
        return cls(paragraphs)

    @property
    def paragraphs(self) -> List[OLEParagraph]:
        return self._paragraphs

    def _group_tables(self) -> None:
        builder: Optional[OLETableBuilder] = None

        for paragraph in self._paragraphs:
            if paragraph.depth >= 1:
                if builder is None:
                    builder = OLETableBuilder(len(self._tables))
                builder.add(paragraph)
                continue

            if builder is not None:
                self._close_table(builder)
                builder = None

        if builder is not None:
            self._close_table(builder)

    def _close_table(self, builder: OLETableBuilder) -> None:
        source = builder.finish()
        if source is not None:
            self._tables.append(source)

    def iter_tables(self) -> Iterator[InMemoryTableSource]:
        return iter(self._tables)

    def iter_body_elements(self) -> Iterator[BodyElement]:
        for paragraph in self._paragraphs:
            depth = paragraph.depth
            yield BodyElement(
                BodyElementType.PARAGRAPH,
                text=paragraph.text,
                in_table=paragraph.properties.in_table or depth > 0,
                table_level=depth,
            )


__all__ = [
    'OLEParagraph',
    'FieldCodeFilter',
    'split_paragraphs',
    'OLETableBuilder',
    'OLEDocumentAdapter',
]
