# wordgrid/core/functions/text_assembler.py
"""
Text Assembler - Plain text of the non-table body

Walks body elements in source order and joins normalized paragraph text,
one paragraph per line. Table content is skipped because it is already
delivered, positioned, through the Table objects. With
ExtractionConfig.include_table_text each table is inlined instead as
<tb>...</tb> with every whitespace character removed.

Two table representations are handled:
- Table elements (OOXML body walk): one element per table
- Table-member paragraphs (legacy binary walk): a table region is the run of
  consecutive paragraphs that report table membership with depth >= 1

Usage Example:
    from wordgrid.core.functions.text_assembler import TextAssembler

    text = TextAssembler(config).assemble(adapter.iter_body_elements())
"""
import logging
import re
from typing import Iterable, List, Optional, Sequence, Tuple

from wordgrid.core.functions.document_adapter import BodyElement
from wordgrid.core.functions.extraction_config import (
    DEFAULT_EXTRACTION_CONFIG,
    ExtractionConfig,
)

logger = logging.getLogger("document-processor")

# Word blanks: no-break space, ideographic space, backspace, tab
WORD_BLANK = re.compile(r"[\u00a0\u3000\b\t]")

# Word line breaks: vertical tab (manual line break) and carriage return
WORD_LINE_BREAK = re.compile(r"[\u000b\r]")

REPEATED_NEWLINES = re.compile(r"\n+")

EDGE_BLANK = re.compile(r"^[\s\u00a0\u3000]+|[\s\u00a0\u3000]+$")

# Everything invisible inside a table, including cell marks
TABLE_TEXT_FILTER = re.compile(r"[\s\u00a0\u3000\u0007]+")


class TableRegionMismatch(Exception):
    """Raised when table-member paragraphs do not describe a table region."""


def normalize_paragraph_text(text: str) -> str:
    """Normalize Word-specific whitespace in a paragraph.

    Returns:
        Normalized text, or "" when the paragraph is blank
    """
    if not text or not text.strip():
        return ""
    text = WORD_BLANK.sub(" ", text)
    text = WORD_LINE_BREAK.sub("\n", text)
    text = REPEATED_NEWLINES.sub("\n", text)
    return EDGE_BLANK.sub("", text)


def compact_table_text(text: str) -> str:
    """Table text with every invisible character removed."""
    return TABLE_TEXT_FILTER.sub("", text or "")


class TextAssembler:
    """Builds the plain-text part of the content model."""

    def __init__(self, config: Optional[ExtractionConfig] = None):
        self._config = config or DEFAULT_EXTRACTION_CONFIG

    def assemble(
        self,
        elements: Iterable[BodyElement],
        table_texts: Optional[Sequence[str]] = None,
    ) -> str:
        """Join normalized paragraph text, skipping table regions.

        Args:
            elements: Body elements in source order
            table_texts: Raw text per table element, in order. Only read when
                include_table_text is enabled.

        Returns:
            Paragraph text, each paragraph followed by a newline
        """
        elements = list(elements)
        parts: List[str] = []
        table_count = 0
        index = 0

        while index < len(elements):
            element = elements[index]

            if element.is_table:
                if self._config.include_table_text:
                    self._append_table_element_text(parts, table_texts, table_count)
                table_count += 1
                index += 1
                continue

            if not element.in_table:
                text = normalize_paragraph_text(element.text)
                if text:
                    parts.append(text)
                    parts.append("\n")
                index += 1
                continue

            try:
                end_index, region_text = self._scan_table_region(elements, index)
            except TableRegionMismatch as e:
                logger.error(f"Table region does not match its paragraphs, text excluded: {e}")
                index = self._skip_table_members(elements, index)
                continue

            if self._config.include_table_text:
                parts.append(f"<tb>{compact_table_text(region_text)}</tb>\n")
            index = end_index

        return "".join(parts)

    def _append_table_element_text(
        self,
        parts: List[str],
        table_texts: Optional[Sequence[str]],
        table_index: int,
    ) -> None:
        if table_texts is None or table_index >= len(table_texts):
            logger.error(
                f"Table element {table_index} has no extracted table text "
                f"({0 if table_texts is None else len(table_texts)} available)"
            )
            return
        parts.append(f"<tb>{compact_table_text(table_texts[table_index])}</tb>\n")

    def _scan_table_region(self, elements: Sequence[BodyElement], start: int) -> Tuple[int, str]:
        """Find the end of the table region starting at start.

        Returns:
            (index of the first element after the region, raw region text)

        Raises:
            TableRegionMismatch: The first member reports no table depth
        """
        first = elements[start]
        if first.table_level < 1:
            raise TableRegionMismatch(
                f"paragraph {start} is marked in-table with table level {first.table_level}"
            )

        texts = []
        end = start
        while end < len(elements):
            element = elements[end]
            if element.is_table or not element.in_table or element.table_level < 1:
                break
            texts.append(element.text)
            end += 1

        return end, "".join(texts)

    def _skip_table_members(self, elements: Sequence[BodyElement], start: int) -> int:
        end = start
        while end < len(elements) and not elements[end].is_table and elements[end].in_table:
            end += 1
        return end


__all__ = [
    "TableRegionMismatch",
    "normalize_paragraph_text",
    "compact_table_text",
    "TextAssembler",
]
