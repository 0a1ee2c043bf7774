# wordgrid/core/processor/docx_helper/docx_paragraph.py
"""
DOCX Paragraph Utilities

Text extraction from w:p elements.
- extract_paragraph_text: Text of one paragraph (w:t, w:tab, w:br, w:cr)
- extract_cell_text: Text of a table cell, paragraphs joined by newline
"""
import logging

from wordgrid.core.processor.docx_helper.docx_constants import (
    NAMESPACES,
    TAG_BREAK,
    TAG_CARRIAGE_RETURN,
    TAG_TAB,
    TAG_TEXT,
)

logger = logging.getLogger("document-processor")


def extract_paragraph_text(para_elem) -> str:
    """
    Extract the text of a paragraph element.

    Tabs are kept as '\\t' and manual line breaks as '\\n', the same glyphs
    the plain-text normalization expects.

    Args:
        para_elem: w:p XML element

    Returns:
        Paragraph text
    """
    parts = []
    for node in para_elem.iter(TAG_TEXT, TAG_TAB, TAG_BREAK, TAG_CARRIAGE_RETURN):
        if node.tag == TAG_TEXT:
            if node.text:
                parts.append(node.text)
        elif node.tag == TAG_TAB:
            parts.append('\t')
        else:
            parts.append('\n')
    return ''.join(parts)


def extract_cell_text(cell_elem) -> str:
    """
    Extract the text of a table cell.

    Args:
        cell_elem: w:tc XML element

    Returns:
        Non-empty paragraph texts joined with '\\n'
    """
    texts = []
    for p in cell_elem.findall('.//w:p', NAMESPACES):
        text = extract_paragraph_text(p)
        if text:
            texts.append(text)
    return '\n'.join(texts)


__all__ = [
    'extract_paragraph_text',
    'extract_cell_text',
]
