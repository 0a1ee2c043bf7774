# wordgrid/core/processor/docx_helper/docx_adapter.py
"""
DOCX Document Adapter

BaseDocumentAdapter over a python-docx Document. The body is walked in
document order; top-level tables become DOCXTableSource instances and
paragraphs become BodyElement entries. Block-level content controls (w:sdt)
are transparent.

Usage Example:
    from docx import Document
    from wordgrid.core.processor.docx_helper.docx_adapter import DOCXDocumentAdapter

    adapter = DOCXDocumentAdapter(Document(stream))
    for source in adapter.iter_tables():
        ...
"""
import logging
from typing import Iterator, List

from lxml import etree

from wordgrid.core.functions.document_adapter import (
    BaseDocumentAdapter,
    BodyElement,
    BodyElementType,
)
from wordgrid.core.processor.docx_helper.docx_constants import NAMESPACES, TAG_TABLE
from wordgrid.core.processor.docx_helper.docx_paragraph import extract_paragraph_text
from wordgrid.core.processor.docx_helper.docx_table_extractor import DOCXTableSource

logger = logging.getLogger("document-processor")


def iter_block_elements(container) -> Iterator:
    """Yield w:p and w:tbl children of a container, unwrapping w:sdt."""
    for child in container:
        if not isinstance(child.tag, str):
            continue
        local_tag = etree.QName(child).localname
        if local_tag in ('p', 'tbl'):
            yield child
        elif local_tag == 'sdt':
            content = child.find('w:sdtContent', NAMESPACES)
            if content is not None:
                yield from iter_block_elements(content)


class DOCXDocumentAdapter(BaseDocumentAdapter):
    """Adapter over a loaded .docx document."""

    format_name = "docx"

    def __init__(self, doc):
        self._doc = doc
        self._elements: List[BodyElement] = []
        self._tables: List[DOCXTableSource] = []
        self._walk_body()

    def _walk_body(self) -> None:
        body = self._doc.element.body
        for elem in iter_block_elements(body):
            if elem.tag == TAG_TABLE:
                source = DOCXTableSource(elem)
                self._tables.append(source)
                self._elements.append(BodyElement(BodyElementType.TABLE))
            else:
                element = BodyElement(
                    BodyElementType.PARAGRAPH,
                    text=extract_paragraph_text(elem),
                )
                self._elements.append(element)

        logger.debug(f"DOCX body: {len(self._elements)} blocks, {len(self._tables)} tables")

    def iter_tables(self) -> Iterator[DOCXTableSource]:
        return iter(self._tables)

    def iter_body_elements(self) -> Iterator[BodyElement]:
        return iter(self._elements)


__all__ = [
    'iter_block_elements',
    'DOCXDocumentAdapter',
]
