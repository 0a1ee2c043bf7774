# wordgrid/core/processor/docx_helper/__init__.py
"""
DOCX Helper Module

Utility modules for reading DOCX tables and body content.

Module Structure:
- docx_constants: OOXML namespaces, tags and vMerge values
- docx_paragraph: Paragraph and cell text extraction
- docx_table_extractor: DOCXTableSource (w:tbl -> raw rows)
- docx_adapter: DOCXDocumentAdapter (body walk)
"""

from wordgrid.core.processor.docx_helper.docx_constants import (
    NAMESPACES,
    VMERGE_CONTINUE,
    VMERGE_RESTART,
)
from wordgrid.core.processor.docx_helper.docx_paragraph import (
    extract_cell_text,
    extract_paragraph_text,
)
from wordgrid.core.processor.docx_helper.docx_table_extractor import (
    DOCXTableSource,
    get_merge_state,
    read_raw_cell,
)
from wordgrid.core.processor.docx_helper.docx_adapter import (
    DOCXDocumentAdapter,
    iter_block_elements,
)

__all__ = [
    # Constants
    'NAMESPACES',
    'VMERGE_RESTART',
    'VMERGE_CONTINUE',
    # Paragraph
    'extract_paragraph_text',
    'extract_cell_text',
    # Table
    'DOCXTableSource',
    'read_raw_cell',
    'get_merge_state',
    # Adapter
    'DOCXDocumentAdapter',
    'iter_block_elements',
]
