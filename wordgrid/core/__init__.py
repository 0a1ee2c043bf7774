# wordgrid/core/__init__.py
"""
Core - Document extraction core module

Module Structure:
- document_extractor: Main DocumentExtractor class
- processor/: Format handlers
    - docx_handler: DOCX document extraction
    - doc_handler: DOC (Word 97-2003) document extraction
- functions/: Format-independent passes
    - content_model: Cell, Table, DocumentContent
    - extraction_config: ExtractionConfig
    - table_geometry: Absolute cell geometry
    - grid_index: Row/column coordinates
    - text_assembler: Plain text of the non-table body

Usage Example:
    from wordgrid.core import DocumentExtractor
    from wordgrid.core.functions import ExtractionConfig
"""

# === Main class ===
from wordgrid.core.document_extractor import (
    CurrentFile,
    DocumentExtractor,
    extract_doc,
    extract_docx,
)

# === Content model and configuration ===
from wordgrid.core.functions import (
    Cell,
    DocumentContent,
    ExtractionConfig,
    Table,
)

__all__ = [
    "DocumentExtractor",
    "CurrentFile",
    "extract_docx",
    "extract_doc",
    "Cell",
    "Table",
    "DocumentContent",
    "ExtractionConfig",
]
