# wordgrid/__init__.py
"""
wordgrid Library

Extracts plain text and positioned tables from Word documents (.doc, .docx).

Package Structure:
- core: Document extraction core module
    - DocumentExtractor: Main extraction class
    - processor: Format handlers (DOCX via python-docx, DOC via olefile)
    - functions: Content model, configuration, geometry/grid/text passes

Usage:
    from wordgrid import DocumentExtractor

    extractor = DocumentExtractor()
    content = extractor.extract("document.docx", "docx")
    print(content.text)
    print(content.to_dict()["tables"])
"""

__version__ = "0.1.0"

# Expose core classes at top level
from wordgrid.core import (
    Cell,
    DocumentContent,
    DocumentExtractor,
    ExtractionConfig,
    Table,
    extract_doc,
    extract_docx,
)

# Explicit subpackages
from wordgrid import core

__all__ = [
    "__version__",
    # Core classes
    "DocumentExtractor",
    "ExtractionConfig",
    "DocumentContent",
    "Table",
    "Cell",
    # Convenience functions
    "extract_docx",
    "extract_doc",
    # Subpackages
    "core",
]
