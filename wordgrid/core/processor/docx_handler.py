# wordgrid/core/processor/docx_handler.py
"""
DOCX Handler - DOCX Document Extractor

Key Features:
- Table geometry from w:tblGrid, w:tcW, w:gridSpan, w:vMerge and w:trHeight
- Plain text of body paragraphs (content controls included)

All processing is done via direct OOXML element access through python-docx.

Class-based Handler:
- DOCXHandler class inherits from BaseHandler to manage config
- Internal methods access via self
"""
import logging
import zipfile
from typing import TYPE_CHECKING

from docx import Document

from wordgrid.core.processor.base_handler import BaseHandler
from wordgrid.core.processor.docx_helper import DOCXDocumentAdapter

if TYPE_CHECKING:
    from wordgrid.core.document_extractor import CurrentFile

logger = logging.getLogger("document-processor")


class DOCXHandler(BaseHandler):
    """
    DOCX Document Extraction Handler

    Usage:
        handler = DOCXHandler(config=config)
        content = handler.extract_content(current_file)
    """

    def create_adapter(self, current_file: "CurrentFile") -> DOCXDocumentAdapter:
        """
        Load the DOCX package and wrap it in a DOCXDocumentAdapter.

        Raises:
            ValueError: If the data is not a DOCX (ZIP) package
        """
        file_path = current_file.get("file_path", "<stream>")

        # DOCX is a ZIP-based format
        if not self._is_valid_zip(current_file):
            raise ValueError(f"Not a valid DOCX package: {file_path}")

        doc = Document(self.get_file_stream(current_file))
        return DOCXDocumentAdapter(doc)

    def _is_valid_zip(self, current_file: "CurrentFile") -> bool:
        """Check if file is a valid ZIP archive."""
        try:
            file_stream = self.get_file_stream(current_file)
            with zipfile.ZipFile(file_stream, 'r') as zf:
                # Check for DOCX-specific content
                return '[Content_Types].xml' in zf.namelist()
        except zipfile.BadZipFile:
            return False


__all__ = ["DOCXHandler"]
