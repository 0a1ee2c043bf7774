# wordgrid/core/document_extractor.py
"""DocumentExtractor - Word Document Content Extraction

Main entry point of the wordgrid library. Reads a .doc or .docx document from
a path, raw bytes or a binary stream and returns its DocumentContent: the
plain text of the non-table body and every table with absolute cell geometry
and logical grid coordinates.

The caller names the format; the extension of a path is not consulted.

Usage Example:
    from wordgrid.core.document_extractor import DocumentExtractor

    extractor = DocumentExtractor()
    content = extractor.extract("report.docx", "docx")

    for table in content.tables:
        for cell in table.cells:
            print(cell.row, cell.col, cell.rowspan, cell.colspan, cell.text)

    # Convenience functions
    from wordgrid.core.document_extractor import extract_doc
    with open("legacy.doc", "rb") as f:
        content = extract_doc(f)
"""

import io
import logging
import os
from typing import BinaryIO, Callable, Dict, Optional, TypedDict, Union

from wordgrid.core.functions.content_model import DocumentContent
from wordgrid.core.functions.extraction_config import (
    DEFAULT_EXTRACTION_CONFIG,
    ExtractionConfig,
)

logger = logging.getLogger("document-processor")

DocumentSource = Union[str, "os.PathLike[str]", bytes, bytearray, BinaryIO]


class CurrentFile(TypedDict, total=False):
    """
    TypedDict containing file information.

    Standard structure for reading files at binary level and passing to handlers.

    Attributes:
        file_path: Absolute path of the original file ("<stream>" for streams)
        file_name: File name (including extension)
        file_extension: Format name chosen by the caller (lowercase, without dot)
        file_data: Binary data of the file
        file_stream: BytesIO stream (reusable)
        file_size: File size in bytes
    """
    file_path: str
    file_name: str
    file_extension: str
    file_data: bytes
    file_stream: io.BytesIO
    file_size: int


class DocumentExtractor:
    """
    wordgrid Main Document Extraction Class

    Attributes:
        config: ExtractionConfig shared by every handler
        supported_formats: Format names accepted by extract()

    Example:
        >>> extractor = DocumentExtractor(ExtractionConfig(unit_divisor=20))
        >>> content = extractor.extract("document.doc", "doc")
        >>> content.to_dict()["tables"][0]["cells"][0]["rowspan"]
    """

    SUPPORTED_FORMATS = frozenset(['doc', 'docx'])

    def __init__(self, config: Optional[ExtractionConfig] = None):
        """
        Initialize DocumentExtractor.

        Args:
            config: Extraction configuration (None: DEFAULT_EXTRACTION_CONFIG)
        """
        self._config = config or DEFAULT_EXTRACTION_CONFIG
        self._logger = logging.getLogger("document-processor.extractor")
        self._handler_registry: Optional[Dict[str, Callable]] = None

    # =========================================================================
    # Public Properties
    # =========================================================================

    @property
    def config(self) -> ExtractionConfig:
        """Current configuration."""
        return self._config

    @property
    def supported_formats(self):
        """Sorted list of supported format names."""
        return sorted(self.SUPPORTED_FORMATS)

    # =========================================================================
    # Public Methods - Extraction
    # =========================================================================

    def extract(self, source: DocumentSource, file_format: str) -> DocumentContent:
        """
        Extract text and tables from a document.

        Args:
            source: File path, raw bytes or binary stream
            file_format: "doc" or "docx" (case-insensitive, leading dot allowed)

        Returns:
            DocumentContent

        Raises:
            FileNotFoundError: If a path source cannot be found
            ValueError: If the format is not supported or the data cannot be
                decoded as that format
        """
        ext = (file_format or "").lower().lstrip('.')
        if not self.is_supported(ext):
            raise ValueError(f"Unsupported file format: {file_format}")

        current_file = self._create_current_file(source, ext)
        self._logger.info(f"Extracting content from: {current_file['file_path']} (format={ext})")

        handler = self._get_handler(ext)
        if handler is None:
            raise ValueError(f"No handler available for format: {ext}")
        return handler(current_file)

    def extract_docx(self, source: DocumentSource) -> DocumentContent:
        """Extract content from a .docx path, bytes or stream."""
        return self.extract(source, "docx")

    def extract_doc(self, source: DocumentSource) -> DocumentContent:
        """Extract content from a .doc path, bytes or stream."""
        return self.extract(source, "doc")

    def is_supported(self, file_format: str) -> bool:
        """Check if a format name is supported."""
        return file_format.lower().lstrip('.') in self.SUPPORTED_FORMATS

    # =========================================================================
    # Private Methods
    # =========================================================================

    def _create_current_file(self, source: DocumentSource, ext: str) -> CurrentFile:
        """
        Create a CurrentFile dict from a path, bytes or a binary stream.

        Raises:
            FileNotFoundError: If a path source does not exist
            TypeError: If the source type is not supported
        """
        if isinstance(source, (bytes, bytearray)):
            file_data = bytes(source)
            file_path = "<stream>"
        elif isinstance(source, (str, os.PathLike)):
            file_path = os.path.abspath(os.fspath(source))
            if not os.path.exists(file_path):
                raise FileNotFoundError(f"File not found: {file_path}")
            # Read file as binary
            with open(file_path, 'rb') as f:
                file_data = f.read()
        elif hasattr(source, "read"):
            file_data = source.read()
            file_path = getattr(source, "name", None) or "<stream>"
            if not isinstance(file_path, str):
                file_path = "<stream>"
        else:
            raise TypeError(f"Unsupported source type: {type(source).__name__}")

        # Return as plain dict (TypedDict is for type hints only)
        return {
            "file_path": file_path,
            "file_name": os.path.basename(file_path),
            "file_extension": ext,
            "file_data": file_data,
            "file_stream": io.BytesIO(file_data),
            "file_size": len(file_data),
        }

    def _get_handler_registry(self) -> Dict[str, Callable]:
        """Build and cache handler registry.

        All handlers are class-based, inheriting from BaseHandler.
        """
        if self._handler_registry is not None:
            return self._handler_registry

        self._handler_registry = {}

        # DOCX handler
        try:
            from wordgrid.core.processor.docx_handler import DOCXHandler
            docx_handler = DOCXHandler(config=self._config)
            self._handler_registry['docx'] = docx_handler.extract_content
        except ImportError as e:
            self._logger.warning(f"DOCX handler not available: {e}")

        # DOC handler
        try:
            from wordgrid.core.processor.doc_handler import DOCHandler
            doc_handler = DOCHandler(config=self._config)
            self._handler_registry['doc'] = doc_handler.extract_content
        except ImportError as e:
            self._logger.warning(f"DOC handler not available: {e}")

        return self._handler_registry

    def _get_handler(self, ext: str) -> Optional[Callable]:
        """Get handler for format name."""
        registry = self._get_handler_registry()
        return registry.get(ext)

    def __repr__(self) -> str:
        return f"DocumentExtractor(supported_formats={self.supported_formats})"


# === Module-level Convenience Functions ===

def extract_docx(source: DocumentSource, config: Optional[ExtractionConfig] = None) -> DocumentContent:
    """
    Extract content from a .docx document.

    Args:
        source: File path, raw bytes or binary stream
        config: Extraction configuration

    Returns:
        DocumentContent
    """
    return DocumentExtractor(config).extract_docx(source)


def extract_doc(source: DocumentSource, config: Optional[ExtractionConfig] = None) -> DocumentContent:
    """
    Extract content from a .doc (Word 97-2003) document.

    Args:
        source: File path, raw bytes or binary stream
        config: Extraction configuration

    Returns:
        DocumentContent
    """
    return DocumentExtractor(config).extract_doc(source)


__all__ = [
    "DocumentExtractor",
    "CurrentFile",
    "DocumentSource",
    "extract_docx",
    "extract_doc",
]
