# wordgrid/core/processor/doc_handler.py
"""
DOC Handler - Word 97-2003 (OLE) Document Extractor

Opens the OLE compound document with olefile, reads the WordDocument stream
and the table stream selected by the FIB, and decodes paragraphs and table
rows through the ole_helper package.

Errors:
- Not an OLE container, missing streams, encrypted document or an
  undecodable FIB/piece table raise OLEFormatError (a ValueError)
"""
import logging
from typing import TYPE_CHECKING, Tuple

from wordgrid.core.processor.base_handler import BaseHandler
from wordgrid.core.processor.ole_helper import (
    OLEDocumentAdapter,
    OLEFileConverter,
)

if TYPE_CHECKING:
    from wordgrid.core.document_extractor import CurrentFile

logger = logging.getLogger("document-processor")


class DOCHandler(BaseHandler):
    """
    DOC Document Extraction Handler

    Usage:
        handler = DOCHandler(config=config)
        content = handler.extract_content(current_file)
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._converter = OLEFileConverter()

    def create_adapter(self, current_file: "CurrentFile") -> OLEDocumentAdapter:
        word_stream, table_stream = self._read_streams(current_file)
        return OLEDocumentAdapter.from_streams(word_stream, table_stream)

    def _read_streams(self, current_file: "CurrentFile") -> Tuple[bytes, bytes]:
        """Read the WordDocument and table streams from the OLE container."""
        file_data = self.get_file_stream(current_file).read()

        ole = self._converter.convert(file_data)
        try:
            word_stream, table_stream = self._converter.read_word_streams(ole)
        finally:
            self._converter.close(ole)

        self.logger.debug(
            f"WordDocument stream: {len(word_stream)} bytes, "
            f"table stream: {len(table_stream)} bytes"
        )
        return word_stream, table_stream


__all__ = ["DOCHandler"]
