# wordgrid/core/processor/ole_helper/ole_file_converter.py
"""
OLEFileConverter - OLE container access

Opens OLE compound document binary data with olefile and reads the streams
a Word 97-2003 document is made of.
"""
from io import BytesIO
from typing import Tuple

import olefile

from wordgrid.core.processor.ole_helper.ole_fib import (
    FileInformationBlock,
    OLEFormatError,
)

WORD_DOCUMENT_STREAM = 'WordDocument'


class OLEFileConverter:
    """
    OLE file converter for compound document format.

    Converts binary OLE data to olefile.OleFileIO object.
    """

    # Magic number for OLE format
    MAGIC_OLE = b'\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1'

    def convert(self, file_data: bytes) -> olefile.OleFileIO:
        """
        Convert binary OLE data to olefile.OleFileIO.

        Args:
            file_data: Raw binary OLE data

        Returns:
            olefile.OleFileIO object

        Raises:
            OLEFormatError: If the data is not an OLE container
        """
        if len(file_data) < len(self.MAGIC_OLE) or not file_data.startswith(self.MAGIC_OLE):
            raise OLEFormatError("Not a valid OLE file (magic header mismatch)")

        try:
            return olefile.OleFileIO(BytesIO(file_data))
        except OSError as e:
            raise OLEFormatError(f"Unreadable OLE container: {e}") from e

    def read_word_streams(self, ole: olefile.OleFileIO) -> Tuple[bytes, bytes]:
        """
        Read the WordDocument stream and the table stream it selects.

        Returns:
            (word_stream, table_stream)

        Raises:
            OLEFormatError: Missing WordDocument or table stream
        """
        if not ole.exists(WORD_DOCUMENT_STREAM):
            raise OLEFormatError("OLE container has no WordDocument stream")

        word_stream = ole.openstream(WORD_DOCUMENT_STREAM).read()
        fib = FileInformationBlock.from_bytes(word_stream)

        table_name = fib.table_stream_name
        if not ole.exists(table_name):
            raise OLEFormatError(f"OLE container has no {table_name} stream")

        table_stream = ole.openstream(table_name).read()
        return word_stream, table_stream

    def close(self, converted_object) -> None:
        """Close the OLE file if needed."""
        if converted_object is not None:
            if hasattr(converted_object, 'close'):
                converted_object.close()


__all__ = ['OLEFileConverter', 'WORD_DOCUMENT_STREAM']
