# wordgrid/core/processor/base_handler.py
"""
BaseHandler - Abstract base class for document extraction handlers

Defines the base interface for all format handlers. A handler opens the
file data of one format, builds a BaseDocumentAdapter over it and runs the
format-independent passes:

1. TableGeometryBuilder: absolute cell geometry and bounding box per table
2. GridIndexAssigner: row/col/rowspan/colspan per cell
3. TextAssembler: plain text of the non-table body

Usage Example:
    class DOCXHandler(BaseHandler):
        def create_adapter(self, current_file: CurrentFile) -> BaseDocumentAdapter:
            ...
"""
import io
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, TYPE_CHECKING

from wordgrid.core.functions.content_model import DocumentContent, Table
from wordgrid.core.functions.document_adapter import BaseDocumentAdapter
from wordgrid.core.functions.extraction_config import (
    DEFAULT_EXTRACTION_CONFIG,
    ExtractionConfig,
)
from wordgrid.core.functions.grid_index import GridIndexAssigner
from wordgrid.core.functions.table_geometry import TableGeometryBuilder
from wordgrid.core.functions.text_assembler import TextAssembler

if TYPE_CHECKING:
    from wordgrid.core.document_extractor import CurrentFile

logger = logging.getLogger("document-processor")


class BaseHandler(ABC):
    """
    Abstract base class for document handlers.

    All handlers inherit from this class. The configuration is passed at
    creation and shared by every pass the handler runs.

    Attributes:
        config: ExtractionConfig passed from DocumentExtractor
        logger: Logging instance
    """

    def __init__(self, config: Optional[ExtractionConfig] = None):
        """
        Initialize BaseHandler.

        Args:
            config: Extraction configuration (passed from DocumentExtractor)
        """
        self._config = config or DEFAULT_EXTRACTION_CONFIG
        self._geometry_builder = TableGeometryBuilder(self._config)
        self._grid_assigner = GridIndexAssigner(self._config)
        self._text_assembler = TextAssembler(self._config)
        self._logger = logging.getLogger(f"document-processor.{self.__class__.__name__}")

    @property
    def config(self) -> ExtractionConfig:
        """Extraction configuration."""
        return self._config

    @property
    def logger(self) -> logging.Logger:
        """Logger instance."""
        return self._logger

    @abstractmethod
    def create_adapter(self, current_file: "CurrentFile") -> BaseDocumentAdapter:
        """
        Open the file data and build the format adapter.

        Args:
            current_file: CurrentFile dict containing file info and binary data

        Returns:
            Document adapter over the file
        """
        pass

    def extract_content(self, current_file: "CurrentFile") -> DocumentContent:
        """
        Extract text and positioned tables from a file.

        Args:
            current_file: CurrentFile dict containing file info and binary data

        Returns:
            DocumentContent with the plain text and every table that could
            be built
        """
        file_path = current_file.get("file_path", "<stream>")
        self.logger.info(f"{self.__class__.__name__} processing: {file_path}")

        adapter = self.create_adapter(current_file)
        return self.extract_from_adapter(adapter)

    def extract_from_adapter(self, adapter: BaseDocumentAdapter) -> DocumentContent:
        """Run geometry, grid and text passes over an adapter."""
        tables: List[Table] = []
        table_texts: List[str] = []

        for table_index, source in enumerate(adapter.iter_tables()):
            # One entry per table element, built or not, to keep indices aligned
            if self._config.include_table_text:
                table_texts.append(self._read_table_text(source, table_index))

            try:
                table = self._geometry_builder.build(source)
                self._grid_assigner.assign(table)
            except Exception as e:
                self.logger.error(f"Table {table_index} could not be built, skipped: {e}")
                continue
            tables.append(table)

        text = self._text_assembler.assemble(
            adapter.iter_body_elements(),
            table_texts=table_texts if self._config.include_table_text else None,
        )

        self.logger.debug(f"Extracted {len(text)} chars, {len(tables)} tables")
        return DocumentContent(text=text, tables=tables)

    def _read_table_text(self, source, table_index: int) -> str:
        try:
            return source.raw_text()
        except Exception as e:
            self.logger.error(f"Table {table_index} text could not be read: {e}")
            return ""

    def get_file_stream(self, current_file: "CurrentFile") -> io.BytesIO:
        """
        Get a fresh BytesIO stream from current_file.

        Resets the stream position to the beginning for reuse.

        Args:
            current_file: CurrentFile dict

        Returns:
            BytesIO stream ready for reading
        """
        stream = current_file.get("file_stream")
        if stream is not None:
            stream.seek(0)
            return stream
        # Fallback: create new stream from file_data
        return io.BytesIO(current_file.get("file_data", b""))


__all__ = ["BaseHandler"]
