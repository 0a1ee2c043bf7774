# wordgrid/core/functions/__init__.py
"""
Functions - Format-independent extraction passes

Module Components:
- content_model: Cell, Table, DocumentContent
- extraction_config: ExtractionConfig and its defaults
- document_adapter: Adapter interface between formats and the passes
- table_geometry: TableGeometryBuilder, merged-height accumulation
- grid_index: GridIndexAssigner, tolerance binary search
- text_assembler: TextAssembler, Word whitespace normalization

Usage Example:
    from wordgrid.core.functions import TableGeometryBuilder, GridIndexAssigner

    table = TableGeometryBuilder(config).build(source)
    GridIndexAssigner(config).assign(table)
"""

from wordgrid.core.functions.content_model import (
    Cell,
    DocumentContent,
    Table,
)
from wordgrid.core.functions.extraction_config import (
    DEFAULT_EXTRACTION_CONFIG,
    ExtractionConfig,
)
from wordgrid.core.functions.document_adapter import (
    BaseDocumentAdapter,
    BaseTableSource,
    BodyElement,
    BodyElementType,
    InMemoryDocumentAdapter,
    InMemoryTableSource,
    MergeState,
    RawRowCell,
)
from wordgrid.core.functions.table_geometry import (
    TableGeometryBuilder,
    accumulate_merged_height,
)
from wordgrid.core.functions.grid_index import (
    GridIndexAssigner,
    tolerant_binary_search,
)
from wordgrid.core.functions.text_assembler import (
    TextAssembler,
    normalize_paragraph_text,
)

__all__ = [
    # Content model
    "Cell",
    "Table",
    "DocumentContent",
    # Configuration
    "ExtractionConfig",
    "DEFAULT_EXTRACTION_CONFIG",
    # Adapter interface
    "MergeState",
    "RawRowCell",
    "BodyElement",
    "BodyElementType",
    "BaseTableSource",
    "BaseDocumentAdapter",
    "InMemoryTableSource",
    "InMemoryDocumentAdapter",
    # Passes
    "TableGeometryBuilder",
    "accumulate_merged_height",
    "GridIndexAssigner",
    "tolerant_binary_search",
    "TextAssembler",
    "normalize_paragraph_text",
]
