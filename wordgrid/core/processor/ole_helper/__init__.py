# wordgrid/core/processor/ole_helper/__init__.py
"""
OLE Helper Module

Utility modules for reading Word 97-2003 (.doc) binary documents.

Module Structure:
- ole_fib: FileInformationBlock, OLEFormatError
- ole_piece_table: Piece table (CP -> stream offset, text decoding)
- ole_table_properties: sprmTDefTable row definitions (TC80 merge flags)
- ole_paragraph: PAPX FKP lookup and table sprms
- ole_adapter: Paragraph splitting, row assembly, OLEDocumentAdapter
- ole_file_converter: OLE container access (olefile)
"""

from wordgrid.core.processor.ole_helper.ole_fib import (
    FileInformationBlock,
    OLEFormatError,
)
from wordgrid.core.processor.ole_helper.ole_piece_table import (
    Piece,
    PieceTable,
)
from wordgrid.core.processor.ole_helper.ole_table_properties import (
    RowDefinition,
    TCProperties,
    parse_tdef_table_operand,
)
from wordgrid.core.processor.ole_helper.ole_paragraph import (
    PapxReader,
    ParagraphProperties,
    iter_sprms,
)
from wordgrid.core.processor.ole_helper.ole_adapter import (
    FieldCodeFilter,
    OLEDocumentAdapter,
    OLEParagraph,
    split_paragraphs,
)
from wordgrid.core.processor.ole_helper.ole_file_converter import OLEFileConverter

__all__ = [
    # FIB
    'FileInformationBlock',
    'OLEFormatError',
    # Piece table
    'Piece',
    'PieceTable',
    # Table properties
    'TCProperties',
    'RowDefinition',
    'parse_tdef_table_operand',
    # Paragraph properties
    'ParagraphProperties',
    'PapxReader',
    'iter_sprms',
    # Adapter
    'OLEParagraph',
    'FieldCodeFilter',
    'split_paragraphs',
    'OLEDocumentAdapter',
    # Container
    'OLEFileConverter',
]
