# wordgrid/core/functions/extraction_config.py
"""
Extraction Config - Constants used by the geometry and text passes

All defaults live in one explicit value that is passed into every component
call, so extraction stays reentrant and tests can override any constant.

Usage Example:
    from wordgrid.core.functions.extraction_config import ExtractionConfig

    config = ExtractionConfig(grid_tolerance=2.0)
    content = DocumentExtractor(config=config).extract("a.docx", "docx")
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class ExtractionConfig:
    """Configuration for table geometry and text extraction.

    Attributes:
        default_row_height: Row height used when the source has none (twips)
        default_cell_width: Cell width used when no positive width is found (twips)
        font_size: Font size assigned to every cell
        grid_tolerance: Max distance for two coordinates to share a grid boundary
        unit_divisor: Divisor applied to every source measurement
        include_table_text: Inline table text as <tb>...</tb> in the plain text
    """
    default_row_height: float = 500.0
    default_cell_width: float = 1000.0
    font_size: float = 12.0
    grid_tolerance: float = 5.0
    unit_divisor: float = 1
    include_table_text: bool = False

    def __post_init__(self):
        if self.unit_divisor == 0:
            raise ValueError("unit_divisor must be non-zero")
        if self.grid_tolerance <= 0:
            raise ValueError("grid_tolerance must be positive")


# Default configuration
DEFAULT_EXTRACTION_CONFIG = ExtractionConfig()


__all__ = [
    "ExtractionConfig",
    "DEFAULT_EXTRACTION_CONFIG",
]
