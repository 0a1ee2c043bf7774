# wordgrid/core/processor/__init__.py
"""
Format handlers and their helper packages.

- base_handler: BaseHandler (adapter -> geometry -> grid -> text)
- docx_handler: DOCXHandler (python-docx)
- doc_handler: DOCHandler (olefile)
"""

from wordgrid.core.processor.base_handler import BaseHandler
from wordgrid.core.processor.doc_handler import DOCHandler
from wordgrid.core.processor.docx_handler import DOCXHandler

__all__ = [
    "BaseHandler",
    "DOCHandler",
    "DOCXHandler",
]
