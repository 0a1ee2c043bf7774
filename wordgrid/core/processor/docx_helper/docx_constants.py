# wordgrid/core/processor/docx_helper/docx_constants.py
"""
DOCX Constants - OOXML namespaces and vMerge values
"""
from docx.oxml.ns import qn

NAMESPACES = {
    'w': 'http://schemas.openxmlformats.org/wordprocessingml/2006/main',
}

# Element tags compared against lxml element.tag
TAG_TABLE = qn('w:tbl')
TAG_SDT = qn('w:sdt')
TAG_CELL = qn('w:tc')
TAG_TEXT = qn('w:t')
TAG_TAB = qn('w:tab')
TAG_BREAK = qn('w:br')
TAG_CARRIAGE_RETURN = qn('w:cr')

ATTR_VAL = qn('w:val')
ATTR_W = qn('w:w')

# w:vMerge/@w:val
VMERGE_RESTART = 'restart'
VMERGE_CONTINUE = 'continue'


__all__ = [
    'NAMESPACES',
    'TAG_TABLE',
    'TAG_SDT',
    'TAG_CELL',
    'TAG_TEXT',
    'TAG_TAB',
    'TAG_BREAK',
    'TAG_CARRIAGE_RETURN',
    'ATTR_VAL',
    'ATTR_W',
    'VMERGE_RESTART',
    'VMERGE_CONTINUE',
]
