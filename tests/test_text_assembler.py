"""Unit tests for plain-text assembly and Word whitespace normalization."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import logging

import pytest

from wordgrid.core.functions.document_adapter import BodyElement, BodyElementType
from wordgrid.core.functions.extraction_config import ExtractionConfig
from wordgrid.core.functions.text_assembler import (
    TextAssembler,
    compact_table_text,
    normalize_paragraph_text,
)


def para(text, in_table=False, level=0):
    return BodyElement(BodyElementType.PARAGRAPH, text=text, in_table=in_table, table_level=level)


def table():
    return BodyElement(BodyElementType.TABLE)


# ===========================================================================
# normalize_paragraph_text
# ===========================================================================


class TestNormalizeParagraphText:

    @pytest.mark.parametrize("text", ["", "   ", "\t\r\n", "\u00a0"])
    def test_blank_paragraphs_vanish(self, text):
        assert normalize_paragraph_text(text) == ""

    def test_word_blanks_become_spaces(self):
        assert normalize_paragraph_text("a\u00a0b\u3000c\td") == "a b c d"

    def test_line_breaks_collapse(self):
        assert normalize_paragraph_text("one\u000btwo\r\r\nthree") == "one\ntwo\nthree"

    def test_edges_trimmed(self):
        assert normalize_paragraph_text("\u3000 Hello \u00a0") == "Hello"

    def test_pipe_is_kept(self):
        assert normalize_paragraph_text("a|b") == "a|b"


class TestCompactTableText:

    def test_removes_all_invisible_characters(self):
        assert compact_table_text("A 1\x07B\u00a02\n\x07") == "A1B2"

    def test_none(self):
        assert compact_table_text(None) == ""


# ===========================================================================
# TextAssembler
# ===========================================================================


class TestTextAssembler:

    def test_paragraphs_one_per_line(self):
        text = TextAssembler().assemble([para("Hello"), para(" "), para("World ")])
        assert text == "Hello\nWorld\n"

    def test_table_elements_skipped(self):
        text = TextAssembler().assemble([para("Before"), table(), para("After")])
        assert text == "Before\nAfter\n"

    def test_table_member_paragraphs_skipped(self):
        elements = [
            para("Before"),
            para("A", in_table=True, level=1),
            para("B", in_table=True, level=1),
            para("", in_table=True, level=1),
            para("After"),
        ]
        assert TextAssembler().assemble(elements) == "Before\nAfter\n"

    def test_region_at_end_of_document(self):
        elements = [para("Only"), para("A", in_table=True, level=1)]
        assert TextAssembler().assemble(elements) == "Only\n"

    def test_mismatched_region_logged_and_excluded(self, caplog):
        elements = [
            para("Before"),
            para("orphan", in_table=True, level=0),
            para("orphan 2", in_table=True, level=0),
            para("After"),
        ]
        with caplog.at_level(logging.ERROR, logger="document-processor"):
            text = TextAssembler().assemble(elements)

        assert text == "Before\nAfter\n"
        assert "Table region does not match" in caplog.text

    def test_include_table_text_for_table_elements(self):
        config = ExtractionConfig(include_table_text=True)
        text = TextAssembler(config).assemble(
            [para("Before"), table(), para("After")],
            table_texts=["A 1\nB 2"],
        )
        assert text == "Before\n<tb>A1B2</tb>\nAfter\n"

    def test_include_table_text_for_member_paragraphs(self):
        config = ExtractionConfig(include_table_text=True)
        elements = [
            para("A 1", in_table=True, level=1),
            para("B", in_table=True, level=1),
            para("After"),
        ]
        assert TextAssembler(config).assemble(elements) == "<tb>A1B</tb>\nAfter\n"

    def test_missing_table_text_logged(self, caplog):
        config = ExtractionConfig(include_table_text=True)
        with caplog.at_level(logging.ERROR, logger="document-processor"):
            text = TextAssembler(config).assemble([table(), para("After")], table_texts=[])
        assert text == "After\n"
        assert "has no extracted table text" in caplog.text

    def test_table_text_ignored_when_disabled(self):
        text = TextAssembler().assemble([table()], table_texts=["X"])
        assert text == ""
