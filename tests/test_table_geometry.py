"""Unit tests for absolute cell geometry and merged-row height accumulation."""

# pylint: disable=missing-class-docstring,missing-function-docstring

import pytest

from wordgrid.core.functions.document_adapter import (
    InMemoryTableSource,
    MergeState,
    RawRowCell,
)
from wordgrid.core.functions.extraction_config import ExtractionConfig
from wordgrid.core.functions.table_geometry import (
    TableGeometryBuilder,
    accumulate_merged_height,
)

RESTART = MergeState.RESTART
CONTINUE = MergeState.CONTINUE


def raw(text="", width=1000, merge=MergeState.NONE, span=1):
    return RawRowCell(width=width, merge_state=merge, text=text, grid_span=span)


# ===========================================================================
# accumulate_merged_height
# ===========================================================================


class TestAccumulateMergedHeight:

    def test_single_continuation(self):
        rows = [
            [raw("A", merge=RESTART), raw("B")],
            [raw(merge=CONTINUE), raw("D")],
        ]
        assert accumulate_merged_height(rows, [300, 400], 0, 1000, 0) == 400

    def test_stops_at_first_non_matching_row(self):
        rows = [
            [raw("A", merge=RESTART)],
            [raw(merge=CONTINUE)],
            [raw("C")],
            [raw(merge=CONTINUE)],
        ]
        assert accumulate_merged_height(rows, [100, 200, 300, 400], 0, 1000, 0) == 200

    def test_offset_must_match(self):
        rows = [
            [raw("A"), raw("B", merge=RESTART)],
            [raw(merge=CONTINUE), raw("D")],
        ]
        # The continuation sits at offset 0, the anchor at offset 1000
        assert accumulate_merged_height(rows, [300, 400], 0, 1000, 1000) == 0

    def test_width_must_match(self):
        rows = [
            [raw("A", width=2000, merge=RESTART)],
            [raw(width=1000, merge=CONTINUE), raw(width=1000)],
        ]
        assert accumulate_merged_height(rows, [300, 400], 0, 2000, 0) == 0

    def test_last_row_anchor_adds_nothing(self):
        rows = [[raw("A")], [raw("B", merge=RESTART)]]
        assert accumulate_merged_height(rows, [300, 400], 1, 1000, 0) == 0

    def test_negative_width_matches_by_absolute_value(self):
        rows = [
            [raw("A", width=-800, merge=RESTART)],
            [raw(width=800, merge=CONTINUE)],
        ]
        assert accumulate_merged_height(rows, [300, 400], 0, 800, 0) == 400

    def test_absent_widths_match_as_zero(self):
        rows = [
            [raw("A", width=None, merge=RESTART), raw("B", width=0)],
            [raw(width=0, merge=CONTINUE), raw("D", width=None)],
        ]
        assert accumulate_merged_height(rows, [300, 400], 0, 0, 0) == 400


# ===========================================================================
# TableGeometryBuilder
# ===========================================================================


class TestTableGeometryBuilder:

    def test_merged_anchor_height(self):
        source = InMemoryTableSource(
            [
                [raw("A", merge=RESTART), raw("B")],
                [raw(merge=CONTINUE), raw("D")],
            ],
            row_heights=[300, 400],
        )
        table = TableGeometryBuilder().build(source)

        assert [c.text for c in table.cells] == ["A", "B", "D"]
        anchor = table.cells[0]
        assert (anchor.x, anchor.y, anchor.width, anchor.height) == (0, 0, 1000, 700)
        assert (table.cells[2].x, table.cells[2].y) == (1000, 300)
        assert table.height == 700

    def test_table_height_includes_last_row(self):
        source = InMemoryTableSource([[raw("A")], [raw("B")]], row_heights=[300, 400])
        table = TableGeometryBuilder().build(source)

        assert table.cells[-1].y == 300
        assert table.height == 700

    def test_default_extents_are_floats(self):
        source = InMemoryTableSource([[raw("A", width=None), raw("B", width=1000)]])
        table = TableGeometryBuilder().build(source)

        for cell in table.cells:
            assert isinstance(cell.width, float)
            assert isinstance(cell.height, float)

    def test_row_width_sum_equals_table_width(self):
        source = InMemoryTableSource(
            [
                [raw("A", width=1200), raw("B", width=800)],
                [raw("C", width=500), raw("D", width=1500)],
            ]
        )
        table = TableGeometryBuilder().build(source)

        assert table.width == 2000
        row_two = [c for c in table.cells if c.y == 500]
        assert sum(c.width for c in row_two) == table.width

    def test_absorbed_cells_still_advance_x(self):
        source = InMemoryTableSource(
            [
                [raw("A", merge=RESTART), raw("B")],
                [raw(merge=CONTINUE), raw("D")],
            ]
        )
        table = TableGeometryBuilder().build(source)
        assert table.cells[-1].x == 1000

    def test_missing_and_zero_heights_use_default(self):
        source = InMemoryTableSource([[raw("A")], [raw("B")]], row_heights=[None, 0])
        table = TableGeometryBuilder().build(source)
        assert [c.height for c in table.cells] == [500, 500]
        assert table.height == 1000

    def test_negative_height_uses_absolute_value(self):
        source = InMemoryTableSource([[raw("A")]], row_heights=[-360])
        table = TableGeometryBuilder().build(source)
        assert table.cells[0].height == 360

    def test_missing_width_uses_default(self):
        source = InMemoryTableSource([[raw("A", width=None), raw("B", width=0)]])
        table = TableGeometryBuilder().build(source)
        assert [c.width for c in table.cells] == [1000, 1000]

    def test_negative_width_uses_absolute_value(self):
        source = InMemoryTableSource([[raw("A", width=-700)]])
        table = TableGeometryBuilder().build(source)
        assert table.cells[0].width == 700

    def test_grid_widths_override_cell_widths(self):
        source = InMemoryTableSource(
            [
                [raw("Header", width=999, span=2)],
                [raw("L", width=1), raw("R", width=1)],
            ],
            grid_widths=[1500, 2500],
        )
        table = TableGeometryBuilder().build(source)

        header, left, right = table.cells
        assert header.width == 4000
        assert (left.x, left.width) == (0, 1500)
        assert (right.x, right.width) == (1500, 2500)

    def test_span_past_grid_falls_back_to_cell_width(self):
        source = InMemoryTableSource(
            [[raw("A", width=600), raw("B", width=700, span=3)]],
            grid_widths=[1000, 1000],
        )
        table = TableGeometryBuilder().build(source)
        assert [c.width for c in table.cells] == [1000, 700]

    def test_unit_divisor_applies_to_source_values(self):
        config = ExtractionConfig(unit_divisor=20)
        source = InMemoryTableSource([[raw("A", width=2000), raw("B", width=None)]], row_heights=[400])
        table = TableGeometryBuilder(config).build(source)

        a, b = table.cells
        assert (a.width, a.height) == (100, 20)
        # Defaults are already in output units
        assert b.width == 1000

    def test_font_size_from_config(self):
        config = ExtractionConfig(font_size=10.5)
        table = TableGeometryBuilder(config).build(InMemoryTableSource([[raw("A")]]))
        assert table.cells[0].font_size == 10.5

    def test_empty_table(self):
        table = TableGeometryBuilder().build(InMemoryTableSource([]))
        assert table.cells == []
        assert (table.width, table.height) == (0, 0)

    def test_deterministic(self):
        rows = [
            [raw("A", merge=RESTART), raw("B", width=700)],
            [raw(merge=CONTINUE), raw("D", width=700)],
        ]
        builder = TableGeometryBuilder()
        first = builder.build(InMemoryTableSource(rows, row_heights=[300, 400])).to_dict()
        second = builder.build(InMemoryTableSource(rows, row_heights=[300, 400])).to_dict()
        assert first == second


# ===========================================================================
# ExtractionConfig
# ===========================================================================


class TestExtractionConfig:

    def test_defaults(self):
        config = ExtractionConfig()
        assert config.default_row_height == 500
        assert config.default_cell_width == 1000
        assert config.font_size == 12.0
        assert config.grid_tolerance == 5.0
        assert config.unit_divisor == 1
        assert config.include_table_text is False

    def test_zero_divisor_rejected(self):
        with pytest.raises(ValueError):
            ExtractionConfig(unit_divisor=0)

    def test_non_positive_tolerance_rejected(self):
        with pytest.raises(ValueError):
            ExtractionConfig(grid_tolerance=0)
