"""Tests for gui/table_view.py module."""

import numpy as np
import pandas as pd
import pytest

from table_explorer.gui.table_view import format_cell, table_rows, truncation_note


class TestCellFormatting:
    """Test cases for cell text."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (None, "null"),
            (np.nan, "null"),
            (pd.NaT, "null"),
            (3, "3"),
            (2.5, "2.5"),
            ('say "hi"', "say hi"),
            ("plain", "plain"),
        ],
    )
    def test_format_cell(self, value: object, expected: str) -> None:
        assert format_cell(value) == expected

    def test_format_cell_non_scalar(self) -> None:
        assert format_cell([1, 2]) == "[1, 2]"


class TestTableRows:
    """Test cases for row generation."""

    def test_rows_are_numbered(self, sales_df: pd.DataFrame) -> None:
        rows = list(table_rows(sales_df))
        assert len(rows) == 5
        assert rows[0] == ("0", "north", "a", "10", "1.5")
        assert rows[2][-1] == "null"
        assert rows[4][0] == "4"

    def test_rows_limited(self, sales_df: pd.DataFrame) -> None:
        assert len(list(table_rows(sales_df, limit=2))) == 2

    def test_truncation_note(self, sales_df: pd.DataFrame) -> None:
        assert truncation_note(sales_df) == "5 rows, 4 columns"
        assert truncation_note(sales_df, limit=3) == "Showing first 3 of 5 rows, 4 columns"
