"""Tests for query models and the sheet_query entry point."""

import pytest

from sheetquery import sheet_query
from sheetquery.config import settings
from sheetquery.query import RowObject, RowPosition, SheetQueryBuilder
from sheetquery.sheets import GoogleSheetsGrid, InMemoryGrid
from sheetquery.sheets.models import DataRange, TableHandle


class TestRowObject:
    """Test the RowObject model."""

    def test_mapping_access(self):
        """Test that item access reads and writes the row data."""
        row = RowObject(data={"Name": "Ada"}, position=RowPosition(row=2, cols=3))

        row["Age"] = 36

        assert row["Name"] == "Ada"
        assert row.data == {"Name": "Ada", "Age": 36}
        assert "Age" in row
        assert "Email" not in row
        assert row.get("Email") is None
        assert row.get("Email", "") == ""

    def test_missing_heading_raises(self):
        row = RowObject(data={})

        with pytest.raises(KeyError):
            row["Name"]

    def test_default_position(self):
        assert RowObject().position == RowPosition(row=0, cols=0)


class TestSheetModels:
    """Test grid models."""

    def test_quoted_title(self):
        assert TableHandle(title="People").quoted_title == "'People'"
        assert TableHandle(title="Bob's").quoted_title == "'Bob''s'"

    def test_data_range_rows(self):
        assert DataRange(values=[["a"], ["b"]], num_cols=1).num_rows == 2
        assert DataRange().num_rows == 0


class TestSheetQuery:
    """Test the sheet_query entry point."""

    def test_with_source(self):
        grid = InMemoryGrid()

        query = sheet_query(grid)

        assert isinstance(query, SheetQueryBuilder)
        assert query.source is grid

    def test_without_source_uses_spreadsheet_setting(self, monkeypatch):
        monkeypatch.setattr(settings, "spreadsheet_id", "sheet-abc")

        query = sheet_query()

        assert isinstance(query.source, GoogleSheetsGrid)
        assert query.source.spreadsheet_id == "sheet-abc"

    def test_without_source_or_setting_raises(self, monkeypatch):
        monkeypatch.setattr(settings, "spreadsheet_id", None)

        with pytest.raises(ValueError, match="SPREADSHEET_ID"):
            sheet_query()

    def test_default_heading_row_setting(self, monkeypatch):
        monkeypatch.setattr(settings, "default_heading_row", 2)
        grid = InMemoryGrid({"T": [["title"], ["A"], ["a"]]})

        query = sheet_query(grid).select_table("T")

        assert query.heading_row == 2
        assert query.get_headings() == ["A"]
