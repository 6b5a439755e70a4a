"""Pytest configuration and shared fixtures."""

from unittest.mock import Mock

import pytest

from sheetquery.sheets import GoogleSheetsClient, InMemoryGrid
from sheetquery.query import SheetQueryBuilder


PEOPLE = [
    ["Name", "Age", "Email"],
    ["Ada", 36, "ada@example.com"],
    ["Bob", 41, ""],
    ["Cyd", 22, "cyd@example.com"],
    ["Dee", 29, ""],
    ["Eve", 33, "eve@example.com"],
    ["Fay", 58, ""],
    ["Gus", 47, "gus@example.com"],
]


@pytest.fixture
def grid() -> InMemoryGrid:
    """Create an in-memory grid holding a People table."""
    grid = InMemoryGrid({"People": PEOPLE})
    grid.set_link_url("People", 2, 1, "https://example.com/ada")
    grid.set_link_url("People", 2, 3, "mailto:ada@example.com")
    grid.set_link_url("People", 4, 3, "mailto:cyd@example.com")
    return grid


@pytest.fixture
def query(grid: InMemoryGrid) -> SheetQueryBuilder:
    """Create a query already pointed at the People table."""
    return SheetQueryBuilder(grid).select_table("People")


@pytest.fixture
def mock_sheets_client() -> Mock:
    """Create a mocked Google Sheets client."""
    client = Mock(spec=GoogleSheetsClient)

    client.get_spreadsheet_info = Mock(
        return_value={
            "id": "test-sheet-123",
            "title": "Test Sheet",
            "sheets": [
                {"id": 0, "title": "People", "row_count": 1000, "col_count": 26},
                {"id": 7, "title": "Q1 'Sales'", "row_count": 100, "col_count": 10},
            ],
        }
    )
    client.service = Mock()

    return client
