"""SheetQuery: query and update spreadsheet tables like database tables."""

from .query import (
    CellRange,
    NoTableSelectedError,
    RowObject,
    RowPosition,
    SheetQueryBuilder,
    sheet_query,
)
from .sheets import GoogleSheetsGrid, GridError, GridSource, InMemoryGrid

__all__ = [
    "sheet_query",
    "SheetQueryBuilder",
    "NoTableSelectedError",
    "RowObject",
    "RowPosition",
    "CellRange",
    "GridSource",
    "GridError",
    "GoogleSheetsGrid",
    "InMemoryGrid",
]
