"""Fluent row queries over grid data sources."""

from .builder import NoTableSelectedError, SheetQueryBuilder, sheet_query
from .models import CellRange, RowObject, RowPosition

__all__ = [
    "NoTableSelectedError",
    "SheetQueryBuilder",
    "sheet_query",
    "CellRange",
    "RowObject",
    "RowPosition",
]
