"""Base grid data source interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from .models import DataRange, TableHandle


class GridError(RuntimeError):
    """Raised when a grid rejects a read or write."""


class GridSource(ABC):
    """Abstract base class for the tabular grids a query runs against.

    Rows and columns are 1-based throughout. A table that does not exist
    resolves to ``None``; every other method given ``None`` raises
    ``GridError``.
    """

    @abstractmethod
    def get_table(self, name: str) -> Optional[TableHandle]:
        """Resolve a table by name."""
        pass

    @abstractmethod
    def get_last_column(self, table: Optional[TableHandle]) -> int:
        """Return the number of the last column holding data."""
        pass

    @abstractmethod
    def get_values(
        self,
        table: Optional[TableHandle],
        row: int,
        col: int,
        num_rows: int,
        num_cols: int,
    ) -> list[list[Any]]:
        """Read a rectangle of cells, padded with empty strings."""
        pass

    @abstractmethod
    def get_data_range(self, table: Optional[TableHandle]) -> DataRange:
        """Read every populated row and column starting at A1."""
        pass

    @abstractmethod
    def append_row(self, table: Optional[TableHandle], values: list[Any]) -> None:
        """Write one new row after the last populated row."""
        pass

    @abstractmethod
    def delete_rows(self, table: Optional[TableHandle], row: int, count: int = 1) -> None:
        """Remove rows and shift the rows below them up."""
        pass

    @abstractmethod
    def set_values(
        self,
        table: Optional[TableHandle],
        row: int,
        col: int,
        values: list[list[Any]],
    ) -> None:
        """Overwrite a rectangle of cells."""
        pass

    @abstractmethod
    def get_link_url(self, table: Optional[TableHandle], row: int, col: int) -> Optional[str]:
        """Return the hyperlink target of a cell, if it has one."""
        pass

    @abstractmethod
    def flush(self) -> None:
        """Make buffered writes visible before returning."""
        pass


def require_table(table: Optional[TableHandle]) -> TableHandle:
    """Return the table, or raise if it was never resolved."""
    if table is None:
        raise GridError("Table not found")
    return table


def pad_rows(values: list[list[Any]], num_rows: int, num_cols: int) -> list[list[Any]]:
    """Pad or trim a ragged 2D list to an exact rectangle of empty strings."""
    result = []
    for r in range(num_rows):
        source = values[r] if r < len(values) else []
        row = list(source[:num_cols])
        row.extend([""] * (num_cols - len(row)))
        result.append(row)
    return result
