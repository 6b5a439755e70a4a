"""In-memory grid data source."""

import logging
from typing import Any, Optional

from .base import GridError, GridSource, pad_rows, require_table
from .models import DataRange, TableHandle

logger = logging.getLogger(__name__)


class InMemoryGrid(GridSource):
    """Tables held as lists of rows, for offline use and tests.

    Hyperlinks are kept apart from the values, keyed by 1-based
    ``(row, col)``, and move with their rows when rows are deleted.
    """

    def __init__(
        self,
        tables: Optional[dict[str, list[list[Any]]]] = None,
        links: Optional[dict[str, dict[tuple[int, int], str]]] = None,
    ):
        self._tables: dict[str, list[list[Any]]] = {
            name: [list(row) for row in rows] for name, rows in (tables or {}).items()
        }
        self._links: dict[str, dict[tuple[int, int], str]] = {
            name: dict(cells) for name, cells in (links or {}).items()
        }
        self.flush_count = 0

    def add_table(self, name: str, rows: Optional[list[list[Any]]] = None) -> TableHandle:
        """Create (or replace) a table and return its handle."""
        self._tables[name] = [list(row) for row in rows or []]
        self._links.pop(name, None)
        return self.get_table(name)

    def set_link_url(self, name: str, row: int, col: int, url: str) -> None:
        self._links.setdefault(name, {})[(row, col)] = url

    def rows(self, name: str) -> list[list[Any]]:
        """Return a copy of a table's stored rows."""
        return [list(row) for row in self._tables[name]]

    def get_table(self, name: str) -> Optional[TableHandle]:
        if name not in self._tables:
            return None
        rows = self._tables[name]
        return TableHandle(
            title=name,
            sheet_id=list(self._tables).index(name),
            row_count=len(rows),
            col_count=self._width(rows),
        )

    def get_last_column(self, table: Optional[TableHandle]) -> int:
        return self._width(self._rows(table))

    def get_values(
        self,
        table: Optional[TableHandle],
        row: int,
        col: int,
        num_rows: int,
        num_cols: int,
    ) -> list[list[Any]]:
        rows = self._rows(table)
        window = [r[col - 1:col - 1 + num_cols] for r in rows[row - 1:row - 1 + num_rows]]
        return pad_rows(window, num_rows, num_cols)

    def get_data_range(self, table: Optional[TableHandle]) -> DataRange:
        rows = self._rows(table)
        num_cols = self._width(rows)
        return DataRange(values=pad_rows(rows, len(rows), num_cols), num_cols=num_cols)

    def append_row(self, table: Optional[TableHandle], values: list[Any]) -> None:
        rows = self._rows(table)
        # Trailing blank rows are not "populated"
        while rows and not any(value not in ("", None) for value in rows[-1]):
            rows.pop()
        rows.append(list(values))

    def delete_rows(self, table: Optional[TableHandle], row: int, count: int = 1) -> None:
        table = require_table(table)
        rows = self._rows(table)
        del rows[row - 1:row - 1 + count]

        links = self._links.get(table.title)
        if links:
            shifted = {}
            for (link_row, link_col), url in links.items():
                if link_row < row:
                    shifted[(link_row, link_col)] = url
                elif link_row >= row + count:
                    shifted[(link_row - count, link_col)] = url
            self._links[table.title] = shifted

    def set_values(
        self,
        table: Optional[TableHandle],
        row: int,
        col: int,
        values: list[list[Any]],
    ) -> None:
        rows = self._rows(table)
        for offset, new_row in enumerate(values):
            index = row - 1 + offset
            while len(rows) <= index:
                rows.append([])
            target = rows[index]
            end = col - 1 + len(new_row)
            if len(target) < end:
                target.extend([""] * (end - len(target)))
            target[col - 1:end] = new_row

    def get_link_url(self, table: Optional[TableHandle], row: int, col: int) -> Optional[str]:
        table = require_table(table)
        return self._links.get(table.title, {}).get((row, col))

    def flush(self) -> None:
        self.flush_count += 1
        logger.debug(f"Flush #{self.flush_count}")

    def _rows(self, table: Optional[TableHandle]) -> list[list[Any]]:
        title = require_table(table).title
        if title not in self._tables:
            raise GridError(f"Table '{title}' no longer exists")
        return self._tables[title]

    @staticmethod
    def _width(rows: list[list[Any]]) -> int:
        return max((len(row) for row in rows), default=0)
