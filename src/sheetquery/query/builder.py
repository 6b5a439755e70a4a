"""Fluent query builder over a grid data source."""

import logging
from collections.abc import Iterable, Mapping
from typing import Any, Callable, Optional, Union

from ..config import settings
from ..sheets.base import GridSource
from ..sheets.grid import GoogleSheetsGrid
from ..sheets.models import TableHandle
from .models import CellRange, RowObject, RowPosition
from .values import merge_row, project_row

logger = logging.getLogger(__name__)

WhereFn = Callable[[RowObject], bool]
UpdateFn = Callable[[RowObject], Optional[Union[RowObject, Mapping[str, Any]]]]


class NoTableSelectedError(RuntimeError):
    """Raised when an operation needs a table and none was selected."""

    def __init__(self):
        super().__init__("No table selected. Select a table with .select_table(name)")


class SheetQueryBuilder:
    """Query, insert, update and delete rows of one table in a grid.

    Rows are read from the grid once per epoch and cached. Every delete or
    update pass ends by clearing the cache and flushing the grid, which
    starts a new epoch; the next read materializes the rows again.
    """

    def __init__(self, source: GridSource):
        self.source = source
        self.column_names: list[str] = []
        self.table_name: Optional[str] = None
        self.heading_row: int = settings.default_heading_row
        self.where_fn: Optional[WhereFn] = None

        self._table: Optional[TableHandle] = None
        self._table_resolved = False
        self._headings: list[str] = []
        self._rows: Optional[list[RowObject]] = None
        self._epoch = 0

    @property
    def epoch(self) -> int:
        """Number of cache invalidations so far."""
        return self._epoch

    def select(self, column_names: Union[str, list[str]]) -> "SheetQueryBuilder":
        """Record the columns of interest. Nothing reads this yet."""
        self.column_names = list(column_names) if isinstance(column_names, (list, tuple)) else [column_names]
        return self

    def select_table(self, name: str, heading_row: Optional[int] = None) -> "SheetQueryBuilder":
        """Name the table to operate on and the 1-based row holding its headings."""
        if name != self.table_name:
            self._table = None
            self._table_resolved = False
        self.table_name = name
        self.heading_row = heading_row or settings.default_heading_row
        self._headings = []
        self._rows = None
        return self

    def where(self, fn: WhereFn) -> "SheetQueryBuilder":
        """Filter rows before any read or write."""
        self.where_fn = fn
        return self

    def resolve_table(self) -> Optional[TableHandle]:
        """Return the selected table's handle, or None if the grid has no such table."""
        if not self.table_name:
            raise NoTableSelectedError()

        if not self._table_resolved:
            self._table = self.source.get_table(self.table_name)
            self._table_resolved = True

        return self._table

    def materialize(self) -> list[RowObject]:
        """Read every row of the table, including the heading row.

        Cached until the next ``clear_cache``.
        """
        if self._rows is not None:
            logger.debug(f"Using {len(self._rows)} cached rows of '{self.table_name}' (epoch {self._epoch})")
            return self._rows

        table = self.resolve_table()
        if table is None:
            return []

        data_range = self.source.get_data_range(table)
        values = data_range.values
        num_cols = len(values[0]) if values else 0
        zh = self.heading_row - 1
        headings = self._headings = _heading_keys(values[zh]) if 0 <= zh < len(values) else []

        rows = []
        for r, raw in enumerate(values):
            data = {}
            for c in range(min(num_cols, len(headings))):
                data[headings[c]] = raw[c]
            rows.append(RowObject(data=data, position=RowPosition(row=r + 1, cols=num_cols)))

        logger.debug(f"Materialized {len(rows)} rows x {num_cols} columns from '{self.table_name}'")
        self._rows = rows
        return rows

    def get_rows(self) -> list[RowObject]:
        """Return the rows matching the where() filter, in grid order."""
        rows = self.materialize()
        return [row for row in rows if self.where_fn(row)] if self.where_fn else rows

    def get_headings(self) -> list[str]:
        """Return the column names from the heading row."""
        if not self._headings:
            table = self.resolve_table()
            if table is None:
                return []

            num_cols = self.source.get_last_column(table)
            if num_cols:
                values = self.source.get_values(table, self.heading_row, 1, 1, num_cols)
                self._headings = _heading_keys(values[0]) if values else []

        return self._headings

    def get_cells(self) -> list[dict[str, CellRange]]:
        """Return a cell reference per heading for every matching row."""
        rows = self.get_rows()
        table = self.resolve_table()
        headings = self.get_headings()
        return [
            {
                heading: CellRange(self.source, table, row.position.row, index + 1)
                for index, heading in enumerate(headings)
            }
            for row in rows
        ]

    def get_urls(self) -> list[dict[str, str]]:
        """Return the hyperlink of every linked cell in each matching row.

        Headings whose cell has no link are left out.
        """
        rows = self.get_rows()
        table = self.resolve_table()
        headings = self.get_headings()
        urls = []
        for row in rows:
            url = {}
            for index, heading in enumerate(headings):
                link = self.source.get_link_url(table, row.position.row, index + 1)
                if link:
                    url[heading] = link
            urls.append(url)
        return urls

    def insert_rows(self, new_rows: Iterable[Union[RowObject, Mapping[str, Any], None]]) -> "SheetQueryBuilder":
        """Append rows given as mappings of heading to value.

        Does not touch the row cache; inserted rows show up after the next
        ``clear_cache``.
        """
        table = self.resolve_table()
        headings = self.get_headings()

        count = 0
        for row in new_rows:
            if not isinstance(row, (RowObject, Mapping)):
                continue
            data = row.data if isinstance(row, RowObject) else row
            self.source.append_row(table, project_row(data, headings))
            count += 1

        logger.info(f"Appended {count} rows to '{self.table_name}'")
        return self

    def delete_rows(self) -> "SheetQueryBuilder":
        """Delete the matching rows from the grid.

        Each delete shifts the rows below it up by one, so the i-th delete
        targets ``row - i``. This holds only while the matching rows are in
        ascending grid order without duplicates.
        """
        rows = self.get_rows()
        table = self.resolve_table()

        for i, row in enumerate(rows):
            self.source.delete_rows(table, row.position.row - i, 1)

        logger.info(f"Deleted {len(rows)} rows from '{self.table_name}'")
        self.clear_cache()
        return self

    def update_rows(self, update_fn: UpdateFn) -> "SheetQueryBuilder":
        """Apply update_fn to every matching row and write the results."""
        rows = self.get_rows()

        for row in rows:
            self.update_row(row, update_fn)

        logger.info(f"Updated {len(rows)} rows in '{self.table_name}'")
        self.clear_cache()
        return self

    def update_row(self, row: RowObject, update_fn: UpdateFn) -> "SheetQueryBuilder":
        """Write update_fn(row) back over the row's current cells.

        update_fn may return a RowObject, a mapping, or None to keep the row
        it mutated in place. Falsy new values leave the current cell as is.
        """
        updated = update_fn(row)
        if updated is None:
            updated = row
        data = updated.data if isinstance(updated, RowObject) else updated
        position = row.position

        new_values = project_row(data, self.get_headings())
        width = max(position.cols, len(new_values))
        table = self.resolve_table()

        current = self.source.get_values(table, position.row, 1, 1, width)
        merged = merge_row(new_values, current[0] if current else [])
        self.source.set_values(table, position.row, 1, [merged])
        return self

    def clear_cache(self) -> "SheetQueryBuilder":
        """Drop cached rows and headings, then flush the grid."""
        self._rows = None
        self._headings = []
        self._epoch += 1

        self.source.flush()
        return self


def _heading_keys(values: list[Any]) -> list[str]:
    return ["" if value is None else str(value) for value in values]


def sheet_query(source: Optional[GridSource] = None) -> SheetQueryBuilder:
    """Start a new query.

    Without a source, queries run against the Google spreadsheet named by
    the SPREADSHEET_ID setting.
    """
    if source is None:
        if not settings.spreadsheet_id:
            raise ValueError("SPREADSHEET_ID is required when no grid source is given")
        source = GoogleSheetsGrid(settings.spreadsheet_id)

    return SheetQueryBuilder(source)
