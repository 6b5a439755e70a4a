"""Grid data source backed by one Google Sheets spreadsheet."""

import logging
from typing import Any, Optional

from googleapiclient.errors import HttpError

from ..config import settings
from .base import GridError, GridSource, pad_rows, require_table
from .client import GoogleSheetsClient, range_notation
from .models import DataRange, TableHandle

logger = logging.getLogger(__name__)


class GoogleSheetsGrid(GridSource):
    """Exposes the sheets (tabs) of a spreadsheet as tables.

    Every write goes out as its own API request and is committed when the
    request returns. ``flush`` therefore has no writes to push; it drops the
    cached sheet metadata so that later lookups see current dimensions.
    """

    def __init__(self, spreadsheet_id: str, client: Optional[GoogleSheetsClient] = None):
        self.spreadsheet_id = spreadsheet_id
        self.client = client or GoogleSheetsClient()
        self._tables: Optional[dict[str, TableHandle]] = None

    def _load_tables(self) -> dict[str, TableHandle]:
        if self._tables is None:
            info = self.client.get_spreadsheet_info(self.spreadsheet_id)
            self._tables = {
                sheet["title"]: TableHandle(
                    title=sheet["title"],
                    sheet_id=sheet["id"],
                    row_count=sheet["row_count"],
                    col_count=sheet["col_count"],
                )
                for sheet in info["sheets"]
            }
        return self._tables

    def get_table(self, name: str) -> Optional[TableHandle]:
        table = self._load_tables().get(name)
        if table is None:
            logger.warning(f"Sheet '{name}' not found in spreadsheet {self.spreadsheet_id}")
        return table

    def get_last_column(self, table: Optional[TableHandle]) -> int:
        return self.get_data_range(table).num_cols

    def get_values(
        self,
        table: Optional[TableHandle],
        row: int,
        col: int,
        num_rows: int,
        num_cols: int,
    ) -> list[list[Any]]:
        table = require_table(table)
        if num_rows < 1 or num_cols < 1:
            return []
        notation = range_notation(table.title, row, col, num_rows, num_cols)
        try:
            result = (
                self.client.service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    range=notation,
                    valueRenderOption=settings.value_render_option,
                )
                .execute()
            )
        except HttpError as e:
            raise GridError(f"Failed to read range {notation}: {e}")
        return pad_rows(result.get("values", []), num_rows, num_cols)

    def get_data_range(self, table: Optional[TableHandle]) -> DataRange:
        table = require_table(table)
        try:
            result = (
                self.client.service.spreadsheets()
                .values()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    range=table.quoted_title,
                    valueRenderOption=settings.value_render_option,
                )
                .execute()
            )
        except HttpError as e:
            raise GridError(f"Failed to read sheet '{table.title}': {e}")

        # The API trims trailing empty cells from each row
        values = result.get("values", [])
        num_cols = max((len(row) for row in values), default=0)
        return DataRange(values=pad_rows(values, len(values), num_cols), num_cols=num_cols)

    def append_row(self, table: Optional[TableHandle], values: list[Any]) -> None:
        table = require_table(table)
        try:
            (
                self.client.service.spreadsheets()
                .values()
                .append(
                    spreadsheetId=self.spreadsheet_id,
                    range=f"{table.quoted_title}!A1",
                    valueInputOption=settings.value_input_option,
                    insertDataOption="INSERT_ROWS",
                    body={"values": [values]},
                )
                .execute()
            )
        except HttpError as e:
            raise GridError(f"Failed to append row to '{table.title}': {e}")

    def delete_rows(self, table: Optional[TableHandle], row: int, count: int = 1) -> None:
        table = require_table(table)
        body = {
            "requests": [
                {
                    "deleteDimension": {
                        "range": {
                            "sheetId": table.sheet_id,
                            "dimension": "ROWS",
                            "startIndex": row - 1,
                            "endIndex": row - 1 + count,
                        }
                    }
                }
            ]
        }
        try:
            (
                self.client.service.spreadsheets()
                .batchUpdate(spreadsheetId=self.spreadsheet_id, body=body)
                .execute()
            )
        except HttpError as e:
            raise GridError(f"Failed to delete rows {row}-{row + count - 1} from '{table.title}': {e}")

    def set_values(
        self,
        table: Optional[TableHandle],
        row: int,
        col: int,
        values: list[list[Any]],
    ) -> None:
        table = require_table(table)
        num_cols = max((len(r) for r in values), default=0)
        if not values or not num_cols:
            return
        notation = range_notation(table.title, row, col, len(values), num_cols)
        try:
            (
                self.client.service.spreadsheets()
                .values()
                .update(
                    spreadsheetId=self.spreadsheet_id,
                    range=notation,
                    valueInputOption=settings.value_input_option,
                    body={"values": values},
                )
                .execute()
            )
        except HttpError as e:
            raise GridError(f"Failed to write range {notation}: {e}")

    def get_link_url(self, table: Optional[TableHandle], row: int, col: int) -> Optional[str]:
        table = require_table(table)
        notation = range_notation(table.title, row, col)
        try:
            result = (
                self.client.service.spreadsheets()
                .get(
                    spreadsheetId=self.spreadsheet_id,
                    ranges=[notation],
                    includeGridData=True,
                    fields="sheets.data.rowData.values(hyperlink,textFormatRuns)",
                )
                .execute()
            )
        except HttpError as e:
            raise GridError(f"Failed to read link at {notation}: {e}")

        for sheet in result.get("sheets", []):
            for data in sheet.get("data", []):
                for row_data in data.get("rowData", []):
                    for cell in row_data.get("values", []):
                        return _cell_link(cell)
        return None

    def flush(self) -> None:
        logger.debug(f"Flushing spreadsheet {self.spreadsheet_id}")
        self._tables = None


def _cell_link(cell: dict) -> Optional[str]:
    """Extract a link from cell grid data, preferring the cell-level hyperlink."""
    if cell.get("hyperlink"):
        return cell["hyperlink"]
    for run in cell.get("textFormatRuns", []):
        uri = run.get("format", {}).get("link", {}).get("uri")
        if uri:
            return uri
    return None
