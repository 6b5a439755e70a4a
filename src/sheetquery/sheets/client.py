"""Google Sheets API client."""

import logging

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError

from ..config import settings
from .base import GridError

logger = logging.getLogger(__name__)

SCOPES = ["https://www.googleapis.com/auth/spreadsheets"]


def index_to_col_letter(index: int) -> str:
    """Convert 0-based index to column letter(s)."""
    result = ""
    index += 1
    while index > 0:
        index -= 1
        result = chr(ord("A") + (index % 26)) + result
        index //= 26
    return result


def cell_notation(row: int, col: int) -> str:
    """Build A1 notation from a 1-based row and column."""
    return f"{index_to_col_letter(col - 1)}{row}"


def range_notation(sheet_title: str, row: int, col: int, num_rows: int = 1, num_cols: int = 1) -> str:
    """Build a quoted A1 range such as 'Sheet 1'!B2:D4 from 1-based coordinates."""
    start = cell_notation(row, col)
    end = cell_notation(row + num_rows - 1, col + num_cols - 1)
    quoted = "'" + sheet_title.replace("'", "''") + "'"
    if start == end:
        return f"{quoted}!{start}"
    return f"{quoted}!{start}:{end}"


class GoogleSheetsClient:
    """Client for interacting with Google Sheets API."""

    def __init__(self):
        self._service = None
        self._credentials = None

    def _get_credentials(self) -> Credentials:
        """Get or refresh OAuth2 credentials."""
        creds = None

        if settings.google_token_path.exists():
            creds = Credentials.from_authorized_user_file(str(settings.google_token_path), SCOPES)

        if not creds or not creds.valid:
            if creds and creds.expired and creds.refresh_token:
                creds.refresh(Request())
            else:
                if not settings.google_credentials_path.exists():
                    raise FileNotFoundError(
                        f"Google credentials file not found at {settings.google_credentials_path}. "
                        "Please download it from Google Cloud Console."
                    )
                flow = InstalledAppFlow.from_client_secrets_file(
                    str(settings.google_credentials_path), SCOPES
                )
                creds = flow.run_local_server(port=0)

            # Save credentials for next run
            settings.google_token_path.parent.mkdir(parents=True, exist_ok=True)
            with open(settings.google_token_path, "w") as token:
                token.write(creds.to_json())

        return creds

    @property
    def service(self):
        """Get or create the Sheets API service."""
        if self._service is None:
            self._credentials = self._get_credentials()
            self._service = build("sheets", "v4", credentials=self._credentials)
        return self._service

    def get_spreadsheet_info(self, spreadsheet_id: str) -> dict:
        """Get basic information about a spreadsheet and its sheets."""
        try:
            result = (
                self.service.spreadsheets()
                .get(
                    spreadsheetId=spreadsheet_id,
                    fields="spreadsheetId,properties.title,sheets.properties",
                )
                .execute()
            )
            sheets = result.get("sheets", [])
            logger.debug(f"Loaded {len(sheets)} sheets from spreadsheet {spreadsheet_id}")
            return {
                "id": result["spreadsheetId"],
                "title": result["properties"]["title"],
                "sheets": [
                    {
                        "id": sheet["properties"]["sheetId"],
                        "title": sheet["properties"]["title"],
                        "row_count": sheet["properties"]["gridProperties"]["rowCount"],
                        "col_count": sheet["properties"]["gridProperties"]["columnCount"],
                    }
                    for sheet in sheets
                ],
            }
        except HttpError as e:
            raise GridError(f"Failed to get spreadsheet info: {e}")
