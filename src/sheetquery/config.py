"""Configuration management for SheetQuery."""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class Settings(BaseModel):
    """Application settings."""

    # Google Sheets API credentials
    google_credentials_path: Path = Path(os.getenv("GOOGLE_CREDENTIALS_PATH", "credentials.json"))
    google_token_path: Path = Path(os.getenv("GOOGLE_TOKEN_PATH", "token.json"))

    # Spreadsheet used when sheet_query() is called without a grid
    spreadsheet_id: Optional[str] = os.getenv("SPREADSHEET_ID")

    # How values are written and read back through the Sheets API
    value_input_option: str = os.getenv("VALUE_INPUT_OPTION", "USER_ENTERED")
    value_render_option: str = os.getenv("VALUE_RENDER_OPTION", "UNFORMATTED_VALUE")

    # Row holding the column names when select_table() is given none
    default_heading_row: int = int(os.getenv("DEFAULT_HEADING_ROW", "1"))

    debug: bool = os.getenv("DEBUG", "false").lower() == "true"


settings = Settings()
