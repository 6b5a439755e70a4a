"""Grid data sources: Google Sheets and in-memory."""

from .base import GridError, GridSource
from .client import GoogleSheetsClient
from .grid import GoogleSheetsGrid
from .memory import InMemoryGrid
from .models import DataRange, TableHandle

__all__ = [
    "GridError",
    "GridSource",
    "GoogleSheetsClient",
    "GoogleSheetsGrid",
    "InMemoryGrid",
    "DataRange",
    "TableHandle",
]
