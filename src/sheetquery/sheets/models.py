"""Data models exchanged with grid data sources."""

from typing import Any, Optional
from pydantic import BaseModel, Field


class TableHandle(BaseModel):
    """A resolved table (a sheet tab) in a grid."""

    title: str
    sheet_id: Optional[int] = None
    row_count: int = 0
    col_count: int = 0

    @property
    def quoted_title(self) -> str:
        """Sheet title quoted for use in A1 notation."""
        return "'" + self.title.replace("'", "''") + "'"


class DataRange(BaseModel):
    """All populated cells of a table, starting at A1."""

    values: list[list[Any]] = Field(default_factory=list)
    num_cols: int = 0

    @property
    def num_rows(self) -> int:
        return len(self.values)
