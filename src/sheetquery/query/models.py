"""Row and cell models produced by queries."""

from dataclasses import dataclass, field
from typing import Any, Optional

from ..sheets.base import GridSource
from ..sheets.client import cell_notation
from ..sheets.models import TableHandle


@dataclass
class RowPosition:
    """Where a row sat in the grid when it was materialized."""

    row: int  # 1-based grid row
    cols: int  # grid width at materialization time


@dataclass
class RowObject:
    """A materialized row: column values keyed by heading, plus its position.

    The position is kept apart from ``data`` so a column may use any name.
    Mapping-style access reads and writes ``data``.
    """

    data: dict[str, Any] = field(default_factory=dict)
    position: RowPosition = field(default_factory=lambda: RowPosition(row=0, cols=0))

    def __getitem__(self, heading: str) -> Any:
        return self.data[heading]

    def __setitem__(self, heading: str, value: Any):
        self.data[heading] = value

    def __contains__(self, heading: object) -> bool:
        return heading in self.data

    def get(self, heading: str, default: Any = None) -> Any:
        return self.data.get(heading, default)


@dataclass
class CellRange:
    """A single cell of a table, bound to the grid it lives in."""

    source: GridSource
    table: TableHandle
    row: int
    col: int

    @property
    def a1_notation(self) -> str:
        return cell_notation(self.row, self.col)

    def get_value(self) -> Any:
        return self.source.get_values(self.table, self.row, self.col, 1, 1)[0][0]

    def set_value(self, value: Any):
        self.source.set_values(self.table, self.row, self.col, [[value]])

    def get_link_url(self) -> Optional[str]:
        return self.source.get_link_url(self.table, self.row, self.col)
