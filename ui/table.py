from __future__ import annotations

from typing import Any, List, Optional, TextIO

from rich import box
from rich.console import Console
from rich.table import Table as RichTable


class Table:
    """Tabular output rendered by rich against an arbitrary text stream."""

    def __init__(self, title: Optional[str] = None, headers: Optional[List[str]] = None,
                 rows: Optional[List[List[Any]]] = None) -> None:
        self.title = title
        self.headers: List[str] = list(headers or [])
        self.rows: List[List[str]] = []
        for row in rows or []:
            self.add_row(*row)

    def add_row(self, *cells: Any) -> None:
        self.rows.append(['' if c is None else str(c) for c in cells])

    def to_rich(self) -> RichTable:
        table = RichTable(title=self.title, box=box.SIMPLE, show_header=bool(self.headers))
        for header in self.headers:
            table.add_column(header)
        for row in self.rows:
            table.add_row(*row)
        return table

    def print(self, stream: TextIO) -> None:
        """Render to stream. Errors from the stream propagate to the caller."""
        console = Console(file=stream, highlight=False, soft_wrap=False)
        console.print(self.to_rich())
