"""Tabular nodes: Cell, Row and Table."""

from __future__ import annotations

from typing import TYPE_CHECKING

from featuremodel.models import _fragments
from featuremodel.models.base import Model, NodeKind, build_model
from featuremodel.models.capabilities import Containing, TableHolder, Textual

if TYPE_CHECKING:
    from featuremodel.parsing import DialectKeywords, Record


class Cell(Textual, Model):
    """One value of a table row.

    Attributes:
        value: The unescaped cell text.
    """

    kind = NodeKind.CELL
    text_attribute = "value"

    def __init__(self, value: str = "") -> None:
        super().__init__()
        self.value = value

    def _populate(self, record: Record) -> None:
        super()._populate(record)
        self.value = record.text

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        return _fragments.in_step(f"| {source_text} |", keywords)

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        block = _fragments.first_block(document)
        if block is None or not block.rows or not block.rows[0].cells:
            return None
        return block.rows[0].cells[0]

    def __repr__(self) -> str:
        return f"<Cell {self.value!r}>"


class Row(Containing, Model):
    """One line of a table.

    Attributes:
        cells: Cells in column order.
    """

    kind = NodeKind.ROW

    def __init__(self) -> None:
        super().__init__()
        self.cells: list[Cell] = []

    @classmethod
    def from_values(cls, values: list[str]) -> Row:
        """Build a row of cells holding ``values``."""
        row = cls()
        row.cells = [row._adopt(Cell(value)) for value in values]
        return row

    def _populate(self, record: Record) -> None:
        super()._populate(record)
        self.cells = [self._adopt(build_model(cell)) for cell in record.cells]

    @property
    def values(self) -> list[str]:
        return [cell.value for cell in self.cells]

    def children(self) -> list[Model]:
        return list(self.cells)

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        return _fragments.in_step(source_text, keywords)

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        block = _fragments.first_block(document)
        if block is None or not block.rows:
            return None
        return block.rows[0]


class Table(TableHolder, Model):
    """A step's tabular argument.

    Attributes:
        rows: Rows in source order.
    """

    kind = NodeKind.TABLE

    def children(self) -> list[Model]:
        return list(self.rows)

    @classmethod
    def _wrap_source(cls, source_text: str, keywords: DialectKeywords) -> str:
        return _fragments.in_step(source_text, keywords)

    @classmethod
    def _select_record(cls, document: Record) -> Record | None:
        return _fragments.first_block(document)
