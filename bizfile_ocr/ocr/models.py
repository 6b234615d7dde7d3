"""Recognition result model consumed by the extraction pipeline.

Wraps the layout-analysis output (full text plus table cells) in plain
dataclasses, built either from the Azure SDK result object or from its
JSON form.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass
class TableCell:
    """A single recognized table cell at a zero-based row/column position."""

    row_index: int
    column_index: int
    content: str


@dataclass
class RecognizedTable:
    """A recognized table as a sparse list of cells."""

    cells: list[TableCell] = field(default_factory=list)


@dataclass
class RecognitionResult:
    """Text and tables recognized in a document.

    Attributes:
        content: Full recognized text of the document.
        tables: Recognized tables in document order.
        raw: JSON-serializable payload as returned by the service.
    """

    content: str = ""
    tables: list[RecognizedTable] = field(default_factory=list)
    raw: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "RecognitionResult":
        """Build a result from its JSON form.

        Accepts both snake_case (``row_index``) and camelCase (``rowIndex``)
        cell keys.

        Raises:
            ValueError: If the payload or one of its cells is malformed.
        """
        if not isinstance(data, dict):
            raise ValueError("Recognition result must be a JSON object")

        tables: list[RecognizedTable] = []
        for table in data.get("tables") or []:
            if not isinstance(table, dict):
                raise ValueError(f"Table must be a JSON object: {table!r}")
            cells = [_cell_from_dict(cell) for cell in table.get("cells") or []]
            tables.append(RecognizedTable(cells=cells))

        return cls(content=data.get("content") or "", tables=tables, raw=data)

    @classmethod
    def from_sdk(cls, result: Any) -> "RecognitionResult":
        """Build a result from an ``AnalyzeResult`` returned by the SDK.

        Raises:
            ValueError: If the object does not look like an analysis result.
        """
        if result is None or not hasattr(result, "content"):
            raise ValueError("Malformed analysis result: missing content")

        tables = [
            RecognizedTable(
                cells=[
                    TableCell(
                        row_index=cell.row_index,
                        column_index=cell.column_index,
                        content=cell.content or "",
                    )
                    for cell in table.cells or []
                ]
            )
            for table in result.tables or []
        ]
        raw = result.to_dict() if hasattr(result, "to_dict") else {}
        return cls(content=result.content or "", tables=tables, raw=raw)


def _cell_from_dict(cell: Any) -> TableCell:
    if not isinstance(cell, dict):
        raise ValueError(f"Table cell must be a JSON object: {cell!r}")
    row = cell.get("row_index", cell.get("rowIndex"))
    column = cell.get("column_index", cell.get("columnIndex"))
    if row is None or column is None:
        raise ValueError(f"Table cell is missing its position: {cell!r}")
    try:
        position = int(row), int(column)
    except TypeError as exc:
        raise ValueError(f"Table cell position is not a number: {cell!r}") from exc
    return TableCell(
        row_index=position[0],
        column_index=position[1],
        content=cell.get("content") or "",
    )
