"""Table grid reconstruction and heuristic table classification.

Recognized tables arrive as sparse cell lists. They are rebuilt into a
row-major grid, and the upper-cased text of all cells (the table
signature) is tested against keyword rules to decide which company
section a table describes. Rules are evaluated independently, so one
table can feed several sections.
"""

from dataclasses import dataclass, field
from enum import StrEnum

from bizfile_ocr.ocr.models import RecognizedTable

from .text import normalize


class TableCategory(StrEnum):
    """Company sections a recognized table can describe."""

    OFFICERS = "officers"
    SHAREHOLDERS = "shareholders"
    CHARGES = "charges"
    ISSUED_CAPITAL = "issued_capital"
    PAID_UP_CAPITAL = "paid_up_capital"


@dataclass
class Grid:
    """Row-major view of a recognized table with normalized cell text.

    Positions that no cell populated read as empty strings. A row's
    length is one past its highest populated column.
    """

    rows: list[list[str]] = field(default_factory=list)

    @classmethod
    def from_table(cls, table: RecognizedTable) -> "Grid":
        """Place every cell of ``table`` at its row/column position."""
        rows: list[list[str]] = []

        for table_cell in table.cells:
            r, c = table_cell.row_index, table_cell.column_index
            while len(rows) <= r:
                rows.append([])
            row = rows[r]
            while len(row) <= c:
                row.append("")
            row[c] = normalize(table_cell.content)
        return cls(rows=rows)

    @property
    def data_rows(self) -> list[list[str]]:
        """Rows after the header row."""
        return self.rows[1:]

    @property
    def signature(self) -> str:
        """Upper-cased, space-joined text of every non-empty cell."""
        return " ".join(text for row in self.rows for text in row if text).upper()


def cell(row: list[str], index: int) -> str:
    """Read a grid cell, treating positions past the row end as empty."""
    return row[index] if index < len(row) else ""


@dataclass(frozen=True)
class ClassificationRule:
    """Keyword rule matching a table signature.

    The rule matches when the signature contains any ``any_of`` term, or
    contains every term of one of the ``all_of`` groups.
    """

    category: TableCategory
    any_of: tuple[str, ...] = ()
    all_of: tuple[tuple[str, ...], ...] = ()

    def matches(self, signature: str) -> bool:
        if any(term in signature for term in self.any_of):
            return True
        return any(
            all(term in signature for term in group) for group in self.all_of
        )


DEFAULT_RULES: tuple[ClassificationRule, ...] = (
    ClassificationRule(
        TableCategory.OFFICERS, any_of=("DESIGNATION", "DATE OF APPOINTMENT")
    ),
    ClassificationRule(
        TableCategory.SHAREHOLDERS,
        any_of=("SHAREHOLDER",),
        all_of=(("SHARES", "ADDRESS"),),
    ),
    ClassificationRule(
        TableCategory.CHARGES, any_of=("CHARGE NUMBER", "AMOUNT SECURED")
    ),
    # Paid-up is checked before issued; a capital table gets exactly one.
    ClassificationRule(
        TableCategory.PAID_UP_CAPITAL, all_of=(("ORDINARY", "PAID-UP"),)
    ),
    ClassificationRule(TableCategory.ISSUED_CAPITAL, all_of=(("ORDINARY", "ISSUED"),)),
)

_CAPITAL_CATEGORIES = frozenset(
    {TableCategory.PAID_UP_CAPITAL, TableCategory.ISSUED_CAPITAL}
)


class TableClassifier:
    """Classifies table grids by keyword rules on their signature.

    Args:
        rules: Classification rules. Defaults to ``DEFAULT_RULES``.
    """

    def __init__(self, rules: tuple[ClassificationRule, ...] = DEFAULT_RULES) -> None:
        self.rules = rules

    def classify(self, grid: Grid) -> set[TableCategory]:
        """Return every category whose rule matches the grid.

        An empty set means the table is not recognized. At most one of
        the capital categories is returned.

        Args:
            grid: Reconstructed table grid.

        Returns:
            Set of matched categories.
        """
        signature = grid.signature
        categories: set[TableCategory] = set()

        for rule in self.rules:
            is_capital = rule.category in _CAPITAL_CATEGORIES
            if is_capital and categories & _CAPITAL_CATEGORIES:
                continue
            if rule.matches(signature):
                categories.add(rule.category)

        return categories
