"""Row mappers turning classified table grids into company records.

Each mapper filters rows with its own acceptance check and silently
skips rows that do not look like data (sub-headers, "NIL" rows,
wrapped lines).
"""

import re
from collections.abc import Callable, Iterable

from .records import CapitalEntry, Charge, Officer, Shareholder
from .table_classifier import Grid, TableCategory, cell

_DIGIT = re.compile(r"\d")
_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")

_CAPITAL_MARKER = "SINGAPORE DOLLAR"


def parse_share_count(text: str) -> int:
    """Parse a share count such as ``"1,250"``.

    Thousands separators are removed and the leading integer is read.
    Unparseable text yields ``0``.
    """
    match = _LEADING_INT.match(text.replace(",", ""))
    if match is None:
        return 0
    return max(int(match.group(1)), 0)


def _accept_officer(row: list[str]) -> bool:
    return len(row) >= 4 and cell(row, 0) != ""


def _accept_shareholder(row: list[str]) -> bool:
    return len(row) >= 3 and _DIGIT.search(cell(row, 2)) is not None


def _accept_charge(row: list[str]) -> bool:
    first = cell(row, 0)
    return len(row) >= 3 and first != "" and first != "NIL"


def _accept_capital(row: list[str]) -> bool:
    return any(_CAPITAL_MARKER in text for text in row)


def _to_officer(row: list[str]) -> Officer:
    return Officer(
        name=cell(row, 0),
        id_number=cell(row, 1),
        address=cell(row, 2),
        nationality=cell(row, 3),
        designation=cell(row, 4) or "DIRECTOR",
        appointment_date=cell(row, 5),
    )


def _to_shareholder(row: list[str]) -> Shareholder:
    return Shareholder(
        name=cell(row, 0),
        id_number=cell(row, 1),
        shares_count=parse_share_count(cell(row, 2)),
        address=cell(row, 3),
    )


def _to_charge(row: list[str]) -> Charge:
    return Charge(
        charge_number=cell(row, 0),
        date_registered=cell(row, 1),
        currency=cell(row, 2),
        amount=cell(row, 3),
    )


def _to_capital(row: list[str]) -> CapitalEntry:
    return CapitalEntry(amount=cell(row, 0), shares=cell(row, 1))


def _map_rows(rows: Iterable[list[str]], accept: Callable, convert: Callable) -> list:
    return [convert(row) for row in rows if accept(row)]


def map_officers(grid: Grid) -> list[Officer]:
    return _map_rows(grid.data_rows, _accept_officer, _to_officer)


def map_shareholders(grid: Grid) -> list[Shareholder]:
    return _map_rows(grid.data_rows, _accept_shareholder, _to_shareholder)


def map_charges(grid: Grid) -> list[Charge]:
    return _map_rows(grid.data_rows, _accept_charge, _to_charge)


def map_capital(grid: Grid) -> list[CapitalEntry]:
    """Map capital rows; the header row is scanned too."""
    return _map_rows(grid.rows, _accept_capital, _to_capital)


ROW_MAPPERS: dict[TableCategory, Callable[[Grid], list]] = {
    TableCategory.OFFICERS: map_officers,
    TableCategory.SHAREHOLDERS: map_shareholders,
    TableCategory.CHARGES: map_charges,
    TableCategory.ISSUED_CAPITAL: map_capital,
    TableCategory.PAID_UP_CAPITAL: map_capital,
}
