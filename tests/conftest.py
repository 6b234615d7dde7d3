"""Shared test fixtures for the BizFile OCR test suite."""

from pathlib import Path

import pytest

from bizfile_ocr.ocr.models import RecognitionResult, RecognizedTable, TableCell


def make_table(rows: list[list[str]]) -> RecognizedTable:
    """Build a recognized table from a dense list of rows."""
    return RecognizedTable(
        cells=[
            TableCell(row_index=r, column_index=c, content=text)
            for r, row in enumerate(rows)
            for c, text in enumerate(row)
        ]
    )


@pytest.fixture
def table_factory():
    """Return a helper building recognized tables from dense rows."""
    return make_table


SAMPLE_CONTENT = (
    "ACCOUNTING AND CORPORATE REGULATORY AUTHORITY\n"
    "Name of Company: ACME\nHOLDINGS PTE. LTD.\n"
    "UEN: 201912345A\n"
    "Incorporation Date: 05/03/2019\n"
    "Company Type PRIVATE COMPANY LIMITED BY SHARES :\n"
    "FYE As At Date of Last AR: 31/12/2023\n"
    "Registered Office Address: 1 RAFFLES PLACE\n#20-01 SINGAPORE 048616\n"
    "Date of Address: 05/03/2019\n"
    "Primary Activity: DEVELOPMENT OF SOFTWARE (62011)\n"
    "Secondary Activity: MANAGEMENT CONSULTANCY (70201)\n"
    "Verify Document at www.bizfile.gov.sg\n"
)


@pytest.fixture
def sample_content() -> str:
    """Recognized text of a typical BizFile extract."""
    return SAMPLE_CONTENT


@pytest.fixture
def sample_result() -> RecognitionResult:
    """A recognition result with one table for every company section."""
    tables = [
        make_table(
            [
                ["Name", "ID", "Address", "Nationality", "Designation", "Date of Appointment"],
                ["JOHN TAN", "S1234567A", "1 Street Rd", "SINGAPOREAN", "DIRECTOR", "05/03/2019"],
                ["MARY LIM", "S7654321B", "2 Street Rd", "SINGAPOREAN", "SECRETARY", "06/03/2019"],
            ]
        ),
        make_table(
            [
                ["Shareholder Name", "ID", "No. of Shares", "Address"],
                ["JOHN TAN", "S1234567A", "1,250", "1 Street Rd"],
            ]
        ),
        make_table(
            [
                ["Issued Ordinary", "Number of Shares", "Currency", "Share Type"],
                ["100000", "100000", "SINGAPORE DOLLARS", "ORDINARY"],
            ]
        ),
        make_table(
            [
                ["Paid-Up Ordinary", "Number of Shares", "Currency", "Share Type"],
                ["50000", "50000", "SINGAPORE DOLLARS", "ORDINARY"],
            ]
        ),
        make_table(
            [
                ["Charge Number", "Date Registered", "Currency", "Amount Secured"],
                ["C201900001", "01/06/2019", "SGD", "ALL MONIES"],
                ["NIL", "", "", ""],
            ]
        ),
    ]
    return RecognitionResult(
        content=SAMPLE_CONTENT, tables=tables, raw={"content": SAMPLE_CONTENT}
    )


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def config_dir(project_root: Path) -> Path:
    """Return the configs directory path."""
    return project_root / "configs"
