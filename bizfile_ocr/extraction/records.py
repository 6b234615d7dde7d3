"""Structured company record produced from a BizFile extract."""

from dataclasses import asdict, dataclass, field
from typing import Any


@dataclass
class Officer:
    """A company officer listed in the officers table."""

    name: str
    id_number: str
    address: str
    nationality: str
    designation: str = "DIRECTOR"
    appointment_date: str = ""


@dataclass
class Shareholder:
    """A shareholder and the number of shares held."""

    name: str
    id_number: str
    shares_count: int = 0
    address: str = ""


@dataclass
class CapitalEntry:
    """An issued or paid-up share capital line."""

    amount: str
    shares: str
    currency: str = "SGD"
    type: str = "ORDINARY"


@dataclass
class Charge:
    """A charge registered against the company."""

    charge_number: str
    date_registered: str
    currency: str
    amount: str


@dataclass
class CompanyRecord:
    """All information extracted from a single BizFile document."""

    company_name: str = ""
    uen: str = ""
    incorporation_date: str = ""
    company_type: str = ""
    financial_year_end: str = ""
    registered_address: str = ""
    business_activity_primary: str = ""
    business_activity_secondary: str = ""
    officers: list[Officer] = field(default_factory=list)
    shareholders: list[Shareholder] = field(default_factory=list)
    issued_share_capital: list[CapitalEntry] = field(default_factory=list)
    paid_up_capital: list[CapitalEntry] = field(default_factory=list)
    charges: list[Charge] = field(default_factory=list)
    file_path: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
