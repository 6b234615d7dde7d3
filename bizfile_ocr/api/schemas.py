"""Pydantic request/response schemas for the FastAPI endpoints."""

from typing import Any

from pydantic import BaseModel, Field


class OfficerSchema(BaseModel):
    """Response schema for a company officer."""

    name: str
    id_number: str
    address: str
    nationality: str
    designation: str
    appointment_date: str


class ShareholderSchema(BaseModel):
    """Response schema for a shareholder."""

    name: str
    id_number: str
    shares_count: int = Field(ge=0)
    address: str


class CapitalEntrySchema(BaseModel):
    """Response schema for an issued or paid-up capital line."""

    amount: str
    shares: str
    currency: str
    type: str


class ChargeSchema(BaseModel):
    """Response schema for a registered charge."""

    charge_number: str
    date_registered: str
    currency: str
    amount: str


class CompanyRecordSchema(BaseModel):
    """Response schema for the structured BizFile record."""

    company_name: str = ""
    uen: str = ""
    incorporation_date: str = ""
    company_type: str = ""
    financial_year_end: str = ""
    registered_address: str = ""
    business_activity_primary: str = ""
    business_activity_secondary: str = ""
    officers: list[OfficerSchema] = []
    shareholders: list[ShareholderSchema] = []
    issued_share_capital: list[CapitalEntrySchema] = []
    paid_up_capital: list[CapitalEntrySchema] = []
    charges: list[ChargeSchema] = []
    file_path: str | None = None


class OCRPayload(BaseModel):
    """Wrapper holding the extracted record."""

    data: CompanyRecordSchema


class OCRResponse(BaseModel):
    """Response schema for a successful BizFile upload."""

    status: int = 200
    message: str
    payload: OCRPayload
    data: dict[str, Any]


class ErrorResponse(BaseModel):
    """Response schema for a failed request."""

    status: int
    message: str
    error: str | None = None


class WelcomeResponse(BaseModel):
    """Response schema for the root endpoint."""

    message: str


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
    document_analysis_configured: bool
