"""FastAPI application for the BizFile OCR API.

Accepts BizFile PDF uploads, runs them through document analysis and
returns the structured company record alongside the raw OCR result.
"""

import asyncio
from pathlib import Path
from typing import Annotated

from fastapi import FastAPI, File, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from bizfile_ocr import __version__
from bizfile_ocr.extraction.assembler import DocumentAssembler
from bizfile_ocr.ocr.document_analysis import DocumentAnalysisService
from bizfile_ocr.utils.config import load_config
from bizfile_ocr.utils.logger import get_logger

from .schemas import (
    CompanyRecordSchema,
    ErrorResponse,
    HealthResponse,
    OCRPayload,
    OCRResponse,
    WelcomeResponse,
)
from .storage import UploadStore

logger = get_logger(__name__)

app = FastAPI(
    title="BizFile OCR API",
    description="Extract structured company data from BizFile extracts",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "application/octet-stream",
    "image/png",
    "image/jpeg",
    "image/tiff",
}


async def _get_components() -> tuple[
    UploadStore, DocumentAnalysisService, DocumentAssembler
]:
    """Initialize the per-request processing components.

    Config and pattern files are read in a worker thread. The service is
    built last, so a loading failure leaves no client open.

    Returns:
        Tuple of (upload_store, analysis_service, assembler).
    """
    config = await asyncio.to_thread(load_config)
    store = UploadStore(Path(config.storage.upload_dir), config.storage.retain_uploads)
    assembler = await asyncio.to_thread(
        DocumentAssembler.from_config, config.extraction
    )
    service = DocumentAnalysisService.from_config(config.document_analysis)
    return store, service, assembler


def _error_response(
    status_code: int, message: str, error: str | None = None
) -> JSONResponse:
    body = ErrorResponse(status=status_code, message=message, error=error)
    return JSONResponse(
        status_code=status_code, content=body.model_dump(exclude_none=True)
    )


@app.get("/", response_model=WelcomeResponse)
async def welcome() -> WelcomeResponse:
    """Return the static welcome message."""
    return WelcomeResponse(message="Welcome to azure OCR api.")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return service health and whether document analysis is configured."""
    config = await asyncio.to_thread(load_config)
    return HealthResponse(
        status="healthy",
        version=__version__,
        document_analysis_configured=config.document_analysis.is_configured,
    )


@app.post(
    "/ocr",
    response_model=OCRResponse,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def upload_bizfile(
    pdf: Annotated[UploadFile | None, File()] = None,
) -> OCRResponse | JSONResponse:
    """Extract a company record from an uploaded BizFile PDF.

    Args:
        pdf: Uploaded BizFile document.

    Returns:
        The structured record under ``payload.data`` and the raw OCR
        result under ``data``.
    """
    if pdf is None:
        return _error_response(400, "No file uploaded.")

    if pdf.content_type and pdf.content_type not in _ALLOWED_CONTENT_TYPES:
        return _error_response(400, f"Unsupported file type: {pdf.content_type}")

    content = await pdf.read()
    if not content:
        return _error_response(400, "Uploaded file is empty.")

    try:
        store, service, assembler = await _get_components()
        async with service:
            file_path = await asyncio.to_thread(
                store.save, content, Path(pdf.filename or "").suffix
            )
            try:
                result = await service.analyze(content)
            finally:
                await asyncio.to_thread(store.discard, file_path)

        record = assembler.assemble(result)
        record.file_path = str(file_path)

        return OCRResponse(
            status=200,
            message="BizFile uploaded successfully.",
            payload=OCRPayload(
                data=CompanyRecordSchema.model_validate(record.to_dict())
            ),
            data=result.raw,
        )
    except Exception as exc:
        logger.exception("OCR failed for %s", pdf.filename)
        return _error_response(500, "OCR failed", str(exc))
