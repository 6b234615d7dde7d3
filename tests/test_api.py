"""Tests for the FastAPI REST endpoints."""

import asyncio
import threading
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

from bizfile_ocr.api.app import _get_components, app
from bizfile_ocr.api.storage import UploadStore
from bizfile_ocr.extraction.assembler import DocumentAssembler
from bizfile_ocr.ocr.document_analysis import DocumentAnalysisError
from bizfile_ocr.ocr.models import RecognitionResult

_PDF_BYTES = b"%PDF-1.4\n%bizfile\n"


@pytest.fixture
def client() -> TestClient:
    """Create a FastAPI test client."""
    return TestClient(app)


def _make_service(
    result: RecognitionResult | None = None, error: Exception | None = None
) -> MagicMock:
    """Create a mock analysis service usable as an async context manager."""
    service = MagicMock()
    service.analyze = AsyncMock(return_value=result, side_effect=error)
    return service


def _upload(client: TestClient, content: bytes = _PDF_BYTES, content_type: str = "application/pdf"):
    return client.post("/ocr", files={"pdf": ("bizfile.pdf", content, content_type)})


class TestWelcomeEndpoint:
    """Tests for the / endpoint."""

    def test_welcome_message(self, client: TestClient) -> None:
        response = client.get("/")
        assert response.status_code == 200
        assert response.json() == {"message": "Welcome to azure OCR api."}


class TestHealthEndpoint:
    """Tests for the /health endpoint."""

    def test_health_returns_ok(self, client: TestClient) -> None:
        response = client.get("/health")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["version"] == "1.0.0"
        assert isinstance(data["document_analysis_configured"], bool)


class TestOCREndpoint:
    """Tests for the /ocr endpoint."""

    @patch("bizfile_ocr.api.app._get_components", new_callable=AsyncMock)
    def test_upload_success(
        self,
        mock_components: MagicMock,
        client: TestClient,
        sample_result: RecognitionResult,
        tmp_path: Path,
    ) -> None:
        service = _make_service(result=sample_result)
        mock_components.return_value = (UploadStore(tmp_path), service, DocumentAssembler())

        response = _upload(client)

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == 200
        assert body["message"] == "BizFile uploaded successfully."
        record = body["payload"]["data"]
        assert record["company_name"] == "ACME HOLDINGS PTE. LTD."
        assert record["uen"] == "201912345A"
        assert len(record["officers"]) == 2
        assert record["shareholders"][0]["shares_count"] == 1250
        assert len(record["paid_up_capital"]) == 1
        assert body["data"] == sample_result.raw
        service.analyze.assert_awaited_once_with(_PDF_BYTES)

    @patch("bizfile_ocr.api.app._get_components", new_callable=AsyncMock)
    def test_upload_is_retained(
        self,
        mock_components: MagicMock,
        client: TestClient,
        sample_result: RecognitionResult,
        tmp_path: Path,
    ) -> None:
        mock_components.return_value = (
            UploadStore(tmp_path),
            _make_service(result=sample_result),
            DocumentAssembler(),
        )

        response = _upload(client)

        stored = Path(response.json()["payload"]["data"]["file_path"])
        assert stored.parent == tmp_path
        assert stored.suffix == ".pdf"
        assert stored.read_bytes() == _PDF_BYTES

    @patch("bizfile_ocr.api.app._get_components", new_callable=AsyncMock)
    def test_upload_discarded_when_not_retained(
        self,
        mock_components: MagicMock,
        client: TestClient,
        sample_result: RecognitionResult,
        tmp_path: Path,
    ) -> None:
        mock_components.return_value = (
            UploadStore(tmp_path, retain=False),
            _make_service(result=sample_result),
            DocumentAssembler(),
        )

        response = _upload(client)

        assert response.status_code == 200
        assert list(tmp_path.iterdir()) == []

    def test_missing_file(self, client: TestClient) -> None:
        response = client.post("/ocr")
        assert response.status_code == 400
        assert response.json() == {"status": 400, "message": "No file uploaded."}

    def test_wrong_field_name(self, client: TestClient) -> None:
        response = client.post(
            "/ocr", files={"document": ("bizfile.pdf", _PDF_BYTES, "application/pdf")}
        )
        assert response.status_code == 400

    def test_unsupported_file_type(self, client: TestClient) -> None:
        response = _upload(client, b"plain text", "text/plain")
        assert response.status_code == 400
        assert "Unsupported file type" in response.json()["message"]

    def test_empty_file(self, client: TestClient) -> None:
        response = _upload(client, b"")
        assert response.status_code == 400

    @patch("bizfile_ocr.api.app._get_components", new_callable=AsyncMock)
    def test_analysis_failure(
        self, mock_components: MagicMock, client: TestClient, tmp_path: Path
    ) -> None:
        service = _make_service(error=DocumentAnalysisError("Document analysis failed: boom"))
        mock_components.return_value = (UploadStore(tmp_path), service, DocumentAssembler())

        response = _upload(client)

        assert response.status_code == 500
        assert response.json() == {
            "status": 500,
            "message": "OCR failed",
            "error": "Document analysis failed: boom",
        }

    @patch("bizfile_ocr.api.app._get_components", new_callable=AsyncMock)
    def test_unconfigured_service(self, mock_components: MagicMock, client: TestClient) -> None:
        mock_components.side_effect = DocumentAnalysisError(
            "Document analysis endpoint and key are not configured"
        )

        response = _upload(client)

        assert response.status_code == 500
        assert "not configured" in response.json()["error"]

    @patch("bizfile_ocr.api.app._get_components", new_callable=AsyncMock)
    def test_service_is_closed(
        self,
        mock_components: MagicMock,
        client: TestClient,
        sample_result: RecognitionResult,
        tmp_path: Path,
    ) -> None:
        service = _make_service(result=sample_result)
        mock_components.return_value = (UploadStore(tmp_path), service, DocumentAssembler())

        _upload(client)

        service.__aexit__.assert_awaited_once()

    @patch("bizfile_ocr.api.app._get_components", new_callable=AsyncMock)
    def test_service_closed_when_save_fails(
        self, mock_components: MagicMock, client: TestClient
    ) -> None:
        store = MagicMock(spec=UploadStore)
        store.save.side_effect = OSError("disk full")
        service = _make_service()
        mock_components.return_value = (store, service, DocumentAssembler())

        response = _upload(client)

        assert response.status_code == 500
        assert response.json()["error"] == "disk full"
        service.__aexit__.assert_awaited_once()
        service.analyze.assert_not_awaited()

    @patch("bizfile_ocr.api.app._get_components", new_callable=AsyncMock)
    def test_upload_written_off_event_loop(
        self,
        mock_components: MagicMock,
        client: TestClient,
        sample_result: RecognitionResult,
        tmp_path: Path,
    ) -> None:
        threads: dict[str, int] = {}
        store = UploadStore(tmp_path)
        save = store.save

        def recording_save(data: bytes, suffix: str = "") -> Path:
            threads["save"] = threading.get_ident()
            return save(data, suffix)

        async def recording_analyze(content: bytes) -> RecognitionResult:
            threads["analyze"] = threading.get_ident()
            return sample_result

        store.save = recording_save
        service = MagicMock()
        service.analyze = AsyncMock(side_effect=recording_analyze)
        mock_components.return_value = (store, service, DocumentAssembler())

        response = _upload(client)

        assert response.status_code == 200
        assert threads["save"] != threads["analyze"]


class TestGetComponents:
    """Tests for per-request component construction."""

    @patch("bizfile_ocr.api.app.DocumentAnalysisService.from_config")
    @patch("bizfile_ocr.api.app.DocumentAssembler.from_config")
    def test_service_not_built_when_patterns_fail(
        self, mock_assembler: MagicMock, mock_service: MagicMock
    ) -> None:
        mock_assembler.side_effect = ValueError("Invalid regex for field 'uen'")

        with pytest.raises(ValueError):
            asyncio.run(_get_components())
        mock_service.assert_not_called()

    @patch("bizfile_ocr.api.app.DocumentAnalysisService.from_config")
    def test_builds_components(self, mock_service: MagicMock) -> None:
        store, service, assembler = asyncio.run(_get_components())

        assert isinstance(store, UploadStore)
        assert service is mock_service.return_value
        assert isinstance(assembler, DocumentAssembler)
