"""Azure document analysis client wrapper.

Submits documents to the layout-analysis model, awaits the long-running
operation without blocking the event loop, and converts the outcome into
a ``RecognitionResult``.
"""

import asyncio
import time

from azure.ai.formrecognizer.aio import DocumentAnalysisClient
from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import AzureError

from bizfile_ocr.utils.config import DocumentAnalysisConfig
from bizfile_ocr.utils.logger import get_logger

from .models import RecognitionResult

logger = get_logger(__name__)


class DocumentAnalysisError(Exception):
    """Raised when the document analysis service cannot produce a result."""


class DocumentAnalysisService:
    """Runs layout analysis on documents through an injected async client.

    Args:
        client: Async ``DocumentAnalysisClient`` or a compatible object.
        model_id: Analysis model to request.
        timeout_seconds: Upper bound on submission plus completion time.
    """

    def __init__(
        self,
        client: DocumentAnalysisClient,
        model_id: str = "prebuilt-layout",
        timeout_seconds: float = 300.0,
    ) -> None:
        self.client = client
        self.model_id = model_id
        self.timeout_seconds = timeout_seconds

    @classmethod
    def from_config(cls, config: DocumentAnalysisConfig) -> "DocumentAnalysisService":
        """Create a service with a client built from configuration.

        Raises:
            DocumentAnalysisError: If the endpoint or key is missing.
        """
        if not config.is_configured:
            raise DocumentAnalysisError(
                "Document analysis endpoint and key are not configured"
            )
        client = DocumentAnalysisClient(
            endpoint=config.endpoint,
            credential=AzureKeyCredential(config.key),
        )
        return cls(client, config.model_id, config.timeout_seconds)

    async def __aenter__(self) -> "DocumentAnalysisService":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        await self.client.close()

    async def analyze(self, document: bytes) -> RecognitionResult:
        """Analyze a document and wait for the operation to finish.

        Args:
            document: Raw document bytes (PDF or image).

        Returns:
            Recognized text and tables.

        Raises:
            DocumentAnalysisError: On service errors, timeouts, or a
                malformed result.
        """
        start_time = time.time()
        logger.info(
            "Submitting %d bytes for analysis with model '%s'",
            len(document),
            self.model_id,
        )

        try:
            sdk_result = await asyncio.wait_for(
                self._run(document), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError as exc:
            raise DocumentAnalysisError(
                f"Document analysis did not complete within {self.timeout_seconds:g}s"
            ) from exc
        except AzureError as exc:
            raise DocumentAnalysisError(f"Document analysis failed: {exc}") from exc

        try:
            result = RecognitionResult.from_sdk(sdk_result)
        except (AttributeError, TypeError, ValueError) as exc:
            raise DocumentAnalysisError(
                f"Malformed document analysis result: {exc}"
            ) from exc

        logger.info(
            "Analysis completed in %.2fs: %d characters, %d tables",
            time.time() - start_time,
            len(result.content),
            len(result.tables),
        )
        return result

    async def _run(self, document: bytes):
        poller = await self.client.begin_analyze_document(self.model_id, document)
        return await poller.result()
