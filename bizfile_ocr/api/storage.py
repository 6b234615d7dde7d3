"""Local storage for uploaded documents."""

import uuid
from pathlib import Path

from bizfile_ocr.utils.logger import get_logger

logger = get_logger(__name__)


class UploadStore:
    """Stores each upload under a unique file name.

    Args:
        upload_dir: Directory receiving uploaded files.
        retain: Keep files after processing. When ``False``,
            ``discard`` deletes them.
    """

    def __init__(self, upload_dir: Path, retain: bool = True) -> None:
        self.upload_dir = upload_dir
        self.retain = retain

    def save(self, data: bytes, suffix: str = "") -> Path:
        """Write upload bytes to a new uniquely named file.

        Args:
            data: File content.
            suffix: File extension to keep, e.g. ``".pdf"``.

        Returns:
            Path of the stored file.
        """
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        path = self.upload_dir / f"{uuid.uuid4().hex}{suffix}"
        path.write_bytes(data)
        logger.debug("Stored upload (%d bytes) at %s", len(data), path)
        return path

    def discard(self, path: Path) -> None:
        """Delete a stored upload unless uploads are retained."""
        if self.retain:
            return
        path.unlink(missing_ok=True)
        logger.debug("Removed upload %s", path)
