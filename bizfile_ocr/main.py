"""Application entry point for the BizFile OCR API server."""

import uvicorn

from bizfile_ocr.api.app import app
from bizfile_ocr.utils.config import load_config
from bizfile_ocr.utils.logger import setup_logging


def main() -> None:
    """Start the FastAPI application server."""
    config = load_config()
    setup_logging(config.log_level, config.log_file)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
