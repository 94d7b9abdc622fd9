"""FastAPI application for the plant identification service.

This module sets up the application by:
1. Loading configuration and configuring logging
2. Building the Gemini client and the identification service
3. Registering the identify endpoint and a health check

The identify endpoint validates the upload, forwards it to Gemini and turns
the free-text answer into a PlantInfo record. Every failure after validation
is reported as a JSON error body with status 500.
"""

import logging
import uuid
from pathlib import Path
from typing import Optional

import requests
from fastapi import FastAPI, File, UploadFile
from fastapi.responses import JSONResponse

from ..config import AppConfig, config_path as default_config_path, load_config
from ..errors import ConfigError, ProviderError
from ..gemini import GeminiClient
from ..identify import PlantIdentifier
from ..logging_utils import configure_logging, log_extra
from ..uploads import detect_image_format

log = logging.getLogger(__name__)


def _validation_error(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"message": message, "errors": {"image": [message]}},
    )


def _error(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


def create_app(
    config_path: Path | None = None,
    config: AppConfig | None = None,
    session: Optional[requests.Session] = None,
) -> FastAPI:
    """Create and configure the identification application.

    Args:
        config_path: Optional path to config file. If None, uses default from environment.
        config: Already loaded configuration; takes precedence over config_path.
        session: Optional requests session used for calls to Gemini.

    Returns:
        FastAPI: The configured application
    """
    if config is None:
        config = load_config(config_path or default_config_path())
    configure_logging(config.observability.log_level)

    identifier = PlantIdentifier(GeminiClient(config.gemini, session=session))
    max_bytes = config.uploads.max_image_kb * 1024

    app = FastAPI(
        title="Plant Identifier",
        description="Identify plants from photos using Gemini",
        version="0.1.0",
    )

    @app.get("/", include_in_schema=False)
    async def health_check() -> dict:
        """Health check endpoint."""
        return {"message": "Plant Identifier is running", "status": "healthy"}

    @app.post("/api/identify-plant")
    def identify_plant(image: Optional[UploadFile] = File(None)):
        request_id = str(uuid.uuid4())
        log.info("Plant identification request received", extra=log_extra(request_id=request_id))

        if image is None:
            return _validation_error("The image field is required.")
        data = image.file.read()
        if detect_image_format(data) is None:
            return _validation_error("The image field must be an image.")
        if len(data) > max_bytes:
            return _validation_error(
                f"The image field must not be greater than {config.uploads.max_image_kb} kilobytes."
            )
        log.info("Image processed successfully", extra=log_extra(request_id=request_id))

        try:
            plant_info = identifier.identify(data, request_id=request_id)
        except ConfigError:
            return _error("API configuration error")
        except ProviderError as exc:
            return _error(f"Failed to identify plant. API response: {exc.body}")
        except Exception as exc:
            log.exception(
                "Error in plant identification",
                extra=log_extra(request_id=request_id, error=str(exc)),
            )
            return _error(f"An unexpected error occurred: {exc}")

        return plant_info.to_dict()

    return app
