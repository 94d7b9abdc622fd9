from __future__ import annotations

import logging

from .extractor import PlantInfo, extract_plant_info, response_text
from .gemini import GeminiClient
from .logging_utils import log_extra


class PlantIdentifier:
    def __init__(self, gemini_client: GeminiClient) -> None:
        self._gemini = gemini_client
        self._log = logging.getLogger(__name__)

    def identify(self, image: bytes, request_id: str | None = None) -> PlantInfo:
        result = self._gemini.generate_content(image, request_id=request_id)
        self._log.info(
            "Processing Gemini API response",
            extra=log_extra(request_id=request_id, response=result),
        )
        return extract_plant_info(response_text(result))
