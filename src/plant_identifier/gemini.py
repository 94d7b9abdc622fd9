from __future__ import annotations

import base64
import logging
from typing import Any, Optional

import requests

from .config import GeminiConfig
from .errors import ConfigError, ProviderError, TransportError
from .logging_utils import log_extra

IDENTIFY_PROMPT = (
    "Identify this plant and provide important information about it, including its "
    "name, scientific name, family, description, care instructions, sunlight needs, "
    "plant health, and watering needs."
)

GENERATION_CONFIG = {
    "temperature": 0.4,
    "top_p": 1,
    "top_k": 32,
    "max_output_tokens": 2048,
}

SAFETY_SETTINGS = [
    {
        "category": "HARM_CATEGORY_DANGEROUS_CONTENT",
        "threshold": "BLOCK_NONE",
    },
]


def build_payload(image: bytes, mime_type: str = "image/jpeg") -> dict[str, Any]:
    return {
        "contents": [
            {
                "parts": [
                    {"text": IDENTIFY_PROMPT},
                    {
                        "inline_data": {
                            "mime_type": mime_type,
                            "data": base64.b64encode(image).decode("ascii"),
                        }
                    },
                ]
            }
        ],
        "safety_settings": [dict(setting) for setting in SAFETY_SETTINGS],
        "generation_config": dict(GENERATION_CONFIG),
    }


class GeminiClient:
    """Single-attempt wrapper around the Gemini generateContent endpoint."""

    def __init__(self, config: GeminiConfig, session: Optional[requests.Session] = None) -> None:
        self._config = config
        self._session = session or requests.Session()
        self._log = logging.getLogger(__name__)

    @property
    def endpoint(self) -> str:
        return f"{self._config.base_url}/models/{self._config.model}:generateContent"

    def generate_content(self, image: bytes, request_id: str | None = None) -> dict[str, Any]:
        """
        Send an image with the identification prompt and return the decoded JSON.

        Raises:
        ConfigError: If no API key is configured; nothing is sent in that case
        ProviderError: If the provider answers with a non-success status
        TransportError: If the request could not be completed
        """
        if not self._config.api_key:
            self._log.error("Gemini API key is missing", extra=log_extra(request_id=request_id))
            raise ConfigError("API configuration error")

        payload = build_payload(image)
        self._log.info("Sending request to Gemini API", extra=log_extra(request_id=request_id))
        try:
            response = self._session.post(
                self.endpoint,
                params={"key": self._config.api_key},
                json=payload,
                headers={"Content-Type": "application/json"},
                timeout=self._config.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise TransportError(str(exc)) from exc

        self._log.info(
            "Received response from Gemini API",
            extra=log_extra(request_id=request_id, status=response.status_code),
        )
        if not 200 <= response.status_code < 300:
            self._log.error(
                "Gemini API request failed",
                extra=log_extra(
                    request_id=request_id,
                    status=response.status_code,
                    body=response.text,
                ),
            )
            raise ProviderError(response.status_code, response.text)

        return response.json()
