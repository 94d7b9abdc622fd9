"""Command-line client for the plant identification endpoint.

Posts an image to a running server and prints the result the way the web
front end shows it. Every failure collapses into one user-facing message.
"""

from __future__ import annotations

import argparse
import logging
import mimetypes
import sys
from pathlib import Path
from typing import Any, Optional

import requests

from .errors import IdentificationFailed
from .logging_utils import log_extra
from .presentation import present_plant_info

IDENTIFY_PATH = "/api/identify-plant"
NO_IMAGE_MESSAGE = "Please select an image first."
GENERIC_ERROR_MESSAGE = "An error occurred while identifying the plant. Please try again."


class PlantIdentifierClient:
    def __init__(self, base_url: str, session: Optional[requests.Session] = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._log = logging.getLogger(__name__)

    def identify(self, image_path: str | Path | None) -> dict[str, Any]:
        if not image_path:
            raise IdentificationFailed(NO_IMAGE_MESSAGE)

        path = Path(image_path)
        mime_type = mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        try:
            with path.open("rb") as handle:
                response = self._session.post(
                    f"{self._base_url}{IDENTIFY_PATH}",
                    files={"image": (path.name, handle, mime_type)},
                )
            if not response.ok:
                raise IdentificationFailed(f"Server returned {response.status_code}")
            result = response.json()
        except (OSError, ValueError, requests.RequestException, IdentificationFailed) as exc:
            self._log.error("Error identifying plant", extra=log_extra(error=str(exc)))
            raise IdentificationFailed(GENERIC_ERROR_MESSAGE) from exc

        self._log.debug("API response", extra=log_extra(response=result))
        return present_plant_info(result)


def format_plant_info(info: dict[str, Any]) -> str:
    rows = [
        ("Name", info["name"]),
        ("Scientific name", info["scientificName"]),
        ("Family", info["family"]),
        ("Description", info["descript"]),
        ("Sunlight", info["sunlight"]),
        ("Watering", info["watering"]),
        ("Care instructions", info["careInstructions"]["other"]),
        ("Plant health", info["plantHealth"]),
        ("Additional information", info["additionalInfo"]),
    ]
    return "\n\n".join(f"{label}:\n{value}" for label, value in rows)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Identify a plant from an image")
    parser.add_argument("image", nargs="?", help="Path to the plant image")
    parser.add_argument(
        "--server",
        default="http://localhost:8000",
        help="Base URL of the identification server (default: http://localhost:8000)",
    )
    args = parser.parse_args(argv)

    client = PlantIdentifierClient(args.server)
    try:
        info = client.identify(args.image)
    except IdentificationFailed as exc:
        print(str(exc), file=sys.stderr)
        return 1

    print(format_plant_info(info))
    return 0


if __name__ == "__main__":
    sys.exit(main())
