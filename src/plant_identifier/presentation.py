"""Display mapping for identification results.

Applied to the JSON returned by the identify endpoint before it is shown to a
user: bold markers left by the model are removed and absent fields get a
readable placeholder.
"""

from __future__ import annotations

from typing import Any, Mapping

NOT_PROVIDED = "Not provided"


def strip_markdown(text: str) -> str:
    return text.replace("**", "").strip()


def _field(response: Mapping[str, Any], key: str, placeholder: str) -> str:
    value = response.get(key)
    return strip_markdown(str(value) if value else placeholder)


def present_plant_info(response: Mapping[str, Any]) -> dict[str, Any]:
    return {
        "name": _field(response, "name", ""),
        "scientificName": _field(response, "scientificName", NOT_PROVIDED),
        "family": _field(response, "family", NOT_PROVIDED),
        "descript": _field(response, "descript", "No description available"),
        "sunlight": _field(response, "sunlightNeeds", NOT_PROVIDED),
        "watering": _field(response, "wateringNeeds", NOT_PROVIDED),
        "careInstructions": {
            "other": _field(response, "careInstructions", NOT_PROVIDED),
        },
        "plantHealth": _field(response, "plantHealth", "No health information provided"),
        "additionalInfo": _field(
            response, "additionalInfo", "No additional information provided"
        ),
    }
