"""Turn the model's free-text answer into a structured PlantInfo record.

The answer is loosely formatted prose. Lines are scanned once; a line that
contains one of the known markers either carries its value inline or moves
the cursor to a multi-line section, and every other line is appended to the
section under the cursor.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any, NamedTuple


@dataclass
class PlantInfo:
    name: str = ""
    scientific_name: str = ""
    family: str = ""
    descript: str = ""
    care_instructions: str = ""
    sunlight_needs: str = ""
    watering_needs: str = ""
    plant_health: str = ""
    additional_info: str = ""

    def to_dict(self) -> dict[str, str]:
        values = asdict(self)
        return {key: values[attr] for key, attr in RESPONSE_KEYS.items()}


# JSON key -> PlantInfo attribute, in response order.
RESPONSE_KEYS = {
    "name": "name",
    "scientificName": "scientific_name",
    "family": "family",
    "descript": "descript",
    "careInstructions": "care_instructions",
    "sunlightNeeds": "sunlight_needs",
    "wateringNeeds": "watering_needs",
    "plantHealth": "plant_health",
    "additionalInfo": "additional_info",
}


class Marker(NamedTuple):
    text: str
    field: str
    inline: bool


# Evaluated top to bottom; the first marker found in a line wins.
MARKERS: tuple[Marker, ...] = (
    Marker("Scientific Name:", "scientific_name", True),
    Marker("Family:", "family", True),
    Marker("Description:", "descript", False),
    Marker("Care Instructions:", "care_instructions", False),
    Marker("Sunlight:", "sunlight_needs", False),
    Marker("Watering Needs:", "watering_needs", False),
    Marker("Plant Health:", "plant_health", False),
    Marker("Additional Information:", "additional_info", False),
)


def match_marker(line: str) -> Marker | None:
    lowered = line.lower()
    for marker in MARKERS:
        if marker.text.lower() in lowered:
            return marker
    return None


def response_text(payload: Any) -> str:
    """Return the first candidate's text from a generateContent response, or ""."""
    try:
        text = payload["candidates"][0]["content"]["parts"][0]["text"]
    except (KeyError, IndexError, TypeError):
        return ""
    return text if isinstance(text, str) else ""


def extract_plant_info(text: str) -> PlantInfo:
    fields = {attr: "" for attr in RESPONSE_KEYS.values()}
    current: str | None = None

    for raw_line in (text or "").split("\n"):
        line = raw_line.strip()
        marker = match_marker(line)

        if marker is not None and marker.inline:
            # Detection ignores case, removal does not.
            fields[marker.field] = line.replace(marker.text, "").strip()
        elif marker is not None:
            current = marker.field
        elif current is not None:
            fields[current] += line + "\n"
        elif not fields["name"] and line:
            fields["name"] = line

    return PlantInfo(**{attr: value.strip() for attr, value in fields.items()})
