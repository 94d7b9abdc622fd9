from io import BytesIO

import pytest
from PIL import Image

from plant_identifier.uploads import detect_image_format


def encode(image_format: str) -> bytes:
    buffer = BytesIO()
    Image.new("RGB", (4, 4), "white").save(buffer, format=image_format)
    return buffer.getvalue()


@pytest.mark.parametrize("image_format", ["JPEG", "PNG", "GIF", "BMP", "WEBP"])
def test_accepted_raster_formats(image_format: str) -> None:
    assert detect_image_format(encode(image_format)) == image_format


def test_svg_documents() -> None:
    assert detect_image_format(b"<svg xmlns='http://www.w3.org/2000/svg'></svg>") == "SVG"
    assert (
        detect_image_format(b'<?xml version="1.0"?>\n<!-- leaf -->\n<svg width="10"></svg>')
        == "SVG"
    )


@pytest.mark.parametrize(
    "data",
    [b"", b"#!/bin/sh\necho hi\n", b"<html><body>hi</body></html>"],
)
def test_non_images(data: bytes) -> None:
    assert detect_image_format(data) is None


def test_unlisted_format() -> None:
    assert detect_image_format(encode("TIFF")) is None
