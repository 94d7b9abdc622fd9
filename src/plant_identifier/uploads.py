"""Recognition of uploaded image files from their content.

The declared content type of an upload is not trusted; the bytes must decode
as one of the accepted raster formats or look like an SVG document.
"""

from __future__ import annotations

import re
from io import BytesIO

from PIL import Image

ALLOWED_FORMATS = {"JPEG", "PNG", "GIF", "BMP", "WEBP"}

_SVG_RE = re.compile(rb"^\s*(<\?xml[^>]*>\s*)?(<!--.*?-->\s*)*(<!DOCTYPE svg[^>]*>\s*)?<svg[\s>]", re.DOTALL | re.IGNORECASE)


def detect_image_format(data: bytes) -> str | None:
    """Return the image format of `data` ("JPEG", "PNG", ..., "SVG"), or None."""
    if _SVG_RE.match(data[:4096]):
        return "SVG"
    try:
        with Image.open(BytesIO(data)) as img:
            image_format = img.format
            img.verify()
    except (OSError, SyntaxError, ValueError, Image.DecompressionBombError):
        return None
    return image_format if image_format in ALLOWED_FORMATS else None
