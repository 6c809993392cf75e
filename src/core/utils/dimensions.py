"""Pixel dimension sniffing from raw PNG and JPEG headers.

Only header bytes are inspected, no image codec is involved. Sniffing is a
best-effort enrichment: every failure degrades to ``None``.
"""

import struct

from aws_lambda_powertools import Logger

from core.models.image import Dimensions

logger = Logger(utc=True)

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
PNG_HEADER_LENGTH = 24

JPEG_MIME_TYPES = frozenset({"image/jpeg", "image/jpg"})

# Start-of-frame markers. C4 (DHT), C8 (JPG extension) and CC (DAC) are not frames.
JPEG_SOF_MARKERS = frozenset(
    [*range(0xC0, 0xC4), *range(0xC5, 0xC8), *range(0xC9, 0xCC), *range(0xCD, 0xD0)]
)


def _dimensions(width: int, height: int) -> Dimensions | None:
    if width <= 0 or height <= 0:
        return None
    return Dimensions(width=width, height=height)


def png_dimensions(data: bytes) -> Dimensions | None:
    """Read width and height from the IHDR chunk of a PNG."""
    if len(data) < PNG_HEADER_LENGTH or not data.startswith(PNG_SIGNATURE):
        return None

    width, height = struct.unpack_from(">II", data, 16)
    return _dimensions(width, height)


def jpeg_dimensions(data: bytes) -> Dimensions | None:
    """Walk JPEG segments until the first start-of-frame segment."""
    offset = 2  # past the SOI marker

    while offset < len(data):
        if data[offset] != 0xFF:
            return None

        if offset + 1 >= len(data):
            return None
        marker = data[offset + 1]

        if marker in JPEG_SOF_MARKERS:
            # length(2) + precision(1) precede height and width
            if offset + 9 > len(data):
                return None
            height, width = struct.unpack_from(">HH", data, offset + 5)
            return _dimensions(width, height)

        if offset + 4 > len(data):
            return None
        (segment_length,) = struct.unpack_from(">H", data, offset + 2)
        offset += segment_length + 2

    return None


def sniff_dimensions(file_data: bytes, mime_type: str) -> Dimensions | None:
    """Return the pixel dimensions of PNG/JPEG bytes, or ``None``.

    Never raises: unsupported MIME types, truncated buffers and corrupt
    headers all yield ``None``.
    """
    try:
        if mime_type == "image/png":
            return png_dimensions(file_data)

        if mime_type in JPEG_MIME_TYPES:
            return jpeg_dimensions(file_data)

    except (struct.error, IndexError, ValueError, TypeError) as exc:
        logger.debug(
            "Unable to read image dimensions",
            extra={"mime_type": mime_type, "error": str(exc)},
        )

    return None
