from __future__ import annotations

import base64
import logging
import struct
from pathlib import Path

from PIL import Image

from lumina.entities.image import ImageState
from lumina.services.ImageService.image_service_interface import (
    ImageServiceInterface,
)

FALLBACK_MIME_TYPE = "application/octet-stream"

# Pillow reads this many bytes before checking format signatures.
SIGNATURE_LENGTH = 16

# Multi-picture camera files are JPEG streams.
MIME_ALIASES = {"MPO": "image/jpeg"}


class ReadError(Exception):
    """Raised when an image file cannot be read."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = str(path)
        super().__init__(f"Could not read image {self.path}: {reason}")


def identify_format(raw_bytes: bytes) -> str | None:
    """
    Return the name of the first Pillow format whose signature matches the
    leading bytes, or None.

    Only the signature is checked; dimensions are never parsed, so large images
    are identified like any other.
    """
    Image.init()
    prefix = raw_bytes[:SIGNATURE_LENGTH]
    for image_format in Image.ID:
        _, accept = Image.OPEN[image_format]
        if accept is None:
            continue
        try:
            result = accept(prefix)
        except (SyntaxError, IndexError, TypeError, struct.error):
            continue
        # A string result names a recognised but unsupported variant.
        if result and not isinstance(result, str):
            return image_format
    return None


def sniff_mime_type(raw_bytes: bytes) -> str:
    """
    Return the MIME type reported by the image's own header.

    Content Pillow does not recognise is labelled application/octet-stream;
    no validation is performed beyond that.
    """
    image_format = identify_format(raw_bytes)
    if image_format is None:
        return FALLBACK_MIME_TYPE
    return (
        MIME_ALIASES.get(image_format)
        or Image.MIME.get(image_format)
        or FALLBACK_MIME_TYPE
    )


def to_data_uri(raw_bytes: bytes) -> str:
    encoded = base64.b64encode(raw_bytes).decode("ascii")
    return f"data:{sniff_mime_type(raw_bytes)};base64,{encoded}"


def split_data_uri(data_uri: str) -> tuple[str, str]:
    """Split ``data:<mime>;base64,<payload>`` into (payload, mime)."""
    header, _, payload = data_uri.partition(",")
    mime_type = header.split(":", 1)[1].split(";", 1)[0]
    return payload, mime_type


class ImageService(ImageServiceInterface):
    def __init__(self, logger: logging.Logger) -> None:
        self.logger = logger

    def load(self, path: str | Path) -> ImageState:
        try:
            raw_bytes = Path(path).read_bytes()
        except OSError as exc:
            raise ReadError(path, exc.strerror or str(exc)) from exc

        state = self.encode(raw_bytes)
        self.logger.info(
            "Loaded image %s (%s, %s bytes)", path, state.mime_type, len(raw_bytes)
        )
        return state

    def encode(self, raw_bytes: bytes) -> ImageState:
        # Both derived fields come out of the same data URI.
        data_uri = to_data_uri(raw_bytes)
        payload, mime_type = split_data_uri(data_uri)
        return ImageState(
            raw_bytes=raw_bytes,
            preview_url=data_uri,
            base64=payload,
            mime_type=mime_type,
        )
