from abc import ABC, abstractmethod
from pathlib import Path

from lumina.entities.image import ImageState


class ImageServiceInterface(ABC):
    @abstractmethod
    def load(self, path: str | Path) -> ImageState:
        """Read an image file and return its encoded state."""

    @abstractmethod
    def encode(self, raw_bytes: bytes) -> ImageState:
        """Encode raw image bytes into base64 plus MIME type."""
