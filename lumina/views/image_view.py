import logging
from pathlib import Path

from lumina.entities.image import ImageState
from lumina.services.ImageService.image_service import ReadError
from lumina.services.ImageService.image_service_interface import (
    ImageServiceInterface,
)


class ImageView:
    """Base for views that own a single selected image."""

    def __init__(
        self, image_service: ImageServiceInterface, logger: logging.Logger
    ) -> None:
        self.image_service = image_service
        self.logger = logger
        self.image: ImageState = ImageState.empty()

    def select_image(self, path: str | Path) -> bool:
        """
        Replace the current image with the file at ``path``.

        An unreadable file leaves the view with no image, so actions that need
        one stay disabled.
        """
        try:
            state = self.image_service.load(path)
        except ReadError as error:
            self.logger.error("Failed to read image: %s", error)
            self.image = ImageState.empty()
            self.on_image_changed()
            return False

        self.image = state
        self.on_image_changed()
        return True

    def on_image_changed(self) -> None:
        pass

    def reset(self) -> None:
        """Drop the selected image and everything derived from it."""
        self.image = ImageState.empty()
        self.on_image_changed()
