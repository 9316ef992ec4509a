import logging

from lumina.entities.audio import DEFAULT_SAMPLE_RATE
from lumina.services.AudioService.audio_service_interface import AudioServiceInterface
from lumina.services.GeminiService.gemini_service_interface import (
    GeminiServiceInterface,
)
from lumina.services.ImageService.image_service_interface import (
    ImageServiceInterface,
)
from lumina.views.image_view import ImageView

MUSE_SILENT_MESSAGE = "The muse is silent right now. Please try again."


class StoryWriterView(ImageView):
    """Turns the selected image into a ghostwritten story and reads it aloud."""

    def __init__(
        self,
        gemini: GeminiServiceInterface,
        image_service: ImageServiceInterface,
        audio_service: AudioServiceInterface,
        logger: logging.Logger,
        sample_rate: int = DEFAULT_SAMPLE_RATE,
    ) -> None:
        super().__init__(image_service, logger)
        self.gemini = gemini
        self.audio_service = audio_service
        self.sample_rate = sample_rate
        self.story: str = ""
        self.is_loading = False
        self.is_playing = False

    def on_image_changed(self) -> None:
        self.story = ""

    @property
    def can_generate(self) -> bool:
        return self.image.is_ready and not self.is_loading

    @property
    def can_read_aloud(self) -> bool:
        return bool(self.story) and not self.is_playing

    async def generate(self) -> str | None:
        if not self.can_generate:
            return None

        self.is_loading = True
        try:
            self.story = await self.gemini.generate_story(
                self.image.base64 or "", self.image.mime_type or ""
            )
        except Exception as error:
            self.logger.error("Failed to generate story: %s", error, exc_info=True)
            self.story = MUSE_SILENT_MESSAGE
        finally:
            self.is_loading = False

        return self.story

    async def read_aloud(self) -> bool:
        """Synthesize the current story and start playback; the story is kept on failure."""
        if not self.can_read_aloud:
            return False

        self.is_playing = True
        try:
            audio = await self.gemini.synthesize_speech(self.story)
            self.audio_service.play(audio, self.sample_rate)
            return True
        except Exception as error:
            self.logger.error("Failed to generate speech: %s", error, exc_info=True)
            return False
        finally:
            self.is_playing = False
