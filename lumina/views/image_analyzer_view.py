import logging

from lumina.services.GeminiService.gemini_service_interface import (
    GeminiServiceInterface,
)
from lumina.services.ImageService.image_service_interface import (
    ImageServiceInterface,
)
from lumina.views.image_view import ImageView

DEFAULT_ANALYSIS_PROMPT = "Describe this image in detail."
ANALYSIS_FAILED_MESSAGE = "Failed to analyze image. Please try again."


class ImageAnalyzerView(ImageView):
    def __init__(
        self,
        gemini: GeminiServiceInterface,
        image_service: ImageServiceInterface,
        logger: logging.Logger,
        prompt: str = DEFAULT_ANALYSIS_PROMPT,
    ) -> None:
        super().__init__(image_service, logger)
        self.gemini = gemini
        self.initial_prompt = prompt
        self.prompt = prompt
        self.analysis: str = ""
        self.is_loading = False

    def on_image_changed(self) -> None:
        self.analysis = ""

    def reset(self) -> None:
        super().reset()
        self.prompt = self.initial_prompt

    @property
    def can_analyze(self) -> bool:
        return self.image.is_ready and bool(self.prompt) and not self.is_loading

    async def analyze(self) -> str | None:
        if not self.can_analyze:
            return None

        self.is_loading = True
        try:
            self.analysis = await self.gemini.analyze_image(
                self.image.base64 or "", self.image.mime_type or "", self.prompt
            )
        except Exception as error:
            self.logger.error("Analysis failed: %s", error, exc_info=True)
            self.analysis = ANALYSIS_FAILED_MESSAGE
        finally:
            self.is_loading = False

        return self.analysis
