from abc import ABC, abstractmethod

from lumina.entities.audio import RawAudioBuffer
from lumina.entities.message import HistoryContent


class GeminiServiceInterface(ABC):
    @abstractmethod
    async def generate_story(self, image_base64: str, mime_type: str) -> str:
        """
        Ghostwrite the opening paragraph of a story inspired by an image.

        Returns:
            The model text, or "No story could be generated." when empty.
        """

    @abstractmethod
    async def analyze_image(
        self, image_base64: str, mime_type: str, prompt: str
    ) -> str:
        """
        Answer a free-form prompt about an image.

        Returns:
            The model text, or "No analysis generated." when empty.
        """

    @abstractmethod
    async def chat(self, message: str, history: list[HistoryContent]) -> str:
        """
        Send ``message`` as a new turn on top of the full prior ``history``.

        Returns:
            The model text, or an empty string when the model returned none.
        """

    @abstractmethod
    async def synthesize_speech(self, text: str) -> RawAudioBuffer:
        """Return raw mono PCM16 audio (24 kHz) reading ``text`` aloud."""
