"""
GeminiService: the single integration point with the Google Gen AI API.

Each operation performs exactly one request and never retries. The API key is
resolved from the injected configuration on first use and the client is reused
afterwards.
"""

from __future__ import annotations

import base64
import logging
from typing import Any

from google import genai
from google.genai import types
from langfuse import observe

from lumina.components.configuration.configuration_interface import (
    ConfigurationInterface,
)
from lumina.entities.audio import RawAudioBuffer
from lumina.entities.message import HistoryContent
from lumina.services.GeminiService.gemini_service_interface import (
    GeminiServiceInterface,
)


STORY_SYSTEM_INSTRUCTION = (
    "You are a master creative writer and novelist. Your goal is to analyze "
    "visual scenes and write captivating, atmospheric opening paragraphs for "
    "stories inspired by them. Focus on mood, sensory details, and intrigue."
)

STORY_TASK_PROMPT = (
    "Analyze the mood and scene of this image. Then, ghostwrite an opening "
    "paragraph to a story set in this world. Keep it under 200 words."
)

NO_STORY_FALLBACK = "No story could be generated."
NO_ANALYSIS_FALLBACK = "No analysis generated."

DEFAULT_MODEL_NAME = "gemini-3-pro-preview"
DEFAULT_TTS_MODEL_NAME = "gemini-2.5-flash-preview-tts"
DEFAULT_VOICE_NAME = "Puck"


class GenerationError(Exception):
    """Raised when a request to the model fails in transport, auth or service."""

    def __init__(self, operation: str, cause: BaseException) -> None:
        self.operation = operation
        super().__init__(f"{operation} request failed: {cause}")


class MissingAudioError(Exception):
    """Raised when a speech response carries no inline audio payload."""


class GeminiService(GeminiServiceInterface):
    def __init__(
        self,
        configuration: ConfigurationInterface,
        logger: logging.Logger,
        model_name: str = DEFAULT_MODEL_NAME,
        chat_model_name: str | None = None,
        tts_model_name: str = DEFAULT_TTS_MODEL_NAME,
        voice_name: str = DEFAULT_VOICE_NAME,
    ) -> None:
        """
        Args:
            configuration: Source of the API_KEY credential, read on first use
            logger: Logger instance
            model_name: Model for story generation and image analysis
            chat_model_name: Model for chat (defaults to model_name)
            tts_model_name: Model for speech synthesis
            voice_name: Prebuilt voice used for speech
        """
        self.configuration = configuration
        self.logger = logger
        self.model_name = model_name
        self.chat_model_name = chat_model_name or model_name
        self.tts_model_name = tts_model_name
        self.voice_name = voice_name
        self._client: genai.Client | None = None

        self.logger.info(
            "GeminiService initialized. Model: %s, TTS model: %s, Voice: %s",
            self.model_name,
            self.tts_model_name,
            self.voice_name,
        )

    def _get_client(self) -> genai.Client:
        if self._client is None:
            # Raises ConfigurationError when the key is missing.
            api_key = self.configuration.get_configuration("API_KEY", str)
            self._client = genai.Client(api_key=api_key)
        return self._client

    @staticmethod
    def _image_part(image_base64: str, mime_type: str) -> types.Part:
        return types.Part.from_bytes(
            data=base64.b64decode(image_base64), mime_type=mime_type
        )

    async def _generate_content(
        self, operation: str, **kwargs: Any
    ) -> types.GenerateContentResponse:
        client = self._get_client()
        try:
            return await client.aio.models.generate_content(**kwargs)
        except Exception as exc:
            raise GenerationError(operation, exc) from exc

    @observe()
    async def generate_story(self, image_base64: str, mime_type: str) -> str:
        response = await self._generate_content(
            "generate_story",
            model=self.model_name,
            contents=types.Content(
                role="user",
                parts=[
                    self._image_part(image_base64, mime_type),
                    types.Part.from_text(text=STORY_TASK_PROMPT),
                ],
            ),
            config=types.GenerateContentConfig(
                system_instruction=STORY_SYSTEM_INSTRUCTION,
            ),
        )

        if not response.text:
            self.logger.warning("Story generation returned empty text")
            return NO_STORY_FALLBACK
        return response.text

    @observe()
    async def analyze_image(
        self, image_base64: str, mime_type: str, prompt: str
    ) -> str:
        response = await self._generate_content(
            "analyze_image",
            model=self.model_name,
            contents=types.Content(
                role="user",
                parts=[
                    self._image_part(image_base64, mime_type),
                    types.Part.from_text(text=prompt),
                ],
            ),
        )

        if not response.text:
            self.logger.warning("Image analysis returned empty text")
            return NO_ANALYSIS_FALLBACK
        return response.text

    @observe()
    async def chat(self, message: str, history: list[HistoryContent]) -> str:
        client = self._get_client()

        contents = [
            types.Content(
                role=turn["role"],
                parts=[types.Part.from_text(text=part["text"]) for part in turn["parts"]],
            )
            for turn in history
        ]

        # A new session per call; the server keeps no conversation state.
        session = client.aio.chats.create(model=self.chat_model_name, history=contents)
        try:
            response = await session.send_message(message)
        except Exception as exc:
            raise GenerationError("chat", exc) from exc

        self.logger.info("Chat reply received (history: %d turns)", len(history))
        return response.text or ""

    @observe()
    async def synthesize_speech(self, text: str) -> RawAudioBuffer:
        response = await self._generate_content(
            "synthesize_speech",
            model=self.tts_model_name,
            contents=[types.Content(parts=[types.Part.from_text(text=text)])],
            config=types.GenerateContentConfig(
                response_modalities=[types.Modality.AUDIO],
                speech_config=types.SpeechConfig(
                    voice_config=types.VoiceConfig(
                        prebuilt_voice_config=types.PrebuiltVoiceConfig(
                            voice_name=self.voice_name,
                        )
                    )
                ),
            ),
        )

        audio = extract_inline_audio(response)
        self.logger.info("Synthesized %d bytes of audio", len(audio))
        return audio


def extract_inline_audio(response: types.GenerateContentResponse) -> RawAudioBuffer:
    """
    Pull the audio payload from the first part of the first candidate.

    The SDK usually hands back bytes already decoded; a base64 string is decoded
    here.

    Raises:
        MissingAudioError: If any link of the candidate chain is absent or the
            payload is empty.
    """
    candidates = response.candidates or []
    content = candidates[0].content if candidates else None
    parts = (content.parts or []) if content else []
    inline_data = parts[0].inline_data if parts else None
    data: bytes | str | None = inline_data.data if inline_data else None

    if not data:
        raise MissingAudioError("No audio data returned from API")

    if isinstance(data, str):
        return base64.b64decode(data)
    return bytes(data)
