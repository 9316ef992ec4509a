from lumina.bootstrap.components import Components
from lumina.components.configuration.configuration_interface import (
    ConfigurationInterface,
)
from lumina.components.logger.logger_interface import LoggerInterface
from lumina.entities.audio import DEFAULT_SAMPLE_RATE
from lumina.services.AudioService.audio_service import AudioService
from lumina.services.AudioService.audio_service_interface import AudioServiceInterface
from lumina.services.ConsoleService.console_service import ConsoleService
from lumina.services.ConsoleService.console_service_interface import (
    ConsoleServiceInterface,
)
from lumina.services.GeminiService.gemini_service import (
    DEFAULT_MODEL_NAME,
    DEFAULT_TTS_MODEL_NAME,
    DEFAULT_VOICE_NAME,
    GeminiService,
)
from lumina.services.GeminiService.gemini_service_interface import (
    GeminiServiceInterface,
)
from lumina.services.ImageService.image_service import ImageService
from lumina.services.ImageService.image_service_interface import (
    ImageServiceInterface,
)
from lumina.views.chat_view import ChatView
from lumina.views.image_analyzer_view import ImageAnalyzerView
from lumina.views.story_writer_view import StoryWriterView


def get_gemini_service(components: Components) -> GeminiServiceInterface:
    """
    Create the Gemini service. The API key itself is only read on the first
    request, so a missing key fails the request rather than startup.
    """
    configuration = components.get_component(ConfigurationInterface)

    model_name = configuration.get_configuration(
        "STORY_MODEL_NAME", str, default=DEFAULT_MODEL_NAME
    )
    chat_model_name = configuration.get_configuration(
        "CHAT_MODEL_NAME", str, default=model_name
    )
    tts_model_name = configuration.get_configuration(
        "TTS_MODEL_NAME", str, default=DEFAULT_TTS_MODEL_NAME
    )
    voice_name = configuration.get_configuration(
        "TTS_VOICE_NAME", str, default=DEFAULT_VOICE_NAME
    )

    return GeminiService(
        configuration=configuration,
        logger=components.get_component(LoggerInterface).get_logger("GeminiService"),
        model_name=model_name,
        chat_model_name=chat_model_name,
        tts_model_name=tts_model_name,
        voice_name=voice_name,
    )


def get_image_service(components: Components) -> ImageServiceInterface:
    return ImageService(
        logger=components.get_component(LoggerInterface).get_logger("ImageService")
    )


def get_audio_service(components: Components) -> AudioServiceInterface:
    return AudioService(
        logger=components.get_component(LoggerInterface).get_logger("AudioService")
    )


def get_console_service(components: Components) -> ConsoleServiceInterface:
    configuration = components.get_component(ConfigurationInterface)
    logger = components.get_component(LoggerInterface)

    gemini = get_gemini_service(components)
    image_service = get_image_service(components)

    sample_rate = configuration.get_configuration(
        "AUDIO_SAMPLE_RATE", int, default=DEFAULT_SAMPLE_RATE
    )

    return ConsoleService(
        story_view=StoryWriterView(
            gemini=gemini,
            image_service=image_service,
            audio_service=get_audio_service(components),
            logger=logger.get_logger("StoryWriterView"),
            sample_rate=sample_rate,
        ),
        analyzer_view=ImageAnalyzerView(
            gemini=gemini,
            image_service=image_service,
            logger=logger.get_logger("ImageAnalyzerView"),
        ),
        chat_view=ChatView(gemini=gemini, logger=logger.get_logger("ChatView")),
        logger=logger.get_logger("ConsoleService"),
    )
