import logging
import time

from lumina.entities.message import ChatMessage, to_history
from lumina.services.GeminiService.gemini_service_interface import (
    GeminiServiceInterface,
)

CONNECTION_ERROR_MESSAGE = "Sorry, I encountered a connection error."


def _now_millis() -> int:
    return int(time.time() * 1000)


class ChatView:
    """Owns the chat transcript; turns are sent one at a time, in order."""

    def __init__(self, gemini: GeminiServiceInterface, logger: logging.Logger) -> None:
        self.gemini = gemini
        self.logger = logger
        self.messages: list[ChatMessage] = []
        self.is_loading = False

    def clear(self) -> None:
        self.messages = []

    async def send(self, text: str) -> ChatMessage | None:
        """
        Append the user's turn, ask the model and append its reply.

        Returns the appended model message, or None when the input is blank or a
        previous turn is still in flight.
        """
        if not text.strip() or self.is_loading:
            return None

        # History is the transcript as it stood before this turn.
        history = to_history(self.messages)
        self.messages.append(ChatMessage(role="user", text=text, timestamp=_now_millis()))
        self.is_loading = True

        try:
            reply_text = await self.gemini.chat(text, history)
            reply = ChatMessage(role="model", text=reply_text, timestamp=_now_millis())
        except Exception as error:
            self.logger.error("Chat error: %s", error, exc_info=True)
            reply = ChatMessage(
                role="model", text=CONNECTION_ERROR_MESSAGE, timestamp=_now_millis()
            )
        finally:
            self.is_loading = False

        self.messages.append(reply)
        return reply
