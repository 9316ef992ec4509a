from dataclasses import dataclass
from typing import Literal, TypedDict

ChatRole = Literal["user", "model"]


class HistoryPart(TypedDict):
    text: str


class HistoryContent(TypedDict):
    """One prior turn in the shape the chat API replays as history."""

    role: ChatRole
    parts: list[HistoryPart]


@dataclass(frozen=True)
class ChatMessage:
    role: ChatRole
    text: str
    timestamp: int


def to_history(messages: list[ChatMessage]) -> list[HistoryContent]:
    """Project a transcript into chat history, preserving insertion order."""
    return [
        {
            "role": "user" if message.role == "user" else "model",
            "parts": [{"text": message.text}],
        }
        for message in messages
    ]
