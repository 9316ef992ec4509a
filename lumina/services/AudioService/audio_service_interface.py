from abc import ABC, abstractmethod
from typing import Protocol

from lumina.entities.audio import DEFAULT_SAMPLE_RATE, RawAudioBuffer


class PlaybackHandle(Protocol):
    def stop(self) -> None: ...


class AudioServiceInterface(ABC):
    @abstractmethod
    def play(
        self, buffer: RawAudioBuffer, sample_rate: int = DEFAULT_SAMPLE_RATE
    ) -> PlaybackHandle:
        """
        Start playing a raw mono PCM16 buffer and return without waiting.

        Raises:
            PlaybackError: If the buffer cannot be decoded or the output device
                cannot be started.
        """
