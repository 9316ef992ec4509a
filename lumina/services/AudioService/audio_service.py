from __future__ import annotations

import logging
import threading
from collections.abc import Callable
from typing import Any

import numpy as np

from lumina.entities.audio import DEFAULT_CHANNELS, DEFAULT_SAMPLE_RATE, RawAudioBuffer
from lumina.services.AudioService.audio_service_interface import AudioServiceInterface

StreamCallback = Callable[[np.ndarray, int, Any, Any], None]
OutputStreamFactory = Callable[[int, int, StreamCallback], Any]

_PCM16_SCALE = 32768.0


class PlaybackError(Exception):
    """Raised when an audio buffer cannot be built or played."""


def decode_pcm16(buffer: RawAudioBuffer) -> np.ndarray:
    """
    Convert little-endian signed 16-bit PCM into float32 samples in [-1.0, 1.0].

    Raises:
        ValueError: If the buffer length is not a whole number of samples.
    """
    samples = np.frombuffer(buffer, dtype="<i2")
    return (samples / _PCM16_SCALE).astype(np.float32)


def open_output_stream(
    sample_rate: int, channels: int, callback: StreamCallback
) -> Any:
    """Open a float32 output stream on the default device."""
    import sounddevice as sd

    return sd.OutputStream(
        samplerate=sample_rate,
        channels=channels,
        dtype="float32",
        callback=callback,
    )


class PlaybackSource:
    """Feeds one decoded buffer to an output stream, then silence."""

    def __init__(self) -> None:
        self.samples: np.ndarray = np.zeros(0, dtype=np.float32)
        self.position = 0
        self.stream: Any | None = None
        self._lock = threading.Lock()

    @property
    def finished(self) -> bool:
        return self.position >= len(self.samples)

    def fill(self, outdata: np.ndarray, frames: int, time: Any, status: Any) -> None:
        with self._lock:
            chunk = self.samples[self.position : self.position + frames]
            self.position += len(chunk)
        outdata[: len(chunk), 0] = chunk
        outdata[len(chunk) :] = 0

    def stop(self) -> None:
        with self._lock:
            self.position = len(self.samples)
        if self.stream is not None:
            self.stream.stop()


class AudioService(AudioServiceInterface):
    def __init__(
        self,
        logger: logging.Logger,
        stream_factory: OutputStreamFactory = open_output_stream,
    ) -> None:
        self.logger = logger
        self.stream_factory = stream_factory

    def play(
        self, buffer: RawAudioBuffer, sample_rate: int = DEFAULT_SAMPLE_RATE
    ) -> PlaybackSource:
        source = PlaybackSource()

        try:
            stream = self.stream_factory(sample_rate, DEFAULT_CHANNELS, source.fill)
        except Exception as exc:
            self.logger.error("Could not open audio output: %s", exc)
            raise PlaybackError(f"Could not open audio output: {exc}") from exc

        try:
            source.samples = decode_pcm16(buffer)
            source.stream = stream
            stream.start()
        except Exception as exc:
            self.logger.error("Error playing audio: %s", exc)
            stream.close()
            raise PlaybackError(f"Error playing audio: {exc}") from exc

        # The stream stays open after a successful start; nothing closes it.
        self.logger.info(
            "Playing %d samples at %d Hz", len(source.samples), sample_rate
        )
        return source
