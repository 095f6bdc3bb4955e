"""Speaker and microphone handles backed by sounddevice."""

import logging

import sounddevice as sd

from tonetext.codec import AcousticCodec
from tonetext.config import DEFAULT_CONFIG
from tonetext.errors import DeviceAccessError

logger = logging.getLogger(__name__)


class SpeakerOutput:
    """Blocking mono playback: ``play`` returns once the buffer has finished."""

    def __init__(self, config=DEFAULT_CONFIG, device=None):
        self.config = config
        self.device = device

    def play(self, samples):
        try:
            sd.play(samples, self.config.sample_rate, device=self.device)
            sd.wait()
        except sd.PortAudioError as e:
            logger.error("Failed to play audio: %s", e)
            raise DeviceAccessError(f"Audio output unavailable: {e}") from e


class MicrophoneInput:
    """Mono float32 capture delivering fixed-size blocks to a callback.

    The handle is acquired by :meth:`open` and released by :meth:`close`;
    closing is safe to repeat and safe when nothing was opened.
    """

    def __init__(self, config=DEFAULT_CONFIG, device=None):
        self.config = config
        self.device = device
        self._stream = None

    @property
    def is_open(self):
        return self._stream is not None

    def open(self, on_block):
        """Starts capture; ``on_block(samples)`` gets a 1-D copy of each block."""
        if self._stream is not None:
            return

        def audio_callback(indata, frames, time, status):
            if status:
                logger.warning("Input stream status: %s", status)
            on_block(indata[:, 0].copy())

        try:
            stream = sd.InputStream(
                samplerate=self.config.sample_rate,
                channels=1,
                dtype="float32",
                blocksize=self.config.block_size,
                device=self.device,
                callback=audio_callback,
            )
        except sd.PortAudioError as e:
            logger.error("Failed to open audio input: %s", e)
            raise DeviceAccessError(f"Microphone unavailable: {e}") from e

        try:
            stream.start()
        except sd.PortAudioError as e:
            stream.close()
            logger.error("Failed to start audio input: %s", e)
            raise DeviceAccessError(f"Microphone unavailable: {e}") from e
        self._stream = stream

    def close(self):
        stream, self._stream = self._stream, None
        if stream is None:
            return
        try:
            stream.stop()
        finally:
            stream.close()


def open_default_codec(config=DEFAULT_CONFIG):
    """Builds an AcousticCodec bound to the system's default devices."""
    return AcousticCodec(
        output=SpeakerOutput(config),
        microphone=MicrophoneInput(config),
        config=config,
    )
