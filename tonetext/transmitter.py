"""Turns text into a framed tone sequence and plays it."""

import logging

import numpy as np

from tonetext.config import DEFAULT_CONFIG
from tonetext.symbols import frame_frequencies
from tonetext.tones import Tone

logger = logging.getLogger(__name__)


class Transmitter:
    """Plays one message as start marker, one tone per character, end marker.

    ``output`` is anything with a blocking ``play(samples)`` method, normally a
    :class:`tonetext.devices.SpeakerOutput`. Because ``play`` only returns
    once the tone has finished, tones never overlap in the air.
    """

    def __init__(self, output, config=DEFAULT_CONFIG):
        self.output = output
        self.config = config

    def tones_for(self, text):
        cfg = self.config
        return [
            Tone(frequency, cfg.char_duration, cfg.sample_rate, cfg.fade_duration)
            for frequency in frame_frequencies(text, cfg)
        ]

    def render_frame(self, text):
        """Returns the complete message as one contiguous float32 buffer."""
        return np.concatenate([tone.samples() for tone in self.tones_for(text)]).astype(np.float32)

    def transmit(self, text):
        # All tones are rendered before the first one plays
        tones = self.tones_for(text)
        buffers = [tone.samples() for tone in tones]

        logger.info(
            "Transmitting %d characters as %d tones (%.2fs)",
            len(text), len(tones), len(tones) * self.config.char_duration,
        )
        for tone, samples in zip(tones, buffers):
            logger.debug("Playing %.1f Hz", tone.frequency)
            self.output.play(samples)
        logger.info("Transmission finished")
