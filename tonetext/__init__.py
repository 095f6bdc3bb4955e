"""Send short text messages through the air as a sequence of audio tones."""

from tonetext.config import CodecConfig, DEFAULT_CONFIG
from tonetext.errors import (
    TonetextError,
    DeviceAccessError,
    ConfigurationError,
    UnsupportedCharacterError,
)
from tonetext.symbols import frequency_of, symbol_of, frame_frequencies
from tonetext.tones import Tone, synthesize
from tonetext.transmitter import Transmitter
from tonetext.analyzer import SpectralAnalyzer
from tonetext.receiver import Receiver, ReceiverState
from tonetext.listener import Listener
from tonetext.codec import AcousticCodec

__all__ = [
    "AcousticCodec",
    "CodecConfig",
    "ConfigurationError",
    "DEFAULT_CONFIG",
    "DeviceAccessError",
    "Listener",
    "Receiver",
    "ReceiverState",
    "SpectralAnalyzer",
    "Tone",
    "TonetextError",
    "Transmitter",
    "UnsupportedCharacterError",
    "frame_frequencies",
    "frequency_of",
    "symbol_of",
    "synthesize",
]

__version__ = "0.1.0"
