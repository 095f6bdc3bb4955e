"""Link constants shared by both ends of an acoustic text link.

Both the sender and the receiver must agree on every value here, otherwise
tones are played at frequencies the other side never looks for.
"""

import math
from dataclasses import dataclass

from tonetext.errors import ConfigurationError

# --- Configuration ---
SAMPLE_RATE = 48000  # Samples per second
CHAR_DURATION = 0.05  # Duration of each character tone in seconds (50ms)
FADE_DURATION = 0.002  # Linear fade in/out at each tone edge (2ms)
BASE_FREQUENCY = 2000.0  # Frequency of character code 0
FREQUENCY_STEP = 150.0  # Spacing between adjacent character codes
START_MARKER_FREQ = 1800.0  # Tone announcing the start of a message
END_MARKER_FREQ = 1600.0  # Tone closing a message

# Receiver thresholds
SIGNAL_THRESHOLD = 150  # Minimum peak magnitude (0-255) treated as a tone
FREQUENCY_TOLERANCE = 40.0  # Frequency matching tolerance in Hz
DEBOUNCE_FACTOR = 0.8  # Fraction of CHAR_DURATION before a new symbol is accepted

# Spectral analysis
FFT_SIZE = 4096  # Analysis window, ~11.7 Hz per bin at 48 kHz
SMOOTHING_TIME_CONSTANT = 0.5
MIN_DECIBELS = -100.0
MAX_DECIBELS = -30.0
BLOCK_SIZE = 800  # Capture block per analysis tick, ~60 ticks per second

# Printable ASCII
FIRST_SYMBOL = 32
LAST_SYMBOL = 126


def _whole_samples(seconds, sample_rate):
    # 0.05 * 48000 must give 2400, not 2401 from float noise
    return math.ceil(round(seconds * sample_rate, 9))


@dataclass(frozen=True)
class CodecConfig:
    sample_rate: int = SAMPLE_RATE
    char_duration: float = CHAR_DURATION
    fade_duration: float = FADE_DURATION
    base_frequency: float = BASE_FREQUENCY
    frequency_step: float = FREQUENCY_STEP
    start_marker_freq: float = START_MARKER_FREQ
    end_marker_freq: float = END_MARKER_FREQ
    signal_threshold: int = SIGNAL_THRESHOLD
    frequency_tolerance: float = FREQUENCY_TOLERANCE
    debounce_factor: float = DEBOUNCE_FACTOR
    fft_size: int = FFT_SIZE
    smoothing_time_constant: float = SMOOTHING_TIME_CONSTANT
    min_decibels: float = MIN_DECIBELS
    max_decibels: float = MAX_DECIBELS
    block_size: int = BLOCK_SIZE

    def __post_init__(self):
        self.validate()

    @property
    def samples_per_char(self) -> int:
        return _whole_samples(self.char_duration, self.sample_rate)

    @property
    def fade_samples(self) -> int:
        return _whole_samples(self.fade_duration, self.sample_rate)

    @property
    def debounce_interval(self) -> float:
        """Minimum time between two accepted symbols, in seconds."""
        return self.debounce_factor * self.char_duration

    @property
    def bin_resolution(self) -> float:
        return self.sample_rate / self.fft_size

    @property
    def symbol_band(self):
        """(lowest, highest) symbol frequency in Hz."""
        return (
            self.base_frequency + FIRST_SYMBOL * self.frequency_step,
            self.base_frequency + LAST_SYMBOL * self.frequency_step,
        )

    def ordinal_for(self, frequency: float) -> int:
        return int(round((frequency - self.base_frequency) / self.frequency_step))

    def validate(self):
        """Raise ConfigurationError unless markers and symbols stay apart."""
        if self.sample_rate <= 0 or self.char_duration <= 0:
            raise ConfigurationError("Sample rate and character duration must be positive.")
        if self.fft_size <= 0 or self.fft_size & (self.fft_size - 1):
            raise ConfigurationError(f"FFT size must be a power of two, got {self.fft_size}.")
        if not 0.0 <= self.smoothing_time_constant < 1.0:
            raise ConfigurationError("Smoothing time constant must be in [0, 1).")
        if self.max_decibels <= self.min_decibels:
            raise ConfigurationError("max_decibels must be greater than min_decibels.")

        tolerance = self.frequency_tolerance
        if self.frequency_step <= 2 * tolerance:
            raise ConfigurationError(
                f"Frequency step {self.frequency_step} Hz cannot separate symbols "
                f"with a {tolerance} Hz tolerance."
            )

        low, high = self.symbol_band
        nyquist = self.sample_rate / 2
        if high >= nyquist:
            raise ConfigurationError(
                f"Highest symbol tone {high} Hz is at or above Nyquist ({nyquist} Hz)."
            )

        if abs(self.start_marker_freq - self.end_marker_freq) < 2 * tolerance:
            raise ConfigurationError("Start and end markers are too close to tell apart.")

        for name, marker in (("start", self.start_marker_freq), ("end", self.end_marker_freq)):
            for edge in (marker - tolerance, marker + tolerance):
                if FIRST_SYMBOL <= self.ordinal_for(edge) <= LAST_SYMBOL:
                    raise ConfigurationError(
                        f"The {name} marker at {marker} Hz overlaps the symbol band "
                        f"{low:.0f}-{high:.0f} Hz."
                    )


DEFAULT_CONFIG = CodecConfig()
