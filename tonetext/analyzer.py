"""Rolling-window spectrum analysis and dominant tone picking.

The analyzer behaves like a browser AnalyserNode: every tick it windows the
most recent ``fft_size`` samples with a Blackman window, smooths the
magnitude spectrum over time and maps it from decibels onto 0-255. The
receiver only needs the strongest bin, but the whole byte spectrum is kept
for anything that wants to draw it.
"""

import numpy as np

from tonetext.config import DEFAULT_CONFIG


def blackman_window(size):
    """Periodic Blackman window (alpha = 0.16)."""
    n = np.arange(size, dtype=np.float64)
    return (0.42
            - 0.5 * np.cos(2 * np.pi * n / size)
            + 0.08 * np.cos(4 * np.pi * n / size))


class SpectralAnalyzer:
    def __init__(self, config=DEFAULT_CONFIG):
        self.config = config
        self.fft_size = config.fft_size
        self.bin_count = config.fft_size // 2
        self._window = blackman_window(self.fft_size)
        self.reset()

    def reset(self):
        """Forgets buffered samples and smoothing history."""
        self._samples = np.zeros(self.fft_size, dtype=np.float64)
        self._smoothed = np.zeros(self.bin_count, dtype=np.float64)
        self._bytes = np.zeros(self.bin_count, dtype=np.uint8)

    def push(self, block):
        """Appends captured samples, keeping only the newest fft_size."""
        block = np.nan_to_num(np.asarray(block, dtype=np.float64).ravel(),
                              nan=0.0, posinf=0.0, neginf=0.0)
        if len(block) >= self.fft_size:
            self._samples = block[-self.fft_size:].copy()
        elif len(block):
            self._samples = np.concatenate((self._samples[len(block):], block))

    def bin_frequency(self, index):
        return index * self.config.sample_rate / self.fft_size

    def _to_bytes(self, magnitudes):
        cfg = self.config
        with np.errstate(divide="ignore"):
            decibels = 20 * np.log10(magnitudes)
        scaled = 255.0 * (decibels - cfg.min_decibels) / (cfg.max_decibels - cfg.min_decibels)
        return np.floor(np.clip(scaled, 0, 255)).astype(np.uint8)

    def analyze(self):
        """Runs one analysis tick.

        Returns ``(dominant_frequency, magnitude)`` where magnitude is the
        0-255 level of the strongest bin.
        """
        spectrum = np.abs(np.fft.rfft(self._samples * self._window))[:self.bin_count]
        spectrum /= self.fft_size

        tau = self.config.smoothing_time_constant
        self._smoothed = tau * self._smoothed + (1.0 - tau) * spectrum
        self._bytes = self._to_bytes(self._smoothed)

        # Bins around a loud tone all saturate at 255; pick on linear magnitudes
        peak = int(np.argmax(self._smoothed))
        return self.bin_frequency(peak), int(self._bytes[peak])

    def byte_frequency_data(self):
        """Byte spectrum from the most recent tick."""
        return self._bytes.copy()
