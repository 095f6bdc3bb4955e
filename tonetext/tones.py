"""Sine tone rendering with click-free edges."""

from dataclasses import dataclass

import numpy as np

from tonetext.config import FADE_DURATION, SAMPLE_RATE, _whole_samples


def fade_envelope(num_samples, fade_samples):
    """Linear ramp up over the first fade_samples and down over the last."""
    i = np.arange(num_samples, dtype=np.float64)
    envelope = np.ones(num_samples, dtype=np.float64)
    if fade_samples <= 0:
        return envelope

    head = i < fade_samples
    envelope[head] = i[head] / fade_samples
    tail = ~head & (i > num_samples - fade_samples)
    envelope[tail] = (num_samples - i[tail]) / fade_samples
    return envelope


def synthesize(frequency, duration, sample_rate=SAMPLE_RATE, fade_duration=FADE_DURATION):
    """Renders a pure sine tone into a float32 buffer.

    Both edges are faded linearly over fade_duration (2ms by default).
    """
    num_samples = _whole_samples(duration, sample_rate)
    fade_samples = _whole_samples(fade_duration, sample_rate)
    t = np.arange(num_samples, dtype=np.float64) / sample_rate
    wave = np.sin(2 * np.pi * frequency * t) * fade_envelope(num_samples, fade_samples)
    return wave.astype(np.float32)


@dataclass(frozen=True)
class Tone:
    frequency: float
    duration: float
    sample_rate: int = SAMPLE_RATE
    fade_duration: float = FADE_DURATION

    def samples(self):
        return synthesize(self.frequency, self.duration, self.sample_rate, self.fade_duration)

    @property
    def num_samples(self):
        return _whole_samples(self.duration, self.sample_rate)
