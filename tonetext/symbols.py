"""Mapping between printable characters and tone frequencies."""

from tonetext.config import DEFAULT_CONFIG, FIRST_SYMBOL, LAST_SYMBOL
from tonetext.errors import UnsupportedCharacterError


def is_printable(char):
    return len(char) == 1 and FIRST_SYMBOL <= ord(char) <= LAST_SYMBOL


def frequency_of(char, config=DEFAULT_CONFIG):
    """Returns the tone frequency for a single character."""
    return config.base_frequency + ord(char) * config.frequency_step


def symbol_of(frequency, config=DEFAULT_CONFIG):
    """Converts a measured frequency back to a character.

    Returns None when the nearest character code is not printable ASCII, so
    the reading can be dropped as noise.
    """
    ordinal = config.ordinal_for(frequency)
    if FIRST_SYMBOL <= ordinal <= LAST_SYMBOL:
        return chr(ordinal)
    return None


def frame_frequencies(text, config=DEFAULT_CONFIG):
    """Returns the tone sequence for one message: start, characters, end."""
    for position, char in enumerate(text):
        if not is_printable(char):
            raise UnsupportedCharacterError(char, position)

    return (
        [config.start_marker_freq]
        + [frequency_of(char, config) for char in text]
        + [config.end_marker_freq]
    )
