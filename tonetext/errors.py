"""Exceptions raised by the acoustic codec."""


class TonetextError(Exception):
    """Base class for every error raised by tonetext."""


class DeviceAccessError(TonetextError):
    """The microphone or speaker could not be opened or used."""


class ConfigurationError(TonetextError, ValueError):
    """Link constants that cannot produce an unambiguous tone plan."""


class UnsupportedCharacterError(TonetextError, ValueError):
    """Text contains a character outside the printable ASCII range."""

    def __init__(self, char, position):
        self.char = char
        self.position = position
        super().__init__(
            f"Character {char!r} at position {position} is not printable ASCII (32-126)."
        )
