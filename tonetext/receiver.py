"""Decode state machine turning (frequency, magnitude) ticks into messages."""

import enum
import logging
from dataclasses import dataclass, field
from typing import List, Optional

from tonetext.config import DEFAULT_CONFIG
from tonetext.symbols import symbol_of

logger = logging.getLogger(__name__)


class State(enum.Enum):
    IDLE = "idle"
    RECEIVING = "receiving"


@dataclass
class ReceiverState:
    receiving: bool = False
    buffer: List[str] = field(default_factory=list)
    last_frequency: Optional[float] = None
    last_time: Optional[float] = None


class Receiver:
    """Assembles frames between start and end markers.

    Feed it one reading per analysis tick with :meth:`process`. Completed
    frames are handed to every subscriber, in the order they were detected.
    """

    def __init__(self, config=DEFAULT_CONFIG):
        self.config = config
        self.state = ReceiverState()
        self._subscribers = []

    @property
    def status(self):
        return State.RECEIVING if self.state.receiving else State.IDLE

    def subscribe(self, callback):
        """Registers ``callback(text)``; returns a function that removes it."""
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def reset(self):
        self.state = ReceiverState()

    def _matches(self, frequency, target):
        return abs(frequency - target) < self.config.frequency_tolerance

    def process(self, frequency, magnitude, now):
        """Handles one tick. ``now`` is in seconds on any monotonic clock."""
        cfg = self.config
        st = self.state

        if magnitude <= cfg.signal_threshold:
            return

        if self._matches(frequency, cfg.start_marker_freq):
            if not st.receiving:
                logger.debug("Start marker at %.1f Hz", frequency)
            st.receiving = True
            st.buffer = []
            st.last_frequency = None
            st.last_time = None
            return

        if self._matches(frequency, cfg.end_marker_freq):
            if st.receiving:
                logger.debug("End marker at %.1f Hz", frequency)
            st.receiving = False
            if st.buffer:
                self._emit("".join(st.buffer))
                st.buffer = []
            return

        if not st.receiving:
            return

        is_new_frequency = (st.last_frequency is None
                            or abs(frequency - st.last_frequency) > cfg.frequency_tolerance)
        waited_long_enough = (st.last_time is None
                              or now - st.last_time > cfg.debounce_interval)
        if not (is_new_frequency and waited_long_enough):
            return

        char = symbol_of(frequency, cfg)
        if char is None:
            logger.debug("Dropped out-of-band reading at %.1f Hz", frequency)
            return

        st.buffer.append(char)
        st.last_frequency = frequency
        st.last_time = now
        logger.debug("Accepted %r at %.1f Hz", char, frequency)

    def _emit(self, text):
        logger.info("Decoded frame: %r", text)
        for callback in list(self._subscribers):
            callback(text)
