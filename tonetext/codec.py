"""High-level send/listen facade."""

import logging
from concurrent.futures import ThreadPoolExecutor

from tonetext.config import DEFAULT_CONFIG
from tonetext.listener import Listener
from tonetext.receiver import Receiver
from tonetext.symbols import frame_frequencies
from tonetext.transmitter import Transmitter

logger = logging.getLogger(__name__)


class AcousticCodec:
    """Sends text as tones and publishes text decoded from the microphone.

    Sending and listening are independent; the link is half-duplex only by
    convention, so avoid transmitting while a nearby receiver is listening to
    the same room.
    """

    def __init__(self, output, microphone, config=DEFAULT_CONFIG):
        self.config = config
        self.transmitter = Transmitter(output, config)
        self.receiver = Receiver(config)
        self.listener = Listener(microphone, self.receiver, config)
        # One worker keeps concurrent sends in a single ordered stream
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="tonetext-send")

    def encode_text(self, text):
        """Queues ``text`` for transmission and returns a Future.

        Unsupported characters are rejected immediately; device errors are
        raised from ``Future.result()``.
        """
        frame_frequencies(text, self.config)
        return self._executor.submit(self.transmitter.transmit, text)

    def start_listening(self):
        self.listener.start()

    def stop_listening(self):
        self.listener.stop()

    @property
    def is_listening(self):
        return self.listener.is_listening

    def on_decode(self, callback):
        """Calls ``callback(text)`` for each decoded message; returns an unsubscribe function."""
        return self.receiver.subscribe(callback)

    def spectrum(self):
        """Latest 0-255 spectrum while listening, otherwise None."""
        return self.listener.spectrum()

    def close(self):
        self.stop_listening()
        self._executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
