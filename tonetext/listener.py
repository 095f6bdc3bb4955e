"""Continuous receive loop: microphone blocks -> analyzer -> receiver."""

import logging
import queue
import threading

from tonetext.analyzer import SpectralAnalyzer
from tonetext.config import DEFAULT_CONFIG

logger = logging.getLogger(__name__)


class Listener:
    """Owns the receive thread and the analyzer for one listening session.

    The capture callback only queues blocks; a single receive thread drains
    the queue, so the analyzer and the receiver each have exactly one writer.
    Every block is one analysis tick, timestamped by the number of samples
    consumed so far.
    """

    def __init__(self, microphone, receiver, config=DEFAULT_CONFIG):
        self.microphone = microphone
        self.receiver = receiver
        self.config = config
        self.analyzer = None
        self._queue = None
        self._thread = None
        self._stop_flag = None
        self._clock = 0.0

    @property
    def is_listening(self):
        return self._thread is not None

    def start(self):
        """Opens the microphone and starts the receive thread.

        Returns once capture is running. Device failures propagate as
        DeviceAccessError and leave the listener stopped.
        """
        if self.is_listening:
            return

        self.analyzer = SpectralAnalyzer(self.config)
        self.receiver.reset()
        self._clock = 0.0
        self._queue = queue.Queue()
        self._stop_flag = threading.Event()

        try:
            self.microphone.open(self._queue.put)
        except Exception:
            self.analyzer = None
            self._queue = None
            raise

        self._thread = threading.Thread(
            target=self._receive_loop,
            args=(self._queue, self._stop_flag),
            name="tonetext-receive",
            daemon=True,
        )
        self._thread.start()
        logger.info("Listening at %d Hz", self.config.sample_rate)

    def stop(self):
        """Releases the microphone and all analysis state. Safe to repeat.

        May be called from a decode subscriber, which runs on the receive
        thread; that thread then exits after the current tick.
        """
        if self._stop_flag is not None:
            self._stop_flag.set()
        self.microphone.close()

        thread, self._thread = self._thread, None
        if thread is not None:
            if thread is not threading.current_thread():
                thread.join()
            logger.info("Receiver stopped.")

        self.analyzer = None
        self._queue = None
        self.receiver.reset()

    def process_block(self, block):
        """Runs one analysis tick over a freshly captured block."""
        self.analyzer.push(block)
        frequency, magnitude = self.analyzer.analyze()
        self._clock += len(block) / self.config.sample_rate
        self.receiver.process(frequency, magnitude, self._clock)

    def spectrum(self):
        analyzer = self.analyzer
        return analyzer.byte_frequency_data() if analyzer is not None else None

    def _receive_loop(self, blocks, stop_flag):
        while not stop_flag.is_set():
            try:
                block = blocks.get(timeout=0.5)
            except queue.Empty:
                continue
            try:
                self.process_block(block)
            except Exception:
                logger.exception("Error in the receive loop, dropping partial frame")
                self.receiver.reset()
