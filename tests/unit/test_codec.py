import threading
import time

import numpy as np
import pytest

from tonetext.codec import AcousticCodec
from tonetext.errors import DeviceAccessError, UnsupportedCharacterError
from tonetext.receiver import State


class FakeSpeaker:
    def __init__(self, error=None, delay=0.0):
        self.error = error
        self.delay = delay
        self.buffers = []
        self.threads = set()

    def play(self, samples):
        if self.error is not None:
            raise self.error
        self.threads.add(threading.current_thread().name)
        time.sleep(self.delay)
        self.buffers.append(samples)


class FakeMicrophone:
    def __init__(self, error=None):
        self.error = error
        self.on_block = None

    def open(self, on_block):
        if self.error is not None:
            raise self.error
        self.on_block = on_block

    def close(self):
        self.on_block = None


class TestAcousticCodec:
    """Test cases for the send/listen facade."""

    def setup_method(self):
        self.speaker = FakeSpeaker()
        self.microphone = FakeMicrophone()
        self.codec = AcousticCodec(self.speaker, self.microphone)

    def teardown_method(self):
        self.codec.close()

    def test_encode_text_returns_future(self):
        """Sending completes asynchronously and plays the whole frame."""
        future = self.codec.encode_text("HI")
        assert future.result(timeout=5) is None
        assert len(self.speaker.buffers) == 4

    def test_encode_text_runs_off_the_calling_thread(self):
        self.codec.encode_text("A").result(timeout=5)
        assert threading.current_thread().name not in self.speaker.threads

    def test_sends_are_serialized(self):
        """Two sends queued back to back never interleave their tones."""
        speaker = FakeSpeaker(delay=0.001)
        with AcousticCodec(speaker, FakeMicrophone()) as codec:
            first = codec.encode_text("ab")
            second = codec.encode_text("cd")
            first.result(timeout=5)
            second.result(timeout=5)

        peaks = [np.argmax(np.abs(np.fft.rfft(b))) * 20 for b in speaker.buffers]
        expected = [1800, 2000 + 97 * 150, 2000 + 98 * 150, 1600,
                    1800, 2000 + 99 * 150, 2000 + 100 * 150, 1600]
        np.testing.assert_allclose(peaks, expected, atol=20)

    def test_unsupported_character_rejected_immediately(self):
        with pytest.raises(UnsupportedCharacterError):
            self.codec.encode_text("café")
        assert self.speaker.buffers == []

    def test_device_error_surfaces_through_future(self):
        codec = AcousticCodec(FakeSpeaker(error=DeviceAccessError("no speaker")), FakeMicrophone())
        try:
            future = codec.encode_text("HI")
            with pytest.raises(DeviceAccessError):
                future.result(timeout=5)
        finally:
            codec.close()

    def test_start_and_stop_listening(self):
        self.codec.start_listening()
        assert self.codec.is_listening
        assert self.microphone.on_block is not None

        self.codec.stop_listening()
        assert not self.codec.is_listening
        assert self.microphone.on_block is None

    def test_stop_listening_is_idempotent(self):
        self.codec.stop_listening()
        self.codec.start_listening()
        self.codec.stop_listening()
        self.codec.stop_listening()
        assert not self.codec.is_listening

    def test_start_listening_device_failure(self):
        """Microphone failures are raised to the caller, not retried."""
        codec = AcousticCodec(self.speaker, FakeMicrophone(error=DeviceAccessError("denied")))
        try:
            with pytest.raises(DeviceAccessError):
                codec.start_listening()
            assert not codec.is_listening
        finally:
            codec.close()

    def test_on_decode(self):
        """Subscribers receive frames decoded by the receiver."""
        frames = []
        unsubscribe = self.codec.on_decode(frames.append)
        for i, frequency in enumerate([1800, 12800, 12950, 1600]):
            self.codec.receiver.process(frequency, 200, i * 0.05)
        unsubscribe()
        for i, frequency in enumerate([1800, 12800, 1600]):
            self.codec.receiver.process(frequency, 200, 1 + i * 0.05)

        assert frames == ["HI"]

    def test_spectrum(self):
        assert self.codec.spectrum() is None
        self.codec.start_listening()
        spectrum = self.codec.spectrum()
        assert spectrum is not None
        assert len(spectrum) == 2048

    def test_close_stops_listening(self):
        codec = AcousticCodec(self.speaker, self.microphone)
        codec.start_listening()
        codec.close()
        assert not codec.is_listening
        assert codec.receiver.status is State.IDLE
