import os
import threading
import time

from playq.media_backends.base import DecodeError
from playq.types import DecodedStream


class MediaBackend:
    """
    Backend without audio output. Streams "play" for ``length`` seconds,
    or until ``finish`` is called when no length is given.
    """

    SUPPORTED_EXTENSIONS = (".flac", ".mp3", ".ogg", ".opus", ".m4a", ".wav")

    def __init__(self, length=None):
        self._length = length
        self._lock = threading.Lock()
        self._current = None
        self._is_playing = False
        self._finished = False
        self._remaining = None
        self._started_at = None
        self._timer = None
        # bumped on every play/pause/stop so a stale timer cannot finish
        # a stream it was not started for
        self._generation = 0
        self.played = []
        self.released = []

    def open(self, path: str) -> DecodedStream:
        _, ext = os.path.splitext(path)
        if ext.lower() not in self.SUPPORTED_EXTENSIONS:
            raise DecodeError(path)
        try:
            with open(path, "rb") as f:
                data = f.read()
        except OSError as e:
            raise DecodeError(path) from e
        return DecodedStream(path=path, handle=data)

    def play(self, stream: DecodedStream) -> None:
        with self._lock:
            self._cancel_timer()
            self._current = stream
            self._finished = False
            self._remaining = self._length
            self.played.append(stream["path"])
            self._start()

    def pause(self) -> None:
        with self._lock:
            if not self._is_playing:
                return
            self._cancel_timer()
            if self._remaining is not None:
                self._remaining -= time.monotonic() - self._started_at
            self._is_playing = False

    def resume(self) -> None:
        with self._lock:
            if self._current is None or self._finished or self._is_playing:
                return
            self._start()

    def stop(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._current = None
            self._is_playing = False

    def is_playing(self) -> bool:
        return self._is_playing

    def is_finished(self) -> bool:
        return self._finished

    def release_stream(self, stream: DecodedStream) -> None:
        self.released.append(stream["path"])

    def release(self) -> None:
        self.stop()

    def finish(self) -> None:
        with self._lock:
            self._cancel_timer()
            self._mark_finished()

    @property
    def current(self):
        return self._current

    def _start(self):
        self._is_playing = True
        self._started_at = time.monotonic()
        if self._remaining is not None:
            self._timer = threading.Timer(
                max(self._remaining, 0),
                self._on_timer,
                args=(self._generation,),
            )
            self._timer.daemon = True
            self._timer.start()

    def _on_timer(self, generation):
        with self._lock:
            if generation == self._generation:
                self._mark_finished()

    def _mark_finished(self):
        self._timer = None
        self._is_playing = False
        self._finished = True

    def _cancel_timer(self):
        self._generation += 1
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
