import logging
import threading
import traceback

from collections import deque
from typing import Optional

from playq.conf import settings
from playq.media_backends.base import MediaBackend
from playq.types import DecodedStream


logger = logging.getLogger(__name__)


class PlaybackQueue:
    """
    FIFO of decoded streams played one after another on a media backend.

    The head of the queue is the sounding entry. Every operation takes the
    same lock, so commands can run while the monitor thread advances the
    queue at the end of a track.
    """

    def __init__(self, media_backend: MediaBackend, poll_interval=None):
        self._media_backend = media_backend
        self._poll_interval = poll_interval or settings.POLL_INTERVAL
        self._entries = deque()
        self._sounding = None
        self._paused = False
        self._lock = threading.RLock()
        self._stopped = threading.Event()
        self._monitor = None

    def __len__(self):
        with self._lock:
            return len(self._entries)

    @property
    def current(self) -> Optional[DecodedStream]:
        return self._sounding

    @property
    def is_paused(self) -> bool:
        return self._paused

    def enqueue(self, stream: DecodedStream) -> bool:
        """
        Append ``stream``. Returns True when it started playing right away,
        False when it waits behind other entries.
        """
        with self._lock:
            was_empty = not self._entries
            self._entries.append(stream)
            if was_empty:
                self._paused = False
                self._start_head()
            return was_empty

    def pause(self) -> None:
        with self._lock:
            if self._paused:
                return
            self._paused = True
            if self._sounding is not None:
                self._media_backend.pause()

    def resume(self) -> None:
        with self._lock:
            if not self._paused:
                return
            self._paused = False
            if self._sounding is not None:
                self._media_backend.resume()
            else:
                self._start_head()

    def toggle(self) -> bool:
        with self._lock:
            if self._paused:
                self.resume()
            else:
                self.pause()
            return self._paused

    def skip(self, count=1) -> int:
        skipped = 0
        with self._lock:
            while skipped < count and self._entries:
                self._advance()
                skipped += 1
        return skipped

    def clear(self) -> None:
        with self._lock:
            self._media_backend.stop()
            while self._entries:
                self._drop(self._entries.popleft())
            self._sounding = None

    def poll(self) -> None:
        with self._lock:
            if self._paused:
                return
            if self._sounding is None:
                # head left waiting after a failed start
                self._start_head()
            elif self._media_backend.is_finished():
                logger.debug(f"Finished playing {self._sounding['path']}")
                self._advance()

    def start(self) -> None:
        self._monitor = threading.Thread(
            target=self.run, name="playback-monitor", daemon=True
        )
        self._monitor.start()

    def run(self) -> None:
        while self._should_run():
            try:
                self.poll()
            except Exception as e:
                logger.error(
                    "Playback monitor failed: {} \n {}".format(
                        e, traceback.format_exc()
                    )
                )
            self._stopped.wait(self._poll_interval)

    def stop(self) -> None:
        self._stopped.set()
        self.clear()
        if (
            self._monitor is not None
            and self._monitor is not threading.current_thread()
        ):
            self._monitor.join()

    def _should_run(self) -> bool:
        return not self._stopped.is_set()

    def _advance(self):
        self._media_backend.stop()
        self._drop(self._entries.popleft())
        self._sounding = None
        self._start_head()

    def _start_head(self):
        if not self._entries or self._paused:
            return
        head = self._entries[0]
        try:
            self._media_backend.play(head)
        except Exception:
            # unplayable entries leave the queue, the next one starts on poll
            self._drop(self._entries.popleft())
            raise
        self._sounding = head
        logger.info(f"Started playing {head['path']}")

    def _drop(self, stream: DecodedStream):
        self._media_backend.release_stream(stream)
