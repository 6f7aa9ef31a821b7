import logging
import threading

import vlc

from playq.conf import settings
from playq.media_backends.base import DecodeError, MediaBackendError
from playq.types import DecodedStream


logger = logging.getLogger(__name__)


class MediaBackend:
    def __init__(self, parse_timeout=None) -> None:
        self._parse_timeout = parse_timeout or settings.DECODE_TIMEOUT
        self._instance = vlc.Instance("--no-video", "--quiet")
        if self._instance is None:
            raise MediaBackendError(
                "Error occurred while creating audio stream, "
                "do you have an audio output device?"
            )
        self._player = self._instance.media_player_new()
        if self._player is None:
            raise MediaBackendError(
                "Error occurred while creating audio player"
            )

    def open(self, path: str) -> DecodedStream:
        try:
            with open(path, "rb"):
                pass
        except OSError as e:
            raise DecodeError(path) from e
        media = self._instance.media_new_path(path)
        parsed = threading.Event()
        media.event_manager().event_attach(
            vlc.EventType.MediaParsedChanged, lambda event: parsed.set()
        )
        media.parse_with_options(
            vlc.MediaParseFlag.local, int(self._parse_timeout * 1000)
        )
        parsed.wait(self._parse_timeout)
        status = media.get_parsed_status()
        if status != vlc.MediaParsedStatus.done or not self._has_audio(media):
            logger.debug(f"Unable to decode {path}, parse status: {status}")
            media.release()
            raise DecodeError(path)
        return DecodedStream(path=path, handle=media)

    def play(self, stream: DecodedStream) -> None:
        self._player.set_media(stream["handle"])
        self._player.play()

    def pause(self) -> None:
        self._player.set_pause(1)

    def resume(self) -> None:
        self._player.set_pause(0)

    def stop(self) -> None:
        self._player.stop()

    def is_playing(self) -> bool:
        return bool(self._player.is_playing())

    def is_finished(self) -> bool:
        return self._player.get_state() in (vlc.State.Ended, vlc.State.Error)

    def release_stream(self, stream: DecodedStream) -> None:
        stream["handle"].release()

    def release(self) -> None:
        self._player.release()
        self._instance.release()

    @staticmethod
    def _has_audio(media) -> bool:
        tracks = media.tracks_get() or ()
        return any(track.type == vlc.TrackType.audio for track in tracks)
