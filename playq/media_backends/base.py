import importlib

from typing import Protocol


from playq.types import DecodedStream


class DecodeError(Exception):
    pass


class MediaBackendError(Exception):
    pass


class MediaBackend(Protocol):
    def open(self, path: str) -> DecodedStream:
        pass

    def play(self, stream: DecodedStream) -> None:
        pass

    def pause(self) -> None:
        pass

    def resume(self) -> None:
        pass

    def stop(self) -> None:
        pass

    def is_playing(self) -> bool:
        pass

    def is_finished(self) -> bool:
        pass

    def release_stream(self, stream: DecodedStream) -> None:
        pass

    def release(self) -> None:
        pass


def load_media_backend(module_path: str) -> MediaBackend:
    try:
        module = importlib.import_module(module_path)
    except (ImportError, NotImplementedError, OSError) as e:
        # python-vlc fails at import time when libvlc is missing
        raise MediaBackendError(
            f"Unable to load media backend {module_path}: {e}"
        ) from e
    return module.MediaBackend()
