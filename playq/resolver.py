import logging
import os
import re

from typing import Optional

from playq.downloader import (
    DownloadFailed,
    DownloadInitFailed,
    Downloader,
)
from playq.types import AudioReference


logger = logging.getLogger(__name__)


REMOTE_LINK_RE = re.compile(
    r"(http:|https:)?(//)?(www\.)?(youtube\.com|youtu\.be)/"
    r"(watch\?v=)?([a-zA-Z0-9_-]{11})"
)

# line yt-dlp's FFmpegExtractAudio postprocessor writes once the audio
# file has been extracted
DESTINATION_MARKER = "[ExtractAudio] Destination: "


class ResolveError(Exception):
    message = "Unable to resolve audio"

    def __str__(self):
        detail = super().__str__()
        return f"{self.message}: {detail}" if detail else self.message


class NotFound(ResolveError):
    message = "File not found"


class FetchInit(ResolveError):
    message = "Error occurred while creating yt-dlp instance"


class FetchFailed(ResolveError):
    message = "Error occurred while downloading audio"


class ArtifactNotFound(ResolveError):
    message = "Downloaded audio file could not be located"


def classify(reference: str) -> AudioReference:
    kind = "remote" if REMOTE_LINK_RE.search(reference) else "local"
    return AudioReference(kind=kind, value=reference)


def is_remote(reference: str) -> bool:
    return classify(reference)["kind"] == "remote"


def find_artifact(output: str) -> Optional[str]:
    """
    Return the extracted-audio path announced in a yt-dlp transcript, or
    None when the transcript has no such line.
    """
    for line in output.splitlines():
        if DESTINATION_MARKER in line:
            return line.split(DESTINATION_MARKER, 1)[1].strip()
    return None


class SourceResolver:
    def __init__(self, scratch_area, options=None):
        self._scratch_area = scratch_area
        self._options = options

    def resolve(self, reference: str) -> str:
        audio_reference = classify(reference)
        if audio_reference["kind"] == "remote":
            path = self._fetch(audio_reference["value"])
        else:
            path = audio_reference["value"]
        self._check_readable(path)
        logger.debug(f"Resolved {reference} to {path}")
        return path

    def _fetch(self, url: str) -> str:
        try:
            downloader = Downloader(self._scratch_area.path, url, self._options)
        except DownloadInitFailed as e:
            raise FetchInit(*e.args) from e
        try:
            result = downloader.download()
        except DownloadFailed as e:
            raise FetchFailed(*e.args) from e
        artifact = find_artifact(result["output"])
        if artifact is None:
            logger.debug(
                f"No extracted audio announced in yt-dlp output for {url}"
            )
            raise ArtifactNotFound(url)
        return os.path.join(result["output_dir"], artifact)

    @staticmethod
    def _check_readable(path: str) -> None:
        if not path:
            raise NotFound()
        try:
            with open(path, "rb"):
                pass
        except OSError as e:
            logger.debug(f"Unable to open {path}: {e}")
            raise NotFound() from e
