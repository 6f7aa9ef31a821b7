import logging

import yt_dlp

from playq.conf import settings
from playq.types import DownloadResult


logger = logging.getLogger(__name__)


class DownloadInitFailed(Exception):
    pass


class DownloadFailed(Exception):
    pass


class Transcript:
    """
    Logger handed to yt-dlp. Everything yt-dlp would print ends up here,
    one message per line, and is forwarded to this module's logger.
    """

    def __init__(self):
        self.lines = []

    def debug(self, msg):
        self.lines.append(msg)
        logger.debug(msg)

    def info(self, msg):
        self.lines.append(msg)
        logger.info(msg)

    def warning(self, msg):
        self.lines.append(msg)
        logger.warning(msg)

    def error(self, msg):
        self.lines.append(msg)
        logger.error(msg)

    def __str__(self):
        return "\n".join(self.lines)


def default_options():
    return {
        "format": settings.AUDIO_QUALITY,
        "postprocessors": [
            {
                "key": "FFmpegExtractAudio",
                "preferredcodec": settings.AUDIO_FORMAT,
            }
        ],
    }


class Downloader:
    """
    Single yt-dlp job: fetch ``url`` into ``output_dir`` and extract its
    audio track.
    """

    def __init__(self, output_dir: str, url: str, options=None):
        self._output_dir = output_dir
        self._url = url
        self._transcript = Transcript()
        params = default_options() if options is None else dict(options)
        params.update(
            paths={"home": output_dir},
            logger=self._transcript,
            noplaylist=True,
            noprogress=True,
        )
        try:
            self._ydl = yt_dlp.YoutubeDL(params)
        except Exception as e:
            logger.error(e)
            raise DownloadInitFailed(e) from e

    @property
    def output_dir(self) -> str:
        return self._output_dir

    def download(self) -> DownloadResult:
        logger.debug(f"Downloading {self._url} into {self._output_dir}")
        try:
            with self._ydl as ydl:
                retcode = ydl.download([self._url])
        except yt_dlp.utils.DownloadError as e:
            raise DownloadFailed(e) from e
        if retcode:
            raise DownloadFailed(
                f"yt-dlp exited with status {retcode} for {self._url}"
            )
        return DownloadResult(
            output_dir=self._output_dir, output=str(self._transcript)
        )
