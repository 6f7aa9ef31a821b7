import logging
import logging.config
import signal
import sys

from playq.conf import settings
from playq.dispatcher import CommandDispatcher
from playq.media_backends.base import MediaBackendError, load_media_backend
from playq.playback import PlaybackQueue
from playq.resolver import SourceResolver
from playq.storage import ScratchArea


logger = logging.getLogger(__name__)


def main() -> int:
    logging.config.dictConfig(settings.LOGGING_CONFIG)
    # interrupts are ignored, the session only ends with "exit"
    signal.signal(signal.SIGINT, signal.SIG_IGN)

    try:
        scratch_area = ScratchArea()
    except OSError as e:
        print(
            f"Error occurred while creating temporary directory: {e}",
            file=sys.stderr,
        )
        return 1

    with scratch_area:
        try:
            media_backend = load_media_backend(settings.MEDIA_BACKEND)
        except MediaBackendError as e:
            logger.debug(f"Media backend {settings.MEDIA_BACKEND} unavailable")
            print(e, file=sys.stderr)
            return 1

        queue = PlaybackQueue(media_backend)
        queue.start()
        dispatcher = CommandDispatcher(
            SourceResolver(scratch_area), media_backend, queue, scratch_area
        )
        return dispatcher.run()
