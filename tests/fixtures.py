import io
import pytest

from playq.dispatcher import CommandDispatcher
from playq.media_backends.dummy import MediaBackend
from playq.playback import PlaybackQueue
from playq.resolver import SourceResolver
from playq.storage import ScratchArea


@pytest.fixture
def media_backend():
    return MediaBackend()


@pytest.fixture
def playback_queue(media_backend):
    return PlaybackQueue(media_backend)


@pytest.fixture
def scratch_area(tmp_path):
    scratch_area = ScratchArea(base_dir=str(tmp_path))
    yield scratch_area
    scratch_area.release()


@pytest.fixture
def dispatcher(media_backend, playback_queue, scratch_area):
    return CommandDispatcher(
        SourceResolver(scratch_area),
        media_backend,
        playback_queue,
        scratch_area,
        stdin=io.StringIO(),
        stdout=io.StringIO(),
        stderr=io.StringIO(),
        prompt="> ",
    )
