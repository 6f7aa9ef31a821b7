import logging
import sys
import traceback

from playq.conf import settings
from playq.media_backends.base import DecodeError
from playq.resolver import ResolveError, is_remote


logger = logging.getLogger(__name__)


def parse_count(args, default=1) -> int:
    try:
        count = int(args[0])
    except (IndexError, ValueError):
        return default
    return count if count >= 0 else default


class CommandDispatcher:
    RUNNING = "running"
    EXITING = "exiting"

    def __init__(
        self,
        resolver,
        media_backend,
        queue,
        scratch_area,
        stdin=None,
        stdout=None,
        stderr=None,
        prompt=None,
    ):
        self._resolver = resolver
        self._media_backend = media_backend
        self._queue = queue
        self._scratch_area = scratch_area
        self._stdin = stdin or sys.stdin
        self._stdout = stdout or sys.stdout
        self._stderr = stderr or sys.stderr
        self._prompt = settings.PROMPT if prompt is None else prompt
        self.state = self.RUNNING
        self._command_map = {
            "play": self._on_play,
            "pause": self._on_pause,
            "resume": self._on_resume,
            "p": self._on_toggle,
            "n": self._on_next,
            "next": self._on_next,
            "s": self._on_skip,
            "skip": self._on_skip,
            "clear": self._on_clear,
            "c": self._on_clear,
            "stop": self._on_clear,
            "exit": self._on_exit,
        }

    def run(self) -> int:
        try:
            while self._should_run():
                line = self._read_line()
                if line is None:
                    logger.debug("Input closed, exiting")
                    self._on_exit()
                    break
                self.dispatch(line)
        finally:
            self._shutdown()
        return 0

    def _should_run(self) -> bool:
        return self.state == self.RUNNING

    def dispatch(self, line: str) -> None:
        tokens = line.split()
        if not tokens:
            return
        name, args = tokens[0], tokens[1:]
        func = self._command_map.get(name, self._on_unknown)
        try:
            func(*args)
        except Exception as e:
            logger.error(
                "Command {} failed: {} \n {}".format(
                    name, e, traceback.format_exc()
                )
            )
            self._error(f"Error occurred while running {name}: {e}")
        self._report_queue_length()

    def _read_line(self):
        self._stdout.write(self._prompt)
        self._stdout.flush()
        try:
            line = self._stdin.readline()
        except UnicodeDecodeError as e:
            logger.debug(f"Undecodable input: {e}")
            self._error("Unable to decode input, expected UTF-8 text")
            return ""
        if not line:
            return None
        return line

    def _write(self, message):
        print(message, file=self._stdout)

    def _error(self, message):
        print(message, file=self._stderr)

    def _report_queue_length(self):
        length = len(self._queue)
        if length > 0:
            self._write(f"Position in queue: {length}")
        else:
            self._write("No audio in queue")

    def _shutdown(self) -> None:
        self._write("Exiting...")
        self._queue.stop()
        self._media_backend.release()
        self._scratch_area.release()

    # commands
    def _on_play(self, reference="", *_):
        if is_remote(reference):
            self._write("YouTube link found, using yt-dlp to download audio...")
        try:
            path = self._resolver.resolve(reference)
        except ResolveError as e:
            logger.debug(f"Unable to resolve {reference!r}: {e!r}")
            self._error(str(e))
            return
        try:
            stream = self._media_backend.open(path)
        except DecodeError as e:
            logger.debug(f"Unable to decode {e}")
            self._error("Error occurred while decoding audio file")
            return
        if self._queue.enqueue(stream):
            self._write("Playing audio...")
        else:
            self._write("Adding audio to queue...")

    def _on_pause(self, *_):
        self._queue.pause()

    def _on_resume(self, *_):
        self._queue.resume()

    def _on_toggle(self, *_):
        self._queue.toggle()

    def _on_next(self, *_):
        if self._queue.skip(1):
            self._write("Playing next song...")
        else:
            self._write("No more audio to play")

    def _on_skip(self, *args):
        count = parse_count(args)
        self._write(f"Skipping {count} song(s)...")
        if self._queue.skip(count) < count:
            self._write("No more audio to play")

    def _on_clear(self, *_):
        self._queue.clear()
        self._write("Audio stopped")

    def _on_exit(self, *_):
        self.state = self.EXITING

    def _on_unknown(self, *_):
        self._write("Unknown command")
