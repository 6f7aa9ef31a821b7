import logging
import os
import shutil
import tempfile

from playq.conf import settings


logger = logging.getLogger(__name__)


class ScratchArea:
    """
    Temporary directory that receives remote downloads for the lifetime of
    the process. Nothing but the resolver writes into it.
    """

    def __init__(self, prefix=None, base_dir=None):
        if base_dir is None:
            base_dir = settings.SCRATCH_DIR
        if base_dir is not None and not os.path.exists(base_dir):
            os.makedirs(base_dir, exist_ok=True)
        self.path = tempfile.mkdtemp(
            prefix=prefix or settings.SCRATCH_PREFIX, dir=base_dir
        )
        logger.debug(f"Created scratch directory {self.path}")

    @property
    def exists(self) -> bool:
        return os.path.isdir(self.path)

    def release(self) -> None:
        if not self.exists:
            return
        try:
            shutil.rmtree(self.path)
            logger.debug(f"Removed scratch directory {self.path}")
        except OSError as e:
            logger.warning(
                f"Unable to remove scratch directory {self.path}: {e}"
            )

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.release()
