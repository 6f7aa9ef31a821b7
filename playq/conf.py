import logging
import os

import environ

from playq.exceptions import ImproperlyConfigured  # noqa: F401


class Settings(dict):
    def __getattr__(self, item):
        return self.get(item)

    def __setattr__(self, key, value):
        self[key] = value


# codecs accepted by yt-dlp's FFmpegExtractAudio postprocessor
AUDIO_FORMATS = (
    "best",
    "aac",
    "alac",
    "flac",
    "m4a",
    "mp3",
    "opus",
    "vorbis",
    "wav",
)

DEFAULT_ENV_FILE = os.path.join("~", ".config", "playq", "playq.env")


def setup_settings():
    env = environ.Env()
    env.read_env(
        env_file=os.path.expanduser(
            os.environ.get("PLAYQ_ENV_FILE", DEFAULT_ENV_FILE)
        )
    )
    DEBUG = env.bool("PLAYQ_DEBUG", default=False)
    LOG_LEVEL = env.str("PLAYQ_LOG_LEVEL", default="WARNING").upper()
    if not isinstance(logging.getLevelName(LOG_LEVEL), int):
        raise ImproperlyConfigured(
            "PLAYQ_LOG_LEVEL must be a logging level, got {}.".format(
                LOG_LEVEL
            )
        )
    AUDIO_FORMAT = env.str("PLAYQ_AUDIO_FORMAT", default="flac").lower()
    if AUDIO_FORMAT not in AUDIO_FORMATS:
        raise ImproperlyConfigured(
            "PLAYQ_AUDIO_FORMAT must be one of {}, got {}.".format(
                ", ".join(AUDIO_FORMATS), AUDIO_FORMAT
            )
        )
    return Settings(
        DEBUG=DEBUG,
        MEDIA_BACKEND=env.str(
            "PLAYQ_MEDIA_BACKEND",
            default="playq.media_backends.vlc",
        ),
        PROMPT=env.str("PLAYQ_PROMPT", default="> "),
        SCRATCH_DIR=env.str("PLAYQ_SCRATCH_DIR", default=None),
        SCRATCH_PREFIX=env.str("PLAYQ_SCRATCH_PREFIX", default="playq-"),
        AUDIO_QUALITY=env.str("PLAYQ_AUDIO_QUALITY", default="bestaudio"),
        AUDIO_FORMAT=AUDIO_FORMAT,
        DECODE_TIMEOUT=env.float("PLAYQ_DECODE_TIMEOUT", default=5.0),
        POLL_INTERVAL=env.float("PLAYQ_POLL_INTERVAL", default=0.1),
        LOGGING_CONFIG={
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "standard": {
                    "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
                },
            },
            "handlers": {
                "default": {
                    "level": "DEBUG" if DEBUG else LOG_LEVEL,
                    "formatter": "standard",
                    "class": "logging.StreamHandler",
                },
            },
            "loggers": {
                "": {
                    "handlers": ["default"],
                    "level": "DEBUG" if DEBUG else LOG_LEVEL,
                }
            },
        },
    )


settings = setup_settings()
