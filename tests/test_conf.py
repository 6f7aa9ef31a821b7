import os
import pytest

from unittest import mock

from playq.conf import ImproperlyConfigured, setup_settings


@mock.patch.dict(os.environ, {"PLAYQ_ENV_FILE": "/no/such/playq.env"})
def test_defaults():
    settings = setup_settings()
    assert settings.DEBUG is False
    assert settings.MEDIA_BACKEND == "playq.media_backends.vlc"
    assert settings.PROMPT == "> "
    assert settings.AUDIO_QUALITY == "bestaudio"
    assert settings.AUDIO_FORMAT == "flac"
    assert settings.SCRATCH_DIR is None
    assert settings.LOGGING_CONFIG["handlers"]["default"]["level"] == "WARNING"


@mock.patch.dict(
    os.environ,
    {
        "PLAYQ_ENV_FILE": "/no/such/playq.env",
        "PLAYQ_DEBUG": "1",
        "PLAYQ_AUDIO_FORMAT": "MP3",
        "PLAYQ_POLL_INTERVAL": "0.5",
    },
)
def test_environment_overrides():
    settings = setup_settings()
    assert settings.DEBUG is True
    assert settings.AUDIO_FORMAT == "mp3"
    assert settings.POLL_INTERVAL == 0.5
    assert settings.LOGGING_CONFIG["loggers"][""]["level"] == "DEBUG"


def test_env_file(tmp_path):
    env_file = tmp_path / "playq.env"
    env_file.write_text("PLAYQ_MEDIA_BACKEND=playq.media_backends.dummy\n")
    with mock.patch.dict(os.environ, {"PLAYQ_ENV_FILE": str(env_file)}):
        os.environ.pop("PLAYQ_MEDIA_BACKEND", None)
        settings = setup_settings()
    assert settings.MEDIA_BACKEND == "playq.media_backends.dummy"


@pytest.mark.parametrize(
    "environment",
    [
        {"PLAYQ_AUDIO_FORMAT": "midi"},
        {"PLAYQ_LOG_LEVEL": "LOUD"},
    ],
)
def test_invalid_settings(environment):
    environment["PLAYQ_ENV_FILE"] = "/no/such/playq.env"
    with mock.patch.dict(os.environ, environment):
        with pytest.raises(ImproperlyConfigured):
            setup_settings()
