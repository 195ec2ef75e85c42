"""
Pytest configuration and fixtures for yt-dlp-prompt tests
"""

import sys
import tempfile
from pathlib import Path

import pytest
import yaml

from ytdlp_prompt.utils import config_utils


@pytest.fixture(autouse=True)
def isolated_config(monkeypatch):
    """Every test starts from built-in defaults, whatever the host environment says"""
    monkeypatch.delenv(config_utils.CONFIG_PATH_ENV, raising=False)
    for env_name in config_utils.ENV_MAPPINGS.values():
        monkeypatch.delenv(env_name, raising=False)
    # keep a developer's .env out of the tests
    monkeypatch.setattr(config_utils, "load_dotenv", lambda *args, **kwargs: False)
    config_utils._invalidate_cache()
    yield
    config_utils._invalidate_cache()


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests"""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def config_file(temp_dir, monkeypatch):
    """Write a YAML config and point the config layer at it"""
    def _write(data):
        path = temp_dir / "config.yaml"
        with open(path, "w") as f:
            yaml.dump(data, f)
        monkeypatch.setenv(config_utils.CONFIG_PATH_ENV, str(path))
        config_utils._invalidate_cache()
        return path
    return _write


@pytest.fixture
def python_tool():
    """The running interpreter, used as a stand-in external tool"""
    return sys.executable


@pytest.fixture
def sample_formats():
    """A trimmed ``formats`` list as yt-dlp -j reports it"""
    return [
        {
            "format_id": "140",
            "format_note": "medium",
            "ext": "m4a",
            "resolution": "audio only",
            "fps": None,
            "acodec": "mp4a.40.2",
            "vcodec": "none",
            "language": "en",
            "tbr": 129.5,
        },
        {
            "format_id": "136",
            "format_note": "720p",
            "ext": "mp4",
            "resolution": "1280x720",
            "height": 720,
            "width": 1280,
            "fps": 30,
            "vcodec": "avc1.4d401f",
            "acodec": "none",
            "tbr": 1500.0,
        },
        {
            "format_id": "251",
            "format_note": "medium",
            "ext": "webm",
            "resolution": None,
            "acodec": "opus",
            "vcodec": "none",
            "language": "ja",
            "tbr": 135.1,
        },
        {
            "format_id": "137",
            "format_note": "1080p",
            "ext": "mp4",
            "resolution": "1920x1080",
            "height": 1080,
            "width": 1920,
            "fps": 30,
            "vcodec": "avc1.640028",
            "acodec": "none",
            "tbr": 4400.2,
        },
        {
            "format_id": "18",
            "format_note": "360p",
            "ext": "mp4",
            "resolution": "640x360",
            "height": 360,
            "width": 640,
            "fps": 30,
            "vcodec": "avc1.42001E",
            "acodec": "mp4a.40.2",
            "tbr": 600,
        },
    ]


@pytest.fixture
def sample_info(sample_formats):
    """A trimmed yt-dlp -j document"""
    return {
        "id": "abc123",
        "title": "Episode 1",
        "alt_title": "Pilot",
        "fulltitle": "Episode 1",
        "upload_date": "20230115",
        "extractor": "youtube",
        "formats": sample_formats,
    }
