import stat
import pytest
from pathlib import Path
from dashwatch.config.models import ServiceConfig
from dashwatch.infrastructure.event_bus import EventBus

# ============================================================================
# Configuration Fixtures
# ============================================================================

@pytest.fixture
def sample_config(tmp_path):
    """Returns a ServiceConfig pointing at a temporary watch folder."""
    return ServiceConfig(
        watch_folder=tmp_path / "watch",
        video_extensions=["mp4", "mkv", "mov"],
        ffmpeg_path="ffmpeg",
        segment_duration=4,
        ffmpeg_preset="medium",
        ffmpeg_crf=23,
        audio_bitrate="128k",
    )

# ============================================================================
# EventBus Fixtures
# ============================================================================

@pytest.fixture
def event_bus():
    """Returns a fresh EventBus instance."""
    return EventBus()

# ============================================================================
# File System Fixtures
# ============================================================================

@pytest.fixture
def watch_dir(tmp_path):
    """Creates an empty watch folder."""
    d = tmp_path / "watch"
    d.mkdir()
    return d

def _write_script(path: Path, body: str) -> Path:
    path.write_text("#!/bin/sh\n" + body)
    path.chmod(path.stat().st_mode | stat.S_IEXEC | stat.S_IXGRP | stat.S_IXOTH)
    return path

@pytest.fixture
def fake_encoder(tmp_path):
    """Executable standing in for ffmpeg: records its arguments and writes the manifest.

    The manifest path is the last argument, exactly as ffmpeg receives it.
    """
    args_log = tmp_path / "encoder_args.txt"
    body = (
        f'printf "%s\\n" "$@" >> "{args_log}"\n'
        'for last; do :; done\n'
        'echo "<MPD/>" > "$last"\n'
        'echo "encoded"\n'
    )
    return _write_script(tmp_path / "fake-ffmpeg", body), args_log

@pytest.fixture
def failing_encoder(tmp_path):
    """Executable that prints to stderr and exits with status 1."""
    return _write_script(tmp_path / "broken-ffmpeg", 'echo "Invalid data found when processing input" >&2\nexit 1\n')

# ============================================================================
# Markers
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "slow: marks tests as slow (real settle delays or watcher timing)"
    )
    config.addinivalue_line(
        "markers", "integration: marks tests as integration tests"
    )
    config.addinivalue_line(
        "markers", "unit: marks tests as unit tests"
    )
