import os
from pathlib import Path
from typing import Mapping, Optional
from .models import ServiceConfig

_TRUTHY = {"1", "true", "yes", "on"}

def _env_int(environ: Mapping[str, str], name: str, default: Optional[int], minimum: int) -> Optional[int]:
    raw = environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw.strip())
    except ValueError:
        return default
    if value < minimum:
        return default
    return value

def _env_str(environ: Mapping[str, str], name: str, default: str) -> str:
    raw = environ.get(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip()

def load_config_from_env(environ: Optional[Mapping[str, str]] = None) -> ServiceConfig:
    """Builds the ServiceConfig from environment variables.

    Missing variables take their defaults. Malformed or out-of-range numbers
    also fall back to the default instead of failing startup.
    """
    env = os.environ if environ is None else environ
    defaults = ServiceConfig()

    extensions = env.get("VIDEO_EXTENSIONS")
    if extensions is None or not extensions.strip():
        extensions = ",".join(defaults.video_extensions)

    # 0 is accepted as an explicit "no cap"
    max_jobs = _env_int(env, "MAX_CONCURRENT_JOBS", None, minimum=0) or None

    log_path = env.get("LOG_PATH")

    return ServiceConfig(
        watch_folder=Path(_env_str(env, "WATCH_FOLDER", str(defaults.watch_folder))),
        video_extensions=extensions,
        ffmpeg_path=_env_str(env, "FFMPEG_PATH", defaults.ffmpeg_path),
        segment_duration=_env_int(env, "SEGMENT_DURATION", defaults.segment_duration, minimum=1),
        ffmpeg_preset=_env_str(env, "FFMPEG_PRESET", defaults.ffmpeg_preset),
        ffmpeg_crf=_env_int(env, "FFMPEG_CRF", defaults.ffmpeg_crf, minimum=0),
        audio_bitrate=_env_str(env, "AUDIO_BITRATE", defaults.audio_bitrate),
        max_concurrent_jobs=max_jobs,
        debug=env.get("DEBUG", "").strip().lower() in _TRUTHY,
        log_path=Path(log_path) if log_path and log_path.strip() else None,
    )
