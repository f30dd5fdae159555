from pathlib import Path
from typing import Optional, Tuple
from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_EXTENSIONS: Tuple[str, ...] = ("mp4", "avi", "mkv", "mov", "wmv", "flv")

class ServiceConfig(BaseModel):
    """Immutable settings shared by the watcher and every transcode job."""

    model_config = ConfigDict(frozen=True)

    watch_folder: Path = Path("/var/watch/videos")
    video_extensions: Tuple[str, ...] = DEFAULT_EXTENSIONS
    ffmpeg_path: str = "ffmpeg"
    segment_duration: int = Field(default=4, gt=0)
    ffmpeg_preset: str = "medium"
    ffmpeg_crf: int = Field(default=23, ge=0)
    audio_bitrate: str = "128k"
    # None means no cap: one encoder per qualifying event
    max_concurrent_jobs: Optional[int] = Field(default=None, ge=1)
    debug: bool = False
    log_path: Optional[Path] = None

    @field_validator("video_extensions", mode="before")
    @classmethod
    def normalize_extensions(cls, v):
        if isinstance(v, str):
            v = v.split(",")
        normalized = []
        for ext in v:
            ext = str(ext).strip().lstrip(".").lower()
            if ext and ext not in normalized:
                normalized.append(ext)
        return tuple(normalized)

    @field_validator("ffmpeg_path", "ffmpeg_preset", "audio_bitrate")
    @classmethod
    def non_empty(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be empty")
        return v.strip()
