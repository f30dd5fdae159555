import subprocess
import logging
from pathlib import Path
from typing import List
from dashwatch.config.models import ServiceConfig
from dashwatch.domain.exceptions import EncoderSpawnError, EncoderExitError

MANIFEST_NAME = "manifest.mpd"
INIT_SEGMENT_TEMPLATE = "init-stream$RepresentationID$.m4s"
MEDIA_SEGMENT_TEMPLATE = "chunk-stream$RepresentationID$-$Number%05d$.m4s"

class FFmpegAdapter:
    """Wrapper around ffmpeg's DASH muxer."""

    def __init__(self):
        self.logger = logging.getLogger(__name__)

    def build_command(self, input_path: Path, manifest_path: Path, config: ServiceConfig) -> List[str]:
        """Constructs the ffmpeg command line arguments."""
        cmd = [
            config.ffmpeg_path,
            "-i", str(input_path),
        ]

        # Video encoding settings
        cmd.extend([
            "-c:v", "libx264",
            "-preset", config.ffmpeg_preset,
            "-crf", str(config.ffmpeg_crf),
        ])

        # Audio settings
        cmd.extend([
            "-c:a", "aac",
            "-b:a", config.audio_bitrate,
        ])

        # DASH muxer: template + timeline addressing, segments written next to the manifest
        cmd.extend([
            "-f", "dash",
            "-seg_duration", str(config.segment_duration),
            "-use_template", "1",
            "-use_timeline", "1",
            "-init_seg_name", INIT_SEGMENT_TEMPLATE,
            "-media_seg_name", MEDIA_SEGMENT_TEMPLATE,
            str(manifest_path),
        ])
        return cmd

    def run(self, cmd: List[str]) -> str:
        """Runs ffmpeg to completion and returns its captured stdout.

        Raises EncoderSpawnError if the process cannot be started and
        EncoderExitError if it exits with a non-zero status.
        """
        self.logger.debug(f"FFMPEG_CMD: {' '.join(cmd)}")
        try:
            result = subprocess.run(
                cmd,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                errors="replace",
            )
        except OSError as e:
            raise EncoderSpawnError(f"Failed to execute {cmd[0]}: {e}") from e

        if result.returncode != 0:
            raise EncoderExitError(result.returncode, result.stderr or "")
        return result.stdout or ""
