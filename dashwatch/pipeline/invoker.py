import logging
from pathlib import Path
from typing import Optional, Tuple
from dashwatch.config.models import ServiceConfig
from dashwatch.domain.exceptions import OutputDirectoryError, PathDerivationError
from dashwatch.domain.models import TranscodeJob
from dashwatch.infrastructure.ffmpeg import FFmpegAdapter, MANIFEST_NAME

def derive_output_paths(input_path: Path) -> Tuple[Path, Path]:
    """Returns (output_dir, manifest_path) for an input file.

    The output directory is a sibling of the input named after its stem, so
    `/videos/movie.mp4` maps to `/videos/movie/manifest.mpd`.
    """
    stem = input_path.stem
    if not input_path.name or not stem:
        raise PathDerivationError(input_path, "Invalid file name")
    try:
        stem.encode("utf-8")
    except UnicodeEncodeError:
        raise PathDerivationError(input_path, "Invalid UTF-8 in file name") from None

    output_dir = input_path.parent / stem
    return output_dir, output_dir / MANIFEST_NAME

class TranscodeInvoker:
    """Turns one input file into DASH output by running ffmpeg."""

    def __init__(self, config: ServiceConfig, ffmpeg_adapter: Optional[FFmpegAdapter] = None):
        self.config = config
        self.ffmpeg = ffmpeg_adapter or FFmpegAdapter()
        self.logger = logging.getLogger(__name__)

    def invoke(self, job: TranscodeJob) -> Path:
        """Runs the conversion for job and returns the manifest path.

        Fills in job.output_dir and job.manifest_path as soon as they are
        known. Raises a TranscodeError subclass on any failure.
        """
        input_path = job.input_path
        output_dir, manifest_path = derive_output_paths(input_path)
        job.output_dir = output_dir
        job.manifest_path = manifest_path

        self.logger.info(f"Converting {input_path} to DASH format")
        self.logger.info(f"Output directory: {output_dir}")

        try:
            output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryError(f"Failed to create output directory {output_dir}: {e}") from e

        cmd = self.ffmpeg.build_command(input_path, manifest_path, self.config)
        stdout = self.ffmpeg.run(cmd)

        if stdout.strip():
            self.logger.info(f"FFmpeg output: {stdout.strip()}")
        self.logger.info(f"Manifest location: {manifest_path}")
        return manifest_path
