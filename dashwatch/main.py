import typer
from dashwatch.config.loader import load_config_from_env
from dashwatch.domain.exceptions import WatchSetupError
from dashwatch.infrastructure.event_bus import EventBus
from dashwatch.infrastructure.ffmpeg import FFmpegAdapter
from dashwatch.infrastructure.logging import setup_logging
from dashwatch.infrastructure.watcher import DirectoryWatcher
from dashwatch.pipeline.dispatcher import JobDispatcher
from dashwatch.pipeline.invoker import TranscodeInvoker
from dashwatch.pipeline.qualifier import EventQualifier
from dashwatch.pipeline.reporter import JobLogReporter
from dashwatch.pipeline.stability import SettleDelay

app = typer.Typer(help="dashwatch - watch a folder and convert new videos to MPEG-DASH")

@app.command()
def run():
    """Watch WATCH_FOLDER and convert every new video into DASH output.

    Configured entirely through environment variables.
    """
    try:
        config = load_config_from_env()
        logger = setup_logging(debug=config.debug, log_path=config.log_path)
        logger.info("DASH Transcoding Service starting...")
        logger.info(f"Watching for extensions: {', '.join(config.video_extensions)}")
        logger.info(f"FFmpeg: {config.ffmpeg_path} | Preset: {config.ffmpeg_preset} | CRF: {config.ffmpeg_crf}")
        logger.info(f"Audio bitrate: {config.audio_bitrate} | Segment duration: {config.segment_duration}s")
        if config.max_concurrent_jobs:
            logger.info(f"Concurrent jobs: at most {config.max_concurrent_jobs}")
        else:
            logger.info("Concurrent jobs: unbounded")

        bus = EventBus()
        reporter = JobLogReporter(bus)

        qualifier = EventQualifier(config.video_extensions)
        dispatcher = JobDispatcher(
            event_bus=bus,
            stability_check=SettleDelay(),
            invoker=TranscodeInvoker(config, FFmpegAdapter()),
            max_concurrent_jobs=config.max_concurrent_jobs,
        )

        with DirectoryWatcher(config.watch_folder) as watcher:
            logger.info("Folder watcher started successfully")
            dispatcher.run(qualifier.filter(watcher.events()))

        logger.info(f"Watcher stopped: {reporter.succeeded} succeeded, {reporter.failed} failed")

    except KeyboardInterrupt:
        typer.secho("\nWatcher stopped by user (Ctrl+C)", fg=typer.colors.YELLOW)
        raise typer.Exit(code=130)

    except typer.Exit:
        raise

    except WatchSetupError as e:
        typer.secho(f"Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

    except Exception as e:
        typer.secho(f"Fatal Error: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)

if __name__ == "__main__":
    app()
