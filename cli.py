import typer
import logging
from rich.console import Console
from rich.markup import escape
from pathlib import Path
from typing import Optional

# App-specific imports
from adapters.folder_opener import open_folder
from adapters.json_history import JsonHistoryRepository
from adapters.ytdlp_adapter import YTDLPAdapter
from config import Settings, load_settings
from domain.errors import AppError
from domain.models import DownloadOptions
from domain.services import DownloadService
from i18n import get_message, set_lang
from logger_config import setup_logger

# Initialization
console = Console()
logger = logging.getLogger(__name__)

# Create the Typer app object
app = typer.Typer(
    name="tube-mp3",
    help="Download YouTube videos and playlists as MP3, skipping what was already fetched.",
    add_completion=False,
)


# --- Helper Functions ---


def _handle_error(error: AppError) -> None:
    """Displays a formatted error message and exits the application."""
    console.print(f"[bold red]Error:[/bold red] {escape(error.message)}")
    raise typer.Exit(code=1)


def _confirm(question: str) -> bool:
    return typer.confirm(question, default=False)


def build_service(settings: Settings) -> DownloadService:
    """Wires the adapters selected by the settings into a DownloadService."""
    return DownloadService(
        history=JsonHistoryRepository(settings.history_file),
        downloader=YTDLPAdapter(settings.yt_dlp_command, settings.ffmpeg_location),
        confirm=_confirm,
        open_folder=open_folder if settings.open_folder else None,
        console=console,
    )


# --- CLI Command ---


@app.command()
def download(
    url: str = typer.Argument(..., help=get_message("help_url")),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help=get_message("help_output"), file_okay=False
    ),
    name: Optional[str] = typer.Option(None, "--name", "-n", help=get_message("help_name")),
    playlist: bool = typer.Option(
        False, "--playlist", "-p", help=get_message("help_playlist")
    ),
    skip_existing: bool = typer.Option(
        False, "--skip-existing", "-k", help=get_message("help_skip_existing")
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", help=get_message("help_config"), dir_okay=False
    ),
    lang: Optional[str] = typer.Option(
        None, "--lang", help=get_message("help_lang"), show_default=False
    ),
    verbose: int = typer.Option(
        0, "--verbose", "-v", count=True, help=get_message("help_verbose")
    ),
):
    """Downloads a YouTube video or playlist as MP3 files."""
    setup_logger(verbose)

    settings_result = load_settings(config_file)
    if settings_result.is_left():
        _handle_error(
            AppError(get_message("config_error", error=settings_result.monoid[0].message))
        )
        return
    settings = settings_result.value

    if lang or settings.lang:
        set_lang(lang or settings.lang)
        logger.info(f"Language explicitly set to: {lang or settings.lang}")

    options = DownloadOptions(
        output_dir=output or settings.output_dir,
        name=name,
        is_playlist=playlist,
        skip_existing=skip_existing,
    )
    logger.info(f"Command initiated for URL: {url} with {options}")
    options.output_dir.mkdir(parents=True, exist_ok=True)

    service = build_service(settings)

    if playlist:
        service.handle_playlist(url, options)
        return

    result = service.handle_single(url, options)
    if result.is_left():
        _handle_error(
            AppError(get_message("single_download_error", url=url, error=result.monoid[0].message))
        )


if __name__ == "__main__":
    app()
