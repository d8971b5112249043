import logging
from functools import partial
from pathlib import Path
from typing import Callable, List, Optional

from pymonad.either import Either, Right
from rich.console import Console
from rich.markup import escape
from toolz import pipe, remove, unique

from i18n import get_message
from .errors import DownloaderError
from .models import DownloadOptions, DownloadOutcome, PlaylistSummary
from .ports import HistoryRepository, MediaDownloader

logger = logging.getLogger(__name__)

Confirm = Callable[[str], bool]
FolderOpener = Callable[[Path], None]


def _never_open(path: Path) -> None:
    logger.debug(f"Folder opening disabled, not opening {path}")


class DownloadService:
    """
    Orchestrates downloads: history checks, confirmation, playlist diffing and
    reporting. Every collaborator is injected so the flow can run against
    fakes.
    """

    def __init__(
        self,
        history: HistoryRepository,
        downloader: MediaDownloader,
        confirm: Confirm,
        open_folder: Optional[FolderOpener] = None,
        console: Optional[Console] = None,
    ):
        self._history = history
        self._downloader = downloader
        self._confirm = confirm
        self._open_folder = open_folder or _never_open
        self._console = console or Console()

    def download_single(
        self, url: str, options: DownloadOptions
    ) -> Either[DownloaderError, DownloadOutcome]:
        """Runs one download and records it in the history on success."""
        result = self._downloader.download(url, options)

        if result.is_right():
            self._console.print(
                f"\n[bold green]✓ {escape(get_message('download_success', url=url))}[/bold green]"
            )
            if self._history.append(url):
                self._console.print(escape(get_message("history_added", url=url)))
        else:
            error = result.monoid[0]
            if error.return_code is None:
                self._console.print(
                    f"\n[bold red]✗ {escape(get_message('spawn_error', url=url, error=error.message))}[/bold red]"
                )
            else:
                self._console.print(
                    f"\n[bold red]✗ {escape(get_message('download_failed', code=error.return_code, url=url))}[/bold red]"
                )
        return result

    def resolve_playlist(self, playlist_url: str) -> List[str]:
        """Lists playlist members, degrading to an empty list on failure."""
        self._console.print(f"📡 {get_message('fetching_playlist')}")
        result = self._downloader.list_playlist_urls(playlist_url)

        if result.is_left():
            self._console.print(
                f"[bold red]✗ {escape(get_message('playlist_fetch_error', error=result.monoid[0].message))}[/bold red]"
            )
            return []

        urls = result.value
        self._console.print(get_message("playlist_found", count=len(urls)))
        return urls

    def pending_urls(self, urls: List[str]) -> List[str]:
        """Drops URLs already in the history, keeping playlist order."""
        known = {entry.url for entry in self._history.load()}
        return pipe(urls, unique, partial(remove, known.__contains__), list)

    def handle_playlist(self, playlist_url: str, options: DownloadOptions) -> PlaylistSummary:
        """Downloads every playlist member missing from the history, one at a time."""
        all_urls = self.resolve_playlist(playlist_url)
        if not all_urls:
            return PlaylistSummary()

        to_download = self.pending_urls(all_urls)
        if not to_download:
            self._console.print(f"[bold green]✓ {get_message('all_downloaded')}[/bold green]")
            return PlaylistSummary()

        total = len(to_download)
        self._console.print(f"\n📥 {get_message('new_videos', count=total)}")
        playlist_options = options.as_playlist()
        succeeded = failed = 0

        for index, video_url in enumerate(to_download, start=1):
            progress = escape(f"[{index}/{total}]")
            self._console.print(
                f"\n[bold]{progress}[/bold] {escape(get_message('starting_item', url=video_url))}"
            )
            if self.download_single(video_url, playlist_options).is_right():
                succeeded += 1
            else:
                failed += 1
                self._console.print(f"[yellow]{get_message('skipping_item')}[/yellow]")

        summary = PlaylistSummary(succeeded=succeeded, failed=failed)
        logger.info(f"Playlist '{playlist_url}' done: {succeeded} ok, {failed} failed.")
        self._console.print(
            f"\n[bold]✨ {get_message('playlist_complete', succeeded=succeeded, failed=failed)}[/bold]"
        )
        if summary.succeeded > 0:
            self._open_folder(options.output_dir)
        return summary

    def handle_single(
        self, url: str, options: DownloadOptions
    ) -> Either[DownloaderError, Optional[DownloadOutcome]]:
        """
        Downloads a single video, asking first when it is already in the history.

        A declined re-download is a Right(None): nothing ran, nothing changed.
        """
        if self._history.contains(url):
            if not self._confirm(get_message("confirm_redownload")):
                self._console.print(get_message("download_skipped"))
                return Right(None)
            self._console.print(get_message("redownloading"))

        result = self.download_single(url, options)
        if result.is_right():
            self._console.print(f"[bold green]✨ {get_message('download_finished')}[/bold green]")
            self._open_folder(options.output_dir)
        return result
