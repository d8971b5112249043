import io
from datetime import datetime, timezone
from pathlib import Path

import pytest
from pymonad.either import Left, Right
from rich.console import Console

from domain.errors import DownloaderError, PlaylistResolutionError
from domain.models import DownloadOutcome, HistoryEntry
from domain.ports import HistoryRepository, MediaDownloader
from i18n import set_lang


class InMemoryHistory(HistoryRepository):
    """History repository keeping its entries in a list."""

    def __init__(self, urls=()):
        self.entries = [
            HistoryEntry(url=url, downloaded_at=datetime(2024, 1, 1, tzinfo=timezone.utc))
            for url in urls
        ]
        self.append_calls = []

    def load(self):
        return list(self.entries)

    def append(self, url):
        self.append_calls.append(url)
        if self.contains(url):
            return False
        self.entries.append(HistoryEntry(url=url, downloaded_at=datetime.now(timezone.utc)))
        return True

    @property
    def urls(self):
        return [entry.url for entry in self.entries]


class FakeDownloader(MediaDownloader):
    """Downloader recording its calls; URLs listed in ``failing`` fail."""

    def __init__(self, playlist=None, failing=(), spawn_failing=(), playlist_error=None):
        self.playlist = playlist or []
        self.failing = set(failing)
        self.spawn_failing = set(spawn_failing)
        self.playlist_error = playlist_error
        self.downloads = []
        self.listed = []

    def download(self, url, options):
        self.downloads.append((url, options))
        if url in self.spawn_failing:
            return Left(DownloaderError("Could not start yt-dlp: not found"))
        if url in self.failing:
            return Left(DownloaderError("Download failed with code 1", return_code=1))
        return Right(DownloadOutcome(url=url, return_code=0))

    def list_playlist_urls(self, playlist_url):
        self.listed.append(playlist_url)
        if self.playlist_error:
            return Left(PlaylistResolutionError(self.playlist_error))
        return Right(list(self.playlist))

    @property
    def downloaded_urls(self):
        return [url for url, _ in self.downloads]


@pytest.fixture(autouse=True)
def english_messages():
    """Runs every test with English messages, whatever the machine locale."""
    set_lang("en")
    yield
    set_lang("en")


@pytest.fixture
def console():
    """A console writing to a buffer, wide enough to never wrap."""
    return Console(file=io.StringIO(), width=500, color_system=None)


@pytest.fixture
def output_dir(tmp_path) -> Path:
    path = tmp_path / "downloads"
    path.mkdir()
    return path


def console_text(console: Console) -> str:
    return console.file.getvalue()
