from abc import ABC, abstractmethod
from typing import List

from pymonad.either import Either

from .errors import DownloaderError, PlaylistResolutionError
from .models import DownloadOptions, DownloadOutcome, HistoryEntry


class HistoryRepository(ABC):
    """
    Port defining the contract for the download history.
    """

    @abstractmethod
    def load(self) -> List[HistoryEntry]:
        """Returns every recorded entry, oldest first."""
        pass

    @abstractmethod
    def append(self, url: str) -> bool:
        """
        Records a URL as downloaded.

        Returns:
            bool: True if the URL was added, False if it was already present.
        """
        pass

    def contains(self, url: str) -> bool:
        return any(entry.url == url for entry in self.load())


class MediaDownloader(ABC):
    """
    Port defining the contract for the external media download tool.
    """

    @abstractmethod
    def download(
        self, url: str, options: DownloadOptions
    ) -> Either[DownloaderError, DownloadOutcome]:
        """
        Downloads a single URL as MP3.

        Returns:
            Either: A Right(DownloadOutcome) or a Left(DownloaderError).
        """
        pass

    @abstractmethod
    def list_playlist_urls(
        self, playlist_url: str
    ) -> Either[PlaylistResolutionError, List[str]]:
        """Lists the video URLs of a playlist without downloading them."""
        pass
