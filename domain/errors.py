from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class AppError:
    """Base class for application errors."""
    message: str


@dataclass(frozen=True)
class ConfigError(AppError):
    """Error raised while reading the settings file."""
    pass


@dataclass(frozen=True)
class DownloaderError(AppError):
    """Error related to a yt-dlp download.

    ``return_code`` is None when the process could not be spawned at all.
    """
    return_code: Optional[int] = None


@dataclass(frozen=True)
class PlaylistResolutionError(AppError):
    """Error while listing the members of a playlist."""
    pass
