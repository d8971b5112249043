from dataclasses import dataclass, replace
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def format_timestamp(moment: datetime) -> str:
    """Renders a UTC datetime as ``2026-10-17T08:30:00.123Z``."""
    moment = moment.astimezone(timezone.utc)
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_timestamp(raw: str) -> datetime:
    moment = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class HistoryEntry:
    """A URL that was downloaded successfully."""
    url: str
    downloaded_at: datetime

    def to_dict(self) -> dict:
        return {"url": self.url, "downloadedAt": format_timestamp(self.downloaded_at)}


@dataclass(frozen=True)
class DownloadOptions:
    """Options of one invocation, derived from the command line."""
    output_dir: Path
    name: Optional[str] = None
    is_playlist: bool = False
    skip_existing: bool = False

    def as_playlist(self) -> "DownloadOptions":
        return replace(self, is_playlist=True)


@dataclass(frozen=True)
class DownloadOutcome:
    """Result of a yt-dlp process that ran to completion."""
    url: str
    return_code: int


@dataclass(frozen=True)
class PlaylistSummary:
    succeeded: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.succeeded + self.failed
