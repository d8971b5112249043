import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from domain.models import EPOCH, HistoryEntry, parse_timestamp
from domain.ports import HistoryRepository

logger = logging.getLogger(__name__)


class JsonHistoryRepository(HistoryRepository):
    """
    Adapter storing the download history as a pretty-printed JSON array.

    The whole file is read on every call and rewritten on every addition.
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    def load(self) -> List[HistoryEntry]:
        if not self._path.exists():
            return []

        try:
            with open(self._path, "r", encoding="utf-8") as file:
                data = json.load(file)
        except (OSError, ValueError) as e:
            logger.error(f"Could not read or parse history file. Starting fresh. ({e})")
            return []

        if not isinstance(data, list):
            logger.error(
                f"History file '{self._path}' does not contain a JSON array. Starting fresh."
            )
            return []

        return [entry for entry in map(self._to_entry, data) if entry is not None]

    def append(self, url: str) -> bool:
        history = self.load()
        if any(entry.url == url for entry in history):
            logger.debug(f"URL already in download history: {url}")
            return False

        history.append(HistoryEntry(url=url, downloaded_at=datetime.now(timezone.utc)))
        self._write(history)
        logger.info(f"URL added to download history: {url}")
        return True

    def _write(self, history: List[HistoryEntry]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as file:
            json.dump([entry.to_dict() for entry in history], file, indent=2, ensure_ascii=False)

    @staticmethod
    def _to_entry(item) -> Optional[HistoryEntry]:
        if not isinstance(item, dict) or not isinstance(item.get("url"), str):
            logger.warning(f"Ignoring malformed history entry: {item!r}")
            return None

        try:
            downloaded_at = parse_timestamp(item["downloadedAt"])
        except (KeyError, TypeError, AttributeError, ValueError):
            downloaded_at = EPOCH
        return HistoryEntry(url=item["url"], downloaded_at=downloaded_at)
