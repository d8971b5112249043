import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

import yaml
from pymonad.either import Either, Left, Right

from adapters.ytdlp_adapter import DEFAULT_YT_DLP_COMMAND
from domain.errors import ConfigError

logger = logging.getLogger(__name__)

APP_DIR = Path.home() / ".tube-mp3"
DEFAULT_CONFIG_FILE = APP_DIR / "config.yml"
DEFAULT_HISTORY_FILE = APP_DIR / "history.json"
DEFAULT_OUTPUT_DIR = Path("./downloads")

KNOWN_KEYS = {"yt_dlp", "ffmpeg_location", "history_file", "output", "open_folder", "lang"}


@dataclass(frozen=True)
class Settings:
    """Settings read from the YAML configuration file."""
    yt_dlp_command: List[str] = field(default_factory=lambda: list(DEFAULT_YT_DLP_COMMAND))
    ffmpeg_location: Optional[str] = None
    history_file: Path = DEFAULT_HISTORY_FILE
    output_dir: Path = DEFAULT_OUTPUT_DIR
    open_folder: bool = True
    lang: Optional[str] = None


def _expand(value) -> Path:
    return Path(str(value)).expanduser()


def _parse(data: dict) -> Either[ConfigError, Settings]:
    unknown = sorted(set(data) - KNOWN_KEYS)
    if unknown:
        logger.warning(f"Ignoring unknown configuration keys: {', '.join(unknown)}")

    yt_dlp = data.get("yt_dlp")
    if yt_dlp is None:
        command = list(DEFAULT_YT_DLP_COMMAND)
    elif isinstance(yt_dlp, str) and yt_dlp.strip():
        command = [str(_expand(yt_dlp))]
    elif isinstance(yt_dlp, list) and yt_dlp and all(isinstance(a, str) for a in yt_dlp):
        command = list(yt_dlp)
    else:
        return Left(ConfigError("'yt_dlp' must be a path or a list of arguments."))

    open_folder = data.get("open_folder")
    if open_folder is None:
        open_folder = True
    elif not isinstance(open_folder, bool):
        return Left(ConfigError("'open_folder' must be true or false."))

    lang = data.get("lang")
    if lang is not None and lang not in ("en", "fr"):
        return Left(ConfigError(f"Unsupported language '{lang}'."))

    paths = {}
    for key in ("ffmpeg_location", "history_file", "output"):
        value = data.get(key)
        if value is not None and not isinstance(value, str):
            return Left(ConfigError(f"'{key}' must be a path."))
        # an empty value keeps the default
        paths[key] = _expand(value) if value else None

    return Right(
        Settings(
            yt_dlp_command=command,
            ffmpeg_location=str(paths["ffmpeg_location"]) if paths["ffmpeg_location"] else None,
            history_file=paths["history_file"] or DEFAULT_HISTORY_FILE,
            output_dir=paths["output"] or DEFAULT_OUTPUT_DIR,
            open_folder=open_folder,
            lang=lang,
        )
    )


def load_settings(config_file: Optional[Path] = None) -> Either[ConfigError, Settings]:
    """
    Loads settings from ``config_file``, or from the default location.

    A missing default file yields the defaults; a missing explicit file is an
    error.
    """
    path = config_file or DEFAULT_CONFIG_FILE
    if not path.exists():
        if config_file is not None:
            return Left(ConfigError(f"Configuration file '{path}' not found."))
        logger.debug(f"No configuration file at '{path}', using defaults.")
        return Right(Settings())

    try:
        with open(path, "r", encoding="utf-8") as file:
            data = yaml.safe_load(file)
    except (yaml.YAMLError, IOError) as e:
        logger.error(f"Could not read configuration file '{path}': {e}")
        return Left(ConfigError(f"Could not read '{path}': {e}"))

    if data is None:
        return Right(Settings())
    if not isinstance(data, dict):
        return Left(ConfigError(f"'{path}' must contain a mapping of settings."))

    logger.info(f"Configuration loaded from '{path}'.")
    return _parse(data)
