import json
import logging
import subprocess
import sys
from typing import List, Optional, Sequence

from pymonad.either import Left, Right, Either

from domain.errors import DownloaderError, PlaylistResolutionError
from domain.models import DownloadOptions, DownloadOutcome
from domain.ports import MediaDownloader
from domain.templates import build_output_template

logger = logging.getLogger(__name__)

DEFAULT_YT_DLP_COMMAND = (sys.executable, "-m", "yt_dlp")


class YTDLPAdapter(MediaDownloader):
    """
    Adapter driving the yt-dlp executable as a subprocess.

    ``command`` is the argument prefix used to start yt-dlp, e.g.
    ``["yt-dlp"]`` or ``["/opt/bin/yt-dlp.exe"]``. ``ffmpeg_location`` is passed
    through to yt-dlp so it can find the transcoder.
    """

    def __init__(
        self,
        command: Sequence[str] = DEFAULT_YT_DLP_COMMAND,
        ffmpeg_location: Optional[str] = None,
    ):
        self._command = list(command)
        self._ffmpeg_location = ffmpeg_location

    def _get_download_args(self, url: str, options: DownloadOptions) -> List[str]:
        """Creates the yt-dlp argument vector for an MP3 download."""
        args = [*self._command, "-x"]
        if self._ffmpeg_location:
            args += ["--ffmpeg-location", self._ffmpeg_location]
        args += [
            "--audio-format", "mp3",
            "--restrict-filenames",
            "-o", build_output_template(options),
            url,
        ]
        if options.skip_existing:
            args.append("--no-overwrites")
        return args

    def download(
        self, url: str, options: DownloadOptions
    ) -> Either[DownloaderError, DownloadOutcome]:
        """
        Downloads a single URL, letting yt-dlp write its progress straight to
        the terminal.
        """
        args = self._get_download_args(url, options)
        logger.info(f"Attempting to download: {url}")
        logger.debug(f"Running: {' '.join(args)}")

        try:
            completed = subprocess.run(args)
        except OSError as e:
            logger.critical(f"Error spawning yt-dlp for '{url}': {e}", exc_info=True)
            return Left(DownloaderError(f"Could not start yt-dlp: {e}"))

        if completed.returncode == 0:
            logger.info(f"Downloaded '{url}' successfully.")
            return Right(DownloadOutcome(url=url, return_code=0))

        logger.error(f"Failed to download '{url}' with exit code {completed.returncode}")
        return Left(
            DownloaderError(
                f"Download failed with code {completed.returncode}",
                return_code=completed.returncode,
            )
        )

    def list_playlist_urls(
        self, playlist_url: str
    ) -> Either[PlaylistResolutionError, List[str]]:
        """
        Lists the members of a playlist using yt-dlp's flat JSON-lines mode.
        """
        args = [*self._command, "--flat-playlist", "-j", playlist_url]
        logger.info(f"Listing playlist members: {playlist_url}")

        try:
            completed = subprocess.run(args, capture_output=True, text=True, check=True)
        except subprocess.CalledProcessError as e:
            logger.error(
                f"yt-dlp exited with code {e.returncode} while listing '{playlist_url}': {e.stderr}"
            )
            return Left(
                PlaylistResolutionError(f"yt-dlp exited with code {e.returncode}")
            )
        except OSError as e:
            logger.critical(f"Error spawning yt-dlp for '{playlist_url}': {e}", exc_info=True)
            return Left(PlaylistResolutionError(f"Could not start yt-dlp: {e}"))

        urls = []
        for line in completed.stdout.splitlines():
            if not line.strip():
                continue
            try:
                entry = json.loads(line)
            except ValueError as e:
                logger.error(f"Malformed JSON line from yt-dlp: {line!r}")
                return Left(PlaylistResolutionError(f"Malformed playlist listing: {e}"))

            if not isinstance(entry, dict):
                logger.error(f"Playlist listing line is not a JSON object: {line!r}")
                return Left(
                    PlaylistResolutionError(
                        f"Malformed playlist listing: expected an object, got {type(entry).__name__}"
                    )
                )

            member_url = entry.get("url") or entry.get("webpage_url")
            if member_url:
                urls.append(member_url)
            else:
                logger.warning(f"Playlist entry without a URL ignored: {entry.get('id')}")

        logger.info(f"Playlist '{playlist_url}' lists {len(urls)} videos.")
        return Right(urls)
