import json
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from pymonad.either import Left, Right
from typer.testing import CliRunner

from cli import app
from domain.errors import DownloaderError, PlaylistResolutionError
from domain.models import DownloadOutcome

runner = CliRunner()


@pytest.fixture
def history_file(tmp_path) -> Path:
    return tmp_path / "history.json"


@pytest.fixture
def config_file(tmp_path, history_file) -> Path:
    path = tmp_path / "config.yml"
    path.write_text(
        f"history_file: {history_file}\noutput: {tmp_path / 'default-out'}\n",
        encoding="utf-8",
    )
    return path


@pytest.fixture
def mock_ytdlp_adapter(mocker):
    """Fixture to mock YTDLPAdapter."""
    mock_adapter_instance = MagicMock()
    mock_adapter_instance.download.side_effect = lambda url, options: Right(
        DownloadOutcome(url=url, return_code=0)
    )

    mock_adapter_class = MagicMock(return_value=mock_adapter_instance)
    mocker.patch("cli.YTDLPAdapter", mock_adapter_class)
    return mock_adapter_instance


@pytest.fixture
def mock_open_folder(mocker):
    return mocker.patch("cli.open_folder")


def write_history(history_file: Path, *urls: str) -> None:
    history_file.write_text(
        json.dumps([{"url": url, "downloadedAt": "2024-01-01T00:00:00.000Z"} for url in urls]),
        encoding="utf-8",
    )


def history_urls(history_file: Path):
    return [item["url"] for item in json.loads(history_file.read_text(encoding="utf-8"))]


def test_single_download(tmp_path, config_file, history_file, mock_ytdlp_adapter, mock_open_folder):
    output = tmp_path / "music"

    result = runner.invoke(
        app, ["https://youtu.be/a", "--config", str(config_file), "-o", str(output), "-n", "song"]
    )

    assert result.exit_code == 0, result.output
    assert output.is_dir()
    url, options = mock_ytdlp_adapter.download.call_args[0]
    assert url == "https://youtu.be/a"
    assert options.output_dir == output
    assert options.name == "song"
    assert options.is_playlist is False
    assert options.skip_existing is False
    assert history_urls(history_file) == ["https://youtu.be/a"]
    assert "Download finished." in result.stdout
    mock_open_folder.assert_called_once_with(output)


def test_default_output_comes_from_config(tmp_path, config_file, mock_ytdlp_adapter, mock_open_folder):
    result = runner.invoke(app, ["https://youtu.be/a", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    assert (tmp_path / "default-out").is_dir()
    _, options = mock_ytdlp_adapter.download.call_args[0]
    assert options.output_dir == tmp_path / "default-out"


def test_skip_existing_flag(config_file, mock_ytdlp_adapter, mock_open_folder):
    result = runner.invoke(app, ["https://youtu.be/a", "--config", str(config_file), "-k"])

    assert result.exit_code == 0, result.output
    _, options = mock_ytdlp_adapter.download.call_args[0]
    assert options.skip_existing is True


def test_redownload_declined(config_file, history_file, mock_ytdlp_adapter, mock_open_folder):
    write_history(history_file, "https://youtu.be/a")

    result = runner.invoke(app, ["https://youtu.be/a", "--config", str(config_file)], input="n\n")

    assert result.exit_code == 0, result.output
    assert "already in your download history" in result.stdout
    assert "Download skipped." in result.stdout
    mock_ytdlp_adapter.download.assert_not_called()
    assert history_urls(history_file) == ["https://youtu.be/a"]
    mock_open_folder.assert_not_called()


def test_redownload_accepted(config_file, history_file, mock_ytdlp_adapter, mock_open_folder):
    write_history(history_file, "https://youtu.be/a")

    result = runner.invoke(app, ["https://youtu.be/a", "--config", str(config_file)], input="y\n")

    assert result.exit_code == 0, result.output
    assert "Re-downloading..." in result.stdout
    mock_ytdlp_adapter.download.assert_called_once()
    assert history_urls(history_file) == ["https://youtu.be/a"]


def test_single_download_failure_exits_with_error(config_file, history_file, mock_ytdlp_adapter, mock_open_folder):
    mock_ytdlp_adapter.download.side_effect = None
    mock_ytdlp_adapter.download.return_value = Left(
        DownloaderError("Download failed with code 1", return_code=1)
    )

    result = runner.invoke(app, ["https://youtu.be/a", "--config", str(config_file)])

    assert result.exit_code == 1
    assert "Error:" in result.stdout
    assert not history_file.exists()
    mock_open_folder.assert_not_called()


def test_playlist(config_file, history_file, mock_ytdlp_adapter, mock_open_folder):
    write_history(history_file, "a")
    mock_ytdlp_adapter.list_playlist_urls.return_value = Right(["a", "b", "c"])

    result = runner.invoke(
        app, ["https://youtube.com/playlist?list=PL1", "--config", str(config_file), "-p"]
    )

    assert result.exit_code == 0, result.output
    downloaded = [call.args[0] for call in mock_ytdlp_adapter.download.call_args_list]
    assert downloaded == ["b", "c"]
    assert all(call.args[1].is_playlist for call in mock_ytdlp_adapter.download.call_args_list)
    assert history_urls(history_file) == ["a", "b", "c"]
    mock_open_folder.assert_called_once()


def test_playlist_with_failures_still_exits_zero(config_file, mock_ytdlp_adapter, mock_open_folder):
    mock_ytdlp_adapter.list_playlist_urls.return_value = Right(["a"])
    mock_ytdlp_adapter.download.side_effect = None
    mock_ytdlp_adapter.download.return_value = Left(
        DownloaderError("Download failed with code 1", return_code=1)
    )

    result = runner.invoke(
        app, ["https://youtube.com/playlist?list=PL1", "--config", str(config_file), "--playlist"]
    )

    assert result.exit_code == 0, result.output
    assert "Skipping to next video due to error." in result.stdout
    mock_open_folder.assert_not_called()


def test_playlist_resolution_failure(config_file, mock_ytdlp_adapter, mock_open_folder):
    mock_ytdlp_adapter.list_playlist_urls.return_value = Left(
        PlaylistResolutionError("yt-dlp exited with code 1")
    )

    result = runner.invoke(
        app, ["https://youtube.com/playlist?list=PL1", "--config", str(config_file), "-p"]
    )

    assert result.exit_code == 0, result.output
    mock_ytdlp_adapter.download.assert_not_called()


def test_open_folder_disabled_in_config(tmp_path, history_file, mock_ytdlp_adapter, mock_open_folder):
    config_file = tmp_path / "quiet.yml"
    config_file.write_text(
        f"history_file: {history_file}\noutput: {tmp_path / 'out'}\nopen_folder: false\n",
        encoding="utf-8",
    )

    result = runner.invoke(app, ["https://youtu.be/a", "--config", str(config_file)])

    assert result.exit_code == 0, result.output
    mock_open_folder.assert_not_called()


def test_invalid_config_exits_with_error(tmp_path, mock_ytdlp_adapter):
    config_file = tmp_path / "bad.yml"
    config_file.write_text("open_folder: maybe\n", encoding="utf-8")

    result = runner.invoke(app, ["https://youtu.be/a", "--config", str(config_file)])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.stdout
    mock_ytdlp_adapter.download.assert_not_called()


def test_french_messages(config_file, history_file, mock_ytdlp_adapter, mock_open_folder):
    write_history(history_file, "https://youtu.be/a")

    result = runner.invoke(
        app, ["https://youtu.be/a", "--config", str(config_file), "--lang", "fr"], input="n\n"
    )

    assert result.exit_code == 0, result.output
    assert "Téléchargement ignoré." in result.stdout


def test_missing_url_is_a_usage_error():
    result = runner.invoke(app, [])

    assert result.exit_code == 2


def test_error_message_with_markup_is_printed(config_file, mock_ytdlp_adapter, mock_open_folder):
    mock_ytdlp_adapter.download.side_effect = None
    mock_ytdlp_adapter.download.return_value = Left(
        DownloaderError("Download failed with code 1", return_code=1)
    )

    result = runner.invoke(app, ["https://youtu.be/[/x]", "--config", str(config_file)])

    assert result.exit_code == 1
    assert result.exception is None or isinstance(result.exception, SystemExit)
    assert "Error:" in result.stdout
    assert "[/x]" in result.stdout
