import logging
import os
import subprocess
import sys
from pathlib import Path

logger = logging.getLogger(__name__)


def open_folder(path: Path) -> None:
    """Opens a directory in the platform file browser without waiting for it."""
    target = str(Path(path).resolve())
    logger.info(f"Opening folder: {target}")

    try:
        if sys.platform.startswith("win"):
            os.startfile(target)
        elif sys.platform == "darwin":
            subprocess.Popen(["open", target])
        else:
            subprocess.Popen(
                ["xdg-open", target],
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
    except OSError as e:
        logger.warning(f"Could not open folder '{target}': {e}")
