"""Threading utilities for loading files without blocking the UI."""

import logging
import threading
from collections.abc import Callable
from pathlib import Path

import pandas as pd

from .file_utils import DataReader

logger = logging.getLogger(__name__)

LoadCallback = Callable[[Path, pd.DataFrame], None]
ErrorCallback = Callable[[Path, Exception], None]


class FileLoadThread(threading.Thread):
    """Thread that reads one file and reports the result through callbacks.

    The callbacks run on this thread; GUI callers wrap them so the work is
    scheduled back onto the Tk main loop.
    """

    def __init__(
        self,
        file_path: str | Path,
        on_loaded: LoadCallback,
        on_error: ErrorCallback,
    ) -> None:
        """Initialize the load thread.

        Args:
            file_path: File to read
            on_loaded: Called with the path and the dataframe on success
            on_error: Called with the path and the exception on failure

        """
        super().__init__(name=f"load-{Path(file_path).name}")
        self.file_path = Path(file_path)
        self.on_loaded = on_loaded
        self.on_error = on_error
        self.daemon = True

    def run(self) -> None:
        """Read the file in a separate thread."""
        try:
            df = DataReader.read_file(self.file_path)
        except Exception as e:
            logger.exception("Load error for %s", self.file_path)
            self.on_error(self.file_path, e)
            return
        self.on_loaded(self.file_path, df)


def create_load_thread(
    file_path: str | Path,
    on_loaded: LoadCallback,
    on_error: ErrorCallback,
) -> FileLoadThread:
    """Create a new, not yet started, file load thread."""
    return FileLoadThread(file_path, on_loaded, on_error)
