"""Exception types raised by Table Explorer."""

from pathlib import Path


class TableExplorerError(Exception):
    """Base class for all application errors."""


class DataLoadError(TableExplorerError):
    """A file could not be read into a dataframe."""

    def __init__(self, path: str | Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not load {self.path.name}: {reason}")


class UnsupportedFormatError(TableExplorerError):
    """The requested file format is not handled."""


class TransformError(TableExplorerError):
    """A filter, aggregate, melt or join could not be applied."""


class FrameNotFoundError(TableExplorerError):
    """No open dataframe has the requested title."""

    def __init__(self, title: str) -> None:
        self.title = title
        super().__init__(f"DataFrame '{title}' could not be found")
