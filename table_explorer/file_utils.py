"""File utility functions for loading and exporting tables."""

import logging
from pathlib import Path

import pandas as pd

from .constants import (
    SUPPORTED_CSV_EXTENSIONS,
    SUPPORTED_EXCEL_EXTENSIONS,
    SUPPORTED_FEATHER_EXTENSIONS,
    SUPPORTED_JSON_EXTENSIONS,
    SUPPORTED_PARQUET_EXTENSIONS,
    SUPPORTED_TSV_EXTENSIONS,
)
from .exceptions import DataLoadError, UnsupportedFormatError

logger = logging.getLogger(__name__)

FORMAT_EXTENSIONS: dict[str, tuple[str, ...]] = {
    "csv": SUPPORTED_CSV_EXTENSIONS,
    "tsv": SUPPORTED_TSV_EXTENSIONS,
    "excel": SUPPORTED_EXCEL_EXTENSIONS,
    "parquet": SUPPORTED_PARQUET_EXTENSIONS,
    "json": SUPPORTED_JSON_EXTENSIONS,
    "feather": SUPPORTED_FEATHER_EXTENSIONS,
}


def detect_format(file_path: str | Path) -> str:
    """Detect the format of a file based on its extension.

    Args:
        file_path: Path to the file

    Returns:
        str: Detected format type, "csv" when the extension is unknown
    """
    extension = Path(file_path).suffix.lower()
    for format_type, extensions in FORMAT_EXTENSIONS.items():
        if extension in extensions:
            return format_type
    return "csv"


def get_supported_formats() -> list[str]:
    """Get list of supported file extensions."""
    return [ext for extensions in FORMAT_EXTENSIONS.values() for ext in extensions]


def is_format_supported(file_path: str | Path) -> bool:
    """Check if a file extension is one the reader understands."""
    return Path(file_path).suffix.lower() in get_supported_formats()


def file_dialog_types() -> list[tuple[str, str]]:
    """Build the filetypes list used by the open/save dialogs."""
    patterns = " ".join(f"*{ext}" for ext in get_supported_formats())
    return [
        ("Tabular files", patterns),
        ("CSV files", "*.csv"),
        ("Excel files", "*.xlsx *.xls"),
        ("Parquet files", "*.parquet"),
        ("All files", "*.*"),
    ]


class DataReader:
    """Class for reading data files in various formats."""

    @staticmethod
    def read_file(file_path: str | Path, format_type: str | None = None) -> pd.DataFrame:
        """Read a data file based on its format.

        Args:
            file_path: Path to the file to read
            format_type: Format of the file, detected from the extension if omitted

        Returns:
            pd.DataFrame: The loaded data

        Raises:
            UnsupportedFormatError: If format is not supported
            DataLoadError: If the file cannot be read or parsed
        """
        file_path = Path(file_path)
        format_type = (format_type or detect_format(file_path)).lower()
        if format_type not in FORMAT_EXTENSIONS:
            raise UnsupportedFormatError(f"Unsupported format: {format_type}")

        logger.info("Reading %s as %s", file_path, format_type)
        try:
            if format_type == "csv":
                return pd.read_csv(file_path, header=0, low_memory=False)
            if format_type == "tsv":
                return pd.read_csv(file_path, sep="\t", header=0, low_memory=False)
            if format_type == "excel":
                return pd.read_excel(file_path)
            if format_type == "parquet":
                return pd.read_parquet(file_path)
            if format_type == "json":
                return pd.read_json(file_path)
            return pd.read_feather(file_path)
        except (OSError, ValueError, ImportError) as e:
            raise DataLoadError(file_path, str(e)) from e


class DataWriter:
    """Class for writing data files in various formats."""

    @staticmethod
    def write_file(
        data: pd.DataFrame, file_path: str | Path, format_type: str | None = None,
    ) -> None:
        """Write data to a file in the specified format.

        Args:
            data: DataFrame to write
            file_path: Path where to save the file
            format_type: Format to save the file in, detected from the extension if omitted

        Raises:
            UnsupportedFormatError: If format is not supported
        """
        file_path = Path(file_path)
        format_type = (format_type or detect_format(file_path)).lower()

        if format_type == "csv":
            data.to_csv(file_path, index=False)
        elif format_type == "tsv":
            data.to_csv(file_path, sep="\t", index=False)
        elif format_type == "excel":
            data.to_excel(file_path, index=False)
        elif format_type == "parquet":
            data.to_parquet(file_path, index=False)
        elif format_type == "json":
            data.to_json(file_path, orient="records", indent=2)
        elif format_type == "feather":
            data.reset_index(drop=True).to_feather(file_path)
        else:
            raise UnsupportedFormatError(f"Unsupported format: {format_type}")
        logger.info("Wrote %d rows to %s", len(data), file_path)
