"""
Constants for Table Explorer application.

This module contains all configuration constants used throughout the application
to avoid magic numbers and provide clear documentation of values and their sources.
"""

from typing import Final

# =============================================================================
# APPLICATION CONSTANTS
# =============================================================================

APP_LABEL: Final[str] = "Table Explorer"
APP_VERSION: Final[str] = "0.1.0"

# =============================================================================
# UI CONSTANTS
# =============================================================================

# Window dimensions
DEFAULT_WINDOW_WIDTH: Final[int] = 900  # [px] Default main window width
DEFAULT_WINDOW_HEIGHT: Final[int] = 600  # [px] Default main window height
FRAME_WINDOW_GEOMETRY: Final[str] = "560x620"  # Per-dataframe window size
TABLE_WINDOW_GEOMETRY: Final[str] = "900x500"  # Data viewer window size

# UI spacing and layout
DEFAULT_PADDING: Final[int] = 10  # [px] Default padding for UI elements
SMALL_PADDING: Final[int] = 5  # [px] Small padding for compact elements
GRID_COLUMN_SPACING: Final[int] = 40  # [px] Gap between label and value columns
FILTER_VALUE_WIDTH: Final[int] = 100  # [px] Width of the filter value entry

# Font sizes
TITLE_FONT_SIZE: Final[int] = 16  # [pt] Title font size
HEADING_FONT_SIZE: Final[int] = 14  # [pt] Section heading font size

# Table view
ROW_HEADER: Final[str] = "Row"  # Heading of the row-number column
ROW_COLUMN_WIDTH: Final[int] = 60  # [px] Width of the row-number column
MIN_COLUMN_WIDTH: Final[int] = 80  # [px] Minimum width of a data column
CHAR_WIDTH: Final[int] = 8  # [px] Approximate width per heading character
MAX_DISPLAY_ROWS: Final[int] = 1000  # Rows inserted into a table view
NULL_DISPLAY: Final[str] = "null"  # Text shown for missing values

# =============================================================================
# DATA PROCESSING CONSTANTS
# =============================================================================

# Derived frame title prefixes
FILTERED_PREFIX: Final[str] = "filtered_"
JOINED_PREFIX: Final[str] = "joined_"

# Join suffix for overlapping right-hand columns
JOIN_RIGHT_SUFFIX: Final[str] = "_right"

# Melt output column names
MELT_VARIABLE_NAME: Final[str] = "variable"
MELT_VALUE_NAME: Final[str] = "value"

# Summary table
SUMMARY_STAT_COLUMN: Final[str] = "statistic"
NULL_COUNT_STAT: Final[str] = "null_count"

# Data types table
DTYPES_COLUMN_NAME: Final[str] = "Columns"
DTYPES_TYPE_NAME: Final[str] = "Dtype"

# =============================================================================
# FILE PROCESSING CONSTANTS
# =============================================================================

SUPPORTED_CSV_EXTENSIONS: Final[tuple[str, ...]] = (".csv", ".txt")
SUPPORTED_TSV_EXTENSIONS: Final[tuple[str, ...]] = (".tsv", ".tab")
SUPPORTED_EXCEL_EXTENSIONS: Final[tuple[str, ...]] = (".xlsx", ".xls")
SUPPORTED_PARQUET_EXTENSIONS: Final[tuple[str, ...]] = (".parquet",)
SUPPORTED_JSON_EXTENSIONS: Final[tuple[str, ...]] = (".json",)
SUPPORTED_FEATHER_EXTENSIONS: Final[tuple[str, ...]] = (".feather",)

# =============================================================================
# CONFIGURATION CONSTANTS
# =============================================================================

SETTINGS_FILE_NAME: Final[str] = ".table_explorer.json"  # Stored in the home directory
MAX_RECENT_FILES: Final[int] = 10  # Entries kept in the Open Recent menu

# =============================================================================
# ERROR HANDLING CONSTANTS
# =============================================================================

ERROR_MSG_LOAD_FAILED: Final[str] = "Failed to load file"
ERROR_MSG_NO_COLUMN: Final[str] = "Please select a column first."
ERROR_MSG_NO_JOIN_TARGET: Final[str] = "Please select a dataframe to join with."

# =============================================================================
# SOURCES AND REFERENCES
# =============================================================================

"""
Sources for constants:

1. UI Constants:
   - Window dimensions: Sized for a list of frames plus one transformation window
   - Table view limits: Treeview insertion cost grows linearly with rows, so the
     viewer shows a bounded preview of large frames

2. Data Processing Constants:
   - Melt names and join suffix: pandas/polars conventions for unpivot and joins
   - Summary statistic names: pandas describe() row labels plus a null count

3. File Processing Constants:
   - Supported extensions: formats pandas reads natively (with openpyxl/pyarrow)
"""
