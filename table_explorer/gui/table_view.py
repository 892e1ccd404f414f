"""Spreadsheet-like viewer for a dataframe."""

import tkinter as tk
from collections.abc import Iterator
from tkinter import ttk
from typing import Any

import customtkinter as ctk
import pandas as pd

from ..constants import (
    CHAR_WIDTH,
    MAX_DISPLAY_ROWS,
    MIN_COLUMN_WIDTH,
    NULL_DISPLAY,
    ROW_COLUMN_WIDTH,
    ROW_HEADER,
    SMALL_PADDING,
    TABLE_WINDOW_GEOMETRY,
)


def format_cell(value: Any) -> str:
    """Text shown for one cell: nulls as ``null``, double quotes removed."""
    if value is None or (pd.api.types.is_scalar(value) and pd.isna(value)):
        return NULL_DISPLAY
    return str(value).replace('"', "")


def table_rows(df: pd.DataFrame, limit: int = MAX_DISPLAY_ROWS) -> Iterator[tuple[str, ...]]:
    """Yield display rows, each prefixed by its row number."""
    for row_index, row in enumerate(df.head(limit).itertuples(index=False, name=None)):
        yield (str(row_index), *(format_cell(value) for value in row))


def truncation_note(df: pd.DataFrame, limit: int = MAX_DISPLAY_ROWS) -> str:
    """Footer text; mentions the limit when rows were left out."""
    rows, cols = df.shape
    if rows > limit:
        return f"Showing first {limit:,} of {rows:,} rows, {cols} columns"
    return f"{rows:,} rows, {cols} columns"


class TableView(ttk.Frame):
    """A Treeview with scrollbars showing a dataframe."""

    def __init__(self, parent: tk.Misc, df: pd.DataFrame, limit: int = MAX_DISPLAY_ROWS) -> None:
        super().__init__(parent)
        self.limit = limit

        self.footer = ttk.Label(self, anchor=tk.W)
        self.footer.pack(side=tk.BOTTOM, fill=tk.X)

        self._tree_scroll_y = ttk.Scrollbar(self, orient=tk.VERTICAL)
        self._tree_scroll_y.pack(side=tk.RIGHT, fill=tk.Y)
        self._tree_scroll_x = ttk.Scrollbar(self, orient=tk.HORIZONTAL)
        self._tree_scroll_x.pack(side=tk.BOTTOM, fill=tk.X)
        self.tree = ttk.Treeview(
            self,
            columns=[],
            show="headings",
            yscrollcommand=self._tree_scroll_y.set,
            xscrollcommand=self._tree_scroll_x.set,
        )
        self.tree.pack(fill=tk.BOTH, expand=True)
        self._tree_scroll_y.config(command=self.tree.yview)
        self._tree_scroll_x.config(command=self.tree.xview)

        self.display_dataframe(df)

    def display_dataframe(self, df: pd.DataFrame) -> None:
        """Replace the tree contents with ``df``."""
        for item in self.tree.get_children():
            self.tree.delete(item)

        # Treeview column ids must be unique strings; headings carry the names
        ids = ["row", *(f"c{i}" for i in range(df.shape[1]))]
        self.tree["columns"] = ids
        self.tree.heading("row", text=ROW_HEADER)
        self.tree.column("row", width=ROW_COLUMN_WIDTH, anchor=tk.E, stretch=False)
        for col_id, name in zip(ids[1:], df.columns):
            self.tree.heading(col_id, text=str(name))
            width = max(len(str(name)) * CHAR_WIDTH, MIN_COLUMN_WIDTH)
            self.tree.column(col_id, width=width, anchor=tk.W)

        for values in table_rows(df, self.limit):
            self.tree.insert("", tk.END, values=values)
        self.footer.configure(text=truncation_note(df, self.limit))


class TableWindow(ctk.CTkToplevel):
    """Toplevel window holding a single :class:`TableView`."""

    def __init__(self, parent: tk.Misc, df: pd.DataFrame, title: str) -> None:
        super().__init__(parent)
        self.title(title)
        self.geometry(TABLE_WINDOW_GEOMETRY)
        self.view = TableView(self, df)
        self.view.pack(fill=tk.BOTH, expand=True, padx=SMALL_PADDING, pady=SMALL_PADDING)


def open_table_window(parent: tk.Misc, df: pd.DataFrame, title: str) -> TableWindow:
    return TableWindow(parent, df, title)
