"""Window for one open dataframe: overview plus transformation panels."""

import logging
import tkinter as tk
from collections.abc import Callable
from pathlib import Path
from tkinter import filedialog, messagebox

import customtkinter as ctk

from ..constants import (
    DEFAULT_PADDING,
    ERROR_MSG_NO_JOIN_TARGET,
    FILTER_VALUE_WIDTH,
    FRAME_WINDOW_GEOMETRY,
    GRID_COLUMN_SPACING,
    HEADING_FONT_SIZE,
    SMALL_PADDING,
)
from ..container import DataFrameContainer
from ..exceptions import TableExplorerError
from ..file_utils import DataWriter, file_dialog_types
from ..registry import FrameRegistry
from ..transforms import AggFunc, FilterOp, JoinHow
from .table_view import open_table_window

logger = logging.getLogger(__name__)

MODE_NEW = "new"
MODE_INPLACE = "inplace"


def _menu_values(values: list[str]) -> list[str]:
    # CTkOptionMenu needs at least one entry
    return values or [""]


class FrameWindow:
    """Toplevel window bound to a :class:`DataFrameContainer`."""

    def __init__(
        self,
        parent: tk.Misc,
        container: DataFrameContainer,
        registry: FrameRegistry,
        on_frame_opened: Callable[[DataFrameContainer], None],
        on_closed: Callable[[str], None],
        on_data_changed: Callable[[str], None] | None = None,
    ) -> None:
        """Initialize the frame window.

        Args:
            parent: Parent widget, normally the main window root
            container: The dataframe shown by this window
            registry: All open dataframes, used for filters and joins
            on_frame_opened: Called with containers created by a filter or join
            on_closed: Called with the container title when the window closes
            on_data_changed: Called with the container title after an in-place
                filter or join

        """
        self.container = container
        self.registry = registry
        self.on_frame_opened = on_frame_opened
        self.on_closed = on_closed
        self.on_data_changed = on_data_changed
        self._column_menus: list[ctk.CTkOptionMenu] = []

        self.window = ctk.CTkToplevel(parent)
        self.window.title(container.title)
        self.window.geometry(FRAME_WINDOW_GEOMETRY)
        self.window.protocol("WM_DELETE_WINDOW", self.close)
        self.window.grid_columnconfigure(0, weight=1)
        self.window.grid_rowconfigure(2, weight=1)

        self._build_overview()
        heading = ctk.CTkLabel(
            self.window,
            text="Data Transformations",
            font=ctk.CTkFont(size=HEADING_FONT_SIZE, weight="bold"),
        )
        heading.grid(row=1, column=0, padx=DEFAULT_PADDING, pady=(15, 0), sticky="w")

        self.tab_view = ctk.CTkTabview(self.window)
        self.tab_view.grid(row=2, column=0, padx=DEFAULT_PADDING, pady=DEFAULT_PADDING, sticky="nsew")
        for name in ("Filter", "Aggregate", "Join", "Melt"):
            self.tab_view.add(name)
        self._build_filter_tab(self.tab_view.tab("Filter"))
        self._build_aggregate_tab(self.tab_view.tab("Aggregate"))
        self._build_join_tab(self.tab_view.tab("Join"))
        self._build_melt_tab(self.tab_view.tab("Melt"))

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    def _build_overview(self) -> None:
        grid = ctk.CTkFrame(self.window)
        grid.grid(row=0, column=0, padx=DEFAULT_PADDING, pady=DEFAULT_PADDING, sticky="ew")
        grid.grid_columnconfigure(1, weight=1)

        ctk.CTkLabel(grid, text="Shape: ").grid(row=0, column=0, padx=(SMALL_PADDING, GRID_COLUMN_SPACING), sticky="w")
        self.shape_label = ctk.CTkLabel(grid, text=str(self.container.shape))
        self.shape_label.grid(row=0, column=1, sticky="w")

        rows = [
            ("Data: ", "View", self.show_data),
            ("Summary: ", "View", self.show_summary),
            ("Data Types:", "View", self.show_dtypes),
            ("Export:", "Save As...", self.export_data),
        ]
        for row, (label, button_text, command) in enumerate(rows, start=1):
            ctk.CTkLabel(grid, text=label).grid(
                row=row, column=0, padx=(SMALL_PADDING, GRID_COLUMN_SPACING), sticky="w",
            )
            ctk.CTkButton(grid, text=button_text, command=command).grid(
                row=row, column=1, pady=2, sticky="w",
            )

    def _column_menu(self, parent: ctk.CTkFrame, variable: tk.StringVar) -> ctk.CTkOptionMenu:
        menu = ctk.CTkOptionMenu(parent, values=_menu_values(self.container.columns), variable=variable)
        self._column_menus.append(menu)
        return menu

    def _mode_radios(self, parent: ctk.CTkFrame, variable: tk.StringVar, row: int) -> None:
        frame = ctk.CTkFrame(parent, fg_color="transparent")
        frame.grid(row=row, column=0, columnspan=3, sticky="w", pady=SMALL_PADDING)
        ctk.CTkRadioButton(frame, text="New", variable=variable, value=MODE_NEW).pack(side=tk.LEFT, padx=(0, 20))
        ctk.CTkRadioButton(frame, text="In Place", variable=variable, value=MODE_INPLACE).pack(side=tk.LEFT)

    def _build_filter_tab(self, tab: ctk.CTkFrame) -> None:
        self.filter_mode_var = tk.StringVar(value=MODE_NEW)
        self.filter_column_var = tk.StringVar(value="")
        self.filter_op_var = tk.StringVar(value=FilterOp.EQUAL_NUM.label)
        self.filter_value_var = tk.StringVar(value="")

        self._mode_radios(tab, self.filter_mode_var, row=0)
        self._column_menu(tab, self.filter_column_var).grid(row=1, column=0, padx=(0, SMALL_PADDING))
        ctk.CTkOptionMenu(
            tab, values=[op.label for op in FilterOp], variable=self.filter_op_var,
        ).grid(row=1, column=1, padx=(0, SMALL_PADDING))
        ctk.CTkEntry(tab, textvariable=self.filter_value_var, width=FILTER_VALUE_WIDTH).grid(row=1, column=2)
        ctk.CTkButton(tab, text="Filter", command=self.run_filter).grid(
            row=2, column=0, columnspan=3, pady=DEFAULT_PADDING, sticky="w",
        )

    def _build_aggregate_tab(self, tab: ctk.CTkFrame) -> None:
        self.group_by_var = tk.StringVar(value="")
        self.agg_column_var = tk.StringVar(value="")
        self.agg_func_var = tk.StringVar(value=AggFunc.COUNT.label)

        ctk.CTkLabel(tab, text="Group by:").grid(row=0, column=0, sticky="w")
        self._column_menu(tab, self.group_by_var).grid(row=1, column=0, sticky="w")
        ctk.CTkButton(tab, text="Add", width=60, command=self.add_group_by).grid(row=1, column=1, padx=SMALL_PADDING)
        self.group_by_label = ctk.CTkLabel(tab, text="Selected: []")
        self.group_by_label.grid(row=2, column=0, columnspan=3, sticky="w")

        ctk.CTkLabel(tab, text="Columns: ").grid(row=3, column=0, sticky="w")
        self._column_menu(tab, self.agg_column_var).grid(row=4, column=0, sticky="w")
        ctk.CTkButton(tab, text="Add", width=60, command=self.add_agg_column).grid(row=4, column=1, padx=SMALL_PADDING)
        self.agg_columns_label = ctk.CTkLabel(tab, text="Selected: []")
        self.agg_columns_label.grid(row=5, column=0, columnspan=3, sticky="w")

        ctk.CTkLabel(tab, text="Metric: ").grid(row=6, column=0, sticky="w")
        metrics = ctk.CTkFrame(tab, fg_color="transparent")
        metrics.grid(row=7, column=0, columnspan=3, sticky="w")
        for index, func in enumerate(AggFunc):
            ctk.CTkRadioButton(metrics, text=func.label, variable=self.agg_func_var, value=func.label).grid(
                row=index // 3, column=index % 3, padx=(0, DEFAULT_PADDING), pady=2, sticky="w",
            )

        buttons = ctk.CTkFrame(tab, fg_color="transparent")
        buttons.grid(row=8, column=0, columnspan=3, pady=DEFAULT_PADDING, sticky="w")
        ctk.CTkButton(buttons, text="Aggregate", command=self.run_aggregate).pack(side=tk.LEFT, padx=(0, SMALL_PADDING))
        ctk.CTkButton(buttons, text="Clear", command=self.clear_aggregate).pack(side=tk.LEFT)

    def _build_join_tab(self, tab: ctk.CTkFrame) -> None:
        self.join_mode_var = tk.StringVar(value=MODE_NEW)
        self.join_target_var = tk.StringVar(value="")
        self.left_on_var = tk.StringVar(value="")
        self.right_on_var = tk.StringVar(value="")
        self.join_how_var = tk.StringVar(value=JoinHow.INNER.label)

        self._mode_radios(tab, self.join_mode_var, row=0)
        ctk.CTkLabel(tab, text="Join with:").grid(row=1, column=0, sticky="w")
        self.join_target_menu = ctk.CTkOptionMenu(
            tab,
            values=_menu_values(self.registry.titles()),
            variable=self.join_target_var,
            command=self.on_join_target_changed,
        )
        self.join_target_menu.grid(row=1, column=1, sticky="w", pady=2)

        ctk.CTkLabel(tab, text="Left on:").grid(row=2, column=0, sticky="w")
        self._column_menu(tab, self.left_on_var).grid(row=2, column=1, sticky="w", pady=2)

        ctk.CTkLabel(tab, text="Right on:").grid(row=3, column=0, sticky="w")
        self.right_on_menu = ctk.CTkOptionMenu(tab, values=[""], variable=self.right_on_var)
        self.right_on_menu.grid(row=3, column=1, sticky="w", pady=2)

        how_frame = ctk.CTkFrame(tab, fg_color="transparent")
        how_frame.grid(row=4, column=0, columnspan=3, sticky="w", pady=SMALL_PADDING)
        for how in JoinHow:
            ctk.CTkRadioButton(how_frame, text=how.label, variable=self.join_how_var, value=how.label).pack(
                side=tk.LEFT, padx=(0, DEFAULT_PADDING),
            )
        ctk.CTkButton(tab, text="Join", command=self.run_join).grid(
            row=5, column=0, columnspan=3, pady=DEFAULT_PADDING, sticky="w",
        )

    def _build_melt_tab(self, tab: ctk.CTkFrame) -> None:
        self.id_var_var = tk.StringVar(value="")
        self.value_var_var = tk.StringVar(value="")

        ctk.CTkLabel(tab, text="ID Vars: ").grid(row=0, column=0, sticky="w")
        self._column_menu(tab, self.id_var_var).grid(row=1, column=0, sticky="w")
        ctk.CTkButton(tab, text="Add", width=60, command=self.add_id_var).grid(row=1, column=1, padx=SMALL_PADDING)
        self.id_vars_label = ctk.CTkLabel(tab, text="Selected: []")
        self.id_vars_label.grid(row=2, column=0, columnspan=3, sticky="w")

        ctk.CTkLabel(tab, text="Value Vars: ").grid(row=3, column=0, sticky="w")
        self._column_menu(tab, self.value_var_var).grid(row=4, column=0, sticky="w")
        ctk.CTkButton(tab, text="Add", width=60, command=self.add_value_var).grid(row=4, column=1, padx=SMALL_PADDING)
        self.value_vars_label = ctk.CTkLabel(tab, text="Selected: []")
        self.value_vars_label.grid(row=5, column=0, columnspan=3, sticky="w")

        buttons = ctk.CTkFrame(tab, fg_color="transparent")
        buttons.grid(row=6, column=0, columnspan=3, pady=DEFAULT_PADDING, sticky="w")
        ctk.CTkButton(buttons, text="Melt", command=self.run_melt).pack(side=tk.LEFT, padx=(0, SMALL_PADDING))
        ctk.CTkButton(buttons, text="Clear", command=self.clear_melt).pack(side=tk.LEFT)

    # ------------------------------------------------------------------
    # Refresh
    # ------------------------------------------------------------------

    def refresh(self) -> None:
        """Re-read shape and columns after the data changed in place."""
        self.shape_label.configure(text=str(self.container.shape))
        values = _menu_values(self.container.columns)
        for menu in self._column_menus:
            menu.configure(values=values)
        if self.on_data_changed is not None:
            self.on_data_changed(self.container.title)

    def refresh_join_targets(self, titles: list[str]) -> None:
        """Update the join target list to the currently open frames."""
        self.join_target_menu.configure(values=_menu_values(titles))
        if self.join_target_var.get() not in titles:
            self.join_target_var.set("")
            self.on_join_target_changed("")

    def on_join_target_changed(self, title: str) -> None:
        self.right_on_menu.configure(values=_menu_values(self.registry.columns_of(title)))
        self.right_on_var.set("")

    def _update_selection_labels(self) -> None:
        self.group_by_label.configure(text=f"Selected: {self.container.aggregate.group_by}")
        self.agg_columns_label.configure(text=f"Selected: {self.container.aggregate.agg_columns}")
        self.id_vars_label.configure(text=f"Selected: {self.container.melt.id_vars}")
        self.value_vars_label.configure(text=f"Selected: {self.container.melt.value_vars}")

    def _show_error(self, title: str, error: Exception) -> None:
        logger.error("%s on %s: %s", title, self.container.title, error)
        messagebox.showerror(title, str(error), parent=self.window)

    # ------------------------------------------------------------------
    # Overview actions
    # ------------------------------------------------------------------

    def show_data(self) -> None:
        open_table_window(self.window, self.container.data, f"Data: {self.container.title}")

    def show_summary(self) -> None:
        open_table_window(self.window, self.container.summary(), f"Summary: {self.container.title}")

    def show_dtypes(self) -> None:
        open_table_window(self.window, self.container.dtypes(), f"Data Types: {self.container.title}")

    def export_data(self) -> None:
        """Save the current data to a file chosen by the user."""
        file_path = filedialog.asksaveasfilename(
            parent=self.window,
            title="Export DataFrame",
            defaultextension=".csv",
            filetypes=file_dialog_types(),
            initialfile=f"{Path(self.container.title).stem}.csv",
        )
        if not file_path:
            return
        try:
            DataWriter.write_file(self.container.data, file_path)
        except (TableExplorerError, OSError, ValueError, ImportError) as e:
            self._show_error("Export Error", e)
            return
        messagebox.showinfo("Success", f"Exported {self.container.title} to {file_path}", parent=self.window)

    # ------------------------------------------------------------------
    # Transformations
    # ------------------------------------------------------------------

    def run_filter(self) -> None:
        state = self.container.filter
        state.column = self.filter_column_var.get()
        state.operation = FilterOp.from_label(self.filter_op_var.get())
        state.value = self.filter_value_var.get()
        state.inplace = self.filter_mode_var.get() == MODE_INPLACE

        try:
            new_container = self.registry.filter(self.container.title)
        except TableExplorerError as e:
            self._show_error("Filter Error", e)
            return
        if new_container is None:
            self.refresh()
        else:
            self.on_frame_opened(new_container)

    def add_group_by(self) -> None:
        self.container.add_group_by(self.group_by_var.get())
        self._update_selection_labels()

    def add_agg_column(self) -> None:
        self.container.add_agg_column(self.agg_column_var.get())
        self._update_selection_labels()

    def clear_aggregate(self) -> None:
        self.container.clear_aggregate()
        self._update_selection_labels()

    def run_aggregate(self) -> None:
        self.container.aggregate.func = AggFunc(self.agg_func_var.get())
        try:
            result = self.container.apply_aggregate()
        except TableExplorerError as e:
            self._show_error("Aggregate Error", e)
            return
        open_table_window(self.window, result, f"Aggregation: {self.container.title}")

    def run_join(self) -> None:
        state = self.container.join
        state.other = self.join_target_var.get()
        state.left_on = self.left_on_var.get()
        state.right_on = self.right_on_var.get()
        state.how = JoinHow(self.join_how_var.get())
        state.inplace = self.join_mode_var.get() == MODE_INPLACE
        if not state.other:
            messagebox.showwarning("Join", ERROR_MSG_NO_JOIN_TARGET, parent=self.window)
            return

        try:
            new_container = self.registry.join(self.container.title)
        except TableExplorerError as e:
            self._show_error("Join Error", e)
            return
        if new_container is None:
            self.refresh()
        else:
            self.on_frame_opened(new_container)

    def add_id_var(self) -> None:
        self.container.add_id_var(self.id_var_var.get())
        self._update_selection_labels()

    def add_value_var(self) -> None:
        self.container.add_value_var(self.value_var_var.get())
        self._update_selection_labels()

    def clear_melt(self) -> None:
        self.container.clear_melt()
        self._update_selection_labels()

    def run_melt(self) -> None:
        try:
            result = self.container.apply_melt()
        except TableExplorerError as e:
            self._show_error("Melt Error", e)
            return
        open_table_window(self.window, result, f"Melt: {self.container.title}")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def lift(self) -> None:
        self.window.deiconify()
        self.window.lift()

    def close(self) -> None:
        """Destroy the window; the dataframe stays open in the registry."""
        self.window.destroy()
        self.on_closed(self.container.title)
