"""Main application window: menu bar, list of open dataframes and status bar."""

import logging
import tkinter as tk
from pathlib import Path
from tkinter import filedialog, messagebox

import customtkinter as ctk
import pandas as pd

from ..constants import (
    DEFAULT_PADDING,
    ERROR_MSG_LOAD_FAILED,
    SMALL_PADDING,
    TITLE_FONT_SIZE,
)
from ..container import DataFrameContainer
from ..file_utils import file_dialog_types
from ..loader import FileLoadThread, create_load_thread
from ..registry import FrameRegistry
from ..settings import AppSettings
from .frame_window import FrameWindow

logger = logging.getLogger(__name__)


class ExplorerGUI:
    """GUI application for loading and transforming tabular data."""

    def __init__(
        self,
        root: ctk.CTk,
        settings: AppSettings | None = None,
        settings_path: Path | None = None,
    ) -> None:
        """Initialize the Table Explorer GUI.

        Args:
            root: Main customtkinter root window.
            settings: Restored application state, loaded from disk if omitted.
            settings_path: Settings file, the default location if omitted.

        """
        self.root = root
        self.settings_path = settings_path
        self.settings = settings or AppSettings.load(settings_path)
        self.registry = FrameRegistry()
        self.frame_windows: dict[str, FrameWindow] = {}
        self.load_threads: list[FileLoadThread] = []

        self.root.title(self.settings.label)
        self.root.geometry(f"{self.settings.window_width}x{self.settings.window_height}")
        self.root.protocol("WM_DELETE_WINDOW", self.on_closing)

        self.setup_menu()
        self.setup_ui()
        self.update_status("Ready. Use New > DataFrame to open a file.")

    def setup_menu(self) -> None:
        """Set up the New / Open Recent / App menu bar."""
        menubar = tk.Menu(self.root)

        new_menu = tk.Menu(menubar, tearoff=0)
        new_menu.add_command(label="DataFrame", command=self.new_dataframe)
        menubar.add_cascade(label="New", menu=new_menu)

        self.recent_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Open Recent", menu=self.recent_menu)
        self.rebuild_recent_menu()

        app_menu = tk.Menu(menubar, tearoff=0)
        app_menu.add_command(label="Quit", command=self.on_closing)
        menubar.add_cascade(label="App", menu=app_menu)

        self.root.configure(menu=menubar)

    def setup_ui(self) -> None:
        """Set up the frame list and status bar."""
        self.root.grid_columnconfigure(0, weight=1)
        self.root.grid_rowconfigure(0, weight=1)

        main_frame = ctk.CTkFrame(self.root)
        main_frame.grid(row=0, column=0, padx=DEFAULT_PADDING, pady=DEFAULT_PADDING, sticky="nsew")
        main_frame.grid_columnconfigure(0, weight=1)
        main_frame.grid_rowconfigure(1, weight=1)

        title_label = ctk.CTkLabel(
            main_frame,
            text="Open DataFrames",
            font=ctk.CTkFont(size=TITLE_FONT_SIZE, weight="bold"),
        )
        title_label.grid(row=0, column=0, padx=DEFAULT_PADDING, pady=(DEFAULT_PADDING, SMALL_PADDING), sticky="w")

        self.frames_listbox = tk.Listbox(main_frame, selectmode=tk.EXTENDED)
        self.frames_listbox.grid(row=1, column=0, padx=DEFAULT_PADDING, sticky="nsew")
        self.frames_listbox.bind("<Double-Button-1>", lambda _event: self.show_selected())

        buttons_frame = ctk.CTkFrame(main_frame, fg_color="transparent")
        buttons_frame.grid(row=2, column=0, padx=DEFAULT_PADDING, pady=DEFAULT_PADDING, sticky="w")
        ctk.CTkButton(buttons_frame, text="Open DataFrame...", command=self.new_dataframe).pack(
            side=tk.LEFT, padx=(0, DEFAULT_PADDING),
        )
        ctk.CTkButton(buttons_frame, text="Show", command=self.show_selected).pack(
            side=tk.LEFT, padx=(0, DEFAULT_PADDING),
        )
        ctk.CTkButton(buttons_frame, text="Close Selected", command=self.close_selected).pack(side=tk.LEFT)

        status_frame = ctk.CTkFrame(self.root)
        status_frame.grid(row=1, column=0, padx=DEFAULT_PADDING, pady=SMALL_PADDING, sticky="ew")
        status_frame.grid_columnconfigure(0, weight=1)
        self.status_label = ctk.CTkLabel(status_frame, text="Ready", anchor="w")
        self.status_label.grid(row=0, column=0, padx=SMALL_PADDING, pady=2, sticky="ew")

    def update_status(self, message: str) -> None:
        self.status_label.configure(text=message)
        logger.info(message)

    def rebuild_recent_menu(self) -> None:
        self.recent_menu.delete(0, tk.END)
        if not self.settings.recent_files:
            self.recent_menu.add_command(label="(empty)", state=tk.DISABLED)
            return
        for path in self.settings.recent_files:
            self.recent_menu.add_command(label=path, command=lambda p=path: self.load_file(p))

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def new_dataframe(self) -> None:
        """Ask for a file and load it as a new dataframe."""
        file_path = filedialog.askopenfilename(
            title="Open DataFrame",
            initialdir=self.settings.last_directory or None,
            filetypes=file_dialog_types(),
        )
        if file_path:
            self.load_file(file_path)

    def load_file(self, file_path: str | Path) -> None:
        """Read ``file_path`` on a background thread."""
        file_path = Path(file_path)
        self.update_status(f"Loading {file_path.name}...")
        thread = create_load_thread(file_path, self._on_loaded, self._on_load_error)
        self.load_threads.append(thread)
        thread.start()

    def _on_loaded(self, file_path: Path, df: pd.DataFrame) -> None:
        # Called on the load thread
        self.root.after(0, self.finish_load, file_path, df)

    def _on_load_error(self, file_path: Path, error: Exception) -> None:
        # Called on the load thread
        self.root.after(0, self.show_load_error, file_path, error)

    def finish_load(self, file_path: Path, df: pd.DataFrame) -> DataFrameContainer:
        """Register a loaded dataframe and open its window."""
        self._forget_finished_threads()
        container = self.registry.add(df, file_path.name)
        self.settings.add_recent_file(file_path)
        self.rebuild_recent_menu()
        self.open_frame(container)
        return container

    def show_load_error(self, file_path: Path, error: Exception) -> None:
        self._forget_finished_threads()
        self.update_status(f"{ERROR_MSG_LOAD_FAILED}: {file_path.name}")
        messagebox.showerror(ERROR_MSG_LOAD_FAILED, str(error))

    def _forget_finished_threads(self) -> None:
        self.load_threads = [t for t in self.load_threads if t.is_alive()]

    # ------------------------------------------------------------------
    # Frame windows
    # ------------------------------------------------------------------

    def open_frame(self, container: DataFrameContainer) -> None:
        """Show a newly registered dataframe in the list and in its own window."""
        self.frames_listbox.insert(tk.END, container.title)
        self._open_window(container)
        self.refresh_join_targets()
        self.update_status(f"Opened {container.title} {container.shape}")

    def _open_window(self, container: DataFrameContainer) -> None:
        self.frame_windows[container.title] = FrameWindow(
            self.root,
            container,
            self.registry,
            on_frame_opened=self.open_frame,
            on_closed=self.on_frame_window_closed,
            on_data_changed=self.on_frame_data_changed,
        )

    def on_frame_window_closed(self, title: str) -> None:
        self.frame_windows.pop(title, None)

    def on_frame_data_changed(self, title: str) -> None:
        """Reload the join key columns of windows that join against ``title``."""
        for window in self.frame_windows.values():
            if window.join_target_var.get() == title:
                window.on_join_target_changed(title)

    def refresh_join_targets(self) -> None:
        titles = self.registry.titles()
        for window in self.frame_windows.values():
            window.refresh_join_targets(titles)

    def _selected_titles(self) -> list[tuple[int, str]]:
        return [(index, self.frames_listbox.get(index)) for index in self.frames_listbox.curselection()]

    def show_selected(self) -> None:
        """Bring up the windows of the selected dataframes, reopening closed ones."""
        for _index, title in self._selected_titles():
            if title in self.frame_windows:
                self.frame_windows[title].lift()
            elif title in self.registry:
                self._open_window(self.registry.get(title))

    def close_selected(self) -> None:
        """Remove the selected dataframes from the application."""
        selected = self._selected_titles()
        if not selected:
            return
        for index, title in reversed(selected):
            window = self.frame_windows.pop(title, None)
            if window is not None:
                window.window.destroy()
            if title in self.registry:
                self.registry.remove(title)
            self.frames_listbox.delete(index)
        self.refresh_join_targets()
        self.update_status(f"Closed {len(selected)} dataframe(s)")

    # ------------------------------------------------------------------
    # Shutdown
    # ------------------------------------------------------------------

    def on_closing(self) -> None:
        """Save settings and close the application."""
        self.settings.window_width = self.root.winfo_width()
        self.settings.window_height = self.root.winfo_height()
        self.settings.save(self.settings_path)
        self.root.destroy()
