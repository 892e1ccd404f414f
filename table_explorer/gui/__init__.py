"""Tkinter/customtkinter user interface."""

from .frame_window import FrameWindow
from .main_window import ExplorerGUI
from .table_view import TableView, TableWindow

__all__ = ["ExplorerGUI", "FrameWindow", "TableView", "TableWindow"]
