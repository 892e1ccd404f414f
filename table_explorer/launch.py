#!/usr/bin/env python3
"""Launch script for Table Explorer."""

import argparse
import logging
import sys
from pathlib import Path

from .constants import APP_LABEL, APP_VERSION

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="table-explorer", description=APP_LABEL)
    parser.add_argument("files", nargs="*", type=Path, help="Tabular files to open on startup")
    parser.add_argument("--settings", type=Path, default=None, help="Settings file to use")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {APP_VERSION}")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the Table Explorer application."""
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        import customtkinter as ctk

        from .gui import ExplorerGUI
    except ImportError as e:
        logger.exception("Error importing required modules: %s", e)
        logger.error("Please ensure all dependencies are installed:")
        logger.error("pip install customtkinter pandas numpy openpyxl pyarrow")
        return 1

    logger.info("Starting %s %s...", APP_LABEL, APP_VERSION)
    ctk.set_appearance_mode("System")
    root = ctk.CTk()
    app = ExplorerGUI(root, settings_path=args.settings)
    for file_path in args.files:
        app.load_file(file_path)
    root.mainloop()
    return 0


if __name__ == "__main__":
    sys.exit(main())
