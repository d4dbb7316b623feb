#!/usr/bin/env python3
"""doneit entry point: resolve paths, load the document, run the TUI, save."""

import argparse
import logging
import sys
from importlib.metadata import PackageNotFoundError, version as pkg_version
from pathlib import Path
from typing import List, Optional

from config import get_data_file, get_log_level, get_user_theme, set_user_theme
from application import Session
from application.ports import DocumentRepository
from infrastructure.json_repository import JsonDocumentRepository

from .paths import get_data_file_path, get_log_file_path
from .tui_themes import DEFAULT_THEME, THEMES

logger = logging.getLogger("doneit.cli")

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="doneit",
        description="doneit: hierarchical workspaces and todos in the terminal",
    )
    parser.add_argument("--data-file", dest="data_file", help="JSON document to load and save")
    parser.add_argument("--theme", choices=list(THEMES.keys()), help="palette (remembered in the user config)")
    parser.add_argument("--version", action="store_true", help="print version and exit")
    return parser


def configure_logging(log_path: Path, level: int) -> None:
    """Route the doneit.* loggers to a file; the terminal belongs to the TUI."""
    root = logging.getLogger("doneit")
    root.setLevel(level)
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    try:
        handler: logging.Handler = logging.FileHandler(log_path, encoding="utf-8")
    except OSError:
        handler = logging.NullHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    root.addHandler(handler)


def resolve_theme(requested: Optional[str]) -> str:
    if requested:
        set_user_theme(requested)
        return requested
    stored = get_user_theme()
    return stored if stored in THEMES else DEFAULT_THEME


def run_tui(session: Session, theme: str) -> None:
    from .tui_app import DoneItTUI

    DoneItTUI(session, theme=theme).run()


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.version:
        try:
            print(pkg_version("doneit"))
        except PackageNotFoundError:
            print("0.0.0")
        return 0

    data_path = get_data_file_path(args.data_file or get_data_file() or None)
    configure_logging(get_log_file_path(data_path), get_log_level())
    theme = resolve_theme(args.theme)

    repository: DocumentRepository = JsonDocumentRepository(data_path)
    store = repository.load()
    logger.info(
        "loaded %s workspaces, %s todos from %s", store.workspace_count, store.todo_count, data_path
    )
    session = Session(store)
    try:
        run_tui(session, theme)
    finally:
        try:
            repository.save(session.store)
        except OSError as exc:
            logger.error("failed to save %s: %s", data_path, exc)
            print(f"doneit: could not save {data_path}: {exc}", file=sys.stderr)
    return 0


if __name__ == "__main__":
    sys.exit(main())
