from pathlib import Path
import os

DATA_DIRNAME = "doneit"
DATA_FILENAME = "doneit.json"
LOG_FILENAME = "doneit.log"


def default_data_dir() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".local" / "share"
    return base / DATA_DIRNAME


def get_data_file_path(data_file: str | Path | None = None) -> Path:
    """Unified resolver for the document path.

    Priority:
    1. DONEIT_DATA_FILE env variable (for tests).
    2. Explicit data_file if provided (CLI flag or config).
    3. Per-user data dir: $XDG_DATA_HOME/doneit or ~/.local/share/doneit.

    The parent directory is created when missing.
    """
    env_file = os.environ.get("DONEIT_DATA_FILE")
    if env_file:
        path = Path(env_file).expanduser().resolve()
    elif data_file:
        path = Path(data_file).expanduser().resolve()
    else:
        path = (default_data_dir() / DATA_FILENAME).resolve()
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def get_log_file_path(data_path: Path) -> Path:
    return data_path.parent / LOG_FILENAME


__all__ = ["default_data_dir", "get_data_file_path", "get_log_file_path"]
