"""Loading asset files, optionally relative to a configured assets folder."""

from __future__ import annotations

from pathlib import Path

_assets_folder: str | None = None


class FileError(Exception):
    """Raised when a file cannot be loaded."""

    def __init__(self, kind: OSError, path: str) -> None:
        super().__init__(kind, path)
        self.kind = kind
        self.path = path

    def __str__(self) -> str:
        return f"Couldn't load file {self.path}: {self.kind}"


def set_pc_assets_folder(path: str | None) -> None:
    """Make later loads relative to ``path``; None loads paths as given."""
    global _assets_folder
    _assets_folder = path


def _resolve(path: str) -> str:
    if _assets_folder is None:
        return path
    return f"{_assets_folder}/{path}"


def load_file(path: str) -> bytes:
    """Read a whole file, prefixed by the assets folder if one is set."""
    full_path = _resolve(path)
    try:
        return Path(full_path).read_bytes()
    except OSError as error:
        raise FileError(error, full_path) from error


def load_string(path: str) -> str:
    """Read a file as UTF-8, replacing invalid sequences."""
    return load_file(path).decode("utf-8", errors="replace")