"""Music folder scanning."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable, List, Set


logger = logging.getLogger(__name__)

DEFAULT_AUDIO_FORMATS = ("flac", "mp3", "ogg", "wav")


def normalize_extensions(formats: Iterable[str]) -> Set[str]:
    """Turn ``["mp3", ".FLAC"]`` into ``{".mp3", ".flac"}``."""

    extensions: Set[str] = set()
    for fmt in formats:
        value = str(fmt).strip().lower()
        if not value:
            continue
        if not value.startswith("."):
            value = f".{value}"
        extensions.add(value)
    return extensions


def is_enabled_audio_file(path: Path, extensions: Iterable[str]) -> bool:
    return path.suffix.lower() in normalize_extensions(extensions)


def _raise_walk_error(exc: OSError) -> None:
    raise exc


def scan_directory(root: Path, extensions: Iterable[str]) -> List[Path]:
    """Return audio files below ``root`` sorted by path.

    I/O problems (missing root, unreadable subdirectory) raise ``OSError``
    so callers can tell them apart from a folder without music.
    """

    root = Path(root)
    if not root.exists():
        raise FileNotFoundError(f"Music folder not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Not a directory: {root}")

    enabled = normalize_extensions(extensions)
    files: List[Path] = []
    skipped = 0
    for dirpath, _dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        for name in filenames:
            file_path = Path(dirpath) / name
            if not file_path.is_file():
                continue
            if is_enabled_audio_file(file_path, enabled):
                files.append(file_path)
            else:
                skipped += 1
    files.sort()
    logger.debug("Scanned %s: %d audio files, %d skipped", root, len(files), skipped)
    return files
