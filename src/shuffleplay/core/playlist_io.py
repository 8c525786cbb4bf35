"""Line-delimited playlist parsing/serialization helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List


def parse_playlist_lines(lines: Iterable[str]) -> List[Path]:
    entries: List[Path] = []
    for line in lines:
        entry = line.rstrip("\r\n")
        if not entry:
            continue
        entries.append(Path(entry))
    return entries


def serialize_playlist(items: Iterable[Path]) -> str:
    lines = [str(item) for item in items]
    if not lines:
        return ""
    return "\n".join(lines) + "\n"


def load_playlist_file(path: Path) -> List[Path]:
    with path.open("r", encoding="utf-8") as file:
        return parse_playlist_lines(file)


def save_playlist_file(path: Path, items: Iterable[Path]) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(serialize_playlist(items), encoding="utf-8")
